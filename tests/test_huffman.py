import random
import tracemalloc
from fractions import Fraction

import numpy as np
import pytest

from bitpack import BitReader
from huffman import (ALPH_SIZE, COUNT_CHUNK, PSEUDO_EOF, build_codebook,
                     build_tree, code_to_str, count_frequencies, count_leaves)


def _counts(data):
    return count_frequencies(BitReader(data))


def test_counts_with_sentinel():
    counts = _counts(b"aaab")
    assert counts.shape == (ALPH_SIZE + 1,)
    assert counts[97] == 3
    assert counts[98] == 1
    assert counts[PSEUDO_EOF] == 1
    assert counts.sum() == 5


def test_counts_empty_input_has_only_sentinel():
    counts = _counts(b"")
    assert counts.sum() == 1
    assert counts[PSEUDO_EOF] == 1


def test_tree_for_aaab():
    root = build_tree(_counts(b"aaab"))
    assert not root.is_leaf
    assert root.freq == 5
    assert root.right.sym == 97
    assert root.left.freq == 2
    assert root.left.left.sym == 98
    assert root.left.right.sym == PSEUDO_EOF

    codes = build_codebook(root)
    assert code_to_str(codes[97]) == "1"
    assert code_to_str(codes[98]) == "00"
    assert code_to_str(codes[PSEUDO_EOF]) == "01"
    assert codes[99] is None


def test_empty_input_tree_pairs_sentinel_with_filler():
    root = build_tree(_counts(b""))
    assert root.left.sym == PSEUDO_EOF
    assert root.right.sym == 0
    assert root.right.freq == 0
    codes = build_codebook(root)
    assert codes[PSEUDO_EOF] == (0, 1)


def test_single_data_symbol():
    root = build_tree(_counts(b"A" * 10))
    codes = build_codebook(root)
    assert codes[PSEUDO_EOF] == (0, 1)
    assert codes[ord("A")] == (1, 1)
    assert count_leaves(root) == 2


def test_no_symbols_rejected():
    with pytest.raises(ValueError):
        build_tree(np.zeros(ALPH_SIZE + 1, dtype=np.int64))


def test_ties_are_deterministic():
    data = bytes(range(256))
    a = build_codebook(build_tree(_counts(data)))
    b = build_codebook(build_tree(_counts(data)))
    assert a == b
    assert all(c is not None for c in a)


def test_codes_are_prefix_free_and_complete():
    rng = random.Random(1234)
    data = bytes(rng.choice(b"abcdefghij \n\x00\xff") for _ in range(5000))
    codes = [code_to_str(c) for c in build_codebook(build_tree(_counts(data))) if c is not None]
    assert len(codes) == len(set(data)) + 1
    for i, a in enumerate(codes):
        for j, b in enumerate(codes):
            if i != j:
                assert not b.startswith(a)
    # full binary tree: Kraft sum is exactly one
    assert sum(Fraction(1, 2 ** len(c)) for c in codes) == 1


def test_rare_symbols_get_longer_codes():
    data = b"e" * 1000 + b"t" * 100 + b"q"
    codes = build_codebook(build_tree(_counts(data)))
    assert codes[ord("e")][1] < codes[ord("t")][1] <= codes[ord("q")][1]


def test_counting_memory_does_not_grow_with_input():
    data = bytes(range(256)) * 4096
    reader = BitReader(data)
    tracemalloc.start()
    try:
        counts = count_frequencies(reader)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    assert counts[:PSEUDO_EOF].tolist() == [4096] * ALPH_SIZE
    assert peak < len(data) // 2


def test_counts_across_chunk_boundary():
    data = b"z" * (COUNT_CHUNK + 3) + b"y"
    counts = _counts(data)
    assert counts[ord("z")] == COUNT_CHUNK + 3
    assert counts[ord("y")] == 1
    assert counts.sum() == len(data) + 1
