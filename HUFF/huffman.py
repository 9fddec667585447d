from __future__ import annotations
import heapq
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from bitpack import NO_DATA

BITS_PER_WORD = 8
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE  # end-of-stream sentinel, never a real byte

COUNT_CHUNK = 1 << 14  # symbols buffered per bincount

Code = Tuple[int, int]  # (code_int, code_len)


@dataclass
class Node:
    """Leaf when sym is set, internal node (two children) when sym is None."""
    freq: int = 0
    sym: Optional[int] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    @property
    def is_leaf(self) -> bool:
        return self.sym is not None


def count_frequencies(reader) -> np.ndarray:
    """
    Count every 8-bit symbol left in reader.
    Returns int64 array of length ALPH_SIZE + 1; the sentinel is always 1.
    """
    counts = np.zeros(ALPH_SIZE + 1, dtype=np.int64)
    chunk = np.empty(COUNT_CHUNK, dtype=np.int64)
    n = 0
    while True:
        s = reader.read_bits(BITS_PER_WORD)
        if s == NO_DATA:
            break
        chunk[n] = s
        n += 1
        if n == COUNT_CHUNK:
            counts += np.bincount(chunk, minlength=ALPH_SIZE + 1)
            n = 0
    counts += np.bincount(chunk[:n], minlength=ALPH_SIZE + 1)
    counts[PSEUDO_EOF] = 1
    return counts


def build_tree(counts) -> Node:
    counts = np.asarray(counts, dtype=np.int64)
    present = np.flatnonzero(counts > 0)
    if present.size == 0:
        raise ValueError("frequency table has no symbols")

    # heap entries are (freq, order, node); order breaks ties by insertion
    pq = [(int(counts[s]), i, Node(freq=int(counts[s]), sym=int(s)))
          for i, s in enumerate(present)]
    heapq.heapify(pq)
    order = len(pq)

    if len(pq) == 1:
        # Edge case: only the sentinel (empty input) -> pair it with an unused
        # zero-weight leaf so every code has length >= 1
        only = pq[0][2]
        filler = int(np.flatnonzero(counts == 0)[0])
        return Node(freq=only.freq, left=only, right=Node(freq=0, sym=filler))

    while len(pq) > 1:
        fa, _, a = heapq.heappop(pq)
        fb, _, b = heapq.heappop(pq)
        heapq.heappush(pq, (fa + fb, order, Node(freq=fa + fb, left=a, right=b)))
        order += 1
    return pq[0][2]


def build_codebook(node: Node) -> List[Optional[Code]]:
    """
    Return list indexed by symbol: (code_int, code_len) from the root path
    (0 = left, 1 = right), None for symbols not in the tree.
    """
    codes: List[Optional[Code]] = [None] * (ALPH_SIZE + 1)
    _collect_codes(node, 0, 0, codes)
    return codes


def _collect_codes(node: Node, code: int, depth: int, out: List[Optional[Code]]):
    if node.is_leaf:
        out[node.sym] = (code, depth)
        return
    _collect_codes(node.left, code << 1, depth + 1, out)
    _collect_codes(node.right, (code << 1) | 1, depth + 1, out)


def count_leaves(node: Node) -> int:
    if node.is_leaf:
        return 1
    return count_leaves(node.left) + count_leaves(node.right)


def code_to_str(code: Code) -> str:
    c, L = code
    return format(c, f"0{L}b") if L else ""
