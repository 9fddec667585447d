from bitpack import NO_DATA
from huffman import ALPH_SIZE, BITS_PER_WORD, PSEUDO_EOF, Node

BITS_PER_INT = 32
HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1  # the only magic this format accepts

# Stream layout (MSB-first bits):
# magic(32) tree(pre-order: '0' left right | '1' sym(9)) payload(codes..., code(EOF)) pad
LEAF_BITS = BITS_PER_WORD + 1  # 9 bits so PSEUDO_EOF (256) fits
MAX_TREE_DEPTH = ALPH_SIZE + 1


class HuffError(ValueError):
    """Compressed stream cannot be decoded."""


class IllegalHeaderError(HuffError):
    pass


class MalformedTreeError(HuffError):
    pass


class MalformedPayloadError(HuffError):
    pass


def write_magic(w):
    w.write_bits(BITS_PER_INT, HUFF_TREE)


def read_magic(r):
    magic = r.read_bits(BITS_PER_INT)
    if magic == NO_DATA:
        raise IllegalHeaderError("Bad magic: stream shorter than 32 bits")
    if magic != HUFF_TREE:
        raise IllegalHeaderError(f"Bad magic: illegal header starts with {magic:#010x}")
    return magic


def write_tree(w, node: Node):
    if node.is_leaf:
        w.write_bits(1, 1)
        w.write_bits(LEAF_BITS, node.sym)
        return
    w.write_bits(1, 0)
    write_tree(w, node.left)
    write_tree(w, node.right)


def read_tree(r, depth: int = 0) -> Node:
    if depth > MAX_TREE_DEPTH:
        raise MalformedTreeError("Malformed stream: tree header nested too deep")
    bit = r.read_bits(1)
    if bit == NO_DATA:
        raise MalformedTreeError("Malformed stream: tree header truncated")
    if bit == 0:
        left = read_tree(r, depth + 1)
        right = read_tree(r, depth + 1)
        return Node(left=left, right=right)
    sym = r.read_bits(LEAF_BITS)
    if sym == NO_DATA:
        raise MalformedTreeError("Malformed stream: tree leaf truncated")
    if sym > PSEUDO_EOF:
        raise MalformedTreeError(f"Malformed stream: leaf symbol {sym} out of range")
    return Node(sym=sym)
