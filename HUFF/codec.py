from bitpack import NO_DATA, BitReader, BitWriter
from bitstream import (MalformedPayloadError, MalformedTreeError, read_magic,
                       read_tree, write_magic, write_tree)
from huffman import (BITS_PER_WORD, PSEUDO_EOF, build_codebook, build_tree,
                     code_to_str, count_frequencies, count_leaves)

DEBUG_LOW = 1
DEBUG_HIGH = 4


def compress(reader: BitReader, writer: BitWriter, debug: int = 0):
    """
    Two passes over reader: count, then emit.
    Writes magic + tree header + payload + EOF code, then closes writer.
    """
    counts = count_frequencies(reader)
    root = build_tree(counts)
    codings = build_codebook(root)
    if debug >= DEBUG_LOW:
        print(f"[compress] symbols={int(counts[:PSEUDO_EOF].sum())} leaves={count_leaves(root)}")
    if debug >= DEBUG_HIGH:
        for sym, code in enumerate(codings):
            if code is not None:
                print(f"[compress] {sym:3d} {code_to_str(code)}")

    write_magic(writer)
    write_tree(writer, root)
    header_bits = writer.bits_written

    reader.reset()
    write_compressed_bits(codings, reader, writer)
    if debug >= DEBUG_LOW:
        print(f"[compress] header={header_bits} bits payload={writer.bits_written - header_bits} bits")
    writer.close()


def write_compressed_bits(codings, reader: BitReader, writer: BitWriter):
    while True:
        sym = reader.read_bits(BITS_PER_WORD)
        if sym == NO_DATA:
            break
        code, L = codings[sym]
        writer.write_bits(L, code)
    code, L = codings[PSEUDO_EOF]
    writer.write_bits(L, code)


def decompress(reader: BitReader, writer: BitWriter, debug: int = 0):
    """
    Inverse of compress. writer is closed even when the stream is rejected;
    its contents are invalid in that case.
    """
    try:
        read_magic(reader)
        root = read_tree(reader)
        if root.is_leaf:
            raise MalformedTreeError("Malformed stream: tree has no internal node")
        if debug >= DEBUG_LOW:
            print(f"[decompress] header={reader.bits_read} bits leaves={count_leaves(root)}")
        if debug >= DEBUG_HIGH:
            for sym, code in enumerate(build_codebook(root)):
                if code is not None:
                    print(f"[decompress] {sym:3d} {code_to_str(code)}")
        read_compressed_bits(root, reader, writer)
        if debug >= DEBUG_LOW:
            print(f"[decompress] read={reader.bits_read} bits wrote={writer.bits_written} bits")
    finally:
        writer.close()


def read_compressed_bits(root, reader: BitReader, writer: BitWriter):
    cur = root
    while True:
        bit = reader.read_bits(1)
        if bit == NO_DATA:
            raise MalformedPayloadError("Malformed stream: payload ended before PSEUDO_EOF")
        cur = cur.left if bit == 0 else cur.right
        if cur.is_leaf:
            if cur.sym == PSEUDO_EOF:
                return
            writer.write_bits(BITS_PER_WORD, cur.sym)
            cur = root


def compress_bytes(data: bytes, debug: int = 0) -> bytes:
    w = BitWriter()
    compress(BitReader(data), w, debug=debug)
    return w.getvalue()


def decompress_bytes(blob: bytes, debug: int = 0) -> bytes:
    w = BitWriter()
    decompress(BitReader(blob), w, debug=debug)
    return w.getvalue()
