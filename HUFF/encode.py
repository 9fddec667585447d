import argparse, os
from bitpack import BitReader, BitWriter
from codec import compress
from metrics import bits_per_symbol, compression_ratio

def main(argv=None):
    ap = argparse.ArgumentParser(description="Huffman-compress a file")
    ap.add_argument("--input", required=True, help="path to any file")
    ap.add_argument("--output", required=True, help="path to .huf")
    ap.add_argument("--debug", type=int, default=0, help="diagnostic level (1=summary, 4=code table)")
    args = ap.parse_args(argv)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    with BitReader.open(args.input) as r, BitWriter.open(args.output) as w:
        compress(r, w, debug=args.debug)
        bits = w.bits_written

    n_in = os.path.getsize(args.input)
    n_out = os.path.getsize(args.output)
    print(f"[encode] wrote {args.output}")
    print(f"[encode] {n_in}B -> {n_out}B ratio={compression_ratio(n_in, n_out):.3f} "
          f"bits/byte={bits_per_symbol(bits, n_in):.3f}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
