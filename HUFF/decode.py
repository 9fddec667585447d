import argparse, os, sys
from bitpack import BitReader, BitWriter
from bitstream import HuffError
from codec import decompress
from metrics import compression_ratio

def main(argv=None):
    ap = argparse.ArgumentParser(description="Restore a file written by encode.py")
    ap.add_argument("--input", required=True, help="path to .huf")
    ap.add_argument("--output", required=True, help="path to restored file")
    ap.add_argument("--debug", type=int, default=0, help="diagnostic level (1=summary, 4=code table)")
    args = ap.parse_args(argv)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    try:
        with BitReader.open(args.input) as r, BitWriter.open(args.output) as w:
            decompress(r, w, debug=args.debug)
    except HuffError as e:
        # partial output is garbage
        os.remove(args.output)
        print(f"[decode] {args.input}: {e}", file=sys.stderr)
        return 1

    n_in = os.path.getsize(args.input)
    n_out = os.path.getsize(args.output)
    print(f"[decode] wrote {args.output}")
    print(f"[decode] {n_in}B -> {n_out}B ratio={compression_ratio(n_out, n_in):.3f}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
