"""
Командная строка для кодировщика Хаффмана.
"""

import argparse
import sys
from coder import HuffmanCoder, FAILURE_MESSAGE


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Huffman encoder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py input.txt encoded.txt
  python main.py --encoding utf-8 input.txt encoded.txt
  python main.py -q input.bin encoded.txt
        """
    )

    parser.add_argument('input', help='File to encode')
    parser.add_argument('output', help='Destination for the encoded bits (overwritten)')
    parser.add_argument('--encoding', default=None,
                        help='Read the input as text in this encoding instead of raw bytes')
    parser.add_argument('-q', '--quiet', action='store_true', help='Do not print the code table')

    args = parser.parse_args(argv)

    coder = HuffmanCoder(encoding=args.encoding, verbose=not args.quiet)

    try:
        message = coder.run(args.input, args.output)
    except LookupError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if message == FAILURE_MESSAGE:
        print(message, file=sys.stderr)
        sys.exit(1)

    print(message)


if __name__ == '__main__':
    main()
