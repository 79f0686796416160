#!/usr/bin/env python3
"""
huffpack command line front-end.

Run with:
    huffpack encode notes.txt              # writes notes.txt.huf
    huffpack decode notes.txt.huf -o copy  # writes copy
"""
import argparse
import logging
import os
import sys

from huffman_service import (
    COMPRESSED_SUFFIX,
    CodecOptions,
    decode_file,
    default_decoded_name,
    encode_file,
)


def build_parser():
    parser = argparse.ArgumentParser(prog="huffpack", description="Huffman byte-stream compressor")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    enc = commands.add_parser("encode", help="Compress a file")
    enc.add_argument("input", help="File to compress")
    enc.add_argument(
        "-o", "--output",
        default=None,
        help=f"Output path (default: INPUT{COMPRESSED_SUFFIX})",
    )
    enc.add_argument(
        "--allow-expansion",
        action="store_true",
        help="Compress even when the frequency table is larger than the input",
    )

    dec = commands.add_parser("decode", help="Decompress a file")
    dec.add_argument("input", help="File to decompress")
    dec.add_argument(
        "-o", "--output",
        default=None,
        help=f"Output path (default: INPUT without {COMPRESSED_SUFFIX}, or INPUT.out)",
    )
    return parser


def main(argv=None):
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "encode":
        output = args.output or args.input + COMPRESSED_SUFFIX
        options = CodecOptions(reject_if_overhead_exceeds_payload=not args.allow_expansion)
        success = encode_file(args.input, output, options)
    else:
        output = args.output or default_decoded_name(args.input)
        success = decode_file(args.input, output)

    if not success:
        print(f"❌ {args.command} failed: {args.input}")
        return 1

    print(f"✅ {args.input} -> {output} ({os.path.getsize(args.input)} -> {os.path.getsize(output)} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
