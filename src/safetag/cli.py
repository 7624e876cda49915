#!/usr/bin/env python3
"""
safetag: compute SAFE sponge tags from the command line

Usage:
    safetag compute   --words 0x80000003 0x00000001 --domain 0x41424344
    safetag compute   --lengths 3 1 --domain 0x41424344 --profile safe-64
    safetag serialize --words 0x80000001 0x80000001 0x00000001 --domain 0x41
    safetag vectors   [--output DIR]

The profile defaults to $SAFETAG_PROFILE, then safe-32.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .errors import SafeTagError
from .hexutil import domain_separator_from_hex, parse_word
from .pattern import decode_lengths, decode_words
from .tag import SafeTag, explain, format_tag
from .types import get_profile, profile_names
from .vectors import VectorRunner

logger = logging.getLogger('safetag')

PROFILE_ENV = 'SAFETAG_PROFILE'
FALLBACK_PROFILE = 'safe-32'

EXIT_OK = 0
EXIT_VECTOR_FAILURE = 1
EXIT_USAGE = 2


def default_profile() -> str:
    return os.environ.get(PROFILE_ENV, FALLBACK_PROFILE)


def _add_pattern_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        '--words', '-w',
        nargs='*',
        metavar='WORD',
        help='Explicit-flag words (MSB set = ABSORB), hex or decimal'
    )
    group.add_argument(
        '--lengths', '-l',
        nargs='*',
        metavar='N',
        help='Alternating lengths: ABSORB, SQUEEZE, ABSORB, ...'
    )
    parser.add_argument(
        '--domain', '-d',
        required=True,
        help='Domain separator in hex, zero-padded on the right to the profile width'
    )


def _add_profile_arg(parser: argparse.ArgumentParser, default) -> None:
    # Subcommands use SUPPRESS so an unset option keeps the top-level value
    parser.add_argument(
        '--profile', '-p',
        default=default,
        help=f"Domain separator profile ({', '.join(profile_names())}); "
             f"default ${PROFILE_ENV} or {FALLBACK_PROFILE}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='safetag',
        description='SAFE tag computation for sponge IO patterns',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    safetag compute -w 0x80000003 0x00000001 -d 0x41424344
    safetag compute -l 1 0 1 1 -d 0x41424344 --prefix
    safetag vectors -o ./vectors_output
        """
    )
    _add_profile_arg(parser, default=None)
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    sub = parser.add_subparsers(dest='command', required=True)

    compute = sub.add_parser('compute', help='Compute the tag of one pattern')
    _add_pattern_args(compute)
    _add_profile_arg(compute, default=argparse.SUPPRESS)
    compute.add_argument(
        '--prefix',
        action='store_true',
        help='Print the tag with a 0x prefix'
    )
    compute.add_argument(
        '--explain',
        action='store_true',
        help='Print every stage of the computation'
    )

    serialize = sub.add_parser('serialize', help='Print the canonical hash input in hex')
    _add_pattern_args(serialize)
    _add_profile_arg(serialize, default=argparse.SUPPRESS)

    vectors = sub.add_parser('vectors', help='Run the built-in example vectors')
    vectors.add_argument(
        '--output', '-o',
        type=Path,
        default=None,
        help='Write vectors.json and report.json to this directory'
    )

    return parser


def _decode_pattern(args):
    if args.words is not None:
        return decode_words(parse_word(w) for w in args.words)
    return decode_lengths(parse_word(n) for n in args.lengths)


def run_compute(args, profile) -> int:
    operations = _decode_pattern(args)
    separator = domain_separator_from_hex(args.domain, profile)
    if args.explain:
        for line in explain(operations, separator, profile):
            print(line)
        return EXIT_OK
    tag = SafeTag(profile).tag_operations(operations, separator)
    print(format_tag(tag, prefix=args.prefix))
    return EXIT_OK


def run_serialize(args, profile) -> int:
    operations = _decode_pattern(args)
    separator = domain_separator_from_hex(args.domain, profile)
    print(SafeTag(profile).serialize(operations, separator).hex())
    return EXIT_OK


def run_vectors(args) -> int:
    runner = VectorRunner()
    report = runner.run()

    print("SAFE Tag Computation Vectors\n")
    for result in report.results:
        status = "ok" if result.passed else "FAIL"
        print(f"[{status}] {result.name}: {result.description}")
        print(f"    pattern ({result.encoding}): {result.pattern}")
        print(f"    domain: {result.domain_hex}... ({result.profile})")
        print(f"    tag: 0x{result.tag}")
        if result.details:
            print(f"    {result.details}")

    print(f"\nResults: {report.passed}/{report.total} passed")
    print(f"Vectors hash: {report.vectors_hash[:16]}...")

    if args.output is not None:
        path = runner.write(args.output, report)
        print(f"Report written to: {path}")

    return EXIT_OK if report.ok else EXIT_VECTOR_FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.command == 'vectors':
            return run_vectors(args)
        profile = get_profile(args.profile or default_profile())
        if args.command == 'compute':
            return run_compute(args, profile)
        return run_serialize(args, profile)
    except SafeTagError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == '__main__':
    sys.exit(main())
