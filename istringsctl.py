#!/usr/bin/env python3
import argparse
import os
import re
import sys
from pathlib import Path
from typing import List, Optional

from istrings.artifacts import DEFAULT_MIN_SEQUENCE, emit_strings, extract_candidates
from istrings.loader import load_file_contents

# Same leniency as sscanf("--min=%d"): leading blanks, optional sign, trailing junk ignored.
MIN_FLAG_RE = re.compile(r"--min=\s*([+-]?\d+)", re.ASCII)


def build_parser(prog: str) -> argparse.ArgumentParser:
    # Only used for --help output; argument positions are significant, see parse_args().
    p = argparse.ArgumentParser(
        prog=prog,
        usage="%(prog)s <input-file> [output-file] [options]",
        description=(
            "Tries to find printable strings inside a binary file. "
            "If no output file is provided output is printed to stdout."
        ),
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("input_file", metavar="<input-file>", help="Binary file to scan")
    p.add_argument("output_file", metavar="[output-file]", nargs="?", help="Write matches here instead of stdout")
    p.add_argument("-h", "--help", action="store_true", help="Prints this message and exits.")
    p.add_argument(
        "--min",
        metavar="<N>",
        help=f"Minimum sequence of letters (aA-zZ) for a string to be considered. Defaults to {DEFAULT_MIN_SEQUENCE}.",
    )
    return p


def parse_min_flag(arg: str, default: int = DEFAULT_MIN_SEQUENCE) -> int:
    m = MIN_FLAG_RE.match(arg)
    if not m:
        return default
    return int(m.group(1))


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Positional parse of `<input-file> [output-file] [--min=N]` (argv without the program name)."""
    output_file = None
    if len(argv) >= 2 and not argv[1].startswith("-"):
        output_file = argv[1]

    min_sequence = DEFAULT_MIN_SEQUENCE
    if len(argv) == 2 and argv[1].startswith("-"):
        min_sequence = parse_min_flag(argv[1])
    elif len(argv) == 3 and argv[2].startswith("-"):
        min_sequence = parse_min_flag(argv[2])

    return argparse.Namespace(
        input_file=argv[0] if argv else "",
        output_file=output_file,
        min_sequence=min_sequence,
    )


def main(argv: Optional[List[str]] = None) -> int:
    prog = Path(sys.argv[0]).name or "istrings"
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        build_parser(prog).print_help(sys.stdout)
        return 1
    if argv[0] in ("-h", "--help"):
        build_parser(prog).print_help(sys.stdout)
        return 0

    args = parse_args(argv)
    if not args.input_file or args.input_file.startswith("-"):
        print(f'Invalid filename "{args.input_file}"!', file=sys.stderr)
        return 1

    blob = load_file_contents(args.input_file)
    if not blob:
        return 1

    if args.output_file is not None:
        try:
            out = open(args.output_file, "w", encoding="ascii", newline="\n")
        except OSError:
            print("Problems opening output file!", file=sys.stderr)
            return 1
        with out:
            emit_strings(extract_candidates(blob), out, args.min_sequence)
    else:
        try:
            emit_strings(extract_candidates(blob), sys.stdout, args.min_sequence)
            sys.stdout.flush()
        except BrokenPipeError:
            # Reader went away. Point stdout at devnull so the flush at exit stays quiet.
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
            os.close(devnull)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
