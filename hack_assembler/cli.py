# cli.py
# Usage:
#   hack-assembler input.asm output.hack
#   python -m hack_assembler input.asm output.hack

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from .assembler import assemble, to_hack
from .errors import AsmError, InternalError

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 1
EXIT_ASSEMBLY_ERROR = 3
EXIT_INTERNAL_ERROR = 4
EXIT_OUTPUT_ERROR = 5


@dataclass
class Config:
    input_file: str
    output_file: str


def build_arg_parser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        prog="hack-assembler",
        description="Produce binary program from HACK assembly program")
    argparser.add_argument("input_file", help="Hack assembly source (.asm)")
    argparser.add_argument("output_file", help="destination for the binary text (.hack)")
    return argparser


def parse_config(argv: Optional[List[str]] = None) -> Config:
    args = build_arg_parser().parse_args(argv)
    return Config(input_file=args.input_file, output_file=args.output_file)


def read_source(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_output(path: str, words: List[str]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_hack(words))


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    config = parse_config(argv)

    try:
        asm_text = read_source(config.input_file)
    except OSError as e:
        print(f"Input not readable: {config.input_file} ({e.strerror})")
        sys.exit(EXIT_INPUT_ERROR)

    try:
        hack_lines = assemble(asm_text)
    except InternalError as e:
        logger.exception("assembler invariant violated")
        print(f"Internal error: {e}")
        sys.exit(EXIT_INTERNAL_ERROR)
    except AsmError as e:
        print(f"Assembly error: {e}")
        sys.exit(EXIT_ASSEMBLY_ERROR)

    try:
        write_output(config.output_file, hack_lines)
    except OSError as e:
        print(f"Output not writable: {config.output_file} ({e.strerror})")
        sys.exit(EXIT_OUTPUT_ERROR)
    print(f"OK: wrote {config.output_file} ({len(hack_lines)} instructions)")


if __name__ == "__main__":
    main()
