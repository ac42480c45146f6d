from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .errors import TapeError
from .interpreter import Interpreter
from .log import init_logging

logger = logging.getLogger(__name__)

USAGE_MISSING_PATH = "You have to supply pathname to .bf file"


def format_cells(cells, count: int, *, per_row: int = 8) -> str:
    values = [int(b) for b in cells[:count]]
    rows = [" ".join(map(str, values[i:i + per_row])) for i in range(0, len(values), per_row)]
    return "\n".join(rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tapebf",
        description="Run a program for the eight-instruction tape language.",
    )
    parser.add_argument("path", nargs="?", help="pathname of the .bf file to run (required)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug traces")
    parser.add_argument("--log-level", default=None, help="explicit log level (overrides -v and TAPEBF_LOG_LEVEL)")
    parser.add_argument("--encoding", default="utf-8", help="source file encoding (default utf-8)")
    parser.add_argument("--dump-cells", type=int, default=0, metavar="N", help="print the first N cells after the run")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.path is None:
        parser.error(USAGE_MISSING_PATH)

    try:
        init_logging(args.verbose, args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    interpreter = Interpreter()
    try:
        interpreter.load_file(args.path, encoding=args.encoding)
        interpreter.run()
    except TapeError as exc:
        logger.debug("Run aborted", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        sys.stdout.flush()

    if args.dump_cells > 0:
        print(format_cells(interpreter.state.tape, args.dump_cells), file=sys.stderr)
    return 0
