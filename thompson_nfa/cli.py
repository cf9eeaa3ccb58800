# cli.py
#
# Command-line front end:
#   thompson-nfa PATTERN [TEXT ...]
#
# Each TEXT (or, with none given, each line of stdin) is matched against the
# whole pattern and reported as  repr(text) <TAB> True|False.

from __future__ import annotations

import argparse
import sys
from typing import Iterable, List, Optional

from .compiler import compile_postfix
from .errors import NFAInvariantError, RegexParseError
from .graph import dump_graph
from .log import configure_logging, get_logger
from .postfix import to_postfix

logger = get_logger(__name__)


def _subjects(texts: List[str]) -> Iterable[str]:
    if texts:
        yield from texts
        return
    for line in sys.stdin:
        yield line.rstrip("\r\n")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="thompson-nfa",
        description="Whole-string matching with a Thompson NFA (literals, |, *, +, ?, groups)",
    )
    p.add_argument("pattern", help="Pattern to compile")
    p.add_argument("texts", nargs="*", help="Strings to match (default: one per line from stdin)")
    p.add_argument("--postfix", action="store_true", help="Print the postfix form of the pattern")
    p.add_argument("--dump", action="store_true", help="Print the NFA transition table")
    p.add_argument("--log-level", default=None,
                   help="Logging level (default: $THOMPSON_NFA_LOG_LEVEL or WARNING)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        postfix = to_postfix(args.pattern)
        graph = compile_postfix(postfix)

        if args.postfix:
            print(f"postfix: {postfix}")
        if args.dump:
            print(dump_graph(graph))

        for text in _subjects(args.texts):
            print(f"{text!r}\t{graph.is_match(text)}")

        return 0

    except RegexParseError as ex:
        print(f"PATTERN ERROR: {ex}", file=sys.stderr)
        return 1
    except NFAInvariantError as ex:
        print(f"INTERNAL ERROR: {ex}", file=sys.stderr)
        logger.debug("internal automaton error", exc_info=True)
        return 2
    except Exception as ex:  # unexpected
        print(f"FATAL: {type(ex).__name__}: {ex}", file=sys.stderr)
        return 99


if __name__ == "__main__":
    sys.exit(main())
