# postfix.py
#
# Infix pattern -> postfix token string.
#
# Grammar accepted:
#   - alphanumeric literals
#   - implicit concatenation (made explicit as '.')
#   - alternation '|'
#   - quantifiers '*' '+' '?'
#   - grouping '(' ')'
#
# Single left-to-right pass. No tree is built: operators are emitted as soon as
# their operands are complete, and nested groups save/restore the counters on an
# explicit stack instead of recursing.

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .errors import RegexParseError
from .log import get_logger

logger = get_logger(__name__)

CONCAT = "."
ALTERNATE = "|"
QUANTIFIERS = "*+?"


@dataclass
class _Paren:
    natom: int
    nalt: int


def is_literal(c: str) -> bool:
    return c.isalnum()


def to_postfix(pattern: str) -> str:
    out: List[str] = []
    parens: List[_Paren] = []
    natom = 0  # atoms waiting to be concatenated at this level
    nalt = 0   # '|' waiting to be emitted at this level

    for pos, c in enumerate(pattern):
        if c == "(":
            if natom > 1:
                natom -= 1
                out.append(CONCAT)
            parens.append(_Paren(natom, nalt))
            natom = 0
            nalt = 0

        elif c == ALTERNATE:
            nalt += 1
            if natom == 0:
                raise RegexParseError(f"Alternation without left operand at pos {pos}")
            while natom > 1:
                natom -= 1
                out.append(CONCAT)
            if natom == 1:
                natom = 0

        elif c == ")":
            if not parens:
                raise RegexParseError(f"Unmatched ')' at pos {pos}")
            if natom == 0:
                raise RegexParseError(f"Empty group or alternation branch before ')' at pos {pos}")
            while natom > 1:
                natom -= 1
                out.append(CONCAT)
            while nalt > 0:
                nalt -= 1
                out.append(ALTERNATE)
            saved = parens.pop()
            natom = saved.natom + 1
            nalt = saved.nalt

        elif c in QUANTIFIERS:
            if natom == 0:
                raise RegexParseError(f"Quantifier {c!r} has nothing to repeat (pos {pos})")
            out.append(c)

        elif is_literal(c):
            if natom > 1:
                natom -= 1
                out.append(CONCAT)
            out.append(c)
            natom += 1

        else:
            raise RegexParseError(f"Illegal character {c!r} at pos {pos}")

    if parens:
        raise RegexParseError(f"Unclosed '(' ({len(parens)} still open at end of input)")
    if nalt > 0 and natom == 0:
        raise RegexParseError("Alternation without right operand at end of input")

    while natom > 1:
        natom -= 1
        out.append(CONCAT)
    while nalt > 0:
        nalt -= 1
        out.append(ALTERNATE)

    postfix = "".join(out)
    logger.debug("postfix %r -> %r", pattern, postfix)
    return postfix
