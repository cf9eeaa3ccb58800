from .errors import RegexParseError, NFAInvariantError
from .graph import EPSILON, CharSet, Epsilon, NFAGraph, State, StateId, Transition, dump_graph
from .postfix import to_postfix
from .compiler import Fragment, compile_pattern, compile_postfix
from .matcher import epsilon_closure, is_match, move

__all__ = [
    "RegexParseError",
    "NFAInvariantError",
    "EPSILON",
    "CharSet",
    "Epsilon",
    "NFAGraph",
    "State",
    "StateId",
    "Transition",
    "dump_graph",
    "to_postfix",
    "Fragment",
    "compile_pattern",
    "compile_postfix",
    "epsilon_closure",
    "is_match",
    "move",
]
