# compiler.py
#
# Thompson construction over a postfix token string.
#
# Every literal and every '|', '*', '+' allocates a fresh (start, end) pair of
# states; '.' and '?' only add epsilon edges between existing states. Partial
# automata live on a fragment stack until the whole postfix string is consumed.

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import NFAInvariantError
from .graph import EPSILON, CharSet, Edge, NFAGraph, State, StateId, Transition
from .log import get_logger
from .postfix import ALTERNATE, CONCAT, is_literal, to_postfix

logger = get_logger(__name__)


@dataclass
class Fragment:
    start: StateId
    ends: List[StateId]


class GraphBuilder:
    """Owns the id allocator and the mutable edge lists of one compilation."""

    def __init__(self):
        self.last_id = 0
        self.outs: Dict[StateId, List[Edge]] = {}

    def new_state(self) -> StateId:
        sid = self.last_id
        self.last_id += 1
        self.outs[sid] = []
        return sid

    def connect(self, src: StateId, dst: StateId, label: Transition) -> None:
        edges = self.outs[src]
        # An identical edge adds nothing; a different label to the same
        # destination is kept alongside the existing one.
        if (dst, label) not in edges:
            edges.append((dst, label))

    def add_epsilon(self, src: StateId, dst: StateId) -> None:
        self.connect(src, dst, EPSILON)

    def freeze(self, start: StateId, ends: List[StateId]) -> NFAGraph:
        states = {sid: State(sid, tuple(edges)) for sid, edges in self.outs.items()}
        return NFAGraph(states=states, start=start, ends=tuple(ends), last_id=self.last_id)


class ThompsonBuilder:
    def __init__(self):
        self.graph = GraphBuilder()
        self.stack: List[Fragment] = []

    def build(self, postfix: str) -> NFAGraph:
        for pos, tok in enumerate(postfix):
            if tok == CONCAT:
                self._concat(pos)
            elif tok == ALTERNATE:
                self._alternate(pos)
            elif tok == "?":
                self._optional(pos)
            elif tok == "*":
                self._repeat(pos, allow_zero=True)
            elif tok == "+":
                self._repeat(pos, allow_zero=False)
            elif is_literal(tok):
                self._literal(tok)
            else:
                raise NFAInvariantError(f"Unknown postfix token {tok!r} at pos {pos}")

        if not self.stack:
            # Empty pattern: a lone start state that no input can reach past.
            sid = self.graph.new_state()
            return self.graph.freeze(sid, [sid])

        frag = self.stack.pop()
        if self.stack:
            raise NFAInvariantError(
                f"{len(self.stack)} fragment(s) left unconnected after {postfix!r}; missing '.' or '|'"
            )
        return self.graph.freeze(frag.start, frag.ends)

    def _pop(self, n: int, tok: str, pos: int) -> Tuple[Fragment, ...]:
        if len(self.stack) < n:
            raise NFAInvariantError(
                f"Operator {tok!r} at pos {pos} needs {n} operand(s), stack has {len(self.stack)}"
            )
        popped = tuple(self.stack[-n:])
        del self.stack[-n:]
        return popped

    def _new_pair(self) -> Tuple[StateId, StateId]:
        return self.graph.new_state(), self.graph.new_state()

    def _literal(self, ch: str) -> None:
        s, e = self._new_pair()
        self.graph.connect(s, e, CharSet.of(ch))
        self.stack.append(Fragment(s, [e]))

    def _concat(self, pos: int) -> None:
        f1, f2 = self._pop(2, CONCAT, pos)
        for end in f1.ends:
            self.graph.add_epsilon(end, f2.start)
        self.stack.append(Fragment(f1.start, f2.ends))

    def _alternate(self, pos: int) -> None:
        f1, f2 = self._pop(2, ALTERNATE, pos)
        s, e = self._new_pair()
        self.graph.add_epsilon(s, f1.start)
        self.graph.add_epsilon(s, f2.start)
        for end in f1.ends + f2.ends:
            self.graph.add_epsilon(end, e)
        self.stack.append(Fragment(s, [e]))

    def _optional(self, pos: int) -> None:
        (frag,) = self._pop(1, "?", pos)
        for end in frag.ends:
            self.graph.add_epsilon(frag.start, end)
        self.stack.append(frag)

    def _repeat(self, pos: int, allow_zero: bool) -> None:
        (frag,) = self._pop(1, "*" if allow_zero else "+", pos)
        s, e = self._new_pair()
        self.graph.add_epsilon(s, frag.start)
        if allow_zero:
            # The bypass hangs off the old start, so it is only taken after entering s.
            for end in frag.ends:
                self.graph.add_epsilon(frag.start, end)
        for end in frag.ends:
            self.graph.add_epsilon(end, e)
            self.graph.add_epsilon(end, frag.start)
        self.stack.append(Fragment(s, [e]))


def compile_postfix(postfix: str) -> NFAGraph:
    graph = ThompsonBuilder().build(postfix)
    logger.debug("compiled %r into %d states (start=%d, ends=%s)", postfix, len(graph), graph.start, list(graph.ends))
    return graph


def compile_pattern(pattern: str) -> NFAGraph:
    return compile_postfix(to_postfix(pattern))
