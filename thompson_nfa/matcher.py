# matcher.py
#
# Whole-string NFA simulation by epsilon-closure.
#
# Acceptance rule: after the last input character, the current state set must
# contain a state with no outgoing edges. graph.ends is not consulted. For the
# graphs the compiler builds, the terminal states are exactly the final
# fragment's ends, but the rule is structural and is checked only at the last
# character, so an empty input never matches.

from __future__ import annotations
from collections import deque
from typing import TYPE_CHECKING, Deque, Iterable, Set

from .log import get_logger

if TYPE_CHECKING:
    from .graph import NFAGraph, StateId

logger = get_logger(__name__)


def epsilon_closure(graph: NFAGraph, start_set: Iterable[StateId]) -> Set[StateId]:
    closure = set(start_set)
    q: Deque[StateId] = deque(closure)
    while q:
        s = q.popleft()
        for t in graph.state(s).epsilon_targets():
            if t not in closure:
                closure.add(t)
                q.append(t)
    return closure


def move(graph: NFAGraph, ch: str, state_set: Iterable[StateId]) -> Set[StateId]:
    out: Set[StateId] = set()
    for s in state_set:
        out.update(graph.state(s).char_targets(ch))
    return out


def is_match(graph: NFAGraph, text: str) -> bool:
    current = epsilon_closure(graph, {graph.start})
    last = len(text) - 1
    for i, ch in enumerate(text):
        current = epsilon_closure(graph, move(graph, ch, current))
        logger.debug("step %d %r: %d live state(s)", i, ch, len(current))
        if not current:
            return False
        if i == last and any(graph.state(s).is_terminal for s in current):
            return True
    return False
