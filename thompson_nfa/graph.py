# graph.py
#
# Automaton data model: state ids, transition labels, states and the compiled
# graph. A graph is produced once by the compiler and never mutated afterwards;
# states are frozen and the state table is exposed through a read-only proxy.

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Iterator, List, Mapping, Tuple, Union

from .errors import NFAInvariantError
from .matcher import is_match as _is_match

StateId = int


# =============================================================================
# Transition labels
# =============================================================================

@dataclass(frozen=True)
class Epsilon:
    def __repr__(self) -> str:
        return "Epsilon"


EPSILON = Epsilon()


@dataclass(frozen=True)
class CharSet:
    chars: FrozenSet[str]

    def __post_init__(self) -> None:
        if not self.chars:
            raise ValueError("CharSet must contain at least one character")

    @classmethod
    def of(cls, *chars: str) -> "CharSet":
        return cls(frozenset(chars))

    def accepts(self, ch: str) -> bool:
        return ch in self.chars

    def __repr__(self) -> str:
        return "CharSet(" + ",".join(sorted(self.chars)) + ")"


Transition = Union[Epsilon, CharSet]
Edge = Tuple[StateId, Transition]


# =============================================================================
# States and graph
# =============================================================================

@dataclass(frozen=True)
class State:
    id: StateId
    outs: Tuple[Edge, ...] = ()

    @property
    def is_terminal(self) -> bool:
        # No outgoing edges: the matcher treats such a state as accepting.
        return not self.outs

    def epsilon_targets(self) -> Iterator[StateId]:
        for dst, label in self.outs:
            if isinstance(label, Epsilon):
                yield dst

    def char_targets(self, ch: str) -> Iterator[StateId]:
        for dst, label in self.outs:
            if isinstance(label, CharSet) and label.accepts(ch):
                yield dst


@dataclass(frozen=True)
class NFAGraph:
    states: Mapping[StateId, State]
    start: StateId
    ends: Tuple[StateId, ...]
    last_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", MappingProxyType(dict(self.states)))
        object.__setattr__(self, "ends", tuple(self.ends))
        for st in self.states.values():
            for dst, _ in st.outs:
                if dst not in self.states:
                    raise NFAInvariantError(f"State {st.id} has an edge to missing state {dst}")
        if self.start not in self.states:
            raise NFAInvariantError(f"Start state {self.start} is not in the graph")

    def __len__(self) -> int:
        return len(self.states)

    def state(self, sid: StateId) -> State:
        try:
            return self.states[sid]
        except KeyError:
            raise NFAInvariantError(f"Unknown state id {sid}") from None

    def is_match(self, text: str) -> bool:
        return _is_match(self, text)

    def dump(self) -> str:
        return dump_graph(self)


# =============================================================================
# Pretty-print helpers
# =============================================================================

def format_label(label: Transition) -> str:
    if isinstance(label, Epsilon):
        return "eps"
    return ",".join(sorted(label.chars))


def _make_table(rows: List[List[str]], headers: List[str]) -> str:
    # Very small ASCII table formatter.
    cols = len(headers)
    widths = [len(h) for h in headers]
    for r in rows:
        for c in range(cols):
            widths[c] = max(widths[c], len(r[c]))

    def fmt_row(r: List[str]) -> str:
        return " | ".join(r[c].ljust(widths[c]) for c in range(cols)).rstrip()

    line = "-+-".join("-" * w for w in widths)
    out = [fmt_row(headers), line]
    out.extend(fmt_row(r) for r in rows)
    return "\n".join(out)


def dump_graph(graph: NFAGraph) -> str:
    # One row per labeled edge; epsilon destinations listed once per state.
    #
    # Columns:
    #   State | Markers | Eps | Dest | Symbols
    rows: List[List[str]] = []
    for sid in sorted(graph.states):
        st = graph.states[sid]
        markers = []
        if sid == graph.start:
            markers.append("START")
        if sid in graph.ends:
            markers.append("END")
        mark = ",".join(markers)

        eps = "{" + ",".join(str(x) for x in sorted(set(st.epsilon_targets()))) + "}"
        labeled = [(dst, label) for dst, label in st.outs if isinstance(label, CharSet)]

        if not labeled:
            rows.append([str(sid), mark, eps, "", ""])
            continue

        first_row = True
        for dst, label in labeled:
            s_col = str(sid) if first_row else ""
            m_col = mark if first_row else ""
            e_col = eps if first_row else ""
            rows.append([s_col, m_col, e_col, str(dst), format_label(label)])
            first_row = False

    return _make_table(rows, ["State", "Markers", "Eps", "Dest", "Symbols"])
