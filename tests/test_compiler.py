import pytest

from thompson_nfa import (
    EPSILON,
    CharSet,
    NFAInvariantError,
    RegexParseError,
    compile_pattern,
    compile_postfix,
    dump_graph,
)


def eps_targets(graph, sid):
    return set(graph.state(sid).epsilon_targets())


def shape(graph):
    return sorted(
        (sid, tuple(sorted((dst, repr(label)) for dst, label in st.outs)))
        for sid, st in graph.states.items()
    )


def test_one_or_more_concat_structure():
    graph = compile_postfix("a+b+.")
    assert len(graph) == 8
    assert graph.last_id == 8
    assert graph.start == 2
    assert list(graph.ends) == [7]
    assert eps_targets(graph, 1) == {0, 3}
    assert eps_targets(graph, 5) == {4, 7}
    assert graph.state(0).outs == ((1, CharSet.of("a")),)


def test_star_over_alternation_structure():
    graph = compile_pattern("a(b|c)*")
    assert len(graph) == 10
    assert eps_targets(graph, 7) == {6, 9}
    assert eps_targets(graph, 6) == {2, 4, 7}
    assert graph.start == 0
    assert list(graph.ends) == [9]


def test_optional_keeps_char_edge():
    graph = compile_pattern("a?")
    outs = graph.state(0).outs
    assert (1, CharSet.of("a")) in outs
    assert (1, EPSILON) in outs
    assert len(graph) == 2


def test_compilation_is_deterministic():
    assert shape(compile_pattern("(a|zd*c+|e)+b+")) == shape(compile_pattern("(a|zd*c+|e)+b+"))


def test_separate_compilations_restart_ids():
    compile_pattern("abc")
    graph = compile_pattern("a")
    assert sorted(graph.states) == [0, 1]


def test_every_destination_exists():
    graph = compile_pattern("(a|b)*c+d?")
    for st in graph.states.values():
        for dst, _ in st.outs:
            assert dst in graph.states


def test_graph_is_read_only():
    graph = compile_pattern("ab")
    with pytest.raises(TypeError):
        graph.states[99] = graph.state(0)
    with pytest.raises(AttributeError):
        graph.start = 1


def test_empty_pattern_compiles_to_lone_state():
    graph = compile_pattern("")
    assert len(graph) == 1
    assert graph.state(graph.start).is_terminal
    assert list(graph.ends) == [graph.start]


@pytest.mark.parametrize("postfix", ["a.", "|", "a|", "*", "?", "+"])
def test_operator_underflow_is_invariant_error(postfix):
    with pytest.raises(NFAInvariantError):
        compile_postfix(postfix)


def test_unknown_token_is_invariant_error():
    with pytest.raises(NFAInvariantError, match="Unknown postfix token"):
        compile_postfix("a#")


def test_leftover_fragments_is_invariant_error():
    with pytest.raises(NFAInvariantError, match="unconnected"):
        compile_postfix("ab")


def test_missing_state_lookup_is_invariant_error():
    graph = compile_pattern("a")
    with pytest.raises(NFAInvariantError):
        graph.state(42)


def test_compile_pattern_surfaces_parse_errors():
    with pytest.raises(RegexParseError):
        compile_pattern("a|")
    with pytest.raises(RegexParseError):
        compile_pattern("(a")


def test_empty_charset_rejected():
    with pytest.raises(ValueError):
        CharSet(frozenset())


def test_dump_lists_every_state():
    graph = compile_pattern("a+b+")
    table = dump_graph(graph)
    lines = table.splitlines()
    assert lines[0].split(" | ")[0].strip() == "State"
    assert len(lines) == 2 + len(graph)
    assert "START" in table and "END" in table
    assert graph.dump() == table
