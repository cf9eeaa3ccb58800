
class RegexParseError(ValueError):
    pass


class NFAInvariantError(RuntimeError):
    # Raised for malformed postfix or a graph that references a missing state.
    # Neither can come out of a pattern that passed to_postfix().
    pass
