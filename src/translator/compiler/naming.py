"""Variable naming for generated method bodies.

Names depend only on a statement's position: its index in the enclosing
sequence and whether it sits inside a predicate closure. Generated names are
part of the emitted source, so changing anything here changes compiler
output.
"""

STATEMENT_VARIABLE_PREFIX = "statement"
MATCHER_VARIABLE_PREFIX = "matcher"
PREDICATE_VARIABLE_PREFIX = "p"


def predicate_prefix(inside_predicate: bool) -> str:
    return PREDICATE_VARIABLE_PREFIX if inside_predicate else ""


def statement_variable(index: int, inside_predicate: bool = False) -> str:
    """Name bound to a statement's result, e.g. ``statement2`` or ``pstatement0``."""
    return predicate_prefix(inside_predicate) + STATEMENT_VARIABLE_PREFIX + str(index)


def matcher_variable(index: int, inside_predicate: bool = False) -> str:
    """Name bound to a matcher's boolean result, e.g. ``matcher1`` or ``pmatcher0``."""
    return predicate_prefix(inside_predicate) + MATCHER_VARIABLE_PREFIX + str(index)


def element_variable(element_name: str, index: int, inside_predicate: bool = False) -> str:
    """Name bound to an element lookup, e.g. ``root0`` or ``pbutton1``."""
    return predicate_prefix(inside_predicate) + element_name + str(index)


def chain_variable(index: int) -> str:
    """Name of the result a statement at ``index`` chains on.

    Chaining reads the previous result of the enclosing sequence, so the
    predicate prefix never applies.
    """
    return STATEMENT_VARIABLE_PREFIX + str(index - 1)
