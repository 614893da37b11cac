"""Matcher registry.

A matcher turns a statement's result into a Boolean, e.g. for the last
statement of a waitFor predicate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..errors import GrammarError
from ..types import BOOLEAN, STRING, TypeValue

# Renders the matcher expression from the checked variable and argument code
MatcherRenderer = Callable[[str, list[str]], str]


@dataclass(frozen=True)
class MatcherType:
    """Boolean check over a single value."""

    name: str
    operand_type: TypeValue | None  # None accepts any non-void type
    parameter_types: tuple[TypeValue, ...]
    render: MatcherRenderer

    @property
    def arg_count(self) -> int:
        return len(self.parameter_types)


MATCHERS: dict[str, MatcherType] = {
    "isTrue": MatcherType(
        "isTrue", BOOLEAN, (), lambda v, a: f"Boolean.TRUE.equals({v})"
    ),
    "isFalse": MatcherType(
        "isFalse", BOOLEAN, (), lambda v, a: f"Boolean.FALSE.equals({v})"
    ),
    "notNull": MatcherType(
        "notNull", None, (), lambda v, a: f"{v} != null"
    ),
    "stringContains": MatcherType(
        "stringContains", STRING, (STRING,), lambda v, a: f"({v}!= null && {v}.contains({a[0]}))"
    ),
    "stringEquals": MatcherType(
        "stringEquals", STRING, (STRING,), lambda v, a: f"({v}!= null && {v}.equals({a[0]}))"
    ),
}


def get_matcher(name: str, arg_count: int) -> MatcherType:
    """Look up a matcher and check its argument count.

    Raises:
        GrammarError: If the matcher is unknown or gets the wrong number of args
    """
    matcher = MATCHERS.get(name)
    if matcher is None:
        raise GrammarError(f"Unknown matcher '{name}', supported are {sorted(MATCHERS)}")
    if arg_count != matcher.arg_count:
        raise GrammarError(
            f"Matcher '{name}' expects {matcher.arg_count} argument(s), got {arg_count}"
        )
    return matcher
