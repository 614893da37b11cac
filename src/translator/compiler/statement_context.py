"""Per-statement bookkeeping for compose method compilation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..errors import GrammarError
from ..ir import MethodParameter
from ..types import UNSET, TypeValue, is_list, is_self, is_unset, same_type
from . import naming
from .operands import Operand, chain_operand


class StatementType(str, Enum):
    """Position of a statement within its sequence."""

    REGULAR = "regular"
    LAST = "last"
    PREDICATE = "predicate"
    PREDICATE_LAST = "predicate_last"

    @classmethod
    def for_position(cls, index: int, count: int, inside_predicate: bool) -> StatementType:
        """Kind of the statement at ``index`` in a sequence of ``count`` statements."""
        is_last = index == count - 1
        if inside_predicate:
            return cls.PREDICATE_LAST if is_last else cls.PREDICATE
        return cls.LAST if is_last else cls.REGULAR


@dataclass(frozen=True)
class StatementContext:
    """Everything a statement needs to know about where it sits.

    Naming and typing are decided by position alone: two identical
    statements at different indexes always get different names.
    """

    previous_return_type: TypeValue | None
    index: int
    statement_type: StatementType
    declared_return: TypeValue = UNSET
    return_all: bool = False

    # method parameters referenced by this statement's arguments
    _parameters: dict[str, MethodParameter] = field(
        default_factory=dict, init=False, compare=False, repr=False
    )

    def variable_name(self) -> str:
        return naming.statement_variable(self.index, self.is_inside_predicate())

    def matcher_variable_name(self) -> str:
        return naming.matcher_variable(self.index, self.is_inside_predicate())

    def element_variable_name(self, element_name: str) -> str:
        return naming.element_variable(element_name, self.index, self.is_inside_predicate())

    def chain_operand(self) -> Operand:
        return chain_operand(self.index, self.previous_return_type)

    def is_inside_predicate(self) -> bool:
        return self.statement_type in (StatementType.PREDICATE, StatementType.PREDICATE_LAST)

    def is_last_statement(self) -> bool:
        return self.statement_type == StatementType.LAST

    def is_last_predicate_statement(self) -> bool:
        return self.statement_type == StatementType.PREDICATE_LAST

    def is_first_statement(self) -> bool:
        return self.index == 0

    def has_declared_return(self) -> bool:
        return not is_unset(self.declared_return)

    def is_return_self(self) -> bool:
        return is_self(self.declared_return)

    def is_flat_map(self) -> bool:
        return is_list(self.previous_return_type) and self.return_all

    def declared_return_type(
        self, default: TypeValue = UNSET, method_return: TypeValue = UNSET
    ) -> TypeValue:
        """Declared type of this statement, with fallbacks when nothing was declared.

        Only the last statement of a method completes the method's declared
        return; every other statement falls back to ``default``.
        """
        if self.has_declared_return():
            return self.declared_return
        if self.is_last_statement() and not is_unset(method_return):
            return method_return
        return default

    def add_parameter(self, parameter: MethodParameter) -> None:
        """Record a referenced method parameter.

        Raises:
            GrammarError: If the name was already recorded with another type
        """
        existing = self._parameters.get(parameter.name)
        if existing is None:
            self._parameters[parameter.name] = parameter
        elif not same_type(existing.type, parameter.type):
            raise GrammarError(
                f"parameter '{parameter.name}' declared as both "
                f"'{existing.type.simple_name}' and '{parameter.type.simple_name}'"
            )

    @property
    def parameters(self) -> list[MethodParameter]:
        return list(self._parameters.values())
