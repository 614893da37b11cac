"""Operands consumed by generated statements.

An operand is anything a statement passes along or calls into: the result of
an earlier statement, a literal argument, or a parameter of the enclosing
method.
"""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..errors import GrammarError, InternalContractError
from ..grammar import ArgumentSpec
from ..types import BOOLEAN, NUMBER, PRIMITIVE_TYPES, STRING, ConcreteType, TypeValue, is_list
from .naming import chain_variable


class Operand(BaseModel):
    """Reference to a previously emitted statement's result."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["variable"] = "variable"
    name: str
    is_list: bool = False

    @property
    def code(self) -> str:
        return self.name


class LiteralOperand(BaseModel):
    """Constant argument written directly into the generated call."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    value: bool | int | str

    @property
    def type(self) -> ConcreteType:
        if isinstance(self.value, bool):
            return BOOLEAN
        if isinstance(self.value, int):
            return NUMBER
        return STRING

    @property
    def code(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, int):
            return str(self.value)
        return json.dumps(self.value)


class ParameterOperand(BaseModel):
    """Argument supplied by the caller of the generated method."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["parameter"] = "parameter"
    name: str
    type: TypeValue

    @property
    def code(self) -> str:
        return self.name


# Discriminated union of call arguments
ArgumentOperand = Annotated[
    LiteralOperand | ParameterOperand,
    Field(discriminator="kind"),
]


def chain_operand(index: int, previous_return_type: TypeValue | None) -> Operand:
    """Reference to the result of the statement before ``index``.

    Raises:
        InternalContractError: If called for the first statement of a sequence
    """
    if index < 1:
        raise InternalContractError(
            f"Statement {index} has no previous statement to chain on"
        )
    return Operand(name=chain_variable(index), is_list=is_list(previous_return_type))


def resolve_argument(arg: ArgumentSpec) -> LiteralOperand | ParameterOperand:
    """Turn a grammar argument into an operand.

    Raises:
        GrammarError: If a parameter declares a non-primitive type
    """
    if arg.is_literal:
        return LiteralOperand(value=arg.value)
    param_type = PRIMITIVE_TYPES.get(arg.type)
    if param_type is None:
        raise GrammarError(
            f"Parameter '{arg.name}' has unsupported type '{arg.type}', "
            f"expected one of {sorted(PRIMITIVE_TYPES)}"
        )
    return ParameterOperand(name=arg.name, type=param_type)


def argument_list(operands: list[LiteralOperand | ParameterOperand]) -> str:
    """Render operands as a call argument list."""
    return ", ".join(operand.code for operand in operands)
