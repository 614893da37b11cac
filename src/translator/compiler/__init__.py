"""Compiler package for compose method translation.

Pieces:
1. naming            - Variable names derived from statement position
2. operands          - Chain, literal, and parameter operands
3. statement_context - Per-statement position, typing, and naming
4. compose_builder   - Compile a method's statements into emitted code

Method builders read page-object state from TranslationContext and thread
the running index and previous type through each statement sequence.
"""

from src.translator.compiler.compose_builder import ComposeMethodBuilder, ElementUsageTracker
from src.translator.compiler.operands import (
    LiteralOperand,
    Operand,
    ParameterOperand,
    chain_operand,
    resolve_argument,
)
from src.translator.compiler.statement_context import StatementContext, StatementType

__all__ = [
    "ComposeMethodBuilder",
    "ElementUsageTracker",
    "LiteralOperand",
    "Operand",
    "ParameterOperand",
    "StatementContext",
    "StatementType",
    "chain_operand",
    "resolve_argument",
]
