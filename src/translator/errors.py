"""Compiler error taxonomy.

Every error a user can fix by editing a page object document derives from
CompilerError. The runner catches CompilerError per page object, so one bad
document never stops the rest of a batch.
"""


class CompilerError(Exception):
    """Raised when a page object cannot be translated."""

    pass


class GrammarError(CompilerError):
    """Raised when a page object document is malformed."""

    pass


class UnknownActionError(CompilerError):
    """Raised when an action is not declared on the element's interfaces."""

    pass


class ReturnTypeConflictError(CompilerError):
    """Raised when a declared return type contradicts the action's own type."""

    pass


class ChainReferenceError(CompilerError):
    """Raised when a statement chains on a result that cannot be chained."""

    pass


class PredicateError(CompilerError):
    """Raised for empty or illegally nested predicate blocks."""

    pass


class SelectorError(CompilerError):
    """Raised when a selector string is not supported by its dialect."""

    pass


class WriterError(CompilerError):
    """Raised when generated source cannot be written."""

    pass


class InternalContractError(RuntimeError):
    """Raised when compiler internals are called out of order.

    This is a bug in the compiler, not in the page object being compiled.
    """

    pass
