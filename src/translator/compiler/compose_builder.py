"""Compose method builder.

Turns the ordered statements of one compose method into generated
statements. Each statement gets a StatementContext from its position; the
builder threads the running index and the previous statement's resolved type
through the sequence, and recurses into waitFor predicates, which get their
own index sequence and are lowered to a closure.

Example: ``[root.isPresent, root.getText -> self]`` becomes::

    RootElement root0 = this.getRootElement()
    Boolean statement0 = root0.isPresent()
    root0.getText()
    return this
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..context import TranslationContext
from ..errors import (
    ChainReferenceError,
    CompilerError,
    GrammarError,
    PredicateError,
    ReturnTypeConflictError,
    UnknownActionError,
)
from ..grammar import DOCUMENT_ELEMENT, SELF_ELEMENT, ArgumentSpec, StatementSpec
from ..ir import ComposeMethodBody, EmittedStatement, MethodParameter
from ..registries.actions import ActionType, get_action_type, get_document_action
from ..registries.matchers import get_matcher
from ..types import (
    BOOLEAN,
    OBJECT,
    UNSET,
    VOID,
    ConcreteType,
    ListOfType,
    TypeValue,
    is_list,
    is_self,
    is_unset,
    is_void,
    list_of,
    same_type,
)
from .operands import LiteralOperand, ParameterOperand, argument_list, resolve_argument
from .statement_context import StatementContext, StatementType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Receiver:
    """What a statement's action is invoked on."""

    code: str
    element_name: str
    element_type: ConcreteType | None = None
    is_list: bool = False
    is_chain: bool = False
    is_document: bool = False


class ElementUsageTracker:
    """Element lookups already bound in one statement sequence.

    The first statement using an element binds a variable for it; later
    statements in the same sequence reuse that variable.
    """

    def __init__(self):
        self._variables: dict[str, str] = {}

    def get(self, element_name: str) -> str | None:
        return self._variables.get(element_name)

    def bind(self, element_name: str, variable_name: str) -> None:
        self._variables.setdefault(element_name, variable_name)


class ComposeMethodBuilder:
    """Builds the body of one compose method.

    A builder is private to one method translation; ``build`` resets all
    per-method state, so calling it twice on the same input yields the same
    output.
    """

    def __init__(
        self,
        context: TranslationContext,
        method_name: str,
        method_return: TypeValue = UNSET,
        requires_value: bool = False,
        default_element: str | None = None,
    ):
        """Initialize builder.

        Args:
            context: Page object the method belongs to
            method_name: Generated method name, used in error messages
            method_return: Declared method return type, UNSET if none
            requires_value: Method must return a value (beforeLoad); returns
                ``this`` when the last statement produces nothing
            default_element: Element used by statements that name none;
                statements without an element call into the page object itself
                when this is None
        """
        self.context = context
        self.method_name = method_name
        self.method_return = method_return
        self.requires_value = requires_value
        self.default_element = default_element
        self._parameters: dict[str, MethodParameter] = {}

    def build(self, statements: list[StatementSpec]) -> ComposeMethodBody:
        """Compile the method's statements.

        Raises:
            CompilerError: If any statement cannot be compiled
        """
        self._parameters = {}
        if not statements:
            raise GrammarError(f"method '{self.method_name}': no statements to compose")
        emitted = self._build_sequence(statements, inside_predicate=False)
        return_type = self._method_return_type(emitted[-1])
        logger.debug(
            f"Built method '{self.method_name}': {len(emitted)} statement(s), "
            f"returns {return_type.simple_name}"
        )
        return ComposeMethodBody(
            statements=emitted,
            return_type=return_type,
            parameters=list(self._parameters.values()),
        )

    # -------------------------------------------------------------------------
    # Sequences
    # -------------------------------------------------------------------------

    def _build_sequence(
        self, statements: list[StatementSpec], inside_predicate: bool
    ) -> list[EmittedStatement]:
        tracker = ElementUsageTracker()
        emitted: list[EmittedStatement] = []
        previous: TypeValue | None = None
        count = len(statements)
        for index, spec in enumerate(statements):
            statement_type = StatementType.for_position(index, count, inside_predicate)
            ctx = StatementContext(
                previous_return_type=previous,
                index=index,
                statement_type=statement_type,
                declared_return=self.context.resolve_type(spec.return_type, spec.return_all),
                return_all=spec.return_all,
            )
            next_chains = index + 1 < count and statements[index + 1].chain
            if spec.is_predicate:
                statement = self._build_predicate(spec, ctx, next_chains)
            else:
                statement = self._build_action(spec, ctx, tracker)
            self._collect_parameters(ctx)
            emitted.append(statement)
            previous = statement.return_type
        return emitted

    def _build_predicate(
        self, spec: StatementSpec, ctx: StatementContext, next_chains: bool
    ) -> EmittedStatement:
        """Lower a waitFor block to a closure returning its last inner result."""
        if ctx.is_inside_predicate():
            raise self._error(PredicateError, ctx, "waitFor cannot be nested inside a predicate")
        if not spec.predicate:
            raise self._error(PredicateError, ctx, "waitFor predicate is empty")

        inner = self._build_sequence(spec.predicate, inside_predicate=True)
        last = inner[-1]
        closure_lines = [line for statement in inner for line in statement.code_lines]
        closure_lines.append(f"return {last.variable_name or 'true'}")
        predicate_type = last.return_type if last.variable_name else BOOLEAN
        expression = "this.waitFor(() -> {\n" + "".join(f"{line};\n" for line in closure_lines) + "})"

        declared = ctx.declared_return_type(UNSET, self.method_return)
        discard = is_void(declared) or is_self(declared)
        if not is_unset(declared) and not discard and not same_type(declared, predicate_type):
            raise self._conflict(ctx, declared, predicate_type, "waitFor")
        bind = next_chains or (not is_unset(declared) and not discard)
        return self._emit(ctx, [], expression, predicate_type, bind, declared, is_predicate=True)

    def _build_action(
        self, spec: StatementSpec, ctx: StatementContext, tracker: ElementUsageTracker
    ) -> EmittedStatement:
        if spec.chain and ctx.is_inside_predicate():
            raise self._error(PredicateError, ctx, "chain is not supported inside a predicate")
        lines: list[str] = []
        if spec.chain:
            receiver = self._chain_receiver(ctx)
        else:
            receiver = self._element_receiver(spec.element, ctx, tracker, lines, spec.apply is None)

        statement_declared = ctx.declared_return_type(UNSET, self.method_return)
        # with a matcher the declaration types the matcher's Boolean, not the action
        declared = UNSET if spec.matcher is not None else statement_declared
        discard = is_void(declared) or is_self(declared)

        if spec.apply is None:
            # the statement evaluates to the element itself
            element = self.context.get_element(spec.element)
            expression = f"this.{element.getter_name}()"
            resolved = element.return_type
            if not is_unset(declared) and not discard and not same_type(declared, resolved):
                raise self._conflict(ctx, declared, resolved, f"element '{spec.element}'")
        else:
            action = self._resolve_action(spec.apply, receiver, ctx)
            operands = self._resolve_arguments(spec, action, ctx)
            call = f"{spec.apply}({argument_list(operands)})"
            element_result = self._element_result(action, declared, discard, ctx, spec.apply)
            expression, resolved = self._expand(receiver, call, element_result, ctx)
            if (
                action is not None
                and not is_unset(declared)
                and not discard
                and not same_type(declared, resolved)
            ):
                raise self._conflict(ctx, declared, resolved, f"action '{spec.apply}'")

        bind = not discard and not is_void(resolved)
        statement = self._emit(ctx, lines, expression, resolved, bind, declared)
        if spec.matcher is not None:
            statement = self._apply_matcher(spec, ctx, statement)
            if not is_unset(statement_declared) and not same_type(statement_declared, BOOLEAN):
                raise self._conflict(
                    ctx, statement_declared, BOOLEAN, f"matcher '{spec.matcher.type}'"
                )
        return statement

    # -------------------------------------------------------------------------
    # Receivers and actions
    # -------------------------------------------------------------------------

    def _chain_receiver(self, ctx: StatementContext) -> Receiver:
        if ctx.is_first_statement():
            raise self._error(
                ChainReferenceError, ctx, "chain requires a previous statement in the same method"
            )
        previous = ctx.previous_return_type
        target = previous.element if isinstance(previous, ListOfType) else previous
        if not isinstance(target, ConcreteType) or not (target.is_basic_element or target.is_custom):
            name = previous.simple_name if previous is not None else "nothing"
            raise self._error(
                ChainReferenceError, ctx, f"cannot chain on previous result of type '{name or 'unset'}'"
            )
        operand = ctx.chain_operand()
        return Receiver(
            code=operand.code,
            element_name=target.element_name or target.name,
            element_type=target,
            is_list=operand.is_list,
            is_chain=True,
        )

    def _element_receiver(
        self,
        element_name: str | None,
        ctx: StatementContext,
        tracker: ElementUsageTracker,
        lines: list[str],
        element_only: bool,
    ) -> Receiver:
        if element_name is None:
            element_name = self.default_element
        if element_name in (None, SELF_ELEMENT):
            return Receiver(code="this", element_name=SELF_ELEMENT)
        if element_name == DOCUMENT_ELEMENT:
            return Receiver(code="this.getDocument()", element_name=DOCUMENT_ELEMENT, is_document=True)

        element = self.context.get_element(element_name)
        receiver = Receiver(
            code="",
            element_name=element_name,
            element_type=element.type,
            is_list=element.is_list,
        )
        if element_only:
            return receiver
        variable = tracker.get(element_name)
        if variable is None:
            variable = ctx.element_variable_name(element_name)
            lines.append(f"{element.return_type.simple_name} {variable} = this.{element.getter_name}()")
            tracker.bind(element_name, variable)
        return Receiver(
            code=variable,
            element_name=element_name,
            element_type=element.type,
            is_list=element.is_list,
        )

    def _resolve_action(
        self, apply: str, receiver: Receiver, ctx: StatementContext
    ) -> ActionType | None:
        """Catalog action for the receiver, None when the receiver has no catalog."""
        try:
            if receiver.is_document:
                return get_document_action(apply)
            if receiver.element_type is not None and receiver.element_type.is_basic_element:
                return get_action_type(apply, receiver.element_type.interfaces, receiver.element_name)
        except UnknownActionError as e:
            raise self._error(UnknownActionError, ctx, str(e)) from e
        return None

    def _resolve_arguments(
        self, spec: StatementSpec, action: ActionType | None, ctx: StatementContext
    ) -> list[LiteralOperand | ParameterOperand]:
        operands = [self._operand(arg, ctx) for arg in spec.args]
        if action is None:
            return operands
        if len(operands) != len(action.parameter_types):
            raise self._error(
                GrammarError,
                ctx,
                f"action '{action.name}' expects {len(action.parameter_types)} argument(s), "
                f"got {len(operands)}",
            )
        for position, (operand, expected) in enumerate(zip(operands, action.parameter_types)):
            if not same_type(operand.type, expected):
                raise self._error(
                    GrammarError,
                    ctx,
                    f"argument {position} of action '{action.name}' must be "
                    f"{expected.simple_name}, got {operand.type.simple_name}",
                )
        return operands

    def _operand(self, arg: ArgumentSpec, ctx: StatementContext) -> LiteralOperand | ParameterOperand:
        try:
            operand = resolve_argument(arg)
            if isinstance(operand, ParameterOperand):
                ctx.add_parameter(MethodParameter(name=operand.name, type=operand.type))
        except GrammarError as e:
            raise self._error(GrammarError, ctx, str(e)) from e
        return operand

    def _element_result(
        self,
        action: ActionType | None,
        declared: TypeValue,
        discard: bool,
        ctx: StatementContext,
        apply: str,
    ) -> TypeValue:
        """Type a single invocation of the action produces."""
        if action is None:
            # no catalog: the declaration is the only source of truth
            return VOID if is_unset(declared) or discard else declared
        natural = action.return_type
        if is_void(natural) and not is_unset(declared) and not discard:
            raise self._conflict(ctx, declared, natural, f"action '{apply}'")
        return natural

    def _expand(
        self, receiver: Receiver, call: str, element_result: TypeValue, ctx: StatementContext
    ) -> tuple[str, TypeValue]:
        """Invocation expression and resolved type, applied per element for list receivers."""
        if not receiver.is_list:
            return f"{receiver.code}.{call}", element_result
        if is_void(element_result):
            return f"{receiver.code}.forEach(element -> element.{call})", VOID
        if self._flattens(receiver, element_result, ctx):
            return (
                f"{receiver.code}.stream().flatMap(element -> element.{call}.stream())"
                ".collect(Collectors.toList())",
                list_of(element_result.element),
            )
        return (
            f"{receiver.code}.stream().map(element -> element.{call})"
            ".collect(Collectors.toList())",
            list_of(element_result),
        )

    @staticmethod
    def _flattens(receiver: Receiver, element_result: TypeValue, ctx: StatementContext) -> bool:
        """Per-element lists are flattened only when the statement asks for returnAll."""
        if not is_list(element_result):
            return False
        if receiver.is_chain:
            return ctx.is_flat_map()
        return ctx.return_all

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    def _emit(
        self,
        ctx: StatementContext,
        lines: list[str],
        expression: str,
        resolved: TypeValue,
        bind: bool,
        declared: TypeValue,
        is_predicate: bool = False,
    ) -> EmittedStatement:
        if bind:
            variable = ctx.variable_name()
            lines.append(f"{resolved.simple_name} {variable} = {expression}")
            return_type = resolved
        else:
            variable = None
            lines.append(expression)
            return_type = declared if is_self(declared) else VOID
        statement = EmittedStatement(
            index=ctx.index,
            variable_name=variable,
            return_type=return_type,
            code_lines=lines,
            is_last=ctx.is_last_statement(),
            is_predicate=is_predicate,
        )
        return self._finish(statement)

    def _apply_matcher(
        self, spec: StatementSpec, ctx: StatementContext, statement: EmittedStatement
    ) -> EmittedStatement:
        if statement.variable_name is None:
            raise self._error(
                ReturnTypeConflictError, ctx, "matcher requires a statement that returns a value"
            )
        try:
            matcher = get_matcher(spec.matcher.type, len(spec.matcher.args))
        except GrammarError as e:
            raise self._error(GrammarError, ctx, str(e)) from e
        if matcher.operand_type is not None and not same_type(
            matcher.operand_type, statement.return_type
        ):
            raise self._conflict(
                ctx, matcher.operand_type, statement.return_type, f"matcher '{matcher.name}'"
            )
        operands = [self._operand(arg, ctx) for arg in spec.matcher.args]
        for position, (operand, expected) in enumerate(zip(operands, matcher.parameter_types)):
            if not same_type(operand.type, expected):
                raise self._error(
                    GrammarError,
                    ctx,
                    f"argument {position} of matcher '{matcher.name}' must be "
                    f"{expected.simple_name}, got {operand.type.simple_name}",
                )
        args = [operand.code for operand in operands]
        variable = ctx.matcher_variable_name()
        lines = [line for line in statement.code_lines if not line.startswith("return ")]
        lines.append(f"Boolean {variable} = {matcher.render(statement.variable_name, args)}")
        return self._finish(
            statement.model_copy(
                update={"variable_name": variable, "return_type": BOOLEAN, "code_lines": lines}
            )
        )

    def _finish(self, statement: EmittedStatement) -> EmittedStatement:
        """Append the method's return to its last statement."""
        if not statement.is_last or any(line.startswith("return ") for line in statement.code_lines):
            return statement
        if statement.variable_name is not None:
            return_line = f"return {statement.variable_name}"
        elif is_self(statement.return_type) or self.requires_value:
            return_line = "return this"
        else:
            return statement
        return statement.model_copy(update={"code_lines": [*statement.code_lines, return_line]})

    def _method_return_type(self, last: EmittedStatement) -> TypeValue:
        if self.requires_value:
            return OBJECT
        if is_unset(self.method_return):
            return last.return_type
        if not same_type(self.method_return, last.return_type):
            raise ReturnTypeConflictError(
                f"method '{self.method_name}', statement {last.index}: method declares "
                f"'{self.method_return.simple_name}' but last statement returns "
                f"'{last.return_type.simple_name}'"
            )
        return self.method_return

    def _collect_parameters(self, ctx: StatementContext) -> None:
        for parameter in ctx.parameters:
            existing = self._parameters.get(parameter.name)
            if existing is None:
                self._parameters[parameter.name] = parameter
            elif not same_type(existing.type, parameter.type):
                raise self._error(
                    GrammarError,
                    ctx,
                    f"parameter '{parameter.name}' declared as both "
                    f"'{existing.type.simple_name}' and '{parameter.type.simple_name}'",
                )

    # -------------------------------------------------------------------------
    # Errors
    # -------------------------------------------------------------------------

    def _error(
        self, error_cls: type[CompilerError], ctx: StatementContext, message: str
    ) -> CompilerError:
        where = f"method '{self.method_name}', statement {ctx.index}"
        if ctx.is_inside_predicate():
            where += " of predicate"
        return error_cls(f"{where}: {message}")

    def _conflict(
        self, ctx: StatementContext, declared: TypeValue, actual: TypeValue, subject: str
    ) -> ReturnTypeConflictError:
        return self._error(
            ReturnTypeConflictError,
            ctx,
            f"declared return type '{declared.simple_name}' conflicts with "
            f"{subject} returning '{actual.simple_name}'",
        )
