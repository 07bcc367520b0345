"""
C Code Generator for Wordy
==========================

This module generates C source from the Wordy AST. It is the last phase
of the translator and produces a single translation unit that any C99
compiler accepts.

Output Layout
-------------
    /* Wordy runtime prologue */      (only when emit_runtime is set)
    #include <stdio.h>
    long display(long n) { ... }
    long read(void) { ... }
    /* End prologue */

    /* Start compiled program */
    /* Forward declarations */
    long helper(long a);
    int main(void);

    long helper(long a)
    {
        ...
        return 0;
    }
    ...
    /* End compiled program */          (only when emit_runtime is set)

Type Mapping
------------
Wordy has a single integer type, which becomes C `long` everywhere:
variables, parameters, temporaries and return values. The only exception
is `main`, which returns `int` as C requires.

Counting Loops
--------------
A 'for each' loop evaluates its start, end and step exactly once, into
fresh temporaries, then picks its direction at run time:

    for each i in a to b by s body

becomes

    {
        long __WORDY_TEMP_1 = a;
        long __WORDY_TEMP_2 = b;
        long __WORDY_TEMP_3 = s;
        for (long i = __WORDY_TEMP_1;
             (__WORDY_TEMP_1 < __WORDY_TEMP_2 ? i < __WORDY_TEMP_2 : i > __WORDY_TEMP_2);
             i += __WORDY_TEMP_3)
            body
    }

(shown wrapped here; emitted on one line). With 'through' the bound
tests become <= and >=. The direction test stays start < end for both
kinds, so equal bounds with 'through' run the body exactly once whatever
the sign of the step.

Temporary names use the __WORDY_TEMP_ prefix, which the lexer refuses in
user identifiers.
"""

from typing import Optional
import logging

from wordy.translator.ast import (
    ProgramNode,
    FunctionNode,
    Statement,
    ReturnStatement,
    VariableDeclaration,
    AssignmentStatement,
    IncrementStatement,
    IfStatement,
    BlockStatement,
    CallStatement,
    ForeverStatement,
    WhileStatement,
    ForEachStatement,
    Expression,
    IntegerLiteral,
    IdentifierExpression,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
    Operator,
    RangeKind,
)
from wordy.translator.errors import InternalConsistencyError
from wordy.translator.lexer import RESERVED_PREFIX

logger = logging.getLogger(__name__)


# =============================================================================
# Runtime Text
# =============================================================================

PROLOGUE = """\
/* Wordy runtime prologue */
#include <stdio.h>

long display(long n) {
    printf("%ld\\n", n);
    return 0;
}

long read(void) {
    printf("Enter an integer: ");
    long n;
    scanf("%ld", &n);
    return n;
}

/* End prologue */

"""

EPILOGUE = "\n/* End compiled program */\n"

TEMP_PREFIX = RESERVED_PREFIX


# =============================================================================
# Operator Lookup
# =============================================================================

BINARY_OPERATORS: dict[Operator, str] = {
    Operator.ADD: "+",
    Operator.SUB: "-",
    Operator.MUL: "*",
    Operator.DIV: "/",
    Operator.MODULO: "%",
    Operator.EQUALS: "==",
    Operator.NOT_EQUALS: "!=",
    Operator.GT: ">",
    Operator.LT: "<",
    Operator.GTE: ">=",
    Operator.LTE: "<=",
    Operator.LOGICAL_AND: "&&",
    Operator.LOGICAL_OR: "||",
    Operator.BINARY_AND: "&",
    Operator.BINARY_OR: "|",
}

UNARY_OPERATORS: dict[Operator, str] = {
    Operator.NEGATE: "-",
    Operator.LOGICAL_NOT: "!",
    Operator.BINARY_NOT: "~",
}

# (direction test, upward test, downward test) for each range kind
RANGE_COMPARISONS: dict[RangeKind, tuple[str, str, str]] = {
    RangeKind.TO: ("<", "<", ">"),
    RangeKind.THROUGH: ("<", "<=", ">="),
}


class TempNameAllocator:
    """
    Hands out unique temporary variable names.

    Names are TEMP_PREFIX followed by a counter starting at 1. One
    allocator serves one generation run, so names never repeat within a
    translation unit.
    """

    def __init__(self, prefix: str = TEMP_PREFIX):
        self.prefix = prefix
        self._counter = 0

    def new_name(self) -> str:
        self._counter += 1
        return f"{self.prefix}{self._counter}"

    @property
    def count(self) -> int:
        """How many names have been handed out so far."""
        return self._counter


class CodeGenerator:
    """
    Generates C source from a Wordy AST.

    The generator walks the tree once, appending finished lines to an
    output list. Statements are written at an explicit depth; each depth
    level is one copy of the indent unit.

    Attributes:
        indent: Text of one indentation level
        emit_runtime: Whether to wrap the program in the runtime
            prologue and epilogue
    """

    def __init__(self, indent: str = "    ", emit_runtime: bool = True):
        self.indent = indent
        self.emit_runtime = emit_runtime
        self._output: list[str] = []
        self._names = TempNameAllocator()

    def generate(
        self,
        program: ProgramNode,
        names: Optional[TempNameAllocator] = None,
    ) -> str:
        """
        Generate C source from an AST.

        Args:
            program: The root AST node
            names: Allocator for temporary names; a fresh one is used
                when omitted

        Returns:
            Complete C source text

        Raises:
            InternalConsistencyError: If the tree holds a node or
                operator the generator does not know
        """
        self._output = []
        self._names = names if names is not None else TempNameAllocator()

        if self.emit_runtime:
            self._output.append(PROLOGUE)

        self._emit("/* Start compiled program */")
        self._emit_forward_declarations(program)

        for function in program.functions:
            self._generate_function(function)

        if self.emit_runtime:
            self._output.append(EPILOGUE)

        logger.debug(
            "Generated %d function(s) using %d temporary name(s)",
            len(program.functions),
            self._names.count,
        )
        return "".join(self._output)

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _emit(self, line: str = "", depth: int = 0) -> None:
        """Emit one line at the given depth."""
        if line:
            self._output.append(f"{self.indent * depth}{line}\n")
        else:
            self._output.append("\n")

    # =========================================================================
    # Functions
    # =========================================================================

    def _signature(self, function: FunctionNode) -> str:
        """C declarator for a function, e.g. 'long add(long a, long b)'."""
        return_type = "int" if function.name == "main" else "long"
        if function.parameters:
            params = ", ".join(f"long {name}" for name in function.parameters)
        else:
            params = "void"
        return f"{return_type} {function.name}({params})"

    def _emit_forward_declarations(self, program: ProgramNode) -> None:
        if not program.functions:
            return
        self._emit("/* Forward declarations */")
        for function in program.functions:
            self._emit(f"{self._signature(function)};")

    def _generate_function(self, function: FunctionNode) -> None:
        """
        Generate one function definition.

        Every function ends with 'return 0;' so control never falls off
        the end, whatever the body does.
        """
        self._emit()
        self._emit(self._signature(function))
        self._emit("{")
        self._generate_statement(function.body, 1)
        self._emit("return 0;", 1)
        self._emit("}")

    # =========================================================================
    # Statements
    # =========================================================================

    def _generate_statement(self, stmt: Statement, depth: int) -> None:
        """Generate code for any statement."""
        if isinstance(stmt, ReturnStatement):
            self._emit(f"return {self._expression(stmt.value)};", depth)
        elif isinstance(stmt, BlockStatement):
            self._generate_block(stmt, depth)
        elif isinstance(stmt, CallStatement):
            self._emit(f"{self._call(stmt.function, stmt.arguments)};", depth)
        elif isinstance(stmt, VariableDeclaration):
            self._emit(f"long {stmt.name};", depth)
        elif isinstance(stmt, AssignmentStatement):
            self._emit(f"{stmt.name} = {self._expression(stmt.value)};", depth)
        elif isinstance(stmt, IncrementStatement):
            self._emit(f"{stmt.name} += {self._expression(stmt.amount)};", depth)
        elif isinstance(stmt, IfStatement):
            self._generate_if(stmt, depth)
        elif isinstance(stmt, ForeverStatement):
            self._emit("while (1)", depth)
            self._generate_statement(stmt.body, depth + 1)
        elif isinstance(stmt, WhileStatement):
            self._emit(f"while {self._condition(stmt.condition)}", depth)
            self._generate_statement(stmt.body, depth + 1)
        elif isinstance(stmt, ForEachStatement):
            self._generate_for_each(stmt, depth)
        else:
            raise InternalConsistencyError(
                f"unknown statement node {type(stmt).__name__}",
                getattr(stmt, "location", None),
            )

    def _generate_block(self, block: BlockStatement, depth: int) -> None:
        self._emit("{", depth)
        for stmt in block.statements:
            self._generate_statement(stmt, depth + 1)
        self._emit("}", depth)

    def _generate_if(self, stmt: IfStatement, depth: int) -> None:
        self._emit(f"if {self._condition(stmt.condition)}", depth)
        self._generate_statement(stmt.then_branch, depth + 1)
        if stmt.else_branch is not None:
            self._emit("else", depth)
            self._generate_statement(stmt.else_branch, depth + 1)

    def _generate_for_each(self, stmt: ForEachStatement, depth: int) -> None:
        """Generate a counting loop; see the module docstring."""
        start = self._names.new_name()
        end = self._names.new_name()
        step = self._names.new_name()
        direction, upward, downward = RANGE_COMPARISONS[stmt.range_kind]
        var = stmt.variable

        self._emit("{", depth)
        self._emit(f"long {start} = {self._expression(stmt.start)};", depth + 1)
        self._emit(f"long {end} = {self._expression(stmt.end)};", depth + 1)
        self._emit(f"long {step} = {self._expression(stmt.step)};", depth + 1)

        test = f"({start} {direction} {end} ? {var} {upward} {end} : {var} {downward} {end})"
        self._emit(f"for (long {var} = {start}; {test}; {var} += {step})", depth + 1)
        self._generate_statement(stmt.body, depth + 2)
        self._emit("}", depth)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _condition(self, expr: Expression) -> str:
        """An expression as an 'if'/'while' condition, always parenthesised."""
        text = self._expression(expr)
        if isinstance(expr, (BinaryExpression, UnaryExpression)):
            return text
        return f"({text})"

    def _expression(self, expr: Expression) -> str:
        """Render an expression as C text."""
        if isinstance(expr, IntegerLiteral):
            return str(expr.value)
        if isinstance(expr, IdentifierExpression):
            return expr.name
        if isinstance(expr, BinaryExpression):
            op = BINARY_OPERATORS.get(expr.operator)
            if op is None:
                raise InternalConsistencyError(
                    f"{expr.operator.name} is not a binary operator",
                    expr.location,
                )
            return f"({self._expression(expr.left)} {op} {self._expression(expr.right)})"
        if isinstance(expr, UnaryExpression):
            op = UNARY_OPERATORS.get(expr.operator)
            if op is None:
                raise InternalConsistencyError(
                    f"{expr.operator.name} is not a prefix operator",
                    expr.location,
                )
            return f"({op}{self._expression(expr.operand)})"
        if isinstance(expr, CallExpression):
            return self._call(expr.function, expr.arguments)
        raise InternalConsistencyError(
            f"unknown expression node {type(expr).__name__}",
            getattr(expr, "location", None),
        )

    def _call(self, function: str, arguments: tuple[Expression, ...]) -> str:
        args = ", ".join(self._expression(arg) for arg in arguments)
        return f"{function}({args})"
