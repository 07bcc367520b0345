"""
Wordy Abstract Syntax Tree (AST) Definitions
============================================

This module defines the AST node types produced by the Wordy parser and
consumed by the C code generator.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node holding every function
├── FunctionNode - one 'to name ...' definition
├── Statements
│   ├── ReturnStatement - return <expr>
│   ├── VariableDeclaration - variable x
│   ├── AssignmentStatement - set x to <expr>
│   ├── IncrementStatement - change x by <expr>
│   ├── IfStatement - if <expr> then ... else ...
│   ├── BlockStatement - do ... end
│   ├── CallStatement - f(a, b) used as a statement
│   ├── ForeverStatement - forever <stmt>
│   ├── WhileStatement - while <expr> <stmt>
│   └── ForEachStatement - for each i in a to/through b by c <stmt>
└── Expressions
    ├── IntegerLiteral - decimal constant
    ├── IdentifierExpression - variable reference
    ├── BinaryExpression - binary operators
    ├── UnaryExpression - prefix operators
    └── CallExpression - function call used as a value

Design Notes
------------
- All nodes are frozen dataclasses and child collections are tuples, so
  a finished tree cannot be altered through any of its owners
- Each node may carry its source location; it is keyword-only and does
  not take part in equality, so trees compare structurally
"""

from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import Any, Optional, Union

from wordy.errors import SourceLocation


# =============================================================================
# Operators
# =============================================================================

class Operator(Enum):
    """Every operator the language has, binary and prefix alike."""
    ADD = auto()            # +
    SUB = auto()            # -
    MUL = auto()            # *
    DIV = auto()            # /
    MODULO = auto()         # modulo
    NEGATE = auto()         # prefix -
    EQUALS = auto()         # =
    NOT_EQUALS = auto()     # !=
    GT = auto()             # >
    LT = auto()             # <
    GTE = auto()            # >=
    LTE = auto()            # <=
    LOGICAL_AND = auto()    # and
    LOGICAL_OR = auto()     # or
    LOGICAL_NOT = auto()    # not
    BINARY_AND = auto()     # &
    BINARY_OR = auto()      # |
    BINARY_NOT = auto()     # ~


class RangeKind(Enum):
    """How the end bound of a 'for each' range is treated."""
    TO = "to"               # exclusive end
    THROUGH = "through"     # inclusive end


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts, if known
    """
    location: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class IntegerLiteral(ASTNode):
    """Integer constant, within the signed 32-bit range."""
    value: int


@dataclass(frozen=True)
class IdentifierExpression(ASTNode):
    """Reference to a variable or parameter by name."""
    name: str


@dataclass(frozen=True)
class BinaryExpression(ASTNode):
    """
    Binary operation.

    Attributes:
        operator: One of the binary Operator members
        left: Left operand
        right: Right operand
    """
    operator: Operator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class UnaryExpression(ASTNode):
    """
    Prefix operation: NEGATE, LOGICAL_NOT or BINARY_NOT.

    Attributes:
        operator: The prefix operator
        operand: The expression it applies to
    """
    operator: Operator
    operand: "Expression"


@dataclass(frozen=True)
class CallExpression(ASTNode):
    """
    Function call whose result is used as a value.

    Attributes:
        function: Name of the called function
        arguments: Argument expressions, in call order
    """
    function: str
    arguments: tuple["Expression", ...] = ()


Expression = Union[
    IntegerLiteral,
    IdentifierExpression,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
]


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class ReturnStatement(ASTNode):
    """Return statement; Wordy always returns a value."""
    value: Expression


@dataclass(frozen=True)
class VariableDeclaration(ASTNode):
    """Local variable declaration: variable x"""
    name: str


@dataclass(frozen=True)
class AssignmentStatement(ASTNode):
    """
    Assignment: set x to <value>

    Attributes:
        name: Variable being assigned
        value: New value
    """
    name: str
    value: Expression


@dataclass(frozen=True)
class IncrementStatement(ASTNode):
    """
    In-place increment: change x by <amount>

    Attributes:
        name: Variable being changed
        amount: Amount added to it
    """
    name: str
    amount: Expression


@dataclass(frozen=True)
class IfStatement(ASTNode):
    """
    If statement with optional else clause.

    Attributes:
        condition: The condition expression
        then_branch: Statement executed if condition is true
        else_branch: Optional statement executed if condition is false
    """
    condition: Expression
    then_branch: "Statement"
    else_branch: Optional["Statement"] = None


@dataclass(frozen=True)
class BlockStatement(ASTNode):
    """Statement sequence written as 'do ... end'."""
    statements: tuple["Statement", ...] = ()


@dataclass(frozen=True)
class CallStatement(ASTNode):
    """
    Function call used as a statement; the result is discarded.

    Attributes:
        function: Name of the called function
        arguments: Argument expressions, in call order
    """
    function: str
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class ForeverStatement(ASTNode):
    """Unconditional loop: forever <body>"""
    body: "Statement"


@dataclass(frozen=True)
class WhileStatement(ASTNode):
    """
    While loop statement.

    Attributes:
        condition: Loop condition, checked before each pass
        body: Loop body statement
    """
    condition: Expression
    body: "Statement"


@dataclass(frozen=True)
class ForEachStatement(ASTNode):
    """
    Counting loop over a range.

        for each i in <start> to|through <end> by <step> <body>

    The loop counts upward when start is below end and downward
    otherwise; step is added on every pass and its sign is not checked.

    Attributes:
        variable: Name of the loop counter
        start: First value of the counter
        end: Bound of the range
        step: Amount added after each pass (literal 1 when omitted)
        range_kind: TO excludes the end bound, THROUGH includes it
        body: Loop body statement
    """
    variable: str
    start: Expression
    end: Expression
    step: Expression
    range_kind: RangeKind
    body: "Statement"


Statement = Union[
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
]


# =============================================================================
# Program Structure Nodes
# =============================================================================

@dataclass(frozen=True)
class FunctionNode(ASTNode):
    """
    Function definition.

    Attributes:
        name: Function name
        parameters: Parameter names, or None when the definition had no
            'with (...)' clause at all
        body: The function body (any single statement)
    """
    name: str
    parameters: Optional[tuple[str, ...]]
    body: Statement

    @property
    def arity(self) -> int:
        """Number of declared parameters."""
        return len(self.parameters) if self.parameters else 0


@dataclass(frozen=True)
class ProgramNode(ASTNode):
    """
    Root node of the AST representing a complete Wordy program.

    Attributes:
        functions: Function definitions in source order
    """
    functions: tuple[FunctionNode, ...] = ()

    def find_function(self, name: str) -> Optional[FunctionNode]:
        """Return the first function called `name`, if any."""
        for function in self.functions:
            if function.name == name:
                return function
        return None


# =============================================================================
# AST Visitor
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches on the node's class name. Subclasses override visit_*
    methods for the node types they care about; every other node falls
    through to generic_visit, which walks its children.

    Usage:
        class CallCollector(ASTVisitor):
            def __init__(self):
                self.calls = []

            def visit_CallExpression(self, node):
                self.calls.append(node.function)
                self.generic_visit(node)

        collector = CallCollector()
        collector.visit(program)
    """

    def visit(self, node: ASTNode) -> Any:
        """
        Visit a node by dispatching to the appropriate method.

        Args:
            node: The AST node to visit

        Returns:
            The result of the visit method (varies by node type)
        """
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit every child node, in field order."""
        for node_field in fields(node):
            value = getattr(node, node_field.name)
            if isinstance(value, ASTNode):
                self.visit(value)
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Printer (for debugging)
# =============================================================================

OPERATOR_SYMBOLS: dict[Operator, str] = {
    Operator.ADD: "+",
    Operator.SUB: "-",
    Operator.MUL: "*",
    Operator.DIV: "/",
    Operator.MODULO: "modulo",
    Operator.NEGATE: "-",
    Operator.EQUALS: "=",
    Operator.NOT_EQUALS: "!=",
    Operator.GT: ">",
    Operator.LT: "<",
    Operator.GTE: ">=",
    Operator.LTE: "<=",
    Operator.LOGICAL_AND: "and",
    Operator.LOGICAL_OR: "or",
    Operator.LOGICAL_NOT: "not",
    Operator.BINARY_AND: "&",
    Operator.BINARY_OR: "|",
    Operator.BINARY_NOT: "~",
}


class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces an indented outline of the tree, with expressions written
    back in fully parenthesised Wordy notation.

    Usage:
        printer = ASTPrinter()
        output = printer.print(ast)
        print(output)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def _visit_nested(self, node: ASTNode) -> None:
        self._indent()
        self.visit(node)
        self._dedent()

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self._indent()
        for function in node.functions:
            self.visit(function)
        self._dedent()

    def visit_FunctionNode(self, node: FunctionNode):
        if node.parameters is None:
            self._emit(f"Function: {node.name}")
        else:
            self._emit(f"Function: {node.name}({', '.join(node.parameters)})")
        self._visit_nested(node.body)

    def visit_BlockStatement(self, node: BlockStatement):
        self._emit("Block")
        self._indent()
        for stmt in node.statements:
            self.visit(stmt)
        self._dedent()

    def visit_ReturnStatement(self, node: ReturnStatement):
        self._emit(f"Return {self._expr_str(node.value)}")

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        self._emit(f"Variable {node.name}")

    def visit_AssignmentStatement(self, node: AssignmentStatement):
        self._emit(f"Set {node.name} = {self._expr_str(node.value)}")

    def visit_IncrementStatement(self, node: IncrementStatement):
        self._emit(f"Change {node.name} by {self._expr_str(node.amount)}")

    def visit_CallStatement(self, node: CallStatement):
        args = ", ".join(self._expr_str(a) for a in node.arguments)
        self._emit(f"Call {node.function}({args})")

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"If {self._expr_str(node.condition)}")
        self._indent()
        self._emit("Then:")
        self._visit_nested(node.then_branch)
        if node.else_branch is not None:
            self._emit("Else:")
            self._visit_nested(node.else_branch)
        self._dedent()

    def visit_ForeverStatement(self, node: ForeverStatement):
        self._emit("Forever")
        self._visit_nested(node.body)

    def visit_WhileStatement(self, node: WhileStatement):
        self._emit(f"While {self._expr_str(node.condition)}")
        self._visit_nested(node.body)

    def visit_ForEachStatement(self, node: ForEachStatement):
        self._emit(
            f"ForEach {node.variable} in {self._expr_str(node.start)} "
            f"{node.range_kind.value} {self._expr_str(node.end)} "
            f"by {self._expr_str(node.step)}"
        )
        self._visit_nested(node.body)

    def _expr_str(self, expr: Expression) -> str:
        """Convert expression to string representation."""
        if isinstance(expr, IntegerLiteral):
            return str(expr.value)
        if isinstance(expr, IdentifierExpression):
            return expr.name
        if isinstance(expr, BinaryExpression):
            op_str = OPERATOR_SYMBOLS.get(expr.operator, "?")
            return f"({self._expr_str(expr.left)} {op_str} {self._expr_str(expr.right)})"
        if isinstance(expr, UnaryExpression):
            op_str = OPERATOR_SYMBOLS.get(expr.operator, "?")
            separator = " " if op_str.isalpha() else ""
            return f"({op_str}{separator}{self._expr_str(expr.operand)})"
        if isinstance(expr, CallExpression):
            args = ", ".join(self._expr_str(a) for a in expr.arguments)
            return f"{expr.function}({args})"
        return f"<{type(expr).__name__}>"
