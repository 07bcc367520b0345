"""
Wordy Recursive Descent Parser
==============================

This module implements a recursive descent parser for Wordy. It takes
the token stream from the lexer and builds an Abstract Syntax Tree.

Grammar (Simplified EBNF)
-------------------------
program     ::= function*
function    ::= 'to' IDENTIFIER signature? statement
signature   ::= 'with' '(' (IDENTIFIER (',' IDENTIFIER)*)? ')'

statement   ::= 'return' expr
              | 'do' statement* 'end'
              | 'if' expr 'then' statement ('else' statement)?
              | 'set' IDENTIFIER 'to' expr
              | 'change' IDENTIFIER 'by' expr
              | 'variable' IDENTIFIER
              | 'forever' statement
              | 'while' expr statement
              | 'for' 'each' IDENTIFIER 'in' expr ('to' | 'through') expr
                    ('by' expr)? statement
              | IDENTIFIER '(' args? ')'

args        ::= expr (',' expr)*

Expression Precedence (loosest to tightest)
-------------------------------------------
1. logical       and or & |
2. comparison    > >= < <= = !=
3. additive      + -
4. multiplicative * / modulo
5. primary       '(' expr ')', NUMBER, IDENTIFIER, call,
                 prefix - not ~ (operand is a whole expression)

Every binary level parses its right operand by recursing into itself, so
all binary operators associate to the right: 10 - 2 - 3 is 10 - (2 - 3).
A prefix operator takes the whole remaining expression as its operand:
-1 + 2 is -(1 + 2).

The parser stops at the first error; there is no recovery.

Example Usage
-------------
>>> from wordy.translator.parser import parse_source
>>> program = parse_source("to main do display(1 + 2 * 3) end")
>>> program.functions[0].name
'main'
"""

from collections import deque
from typing import Callable, Iterable, NoReturn, Optional
import logging

from wordy.errors import SourceLocation
from wordy.translator.lexer import Lexer, Token, TokenType
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
from wordy.translator.errors import (
    InvalidCharacterError,
    InvalidRangeKindError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Operator Tables
# =============================================================================

LOGICAL_OPERATORS = {
    "and": Operator.LOGICAL_AND,
    "or": Operator.LOGICAL_OR,
    "&": Operator.BINARY_AND,
    "|": Operator.BINARY_OR,
}

COMPARISON_OPERATORS = {
    ">": Operator.GT,
    ">=": Operator.GTE,
    "<": Operator.LT,
    "<=": Operator.LTE,
    "=": Operator.EQUALS,
    "!=": Operator.NOT_EQUALS,
}

ADDITIVE_OPERATORS = {
    "+": Operator.ADD,
    "-": Operator.SUB,
}

MULTIPLICATIVE_OPERATORS = {
    "*": Operator.MUL,
    "/": Operator.DIV,
    "modulo": Operator.MODULO,
}

PREFIX_OPERATORS = {
    "-": Operator.NEGATE,
    "not": Operator.LOGICAL_NOT,
    "~": Operator.BINARY_NOT,
}

RANGE_KINDS = {
    "to": RangeKind.TO,
    "through": RangeKind.THROUGH,
}


class Parser:
    """
    Recursive descent parser for Wordy.

    Tokens are consumed from the front of a queue with a single token of
    lookahead; nothing is ever pushed back. When the queue runs dry the
    parser sees an EOF token placed just after the last real token.

    Attributes:
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the lexer (any iterable, without EOF)
            filename: Source filename for error messages
            source_lines: Original source lines for error context
        """
        self._tokens: deque[Token] = deque(tokens)
        self.filename = filename
        self.source_lines = source_lines or []
        self._eof = self._make_eof()

    def _make_eof(self) -> Token:
        if not self._tokens:
            return Token(TokenType.EOF, None, 1, 1, self.filename)
        last = self._tokens[-1]
        return Token(
            TokenType.EOF,
            None,
            last.line,
            last.column + len(str(last.value)),
            last.filename,
        )

    def parse(self) -> ProgramNode:
        """
        Parse the token stream into an AST.

        Returns:
            ProgramNode containing every function in source order

        Raises:
            WordySyntaxError: On the first token that breaks the grammar
            InvalidCharacterError: If an ERROR token is reached
        """
        functions = []

        while not self._at_end():
            functions.append(self._parse_function())

        logger.debug("Parsed %d function(s) from %s", len(functions), self.filename)
        return ProgramNode(
            tuple(functions),
            location=SourceLocation(self.filename, 1, 1),
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return not self._tokens

    def _peek(self) -> Token:
        """Look at the current token without consuming it."""
        if self._tokens:
            return self._tokens[0]
        return self._eof

    def _advance(self) -> Token:
        """Consume and return the current token."""
        if self._tokens:
            return self._tokens.popleft()
        return self._eof

    def _check_keyword(self, word: str) -> bool:
        return self._peek().is_keyword(word)

    def _match_keyword(self, word: str) -> Optional[Token]:
        """Consume the current token if it is the reserved word `word`."""
        if self._check_keyword(word):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, expected: str) -> Token:
        """
        Expect and consume a token of a specific type.

        Args:
            token_type: The expected token type
            expected: Description of the expectation, for the error

        Returns:
            The consumed token
        """
        if self._peek().type == token_type:
            return self._advance()
        self._fail(expected)

    def _expect_keyword(self, word: str) -> Token:
        if self._check_keyword(word):
            return self._advance()
        self._fail(f"'{word}'")

    def _expect_identifier(self, expected: str = "an identifier") -> str:
        return self._expect(TokenType.IDENTIFIER, expected).value

    def _fail(self, expected: str) -> NoReturn:
        """
        Raise the error matching the current token.

        Raises:
            UnexpectedEndOfInputError: If the tokens have run out
            InvalidCharacterError: If the current token is an ERROR token
            UnexpectedTokenError: For any other token
        """
        token = self._peek()
        source_line = self._get_source_line(token.line)

        if token.type == TokenType.EOF:
            raise UnexpectedEndOfInputError(expected, token.location, source_line)
        if token.type == TokenType.ERROR:
            raise InvalidCharacterError(token.value, token.location, source_line)
        raise UnexpectedTokenError(token.text, expected, token.location, source_line)

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Functions
    # =========================================================================

    def _parse_function(self) -> FunctionNode:
        """
        Parse a function definition.

            to name with (a, b) statement
            to name statement
        """
        start = self._expect_keyword("to")
        name = self._expect_identifier("a function name")

        parameters = None
        if self._match_keyword("with"):
            parameters = self._parse_parameters()

        body = self._parse_statement()
        logger.debug("Parsed function '%s' at %s", name, start.location)
        return FunctionNode(name, parameters, body, location=start.location)

    def _parse_parameters(self) -> tuple[str, ...]:
        """Parse the parenthesised parameter list after 'with'."""
        self._expect(TokenType.LPAREN, "'(' to begin the parameter list")
        names = []

        if self._peek().type != TokenType.RPAREN:
            names.append(self._expect_identifier("a parameter name"))
            while self._peek().type == TokenType.COMMA:
                self._advance()
                names.append(self._expect_identifier("a parameter name"))

        self._expect(TokenType.RPAREN, "')' to end the parameter list")
        return tuple(names)

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Parse a single statement, dispatching on its first token."""
        token = self._peek()

        if token.type == TokenType.KEYWORD:
            handler = self._statement_handlers().get(token.value)
            if handler is not None:
                return handler()
        elif token.type == TokenType.IDENTIFIER:
            return self._parse_call_statement()

        self._fail("a statement")

    def _statement_handlers(self) -> dict[str, Callable[[], Statement]]:
        return {
            "return": self._parse_return,
            "do": self._parse_block,
            "if": self._parse_if,
            "set": self._parse_assignment,
            "change": self._parse_increment,
            "variable": self._parse_variable,
            "forever": self._parse_forever,
            "while": self._parse_while,
            "for": self._parse_for_each,
        }

    def _parse_return(self) -> ReturnStatement:
        start = self._advance()
        value = self._parse_expression()
        return ReturnStatement(value, location=start.location)

    def _parse_block(self) -> BlockStatement:
        """Parse 'do' statement* 'end'."""
        start = self._advance()
        statements = []

        while not self._check_keyword("end"):
            if self._at_end():
                self._fail("'end' to close the 'do' block")
            statements.append(self._parse_statement())

        self._advance()
        return BlockStatement(tuple(statements), location=start.location)

    def _parse_if(self) -> IfStatement:
        start = self._advance()
        condition = self._parse_expression()
        self._expect_keyword("then")
        then_branch = self._parse_statement()

        else_branch = None
        if self._match_keyword("else"):
            else_branch = self._parse_statement()

        return IfStatement(condition, then_branch, else_branch, location=start.location)

    def _parse_assignment(self) -> AssignmentStatement:
        """Parse 'set' name 'to' expr."""
        start = self._advance()
        name = self._expect_identifier("a variable name")
        self._expect_keyword("to")
        value = self._parse_expression()
        return AssignmentStatement(name, value, location=start.location)

    def _parse_increment(self) -> IncrementStatement:
        """Parse 'change' name 'by' expr."""
        start = self._advance()
        name = self._expect_identifier("a variable name")
        self._expect_keyword("by")
        amount = self._parse_expression()
        return IncrementStatement(name, amount, location=start.location)

    def _parse_variable(self) -> VariableDeclaration:
        start = self._advance()
        name = self._expect_identifier("a variable name")
        return VariableDeclaration(name, location=start.location)

    def _parse_forever(self) -> ForeverStatement:
        start = self._advance()
        body = self._parse_statement()
        return ForeverStatement(body, location=start.location)

    def _parse_while(self) -> WhileStatement:
        start = self._advance()
        condition = self._parse_expression()
        body = self._parse_statement()
        return WhileStatement(condition, body, location=start.location)

    def _parse_for_each(self) -> ForEachStatement:
        """
        Parse a counting loop.

            for each i in 1 to 10 by 2 statement

        The range keyword is checked as soon as the start expression
        ends, before anything after it is read.
        """
        start_token = self._advance()
        self._expect_keyword("each")
        variable = self._expect_identifier("a loop variable name")
        self._expect_keyword("in")

        start = self._parse_expression()
        range_kind = self._parse_range_kind()
        end = self._parse_expression()

        if self._match_keyword("by"):
            step = self._parse_expression()
        else:
            step = IntegerLiteral(1, location=start_token.location)

        body = self._parse_statement()
        return ForEachStatement(
            variable,
            start,
            end,
            step,
            range_kind,
            body,
            location=start_token.location,
        )

    def _parse_range_kind(self) -> RangeKind:
        token = self._peek()

        if token.type == TokenType.KEYWORD and token.value in RANGE_KINDS:
            self._advance()
            return RANGE_KINDS[token.value]

        if token.type in (TokenType.EOF, TokenType.ERROR):
            self._fail("'to' or 'through'")

        raise InvalidRangeKindError(
            token.text,
            token.location,
            self._get_source_line(token.line),
        )

    def _parse_call_statement(self) -> CallStatement:
        name_token = self._advance()
        arguments = self._parse_arguments()
        return CallStatement(name_token.value, arguments, location=name_token.location)

    def _parse_arguments(self) -> tuple[Expression, ...]:
        """Parse '(' (expr (',' expr)*)? ')'."""
        self._expect(TokenType.LPAREN, "'(' to begin the argument list")
        arguments = []

        if self._peek().type != TokenType.RPAREN:
            arguments.append(self._parse_expression())
            while self._peek().type == TokenType.COMMA:
                self._advance()
                arguments.append(self._parse_expression())

        self._expect(TokenType.RPAREN, "')' to end the argument list")
        return tuple(arguments)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Parse a full expression (loosest level)."""
        return self._parse_logical()

    def _parse_logical(self) -> Expression:
        return self._parse_binary(self._parse_comparison, LOGICAL_OPERATORS, self._parse_logical)

    def _parse_comparison(self) -> Expression:
        return self._parse_binary(self._parse_additive, COMPARISON_OPERATORS, self._parse_comparison)

    def _parse_additive(self) -> Expression:
        return self._parse_binary(
            self._parse_multiplicative, ADDITIVE_OPERATORS, self._parse_additive
        )

    def _parse_multiplicative(self) -> Expression:
        return self._parse_binary(
            self._parse_primary, MULTIPLICATIVE_OPERATORS, self._parse_multiplicative
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: dict[str, Operator],
        level_parser: Callable[[], Expression],
    ) -> Expression:
        """
        Generic binary expression parser.

        Args:
            operand_parser: Parses the left operand (next tighter level)
            operators: Map of operator spellings to Operator members
            level_parser: Parses the right operand (this same level)
        """
        left = operand_parser()

        token = self._peek()
        if not token.is_operator(*operators):
            return left

        self._advance()
        right = level_parser()
        return BinaryExpression(
            operators[token.value],
            left,
            right,
            location=left.location,
        )

    def _parse_primary(self) -> Expression:
        """Parse a literal, name, call, parenthesised or prefixed expression."""
        token = self._peek()

        if token.type == TokenType.NUMBER:
            self._advance()
            return IntegerLiteral(token.value, location=token.location)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._peek().type == TokenType.LPAREN:
                arguments = self._parse_arguments()
                return CallExpression(token.value, arguments, location=token.location)
            return IdentifierExpression(token.value, location=token.location)

        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expression()
            self._expect(TokenType.RPAREN, "')' to close the parenthesis")
            return expr

        if token.is_operator(*PREFIX_OPERATORS):
            self._advance()
            operand = self._parse_expression()
            return UnaryExpression(
                PREFIX_OPERATORS[token.value],
                operand,
                location=token.location,
            )

        self._fail("an expression")


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """
    Parse Wordy source code into an AST.

    This is a convenience function that combines lexing and parsing.

    Args:
        source: The Wordy source code
        filename: Source filename for error messages

    Returns:
        The root ProgramNode of the AST

    Raises:
        TranslationError: If lexing or parsing fails
    """
    lexer = Lexer(source, filename)
    tokens = list(lexer.tokenize())
    parser = Parser(tokens, filename, source.splitlines())
    return parser.parse()
