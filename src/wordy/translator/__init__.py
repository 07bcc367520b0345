"""
Wordy to C Translator
=====================

This module implements a source-to-source translator from Wordy, a small
English-like imperative language, to C.

- A lexer (tokenizer) for Wordy source code
- A recursive descent parser producing an immutable AST
- A code generator emitting C

Pipeline
--------
    Wordy Source → Lexer → Parser → AST → Code Generator → C Source

The generated C can be built with any C99 compiler.

Usage
-----
>>> from wordy.translator import translate
>>> source = '''
... to main do
...     for each i in 0 to 4 display(i)
... end
... '''
>>> c_output = translate(source)

Language Summary
----------------
- One data type: signed integer (C `long`)
- Statements: return, do/end blocks, if/then/else, set, change,
  variable, forever, while, for each ... to/through ... by, calls
- Operators: + - * / modulo, = != < <= > >=, and or not, & | ~
- Nested block comments: /* ... /* ... */ ... */
"""

from wordy.translator.translator import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    translate,
    translate_file,
)
from wordy.translator.errors import (
    TranslationError,
    LexicalError,
    InvalidCharacterError,
    UnterminatedCommentError,
    IntegerRangeError,
    ReservedIdentifierError,
    WordySyntaxError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
    InvalidRangeKindError,
    InternalConsistencyError,
)
from wordy.translator.lexer import Lexer, Token, TokenType, tokenize
from wordy.translator.parser import Parser, parse_source
from wordy.translator.codegen import CodeGenerator, TempNameAllocator
from wordy.translator.ast import (
    ASTNode,
    ASTVisitor,
    ASTPrinter,
    Operator,
    RangeKind,
    ProgramNode,
    FunctionNode,
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
    IntegerLiteral,
    IdentifierExpression,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
)

__all__ = [
    # Main API
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "translate",
    "translate_file",
    # Errors
    "TranslationError",
    "LexicalError",
    "InvalidCharacterError",
    "UnterminatedCommentError",
    "IntegerRangeError",
    "ReservedIdentifierError",
    "WordySyntaxError",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    "InvalidRangeKindError",
    "InternalConsistencyError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Parser
    "Parser",
    "parse_source",
    # Code Generator
    "CodeGenerator",
    "TempNameAllocator",
    # AST Nodes
    "ASTNode",
    "ASTVisitor",
    "ASTPrinter",
    "Operator",
    "RangeKind",
    "ProgramNode",
    "FunctionNode",
    "ReturnStatement",
    "VariableDeclaration",
    "AssignmentStatement",
    "IncrementStatement",
    "IfStatement",
    "BlockStatement",
    "CallStatement",
    "ForeverStatement",
    "WhileStatement",
    "ForEachStatement",
    "IntegerLiteral",
    "IdentifierExpression",
    "BinaryExpression",
    "UnaryExpression",
    "CallExpression",
]
