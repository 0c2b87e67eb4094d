"""Abstract Syntax Tree (AST) definitions for minijs.

Expressions and statements are two closed families of dataclasses. The
parser builds them, the interpreter walks them, and `ast_json` converts
them to and from plain JSON objects. Every consumer dispatches over the
full set of node classes and raises on anything it does not recognise.

Literal values are kept exactly as the parser saw them: a Number literal
holds its decimal text and is only turned into a float when evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .errors import ErrorInfo, ParseError


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


# Expressions


@dataclass
class Variable(Node):
    name: str


@dataclass
class Literal(Node):
    value: Any  # number text, str, bool, None or FunctionLiteral
    literal_type: str  # 'Number', 'String', 'Bool', 'Null', 'Function'

    @staticmethod
    def number(text: str) -> 'Literal':
        return Literal(text, 'Number')

    @staticmethod
    def string(text: str) -> 'Literal':
        return Literal(text, 'String')

    @staticmethod
    def boolean(value: bool) -> 'Literal':
        return Literal(value, 'Bool')

    @staticmethod
    def null() -> 'Literal':
        return Literal(None, 'Null')

    @staticmethod
    def function(params: List[str], body: 'Block', name: Optional[str] = None) -> 'Literal':
        return Literal(FunctionLiteral(params, body, name), 'Function')


@dataclass
class FunctionLiteral(Node):
    params: List[str]
    body: 'Block'
    name: Optional[str] = None


@dataclass
class Grouping(Node):
    inner: 'Expression'


@dataclass
class Assign(Node):
    name: str
    value: 'Expression'


@dataclass
class UnaryOp(Node):
    op: str  # '-' or '!'
    operand: 'Expression'


@dataclass
class BinaryOp(Node):
    op: str
    left: 'Expression'
    right: 'Expression'


@dataclass
class Call(Node):
    callee: 'Expression'
    args: List['Expression']


Expression = Union[Variable, Literal, Grouping, Assign, UnaryOp, BinaryOp, Call]

COMPARISON_OPS = ('<', '<=', '>', '>=')


# Statements


@dataclass
class LetStmt(Node):
    name: str
    initializer: Optional['Expression'] = None


@dataclass
class Block(Node):
    statements: List['Statement']


@dataclass
class IfStmt(Node):
    condition: 'Expression'
    consequence: 'Statement'
    alternative: Optional['Statement'] = None

    def __post_init__(self):
        for branch in (self.consequence, self.alternative):
            if isinstance(branch, LetStmt):
                raise ParseError(ErrorInfo(
                    'InvalidBranch',
                    f"let {branch.name} cannot be the branch of an if statement; wrap it in a block",
                ))


@dataclass
class WhileStmt(Node):
    condition: 'Expression'
    body: 'Statement'


@dataclass
class ExprStmt(Node):
    expr: 'Expression'


@dataclass
class PrintStmt(Node):
    expr: 'Expression'


@dataclass
class FuncDecl(Node):
    name: str
    params: List[str]
    body: Block


@dataclass
class ReturnStmt(Node):
    value: Optional['Expression'] = None


Statement = Union[LetStmt, IfStmt, WhileStmt, Block, ExprStmt, PrintStmt, FuncDecl, ReturnStmt]
