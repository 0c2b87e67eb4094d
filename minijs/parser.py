"""Parser for minijs.

A hand written recursive-descent parser that pulls tokens from a `Scanner`
one at a time and never backtracks. Each precedence level parses the next
tighter level and loops while its operators follow, giving left
associativity; assignment and unary operators recurse into themselves and
so associate to the right.

    program     -> declaration* EOF
    declaration -> "function" IDENT function | "let" IDENT ("=" expression)? ";"? | statement
    function    -> "(" (IDENT ("," IDENT)*)? ")" block
    statement   -> block | if | while | for | print | return | exprStmt
    block       -> "{" declaration* "}"
    if          -> "if" "(" expression ")" statement ("else" statement)?
    while       -> "while" "(" expression ")" statement
    for         -> "for" "(" (let | exprStmt | ";") expression? ";" expression? ")" statement
    print       -> "print" expression ";"?
    return      -> "return" expression? ";"?
    exprStmt    -> expression ";"?
    expression  -> assignment
    assignment  -> logic_or ("=" assignment)?
    logic_or    -> logic_and ("or" logic_and)*
    logic_and   -> equality ("and" equality)*
    equality    -> comparison (("==" | "!=") comparison)*
    comparison  -> term ((">" | ">=" | "<" | "<=") term)*
    term        -> factor (("+" | "-") factor)*
    factor      -> unary (("*" | "/") unary)*
    unary       -> ("!" | "-") unary | call
    call        -> primary ("(" arguments? ")")*
    primary     -> NUMBER | STRING | "true" | "false" | "null" | IDENT
                 | "(" expression ")" | "function" function

`for` loops do not survive parsing: they are rewritten into a block holding
the initializer and a `while` loop whose body runs the increment last.

The first structural error raises `ParseError` and the whole parse is
abandoned; no partial program is returned.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Assign, BinaryOp, Block, Call, ExprStmt, Expression, FuncDecl, Grouping,
    IfStmt, LetStmt, Literal, PrintStmt, ReturnStmt, Statement, UnaryOp,
    Variable, WhileStmt,
)
from .errors import ErrorInfo, ParseError, unexpected_token
from .scanner import Expected, Scanner, token_matches
from .tokens import Token, TokenType

MAX_PARAMETERS = 255
MAX_ARGUMENTS = 255

BINARY_OPERATORS = {
    TokenType.OR: 'or',
    TokenType.AND: 'and',
    TokenType.EQUAL: '==',
    TokenType.NOT_EQUAL: '!=',
    TokenType.GREATER: '>',
    TokenType.GREATER_EQUAL: '>=',
    TokenType.LESS: '<',
    TokenType.LESS_EQUAL: '<=',
    TokenType.PLUS: '+',
    TokenType.MINUS: '-',
    TokenType.STAR: '*',
    TokenType.SLASH: '/',
}

UNARY_OPERATORS = {
    TokenType.BANG: '!',
    TokenType.MINUS: '-',
}


class Parser:
    def __init__(self, source: str):
        self.scanner = Scanner(source)

    def parse(self) -> List[Statement]:
        statements: List[Statement] = []
        while not self.scanner.is_at_end():
            statements.append(self.parse_declaration())
            self.scanner.match_and_consume(TokenType.SEMICOLON)
        return statements

    # Token helpers

    def match(self, expected: Expected) -> bool:
        return token_matches(self.scanner.peek(), expected)

    def consume(self, expected: Expected, message: str) -> Token:
        token = self.scanner.peek()
        if not token_matches(token, expected):
            raise unexpected_token(message, expected, token)
        return self.scanner.next()

    def parse_identifier(self, message: str = 'expected an identifier') -> str:
        return self.consume(TokenType.IDENT, message).value

    # Declarations and statements

    def parse_declaration(self) -> Statement:
        if self.scanner.match_and_consume(TokenType.FUNCTION):
            return self.parse_func_decl()
        if self.scanner.match_and_consume(TokenType.LET):
            return self.parse_let_decl()
        return self.parse_statement()

    def parse_func_decl(self) -> FuncDecl:
        name = self.parse_identifier('expected a function name')
        params, body = self.parse_function()
        return FuncDecl(name, params, body)

    def parse_function(self):
        """Parse the shared `(params) { body }` tail of declarations and function literals."""
        self.consume(TokenType.LPAREN, 'expected ( after function')
        params: List[str] = []
        if not self.match(TokenType.RPAREN):
            while True:
                if len(params) >= MAX_PARAMETERS:
                    raise ParseError(ErrorInfo(
                        'TooManyParameters', f'cannot have more than {MAX_PARAMETERS} parameters',
                    ))
                params.append(self.parse_identifier('expected a parameter name'))
                if not self.scanner.match_and_consume(TokenType.COMMA):
                    break
        self.consume(TokenType.RPAREN, 'expected ) after parameters')
        self.consume(TokenType.LBRACE, 'expected { before function body')
        return params, self.parse_block()

    def parse_let_decl(self) -> LetStmt:
        # the caller decides whether a trailing ';' is optional or required
        name = self.parse_identifier('expected a variable name')
        initializer: Optional[Expression] = None
        if self.scanner.match_and_consume(TokenType.ASSIGN):
            initializer = self.parse_expression()
        return LetStmt(name, initializer)

    def parse_statement(self) -> Statement:
        if self.scanner.match_and_consume(TokenType.LBRACE):
            return self.parse_block()
        if self.scanner.match_and_consume(TokenType.IF):
            return self.parse_if_stmt()
        if self.scanner.match_and_consume(TokenType.WHILE):
            return self.parse_while_stmt()
        if self.scanner.match_and_consume(TokenType.FOR):
            return self.parse_for_stmt()
        if self.scanner.match_and_consume(TokenType.PRINT):
            stmt: Statement = PrintStmt(self.parse_expression())
        elif self.scanner.match_and_consume(TokenType.RETURN):
            stmt = self.parse_return_stmt()
        else:
            stmt = ExprStmt(self.parse_expression())
        # simple statements may end in a semicolon; it is never required
        self.scanner.match_and_consume(TokenType.SEMICOLON)
        return stmt

    def parse_block(self) -> Block:
        """Parse declarations up to the closing brace; the opening brace is already consumed."""
        statements: List[Statement] = []
        while not self.match((TokenType.RBRACE, TokenType.EOF)):
            statements.append(self.parse_declaration())
            self.scanner.match_and_consume(TokenType.SEMICOLON)
        self.consume(TokenType.RBRACE, 'expected } after block')
        return Block(statements)

    def parse_if_stmt(self) -> IfStmt:
        self.consume(TokenType.LPAREN, 'expected ( after if')
        condition = self.parse_expression()
        self.consume(TokenType.RPAREN, 'expected ) after if condition')
        consequence = self.parse_branch()
        alternative = None
        if self.scanner.match_and_consume(TokenType.ELSE):
            alternative = self.parse_branch()
        return IfStmt(condition, consequence, alternative)

    def parse_branch(self) -> Statement:
        # a let branch parses, then IfStmt raises InvalidBranch for it
        if self.scanner.match_and_consume(TokenType.LET):
            return self.parse_let_decl()
        return self.parse_statement()

    def parse_while_stmt(self) -> WhileStmt:
        self.consume(TokenType.LPAREN, 'expected ( after while')
        condition = self.parse_expression()
        self.consume(TokenType.RPAREN, 'expected ) after while condition')
        return WhileStmt(condition, self.parse_statement())

    def parse_for_stmt(self) -> Statement:
        self.consume(TokenType.LPAREN, 'expected ( after for')
        if self.scanner.match_and_consume(TokenType.SEMICOLON):
            initializer = None
        elif self.scanner.match_and_consume(TokenType.LET):
            initializer = self.parse_let_decl()
            self.consume(TokenType.SEMICOLON, 'expected ; after loop initializer')
        else:
            initializer = ExprStmt(self.parse_expression())
            self.consume(TokenType.SEMICOLON, 'expected ; after loop initializer')

        if self.match(TokenType.SEMICOLON):
            condition = Literal.boolean(True)
        else:
            condition = self.parse_expression()
        self.consume(TokenType.SEMICOLON, 'expected ; after loop condition')

        increment = None
        if not self.match(TokenType.RPAREN):
            increment = self.parse_expression()
        self.consume(TokenType.RPAREN, 'expected ) after for clauses')

        body = self.parse_statement()
        if increment is not None:
            body = Block([body, ExprStmt(increment)])
        loop: Statement = WhileStmt(condition, body)
        if initializer is not None:
            loop = Block([initializer, loop])
        return loop

    def parse_return_stmt(self) -> ReturnStmt:
        if self.match((TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF)):
            return ReturnStmt(None)
        return ReturnStmt(self.parse_expression())

    # Expression parsing (precedence climbing)

    def parse_expression(self) -> Expression:
        return self.parse_assign()

    def parse_assign(self) -> Expression:
        target = self.parse_logic_or()
        if self.scanner.match_and_consume(TokenType.ASSIGN):
            value = self.parse_assign()
            if isinstance(target, Variable):
                return Assign(target.name, value)
            raise ParseError(ErrorInfo(
                'InvalidAssignmentTarget', f'cannot assign to {type(target).__name__}',
            ))
        return target

    def parse_binary(self, operand, *types: TokenType) -> Expression:
        node = operand()
        while self.match(types):
            op = BINARY_OPERATORS[self.scanner.next().type]
            node = BinaryOp(op, node, operand())
        return node

    def parse_logic_or(self) -> Expression:
        return self.parse_binary(self.parse_logic_and, TokenType.OR)

    def parse_logic_and(self) -> Expression:
        return self.parse_binary(self.parse_equality, TokenType.AND)

    def parse_equality(self) -> Expression:
        return self.parse_binary(self.parse_comparison, TokenType.EQUAL, TokenType.NOT_EQUAL)

    def parse_comparison(self) -> Expression:
        return self.parse_binary(
            self.parse_term,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def parse_term(self) -> Expression:
        return self.parse_binary(self.parse_factor, TokenType.PLUS, TokenType.MINUS)

    def parse_factor(self) -> Expression:
        return self.parse_binary(self.parse_unary, TokenType.STAR, TokenType.SLASH)

    def parse_unary(self) -> Expression:
        if self.match(tuple(UNARY_OPERATORS)):
            op = UNARY_OPERATORS[self.scanner.next().type]
            return UnaryOp(op, self.parse_unary())
        return self.parse_call()

    def parse_call(self) -> Expression:
        node = self.parse_primary()
        while self.scanner.match_and_consume(TokenType.LPAREN):
            args: List[Expression] = []
            if not self.match(TokenType.RPAREN):
                while True:
                    if len(args) >= MAX_ARGUMENTS:
                        raise ParseError(ErrorInfo(
                            'TooManyArguments', f'cannot have more than {MAX_ARGUMENTS} arguments',
                        ))
                    args.append(self.parse_expression())
                    if not self.scanner.match_and_consume(TokenType.COMMA):
                        break
            self.consume(TokenType.RPAREN, 'expected ) after arguments')
            node = Call(node, args)
        return node

    def parse_primary(self) -> Expression:
        token = self.scanner.next()
        if token.type is TokenType.NUMBER:
            return Literal.number(token.value)
        if token.type is TokenType.STRING:
            return Literal.string(token.value)
        if token.type is TokenType.TRUE:
            return Literal.boolean(True)
        if token.type is TokenType.FALSE:
            return Literal.boolean(False)
        if token.type is TokenType.NULL:
            return Literal.null()
        if token.type is TokenType.IDENT:
            return Variable(token.value)
        if token.type is TokenType.LPAREN:
            inner = self.parse_expression()
            self.consume(TokenType.RPAREN, 'expected ) after expression')
            return Grouping(inner)
        if token.type is TokenType.FUNCTION:
            params, body = self.parse_function()
            return Literal.function(params, body)
        raise unexpected_token('expected an expression', 'expression', token)


def parse_program(source: str) -> List[Statement]:
    """Parse minijs source code into its list of top-level statements."""
    return Parser(source).parse()
