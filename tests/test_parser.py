import pytest

from minijs.ast import (
    Assign, BinaryOp, Block, Call, ExprStmt, FuncDecl, Grouping, IfStmt,
    LetStmt, Literal, PrintStmt, ReturnStmt, UnaryOp, Variable, WhileStmt,
)
from minijs.errors import LexError, ParseError
from minijs.parser import Parser, parse_program
from minijs.tokens import TokenType


def num(text):
    return Literal.number(text)


def parse_expr(source):
    return Parser(source).parse_expression()


def param_names(count):
    # identifiers cannot hold digits
    return [chr(97 + i // 26) + chr(97 + i % 26) for i in range(count)]


class TestExpressions:
    def test_literals(self):
        assert parse_expr('1') == num('1')
        assert parse_expr('"s"') == Literal.string('s')
        assert parse_expr('true') == Literal.boolean(True)
        assert parse_expr('false') == Literal.boolean(False)
        assert parse_expr('null') == Literal.null()
        assert parse_expr('x') == Variable('x')

    def test_precedence(self):
        assert parse_expr('1 + 2 * 3') == BinaryOp('+', num('1'), BinaryOp('*', num('2'), num('3')))

    def test_grouping_is_preserved(self):
        assert parse_expr('(1 + 2) * 3') == BinaryOp(
            '*', Grouping(BinaryOp('+', num('1'), num('2'))), num('3'),
        )

    def test_left_associative(self):
        assert parse_expr('1 - 2 - 3') == BinaryOp('-', BinaryOp('-', num('1'), num('2')), num('3'))
        assert parse_expr('8 / 4 / 2') == BinaryOp('/', BinaryOp('/', num('8'), num('4')), num('2'))

    def test_full_precedence_ladder(self):
        expr = parse_expr('1 + 2 * 3 == 7 and true or false')
        assert expr == BinaryOp(
            'or',
            BinaryOp(
                'and',
                BinaryOp('==', BinaryOp('+', num('1'), BinaryOp('*', num('2'), num('3'))), num('7')),
                Literal.boolean(True),
            ),
            Literal.boolean(False),
        )

    def test_comparison_binds_tighter_than_equality(self):
        assert parse_expr('a < b == c >= d') == BinaryOp(
            '==', BinaryOp('<', Variable('a'), Variable('b')), BinaryOp('>=', Variable('c'), Variable('d')),
        )

    def test_symbolic_and_word_logic_operators_agree(self):
        assert parse_expr('a && b || c') == parse_expr('a and b or c')

    def test_unary_is_right_associative(self):
        assert parse_expr('--1') == UnaryOp('-', UnaryOp('-', num('1')))
        assert parse_expr('!-x') == UnaryOp('!', UnaryOp('-', Variable('x')))

    def test_unary_binds_tighter_than_factor(self):
        assert parse_expr('-a * b') == BinaryOp('*', UnaryOp('-', Variable('a')), Variable('b'))

    def test_assignment_is_right_associative(self):
        assert parse_expr('a = b = 1') == Assign('a', Assign('b', num('1')))

    @pytest.mark.parametrize('source', ['1 = 2', 'f() = 1', '(a) = 1', 'a + b = 3', '-a = 1'])
    def test_invalid_assignment_target(self, source):
        with pytest.raises(ParseError) as exc:
            parse_expr(source)
        assert exc.value.name == 'InvalidAssignmentTarget'

    def test_calls(self):
        assert parse_expr('f()') == Call(Variable('f'), [])
        assert parse_expr('f(1, x)') == Call(Variable('f'), [num('1'), Variable('x')])

    def test_chained_calls(self):
        assert parse_expr('f()(1)') == Call(Call(Variable('f'), []), [num('1')])

    def test_function_literal(self):
        expr = parse_expr('function(a, b) { return a; }')
        assert expr == Literal.function(['a', 'b'], Block([ReturnStmt(Variable('a'))]))

    def test_immediately_invoked_function_literal(self):
        expr = parse_expr('(function() { })()')
        assert expr == Call(Grouping(Literal.function([], Block([]))), [])

    def test_function_literal_as_assigned_value(self):
        assert parse_expr('f = function() { }') == Assign('f', Literal.function([], Block([])))

    def test_255_arguments_are_allowed(self):
        expr = parse_expr('f(' + ', '.join(['1'] * 255) + ')')
        assert len(expr.args) == 255

    def test_too_many_arguments(self):
        with pytest.raises(ParseError) as exc:
            parse_expr('f(' + ', '.join(['1'] * 256) + ')')
        assert exc.value.name == 'TooManyArguments'

    def test_unclosed_group(self):
        with pytest.raises(ParseError) as exc:
            parse_expr('(1 + 2')
        assert exc.value.name == 'UnexpectedToken'
        assert exc.value.expected is TokenType.RPAREN
        assert exc.value.found.type is TokenType.EOF

    def test_missing_operand(self):
        with pytest.raises(ParseError) as exc:
            parse_expr('1 +')
        assert exc.value.name == 'UnexpectedToken'


class TestStatements:
    def test_let(self):
        assert parse_program('let a = 1;') == [LetStmt('a', num('1'))]
        assert parse_program('let a;') == [LetStmt('a', None)]

    def test_semicolons_are_optional(self):
        assert parse_program('let a = 1 let b = 2 print a + b') == [
            LetStmt('a', num('1')),
            LetStmt('b', num('2')),
            PrintStmt(BinaryOp('+', Variable('a'), Variable('b'))),
        ]

    def test_expression_statement(self):
        assert parse_program('1;') == [ExprStmt(num('1'))]

    def test_blocks(self):
        assert parse_program('{ }') == [Block([])]
        assert parse_program('{ 1; { let a; } }') == [Block([ExprStmt(num('1')), Block([LetStmt('a')])])]

    def test_unclosed_block(self):
        with pytest.raises(ParseError) as exc:
            parse_program('{ let a = 1;')
        assert exc.value.expected is TokenType.RBRACE

    def test_if_else(self):
        assert parse_program('if (a) print 1; else print 2;') == [
            IfStmt(Variable('a'), PrintStmt(num('1')), PrintStmt(num('2'))),
        ]

    def test_else_if_chain(self):
        stmts = parse_program('if (a) { } else if (b) { } else { }')
        assert stmts == [IfStmt(Variable('a'), Block([]), IfStmt(Variable('b'), Block([]), Block([])))]

    def test_let_cannot_be_an_if_branch(self):
        with pytest.raises(ParseError) as exc:
            parse_program('if (true) let x = 1;')
        assert exc.value.name == 'InvalidBranch'
        with pytest.raises(ParseError):
            parse_program('if (true) { } else let x = 1;')

    def test_let_inside_block_branch_is_fine(self):
        assert parse_program('if (true) { let x = 1; }') == [
            IfStmt(Literal.boolean(True), Block([LetStmt('x', num('1'))])),
        ]

    def test_if_statement_constructor_rejects_let(self):
        with pytest.raises(ParseError):
            IfStmt(Literal.boolean(True), LetStmt('x'), None)
        with pytest.raises(ParseError):
            IfStmt(Literal.boolean(True), Block([]), LetStmt('x'))

    def test_while(self):
        assert parse_program('while (x) x = x - 1;') == [
            WhileStmt(Variable('x'), ExprStmt(Assign('x', BinaryOp('-', Variable('x'), num('1'))))),
        ]

    def test_for_desugars_to_block_and_while(self):
        stmts = parse_program('for (let i = 0; i < 3; i = i + 1) print i;')
        assert stmts == [
            Block([
                LetStmt('i', num('0')),
                WhileStmt(
                    BinaryOp('<', Variable('i'), num('3')),
                    Block([
                        PrintStmt(Variable('i')),
                        ExprStmt(Assign('i', BinaryOp('+', Variable('i'), num('1')))),
                    ]),
                ),
            ]),
        ]

    def test_for_with_empty_clauses(self):
        assert parse_program('for (;;) { }') == [WhileStmt(Literal.boolean(True), Block([]))]

    def test_for_with_expression_initializer(self):
        stmts = parse_program('for (i = 0; i < 1;) { }')
        assert stmts == [
            Block([
                ExprStmt(Assign('i', num('0'))),
                WhileStmt(BinaryOp('<', Variable('i'), num('1')), Block([])),
            ]),
        ]

    def test_for_requires_semicolons(self):
        with pytest.raises(ParseError):
            parse_program('for (let i = 0 i < 3; ) { }')

    def test_return(self):
        assert parse_program('return 1; return; return a;') == [
            ReturnStmt(num('1')), ReturnStmt(None), ReturnStmt(Variable('a')),
        ]
        assert parse_program('function f() { return }') == [FuncDecl('f', [], Block([ReturnStmt(None)]))]

    def test_function_declaration(self):
        assert parse_program('function a(x, y) { let b = 1; }') == [
            FuncDecl('a', ['x', 'y'], Block([LetStmt('b', num('1'))])),
        ]

    def test_function_declaration_needs_a_name(self):
        with pytest.raises(ParseError):
            parse_program('function () { }')

    def test_255_parameters_are_allowed(self):
        [decl] = parse_program('function f(' + ', '.join(param_names(255)) + ') { }')
        assert len(decl.params) == 255

    def test_too_many_parameters(self):
        with pytest.raises(ParseError) as exc:
            parse_program('function f(' + ', '.join(param_names(256)) + ') { }')
        assert exc.value.name == 'TooManyParameters'

    def test_closure_program(self):
        stmts = parse_program("""
            function makeCounter() {
                let i = 0;
                function count() {
                    i = i + 1;
                    print i;
                }
                return count;
            }
        """)
        assert stmts == [
            FuncDecl('makeCounter', [], Block([
                LetStmt('i', num('0')),
                FuncDecl('count', [], Block([
                    ExprStmt(Assign('i', BinaryOp('+', Variable('i'), num('1')))),
                    PrintStmt(Variable('i')),
                ])),
                ReturnStmt(Variable('count')),
            ])),
        ]

    def test_do_is_reserved(self):
        with pytest.raises(ParseError):
            parse_program('do;')

    def test_lex_errors_propagate(self):
        with pytest.raises(LexError):
            parse_program('let a = 1 @ 2;')

    def test_parsing_is_deterministic(self):
        source = 'function f(n) { if (n < 2) return n; return f(n - 1) + f(n - 2); } print f(10);'
        assert parse_program(source) == parse_program(source)
