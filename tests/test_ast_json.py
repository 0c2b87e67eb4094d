import json

import pytest

from minijs.ast import Block, IfStmt, LetStmt, Literal
from minijs.ast_json import ast_from_obj, ast_to_obj
from minijs.errors import ParseError
from minijs.interpreter import Interpreter
from minijs.parser import parse_program


def test_program_survives_json(example_source):
    for name in ('program_2.js', 'program_4.js', 'program_9.js'):
        statements = parse_program(example_source(name))
        restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(statements))))
        assert restored == statements


def test_literal_objects():
    [stmt] = parse_program('let f = function(a) { return null; };')
    obj = ast_to_obj(stmt)
    assert obj['type'] == 'LetStmt'
    assert obj['initializer']['literal_type'] == 'Function'
    assert obj['initializer']['value'] == {
        'type': 'FunctionLiteral',
        'name': None,
        'params': ['a'],
        'body': {
            'type': 'Block',
            'statements': [{
                'type': 'ReturnStmt',
                'value': {'type': 'Literal', 'value': None, 'literal_type': 'Null'},
            }],
        },
    }


def test_number_text_is_kept():
    assert ast_to_obj(Literal.number('2.50')) == {'type': 'Literal', 'value': '2.50', 'literal_type': 'Number'}


def test_restored_program_runs(example_source, capsys):
    obj = json.loads(json.dumps(ast_to_obj(parse_program(example_source('program_7.js')))))
    Interpreter().run(ast_from_obj(obj))
    assert capsys.readouterr().out.split() == ['1.0', '2.0', '1.0']


def test_let_branch_is_rejected_on_load():
    obj = ast_to_obj(IfStmt(Literal.boolean(True), Block([])))
    obj['consequence'] = ast_to_obj(LetStmt('x'))
    with pytest.raises(ParseError):
        ast_from_obj(obj)


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'ClassDecl'})


def test_unsupported_values():
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(TypeError):
        ast_from_obj(42)
