from minijs.interpreter import Interpreter
from minijs.parser import parse_program


def test_program_1(example_source, capsys):
    statements = parse_program(example_source('program_1.js'))
    interp = Interpreter()
    interp.run(statements)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
