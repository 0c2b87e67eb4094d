# minijs language package
# A scanner, recursive-descent parser and tree-walking interpreter for a small
# JavaScript-flavoured scripting language.
from .environment import Environment
from .errors import LexError, MiniJSError, ParseError, ScriptRuntimeError
from .interpreter import Interpreter, run_file, run_program
from .parser import Parser, parse_program
from .scanner import Scanner

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Parser',
    'Scanner',
    'Environment',
    'Interpreter',
    'MiniJSError',
    'LexError',
    'ParseError',
    'ScriptRuntimeError',
]
