from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ErrorInfo:
    """Name and message describing a failure condition."""
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


class MiniJSError(Exception):
    """Base exception for every scan, parse and runtime failure."""
    stage = 'Error'

    def __init__(self, err: ErrorInfo):
        super().__init__(f"{self.stage}: {err.name}: {err.message}")
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name


class LexError(MiniJSError):
    """Raised by the scanner when the source contains an unusable character."""
    stage = 'LexError'

    def __init__(self, err: ErrorInfo, line: int = 0, column: int = 0):
        super().__init__(err)
        self.line = line
        self.column = column


class ParseError(MiniJSError):
    """Raised by the parser; aborts the whole parse."""
    stage = 'ParseError'

    def __init__(self, err: ErrorInfo, expected: Any = None, found: Any = None):
        super().__init__(err)
        self.expected = expected
        self.found = found


class ScriptRuntimeError(MiniJSError):
    """Raised while evaluating a program."""
    stage = 'RuntimeError'


class ReturnSignal:
    """Control signal returned from statement execution when a return statement runs.

    A statement that completes normally yields ``None``; one that hits a
    ``return`` yields a ``ReturnSignal`` carrying the value, and every
    enclosing statement hands it straight back up to the function call.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"


def undefined_variable(name: str) -> ScriptRuntimeError:
    return ScriptRuntimeError(ErrorInfo('UndefinedVariable', f'undefined variable {name}'))


def type_mismatch(message: str) -> ScriptRuntimeError:
    return ScriptRuntimeError(ErrorInfo('TypeMismatch', message))


def unexpected_token(message: str, expected: Any, found: Optional[Any]) -> ParseError:
    return ParseError(ErrorInfo('UnexpectedToken', f"{message}, got {found}"), expected, found)
