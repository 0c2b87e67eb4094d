"""Callable values: functions written in minijs and functions provided by the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional

if TYPE_CHECKING:
    from .ast import Block
    from .environment import Environment


class FunctionValue:
    """A user-defined function paired with the scope it was created in.

    The closure is held by reference, never copied, so every call of the
    function sees (and may update) the live bindings of that scope.
    Function values are only ever equal to themselves.
    """
    def __init__(self, name: Optional[str], params: List[str], body: 'Block', closure: 'Environment'):
        self.name = name
        self.params = params
        self.body = body
        self.closure = closure

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        if self.name is None:
            return '<anonymous function>'
        return f"<function {self.name}>"


@dataclass(eq=False)
class NativeFunction:
    name: str
    arity: int
    fn: Callable[[Any, list], Any]  # (interpreter, args) -> value

    def __repr__(self) -> str:
        return f"<native function {self.name}>"
