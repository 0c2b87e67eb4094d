from typing import Any, Dict, Iterable, Optional

from minijs.errors import undefined_variable
from minijs.functions import NativeFunction


class Environment:
    """A scope mapping names to values, linked to its enclosing scope.

    Environments are shared by reference: a function value keeps the scope it
    was defined in alive for as long as the function itself is reachable, and
    every call environment created for it points back at that same scope.
    """
    def __init__(self, parent: Optional['Environment'] = None,
                 natives: Iterable[NativeFunction] = ()):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        for native in natives:
            self.values[native.name] = native

    def get(self, name: str) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise undefined_variable(name)

    def define(self, name: str, value: Any):
        # always local; shadows any outer binding of the same name
        self.values[name] = value

    def assign(self, name: str, value: Any):
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return
            env = env.parent
        raise undefined_variable(name)

    def has(self, name: str) -> bool:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return True
            env = env.parent
        return False

    def child(self) -> 'Environment':
        return Environment(parent=self)
