"""Runtime value helpers for minijs.

minijs values map onto Python objects directly:

* Number   -> ``float`` (never ``int``; ``bool`` is kept apart from it)
* String   -> ``str``
* Bool     -> ``bool``
* Null     -> the ``NULL`` singleton
* Function -> ``FunctionValue`` (user defined) or ``NativeFunction`` (host)

This module names each kind and renders values for ``print``.
"""

from __future__ import annotations

from typing import Any

from .functions import FunctionValue, NativeFunction


class NullVal:
    """Marker object for the minijs `null` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'null'


NULL = NullVal()


def is_number(value: Any) -> bool:
    return isinstance(value, float)


def is_function(value: Any) -> bool:
    return isinstance(value, (FunctionValue, NativeFunction))


def type_name(value: Any) -> str:
    """Return the minijs kind of a runtime value."""
    if isinstance(value, bool):
        return 'Bool'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, NullVal):
        return 'Null'
    if is_function(value):
        return 'Function'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Render a value the way `print` shows it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NullVal):
        return 'null'
    return repr(value)
