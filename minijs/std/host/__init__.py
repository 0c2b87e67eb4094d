from .basic_host import BasicHost
from minijs.functions import NativeFunction
from typing import List, Any, Optional


def native_functions(host: Optional[BasicHost] = None) -> List[NativeFunction]:
        """Build the table of native functions installed in the global scope."""
        basic_host = host or BasicHost()

        def std_clock(interpreter: Any, args: List[Any]) -> Any:
            return basic_host.now()

        def std_random(interpreter: Any, args: List[Any]) -> Any:
            return basic_host.random()

        return [
            NativeFunction('clock', 0, std_clock),
            NativeFunction('random', 0, std_random),
        ]


__all__ = ['BasicHost', 'native_functions']
