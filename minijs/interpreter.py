"""Tree-walking interpreter for minijs.

The interpreter executes the statement list produced by the parser against
a chain of `Environment` scopes. Expressions are evaluated recursively on
the host call stack; statements are executed the same way.

Every statement executor returns either ``None`` (the statement finished
normally) or a `ReturnSignal`. Blocks, conditionals and loops check the
result of each nested statement and hand a `ReturnSignal` straight back
to their caller, so a ``return`` anywhere inside a function body skips the
rest of that body and surfaces at the call site.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Iterable, List, Optional

from .ast import (
    COMPARISON_OPS, Assign, BinaryOp, Block, Call, ExprStmt, FuncDecl,
    FunctionLiteral, Grouping, IfStmt, LetStmt, Literal, Node, PrintStmt,
    ReturnStmt, UnaryOp, Variable, WhileStmt,
)
from .environment import Environment
from .errors import (
    ErrorInfo, ReturnSignal, ScriptRuntimeError, type_mismatch,
)
from .functions import FunctionValue, NativeFunction
from .parser import parse_program
from .std.host import native_functions
from .types import NULL, NullVal, is_function, is_number, to_string, type_name

# each minijs call nests several host frames (evaluate, call_function,
# execute_block, execute)
RECURSION_LIMIT = 10000


###############################################################################
# Interpreter implementation
###############################################################################


class Interpreter:
    """Core interpreter that executes minijs statements."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 natives: Optional[Iterable[NativeFunction]] = None):
        if natives is None:
            natives = native_functions()
        self.global_env = Environment(natives=natives)
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp is None:
                self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp is not None:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, statements: List[Node], env: Optional[Environment] = None) -> Any:
        """Execute top-level statements in order.

        Returns the value of the last top-level expression statement, or the
        value of a top-level ``return`` (which ends the run early), or null.
        """
        if env is None:
            env = self.global_env
        result: Any = NULL
        for stmt in statements:
            if self.debug_level >= 1:
                self.debug(f"run {type(stmt).__name__}")
            if isinstance(stmt, ExprStmt):
                result = self.evaluate(stmt.expr, env)
                continue
            signal = self.execute(stmt, env)
            if isinstance(signal, ReturnSignal):
                return signal.value
        return result

    def execute_block(self, statements: List[Node], env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            signal = self.execute(stmt, env)
            if isinstance(signal, ReturnSignal):
                return signal
        return None

    def execute(self, node: Node, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return None
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr, env)
            print(to_string(value))
            return None
        if isinstance(node, LetStmt):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else NULL
            env.define(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name}: {type_name(value)} = {to_string(value)}")
            return None
        if isinstance(node, FuncDecl):
            # defined in the scope it closes over, so the body can call itself
            env.define(node.name, FunctionValue(node.name, node.params, node.body, env))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}/{len(node.params)}")
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, env.child())
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = self.is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.execute(node.consequence, env)
            if node.alternative is not None:
                return self.execute(node.alternative, env)
            return None
        if isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition, env)
                truthy = self.is_truthy(cond)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)} -> {truthy}")
                if not truthy:
                    return None
                signal = self.execute(node.body, env)
                if isinstance(signal, ReturnSignal):
                    return signal
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, env) if node.value is not None else NULL
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return self.evaluate_literal(node, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Grouping):
            return self.evaluate(node.inner, env)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            return value
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op == '!':
                return not self.is_truthy(operand)
            if node.op == '-':
                if is_number(operand):
                    return -operand
                raise type_mismatch(f'unary - expects Number, got {type_name(operand)}')
            raise type_mismatch(f'unsupported unary operator {node.op}')
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Call):
            func = self.evaluate(node.callee, env)
            if not is_function(func):
                raise type_mismatch(f'{type_name(func)} {to_string(func)} is not callable')
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(func, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def evaluate_literal(self, node: Literal, env: Environment) -> Any:
        kind = node.literal_type
        if kind == 'Number':
            return float(node.value)
        if kind == 'String':
            return node.value
        if kind == 'Bool':
            return bool(node.value)
        if kind == 'Null':
            return NULL
        if kind == 'Function':
            fn: FunctionLiteral = node.value
            return FunctionValue(fn.name, fn.params, fn.body, env)
        raise NotImplementedError(f"evaluate: unknown literal type {kind}")

    def call_function(self, func: Any, args: List[Any]) -> Any:
        if len(args) != func.arity:
            raise ScriptRuntimeError(ErrorInfo(
                'ArityMismatch',
                f"{to_string(func)} expects {func.arity} arguments but got {len(args)}",
            ))
        if self.debug_level >= 2:
            self.debug(f"call {to_string(func)} with {len(args)} arguments")
        if isinstance(func, NativeFunction):
            return func.fn(self, args)
        # parameters live in a fresh scope whose parent is the captured closure
        call_env = func.closure.child()
        for param, arg in zip(func.params, args):
            call_env.define(param, arg)
        signal = self.execute_block(func.body.statements, call_env)
        ret_val = signal.value if isinstance(signal, ReturnSignal) else NULL
        if self.debug_level >= 4:
            self.debug(f"return from {to_string(func)}: {to_string(ret_val)}")
        return ret_val

    def is_truthy(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if is_number(value):
            return value != 0.0
        if isinstance(value, NullVal):
            return False
        # strings (even empty ones) and functions
        return True

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op == '+':
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise type_mismatch(f'unsupported + for {type_name(a)} and {type_name(b)}')
        if op in ('-', '*', '/'):
            if not (is_number(a) and is_number(b)):
                raise type_mismatch(f'unsupported {op} for {type_name(a)} and {type_name(b)}')
            if op == '-':
                return a - b
            if op == '*':
                return a * b
            return divide(a, b)
        if op in COMPARISON_OPS:
            if not ((is_number(a) and is_number(b))
                    or (isinstance(a, str) and isinstance(b, str))):
                raise type_mismatch(f'comparison not supported for {type_name(a)} and {type_name(b)}')
            if op == '<':
                return a < b
            if op == '<=':
                return a <= b
            if op == '>':
                return a > b
            return a >= b
        if op == '==':
            return self.equal_values(a, b)
        if op == '!=':
            return not self.equal_values(a, b)
        if op == 'and':
            return self.is_truthy(a) and self.is_truthy(b)
        if op == 'or':
            return self.is_truthy(a) or self.is_truthy(b)
        raise type_mismatch(f'unknown operator {op}')

    def equal_values(self, a: Any, b: Any) -> bool:
        # values of different kinds are never equal; no coercion
        kind = type_name(a)
        if kind != type_name(b):
            return False
        if kind == 'Function':
            return a is b
        if kind == 'Null':
            return True
        return a == b


def divide(a: float, b: float) -> float:
    """IEEE-754 division: a zero divisor gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def run_program(source: str, debug_level: int = 0) -> Any:
    """Convenience function to parse and run a minijs program from a source string."""
    statements = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(statements)
    finally:
        interpreter.close()


def run_file(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and execute a minijs file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    statements = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(statements)
    finally:
        interpreter.close()
    return interpreter
