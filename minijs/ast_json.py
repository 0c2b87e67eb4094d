"""JSON serialization/deserialization for the minijs AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Every node type round-trips,
including function literals nested inside expressions.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Assign,
    BinaryOp,
    Block,
    Call,
    ExprStmt,
    FuncDecl,
    FunctionLiteral,
    Grouping,
    IfStmt,
    LetStmt,
    Literal,
    PrintStmt,
    ReturnStmt,
    UnaryOp,
    Variable,
    WhileStmt,
)


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (float, str, bool)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Expressions
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value), "literal_type": node.literal_type}
    if isinstance(node, FunctionLiteral):
        return {
            "type": "FunctionLiteral",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Grouping):
        return {"type": "Grouping", "inner": ast_to_obj(node.inner)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Call):
        return {"type": "Call", "callee": ast_to_obj(node.callee), "args": [ast_to_obj(a) for a in node.args]}

    # Statements
    if isinstance(node, LetStmt):
        return {"type": "LetStmt", "name": node.name, "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (float, str, bool)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Variable":
        return Variable(name=obj["name"])
    if t == "Literal":
        return Literal(value=ast_from_obj(obj.get("value")), literal_type=obj["literal_type"])
    if t == "FunctionLiteral":
        return FunctionLiteral(
            params=list(obj["params"]),
            body=ast_from_obj(obj["body"]),
            name=obj.get("name"),
        )
    if t == "Grouping":
        return Grouping(inner=ast_from_obj(obj["inner"]))
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Call":
        return Call(callee=ast_from_obj(obj["callee"]), args=[ast_from_obj(a) for a in obj["args"]])
    if t == "LetStmt":
        return LetStmt(name=obj["name"], initializer=ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            consequence=ast_from_obj(obj["consequence"]),
            alternative=ast_from_obj(obj.get("alternative")),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "PrintStmt":
        return PrintStmt(expr=ast_from_obj(obj["expr"]))
    if t == "FuncDecl":
        return FuncDecl(name=obj["name"], params=list(obj["params"]), body=ast_from_obj(obj["body"]))
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj.get("value")))

    raise ValueError(f"Unknown AST node type: {t}")
