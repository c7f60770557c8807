"""JSON serialization/deserialization for Spartie AST.

This module converts between Spartie AST dataclasses and plain Python
dict/list structures suitable for JSON encoding, so that a program
parsed elsewhere can be handed to the interpreter. Tokens are encoded
as ``{"type": "Token", "kind": ..., "text": ..., "line": ...}``.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    PrintStmt,
    ExprStmt,
    VarDecl,
    Block,
    IfStmt,
    WhileStmt,
    Logical,
    Assign,
    Variable,
    Literal,
    Grouping,
    Unary,
    Binary,
    Expr,
    Stmt,
)
from .tokens import Token, TokenType


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {"type": "Token", "kind": token.type.name, "text": token.text, "line": token.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["kind"]], o["text"], int(o.get("line", 0)))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Token):
        return token_to_obj(node)

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": ast_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "left": ast_to_obj(node.left),
            "operator": ast_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Assign):
        return {"type": "Assign", "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": ast_to_obj(node.name)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": ast_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": ast_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def decode_as(obj: Any, expected: type, optional: bool = False) -> Any:
    """Decode ``obj`` and check that it is a node of the ``expected`` family."""
    node = ast_from_obj(obj)
    if node is None and optional:
        return None
    if not isinstance(node, expected):
        raise TypeError(f"expected {expected.__name__}, got {type(node).__name__}")
    return node


def literal_from_obj(value: Any) -> Literal:
    if value is not None and not isinstance(value, (bool, int, float, str)):
        raise ValueError(f"Invalid literal value: {value!r}")
    # Spartie numbers are doubles
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            value = float(value)
        except OverflowError:
            raise ValueError(f"Number literal out of range: {value}")
    return Literal(value=value)


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Token":
        return token_from_obj(obj)
    if t == "Program":
        return Program(statements=tuple(decode_as(s, Stmt) for s in obj["statements"]))
    if t == "PrintStmt":
        return PrintStmt(expression=decode_as(obj["expression"], Expr))
    if t == "ExprStmt":
        return ExprStmt(expression=decode_as(obj["expression"], Expr))
    if t == "VarDecl":
        return VarDecl(
            name=decode_as(obj["name"], Token),
            initializer=decode_as(obj.get("initializer"), Expr, optional=True),
        )
    if t == "Block":
        return Block(statements=tuple(decode_as(s, Stmt) for s in obj["statements"]))
    if t == "IfStmt":
        return IfStmt(
            condition=decode_as(obj["condition"], Expr),
            then_branch=decode_as(obj["then_branch"], Stmt),
            else_branch=decode_as(obj.get("else_branch"), Stmt, optional=True),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=decode_as(obj["condition"], Expr), body=decode_as(obj["body"], Stmt))
    if t == "Logical":
        return Logical(
            left=decode_as(obj["left"], Expr),
            operator=decode_as(obj["operator"], Token),
            right=decode_as(obj["right"], Expr),
        )
    if t == "Assign":
        return Assign(name=decode_as(obj["name"], Token), value=decode_as(obj["value"], Expr))
    if t == "Variable":
        return Variable(name=decode_as(obj["name"], Token))
    if t == "Literal":
        return literal_from_obj(obj.get("value"))
    if t == "Grouping":
        return Grouping(expression=decode_as(obj["expression"], Expr))
    if t == "Unary":
        return Unary(operator=decode_as(obj["operator"], Token), right=decode_as(obj["right"], Expr))
    if t == "Binary":
        return Binary(
            left=decode_as(obj["left"], Expr),
            operator=decode_as(obj["operator"], Token),
            right=decode_as(obj["right"], Expr),
        )

    raise ValueError(f"Unknown AST node type: {t}")
