"""Tree-walking evaluation of template ASTs."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .environment import NOT_FOUND, Environment, is_truthy
from .errors import UnresolvableIterator
from .nodes import (
    And,
    Block,
    BooleanLiteral,
    Equals,
    ForLoop,
    IfElse,
    Node,
    NotEquals,
    NumberLiteral,
    Or,
    StringLiteral,
    Text,
    VariableRef,
)

logger = logging.getLogger(__name__)


def evaluate(node: Node, env: Environment) -> Any:
    """Evaluate ``node`` against ``env``.

    Block, text and control nodes produce strings; expression nodes produce
    scalars (or NOT_FOUND for unbound variables).
    """
    match node:
        case Block(children=children):
            return "".join(stringify(evaluate(child, env)) for child in children)
        case Text(value=value):
            return value
        case VariableRef(path=path):
            return env.resolve(path)
        case StringLiteral(value=value) | NumberLiteral(value=value) | BooleanLiteral(value=value):
            return value
        case Equals(lhs=lhs, rhs=rhs):
            return strict_equals(evaluate(lhs, env), evaluate(rhs, env))
        case NotEquals(lhs=lhs, rhs=rhs):
            return not strict_equals(evaluate(lhs, env), evaluate(rhs, env))
        case And(lhs=lhs, rhs=rhs):
            return is_truthy(evaluate(lhs, env)) and is_truthy(evaluate(rhs, env))
        case Or(lhs=lhs, rhs=rhs):
            return is_truthy(evaluate(lhs, env)) or is_truthy(evaluate(rhs, env))
        case ForLoop():
            return _evaluate_loop(node, env)
        case IfElse(condition=condition, then_body=then_body, else_body=else_body):
            body = then_body if is_truthy(evaluate(condition, env)) else else_body
            return evaluate(body, env)
    raise TypeError(f"Not a template node: {node!r}")


def _evaluate_loop(node: ForLoop, env: Environment) -> str:
    values = env.resolve(node.iterable)
    if (
        values is NOT_FOUND
        or isinstance(values, (str, bytes, Mapping))
        or not isinstance(values, Iterable)
    ):
        raise UnresolvableIterator(node.iterable, node.position)

    parts = []
    for value in values:
        parts.append(evaluate(node.body, env.bind(node.binding, value)))
    logger.debug("Loop over %s rendered %d iterations", node.iterable, len(parts))
    return "".join(parts)


def stringify(value: Any) -> str:
    """Text contribution of an evaluated value; missing values render empty."""
    if value is NOT_FOUND or value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """Type-and-value equality.

    Numbers compare by value across int and float, booleans only equal
    booleans, and a number never equals its string form.
    """
    if left is NOT_FOUND or right is NOT_FOUND:
        return left is right
    if _is_number(left) and _is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right
