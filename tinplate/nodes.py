"""AST node types.

The node set is closed: every variant is listed in ``Node`` and handled by
the single ``match`` in ``evaluator.evaluate``. Nodes are frozen and hold
their children in tuples, so a compiled tree can be shared between renders.
"""

from dataclasses import dataclass, field

from .errors import Position


@dataclass(frozen=True)
class Block:
    children: tuple["Node", ...] = ()


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class VariableRef:
    path: str


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class NumberLiteral:
    value: float


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class Equals:
    lhs: "Node"
    rhs: "Node"


@dataclass(frozen=True)
class NotEquals:
    lhs: "Node"
    rhs: "Node"


@dataclass(frozen=True)
class And:
    lhs: "Node"
    rhs: "Node"


@dataclass(frozen=True)
class Or:
    lhs: "Node"
    rhs: "Node"


@dataclass(frozen=True)
class ForLoop:
    """Render ``body`` once per element of ``iterable``, bound as ``binding``."""

    iterable: str
    binding: str
    body: Block
    position: Position | None = field(default=None, compare=False)


@dataclass(frozen=True)
class IfElse:
    condition: "Node"
    then_body: Block
    else_body: Block = Block()


Node = (
    Block
    | Text
    | VariableRef
    | StringLiteral
    | NumberLiteral
    | BooleanLiteral
    | Equals
    | NotEquals
    | And
    | Or
    | ForLoop
    | IfElse
)


def count_nodes(node: Node) -> int:
    """Count ``node`` and every node below it."""
    match node:
        case Block(children=children):
            return 1 + sum(count_nodes(child) for child in children)
        case Equals(lhs=lhs, rhs=rhs) | NotEquals(lhs=lhs, rhs=rhs):
            return 1 + count_nodes(lhs) + count_nodes(rhs)
        case And(lhs=lhs, rhs=rhs) | Or(lhs=lhs, rhs=rhs):
            return 1 + count_nodes(lhs) + count_nodes(rhs)
        case ForLoop(body=body):
            return 1 + count_nodes(body)
        case IfElse(condition=condition, then_body=then_body, else_body=else_body):
            return 1 + count_nodes(condition) + count_nodes(then_body) + count_nodes(else_body)
        case _:
            return 1
