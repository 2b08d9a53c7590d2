"""Tokens produced by the lexer."""

from dataclasses import dataclass

from .errors import Position


@dataclass(frozen=True)
class Token:
    """Base class for template tokens."""

    position: Position


@dataclass(frozen=True)
class TextToken(Token):
    value: str


@dataclass(frozen=True)
class VariableToken(Token):
    name: str  # Dotted path


@dataclass(frozen=True)
class PartialToken(Token):
    name: str


@dataclass(frozen=True)
class ForToken(Token):
    iterable: str
    binding: str


@dataclass(frozen=True)
class IfToken(Token):
    expr: tuple["ExprToken", ...]


@dataclass(frozen=True)
class ElseToken(Token):
    pass


@dataclass(frozen=True)
class EndToken(Token):
    pass


# Expression tokens, only found inside IfToken.expr


@dataclass(frozen=True)
class ExprToken:
    value: str
    position: Position


@dataclass(frozen=True)
class Identifier(ExprToken):
    pass


@dataclass(frozen=True)
class StringLiteral(ExprToken):
    pass


@dataclass(frozen=True)
class Number(ExprToken):
    pass


@dataclass(frozen=True)
class Operator(ExprToken):
    pass
