"""Tinplate error types and exit codes."""

from enum import IntEnum
from typing import NamedTuple


class ExitCode(IntEnum):
    """Process exit codes used by the command line renderer."""

    SUCCESS = 0
    RENDER_ERROR = 1
    COMPILE_ERROR = 2
    INPUT_ERROR = 3  # Unreadable template, partial or data file


class Position(NamedTuple):
    """Line (1-based) and column (0-based) of a character in template source."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class TinplateError(Exception):
    """Base error for all Tinplate errors."""

    exit_code: ExitCode = ExitCode.RENDER_ERROR


class CompileError(TinplateError):
    """Error turning template source into a compiled template.

    Carries the position of the failure and the name of the source being
    compiled (``<template>`` or the name of a partial).
    """

    exit_code = ExitCode.COMPILE_ERROR

    def __init__(
        self,
        message: str,
        position: Position | None = None,
        source_name: str | None = None,
    ):
        super().__init__(message)
        self.position = position
        self.source_name = source_name

    def __str__(self) -> str:
        message = self.args[0]
        if self.position is not None:
            message = f"{message} ({self.position})"
        if self.source_name and self.source_name != "<template>":
            message = f"{message} in partial '{self.source_name}'"
        return message


class UnexpectedEndOfInput(CompileError):
    """Source ran out in the middle of a construct."""


class UnexpectedCharacter(CompileError):
    """An expected literal character sequence was not found."""

    def __init__(self, expected: str, found: str, position=None, source_name=None):
        shown = repr(found) if found else "end of input"
        super().__init__(f"Expected {expected} but found {shown}", position, source_name)
        self.expected = expected
        self.found = found


class UnknownControlKeyword(CompileError):
    """Control tag keyword is not one of the supported keywords."""

    def __init__(self, keyword: str, allowed: tuple[str, ...], position=None, source_name=None):
        super().__init__(
            f"Unknown control keyword {keyword!r}, expected one of: {', '.join(allowed)}",
            position,
            source_name,
        )
        self.keyword = keyword
        self.allowed = allowed


class UnknownOperator(CompileError):
    """Malformed two-character operator inside an expression."""


class UnterminatedBlock(CompileError):
    """A ``for`` or ``if`` block never reached its ``end`` tag."""

    def __init__(self, construct: str, position=None, source_name=None):
        super().__init__(
            f"Unexpected end of input while reading `{construct}` block started here",
            position,
            source_name,
        )
        self.construct = construct


class UnbalancedTag(CompileError):
    """An ``else`` or ``end`` tag appeared with no open block."""


class MalformedExpression(CompileError):
    """Boolean expression of an ``if`` tag cannot be parsed."""


class UnknownPartial(CompileError):
    """Partial reference names a partial that was never registered."""

    def __init__(self, name: str, position=None, source_name=None):
        super().__init__(f"No partial named {name!r} is registered", position, source_name)
        self.name = name


class RecursivePartial(CompileError):
    """A partial includes itself, directly or through other partials."""

    def __init__(self, chain: tuple[str, ...], position=None, source_name=None):
        super().__init__(
            f"Partial {chain[-1]!r} includes itself: {' -> '.join(chain)}",
            position,
            source_name,
        )
        self.chain = chain


class RenderError(TinplateError):
    """Error while rendering a compiled template against data."""

    exit_code = ExitCode.RENDER_ERROR


class UnresolvableIterator(RenderError):
    """Source path of a ``for`` loop does not resolve to an iterable."""

    def __init__(self, path: str, position: Position | None = None):
        message = f"Cannot resolve name {path!r} to an iterable for loop"
        if position is not None:
            message = f"{message} ({position})"
        super().__init__(message)
        self.path = path
        self.position = position
