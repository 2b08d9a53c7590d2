"""Tinplate - A small template language compiler."""

from .errors import (
    CompileError,
    ExitCode,
    MalformedExpression,
    Position,
    RecursivePartial,
    RenderError,
    TinplateError,
    UnbalancedTag,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnknownControlKeyword,
    UnknownOperator,
    UnknownPartial,
    UnresolvableIterator,
    UnterminatedBlock,
)
from .template import CompiledTemplate, compile, compile_template

__version__ = "0.1.0"

__all__ = [
    "compile",
    "compile_template",
    "CompiledTemplate",
    "TinplateError",
    "CompileError",
    "RenderError",
    "UnexpectedEndOfInput",
    "UnexpectedCharacter",
    "UnknownControlKeyword",
    "UnknownOperator",
    "UnterminatedBlock",
    "UnbalancedTag",
    "MalformedExpression",
    "UnknownPartial",
    "RecursivePartial",
    "UnresolvableIterator",
    "Position",
    "ExitCode",
]
