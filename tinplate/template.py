"""Compile template source into reusable render functions.

Example:
    >>> tpl = compile("Hello, {{name}}!")
    >>> tpl.render({"name": "World"})
    'Hello, World!'
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .environment import Environment
from .evaluator import evaluate
from .nodes import Block, count_nodes
from .parser import Parser

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class CompiledTemplate:
    """A parsed template, ready to render any number of times.

    Holds no per-render state, so one instance may be rendered from several
    threads at once.
    """

    root: Block
    partials: Mapping[str, str] = field(default_factory=lambda: _EMPTY, repr=False)
    globals_: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, repr=False)

    def render(self, data: Mapping[str, Any] | None = None) -> str:
        """Render the template with ``data`` as the innermost frame.

        Raises:
            UnresolvableIterator: If a loop source does not resolve to an iterable
        """
        env = Environment.for_render(data if data is not None else {}, self.globals_)
        return evaluate(self.root, env)

    __call__ = render

    @property
    def node_count(self) -> int:
        return count_nodes(self.root)


def compile(
    source: str,
    partials: Mapping[str, str] | None = None,
    *,
    globals_: Mapping[str, Any] | None = None,
) -> CompiledTemplate:
    """Compile template source.

    Args:
        source: Template text
        partials: Partial name -> partial source, used to expand ``{> name}``
        globals_: Outermost frame, shadowed by render data

    Returns:
        Immutable compiled template

    Raises:
        CompileError: Any scanning, lexing or parsing failure
    """
    partials = MappingProxyType(dict(partials or {}))
    root = Parser.for_source(source, partials).parse()
    template = CompiledTemplate(
        root=root,
        partials=partials,
        globals_=MappingProxyType(dict(globals_ or {})),
    )
    logger.debug(
        "Compiled template (%d chars, %d partials) into %d nodes",
        len(source),
        len(partials),
        template.node_count,
    )
    return template


compile_template = compile
