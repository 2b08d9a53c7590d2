"""Layered variable environment with dotted-path lookup."""

from collections.abc import Mapping
from typing import Any


class _NotFound:
    """Result of resolving a name that is bound in no frame."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND: Any = _NotFound()


def get_nested(data: Mapping[str, Any], path: str) -> Any:
    """Get a nested value from a mapping using dot notation.

    Examples:
        get_nested({"a": {"b": 1}}, "a.b") -> 1
        get_nested({"a": 1}, "a") -> 1
        get_nested({"a": 1}, "b") -> NOT_FOUND
        get_nested({"a": "string"}, "a.b") -> NOT_FOUND
    """
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return NOT_FOUND
        current = current[part]
    return current


def is_truthy(value: Any) -> bool:
    """Boolean coercion used by ``if`` tags, ``&&`` and ``||``.

    Empty strings, zero, False, None, empty collections and NOT_FOUND are falsey.
    """
    return bool(value)


class Environment:
    """Ordered frames of bindings, innermost first.

    Frames are never modified; ``bind`` returns a new environment with one
    extra frame in front of the existing ones.
    """

    def __init__(self, frames: tuple[Mapping[str, Any], ...] = ()):
        self.frames = frames

    @classmethod
    def for_render(cls, data: Mapping[str, Any], globals_: Mapping[str, Any]) -> "Environment":
        return cls((data, globals_))

    def resolve(self, path: str) -> Any:
        """Resolve ``path`` in the innermost frame that binds it, else NOT_FOUND."""
        for frame in self.frames:
            value = get_nested(frame, path)
            if value is not NOT_FOUND:
                return value
        return NOT_FOUND

    def bind(self, name: str, value: Any) -> "Environment":
        return Environment(({name: value}, *self.frames))

    def __repr__(self) -> str:
        return f"Environment(depth={len(self.frames)})"
