"""Character cursor over template source."""

from collections.abc import Callable

from .errors import Position, UnexpectedCharacter, UnexpectedEndOfInput

# Returned by peek() past the last character
END = ""


class Scanner:
    """Walks template source one code point at a time.

    Tracks line and column of the next character so every error raised while
    scanning, lexing or parsing can point at the offending spot.
    """

    def __init__(self, source: str, name: str = "<template>"):
        self.source = source
        self.name = name
        self.offset = 0
        self.line = 1
        self.column = 0

    @property
    def position(self) -> Position:
        return Position(self.line, self.column)

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """Return the character ``offset`` places ahead without consuming it."""
        index = self.offset + offset
        if index < len(self.source):
            return self.source[index]
        return END

    def advance(self) -> str:
        if self.at_end:
            raise UnexpectedEndOfInput(
                "Unexpected end of input", self.position, self.name
            )
        char = self.source[self.offset]
        self.offset += 1
        if char == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return char

    def startswith(self, literal: str) -> bool:
        return self.source.startswith(literal, self.offset)

    def read_while(self, pred: Callable[[str], bool]) -> str:
        """Consume characters while ``pred`` holds, stopping at end of input."""
        chars = []
        while not self.at_end and pred(self.peek()):
            chars.append(self.advance())
        return "".join(chars)

    def skip_spaces(self) -> None:
        self.read_while(str.isspace)

    def expect(self, literal: str) -> None:
        """Consume ``literal`` exactly or fail at the first mismatch."""
        for char in literal:
            if self.at_end:
                raise UnexpectedEndOfInput(
                    f"Unexpected end of input, expected {literal!r}",
                    self.position,
                    self.name,
                )
            if self.peek() != char:
                raise UnexpectedCharacter(
                    repr(literal), self.peek(), self.position, self.name
                )
            self.advance()
