"""Tokenizer for template markup and ``if`` expressions.

Markup forms:
    - {{ name }}          - interpolation, dotted paths allowed
    - {% keyword ... %}   - control tags: for, if, else, end
    - {> name}            - partial reference
Everything else is literal text.
"""

from .errors import UnexpectedCharacter, UnexpectedEndOfInput, UnknownControlKeyword, UnknownOperator
from .scanner import Scanner
from .tokens import (
    ElseToken,
    EndToken,
    ExprToken,
    ForToken,
    Identifier,
    IfToken,
    Number,
    Operator,
    PartialToken,
    StringLiteral,
    TextToken,
    Token,
    VariableToken,
)

VARIABLE_OPEN = "{{"
CONTROL_OPEN = "{%"
PARTIAL_OPEN = "{>"
MARKUP_OPENERS = (VARIABLE_OPEN, CONTROL_OPEN, PARTIAL_OPEN)

CONTROL_KEYWORDS = ("for", "if", "else", "end")

# First character of an operator -> required second character
OPERATOR_PARTNERS = {"=": "=", "!": "=", "&": "&", "|": "|"}


def _is_name_end(char: str) -> bool:
    return char.isspace() or char == "}"


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char in "_."


# Loop bindings are single frame keys, so no dots
def _is_binding_char(char: str) -> bool:
    return char.isalnum() or char == "_"


class Lexer:
    """Lazy token stream over a Scanner with one token of lookahead."""

    def __init__(self, scanner: Scanner):
        self.scanner = scanner
        self._cached: Token | None = None

    @classmethod
    def for_source(cls, source: str, name: str = "<template>") -> "Lexer":
        return cls(Scanner(source, name))

    @property
    def at_end(self) -> bool:
        return self.peek() is None

    def peek(self) -> Token | None:
        if self._cached is None:
            self._cached = self._read_next()
        return self._cached

    def next(self) -> Token | None:
        token = self.peek()
        self._cached = None
        return token

    def _read_next(self) -> Token | None:
        scanner = self.scanner
        if scanner.at_end:
            return None
        if scanner.startswith(VARIABLE_OPEN):
            return self._read_variable()
        if scanner.startswith(CONTROL_OPEN):
            return self._read_control()
        if scanner.startswith(PARTIAL_OPEN):
            return self._read_partial()
        return self._read_text()

    def _read_text(self) -> TextToken:
        scanner = self.scanner
        position = scanner.position
        chars = []
        while not scanner.at_end and not any(map(scanner.startswith, MARKUP_OPENERS)):
            chars.append(scanner.advance())
        return TextToken(position=position, value="".join(chars))

    def _read_name(self, what: str) -> str:
        scanner = self.scanner
        name = scanner.read_while(lambda c: not _is_name_end(c))
        if not name:
            raise UnexpectedCharacter(what, scanner.peek(), scanner.position, scanner.name)
        return name

    def _read_variable(self) -> VariableToken:
        scanner = self.scanner
        position = scanner.position
        scanner.expect(VARIABLE_OPEN)
        scanner.skip_spaces()
        name = self._read_name("a variable name")
        scanner.skip_spaces()
        scanner.expect("}}")
        return VariableToken(position=position, name=name)

    def _read_partial(self) -> PartialToken:
        scanner = self.scanner
        position = scanner.position
        scanner.expect(PARTIAL_OPEN)
        scanner.skip_spaces()
        name = self._read_name("a partial name")
        scanner.skip_spaces()
        scanner.expect("}")
        return PartialToken(position=position, name=name)

    def _read_control(self) -> Token:
        scanner = self.scanner
        position = scanner.position
        scanner.expect(CONTROL_OPEN)
        scanner.skip_spaces()
        if scanner.at_end:
            raise UnexpectedEndOfInput(
                "Unexpected end of input, expected a control keyword",
                scanner.position,
                scanner.name,
            )
        keyword_position = scanner.position
        keyword = scanner.read_while(_is_identifier_char)

        match keyword:
            case "for":
                return self._read_for(position)
            case "if":
                return IfToken(position=position, expr=tuple(self._read_expression()))
            case "else":
                self._close_control()
                return ElseToken(position=position)
            case "end":
                self._close_control()
                return EndToken(position=position)
        raise UnknownControlKeyword(keyword, CONTROL_KEYWORDS, keyword_position, scanner.name)

    def _close_control(self) -> None:
        self.scanner.skip_spaces()
        self.scanner.expect("%}")

    def _read_for(self, position) -> ForToken:
        scanner = self.scanner
        scanner.skip_spaces()
        iterable = scanner.read_while(lambda c: not c.isspace() and c != "%")
        if not iterable:
            raise UnexpectedCharacter(
                "an iterable name", scanner.peek(), scanner.position, scanner.name
            )
        scanner.skip_spaces()
        scanner.expect("as")
        if not scanner.peek().isspace():
            raise UnexpectedCharacter(
                "whitespace after 'as'", scanner.peek(), scanner.position, scanner.name
            )
        scanner.skip_spaces()
        binding = scanner.read_while(_is_binding_char)
        next_char = scanner.peek()
        if not binding or (next_char and not next_char.isspace() and next_char != "%"):
            raise UnexpectedCharacter(
                "a binding name", scanner.peek(), scanner.position, scanner.name
            )
        self._close_control()
        return ForToken(position=position, iterable=iterable, binding=binding)

    def _read_expression(self) -> list[ExprToken]:
        """Read expression tokens up to and including the closing ``%}``."""
        scanner = self.scanner
        tokens = []
        while True:
            scanner.skip_spaces()
            if scanner.at_end:
                raise UnexpectedEndOfInput(
                    "Unexpected end of input in `if` tag, expected '%}'",
                    scanner.position,
                    scanner.name,
                )
            if scanner.startswith("%}"):
                scanner.expect("%}")
                return tokens
            tokens.append(self._read_expression_token())

    def _read_expression_token(self) -> ExprToken:
        scanner = self.scanner
        position = scanner.position
        char = scanner.peek()

        if char in "'\"":
            scanner.advance()
            value = scanner.read_while(lambda c: c != char)
            # An unterminated literal has consumed everything; advance() fails at end
            scanner.advance()
            return StringLiteral(value=value, position=position)

        if char.isdigit():
            value = scanner.read_while(str.isdigit)
            if scanner.peek() == "." and scanner.peek(1).isdigit():
                value += scanner.advance()
                value += scanner.read_while(str.isdigit)
            return Number(value=value, position=position)

        if char in OPERATOR_PARTNERS:
            first = scanner.advance()
            partner = OPERATOR_PARTNERS[first]
            if scanner.peek() != partner:
                raise UnknownOperator(
                    f"Unknown operator {first + scanner.peek()!r}, expected {first + partner!r}",
                    position,
                    scanner.name,
                )
            return Operator(value=first + scanner.advance(), position=position)

        if _is_identifier_start(char):
            return Identifier(value=scanner.read_while(_is_identifier_char), position=position)

        raise UnexpectedCharacter("an expression token", char, position, scanner.name)
