"""Recursive descent parser from template tokens to an AST.

Block bodies of ``for`` and ``if`` are collected on a stack owned by the
parser: each collection remembers the stack height when it starts and slices
off exactly its own children when its terminator tag arrives. Nested blocks
consume their own ``end`` tags, so the slice never includes deeper nodes.

Boolean expressions of ``if`` tags have no precedence between ``&&`` and
``||``: each operator takes everything to its right as its right operand.
"""

import logging
from collections import deque
from collections.abc import Mapping

from . import nodes, tokens
from .errors import MalformedExpression, RecursivePartial, UnbalancedTag, UnknownPartial, UnterminatedBlock
from .lexer import Lexer
from .nodes import Block, Node

logger = logging.getLogger(__name__)

# Name that is never bound unless the data binds it; `x exists` compares against it
MISSING_NAME = "undefined"


class Parser:
    """Parser for one template source.

    Partials are resolved against ``partials`` while parsing; ``including``
    holds the chain of partial names being expanded above this parser.
    """

    def __init__(
        self,
        lexer: Lexer,
        partials: Mapping[str, str] | None = None,
        including: tuple[str, ...] = (),
    ):
        self.lexer = lexer
        self.partials = partials if partials is not None else {}
        self.including = including
        self._stack: list[Node] = []

    @classmethod
    def for_source(
        cls,
        source: str,
        partials: Mapping[str, str] | None = None,
        name: str = "<template>",
        including: tuple[str, ...] = (),
    ) -> "Parser":
        return cls(Lexer.for_source(source, name), partials, including)

    @property
    def source_name(self) -> str:
        return self.lexer.scanner.name

    def parse(self) -> Block:
        """Parse the whole source into a root block."""
        children = []
        while not self.lexer.at_end:
            token = self.lexer.next()
            if isinstance(token, (tokens.ElseToken, tokens.EndToken)):
                raise UnbalancedTag(
                    f"`{_tag_keyword(type(token))}` tag without an open block",
                    token.position,
                    self.source_name,
                )
            children.append(self._parse_token(token))
        return Block(tuple(children))

    def _parse_token(self, token: tokens.Token) -> Node:
        match token:
            case tokens.TextToken(value=value):
                return nodes.Text(value)
            case tokens.VariableToken(name=name):
                return nodes.VariableRef(name)
            case tokens.PartialToken():
                return self._parse_partial(token)
            case tokens.ForToken(iterable=iterable, binding=binding):
                body, _ = self._collect_until(token, "for", tokens.EndToken)
                return nodes.ForLoop(iterable, binding, body, token.position)
            case tokens.IfToken():
                return self._parse_if(token)
        raise TypeError(f"Unexpected token: {token!r}")

    def _parse_partial(self, token: tokens.PartialToken) -> Block:
        if token.name not in self.partials:
            raise UnknownPartial(token.name, token.position, self.source_name)
        if token.name in self.including:
            raise RecursivePartial(
                (*self.including, token.name), token.position, self.source_name
            )
        logger.debug("Expanding partial %r in %s", token.name, self.source_name)
        parser = Parser.for_source(
            self.partials[token.name],
            self.partials,
            name=token.name,
            including=(*self.including, token.name),
        )
        return parser.parse()

    def _parse_if(self, token: tokens.IfToken) -> nodes.IfElse:
        condition = self.parse_condition(token)
        then_body, terminator = self._collect_until(
            token, "if", tokens.ElseToken, tokens.EndToken
        )
        else_body = Block()
        if isinstance(terminator, tokens.ElseToken):
            else_body, _ = self._collect_until(token, "if", tokens.EndToken)
        return nodes.IfElse(condition, then_body, else_body)

    def _collect_until(
        self, start: tokens.Token, construct: str, *terminators: type[tokens.Token]
    ) -> tuple[Block, tokens.Token]:
        """Parse tokens into the stack until one of ``terminators``.

        Returns the block of children parsed since the call started and the
        terminator token that ended it.
        """
        mark = len(self._stack)
        while True:
            token = self.lexer.next()
            if token is None:
                raise UnterminatedBlock(construct, start.position, self.source_name)
            if isinstance(token, terminators):
                children = tuple(self._stack[mark:])
                del self._stack[mark:]
                return Block(children), token
            if isinstance(token, (tokens.ElseToken, tokens.EndToken)):
                found = _tag_keyword(type(token))
                expected = " or ".join(f"`{_tag_keyword(t)}`" for t in terminators)
                raise UnbalancedTag(
                    f"`{found}` tag is not allowed here, `{construct}` block expects {expected}",
                    token.position,
                    self.source_name,
                )
            self._stack.append(self._parse_token(token))

    # Boolean expressions

    def parse_condition(self, token: tokens.IfToken) -> Node:
        """Build the condition node of an ``if`` tag from its expression tokens."""
        expr = deque(token.expr)
        if not expr:
            raise MalformedExpression(
                "`if` tag does not contain a condition", token.position, self.source_name
            )
        node = self._parse_compound(expr, token)
        if expr:
            raise MalformedExpression(
                f"Unexpected {expr[0].value!r} in `if` condition",
                expr[0].position,
                self.source_name,
            )
        return node

    def _parse_compound(self, expr: deque, token: tokens.IfToken) -> Node:
        if len(expr) < 2:
            return self._parse_simple(expr, token)

        lhs = self._parse_simple(expr, token)
        if not expr:
            return lhs

        op = expr.popleft()
        if not isinstance(op, tokens.Operator) or op.value not in ("&&", "||"):
            raise MalformedExpression(
                f"Expected '&&' or '||' but found {op.value!r}", op.position, self.source_name
            )
        if not expr:
            raise MalformedExpression(
                f"Operator {op.value!r} is missing its right operand",
                op.position,
                self.source_name,
            )
        rhs = self._parse_compound(expr, token)
        if op.value == "&&":
            return nodes.And(lhs, rhs)
        return nodes.Or(lhs, rhs)

    def _parse_simple(self, expr: deque, token: tokens.IfToken) -> Node:
        if not expr:
            raise MalformedExpression(
                "Expected a value in `if` condition", token.position, self.source_name
            )
        lhs = self._parse_value(expr.popleft())
        if not expr:
            return lhs

        follower = expr[0]
        if isinstance(follower, tokens.Operator) and follower.value in ("==", "!="):
            expr.popleft()
            if not expr:
                raise MalformedExpression(
                    f"Operator {follower.value!r} is missing its right operand",
                    follower.position,
                    self.source_name,
                )
            rhs = self._parse_value(expr.popleft())
            if follower.value == "==":
                return nodes.Equals(lhs, rhs)
            return nodes.NotEquals(lhs, rhs)
        if isinstance(follower, tokens.Identifier) and follower.value == "exists":
            expr.popleft()
            return nodes.NotEquals(lhs, nodes.VariableRef(MISSING_NAME))
        # A bare value is a truthiness test
        return lhs

    def _parse_value(self, token: tokens.ExprToken) -> Node:
        match token:
            case tokens.Identifier(value=value) if value.lower() in ("true", "false"):
                return nodes.BooleanLiteral(value.lower() == "true")
            case tokens.Identifier(value=value):
                return nodes.VariableRef(value)
            case tokens.StringLiteral(value=value):
                return nodes.StringLiteral(value)
            case tokens.Number(value=value):
                return nodes.NumberLiteral(float(value))
        raise MalformedExpression(
            f"Expected a value but found operator {token.value!r}",
            token.position,
            self.source_name,
        )


def _tag_keyword(token_type: type[tokens.Token]) -> str:
    return "else" if token_type is tokens.ElseToken else "end"
