"""Syntax tree of a lambda-calculus program: tokens, identifiers, expressions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union

__all__ = [
    "Token",
    "Identifier",
    "Variable",
    "Abstraction",
    "Application",
    "Expression",
    "Statement",
    "Program",
]


@dataclass
class Token:
    """A lexeme with its row and inclusive column range."""

    text: str
    row: int = 0
    first_col: int = 0
    last_col: int = 0


@dataclass
class Identifier:
    """A chain of one or more identifier tokens, such as ``x,y,z``.

    The span is fixed when the node is built: it starts at this token and
    ends where the rest of the chain ends.
    """

    token: Token
    next: Identifier | None = None
    first_row: int = field(init=False)
    first_col: int = field(init=False)
    last_row: int = field(init=False)
    last_col: int = field(init=False)

    def __post_init__(self) -> None:
        self.first_row = self.token.row
        self.first_col = self.token.first_col
        if self.next is not None:
            self.last_row = self.next.last_row
            self.last_col = self.next.last_col
        else:
            self.last_row = self.token.row
            self.last_col = self.token.last_col

    def __iter__(self) -> Iterator[Token]:
        node: Identifier | None = self
        while node is not None:
            yield node.token
            node = node.next


@dataclass
class Variable:
    """An expression that refers to a name."""

    identifier: Identifier
    first_row: int = field(init=False)
    first_col: int = field(init=False)
    last_row: int = field(init=False)
    last_col: int = field(init=False)

    def __post_init__(self) -> None:
        self.first_row = self.identifier.first_row
        self.first_col = self.identifier.first_col
        self.last_row = self.identifier.last_row
        self.last_col = self.identifier.last_col

    @property
    def token(self) -> Token:
        """The token naming the variable."""
        return self.identifier.token

    @staticmethod
    def from_identifier(identifier: Identifier) -> Variable:
        """Build a variable expression spanning ``identifier``."""
        return Variable(identifier)


@dataclass
class Abstraction:
    """A lambda abstraction binding ``params`` in ``body``."""

    params: Identifier
    body: Expression
    first_row: int = 0
    first_col: int = 0
    last_row: int = 0
    last_col: int = 0


@dataclass
class Application:
    """The application of ``left`` to ``right``."""

    left: Expression
    right: Expression
    first_row: int = 0
    first_col: int = 0
    last_row: int = 0
    last_col: int = 0


Expression = Union[Variable, Abstraction, Application]


@dataclass
class Statement:
    """A binding of a name to an expression."""

    name: Identifier
    expr: Expression
    first_row: int = 0
    first_col: int = 0
    last_row: int = 0
    last_col: int = 0

    def __post_init__(self) -> None:
        if self.name is None or self.expr is None:
            raise ValueError("a statement needs a name and an expression")


class Program:
    """The statements of one source file, in order."""

    def __init__(self, filename: str, statements: Iterable[Statement]):
        self.filename = filename
        self.statements = list(statements)
        if not self.statements:
            raise ValueError("a program needs at least one statement")

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __repr__(self) -> str:
        return f"Program({self.filename!r}, {len(self.statements)} statements)"