"""Symbol table of top-level bindings and a stack of bound names."""

from __future__ import annotations

from lambdacheck.hashmap import MIN_LOAD_THRESHOLD, HashMap
from lambdacheck.syntax import Statement, Token

__all__ = ["SymbolTable", "ScopeStack"]


class SymbolTable:
    """Statements keyed by the text of the name they bind."""

    def __init__(self, size: int = 32, load_threshold: float = MIN_LOAD_THRESHOLD):
        self._map = HashMap(size, load_threshold)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, Token) and token.text in self._map

    def insert(self, statement: Statement) -> None:
        """Bind the statement's name to it, replacing any earlier binding."""
        self._map[statement.name.token.text] = statement

    def lookup(self, token: Token) -> Statement | None:
        """Return the statement bound to the token's text, if any."""
        return self._map.get(token.text)

    def remove(self, token: Token) -> Statement | None:
        """Unbind the token's text and return the statement it named, if any."""
        return self._map.pop(token.text, None)


class ScopeStack:
    """Names bound by enclosing abstractions; ``None`` marks a frame boundary."""

    def __init__(self) -> None:
        self._items: list[Token | None] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, token: Token | None) -> None:
        """Push a bound name, or ``None`` to open a new frame."""
        self._items.append(token)

    def pop(self) -> Token | None:
        """Pop the top entry; an empty stack yields ``None``."""
        return self._items.pop() if self._items else None

    def __contains__(self, token: object) -> bool:
        """Whether a name with the token's text is bound in the current frame."""
        if not isinstance(token, Token):
            return False
        for item in reversed(self._items):
            if item is None:
                break
            if item.text == token.text:
                return True
        return False

    def clear(self) -> None:
        """Drop every entry."""
        self._items.clear()