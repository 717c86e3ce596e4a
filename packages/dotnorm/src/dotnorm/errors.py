"""Error hierarchy for reading and normalizing DOT graphs."""

from __future__ import annotations


class DotError(Exception):
    """Base error for all dotnorm errors."""


class DotSyntaxError(DotError):
    """DOT text the reader cannot turn into a raw AST."""

    def __init__(
        self,
        message: str,
        *,
        position: int,
        line: int,
        column: int,
    ):
        super().__init__(f"{message} at line {line}, column {column}")
        self.reason = message
        self.position = position
        self.line = line
        self.column = column

    @classmethod
    def at(cls, source: str, position: int, message: str) -> DotSyntaxError:
        """Build an error pointing at an offset of ``source`` (1-based line/column)."""
        line = source.count("\n", 0, position) + 1
        column = position - (source.rfind("\n", 0, position) + 1) + 1
        return cls(message, position=position, line=line, column=column)


class RawAstError(DotError):
    """Raw statement tree that does not follow the parser's output shape."""
