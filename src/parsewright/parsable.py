"""Self-describing parsable types.

A type that knows its own grammar subclasses Parsable and implements
parser(). Callers then parse with ``MyType.parse(text)`` without touching
the combinator API.

Python 3.13+.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Self

from parsewright.parser.core import Parser
from parsewright.parser.cursor import ParseState

__all__ = ["Parsable"]


class Parsable(ABC):
    """Mixin for types with a canonical parser.

    Example:
        >>> from dataclasses import dataclass
        >>> from parsewright import number, token
        >>> @dataclass
        ... class Point(Parsable):
        ...     x: int
        ...     y: int
        ...
        ...     @classmethod
        ...     def parser(cls) -> Parser[Point]:
        ...         coord = number() << token(",")
        ...         return coord.bind(lambda x: number().map(lambda y: cls(x, y)))
        >>> Point.parse("3,4")
        Point(x=3, y=4)
    """

    __slots__ = ()

    @classmethod
    @abstractmethod
    def parser(cls) -> Parser[Self]:
        """The canonical grammar for this type."""

    @classmethod
    def parse(cls, source: str | ParseState) -> Self:
        """Parse source with the canonical grammar.

        Same contract as Parser.run(): trailing input is allowed. Add
        .complete() inside parser() to reject it.

        Raises:
            ParseError: If parsing fails
        """
        return cls.parser().run(source)
