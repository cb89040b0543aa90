"""Tests for the Parsable mixin.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import pytest

from parsewright import Parsable, Parser, ParseState, enumeration, number, token, whitespace
from parsewright.diagnostics import ExpectedNumber, ExpectedToken


@dataclass(frozen=True)
class Point(Parsable):
    x: int
    y: int

    @classmethod
    def parser(cls) -> Parser[Point]:
        coord = number() << token(",")
        return coord.bind(lambda x: number().map(lambda y: cls(x, y))).named("point")


class Unit(StrEnum):
    PX = "px"
    EM = "em"


@dataclass(frozen=True)
class Length(Parsable):
    value: int
    unit: Unit

    @classmethod
    def parser(cls) -> Parser[Length]:
        return number().bind(lambda v: enumeration(Unit).map(lambda u: cls(v, u)))


class TestParsable:
    """Test the parse() entry point."""

    def test_parse(self) -> None:
        """parse() runs the declared grammar."""
        assert Point.parse("3,-4") == Point(3, -4)

    def test_trailing_input_allowed(self) -> None:
        """parse() has run() semantics: trailing input is left alone."""
        state = ParseState.of("1,2 rest")

        assert Point.parse(state) == Point(1, 2)
        assert state.remaining == " rest"

    def test_failure(self) -> None:
        """Grammar errors propagate unchanged."""
        with pytest.raises(ExpectedToken):
            Point.parse("1;2")

        with pytest.raises(ExpectedNumber):
            Point.parse("x,2")

    def test_failure_restores(self) -> None:
        """A failed parse() consumes nothing."""
        state = ParseState.of("1,x")

        with pytest.raises(ExpectedNumber):
            Point.parse(state)

        assert state.remaining == "1,x"

    def test_enum_field(self) -> None:
        """Parsable types compose with enumeration()."""
        assert Length.parse("12em") == Length(12, Unit.EM)

    def test_nested_in_grammar(self) -> None:
        """A Parsable's parser() is an ordinary Parser."""
        path = Point.parser().sequence(whitespace())

        assert path.run("0,0 1,1 2,4") == [Point(0, 0), Point(1, 1), Point(2, 4)]

    def test_parser_is_abstract(self) -> None:
        """Subclasses must implement parser()."""

        class Incomplete(Parsable):
            pass

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]
