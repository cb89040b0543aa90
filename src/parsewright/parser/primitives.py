"""Primitive parser constructors.

Every grammar bottoms out in these functions. Each returns a fresh Parser
value; none of them touches input until the parser is run.

Failure contract:
    Primitives never consume input when they fail, with one exception:
    until() scans ahead and is documented separately. newline() is built
    from bind() and is atomic as a whole.

Character classes:
    whitespace() uses str.isspace. space() is whitespace minus
    NEWLINE_CHARACTERS. newline() consumes "\\r\\n" as a single line break.
    number() accepts ASCII digits only.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from enum import Enum
from typing import Any

from parsewright.constants import ASCII_DIGITS, CRLF, NEWLINE_CHARACTERS
from parsewright.diagnostics import (
    EitherError,
    ExpectedCharactersSatisfyingPredicate,
    ExpectedNumber,
    ExpectedTerminationSequence,
    ExpectedToken,
    ExpectedWhitespace,
    ParseError,
    TokenExpectation,
)

from .core import Parser
from .cursor import ParseState

__all__ = [
    "character_where",
    "characters_where",
    "choice",
    "comma_separator",
    "empty",
    "enumeration",
    "fail",
    "is_inline_space",
    "is_newline",
    "lazy",
    "newline",
    "number",
    "optional_whitespace",
    "raw_value",
    "space",
    "succeed",
    "token",
    "until",
    "whitespace",
]

type CharPredicate = Callable[[str], bool]


# ============================================================================
# CHARACTER CLASSES
# ============================================================================


def is_newline(char: str) -> bool:
    """Check if character is a line break."""
    return char in NEWLINE_CHARACTERS


def is_inline_space(char: str) -> bool:
    """Check if character is whitespace that does not break the line."""
    return char.isspace() and char not in NEWLINE_CHARACTERS


def _is_ascii_digit(char: str) -> bool:
    return char in ASCII_DIGITS


# ============================================================================
# CONSTANT PARSERS
# ============================================================================


def succeed[T](value: T) -> Parser[T]:
    """Parser that returns value without consuming input."""

    def succeed_parser(_state: ParseState) -> T:
        return value

    return Parser(succeed_parser, f"succeed({value!r})")


def fail(error: ParseError) -> Parser[Any]:
    """Parser that always fails with error, consuming nothing.

    A fresh copy of error is raised on every run so repeated runs never
    share traceback state.
    """

    def fail_parser(_state: ParseState) -> Any:
        raise error.copy()

    return Parser(fail_parser, f"fail({error!r})")


def empty() -> Parser[str]:
    """Parser that returns "" without consuming input."""

    def empty_parser(_state: ParseState) -> str:
        return ""

    return Parser(empty_parser, "empty")


# ============================================================================
# LITERALS
# ============================================================================


def token(text: str) -> Parser[str]:
    """Match a literal string at the current position.

    Fails with ExpectedToken(TokenExpectation.one(text)) without consuming.

    Example:
        >>> token("let").run_partial("let x")
        ('let', ' x')
    """

    def token_parser(state: ParseState) -> str:
        cursor = state.cursor
        if not cursor.startswith(text):
            raise ExpectedToken(TokenExpectation.one(text))
        state.cursor = cursor.advance(len(text))
        return text

    return Parser(token_parser, f"token({text!r})")


def raw_value[E: Enum](member: E) -> Parser[E]:
    """Match the string value of an enum member and return the member.

    Raises:
        TypeError: If the member's value is not a str

    Example:
        >>> from enum import Enum
        >>> class Unit(Enum):
        ...     PX = "px"
        ...     EM = "em"
        >>> raw_value(Unit.EM).run("em")
        <Unit.EM: 'em'>
    """
    raw = member.value
    if not isinstance(raw, str):
        msg = f"raw_value() requires a str-valued enum member, got {member!r}"
        raise TypeError(msg)

    def raw_value_parser(state: ParseState) -> E:
        cursor = state.cursor
        if not cursor.startswith(raw):
            raise ExpectedToken(TokenExpectation.one(raw))
        state.cursor = cursor.advance(len(raw))
        return member

    return Parser(raw_value_parser, f"raw_value({member!r})")


def enumeration[E: Enum](enum_type: type[E]) -> Parser[E]:
    """Match any member of a str-valued enum, trying members in declaration order.

    Total failure reports every raw value at once instead of a nested chain
    of alternation errors: each alternation step is collapsed to its first
    error, and the seed of the fold already carries the combined expectation.

    Members whose value is a prefix of a later member shadow it; declare
    longer values first.

    Example:
        >>> from enum import Enum
        >>> class Keyword(Enum):
        ...     FOO = "foo"
        ...     BAR = "bar"
        >>> enumeration(Keyword).run("bar")
        <Keyword.BAR: 'bar'>
        >>> enumeration(Keyword).run("baz")
        Traceback (most recent call last):
        ...
        parsewright.diagnostics.errors.ExpectedToken: Expected Token ['foo', 'bar']
    """
    members = [raw_value(member) for member in enum_type]
    expected = TokenExpectation.one_of(member.value for member in enum_type)
    seed: Parser[E] = fail(ExpectedToken(expected))
    collapsed = functools.reduce(
        lambda acc, parser: (acc | parser).first_error(),
        members,
        seed,
    )
    return collapsed.named(f"enumeration({enum_type.__name__})")


# ============================================================================
# CHARACTER PREDICATES
# ============================================================================


def character_where(predicate: CharPredicate) -> Parser[str]:
    """Consume exactly one character satisfying predicate.

    Fails with ExpectedCharactersSatisfyingPredicate at end of input or when
    the next character is rejected, consuming nothing.
    """

    def character_where_parser(state: ParseState) -> str:
        cursor = state.cursor
        char = cursor.peek()
        if char is None or not predicate(char):
            raise ExpectedCharactersSatisfyingPredicate()
        state.cursor = cursor.advance()
        return char

    return Parser(character_where_parser, "character_where")


def characters_where(predicate: CharPredicate, *, allow_empty: bool = False) -> Parser[str]:
    """Consume the longest run of characters satisfying predicate.

    Args:
        predicate: Test applied to each character in turn
        allow_empty: Succeed with "" when the first character is rejected

    Example:
        >>> characters_where(str.isalpha).run_partial("abc123")
        ('abc', '123')
    """

    def characters_where_parser(state: ParseState) -> str:
        text, rest = state.cursor.take_while(predicate)
        if not text and not allow_empty:
            raise ExpectedCharactersSatisfyingPredicate()
        state.cursor = rest
        return text

    return Parser(characters_where_parser, "characters_where")


def until(
    terminator: Parser[Any],
    *,
    allow_empty: bool = True,
    allow_eof: bool = False,
    consume_terminator: bool = False,
) -> Parser[str]:
    """Collect characters up to the first position where terminator matches.

    The terminator is attempted before each character. A failed attempt is
    rolled back before the scan moves on, so terminators of any length work.

    Args:
        terminator: Parser marking the end of the collected text
        allow_empty: Accept a terminator (or allowed EOF) at the very start.
            Otherwise fail with ExpectedCharactersSatisfyingPredicate: the
            terminator was found, but the run of collected characters it
            ends is empty.
        allow_eof: Succeed with everything scanned when input runs out.
            Otherwise fail with ExpectedTerminationSequence.
        consume_terminator: Leave the cursor after the terminator rather
            than before it. The terminator's value is discarded.

    Failures consume nothing.

    Example:
        >>> until(token("*/")).run_partial("comment */ rest")
        ('comment ', '*/ rest')
        >>> until(token("*/"), consume_terminator=True).run_partial("comment */ rest")
        ('comment ', ' rest')
    """
    stop = terminator.func

    def until_parser(state: ParseState) -> str:
        start = state.cursor
        scan = start
        while not scan.is_eof:
            state.cursor = scan
            try:
                stop(state)
            except ParseError:
                scan = scan.advance()
                continue
            if scan.pos == start.pos and not allow_empty:
                state.cursor = start
                raise ExpectedCharactersSatisfyingPredicate()
            if not consume_terminator:
                state.cursor = scan
            return start.slice_to(scan.pos)

        if allow_eof and (allow_empty or scan.pos > start.pos):
            state.cursor = scan
            return start.remaining
        state.cursor = start
        if allow_eof:
            raise ExpectedCharactersSatisfyingPredicate()
        raise ExpectedTerminationSequence()

    return Parser(until_parser, f"until({terminator.name})")


# ============================================================================
# WHITESPACE
# ============================================================================


def whitespace(*, allow_empty: bool = False) -> Parser[str]:
    """Consume a run of whitespace, line breaks included.

    Fails with ExpectedWhitespace when no whitespace is present and
    allow_empty is False, consuming nothing.
    """

    def whitespace_parser(state: ParseState) -> str:
        text, rest = state.cursor.take_while(str.isspace)
        if not text and not allow_empty:
            raise ExpectedWhitespace()
        state.cursor = rest
        return text

    return Parser(whitespace_parser, "whitespace")


def optional_whitespace() -> Parser[str | None]:
    """Whitespace run, or None when there is none."""
    return whitespace().optional().named("optional_whitespace")


def space() -> Parser[str]:
    """Consume a non-empty run of whitespace that does not break the line.

    Fails with ExpectedCharactersSatisfyingPredicate.
    """
    return characters_where(is_inline_space).named("space")


def newline() -> Parser[str]:
    """Consume optional inline spaces followed by exactly one line break.

    Returns the spaces and the break together. "\\r\\n" counts as one break.
    Atomic: when no break follows, the spaces are left unconsumed and the
    parser fails with ExpectedCharactersSatisfyingPredicate.

    Example:
        >>> newline().run_partial("  \\r\\nnext")
        ('  \\r\\n', 'next')
    """
    line_break = (token(CRLF) | character_where(is_newline)).second_error()

    def with_break(spaces: str) -> Parser[str]:
        return line_break.map(lambda brk: spaces + brk)

    return space().optional("").bind(with_break).named("newline")


def comma_separator() -> Parser[None]:
    """A comma followed by optional whitespace, the default sequence() separator."""
    return (token(",") >> whitespace(allow_empty=True)).map(lambda _: None).named("comma")


# ============================================================================
# NUMBERS
# ============================================================================


def number() -> Parser[int]:
    """Parse an optionally negative run of ASCII digits as an int.

    A lone "-" is not a number. Fails with ExpectedNumber, consuming nothing.

    Example:
        >>> number().run_partial("-42px")
        (-42, 'px')
    """

    def number_parser(state: ParseState) -> int:
        cursor = state.cursor
        sign = "-" if cursor.peek() == "-" else ""
        digits, rest = cursor.advance(len(sign)).take_while(_is_ascii_digit)
        if not digits:
            raise ExpectedNumber()
        state.cursor = rest
        return int(sign + digits)

    return Parser(number_parser, "number")


# ============================================================================
# GRAMMAR STRUCTURE
# ============================================================================


def choice[T](*parsers: Parser[T]) -> Parser[T]:
    """Alternation over several parsers: choice(a, b, c) behaves as a | b | c.

    Runs in a flat loop rather than nested alternative() calls, so long
    choice lists do not deepen the stack. Cursor handling and the shape of
    the combined EitherError are the same as the left-nested operator form.

    Raises:
        ValueError: If no parsers are given
    """
    if not parsers:
        msg = "choice() requires at least one parser"
        raise ValueError(msg)
    if len(parsers) == 1:
        return parsers[0]
    first, *rest = (parser.func for parser in parsers)

    def choice_parser(state: ParseState) -> T:
        snapshot = state.cursor
        try:
            return first(state)
        except ParseError as failure:
            error = failure
        for func in rest:
            try:
                return func(state)
            except ParseError as failure:
                error = EitherError(error, failure)
                # Each nesting level is atomic, so later branches start fresh.
                state.cursor = snapshot
        raise error

    names = " | ".join(parser.name for parser in parsers)
    return Parser(choice_parser, f"choice({names})")


def lazy[T](factory: Callable[[], Parser[T]], name: str = "lazy") -> Parser[T]:
    """Defer parser construction until first run, for recursive grammars.

    factory is called at most once. Every entry counts against the run's
    DepthGuard, so deeply nested input raises DepthLimitExceededError instead
    of exhausting the interpreter stack.

    Example:
        >>> def nested() -> Parser[int]:
        ...     inner = lazy(nested)
        ...     return (token("(") >> inner << token(")")).map(lambda n: n + 1) | succeed(0)
        >>> nested().run("((()))")
        3
    """

    @functools.cache
    def resolve() -> Parser[T]:
        return factory()

    def lazy_parser(state: ParseState) -> T:
        with state.depth:
            return resolve().func(state)

    return Parser(lazy_parser, name)
