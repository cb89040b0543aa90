"""Parser value type and combinators.

A Parser[T] wraps a single function ``func(state) -> T`` that consumes input
by advancing ``state.cursor`` and signals failure by raising ParseError.
Parsers are immutable, hold no state between runs, and are built once and
reused.

Composition never executes anything. A grammar is assembled from primitives
(:mod:`parsewright.parser.primitives`) with the methods and operators below,
then executed with :meth:`Parser.run`.

Operators:
    p | q     alternative: try p, then q; atomic as a whole
    p >> q    sequence keeping q's value (discard left); atomic
    p << q    sequence keeping p's value (discard right); atomic

Consumption on failure:
    The binary operators and bind() always restore the cursor when they
    fail, whatever their operands do. Single-step modifiers keep the
    consumption behavior of the parser they wrap unless documented
    otherwise (atomic() and optional() restore, discard() and many() do not).

Example:
    >>> from parsewright.parser.primitives import number, token, whitespace
    >>> pair = number() << whitespace(allow_empty=True) << token(",")
    >>> pair.sequence(whitespace()).run("1, 2 ,3")
    [1, 2, 3]
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, overload

from parsewright.core.depth_guard import DepthLimitExceededError
from parsewright.diagnostics import (
    ContextualError,
    EitherError,
    IncompleteParse,
    ParseError,
)

from .cursor import ParseState

__all__ = ["ParseFunction", "Parser"]

logger = logging.getLogger(__name__)

type ParseFunction[T] = Callable[[ParseState], T]

_MISSING: Any = object()


def _log_swallowed(combinator: str, name: str, error: Exception) -> None:
    if not isinstance(error, ParseError):
        logger.debug(
            "%s(%s) swallowed %s: %s", combinator, name, type(error).__name__, error
        )


@dataclass(frozen=True, slots=True)
class Parser[T]:
    """A named, reusable parsing function.

    Attributes:
        func: Consumes input from the state and returns the parsed value,
            or raises ParseError
        name: Display name used in repr() and log records

    Thread Safety:
        Parser values are immutable. Any number of runs may share one
        grammar provided each run uses its own ParseState.
    """

    func: ParseFunction[T]
    name: str = "parser"

    def __repr__(self) -> str:
        return f"Parser({self.name!r})"

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, source: str | ParseState) -> T:
        """Run the parser.

        Args:
            source: Either an owned string (parsed from its start; the
                remainder is discarded) or a ParseState, which is advanced
                in place

        Returns:
            The parsed value

        Raises:
            ParseError: If parsing fails
        """
        state = ParseState.of(source) if isinstance(source, str) else source
        try:
            return self.func(state)
        except ParseError as error:
            logger.debug(
                "Parser %s failed at offset %d: %s",
                self.name,
                state.cursor.pos,
                error.code.name,
            )
            raise

    def run_partial(self, source: str) -> tuple[T, str]:
        """Run the parser on a string and also return the unconsumed input.

        Example:
            >>> from parsewright.parser.primitives import number
            >>> number().run_partial("42 apples")
            (42, ' apples')
        """
        state = ParseState.of(source)
        value = self.run(state)
        return value, state.remaining

    def named(self, name: str) -> Parser[T]:
        """Return the same parser under a new display name."""
        return dataclasses.replace(self, name=name)

    # ------------------------------------------------------------------
    # Functor / monad
    # ------------------------------------------------------------------

    def map[U](self, transform: Callable[[T], U]) -> Parser[U]:
        """Transform the parsed value.

        Exceptions raised by transform propagate unchanged; they are not
        converted into parse failures.
        """
        func = self.func

        def map_parser(state: ParseState) -> U:
            return transform(func(state))

        return Parser(map_parser, f"{self.name}.map")

    def bind[U](self, builder: Callable[[T], Parser[U]]) -> Parser[U]:
        """Run this parser, then the parser built from its value.

        Atomic: failure in either step restores the cursor.

        Example:
            >>> from parsewright.parser.primitives import number, token
            >>> counted = number().bind(lambda n: token("a" * n))
            >>> counted.run_partial("3aaaaa")
            ('aaa', 'aa')
        """
        func = self.func

        def bind_parser(state: ParseState) -> U:
            value = func(state)
            return builder(value).func(state)

        return Parser(bind_parser, f"{self.name}.bind").atomic()

    # ------------------------------------------------------------------
    # Binary combinators
    # ------------------------------------------------------------------

    def alternative(self, other: Parser[T]) -> Parser[T]:
        """Try this parser, falling back to other.

        other runs on the cursor as this parser left it. If both fail the
        cursor is restored and EitherError(first, second) is raised.
        """
        lhs, rhs = self.func, other.func

        def alternative_parser(state: ParseState) -> T:
            try:
                return lhs(state)
            except ParseError as first:
                try:
                    return rhs(state)
                except ParseError as second:
                    raise EitherError(first, second) from None

        return Parser(alternative_parser, f"({self.name} | {other.name})").atomic()

    def then[U](self, other: Parser[U]) -> Parser[U]:
        """Run this parser then other, keeping other's value. Atomic."""
        lhs, rhs = self.func, other.func

        def then_parser(state: ParseState) -> U:
            lhs(state)
            return rhs(state)

        return Parser(then_parser, f"({self.name} >> {other.name})").atomic()

    def skip(self, other: Parser[Any]) -> Parser[T]:
        """Run this parser then other, keeping this parser's value. Atomic."""
        lhs, rhs = self.func, other.func

        def skip_parser(state: ParseState) -> T:
            value = lhs(state)
            rhs(state)
            return value

        return Parser(skip_parser, f"({self.name} << {other.name})").atomic()

    def __or__(self, other: object) -> Parser[Any]:
        if not isinstance(other, Parser):
            return NotImplemented
        return self.alternative(other)

    def __rshift__(self, other: object) -> Parser[Any]:
        if not isinstance(other, Parser):
            return NotImplemented
        return self.then(other)

    def __lshift__(self, other: object) -> Parser[T]:
        if not isinstance(other, Parser):
            return NotImplemented
        return self.skip(other)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def atomic(self) -> Parser[T]:
        """Make the parser all-or-nothing.

        On any failure the cursor is restored to where it was before the
        call and the same exception is re-raised. On success the
        consumption is kept.
        """
        func = self.func

        def atomic_parser(state: ParseState) -> T:
            snapshot = state.cursor
            try:
                return func(state)
            except Exception:
                state.cursor = snapshot
                raise

        return Parser(atomic_parser, self.name)

    @overload
    def optional(self) -> Parser[T | None]: ...

    @overload
    def optional(self, default: T) -> Parser[T]: ...

    def optional(self, default: Any = _MISSING) -> Parser[Any]:
        """Make the parser optional.

        On success the value is returned as normal. On any failure, including
        an exception raised by a map() transform, the cursor is restored and
        default (None when omitted) is returned instead. Only
        DepthLimitExceededError propagates.
        """
        func = self.func
        name = self.name
        fallback = None if default is _MISSING else default

        def optional_parser(state: ParseState) -> Any:
            snapshot = state.cursor
            try:
                return func(state)
            except DepthLimitExceededError:
                raise
            except Exception as error:
                _log_swallowed("optional", name, error)
                state.cursor = snapshot
                return fallback

        return Parser(optional_parser, f"{self.name}.optional")

    def discard(self) -> Parser[None]:
        """Run the parser for its consumption only, never failing.

        Any failure except DepthLimitExceededError is swallowed WITHOUT
        restoring the cursor: anything the inner parser consumed before
        failing stays consumed. Use optional() when a failed attempt must
        leave the input untouched.
        """
        func = self.func
        name = self.name

        def discard_parser(state: ParseState) -> None:
            try:
                func(state)
            except DepthLimitExceededError:
                raise
            except Exception as error:
                _log_swallowed("discard", name, error)

        return Parser(discard_parser, f"{self.name}.discard")

    def sequence(
        self,
        separator: Parser[Any] | None = None,
        *,
        allow_empty: bool = True,
        allow_trailing_separator: bool = True,
    ) -> Parser[list[T]]:
        """Parse separated elements greedily.

        Args:
            separator: Parser between elements. Defaults to a comma followed
                by optional whitespace.
            allow_empty: Return [] when the first element fails, instead of
                raising its error
            allow_trailing_separator: When a separator is not followed by an
                element, keep the separator consumed. Otherwise the cursor is
                rewound to before that separator. Either way the elements
                collected so far are returned.

        Example:
            >>> from parsewright.parser.primitives import token
            >>> token("a").sequence().run_partial("a, a, ")
            (['a', 'a'], '')
            >>> token("a").sequence(allow_trailing_separator=False).run_partial("a, a, ")
            (['a', 'a'], ', ')
        """
        if separator is None:
            from .primitives import comma_separator  # noqa: PLC0415 - circular

            separator = comma_separator()
        element, sep = self.func, separator.func
        name = self.name

        def sequence_parser(state: ParseState) -> list[T]:
            results: list[T] = []
            try:
                results.append(element(state))
            except ParseError:
                if allow_empty:
                    return results
                raise

            while not state.cursor.is_eof:
                snapshot = state.cursor
                try:
                    sep(state)
                except ParseError:
                    state.cursor = snapshot
                    break
                try:
                    results.append(element(state))
                except ParseError:
                    if not allow_trailing_separator:
                        state.cursor = snapshot
                    break
                if state.cursor.pos == snapshot.pos:
                    logger.debug("sequence(%s) stopped: iteration consumed no input", name)
                    break
            return results

        return Parser(sequence_parser, f"{name}.sequence")

    def many(self, *, allow_empty: bool = True) -> Parser[list[T]]:
        """Parse the element repeatedly, with no separator, until it fails.

        Any exception except DepthLimitExceededError ends the repetition. The
        failing attempt is not rolled back; element parsers that may
        partially consume should be atomic. An element that succeeds without
        consuming input ends the repetition after being collected.

        Args:
            allow_empty: Return [] when the first attempt fails, instead of
                raising its error
        """
        func = self.func
        name = self.name

        def many_parser(state: ParseState) -> list[T]:
            elements: list[T] = []
            while True:
                start = state.cursor.pos
                try:
                    elements.append(func(state))
                except DepthLimitExceededError:
                    raise
                except Exception as error:
                    if not elements and not allow_empty:
                        raise
                    _log_swallowed("many", name, error)
                    return elements
                if state.cursor.pos == start:
                    logger.debug("many(%s) stopped: element consumed no input", name)
                    return elements

        return Parser(many_parser, f"{name}.many")

    def context(self, label: str) -> Parser[T]:
        """Wrap failures as ContextualError(label, error).

        Exceptions that are not ParseError pass through unwrapped.
        """
        func = self.func

        def context_parser(state: ParseState) -> T:
            try:
                return func(state)
            except ParseError as error:
                raise ContextualError(label, error) from error

        return Parser(context_parser, self.name)

    def complete(self) -> Parser[T]:
        """Require all input to be consumed.

        Fails with IncompleteParse after the inner parser succeeds with input
        remaining. The inner parser's consumption is kept.
        """
        func = self.func

        def complete_parser(state: ParseState) -> T:
            value = func(state)
            if not state.cursor.is_eof:
                raise IncompleteParse(state.cursor)
            return value

        return Parser(complete_parser, f"{self.name}.complete")

    def first_error(self) -> Parser[T]:
        """Replace a failing EitherError with its first branch's error."""
        func = self.func

        def first_error_parser(state: ParseState) -> T:
            try:
                return func(state)
            except EitherError as error:
                raise error.first.copy() from None

        return Parser(first_error_parser, self.name)

    def second_error(self) -> Parser[T]:
        """Replace a failing EitherError with its second branch's error."""
        func = self.func

        def second_error_parser(state: ParseState) -> T:
            try:
                return func(state)
            except EitherError as error:
                raise error.second.copy() from None

        return Parser(second_error_parser, self.name)
