"""Parse error hierarchy.

Failures are a closed set of kinds. Each kind is an exception class so that
parsers signal failure by raising, and combinators recover by catching
``ParseError``. Two kinds are composite and nest other errors to any depth:

    ContextualError(label, error)   - failure inside a labelled grammar region
    EitherError(first, second)      - both branches of an alternation failed

Errors compare structurally (same class, same arguments), so tests and
callers can match on whole trees:

    >>> EitherError(ExpectedNumber(), ExpectedToken("X")) == EitherError(
    ...     ExpectedNumber(), ExpectedToken(TokenExpectation.one("X"))
    ... )
    True

Error trees are immutable once constructed. ``IncompleteParse`` captures a
Cursor snapshot, which is itself an immutable value, never the live state.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Self

from parsewright.enums import ExpectationKind

from .codes import ErrorCode

if TYPE_CHECKING:
    from parsewright.parser.cursor import Cursor

__all__ = [
    "ContextualError",
    "EitherError",
    "ExpectedAlphaNumericString",
    "ExpectedCharacter",
    "ExpectedCharactersSatisfyingPredicate",
    "ExpectedNumber",
    "ExpectedTerminationSequence",
    "ExpectedToken",
    "ExpectedType",
    "ExpectedWhitespace",
    "IncompleteParse",
    "ParseError",
    "ParsewrightError",
    "TokenExpectation",
]


class ParsewrightError(Exception):
    """Base exception for all parsewright errors."""


@dataclass(frozen=True, slots=True)
class TokenExpectation:
    """What an ExpectedToken failure was looking for.

    Attributes:
        kind: ONE (single literal), ONE_OF (alternatives) or SEQUENCE (in order)
        tokens: The literal tokens involved

    Example:
        >>> str(TokenExpectation.one("a"))
        "'a'"
        >>> str(TokenExpectation.one_of(["foo", "bar"]))
        "['foo', 'bar']"
        >>> str(TokenExpectation.sequence(["key", "=", "value"]))
        '[key, =, value]'
    """

    kind: ExpectationKind
    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate that ONE carries exactly one token."""
        if self.kind is ExpectationKind.ONE and len(self.tokens) != 1:
            msg = f"TokenExpectation.one requires exactly one token, got {len(self.tokens)}"
            raise ValueError(msg)

    @classmethod
    def one(cls, token: str) -> TokenExpectation:
        """Expectation of a single literal token."""
        return cls(ExpectationKind.ONE, (token,))

    @classmethod
    def one_of(cls, tokens: Iterable[str]) -> TokenExpectation:
        """Expectation of any one of several literal tokens."""
        return cls(ExpectationKind.ONE_OF, tuple(tokens))

    @classmethod
    def sequence(cls, tokens: Iterable[str]) -> TokenExpectation:
        """Expectation of several literal tokens in order."""
        return cls(ExpectationKind.SEQUENCE, tuple(tokens))

    def __str__(self) -> str:
        match self.kind:
            case ExpectationKind.ONE:
                return f"'{self.tokens[0]}'"
            case ExpectationKind.ONE_OF:
                return "[" + ", ".join(f"'{token}'" for token in self.tokens) + "]"
            case ExpectationKind.SEQUENCE:
                return "[" + ", ".join(self.tokens) + "]"


class ParseError(ParsewrightError):
    """Base class of the closed set of parse failure kinds.

    Subclasses store their payload in ``args`` so that equality, hashing,
    repr and pickling all follow from the constructor arguments.

    Attributes:
        code: Stable numeric identifier of the failure kind
    """

    code: ClassVar[ErrorCode]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))

    def __repr__(self) -> str:
        arguments = ", ".join(repr(arg) for arg in self.args)
        return f"{type(self).__name__}({arguments})"

    def __str__(self) -> str:
        return self.describe()

    def copy(self) -> Self:
        """Return an equal error with no traceback, cause or context.

        Error trees are values. Raising a copy leaves the stored node untouched.
        """
        return type(self)(*self.args)

    @property
    def message(self) -> str:
        """One-line description of this error, without nested errors."""
        raise NotImplementedError

    def describe(self) -> str:
        """Human-readable description, indenting nested contexts.

        Delegates to ErrorFormatter so that every rendering path shares one
        implementation.

        Example:
            >>> print(ContextualError("list", ExpectedNumber()).describe())
            - Parsing Error in list:
              Expected Number
        """
        from .formatter import ErrorFormatter  # noqa: PLC0415 - circular

        return ErrorFormatter().format(self)


class ExpectedCharacter(ParseError):
    """A specific single character was required."""

    code = ErrorCode.EXPECTED_CHARACTER

    def __init__(self, char: str) -> None:
        super().__init__(char)

    @property
    def char(self) -> str:
        return self.args[0]

    @property
    def message(self) -> str:
        return f"Expected Character '{self.char}'"


class ExpectedWhitespace(ParseError):
    """At least one whitespace character was required."""

    code = ErrorCode.EXPECTED_WHITESPACE

    @property
    def message(self) -> str:
        return "Expected Whitespace"


class ExpectedTerminationSequence(ParseError):
    """Input ended before the terminator of until() matched."""

    code = ErrorCode.EXPECTED_TERMINATION_SEQUENCE

    @property
    def message(self) -> str:
        return "Expected Termination Sequence"


class ExpectedToken(ParseError):
    """A literal token (or one of several) was required.

    A plain string is shorthand for ``TokenExpectation.one(string)``.
    """

    code = ErrorCode.EXPECTED_TOKEN

    def __init__(self, expectation: TokenExpectation | str) -> None:
        if isinstance(expectation, str):
            expectation = TokenExpectation.one(expectation)
        super().__init__(expectation)

    @property
    def expectation(self) -> TokenExpectation:
        return self.args[0]

    @property
    def message(self) -> str:
        return f"Expected Token {self.expectation}"


class ExpectedType(ParseError):
    """A value of a named type was required."""

    code = ErrorCode.EXPECTED_TYPE

    def __init__(self, name: str) -> None:
        super().__init__(name)

    @property
    def name(self) -> str:
        return self.args[0]

    @property
    def message(self) -> str:
        return f"Expected Type '{self.name}'"


class ExpectedNumber(ParseError):
    """A number was required."""

    code = ErrorCode.EXPECTED_NUMBER

    @property
    def message(self) -> str:
        return "Expected Number"


class ExpectedAlphaNumericString(ParseError):
    """An alphanumeric string was required."""

    code = ErrorCode.EXPECTED_ALPHANUMERIC_STRING

    @property
    def message(self) -> str:
        return "Expected AlphaNumericString"


class ExpectedCharactersSatisfyingPredicate(ParseError):
    """One or more characters satisfying a predicate were required."""

    code = ErrorCode.EXPECTED_CHARACTERS_SATISFYING_PREDICATE

    @property
    def message(self) -> str:
        return "Expected Characters Satisfying Predicate"


class IncompleteParse(ParseError):
    """The parser succeeded but left input unconsumed.

    Attributes:
        cursor: Snapshot of the input at the point parsing stopped
        remaining: The unconsumed text
    """

    code = ErrorCode.INCOMPLETE_PARSE

    def __init__(self, cursor: Cursor) -> None:
        super().__init__(cursor)

    @property
    def cursor(self) -> Cursor:
        return self.args[0]

    @property
    def remaining(self) -> str:
        return self.cursor.remaining

    @property
    def message(self) -> str:
        return f"Incomplete Parse - Remaining: \n{self.remaining}"


class ContextualError(ParseError):
    """A failure annotated with the grammar region it occurred in."""

    code = ErrorCode.CONTEXTUAL

    def __init__(self, label: str, error: ParseError) -> None:
        super().__init__(label, error)

    @property
    def label(self) -> str:
        return self.args[0]

    @property
    def error(self) -> ParseError:
        return self.args[1]

    @property
    def message(self) -> str:
        return f"Parsing Error in {self.label}"


class EitherError(ParseError):
    """Both branches of an alternation failed."""

    code = ErrorCode.EITHER

    def __init__(self, first: ParseError, second: ParseError) -> None:
        super().__init__(first, second)

    @property
    def first(self) -> ParseError:
        return self.args[0]

    @property
    def second(self) -> ParseError:
        return self.args[1]

    @property
    def message(self) -> str:
        return "Parsing Failed in Either"
