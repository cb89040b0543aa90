"""Diagnostic system for parse failures.

Provides the closed ParseError hierarchy, numeric error codes and
formatting of nested error trees.

Python 3.13+. Zero external dependencies.
"""

from .codes import ErrorCode
from .errors import (
    ContextualError,
    EitherError,
    ExpectedAlphaNumericString,
    ExpectedCharacter,
    ExpectedCharactersSatisfyingPredicate,
    ExpectedNumber,
    ExpectedTerminationSequence,
    ExpectedToken,
    ExpectedType,
    ExpectedWhitespace,
    IncompleteParse,
    ParseError,
    ParsewrightError,
    TokenExpectation,
)
from .formatter import ErrorFormatter, OutputFormat

__all__ = [
    "ContextualError",
    "EitherError",
    "ErrorCode",
    "ErrorFormatter",
    "ExpectedAlphaNumericString",
    "ExpectedCharacter",
    "ExpectedCharactersSatisfyingPredicate",
    "ExpectedNumber",
    "ExpectedTerminationSequence",
    "ExpectedToken",
    "ExpectedType",
    "ExpectedWhitespace",
    "IncompleteParse",
    "OutputFormat",
    "ParseError",
    "ParsewrightError",
    "TokenExpectation",
]
