"""parsewright - composable parser combinators with structured errors.

Grammars are built from small immutable Parser values and run against text.
Failures are structured, nested ParseError trees that render as readable
diagnostics.

Public API:
    Parser - Composable parser value (map, bind, sequence, many, context, ...)
    Parsable - Mixin for types that declare their own grammar
    token, number, whitespace, until, ... - Primitive constructors
    ErrorFormatter - Render error trees as text, one line, or JSON

Exceptions:
    ParsewrightError - Base exception class
    ParseError - Root of the closed set of parse failures
    DepthLimitExceededError - Recursive grammar nested too deeply
    BabelImportError - Locale-aware parsing used without Babel installed

Submodules:
    parsewright.parser - Parser value, cursor, primitives, localized numbers
    parsewright.diagnostics - Error types, codes and formatting
    parsewright.core - Depth guard and optional Babel integration
"""

# Essential Public API
from .core import BabelImportError, DepthLimitExceededError
from .diagnostics import (
    ContextualError,
    EitherError,
    ErrorCode,
    ErrorFormatter,
    ExpectedAlphaNumericString,
    ExpectedCharacter,
    ExpectedCharactersSatisfyingPredicate,
    ExpectedNumber,
    ExpectedTerminationSequence,
    ExpectedToken,
    ExpectedType,
    ExpectedWhitespace,
    IncompleteParse,
    OutputFormat,
    ParseError,
    ParsewrightError,
    TokenExpectation,
)
from .parsable import Parsable
from .parser import (
    Cursor,
    Parser,
    ParseState,
    character_where,
    characters_where,
    choice,
    decimal,
    empty,
    enumeration,
    fail,
    lazy,
    newline,
    number,
    optional_whitespace,
    raw_value,
    space,
    succeed,
    token,
    until,
    whitespace,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("parsewright")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BabelImportError",
    "ContextualError",
    "Cursor",
    "DepthLimitExceededError",
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
    "ParseState",
    "Parsable",
    "Parser",
    "ParsewrightError",
    "TokenExpectation",
    "__version__",
    "character_where",
    "characters_where",
    "choice",
    "decimal",
    "empty",
    "enumeration",
    "fail",
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
