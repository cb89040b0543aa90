"""Parser combinator module.

Module Organization:
- cursor.py: Cursor snapshots and the per-run ParseState
- core.py: Parser value type, combinators and operators
- primitives.py: Primitive constructors (tokens, predicates, numbers, whitespace)
- localized.py: Babel-backed locale-aware numbers (optional extra)

Public API:
    Parser: Composable parser value
    Cursor, ParseState: Input position and per-run state (advanced usage)
"""

from parsewright.parser.core import ParseFunction, Parser
from parsewright.parser.cursor import Cursor, ParseState
from parsewright.parser.localized import decimal
from parsewright.parser.primitives import (
    character_where,
    characters_where,
    choice,
    comma_separator,
    empty,
    enumeration,
    fail,
    is_inline_space,
    is_newline,
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

__all__ = [
    "Cursor",
    "ParseFunction",
    "ParseState",
    "Parser",
    "character_where",
    "characters_where",
    "choice",
    "comma_separator",
    "decimal",
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
