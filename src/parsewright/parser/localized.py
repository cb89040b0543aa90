"""Locale-aware number primitive.

- decimal() returns Parser[Decimal] for numbers written with a locale's
  group and decimal symbols ("1,234.56" in en_US, "1 234,56" in lv_LV)
- Raises BabelImportError at construction if Babel is not installed

Babel Dependency:
    This module requires Babel for CLDR data. Import is deferred to parser
    construction time so core installations never load it.

Thread-safe. Locale symbols are resolved once, when the parser is built.

Python 3.13+.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from parsewright.constants import ASCII_DIGITS
from parsewright.core.babel_compat import (
    get_babel_numbers,
    get_locale_class,
    get_number_format_error,
    get_unknown_locale_error,
    normalize_locale,
    require_babel,
)
from parsewright.diagnostics import ExpectedNumber

from .core import Parser
from .cursor import ParseState

__all__ = ["decimal"]

logger = logging.getLogger(__name__)


def decimal(locale_code: str) -> Parser[Decimal]:
    """Parse a localized number to Decimal.

    Consumes an optional minus sign (ASCII "-" or the locale's own minus
    sign) followed by a digit and then any run of digits, group symbols and
    decimal symbols. Separators trailing the run are left unconsumed, so a
    number may be followed by sentence punctuation. The span is converted
    with Babel's parse_decimal.

    Fails with ExpectedNumber without consuming input when no digit is
    present or Babel rejects the span.

    Args:
        locale_code: BCP 47 or POSIX locale identifier ("en-US", "lv_LV")

    Returns:
        Parser producing Decimal values

    Raises:
        BabelImportError: If Babel is not installed
        ValueError: If the locale is unknown

    Examples:
        >>> decimal("en_US").run_partial("1,234.56 EUR")
        (Decimal('1234.56'), ' EUR')

        >>> decimal("lv_LV").run_partial("-100,50.")
        (Decimal('-100.50'), '.')
    """
    require_babel("decimal")
    locale_class = get_locale_class()
    unknown_locale_error_class = get_unknown_locale_error()
    number_format_error_class = get_number_format_error()
    numbers = get_babel_numbers()

    try:
        locale = locale_class.parse(normalize_locale(locale_code))
    except (unknown_locale_error_class, ValueError) as e:
        msg = f"Unknown locale: {locale_code!r}"
        raise ValueError(msg) from e

    group = numbers.get_group_symbol(locale)
    point = numbers.get_decimal_symbol(locale)
    minus_signs = tuple(dict.fromkeys((numbers.get_minus_sign_symbol(locale), "-")))
    separators = frozenset((group, point))
    digits = frozenset(ASCII_DIGITS)
    body_chars = digits | separators

    def decimal_parser(state: ParseState) -> Decimal:
        cursor = state.cursor
        sign = next((m for m in minus_signs if cursor.startswith(m)), "")
        body_start = cursor.advance(len(sign))
        if body_start.peek() not in digits:
            raise ExpectedNumber()

        body, _ = body_start.take_while(body_chars.__contains__)
        body = body.rstrip("".join(separators))
        candidate = ("-" if sign else "") + body
        try:
            value = numbers.parse_decimal(candidate, locale=locale)
        except (number_format_error_class, InvalidOperation, ValueError) as e:
            logger.debug("Babel rejected %r for locale %s: %s", candidate, locale_code, e)
            raise ExpectedNumber() from e

        state.cursor = body_start.advance(len(body))
        return value

    return Parser(decimal_parser, f"decimal({locale_code!r})")
