"""Quickstart - Building Grammars with parsewright.

CORE ONLY: Examples 1-4 work WITHOUT Babel. Example 5 needs the extra:
    pip install parsewright[babel]

Demonstrates:

1. Primitives and operators
2. Repetition with sequence() and many()
3. Recursive grammars with lazy()
4. Structured errors and ErrorFormatter output formats
5. Locale-aware numbers with decimal()

Python 3.13+.
"""

from __future__ import annotations


def example_1_primitives() -> None:
    """Combine primitives with |, >> and <<."""
    from parsewright import number, token, whitespace

    print("=" * 60)
    print("Example 1: Primitives and Operators")
    print("=" * 60)

    bracketed = token("[") >> number() << token("]")
    keyword = token("on") | token("off")
    setting = keyword << whitespace() >> number()

    print(f"bracketed on '[42] rest': {bracketed.run_partial('[42] rest')}")
    print(f"keyword on 'off':         {keyword.run('off')}")
    print(f"setting on 'on   7':      {setting.run('on   7')}")
    print()


def example_2_repetition() -> None:
    """Collect lists of values."""
    from parsewright import number, space, token

    print("=" * 60)
    print("Example 2: Repetition")
    print("=" * 60)

    numbers = number().sequence()
    words = (token("ab") << space().optional()).many()

    print(f"number().sequence() on '1, 2,3': {numbers.run('1, 2,3')}")
    print(f"many() on 'ab ab ab':            {words.run('ab ab ab')}")
    print()


def example_3_recursion() -> None:
    """Define a self-referencing grammar."""
    from parsewright import Parser, lazy, number, token

    print("=" * 60)
    print("Example 3: Recursive Grammars")
    print("=" * 60)

    # value := number | "[" value ("," value)* "]"
    value: Parser[object] = number() | (
        token("[") >> lazy(lambda: value, "value").sequence() << token("]")
    )

    print(f"value on '[1, [2, 3], []]': {value.run('[1, [2, 3], []]')}")
    print()


def example_4_errors() -> None:
    """Render a failure in every output format."""
    from parsewright import ErrorFormatter, OutputFormat, ParseError, number, token

    print("=" * 60)
    print("Example 4: Structured Errors")
    print("=" * 60)

    pair = (number() << token("=") >> (number() | token("none"))).context("pair")

    try:
        pair.run("1=?")
    except ParseError as error:
        for output_format in OutputFormat:
            print(f"[{output_format}]")
            print(ErrorFormatter(output_format=output_format).format(error))
    print()


def example_5_localized() -> None:
    """Parse numbers written with locale-specific separators."""
    from parsewright import BabelImportError, decimal

    print("=" * 60)
    print("Example 5: Locale-Aware Numbers")
    print("=" * 60)

    try:
        for locale_code, text in (("en_US", "1,234.56"), ("de_DE", "1.234,56"), ("lv_LV", "-0,5")):
            print(f"{locale_code}: {text!r} -> {decimal(locale_code).run(text)!r}")
    except BabelImportError as e:
        print(f"Skipped: {e}")
    print()


def main() -> None:
    """Run all quickstart examples."""
    print()
    print("parsewright Quickstart")
    print()

    example_1_primitives()
    example_2_repetition()
    example_3_recursion()
    example_4_errors()
    example_5_localized()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
