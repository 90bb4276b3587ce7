"""Lox numbers are IEEE 754 doubles (Python floats). This module holds the one place that decides how they are written
out: by print statements, by echoed expression values, in token listings and in the AST printer.

Integral numbers always carry exactly one decimal digit (99 -> 99.0), and other numbers use the digits of their
shortest round-trippable form written out positionally (99.50 -> 99.5, 1e-05 -> 0.00001), which never ends in a trailing
zero. Non-finite values, which only arithmetic overflow or an oversized literal can produce, print as inf, -inf and
nan.
"""

import decimal
import math


def format_number(num):
    """Returns str of num as displayed by lox."""
    num = float(num)
    if not math.isfinite(num):
        return repr(num)
    if num.is_integer():
        return f"{num:.1f}"
    return format(decimal.Decimal(repr(num)), "f")


def parse_number(lexeme):
    """Returns the value of a NUMBER lexeme. lexeme must be digits with an optional fractional part."""
    return float(lexeme)
