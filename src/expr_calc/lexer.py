"""Token scanners and the element-count pre-scan.

The scanners work directly on ``(text, index)`` and return the index
just past what they consumed; malformed input raises an
:class:`~expr_calc.errors.ExprError` positioned in the original text.
"""

import math
import re

from .errors import (InvalidNumberError, NumberOutOfRangeError,
                     IdentifierTooLongError, UnexpectedCharacterError)

MAX_IDENT_LEN = 41

LETTERS = frozenset('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ')
DIGITS = frozenset('0123456789')
NUMBER_START = DIGITS | {'.'}
WHITESPACE = frozenset(' \t')
OPERATORS = frozenset('+-*/')
PUNCTUATION = frozenset('(),')

_IDENT_CHARS = LETTERS | DIGITS

# Exponent is only taken when digits follow, so "2e" scans as 2 then "e".
_RE_NUMBER = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


def is_number_start(text, i):
    """Does a numeric literal (without sign) start at *i*?"""
    return i < len(text) and text[i] in NUMBER_START


def scan_number(text, i):
    """Scan the longest float literal at *i*, sign included.

    Returns:
        ``(value, new_i)``

    Raises:
        InvalidNumberError if nothing numeric is there,
        NumberOutOfRangeError if the value overflows float64.
        Both point past the sign, at the digits.
    """
    m = _RE_NUMBER.match(text, i)
    err_pos = i + 1 if i < len(text) and text[i] in '+-' else i
    if not m:
        raise InvalidNumberError(err_pos)
    value = float(m.group())
    if math.isinf(value):
        raise NumberOutOfRangeError(err_pos)
    return value, m.end()


def scan_identifier(text, i, max_len=MAX_IDENT_LEN):
    """Scan a letter followed by letters/digits.

    Returns:
        ``(name, new_i)``

    Raises:
        IdentifierTooLongError at the first character past *max_len*.
    """
    start = i
    n = len(text)
    while i < n and text[i] in _IDENT_CHARS:
        if i - start == max_len:
            raise IdentifierTooLongError(i)
        i += 1
    return text[start:i], i


def count_elements(text):
    """Upper bound on the number of elements *text* compiles to.

    One per number, identifier and operator character; none for
    parentheses, commas and whitespace.  Unary plus and signs folded into
    literals are counted too, which only overestimates.

    Raises the lexical errors the compiler would raise on the same token.
    """
    i = 0
    n = len(text)
    count = 0
    while i < n:
        c = text[i]
        if c in LETTERS:
            _, i = scan_identifier(text, i)
            count += 1
        elif c in NUMBER_START:
            _, i = scan_number(text, i)
            count += 1
        elif c in OPERATORS:
            count += 1
            i += 1
        elif c in PUNCTUATION or c in WHITESPACE:
            i += 1
        else:
            raise UnexpectedCharacterError(i)
    return count
