# wildcards/cards.py
"""
Card Configuration

A "card" is a pattern symbol with special meaning. This module defines the
record that tells the matcher which symbol values play which role:

  - anything   matches zero or more symbols (glob '*').
  - single     matches exactly one symbol (glob '?').
  - escape     strips the special meaning of the next pattern symbol (glob '\\').
  - set_open, set_close, set_not
               delimit a set of member symbols, optionally negated (glob '[...]', '[!...]').
  - set_enabled
               when False, the three set symbols are plain literals.

Text patterns use the familiar glob characters. Iterating bytes yields integers,
so byte patterns get the same cards expressed as byte values.
"""

from typing import Any, NamedTuple


class Cards(NamedTuple):
    """
    Immutable symbol configuration shared by every step of a match.

    Any subset of the fields can be overridden by keyword; the rest keep the
    standard glob defaults. Use ``cards._replace(...)`` to derive a variant.
    """

    anything: Any = '*'
    single: Any = '?'
    escape: Any = '\\'
    set_open: Any = '['
    set_close: Any = ']'
    set_not: Any = '!'
    set_enabled: bool = True


# Standard glob cards for text patterns.
DEFAULT_CARDS = Cards()

# The same cards as byte values, for bytes, bytearray and memoryview patterns.
BYTES_CARDS = Cards(
    anything=ord('*'),
    single=ord('?'),
    escape=ord('\\'),
    set_open=ord('['),
    set_close=ord(']'),
    set_not=ord('!'),
)


def default_cards(pattern) -> Cards:
    """Return the default cards suited to the symbol type of the given pattern."""
    if isinstance(pattern, (bytes, bytearray, memoryview)):
        return BYTES_CARDS
    return DEFAULT_CARDS
