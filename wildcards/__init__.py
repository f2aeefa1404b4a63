"""
wildcards - whole-sequence wildcard matching with configurable cards.

    >>> from wildcards import match
    >>> match("Hello, World!", "H?llo,*W*!")
    True
"""

from .cards import BYTES_CARDS, DEFAULT_CARDS, Cards, default_cards
from .wildmatch import (
    InvalidSetError,
    IsSetState,
    MatchSetState,
    SetsDisabledError,
    SkipSetState,
    UnreachableStateError,
    WildcardsError,
    casefold_equal,
    is_set,
    match,
    match_set,
    skip_set,
)

__version__ = "1.0.0"
