#!/usr/bin/env python
"""
Wildcard Matching

This module decides whether a whole sequence of symbols matches a whole pattern.
Sequences and patterns are usually strings, but any finite sequence of symbols
works (bytes, lists of tokens, tuples of numbers...). The symbols that act as
wildcards are described by a Cards record (see wildcards/cards.py):

  - '*' matches zero or more symbols.
  - '?' matches exactly one symbol.
  - '\\' makes the next pattern symbol a literal. A trailing '\\' is ignored.
  - '[abc]' matches one symbol equal to a member, '[!abc]' one symbol equal to none.
    The first member is always literal, so '[]]' is the set holding ']'.
    An opener without a closer ('[abc') is matched as a literal '['.

Symbols are compared with an equality predicate, operator.eq unless the caller
supplies another one (casefold_equal gives case-insensitive text matching).

The set grammar is handled by three small state machines that share one shape:

  - is_set     looks ahead and tells whether a well-formed set starts here.
  - skip_set   returns the position right after a well-formed set.
  - match_set  consumes one sequence symbol against a set and resumes matching.

The matcher explores the alternatives of '*' with an explicit work stack rather
than native recursion, and remembers the (sequence, pattern, escape) states it
has already visited. Long inputs therefore never hit the interpreter's recursion
limit, and pathological patterns such as '*a*a*a*a*b' stay polynomial.
"""

import enum
import logging
import operator
from collections.abc import Sequence
from typing import Any, Callable, Optional

from .cards import Cards, default_cards

Equal = Callable[[Any, Any], bool]

# ------------------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------------------
# A plain non-match is never an error: match() returns False. These exceptions
# report patterns or states that a set routine was told to trust but cannot.

class WildcardsError(Exception):
    """Base class for all errors raised by the wildcards package."""


class InvalidSetError(WildcardsError, ValueError):
    """Raised when a set that is required to be valid is not."""


class SetsDisabledError(InvalidSetError):
    """Raised when a set routine is used while the cards disable sets."""


class UnreachableStateError(WildcardsError, RuntimeError):
    """Raised when a set state machine is driven into a state it does not know."""


def _unreachable(state) -> UnreachableStateError:
    return UnreachableStateError(
        f"The program execution should never end up here (state {state!r})"
    )

# ------------------------------------------------------------------------------
# Equality Predicates
# ------------------------------------------------------------------------------

def casefold_equal(a, b) -> bool:
    """Compare two symbols case-insensitively when both are strings."""
    if isinstance(a, str) and isinstance(b, str):
        return a.casefold() == b.casefold()
    return a == b


def _as_sequence(symbols) -> Sequence:
    # Strings, bytes, lists and tuples are indexed in place; other iterables
    # (generators, sets of lines...) are read once into a tuple.
    if isinstance(symbols, Sequence):
        return symbols
    return tuple(symbols)

# ------------------------------------------------------------------------------
# Set Validator
# ------------------------------------------------------------------------------

class IsSetState(enum.Enum):
    OPEN = "open"                  # expects set_open
    NOT_OR_FIRST = "not_or_first"  # expects set_not or the first member
    FIRST = "first"                # the first member after set_not
    NEXT = "next"                  # further members until set_close


def is_set(pattern, p: int = 0, cards: Optional[Cards] = None,
           state: IsSetState = IsSetState.OPEN) -> bool:
    """
    Check whether a well-formed set starts at position p of the pattern.

    The scan only looks at the pattern. The first member of a set may be any
    symbol, delimiters included, so '[]' followed by nothing is not a set
    while '[]]' is.

    Parameters:
        pattern: The pattern to inspect.
        p (int): The position to start scanning from.
        cards (Cards): The symbol configuration (default: derived from the pattern).
        state (IsSetState): The state at position p. Use NOT_OR_FIRST when p is
                            already past the set opener.

    Returns:
        bool: True if a set_close terminates the set, False if the pattern ends
              first or sets are disabled.
    """
    if cards is None:
        cards = default_cards(pattern)
    if not cards.set_enabled:
        return False

    pattern = _as_sequence(pattern)
    pend = len(pattern)
    while p < pend:
        symbol = pattern[p]
        if state is IsSetState.OPEN:
            if symbol != cards.set_open:
                return False
            state = IsSetState.NOT_OR_FIRST
        elif state is IsSetState.NOT_OR_FIRST:
            state = IsSetState.FIRST if symbol == cards.set_not else IsSetState.NEXT
        elif state is IsSetState.FIRST:
            state = IsSetState.NEXT
        elif state is IsSetState.NEXT:
            if symbol == cards.set_close:
                return True
        else:
            raise _unreachable(state)
        p += 1
    return False

# ------------------------------------------------------------------------------
# Set Skipper
# ------------------------------------------------------------------------------

class SkipSetState(enum.Enum):
    OPEN = "open"
    NOT_OR_FIRST = "not_or_first"
    FIRST = "first"
    NEXT = "next"


def skip_set(pattern, p: int = 0, cards: Optional[Cards] = None,
             state: SkipSetState = SkipSetState.OPEN) -> int:
    """
    Return the pattern position immediately after the set starting at p.

    The caller is expected to have checked the set with is_set() first; a set
    that turns out to be malformed is reported, never guessed at.

    Raises:
        SetsDisabledError: If the cards disable sets.
        InvalidSetError: If no set_open is found at p, or the pattern ends
                         before the set_close.
    """
    if cards is None:
        cards = default_cards(pattern)
    if not cards.set_enabled:
        raise SetsDisabledError("The use of sets is disabled")

    pattern = _as_sequence(pattern)
    pend = len(pattern)
    while p < pend:
        symbol = pattern[p]
        if state is SkipSetState.OPEN:
            if symbol != cards.set_open:
                raise InvalidSetError("The given pattern is not a valid set")
            state = SkipSetState.NOT_OR_FIRST
        elif state is SkipSetState.NOT_OR_FIRST:
            state = SkipSetState.FIRST if symbol == cards.set_not else SkipSetState.NEXT
        elif state is SkipSetState.FIRST:
            state = SkipSetState.NEXT
        elif state is SkipSetState.NEXT:
            if symbol == cards.set_close:
                return p + 1
        else:
            raise _unreachable(state)
        p += 1
    raise InvalidSetError("The given pattern is not a valid set")

# ------------------------------------------------------------------------------
# Set Matcher
# ------------------------------------------------------------------------------

class MatchSetState(enum.Enum):
    OPEN = "open"                        # expects set_open
    NOT_OR_FIRST_IN = "not_or_first_in"  # set_not, or the first member of an inclusion set
    FIRST_OUT = "first_out"              # the first member of a negated set
    SKIP_NEXT_IN = "skip_next_in"        # inclusion set already matched, skip to set_close
    NEXT_IN = "next_in"                  # inclusion set, no member matched yet
    NEXT_OUT = "next_out"                # negated set, no member matched so far


def _match_set_symbol(sequence: Sequence, s: int, pattern: Sequence, p: int,
                      cards: Cards, equal: Equal, state: MatchSetState) -> Optional[int]:
    # Runs the set state machine for the sequence symbol at s. Returns the
    # pattern position after set_close when the symbol is accepted, None when
    # it is rejected.
    if not cards.set_enabled:
        raise SetsDisabledError("The use of sets is disabled")

    send, pend = len(sequence), len(pattern)
    while p < pend:
        symbol = pattern[p]
        if state is MatchSetState.OPEN:
            if symbol != cards.set_open:
                raise InvalidSetError("The given pattern is not a valid set")
            state = MatchSetState.NOT_OR_FIRST_IN
        elif state is MatchSetState.NOT_OR_FIRST_IN:
            if symbol == cards.set_not:
                state = MatchSetState.FIRST_OUT
            elif s == send:
                return None
            elif equal(sequence[s], symbol):
                state = MatchSetState.SKIP_NEXT_IN
            else:
                state = MatchSetState.NEXT_IN
        elif state is MatchSetState.FIRST_OUT:
            if s == send or equal(sequence[s], symbol):
                return None
            state = MatchSetState.NEXT_OUT
        elif state is MatchSetState.SKIP_NEXT_IN:
            if symbol == cards.set_close:
                return p + 1
        elif state is MatchSetState.NEXT_IN:
            if symbol == cards.set_close or s == send:
                return None
            if equal(sequence[s], symbol):
                state = MatchSetState.SKIP_NEXT_IN
        elif state is MatchSetState.NEXT_OUT:
            if symbol == cards.set_close:
                return p + 1
            if s == send or equal(sequence[s], symbol):
                return None
        else:
            raise _unreachable(state)
        p += 1
    raise InvalidSetError("The given pattern is not a valid set")


def match_set(sequence, pattern, cards: Optional[Cards] = None, equal: Optional[Equal] = None,
              s: int = 0, p: int = 0, state: MatchSetState = MatchSetState.OPEN) -> bool:
    """
    Match one sequence symbol against the set at position p, then the rest.

    The set always consumes exactly one symbol: an inclusion set accepts it when
    a member compares equal, a negated set rejects it as soon as one does. On
    acceptance matching resumes with the sequence at s + 1 and the pattern right
    after the set_close, so the remainder of the pattern still has to match.

    Parameters:
        sequence: The sequence being tested.
        pattern: The pattern holding the set.
        cards (Cards): The symbol configuration (default: derived from the pattern).
        equal (callable): Predicate comparing a sequence symbol with a member.
        s (int): Position of the symbol to consume.
        p (int): Position of the set_open (or later, with a matching state).
        state (MatchSetState): The state at position p.

    Returns:
        bool: True if the symbol is accepted and the remainder matches.

    Raises:
        SetsDisabledError: If the cards disable sets.
        InvalidSetError: If the set is malformed where the outcome depends on it.
    """
    if cards is None:
        cards = default_cards(pattern)
    if equal is None:
        equal = operator.eq
    sequence = _as_sequence(sequence)
    pattern = _as_sequence(pattern)

    after = _match_set_symbol(sequence, s, pattern, p, cards, equal, state)
    if after is None:
        return False
    return _dowild(sequence, s + 1, pattern, after, cards, equal)

# ------------------------------------------------------------------------------
# Matcher
# ------------------------------------------------------------------------------

def _starts_set(pattern: Sequence, p: int, cards: Cards, set_starts: dict) -> bool:
    # Looks up, or validates and records, the set opened at position p.
    if p not in set_starts:
        set_starts[p] = is_set(pattern, p + 1, cards, IsSetState.NOT_OR_FIRST)
        if not set_starts[p]:
            logging.debug(f"Unterminated set at pattern position {p}; matching {pattern[p]!r} as a literal")
    return set_starts[p]


def _dowild(sequence: Sequence, s: int, pattern: Sequence, p: int,
            cards: Cards, equal: Equal, escape: bool = False) -> bool:
    """
    Match sequence[s:] against pattern[p:].

    Every entry of the work stack is a (s, p, escape) state still to be tried.
    A state either fails, finishes the match, or pushes the states it leads to.
    For '*' both alternatives are pushed, with "match nothing more" on top so it
    is explored first. States already seen are not explored again: whether a
    state can reach a full match does not depend on how it was reached.
    """
    send, pend = len(sequence), len(pattern)
    stack = [(s, p, escape)]
    seen = set()
    # is_set() result for every set opener position, computed once per call.
    set_starts = {}

    while stack:
        state = stack.pop()
        if state in seen:
            continue
        seen.add(state)
        s, p, escape = state

        if p == pend:
            if s == send:
                return True
            continue

        symbol = pattern[p]
        if escape:
            if s < send and equal(sequence[s], symbol):
                stack.append((s + 1, p + 1, False))
        elif symbol == cards.anything:
            if s < send:
                stack.append((s + 1, p, False))
            stack.append((s, p + 1, False))
        elif symbol == cards.single:
            if s < send:
                stack.append((s + 1, p + 1, False))
        elif symbol == cards.escape:
            stack.append((s, p + 1, True))
        elif cards.set_enabled and symbol == cards.set_open and _starts_set(pattern, p, cards, set_starts):
            after = _match_set_symbol(sequence, s, pattern, p + 1, cards, equal,
                                      MatchSetState.NOT_OR_FIRST_IN)
            if after is not None:
                stack.append((s + 1, after, False))
        elif s < send and equal(sequence[s], symbol):
            stack.append((s + 1, p + 1, False))

    return False


def match(sequence, pattern, cards: Optional[Cards] = None, equal: Optional[Equal] = None) -> bool:
    """
    Test whether the whole sequence matches the whole pattern.

    Parameters:
        sequence: The symbols to test (for example a string or a list of tokens).
        pattern: The pattern, made of literal symbols and the cards.
        cards (Cards): Which symbols are wildcards. Defaults to the standard glob
                       cards, expressed as byte values when the pattern is bytes.
        equal (callable): Predicate called as equal(sequence_symbol, pattern_symbol)
                          for literals and set members (default: operator.eq).

    Returns:
        bool: True if the sequence matches the pattern, False otherwise. A
              malformed set in the pattern is matched literally, never raised.
    """
    if cards is None:
        cards = default_cards(pattern)
    if equal is None:
        equal = operator.eq
    return _dowild(_as_sequence(sequence), 0, _as_sequence(pattern), 0, cards, equal)
