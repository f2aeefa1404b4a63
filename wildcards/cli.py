#!/usr/bin/env python
"""
Command Line Front End

Prints every text that matches a wildcard pattern, one per line. Texts are taken
from the command line, or from standard input (one per line) when none are given.

    wildcards-match 'H?llo,*W*!' 'Hello, World!' 'Hi there'
    ls | wildcards-match --casefold '*.[ch]'

Exit status is 0 when at least one text matched and 1 otherwise.
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional

from .cards import Cards
from .wildmatch import casefold_equal, match

# Flag name, Cards field and default symbol for every overridable card.
CARD_OPTIONS = [
    ("--anything", "anything", "*"),
    ("--single", "single", "?"),
    ("--escape", "escape", "\\"),
    ("--set-open", "set_open", "["),
    ("--set-close", "set_close", "]"),
    ("--set-not", "set_not", "!"),
]


def single_symbol(value: str) -> str:
    """argparse type accepting exactly one character."""
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"expected a single character, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wildcards-match",
        description="Prints the texts that fully match a wildcard pattern. Supported cards: '*' (any run), '?' (any single character), '\\' (escape) and sets such as [abc] or [!abc].",
    )
    parser.add_argument("pattern", help="Wildcard pattern to match against")
    parser.add_argument("texts", nargs="*", help="Texts to test (default: lines read from stdin)")
    parser.add_argument("--casefold", "-c", action="store_true", help="Enable case-insensitive matching")
    parser.add_argument("--no-sets", action="store_true", help="Treat set symbols as literal characters")
    for flag, field, default in CARD_OPTIONS:
        parser.add_argument(flag, dest=field, type=single_symbol, default=default,
                            help=f"Symbol used as the {field.replace('_', ' ')} card (default: {default!r})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debugging information")
    return parser


def cards_from_args(args: argparse.Namespace) -> Cards:
    """Build the card configuration described by the parsed command line."""
    overrides = {field: getattr(args, field) for _, field, _ in CARD_OPTIONS}
    return Cards(set_enabled=not args.no_sets, **overrides)


def filter_matches(texts: Iterable[str], pattern: str, cards: Cards, casefold: bool = False) -> List[str]:
    """Return the texts that match the pattern, in their original order."""
    equal = casefold_equal if casefold else None
    return [text for text in texts if match(text, pattern, cards, equal)]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cards = cards_from_args(args)
    # Set symbols only have a role while sets are enabled.
    active = CARD_OPTIONS if cards.set_enabled else CARD_OPTIONS[:3]
    roles = [getattr(cards, field) for _, field, _ in active]
    if len(set(roles)) != len(roles):
        logging.warning(f"Several cards share the same symbol; earlier roles take priority: {cards}")

    if args.texts:
        texts = args.texts
    else:
        texts = [line.rstrip("\r\n") for line in sys.stdin]

    matched = filter_matches(texts, args.pattern, cards, casefold=args.casefold)
    for text in matched:
        print(text)
    logging.debug(f"{len(matched)} of {len(texts)} texts matched {args.pattern!r}")
    return 0 if matched else 1


if __name__ == "__main__":
    sys.exit(main())
