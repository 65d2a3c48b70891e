"""
Static, in-memory quote collection.

The collection is loaded once when the application is built and never changes
afterwards, so reads need no locking. Two lookups are supported: a uniformly
random pick and an exact match on the integer quote ID.
"""

from __future__ import annotations

import random
import re
from typing import Iterable, Iterator, Optional, Union

from quote_api.schemas.quotes import Quote

_QUOTE_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

DEFAULT_QUOTES: tuple[Quote, ...] = tuple(
    Quote(id=quote_id, text=text, author=author)
    for quote_id, text, author in [
        (1, "The only limit to our realization of tomorrow is our doubts of today.", "Franklin D. Roosevelt"),
        (2, "Life is 10% what happens to us and 90% how we react to it.", "Charles R. Swindoll"),
        (3, "The purpose of our lives is to be happy.", "Dalai Lama"),
        (4, "Get busy living or get busy dying.", "Stephen King"),
        (5, "You only live once, but if you do it right, once is enough.", "Mae West"),
        (6, "In the middle of every difficulty lies opportunity.", "Albert Einstein"),
        (7, "The best time to plant a tree was 20 years ago. The second best time is now.", "Chinese Proverb"),
        (8, "It is during our darkest moments that we must focus to see the light.", "Aristotle"),
        (9, "Do what you can, with what you have, where you are.", "Theodore Roosevelt"),
        (10, "Success is not final, failure is not fatal: it is the courage to continue that counts.", "Winston Churchill"),
        (11, "Believe you can and you're halfway there.", "Theodore Roosevelt"),
        (12, "The only impossible journey is the one you never begin.", "Tony Robbins"),
    ]
)


def parse_quote_id(raw: Union[int, str]) -> Optional[int]:
    """
    Normalize a quote ID taken from a URL path segment.

    Args:
        raw: Integer ID or the raw path segment

    Returns:
        The integer ID, or None if the value is not a base-10 integer
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw

    value = raw.strip()
    if not _QUOTE_ID_PATTERN.fullmatch(value):
        return None
    return int(value)


class QuoteStore:
    """
    Read-only, ordered collection of quotes.

    Attributes:
        _quotes: Quotes in load order
        _by_id: Index from quote ID to quote

    Example:
        >>> store = QuoteStore(DEFAULT_QUOTES)
        >>> store.get_by_id(1).author
        'Franklin D. Roosevelt'
        >>> store.get_by_id("nope") is None
        True
    """

    def __init__(self, quotes: Iterable[Quote]):
        """
        Load the collection.

        Args:
            quotes: Quotes in the order they should be listed

        Raises:
            ValueError: If the collection is empty or two quotes share an ID
        """
        self._quotes = tuple(quotes)
        if not self._quotes:
            raise ValueError("QuoteStore requires at least one quote")

        self._by_id: dict[int, Quote] = {}
        for quote in self._quotes:
            if quote.id in self._by_id:
                raise ValueError(f"Duplicate quote id: {quote.id}")
            self._by_id[quote.id] = quote

    def __len__(self) -> int:
        return len(self._quotes)

    def __iter__(self) -> Iterator[Quote]:
        return iter(self._quotes)

    def get_random(self) -> Quote:
        """Return a quote chosen uniformly at random."""
        return random.choice(self._quotes)

    def get_by_id(self, quote_id: Union[int, str]) -> Optional[Quote]:
        """
        Look up a quote by exact ID.

        Args:
            quote_id: Integer ID or raw path segment

        Returns:
            The matching quote, or None if no quote matches (including malformed IDs)
        """
        normalized = parse_quote_id(quote_id)
        if normalized is None:
            return None
        return self._by_id.get(normalized)

    def get_all(self) -> tuple[Quote, ...]:
        """Return every quote in load order."""
        return self._quotes
