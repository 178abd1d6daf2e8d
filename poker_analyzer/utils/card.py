"""Card value type and the text codec that builds it."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering

from poker_analyzer.utils.constants import RANK_VALUES, SUIT_SYMBOLS, Rank, Suit
from poker_analyzer.utils.errors import InvalidCardError

_SYMBOL_SUITS: dict[str, Suit] = {sym: suit for suit, sym in SUIT_SYMBOLS.items()}

# One card inside free text: "Ah", "10d", "t♠"
_CARD_TOKEN = re.compile(r"(10|[2-9tjqka])([hdcs♥♦♣♠])", re.IGNORECASE)


@total_ordering
@dataclass(frozen=True)
class Card:
    """Represents a single playing card."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_str(cls, s: str) -> Card:
        """Create a Card from a 2-character string like 'Ah' or 'Td'.

        Raises:
            InvalidCardError: If the string is not exactly 2 characters or
                contains invalid rank/suit characters.
        """
        if len(s) != 2:
            raise InvalidCardError(f"Card string must be 2 characters, got '{s}'")
        try:
            rank = Rank(s[0])
        except ValueError:
            raise InvalidCardError(f"Invalid rank character: '{s[0]}'") from None
        try:
            suit = Suit(s[1])
        except ValueError:
            raise InvalidCardError(f"Invalid suit character: '{s[1]}'") from None
        return cls(rank=rank, suit=suit)

    @property
    def value(self) -> int:
        """Numeric value of the card's rank (2-14)."""
        return RANK_VALUES[self.rank]

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __repr__(self) -> str:
        return f"Card('{self}')"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.value < other.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))


def normalize_card(token: str) -> Card:
    """Parse a loosely formatted card token.

    Rank and suit are case-insensitive, "10" is accepted for the ten and
    suit symbols (♥ ♦ ♣ ♠) are accepted alongside h/d/c/s.

    Raises:
        InvalidCardError: On anything that is not {rank}{suit} after the
            "10" → "T" collapse.
    """
    if not isinstance(token, str):
        raise InvalidCardError(f"Card token must be a string, got {token!r}")
    s = token.strip()
    if len(s) == 3 and s.startswith("10"):
        s = "T" + s[2]
    if len(s) != 2:
        raise InvalidCardError(f"Malformed card token: '{token}'")

    rank_ch, suit_ch = s[0].upper(), s[1]
    suit_ch = _SYMBOL_SUITS.get(suit_ch, suit_ch.lower())
    try:
        return Card.from_str(rank_ch + suit_ch)
    except InvalidCardError as e:
        raise InvalidCardError(f"Unrecognized card '{token}': {e}") from None


def parse_cards(cards: str | Iterable[str]) -> tuple[Card, ...]:
    """Parse several cards at once.

    Accepts a list of tokens, a separated string ("Ah Kd", "Ah,10d") or
    a run-together string ("AhKd").
    """
    if not isinstance(cards, str):
        return tuple(normalize_card(t) for t in cards)

    text = cards.strip()
    if not text:
        return ()
    parts = [p for p in re.split(r"[\s,]+", text) if p]
    if len(parts) > 1:
        return tuple(normalize_card(p) for p in parts)

    # Run-together: the matches must cover the whole string
    matches = list(_CARD_TOKEN.finditer(text))
    if not matches or "".join(m.group(0) for m in matches) != text:
        raise InvalidCardError(f"Cannot split '{cards}' into cards")
    return tuple(normalize_card(m.group(0)) for m in matches)
