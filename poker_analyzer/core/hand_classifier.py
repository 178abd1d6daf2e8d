"""Starting-hand notation and preflop strength tiers.

Hand notation:
  - "AA"   → pocket pair (6 combos)
  - "AKs"  → suited (4 combos)
  - "AKo"  → offsuit (12 combos)

Tiers are looked up in fixed membership tables, checked in priority
order premium > strong > medium > speculative > weak. Anything not
listed is trash, so hand_tier() is total over all 169 notations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

import numpy as np

from poker_analyzer.utils.card import Card
from poker_analyzer.utils.constants import RANK_VALUES, Rank, Tier

# Ranks ordered high to low, also the row/column order of the 13x13 chart
_RANKS_DESCENDING: list[Rank] = [
    Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN,
    Rank.NINE, Rank.EIGHT, Rank.SEVEN, Rank.SIX, Rank.FIVE,
    Rank.FOUR, Rank.THREE, Rank.TWO,
]

_RANK_INDEX: dict[Rank, int] = {r: i for i, r in enumerate(_RANKS_DESCENDING)}

TOTAL_COMBOS = 1326


class HandType(StrEnum):
    PAIR = "pair"
    SUITED = "suited"
    OFFSUIT = "offsuit"


@dataclass(frozen=True)
class HandNotation:
    """A starting hand in standard poker notation (e.g. AKs, JJ, T9o)."""

    rank1: Rank
    rank2: Rank
    hand_type: HandType

    @classmethod
    def from_str(cls, s: str) -> HandNotation:
        """Parse notation like 'AKs', 'JJ', 'T9o'.

        Raises:
            ValueError: If notation is invalid.
        """
        if len(s) < 2 or len(s) > 3:
            raise ValueError(f"Invalid hand notation: '{s}'")

        r1 = Rank(s[0].upper())
        r2 = Rank(s[1].upper())

        if r1 == r2:
            if len(s) == 3:
                raise ValueError(f"Pairs take no suit indicator: '{s}'")
            return cls(rank1=r1, rank2=r2, hand_type=HandType.PAIR)

        if _RANK_INDEX[r1] > _RANK_INDEX[r2]:
            r1, r2 = r2, r1

        if len(s) != 3 or s[2] not in ("s", "o"):
            raise ValueError(f"Invalid suit indicator in '{s}'")
        hand_type = HandType.SUITED if s[2] == "s" else HandType.OFFSUIT
        return cls(rank1=r1, rank2=r2, hand_type=hand_type)

    @property
    def combo_count(self) -> int:
        if self.hand_type == HandType.PAIR:
            return 6
        if self.hand_type == HandType.SUITED:
            return 4
        return 12

    @property
    def is_pair(self) -> bool:
        return self.hand_type == HandType.PAIR

    def __str__(self) -> str:
        r = f"{self.rank1.value}{self.rank2.value}"
        if self.hand_type == HandType.PAIR:
            return r
        if self.hand_type == HandType.SUITED:
            return r + "s"
        return r + "o"


def classify_hand(card1: Card, card2: Card) -> HandNotation:
    """Convert two specific cards to their notation form."""
    r1, r2 = card1.rank, card2.rank
    # Ensure rank1 is the higher rank
    if RANK_VALUES[r1] < RANK_VALUES[r2]:
        r1, r2 = r2, r1

    if r1 == r2:
        return HandNotation(r1, r2, HandType.PAIR)
    if card1.suit == card2.suit:
        return HandNotation(r1, r2, HandType.SUITED)
    return HandNotation(r1, r2, HandType.OFFSUIT)


# ---------------------------------------------------------------------------
# Tier tables
# ---------------------------------------------------------------------------

TIER_TABLES: MappingProxyType[Tier, frozenset[str]] = MappingProxyType({
    Tier.PREMIUM: frozenset({"AA", "KK", "QQ", "AKs", "AKo"}),
    Tier.STRONG: frozenset({"JJ", "TT", "AQs", "AQo", "AJs", "ATs", "KQs"}),
    Tier.MEDIUM: frozenset({
        "99", "88", "AJo", "ATo", "KQo", "KJs", "KTs", "QJs", "QTs", "JTs",
    }),
    Tier.SPECULATIVE: frozenset({
        "77", "66", "55", "44", "33", "22",
        "A9s", "A8s", "A7s", "A6s", "A5s", "A4s", "A3s", "A2s",
        "KJo", "KTo", "QJo", "JTo",
        "T9s", "98s", "87s", "76s", "65s", "54s",
    }),
    Tier.WEAK: frozenset({
        "K9s", "K8s", "K7s", "K6s", "K5s", "K4s", "K3s", "K2s",
        "Q9s", "Q8s", "J9s", "T8s",
    }),
})

# Strongest first; trash is the fallback and has no table
TIER_ORDER: tuple[Tier, ...] = tuple(Tier)


def hand_tier(hand: HandNotation | str) -> Tier:
    """Look up the preflop tier of a starting hand. Never raises for a
    well-formed notation; unlisted hands are trash."""
    key = str(hand)
    for tier, members in TIER_TABLES.items():
        if key in members:
            return tier
    return Tier.TRASH


def _chart_notation(row: int, col: int) -> HandNotation:
    """Notation at a 13x13 chart cell: pairs on the diagonal, suited
    above it, offsuit below it."""
    hi, lo = sorted((row, col))
    r1, r2 = _RANKS_DESCENDING[hi], _RANKS_DESCENDING[lo]
    if row == col:
        return HandNotation(r1, r2, HandType.PAIR)
    if row < col:
        return HandNotation(r1, r2, HandType.SUITED)
    return HandNotation(r1, r2, HandType.OFFSUIT)


def _build_chart() -> tuple[np.ndarray, np.ndarray]:
    tiers = np.empty((13, 13), dtype=np.int64)
    weights = np.empty((13, 13), dtype=np.int64)
    for row in range(13):
        for col in range(13):
            hand = _chart_notation(row, col)
            tiers[row, col] = TIER_ORDER.index(hand_tier(hand))
            weights[row, col] = hand.combo_count
    tiers.setflags(write=False)
    weights.setflags(write=False)
    return tiers, weights


_TIER_CHART, _COMBO_WEIGHTS = _build_chart()


def tier_chart() -> np.ndarray:
    """Read-only 13x13 grid of tier indices (into TIER_ORDER)."""
    return _TIER_CHART


def tier_coverage() -> dict[Tier, float]:
    """Percentage of all 1326 starting combos that fall in each tier."""
    combos = np.bincount(
        _TIER_CHART.ravel(),
        weights=_COMBO_WEIGHTS.ravel(),
        minlength=len(TIER_ORDER),
    )
    pct = combos / TOTAL_COMBOS * 100
    return {tier: float(pct[i]) for i, tier in enumerate(TIER_ORDER)}


def top_percent(tier: Tier) -> float:
    """Share of starting hands (in %) that are this tier or better."""
    coverage = np.array([tier_coverage()[t] for t in TIER_ORDER])
    return float(np.cumsum(coverage)[TIER_ORDER.index(tier)])


# ---------------------------------------------------------------------------
# Simplified equity estimate
# ---------------------------------------------------------------------------


class RangeWidth(StrEnum):
    VERY_TIGHT = "very_tight"
    TIGHT = "tight"
    MEDIUM = "medium"
    LOOSE = "loose"
    VERY_LOOSE = "very_loose"


_BASE_EQUITY: MappingProxyType[Tier, float] = MappingProxyType({
    Tier.PREMIUM: 0.85,
    Tier.STRONG: 0.70,
    Tier.MEDIUM: 0.55,
    Tier.SPECULATIVE: 0.40,
    Tier.WEAK: 0.30,
    Tier.TRASH: 0.20,
})

_RANGE_ADJUSTMENT: MappingProxyType[RangeWidth, float] = MappingProxyType({
    RangeWidth.VERY_TIGHT: -0.15,
    RangeWidth.TIGHT: -0.10,
    RangeWidth.MEDIUM: 0.0,
    RangeWidth.LOOSE: 0.10,
    RangeWidth.VERY_LOOSE: 0.15,
})


def estimate_equity(tier: Tier, range_width: RangeWidth = RangeWidth.MEDIUM) -> float:
    """Rough preflop equity of a tier against a range of the given width.

    A table lookup, not a simulation. Clamped to [0.05, 0.95].
    """
    equity = _BASE_EQUITY[tier] + _RANGE_ADJUSTMENT[range_width]
    return min(max(equity, 0.05), 0.95)
