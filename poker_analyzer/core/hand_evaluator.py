"""Made-hand and draw classification for hero cards plus board."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from poker_analyzer.utils.card import Card
from poker_analyzer.utils.constants import DrawType, HandCategory


@dataclass(frozen=True)
class HandStrengthResult:
    """Category of the best made hand plus any outstanding draw."""

    category: HandCategory
    draw: DrawType | None = None

    @property
    def rank(self) -> int:
        return int(self.category)

    @property
    def name(self) -> str:
        return self.category.label

    def __str__(self) -> str:
        if self.draw:
            return f"{self.name} with {self.draw}"
        return self.name


class HandStrengthEvaluator:
    """Classifies 2 to 7 cards into a made-hand category.

    Only the category is determined; kickers are not compared.
    """

    @staticmethod
    def evaluate(cards: list[Card] | tuple[Card, ...]) -> HandStrengthResult:
        """Evaluate hero cards plus board.

        Args:
            cards: 2 to 7 cards (hole cards + community cards).

        Raises:
            ValueError: If fewer than 2 or more than 7 cards are provided.
        """
        if not 2 <= len(cards) <= 7:
            raise ValueError(f"Need 2 to 7 cards, got {len(cards)}")

        rank_counts = Counter(c.value for c in cards)
        suit_counts = Counter(c.suit for c in cards)
        unique_values = sorted(rank_counts)

        is_flush = any(n >= 5 for n in suit_counts.values())
        flush_draw = not is_flush and any(n == 4 for n in suit_counts.values())
        is_straight = HandStrengthEvaluator._has_straight(unique_values)

        straight_draw = None
        if not is_straight:
            straight_draw = HandStrengthEvaluator._straight_draw(unique_values)

        category = HandStrengthEvaluator._category(
            rank_counts, is_flush, is_straight,
        )

        draw: DrawType | None = None
        if flush_draw and category < HandCategory.FLUSH:
            draw = DrawType.FLUSH_DRAW
        elif straight_draw and category < HandCategory.STRAIGHT:
            draw = straight_draw
        return HandStrengthResult(category=category, draw=draw)

    @staticmethod
    def _category(
        rank_counts: Counter[int],
        is_flush: bool,
        is_straight: bool,
    ) -> HandCategory:
        counts = list(rank_counts.values())
        pairs = counts.count(2)
        trips = counts.count(3)

        if 4 in counts:
            return HandCategory.FOUR_OF_A_KIND
        # Two sets of trips with no exact pair stay three of a kind
        if trips and pairs:
            return HandCategory.FULL_HOUSE
        if is_flush:
            return HandCategory.FLUSH
        if is_straight:
            return HandCategory.STRAIGHT
        if trips:
            return HandCategory.THREE_OF_A_KIND
        if pairs >= 2:
            return HandCategory.TWO_PAIR
        if pairs == 1:
            return HandCategory.ONE_PAIR
        return HandCategory.HIGH_CARD

    @staticmethod
    def _has_straight(unique_values: list[int]) -> bool:
        """Five consecutive ranks, with the Ace also playing low (wheel)."""
        if 14 in unique_values:
            ace_low = sorted([1] + [v for v in unique_values if v != 14])
            if HandStrengthEvaluator._has_run(ace_low, 5):
                return True
        return HandStrengthEvaluator._has_run(unique_values, 5)

    @staticmethod
    def _has_run(values: list[int], width: int) -> bool:
        return any(
            values[i + width - 1] - values[i] == width - 1
            for i in range(len(values) - width + 1)
        )

    @staticmethod
    def _straight_draw(unique_values: list[int]) -> DrawType | None:
        """Four to a straight, else a three-card window spanning five ranks."""
        if len(unique_values) < 4:
            return None
        if HandStrengthEvaluator._has_run(unique_values, 4):
            return DrawType.OPEN_ENDED
        for i in range(len(unique_values) - 2):
            if unique_values[i + 2] - unique_values[i] == 4:
                return DrawType.GUTSHOT
        return None
