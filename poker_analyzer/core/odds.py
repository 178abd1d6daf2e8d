"""Pot odds, draw odds and stack-depth ratios."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from types import MappingProxyType

from poker_analyzer.utils.constants import DrawType
from poker_analyzer.utils.errors import InvalidPotSizeError, NoValidOpponentError

# Outs for each draw type
DRAW_OUTS: MappingProxyType[DrawType, int] = MappingProxyType({
    DrawType.FLUSH_DRAW: 9,
    DrawType.OPEN_ENDED: 8,
    DrawType.GUTSHOT: 4,
})

# 52 minus hero's two cards and a three-card flop
UNSEEN_CARDS = 47


class SprTier(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OddsCalculator:
    """Stateless odds helpers used by the decision engine."""

    @staticmethod
    def pot_odds(pot: float, bet: float) -> float:
        """Equity needed to call: bet / (pot + bet), 0 when nothing to call."""
        if bet == 0:
            return 0.0
        return bet / (pot + bet)

    @staticmethod
    def effective_stack(hero_stack: float, opponent_stacks: Iterable[float]) -> float:
        """The smaller of hero's stack and the shortest live opponent stack.

        Raises:
            NoValidOpponentError: If no opponent stack is positive.
        """
        live = [s for s in opponent_stacks if s > 0]
        if not live:
            raise NoValidOpponentError("No opponent has a positive stack")
        return min(hero_stack, min(live))

    @staticmethod
    def draw_odds(draw: DrawType | str | None, board_length: int) -> float:
        """Probability of completing a draw by the river.

        Two cards to come on the flop, one on the turn. Any other board
        size (preflop, river) returns 0.
        """
        if draw is None:
            return 0.0
        # StrEnum keys also match their plain string labels
        p = DRAW_OUTS.get(draw, 0) / UNSEEN_CARDS
        if board_length == 3:
            return 1 - (1 - p) ** 2
        if board_length == 4:
            return p
        return 0.0

    @staticmethod
    def stack_to_pot_ratio(stack: float, pot: float) -> float:
        """Stack divided by pot.

        Raises:
            InvalidPotSizeError: If the pot is not positive.
        """
        if pot <= 0:
            raise InvalidPotSizeError(f"SPR is undefined for pot size {pot}")
        return stack / pot

    @staticmethod
    def spr_tier(
        effective_stack: float,
        pot: float,
        low: float = 3.0,
        high: float = 10.0,
    ) -> SprTier:
        """Bucket the effective SPR: low means often committed, high favors
        speculative hands."""
        spr = OddsCalculator.stack_to_pot_ratio(effective_stack, pot)
        if spr < low:
            return SprTier.LOW
        if spr > high:
            return SprTier.HIGH
        return SprTier.MEDIUM
