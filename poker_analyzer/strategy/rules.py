"""Ordered rule tables for the preflop and postflop policies.

Each table is a tuple of Rule(name, condition, action, reasoning)
evaluated top to bottom; the first rule whose condition holds decides
the action. Every decision table ends with an unconditional rule, so a
match is always found. The adjustment table has no fallback; no match
means the base decision stands.

Reasoning strings are templates formatted with the spot as ``s``,
e.g. ``"Strong hand ({s.strength.name}), betting for value"``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from poker_analyzer.config import DEFAULT_CONFIG, EngineConfig
from poker_analyzer.core.hand_classifier import HandNotation
from poker_analyzer.core.hand_evaluator import HandStrengthResult
from poker_analyzer.strategy.opponent_model import Archetype
from poker_analyzer.utils.constants import ActionType, Position, Rank, Tier

S = TypeVar("S")


@dataclass(frozen=True)
class Rule(Generic[S]):
    """One row of a policy table."""

    name: str
    condition: Callable[[S], bool]
    action: ActionType
    reasoning: str

    def explain(self, spot: S) -> str:
        return self.reasoning.format(s=spot)


def first_match(rules: Sequence[Rule[S]], spot: S) -> Rule[S]:
    """Return the first rule whose condition holds for the spot."""
    for rule in rules:
        if rule.condition(spot):
            return rule
    raise LookupError(f"No rule matched spot {spot!r}")


def _always(_spot: object) -> bool:
    return True


# ---------------------------------------------------------------------------
# Preflop
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PreflopSpot:
    """Inputs to the preflop tables."""

    hand: HandNotation
    tier: Tier
    position: Position
    raises_before: int
    bet_to_call: float
    pot_odds: float
    effective_stack: float
    raiser_position: Position | None = None
    config: EngineConfig = DEFAULT_CONFIG

    @property
    def position_index(self) -> int:
        return self.position.seat_index

    @property
    def is_late(self) -> bool:
        return self.position_index >= self.config.late_position_index

    @property
    def is_big_blind(self) -> bool:
        return self.position == Position.BB

    @property
    def is_blind(self) -> bool:
        return self.position in (Position.SB, Position.BB)

    @property
    def unopened_big_blind(self) -> bool:
        return self.is_big_blind and self.bet_to_call == 0

    @property
    def acts_after_raiser(self) -> bool:
        if self.raiser_position is None:
            return False
        return self.position_index > self.raiser_position.seat_index

    def stack_exceeds(self, multiple: float) -> bool:
        return self.effective_stack > multiple * self.bet_to_call

    def stack_below(self, multiple: float) -> bool:
        return self.effective_stack < multiple * self.bet_to_call


OPEN_RULES: tuple[Rule[PreflopSpot], ...] = (
    Rule("open_premium", lambda s: s.tier == Tier.PREMIUM,
         ActionType.RAISE, "Premium hand, raising from any position"),
    Rule("open_strong", lambda s: s.tier == Tier.STRONG,
         ActionType.RAISE, "Strong hand, raising from any position"),
    Rule("open_medium_late", lambda s: s.tier == Tier.MEDIUM and s.is_late,
         ActionType.RAISE, "Medium hand, raising from late position"),
    Rule("fold_medium_early", lambda s: s.tier == Tier.MEDIUM,
         ActionType.FOLD, "Medium hand, folding from early position"),
    Rule("open_speculative_late", lambda s: s.tier == Tier.SPECULATIVE and s.is_late,
         ActionType.RAISE, "Speculative hand, raising from late position"),
    Rule("check_speculative_bb",
         lambda s: s.tier == Tier.SPECULATIVE and s.unopened_big_blind,
         ActionType.CHECK, "Speculative hand, checking in big blind"),
    Rule("fold_speculative", lambda s: s.tier == Tier.SPECULATIVE,
         ActionType.FOLD, "Speculative hand, folding from early/mid position"),
    Rule("button_steal", lambda s: s.position == Position.BTN,
         ActionType.RAISE, "Button steal opportunity"),
    Rule("check_bb", lambda s: s.unopened_big_blind,
         ActionType.CHECK, "Checking any hand in big blind when no raise"),
    Rule("fold_weak", _always,
         ActionType.FOLD, "Weak hand, folding"),
)

VS_RAISE_RULES: tuple[Rule[PreflopSpot], ...] = (
    Rule("three_bet_premium", lambda s: s.tier == Tier.PREMIUM,
         ActionType.RAISE, "Premium hand, 3-betting against a raise"),
    Rule("three_bet_strong_late", lambda s: s.tier == Tier.STRONG and s.is_late,
         ActionType.RAISE, "Strong hand, 3-betting from position"),
    Rule("call_strong", lambda s: s.tier == Tier.STRONG,
         ActionType.CALL, "Strong hand, calling a raise"),
    Rule("call_medium_deep",
         lambda s: (s.tier == Tier.MEDIUM and s.is_late and s.acts_after_raiser
                    and s.stack_exceeds(s.config.medium_call_stack_multiple)),
         ActionType.CALL, "Medium hand, calling with position and good stack depth"),
    Rule("fold_medium_shallow",
         lambda s: s.tier == Tier.MEDIUM and s.is_late and s.acts_after_raiser,
         ActionType.FOLD,
         "Medium hand, folding to a raise with insufficient stack depth"),
    Rule("fold_medium_oop", lambda s: s.tier == Tier.MEDIUM,
         ActionType.FOLD, "Medium hand, folding to a raise out of position"),
    Rule("call_speculative_blind",
         lambda s: (s.tier == Tier.SPECULATIVE and s.is_blind
                    and s.pot_odds > s.config.blind_call_pot_odds),
         ActionType.CALL, "Speculative hand in the blinds with good pot odds"),
    Rule("fold_vs_raise", _always,
         ActionType.FOLD, "Weak hand, folding to a raise"),
)

VS_MULTI_RAISE_RULES: tuple[Rule[PreflopSpot], ...] = (
    Rule("four_bet_aces_kings",
         lambda s: s.hand.is_pair and s.hand.rank1 in (Rank.ACE, Rank.KING),
         ActionType.RAISE,
         "Premium pair, 4-betting/shoving against multiple raises"),
    Rule("call_premium_shallow",
         lambda s: (s.tier == Tier.PREMIUM
                    and s.stack_below(s.config.multi_raise_call_stack_multiple)),
         ActionType.CALL, "Premium hand, calling with moderate stack depth"),
    Rule("four_bet_premium", lambda s: s.tier == Tier.PREMIUM,
         ActionType.RAISE, "Premium hand, 4-betting with good stack depth"),
    Rule("call_jacks", lambda s: s.hand.is_pair and s.hand.rank1 == Rank.JACK,
         ActionType.CALL, "Strong pair, calling multiple raises cautiously"),
    Rule("fold_vs_multi_raise", _always,
         ActionType.FOLD,
         "Folding to multiple raises with anything less than premium"),
)


def preflop_rules(raises_before: int) -> tuple[Rule[PreflopSpot], ...]:
    """The table for a raise count: none, one, or two and more."""
    if raises_before <= 0:
        return OPEN_RULES
    if raises_before == 1:
        return VS_RAISE_RULES
    return VS_MULTI_RAISE_RULES


# ---------------------------------------------------------------------------
# Opponent adjustment
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdjustmentSpot:
    """A base preflop decision and the raiser it was made against."""

    action: ActionType
    tier: Tier
    archetype: Archetype


_TIGHT_RAISERS = frozenset({Archetype.TIGHT_PASSIVE, Archetype.ROCK, Archetype.NIT})
_LOOSE_RAISERS = frozenset({Archetype.LOOSE_AGGRESSIVE, Archetype.MANIAC})

# No catch-all: when nothing matches the base decision stands
ADJUSTMENT_RULES: tuple[Rule[AdjustmentSpot], ...] = (
    Rule("fold_vs_tight_raiser",
         lambda s: (s.archetype in _TIGHT_RAISERS
                    and s.action in (ActionType.CALL, ActionType.RAISE)
                    and s.tier != Tier.PREMIUM),
         ActionType.FOLD, "Adjusting to fold against very tight raiser"),
    Rule("reraise_loose_raiser",
         lambda s: (s.archetype in _LOOSE_RAISERS
                    and s.action == ActionType.FOLD
                    and s.tier in (Tier.MEDIUM, Tier.STRONG)),
         ActionType.RAISE, "Adjusting to re-raise against loose-aggressive player"),
)


# ---------------------------------------------------------------------------
# Postflop
# ---------------------------------------------------------------------------

# Rank buckets over HandCategory ordinals
VALUE_RANK = 7
MEDIUM_RANK = 5


@dataclass(frozen=True)
class PostflopSpot:
    """Inputs to the postflop table."""

    strength: HandStrengthResult
    in_position: bool
    bet_size: float
    pot_odds: float
    spr: float
    draw_odds: float = 0.0
    config: EngineConfig = DEFAULT_CONFIG

    @property
    def facing_bet(self) -> bool:
        return self.bet_size > 0

    @property
    def is_value(self) -> bool:
        return self.strength.rank >= VALUE_RANK

    @property
    def is_medium(self) -> bool:
        return MEDIUM_RANK <= self.strength.rank < VALUE_RANK

    @property
    def is_drawing(self) -> bool:
        return self.strength.rank < MEDIUM_RANK and self.strength.draw is not None


POSTFLOP_RULES: tuple[Rule[PostflopSpot], ...] = (
    Rule("value_bet", lambda s: s.is_value and not s.facing_bet,
         ActionType.BET, "Strong hand ({s.strength.name}), betting for value"),
    Rule("value_raise", lambda s: s.is_value,
         ActionType.RAISE, "Strong hand ({s.strength.name}), raising for value"),
    Rule("medium_bet_ip", lambda s: s.is_medium and not s.facing_bet and s.in_position,
         ActionType.BET,
         "Medium strength hand ({s.strength.name}), betting in position"),
    Rule("medium_check_oop", lambda s: s.is_medium and not s.facing_bet,
         ActionType.CHECK,
         "Medium strength hand ({s.strength.name}), checking out of position"),
    Rule("medium_call_ip",
         lambda s: s.is_medium and s.in_position and s.spr > s.config.call_spr,
         ActionType.CALL,
         "Medium strength hand ({s.strength.name}), calling in position with good SPR"),
    Rule("medium_call_odds",
         lambda s: s.is_medium and s.pot_odds < s.config.one_pair_call_pot_odds,
         ActionType.CALL,
         "Medium strength hand ({s.strength.name}), calling with good pot odds"),
    Rule("medium_fold", lambda s: s.is_medium,
         ActionType.FOLD,
         "Medium strength hand ({s.strength.name}), folding to pressure"),
    Rule("semi_bluff",
         lambda s: (s.is_drawing and not s.facing_bet and s.in_position
                    and s.draw_odds > s.config.semi_bluff_draw_odds),
         ActionType.BET, "Drawing hand ({s.strength.draw}), semi-bluffing in position"),
    Rule("draw_check", lambda s: s.is_drawing and not s.facing_bet,
         ActionType.CHECK, "Drawing hand ({s.strength.draw}), checking"),
    Rule("draw_call", lambda s: s.is_drawing and s.draw_odds > s.pot_odds,
         ActionType.CALL,
         "Drawing hand ({s.strength.draw}), calling with sufficient equity"),
    Rule("draw_fold", lambda s: s.is_drawing,
         ActionType.FOLD,
         "Drawing hand ({s.strength.draw}), folding with insufficient equity"),
    Rule("bluff_ip", lambda s: not s.facing_bet and s.in_position,
         ActionType.BET, "Weak hand, betting as a bluff in position"),
    Rule("weak_check", lambda s: not s.facing_bet,
         ActionType.CHECK, "Weak hand, checking out of position"),
    Rule("weak_fold", _always,
         ActionType.FOLD, "Weak hand, folding to bet"),
)
