"""Core decision engine for Texas Hold'em.

Combines starting-hand tiers, made-hand and draw evaluation, pot and
draw odds, and opponent archetypes into a single recommendation.

Architecture:
  GameState
    → Pre-flop module (tier lookup, preflop rule table)
    → Opponent adjustment (raiser archetype, pre-flop only)
    → Post-flop module (hand strength, odds, postflop rule table)
    → Recommendation(action, reasoning, odds, notes)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from poker_analyzer.config import DEFAULT_CONFIG, EngineConfig
from poker_analyzer.core.game_state import GameState, PlayerProfile
from poker_analyzer.core.hand_classifier import (
    HandNotation,
    RangeWidth,
    classify_hand,
    estimate_equity,
    hand_tier,
    top_percent,
)
from poker_analyzer.core.hand_evaluator import HandStrengthEvaluator, HandStrengthResult
from poker_analyzer.core.odds import OddsCalculator, SprTier
from poker_analyzer.strategy.opponent_model import Archetype, range_width
from poker_analyzer.strategy.rules import (
    ADJUSTMENT_RULES,
    POSTFLOP_RULES,
    AdjustmentSpot,
    PostflopSpot,
    PreflopSpot,
    first_match,
    preflop_rules,
)
from poker_analyzer.utils.constants import ActionType, Position, Stage, Tier

logger = logging.getLogger("poker_analyzer.strategy")


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Recommendation:
    """The engine's recommended action with reasoning."""

    action: ActionType
    reasoning: str
    stage: Stage
    pot_odds: float = 0.0  # Required equity to call [0, 1]
    effective_stack: float = 0.0
    hand_type: HandNotation | None = None  # Pre-flop only
    tier: Tier | None = None  # Pre-flop only
    hand_strength: HandStrengthResult | None = None  # Post-flop only
    draw_odds: float = 0.0
    spr: float | None = None
    equity: float | None = None  # Pre-flop tier estimate vs the raiser's range
    opponent_archetype: Archetype | None = None
    notes: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_in_position(position: Position, opponents: tuple[PlayerProfile, ...]) -> bool:
    """Whether hero acts after every remaining opponent.

    The button is always in position; otherwise any opponent seated
    earlier than hero puts hero out of position.
    """
    if position == Position.BTN:
        return True
    return all(p.position.seat_index >= position.seat_index for p in opponents)


def apply_opponent_adjustment(
    recommendation: Recommendation,
    archetype: Archetype | None,
) -> Recommendation:
    """Apply at most one archetype adjustment to a pre-flop decision.

    The adjusted action never matches the rule that produced it, so
    applying this twice gives the same result as applying it once.
    """
    if archetype is None or recommendation.tier is None:
        return recommendation
    spot = AdjustmentSpot(
        action=recommendation.action,
        tier=recommendation.tier,
        archetype=archetype,
    )
    for rule in ADJUSTMENT_RULES:
        if rule.condition(spot):
            logger.debug("Opponent adjustment %s vs %s", rule.name, archetype)
            return replace(
                recommendation,
                action=rule.action,
                reasoning=f"{recommendation.reasoning}. {rule.explain(spot)}",
            )
    return recommendation


# ---------------------------------------------------------------------------
# Pre-flop decision logic
# ---------------------------------------------------------------------------


class PreflopEngine:
    """Pre-flop decisions from tier, seat and the number of raises."""

    @staticmethod
    def decide(
        state: GameState,
        pot_odds: float,
        effective_stack: float,
        config: EngineConfig = DEFAULT_CONFIG,
    ) -> Recommendation:
        """Make a pre-flop decision, before any opponent adjustment."""
        hand = classify_hand(*state.hero_hand)
        tier = hand_tier(hand)
        raiser = state.opponents[0] if state.opponents else None

        spot = PreflopSpot(
            hand=hand,
            tier=tier,
            position=state.hero_position,
            raises_before=state.raises_before,
            bet_to_call=state.bet_to_call,
            pot_odds=pot_odds,
            effective_stack=effective_stack,
            raiser_position=raiser.position if raiser else None,
            config=config,
        )
        rule = first_match(preflop_rules(state.raises_before), spot)
        logger.debug(
            "Preflop %s (%s) from %s, %d raise(s): rule %s",
            hand, tier, state.hero_position, state.raises_before, rule.name,
        )

        archetype = raiser.archetype if raiser and state.raises_before > 0 else None
        width = range_width(archetype) if archetype else RangeWidth.MEDIUM
        return Recommendation(
            action=rule.action,
            reasoning=rule.explain(spot),
            stage=Stage.PREFLOP,
            pot_odds=pot_odds,
            effective_stack=effective_stack,
            hand_type=hand,
            tier=tier,
            equity=estimate_equity(tier, width),
            opponent_archetype=archetype,
        )


# ---------------------------------------------------------------------------
# Post-flop decision logic
# ---------------------------------------------------------------------------


class PostflopEngine:
    """Post-flop decisions from hand strength, position and odds."""

    @staticmethod
    def decide(
        state: GameState,
        pot_odds: float,
        effective_stack: float,
        config: EngineConfig = DEFAULT_CONFIG,
    ) -> Recommendation:
        """Make a post-flop decision.

        Raises:
            InvalidPotSizeError: If the pot is empty, since SPR is undefined.
        """
        strength = HandStrengthEvaluator.evaluate(state.cards)
        spr = OddsCalculator.stack_to_pot_ratio(state.hero_stack, state.pot_size)
        draw_odds = OddsCalculator.draw_odds(strength.draw, len(state.board))
        in_position = is_in_position(state.hero_position, state.opponents)

        spot = PostflopSpot(
            strength=strength,
            in_position=in_position,
            bet_size=state.bet_to_call,
            pot_odds=pot_odds,
            spr=spr,
            draw_odds=draw_odds,
            config=config,
        )
        rule = first_match(POSTFLOP_RULES, spot)
        logger.debug(
            "%s %s, %s, spr=%.1f: rule %s",
            state.stage, strength, "IP" if in_position else "OOP", spr, rule.name,
        )
        return Recommendation(
            action=rule.action,
            reasoning=rule.explain(spot),
            stage=state.stage,
            pot_odds=pot_odds,
            effective_stack=effective_stack,
            hand_strength=strength,
            draw_odds=draw_odds,
            spr=spr,
        )


# ---------------------------------------------------------------------------
# Main decision engine
# ---------------------------------------------------------------------------


class DecisionMaker:
    """Top-level decision engine combining pre-flop and post-flop logic.

    Holds nothing but its configuration, so one instance can serve any
    number of concurrent callers.

    Usage:
        maker = DecisionMaker()
        recommendation = maker.analyze(game_state)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> EngineConfig:
        return self._config

    def analyze(self, state: GameState) -> Recommendation:
        """Produce a recommendation for the hero.

        Raises:
            NoValidOpponentError: If no opponent has chips behind.
            InvalidPotSizeError: Post-flop with an empty pot.
        """
        effective_stack = OddsCalculator.effective_stack(
            state.hero_stack, state.stacks_behind,
        )
        pot_odds = OddsCalculator.pot_odds(state.pot_size, state.bet_to_call)

        if state.stage == Stage.PREFLOP:
            base = PreflopEngine.decide(state, pot_odds, effective_stack, self._config)
            recommendation = apply_opponent_adjustment(base, base.opponent_archetype)
        else:
            recommendation = PostflopEngine.decide(
                state, pot_odds, effective_stack, self._config,
            )

        recommendation = replace(
            recommendation, notes=self._strategic_notes(state, recommendation),
        )
        logger.info(
            "%s %s → %s (%s)",
            state.stage, state.hero_position, recommendation.action,
            recommendation.reasoning,
        )
        return recommendation

    def _strategic_notes(
        self,
        state: GameState,
        rec: Recommendation,
    ) -> tuple[str, ...]:
        """Supporting observations that accompany the recommendation."""
        notes: list[str] = []

        if state.stage == Stage.PREFLOP:
            if rec.tier in (Tier.PREMIUM, Tier.STRONG):
                notes.append(
                    f"Your hand is in the top {top_percent(rec.tier):.1f}% "
                    f"of all starting hands"
                )
            if state.hero_position in (Position.BTN, Position.CO):
                notes.append("Your late position gives you a strategic advantage")
            elif state.hero_position in (Position.SB, Position.BB):
                notes.append(
                    "Playing from the blinds requires caution as you'll be "
                    "out of position postflop"
                )
            if state.raises_before > 0:
                notes.append(
                    f"Facing {state.raises_before} raise(s) narrows your "
                    f"continuing range"
                )
        elif rec.hand_strength is not None:
            if rec.hand_strength.rank >= 5:
                notes.append("You have a strong made hand, focus on value betting")
            elif rec.hand_strength.draw:
                notes.append(
                    f"Your draw has approximately {rec.draw_odds:.1%} equity"
                )
                if rec.pot_odds and rec.draw_odds > rec.pot_odds:
                    notes.append(
                        "Your drawing odds exceed the pot odds, making a call profitable"
                    )
                elif rec.pot_odds:
                    notes.append(
                        "Your drawing odds are less than pot odds, making a call "
                        "unprofitable"
                    )

        if state.pot_size > 0:
            tier = OddsCalculator.spr_tier(
                rec.effective_stack, state.pot_size,
                low=self._config.spr_low, high=self._config.spr_high,
            )
            ratio = rec.effective_stack / state.pot_size
            if tier == SprTier.LOW:
                notes.append(
                    f"Low SPR ({ratio:.1f}) means you're often committed with "
                    f"medium-strong hands"
                )
            elif tier == SprTier.HIGH:
                notes.append(
                    f"High SPR ({ratio:.1f}) favors speculative hands and "
                    f"post-flop maneuverability"
                )
        return tuple(notes)
