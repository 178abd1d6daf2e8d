"""Tests for the policy rule tables, independent of the engine."""

from __future__ import annotations

import pytest

from poker_analyzer.config import EngineConfig
from poker_analyzer.core.hand_classifier import HandNotation, hand_tier
from poker_analyzer.core.hand_evaluator import HandStrengthResult
from poker_analyzer.strategy.opponent_model import Archetype
from poker_analyzer.strategy.rules import (
    ADJUSTMENT_RULES,
    OPEN_RULES,
    POSTFLOP_RULES,
    VS_MULTI_RAISE_RULES,
    VS_RAISE_RULES,
    AdjustmentSpot,
    PostflopSpot,
    PreflopSpot,
    Rule,
    first_match,
    preflop_rules,
)
from poker_analyzer.utils.constants import ActionType, DrawType, HandCategory, Position, Tier


def _preflop(
    hand: str,
    position: Position,
    raises: int = 0,
    bet: float = 0.0,
    pot_odds: float = 0.0,
    stack: float = 100.0,
    raiser: Position | None = None,
    config: EngineConfig | None = None,
) -> PreflopSpot:
    notation = HandNotation.from_str(hand)
    return PreflopSpot(
        hand=notation,
        tier=hand_tier(notation),
        position=position,
        raises_before=raises,
        bet_to_call=bet,
        pot_odds=pot_odds,
        effective_stack=stack,
        raiser_position=raiser,
        config=config or EngineConfig(),
    )


def _postflop(
    category: HandCategory,
    draw: DrawType | None = None,
    in_position: bool = True,
    bet: float = 0.0,
    pot_odds: float = 0.0,
    spr: float = 10.0,
    draw_odds: float = 0.0,
) -> PostflopSpot:
    return PostflopSpot(
        strength=HandStrengthResult(category, draw),
        in_position=in_position,
        bet_size=bet,
        pot_odds=pot_odds,
        spr=spr,
        draw_odds=draw_odds,
    )


def _action(rules, spot) -> ActionType:
    return first_match(rules, spot).action


class TestRuleMechanics:
    def test_first_match_wins(self) -> None:
        rules = (
            Rule("a", lambda s: True, ActionType.CALL, "first"),
            Rule("b", lambda s: True, ActionType.FOLD, "second"),
        )
        assert first_match(rules, object()).name == "a"

    def test_no_match_raises(self) -> None:
        with pytest.raises(LookupError):
            first_match((), object())

    def test_reasoning_template(self) -> None:
        spot = _postflop(HandCategory.FULL_HOUSE)
        rule = first_match(POSTFLOP_RULES, spot)
        assert rule.explain(spot) == "Strong hand (Full House), betting for value"

    @pytest.mark.parametrize("table", [
        OPEN_RULES, VS_RAISE_RULES, VS_MULTI_RAISE_RULES, POSTFLOP_RULES,
    ])
    def test_tables_end_with_catch_all(self, table) -> None:
        assert table[-1].condition(object())

    def test_table_by_raise_count(self) -> None:
        assert preflop_rules(0) is OPEN_RULES
        assert preflop_rules(1) is VS_RAISE_RULES
        assert preflop_rules(2) is VS_MULTI_RAISE_RULES
        assert preflop_rules(5) is VS_MULTI_RAISE_RULES


class TestOpenRules:
    @pytest.mark.parametrize("hand", ["AA", "AKo", "JJ", "KQs"])
    def test_premium_and_strong_raise_anywhere(self, hand: str) -> None:
        assert _action(OPEN_RULES, _preflop(hand, Position.UTG)) == ActionType.RAISE

    def test_medium_late_raises(self) -> None:
        assert _action(OPEN_RULES, _preflop("99", Position.CO)) == ActionType.RAISE

    def test_medium_early_folds(self) -> None:
        assert _action(OPEN_RULES, _preflop("99", Position.HJ)) == ActionType.FOLD

    def test_speculative_late_raises(self) -> None:
        assert _action(OPEN_RULES, _preflop("76s", Position.BTN)) == ActionType.RAISE

    def test_speculative_big_blind_raises_as_late_seat(self) -> None:
        # BB is index 9, so the late-position rule comes first
        assert _action(OPEN_RULES, _preflop("76s", Position.BB)) == ActionType.RAISE

    def test_speculative_early_folds(self) -> None:
        assert _action(OPEN_RULES, _preflop("76s", Position.MP)) == ActionType.FOLD

    def test_speculative_bb_checks_when_late_index_raised(self) -> None:
        config = EngineConfig(late_position_index=10)
        spot = _preflop("76s", Position.BB, config=config)
        assert _action(OPEN_RULES, spot) == ActionType.CHECK

    def test_button_steal_with_trash(self) -> None:
        assert _action(OPEN_RULES, _preflop("72o", Position.BTN)) == ActionType.RAISE

    def test_big_blind_checks_trash(self) -> None:
        assert _action(OPEN_RULES, _preflop("72o", Position.BB)) == ActionType.CHECK

    def test_big_blind_facing_bet_folds_trash(self) -> None:
        spot = _preflop("72o", Position.BB, bet=0.5)
        assert _action(OPEN_RULES, spot) == ActionType.FOLD

    def test_trash_from_cutoff_folds(self) -> None:
        assert _action(OPEN_RULES, _preflop("72o", Position.CO)) == ActionType.FOLD


class TestVsRaiseRules:
    def test_premium_three_bets(self) -> None:
        spot = _preflop("AKo", Position.UTG, raises=1, bet=2)
        assert _action(VS_RAISE_RULES, spot) == ActionType.RAISE

    def test_strong_late_three_bets(self) -> None:
        spot = _preflop("JJ", Position.BTN, raises=1, bet=2)
        assert _action(VS_RAISE_RULES, spot) == ActionType.RAISE

    def test_strong_early_calls(self) -> None:
        spot = _preflop("JJ", Position.MP, raises=1, bet=2)
        assert _action(VS_RAISE_RULES, spot) == ActionType.CALL

    def test_medium_calls_deep_behind_raiser(self) -> None:
        spot = _preflop("KQo", Position.BTN, raises=1, bet=1.5, stack=100,
                        raiser=Position.MP)
        assert _action(VS_RAISE_RULES, spot) == ActionType.CALL

    def test_medium_folds_shallow(self) -> None:
        spot = _preflop("KQo", Position.BTN, raises=1, bet=2, stack=100,
                        raiser=Position.MP)
        assert first_match(VS_RAISE_RULES, spot).name == "fold_medium_shallow"

    def test_medium_folds_ahead_of_raiser(self) -> None:
        spot = _preflop("KQo", Position.CO, raises=1, bet=1, stack=100,
                        raiser=Position.BTN)
        assert first_match(VS_RAISE_RULES, spot).name == "fold_medium_oop"

    def test_medium_without_known_raiser_folds(self) -> None:
        spot = _preflop("KQo", Position.BTN, raises=1, bet=1, stack=100)
        assert _action(VS_RAISE_RULES, spot) == ActionType.FOLD

    def test_speculative_blind_with_odds_calls(self) -> None:
        spot = _preflop("55", Position.SB, raises=1, bet=2, pot_odds=0.3)
        assert _action(VS_RAISE_RULES, spot) == ActionType.CALL

    def test_speculative_blind_without_odds_folds(self) -> None:
        spot = _preflop("55", Position.SB, raises=1, bet=2, pot_odds=0.25)
        assert _action(VS_RAISE_RULES, spot) == ActionType.FOLD

    def test_speculative_outside_blinds_folds(self) -> None:
        spot = _preflop("55", Position.BTN, raises=1, bet=2, pot_odds=0.4)
        assert _action(VS_RAISE_RULES, spot) == ActionType.FOLD


class TestVsMultiRaiseRules:
    @pytest.mark.parametrize("hand", ["AA", "KK"])
    def test_aces_kings_raise(self, hand: str) -> None:
        spot = _preflop(hand, Position.UTG, raises=2, bet=10, stack=100)
        assert _action(VS_MULTI_RAISE_RULES, spot) == ActionType.RAISE

    @pytest.mark.parametrize("hand,rule", [
        ("AA", "four_bet_aces_kings"),
        ("KK", "four_bet_aces_kings"),
        ("QQ", "call_premium_shallow"),
        ("AKo", "call_premium_shallow"),
        ("JJ", "call_jacks"),
        ("TT", "fold_vs_multi_raise"),
        ("AQs", "fold_vs_multi_raise"),
    ])
    def test_pair_rules_match_exact_pairs(self, hand: str, rule: str) -> None:
        spot = _preflop(hand, Position.CO, raises=2, bet=10, stack=100)
        assert first_match(VS_MULTI_RAISE_RULES, spot).name == rule

    def test_other_premium_calls_when_shallow(self) -> None:
        spot = _preflop("QQ", Position.CO, raises=2, bet=10, stack=100)
        assert _action(VS_MULTI_RAISE_RULES, spot) == ActionType.CALL

    def test_other_premium_raises_when_deep(self) -> None:
        spot = _preflop("AKs", Position.CO, raises=3, bet=2, stack=100)
        assert _action(VS_MULTI_RAISE_RULES, spot) == ActionType.RAISE

    def test_jacks_call(self) -> None:
        spot = _preflop("JJ", Position.CO, raises=2, bet=10)
        assert _action(VS_MULTI_RAISE_RULES, spot) == ActionType.CALL

    def test_tens_fold(self) -> None:
        spot = _preflop("TT", Position.CO, raises=2, bet=10)
        assert _action(VS_MULTI_RAISE_RULES, spot) == ActionType.FOLD


class TestAdjustmentRules:
    def _match(self, action: ActionType, tier: Tier, archetype: Archetype):
        spot = AdjustmentSpot(action=action, tier=tier, archetype=archetype)
        return next((r for r in ADJUSTMENT_RULES if r.condition(spot)), None)

    @pytest.mark.parametrize("archetype", [
        Archetype.TIGHT_PASSIVE, Archetype.ROCK, Archetype.NIT,
    ])
    def test_tight_raiser_folds_non_premium(self, archetype: Archetype) -> None:
        rule = self._match(ActionType.CALL, Tier.STRONG, archetype)
        assert rule is not None and rule.action == ActionType.FOLD

    def test_tight_raiser_keeps_premium(self) -> None:
        assert self._match(ActionType.RAISE, Tier.PREMIUM, Archetype.NIT) is None

    @pytest.mark.parametrize("archetype", [Archetype.LOOSE_AGGRESSIVE, Archetype.MANIAC])
    def test_loose_raiser_reraises_medium(self, archetype: Archetype) -> None:
        rule = self._match(ActionType.FOLD, Tier.MEDIUM, archetype)
        assert rule is not None and rule.action == ActionType.RAISE

    def test_loose_raiser_leaves_speculative_fold(self) -> None:
        assert self._match(ActionType.FOLD, Tier.SPECULATIVE, Archetype.MANIAC) is None

    def test_neutral_archetypes_untouched(self) -> None:
        assert self._match(ActionType.FOLD, Tier.MEDIUM, Archetype.TIGHT_AGGRESSIVE) is None
        assert self._match(ActionType.CALL, Tier.STRONG, Archetype.CALLING_STATION) is None


class TestPostflopRules:
    @pytest.mark.parametrize("category", [
        HandCategory.FULL_HOUSE, HandCategory.FOUR_OF_A_KIND,
    ])
    def test_value_hands(self, category: HandCategory) -> None:
        assert _action(POSTFLOP_RULES, _postflop(category)) == ActionType.BET
        assert _action(POSTFLOP_RULES, _postflop(category, bet=5)) == ActionType.RAISE

    @pytest.mark.parametrize("category", [HandCategory.STRAIGHT, HandCategory.FLUSH])
    def test_medium_bucket_unopened(self, category: HandCategory) -> None:
        assert _action(POSTFLOP_RULES, _postflop(category)) == ActionType.BET
        spot = _postflop(category, in_position=False)
        assert _action(POSTFLOP_RULES, spot) == ActionType.CHECK

    def test_medium_calls_in_position_with_spr(self) -> None:
        spot = _postflop(HandCategory.FLUSH, bet=5, pot_odds=0.4, spr=4)
        assert _action(POSTFLOP_RULES, spot) == ActionType.CALL

    def test_medium_calls_with_cheap_price(self) -> None:
        spot = _postflop(HandCategory.STRAIGHT, in_position=False, bet=2,
                         pot_odds=0.2, spr=2)
        assert _action(POSTFLOP_RULES, spot) == ActionType.CALL

    def test_medium_folds_to_pressure(self) -> None:
        spot = _postflop(HandCategory.STRAIGHT, in_position=False, bet=10,
                         pot_odds=0.4, spr=2)
        assert _action(POSTFLOP_RULES, spot) == ActionType.FOLD

    def test_semi_bluff_in_position(self) -> None:
        spot = _postflop(HandCategory.HIGH_CARD, DrawType.FLUSH_DRAW, draw_odds=0.35)
        assert _action(POSTFLOP_RULES, spot) == ActionType.BET

    def test_draw_checks_out_of_position(self) -> None:
        spot = _postflop(HandCategory.HIGH_CARD, DrawType.FLUSH_DRAW,
                         in_position=False, draw_odds=0.35)
        assert _action(POSTFLOP_RULES, spot) == ActionType.CHECK

    def test_weak_draw_checks_in_position(self) -> None:
        spot = _postflop(HandCategory.HIGH_CARD, DrawType.GUTSHOT, draw_odds=0.16)
        assert _action(POSTFLOP_RULES, spot) == ActionType.CHECK

    def test_draw_calls_with_odds(self) -> None:
        spot = _postflop(HandCategory.ONE_PAIR, DrawType.OPEN_ENDED, bet=2,
                         pot_odds=0.2, draw_odds=0.31)
        assert _action(POSTFLOP_RULES, spot) == ActionType.CALL

    def test_draw_folds_without_odds(self) -> None:
        spot = _postflop(HandCategory.HIGH_CARD, DrawType.GUTSHOT, bet=10,
                         pot_odds=0.4, draw_odds=0.16)
        assert _action(POSTFLOP_RULES, spot) == ActionType.FOLD

    def test_weak_bluffs_in_position(self) -> None:
        assert _action(POSTFLOP_RULES, _postflop(HandCategory.TWO_PAIR)) == ActionType.BET

    def test_weak_checks_out_of_position(self) -> None:
        spot = _postflop(HandCategory.ONE_PAIR, in_position=False)
        assert _action(POSTFLOP_RULES, spot) == ActionType.CHECK

    def test_weak_folds_to_bet(self) -> None:
        spot = _postflop(HandCategory.THREE_OF_A_KIND, bet=3, pot_odds=0.2)
        assert _action(POSTFLOP_RULES, spot) == ActionType.FOLD
