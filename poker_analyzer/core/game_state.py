"""Immutable description of the spot being analyzed."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from poker_analyzer.strategy.opponent_model import Archetype, classify_archetype
from poker_analyzer.utils.card import Card, parse_cards
from poker_analyzer.utils.constants import BOARD_LENGTH, Position, Stage
from poker_analyzer.utils.errors import InvalidGameStateError, InvalidPositionError


def resolve_position(label: Position | str) -> Position:
    """Map a seat label ("CO", "utg+1") onto the ten-seat ordering.

    Raises:
        InvalidPositionError: If the label is not one of the ten seats.
    """
    if isinstance(label, Position):
        return label
    try:
        return Position(str(label).strip().upper())
    except ValueError:
        raise InvalidPositionError(f"Unknown position: '{label}'") from None


@dataclass(frozen=True)
class PlayerProfile:
    """An opponent's seat, stack and behavioural stats.

    vpip and pfr are percentages (0-100), af is the aggression factor
    (bets + raises) / calls.
    """

    position: Position
    stack: float
    vpip: float
    pfr: float
    af: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", resolve_position(self.position))

    @property
    def archetype(self) -> Archetype:
        """Archetype derived from the stats on every access."""
        return classify_archetype(self.vpip, self.pfr, self.af)

    @classmethod
    def from_counts(
        cls,
        position: Position | str,
        stack: float,
        hands_seen: int,
        vpip_count: int,
        pfr_count: int,
        aggressive_actions: int,
        passive_actions: int,
    ) -> PlayerProfile:
        """Build a profile from raw tracked counters.

        With no passive actions recorded the aggression factor is
        infinite, which classifies as aggressive.
        """
        vpip = (vpip_count / hands_seen * 100) if hands_seen else 0.0
        pfr = (pfr_count / hands_seen * 100) if hands_seen else 0.0
        if passive_actions:
            af = aggressive_actions / passive_actions
        else:
            af = float("inf") if aggressive_actions else 0.0
        return cls(
            position=resolve_position(position),
            stack=stack,
            vpip=vpip,
            pfr=pfr,
            af=af,
        )


@dataclass(frozen=True)
class GameState:
    """Everything the engine needs for one decision.

    The board must match the stage: 0 cards preflop, 3 on the flop,
    4 on the turn and 5 on the river. Opponents are ordered with the
    most recent raiser first.
    """

    hero_hand: tuple[Card, Card]
    hero_position: Position
    stage: Stage
    pot_size: float
    hero_stack: float
    board: tuple[Card, ...] = ()
    num_players: int = 2
    opponents: tuple[PlayerProfile, ...] = ()
    bet_to_call: float = 0.0
    raises_before: int = 0
    opponent_stacks: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "hero_hand", tuple(self.hero_hand))
        object.__setattr__(self, "board", tuple(self.board))
        object.__setattr__(self, "opponents", tuple(self.opponents))
        object.__setattr__(self, "opponent_stacks", tuple(self.opponent_stacks))
        object.__setattr__(self, "hero_position", resolve_position(self.hero_position))
        try:
            object.__setattr__(self, "stage", Stage(str(self.stage).lower()))
        except ValueError:
            raise InvalidGameStateError(f"Unknown stage: '{self.stage}'") from None

        if len(self.hero_hand) != 2:
            raise InvalidGameStateError(
                f"Hero must hold exactly 2 cards, got {len(self.hero_hand)}"
            )
        expected = BOARD_LENGTH[self.stage]
        if len(self.board) != expected:
            raise InvalidGameStateError(
                f"{self.stage} requires {expected} board cards, got {len(self.board)}"
            )
        all_cards = self.hero_hand + self.board
        if len(set(all_cards)) != len(all_cards):
            raise InvalidGameStateError(
                "Duplicate card in " + " ".join(str(c) for c in all_cards)
            )
        if self.raises_before < 0:
            raise InvalidGameStateError(
                f"raises_before cannot be negative, got {self.raises_before}"
            )

    @property
    def cards(self) -> tuple[Card, ...]:
        """Hero's cards followed by the board."""
        return self.hero_hand + self.board

    @property
    def stacks_behind(self) -> tuple[float, ...]:
        """Opponent stacks, falling back to the profiles when none were given."""
        if self.opponent_stacks:
            return self.opponent_stacks
        return tuple(p.stack for p in self.opponents)

    @classmethod
    def from_text(
        cls,
        hand: str | Sequence[str],
        position: Position | str,
        stage: Stage | str,
        pot_size: float,
        hero_stack: float,
        board: str | Iterable[str] = (),
        **kwargs,
    ) -> GameState:
        """Build a state from raw card text and labels via the card codec."""
        return cls(
            hero_hand=parse_cards(hand),
            hero_position=resolve_position(position),
            stage=stage,
            pot_size=pot_size,
            hero_stack=hero_stack,
            board=parse_cards(board),
            **kwargs,
        )
