"""Rule-based Texas Hold'em hand analyzer.

Classifies a hero's hand, evaluates made hands and draws, models
opponents from their stats and recommends fold/check/call/bet/raise
with a justification.

Key public API:
    GameState       -- The spot to analyze (immutable)
    PlayerProfile   -- An opponent's seat, stack and stats
    DecisionMaker   -- Produces a Recommendation from a GameState
    Recommendation  -- Action, reasoning, odds and notes
"""

from poker_analyzer.config import EngineConfig, load_engine_config
from poker_analyzer.core.game_state import GameState, PlayerProfile
from poker_analyzer.strategy.decision_maker import DecisionMaker, Recommendation

__all__ = [
    "DecisionMaker",
    "EngineConfig",
    "GameState",
    "PlayerProfile",
    "Recommendation",
    "load_engine_config",
]
