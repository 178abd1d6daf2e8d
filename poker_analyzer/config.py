"""Engine thresholds and the JSON loader for overriding them."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

logger = logging.getLogger("poker_analyzer.config")

DEFAULT_CONFIG_PATH = Path.home() / ".poker_analyzer" / "engine_config.json"


@dataclass(frozen=True)
class EngineConfig:
    """Numeric thresholds consulted by the rule tables."""

    # Preflop
    late_position_index: int = 6  # CO and later
    medium_call_stack_multiple: float = 50.0  # vs one raise
    multi_raise_call_stack_multiple: float = 40.0  # vs two or more raises
    blind_call_pot_odds: float = 0.25

    # Postflop
    call_spr: float = 3.0
    one_pair_call_pot_odds: float = 0.3
    semi_bluff_draw_odds: float = 0.3

    # SPR tiers
    spr_low: float = 3.0
    spr_high: float = 10.0


DEFAULT_CONFIG = EngineConfig()


def load_engine_config(config_path: Path | str | None = None) -> EngineConfig:
    """Load engine thresholds from a JSON file.

    Default path: ~/.poker_analyzer/engine_config.json

    A missing file yields the defaults. A file that cannot be read or
    parsed is logged and also yields the defaults. Unknown keys are
    logged and ignored.

    Expected JSON format (every key optional):
        {
            "late_position_index": 6,
            "medium_call_stack_multiple": 50,
            "spr_high": 12
        }
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        return DEFAULT_CONFIG

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read engine config at %s: %s", path, e)
        return DEFAULT_CONFIG

    if not isinstance(data, dict):
        logger.warning("Engine config at %s is not a JSON object", path)
        return DEFAULT_CONFIG

    known = {f.name: f for f in fields(EngineConfig)}
    overrides: dict[str, float | int] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown engine config key: %s", key)
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("Engine config key %s must be numeric, got %r", key, value)
            continue
        overrides[key] = int(value) if known[key].type == "int" else float(value)

    config = replace(DEFAULT_CONFIG, **overrides)
    logger.debug("Loaded engine config from %s: %s", path, overrides)
    return config
