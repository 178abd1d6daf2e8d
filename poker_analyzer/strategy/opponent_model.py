"""Opponent archetypes derived from VPIP, PFR and aggression factor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from poker_analyzer.core.hand_classifier import RangeWidth


class Archetype(StrEnum):
    NIT = "nit"
    TIGHT_PASSIVE = "tight_passive"
    TIGHT_AGGRESSIVE = "tight_aggressive"
    LOOSE_PASSIVE = "loose_passive"
    LOOSE_AGGRESSIVE = "loose_aggressive"
    CALLING_STATION = "calling_station"
    MANIAC = "maniac"
    ROCK = "rock"  # described but never produced by classify_archetype()


@dataclass(frozen=True)
class ArchetypeProfile:
    """Typical stats and a one-line description of an archetype."""

    vpip: float
    pfr: float
    af: float
    description: str


ARCHETYPE_PROFILES: MappingProxyType[Archetype, ArchetypeProfile] = MappingProxyType({
    Archetype.TIGHT_PASSIVE: ArchetypeProfile(
        15, 8, 1.2, "Plays few hands, rarely raises"),
    Archetype.TIGHT_AGGRESSIVE: ArchetypeProfile(
        18, 15, 3.0, "Plays few hands but raises often with them"),
    Archetype.LOOSE_PASSIVE: ArchetypeProfile(
        35, 12, 1.5, "Plays many hands but calls rather than raises"),
    Archetype.LOOSE_AGGRESSIVE: ArchetypeProfile(
        32, 25, 3.2, "Plays many hands and raises frequently"),
    Archetype.ROCK: ArchetypeProfile(
        10, 7, 2.0, "Extremely tight, only plays premium hands"),
    Archetype.MANIAC: ArchetypeProfile(
        45, 40, 4.5, "Plays and raises with almost anything"),
    Archetype.CALLING_STATION: ArchetypeProfile(
        40, 8, 0.8, "Calls with many hands, rarely folds to bets"),
    Archetype.NIT: ArchetypeProfile(
        8, 6, 1.8, "Extremely tight, very risk-averse"),
})

_RANGE_WIDTHS: MappingProxyType[Archetype, RangeWidth] = MappingProxyType({
    Archetype.NIT: RangeWidth.VERY_TIGHT,
    Archetype.ROCK: RangeWidth.VERY_TIGHT,
    Archetype.TIGHT_PASSIVE: RangeWidth.TIGHT,
    Archetype.TIGHT_AGGRESSIVE: RangeWidth.TIGHT,
    Archetype.LOOSE_PASSIVE: RangeWidth.LOOSE,
    Archetype.LOOSE_AGGRESSIVE: RangeWidth.LOOSE,
    Archetype.CALLING_STATION: RangeWidth.VERY_LOOSE,
    Archetype.MANIAC: RangeWidth.VERY_LOOSE,
})


def classify_archetype(vpip: float, pfr: float, af: float) -> Archetype:
    """Classify a player from VPIP %, PFR % and aggression factor.

    The thresholds are checked in a fixed order; VPIP picks the band and
    AF above 2 splits aggressive from passive inside it.
    """
    aggressive = af > 2
    if vpip < 10:
        return Archetype.NIT
    if vpip < 25:
        return Archetype.TIGHT_AGGRESSIVE if aggressive else Archetype.TIGHT_PASSIVE
    if vpip < 35:
        return Archetype.LOOSE_AGGRESSIVE if aggressive else Archetype.LOOSE_PASSIVE
    if vpip > 40 and pfr > 35:
        return Archetype.MANIAC
    return Archetype.LOOSE_AGGRESSIVE if aggressive else Archetype.CALLING_STATION


def describe_archetype(archetype: Archetype | str) -> str:
    return ARCHETYPE_PROFILES[Archetype(archetype)].description


def range_width(archetype: Archetype | str) -> RangeWidth:
    """How wide a range this archetype plays, for equity estimates."""
    return _RANGE_WIDTHS[Archetype(archetype)]
