"""Validation errors raised by the analyzer.

Every error is a local validation failure surfaced to the immediate
caller. They all derive from ValueError so callers that only care about
"bad input" can catch that.
"""


class AnalyzerError(ValueError):
    """Base class for all analyzer validation failures."""


class InvalidCardError(AnalyzerError):
    """A card token is malformed or uses an unknown rank/suit."""


class InvalidPositionError(AnalyzerError):
    """A seat label is outside the ten-seat ordering."""


class NoValidOpponentError(AnalyzerError):
    """No opponent has a positive stack to measure against."""


class InvalidPotSizeError(AnalyzerError):
    """A ratio against the pot was requested with a non-positive pot."""


class InvalidGameStateError(AnalyzerError):
    """A game state is internally inconsistent (board size, duplicates)."""
