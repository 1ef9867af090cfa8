"""
Practice layer - exercise generation and session tracking.
"""

from chuk_mcp_piano.practice.session import PracticeSession, advance_key
from chuk_mcp_piano.practice.strategies import (
    ArpeggiosStrategy,
    ChordProgressionStrategy,
    ChordsByKeyStrategy,
    ChordsByTypeStrategy,
    PracticeStrategy,
    ScalesStrategy,
    StrategyFactory,
)

__all__ = [
    "ArpeggiosStrategy",
    "ChordProgressionStrategy",
    "ChordsByKeyStrategy",
    "ChordsByTypeStrategy",
    "PracticeSession",
    "PracticeStrategy",
    "ScalesStrategy",
    "StrategyFactory",
    "advance_key",
]
