"""Blaster - arcade circle shooter with a headless simulation core"""

from .entities import Circle, Enemy, Particle, Player, Shot, ShrinkTween, Viewport
from .scores import HighScoreStore, MemoryHighScoreStore
from .session import GameSession, GameState
from .surface import NullSurface, RecordingSurface
from .timers import IntervalTimer

__all__ = [
    "Circle",
    "Enemy",
    "Particle",
    "Player",
    "Shot",
    "ShrinkTween",
    "Viewport",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "GameSession",
    "GameState",
    "NullSurface",
    "RecordingSurface",
    "IntervalTimer",
]
