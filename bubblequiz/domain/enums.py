"""Enums used across the domain."""
from enum import Enum


class ChallengeState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    RESOLVED = "resolved"


class GamePhase(str, Enum):
    BOOT = "Boot"
    PRELOAD = "Preload"
    MAIN_MENU = "MainMenu"
    PLAYING = "Playing"
    TERMINAL = "Terminal"


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    NONE = "none"

    def unit_vector(self) -> tuple:
        return {
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.NONE: (0, 0),
        }[self]


class Outcome(str, Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    GAME_OVER = "game_over"
    IGNORED = "ignored"
