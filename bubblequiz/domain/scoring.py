"""Game rules: rewards, lives, batch pacing and world layout."""
from typing import List, Tuple

Position = Tuple[float, float]


class GameRules:
    """
    Tunable constants for one game. Validated at construction so a bad
    configuration is rejected before any session starts.
    """

    REWARD_CORRECT = 10
    INITIAL_LIVES = 3
    BATCH_SIZE = 5
    REGENERATION_DELAY_MS = 1000

    def __init__(
        self,
        reward_correct: int = REWARD_CORRECT,
        initial_lives: int = INITIAL_LIVES,
        batch_size: int = BATCH_SIZE,
        regeneration_delay_ms: int = REGENERATION_DELAY_MS,
    ):
        if reward_correct < 0:
            raise ValueError("reward_correct cannot be negative")
        if initial_lives < 1:
            raise ValueError("initial_lives must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if regeneration_delay_ms < 0:
            raise ValueError("regeneration_delay_ms cannot be negative")

        self._reward_correct = reward_correct
        self._initial_lives = initial_lives
        self._batch_size = batch_size
        self._regeneration_delay_ms = regeneration_delay_ms

    @property
    def reward_correct(self) -> int:
        return self._reward_correct

    @property
    def initial_lives(self) -> int:
        return self._initial_lives

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def regeneration_delay_ms(self) -> int:
        return self._regeneration_delay_ms

    def to_dict(self) -> dict:
        return {
            "reward_correct": self._reward_correct,
            "initial_lives": self._initial_lives,
            "batch_size": self._batch_size,
            "regeneration_delay_ms": self._regeneration_delay_ms,
        }


class WorldConfig:
    """World bounds and default placement of challenge objects."""

    SCALE_FACTOR = 1.5
    WIDTH = 1664 * SCALE_FACTOR
    HEIGHT = 768 * SCALE_FACTOR

    PLAYER_SPAWN = (200.0, 200.0)
    PLAYER_SPEED = 200.0  # units per second

    ROW_START_X = 300.0
    ROW_STEP_X = 400.0
    ROW_Y = 500.0

    # Answer regions around a challenge object: top left, top right, left, right.
    ANSWER_OFFSETS = [(-70.0, -190.0), (70.0, -190.0), (-190.0, -110.0), (190.0, -110.0)]
    EXTRA_ANSWER_STEP = 140.0

    @staticmethod
    def row_layout(count: int) -> List[Position]:
        """One horizontal row of non-overlapping, reachable slots."""
        return [
            (WorldConfig.ROW_START_X + WorldConfig.ROW_STEP_X * i, WorldConfig.ROW_Y)
            for i in range(count)
        ]

    @staticmethod
    def answer_positions(anchor: Position, count: int) -> List[Position]:
        ax, ay = anchor
        positions = []
        for i in range(count):
            if i < len(WorldConfig.ANSWER_OFFSETS):
                dx, dy = WorldConfig.ANSWER_OFFSETS[i]
            else:
                # Further candidates continue in a row under the object.
                extra = i - len(WorldConfig.ANSWER_OFFSETS)
                dx = (extra - 1) * WorldConfig.EXTRA_ANSWER_STEP
                dy = 110.0
            positions.append((ax + dx, ay + dy))
        return positions
