"""Session state -- score, lives, active challenge and solved bookkeeping."""
from typing import Dict

from bubblequiz.domain.challenge_object import ChallengeObject
from bubblequiz.domain.invariant import clamp_non_negative


class SessionState:
    """
    All mutable state of one play-through.
    A restart builds a new SessionState; nothing carries over.
    """

    def __init__(self, score: int = 0, lives: int = 3):
        if score < 0:
            raise ValueError("score cannot be negative")
        if lives < 0:
            raise ValueError("lives cannot be negative")
        self.score = score
        self.lives = lives
        self.active_challenge: ChallengeObject | None = None
        self.solved: Dict[str, bool] = {}

    @property
    def active_challenge_id(self) -> str | None:
        return self.active_challenge.id if self.active_challenge else None

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "lives": self.lives,
            "active_challenge": self.active_challenge_id,
            "solved": dict(self.solved),
        }


class ProgressTracker:
    """
    The only way to change score and lives.
    Score never decreases; neither counter is ever observable below zero.
    """

    def __init__(self, state: SessionState):
        self._state = state

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def lives(self) -> int:
        return self._state.lives

    @property
    def solved(self) -> Dict[str, bool]:
        return dict(self._state.solved)

    def award(self, points: int) -> int:
        if points < 0:
            raise ValueError("Awarded points cannot be negative")
        self._state.score = clamp_non_negative("score", self._state.score + points)
        return self._state.score

    def lose_life(self) -> int:
        self._state.lives = clamp_non_negative("lives", self._state.lives - 1)
        return self._state.lives

    def register_question(self, question_id: str) -> None:
        """Track a drawn question without forgetting an earlier correct answer."""
        self._state.solved.setdefault(question_id, False)

    def mark_solved(self, question_id: str) -> None:
        self._state.solved[question_id] = True
