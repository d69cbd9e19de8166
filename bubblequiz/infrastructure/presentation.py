"""Presentation adapter that keeps what a renderer would show.

The HTTP host has no canvas: it serves this snapshot to its frontend, which
draws it. Feedback effects are queued until the frontend drains them.
"""
from collections import deque
from typing import Deque, Dict, List

from bubblequiz.domain.challenge_object import ChallengeObject, QuestionOverlay

# Oldest effects are dropped when no client drains the queue.
MAX_PENDING_EFFECTS = 100


class StatePresentation:
    """In-memory scene: visible challenges, the current overlay, pending effects."""

    def __init__(self):
        self._visible: Dict[str, ChallengeObject] = {}
        self._overlay: QuestionOverlay | None = None
        self._effects: Deque[dict] = deque(maxlen=MAX_PENDING_EFFECTS)
        self._score_text = ""
        self._lives_text = ""

    @property
    def visible_ids(self) -> List[str]:
        return list(self._visible)

    @property
    def overlay(self) -> QuestionOverlay | None:
        return self._overlay

    @property
    def effects(self) -> List[dict]:
        return list(self._effects)

    @property
    def score_text(self) -> str:
        return self._score_text

    @property
    def lives_text(self) -> str:
        return self._lives_text

    def spawn_challenge(self, challenge: ChallengeObject) -> None:
        self._visible[challenge.id] = challenge

    def remove_challenge(self, challenge: ChallengeObject) -> None:
        self._visible.pop(challenge.id, None)

    def show_overlay(self, overlay: QuestionOverlay) -> None:
        self._overlay = overlay

    def clear_overlay(self) -> None:
        self._overlay = None

    def show_hud(self, score: int, lives: int) -> None:
        self._score_text = f"Score: {score}"
        self._lives_text = f"Lives: {lives}"

    def show_score_feedback(self, score: int, points: int) -> None:
        self._score_text = f"Score: {score}"
        self._effects.append({"type": "score", "points": points, "score": score})

    def show_damage_feedback(self, lives: int) -> None:
        self._lives_text = f"Lives: {lives}"
        self._effects.append({"type": "damage", "text": "-1 live", "lives": lives})

    def clear_scene(self) -> None:
        self._visible.clear()
        self._overlay = None

    def drain_effects(self) -> List[dict]:
        effects = list(self._effects)
        self._effects.clear()
        return effects

    def to_dict(self) -> dict:
        return {
            "visible": [c.to_dict() for c in self._visible.values()],
            "overlay": self._overlay.to_dict() if self._overlay else None,
            "score_text": self._score_text,
            "lives_text": self._lives_text,
        }
