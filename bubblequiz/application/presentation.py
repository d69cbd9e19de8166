"""Presentation collaborator interface.

Rendering is out of the core's hands: it only tells the presentation layer
what appeared, what went away and which transient feedback to play.
"""
from typing import Protocol

from bubblequiz.domain.challenge_object import ChallengeObject, QuestionOverlay


class Presentation(Protocol):
    def spawn_challenge(self, challenge: ChallengeObject) -> None: ...

    def remove_challenge(self, challenge: ChallengeObject) -> None: ...

    def show_overlay(self, overlay: QuestionOverlay) -> None: ...

    def clear_overlay(self) -> None: ...

    def show_hud(self, score: int, lives: int) -> None: ...

    def show_score_feedback(self, score: int, points: int) -> None: ...

    def show_damage_feedback(self, lives: int) -> None: ...

    def clear_scene(self) -> None: ...
