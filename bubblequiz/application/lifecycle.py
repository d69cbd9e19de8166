"""Challenge lifecycle -- activation, answer resolution and batch regeneration.

Every change to a session's score, lives, active challenge or challenge pool
goes through this module. Inbound notifications race against each other, so
anything stale or malformed is dropped without touching state.
"""
import logging
from typing import Callable

from bubblequiz.application.presentation import Presentation
from bubblequiz.application.registry import ChallengeRegistry, Layout
from bubblequiz.application.scheduler import FrameScheduler
from bubblequiz.domain.challenge_object import QuestionOverlay
from bubblequiz.domain.enums import ChallengeState, Outcome
from bubblequiz.domain.invariant import validate_single_active
from bubblequiz.domain.question import QuestionBank
from bubblequiz.domain.scoring import GameRules, WorldConfig
from bubblequiz.domain.session import ProgressTracker, SessionState

log = logging.getLogger("bubblequiz.lifecycle")


class ChallengeLifecycle:
    """
    Owns one session: its state, its challenge pool and the question overlay.
    Only one challenge may be ACTIVE at a time.
    """

    def __init__(
        self,
        bank: QuestionBank,
        rules: GameRules,
        presentation: Presentation,
        scheduler: FrameScheduler,
        on_terminal: Callable[[int], None],
        layout: Layout = WorldConfig.row_layout,
    ):
        self._rules = rules
        self._presentation = presentation
        self._scheduler = scheduler
        self._on_terminal = on_terminal
        self._layout = layout
        self._state = SessionState(score=0, lives=rules.initial_lives)
        self._progress = ProgressTracker(self._state)
        self._registry = ChallengeRegistry(
            bank, presentation,
            on_spawn=lambda challenge: self._progress.register_question(challenge.question.id),
        )
        self._overlay: QuestionOverlay | None = None
        self._closed = False
        self._regeneration_pending = False

    # --- Properties (Read-Only) ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def progress(self) -> ProgressTracker:
        return self._progress

    @property
    def registry(self) -> ChallengeRegistry:
        return self._registry

    @property
    def overlay(self) -> QuestionOverlay | None:
        return self._overlay

    @property
    def is_open(self) -> bool:
        return not self._closed

    @property
    def regeneration_pending(self) -> bool:
        return self._regeneration_pending

    # --- Session bounds ---

    def start(self) -> None:
        self._presentation.show_hud(self._progress.score, self._progress.lives)
        self._registry.spawn_batch(self._rules.batch_size, self._layout)

    def close(self) -> None:
        """Session left PLAYING. Later notifications and callbacks become no-ops."""
        if self._closed:
            return
        self._closed = True
        self._presentation.clear_scene()

    # --- Transitions ---

    def on_proximity(self, object_id: str | None) -> bool:
        """IDLE -> ACTIVE. Returns True only when a question was presented."""
        if self._closed:
            log.debug("Proximity %s ignored: session closed", object_id)
            return False
        if self._state.active_challenge is not None:
            log.debug("Proximity %s ignored: %s already active",
                      object_id, self._state.active_challenge_id)
            return False
        challenge = self._registry.get(object_id)
        if challenge is None or challenge.state != ChallengeState.IDLE:
            log.debug("Proximity %s ignored: no idle challenge with that id", object_id)
            return False

        self._state.active_challenge = challenge
        challenge.activate()

        # An overlay can survive a resolution that raced another event.
        self._overlay = None
        self._presentation.clear_overlay()
        self._overlay = QuestionOverlay(challenge)
        self._presentation.show_overlay(self._overlay)

        validate_single_active(self._registry.active_ids(), self._state.active_challenge_id)
        log.info("Challenge %s active with question %s", challenge.id, challenge.question.id)
        return True

    def on_answer_selected(self, region_id: str | None) -> Outcome:
        """ACTIVE -> RESOLVED for the challenge owning the selected region."""
        if self._closed:
            log.debug("Selection %s ignored: session closed", region_id)
            return Outcome.IGNORED
        challenge = self._state.active_challenge
        if challenge is None or self._overlay is None:
            log.debug("Selection %s ignored: no active challenge", region_id)
            return Outcome.IGNORED
        region = self._overlay.find_region(region_id)
        if region is None or region.owner_id != challenge.id:
            log.debug("Selection %s ignored: not a region of %s", region_id, challenge.id)
            return Outcome.IGNORED

        if region.is_correct:
            outcome = Outcome.CORRECT
            self._progress.mark_solved(challenge.question.id)
            score = self._progress.award(self._rules.reward_correct)
            self._presentation.show_score_feedback(score, self._rules.reward_correct)
        else:
            if self._progress.lives <= 1:
                log.info("Wrong answer on last life; final score %d", self._progress.score)
                self._on_terminal(self._progress.score)
                return Outcome.GAME_OVER
            outcome = Outcome.WRONG
            lives = self._progress.lose_life()
            self._presentation.show_damage_feedback(lives)

        self._state.active_challenge = None
        self._clear_overlay()
        self._registry.retire(challenge)

        validate_single_active(self._registry.active_ids(), self._state.active_challenge_id)
        log.info("Challenge %s resolved: %s (score=%d, lives=%d)",
                 challenge.id, outcome.value, self._progress.score, self._progress.lives)

        if self._registry.count_remaining() == 0:
            self._schedule_regeneration()
        return outcome

    # --- Regeneration ---

    def _schedule_regeneration(self) -> None:
        self._regeneration_pending = True
        self._scheduler.delayed_call(self._rules.regeneration_delay_ms, self._regenerate)
        log.debug("Batch exhausted; regenerating in %d ms", self._rules.regeneration_delay_ms)

    def _regenerate(self) -> None:
        self._regeneration_pending = False
        if self._closed:
            log.debug("Regeneration skipped: session closed")
            return
        self._registry.destroy_batch()
        self._registry.spawn_batch(self._rules.batch_size, self._layout)

    def _clear_overlay(self) -> None:
        if self._overlay is not None:
            self._overlay = None
            self._presentation.clear_overlay()

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {
            **self._state.to_dict(),
            "remaining": self._registry.count_remaining(),
            "regeneration_pending": self._regeneration_pending,
            "challenges": [c.to_dict() for c in self._registry.get_all()],
            "overlay": self._overlay.to_dict() if self._overlay else None,
        }
