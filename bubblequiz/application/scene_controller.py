"""Scene transitions -- coarse game phases and the terminal handoff."""
import logging
from typing import Dict, List, Protocol

from bubblequiz.application.event_bus import EventBus, OVERLAY_REQUESTED, PHASE_READY
from bubblequiz.application.lifecycle import ChallengeLifecycle
from bubblequiz.application.movement import MovementController
from bubblequiz.application.presentation import Presentation
from bubblequiz.application.registry import Layout
from bubblequiz.application.scheduler import FrameScheduler
from bubblequiz.domain.enums import Direction, GamePhase, Outcome
from bubblequiz.domain.question import QuestionBank
from bubblequiz.domain.scoring import GameRules, WorldConfig

log = logging.getLogger("bubblequiz.scene")

_ALLOWED = {
    None: {GamePhase.BOOT},
    GamePhase.BOOT: {GamePhase.PRELOAD},
    GamePhase.PRELOAD: {GamePhase.MAIN_MENU, GamePhase.PLAYING},
    GamePhase.MAIN_MENU: {GamePhase.PLAYING},
    GamePhase.PLAYING: {GamePhase.TERMINAL},
    GamePhase.TERMINAL: {GamePhase.PLAYING},
}


class PhaseHandle:
    """Opaque handle published with every phase-ready event."""

    def __init__(self, phase: GamePhase, controller: "SceneController", payload: dict | None = None):
        self._phase = phase
        self._controller = controller
        self._payload = dict(payload or {})

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def key(self) -> str:
        return self._phase.value

    @property
    def payload(self) -> dict:
        return dict(self._payload)

    @property
    def controller(self) -> "SceneController":
        return self._controller

    def __repr__(self) -> str:
        return f"PhaseHandle({self._phase.value}, payload={self._payload})"


class PhaseHandler(Protocol):
    def on_enter(self, handle: PhaseHandle) -> None: ...


class SceneController:
    """
    Drives BOOT -> PRELOAD -> (MAIN_MENU) -> PLAYING -> TERMINAL.
    Each PLAYING entry gets a fresh session; TERMINAL is entered once per session.
    """

    def __init__(
        self,
        bus: EventBus,
        bank: QuestionBank,
        rules: GameRules,
        presentation: Presentation,
        scheduler: FrameScheduler | None = None,
        layout: Layout = WorldConfig.row_layout,
        include_main_menu: bool = False,
    ):
        self._bus = bus
        self._bank = bank
        self._rules = rules
        self._presentation = presentation
        self._scheduler = scheduler or FrameScheduler()
        self._layout = layout
        self._include_main_menu = include_main_menu
        self._handlers: Dict[GamePhase, List[PhaseHandler]] = {}
        self._phase: GamePhase | None = None
        self._handle: PhaseHandle | None = None
        self._lifecycle: ChallengeLifecycle | None = None
        self._movement: MovementController | None = None
        self._sessions_started = 0

    # --- Properties (Read-Only) ---

    @property
    def phase(self) -> GamePhase | None:
        return self._phase

    @property
    def handle(self) -> PhaseHandle | None:
        return self._handle

    @property
    def lifecycle(self) -> ChallengeLifecycle | None:
        return self._lifecycle

    @property
    def movement(self) -> MovementController | None:
        return self._movement

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def sessions_started(self) -> int:
        return self._sessions_started

    @property
    def is_playing(self) -> bool:
        return self._phase == GamePhase.PLAYING

    def register_handler(self, phase: GamePhase, handler: PhaseHandler) -> None:
        self._handlers.setdefault(phase, []).append(handler)

    # --- Phase transitions ---

    def boot(self) -> None:
        self._enter(GamePhase.BOOT)
        self._enter(GamePhase.PRELOAD)
        if self._include_main_menu:
            self._enter(GamePhase.MAIN_MENU)
        else:
            self._start_session()

    def start(self) -> None:
        """Leave the main menu."""
        if self._phase != GamePhase.MAIN_MENU:
            raise RuntimeError(f"Cannot start from {self._phase_name()}. Main menu required.")
        self._start_session()

    def restart(self) -> None:
        """Play again from the terminal screen with a brand new session."""
        if self._phase != GamePhase.TERMINAL:
            raise RuntimeError(f"Cannot restart from {self._phase_name()}. Game is not over.")
        self._start_session()

    def abandon(self) -> bool:
        """External request to end the session. False when not playing."""
        if not self.is_playing:
            log.debug("Abandon ignored in %s", self._phase_name())
            return False
        self._finish(self._lifecycle.progress.score)
        return True

    def _start_session(self) -> None:
        lifecycle = ChallengeLifecycle(
            bank=self._bank,
            rules=self._rules,
            presentation=self._presentation,
            scheduler=self._scheduler,
            on_terminal=self._finish,
            layout=self._layout,
        )
        self._lifecycle = lifecycle
        self._movement = MovementController()
        self._sessions_started += 1
        lifecycle.start()
        self._enter(GamePhase.PLAYING)

    def _finish(self, score: int) -> None:
        if not self.is_playing:
            return
        self._lifecycle.close()
        self._enter(GamePhase.TERMINAL, {"score": score})

    def _enter(self, phase: GamePhase, payload: dict | None = None) -> None:
        if phase not in _ALLOWED[self._phase]:
            raise RuntimeError(f"Illegal phase transition {self._phase_name()} -> {phase.value}")
        log.info("Phase %s -> %s %s", self._phase_name(), phase.value, payload or "")
        self._phase = phase
        self._handle = PhaseHandle(phase, self, payload)
        for handler in self._handlers.get(phase, []):
            handler.on_enter(self._handle)
        self._bus.publish(PHASE_READY, self._handle)

    def _phase_name(self) -> str:
        return self._phase.value if self._phase else "nothing"

    # --- Inbound notifications ---

    def on_proximity(self, object_id: str | None) -> bool:
        if not self.is_playing:
            return False
        return self._lifecycle.on_proximity(object_id)

    def on_answer_selected(self, region_id: str | None) -> Outcome:
        if not self.is_playing:
            return Outcome.IGNORED
        return self._lifecycle.on_answer_selected(region_id)

    def on_movement_input(self, direction: Direction) -> None:
        if not self.is_playing:
            return
        self._movement.apply(direction)

    def request_overlay(self) -> bool:
        """Ask the host for its blocking UI affordance. Only during play."""
        if not self.is_playing:
            return False
        self._bus.publish(OVERLAY_REQUESTED)
        return True

    def update(self, elapsed_ms: float) -> None:
        """Per-frame pass: deferred callbacks first, then movement."""
        self._scheduler.advance(elapsed_ms)
        if self.is_playing:
            self._movement.update(elapsed_ms)

    # --- Serialization ---

    def to_dict(self) -> dict:
        data = {
            "phase": self._phase.value if self._phase else None,
            "payload": self._handle.payload if self._handle else {},
            "sessions_started": self._sessions_started,
            "rules": self._rules.to_dict(),
        }
        if self._lifecycle is not None:
            data["session"] = self._lifecycle.to_dict()
        if self._movement is not None:
            data["player"] = self._movement.to_dict()
        return data
