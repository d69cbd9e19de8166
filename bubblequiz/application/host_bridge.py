"""Host-side listener for the event bus.

Keeps the host's view of the game (current phase, whether movement controls
apply, whether its dialog is open) without the core knowing any host types.
"""
import logging
from typing import Callable

from bubblequiz.application.event_bus import EventBus, OVERLAY_REQUESTED, PHASE_READY
from bubblequiz.application.scene_controller import PhaseHandle
from bubblequiz.domain.enums import GamePhase

log = logging.getLogger("bubblequiz.host")


class HostBridge:
    """Subscribes once at construction; subscriptions are never removed."""

    def __init__(
        self,
        bus: EventBus,
        scene_callback: Callable[[PhaseHandle], None] | None = None,
        open_dialog: Callable[[], None] | None = None,
    ):
        self._scene_callback = scene_callback
        self._open_dialog = open_dialog
        self._handle: PhaseHandle | None = None
        self._dialog_open = False
        self._dialogs_opened = 0
        bus.subscribe(PHASE_READY, self._on_phase_ready)
        bus.subscribe(OVERLAY_REQUESTED, self._on_overlay_requested)

    @property
    def current_handle(self) -> PhaseHandle | None:
        return self._handle

    @property
    def can_move(self) -> bool:
        return self._handle is not None and self._handle.phase != GamePhase.MAIN_MENU

    @property
    def dialog_open(self) -> bool:
        return self._dialog_open

    @property
    def dialogs_opened(self) -> int:
        return self._dialogs_opened

    def close_dialog(self) -> None:
        self._dialog_open = False

    def _on_phase_ready(self, handle: PhaseHandle) -> None:
        self._handle = handle
        if self._scene_callback:
            self._scene_callback(handle)

    def _on_overlay_requested(self) -> None:
        # Held-down keys repeat the request every frame; open only once.
        if self._dialog_open:
            return
        self._dialog_open = True
        self._dialogs_opened += 1
        log.info("Host dialog opened")
        if self._open_dialog:
            self._open_dialog()

    def to_dict(self) -> dict:
        return {
            "phase": self._handle.key if self._handle else None,
            "can_move": self.can_move,
            "dialog_open": self._dialog_open,
            "dialogs_opened": self._dialogs_opened,
        }
