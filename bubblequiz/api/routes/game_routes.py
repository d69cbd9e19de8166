"""Game API routes -- the host's inbound notifications and state snapshot."""
import threading

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from bubblequiz.domain.enums import Direction


router = APIRouter(prefix="/api", tags=["game"])


class ProximityRequest(BaseModel):
    object_id: str = Field(..., min_length=1)


class AnswerRequest(BaseModel):
    region_id: str = Field(..., min_length=1)


class MoveRequest(BaseModel):
    direction: Direction


class TickRequest(BaseModel):
    elapsed_ms: float = Field(..., ge=0, le=60_000)


_controller = None
_presentation = None
_bridge = None

# FastAPI runs sync routes in a thread pool; the game sees one event at a time.
_LOCK = threading.Lock()


def init_routes(controller, presentation, bridge):
    global _controller, _presentation, _bridge
    _controller = controller
    _presentation = presentation
    _bridge = bridge


def _snapshot() -> dict:
    return {
        **_controller.to_dict(),
        "scene": _presentation.to_dict(),
        "host": _bridge.to_dict(),
    }


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

@router.get("/state")
def api_get_state():
    """Everything the frontend needs to draw the current frame."""
    with _LOCK:
        return _snapshot()


@router.get("/effects")
def api_drain_effects():
    """Transient feedback queued since the last call."""
    with _LOCK:
        return {"effects": _presentation.drain_effects()}


# ---------------------------------------------------------------------------
# Inbound notifications
# ---------------------------------------------------------------------------

@router.post("/proximity")
def api_proximity(req: ProximityRequest):
    """The character reached a challenge object."""
    with _LOCK:
        presented = _controller.on_proximity(req.object_id)
        lifecycle = _controller.lifecycle
        overlay = lifecycle.overlay if lifecycle else None
        return {
            "presented": presented,
            "overlay": overlay.to_dict() if presented and overlay else None,
        }


@router.post("/answer")
def api_answer(req: AnswerRequest):
    """The character reached an answer region."""
    with _LOCK:
        outcome = _controller.on_answer_selected(req.region_id)
        result = {"outcome": outcome.value, "phase": _controller.phase.value}
        if _controller.lifecycle:
            result["score"] = _controller.lifecycle.progress.score
            result["lives"] = _controller.lifecycle.progress.lives
        return result


@router.post("/move")
def api_move(req: MoveRequest):
    with _LOCK:
        _controller.on_movement_input(req.direction)
        movement = _controller.movement
        return movement.to_dict() if movement else {}


@router.post("/tick")
def api_tick(req: TickRequest):
    """One frame update pass."""
    with _LOCK:
        _controller.update(req.elapsed_ms)
        return {"now_ms": _controller.scheduler.now_ms, "phase": _controller.phase.value}


# ---------------------------------------------------------------------------
# Game lifecycle
# ---------------------------------------------------------------------------

@router.post("/start")
def api_start():
    """Leave the main menu."""
    with _LOCK:
        try:
            _controller.start()
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _snapshot()


@router.post("/abandon")
def api_abandon():
    with _LOCK:
        ended = _controller.abandon()
        return {"ended": ended, "phase": _controller.phase.value, "payload": _controller.handle.payload}


@router.post("/restart")
def api_restart():
    """Play again from the terminal screen."""
    with _LOCK:
        try:
            _controller.restart()
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _snapshot()


@router.post("/overlay")
def api_request_overlay():
    """Gameplay asks the host for its dialog."""
    with _LOCK:
        requested = _controller.request_overlay()
        return {"requested": requested, "dialog_open": _bridge.dialog_open}


@router.post("/overlay/close")
def api_close_overlay():
    with _LOCK:
        _bridge.close_dialog()
        return {"dialog_open": _bridge.dialog_open}
