"""Event bus audit trail.

Every phase entry and every overlay request seen on the bus becomes one JSON
line in `logs/audit.log`: the bus topic, a process-wide sequence number and
the event payload. Phase entries also carry the session number, so a terminal
score can be matched to the session that produced it. Appends are serialized
by a module-level lock because the HTTP host publishes from worker threads.
"""
import itertools
import json
import threading
from datetime import datetime, timezone
from pathlib import Path

from bubblequiz.application.event_bus import EventBus, OVERLAY_REQUESTED, PHASE_READY

_LOCK = threading.Lock()
_seq = itertools.count(1)

ROOT = Path(__file__).resolve().parent.parent.parent
LOG_DIR = ROOT / "logs"
LOG_FILE = LOG_DIR / "audit.log"


def log_event(topic: str, payload: dict | None = None) -> None:
    with _LOCK:
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "seq": next(_seq),
            "topic": topic,
            "payload": payload or {},
        }
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")


def _phase_entry(handle) -> dict:
    return {
        "phase": handle.key,
        "session": handle.controller.sessions_started,
        **handle.payload,
    }


def attach_audit(bus: EventBus) -> None:
    """Subscribe the audit trail to phase-ready and overlay-requested."""
    bus.subscribe(PHASE_READY, lambda handle: log_event(PHASE_READY, _phase_entry(handle)))
    bus.subscribe(OVERLAY_REQUESTED, lambda: log_event(OVERLAY_REQUESTED))
