"""Validation guards for session state.

Violations here are programming defects. Outside production they fail fast;
in production they are logged and the offending counter is clamped.
"""
import logging
import os

log = logging.getLogger("bubblequiz.invariant")


class InvariantViolation(RuntimeError):
    """Session state broke a rule that no sequence of events may break."""


def strict_mode() -> bool:
    return os.environ.get("ENV", "development").lower() != "production"


def _fail(message: str) -> None:
    if strict_mode():
        raise InvariantViolation(message)
    log.warning("Invariant violated: %s", message)


def validate_single_active(active_ids: list, active_challenge_id: str | None) -> None:
    """At most one ACTIVE object, and it must be the session's active challenge."""
    if len(active_ids) > 1:
        _fail(f"{len(active_ids)} challenges active at once: {active_ids}")
        return
    expected = [active_challenge_id] if active_challenge_id else []
    if list(active_ids) != expected:
        _fail(
            f"Active challenge {active_challenge_id!r} disagrees with registry {active_ids}"
        )


def clamp_non_negative(name: str, value: int) -> int:
    """Returns value, or 0 after reporting a negative counter."""
    if value < 0:
        _fail(f"{name} went negative ({value})")
        return 0
    return value
