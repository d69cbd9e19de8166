"""
Shared pytest fixtures for the Bubble Quiz test suite.

Strategy:
- Domain and application tests: pure in-memory, zero I/O.
- API tests: FastAPI TestClient over a freshly wired game per test.
"""
import os
import random

import pytest

os.environ.setdefault("ENV", "test")


from bubblequiz.application.event_bus import EventBus, PHASE_READY
from bubblequiz.application.lifecycle import ChallengeLifecycle
from bubblequiz.application.scene_controller import SceneController
from bubblequiz.application.scheduler import FrameScheduler
from bubblequiz.domain.question import Question, QuestionBank
from bubblequiz.domain.scoring import GameRules
from bubblequiz.infrastructure.presentation import StatePresentation


# ---------------------------------------------------------------------------
# Domain helpers (reusable across many test modules)
# ---------------------------------------------------------------------------

def make_question(question_id="1", correct_index=0, n_answers=4, prompt=None) -> Question:
    answers = [f"answer {question_id}-{i}" for i in range(n_answers)]
    return Question(
        question_id=question_id,
        prompt=prompt or f"Question {question_id}?",
        candidate_answers=answers,
        correct_answer=answers[correct_index],
    )


def make_bank(n_questions=1, seed=7) -> QuestionBank:
    questions = [make_question(str(i + 1)) for i in range(n_questions)]
    return QuestionBank(questions, rng=random.Random(seed))


def make_rules(**kwargs) -> GameRules:
    defaults = {"reward_correct": 10, "initial_lives": 3, "batch_size": 2,
                "regeneration_delay_ms": 1000}
    defaults.update(kwargs)
    return GameRules(**defaults)


class RecordingPresentation(StatePresentation):
    """A working StatePresentation that also records every call, in order."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def named(self, name):
        return [args for call_name, args in self.calls if call_name == name]

    def spawn_challenge(self, challenge):
        self.calls.append(("spawn_challenge", (challenge,)))
        super().spawn_challenge(challenge)

    def remove_challenge(self, challenge):
        self.calls.append(("remove_challenge", (challenge,)))
        super().remove_challenge(challenge)

    def show_overlay(self, overlay):
        self.calls.append(("show_overlay", (overlay,)))
        super().show_overlay(overlay)

    def clear_overlay(self):
        self.calls.append(("clear_overlay", ()))
        super().clear_overlay()

    def show_score_feedback(self, score, points):
        self.calls.append(("show_score_feedback", (score, points)))
        super().show_score_feedback(score, points)

    def show_hud(self, score, lives):
        self.calls.append(("show_hud", (score, lives)))
        super().show_hud(score, lives)

    def show_damage_feedback(self, lives):
        self.calls.append(("show_damage_feedback", (lives,)))
        super().show_damage_feedback(lives)

    def clear_scene(self):
        self.calls.append(("clear_scene", ()))
        super().clear_scene()


def make_presentation() -> RecordingPresentation:
    return RecordingPresentation()


def make_lifecycle(rules=None, bank=None, presentation=None, scheduler=None, terminal_calls=None):
    terminal_calls = terminal_calls if terminal_calls is not None else []
    lifecycle = ChallengeLifecycle(
        bank=bank or make_bank(),
        rules=rules or make_rules(),
        presentation=presentation or make_presentation(),
        scheduler=scheduler or FrameScheduler(),
        on_terminal=terminal_calls.append,
    )
    lifecycle.start()
    return lifecycle


def make_controller(rules=None, bank=None, presentation=None, bus=None, include_main_menu=False):
    return SceneController(
        bus=bus or EventBus(),
        bank=bank or make_bank(),
        rules=rules or make_rules(),
        presentation=presentation or make_presentation(),
        include_main_menu=include_main_menu,
    )


def correct_region(lifecycle):
    return next(r for r in lifecycle.overlay.regions if r.is_correct)


def wrong_region(lifecycle):
    return next(r for r in lifecycle.overlay.regions if not r.is_correct)


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def question():
    return make_question()


@pytest.fixture
def bank():
    return make_bank()


@pytest.fixture
def presentation():
    return make_presentation()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def terminal_calls():
    return []


@pytest.fixture
def lifecycle(presentation, scheduler, terminal_calls):
    return make_lifecycle(presentation=presentation, scheduler=scheduler,
                          terminal_calls=terminal_calls)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def phase_log(bus):
    """Every phase-ready handle, in publish order."""
    handles = []
    bus.subscribe(PHASE_READY, handles.append)
    return handles


@pytest.fixture
def controller(bus, phase_log):
    c = make_controller(bus=bus)
    c.boot()
    return c


# ---------------------------------------------------------------------------
# FastAPI TestClient over a freshly wired game
# ---------------------------------------------------------------------------

@pytest.fixture
def game_app():
    from fastapi import FastAPI
    from bubblequiz.api.routes.game_routes import router as game_router, init_routes
    from bubblequiz.application.host_bridge import HostBridge

    bus = EventBus()
    bridge = HostBridge(bus)
    presentation = StatePresentation()
    controller = SceneController(
        bus=bus,
        bank=make_bank(),
        rules=make_rules(initial_lives=2),
        presentation=presentation,
    )
    controller.boot()

    app = FastAPI()
    init_routes(controller, presentation, bridge)
    app.include_router(game_router)
    app.state.controller = controller
    app.state.bridge = bridge
    return app


@pytest.fixture
def client(game_app):
    from fastapi.testclient import TestClient
    return TestClient(game_app)
