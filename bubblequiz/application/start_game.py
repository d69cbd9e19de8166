"""Use case: build and boot a game."""
import random

from bubblequiz.application.event_bus import EventBus
from bubblequiz.application.presentation import Presentation
from bubblequiz.application.scene_controller import SceneController
from bubblequiz.application.scheduler import FrameScheduler
from bubblequiz.domain.question import QuestionBank
from bubblequiz.domain.scoring import GameRules


def start_game(
    questions: list,
    presentation: Presentation,
    bus: EventBus,
    rules: GameRules | None = None,
    include_main_menu: bool = False,
    seed: int | None = None,
) -> SceneController:
    """
    Validates configuration, wires the controller and boots it.
    Configuration errors raise ValueError before any session starts.
    """
    bank = QuestionBank(list(questions or []), rng=random.Random(seed))
    controller = SceneController(
        bus=bus,
        bank=bank,
        rules=rules or GameRules(),
        presentation=presentation,
        scheduler=FrameScheduler(),
        include_main_menu=include_main_menu,
    )
    controller.boot()
    return controller
