"""Entry point. Loads configuration, wires the game into routes.

Configuration comes from the environment (optionally a `.env` file at the
project root). Game sessions are in-memory only.
"""
import logging
import os
from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(PROJECT_DIR, ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bubblequiz.api.routes.game_routes import router as game_router, init_routes
from bubblequiz.application.event_bus import EventBus
from bubblequiz.application.host_bridge import HostBridge
from bubblequiz.application.start_game import start_game
from bubblequiz.domain.scoring import GameRules
from bubblequiz.infrastructure.presentation import StatePresentation
from bubblequiz.infrastructure.repositories.question_repository import QuestionRepository

DATA_DIR = os.path.join(BASE_DIR, "data")

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("bubblequiz.startup")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_rules() -> GameRules:
    return GameRules(
        reward_correct=_env_int("REWARD_CORRECT", GameRules.REWARD_CORRECT),
        initial_lives=_env_int("INITIAL_LIVES", GameRules.INITIAL_LIVES),
        batch_size=_env_int("BATCH_SIZE", GameRules.BATCH_SIZE),
        regeneration_delay_ms=_env_int("REGENERATION_DELAY_MS", GameRules.REGENERATION_DELAY_MS),
    )


def create_app() -> FastAPI:
    questions_path = os.environ.get("QUESTIONS_PATH") or os.path.join(DATA_DIR, "questions.json")
    question_repo = QuestionRepository(data_path=questions_path)
    rules = load_rules()

    bus = EventBus()
    bridge = HostBridge(bus)
    if _env_flag("AUDIT_LOG"):
        from bubblequiz.infrastructure.audit import attach_audit
        attach_audit(bus)

    presentation = StatePresentation()
    controller = start_game(
        questions=question_repo.get_all(),
        presentation=presentation,
        bus=bus,
        rules=rules,
        include_main_menu=_env_flag("MAIN_MENU"),
    )
    log.info("Loaded %d questions from %s; rules %s",
             len(question_repo.get_all()), questions_path, rules.to_dict())

    application = FastAPI(
        title="Bubble Quiz",
        description="Swim to a mystery box, answer its question, keep your lives.",
        version="1.0.0",
    )

    _allowed = os.environ.get("ALLOWED_ORIGINS", "").strip()
    if _allowed:
        allow_origins = [o.strip() for o in _allowed.split(",") if o.strip()]
    else:
        allow_origins = ["*"]
    application.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    init_routes(controller, presentation, bridge)
    application.include_router(game_router)

    @application.get("/health")
    def health_check():
        return {"status": "online", "phase": controller.phase.value}

    return application

