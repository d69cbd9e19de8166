"""Loads questions from JSON into domain entities."""
import json
import os
from typing import List

from bubblequiz.domain.question import Question


class QuestionRepository:
    """JSON-backed question storage. Read once at construction."""

    def __init__(self, data_path: str):
        self._data_path = data_path
        self._questions: List[Question] = []
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self._data_path):
            raise ValueError(f"Question file not found: {self._data_path}")

        with open(self._data_path, "r", encoding="utf-8") as f:
            raw = json.load(f)

        if not isinstance(raw, list):
            raise ValueError("Question file must contain a JSON list")

        self._questions = []
        for item in raw:
            if not isinstance(item, dict):
                raise ValueError(f"Question entry must be a JSON object, got {item!r}")
            try:
                question = Question(
                    question_id=str(item["id"]),
                    prompt=item["prompt"],
                    candidate_answers=item["answers"],
                    correct_answer=item["correct_answer"],
                )
            except KeyError as e:
                raise ValueError(f"Question entry missing field {e}") from e
            self._questions.append(question)

    def get_all(self) -> List[Question]:
        return list(self._questions)
