"""Challenge object entity -- a world-placed trigger carrying one question."""
import itertools
from typing import List

from bubblequiz.domain.enums import ChallengeState
from bubblequiz.domain.question import Question
from bubblequiz.domain.scoring import Position, WorldConfig

# Process-wide: identifiers are never reused, even across registries.
_ids = itertools.count(1)


def next_challenge_id() -> str:
    return f"challenge-{next(_ids)}"


class ChallengeObject:
    """
    One challenge in the world. Moves IDLE -> ACTIVE -> RESOLVED, never back.
    Position belongs to the physics collaborator; the core only reads it.
    """

    def __init__(self, question: Question, position: Position):
        self._id = next_challenge_id()
        self._question = question
        self._position = position
        self._state = ChallengeState.IDLE

    @property
    def id(self) -> str:
        return self._id

    @property
    def question(self) -> Question:
        return self._question

    @property
    def position(self) -> Position:
        return self._position

    @property
    def state(self) -> ChallengeState:
        return self._state

    @property
    def is_resolved(self) -> bool:
        return self._state == ChallengeState.RESOLVED

    def activate(self) -> None:
        if self._state != ChallengeState.IDLE:
            raise RuntimeError(f"Challenge {self._id} cannot activate from {self._state.value}")
        self._state = ChallengeState.ACTIVE

    def resolve(self) -> None:
        if self._state != ChallengeState.ACTIVE:
            raise RuntimeError(f"Challenge {self._id} cannot resolve from {self._state.value}")
        self._state = ChallengeState.RESOLVED

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "state": self._state.value,
            "position": list(self._position),
            "question": self._question.to_dict_for_player(),
        }


class AnswerRegion:
    """A selectable candidate answer, tagged for comparison on selection."""

    def __init__(self, owner_id: str, index: int, answer_text: str,
                 correct_answer: str, position: Position):
        self._owner_id = owner_id
        self._index = index
        self._answer_text = answer_text
        self._correct_answer = correct_answer
        self._position = position

    @property
    def id(self) -> str:
        return f"{self._owner_id}/answer-{self._index}"

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def index(self) -> int:
        return self._index

    @property
    def answer_text(self) -> str:
        return self._answer_text

    @property
    def correct_answer(self) -> str:
        return self._correct_answer

    @property
    def position(self) -> Position:
        return self._position

    @property
    def is_correct(self) -> bool:
        return self._answer_text == self._correct_answer

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self._answer_text,
            "position": list(self._position),
        }


class QuestionOverlay:
    """The prompt plus its answer regions, in candidate order."""

    def __init__(self, challenge: ChallengeObject):
        question = challenge.question
        answers = question.candidate_answers
        positions = WorldConfig.answer_positions(challenge.position, len(answers))
        self._owner_id = challenge.id
        self._prompt = question.prompt
        self._question_id = question.id
        self._regions: List[AnswerRegion] = [
            AnswerRegion(challenge.id, i, text, question.correct_answer, positions[i])
            for i, text in enumerate(answers)
        ]

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def question_id(self) -> str:
        return self._question_id

    @property
    def regions(self) -> List[AnswerRegion]:
        return list(self._regions)

    def find_region(self, region_id: str | None) -> AnswerRegion | None:
        for region in self._regions:
            if region.id == region_id:
                return region
        return None

    def to_dict(self) -> dict:
        return {
            "owner_id": self._owner_id,
            "prompt": self._prompt,
            "regions": [r.to_dict() for r in self._regions],
        }
