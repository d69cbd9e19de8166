"""Question entity and the fixed question bank."""
import random
from typing import List, Sequence


class Question:
    """
    A multiple-choice prompt.
    Immutable after creation.
    """

    def __init__(
        self,
        question_id: str,
        prompt: str,
        candidate_answers: Sequence[str],
        correct_answer: str,
    ):
        if not question_id:
            raise ValueError("Question id cannot be empty")
        if not prompt:
            raise ValueError("Question prompt cannot be empty")
        if not candidate_answers or len(candidate_answers) < 2:
            raise ValueError("A question must have at least 2 candidate answers")
        if correct_answer not in candidate_answers:
            raise ValueError(
                f"Correct answer {correct_answer!r} is not one of the candidates"
            )

        self._id = question_id
        self._prompt = prompt
        self._candidate_answers = tuple(candidate_answers)
        self._correct_answer = correct_answer

    @property
    def id(self) -> str:
        return self._id

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def candidate_answers(self) -> List[str]:
        return list(self._candidate_answers)

    @property
    def correct_answer(self) -> str:
        return self._correct_answer

    def to_dict_for_player(self) -> dict:
        """Serialization for the frontend. Never exposes correct answer."""
        return {
            "id": self._id,
            "prompt": self._prompt,
            "answers": list(self._candidate_answers),
        }

    def __repr__(self) -> str:
        return f"Question(id={self._id!r}, prompt={self._prompt!r})"


class QuestionBank:
    """Fixed, insertion-ordered collection of questions. Never mutated at runtime."""

    def __init__(self, questions: Sequence[Question], rng: random.Random | None = None):
        if not questions:
            raise ValueError("Question bank cannot be empty")
        ids = [q.id for q in questions]
        if len(set(ids)) != len(ids):
            raise ValueError("Question ids must be unique within a bank")
        self._questions = tuple(questions)
        self._rng = rng or random.Random()

    def pick(self) -> Question:
        """Uniform random draw, with replacement."""
        return self._rng.choice(self._questions)

    def get_all(self) -> List[Question]:
        return list(self._questions)

    def __len__(self) -> int:
        return len(self._questions)
