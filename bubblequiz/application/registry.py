"""Pool of world-placed challenge objects for one session."""
import logging
from typing import Callable, Dict, List

from bubblequiz.application.presentation import Presentation
from bubblequiz.domain.challenge_object import ChallengeObject
from bubblequiz.domain.enums import ChallengeState
from bubblequiz.domain.question import QuestionBank
from bubblequiz.domain.scoring import Position

log = logging.getLogger("bubblequiz.registry")

Layout = Callable[[int], List[Position]]


class ChallengeRegistry:
    """Creates, tracks and releases challenge objects in batches."""

    def __init__(self, bank: QuestionBank, presentation: Presentation,
                 on_spawn: Callable[[ChallengeObject], None] | None = None):
        self._bank = bank
        self._presentation = presentation
        self._on_spawn = on_spawn
        self._objects: Dict[str, ChallengeObject] = {}
        self._in_world: set = set()

    def spawn_batch(self, count: int, layout: Layout) -> List[ChallengeObject]:
        if count < 1:
            raise ValueError("Batch size must be at least 1")
        positions = layout(count)
        if len(positions) != count:
            raise ValueError(f"Layout returned {len(positions)} positions for {count} objects")

        spawned = []
        for position in positions:
            challenge = ChallengeObject(question=self._bank.pick(), position=position)
            self._objects[challenge.id] = challenge
            self._in_world.add(challenge.id)
            if self._on_spawn:
                self._on_spawn(challenge)
            self._presentation.spawn_challenge(challenge)
            spawned.append(challenge)
        log.debug("Spawned %d challenges: %s", count, [c.id for c in spawned])
        return spawned

    def destroy_batch(self) -> None:
        """Drop every object, whatever its state."""
        for challenge in list(self._objects.values()):
            if challenge.id in self._in_world:
                self._presentation.remove_challenge(challenge)
        log.debug("Destroyed batch of %d challenges", len(self._objects))
        self._objects.clear()
        self._in_world.clear()

    def retire(self, challenge: ChallengeObject) -> None:
        """Resolve a challenge and take it out of the world."""
        challenge.resolve()
        if challenge.id in self._in_world:
            self._in_world.discard(challenge.id)
            self._presentation.remove_challenge(challenge)

    def get(self, challenge_id: str | None) -> ChallengeObject | None:
        if challenge_id is None:
            return None
        return self._objects.get(challenge_id)

    def get_all(self) -> List[ChallengeObject]:
        return list(self._objects.values())

    def active_ids(self) -> List[str]:
        return [c.id for c in self._objects.values() if c.state == ChallengeState.ACTIVE]

    def count_remaining(self) -> int:
        return sum(1 for c in self._objects.values() if not c.is_resolved)

    def __len__(self) -> int:
        return len(self._objects)
