"""Character movement. Outside the challenge core; it only receives forwarded input."""
from bubblequiz.domain.enums import Direction
from bubblequiz.domain.scoring import Position, WorldConfig


class MovementController:
    """Fixed-speed movement clamped to the world bounds."""

    def __init__(
        self,
        position: Position = WorldConfig.PLAYER_SPAWN,
        speed: float = WorldConfig.PLAYER_SPEED,
        width: float = WorldConfig.WIDTH,
        height: float = WorldConfig.HEIGHT,
    ):
        self._x, self._y = position
        self._speed = speed
        self._width = width
        self._height = height
        self._direction = Direction.NONE
        self._facing = Direction.RIGHT

    @property
    def position(self) -> Position:
        return (self._x, self._y)

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def facing(self) -> Direction:
        return self._facing

    @property
    def velocity(self) -> Position:
        dx, dy = self._direction.unit_vector()
        return (dx * self._speed, dy * self._speed)

    def apply(self, direction: Direction) -> None:
        self._direction = direction
        if direction in (Direction.LEFT, Direction.RIGHT):
            self._facing = direction

    def update(self, elapsed_ms: float) -> Position:
        vx, vy = self.velocity
        seconds = elapsed_ms / 1000.0
        self._x = min(max(self._x + vx * seconds, 0.0), self._width)
        self._y = min(max(self._y + vy * seconds, 0.0), self._height)
        return self.position

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "direction": self._direction.value,
            "facing": self._facing.value,
        }
