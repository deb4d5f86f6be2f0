"""Closed-form jump reachability.

Answers "can a player standing at A land on B with one jump?" from the
constant-gravity projectile model. The margins below are design choices
that leave slack for imperfect player input; they are not derived from the
physics and are kept as named constructor arguments.
"""

from typing import TYPE_CHECKING

from .config import KinematicsConstants

if TYPE_CHECKING:
    from .layout import Platform


class JumpKinematics:
    """Reachability model built from KinematicsConstants.

    All coordinates are screen coordinates: y grows downward, so a positive
    ``from_y - to_y`` is a jump up.
    """

    def __init__(
        self,
        constants: KinematicsConstants,
        distance_margin: float = 0.85,
        height_margin: float = 0.9,
        max_drop: float = 200.0,
    ):
        self.constants = constants
        self.distance_margin = distance_margin
        self.height_margin = height_margin
        self.max_drop = max_drop

    @property
    def jump_air_time(self) -> float:
        """Seconds from take-off until falling back to take-off height."""
        return 2 * self.constants.jump_velocity / self.constants.gravity

    @property
    def max_jump_distance(self) -> float:
        return self.jump_air_time * self.constants.horizontal_speed

    @property
    def safe_jump_distance(self) -> float:
        return self.max_jump_distance * self.distance_margin

    @property
    def max_jump_height(self) -> float:
        # v^2 = 2gh at the apex
        return self.constants.jump_velocity ** 2 / (2 * self.constants.gravity)

    def can_jump_between(self, from_x: float, from_y: float, to_x: float, to_y: float) -> bool:
        """Whether a jump from one point lands on the other.

        Fails when the horizontal distance exceeds the safe jump distance,
        when the rise exceeds height_margin of the jump height, or when the
        drop is deeper than max_drop.
        """
        dx = abs(to_x - from_x)
        dy = from_y - to_y

        if dx > self.safe_jump_distance:
            return False
        if dy > self.max_jump_height * self.height_margin:
            return False
        if dy < -self.max_drop:
            return False
        return True

    def can_reach(self, source: "Platform", target: "Platform") -> bool:
        """Platform-to-platform reachability.

        The player walks to the point of ``source`` closest to the centre of
        ``target`` and jumps for that centre.
        """
        take_off_x = min(max(target.x, source.left), source.right)
        return self.can_jump_between(take_off_x, source.y, target.x, target.y)

    def to_dict(self) -> dict:
        """Derived values, handy for logging and metrics."""
        return {
            **self.constants.to_dict(),
            "jump_air_time": self.jump_air_time,
            "max_jump_distance": self.max_jump_distance,
            "safe_jump_distance": self.safe_jump_distance,
            "max_jump_height": self.max_jump_height,
        }
