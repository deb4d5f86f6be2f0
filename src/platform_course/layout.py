"""Layout value types: Platform, LevelLayout and generation diagnostics.

Platforms are frozen. Stages that change a flag build a new instance with
``dataclasses.replace`` so earlier stage outputs stay intact.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Tuple


@dataclass(frozen=True)
class Platform:
    """Axis-aligned floating platform. (x, y) is the centre."""
    id: int
    x: float
    y: float
    width: float
    height: float = 20.0
    has_hazard: bool = False
    is_start: bool = False
    is_goal: bool = False

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    def bounds(self, spacing: float = 0.0) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom), grown by ``spacing`` on every side."""
        return (
            self.left - spacing,
            self.top - spacing,
            self.right + spacing,
            self.bottom + spacing,
        )

    def body_width(self, widening: float = 0.0) -> float:
        """Width of the collision body; hazardous platforms are built wider."""
        return self.width + widening if self.has_hazard else self.width

    def body_right(self, widening: float = 0.0) -> float:
        return self.x + self.body_width(widening) / 2

    def with_hazard(self, has_hazard: bool) -> "Platform":
        return replace(self, has_hazard=has_hazard)


@dataclass(frozen=True)
class GenerationDiagnostic:
    """Something the generator accepted but could not verify."""
    kind: str  # "fallback", "stalled", "unreachable", "pruned"
    platform_id: Optional[int]
    message: str


@dataclass(frozen=True)
class LevelLayout:
    """Finished course, in generation order.

    ``shortcut_target`` is the second-rightmost platform, where the secret
    cloud's shortcut drops the player. ``secret`` is the cloud itself; it
    sits left of the start and is not part of ``platforms``.
    """
    platforms: Tuple[Platform, ...]
    start: Platform
    goal: Platform
    shortcut_target: Optional[Platform] = None
    secret: Optional[Platform] = None

    seed: int = 0
    world_width: float = 0.0
    hazard_widening: float = 0.0
    diagnostics: Tuple[GenerationDiagnostic, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.platforms)

    def __iter__(self):
        return iter(self.platforms)

    def where(self, predicate: Callable[[Platform], bool]) -> List[Platform]:
        """Platforms matching ``predicate``, in generation order."""
        return [p for p in self.platforms if predicate(p)]

    def spawn_candidates(self, x_min: float, x_max: float) -> List[Platform]:
        """Hazard-free platforms whose centre lies in [x_min, x_max]."""
        return self.where(lambda p: not p.has_hazard and x_min <= p.x <= x_max)

    def hazardous(self) -> List[Platform]:
        return self.where(lambda p: p.has_hazard)

    def by_id(self, platform_id: int) -> Platform:
        for p in self.platforms:
            if p.id == platform_id:
                return p
        raise KeyError(f"No platform with id {platform_id}")

    def body_width(self, platform: Platform) -> float:
        return platform.body_width(self.hazard_widening)

    @property
    def fallback_ids(self) -> List[int]:
        return self._diagnostic_ids("fallback")

    @property
    def unreachable_ids(self) -> List[int]:
        return self._diagnostic_ids("unreachable")

    @property
    def fully_reachable(self) -> bool:
        return not self.unreachable_ids

    def _diagnostic_ids(self, kind: str) -> List[int]:
        return [d.platform_id for d in self.diagnostics if d.kind == kind and d.platform_id is not None]

    def summary(self) -> dict:
        return {
            "seed": self.seed,
            "platforms": len(self.platforms),
            "hazards": len(self.hazardous()),
            "start": (self.start.x, self.start.y),
            "goal": (self.goal.x, self.goal.y),
            "diagnostics": len(self.diagnostics),
        }
