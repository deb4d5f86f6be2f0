"""Hazard assignment over a finished platform list.

Three passes, each returning a new list:
1. assign: a coin flip per platform, except the fixed safe indices; a
   platform whose widened body would touch another hazard's stays safe
2. consolidate: drop safe platforms crowding a (widened) hazardous one
3. exempt_goal: the rightmost platform never carries a hazard

Hazards never move a platform. They only set flags and delete safe
platforms in pass 2. When a crowding platform cannot be deleted without
cutting the course, the hazards it crowds are cleared instead.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .config import LayoutConfig
from .kinematics import JumpKinematics
from .layout import Platform
from .placement import platforms_overlap
from .reachability import removable_ids
from .rng import RandomSource

logger = logging.getLogger(__name__)


class HazardPlacer:
    """Marks hazardous platforms and clears the space around them."""

    def __init__(
        self,
        rng: RandomSource,
        layout: LayoutConfig,
        kinematics: Optional[JumpKinematics] = None,
    ):
        self.rng = rng
        self.layout = layout
        self.kinematics = kinematics

    @property
    def widening(self) -> float:
        return self.layout.hazard_widening

    def bodies_overlap(self, a: Platform, b: Platform) -> bool:
        """Overlap test on collision bodies, widened where hazardous."""
        return platforms_overlap(
            replace(a, width=a.body_width(self.widening)),
            replace(b, width=b.body_width(self.widening)),
            self.layout.min_spacing,
        )

    def assign(self, platforms: Sequence[Platform]) -> List[Platform]:
        """Flip a hazard coin for every platform outside ``safe_indices``.

        Safe indices consume no draw. Every other platform consumes exactly
        one, even when its hazard is refused for touching another one.
        """
        assigned = []
        hazards: List[Platform] = []
        for index, platform in enumerate(platforms):
            if index in self.layout.safe_indices:
                assigned.append(platform.with_hazard(False))
                continue
            hazardous = platform.with_hazard(self.rng.chance(self.layout.hazard_chance))
            if hazardous.has_hazard and any(self.bodies_overlap(hazardous, h) for h in hazards):
                hazardous = platform.with_hazard(False)
            if hazardous.has_hazard:
                hazards.append(hazardous)
            assigned.append(hazardous)
        return assigned

    def crowds(self, safe: Platform, hazard: Platform) -> bool:
        """Whether a hazard-free platform sits too close to a hazardous one."""
        half = hazard.body_width(self.widening) / 2 + self.layout.min_spacing
        horizontal = not (safe.right < hazard.x - half or safe.left > hazard.x + half)
        level = abs(safe.y - hazard.y) < self.layout.crowding_vertical
        very_close = math.hypot(safe.x - hazard.x, safe.y - hazard.y) < self.layout.crowding_radius
        return (horizontal and level) or very_close

    def consolidate(self, platforms: Sequence[Platform]) -> List[Platform]:
        """Remove safe platforms that crowd a hazardous one.

        The first platform is the start and is never removed. Given a jump
        model, neither is a platform the rest of the course depends on. A
        crowding platform that stays clears the hazards it crowds.
        """
        hazardous = [p for p in platforms if p.has_hazard]
        crowded: Dict[int, List[int]] = {}
        for platform in platforms:
            if platform.has_hazard:
                continue
            near = [h.id for h in hazardous if self.crowds(platform, h)]
            if near:
                crowded[platform.id] = near

        candidates = [p for p in platforms[1:] if p.id in crowded]
        if self.kinematics is None:
            removed = {p.id for p in candidates}
        else:
            removed = removable_ids(platforms, candidates, self.kinematics)
        disarmed = {h for pid, near in crowded.items() if pid not in removed for h in near}

        kept = []
        for platform in platforms:
            if platform.id in removed:
                logger.debug("Removing platform %d at (%.0f, %.0f) next to hazard %d",
                             platform.id, platform.x, platform.y, crowded[platform.id][0])
                continue
            if platform.id in disarmed:
                logger.debug("Clearing hazard %d, crowded by a platform the course needs", platform.id)
                platform = platform.with_hazard(False)
            kept.append(platform)
        return kept

    def exempt_goal(self, platforms: Sequence[Platform]) -> List[Platform]:
        """Clear the hazard of the platform with the rightmost widened edge.

        That platform is flagged ``is_goal`` here, because clearing its hazard
        narrows it and a later rightmost search could land elsewhere.
        """
        platforms = [replace(p, is_goal=False) if p.is_goal else p for p in platforms]
        if not platforms:
            return platforms
        goal_index = goal_index_of(platforms, self.widening)
        platforms[goal_index] = replace(platforms[goal_index], has_hazard=False, is_goal=True)
        return platforms

    def place(self, platforms: Sequence[Platform]) -> List[Platform]:
        """Run all three passes."""
        assigned = self.assign(platforms)
        consolidated = self.consolidate(assigned)
        placed = self.exempt_goal(consolidated)
        logger.debug("Hazards: %d of %d platforms hazardous, %d removed for crowding",
                     sum(p.has_hazard for p in placed), len(placed),
                     len(assigned) - len(consolidated))
        return placed


def goal_index_of(platforms: Sequence[Platform], widening: float) -> int:
    """Index of the platform whose widened right edge is furthest right.

    Ties go to the earliest platform.
    """
    best_index, best_right = 0, -math.inf
    for index, platform in enumerate(platforms):
        right = platform.body_right(widening)
        if right > best_right:
            best_index, best_right = index, right
    return best_index


@dataclass(frozen=True)
class HazardMarker:
    """Damaging obstacle resting on a platform's top edge. (x, y) is the centre."""
    platform_id: int
    x: float
    y: float
    width: float = 20.0
    height: float = 15.0


def hazard_markers(
    platform: Platform,
    widening: float = 40.0,
    count: Tuple[int, int] = (1, 3),
    edge_buffer: float = 30.0,
    size: Tuple[float, float] = (20.0, 15.0),
) -> List[HazardMarker]:
    """Markers for one hazardous platform, kept ``edge_buffer`` from either end.

    Seeded from the platform position, so a platform always gets the same
    markers no matter which other platforms exist.
    """
    if not platform.has_hazard:
        return []

    rng = RandomSource(math.floor(platform.x * 100 + platform.y))
    marker_width, marker_height = size
    half = platform.body_width(widening) / 2
    left = platform.x - half + edge_buffer
    right = platform.x + half - edge_buffer
    y = platform.top - marker_height / 2

    return [
        HazardMarker(platform.id, rng.between(left, right), y, marker_width, marker_height)
        for _ in range(rng.randint(*count))
    ]
