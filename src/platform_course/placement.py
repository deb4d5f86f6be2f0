"""Geometric filters: overlap rejection during placement, dominance after it."""

import logging
from typing import Iterable, List, Optional, Sequence

from .kinematics import JumpKinematics
from .layout import Platform
from .reachability import removable_ids

logger = logging.getLogger(__name__)


def platforms_overlap(a: Platform, b: Platform, spacing: float = 5.0) -> bool:
    """True when the two boxes, kept ``spacing`` apart, touch on both axes."""
    horizontal = not (a.right + spacing < b.left or b.right + spacing < a.left)
    vertical = not (a.bottom + spacing < b.top or b.bottom + spacing < a.top)
    return horizontal and vertical


class OverlapResolver:
    """Accepts a candidate only if it keeps clear of every accepted platform."""

    def __init__(self, min_spacing: float = 5.0):
        self.min_spacing = min_spacing

    def blocking(self, candidate: Platform, accepted: Iterable[Platform]) -> List[Platform]:
        """Accepted platforms the candidate would overlap."""
        return [p for p in accepted if platforms_overlap(candidate, p, self.min_spacing)]

    def accepts(self, candidate: Platform, accepted: Iterable[Platform]) -> bool:
        for existing in accepted:
            if platforms_overlap(candidate, existing, self.min_spacing):
                return False
        return True


class DominanceFilter:
    """Drops platforms that sit directly under a higher one.

    Runs once over the complete set. Every platform is compared against the
    unfiltered input, so which platforms count as dominated does not depend
    on iteration order. Given a jump model, a dominated platform is kept when
    deleting it would cut off part of the course.
    """

    def __init__(self, radius: float = 50.0, kinematics: Optional[JumpKinematics] = None):
        self.radius = radius
        self.kinematics = kinematics

    def is_dominated(self, platform: Platform, others: Sequence[Platform]) -> bool:
        for other in others:
            if other is platform:
                continue
            if abs(platform.x - other.x) < self.radius and other.y < platform.y:
                return True
        return False

    def apply(self, platforms: Sequence[Platform]) -> List[Platform]:
        dominated = [p for p in platforms if self.is_dominated(p, platforms)]
        if self.kinematics is None:
            removed = {p.id for p in dominated}
        else:
            removed = removable_ids(platforms, dominated, self.kinematics)

        kept = [p for p in platforms if p.id not in removed]
        logger.debug("Dominance filter removed %d of %d platforms (%d kept to stay connected)",
                     len(removed), len(platforms), len(dominated) - len(removed))
        return kept
