"""Reachability audit over a finished platform list."""

from collections import deque
from typing import Dict, List, Sequence, Set

from .kinematics import JumpKinematics
from .layout import Platform


def reachable_ids(platforms: Sequence[Platform], kinematics: JumpKinematics) -> Set[int]:
    """Ids reachable from the first platform by chained jumps (breadth-first)."""
    if not platforms:
        return set()

    start = platforms[0]
    seen = {start.id}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for other in platforms:
            if other.id not in seen and kinematics.can_reach(current, other):
                seen.add(other.id)
                queue.append(other)
    return seen


def unreachable_platforms(platforms: Sequence[Platform], kinematics: JumpKinematics) -> List[Platform]:
    reached = reachable_ids(platforms, kinematics)
    return [p for p in platforms if p.id not in reached]


def jump_chain(
    platforms: Sequence[Platform],
    kinematics: JumpKinematics,
    target_id: int,
) -> List[Platform]:
    """Shortest chain of jumps from the first platform to ``target_id``.

    Returns an empty list when the target cannot be reached.
    """
    if not platforms:
        return []

    start = platforms[0]
    parents: Dict[int, Platform] = {}
    seen = {start.id}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current.id == target_id:
            chain = [current]
            while chain[-1].id in parents:
                chain.append(parents[chain[-1].id])
            return chain[::-1]
        for other in platforms:
            if other.id not in seen and kinematics.can_reach(current, other):
                seen.add(other.id)
                parents[other.id] = current
                queue.append(other)
    return []


def removable_ids(
    platforms: Sequence[Platform],
    candidates: Sequence[Platform],
    kinematics: JumpKinematics,
) -> Set[int]:
    """Ids of ``candidates`` that can be deleted without cutting anything off.

    Candidates are tried in order and each accepted removal is final. A
    removal is accepted only when every platform that was reachable before
    (and is not removed itself) stays reachable. The first platform is the
    start and is never removable.
    """
    if not platforms:
        return set()

    start_id = platforms[0].id
    reached = reachable_ids(platforms, kinematics)
    removed: Set[int] = set()
    for candidate in candidates:
        if candidate.id == start_id or candidate.id in removed:
            continue
        trial = [p for p in platforms if p.id != candidate.id and p.id not in removed]
        if reached - removed - {candidate.id} <= reachable_ids(trial, kinematics):
            removed.add(candidate.id)
    return removed
