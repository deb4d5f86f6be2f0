"""Main path, upward branches and stacked variants.

The path generator walks a cursor left to right. Every main-path node is
drawn so that a jump from the previous node's right edge lands on it. After
each accepted node the branch and variant generators may add optional
platforms above it. All draws come from one RandomSource, in a fixed order,
so the result is a pure function of the seed.
"""

import logging
from typing import List, Optional, Tuple

from .config import LayoutConfig
from .constraints import GenerationExhausted
from .kinematics import JumpKinematics
from .layout import GenerationDiagnostic, Platform
from .placement import OverlapResolver
from .rng import RandomSource

logger = logging.getLogger(__name__)


def _clamp(value: float, band: Tuple[float, float]) -> float:
    return max(band[0], min(band[1], value))


class PlacementContext:
    """Shared state of one generation run.

    Owns the random source, the accepted platforms (in acceptance order) and
    the diagnostics. Accepted platforms are never removed here, so a
    candidate's id is simply the number of platforms accepted before it.
    """

    def __init__(
        self,
        kinematics: JumpKinematics,
        layout: LayoutConfig,
        rng: RandomSource,
        strict: bool = False,
    ):
        self.kinematics = kinematics
        self.layout = layout
        self.rng = rng
        self.strict = strict
        self.resolver = OverlapResolver(layout.min_spacing)
        self.platforms: List[Platform] = []
        self.diagnostics: List[GenerationDiagnostic] = []

    def candidate(self, x: float, y: float, width: Optional[float] = None) -> Platform:
        if width is None:
            width = self.rng.pick(self.layout.platform_widths)
        return Platform(
            id=len(self.platforms),
            x=x,
            y=y,
            width=width,
            height=self.layout.platform_height,
        )

    def try_place(self, candidate: Platform) -> bool:
        """Accept ``candidate`` unless it overlaps an accepted platform."""
        if not self.resolver.accepts(candidate, self.platforms):
            return False
        self.platforms.append(candidate)
        return True

    def blockers(self, candidate: Platform) -> List[Platform]:
        return self.resolver.blocking(candidate, self.platforms)

    def note(self, kind: str, platform_id: Optional[int], message: str) -> None:
        logger.warning(message)
        self.diagnostics.append(GenerationDiagnostic(kind, platform_id, message))

    def report(self, kind: str, platform_id: Optional[int], message: str) -> None:
        """Record a diagnostic, or raise it in strict mode."""
        if self.strict:
            raise GenerationExhausted(kind, message)
        self.note(kind, platform_id, message)


class BranchGenerator:
    """Short upward side paths starting next to a main-path node."""

    def __init__(self, ctx: PlacementContext):
        self.ctx = ctx

    def grow(self, node: Platform) -> List[Platform]:
        ctx, cfg, k = self.ctx, self.ctx.layout, self.ctx.kinematics

        # Roll first so the draw sequence does not depend on the node position
        if not ctx.rng.chance(cfg.branch_chance):
            return []
        if not cfg.branch_min_x < node.x < cfg.world_width - cfg.branch_end_margin:
            return []

        branch_y = node.y - cfg.branch_rise
        if branch_y < cfg.branch_altitude[0]:
            return []

        first = ctx.candidate(node.x + ctx.rng.between(*cfg.branch_offset), branch_y)
        if not k.can_jump_between(node.x, node.y, first.x, first.y):
            return []
        if not ctx.try_place(first):
            return []

        placed = [first]
        previous = first
        path_end = cfg.world_width - cfg.end_margin
        longest_step = k.safe_jump_distance * cfg.branch_reach_factor

        for _ in range(cfg.branch_steps):
            if previous.right >= path_end:
                break
            x = previous.right + ctx.rng.between(cfg.branch_step_min, longest_step)
            y = _clamp(
                previous.y + ctx.rng.between(-cfg.branch_jitter, cfg.branch_jitter),
                cfg.branch_altitude,
            )
            step = ctx.candidate(x, y)
            if not k.can_jump_between(previous.right, previous.y, step.x, step.y):
                break
            if not ctx.try_place(step):
                break
            placed.append(step)
            previous = step

        logger.debug("Branch at x=%.0f: %d platforms", node.x, len(placed))
        return placed


class VerticalVariantGenerator:
    """Extra platforms stacked above a main-path node, for route choice."""

    def __init__(self, ctx: PlacementContext):
        self.ctx = ctx

    def grow(self, node: Platform) -> List[Platform]:
        ctx, cfg, k = self.ctx, self.ctx.layout, self.ctx.kinematics

        if not ctx.rng.chance(cfg.variant_chance):
            return []

        placed = []
        for _ in range(ctx.rng.randint(*cfg.variant_count)):
            x = node.x + ctx.rng.between(-cfg.variant_spread, cfg.variant_spread)
            # Only above the node: smaller y is higher
            y = _clamp(node.y - ctx.rng.between(*cfg.variant_rise), cfg.variant_altitude)
            variant = ctx.candidate(x, y)

            reachable = (
                k.can_jump_between(node.x, node.y, x, y)
                or abs(y - node.y) < cfg.variant_step_allowance
            )
            if reachable and ctx.try_place(variant):
                placed.append(variant)

        return placed


class PathGenerator:
    """Builds the main path and lets branches and variants hang off it.

    Usage:
        ctx = PlacementContext(JumpKinematics(KinematicsConstants()), LayoutConfig(), RandomSource(12345))
        platforms = PathGenerator(ctx).generate()
    """

    def __init__(
        self,
        ctx: PlacementContext,
        branches: Optional[BranchGenerator] = None,
        variants: Optional[VerticalVariantGenerator] = None,
    ):
        self.ctx = ctx
        self.branches = branches or BranchGenerator(ctx)
        self.variants = variants or VerticalVariantGenerator(ctx)
        self.main_path: List[Platform] = []

    def generate(self) -> List[Platform]:
        """Run the walk to the end of the world.

        Returns:
            Every accepted platform in acceptance order; the start is first.
        """
        ctx, cfg = self.ctx, self.ctx.layout

        start = ctx.candidate(cfg.start_x, cfg.start_y)
        ctx.try_place(start)
        self.main_path = [start]

        cursor_x, cursor_y = start.right, start.y
        path_end = cfg.world_width - cfg.end_margin
        longest_gap = ctx.kinematics.safe_jump_distance * cfg.gap_reach_factor
        rejections = 0

        while cursor_x < path_end:
            next_x = cursor_x + ctx.rng.between(cfg.min_gap, longest_gap)
            next_y, drawn = self._draw_height(cursor_x, cursor_y, next_x)
            node = ctx.candidate(next_x, next_y)

            if not ctx.try_place(node):
                rejections += 1
                if rejections >= cfg.stall_limit:
                    # Continue from the platform in the way; min_gap exceeds half the
                    # widest platform plus min_spacing, so its right edge lies past the cursor
                    blocker = max(ctx.blockers(node), key=lambda p: p.right)
                    ctx.report(
                        "stalled", blocker.id,
                        f"Main path stalled at x={cursor_x:.0f} after {rejections} "
                        f"rejected placements; continuing from platform {blocker.id} "
                        f"at x={blocker.right:.0f}",
                    )
                    cursor_x, cursor_y = blocker.right, blocker.y
                    rejections = 0
                continue

            rejections = 0
            if not drawn:
                message = (
                    f"Platform {node.id} at ({node.x:.0f}, {node.y:.0f}) placed at the fallback "
                    f"height after {cfg.y_retries} retries"
                )
                if ctx.kinematics.can_jump_between(cursor_x, cursor_y, node.x, node.y):
                    ctx.note("fallback", node.id, message)
                else:
                    ctx.report("fallback", node.id, f"{message}; not reachable from x={cursor_x:.0f}")
            self.main_path.append(node)
            self.branches.grow(node)
            self.variants.grow(node)
            cursor_x, cursor_y = node.right, node.y

        logger.debug("Generated %d platforms (%d on the main path)",
                     len(ctx.platforms), len(self.main_path))
        return list(ctx.platforms)

    def _draw_height(self, cursor_x: float, cursor_y: float, next_x: float) -> Tuple[float, bool]:
        """Pick the next node's y; the flag is False when the fallback was used."""
        ctx, cfg, k = self.ctx, self.ctx.layout, self.ctx.kinematics
        band = (
            max(cfg.min_altitude, cursor_y - cfg.max_rise),
            min(cfg.max_altitude, cursor_y + cfg.max_drop),
        )

        y = ctx.rng.between(*band)
        for _ in range(cfg.y_retries):
            if k.can_jump_between(cursor_x, cursor_y, next_x, y):
                return y, True
            y = ctx.rng.between(*band)
        if k.can_jump_between(cursor_x, cursor_y, next_x, y):
            return y, True

        return cursor_y + ctx.rng.between(-cfg.fallback_spread, cfg.fallback_spread), False
