"""Staged course generation.

Stages run strictly forward, each producing a new list:
1. generate  - main path with branches and variants (PathGenerator)
2. filter    - drop dominated platforms the course does not depend on (DominanceFilter)
3. hazards   - assign, consolidate, exempt the goal (HazardPlacer)
4. audit     - reachability from the start, optionally pruned
5. assemble  - flag start and goal, attach shortcut target and secret cloud

Every platform PathGenerator accepts can be reached from the start, and
stages 2 and 3 only delete platforms whose removal keeps it that way, so
the audit finds nothing unless a fallback height could not be verified.

Key design: the whole run owns one RandomSource, so a (seed, config) pair
always yields the same LevelLayout and separate runs never share state.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from .config import GenerationConfig, LayoutConfig, SecretConfig
from .constraints import require_valid
from .hazards import HazardPlacer, goal_index_of
from .kinematics import JumpKinematics
from .layout import GenerationDiagnostic, LevelLayout, Platform
from .paths import PathGenerator, PlacementContext
from .placement import DominanceFilter
from .reachability import unreachable_platforms
from .rng import RandomSource

logger = logging.getLogger(__name__)

SECRET_PLATFORM_ID = -1


class LevelAssembler:
    """Turns the final platform list into a LevelLayout.

    The goal is the platform HazardPlacer flagged; an unflagged list falls
    back to the rightmost widened edge.
    """

    def __init__(self, layout: LayoutConfig, secret: Optional[SecretConfig] = None):
        self.layout = layout
        self.secret = secret or SecretConfig()

    def assemble(
        self,
        platforms: Sequence[Platform],
        seed: int = 0,
        diagnostics: Sequence[GenerationDiagnostic] = (),
    ) -> LevelLayout:
        if not platforms:
            raise ValueError("Cannot assemble a layout without platforms")

        widening = self.layout.hazard_widening
        marked = [i for i, p in enumerate(platforms) if p.is_goal]
        goal_index = marked[0] if marked else goal_index_of(platforms, widening)

        flagged = [replace(p, is_goal=False) if p.is_goal else p for p in platforms]
        flagged[0] = replace(flagged[0], is_start=True)
        flagged[goal_index] = replace(flagged[goal_index], is_goal=True)

        # Second rightmost by centre, once the goal is set aside
        others = [p for i, p in enumerate(flagged) if i != goal_index]
        shortcut_target = max(others, key=lambda p: p.x) if others else None

        return LevelLayout(
            platforms=tuple(flagged),
            start=flagged[0],
            goal=flagged[goal_index],
            shortcut_target=shortcut_target,
            secret=self._secret_platform(),
            seed=seed,
            world_width=self.layout.world_width,
            hazard_widening=widening,
            diagnostics=tuple(diagnostics),
        )

    def _secret_platform(self) -> Optional[Platform]:
        if not self.secret.enabled:
            return None
        return Platform(
            id=SECRET_PLATFORM_ID,
            x=self.secret.x,
            y=self.secret.y,
            width=self.secret.width,
            height=self.secret.height,
        )


class LevelGenerator:
    """Generates courses from a GenerationConfig.

    The config is validated once, here, so a bad config fails before any
    level is built.

    Usage:
        generator = LevelGenerator(CONFIGS["default"])
        layout = generator.generate(seed=7)
    """

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()
        self.validation = require_valid(self.config)
        self.kinematics = JumpKinematics(self.config.kinematics)
        self.assembler = LevelAssembler(self.config.layout, self.config.secret)

    def generate(self, seed: Optional[int] = None) -> LevelLayout:
        """Generate one layout.

        Args:
            seed: Overrides the config seed for this run.

        Returns:
            LevelLayout with platforms in generation order.
        """
        seed = self.config.seed if seed is None else seed
        rng = RandomSource(seed)
        ctx = PlacementContext(self.kinematics, self.config.layout, rng, strict=self.config.strict)

        generated = self.generate_platforms(ctx)
        filtered = self.filter_dominated(generated)
        placer = HazardPlacer(rng, self.config.layout, self.kinematics)
        hazarded = placer.place(filtered)
        audited = self.audit(hazarded, ctx, placer)

        layout = self.assembler.assemble(audited, seed=seed, diagnostics=ctx.diagnostics)
        logger.info("Generated layout for seed %d: %d platforms, %d hazardous, %d diagnostics",
                    seed, len(layout), len(layout.hazardous()), len(layout.diagnostics))
        return layout

    def generate_platforms(self, ctx: PlacementContext) -> List[Platform]:
        return PathGenerator(ctx).generate()

    def filter_dominated(self, platforms: Sequence[Platform]) -> List[Platform]:
        return DominanceFilter(self.config.layout.dominance_radius, self.kinematics).apply(platforms)

    def audit(
        self,
        platforms: Sequence[Platform],
        ctx: PlacementContext,
        placer: HazardPlacer,
    ) -> List[Platform]:
        """Record (or prune) platforms the start cannot reach.

        Pruning can change the rightmost platform, so the goal exemption is
        applied again afterwards.
        """
        unreachable = unreachable_platforms(platforms, self.kinematics)
        if not unreachable:
            return list(platforms)

        if self.config.prune_unreachable:
            dropped = {p.id for p in unreachable}
            for p in unreachable:
                ctx.note("pruned", p.id, f"Pruned unreachable platform {p.id} at ({p.x:.0f}, {p.y:.0f})")
            return placer.exempt_goal([p for p in platforms if p.id not in dropped])

        for p in unreachable:
            ctx.report("unreachable", p.id,
                       f"Platform {p.id} at ({p.x:.0f}, {p.y:.0f}) is not reachable from the start")
        return list(platforms)


def generate_level(seed: Optional[int] = None, config: Optional[GenerationConfig] = None) -> LevelLayout:
    """One-call form of ``LevelGenerator(config).generate(seed)``."""
    return LevelGenerator(config).generate(seed)
