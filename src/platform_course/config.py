"""Configuration for course generation.

KinematicsConstants holds the player's jump physics. LayoutConfig holds the
placement thresholds used by the generators. These thresholds are design
constants chosen by hand, not physical derivations, so each one is a named
field that tests and presets can override.

This design separates:
- Player physics (what the jump model is built from) - KinematicsConstants
- Placement rules (where platforms may go) - LayoutConfig
- Per-run settings (seed, strictness) - GenerationConfig
"""

from dataclasses import dataclass, field, asdict
from typing import Tuple, Dict, Any, ClassVar


@dataclass(frozen=True)
class KinematicsConstants:
    """Fixed jump physics of the player, in screen units (y grows downward)."""

    gravity: float = 800.0  # px/s^2 pulling the player down
    jump_velocity: float = 500.0  # Initial upward speed of a jump (px/s)
    horizontal_speed: float = 200.0  # Run speed, also used while airborne (px/s)

    # Sampling ranges for presets and sweeps
    GRAVITY_RANGE: ClassVar[Tuple[float, float]] = (600.0, 1200.0)
    JUMP_VELOCITY_RANGE: ClassVar[Tuple[float, float]] = (400.0, 650.0)
    HORIZONTAL_SPEED_RANGE: ClassVar[Tuple[float, float]] = (160.0, 300.0)

    def to_dict(self) -> Dict[str, float]:
        return {
            "gravity": self.gravity,
            "jump_velocity": self.jump_velocity,
            "horizontal_speed": self.horizontal_speed,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "KinematicsConstants":
        return cls(
            gravity=d.get("gravity", 800.0),
            jump_velocity=d.get("jump_velocity", 500.0),
            horizontal_speed=d.get("horizontal_speed", 200.0),
        )


@dataclass(frozen=True)
class LayoutConfig:
    """Placement thresholds for the path, branch, variant and hazard stages."""

    # === WORLD ===
    world_width: float = 4000.0
    start_x: float = 150.0
    start_y: float = 450.0
    platform_height: float = 20.0
    platform_widths: Tuple[float, ...] = (100.0, 120.0, 140.0, 150.0, 160.0, 180.0, 200.0)
    end_margin: float = 200.0  # Main path stops this far from the right edge

    # === MAIN PATH ===
    min_gap: float = 180.0
    gap_reach_factor: float = 0.95  # Longest gap as a fraction of the safe jump distance
    min_altitude: float = 150.0  # Smallest y a platform may take (highest on screen)
    max_altitude: float = 500.0  # Largest y a platform may take (lowest on screen)
    max_rise: float = 150.0
    max_drop: float = 100.0
    y_retries: int = 10
    fallback_spread: float = 50.0
    stall_limit: int = 25  # Consecutive overlap rejections before the cursor is forced on

    # === OVERLAP ===
    min_spacing: float = 5.0

    # === BRANCHES ===
    branch_chance: float = 0.25
    branch_min_x: float = 500.0
    branch_end_margin: float = 1000.0
    branch_rise: float = 120.0
    branch_offset: Tuple[float, float] = (50.0, 100.0)
    branch_steps: int = 3
    branch_step_min: float = 150.0
    branch_reach_factor: float = 0.9
    branch_jitter: float = 30.0
    branch_altitude: Tuple[float, float] = (150.0, 400.0)

    # === VERTICAL VARIANTS ===
    variant_chance: float = 0.4
    variant_count: Tuple[int, int] = (1, 2)
    variant_spread: float = 100.0
    variant_rise: Tuple[float, float] = (80.0, 120.0)
    variant_altitude: Tuple[float, float] = (150.0, 500.0)
    variant_step_allowance: float = 100.0  # Kept when this close vertically even if the jump check fails

    # === DOMINANCE ===
    dominance_radius: float = 50.0

    # === HAZARDS ===
    hazard_chance: float = 0.5
    hazard_widening: float = 40.0
    safe_indices: Tuple[int, ...] = (0, 2)
    crowding_vertical: float = 50.0
    crowding_radius: float = 80.0

    WORLD_WIDTH_RANGE: ClassVar[Tuple[float, float]] = (2000.0, 8000.0)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LayoutConfig":
        """Create from dictionary; unknown keys are ignored, lists become tuples."""
        known = cls.__dataclass_fields__
        values = {
            k: tuple(v) if isinstance(v, list) else v
            for k, v in d.items() if k in known
        }
        return cls(**values)


@dataclass(frozen=True)
class SecretConfig:
    """Bonus cloud left of the start, off the main path's forward jumps."""
    enabled: bool = True
    x: float = -150.0
    y: float = 400.0
    width: float = 120.0
    height: float = 30.0


@dataclass(frozen=True)
class GenerationConfig:
    """Complete generation configuration combining all parameter groups."""
    kinematics: KinematicsConstants = field(default_factory=KinematicsConstants)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    secret: SecretConfig = field(default_factory=SecretConfig)

    seed: int = 12345
    strict: bool = False  # Raise GenerationExhausted instead of recording diagnostics
    prune_unreachable: bool = False  # Drop platforms the reachability audit cannot reach

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "kinematics": self.kinematics.to_dict(),
            "layout": self.layout.to_dict(),
            "secret": asdict(self.secret),
            "seed": self.seed,
            "strict": self.strict,
            "prune_unreachable": self.prune_unreachable,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GenerationConfig":
        return cls(
            kinematics=KinematicsConstants.from_dict(d.get("kinematics", {})),
            layout=LayoutConfig.from_dict(d.get("layout", {})),
            secret=SecretConfig(**d.get("secret", {})),
            seed=d.get("seed", 12345),
            strict=d.get("strict", False),
            prune_unreachable=d.get("prune_unreachable", False),
        )


# Predefined configurations for testing/demo
CONFIGS = {
    # The shipped level: 4000 wide, 800 gravity, 500 jump, 200 run speed
    "default": GenerationConfig(),

    # Longer air time - wider gaps are still safe
    "floaty": GenerationConfig(kinematics=KinematicsConstants(
        gravity=650.0,
        jump_velocity=520.0,
        horizontal_speed=210.0,
    )),

    # Short snappy jumps - gaps shrink to match
    "tight": GenerationConfig(
        kinematics=KinematicsConstants(gravity=1000.0, jump_velocity=520.0, horizontal_speed=200.0),
        layout=LayoutConfig(min_gap=150.0),
    ),

    # Quick test course
    "short": GenerationConfig(layout=LayoutConfig(world_width=2000.0)),

    # No optional routes, only the main path and hazards
    "sparse": GenerationConfig(layout=LayoutConfig(branch_chance=0.0, variant_chance=0.0)),
}
