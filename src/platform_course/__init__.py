"""platform-course: guaranteed-jumpable obstacle course layouts.

Generates the floating-platform layout of a side-scrolling obstacle course
from a seed and the player's jump physics: a main path every node of which
is reachable from the one before, optional upward branches and stacked
variants, and hazardous platforms that never sit on the start or the goal.
Generation is a pure function of (seed, config).
"""

from .config import KinematicsConstants, LayoutConfig, SecretConfig, GenerationConfig, CONFIGS
from .rng import RandomSource
from .kinematics import JumpKinematics
from .layout import Platform, LevelLayout, GenerationDiagnostic
from .placement import OverlapResolver, DominanceFilter
from .paths import PlacementContext, PathGenerator, BranchGenerator, VerticalVariantGenerator
from .hazards import HazardPlacer, HazardMarker, hazard_markers
from .level_gen import LevelAssembler, LevelGenerator, generate_level
from .physics import CourseWorld, build_world
from .constraints import (
    ParameterConstraints,
    ConstraintResult,
    ConstraintViolation,
    ConfigurationError,
    GenerationExhausted,
)

__all__ = [
    "KinematicsConstants",
    "LayoutConfig",
    "SecretConfig",
    "GenerationConfig",
    "CONFIGS",
    "RandomSource",
    "JumpKinematics",
    "Platform",
    "LevelLayout",
    "GenerationDiagnostic",
    "OverlapResolver",
    "DominanceFilter",
    "PlacementContext",
    "PathGenerator",
    "BranchGenerator",
    "VerticalVariantGenerator",
    "HazardPlacer",
    "HazardMarker",
    "hazard_markers",
    "LevelAssembler",
    "LevelGenerator",
    "generate_level",
    "CourseWorld",
    "build_world",
    "ParameterConstraints",
    "ConstraintResult",
    "ConstraintViolation",
    "ConfigurationError",
    "GenerationExhausted",
]
