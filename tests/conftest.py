"""Pytest configuration and shared fixtures."""

import pytest

from platform_course.config import GenerationConfig, KinematicsConstants, LayoutConfig, CONFIGS
from platform_course.kinematics import JumpKinematics
from platform_course.level_gen import LevelGenerator
from platform_course.paths import PlacementContext
from platform_course.rng import RandomSource


@pytest.fixture
def kinematics():
    """Jump model with the shipped constants (safe distance 212.5, height 156.25)."""
    return JumpKinematics(KinematicsConstants())


@pytest.fixture
def generator():
    return LevelGenerator(GenerationConfig())


@pytest.fixture
def layout(generator):
    """Default layout for the default seed."""
    return generator.generate()


@pytest.fixture
def sparse_generator():
    """Main path only, strict: every step must verify."""
    return LevelGenerator(GenerationConfig(layout=CONFIGS["sparse"].layout, strict=True))


@pytest.fixture
def make_ctx(kinematics):
    """Factory for a fresh placement context."""
    def _make(seed=12345, **layout_overrides):
        return PlacementContext(kinematics, LayoutConfig(**layout_overrides), RandomSource(seed))
    return _make
