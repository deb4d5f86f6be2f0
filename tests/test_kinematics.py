"""Tests for the jump reachability model."""

import pytest

from platform_course.config import KinematicsConstants
from platform_course.kinematics import JumpKinematics
from platform_course.layout import Platform


class TestDerivedValues:
    def test_air_time(self, kinematics):
        assert kinematics.jump_air_time == pytest.approx(1.25)

    def test_max_jump_distance(self, kinematics):
        assert kinematics.max_jump_distance == pytest.approx(250.0)

    def test_safe_jump_distance(self, kinematics):
        assert kinematics.safe_jump_distance == pytest.approx(212.5)

    def test_max_jump_height(self, kinematics):
        assert kinematics.max_jump_height == pytest.approx(156.25)

    def test_higher_jump_velocity_reaches_further(self):
        slow = JumpKinematics(KinematicsConstants(jump_velocity=400.0))
        fast = JumpKinematics(KinematicsConstants(jump_velocity=600.0))
        assert fast.max_jump_distance > slow.max_jump_distance
        assert fast.max_jump_height > slow.max_jump_height

    def test_to_dict_includes_derived(self, kinematics):
        d = kinematics.to_dict()
        assert d["gravity"] == 800.0
        assert d["safe_jump_distance"] == pytest.approx(212.5)


class TestCanJumpBetween:
    def test_level_jump_within_reach(self, kinematics):
        assert kinematics.can_jump_between(0, 450, 200, 450)

    def test_level_jump_too_far(self, kinematics):
        assert not kinematics.can_jump_between(0, 450, 300, 450)

    def test_direction_does_not_matter(self, kinematics):
        assert kinematics.can_jump_between(200, 450, 0, 450)
        assert not kinematics.can_jump_between(300, 450, 0, 450)

    def test_rise_within_margin(self, kinematics):
        # 0.9 * 156.25 = 140.625
        assert kinematics.can_jump_between(0, 450, 100, 310)

    def test_rise_beyond_margin(self, kinematics):
        assert not kinematics.can_jump_between(0, 450, 100, 309)

    def test_drop_at_limit(self, kinematics):
        assert kinematics.can_jump_between(0, 300, 100, 500)

    def test_drop_too_deep(self, kinematics):
        assert not kinematics.can_jump_between(0, 300, 100, 501)

    def test_custom_margins(self):
        model = JumpKinematics(KinematicsConstants(), distance_margin=1.0, max_drop=50.0)
        assert model.can_jump_between(0, 450, 249, 450)
        assert not model.can_jump_between(0, 300, 10, 360)


class TestCanReach:
    def test_takes_off_from_near_edge(self, kinematics):
        source = Platform(id=0, x=100, y=450, width=100)  # right edge 150
        assert kinematics.can_reach(source, Platform(id=1, x=350, y=450, width=100))
        assert not kinematics.can_reach(source, Platform(id=2, x=400, y=450, width=100))

    def test_reaches_leftward(self, kinematics):
        source = Platform(id=0, x=300, y=450, width=100)  # left edge 250
        assert kinematics.can_reach(source, Platform(id=1, x=100, y=450, width=100))

    def test_straight_up(self, kinematics):
        source = Platform(id=0, x=300, y=450, width=200)
        assert kinematics.can_reach(source, Platform(id=1, x=320, y=350, width=100))
        assert not kinematics.can_reach(source, Platform(id=2, x=320, y=250, width=100))

    def test_not_symmetric(self, kinematics):
        low = Platform(id=0, x=100, y=500, width=100)
        high = Platform(id=1, x=150, y=340, width=100)
        # 160 up is too high, 160 down is fine
        assert not kinematics.can_reach(low, high)
        assert kinematics.can_reach(high, low)
