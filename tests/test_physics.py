"""Tests for the pymunk collision world."""

import pytest
import pymunk

from platform_course.config import KinematicsConstants
from platform_course.hazards import hazard_markers
from platform_course.layout import Platform
from platform_course.physics import (
    CourseWorld,
    build_world,
    COLLISION_GOAL,
    COLLISION_HAZARD,
    COLLISION_PLATFORM,
    COLLISION_SECRET,
    GOAL_SENSOR_HEIGHT,
)


class TestCourseWorld:
    def test_initialization(self):
        world = CourseWorld()
        assert world.space is not None
        # Screen coordinates: gravity pulls toward +y
        assert world.space.gravity == (0, 800.0)

    def test_custom_gravity(self):
        world = CourseWorld(KinematicsConstants(gravity=650.0))
        assert world.space.gravity == (0, 650.0)

    def test_static_box_extent(self):
        world = CourseWorld()
        shape = world.create_static_box(100, 200, 80, 20)
        bb = shape.cache_bb()
        assert bb.left == pytest.approx(60.0)
        assert bb.right == pytest.approx(140.0)
        assert bb.bottom == pytest.approx(190.0)
        assert bb.top == pytest.approx(210.0)
        assert shape.collision_type == COLLISION_PLATFORM
        assert shape in world.space.shapes

    def test_hazardous_platform_is_wider(self):
        world = CourseWorld()
        shape = world.add_platform(Platform(id=3, x=500, y=300, width=100, has_hazard=True), widening=40.0)
        bb = shape.cache_bb()
        assert bb.right - bb.left == pytest.approx(140.0)
        assert world.shape_for(3) is shape

    def test_platform_at(self):
        world = CourseWorld()
        world.add_platform(Platform(id=7, x=500, y=300, width=100))
        assert world.platform_at(520, 305) == 7
        assert world.platform_at(700, 300) is None

    def test_static_box_blocks_falling_body(self):
        world = CourseWorld()
        world.create_static_box(0, 100, 400, 20)

        body = pymunk.Body(1, float("inf"))
        body.position = (0, 50)
        player = pymunk.Poly.create_box(body, (20, 20))
        world.space.add(body, player)

        for _ in range(120):
            world.space.step(1 / 60)
        # Resting on the top face at y=90
        assert body.position.y == pytest.approx(80.0, abs=2.0)


class TestBuildWorld:
    def test_one_shape_per_platform(self, layout):
        world = build_world(layout)
        assert set(world.platform_shapes) == {p.id for p in layout}

    def test_body_widths(self, layout):
        world = build_world(layout)
        for p in layout:
            bb = world.shape_for(p.id).cache_bb()
            assert bb.right - bb.left == pytest.approx(layout.body_width(p))

    def test_hazard_sensors(self, layout):
        world = build_world(layout)
        expected = sum(len(hazard_markers(p, layout.hazard_widening)) for p in layout)
        assert len(world.hazard_shapes) == expected
        assert all(s.sensor and s.collision_type == COLLISION_HAZARD for s in world.hazard_shapes)

    def test_goal_sensor_above_goal(self, layout):
        world = build_world(layout)
        bb = world.goal_shape.cache_bb()
        assert world.goal_shape.sensor
        assert world.goal_shape.collision_type == COLLISION_GOAL
        assert bb.top == pytest.approx(layout.goal.top)
        assert bb.top - bb.bottom == pytest.approx(GOAL_SENSOR_HEIGHT)

    def test_secret_shape(self, layout):
        world = build_world(layout)
        assert world.secret_shape.collision_type == COLLISION_SECRET
        assert not world.secret_shape.sensor

    def test_bounds_cover_course(self, layout):
        left, top, right, bottom = build_world(layout).bounds
        assert left == pytest.approx(layout.start.left)
        assert right >= layout.goal.right
        assert top <= min(p.top for p in layout)
        assert bottom >= max(p.bottom for p in layout)

    def test_gravity_from_kinematics(self, layout):
        world = build_world(layout, KinematicsConstants(gravity=1000.0))
        assert world.space.gravity == (0, 1000.0)

    @pytest.mark.parametrize("seed", range(20))
    def test_platform_bodies_keep_apart(self, generator, seed):
        layout = generator.generate(seed)
        world = build_world(layout)
        boxes = [(p.id, world.shape_for(p.id).cache_bb()) for p in layout]
        for i, (a_id, a) in enumerate(boxes):
            for b_id, b in boxes[i + 1:]:
                # 5 units of clearance, like placement
                apart = (a.right + 5 < b.left or b.right + 5 < a.left
                         or a.top + 5 < b.bottom or b.top + 5 < a.bottom)
                assert apart, f"bodies of {a_id} and {b_id} overlap"
