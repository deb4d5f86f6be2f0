"""Static pymunk collision world built from a LevelLayout.

One static box per platform, sized to its collision body (hazardous
platforms are wider), a sensor per hazard marker, a sensor over the goal
and a solid box for the secret cloud. Coordinates are screen coordinates,
so gravity points along +y.
"""

import pymunk
from typing import Dict, List, Optional, Tuple

from .config import KinematicsConstants
from .hazards import hazard_markers
from .layout import LevelLayout, Platform


# Collision types for different entity categories
COLLISION_PLAYER = 1
COLLISION_PLATFORM = 2
COLLISION_HAZARD = 3
COLLISION_GOAL = 4
COLLISION_SECRET = 5

GOAL_SENSOR_HEIGHT = 60.0


class CourseWorld:
    """Manages the pymunk space holding a course's static geometry."""

    def __init__(self, kinematics: Optional[KinematicsConstants] = None):
        self.kinematics = kinematics or KinematicsConstants()

        self.space = pymunk.Space()
        self.space.gravity = (0, self.kinematics.gravity)

        self.platform_shapes: Dict[int, pymunk.Shape] = {}
        self.hazard_shapes: List[pymunk.Shape] = []
        self.goal_shape: Optional[pymunk.Shape] = None
        self.secret_shape: Optional[pymunk.Shape] = None

    def create_static_box(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        collision_type: int = COLLISION_PLATFORM,
        friction: float = 1.0,
        sensor: bool = False,
    ) -> pymunk.Shape:
        """Create a static rectangle centred on (x, y) and add it to the space."""
        body = self.space.static_body
        half_w, half_h = width / 2, height / 2
        vertices = [
            (-half_w, -half_h),
            (half_w, -half_h),
            (half_w, half_h),
            (-half_w, half_h),
        ]
        shape = pymunk.Poly(body, vertices, transform=pymunk.Transform.translation(x, y))
        shape.collision_type = collision_type
        shape.friction = friction
        shape.sensor = sensor
        self.space.add(shape)
        return shape

    def add_platform(self, platform: Platform, widening: float = 0.0) -> pymunk.Shape:
        shape = self.create_static_box(
            platform.x, platform.y, platform.body_width(widening), platform.height,
        )
        self.platform_shapes[platform.id] = shape
        return shape

    def shape_for(self, platform_id: int) -> pymunk.Shape:
        return self.platform_shapes[platform_id]

    def platform_at(self, x: float, y: float) -> Optional[int]:
        """Id of the platform whose body contains the point, if any."""
        ids = {shape: pid for pid, shape in self.platform_shapes.items()}
        for hit in self.space.point_query((x, y), 0, pymunk.ShapeFilter()):
            if hit.shape in ids:
                return ids[hit.shape]
        return None

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom) over every platform body."""
        boxes = [shape.cache_bb() for shape in self.platform_shapes.values()]
        return (
            min(bb.left for bb in boxes),
            min(bb.bottom for bb in boxes),
            max(bb.right for bb in boxes),
            max(bb.top for bb in boxes),
        )


def build_world(layout: LevelLayout, kinematics: Optional[KinematicsConstants] = None) -> CourseWorld:
    """Build the static collision world for a layout.

    Args:
        layout: Generated course
        kinematics: Supplies gravity for the space. Defaults if None.

    Returns:
        CourseWorld with every platform, marker, goal and secret shape added
    """
    world = CourseWorld(kinematics)

    for platform in layout.platforms:
        world.add_platform(platform, layout.hazard_widening)
        for marker in hazard_markers(platform, layout.hazard_widening):
            world.hazard_shapes.append(world.create_static_box(
                marker.x, marker.y, marker.width, marker.height,
                collision_type=COLLISION_HAZARD, sensor=True,
            ))

    # Finish trigger stands on top of the goal platform
    goal = layout.goal
    world.goal_shape = world.create_static_box(
        goal.x, goal.top - GOAL_SENSOR_HEIGHT / 2, goal.width, GOAL_SENSOR_HEIGHT,
        collision_type=COLLISION_GOAL, sensor=True,
    )

    if layout.secret is not None:
        secret = layout.secret
        world.secret_shape = world.create_static_box(
            secret.x, secret.y, secret.width, secret.height, collision_type=COLLISION_SECRET,
        )

    return world
