"""Resources, enemies walking a path, and projectiles chasing them."""

from __future__ import annotations

import enum
import weakref
from dataclasses import dataclass

from .geometry import GameObject, Vector


class ResourceType(enum.Enum):
    """The kinds of resource a session holds; towers and drops are tied to one."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    BLUE = "blue"
    NOT_RESOURCE_TYPE = "none"


_RESOURCE_NAMES = {
    member.value: member for member in ResourceType if member is not ResourceType.NOT_RESOURCE_TYPE
}


def resource_type_from_string(name):
    """Map a colour name to its resource type; unknown names give NOT_RESOURCE_TYPE."""
    return _RESOURCE_NAMES.get(name, ResourceType.NOT_RESOURCE_TYPE)


@dataclass
class Resource:
    """An amount of one resource type."""

    type: ResourceType = ResourceType.NOT_RESOURCE_TYPE
    value: int = 0


class Enemy(GameObject):
    """An enemy that follows a list of waypoints and can be slowed and damaged."""

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __init__(self):
        super().__init__()
        self.move_speed = 0.0
        self.max_health = 0.0
        self.health = 0.0
        self.defence = 0.0
        self.drop = Resource()
        self.exp = 0
        self.path = []
        self.path_index = 0
        self.dist_from_waypoint = 0.0
        self.distance_to_waypoint = 0.0
        self.distance = 0.0
        self.speed_multiplier = 1.0
        self.slow_additive = 0.0
        self.max_slow_percentage = 0.8
        self.cross_end_of_path = False
        self.health_bar_width = 0
        self.health_bar_height = 5

    def load(self, params):
        """Set up stats and sprite data from a mapping of loader parameters."""
        self.move_speed = float(params.get("move_speed", 0) or 0)
        self.max_health = float(params.get("max_health", 0) or 0)
        self.health = self.max_health
        self.defence = float(params.get("defence", 0) or 0)
        self.drop = Resource(
            resource_type_from_string(params.get("drop_type", "")),
            int(params.get("drop_value", 0) or 0),
        )
        self.exp = int(params.get("exp", 0) or 0)
        self.path_index = 0
        self.dist_from_waypoint = 0.0
        self.distance_to_waypoint = 0.0
        self.distance = 0.0
        self.speed_multiplier = 1.0
        self.slow_additive = 0.0
        self.max_slow_percentage = 0.8
        self.cross_end_of_path = False

        super().load(params)

        self.health_bar_width = self.width // 2
        self.health_bar_height = 5

    def set_path(self, points):
        self.path = list(points)

    def slow(self, percentage):
        """Add a slow for this tick, capped at ``max_slow_percentage``."""
        self.slow_additive = min(self.slow_additive + percentage, self.max_slow_percentage)

    def deal_damage(self, damage):
        """Apply damage reduced by defence and return the damage actually taken."""
        taken = damage * (1 - self.defence)
        self.health = max(self.health - taken, 0)
        return taken

    def is_alive(self):
        return self.health > 0

    def actual_movement_speed(self):
        return (self.speed_multiplier - self.slow_additive) * self.move_speed

    def move(self):
        """Steer towards the current waypoint, advancing when close enough."""
        speed = self.actual_movement_speed()
        if self.path_index >= len(self.path):
            self.cross_end_of_path = True
            return

        point = self.path[self.path_index]
        self.velocity = point - self.position
        if self.velocity.length() < speed:
            self.path_index += 1
            if self.path_index < len(self.path):
                step = self.path[self.path_index] - point
            else:
                step = Vector()
            self.distance_to_waypoint += step.length()
            self.dist_from_waypoint = 0.0
            return

        self.velocity = self.velocity.normalized() * speed
        self.dist_from_waypoint += speed

    def update(self, ticks):
        """Advance one tick; ``ticks`` is the elapsed milliseconds used for animation."""
        self.current_frame = (ticks // 100) % self.num_frames if self.num_frames else 0
        self.move()
        self.distance = self.distance_to_waypoint + self.dist_from_waypoint
        self.slow_additive = 0.0
        super().update()

    def clean(self):
        self.path = []


class Projectile(GameObject):
    """A shot that homes on its target enemy, or on where it was last seen."""

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __init__(self):
        super().__init__()
        self.damage = 0.0
        self.speed = 0.0
        self.hit_enemy = False
        self.target_center = Vector()
        self.tower_type = ResourceType.NOT_RESOURCE_TYPE
        self.tower_origin = None
        self._target = None

    @property
    def target_enemy(self):
        """The target enemy while it still exists, else None."""
        return self._target() if self._target is not None else None

    @target_enemy.setter
    def target_enemy(self, enemy):
        self._target = weakref.ref(enemy) if enemy is not None else None

    def load(self, params):
        super().load(params)
        self.damage = float(params.get("damage", 0) or 0)
        self.speed = float(params.get("projectile_speed", 0) or 0)
        self.tower_type = resource_type_from_string(params.get("tower_color", ""))

    def move(self):
        target = self.target_enemy
        if target is not None:
            self.target_center = Vector(
                target.position.x + target.width // 2,
                target.position.y + target.height // 2,
            )
        self.velocity = self.target_center - self.position
        if self.velocity.length() < self.speed:
            self.hit_enemy = True
            return
        self.velocity = self.velocity.normalized() * self.speed

    def update(self):
        self.move()
        super().update()

    def clean(self):
        self.tower_origin = None