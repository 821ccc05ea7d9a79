"""Collision checks for tower placement, and buying and selling with session resources."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .units import Resource, ResourceType, resource_type_from_string


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in whole pixels."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


def _default_resources():
    return {
        ResourceType.GREEN: 30,
        ResourceType.YELLOW: 5,
        ResourceType.RED: 5,
        ResourceType.BLUE: 0,
    }


@dataclass
class GameSession:
    """State of one play session: lives, resource amounts by type, wave reached."""

    game_health: int = 5
    resources: dict = field(default_factory=_default_resources)
    current_wave_level: int = 0


def _sides(obj):
    left = int(obj.position.x)
    top = int(obj.position.y)
    right = int(obj.position.x + obj.width)
    bottom = int(obj.position.y + obj.height)
    return left, top, right, bottom


def _overlap(a, b):
    left_a, top_a, right_a, bottom_a = a
    left_b, top_b, right_b, bottom_b = b
    return not (
        bottom_a <= top_b or top_a >= bottom_b or right_a <= left_b or left_a >= right_b
    )


def objects_collide(first, second):
    """True when two objects' rectangles overlap; touching edges do not count."""
    return _overlap(_sides(first), _sides(second))


def collides_with_rect(obj, rect):
    return _overlap(_sides(obj), (rect.x, rect.y, rect.x + rect.w, rect.y + rect.h))


class CollisionManager:
    """Decides whether a tower may be placed where it stands."""

    def __init__(self, towers):
        self.towers = towers

    def collide_tower_placement(self, obj, level_width, level_height, path_area):
        """True when ``obj`` is on the path, on a tower, or past the map's right or bottom edge."""
        right = int(obj.position.x + obj.width)
        bottom = int(obj.position.y + obj.height)
        return (
            self.collides_with_path_area(obj, path_area)
            or self.collides_with_towers(obj)
            or right > level_width
            or bottom > level_height
        )

    def collides_with_path_area(self, obj, path_area):
        return any(collides_with_rect(obj, rect) for rect in path_area)

    def collides_with_towers(self, obj):
        return any(objects_collide(obj, tower) for tower in self.towers)


class PurchaseManager:
    """Checks and pays for towers and upgrades out of the session's resources."""

    def __init__(self, session, tower_costs, sell_manager):
        self.session = session
        self.tower_costs = tower_costs
        self.sell_manager = sell_manager

    def tower_cost(self, tower_name):
        """Return the cost of a tower; raise KeyError for an unknown tower."""
        return self.tower_costs[tower_name]

    def can_purchase_tower(self, tower_name, tower_color):
        cost = self.tower_cost(tower_name)
        resource_type = resource_type_from_string(tower_color)
        if resource_type is ResourceType.NOT_RESOURCE_TYPE:
            return False
        return cost <= self.session.resources[resource_type]

    def purchase_tower(self, cost):
        self.session.resources[cost.type] -= cost.value
        self.sell_manager.update_spent_resources(cost)

    def can_purchase_upgrade(self, upgrade, tower_color):
        """True when the upgrade has a next level and its cost can be met."""
        if upgrade.next_level >= upgrade.max_level:
            return False
        resource_type = resource_type_from_string(tower_color)
        if resource_type is ResourceType.NOT_RESOURCE_TYPE:
            return False
        return upgrade.costs[upgrade.next_level] <= self.session.resources[resource_type]

    def purchase_upgrade(self, cost, tower_color):
        resource_type = resource_type_from_string(tower_color)
        if resource_type is ResourceType.NOT_RESOURCE_TYPE:
            return
        self.session.resources[resource_type] -= cost
        self.sell_manager.update_spent_resources(Resource(resource_type, cost))


class SellManager:
    """Tracks what was spent on the selected tower and refunds part of it on sale."""

    def __init__(self, session):
        self.session = session
        self.selected_tower = None
        self.base_sell_percentage = 0.4

    def sell_selected_tower(self):
        tower = self.selected_tower
        if tower is None:
            return
        spent = tower.spent_resources
        self.session.resources[spent.type] += int(
            math.floor(self.base_sell_percentage * spent.value)
        )

    def update_spent_resources(self, resource):
        """Add ``resource`` to the selected tower's spending if the types match."""
        tower = self.selected_tower
        if tower is None:
            return
        spent = tower.spent_resources
        if spent.type == resource.type:
            tower.spent_resources = Resource(resource.type, resource.value + spent.value)