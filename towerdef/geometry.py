"""Plane vectors and the positioned, moving game object built on them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vector:
    """An immutable 2D vector; adding or subtracting a number acts on both parts."""

    x: float = 0.0
    y: float = 0.0

    def length(self):
        return math.hypot(self.x, self.y)

    def normalized(self):
        """Return a unit vector in the same direction; the zero vector stays zero."""
        size = self.length()
        if size > 0:
            return Vector(self.x / size, self.y / size)
        return self

    @staticmethod
    def distance(a, b):
        return (a - b).length()

    def __add__(self, other):
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y)
        return Vector(self.x + other, self.y + other)

    def __sub__(self, other):
        if isinstance(other, Vector):
            return Vector(self.x - other.x, self.y - other.y)
        return Vector(self.x - other, self.y - other)

    def __mul__(self, scalar):
        return Vector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Vector(-self.x, -self.y)


@dataclass
class GameObject:
    """A sprite-sized object with a position, velocity and acceleration."""

    position: Vector = field(default_factory=Vector)
    velocity: Vector = field(default_factory=Vector)
    acceleration: Vector = field(default_factory=Vector)
    width: int = 0
    height: int = 0
    texture_id: str = ""
    current_row: int = 1
    current_frame: int = 0
    num_frames: int = 0

    def load(self, params):
        """Set up the object from a mapping of loader parameters."""
        self.position = Vector(float(params.get("x", 0.0)), float(params.get("y", 0.0)))
        self.velocity = Vector()
        self.acceleration = Vector()
        self.width = int(params.get("width", 0))
        self.height = int(params.get("height", 0))
        self.texture_id = str(params.get("texture_id", ""))
        self.current_row = 1
        self.current_frame = 0
        self.num_frames = int(params.get("num_frames", 0) or 0)

    def update(self):
        """Advance one tick: acceleration feeds velocity, velocity feeds position."""
        self.velocity = self.velocity + self.acceleration
        self.position = self.position + self.velocity

    def faces_left(self):
        """True when moving backwards, so the sprite is drawn flipped."""
        return self.velocity.x < 0