"""Pointer input and click-to-select behaviour for on-screen objects."""

from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import Vector


@dataclass(frozen=True)
class PointerState:
    """A snapshot of the mouse and keyboard state used by interactive objects."""

    position: Vector = field(default_factory=Vector)
    left: bool = False
    right: bool = False
    escape: bool = False

    def is_over(self, position, width, height):
        """True when the pointer lies within the given rectangle."""
        return (
            position.x <= self.position.x < position.x + width
            and position.y <= self.position.y < position.y + height
        )


@dataclass(frozen=True)
class CloseArea:
    """The area in which a click deselects; a zero width means anywhere."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


class SelectOnClickHandler:
    """Selects an object when it is clicked and deselects on a second click.

    A press that starts outside the object does not select it when released
    over it. The handler starts out selected.
    """

    def __init__(self, position=None, width=0, height=0, close_area=None, key_interruptible=False):
        self.position = position if position is not None else Vector()
        self.width = width
        self.height = height
        self.close_area = close_area if close_area is not None else CloseArea()
        self.key_interruptible = key_interruptible
        self.selected = True
        self._pressed = False
        self._pressed_outside = False
        self._mouse_on_object = False

    def update(self, pointer):
        self._mouse_on_object = pointer.is_over(self.position, self.width, self.height)

    def handle_event(self, pointer):
        self._handle_interrupt(pointer)
        self._handle_outside_click(pointer)
        self._handle_click(pointer)

    def reset(self):
        self.selected = False
        self._pressed = False
        self._pressed_outside = False

    def _handle_interrupt(self, pointer):
        if self.key_interruptible and self.selected and pointer.escape:
            self.reset()

    def _handle_outside_click(self, pointer):
        if not self._mouse_on_object:
            self._pressed_outside = pointer.left
        elif not pointer.left:
            self._pressed_outside = False

    def _handle_click(self, pointer):
        if self._mouse_on_object and not self._pressed_outside and not self.selected:
            if not pointer.left and self._pressed:
                self._pressed = False
                self.selected = True
            elif pointer.left:
                self._pressed = True
        elif self.selected and self._mouse_inside_area(pointer):
            if not pointer.left and self._pressed:
                self._pressed = False
                self.selected = False
            elif pointer.left:
                self._pressed = True
        else:
            self._pressed = False

    def _mouse_inside_area(self, pointer):
        area = self.close_area
        if area.width == 0:
            return True
        return pointer.is_over(Vector(area.x, area.y), area.width, area.height)