"""Touch-screen menu for picking an autonomous routine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its minimum and maximum corners."""

    min_point: Point
    max_point: Point

    @classmethod
    def from_min_and_size(cls, min_point: Point, size: Point) -> Rect:
        """Build a rectangle from its top-left corner and its width and height."""
        x, y = min_point
        w, h = size
        return cls((x, y), (x + w, y + h))

    @property
    def width(self) -> float:
        return self.max_point[0] - self.min_point[0]

    @property
    def height(self) -> float:
        return self.max_point[1] - self.min_point[1]

    def contains(self, x: float, y: float) -> bool:
        """Whether the point lies inside the rectangle, edges included."""
        return (
            self.min_point[0] <= x <= self.max_point[0]
            and self.min_point[1] <= y <= self.max_point[1]
        )

    def center(self) -> Point:
        """The midpoint of the rectangle."""
        return (
            (self.min_point[0] + self.max_point[0]) / 2,
            (self.min_point[1] + self.max_point[1]) / 2,
        )


@dataclass(frozen=True)
class _Entry:
    rect: Rect
    name: str


class AutoChooser:
    """Lays out one button per routine and remembers which one was tapped."""

    width = 380
    height = 220
    _per_line = 3
    _num_lines = 2
    _x_padding = 20
    _y_padding = 20
    _x_start = 50
    _y_start = 10

    def __init__(self, paths: Sequence[str], default: int = 0) -> None:
        self.choice = default
        entry_height = (self.height - self._y_padding * (self._num_lines - 1)) // self._num_lines
        entry_width = (self.width - self._x_padding * (self._per_line - 1)) // self._per_line

        self.entries: list[_Entry] = []
        x, y = self._x_start, self._y_start
        for i, name in enumerate(paths, start=1):
            rect = Rect.from_min_and_size((float(x), float(y)), (entry_width, entry_height))
            self.entries.append(_Entry(rect, name))
            x += entry_width + self._x_padding
            if i % self._per_line == 0:
                y += entry_height + self._y_padding
                x = self._x_start

    def update(self, was_pressed: bool, x: int, y: int) -> None:
        """Select the entry under a screen press."""
        if not was_pressed:
            return
        for i, entry in enumerate(self.entries):
            if entry.rect.contains(x, y):
                self.choice = i

    def draw(self, screen: Any, first_draw: bool, frame_number: int) -> None:
        """Draw every entry, highlighting the current choice."""
        screen.set_font("mono20")
        for i, entry in enumerate(self.entries):
            screen.set_fill_color("green" if i == self.choice else "blue")
            rect = entry.rect
            screen.draw_rectangle(rect.min_point[0], rect.min_point[1], rect.width, rect.height)
            text_width = int(screen.get_string_width(entry.name))
            cx, cy = rect.center()
            screen.print_at(cx - text_width // 2, cy - 10, entry.name)

    def get_choice(self) -> int:
        """Index of the selected routine."""
        return self.choice