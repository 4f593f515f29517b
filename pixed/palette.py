"""The colour palette shown at the side of the workspace."""

from __future__ import annotations

from typing import List, Optional, Protocol

from .pixels import Rgba8


class _Point(Protocol):
    x: float
    y: float


class Palette:
    """An ordered set of colours laid out in columns of cells."""

    def __init__(self, cellsize: float, height: int) -> None:
        self.colors: List[Rgba8] = []
        self.hover: Optional[Rgba8] = None
        self.cellsize = cellsize
        self.height = height
        self.x = 0.0
        self.y = 0.0

    def add(self, color: Rgba8) -> None:
        """Add a colour unless it is already present."""
        if color not in self.colors:
            self.colors.append(color)

    def clear(self) -> None:
        self.colors.clear()

    def size(self) -> int:
        return len(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def handle_cursor_moved(self, p: _Point) -> None:
        """Update the hovered colour for a cursor at ``p``."""
        x = int(p.x) - int(self.x)
        y = int(p.y) - int(self.y)
        cellsize = int(self.cellsize)
        size = self.size()

        width = cellsize * 2 if size > self.height else cellsize
        height = min(size, self.height) * cellsize

        if x >= width or y >= height or x < 0 or y < 0:
            self.hover = None
            return

        x //= cellsize
        y //= cellsize
        index = y + x * height

        # The palette is displayed reversed, since the Y axis points up.
        self.hover = self.colors[size - index - 1] if index < size else None