"""
Drawing surfaces the game core renders through.

Coordinates are y-down with the origin in the top-left corner. Colors are
RGB or RGBA tuples of 0-255 ints.
"""

from typing import Any, List, Protocol, Tuple


class Surface(Protocol):
    def clear(self) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float, color) -> None: ...


class NullSurface:
    """Headless surface that drops every draw call"""

    def clear(self):
        pass

    def fill_rect(self, x, y, width, height, color):
        pass

    def fill_circle(self, x, y, radius, color):
        pass


class RecordingSurface:
    """Surface that records draw calls, for tests and debugging"""

    def __init__(self):
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def clear(self):
        self.calls.append(("clear", ()))

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("fill_rect", (x, y, width, height, color)))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("fill_circle", (x, y, radius, color)))

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    def reset(self):
        self.calls.clear()
