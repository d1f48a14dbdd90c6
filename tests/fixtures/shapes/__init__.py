"""Declares ``fixtures.shapes.Point``; the package name is inferred on import."""

from metamodule import new


def _init(self, x=0, y=0):
    self.x = x
    self.y = y
    return self


def _move(self, dx, dy):
    self.x += dx
    self.y += dy
    return self


def _add(self, other):
    return Point(self.x + other.x, self.y + other.y)


def _eq(self, other):
    return (self.x, self.y) == (getattr(other, "x", None), getattr(other, "y", None))


Point = new.Point(
    {
        "x": 0,
        "y": 0,
        "init": _init,
        "move": _move,
        "__add__": _add,
        "__eq__": _eq,
    }
)
