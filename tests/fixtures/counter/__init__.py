"""Declares a module named after its package: ``fixtures.counter``."""

from metamodule import new


def _increment(self, step=1):
    self.count += step
    return self.count


Counter = new({"count": 0, "increment": _increment})
