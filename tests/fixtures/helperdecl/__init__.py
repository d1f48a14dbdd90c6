"""Declares its module from a helper function while the package imports."""

from metamodule import new


def _label(self):
    return f"thing #{self.serial}"


def _make():
    return new.Thing({"serial": 1, "label": _label})


Thing = _make()
