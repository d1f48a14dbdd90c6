"""Fails while being imported."""

raise RuntimeError("broken fixture package")
