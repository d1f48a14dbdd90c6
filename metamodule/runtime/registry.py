"""Process-wide registry of finalized module records."""
from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from ..errors import AlreadyRegisteredError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ModuleRecord:
    """Immutable description of a registered module."""

    name: str
    package: str | None
    embeds: tuple[str, ...]
    state: Mapping[str, Any]
    behaviors: Mapping[str, Callable]
    protocol: Mapping[str, Any]
    lineage: tuple[str, ...] = ()

    @property
    def embed_index(self) -> Mapping[str, int]:
        """Position of each direct embed in declaration order."""

        return MappingProxyType({name: pos for pos, name in enumerate(self.embeds)})

    def embeds_module(self, name: str) -> bool:
        return name in self.lineage


class ModuleRegistry:
    """Name → :class:`ModuleRecord` store with exactly-once registration.

    The registry also maps each record's type-tag behavior back to the
    module name, which is how instances are traced to their module.
    """

    def __init__(self):
        self._records: dict[str, ModuleRecord] = {}
        self._tags: dict[Callable, str] = {}
        self._lock = threading.RLock()

    def __contains__(self, name) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def get(self, name: str) -> ModuleRecord | None:
        return self._records.get(name)

    def name_for_tag(self, tag) -> str | None:
        try:
            return self._tags.get(tag)
        except TypeError:  # unhashable
            return None

    def lineage(self, embeds) -> tuple[str, ...]:
        """Breadth-first transitive closure of ``embeds`` over registered records."""

        order: list[str] = []
        visited: set[str] = set()
        queue = deque(embeds)
        while queue:
            name = queue.popleft()
            if name in visited:
                continue
            visited.add(name)
            order.append(name)
            record = self._records.get(name)
            if record is not None:
                queue.extend(record.embeds)
        return tuple(order)

    def add(self, record: ModuleRecord, tag: Callable) -> ModuleRecord:
        with self._lock:
            if record.name in self._records:
                raise AlreadyRegisteredError(record.name)
            self._records[record.name] = record
            self._tags[tag] = record.name
        logger.debug(
            "registered %s (embeds=%s, behaviors=%d, protocol=%d)",
            record.name,
            list(record.embeds),
            len(record.behaviors),
            len(record.protocol),
        )
        return record

    def snapshot(self) -> dict[str, ModuleRecord]:
        return dict(self._records)


REGISTRY = ModuleRegistry()


def get_registered_modules() -> dict[str, ModuleRecord]:
    """Return a snapshot of the currently registered module records."""

    return REGISTRY.snapshot()


__all__ = [
    "REGISTRY",
    "ModuleRecord",
    "ModuleRegistry",
    "get_registered_modules",
]
