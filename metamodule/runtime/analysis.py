"""Graph views and descriptions of the module registry."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import networkx as nx
import pydot

from ..errors import NotFoundError
from .registry import REGISTRY, ModuleRecord

_IDENT = ("_PACKAGE", "_NAME")


def _record(name: str) -> ModuleRecord:
    record = REGISTRY.get(name)
    if record is None:
        raise NotFoundError(name)
    return record


def _closure(names: Iterable[str] | None) -> list[str]:
    if names is None:
        return list(REGISTRY)
    roots = list(names)
    for name in roots:
        _record(name)
    return list(dict.fromkeys(roots + list(REGISTRY.lineage(roots))))


def embedding_graph(names: Iterable[str] | None = None) -> nx.DiGraph:
    """Build a graph with an edge from every module to each module it embeds.

    ``names`` restricts the graph to those modules and everything they
    embed; by default every registered module is included.
    """

    graph = nx.DiGraph()
    for name in _closure(names):
        record = _record(name)
        graph.add_node(
            name,
            package=record.package,
            behaviors=sorted(record.behaviors),
            state=sorted(k for k in record.state if k not in _IDENT),
            protocol=sorted(record.protocol),
        )
        for position, embedded in enumerate(record.embeds):
            graph.add_edge(name, embedded, position=position)
    return graph


def lineage(name: str) -> list[str]:
    """Every module ``name`` embeds, directly or indirectly, breadth-first."""

    return list(_record(name).lineage)


def registration_order(names: Iterable[str] | None = None) -> list[str]:
    """Module names ordered so that embedded modules precede their embedders."""

    graph = embedding_graph(names)
    return list(nx.lexicographical_topological_sort(graph.reverse(copy=False)))


def describe(name: str) -> dict:
    """Return a JSON-safe summary of a registered module."""

    record = _record(name)
    return {
        "name": record.name,
        "package": record.package,
        "embeds": list(record.embeds),
        "lineage": list(record.lineage),
        "state": {
            key: repr(value)
            for key, value in sorted(record.state.items())
            if key not in _IDENT
        },
        "behaviors": sorted(record.behaviors),
        "protocol": sorted(record.protocol),
    }


def _node_id(name: str) -> str:
    return "m_" + name.replace(".", "__")


def to_dot(names: Iterable[str] | None = None) -> pydot.Dot:
    """Render the embedding graph as a Graphviz document."""

    graph = embedding_graph(names)
    dot = pydot.Dot(
        "metamodule_embeds",
        graph_type="digraph",
        rankdir="BT",
        fontname="Helvetica",
    )
    for name, attrs in graph.nodes(data=True):
        label = name
        if attrs["behaviors"]:
            label += "\\n" + ", ".join(attrs["behaviors"])
        dot.add_node(
            pydot.Node(
                _node_id(name),
                label=f'"{label}"',
                shape="box",
                style="rounded",
                fontname="Helvetica",
            )
        )
    for source, target, attrs in graph.edges(data=True):
        dot.add_edge(
            pydot.Edge(
                _node_id(source),
                _node_id(target),
                label=str(attrs["position"]),
                fontsize="9",
            )
        )
    return dot


def export_graphviz(output_path, names: Iterable[str] | None = None) -> Path:
    """Write the embedding graph in DOT format to ``output_path``."""

    path = Path(output_path)
    path.write_text(to_dot(names).to_string(), encoding="utf-8")
    return path


__all__ = [
    "describe",
    "embedding_graph",
    "export_graphviz",
    "lineage",
    "registration_order",
    "to_dot",
]
