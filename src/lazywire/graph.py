"""Export of the dependency graph in Graphviz DOT format."""

import re
from typing import Any, Mapping, TextIO

from lazywire.errors import type_name

__all__ = ["DotGraphExporter"]

_BARE_ID = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DotGraphExporter:
    """Write a dependency graph as a DOT ``digraph``.

    One declaration line is written per node, then one edge line per node
    with outgoing edges, e.g. ``Service -> {Database Printer};``. Nodes are
    sorted by name so the output is stable between runs.
    """

    def __init__(self, name: str = "dependencies"):
        self._name = name

    def export(self, graph: Mapping[Any, Any], sink: TextIO) -> None:
        nodes = set(graph)
        for dependencies in graph.values():
            nodes.update(dependencies)

        sink.write(f"digraph {_node_id(self._name)} {{\n\n")
        for node in sorted(nodes, key=type_name):
            sink.write(f"{_node_id(type_name(node))};\n")
        sink.write("\n")

        for node in sorted(graph, key=type_name):
            dependencies = graph[node]
            if dependencies:
                targets = " ".join(_node_id(type_name(d)) for d in sorted(dependencies, key=type_name))
                sink.write(f"{_node_id(type_name(node))} -> {{{targets}}};\n")
        sink.write("\n}\n")


def _node_id(name: str) -> str:
    if _BARE_ID.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
