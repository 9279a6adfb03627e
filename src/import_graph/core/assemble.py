"""Turn raw dependency edges into the node/link graph handed to renderers."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from import_graph.core.languages import language_for_path
from import_graph.core.tree import flatten_files
from import_graph.models import DependencyEdge, FileNode, Graph, GraphLink, GraphNode

ROOT_GROUP = "root"


@dataclass(frozen=True)
class SizePolicy:
    """``size = base + min(cap, degree * factor)``."""

    base: float = 4.0
    factor: float = 1.5
    cap: float = 20.0

    def size_for(self, degree: int) -> float:
        return self.base + min(self.cap, degree * self.factor)


def group_of(path: str) -> str:
    return path.rsplit("/", 1)[0] if "/" in path else ROOT_GROUP


def tree_to_nodes(tree: Sequence[FileNode], sizing: SizePolicy | None = None) -> list[GraphNode]:
    """One graph node per file of ``tree``, all at zero in-degree."""
    sizing = sizing or SizePolicy()
    return [
        GraphNode(
            id=node.path,
            name=node.name,
            group=group_of(node.path),
            size=sizing.size_for(0),
            language=language_for_path(node.path),
        )
        for node in flatten_files(tree)
    ]


def assemble_graph(
    nodes: Sequence[GraphNode],
    edges: Iterable[DependencyEdge],
    sizing: SizePolicy | None = None,
) -> Graph:
    """Build the final graph.

    Edges touching unknown nodes are dropped. Repeated source/target pairs
    collapse into one link whose ``weight`` is the number of raw edges.
    In-degree counts distinct links.
    """
    sizing = sizing or SizePolicy()
    known = {node.id for node in nodes}

    pairs: Counter[tuple[str, str]] = Counter(
        (edge.source, edge.target) for edge in edges if edge.source in known and edge.target in known
    )
    links = [GraphLink(source=source, target=target, weight=count) for (source, target), count in pairs.items()]
    in_degree = Counter(link.target for link in links)

    sized = [
        node.model_copy(update={"degree": in_degree[node.id], "size": sizing.size_for(in_degree[node.id])})
        for node in nodes
    ]
    return Graph(nodes=sized, links=links)
