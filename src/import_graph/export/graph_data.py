"""Serialise a dependency graph for rendering front-ends."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from import_graph.export.styles import GRAPH_STYLESHEET, language_color
from import_graph.models import Graph


class OutputFormat(str, Enum):
    json = "json"
    cytoscape = "cytoscape"


def graph_to_json(graph: Graph) -> dict[str, Any]:
    """Nodes/links document for force-directed renderers (``val`` drives node radius)."""
    return {
        "nodes": [
            {
                "id": node.id,
                "name": node.name,
                "group": node.group,
                "val": node.size,
                "degree": node.degree,
                "language": node.language,
            }
            for node in graph.nodes
        ],
        "links": [
            {"source": link.source, "target": link.target, "weight": link.weight, "width": 1} for link in graph.links
        ],
    }


def graph_to_elements(graph: Graph) -> list[dict[str, Any]]:
    """Turn the graph into Cytoscape node and edge elements."""
    elements: list[dict[str, Any]] = []
    for node in graph.nodes:
        elements.append(
            {
                "data": {
                    "id": node.id,
                    "label": node.name,
                    "parent_group": node.group,
                    "language": node.language,
                    "color": language_color(node.language),
                    "size": node.size,
                    "degree": node.degree,
                    "kind": "file",
                }
            }
        )
    for link in graph.links:
        elements.append(
            {
                "data": {
                    "id": f"{link.source}->{link.target}",
                    "source": link.source,
                    "target": link.target,
                    "weight": link.weight,
                }
            }
        )
    return elements


def render_graph(graph: Graph, output_format: OutputFormat = OutputFormat.json) -> dict[str, Any]:
    if output_format is OutputFormat.cytoscape:
        return {"elements": graph_to_elements(graph), "style": GRAPH_STYLESHEET}
    return graph_to_json(graph)


def write_graph(graph: Graph, path: str | Path, output_format: OutputFormat = OutputFormat.json) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(render_graph(graph, output_format), indent=2), encoding="utf-8")
    return target
