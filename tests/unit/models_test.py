"""Unit tests for the graph data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from import_graph.core.content import InMemoryContent
from import_graph.models import DependencyEdge, FileNode, Graph, GraphLink, GraphNode


class TestFileNode:
    def test_file(self) -> None:
        node = FileNode(path="a.ts", name="a.ts", kind="file", content=InMemoryContent(""))
        assert node.children is None

    def test_directory(self) -> None:
        child = FileNode(path="src/a.ts", name="a.ts", kind="file", content=InMemoryContent(""))
        node = FileNode(path="src", name="src", kind="directory", children=[child])
        assert node.children == [child]

    def test_directory_requires_children(self) -> None:
        with pytest.raises(ValidationError, match="must define children"):
            FileNode(path="src", name="src", kind="directory")

    def test_directory_rejects_content(self) -> None:
        with pytest.raises(ValidationError, match="must not carry a content handle"):
            FileNode(path="src", name="src", kind="directory", children=[], content=InMemoryContent(""))

    def test_file_requires_content(self) -> None:
        with pytest.raises(ValidationError, match="requires a content handle"):
            FileNode(path="a.ts", name="a.ts", kind="file")

    def test_file_rejects_children(self) -> None:
        with pytest.raises(ValidationError, match="must not have children"):
            FileNode(path="a.ts", name="a.ts", kind="file", children=[], content=InMemoryContent(""))

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            FileNode(path="a", name="a", kind="symlink", content=InMemoryContent(""))  # type: ignore[arg-type]

    def test_content_must_be_readable(self) -> None:
        with pytest.raises(ValidationError):
            FileNode(path="a.ts", name="a.ts", kind="file", content="raw text")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        node = FileNode(path="a.ts", name="a.ts", kind="file", content=InMemoryContent(""))
        with pytest.raises(ValidationError):
            node.path = "b.ts"  # type: ignore[misc]


class TestGraphModels:
    def test_edges_are_hashable(self) -> None:
        edges = {DependencyEdge(source="a", target="b"), DependencyEdge(source="a", target="b")}
        assert len(edges) == 1

    def test_defaults(self) -> None:
        node = GraphNode(id="a.ts", name="a.ts", group="root", size=4.0)
        assert node.degree == 0
        assert node.language is None
        assert GraphLink(source="a", target="b").weight == 1

    def test_graph_dump(self) -> None:
        graph = Graph(
            nodes=[GraphNode(id="a.ts", name="a.ts", group="root", size=4.0)],
            links=[],
        )
        assert graph.model_dump()["nodes"][0]["id"] == "a.ts"
