from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from import_graph.core.ports.content import ContentSource


class FileNode(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str
    name: str
    kind: Literal["file", "directory"]
    children: list["FileNode"] | None = None
    content: ContentSource | None = None

    @model_validator(mode="after")
    def _check_kind(self) -> "FileNode":
        if self.kind == "directory":
            if self.children is None:
                raise ValueError(f"directory {self.path!r} must define children")
            if self.content is not None:
                raise ValueError(f"directory {self.path!r} must not carry a content handle")
        else:
            if self.children is not None:
                raise ValueError(f"file {self.path!r} must not have children")
            if self.content is None:
                raise ValueError(f"file {self.path!r} requires a content handle")
        return self


FileNode.model_rebuild()  # necessary for recursive types


class DependencyEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class GraphNode(BaseModel):
    id: str
    name: str
    group: str
    size: float
    degree: int = 0
    language: str | None = None


class GraphLink(BaseModel):
    source: str
    target: str
    weight: int = 1


class Graph(BaseModel):
    nodes: list[GraphNode]
    links: list[GraphLink]
