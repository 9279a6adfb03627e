"""Building, validating and flattening file trees."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from import_graph.core.content import InMemoryContent, LocalFileContent
from import_graph.core.ports.content import ContentSource
from import_graph.models import FileNode

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDES: frozenset[str] = frozenset(
    {
        ".git",
        ".hg",
        ".idea",
        ".next",
        ".nuxt",
        ".svn",
        ".venv",
        ".vscode",
        "__pycache__",
        "build",
        "dist",
        "node_modules",
        "target",
        "venv",
    }
)


class MalformedTreeError(ValueError):
    """The input tree violates a structural invariant."""

    def __init__(self, invariant: str, path: str) -> None:
        super().__init__(f"{invariant} (at {path!r})")
        self.invariant = invariant
        self.path = path


def flatten_files(tree: Sequence[FileNode]) -> list[FileNode]:
    """Return the file leaves of ``tree`` in depth-first order.

    Directories are traversed but never returned. Raises
    ``MalformedTreeError`` when paths collide or a child escapes its
    directory.
    """
    if isinstance(tree, (str, bytes, Mapping)) or not isinstance(tree, Sequence):
        raise MalformedTreeError("tree must be a sequence of FileNode", "<root>")

    files: list[FileNode] = []
    seen: set[str] = set()

    def visit(nodes: Sequence[Any], parent: FileNode | None) -> None:
        for node in nodes:
            where = parent.path if parent is not None else "<root>"
            if not isinstance(node, FileNode):
                raise MalformedTreeError(f"expected FileNode, got {type(node).__name__}", where)
            if not node.path:
                raise MalformedTreeError("node path must not be empty", where)
            if parent is not None and not node.path.startswith(parent.path.rstrip("/") + "/"):
                raise MalformedTreeError("child path is not inside its directory", node.path)
            if node.kind == "directory":
                visit(node.children or [], node)
                continue
            if node.path in seen:
                raise MalformedTreeError("duplicate file path", node.path)
            seen.add(node.path)
            files.append(node)

    visit(tree, None)
    return files


def _build(entries: Iterable[tuple[str, ContentSource]]) -> list[FileNode]:
    root: dict[str, Any] = {}
    for raw_path, source in entries:
        parts = [part for part in raw_path.replace("\\", "/").split("/") if part and part != "."]
        if not parts:
            raise MalformedTreeError("node path must not be empty", raw_path)
        level = root
        for depth, part in enumerate(parts[:-1]):
            level = level.setdefault(part, {})
            if not isinstance(level, dict):
                raise MalformedTreeError("a file and a directory share a path", "/".join(parts[: depth + 1]))
        if isinstance(level.get(parts[-1]), dict):
            raise MalformedTreeError("a file and a directory share a path", "/".join(parts))
        level[parts[-1]] = source
    return _freeze(root, "")


def _freeze(level: dict[str, Any], prefix: str) -> list[FileNode]:
    nodes: list[FileNode] = []
    for name, value in level.items():
        path = f"{prefix}/{name}" if prefix else name
        if isinstance(value, dict):
            nodes.append(FileNode(path=path, name=name, kind="directory", children=_freeze(value, path)))
        else:
            nodes.append(FileNode(path=path, name=name, kind="file", content=value))
    return nodes


def tree_from_paths(paths: Iterable[str], root: str | Path) -> list[FileNode]:
    """Build a tree from relative file paths, reading content below ``root``."""
    base = Path(root)
    return _build((path, LocalFileContent(base / path)) for path in paths)


def tree_from_contents(contents: Mapping[str, str | bytes]) -> list[FileNode]:
    """Build a tree from a ``{relative path: text}`` mapping held in memory."""
    return _build((path, InMemoryContent(data)) for path, data in contents.items())


def scan_directory(
    root: str | Path,
    exclude_dirs: Iterable[str] = (),
    include_hidden: bool = False,
) -> list[FileNode]:
    """Walk ``root`` on the local filesystem and return its file tree.

    Entries are sorted by name so one directory always yields the same
    tree. Directory symlink loops are visited once.
    """
    base = Path(root)
    if not base.is_dir():
        raise NotADirectoryError(f"Not a directory: {base}")

    excluded = DEFAULT_EXCLUDES | set(exclude_dirs)
    seen: set[str] = {os.path.realpath(base)}

    def walk(directory: Path, prefix: str) -> list[FileNode]:
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            return []

        nodes: list[FileNode] = []
        for entry in entries:
            name = entry.name
            if name.startswith(".") and not include_hidden:
                continue
            path = f"{prefix}/{name}" if prefix else name
            if entry.is_dir():
                if name in excluded:
                    continue
                real = os.path.realpath(entry)
                if real in seen:
                    continue
                seen.add(real)
                nodes.append(FileNode(path=path, name=name, kind="directory", children=walk(entry, path)))
            elif entry.is_file():
                nodes.append(FileNode(path=path, name=name, kind="file", content=LocalFileContent(entry)))
        return nodes

    tree = walk(base, "")
    logger.info("Scanned %s", base)
    return tree
