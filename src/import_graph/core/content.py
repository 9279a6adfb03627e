"""Content sources backing file nodes."""

from __future__ import annotations

from pathlib import Path

from import_graph.models import FileNode


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace")


class LocalFileContent:
    """Reads a file from disk each time it is asked for its text."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> str:
        return _decode(self.path.read_bytes())

    def __repr__(self) -> str:
        return f"LocalFileContent({str(self.path)!r})"


class InMemoryContent:
    """Holds the text (or raw bytes) of a file that was already loaded."""

    def __init__(self, data: str | bytes) -> None:
        self._data = data

    def read(self) -> str:
        if isinstance(self._data, bytes):
            return _decode(self._data)
        return self._data

    def __repr__(self) -> str:
        return f"InMemoryContent(size={len(self._data)})"


def read_content(node: FileNode) -> str:
    """Return the text of a file node.

    Raises ``OSError`` when the node has no content handle or the handle
    cannot be dereferenced.
    """
    if node.content is None:
        raise OSError(f"No content handle for {node.path}")
    return node.content.read()
