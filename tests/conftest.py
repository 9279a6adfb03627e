"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from import_graph.core.resolver import FileIndex
from import_graph.core.tree import flatten_files, tree_from_contents
from import_graph.models import FileNode

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_tree() -> Callable[[dict[str, str]], list[FileNode]]:
    """Return a builder for in-memory trees from ``{path: text}`` mappings."""
    return tree_from_contents


@pytest.fixture
def make_index() -> Callable[..., FileIndex]:
    """Return a builder for a file index over the given paths (contents empty)."""

    def _make(*paths: str) -> FileIndex:
        return FileIndex(flatten_files(tree_from_contents({path: "" for path in paths})))

    return _make


@pytest.fixture
def web_project(make_tree: Callable[[dict[str, str]], list[FileNode]]) -> list[FileNode]:
    """A small TypeScript project with a shared util module and a test file."""
    return make_tree(
        {
            "src/index.ts": 'import { App } from "./app";\nimport _ from "lodash";\n',
            "src/app.ts": "",
            "src/app.test.ts": 'import { App } from "./app";\n',
        }
    )
