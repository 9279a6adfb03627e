"""End-to-end scans of real directories."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import pytest

from import_graph.core.extract import ExtractionCancelled
from import_graph.core.scan import run_scan, scan_graph
from import_graph.core.settings import ScanSettings
from import_graph.export.graph_data import write_graph
from import_graph.models import Graph

_FILES = {
    "package.json": "{}",
    "src/index.ts": 'import { App } from "./app";\nimport "./styles/main.scss";\nimport React from "react";\n',
    "src/app.tsx": 'import { Button } from "./components";\nimport { api } from "@/lib/api";\n',
    "src/components/index.ts": 'export * from "./Button";\n',
    "src/components/Button.tsx": 'import "../styles/button.css";\n',
    "src/lib/api.ts": "export const api = {};\n",
    "src/styles/main.scss": "@use 'variables';\n@import 'button';\n",
    "src/styles/_variables.scss": "$primary: blue;\n",
    "src/styles/button.css": ".btn { background: url('../assets/bg.png'); }\n",
    "src/assets/bg.png": "",
    "server/app/__init__.py": "",
    "server/app/main.py": "from .routes import router\nfrom app.db import session\nimport os\n",
    "server/app/routes.py": "from . import db\n",
    "server/app/db.py": "",
    "node_modules/react/index.js": "module.exports = {};\n",
}


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    for relative, text in _FILES.items():
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return tmp_path


def _links(graph: Graph) -> set[tuple[str, str]]:
    return {(link.source, link.target) for link in graph.links}


@pytest.mark.asyncio
async def test_run_scan_builds_cross_language_graph(workspace: Path) -> None:
    messages: list[str] = []
    graph = await run_scan(workspace, on_progress=messages.append)

    assert _links(graph) == {
        ("src/index.ts", "src/app.tsx"),
        ("src/index.ts", "src/styles/main.scss"),
        ("src/app.tsx", "src/components/index.ts"),
        ("src/app.tsx", "src/lib/api.ts"),
        ("src/components/index.ts", "src/components/Button.tsx"),
        ("src/components/Button.tsx", "src/styles/button.css"),
        ("src/styles/main.scss", "src/styles/_variables.scss"),
        ("src/styles/main.scss", "src/styles/button.css"),
        ("src/styles/button.css", "src/assets/bg.png"),
        ("server/app/main.py", "server/app/routes.py"),
        ("server/app/main.py", "server/app/db.py"),
        ("server/app/routes.py", "server/app/__init__.py"),
    }
    assert not any(node.id.startswith("node_modules/") for node in graph.nodes)
    button_css = next(node for node in graph.nodes if node.id == "src/styles/button.css")
    assert button_css.degree == 2
    assert messages[0] == f"Scanning {workspace.name}..."
    assert messages[-1].startswith("Parsed 14 files")


@pytest.mark.asyncio
async def test_run_scan_with_worker_pool_matches_sequential(workspace: Path) -> None:
    sequential = await run_scan(workspace)
    pooled = await run_scan(workspace, ScanSettings(workers=4))
    assert pooled == sequential


def test_cancelled_scan(workspace: Path) -> None:
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(ExtractionCancelled):
        scan_graph(workspace, cancel=cancel)


def test_graph_file_round_trip(workspace: Path, tmp_path: Path) -> None:
    graph = scan_graph(workspace)
    target = write_graph(graph, tmp_path / "out" / "graph.json")
    assert target.stat().st_size > 0


def test_failing_progress_callback_does_not_abort_scan(workspace: Path, caplog: pytest.LogCaptureFixture) -> None:
    calls: list[str] = []

    def explode(message: str) -> None:
        calls.append(message)
        raise RuntimeError("observer broke")

    with caplog.at_level(logging.ERROR, logger="import_graph.core.extract"):
        graph = scan_graph(workspace, on_progress=explode)
    assert len(graph.links) == 12
    assert calls[0] == f"Scanning {workspace.name}..."
    assert "Error in progress callback" in caplog.text
