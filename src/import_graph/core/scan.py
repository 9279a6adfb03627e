import asyncio
import threading
from collections.abc import Sequence
from pathlib import Path

from import_graph.core.assemble import assemble_graph, tree_to_nodes
from import_graph.core.extract import ProgressCallback, extract_dependencies, notify_progress
from import_graph.core.patterns import PatternCatalogue
from import_graph.core.settings import ScanSettings
from import_graph.core.tree import scan_directory
from import_graph.models import FileNode, Graph


def build_graph(
    tree: Sequence[FileNode],
    settings: ScanSettings | None = None,
    catalogue: PatternCatalogue | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> Graph:
    """Extract dependencies from ``tree`` and assemble them into a graph."""
    settings = settings or ScanSettings()
    nodes = tree_to_nodes(tree, settings.sizing)
    edges = extract_dependencies(
        tree,
        catalogue=catalogue,
        on_progress=on_progress,
        cancel=cancel,
        settings=settings,
    )
    return assemble_graph(nodes, edges, settings.sizing)


def scan_graph(
    root: str | Path,
    settings: ScanSettings | None = None,
    catalogue: PatternCatalogue | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> Graph:
    settings = settings or ScanSettings()
    notify_progress(on_progress, f"Scanning {Path(root).name or root}...")
    tree = scan_directory(root, settings.exclude_dirs, settings.include_hidden)
    return build_graph(tree, settings, catalogue, on_progress, cancel)


async def run_scan(
    root: str | Path,
    settings: ScanSettings | None = None,
    catalogue: PatternCatalogue | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> Graph:
    """Scan ``root`` in a worker thread so the event loop stays responsive."""
    return await asyncio.to_thread(scan_graph, root, settings, catalogue, on_progress, cancel)
