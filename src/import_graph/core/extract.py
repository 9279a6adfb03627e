"""Dependency extraction over a whole file tree."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from import_graph.core.content import read_content
from import_graph.core.languages import extension_of
from import_graph.core.patterns import DEFAULT_CATALOGUE, PatternCatalogue
from import_graph.core.resolver import FileIndex, resolve_reference
from import_graph.core.settings import ScanSettings
from import_graph.core.tree import flatten_files
from import_graph.models import DependencyEdge, FileNode

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class ExtractionCancelled(RuntimeError):
    """Raised when the cancel event is set while files remain."""


def notify_progress(on_progress: ProgressCallback | None, message: str) -> None:
    """Deliver ``message`` to the callback; its failures are logged, never raised."""
    if on_progress is None:
        return
    try:
        on_progress(message)
    except Exception:
        logger.exception("Error in progress callback")


def extract_file(
    node: FileNode,
    index: FileIndex,
    catalogue: PatternCatalogue = DEFAULT_CATALOGUE,
    max_file_chars: int = 0,
) -> list[DependencyEdge]:
    """Edges from one file, one per resolved match (duplicates kept)."""
    extension = extension_of(node.name)
    rules = catalogue.patterns_for(extension)
    if not rules:
        return []
    language = catalogue.language_for(extension)

    try:
        text = read_content(node)
    except (OSError, ValueError) as exc:
        logger.warning("Skipping unreadable file %s: %s", node.path, exc)
        return []
    if max_file_chars and len(text) > max_file_chars:
        logger.warning("Skipping %s: %d characters exceeds limit of %d", node.path, len(text), max_file_chars)
        return []

    edges: list[DependencyEdge] = []
    for extraction_rule in rules:
        for reference in extraction_rule.references(text):
            target = resolve_reference(node.path, reference, index, language)
            if target is not None and target != node.path:
                edges.append(DependencyEdge(source=node.path, target=target))
    return edges


def extract_dependencies(
    tree: Sequence[FileNode],
    *,
    catalogue: PatternCatalogue | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
    settings: ScanSettings | None = None,
) -> list[DependencyEdge]:
    """Scan every file of ``tree`` and return the resolved dependency edges.

    The file index is complete before any reference is resolved. Per-file
    failures are logged and skipped; only a malformed tree aborts the call.
    Edges come back in file order and are not deduplicated.
    """
    settings = settings or ScanSettings()
    catalogue = catalogue or DEFAULT_CATALOGUE
    files = flatten_files(tree)
    index = FileIndex(files)
    total = len(files)
    logger.info("Extracting dependencies from %d files", total)

    def cancelled() -> bool:
        return cancel is not None and cancel.is_set()

    def progress(position: int, node: FileNode) -> None:
        if position % settings.progress_every == 0:
            notify_progress(on_progress, f"Parsing {position}/{total}: {node.name}")

    results: list[list[DependencyEdge]] = [[] for _ in files]
    if settings.workers <= 1:
        for position, node in enumerate(files, start=1):
            if cancelled():
                raise ExtractionCancelled(f"Cancelled after {position - 1}/{total} files")
            progress(position, node)
            results[position - 1] = extract_file(node, index, catalogue, settings.max_file_chars)
    else:

        def work(node: FileNode) -> list[DependencyEdge]:
            if cancelled():
                return []
            return extract_file(node, index, catalogue, settings.max_file_chars)

        with ThreadPoolExecutor(max_workers=settings.workers) as pool:
            futures = {pool.submit(work, node): position for position, node in enumerate(files)}
            for done, future in enumerate(as_completed(futures), start=1):
                position = futures[future]
                results[position] = future.result()
                progress(done, files[position])
        if cancelled():
            raise ExtractionCancelled(f"Cancelled during scan of {total} files")

    edges = [edge for file_edges in results for edge in file_edges]
    notify_progress(on_progress, f"Parsed {total} files, found {len(edges)} dependencies")
    return edges
