from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine, Iterable
from pathlib import Path
from typing import Any

from watchfiles import awatch

from import_graph.core.patterns import DEFAULT_CATALOGUE, PatternCatalogue
from import_graph.core.tree import DEFAULT_EXCLUDES

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[set[Path]], Coroutine[Any, Any, None]]


def _is_supported_file(path: Path, catalogue: PatternCatalogue = DEFAULT_CATALOGUE) -> bool:
    return catalogue.supports(path.suffix) if path.suffix else False


class WatchfilesWatcher:
    """Watch a project directory and report changed files the scanner reads.

    Changes below excluded directories (``node_modules``, ``.git``, ...) are
    ignored. Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: ChangeCallback,
        catalogue: PatternCatalogue = DEFAULT_CATALOGUE,
        exclude_dirs: Iterable[str] = (),
        debounce_ms: int = 1600,
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._catalogue = catalogue
        self._excluded = DEFAULT_EXCLUDES | set(exclude_dirs)
        self._debounce_ms = debounce_ms
        self._task: asyncio.Task[None] | None = None

    def _is_relevant(self, path: Path) -> bool:
        if not _is_supported_file(path, self._catalogue):
            return False
        try:
            parts = path.relative_to(self._directory).parts[:-1]
        except ValueError:
            parts = path.parts[:-1]
        return not any(part in self._excluded for part in parts)

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watching %s for source changes", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped watching %s", self._directory)

    async def _watch(self) -> None:
        async for changes in awatch(self._directory, debounce=self._debounce_ms):
            paths = {Path(raw) for _, raw in changes if self._is_relevant(Path(raw))}
            if not paths:
                continue
            logger.info("Detected changes in %d source file(s)", len(paths))
            try:
                await self._on_change(paths)
            except Exception:
                logger.exception("Rescan after change failed")
