from typing import Protocol


class FileWatcherPort(Protocol):
    """Source of change notifications that trigger a rescan."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
