from typing import Protocol, runtime_checkable


@runtime_checkable
class ContentSource(Protocol):
    def read(self) -> str: ...
