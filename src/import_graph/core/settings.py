import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from import_graph.core.assemble import SizePolicy

ENV_PREFIX = "IMPORT_GRAPH_"


class ScanSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    exclude_dirs: tuple[str, ...] = ()
    include_hidden: bool = False
    max_file_chars: int = Field(default=2_000_000, ge=0)
    workers: int = Field(default=1, ge=1)
    progress_every: int = Field(default=10, ge=1)
    size_base: float = Field(default=4.0, ge=0)
    size_factor: float = Field(default=1.5, ge=0)
    size_cap: float = Field(default=20.0, ge=0)

    @property
    def sizing(self) -> SizePolicy:
        return SizePolicy(base=self.size_base, factor=self.size_factor, cap=self.size_cap)


def load_settings(environ: Mapping[str, str] | None = None, **overrides: object) -> ScanSettings:
    """Read ``IMPORT_GRAPH_*`` variables, then apply non-``None`` overrides."""
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}
    for name in ScanSettings.model_fields:
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is None or raw == "":
            continue
        if name == "exclude_dirs":
            values[name] = tuple(part.strip() for part in raw.split(",") if part.strip())
        else:
            values[name] = raw
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ScanSettings.model_validate(values)
