"""Unit tests for scan settings and environment loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from import_graph.core.assemble import SizePolicy
from import_graph.core.settings import ScanSettings, load_settings


class TestScanSettings:
    def test_defaults(self) -> None:
        settings = ScanSettings()
        assert settings.workers == 1
        assert settings.progress_every == 10
        assert settings.exclude_dirs == ()
        assert settings.include_hidden is False

    def test_sizing(self) -> None:
        assert ScanSettings().sizing == SizePolicy(base=4.0, factor=1.5, cap=20.0)
        assert ScanSettings(size_cap=2.0).sizing.size_for(100) == 6.0

    @pytest.mark.parametrize("field", ["workers", "progress_every"])
    def test_counts_must_be_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            ScanSettings.model_validate({field: 0})

    def test_negative_size_limit_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScanSettings(max_file_chars=-1)


class TestLoadSettings:
    def test_empty_environment(self) -> None:
        assert load_settings({}) == ScanSettings()

    def test_reads_prefixed_variables(self) -> None:
        settings = load_settings(
            {
                "IMPORT_GRAPH_WORKERS": "4",
                "IMPORT_GRAPH_EXCLUDE_DIRS": "vendor, tmp ,",
                "IMPORT_GRAPH_INCLUDE_HIDDEN": "true",
                "IMPORT_GRAPH_SIZE_FACTOR": "2.5",
                "WORKERS": "9",
            }
        )
        assert settings.workers == 4
        assert settings.exclude_dirs == ("vendor", "tmp")
        assert settings.include_hidden is True
        assert settings.size_factor == 2.5

    def test_blank_values_are_ignored(self) -> None:
        assert load_settings({"IMPORT_GRAPH_WORKERS": ""}).workers == 1

    def test_overrides_win(self) -> None:
        settings = load_settings({"IMPORT_GRAPH_WORKERS": "4"}, workers=2, max_file_chars=None)
        assert settings.workers == 2
        assert settings.max_file_chars == 2_000_000

    def test_invalid_environment_value(self) -> None:
        with pytest.raises(ValidationError):
            load_settings({"IMPORT_GRAPH_WORKERS": "many"})

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMPORT_GRAPH_PROGRESS_EVERY", "50")
        assert load_settings().progress_every == 50
