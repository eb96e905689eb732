"""Tests for centralized path constants and the config loader."""

import json
from datetime import date
from pathlib import Path

from legistrack import paths
from legistrack.config import load_config, minimum_date, source_config


class TestPathConstants:
    def test_all_paths_are_paths(self):
        for name in ("PROJECT_ROOT", "PACKAGE_DIR", "CONFIG_DIR", "TRACKER_CONFIG_PATH",
                     "TEMPLATES_DIR", "OUTPUTS_DIR", "RECORDS_PATH", "RECORDS_CSV_PATH",
                     "SUMMARY_DATA_PATH", "SUMMARY_HTML_PATH"):
            assert isinstance(getattr(paths, name), Path), name

    def test_package_under_root(self):
        assert paths.PACKAGE_DIR.parent == paths.PROJECT_ROOT
        assert paths.PACKAGE_DIR.name == "legistrack"

    def test_outputs_live_together(self):
        for path in (paths.RECORDS_PATH, paths.RECORDS_CSV_PATH,
                     paths.SUMMARY_DATA_PATH, paths.SUMMARY_HTML_PATH):
            assert path.parent == paths.OUTPUTS_DIR

    def test_summary_template_ships_with_package(self):
        assert (paths.TEMPLATES_DIR / paths.SUMMARY_TEMPLATE_NAME).is_file()


class TestConfig:
    def test_default_config_loads(self):
        config = load_config()
        assert minimum_date(config) == date(2025, 12, 20)
        assert set(config["sources"]) == {"prince_georges", "montgomery", "dc_council", "maryland"}

    def test_load_from_path(self, tmp_path: Path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"minimum_date": "2026-02-01"}), encoding="utf-8")
        config = load_config(path)
        assert minimum_date(config) == date(2026, 2, 1)

    def test_source_config_missing_section(self):
        assert source_config({}, "maryland") == {}
        assert source_config(None, "maryland") == {}
        assert source_config({"sources": {"maryland": {"session": "2027rs"}}}, "maryland") == {
            "session": "2027rs",
        }
