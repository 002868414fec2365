from __future__ import annotations

import json
import pathlib

import pytest

from pont.config import DEFAULT_COUNTRY, Settings, load_config
from pont.errors import ConfigError
from pont.optimizer import DEFAULT_QUOTA


def _write(tmp_path: pathlib.Path, data: object) -> pathlib.Path:
    path = tmp_path / "pont.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.quota == DEFAULT_QUOTA == 25
        assert settings.country == DEFAULT_COUNTRY == "fr"
        assert settings.year is None
        assert settings.holidays_file is None

    def test_merged_skips_none(self) -> None:
        settings = Settings(quota=10, country="de").merged(quota=None, country="be", year=2025)
        assert settings == Settings(quota=10, country="be", year=2025)


class TestLoadConfig:
    def test_full_file(self, tmp_path: pathlib.Path) -> None:
        path = _write(
            tmp_path,
            {"quota": 20, "country": "lu", "year": 2025, "holidays_file": "holidays.json"},
        )
        settings = load_config(path)
        assert settings.quota == 20
        assert settings.country == "lu"
        assert settings.year == 2025
        assert settings.holidays_file == tmp_path / "holidays.json"

    def test_empty_object_gives_defaults(self, tmp_path: pathlib.Path) -> None:
        assert load_config(_write(tmp_path, {})) == Settings()

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"quota": "25"},
            {"quota": -1},
            {"quota": True},
            {"year": 2025.5},
            {"country": 33},
            {"holidays_file": 1},
            {"groups": []},
        ],
    )
    def test_invalid_values(self, tmp_path: pathlib.Path, data: object) -> None:
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, data))
