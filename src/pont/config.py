"""Configuration defaults and JSON config files.

A config file is a JSON object; every key is optional::

    {"quota": 25, "country": "fr", "year": 2025, "holidays_file": "fr-2025.json"}

Command-line options override whatever the file sets.
"""

from __future__ import annotations

import dataclasses
import json
import pathlib
from dataclasses import dataclass

from pont.errors import ConfigError
from pont.optimizer import DEFAULT_QUOTA

DEFAULT_COUNTRY = "fr"


@dataclass(frozen=True)
class Settings:
    quota: int = DEFAULT_QUOTA
    country: str = DEFAULT_COUNTRY
    year: int | None = None
    holidays_file: pathlib.Path | None = None

    def merged(self, **overrides: object) -> Settings:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


def _int_field(data: dict[str, object], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Config key {key!r} must be an integer, got {value!r}")
    return value


def load_config(path: str | pathlib.Path) -> Settings:
    """Load settings from a JSON config file at *path*."""
    p = pathlib.Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file: {exc}") from None

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object.")

    unknown = sorted(set(data) - {f.name for f in dataclasses.fields(Settings)})
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    quota = _int_field(data, "quota")
    if quota is not None and quota < 0:
        raise ConfigError(f"Config key 'quota' must be >= 0, got {quota}")

    country = data.get("country")
    if country is not None and not isinstance(country, str):
        raise ConfigError(f"Config key 'country' must be a string, got {country!r}")

    holidays_file = data.get("holidays_file")
    if holidays_file is not None:
        if not isinstance(holidays_file, str):
            raise ConfigError(f"Config key 'holidays_file' must be a path, got {holidays_file!r}")
        # Relative paths are resolved against the config file's directory.
        holidays_file = p.parent / holidays_file

    return Settings().merged(
        quota=quota,
        country=country,
        year=_int_field(data, "year"),
        holidays_file=holidays_file,
    )
