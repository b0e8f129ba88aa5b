from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default config/app.yml)
- Validate against the bundled config_schema.json
- Apply defaults (table, batch_size, sample_csv, error_log_dir)
"""

__all__ = [
    "ConfigError",
    "DatabaseConfig",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_SAMPLE_CSV",
    "SCHEMA_PATH",
    "default_config",
    "load_config",
]

_package_root = Path(__file__).resolve().parent.parent
SCHEMA_PATH = Path(__file__).resolve().parent / "config_schema.json"
DEFAULT_SAMPLE_CSV = _package_root / "data" / "sample-companies.csv"
DEFAULT_CONFIG_PATH = Path("config/app.yml")
DEFAULT_BATCH_SIZE = 100


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection fallback; environment variables take precedence."""
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class AppConfig:
    table: str = "companies"
    batch_size: int = DEFAULT_BATCH_SIZE
    sample_csv: Path = DEFAULT_SAMPLE_CSV
    error_log_dir: Path = Path("logs")
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def default_config() -> AppConfig:
    return AppConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (unknown keys, wrong types, out of range).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    db_raw = data.get("database", {})
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    sample_csv = data.get("sample_csv")
    return AppConfig(
        table=data.get("table", "companies"),
        batch_size=data.get("batch_size", DEFAULT_BATCH_SIZE),
        # 相対パスは config ファイル基準ではなくカレントディレクトリ基準
        sample_csv=Path(sample_csv) if sample_csv else DEFAULT_SAMPLE_CSV,
        error_log_dir=Path(data.get("error_log_dir", "logs")),
        database=db,
    )
