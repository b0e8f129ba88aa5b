from __future__ import annotations
import pytest
from pathlib import Path
from company_slides.config.loader import DEFAULT_SAMPLE_CSV, ConfigError, default_config, load_config


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.table == "companies"
    assert cfg.batch_size == 2
    assert cfg.error_log_dir == Path("./logs")
    assert cfg.database.host == "localhost"
    assert cfg.database.port == 5432
    assert cfg.database.dsn is None
    assert cfg.sample_csv == DEFAULT_SAMPLE_CSV


def test_default_config():
    cfg = default_config()
    assert cfg.table == "companies"
    assert cfg.batch_size == 100
    assert cfg.database.host is None
    assert cfg.sample_csv.name == "sample-companies.csv"


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(missing)


def test_load_config_empty_file_uses_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "app.yml"
    cfg_path.write_text("", encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg == default_config()


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "app.yml"
    cfg_path.write_text("table: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(cfg_path)


def test_load_config_non_mapping_root(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "app.yml"
    cfg_path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(cfg_path)


def test_load_config_extra_field(write_config: Path):
    # additionalProperties: false
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_sample_csv_override(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "sample_csv: ./data/template.csv\n"
    write_config.write_text(text, encoding="utf-8")
    assert load_config(write_config).sample_csv == Path("./data/template.csv")
