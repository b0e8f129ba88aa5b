# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from company_slides.logging.init import reset_logging

HEADER = "company_name,origin_country,sector,base_price,revenue_2022,revenue_2023,logo_url"

DB_ENV_VARS = ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE")


@pytest.fixture(autouse=True)
def _fresh_logging():
    # logger は sys.stdout を初回設定時に掴むため、テスト毎に作り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def clean_db_env(monkeypatch):
    for name in DB_ENV_VARS + ("DISABLE_DB_CONNECT",):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """table: companies
batch_size: 2
error_log_dir: ./logs
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "app.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def mixed_csv_text() -> str:
    """Header + 1 valid quoted row, 1 blank row, 1 invalid row, 1 valid row with Drive logo."""
    return "\n".join(
        [
            HEADER,
            'Acme,US,Tech,"1,80,00,000","1,000.50","2,000.75",',
            ",,,,,,",
            "Beta,IN,Defence,N/A,10,20,",
            'Gamma,FR,Retail,"99.5","5","6",https://drive.google.com/file/d/abc123/view',
        ]
    ) + "\n"


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(text: str, name: str = "companies.csv") -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def make_csv():
    def _make(rows: int) -> str:
        """Valid CSV text with ``rows`` data rows."""
        lines = [HEADER]
        for i in range(rows):
            lines.append(f'Company {i + 1},India,Tech,"{i + 1},000","1,00,000.5","2,00,000",')
        return "\n".join(lines)
    return _make
