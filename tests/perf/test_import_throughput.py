from __future__ import annotations

import time

from company_slides.db.store import InMemoryCompanyStore
from company_slides.services.importer import import_companies

"""Performance smoke test: parse + batch insert of 20k rows.

Half the rows carry unquoted grouped numbers so the reconcile path is timed
too. Budgets are lenient so CI stays stable.
"""

HEADER = "company_name,origin_country,sector,base_price,revenue_2022,revenue_2023,logo_url"
ROWS = 20_000


def _synthetic_csv(rows: int) -> str:
    lines = [HEADER]
    for i in range(rows):
        if i % 2:
            lines.append(f"Company {i},India,Defence,1,80,00,000,2,50,000,3,00,000,")
        else:
            lines.append(
                f'Company {i},France,Tech,"{i},000","12,450.5","15,980",https://drive.google.com/open?id=f{i}'
            )
    return "\n".join(lines)


def test_import_throughput_budget():
    text = _synthetic_csv(ROWS)
    store = InMemoryCompanyStore()

    start = time.perf_counter()
    result = import_companies(text, store, file_name="perf.csv")
    elapsed = time.perf_counter() - start

    assert result.inserted == ROWS
    assert result.skipped == []
    assert result.total_batches == ROWS // 100
    assert store.records[1].base_price == 18000000
    assert elapsed < 30, f"import too slow: {elapsed:.3f}s"
    assert 0 <= result.avg_batch_seconds <= elapsed
