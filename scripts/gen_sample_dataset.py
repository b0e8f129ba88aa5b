#!/usr/bin/env python3
"""Dataset generation script for import testing.

Generates synthetic company CSV files in the format accepted by the importer:
- Row 1: header (company_name, origin_country, sector, base_price,
  revenue_2022, revenue_2023, logo_url)
- Row 2+: data rows

Numbers can be written with Indian grouping (1,80,00,000) or western grouping
(18,000,000), quoted or unquoted, and a share of rows can be deliberately
broken to exercise the skip path.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

COUNTRIES = ["India", "United States", "France", "Germany", "Brazil", "Japan", "Israel"]
SECTORS = ["Defence", "Technology", "Healthcare", "Financial", "Agri", "Retail", "Energy"]
LOGO_TEMPLATES = [
    "https://drive.google.com/file/d/{id}/view?usp=sharing",
    "https://drive.google.com/open?id={id}",
    "https://example.com/logos/{id}.png",
    "",
]


def group_indian(value: int) -> str:
    """Format an integer with lakh/crore grouping (1,80,00,000)."""
    digits = str(value)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    parts = []
    while len(head) > 2:
        parts.insert(0, head[-2:])
        head = head[:-2]
    if head:
        parts.insert(0, head)
    return ",".join(parts + [tail])


def format_number(value: float, style: str, decimals: bool) -> str:
    whole, cents = divmod(int(round(value * 100)), 100)
    grouped = group_indian(whole) if style == "indian" else f"{whole:,}"
    if decimals:
        grouped += f".{cents:02d}"
    return grouped


def generate_companies(rows: int, seed: int = 42) -> pd.DataFrame:
    """Generate a DataFrame of synthetic companies (numeric columns as floats)."""
    rng = np.random.default_rng(seed)
    ids = rng.integers(10**8, 10**9, rows)
    logos = rng.choice(LOGO_TEMPLATES, rows)
    return pd.DataFrame(
        {
            "company_name": [f"Company {i + 1:05d}" for i in range(rows)],
            "origin_country": rng.choice(COUNTRIES, rows),
            "sector": rng.choice(SECTORS, rows),
            "base_price": rng.integers(10_000, 50_000_000, rows).astype(float),
            "revenue_2022": np.round(rng.uniform(1e5, 5e9, rows), 2),
            "revenue_2023": np.round(rng.uniform(1e5, 5e9, rows), 2),
            "logo_url": [tpl.format(id=f"f{n}") for tpl, n in zip(logos, ids)],
        }
    )


def render_csv(
    df: pd.DataFrame, style: str, quote: bool, broken_ratio: float, seed: int = 42
) -> str:
    """Render rows by hand so grouped numbers may stay unquoted (over-split rows)."""
    rng = np.random.default_rng(seed + 1)
    lines = [",".join(df.columns)]
    for record in df.itertuples(index=False):
        numbers = [
            format_number(record.base_price, style, decimals=False),
            format_number(record.revenue_2022, style, decimals=True),
            format_number(record.revenue_2023, style, decimals=True),
        ]
        if rng.random() < broken_ratio:
            numbers[0] = "N/A"
        if quote:
            numbers = [f'"{n}"' for n in numbers]
        lines.append(
            ",".join(
                [record.company_name, record.origin_country, record.sector, *numbers, record.logo_url]
            )
        )
    return "\n".join(lines) + "\n"


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic company CSV files for the importer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 1,000 rows, quoted Indian grouping
  %(prog)s companies.csv --rows 1000

  # unquoted grouped numbers (exercises column reconciliation)
  %(prog)s ragged.csv --rows 200 --no-quote

  # western grouping with 5%% invalid base prices
  %(prog)s mixed.csv --style western --broken-ratio 0.05
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--rows", type=int, default=1_000, help="Number of data rows (default: 1,000)")
    parser.add_argument("--style", choices=["indian", "western"], default="indian", help="Digit grouping style")
    parser.add_argument("--no-quote", action="store_true", help="Leave grouped numbers unquoted")
    parser.add_argument("--broken-ratio", type=float, default=0.0, help="Share of rows with an invalid base_price")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.broken_ratio <= 1.0:
        print("Error: --broken-ratio must be within [0, 1]", file=sys.stderr)
        return 1

    df = generate_companies(args.rows, args.seed)
    text = render_csv(df, args.style, quote=not args.no_quote, broken_ratio=args.broken_ratio, seed=args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text, encoding="utf-8")
    print(f"Created CSV file: {args.output}")
    print(f"  Rows: {args.rows:,} (+ 1 header row)")
    print(f"  Grouping: {args.style} quoted={not args.no_quote}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
