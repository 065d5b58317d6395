#!/usr/bin/env python3
"""Lightweight validator for the rate and ceremony table files."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wedding_planner import config
from wedding_planner.ceremonies import load_catalog
from wedding_planner.rates import RateTableError, load_ceremony_table, load_rate_tables


def validate_tables(data_dir: Path) -> List[str]:
    errors: List[str] = []
    for name, loader in (
        ('rates', load_rate_tables),
        ('ceremony offsets', load_ceremony_table),
        ('ceremony catalog', load_catalog),
    ):
        try:
            loader(data_dir)
        except (FileNotFoundError, json.JSONDecodeError, RateTableError) as exc:
            errors.append(f"{name}: {exc}")
    return errors


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Validate wedding planner table files.')
    parser.add_argument('--data-dir', type=Path, default=config.DATA_DIR, help='Directory holding rates.json and ceremonies.json')
    args = parser.parse_args(argv)

    if not args.data_dir.exists():
        print(f"Data directory not found: {args.data_dir}")
        return 1

    issues = validate_tables(args.data_dir)
    if issues:
        print("Table validation failed:")
        for message in issues:
            print(f"  - {message}")
        return 1

    print("All tables validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
