#!/usr/bin/env python3
"""Sample dataset generation for the matrix grid.

Generates a sparse, headerless CSV or XLSX table in the row layout the
reader expects:
- [x, y, value]                       (plain rows)
- [x, y, category, value, value, ...] (--categories)

Only a fraction of the (x, y) positions is filled (--density), and
--duplicates re-emits some coordinates to exercise first-match-wins lookup.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

CATEGORIES = ["red", "green", "blue"]


def generate_sparse_rows(
    max_x: int,
    max_y: int,
    density: float = 0.3,
    values_per_cell: int = 1,
    categories: bool = False,
    duplicates: int = 0,
    seed: int = 42,
) -> list[list[Any]]:
    """Generate sparse rows over [1, max_x] x [1, max_y].

    Args:
        max_x: Largest row coordinate
        max_y: Largest column coordinate
        density: Fraction of data positions that receive a row
        values_per_cell: Number of trailing values per row
        categories: Insert a category column after the coordinates
        duplicates: Number of extra rows re-using an already emitted coordinate
        seed: Random seed for reproducible data

    Returns:
        Rows in source order
    """
    rng = np.random.default_rng(seed)
    xs, ys = np.meshgrid(np.arange(1, max_x + 1), np.arange(1, max_y + 1), indexing="ij")
    mask = rng.random(xs.shape) < density
    coords = list(zip(xs[mask].tolist(), ys[mask].tolist(), strict=True))

    rows: list[list[Any]] = []
    for x, y in coords:
        values = rng.integers(0, 100, values_per_cell).tolist()
        if categories:
            rows.append([x, y, str(rng.choice(CATEGORIES)), *values])
        else:
            rows.append([x, y, *values])

    for _ in range(min(duplicates, len(coords))):
        x, y = coords[int(rng.integers(0, len(coords)))]
        rows.append([x, y, *(["dup"] if not categories else ["red", "dup"])])
    return rows


def write_rows(output_path: Path, rows: list[list[Any]]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(rows)
    if output_path.suffix.lower() == ".xlsx":
        df.to_excel(output_path, header=False, index=False)
    else:
        df.to_csv(output_path, header=False, index=False)
    print(f"Created sample matrix: {output_path} ({len(rows):,} rows)")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sparse (x, y, values) sample table")
    parser.add_argument("output", type=Path, help="Output .csv or .xlsx path")
    parser.add_argument("--max-x", type=int, default=20, help="Largest row coordinate (default: 20)")
    parser.add_argument("--max-y", type=int, default=10, help="Largest column coordinate (default: 10)")
    parser.add_argument("--density", type=float, default=0.3, help="Filled fraction (default: 0.3)")
    parser.add_argument("--values", type=int, default=1, help="Values per row (default: 1)")
    parser.add_argument("--categories", action="store_true", help="Add a category column")
    parser.add_argument("--duplicates", type=int, default=0, help="Extra rows re-using coordinates")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.max_x <= 0 or args.max_y <= 0:
        print("Error: --max-x/--max-y must be positive", file=sys.stderr)
        return 1
    if not 0.0 < args.density <= 1.0:
        print("Error: --density must be in (0, 1]", file=sys.stderr)
        return 1

    rows = generate_sparse_rows(
        args.max_x,
        args.max_y,
        density=args.density,
        values_per_cell=args.values,
        categories=args.categories,
        duplicates=args.duplicates,
        seed=args.seed,
    )
    write_rows(args.output, rows)
    return 0


if __name__ == "__main__":
    sys.exit(main())
