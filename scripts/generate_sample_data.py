#!/usr/bin/env python3
"""
Script: generate_sample_data.py

Purpose: Write a synthetic salary CSV in the ds_salaries.csv layout.

Usage:
    python scripts/generate_sample_data.py
    python scripts/generate_sample_data.py --rows 5000 --seed 7 --output data/sample.csv
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from salaryflow.data.synthetic_generator import write_sample_csv

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def main():
    parser = argparse.ArgumentParser(description="Generate a synthetic salary dataset")
    parser.add_argument(
        "--rows",
        type=int,
        default=3000,
        help="Number of records to generate (default: 3000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="data/ds_salaries.csv",
        help="Output CSV path (default: data/ds_salaries.csv)",
    )

    args = parser.parse_args()
    if args.rows < 1:
        parser.error("--rows must be at least 1")

    path = write_sample_csv(args.output, args.rows, seed=args.seed)
    print(f"Wrote {args.rows:,} records to {path}")


if __name__ == "__main__":
    main()
