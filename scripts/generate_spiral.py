#!/usr/bin/env python3
"""
Sample the Cantor spiral of rationals and write the values to disk.

Output structure:
  <output-dir>/
    manifest.json    run metadata (git hash, config hash, node)
    values.jsonl     one record per emitted rational
    metrics.jsonl    walk counters (lattice steps, skips, seen-set size)
    summary.json     totals for the run

Usage:
    python scripts/generate_spiral.py
    python scripts/generate_spiral.py --count 10000 --constructor extended
    python scripts/generate_spiral.py --index 4       # print one element
    python scripts/generate_spiral.py --coverage 20   # check |a|,|b| <= 20
"""

import argparse
import json
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from spiral_rationals.runner import load_config, run_spiral
from spiral_rationals.spiral import CantorSpiral
from spiral_rationals.logging import SpiralLogger, create_manifest


DEFAULT_CONFIG = str(
    Path(__file__).resolve().parent.parent / "configs" / "spiral_default.yaml"
)


def main():
    parser = argparse.ArgumentParser(
        description="Enumerate the rationals along the Cantor spiral"
    )
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG,
                        help=f"Config file (default: {DEFAULT_CONFIG})")
    parser.add_argument("--count", type=int, default=None,
                        help="Number of values to emit (overrides config)")
    parser.add_argument("--constructor", type=str, default=None,
                        help="fraction, sympy or extended (overrides config)")
    parser.add_argument("--start-index", type=int, default=None,
                        help="Skip this many values first (overrides config)")
    parser.add_argument("--index", type=int, default=None,
                        help="Print only the value at this position and exit")
    parser.add_argument("--coverage", type=int, default=None,
                        help="Also check coverage of |a|,|b| <= K")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Output directory (default: ./outputs/spiral_<timestamp>)")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
        if args.count is not None:
            config.count = args.count
        if args.constructor is not None:
            config.constructor = args.constructor
        if args.start_index is not None:
            config.start_index = args.start_index
        if args.coverage is not None:
            config.coverage_bound = args.coverage
        config.validate()
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if args.index is not None:
        try:
            value = CantorSpiral(config.constructor)[args.index]
        except IndexError as e:
            print(f"ERROR: {e}")
            sys.exit(1)
        print(f"spiral[{args.index}] = {value}")
        return

    output_dir = Path(args.output_dir or
                      f"./outputs/spiral_{int(time.time())}")
    output_dir.mkdir(parents=True, exist_ok=True)

    run_id = f"spiral_{int(time.time())}"

    print("=" * 60)
    print("Cantor spiral of rationals")
    print("=" * 60)
    print(f"  Config:       {args.config}")
    print(f"  Output:       {output_dir}")
    print(f"  Run ID:       {run_id}")
    print(f"  Constructor:  {config.constructor}")
    print(f"  Start index:  {config.start_index}")
    print(f"  Count:        {config.count}")
    print("=" * 60)

    manifest = create_manifest(run_id=run_id, config=config.to_dict())
    manifest.save(output_dir / "manifest.json")

    with SpiralLogger(output_dir) as logger:
        summary = run_spiral(config, logger)

    summary["run_id"] = run_id
    summary["timestamp"] = time.strftime("%Y-%m-%dT%H:%M:%S%z")
    with open(output_dir / "summary.json", 'w') as f:
        json.dump(summary, f, indent=2, default=str)

    print(f"  Emitted:      {summary['count']:,} "
          f"(first {summary['first']}, last {summary['last']})")
    print(f"  Lattice:      {summary['lattice_steps']:,} steps, "
          f"{summary['skipped_zero']:,} zero-denominator, "
          f"{summary['skipped_duplicate']:,} duplicate")
    if "coverage" in summary:
        cov = summary["coverage"]
        print(f"  Coverage:     all {cov['n_rationals']:,} rationals with "
              f"|a|,|b| <= {cov['bound']} after {cov['steps_to_cover']:,} values")
    print(f"  Wall time:    {summary['wall_time_sec']:.2f}s")
    print(f"  Output:       {output_dir}")


if __name__ == "__main__":
    main()
