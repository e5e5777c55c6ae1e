#!/usr/bin/env python3
"""Benchmark script for modelcheck performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path


def benchmark_import_time() -> float:
    """Measure import time of modelcheck package."""
    start = time.perf_counter()
    import modelcheck  # noqa: F401

    return time.perf_counter() - start


def synthetic_snapshot(size: int) -> dict[str, object]:
    """Chain of `size` model classes, each reaching two hops ahead."""
    classes: list[dict[str, object]] = []
    for i in range(size):
        associations = []
        if i + 1 < size:
            associations.append(
                {"accessor": f"next{i + 1}", "target": f"Model{i + 1}", "kind": "belongs-to"}
            )
        call_sites = []
        if i + 2 < size:
            call_sites.append(
                {"origin": "self", "chain": [f"next{i + 1}", f"next{i + 2}", "name"], "line": 5}
            )
        classes.append(
            {
                "name": f"Model{i}",
                "layer": "model",
                "file": f"app/models/model{i}.rb",
                "associations": associations,
                "methods": [
                    {"name": "find_by_code", "class_level": True, "line": 2},
                    {"name": "to_csv", "line": 3},
                    {"name": "label", "line": 4, "call_sites": call_sites},
                ],
            }
        )
    return {"classes": classes}


def benchmark_load(size: int) -> float:
    """Measure snapshot loading time."""
    from modelcheck import load_snapshot

    data = synthetic_snapshot(size)
    start = time.perf_counter()
    load_snapshot(data)
    return time.perf_counter() - start


def benchmark_check(size: int, max_workers: int | None) -> float:
    """Measure one full check run."""
    from modelcheck import AnalysisConfig, ModelChecker, load_snapshot

    model = load_snapshot(synthetic_snapshot(size))
    checker = ModelChecker(AnalysisConfig(max_workers=max_workers))
    start = time.perf_counter()
    checker.check(model)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run modelcheck benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=2000,
        help="Number of synthetic model classes",
    )
    args = parser.parse_args()

    results = [
        {"name": "Import Time", "unit": "seconds", "value": benchmark_import_time()},
        {
            "name": f"Snapshot Load ({args.size} classes)",
            "unit": "seconds",
            "value": benchmark_load(args.size),
        },
        {
            "name": f"Check, sequential ({args.size} classes)",
            "unit": "seconds",
            "value": benchmark_check(args.size, max_workers=1),
        },
        {
            "name": f"Check, thread pool ({args.size} classes)",
            "unit": "seconds",
            "value": benchmark_check(args.size, max_workers=None),
        },
    ]

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
