#!/usr/bin/env python3
"""
Performance comparison of the AVL and Red-Black trees

Tests:
1. Sequential insert throughput
2. Random insert throughput
3. Lookup throughput (hits and misses)
4. Random removal throughput
5. Final tree height against the theoretical bound

Metrics:
- Operations per second (ops/sec)
- Latency (p50, p95, p99)

Usage:
    python benchmark.py          # full run
    python benchmark.py quick    # small sizes only
    LOG_LEVEL=DEBUG python benchmark.py quick
"""

import logging
import math
import os
import random
import statistics
import sys
import time
from collections.abc import Callable
from typing import Any, List

from balancedtree import AVLTree, RedBlackTree
from balancedtree.interfaces import SortedSet

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()

TREES: dict[str, Callable[[], SortedSet]] = {
    "AVLTree": AVLTree,
    "RedBlackTree": RedBlackTree,
}


def height_bound(name: str, n: int) -> float:
    """Worst-case height for a tree of n values."""
    if name == "AVLTree":
        return 1.441 * math.log2(n + 2) - 0.329
    return 2 * math.log2(n + 1)


class PerformanceTest:
    def __init__(self, name: str, factory: Callable[[], SortedSet]):
        self.name = name
        self.factory = factory
        self.tree: SortedSet = factory()

    def reset(self) -> None:
        self.tree = self.factory()

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_us": min(latencies) / 1_000,
            "max_us": max(latencies) / 1_000,
            "mean_us": statistics.mean(latencies) / 1_000,
            "median_us": statistics.median(latencies) / 1_000,
            "p95_us": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000,
            "p99_us": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000,
        }

    def _timed(self, test: str, values: List[Any], op: Callable[[Any], Any]) -> dict:
        latencies = []

        start_time = time.perf_counter_ns()

        for i, value in enumerate(values):
            op_start = time.perf_counter_ns()
            op(value)
            latencies.append(time.perf_counter_ns() - op_start)

            if (i + 1) % 50000 == 0:
                logger.debug(f"  Progress: {i + 1}/{len(values)} operations")

        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": f"{self.name} {test}",
            "count": len(values),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(values) / elapsed if elapsed else float("inf"),
            **self.calculate_stats(latencies),
        }

        self.print_results(results)
        return results

    def test_sequential_insert(self, count: int) -> dict:
        """Test ascending insert performance (worst case for a plain BST)."""
        self.reset()
        return self._timed("Sequential Insert", list(range(count)), self.tree.insert)

    def test_random_insert(self, count: int) -> dict:
        """Test shuffled insert performance."""
        self.reset()
        values = list(range(count))
        random.shuffle(values)
        return self._timed("Random Insert", values, self.tree.insert)

    def test_lookup(self, count: int) -> dict:
        """Test contains() on a populated tree, half hits and half misses."""
        values = [random.randint(0, 2 * count) for _ in range(count)]
        return self._timed("Lookup", values, self.tree.contains)

    def test_random_remove(self, count: int) -> dict:
        """Test removal of every value in shuffled order."""
        values = list(range(count))
        random.shuffle(values)
        return self._timed("Random Remove", values, self.tree.remove)

    def test_height(self, count: int) -> dict:
        """Compare the height after random inserts with the theoretical bound."""
        self.reset()
        for value in random.sample(range(count * 10), count):
            self.tree.insert(value)

        results = {
            "test": f"{self.name} Height",
            "count": count,
            "height": self.tree.height(),
            "bound": height_bound(self.name, count),
        }
        self.print_results(results)
        return results

    @staticmethod
    def print_results(results: dict) -> None:
        """Print test results in a formatted way."""
        print(f"\n  {results['test']}:")
        for key, value in results.items():
            if key == "test":
                continue
            if isinstance(value, float):
                print(f"    {key}: {value:.3f}")
            else:
                print(f"    {key}: {value}")


def run_tests(sizes: List[int]) -> None:
    all_results = []

    for size in sizes:
        print(f"\n{'#'*60}")
        print(f"# Size: {size}")
        print(f"{'#'*60}")

        for name, factory in TREES.items():
            test = PerformanceTest(name, factory)
            all_results.append(test.test_sequential_insert(size))
            all_results.append(test.test_random_insert(size))
            all_results.append(test.test_lookup(size))
            all_results.append(test.test_random_remove(size))
            all_results.append(test.test_height(size))

            if not test.tree.is_empty():
                test.tree.validate()

    # Summary
    print(f"\n{'#'*60}")
    print(f"# SUMMARY")
    print(f"{'#'*60}")

    for result in all_results:
        if "ops_per_sec" in result:
            print(f"  {result['test']:<36} n={result['count']:<8} {result['ops_per_sec']:>12,.0f} ops/sec")
        else:
            print(f"  {result['test']:<36} n={result['count']:<8} height {result['height']} (bound {result['bound']:.2f})")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "quick":
        run_tests([250, 2500])
    else:
        run_tests([250, 2500, 25000, 250000])
