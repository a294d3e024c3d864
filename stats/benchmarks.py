#!/usr/bin/env python3
"""
Benchmarks for the AVL-tree data structure.

This script measures:
 1. Full tree build times for random insertion order
 2. Full tree build times for ascending insertion order
 3. Per-operation cost (insert, contains, delete) into trees of various sizes
 4. Per-operation time and rotation counts collected by the profiler

Usage:
    python -m stats.benchmarks [--sizes 100 1000 10000] [--trials T] [--seed S]
"""
import argparse
import time
import gc
from statistics import mean, variance

import numpy as np

from avl_trees.avl_tree_base import AVLTreeBase, avl_stats_
from avl_trees.factory import AVLTree
from avl_trees.profiling import PROFILER
from stats.stats_avl_tree import random_avl_tree_of_size, random_keys


def bench_build(sizes: list[int], rng: np.random.Generator) -> None:
    """Measure random-order and ascending-order builds for various sizes."""
    for n in sizes:
        t0 = time.perf_counter()
        tree = random_avl_tree_of_size(n, rng=rng)
        elapsed = time.perf_counter() - t0
        print(f"[bench] random build({n}):    {elapsed:.4f}s  height={tree.height()}")

        t0 = time.perf_counter()
        tree = AVLTree(range(n))
        elapsed = time.perf_counter() - t0
        print(f"[bench] ascending build({n}): {elapsed:.4f}s  height={tree.height()}")


def measure_single_ops(n: int, trials: int, rng: np.random.Generator) -> dict[str, tuple[float, float]]:
    """
    Measure per-operation cost on a tree of exactly `n` items.
    Returns {operation: (mean_time_s, variance_time_s)}.
    """
    space = 1 << 24
    keys = random_keys(n + trials, space=space, rng=rng)
    tree = AVLTree(keys[:n])
    probes = keys[n:]

    results = {}
    for name, op in (("insert", tree.insert), ("contains", tree.contains), ("delete", tree.delete)):
        gc.collect()
        gc.disable()
        try:
            times = []
            for key in probes:
                t0 = time.perf_counter()
                op(key)
                times.append(time.perf_counter() - t0)
        finally:
            gc.enable()
        results[name] = (mean(times), variance(times) if len(times) > 1 else 0.0)
    return results


def bench_single_ops(sizes: list[int], trials: int, rng: np.random.Generator) -> None:
    for n in sizes:
        for name, (avg, var) in measure_single_ops(n, trials, rng).items():
            print(
                f"[bench] {name:<8} size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²"
            )


def main():
    parser = argparse.ArgumentParser(description="AVL tree benchmarks")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes for build and single-operation benchmarks")
    parser.add_argument("--trials", type=int, default=200,
                        help="Number of probes per single-operation benchmark")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random key generator")
    args = parser.parse_args()
    rng = np.random.default_rng(args.seed)

    print("\n=== Tree Build ===")
    bench_build(args.sizes, rng)

    print("\n=== Single-Operation Benchmarks ===")
    bench_single_ops(args.sizes, args.trials, rng)

    print("\n=== Operation Profile (time and rotations) ===")
    PROFILER.enable()
    tree = random_avl_tree_of_size(max(args.sizes), rng=rng)
    for key in list(tree)[::2]:
        tree.delete(key)
    PROFILER.disable()
    print(AVLTreeBase.get_performance_report())
    AVLTreeBase.reset_performance_metrics()

    stats = avl_stats_(tree)
    print(f"\nFinal tree: {tree}  balanced={stats.is_balanced}")


if __name__ == "__main__":
    main()
