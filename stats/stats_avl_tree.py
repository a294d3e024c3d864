"""Statistics for AVL trees."""
# pylint: skip-file

import os
import logging
import math
import time
from statistics import mean
from typing import List, Optional, Tuple
from dataclasses import asdict
from datetime import datetime
import numpy as np

from avl_trees.avl_tree_base import (
    AVLTreeBase,
    Stats,
    TREE_FLAGS,
    avl_stats_,
)
from avl_trees.factory import AVLTree


def avl_height_bound(n: int) -> float:
    """Worst-case AVL height for n elements: 1.44 * log2(n + 2)."""
    return 1.44 * math.log2(n + 2)


def assert_invariants(t: AVLTreeBase, stats: Stats) -> bool:
    """Check all invariants, but only log ERROR messages on failures."""
    ok = True
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error("Invariant failed: %s is False", flag)
            ok = False

    if stats.node_count != t.size():
        logging.error(
            "Invariant failed: size()=%d ≠ node_count=%d",
            t.size(), stats.node_count
        )
        ok = False
    if stats.height > avl_height_bound(stats.node_count):
        logging.error(
            "Invariant failed: height=%d exceeds AVL bound %.2f for %d nodes",
            stats.height, avl_height_bound(stats.node_count), stats.node_count
        )
        ok = False
    return ok


def random_keys(n: int, space: int = 1 << 24, rng: Optional[np.random.Generator] = None) -> List[int]:
    """Draw `n` distinct integer keys from range(space)."""
    if space <= n:
        raise ValueError(f"Key-space too small! Required: {n + 1}, Available: {space}")
    if rng is None:
        rng = np.random.default_rng()
    return [int(k) for k in rng.choice(space, size=n, replace=False)]


# Create a random AVL tree with n distinct keys inserted in random order.
def random_avl_tree_of_size(n: int, rng: Optional[np.random.Generator] = None) -> AVLTreeBase:
    tree = AVLTree()
    tree_insert = tree.insert
    for key in random_keys(n, rng=rng):
        tree_insert(key)
    return tree


def random_workload(
    n: int,
    delete_ratio: float = 0.3,
    rng: Optional[np.random.Generator] = None,
) -> List[Tuple[str, int]]:
    """
    Build a mixed sequence of ("insert", key) / ("delete", key) operations.

    Keys are drawn from range(2 * n) so that duplicates and misses occur.
    """
    if rng is None:
        rng = np.random.default_rng()
    keys = rng.integers(0, 2 * n, size=n)
    is_delete = rng.random(n) < delete_ratio
    return [("delete" if d else "insert", int(k)) for k, d in zip(keys, is_delete)]


def apply_workload(tree: AVLTreeBase, ops: List[Tuple[str, int]]) -> AVLTreeBase:
    """Replay `ops` on `tree`; deletes on an empty tree are skipped."""
    for op, key in ops:
        if op == "insert":
            tree.insert(key)
        elif not tree.is_empty():
            tree.delete(key)
    return tree


def repeated_experiment(size: int, repetitions: int, seed: Optional[int] = None) -> None:
    """
    Repeatedly builds random AVL trees of `size` elements and logs the
    average height against the perfect and worst-case AVL heights.
    """
    t_all_0 = time.perf_counter()
    rng = np.random.default_rng(seed)

    results: List[Stats] = []
    times_build = []
    times_stats = []

    for _ in range(repetitions):
        t0 = time.perf_counter()
        tree = random_avl_tree_of_size(size, rng=rng)
        times_build.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        stats = avl_stats_(tree)
        times_stats.append(time.perf_counter() - t0)

        results.append(stats)
        assert_invariants(tree, stats)
        logging.debug("Tree stats: %s", asdict(stats))

    perfect_height = math.ceil(math.log2(size + 1)) if size > 0 else 0

    avg_height = mean(s.height for s in results)
    var_height = mean((s.height - avg_height) ** 2 for s in results)
    avg_node_count = mean(s.node_count for s in results)

    rows = [
        ("Node count",       avg_node_count,         None),
        ("Height",           avg_height,             var_height),
        ("Perfect height",   perfect_height,         None),
        ("AVL bound",        avl_height_bound(size), None),
    ]

    header = f"{'Metric':<20} {'Avg':>15} {'(Var)':>15}"
    logging.info(header)
    logging.info("-" * len(header))
    for name, avg, var in rows:
        if var is None:
            logging.info(f"{name:<20} {avg:15.2f}")
        else:
            logging.info(f"{name:<20} {avg:15.2f} {f'({var:.2f})':>15}")

    logging.info("")
    logging.info("Performance summary:")
    logging.info(f"{'Build time (s)':<20}{mean(times_build):13.6f}{sum(times_build):13.6f}")
    logging.info(f"{'Stats time (s)':<20}{mean(times_stats):13.6f}{sum(times_stats):13.6f}")
    logging.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)


if __name__ == "__main__":
    log_dir = os.path.join(os.getcwd(), "stats/logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler()
        ]
    )

    sizes = [10, 100, 1000, 10_000]
    repetitions = 10

    for n in sizes:
        logging.info("")
        logging.info(f"---------------- NOW RUNNING EXPERIMENT: n = {n}, repetitions = {repetitions} ----------------")
        repeated_experiment(size=n, repetitions=repetitions)
