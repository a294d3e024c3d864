"""Cost accounting for AVL-tree operations: wall-clock time and rotations."""

import time
import functools
from contextlib import contextmanager
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Iterator


@dataclass
class OperationProfile:
    """Accumulated cost of one tree operation across all profiled calls."""
    calls: int = 0
    seconds: float = 0.0
    slowest: float = 0.0
    rotations: int = 0

    def record(self, elapsed: float, rotations: int) -> None:
        self.calls += 1
        self.seconds += elapsed
        self.slowest = max(self.slowest, elapsed)
        self.rotations += rotations

    @property
    def mean_seconds(self) -> float:
        return self.seconds / self.calls if self.calls else 0.0

    @property
    def rotations_per_call(self) -> float:
        return self.rotations / self.calls if self.calls else 0.0


class TreeProfiler:
    """
    Collects per-operation timings together with the number of rotations
    each operation triggered.

    Disabled by default: profiled operations then cost one flag check and
    rotations are not counted. Rotations are attributed to every
    `measure()` block that is open while they happen.
    """

    def __init__(self):
        self.profiles: Dict[str, OperationProfile] = defaultdict(OperationProfile)
        self.enabled = False
        # Rotations seen while enabled, profiled or not
        self.rotation_count = 0

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        self.profiles.clear()
        self.rotation_count = 0

    def count_rotation(self) -> None:
        if self.enabled:
            self.rotation_count += 1

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Record the time and rotations spent inside the block under `name`."""
        if not self.enabled:
            yield
            return
        rotations_before = self.rotation_count
        start = time.perf_counter()
        try:
            yield
        finally:
            self.profiles[name].record(
                time.perf_counter() - start,
                self.rotation_count - rotations_before,
            )

    def report(self, sort_by: str = "seconds") -> str:
        """
        Render the collected profiles as a fixed-width table, one row per
        operation, ordered by the OperationProfile attribute `sort_by`
        (descending).
        """
        if not self.profiles:
            return "No profiling data collected."

        header = (f"{'Operation':<24} {'Calls':>8} {'Total (s)':>12} {'Mean (us)':>11} "
                  f"{'Max (us)':>11} {'Rotations':>10} {'Rot/call':>9}")
        lines = ["Operation profile:", "-" * len(header), header, "-" * len(header)]
        rows = sorted(self.profiles.items(), key=lambda kv: getattr(kv[1], sort_by), reverse=True)
        for name, p in rows:
            lines.append(
                f"{name:<24} {p.calls:>8} {p.seconds:>12.6f} {p.mean_seconds * 1e6:>11.2f} "
                f"{p.slowest * 1e6:>11.2f} {p.rotations:>10} {p.rotations_per_call:>9.3f}"
            )
        return "\n".join(lines)


PROFILER = TreeProfiler()


def profiled(name: str) -> Callable:
    """Decorator profiling each call of a tree operation under `name`."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not PROFILER.enabled:
                return func(*args, **kwargs)
            with PROFILER.measure(name):
                return func(*args, **kwargs)
        return wrapper
    return decorator
