#!/usr/bin/env python3
"""
Benchmark Harness

Adaptive benchmark runner and rich report for comparing playstream with RxPY.
"""

import gc
import time
import tracemalloc
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, TypeVar

from rich.console import Console
from rich.table import Table

T = TypeVar("T")


# ============================================================================
# Configuration
# ============================================================================


@dataclass
class BenchmarkConfig:
    """Benchmark configuration parameters."""

    time_limit: float = 1.0
    starting_n: int = 10
    scale_factor: float = 1.5
    num_iterations: int = 1


CONFIG = BenchmarkConfig()


# ============================================================================
# Metrics
# ============================================================================


@dataclass
class BenchmarkMetrics:
    """Benchmark execution metrics."""

    library: str
    operation: str
    max_n: int
    operation_time: float
    operations_per_second: float
    memory_peak_kb: int
    gc_total_collections: int


class BenchmarkProfiler:
    """Timing, memory and GC measurement context manager."""

    def __enter__(self):
        gc.collect()
        tracemalloc.start()
        self.gc_before = sum(gc.get_count())
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.end_time = time.perf_counter()
        self.gc_after = sum(gc.get_count())
        _, self.memory_peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

    def get_metrics(
        self, library: str, operation: str, n: int, operations_performed: int
    ) -> BenchmarkMetrics:
        elapsed = self.end_time - self.start_time
        return BenchmarkMetrics(
            library=library,
            operation=operation,
            max_n=n,
            operation_time=elapsed,
            operations_per_second=operations_performed / elapsed if elapsed > 0 else 0,
            memory_peak_kb=self.memory_peak // 1024,
            gc_total_collections=max(0, self.gc_after - self.gc_before),
        )


# ============================================================================
# Registry
# ============================================================================


class BenchmarkRegistry:
    """Benchmark function registry."""

    def __init__(self):
        self.benchmarks: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.categories: Dict[str, str] = {}

    def register(
        self,
        name: str,
        library: str,
        func: Callable,
        category: Optional[str] = None,
        operations_counter: Optional[Callable] = None,
    ):
        self.benchmarks.setdefault(name, {})[library] = {
            "func": func,
            "operations_counter": operations_counter or (lambda result: result),
        }
        if category:
            self.categories[name] = category

    def get_benchmark(self, name: str, library: str) -> Optional[Dict]:
        return self.benchmarks.get(name, {}).get(library)

    def list_benchmarks(self) -> List[str]:
        return list(self.benchmarks.keys())

    def get_category(self, name: str) -> str:
        return self.categories.get(name, "General")


REGISTRY = BenchmarkRegistry()


def benchmark(
    name: str,
    *,
    library: str = "playstream",
    category: Optional[str] = None,
    operations_counter: Optional[Callable[[Any], int]] = None,
):
    """Register a benchmark function taking the workload size ``n``."""

    def decorator(func: Callable) -> Callable:
        REGISTRY.register(
            name=name,
            library=library,
            func=func,
            category=category,
            operations_counter=operations_counter,
        )

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# ============================================================================
# Adaptive Benchmark Runner
# ============================================================================


def run_adaptive_benchmark(
    library: str,
    operation: str,
    operation_func: Callable[[int], T],
    operations_counter: Callable[[T], int],
    config: BenchmarkConfig,
) -> BenchmarkMetrics:
    """Grow the workload until one run takes most of the time limit, then measure."""
    n = config.starting_n

    for _ in range(20):
        start = time.perf_counter()
        operation_func(n)
        elapsed = time.perf_counter() - start
        if elapsed >= config.time_limit * 0.8 or n > 10_000_000:
            break
        n = int(n * config.scale_factor) + 1

    runs = []
    for _ in range(config.num_iterations):
        with BenchmarkProfiler() as profiler:
            result = operation_func(n)
        runs.append(
            profiler.get_metrics(library, operation, n, operations_counter(result))
        )

    return BenchmarkMetrics(
        library=library,
        operation=operation,
        max_n=n,
        operation_time=sum(m.operation_time for m in runs) / len(runs),
        operations_per_second=sum(m.operations_per_second for m in runs) / len(runs),
        memory_peak_kb=max(m.memory_peak_kb for m in runs),
        gc_total_collections=sum(m.gc_total_collections for m in runs) // len(runs),
    )


# ============================================================================
# Comparison Report
# ============================================================================


class BenchmarkComparison:
    """Runs every benchmark registered for both libraries and prints a table."""

    def __init__(self, config: Optional[BenchmarkConfig] = None, console=None):
        self.config = config or BenchmarkConfig()
        self.console = console or Console()

    def run(
        self,
        benchmark_names: Optional[List[str]] = None,
        registry: Optional[BenchmarkRegistry] = None,
        libraries=("playstream", "rxpy"),
    ) -> List[BenchmarkMetrics]:
        if registry is None:
            raise ValueError("Registry required")

        if benchmark_names is None:
            benchmark_names = [
                name
                for name in registry.list_benchmarks()
                if all(registry.get_benchmark(name, lib) for lib in libraries)
            ]

        table = Table(title="playstream vs RxPY")
        table.add_column("Category", style="cyan")
        table.add_column("Benchmark")
        for library in libraries:
            table.add_column(f"{library} ops/s", justify="right")
        table.add_column("Winner", style="bold green")

        results = []
        for name in benchmark_names:
            row = {}
            for library in libraries:
                entry = registry.get_benchmark(name, library)
                if entry is None:
                    continue
                with self.console.status(f"{name} [{library}]"):
                    metrics = run_adaptive_benchmark(
                        library,
                        name,
                        entry["func"],
                        entry["operations_counter"],
                        self.config,
                    )
                row[library] = metrics
                results.append(metrics)

            if not row:
                # every library filtered out for this benchmark
                continue
            winner = max(row.values(), key=lambda m: m.operations_per_second)
            table.add_row(
                registry.get_category(name),
                name,
                *[
                    f"{row[lib].operations_per_second:,.0f}" if lib in row else "-"
                    for lib in libraries
                ],
                winner.library,
            )

        self.console.print(table)
        return results
