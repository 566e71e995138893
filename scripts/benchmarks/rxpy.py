"""
playstream vs RxPY Benchmark Suite

Compares the multicast primitives the music player relies on:
1. Subject creation and fan-out
2. Replay to late subscribers
3. Combination of latest values
4. Burst publishing into idle-coalesced subjects
"""

import argparse

# Ensure we use the local playstream package, not an installed one
import os
import sys

script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(script_dir, "../.."))
sys.path.insert(0, project_root)

import rx
from rich.console import Console
from rx import operators as ops
from rx.subject import BehaviorSubject as RxBehaviorSubject
from rx.subject import ReplaySubject as RxReplaySubject
from rx.subject import Subject as RxSubject
from utils import CONFIG, REGISTRY, BenchmarkComparison, benchmark

from playstream import (
    BehaviorSubject,
    IdleSubject,
    ManualIdleScheduler,
    Observable,
    ReplaySubject,
    Subject,
)

# ============================================================================
# CORE OPERATIONS
# ============================================================================


@benchmark("Subject Creation", category="Core Operations")
def bench_creation_playstream(n):
    subjects = [Subject() for _ in range(n)]
    return len(subjects)


@benchmark("Subject Creation", library="rxpy", category="Core Operations")
def bench_creation_rxpy(n):
    subjects = [RxSubject() for _ in range(n)]
    return len(subjects)


@benchmark("BehaviorSubject Updates", category="Core Operations")
def bench_behavior_playstream(n):
    subject = BehaviorSubject(0)
    subject.subscribe(lambda value: None)
    for i in range(n):
        subject.next(i)
    return n


@benchmark("BehaviorSubject Updates", library="rxpy", category="Core Operations")
def bench_behavior_rxpy(n):
    subject = RxBehaviorSubject(0)
    subject.subscribe(lambda value: None)
    for i in range(n):
        subject.on_next(i)
    return n


# ============================================================================
# MULTICAST
# ============================================================================


@benchmark("Fan-out", category="Multicast")
def bench_fanout_playstream(n):
    subject = Subject()
    for _ in range(n):
        subject.subscribe(lambda value: None)
    subject.next(1)
    return n


@benchmark("Fan-out", library="rxpy", category="Multicast")
def bench_fanout_rxpy(n):
    subject = RxSubject()
    for _ in range(n):
        subject.subscribe(lambda value: None)
    subject.on_next(1)
    return n


@benchmark("Late Subscriber Replay", category="Multicast")
def bench_replay_playstream(n):
    subject = ReplaySubject(16)
    for i in range(16):
        subject.next(i)
    for _ in range(n):
        subject.subscribe(lambda value: None)
    return n


@benchmark("Late Subscriber Replay", library="rxpy", category="Multicast")
def bench_replay_rxpy(n):
    subject = RxReplaySubject(16)
    for i in range(16):
        subject.on_next(i)
    for _ in range(n):
        subject.subscribe(lambda value: None)
    return n


# ============================================================================
# COMBINATION
# ============================================================================


@benchmark("Combine Latest", category="Combination")
def bench_combine_playstream(n):
    a, b = Subject(), Subject()
    Observable.all([a, b]).subscribe(lambda values: None)
    for i in range(n):
        a.next(i)
        b.next(i)
    return n


@benchmark("Combine Latest", library="rxpy", category="Combination")
def bench_combine_rxpy(n):
    a, b = RxSubject(), RxSubject()
    rx.combine_latest(a, b).subscribe(lambda values: None)
    for i in range(n):
        a.on_next(i)
        b.on_next(i)
    return n


@benchmark("Map Chain", category="Combination")
def bench_chain_playstream(n):
    source = Subject()
    Observable.chain(source, lambda value, fail: value * 2).subscribe(lambda v: None)
    for i in range(n):
        source.next(i)
    return n


@benchmark("Map Chain", library="rxpy", category="Combination")
def bench_chain_rxpy(n):
    source = RxSubject()
    source.pipe(ops.map(lambda value: value * 2)).subscribe(lambda v: None)
    for i in range(n):
        source.on_next(i)
    return n


# ============================================================================
# COALESCING
# ============================================================================


@benchmark("Burst Coalescing", category="Coalescing")
def bench_burst_playstream(n):
    host = ManualIdleScheduler()
    subject = IdleSubject(host)
    delivered = []
    subject.subscribe(delivered.append)
    for i in range(n):
        subject.next(i)
    host.run_idle()
    return n


@benchmark("Burst Coalescing", library="rxpy", category="Coalescing")
def bench_burst_rxpy(n):
    # Closest RxPY equivalent without a running scheduler: keep the last value
    subject = RxSubject()
    delivered = []
    subject.pipe(ops.last()).subscribe(delivered.append)
    for i in range(n):
        subject.on_next(i)
    subject.on_completed()
    return n


# ============================================================================
# CLI
# ============================================================================


def main():
    parser = argparse.ArgumentParser(description="playstream vs RxPY comparison")
    parser.add_argument("--list", action="store_true", help="List available benchmarks")
    parser.add_argument("--benchmarks", nargs="+", help="Run specific benchmarks")
    parser.add_argument("--time-limit", type=float, help="Time limit per benchmark")
    parser.add_argument("--iterations", type=int, help="Number of iterations")
    parser.add_argument("--category", help="Run only benchmarks in this category")

    args = parser.parse_args()

    if args.list:
        console = Console()
        console.print("\n[bold]Available Benchmarks:[/bold]")

        categories = {}
        for name in REGISTRY.list_benchmarks():
            categories.setdefault(REGISTRY.get_category(name), []).append(name)

        for category in sorted(categories):
            console.print(f"\n[cyan]{category}:[/cyan]")
            for name in sorted(categories[category]):
                console.print(f"  - {name}")
        return

    if args.time_limit:
        CONFIG.time_limit = args.time_limit
    if args.iterations:
        CONFIG.num_iterations = args.iterations

    benchmark_names = args.benchmarks
    if args.category:
        benchmark_names = [
            name
            for name in REGISTRY.list_benchmarks()
            if REGISTRY.get_category(name) == args.category
        ]

    BenchmarkComparison(CONFIG).run(benchmark_names=benchmark_names, registry=REGISTRY)


if __name__ == "__main__":
    main()
