"""
Measure parse and compare throughput for the person name type.

Reports names/second and per-call latency percentiles (via numpy) for parsing,
ordering comparison and the binary round trip.
"""

import time
import random
import argparse

import numpy as np

from pname.person_names import parse, compare, to_binary, from_binary

FAMILY_NAMES = ["Lee", "Smith", "Van Der Berg", "O'Neil", "Garcia", "De La Cruz", "Nguyen", "Smith-Jones", "Xu"]
GIVEN_NAMES = ["John", "Anna", "Mary-Kate", "Wei", "Jean-Luc", "Siobhan", "Carlos", "Li", "Zoe"]
MIDDLE_NAMES = ["Michael", "Anne", "Paul", "Maria", "Luisa"]


def generate_test_names(count: int, rng: random.Random) -> list[str]:
    """Generate names in every allowed spacing and with zero to two middle names."""
    names = []
    for _ in range(count):
        separator = ", " if rng.random() < 0.7 else ","
        middles = rng.sample(MIDDLE_NAMES, rng.randint(0, 2))
        given = " ".join([rng.choice(GIVEN_NAMES)] + middles)
        names.append(f"{rng.choice(FAMILY_NAMES)}{separator}{given}")
    return names


def report(label: str, timings_ns: list[int]) -> None:
    timings_us = np.asarray(timings_ns, dtype=np.float64) / 1_000
    p50, p95, p99 = np.percentile(timings_us, [50, 95, 99])
    rate = len(timings_us) / (timings_us.sum() / 1_000_000)
    print(f"{label:<16} {rate:>12,.0f} ops/s   p50 {p50:.2f} μs   p95 {p95:.2f} μs   p99 {p99:.2f} μs")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Benchmark the person name type.")
    parser.add_argument("--count", type=int, default=10_000, help="Number of names to generate.")
    parser.add_argument("--random_seed", type=int, default=42, help="Random seed for reproducibility.")
    args = parser.parse_args()

    rng = random.Random(args.random_seed)
    texts = generate_test_names(args.count, rng)
    print(f"Benchmarking with {len(texts)} generated names...")

    parse_timings = []
    names = []
    for text in texts:
        start = time.perf_counter_ns()
        names.append(parse(text))
        parse_timings.append(time.perf_counter_ns() - start)
    report("parse", parse_timings)

    compare_timings = []
    for a, b in zip(names, reversed(names)):
        start = time.perf_counter_ns()
        compare(a, b)
        compare_timings.append(time.perf_counter_ns() - start)
    report("compare", compare_timings)

    binary_timings = []
    for name in names:
        start = time.perf_counter_ns()
        from_binary(to_binary(name))
        binary_timings.append(time.perf_counter_ns() - start)
    report("binary round trip", binary_timings)

    start = time.perf_counter()
    sorted(names)
    print(f"Sorted {len(names)} names in {time.perf_counter() - start:.3f}s")
