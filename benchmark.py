#!/usr/bin/env python3
"""
Performance Benchmark for Email Validator

Measures syntax classification throughput for both validation modes.
No DNS lookups are made.
"""

import asyncio
import time
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from email_validator_strict import EmailValidator, ValidationMode, classify

# Test emails
VALID_EMAILS = [
    "user@example.com",
    "john.doe@company.org",
    "alice123@gmail.com",
    "bob_smith@yahoo.com",
    "charlie.brown@outlook.com",
]

RFC_ONLY_EMAILS = [
    "user@localhost",
    '"john doe"@company.org',
    "alice@[192.168.0.1]",
    "bob@[IPv6:2001:db8::1]",
    "charlie@example.c",
]

INVALID_EMAILS = [
    "plainaddress",
    "@missing-local.com",
    "user@",
    "user@@domain.com",
    "user@.com",
]

ALL_EMAILS = VALID_EMAILS + RFC_ONLY_EMAILS + INVALID_EMAILS


def benchmark(mode, emails, iterations=10000):
    """Run benchmark and return statistics."""
    start_time = time.perf_counter()

    for _ in range(iterations):
        for email in emails:
            classify(email, mode)

    end_time = time.perf_counter()
    total_time = end_time - start_time
    total_requests = iterations * len(emails)
    rps = total_requests / total_time

    return {
        'total_time': total_time,
        'total_requests': total_requests,
        'rps': rps,
        'avg_time_ms': (total_time / total_requests) * 1000
    }


def print_result(result):
    print(f"  Total time: {result['total_time']:.3f}s")
    print(f"  Total requests: {result['total_requests']}")
    print(f"  RPS: {result['rps']:,.0f} requests/second")
    print(f"  Avg time: {result['avg_time_ms']:.4f}ms")


def main():
    print("=" * 60)
    print("Email Validator Performance Benchmark")
    print("=" * 60)

    # Warmup
    print("\n[Warmup] Running 1000 iterations...")
    for mode in ValidationMode:
        benchmark(mode, ALL_EMAILS, iterations=1000)

    for mode in ValidationMode:
        print(f"\n[{mode.value}] Valid emails only (10,000 iterations)...")
        print_result(benchmark(mode, VALID_EMAILS))

        print(f"\n[{mode.value}] Invalid emails only (10,000 iterations)...")
        print_result(benchmark(mode, INVALID_EMAILS))

        print(f"\n[{mode.value}] Mixed emails (10,000 iterations)...")
        print_result(benchmark(mode, ALL_EMAILS))

    # Full entry point, including trimming and the coroutine round trip
    print("\n[Batch] validate_batch() with 150 emails per batch, 100 iterations...")
    validator = EmailValidator()
    start = time.perf_counter()
    for _ in range(100):
        asyncio.run(validator.validate_batch(ALL_EMAILS * 10))
    end = time.perf_counter()
    total_time = end - start
    total_requests = 100 * len(ALL_EMAILS) * 10
    print(f"  Total time: {total_time:.3f}s")
    print(f"  Total requests: {total_requests}")
    print(f"  RPS: {total_requests / total_time:,.0f} requests/second")
    print(f"  Avg time per email: {(total_time / total_requests) * 1000:.4f}ms")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
