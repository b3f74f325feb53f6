"""Repeatable benchmark for per-delta reparse latency of a streaming message.

Builds a synthetic assistant report (headers, bullets, a growing table),
feeds it through StreamingMessage in token-sized deltas, and reports
reparse latency percentiles and peak memory.

Usage:
    uv run python benchmarks/bench_streaming.py              # default 40 table rows
    uv run python benchmarks/bench_streaming.py --rows 400
    uv run python benchmarks/bench_streaming.py --json        # machine-readable output
"""

import argparse
import json
import statistics
import sys
import time
import tracemalloc

from artifact_render.io.perf_logging import set_enabled
from artifact_render.streaming import StreamingMessage, iter_chunks


def generate_message(n_rows: int) -> str:
    """Realistic trial-status report with a table of n_rows sites."""
    lines = [
        "## Enrollment summary",
        "",
        "Screening is **ahead of plan** at most sites; see `site_status` below.",
        "",
        "- Total randomized: 412",
        "- Screen failures: *trending down*",
        "",
        "| Site | Enrolled | Target | Status |",
        "| --- | ---: | ---: | :---: |",
    ]
    for i in range(n_rows):
        lines.append(f"| Site {i:03d} | {10 + i % 17} | 30 | {'on track' if i % 3 else '**behind**'} |")
    lines += [
        "",
        "### Next steps",
        "1. Re-train coordinators at lagging sites",
        "2. Review *inclusion criteria* wording",
    ]
    return "\n".join(lines)


def run(n_rows: int, chunk_size: int) -> dict:
    text = generate_message(n_rows)
    message = StreamingMessage()
    latencies_ms: list[float] = []

    tracemalloc.start()
    started = time.perf_counter()
    for chunk in iter_chunks(text, chunk_size):
        t0 = time.perf_counter_ns()
        message.append(chunk)
        latencies_ms.append((time.perf_counter_ns() - t0) / 1_000_000)
    total_s = time.perf_counter() - started
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    final = message.finish()
    ordered = sorted(latencies_ms)
    return {
        "chars": len(text),
        "deltas": len(latencies_ms),
        "blocks": len(final.document),
        "total_s": round(total_s, 4),
        "mean_ms": round(statistics.fmean(ordered), 4),
        "p50_ms": round(ordered[len(ordered) // 2], 4),
        "p95_ms": round(ordered[int(len(ordered) * 0.95)], 4),
        "max_ms": round(ordered[-1], 4),
        "peak_kib": round(peak / 1024, 1),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--rows", type=int, default=40, help="Table rows (default: 40)")
    parser.add_argument("--chunk-size", type=int, default=4, help="Chars per delta (default: 4)")
    parser.add_argument("--json", action="store_true", help="Emit JSON")
    args = parser.parse_args()

    # Slow-path warnings would dominate output at high row counts.
    set_enabled(False)
    result = run(args.rows, args.chunk_size)

    if args.json:
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for key, value in result.items():
            print(f"{key:>10}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
