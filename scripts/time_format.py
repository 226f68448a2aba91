#!/usr/bin/env python3
"""Quick perf benchmark for formatting a directory of script files."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from jominifmt.cli import collect_paths
from jominifmt.format import FormatSettings, run_format


def _run_once(
    files: list[tuple[Path, str]],
    *,
    label: str,
    show_progress: bool,
    settings: FormatSettings,
) -> tuple[float, int, int, int]:
    start = time.perf_counter()
    changed_count = 0
    diagnostics_count = 0
    iterator = tqdm(files, desc=label, unit="file") if show_progress else files
    for _, text in iterator:
        result = run_format(text, settings=settings)
        changed_count += int(result.changed)
        diagnostics_count += len(result.diagnostics)
    duration = time.perf_counter() - start
    return duration, len(files), changed_count, diagnostics_count


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark formatting throughput")
    parser.add_argument("root", type=Path, help="Directory of script files")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--align-assignments", action="store_true", help="Benchmark with `=` alignment on")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Run cProfile and print top hotspots",
    )
    parser.add_argument(
        "--profile-top",
        type=int,
        default=30,
        help="Number of cProfile rows to print (default: 30)",
    )
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    parser.add_argument(
        "--limit-files",
        type=int,
        default=0,
        help="Optional file limit for quick profiling/smoke tests (0 = all files)",
    )
    args = parser.parse_args()

    root: Path = args.root
    if not root.is_dir():
        raise SystemExit(f"Invalid root: {root}")

    paths = collect_paths([root])
    if not paths:
        raise SystemExit(f"No script files found under {root}")
    if args.limit_files > 0:
        paths = paths[: args.limit_files]

    files = [(path, path.read_text(encoding="utf-8-sig", errors="replace")) for path in paths]
    settings = FormatSettings(align_assignments=args.align_assignments)
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                files,
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
                settings=settings,
            )

        timings: list[float] = []
        files_count = 0
        changed_count = 0
        diagnostics_count = 0
        for run_idx in range(max(args.runs, 1)):
            duration, files_count, changed_count, diagnostics_count = _run_once(
                files,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
                settings=settings,
            )
            timings.append(duration)
        return timings, files_count, changed_count, diagnostics_count

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, files_count, changed_count, diagnostics_count = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, files_count, changed_count, diagnostics_count = _benchmark()

    mean = statistics.mean(timings)

    print(f"Dataset: {root}")
    print(f"Files: {files_count}")
    print(f"Would change: {changed_count}")
    print(f"Diagnostics: {diagnostics_count}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Files/s (mean): {files_count / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
