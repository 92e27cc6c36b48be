#!/usr/bin/env python3
"""Quick perf benchmark for S-expression formatting."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from sexpfmt.format import FormatOptions, run_format
from sexpfmt.reader import read_source

SOURCE_SUFFIXES = (".rkt", ".scm", ".ss", ".sld", ".lisp", ".el", ".clj")


def _collect_source_files(root: Path) -> list[Path]:
    files = sorted(path for suffix in SOURCE_SUFFIXES for path in root.rglob(f"*{suffix}"))
    return [path for path in files if path.is_file()]


def _synthetic_source(forms: int, depth: int) -> str:
    """Nested definitions and calls wide enough to force alternative layouts."""
    chunks: list[str] = []
    for index in range(forms):
        expr = f"(list item-{index} 'alpha \"beta\" 3/4)"
        for level in range(depth):
            expr = f"(combine-values level-{level} {expr} (helper {level} #:key #t))"
        chunks.append(f"(define (generated-{index} x y)\n  (let ([z (+ x y)])\n    {expr}))")
    return "\n\n".join(chunks) + "\n"


def _run_once(
    sources: list[tuple[str, str]],
    options: FormatOptions,
    *,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int, int]:
    start = time.perf_counter()
    total_forms = 0
    total_diagnostics = 0
    changed = 0
    iterator = (
        tqdm(sources, desc=label, unit="file")
        if show_progress
        else sources
    )
    for _, text in iterator:
        read = read_source(text)
        result = run_format(text, options, read=read)
        total_forms += len(read.forms)
        total_diagnostics += len(result.diagnostics)
        changed += int(result.changed)
    duration = time.perf_counter() - start
    return duration, total_forms, total_diagnostics, changed


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark S-expression formatting throughput")
    parser.add_argument(
        "--source-root",
        type=Path,
        default=None,
        help="Directory of Lisp/Scheme sources (default: synthetic input)",
    )
    parser.add_argument("--width", type=int, default=FormatOptions().width, help="Page width")
    parser.add_argument("--synthetic-forms", type=int, default=200, help="Top-level forms in the synthetic input")
    parser.add_argument("--synthetic-depth", type=int, default=6, help="Call nesting depth of synthetic forms")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
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

    try:
        options = FormatOptions(width=args.width)
    except ValueError as exc:
        raise SystemExit(f"Invalid --width: {exc}") from exc

    source_root: Path | None = args.source_root
    if source_root is None:
        dataset = f"synthetic ({args.synthetic_forms} forms, depth {args.synthetic_depth})"
        sources = [("<synthetic>", _synthetic_source(args.synthetic_forms, args.synthetic_depth))]
    else:
        if not source_root.exists() or not source_root.is_dir():
            raise SystemExit(f"Invalid --source-root: {source_root}")
        files = _collect_source_files(source_root)
        if not files:
            raise SystemExit(f"No {'/'.join(SOURCE_SUFFIXES)} files found under {source_root}")
        if args.limit_files > 0:
            files = files[: args.limit_files]
        dataset = str(source_root)
        sources = [(str(path), path.read_text(encoding="utf-8")) for path in files]

    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                sources,
                options,
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
            )

        timings: list[float] = []
        forms_count = 0
        diagnostics_count = 0
        changed_count = 0
        for run_idx in range(max(args.runs, 1)):
            duration, forms_count, diagnostics_count, changed_count = _run_once(
                sources,
                options,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, forms_count, diagnostics_count, changed_count

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, forms_count, diagnostics_count, changed_count = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, forms_count, diagnostics_count, changed_count = _benchmark()

    mean = statistics.mean(timings)

    print(f"Dataset: {dataset}")
    print(f"Width: {options.width}")
    print(f"Files: {len(sources)} ({changed_count} would change)")
    print(f"Forms: {forms_count}")
    print(f"Diagnostics: {diagnostics_count}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Forms/s (mean): {forms_count / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
