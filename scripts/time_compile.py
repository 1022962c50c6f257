#!/usr/bin/env python3
"""Benchmark template compilation over a directory of templates.

Each measured run lexes, parses, generates and renders every template. The
slowest templates of the last run are listed so regressions can be traced to
specific inputs.
"""

from __future__ import annotations

import argparse
import cProfile
from dataclasses import dataclass
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from mviewpy.parser import ParseMode
from mviewpy.pipeline import compile_view


@dataclass(frozen=True, slots=True)
class Template:
    path: Path
    text: str


@dataclass(slots=True)
class RunStats:
    seconds: float
    errors: int
    per_template: list[tuple[float, Path]]


def _load_templates(root: Path, suffix: str) -> list[Template]:
    paths = sorted(path for path in root.rglob(f"*{suffix}") if path.is_file())
    return [Template(path=path, text=path.read_text(encoding="utf-8")) for path in paths]


def _compile_all(templates: list[Template], mode: ParseMode, *, desc: str | None) -> RunStats:
    per_template: list[tuple[float, Path]] = []
    errors = 0
    items = tqdm(templates, desc=desc, unit="tpl", leave=False) if desc is not None else templates
    run_start = time.perf_counter()
    for template in items:
        start = time.perf_counter()
        result = compile_view(template.text, mode=mode)
        per_template.append((time.perf_counter() - start, template.path))
        errors += int(result.has_errors)
    return RunStats(seconds=time.perf_counter() - run_start, errors=errors, per_template=per_template)


def _measure(templates: list[Template], mode: ParseMode, runs: int, warmups: int, progress: bool) -> list[RunStats]:
    for index in range(warmups):
        _compile_all(templates, mode, desc=f"warmup {index + 1}" if progress else None)
    return [
        _compile_all(templates, mode, desc=f"run {index + 1}/{runs}" if progress else None)
        for index in range(runs)
    ]


def _print_report(root: Path, templates: list[Template], stats: list[RunStats], slowest: int) -> None:
    seconds = [run.seconds for run in stats]
    total_chars = sum(len(template.text) for template in templates)
    mean = statistics.mean(seconds)

    print(f"{root}: {len(templates)} templates, {total_chars} chars, {stats[-1].errors} with errors")
    print(f"runs={len(seconds)} best={min(seconds):.4f}s median={statistics.median(seconds):.4f}s")
    print(f"throughput: {len(templates) / mean:.1f} templates/s, {total_chars / mean / 1000:.1f} kchars/s")

    if slowest > 0:
        print("\nslowest templates (last run):")
        for duration, path in sorted(stats[-1].per_template, reverse=True)[:slowest]:
            print(f"  {duration * 1000:8.3f} ms  {path.relative_to(root)}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark template compilation throughput")
    parser.add_argument("root", type=Path, help="Directory searched recursively for templates")
    parser.add_argument("--suffix", default=".mview", help="Template file suffix (default: .mview)")
    parser.add_argument("--mode", choices=[mode.value for mode in ParseMode], default=ParseMode.STRICT.value)
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Unmeasured runs before timing")
    parser.add_argument("--slowest", type=int, default=5, help="How many slow templates to list")
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars")
    parser.add_argument("--profile", metavar="SORT", help="Profile with cProfile, sorted by SORT (e.g. cumulative)")
    args = parser.parse_args()

    root: Path = args.root
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")
    templates = _load_templates(root, args.suffix)
    if not templates:
        raise SystemExit(f"No *{args.suffix} templates under {root}")

    mode = ParseMode(args.mode)
    runs = max(args.runs, 1)
    warmups = max(args.warmups, 0)
    progress = not args.no_progress

    if args.profile is None:
        stats = _measure(templates, mode, runs, warmups, progress)
    else:
        profiler = cProfile.Profile()
        stats = profiler.runcall(_measure, templates, mode, runs, warmups, progress)
        stream = io.StringIO()
        pstats.Stats(profiler, stream=stream).sort_stats(args.profile).print_stats(25)
        print(stream.getvalue())

    _print_report(root, templates, stats, args.slowest)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
