#!/usr/bin/env python3
# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, CLI smoke test and build.

Pass step names to run a subset, e.g. ``tools/ci.py Lint Tests``.
"""

import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Types", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=typealgebra", "--cov-report=term-missing"]),
    ("CLI", ["uv", "run", "typealgebra", "--help"]),
    ("Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps (all by default) and report results."""
    selected = set(argv if argv is not None else sys.argv[1:])
    unknown = selected - {name for name, _ in STEPS}
    if unknown:
        print(chalk.red(f"Unknown step(s): {', '.join(sorted(unknown))}"))
        return 2

    results: list[tuple[str, bool, float]] = []
    for name, cmd in STEPS:
        if selected and name not in selected:
            continue
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _banner("  Summary")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> pathlib.Path:
    return pathlib.Path(__file__).parent.parent


if __name__ == "__main__":
    sys.exit(main())
