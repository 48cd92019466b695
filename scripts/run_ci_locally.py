#!/usr/bin/env python3
"""
Run the pname CI checks locally using the ACTIVE virtual environment.

Order:
  1) uv sync --active --extra test --extra dev [--frozen if uv.lock exists]
  2) black --check (line length 120) on pname/, tests/ and scripts/
  3) mypy pname --ignore-missing-imports
  4) pytest tests/ with coverage over pname, PYTHONPATH=<repo root>

Pass --skip-sync to reuse whatever is already installed.
"""

import os
import sys
import shutil
import argparse
import subprocess
from pathlib import Path

BLACK_VERSION = "24.8.0"
LINE_LENGTH = "120"
COVERAGE_FLOOR = "90"


def repo_root() -> Path:
    here = Path(__file__).resolve().parent
    for d in [here] + list(here.parents):
        if (d / "pyproject.toml").exists():
            return d
    return here.parent


REPO = repo_root()


def uv() -> list[str]:
    uv_path = shutil.which("uv")
    if uv_path:
        return [uv_path]
    return [sys.executable, "-m", "uv"]


def run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def sync() -> None:
    args = ["sync", "--active", "--extra", "test", "--extra", "dev"]
    if (REPO / "uv.lock").exists():
        args.append("--frozen")
    run(uv() + args)


def black_check() -> None:
    targets = ["pname", "tests"] + [str(p.relative_to(REPO)) for p in sorted((REPO / "scripts").glob("*.py"))]
    uvx_path = shutil.which("uvx")
    if uvx_path:
        run([uvx_path, "--from", f"black=={BLACK_VERSION}", "black", *targets, "--check", "--line-length", LINE_LENGTH])
    else:
        run(uv() + ["run", "--active", "black", *targets, "--check", "--line-length", LINE_LENGTH])


def type_check() -> None:
    run(uv() + ["run", "--active", "mypy", "pname", "--ignore-missing-imports"])


def tests() -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        uv()
        + [
            "run",
            "--active",
            "pytest",
            "tests/",
            "--cov=pname",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
        ],
        env=env,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Run pname CI checks locally.")
    parser.add_argument("--skip-sync", action="store_true", help="Do not run uv sync first.")
    args = parser.parse_args()

    if not args.skip_sync:
        sync()
    black_check()
    type_check()
    tests()

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
