#!/usr/bin/env python3
"""Run formatters, linters and the test suite in one go.

Steps, in order: black, isort, ruff, pylint, pytest. Pass `--fix` to let
black, isort and ruff rewrite files instead of only checking them.
"""

import argparse
from pathlib import Path
import subprocess
import sys

ROOT = Path(__file__).parent
PACKAGES = ["app", "core", "infrastructure", "main.py"]


def run_command(cmd: list[str], description: str) -> tuple[bool, str]:
    """Run `cmd` from the project root and return (success, combined output)."""
    print(f"\n{'=' * 60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print("=" * 60)

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False, cwd=ROOT)
    except OSError as e:
        print(f"Could not start: {e}")
        return False, str(e)

    output = result.stdout + result.stderr
    print("OK" if result.returncode == 0 else "FAILED")
    if output.strip():
        print(output)
    return result.returncode == 0, output


def build_commands(fix: bool) -> list[tuple[list[str], str]]:
    py = sys.executable
    black = [py, "-m", "black", "."] + ([] if fix else ["--check"])
    isort = [py, "-m", "isort", "."] + ([] if fix else ["--check-only"])
    ruff = [py, "-m", "ruff", "check", "."] + (["--fix"] if fix else [])
    return [
        (black, "black"),
        (isort, "isort"),
        (ruff, "ruff"),
        ([py, "-m", "pylint", *PACKAGES], "pylint"),
        ([py, "-m", "pytest", "-q"], "pytest"),
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--fix", action="store_true", help="apply formatting fixes")
    args = parser.parse_args()

    results = [(desc, *run_command(cmd, desc)) for cmd, desc in build_commands(args.fix)]

    print(f"\n{'=' * 60}")
    print("Summary")
    print("=" * 60)
    for description, success, _ in results:
        print(f"{description}: {'passed' if success else 'failed'}")

    sys.exit(0 if all(success for _, success, _ in results) else 1)


if __name__ == "__main__":
    main()
