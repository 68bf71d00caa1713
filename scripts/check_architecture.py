#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/bilicache_tool"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    # Presentation stays out of the application layer.
    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "import typer",
                "from typer",
                "import click",
                "print(",
            ],
        )

    # Stages see only the application layer, never the CLI or reporters.
    for path in (PACKAGE / "stages").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "bilicache_tool.cli",
                "bilicache_tool.infrastructure",
                "import typer",
            ],
        )

    # Adapters must not reach back into use-cases.
    for path in (PACKAGE / "adapters").glob("*.py"):
        _assert_no_imports(path, ["bilicache_tool.application.use_cases"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
