#!/usr/bin/env python3
"""Simple complexity guard for application orchestrators."""

from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TARGET = ROOT / "src/bilicache_tool/application/use_cases.py"
MAX_STATEMENTS = 30


def _function_sizes(tree: ast.Module) -> dict[str, int]:
    return {
        node.name: len(node.body)
        for node in tree.body
        if isinstance(node, ast.FunctionDef)
    }


def main() -> None:
    """Fail when a run use-case grows past the statement threshold."""
    tree = ast.parse(TARGET.read_text(encoding="utf-8"))
    violations = [
        f"{name}: {count} statements"
        for name, count in _function_sizes(tree).items()
        if count > MAX_STATEMENTS
    ]
    if violations:
        raise SystemExit(
            "Use-case complexity threshold exceeded:\n"
            + "\n".join(f"- {v}" for v in violations)
        )
    print("Orchestrator complexity check passed.")


if __name__ == "__main__":
    main()
