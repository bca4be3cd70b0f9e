#!/usr/bin/env python3
"""Fail when raw hex colour literals appear outside charts/tokens.py."""

from __future__ import annotations

import re
import sys
from pathlib import Path

HEX_RE = re.compile(r"(?<![\w&])#[0-9a-fA-F]{3,8}\b")
ALLOWED_FILES = {"tokens.py"}
DEFAULT_ROOTS = ("analytics", "charts", "scripts")


def _source_files(roots: list[Path]) -> list[Path]:
    files: list[Path] = []
    for root in roots:
        if root.is_file():
            files.append(root)
        elif root.is_dir():
            files.extend(sorted(root.rglob("*.py")))
    return [path for path in files if path.name not in ALLOWED_FILES]


def find_hex_literals(roots: list[Path]) -> list[str]:
    """``path:line: #hex`` for every hex literal in the scanned sources."""
    violations: list[str] = []
    for path in _source_files(roots):
        for lineno, content in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
            if path.name == Path(__file__).name and "HEX_RE" in content:
                continue
            for hex_code in HEX_RE.findall(content):
                violations.append(f"{path}:{lineno}: {hex_code} -> use charts.theme.semantic_color()")
    return violations


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    roots = [Path(arg) for arg in args] or [Path(root) for root in DEFAULT_ROOTS]
    violations = find_hex_literals(roots)

    if violations:
        print("Found hex colour literals outside charts/tokens.py:")
        for item in violations:
            print(f"  - {item}")
        return 1

    print("OK: no hex colour literals outside charts/tokens.py")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
