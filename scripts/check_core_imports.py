#!/usr/bin/env python3
"""
Fail if the halwire core imports I/O or outer-layer modules.
Checks all Python files under src/halwire/core/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "halwire" / "core"

FORBIDDEN_PREFIXES = (
    "httpx",
    "requests",
    "dotenv",
    "halwire.traverson",
    "halwire.paging",
)

# Relative imports reaching out of the core package.
FORBIDDEN_RELATIVE = ("traverson", "paging")


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if is_forbidden(alias.name):
                    errors.append(f"{path}: forbidden import '{alias.name}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            if node.level == 0 and is_forbidden(mod):
                errors.append(f"{path}: forbidden import '{mod}'")
            elif node.level > 1 and mod.split(".")[0] in FORBIDDEN_RELATIVE:
                errors.append(f"{path}: forbidden import '{'.' * node.level}{mod}'")
    return errors


def main(core_dir: Path = CORE_DIR) -> int:
    violations: list[str] = []
    for py_file in sorted(core_dir.rglob("*.py")):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
