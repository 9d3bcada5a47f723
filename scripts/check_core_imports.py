#!/usr/bin/env python3
"""
Guard the layering of src/openshift_mcp/core/:
- core never imports the MCP server or transports
- only core/client.py talks HTTP (httpx); resources go through the client
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterator

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "openshift_mcp" / "core"

FORBIDDEN_EVERYWHERE = (
    "mcp",
    "starlette",
    "uvicorn",
    "openshift_mcp.transports",
)
HTTP_MODULES = ("httpx",)
HTTP_ALLOWED = {CORE_DIR / "client.py"}


def _matches(module: str, prefixes: tuple[str, ...]) -> bool:
    return any(module == p or module.startswith(p + ".") for p in prefixes)


def imported_modules(tree: ast.AST) -> Iterator[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            yield node.module


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    for mod in imported_modules(ast.parse(path.read_text())):
        if _matches(mod, FORBIDDEN_EVERYWHERE):
            errors.append(f"{path}: forbidden import '{mod}'")
        elif _matches(mod, HTTP_MODULES) and path not in HTTP_ALLOWED:
            errors.append(f"{path}: HTTP import '{mod}' outside core/client.py")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(CORE_DIR.rglob("*.py")):
        violations.extend(scan_file(py_file))

    for v in violations:
        print(v, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
