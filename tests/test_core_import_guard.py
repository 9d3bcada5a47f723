import importlib.util
from pathlib import Path

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "check_core_imports.py"


def _load_guard():
    spec = importlib.util.spec_from_file_location("check_core_imports", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None  # for mypy
    spec.loader.exec_module(module)
    return module


def test_core_import_guard_passes():
    assert _load_guard().main() == 0, "core import guard failed"


def test_core_import_guard_flags_layering_violations(tmp_path):
    guard = _load_guard()
    offender = tmp_path / "offender.py"
    offender.write_text("import httpx\nfrom mcp.server.fastmcp import FastMCP\n")

    errors = guard.scan_file(offender)

    assert any("HTTP import 'httpx'" in e for e in errors)
    assert any("forbidden import 'mcp.server.fastmcp'" in e for e in errors)
