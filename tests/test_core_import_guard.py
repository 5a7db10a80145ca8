import importlib.util
from pathlib import Path


def _load_guard():
    script = (
        Path(__file__).resolve().parent.parent / "scripts" / "check_core_imports.py"
    )
    spec = importlib.util.spec_from_file_location("check_core_imports", script)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None  # for mypy
    spec.loader.exec_module(module)
    return module


def test_core_import_guard_passes():
    exit_code = _load_guard().main()
    assert exit_code == 0, "core import guard failed"


def test_core_import_guard_flags_http_and_outer_layers(tmp_path):
    (tmp_path / "bad_http.py").write_text("import httpx\n")
    (tmp_path / "bad_relative.py").write_text("from ..traverson import Traverson\n")
    (tmp_path / "fine.py").write_text("from .links import Links\nimport json\n")
    guard = _load_guard()

    assert guard.main(tmp_path) == 1
    assert guard.scan_file(tmp_path / "fine.py") == []
    assert len(guard.scan_file(tmp_path / "bad_relative.py")) == 1
