from __future__ import annotations

"""
Unit tests for source discovery and filtering rules.
"""

import os

from compactlog.core.services.filters import compile_patterns, matches_include
from compactlog.core.services.scanner import prepare_filtering_rules, yield_source_files


def _tree(tmp_path):
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "b.py").write_text("", encoding="utf-8")
    (tmp_path / "pkg" / "a.py").write_text("", encoding="utf-8")
    (tmp_path / "pkg" / "notes.txt").write_text("", encoding="utf-8")
    (tmp_path / "__pycache__").mkdir()
    (tmp_path / "__pycache__" / "a.cpython-311.pyc").write_text("", encoding="utf-8")
    (tmp_path / ".venv").mkdir()
    (tmp_path / ".venv" / "site.py").write_text("", encoding="utf-8")
    (tmp_path / "setup.py").write_text("", encoding="utf-8")
    return tmp_path


def test_yield_source_files_applies_default_rules(tmp_path) -> None:
    root = _tree(tmp_path)
    include_rx, exclude_rx = prepare_filtering_rules(None, None)

    found = [f["rel_path"] for f in yield_source_files(str(root), [".py"], include_rx, exclude_rx)]

    assert found == ["setup.py", os.path.join("pkg", "a.py"), os.path.join("pkg", "b.py")]


def test_yield_source_files_honours_custom_patterns(tmp_path) -> None:
    root = _tree(tmp_path)
    include_rx, exclude_rx = prepare_filtering_rules([r"^a\.py$"], [r"^setup\.py$"])

    found = [f["file_path"] for f in yield_source_files(str(root), [".py"], include_rx, exclude_rx)]

    assert found == [str(root / "pkg" / "a.py")]


def test_compile_patterns_discards_invalid_regex() -> None:
    compiled = compile_patterns(["(", r"\.py$"])

    assert len(compiled) == 1
    assert matches_include("x.py", compiled)
    assert matches_include("anything", [])
