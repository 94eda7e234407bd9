from __future__ import annotations

"""
Integration tests for the viewer config generation pipeline.

Runs real source trees through discovery, AST extraction, the builder and
persistence, then decodes the written table.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from compactlog.core.hashing import hash_message
from compactlog.core.parser import parse_config
from compactlog.core.pipeline.engine import run_generate
from compactlog.core.pipeline.validator import validate_config
from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import ConfigEntry

GROUPS = {
    "TEST_GROUP": {"enabled": True, "text_enabled": True, "tag": "WM_TEST"},
    "DEBUG_GROUP": {"enabled": True, "text_enabled": True, "tag": "WM_DEBUG"},
    "QUIET_GROUP": {"enabled": False, "text_enabled": True, "tag": "WM_QUIET"},
}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    Create a small source tree.

    Structure:
    /src
      service.py     (two calls, one duplicated)
      window/
        manager.py   (one call, one call in a disabled group)
    """
    src = tmp_path / "src"
    (src / "window").mkdir(parents=True)
    (src / "service.py").write_text(
        'def start():\n'
        '    ProtoLog.i(ProtoLogGroup.TEST_GROUP, "test1")\n'
        '    ProtoLog.i(ProtoLogGroup.TEST_GROUP, "test1")\n'
        '    ProtoLog.d(ProtoLogGroup.DEBUG_GROUP, "test2")\n',
        encoding="utf-8",
    )
    (src / "window" / "manager.py").write_text(
        'def fail(code):\n'
        '    ProtoLog.e(ProtoLogGroup.DEBUG_GROUP, "test3 %d", code)\n'
        '    ProtoLog.v(ProtoLogGroup.QUIET_GROUP, "hidden")\n',
        encoding="utf-8",
    )
    return tmp_path


def _config(project: Path, **extra: Any) -> Dict[str, Any]:
    raw = {
        "source_root": str(project / "src"),
        "output_path": str(project / "out" / "viewer_config.json"),
        "groups": GROUPS,
    }
    raw.update(extra)
    clean, warnings = validate_config(raw, strict=True)
    assert warnings == []
    return clean


def test_run_generate_writes_decodable_table(project: Path) -> None:
    result = run_generate(_config(project))

    assert result.ok, result.error
    assert result.files_scanned == 2
    assert result.call_sites == 4
    assert result.skipped_calls == 1
    assert result.entries == 3

    parsed = parse_config((project / "out" / "viewer_config.json").read_text(encoding="utf-8"))
    assert parsed == {
        hash_message("test1", LogLevel.INFO): ConfigEntry("test1", LogLevel.INFO, "WM_TEST"),
        hash_message("test2", LogLevel.DEBUG): ConfigEntry("test2", LogLevel.DEBUG, "WM_DEBUG"),
        hash_message("test3 %d", LogLevel.ERROR): ConfigEntry("test3 %d", LogLevel.ERROR, "WM_DEBUG"),
    }


def test_run_generate_groups_file_overrides_inline(project: Path) -> None:
    groups_file = project / "groups.json"
    groups_file.write_text(json.dumps({"DEBUG_GROUP": {"enabled": False}}), encoding="utf-8")

    result = run_generate(_config(project, groups_file=str(groups_file)))

    assert result.ok
    assert result.entries == 1
    assert result.skipped_calls == 3


def test_run_generate_dry_run_writes_nothing(project: Path) -> None:
    result = run_generate(_config(project), dry_run=True)

    assert result.ok and result.dry_run
    assert result.entries == 3
    assert not (project / "out").exists()


def test_run_generate_refuses_to_overwrite(project: Path) -> None:
    config = _config(project)
    assert run_generate(config).ok

    second = run_generate(config)
    assert not second.ok
    assert "already exists" in second.error

    assert run_generate(config, overwrite=True).ok


def test_run_generate_collects_source_errors(project: Path) -> None:
    (project / "src" / "broken.py").write_text("def broken( :", encoding="utf-8")
    (project / "src" / "bad_call.py").write_text(
        'ProtoLog.w(ProtoLogGroup.MISSING, "x")\n', encoding="utf-8"
    )

    result = run_generate(_config(project))

    assert not result.ok
    assert sorted(e.rel_path for e in result.errors) == ["bad_call.py", "broken.py"]
    assert any("SyntaxError" in e.error for e in result.errors)
    assert any("unknown log group 'MISSING'" in e.error for e in result.errors)
    assert not (project / "out").exists()


def test_run_generate_malformed_groups(project: Path) -> None:
    config = _config(project)
    config["groups"] = {"TEST_GROUP": {"enabled": "yes"}}

    result = run_generate(config)

    assert not result.ok
    assert "TEST_GROUP" in result.error
