"""Tests for the regdelta CLI (compare, keys, snapshot, config)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from regdelta.cli import EXIT_DIFFERENCES, app
from regdelta_core.snapshot import load_snapshot

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch):
    """Empty cwd and home, and leave root logging as it was found."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield tmp_path
    root.handlers[:] = handlers
    root.setLevel(level)


def _compare_json(*args: str) -> dict:
    result = runner.invoke(app, ["compare", *args, "--format", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


# ── regdelta compare ─────────────────────────────────────────────────


def test_compare_table(reg_files):
    left, right = reg_files
    result = runner.invoke(app, ["compare", str(left), str(right), "--base", "HKCU\\App"])
    assert result.exit_code == 0
    assert "Registry Comparison" in result.output
    assert "difference(s)" in result.output


def test_compare_json(reg_files):
    left, right = reg_files
    data = _compare_json(str(left), str(right), "--base", "HKCU\\App")
    assert data["left"]["base_path"] == "HKEY_CURRENT_USER\\App"
    assert data["summary"]["data_mismatches"] == 1
    assert data["summary"]["keys_only_left"] == 1
    assert [e["relative_path"] for e in data["entries"]] == ["", "Sub"]


def test_compare_defaults_to_first_key(reg_files):
    left, right = reg_files
    data = _compare_json(str(left), str(right))
    assert data["left"]["base_path"] == "HKEY_CURRENT_USER\\App"
    assert data["summary"]["total"] == 2


def test_compare_identical(reg_files):
    left, _ = reg_files
    result = runner.invoke(app, ["compare", str(left), str(left), "--exit-code"])
    assert result.exit_code == 0
    assert "No differences found." in result.output


def test_compare_exit_code_on_differences(reg_files):
    left, right = reg_files
    result = runner.invoke(app, ["compare", str(left), str(right), "--exit-code"])
    assert result.exit_code == EXIT_DIFFERENCES


def test_compare_no_recursive(reg_files):
    left, right = reg_files
    data = _compare_json(str(left), str(right), "--no-recursive")
    assert data["summary"]["keys_only_left"] == 0
    assert data["summary"]["data_mismatches"] == 1


def test_compare_separate_bases(tmp_path: Path, reg_files):
    left, _ = reg_files
    other = tmp_path / "other.reg"
    other.write_text('[HKEY_LOCAL_MACHINE\\Software\\App]\n"Ver"=dword:00000001\n')
    data = _compare_json(
        str(left), str(other), "--left-base", "HKCU\\App", "--right-base", "HKLM\\Software\\App", "--no-recursive"
    )
    assert data["identical"] is True


def test_compare_honours_config_ignores(tmp_path: Path, reg_files):
    left, right = reg_files
    (tmp_path / "regdelta.yaml").write_text("compare:\n  ignore_value_names: [Ver]\n")
    data = _compare_json(str(left), str(right))
    assert data["summary"]["total"] == 1
    assert data["entries"][0]["entry"] == "key"


def test_compare_missing_file(tmp_path: Path, reg_files):
    left, _ = reg_files
    result = runner.invoke(app, ["compare", str(left), str(tmp_path / "missing.reg")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_compare_no_match(reg_files):
    left, right = reg_files
    result = runner.invoke(app, ["compare", str(left), str(right), "--base", "HKCU\\Nope"])
    assert result.exit_code == 1
    assert "No matching keys" in result.output


def test_compare_invalid_base(reg_files):
    left, right = reg_files
    result = runner.invoke(app, ["compare", str(left), str(right), "--base", "REGISTRY"])
    assert result.exit_code == 1
    assert "Invalid registry path" in result.output


def test_compare_unknown_format(reg_files):
    left, right = reg_files
    result = runner.invoke(app, ["compare", str(left), str(right), "--format", "xml"])
    assert result.exit_code == 1


def test_missing_config_file(reg_files):
    left, right = reg_files
    result = runner.invoke(app, ["--config", "nope.yaml", "compare", str(left), str(right)])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


# ── regdelta keys ────────────────────────────────────────────────────


def test_keys_lists_sorted_paths(tmp_path: Path):
    path = tmp_path / "mixed.reg"
    path.write_text(
        "Windows Registry Editor Version 5.00\n"
        "[HKCU\\b]\n"
        '"x"=dword:1\n'
        "[HKCU\\A]\n"
        "[-HKCU\\Gone]\n"
        "[HKCU\\c]\n"
        '"bad"=dword:zz\n'
    )
    result = runner.invoke(app, ["keys", str(path)])
    assert result.exit_code == 0
    out = result.output
    assert out.index("HKCU\\A") < out.index("HKCU\\b") < out.index("HKCU\\c")
    assert "Deletions" in out
    assert "HKCU\\Gone" in out
    assert "1 line(s) skipped" in out


def test_keys_unreadable(tmp_path: Path):
    result = runner.invoke(app, ["keys", str(tmp_path / "missing.reg")])
    assert result.exit_code == 1


# ── regdelta snapshot ────────────────────────────────────────────────


def test_snapshot_then_compare(tmp_path: Path, reg_files):
    left, right = reg_files
    out = tmp_path / "before.json"
    result = runner.invoke(app, ["snapshot", str(left), "--base", "HKCU\\App", "-o", str(out)])
    assert result.exit_code == 0
    assert "Snapshot Saved" in result.output

    saved = load_snapshot(out)
    assert saved.base_path == "HKEY_CURRENT_USER\\App"
    assert len(saved) == 2

    data = _compare_json(str(out), str(right), "--base", "HKCU\\App")
    assert data["summary"]["total"] == 2


def test_snapshot_default_output_name(tmp_path: Path, reg_files):
    left, _ = reg_files
    result = runner.invoke(app, ["snapshot", str(left), "--base", "HKCU\\App"])
    assert result.exit_code == 0
    assert (tmp_path / "App.snapshot.json").is_file()


def test_snapshot_output_dir_missing(tmp_path: Path, reg_files):
    left, _ = reg_files
    out = tmp_path / "no" / "dir" / "x.json"
    result = runner.invoke(app, ["snapshot", str(left), "--base", "HKCU\\App", "-o", str(out)])
    assert result.exit_code == 1
    assert "Error" in result.output
    assert "Snapshot Saved" not in result.output
    assert not out.exists()


def test_compare_missing_snapshot_json(reg_files):
    left, _ = reg_files
    result = runner.invoke(app, ["compare", "gone.json", str(left)])
    assert result.exit_code == 1
    assert "could not be read" in result.output


def test_compare_malformed_snapshot_json(tmp_path: Path, reg_files):
    left, _ = reg_files
    bad = tmp_path / "bad.json"
    bad.write_text('{"version": 1, "base_path": "HKCU", "keys": [["x"]]}')
    result = runner.invoke(app, ["compare", str(bad), str(left)])
    assert result.exit_code == 1
    assert "Error" in result.output


# ── regdelta config ──────────────────────────────────────────────────


def test_config_init_and_show(tmp_path: Path):
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0
    assert (tmp_path / "regdelta.yaml").is_file()

    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "log_level" in result.output
    assert "max_file_size_mb" in result.output


def test_config_init_refuses_overwrite(tmp_path: Path):
    (tmp_path / "regdelta.yaml").write_text("log_level: info\n")
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (tmp_path / "regdelta.yaml").read_text() == "log_level: info\n"

    result = runner.invoke(app, ["config", "init", "--force"])
    assert result.exit_code == 0
    assert "parser:" in (tmp_path / "regdelta.yaml").read_text()
