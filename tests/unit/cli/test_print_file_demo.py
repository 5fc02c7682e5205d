from __future__ import annotations

import errno
import io
from pathlib import Path

import pytest
from typer.testing import CliRunner

import faultline.cli.commands.print_file as demo
from faultline import Errno, get_registry, raise_error
from faultline.cli.main import app


def test_prints_file_contents(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "hello.txt"
    path.write_text("hello faultline\n")
    out = io.StringIO()

    assert demo.run_print_file([str(path)], out) == 0
    assert out.getvalue() == "hello faultline\n"
    assert capsys.readouterr().err == ""


def test_bad_command_line(capsys: pytest.CaptureFixture[str]) -> None:
    assert demo.run_print_file([], io.StringIO()) == 1
    assert "Bad command line argument" in capsys.readouterr().err


def test_missing_file_reports_not_found(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "absent.txt"

    assert demo.run_print_file([str(path)], io.StringIO()) == 2
    assert f"File not found: {path}" in capsys.readouterr().err
    assert get_registry().current_episode() is None


def test_open_failure_reports_errno(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert demo.run_print_file([str(tmp_path)], io.StringIO()) == 2
    assert f"Failed to open {tmp_path}, errno=" in capsys.readouterr().err


def test_read_failure_reports_file_and_errno(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "data.bin"
    path.write_bytes(b"abc")

    def failing_read(f, size):
        raise_error(demo.FreadError("device error"), Errno(errno.EIO))

    monkeypatch.setattr(demo, "file_read", failing_read)

    assert demo.run_print_file([str(path)], io.StringIO()) == 3
    assert f"Failed to access {path}, errno={errno.EIO}" in capsys.readouterr().err


def test_short_read_without_payloads_still_reports_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "data.bin"
    path.write_bytes(b"abc")

    def short_read(f, size):
        raise demo.FreadError("short read")

    monkeypatch.setattr(demo, "file_read", short_read)

    assert demo.run_print_file([str(path)], io.StringIO()) == 3
    assert "I/O error" in capsys.readouterr().err


def test_unknown_failure_dumps_diagnostics(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "data.bin"
    path.write_bytes(b"abc")

    def exploding_read(f, size):
        raise KeyError("surprise")

    monkeypatch.setattr(demo, "file_read", exploding_read)

    assert demo.run_print_file([str(path)], io.StringIO()) == 6
    err = capsys.readouterr().err
    assert "Unknown error, cryptic information follows." in err
    assert "builtins.KeyError" in err
    assert f"FileName: FileName(value='{path}')" in err


def test_cli_exit_codes(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "hello.txt"
    path.write_text("from the cli\n")

    ok = runner.invoke(app, ["demo", "print-file", str(path)])
    assert ok.exit_code == 0, ok.output
    assert "from the cli" in ok.output

    missing = runner.invoke(app, ["demo", "print-file", str(tmp_path / "absent.txt")])
    assert missing.exit_code == 2
    assert "File not found" in missing.output

    bad = runner.invoke(app, ["demo", "print-file"])
    assert bad.exit_code == 1
    assert "Bad command line argument" in bad.output


def test_cli_version_and_config(tmp_path: Path) -> None:
    runner = CliRunner()

    version = runner.invoke(app, ["version"])
    assert version.exit_code == 0
    assert "faultline 0.3.0" in version.output

    config_path = tmp_path / "faultline.yaml"
    config_path.write_text("faultline:\n  debug_checks: true\n")
    shown = runner.invoke(app, ["--config", str(config_path), "config"])
    assert shown.exit_code == 0, shown.output
    assert "debug_checks" in shown.output
    assert "True" in shown.output


def test_cli_rejects_missing_config(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["--config", str(tmp_path / "absent.yaml"), "version"])

    assert result.exit_code == 1
