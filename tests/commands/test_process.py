"""Tests for the external tool runner."""
from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from osiris_build.commands.domain.models import ProcessOptions, StdioMode, ToolCommand
from osiris_build.commands.utils import process
from osiris_build.commands.utils.errors import ToolInvocationError


class _CompletedProcess:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


COMMAND = ToolCommand(label="gn check", executable="gn", args=("check", "out/Component", "//osiris/*"))


def test_run_tool_uses_resolved_executable_and_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict = {}

    monkeypatch.setattr(process.shutil, "which", lambda name, path=None: f"/opt/depot_tools/{name}")

    def fake_run(cmd: list[str], **kwargs: object) -> _CompletedProcess:
        captured["cmd"] = cmd
        captured.update(kwargs)
        return _CompletedProcess()

    monkeypatch.setattr(process.subprocess, "run", fake_run)

    result = process.run_tool(COMMAND, ProcessOptions(cwd=tmp_path))

    assert captured["cmd"] == ["/opt/depot_tools/gn", "check", "out/Component", "//osiris/*"]
    assert captured["cwd"] == str(tmp_path)
    assert captured["env"] is None
    assert captured["capture_output"] is False
    assert result.returncode == 0
    assert result.stdout is None


def test_run_tool_layers_env_over_parent_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict = {}
    monkeypatch.setenv("OSIRIS_PARENT_VAR", "parent")
    monkeypatch.setattr(process.shutil, "which", lambda name, path=None: name)
    monkeypatch.setattr(
        process.subprocess,
        "run",
        lambda cmd, **kwargs: captured.update(kwargs) or _CompletedProcess(),
    )

    process.run_tool(COMMAND, ProcessOptions(env={"GYP_MSVS_VERSION": "2022"}))

    assert captured["env"]["GYP_MSVS_VERSION"] == "2022"
    assert captured["env"]["OSIRIS_PARENT_VAR"] == "parent"


def test_run_tool_searches_overridden_path(monkeypatch: pytest.MonkeyPatch) -> None:
    searched: list = []

    def fake_which(name: str, path: str | None = None) -> str:
        searched.append(path)
        return name

    monkeypatch.setattr(process.shutil, "which", fake_which)
    monkeypatch.setattr(process.subprocess, "run", lambda cmd, **_: _CompletedProcess())

    process.run_tool(COMMAND, ProcessOptions(env={"PATH": "/custom/bin"}))

    assert searched == ["/custom/bin"]


def test_run_tool_resolves_relative_executable_against_cwd(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    root = tmp_path / "src"
    gn = root / "buildtools" / "gn"
    gn.parent.mkdir(parents=True)
    gn.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    gn.chmod(0o755)
    monkeypatch.chdir(tmp_path)
    captured: dict = {}

    def fake_run(cmd: list[str], **kwargs: object) -> _CompletedProcess:
        captured["cmd"] = cmd
        captured.update(kwargs)
        return _CompletedProcess()

    monkeypatch.setattr(process.subprocess, "run", fake_run)
    command = ToolCommand(label="gn check", executable="buildtools/gn", args=("check", "out/Component"))

    process.run_tool(command, ProcessOptions(cwd=root))

    assert captured["cmd"] == [str(gn), "check", "out/Component"]
    assert captured["cwd"] == str(root)


def test_run_tool_missing_executable(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(process.shutil, "which", lambda name, path=None: None)

    def fail_run(*_: object, **__: object) -> None:  # pragma: no cover - must not be reached
        raise AssertionError("subprocess.run must not be called")

    monkeypatch.setattr(process.subprocess, "run", fail_run)

    with caplog.at_level("ERROR"):
        with pytest.raises(ToolInvocationError) as excinfo:
            process.run_tool(COMMAND, ProcessOptions())

    assert excinfo.value.returncode is None
    assert excinfo.value.command == ["gn", "check", "out/Component", "//osiris/*"]
    assert "gn not found in PATH" in caplog.text


def test_run_tool_nonzero_exit_logs_captured_output(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(process.shutil, "which", lambda name, path=None: name)

    def fake_run(cmd: list[str], **_: object) -> None:
        raise subprocess.CalledProcessError(
            1, cmd, output="", stderr="ERROR at //osiris/browser/BUILD.gn:12:5: Include not allowed."
        )

    monkeypatch.setattr(process.subprocess, "run", fake_run)

    with caplog.at_level("ERROR"):
        with pytest.raises(ToolInvocationError, match="rc=1") as excinfo:
            process.run_tool(COMMAND, ProcessOptions(stdio=StdioMode.CAPTURE))

    assert excinfo.value.returncode == 1
    assert "Include not allowed" in caplog.text


def test_run_tool_spawn_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(process.shutil, "which", lambda name, path=None: name)

    def fake_run(cmd: list[str], **_: object) -> None:
        raise FileNotFoundError(2, "No such file or directory", str(tmp_path / "missing"))

    monkeypatch.setattr(process.subprocess, "run", fake_run)

    with pytest.raises(ToolInvocationError, match="could not be started"):
        process.run_tool(COMMAND, ProcessOptions(cwd=tmp_path / "missing"))


def test_run_tool_capture_mode_returns_output(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(process.shutil, "which", lambda name, path=None: name)
    monkeypatch.setattr(
        process.subprocess,
        "run",
        lambda cmd, **_: _CompletedProcess(stdout="Header dependency check OK\n"),
    )

    with caplog.at_level("INFO"):
        result = process.run_tool(COMMAND, ProcessOptions(stdio=StdioMode.CAPTURE))

    assert result.stdout == "Header dependency check OK\n"
    assert result.stderr == ""
    assert "gn check: gn check out/Component //osiris/*" in caplog.text
    assert "Header dependency check OK" in caplog.text
