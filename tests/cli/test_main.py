# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the asyncapi-codegen CLI entry point."""

import shutil
import sys
from pathlib import Path

import pytest

from asyncapi_codegen.cli.main import main

# ###############
# Helpers
# ###############

DATA_DIR = Path(__file__).parent.parent / "data"

LEGACY_DOCUMENT = """\
asyncapi: "1.0.0"
info:
  version: "1"
baseTopic: legacy
host: localhost
topics:
  legacy.update:
    publish:
      payload:
        type: string
"""


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Run the CLI with *args* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["asyncapi-codegen", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _copy_document(tmp_path: Path) -> Path:
    return Path(shutil.copy(DATA_DIR / "smarthome.yaml", tmp_path / "smarthome.yaml"))


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "generate" in capsys.readouterr().out


# -------- generate tests --------


def test_generate_writes_package(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    """generate writes the package tree below the target and reports the file count."""
    target = tmp_path / "out"
    assert _run(monkeypatch, "generate", str(DATA_DIR / "smarthome.yaml"), "-o", str(target)) == 0

    assert (target / "smarthome" / "__init__.py").exists()
    assert (target / "smarthome" / "messages" / "sensor_reading.py").exists()
    assert (target / "smarthome" / "client" / "client.py").exists()
    assert (target / "smarthome" / "server" / "server.py").exists()
    assert not (target / "smarthome" / "json_codec").exists()
    out = capsys.readouterr().out
    assert "Generated " in out
    assert f"file(s) in '{target}'." in out


def test_generate_base_package_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "out"
    code = _run(monkeypatch, "generate", str(DATA_DIR / "smarthome.yaml"), "-o", str(target), "--base-package", "acme.home")
    assert code == 0
    assert (target / "acme" / "home" / "types" / "reading.py").exists()


def test_generate_json(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """--json adds the JSON codec package."""
    target = tmp_path / "out"
    assert _run(monkeypatch, "generate", str(DATA_DIR / "smarthome.yaml"), "-o", str(target), "--json") == 0
    assert (target / "smarthome" / "json_codec" / "topic_messages.py").exists()


def test_generate_reads_options_next_to_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without -o, the target path comes from the options file beside the document."""
    document = _copy_document(tmp_path)
    (tmp_path / ".asyncapi-codegen.yaml").write_text("target-path: generated\n", encoding="utf-8")

    assert _run(monkeypatch, "generate", str(document)) == 0
    assert (tmp_path / "generated" / "smarthome" / "__init__.py").exists()


def test_generate_command_line_overrides_options_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    document = _copy_document(tmp_path)
    (tmp_path / ".asyncapi-codegen.yaml").write_text("target-path: generated\n", encoding="utf-8")

    assert _run(monkeypatch, "generate", str(document), "-o", str(tmp_path / "cli")) == 0
    assert (tmp_path / "cli" / "smarthome" / "__init__.py").exists()
    assert not (tmp_path / "generated").exists()


def test_generate_fails_without_target(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    document = _copy_document(tmp_path)
    assert _run(monkeypatch, "generate", str(document)) == 1
    assert "target path is not set" in capsys.readouterr().err


def test_generate_fails_on_missing_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    document = _copy_document(tmp_path)
    code = _run(monkeypatch, "generate", str(document), "--config", str(tmp_path / "missing.yaml"))
    assert code == 1
    assert "Options file not found" in capsys.readouterr().err


def test_generate_fails_on_missing_document(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "generate", str(tmp_path / "missing.yaml"), "-o", str(tmp_path)) == 1
    assert "Error: Document not found" in capsys.readouterr().err


def test_generate_fails_on_invalid_topic(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    document = tmp_path / "legacy.yaml"
    document.write_text(LEGACY_DOCUMENT, encoding="utf-8")

    assert _run(monkeypatch, "generate", str(document), "-o", str(tmp_path / "out")) == 1
    assert "legacy.update" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_generate_invalid_topic_by_fallback(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    document = tmp_path / "legacy.yaml"
    document.write_text(LEGACY_DOCUMENT, encoding="utf-8")

    code = _run(monkeypatch, "generate", str(document), "-o", str(tmp_path / "out"), "--no-validate-topic-syntax")
    assert code == 0
    assert "1 topic(s) do not follow the topic grammar" in capsys.readouterr().out
    assert (tmp_path / "out" / "legacy" / "client" / "client.py").exists()


# -------- inspect tests --------


def test_inspect_lists_versions_and_latest(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """inspect groups topics by version and service and lists the latest versions."""
    assert _run(monkeypatch, "inspect", str(DATA_DIR / "smarthome.yaml")) == 0

    assert capsys.readouterr().out.splitlines() == [
        "Smart Home 1.2.0",
        "  version 1",
        "    rooms",
        "      rooms.1.command.light.switch [publish]",
        "  version 1.0",
        "    devices",
        "      devices.1.0.event.sensor.reading.update [publish]",
        "      devices.1.0.event.sensor.reading.reset.done [publish, subscribe]",
        "  version 2.0",
        "    devices",
        "      devices.2.0.event.sensor.reading.update [subscribe]",
        "  latest",
        "    Rooms: 1",
        "    Devices: 2.0",
    ]


def test_inspect_fallback_warns(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    document = tmp_path / "legacy.yaml"
    document.write_text(LEGACY_DOCUMENT, encoding="utf-8")

    assert _run(monkeypatch, "inspect", str(document), "--no-validate-topic-syntax") == 0
    captured = capsys.readouterr()
    assert "    Topics\n" in captured.out
    assert "Warning: " in captured.err


def test_inspect_fails_on_invalid_topic(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    document = tmp_path / "legacy.yaml"
    document.write_text(LEGACY_DOCUMENT, encoding="utf-8")
    assert _run(monkeypatch, "inspect", str(document)) == 1
