"""Tests for CLI argument parsing and the check/rules commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from aigc_check.cli import _build_parser, main
from tests.conftest import GENERATED_TEXT, HUMAN_TEXT


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("MULTIMODAL_ENABLED", "false")
    monkeypatch.setenv("SEMANTIC_ENABLED", "false")


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestArgParser:
    def test_version_flag(self) -> None:
        args = _build_parser().parse_args(["--version"])
        assert args.version is True

    def test_check_defaults(self) -> None:
        args = _build_parser().parse_args(["check"])
        assert args.command == "check"
        assert args.file == "-"
        assert args.format == "text"
        assert args.config is None
        assert args.multimodal is False
        assert args.rules is None
        assert args.verbose is False

    def test_check_with_options(self) -> None:
        args = _build_parser().parse_args([
            "check",
            "essay.txt",
            "--format",
            "json",
            "--multimodal",
            "--rules",
            "emoji,markdown",
        ])
        assert args.file == "essay.txt"
        assert args.format == "json"
        assert args.multimodal is True
        assert args.rules == "emoji,markdown"

    def test_no_command(self) -> None:
        assert _build_parser().parse_args([]).command is None


class TestMain:
    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == "aigc-check 0.1.0"

    def test_check_text_report(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "human.txt", HUMAN_TEXT)
        assert main(["check", str(path)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("AIGC-Check report")
        assert "Low risk" in out

    def test_check_json_report(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "generated.txt", GENERATED_TEXT)
        assert main(["check", str(path), "--format", "json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["detected_rules"] > 0
        assert len(payload["rule_results"]) == 10

    def test_check_rule_subset(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "generated.txt", GENERATED_TEXT)
        code = main([
            "check", str(path), "-f", "json", "-r", "knowledge_cutoff"
        ])
        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert [r["rule_type"] for r in payload["rule_results"]] == [
            "knowledge_cutoff"
        ]

    def test_check_writes_audit_log(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "human.txt", HUMAN_TEXT)
        assert main(["check", str(path)]) == 0
        assert (tmp_path / "logs" / "detection.log").exists()

    def test_audit_log_honours_log_level(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        path = _write(tmp_path, "human.txt", HUMAN_TEXT)
        assert main(["check", str(path)]) == 0
        log = tmp_path / "logs" / "detection.log"
        assert log.read_text(encoding="utf-8") == ""

    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["check", str(tmp_path / "absent.txt")]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_unknown_rule(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "human.txt", HUMAN_TEXT)
        assert main(["check", str(path), "--rules", "bogus"]) == 1
        assert "unknown rule 'bogus'" in capsys.readouterr().err

    def test_missing_config_override(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "human.txt", HUMAN_TEXT)
        code = main([
            "check", str(path), "--config", str(tmp_path / "nope.yaml")
        ])
        assert code == 1
        assert "config not found" in capsys.readouterr().err

    def test_invalid_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "human.txt", HUMAN_TEXT)
        config = _write(tmp_path, "bad.yaml", "- just\n- a list\n")
        assert main(["check", str(path), "--config", str(config)]) == 1
        assert "invalid config" in capsys.readouterr().err

    def test_rules_listing(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = _write(
            tmp_path, "rules.yaml", "rules:\n  emoji:\n    enabled: false\n"
        )
        assert main(["rules", "--config", str(config)]) == 0
        out = capsys.readouterr().out
        assert "9 of 10 rules enabled" in out
        assert "off emoji" in out

    def test_no_command_prints_help(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([]) == 0
        assert "usage: aigc-check" in capsys.readouterr().out
