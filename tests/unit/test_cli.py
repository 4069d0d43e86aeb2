"""Unit tests for kubedepscan CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from kubedepscan.cli import EXIT_ISSUES_FOUND, EXIT_OK, EXIT_USAGE_ERROR, create_parser, main
from kubedepscan.version import __version__


DEPRECATED_CRONJOB = "apiVersion: batch/v1beta1\nkind: CronJob\nmetadata:\n  name: nightly\n"


class TestCLIParser:
    """Tests for CLI argument parsing."""

    def test_parser_creation(self) -> None:
        parser = create_parser()
        assert parser.prog == "kubedepscan"

    def test_defaults(self) -> None:
        """No arguments scans the current directory as text."""
        args = create_parser().parse_args([])

        assert args.root == "."
        assert args.format == "text"
        assert args.no_pluto is False
        assert args.no_color is False
        assert args.verbose == 0

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_help_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--help"])

        assert exc_info.value.code == 0
        assert "deprecated API" in capsys.readouterr().out

    def test_all_options(self) -> None:
        args = create_parser().parse_args(["deploy", "--format", "json", "--no-pluto", "--no-color", "-vv"])

        assert args.root == "deploy"
        assert args.format == "json"
        assert args.no_pluto is True
        assert args.no_color is True
        assert args.verbose == 2

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--format", "xml"])

        assert exc_info.value.code == EXIT_USAGE_ERROR


class TestCLIMain:
    """Tests for CLI main entry point."""

    def test_clean_directory(self, make_project, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_project({"deploy/app.yaml": "apiVersion: apps/v1\nkind: Deployment\n"})

        result = main([str(root), "--no-color"])

        assert result == EXIT_OK
        out = capsys.readouterr().out
        assert "Kubernetes Deprecated API Scanner" in out
        assert "No deprecated APIs found!" in out

    def test_findings_exit_one(self, make_project, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_project({"cron.yaml": DEPRECATED_CRONJOB})

        result = main([str(root), "--no-color"])

        assert result == EXIT_ISSUES_FOUND
        out = capsys.readouterr().out
        assert "ERROR cron.yaml:1" in out
        assert "Found 1 potential issue(s)" in out

    def test_default_root_is_cwd(
        self,
        make_project,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        root = make_project({"cron.yaml": DEPRECATED_CRONJOB})
        monkeypatch.chdir(root)

        result = main([])

        assert result == EXIT_ISSUES_FOUND
        assert "cron.yaml:1" in capsys.readouterr().out

    def test_json_format(self, make_project, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_project({"cron.yaml": DEPRECATED_CRONJOB})

        result = main([str(root), "--format", "json"])

        assert result == EXIT_ISSUES_FOUND
        payload = json.loads(capsys.readouterr().out)
        assert payload["issues_found"] == 1
        assert payload["findings"][0]["path"] == "cron.yaml"
        assert payload["exit_code"] == 1

    def test_invalid_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        result = main([str(tmp_path / "missing")])

        assert result == EXIT_USAGE_ERROR
        captured = capsys.readouterr()
        assert "Scan root must be an existing directory" in captured.err
        assert captured.out == ""

    def test_no_pluto_flag_disables_detector(self, make_project, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_project({})

        with patch("kubedepscan.cli.DeprecatedApiScanner") as scanner_cls:
            scanner_cls.return_value.scan.side_effect = RuntimeError("stop")
            with pytest.raises(RuntimeError):
                main([str(root), "--no-pluto"])

        scanner_cls.assert_called_once_with(use_advanced_scanner=False)

    def test_pluto_follows_settings_without_flag(self, make_project) -> None:
        root = make_project({})

        with patch("kubedepscan.cli.DeprecatedApiScanner") as scanner_cls:
            scanner_cls.return_value.scan.side_effect = RuntimeError("stop")
            with pytest.raises(RuntimeError):
                main([str(root)])

        scanner_cls.assert_called_once_with(use_advanced_scanner=None)

    def test_verbose_configures_debug_logging(self, make_project) -> None:
        root = make_project({})

        with patch("kubedepscan.cli.configure_logging") as configure:
            main([str(root), "-vv"])

        configure.assert_called_once_with(level="DEBUG", format_type="console")

    def test_default_log_level_from_settings(self, make_project, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEDEPSCAN_OBSERVABILITY_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("KUBEDEPSCAN_OBSERVABILITY_LOG_FORMAT", "json")
        root = make_project({})

        with patch("kubedepscan.cli.configure_logging") as configure:
            main([str(root)])

        configure.assert_called_once_with(level="ERROR", format_type="json")
