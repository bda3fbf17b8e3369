"""
Tests for the ``floodmonitor`` command-line interface.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml
from click.testing import CliRunner

from floodmonitor.backend.cli import main as cli_main
from floodmonitor.backend.cli.main import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestStationsCommand:
    def test_lists_stations(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["stations"])
        assert result.exit_code == 0
        assert "River Gauging Stations" in result.output

    def test_unknown_district(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["stations", "--district", "Atlantis"])
        assert result.exit_code == 0
        assert "No stations found for district 'Atlantis'" in result.output


class TestInitDbCommand:
    def test_creates_tables(self, runner: CliRunner, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        db_path = tmp_path / "nested" / "flood.db"
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"database": {"url": f"sqlite:///{db_path}"}}))

        result = runner.invoke(main, ["init-db", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Tables ready" in result.output
        assert db_path.exists()

    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["init-db", "--config", str(tmp_path / "absent.yaml")])
        assert result.exit_code != 0


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


class TestServeCommand:
    @pytest.fixture
    def config_file(self, tmp_path: Path, monkeypatch) -> Path:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"database": {"url": f"sqlite:///{tmp_path / 'serve.db'}"}}))
        return path

    def test_runs_app_built_from_given_config(self, runner: CliRunner, config_file: Path, monkeypatch) -> None:
        run = MagicMock()
        monkeypatch.setattr(cli_main.uvicorn, "run", run)

        result = runner.invoke(main, ["serve", "--config", str(config_file), "--port", "8123"])

        assert result.exit_code == 0, result.output
        app = run.call_args.args[0]
        assert app.state.config["database"]["url"].endswith("serve.db")
        assert run.call_args.kwargs["port"] == 8123

    def test_reload_uses_factory(self, runner: CliRunner, config_file: Path, monkeypatch) -> None:
        run = MagicMock()
        monkeypatch.setattr(cli_main.uvicorn, "run", run)
        monkeypatch.setenv("FLOODMONITOR_CONFIG", "unset")

        result = runner.invoke(main, ["serve", "--config", str(config_file), "--reload"])

        assert result.exit_code == 0, result.output
        assert run.call_args.args[0] == "floodmonitor.backend.api.app:build_app"
        assert run.call_args.kwargs["factory"] is True
        assert os.environ["FLOODMONITOR_CONFIG"] == str(config_file)
