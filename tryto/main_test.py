import pytest
from typer.testing import CliRunner

from .__main__ import app
from .__main__ import resolve

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TRYTO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TRYTO_JSON_LOGS", raising=False)


def test_resolve_attribute():
    import json

    assert resolve("json:loads").get() is json.loads


def test_resolve_nested_attribute():
    from pathlib import Path

    assert resolve("pathlib:Path.cwd").get() == Path.cwd


def test_resolve_requires_attribute():
    result = resolve("json")
    assert isinstance(result.error, ValueError)


def test_resolve_missing_module():
    result = resolve("tryto_missing_module:run")
    assert isinstance(result.error, ModuleNotFoundError)


def test_run_success():
    result = runner.invoke(app, ["run", "json:loads", "[1, 2]"])
    assert result.exit_code == 0
    assert "Success: [1, 2]" in result.output


def test_run_failure():
    result = runner.invoke(app, ["run", "json:loads", "{"])
    assert result.exit_code == 1
    assert "Failure: JSONDecodeError" in result.output


def test_run_missing_target():
    result = runner.invoke(app, ["run", "tryto_missing_module:run"])
    assert result.exit_code == 1
    assert "Failure: ModuleNotFoundError" in result.output


def test_config_defaults():
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "log_level = INFO" in result.output
    assert "json_logs = False" in result.output


def test_config_environment(monkeypatch):
    monkeypatch.setenv("TRYTO_LOG_LEVEL", "debug")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "log_level = DEBUG" in result.output


@pytest.mark.parametrize("command", [["config"], ["run", "json:loads", "1"]])
def test_invalid_configuration(monkeypatch, command):
    monkeypatch.setenv("TRYTO_LOG_LEVEL", "loud")
    result = runner.invoke(app, command)
    assert result.exit_code == 2
    assert "Error: Invalid log_level 'loud'" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
