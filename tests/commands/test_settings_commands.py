from typer.testing import CliRunner

from iotconn.main import app
from iotconn.utils.config_store import ConfigStore

runner = CliRunner()


def test_set_log_level():
    result = runner.invoke(app, ["config", "set-log-level", "debug"])

    assert result.exit_code == 0
    assert "DEBUG" in result.output
    assert ConfigStore().get_setting("log_level") == "DEBUG"


def test_set_log_level_rejects_unknown_level():
    result = runner.invoke(app, ["config", "set-log-level", "chatty"])

    assert result.exit_code == 1
    assert ConfigStore().get_setting("log_level") is None


def test_set_log_level_write_failure(mocker):
    mocker.patch(
        "iotconn.commands.config.ConfigStore.set_setting",
        side_effect=PermissionError("read-only"),
    )

    result = runner.invoke(app, ["config", "set-log-level", "ERROR"])

    assert result.exit_code == 1
    assert "read-only" in result.output


def test_get_log_level_default():
    result = runner.invoke(app, ["config", "get-log-level"])

    assert result.exit_code == 0
    assert "INFO" in result.output


def test_get_log_level_saved():
    ConfigStore().set_setting("log_level", "WARNING")

    result = runner.invoke(app, ["config", "get-log-level"])

    assert "WARNING" in result.output


def test_set_regex_timeout():
    result = runner.invoke(app, ["config", "set-regex-timeout", "250"])

    assert result.exit_code == 0
    assert ConfigStore().get_setting("regex_timeout_ms") == 250


def test_set_regex_timeout_rejects_zero():
    result = runner.invoke(app, ["config", "set-regex-timeout", "0"])

    assert result.exit_code == 1
    assert ConfigStore().get_setting("regex_timeout_ms") is None


def test_set_regex_timeout_rejects_text():
    result = runner.invoke(app, ["config", "set-regex-timeout", "soon"])

    assert result.exit_code != 0


def test_show_settings():
    ConfigStore().set_setting("regex_timeout_ms", 900)

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    assert "900 ms" in result.output
    assert "INFO" in result.output
