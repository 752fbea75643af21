import logging

from iotconn.logging import (
    setup_logging,
    get_logger,
    log_validation_event,
    log_resolution_event,
)
from iotconn.logging.config import LogConfig, LogLevel


def _fake_file_handler(*args, **kwargs):
    handler = logging.NullHandler()
    handler.setLevel(logging.DEBUG)
    return handler


def _fake_stream_handler(*args, **kwargs):
    handler = logging.NullHandler()
    handler.setLevel(logging.WARNING)
    return handler


def _patch_handlers(mocker, tmp_path):
    mocker.patch(
        "iotconn.logging.config.get_log_file_path",
        return_value=tmp_path / "iotconn.log",
    )
    mocker.patch(
        "logging.handlers.TimedRotatingFileHandler", side_effect=_fake_file_handler
    )
    mocker.patch("logging.StreamHandler", side_effect=_fake_stream_handler)


def test_setup_logging_basic(mocker, tmp_path):
    _patch_handlers(mocker, tmp_path)

    setup_logging(force_reconfigure=True)

    root_logger = logging.getLogger("iotconn")
    assert len(root_logger.handlers) == 2
    assert root_logger.propagate is False


def test_setup_logging_uses_saved_level(mocker, tmp_path):
    _patch_handlers(mocker, tmp_path)
    mocker.patch(
        "iotconn.utils.config_store.ConfigStore.get_setting", return_value="DEBUG"
    )

    setup_logging(force_reconfigure=True)

    assert logging.getLogger("iotconn").level == logging.DEBUG


def test_setup_logging_ignores_unknown_saved_level(mocker, tmp_path):
    _patch_handlers(mocker, tmp_path)
    mocker.patch(
        "iotconn.utils.config_store.ConfigStore.get_setting", return_value="CHATTY"
    )

    setup_logging(force_reconfigure=True)

    assert logging.getLogger("iotconn").level == logging.INFO


def test_setup_logging_explicit_config(mocker, tmp_path):
    _patch_handlers(mocker, tmp_path)

    setup_logging(LogConfig(default_level=LogLevel.ERROR), force_reconfigure=True)

    assert logging.getLogger("iotconn").level == logging.ERROR


def test_setup_logging_runs_once(mocker, tmp_path):
    _patch_handlers(mocker, tmp_path)
    setup_logging(force_reconfigure=True)
    cleanup = mocker.patch("iotconn.logging.logger.cleanup_old_logs")

    setup_logging()

    cleanup.assert_not_called()


def test_get_logger_returns_same_instance():
    logger1 = get_logger("iotconn.test")
    logger2 = get_logger("iotconn.test")

    assert logger1 is logger2


def test_log_validation_event_success(mocker):
    real_logger = logging.getLogger("iotconn.validation")
    spy = mocker.spy(real_logger, "debug")

    log_validation_event("service connection string", True)

    spy.assert_called_once()
    _, kwargs = spy.call_args
    assert kwargs["extra"]["validation_success"] is True
    assert "validation_details" not in kwargs["extra"]


def test_log_validation_event_failure(mocker):
    real_logger = logging.getLogger("iotconn.validation")
    spy = mocker.spy(real_logger, "warning")

    log_validation_event("device parameters", False, {"error": "MissingRequiredFieldError"})

    spy.assert_called_once()
    _, kwargs = spy.call_args
    assert kwargs["extra"]["validation_kind"] == "device parameters"
    assert kwargs["extra"]["validation_details"] == {"error": "MissingRequiredFieldError"}


def test_log_resolution_event(mocker):
    real_logger = logging.getLogger("iotconn.auth")
    spy = mocker.spy(real_logger, "debug")

    log_resolution_event("ModuleToken", {"device_id": "dev1"})

    spy.assert_called_once()
    _, kwargs = spy.call_args
    assert kwargs["extra"]["resolved_method"] == "ModuleToken"
    assert kwargs["extra"]["resolution_details"] == {"device_id": "dev1"}
