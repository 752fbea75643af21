import pytest
import typer

from iotconn.commands.logs import show_logs, log_info


def test_show_logs_no_log_file(mocker):
    log_path = mocker.Mock()
    log_path.exists.return_value = False

    mocker.patch("iotconn.commands.logs.get_log_file_path", return_value=log_path)
    warning = mocker.patch("iotconn.commands.logs.warning")

    show_logs(lines=10, level=None)

    warning.assert_called_once()


def test_show_logs_with_lines(mocker, tmp_path):
    log_file = tmp_path / "iotconn.log"
    log_file.write_text("INFO one\nERROR two\nDEBUG three\n", encoding="utf-8")

    mocker.patch("iotconn.commands.logs.get_log_file_path", return_value=log_file)
    console = mocker.patch("iotconn.commands.logs.console")

    show_logs(lines=2, level=None)

    console.print.assert_called_once()
    syntax = console.print.call_args[0][0]
    assert syntax.code == "ERROR two\nDEBUG three\n"


def test_show_logs_with_level_filter(mocker, tmp_path):
    log_file = tmp_path / "iotconn.log"
    log_file.write_text("INFO one\nERROR two\nERROR three\n", encoding="utf-8")

    mocker.patch("iotconn.commands.logs.get_log_file_path", return_value=log_file)
    console = mocker.patch("iotconn.commands.logs.console")

    show_logs(lines=10, level="error")

    syntax = console.print.call_args[0][0]
    assert syntax.code == "ERROR two\nERROR three\n"


def test_show_logs_no_matching_lines(mocker, tmp_path):
    log_file = tmp_path / "iotconn.log"
    log_file.write_text("INFO one\nDEBUG two\n", encoding="utf-8")

    mocker.patch("iotconn.commands.logs.get_log_file_path", return_value=log_file)
    info = mocker.patch("iotconn.commands.logs.info")

    show_logs(lines=10, level="ERROR")

    info.assert_called_once()


def test_show_logs_read_failure(mocker):
    mocker.patch(
        "iotconn.commands.logs.get_log_file_path",
        side_effect=OSError("boom"),
    )
    error = mocker.patch("iotconn.commands.logs.error")

    with pytest.raises(typer.Exit):
        show_logs(lines=10, level=None)

    error.assert_called_once()


def test_log_info_existing_file(mocker, tmp_path):
    log_file = tmp_path / "iotconn.log"
    log_file.write_text("INFO one\n", encoding="utf-8")
    (tmp_path / "iotconn.log.2024-01-01").write_text("old", encoding="utf-8")

    mocker.patch("iotconn.commands.logs.get_log_file_path", return_value=log_file)
    mocker.patch("iotconn.commands.logs.get_log_directory", return_value=tmp_path)
    console = mocker.patch("iotconn.commands.logs.console")

    log_info()

    table = console.print.call_args[0][0]
    assert table.row_count == 8
    assert list(table.columns[1].cells)[-1] == "1"


def test_log_info_missing_file(mocker, tmp_path):
    mocker.patch(
        "iotconn.commands.logs.get_log_file_path", return_value=tmp_path / "iotconn.log"
    )
    mocker.patch("iotconn.commands.logs.get_log_directory", return_value=tmp_path)
    console = mocker.patch("iotconn.commands.logs.console")

    log_info()

    table = console.print.call_args[0][0]
    assert "File not found" in list(table.columns[1].cells)
