"""Test the command line entry point."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from linemark import __main__ as cli
from linemark.terminal import TerminalError


def test_version_flag(capsys):
    with patch("linemark.__main__.get_version_string", return_value="linemark 1.0 (abc1234 now)"):
        assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "linemark 1.0 (abc1234 now)"


def test_opens_file_and_runs():
    with patch("linemark.editor.Editor") as mock_editor, \
         patch("linemark.settings.load_settings"):
        assert cli.main(["notes.txt"]) == 0
    instance = mock_editor.return_value
    instance.load_file.assert_called_once_with("notes.txt")
    instance.run.assert_called_once_with()


def test_no_argument_starts_unnamed():
    with patch("linemark.editor.Editor") as mock_editor, \
         patch("linemark.settings.load_settings"):
        assert cli.main([]) == 0
    mock_editor.return_value.load_file.assert_not_called()


def test_unreadable_file_exits_with_error(capsys):
    with patch("linemark.editor.Editor") as mock_editor, \
         patch("linemark.settings.load_settings"):
        mock_editor.return_value.load_file.side_effect = IsADirectoryError(21, "Is a directory")
        assert cli.main(["somedir"]) == 1
    assert "cannot open somedir: Is a directory" in capsys.readouterr().err
    mock_editor.return_value.run.assert_not_called()


def test_terminal_error_exits_with_error(capsys):
    with patch("linemark.editor.Editor") as mock_editor, \
         patch("linemark.settings.load_settings"):
        mock_editor.return_value.run.side_effect = TerminalError("tcgetattr: not a tty")
        assert cli.main([]) == 1
    assert "linemark: tcgetattr: not a tty" in capsys.readouterr().err


def test_keytest_mode_prints_events_until_escape():
    terminal = MagicMock()
    data = iter([ord("a"), 0x1b, None])
    terminal.read_byte.side_effect = lambda timeout=None: next(data)
    with patch("linemark.terminal.TerminalInterface", return_value=terminal):
        assert cli.main(["--keytest"]) == 0
    written = b"".join(call.args[0] for call in terminal.write.call_args_list)
    assert b"value='a'" in written
    assert b"value='escape'" in written
    terminal.raw_mode.assert_called_once_with()


def test_log_file_from_environment(tmp_path, monkeypatch):
    log_path = tmp_path / "linemark.log"
    monkeypatch.setenv(cli.LOG_ENV_VAR, str(log_path))
    with patch("linemark.__main__.logging.basicConfig") as mock_config:
        cli.configure_logging()
    assert mock_config.call_args.kwargs["filename"] == str(log_path)
    assert mock_config.call_args.kwargs["level"] == logging.DEBUG


def test_no_logging_without_environment(monkeypatch):
    monkeypatch.delenv(cli.LOG_ENV_VAR, raising=False)
    with patch("linemark.__main__.logging.basicConfig") as mock_config:
        cli.configure_logging()
    mock_config.assert_not_called()
