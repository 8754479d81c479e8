"""Tests for the command line entry point."""

import contextlib
import logging
import time

import pytest

from otpkit import cli

RFC_KEY_BASE32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture(autouse=True)
def fixed_time(monkeypatch):
    monkeypatch.setattr(time, "time", lambda: 59.0)


class TestMain:
    """Tests for cli.main."""

    def test_usage_without_arguments(self, capsys):
        assert cli.main([]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Usage: otpkit <key> [period]")

    def test_default_period(self, capsys):
        assert cli.main([RFC_KEY_BASE32]) == 0
        assert capsys.readouterr().out == "287082\n"

    def test_explicit_period(self, capsys):
        assert cli.main([RFC_KEY_BASE32, "60"]) == 0
        assert capsys.readouterr().out == "755224\n"

    def test_digits_option(self, capsys):
        assert cli.main(["-d", "8", RFC_KEY_BASE32]) == 0
        assert capsys.readouterr().out == "94287082\n"

    @pytest.mark.parametrize(
        "argv",
        [
            [RFC_KEY_BASE32, "0"],
            [RFC_KEY_BASE32, "thirty"],
            ["not base32!"],
            [""],
        ],
    )
    def test_invalid_input_exits_2(self, argv, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(argv)
        assert excinfo.value.code == 2
        assert capsys.readouterr().out == ""

    def test_empty_key_message(self, capsys):
        with pytest.raises(SystemExit):
            cli.main([""])
        assert "Empty key" in capsys.readouterr().err


@contextlib.contextmanager
def bare_root_logger():
    """Root logger without handlers, so basicConfig really configures it."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


class TestConfigureLogging:
    """Tests for cli.configure_logging."""

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("OTPKIT_LOG_LEVEL", "debug")
        with bare_root_logger() as root:
            cli.configure_logging()
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self, monkeypatch):
        monkeypatch.setenv("OTPKIT_LOG_LEVEL", "verbose")
        with bare_root_logger() as root:
            cli.configure_logging()
            assert root.level == logging.WARNING

    def test_verbose_flag_wins(self, monkeypatch):
        monkeypatch.setenv("OTPKIT_LOG_LEVEL", "verbose")
        with bare_root_logger() as root:
            cli.configure_logging(verbose=True)
            assert root.level == logging.DEBUG

    def test_unknown_level_still_prints_code(self, monkeypatch, capsys):
        monkeypatch.setenv("OTPKIT_LOG_LEVEL", "verbose")
        with bare_root_logger():
            assert cli.main([RFC_KEY_BASE32]) == 0
        captured = capsys.readouterr()
        assert captured.out == "287082\n"
        assert "OTPKIT_LOG_LEVEL" in captured.err
