"""Tests for qrdeck.config."""

import logging
from pathlib import Path

from qrdeck.config import DEFAULT_QR_WIDTH, get_log_level, get_qr_width, get_storage_path


def test_storage_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("QRDECK_STORAGE", str(tmp_path / "s.json"))
    assert get_storage_path() == tmp_path / "s.json"


def test_storage_path_uses_xdg_data_home(monkeypatch, tmp_path):
    monkeypatch.delenv("QRDECK_STORAGE", raising=False)
    monkeypatch.setattr("qrdeck.config.sys.platform", "linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert get_storage_path() == Path(tmp_path) / "qrdeck" / "storage.json"


def test_log_level(monkeypatch):
    monkeypatch.setenv("QRDECK_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG
    monkeypatch.setenv("QRDECK_LOG_LEVEL", "bogus")
    assert get_log_level() == logging.WARNING
    monkeypatch.delenv("QRDECK_LOG_LEVEL")
    assert get_log_level() == logging.WARNING


def test_qr_width(monkeypatch):
    monkeypatch.delenv("QRDECK_QR_WIDTH", raising=False)
    assert get_qr_width() == DEFAULT_QR_WIDTH
    monkeypatch.setenv("QRDECK_QR_WIDTH", "512")
    assert get_qr_width() == 512
    for bad in ("abc", "-3", "0"):
        monkeypatch.setenv("QRDECK_QR_WIDTH", bad)
        assert get_qr_width() == DEFAULT_QR_WIDTH
