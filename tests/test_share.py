"""Tests for qrdeck.share."""

import pyperclip
import pytest
from PIL import Image

from qrdeck import share as share_mod
from qrdeck.errors import ShareError
from qrdeck.models import UrlRecord
from qrdeck.qr import QrOptions
from qrdeck.share import copy_to_clipboard, download, download_filename, open_in_browser, share


@pytest.fixture
def record():
    return UrlRecord(url="https://example.com", title="Example", is_active=True)


@pytest.fixture
def clipboard(monkeypatch):
    copied = []
    monkeypatch.setattr(share_mod.pyperclip, "copy", copied.append)
    return copied


def _broken_copy(text):
    raise pyperclip.PyperclipException("no clipboard mechanism")


def test_copy_to_clipboard(clipboard):
    copy_to_clipboard("https://example.com")
    assert clipboard == ["https://example.com"]


def test_copy_failure_raises_share_error(monkeypatch):
    monkeypatch.setattr(share_mod.pyperclip, "copy", _broken_copy)
    with pytest.raises(ShareError, match="Failed to copy URL"):
        copy_to_clipboard("x")


def test_share_uses_native_hook(record, clipboard):
    calls = []
    assert share(record, native=lambda title, url: calls.append((title, url))) == "shared"
    assert calls == [("Example", "https://example.com")]
    assert clipboard == []


def test_share_without_native_copies(record, clipboard):
    assert share(record) == "copied"
    assert clipboard == ["https://example.com"]


def test_share_falls_back_when_native_fails(record, clipboard):
    def native(title, url):
        raise OSError("share sheet dismissed")

    assert share(record, native=native) == "copied"
    assert clipboard == ["https://example.com"]


def test_share_falls_back_on_any_native_error(record, clipboard):
    def native(title, url):
        raise RuntimeError("share sheet unavailable")

    assert share(record, native=native) == "copied"
    assert clipboard == ["https://example.com"]


def test_share_fallback_failure_raises(record, monkeypatch):
    monkeypatch.setattr(share_mod.pyperclip, "copy", _broken_copy)
    with pytest.raises(ShareError):
        share(record)


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Example", "qr-Example.png"),
        ("My Site/1", "qr-My_Site_1.png"),
        ("   ", "qr-code.png"),
        ("", "qr-code.png"),
    ],
)
def test_download_filename(title, expected):
    assert download_filename(title) == expected


def test_download_writes_png(record, tmp_path):
    path = download(record, tmp_path / "out", QrOptions(width=128))
    assert path == tmp_path / "out" / "qr-Example.png"
    with Image.open(path) as img:
        assert img.size == (128, 128)


def test_download_to_unwritable_dir_raises(record, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file")
    with pytest.raises(ShareError):
        download(record, blocker / "sub")


def test_open_in_browser(record, monkeypatch):
    opened = []
    monkeypatch.setattr(share_mod.webbrowser, "open", lambda url, new=0: opened.append(url) or True)
    assert open_in_browser(record) is True
    assert opened == ["https://example.com"]
