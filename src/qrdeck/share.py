"""Copy, share, download and open actions for a saved URL."""

from __future__ import annotations

import logging
import re
import webbrowser
from pathlib import Path
from typing import Callable, Literal, Optional

import pyperclip

from .errors import ShareError
from .models import UrlRecord
from .qr import QrOptions, render_image

logger = logging.getLogger(__name__)

NativeShare = Callable[[str, str], None]
"""Platform share hook, called as ``native(title, url)``."""


def copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        raise ShareError(f"Failed to copy URL: {exc}") from exc


def share(record: UrlRecord, native: Optional[NativeShare] = None) -> Literal["shared", "copied"]:
    """Share *record* through *native*, falling back to the clipboard.

    The fallback is taken when no native share hook is available or when the
    hook raises. Clipboard failures propagate as :class:`ShareError`.
    """
    if native is not None:
        try:
            native(record.title, record.url)
            return "shared"
        except Exception as exc:
            logger.info("Native share failed, copying instead: %s", exc)
    copy_to_clipboard(record.url)
    return "copied"


def download_filename(title: str) -> str:
    """``qr-<title>.png`` with characters unsafe in filenames replaced."""
    cleaned = re.sub(r"[^\w.-]+", "_", title.strip()).strip("_.")
    return f"qr-{cleaned or 'code'}.png"


def download(record: UrlRecord, directory: Path, options: Optional[QrOptions] = None) -> Path:
    """Render the QR code for *record* and save it as a PNG in *directory*."""
    img = render_image(record.url, options)
    path = directory / download_filename(record.title)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        img.save(path, format="PNG")
    except OSError as exc:
        raise ShareError(f"Could not save {path}: {exc}") from exc
    return path


def open_in_browser(record: UrlRecord) -> bool:
    return webbrowser.open(record.url, new=2)
