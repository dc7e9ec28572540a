"""QR code rendering for the active URL."""

from __future__ import annotations

import io
import logging
from typing import Literal, Optional

import qrcode
from PIL import Image
from pydantic import BaseModel, Field
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError

from .config import DEFAULT_QR_WIDTH
from .errors import RenderError

logger = logging.getLogger(__name__)

_ERROR_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


class QrOptions(BaseModel):
    """Fixed rendering configuration for generated codes."""

    width: int = Field(default=DEFAULT_QR_WIDTH, gt=0)
    margin: int = Field(default=2, ge=0)
    dark: str = "#000000"
    light: str = "#FFFFFF"
    error_correction: Literal["L", "M", "Q", "H"] = "M"


def _build(url: str, options: QrOptions) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=None,
        error_correction=_ERROR_LEVELS[options.error_correction],
        box_size=1,
        border=options.margin,
    )
    qr.add_data(url)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        raise RenderError(f"Failed to generate QR code: {exc}") from exc
    return qr


def render_image(url: str, options: Optional[QrOptions] = None) -> Image.Image:
    """Return the QR code for *url* as an RGB image ``width`` pixels square."""
    options = options or QrOptions()
    qr = _build(url, options)

    total = qr.modules_count + 2 * options.margin
    if options.width < total:
        raise RenderError(
            f"Width {options.width}px is too small for this QR code; need at least {total}px."
        )
    qr.box_size = max(1, options.width // total)
    try:
        img = qr.make_image(fill_color=options.dark, back_color=options.light).convert("RGB")
    except ValueError as exc:
        raise RenderError(f"Failed to generate QR code: {exc}") from exc

    if img.size != (options.width, options.width):
        img = img.resize((options.width, options.width), Image.Resampling.NEAREST)
    logger.debug("Rendered %dx%d QR for %s", img.width, img.height, url)
    return img


def render_png(url: str, options: Optional[QrOptions] = None) -> bytes:
    buf = io.BytesIO()
    render_image(url, options).save(buf, format="PNG")
    return buf.getvalue()


def render_text(url: str, options: Optional[QrOptions] = None) -> str:
    """Render *url* with block characters for display in a terminal."""
    options = options or QrOptions()
    qr = _build(url, options)
    out = io.StringIO()
    qr.print_ascii(out=out, invert=True)
    return out.getvalue()
