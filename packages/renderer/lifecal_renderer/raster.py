"""SVG to PNG conversion."""

from __future__ import annotations

import base64
from io import BytesIO

import cairosvg
from PIL import Image

from .models import RasterizationError
from .scene import Scene


def rasterize(document: Scene | str, width: int | None = None, height: int | None = None) -> bytes:
    """Render a scene (or raw SVG markup) to an RGBA PNG."""
    if isinstance(document, Scene):
        width = width or document.width
        height = height or document.height
        markup = document.to_svg()
    else:
        markup = document

    try:
        png = cairosvg.svg2png(bytestring=markup.encode("utf-8"), output_width=width, output_height=height)
        image = Image.open(BytesIO(png))
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        buf = BytesIO()
        image.save(buf, format="PNG")
    except Exception as exc:
        raise RasterizationError(f"failed to rasterize scene: {exc}") from exc
    return buf.getvalue()


def png_data_url(png: bytes) -> str:
    b64 = base64.b64encode(png).decode("ascii")
    return f"data:image/png;base64,{b64}"
