"""Renderer package for wallpaper scene generation and rasterization."""

from .models import CanvasSpec, InvalidCanvasError, Palette, RasterizationError
from .palettes import get_palette, resolve_variant
from .scene import LAYOUTS, YEAR_LAYOUT_GRID, YEAR_LAYOUT_HOURGLASS, Scene, generate, render_svg

try:  # pragma: no cover - cairo is optional at import time for test environments
    from .raster import png_data_url, rasterize
except (ImportError, OSError):  # pragma: no cover
    png_data_url = None  # type: ignore[assignment]
    rasterize = None  # type: ignore[assignment]

__all__ = [
    "CanvasSpec",
    "InvalidCanvasError",
    "LAYOUTS",
    "Palette",
    "RasterizationError",
    "Scene",
    "YEAR_LAYOUT_GRID",
    "YEAR_LAYOUT_HOURGLASS",
    "generate",
    "get_palette",
    "render_svg",
    "resolve_variant",
]

if rasterize is not None:
    __all__ += ["png_data_url", "rasterize"]
