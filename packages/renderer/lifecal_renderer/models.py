"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass

from lifecal_core.models import ProgressData, Variant

BOTTOM_PADDING = 0.20
WIDTH_FRACTION = 0.98


class InvalidCanvasError(ValueError):
    """Canvas dimensions that cannot be rendered."""


class RasterizationError(RuntimeError):
    """Vector document could not be converted to a bitmap."""


@dataclass(frozen=True)
class Palette:
    name: str
    primary: str
    accent: str
    background: tuple[str, ...]


@dataclass(frozen=True)
class CanvasSpec:
    width: int
    height: int
    top_offset: int = 0

    def validate(self) -> "CanvasSpec":
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise InvalidCanvasError(f"canvas must be positive, got {self.width}x{self.height}")
        if self.top_offset < 0:
            raise InvalidCanvasError(f"top offset must be >= 0, got {self.top_offset}")
        return self

    @property
    def content_top(self) -> float:
        return float(self.top_offset)

    @property
    def content_bottom(self) -> float:
        return self.height * (1 - BOTTOM_PADDING)

    @property
    def content_height(self) -> float:
        return self.content_bottom - self.content_top

    @property
    def content_width(self) -> float:
        return self.width * WIDTH_FRACTION

    @property
    def is_degenerate(self) -> bool:
        return self.content_height <= 0 or self.content_width <= 0


__all__ = [
    "BOTTOM_PADDING",
    "CanvasSpec",
    "InvalidCanvasError",
    "Palette",
    "ProgressData",
    "RasterizationError",
    "Variant",
    "WIDTH_FRACTION",
]
