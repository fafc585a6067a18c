"""Immutable SVG drawing primitives with vertical extents for layout checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from xml.sax.saxutils import escape, quoteattr


def fmt(value: float) -> str:
    """Fixed-precision number formatting so equal geometry serialises identically."""
    text = f"{float(value):.3f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


@dataclass(frozen=True)
class Style:
    fill: str | None = None
    fill_opacity: float | None = None
    stroke: str | None = None
    stroke_width: float | None = None
    stroke_opacity: float | None = None
    stroke_linecap: str | None = None
    stroke_dasharray: float | None = None
    stroke_dashoffset: float | None = None
    opacity: float | None = None
    filter: str | None = None
    transform: str | None = None

    @property
    def half_stroke(self) -> float:
        if not self.stroke or self.stroke == "none" or not self.stroke_width:
            return 0.0
        return self.stroke_width / 2

    def attributes(self) -> list[tuple[str, str]]:
        attrs: list[tuple[str, str]] = []
        if self.fill is not None:
            attrs.append(("fill", self.fill))
        if self.fill_opacity is not None:
            attrs.append(("fill-opacity", fmt(self.fill_opacity)))
        if self.stroke is not None:
            attrs.append(("stroke", self.stroke))
        if self.stroke_width is not None:
            attrs.append(("stroke-width", fmt(self.stroke_width)))
        if self.stroke_opacity is not None:
            attrs.append(("stroke-opacity", fmt(self.stroke_opacity)))
        if self.stroke_linecap is not None:
            attrs.append(("stroke-linecap", self.stroke_linecap))
        if self.stroke_dasharray is not None:
            attrs.append(("stroke-dasharray", fmt(self.stroke_dasharray)))
        if self.stroke_dashoffset is not None:
            attrs.append(("stroke-dashoffset", fmt(self.stroke_dashoffset)))
        if self.opacity is not None:
            attrs.append(("opacity", fmt(self.opacity)))
        if self.filter is not None:
            attrs.append(("filter", f"url(#{self.filter})"))
        if self.transform is not None:
            attrs.append(("transform", self.transform))
        return attrs


def _element(tag: str, attrs: list[tuple[str, str]], body: str | None = None) -> str:
    rendered = " ".join(f"{name}={quoteattr(value)}" for name, value in attrs)
    if body is None:
        return f"<{tag} {rendered} />"
    return f"<{tag} {rendered}>{body}</{tag}>"


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    style: Style = field(default_factory=Style)
    role: str | None = None

    def vertical_extent(self) -> tuple[float, float]:
        pad = self.r + self.style.half_stroke
        return self.cy - pad, self.cy + pad

    def to_svg(self) -> str:
        attrs = [("cx", fmt(self.cx)), ("cy", fmt(self.cy)), ("r", fmt(self.r))]
        return _element("circle", attrs + self.style.attributes())


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    rx: float = 0.0
    style: Style = field(default_factory=Style)
    role: str | None = None

    def vertical_extent(self) -> tuple[float, float]:
        pad = self.style.half_stroke
        return self.y - pad, self.y + self.height + pad

    def to_svg(self) -> str:
        attrs = [("x", fmt(self.x)), ("y", fmt(self.y)), ("width", fmt(self.width)), ("height", fmt(self.height))]
        if self.rx:
            attrs.append(("rx", fmt(self.rx)))
        return _element("rect", attrs + self.style.attributes())


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    style: Style = field(default_factory=Style)
    role: str | None = None

    def vertical_extent(self) -> tuple[float, float]:
        pad = self.style.half_stroke
        return min(self.y1, self.y2) - pad, max(self.y1, self.y2) + pad

    def to_svg(self) -> str:
        attrs = [("x1", fmt(self.x1)), ("y1", fmt(self.y1)), ("x2", fmt(self.x2)), ("y2", fmt(self.y2))]
        return _element("line", attrs + self.style.attributes())


@dataclass(frozen=True)
class Path:
    d: str
    top: float
    bottom: float
    style: Style = field(default_factory=Style)
    role: str | None = None

    def vertical_extent(self) -> tuple[float, float]:
        pad = self.style.half_stroke
        return self.top - pad, self.bottom + pad

    def to_svg(self) -> str:
        return _element("path", [("d", self.d)] + self.style.attributes())


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    content: str
    font_size: float
    font_weight: int = 600
    anchor: str = "middle"
    letter_spacing: float | None = None
    font_family: str = "-apple-system, Helvetica, Arial, sans-serif"
    style: Style = field(default_factory=Style)
    role: str | None = None

    def vertical_extent(self) -> tuple[float, float]:
        # Baseline-anchored: ascenders above y, descenders below.
        return self.y - self.font_size * 0.8, self.y + self.font_size * 0.25

    def to_svg(self) -> str:
        attrs = [
            ("x", fmt(self.x)),
            ("y", fmt(self.y)),
            ("text-anchor", self.anchor),
            ("font-family", self.font_family),
            ("font-weight", str(self.font_weight)),
            ("font-size", fmt(self.font_size)),
        ]
        if self.letter_spacing is not None:
            attrs.append(("letter-spacing", fmt(self.letter_spacing)))
        return _element("text", attrs + self.style.attributes(), escape(self.content))


Primitive = Circle | Rect | Line | Path | Text


class PathBuilder:
    """Accumulates path commands and tracks the vertical bounds of every point.

    Bezier curves stay inside the hull of their control points, so the tracked
    bounds are a safe (slightly loose) vertical extent for the finished path.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._top = float("inf")
        self._bottom = float("-inf")

    def _track(self, *ys: float) -> None:
        for y in ys:
            self._top = min(self._top, y)
            self._bottom = max(self._bottom, y)

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self._track(y)
        self._parts.append(f"M {fmt(x)} {fmt(y)}")
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        self._track(y)
        self._parts.append(f"L {fmt(x)} {fmt(y)}")
        return self

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> "PathBuilder":
        self._track(y1, y2, y)
        self._parts.append(f"C {fmt(x1)} {fmt(y1)}, {fmt(x2)} {fmt(y2)}, {fmt(x)} {fmt(y)}")
        return self

    def quad_to(self, x1: float, y1: float, x: float, y: float) -> "PathBuilder":
        self._track(y1, y)
        self._parts.append(f"Q {fmt(x1)} {fmt(y1)} {fmt(x)} {fmt(y)}")
        return self

    def close(self) -> "PathBuilder":
        self._parts.append("Z")
        return self

    def build(self, style: Style | None = None, role: str | None = None) -> Path:
        if not self._parts:
            raise ValueError("empty path")
        return Path(d=" ".join(self._parts), top=self._top, bottom=self._bottom, style=style or Style(), role=role)
