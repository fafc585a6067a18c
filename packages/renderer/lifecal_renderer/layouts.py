"""Variant layouts: life grid, year grid, year hourglass, goal ring.

Each layout is a pure function of (progress, canvas, palette, rng) returning the
foreground primitives plus any definitions they reference. Nothing is placed
above ``canvas.content_top``.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from lifecal_core.models import ProgressData
from lifecal_core.progress import LIFE_EXPECTANCY_YEARS, WEEKS_PER_YEAR

from .models import CanvasSpec, Palette
from .primitives import Circle, Line, PathBuilder, Primitive, Rect, Style, Text, fmt

DIM_FILL = "#1c1c1e"
CAPTION_FILL = "#ffffff"

LIFE_ROWS = LIFE_EXPECTANCY_YEARS
LIFE_COLS = WEEKS_PER_YEAR
LIFE_GAP = 3.0
LIFE_GLOW_EVERY = 400

YEAR_ROWS = 25
YEAR_COLS = 15
YEAR_GAP = 6.0

GLASS_STROKE = "#00A3FF"
GLASS_ACCENT = "#00E0FF"
HOURGLASS_BACKGROUND = "#050c1f"
HOURGLASS_HEIGHT = 720.0
HOURGLASS_WIDTH = 460.0
HOURGLASS_NECK = 18.0
HOURGLASS_CAP_OVERHANG = 40.0
HOURGLASS_MARGIN = 4.0
BULB_FILL_FRACTION = 0.46
MOUND_MAX = 80.0
GRAIN_COUNT = 22
SPECK_COUNT = 30

RING_RADIUS_FRACTION = 0.35
RING_STROKE_FRACTION = 0.08


@dataclass(frozen=True)
class LayoutResult:
    elements: tuple[Primitive, ...] = ()
    defs: tuple[str, ...] = ()
    background_stop: str | None = None


@dataclass(frozen=True)
class GridGeometry:
    cell_size: float
    origin_x: float
    origin_y: float
    gap: float
    rows: int
    cols: int

    def cell_origin(self, index: int) -> tuple[float, float]:
        row, col = divmod(index, self.cols)
        step = self.cell_size + self.gap
        return self.origin_x + col * step, self.origin_y + row * step


def fit_grid(
    rows: int, cols: int, gap: float, canvas_width: float, region_top: float, region_width: float, region_height: float
) -> GridGeometry | None:
    """Largest square cell such that the whole grid fits the region, centered in it."""
    available_w = region_width - (cols - 1) * gap
    available_h = region_height - (rows - 1) * gap
    cell = min(available_w / cols, available_h / rows)
    if cell <= 0:
        return None
    actual_w = cols * cell + (cols - 1) * gap
    actual_h = rows * cell + (rows - 1) * gap
    return GridGeometry(
        cell_size=cell,
        origin_x=(canvas_width - actual_w) / 2,
        origin_y=region_top + (region_height - actual_h) / 2,
        gap=gap,
        rows=rows,
        cols=cols,
    )


def life_grid(progress: ProgressData, canvas: CanvasSpec, palette: Palette, rng: random.Random) -> LayoutResult:
    grid = fit_grid(
        LIFE_ROWS, LIFE_COLS, LIFE_GAP, canvas.width, canvas.content_top, canvas.content_width, canvas.content_height
    )
    if grid is None:
        return LayoutResult()

    lived = min(max(0, progress.elapsed), max(0, progress.total))
    radius = grid.cell_size / 2.2
    half = grid.cell_size / 2
    lived_style = Style(fill=palette.primary, opacity=1)
    glow_style = Style(fill=palette.primary, opacity=1, filter="glow")
    dim_style = Style(fill=DIM_FILL, opacity=0.3)

    elements: list[Primitive] = []
    for i in range(LIFE_ROWS * LIFE_COLS):
        x, y = grid.cell_origin(i)
        if i < lived:
            style = glow_style if i % LIFE_GLOW_EVERY == 0 else lived_style
            elements.append(Circle(x + half, y + half, radius, style=style, role="lived"))
        else:
            elements.append(Circle(x + half, y + half, radius, style=dim_style, role="unlived"))
    return LayoutResult(elements=tuple(elements))


def year_grid(progress: ProgressData, canvas: CanvasSpec, palette: Palette, rng: random.Random) -> LayoutResult:
    if canvas.is_degenerate:
        return LayoutResult()

    label_size = canvas.width / 12
    label_band = label_size * 1.5
    grid = fit_grid(
        YEAR_ROWS,
        YEAR_COLS,
        YEAR_GAP,
        canvas.width,
        canvas.content_top + label_band,
        canvas.content_width,
        canvas.content_height - label_band,
    )
    if grid is None:
        return LayoutResult()

    days = min(max(0, progress.total), YEAR_ROWS * YEAR_COLS)
    elapsed = min(max(0, progress.elapsed), days)
    remaining = max(0, progress.remaining)
    radius = grid.cell_size * 0.25
    past_style = Style(fill=palette.primary, opacity=1)
    future_style = Style(fill=DIM_FILL, opacity=0.35)

    elements: list[Primitive] = []
    if progress.label:
        elements.append(
            Text(
                canvas.width / 2,
                grid.origin_y - label_size * 0.5,
                progress.label,
                font_size=label_size,
                font_weight=800,
                style=Style(fill=CAPTION_FILL),
                role="label",
            )
        )
    for i in range(days):
        x, y = grid.cell_origin(i)
        is_past = i < elapsed
        elements.append(
            Rect(
                x,
                y,
                grid.cell_size,
                grid.cell_size,
                rx=radius,
                style=past_style if is_past else future_style,
                role="elapsed" if is_past else "future",
            )
        )

    footer_size = canvas.width / 28
    footer_top = canvas.content_bottom
    padding = canvas.height - footer_top
    caption_style = Style(fill=CAPTION_FILL, opacity=0.55)
    elements.append(
        Text(
            canvas.width / 2,
            footer_top + padding * 0.35,
            f"{elapsed} DAYS GONE",
            font_size=footer_size,
            letter_spacing=footer_size * 0.2,
            style=caption_style,
            role="caption-elapsed",
        )
    )
    elements.append(
        Text(
            canvas.width / 2,
            footer_top + padding * 0.6,
            f"{remaining} DAYS LEFT",
            font_size=footer_size,
            letter_spacing=footer_size * 0.2,
            style=caption_style,
            role="caption-remaining",
        )
    )
    return LayoutResult(elements=tuple(elements))


@dataclass(frozen=True)
class HourglassGeometry:
    cx: float
    scale: float
    height: float
    width: float
    neck_width: float
    neck_y: float
    top_y: float
    bottom_y: float
    fill_height_bottom: float
    fill_height_top: float
    mound_height: float

    def width_at(self, y: float) -> float:
        half = self.height / 2
        p = abs(y - self.neck_y) / half if half > 0 else 0.0
        return self.neck_width + (self.width - self.neck_width) * (0.3 * p**1.5 + 0.7 * p**3)


def hourglass_geometry(progress: ProgressData, canvas: CanvasSpec) -> HourglassGeometry | None:
    """Deterministic hourglass dimensions, scaled down to fit the content region."""
    if canvas.is_degenerate:
        return None
    overall_w = HOURGLASS_WIDTH + 2 * HOURGLASS_CAP_OVERHANG
    usable_h = canvas.content_height - 2 * HOURGLASS_MARGIN
    scale = min(1.0, usable_h / HOURGLASS_HEIGHT, canvas.content_width / overall_w)
    if scale <= 0:
        return None
    height = HOURGLASS_HEIGHT * scale
    top_y = canvas.content_top + (canvas.content_height - height) / 2
    bulb = height * BULB_FILL_FRACTION
    fill_bottom = progress.fraction * bulb
    return HourglassGeometry(
        cx=canvas.width / 2,
        scale=scale,
        height=height,
        width=HOURGLASS_WIDTH * scale,
        neck_width=HOURGLASS_NECK * scale,
        neck_y=top_y + height / 2,
        top_y=top_y,
        bottom_y=top_y + height,
        fill_height_bottom=fill_bottom,
        fill_height_top=progress.remaining_fraction * bulb,
        mound_height=min(MOUND_MAX * scale, fill_bottom * 0.9),
    )


def _hourglass_defs() -> tuple[str, ...]:
    return (
        f"""<linearGradient id="sandGrad" x1="0%" y1="100%" x2="0%" y2="0%">
  <stop offset="0%" stop-color="{GLASS_STROKE}" stop-opacity="1" />
  <stop offset="70%" stop-color="{GLASS_ACCENT}" stop-opacity="0.6" />
  <stop offset="100%" stop-color="{GLASS_ACCENT}" stop-opacity="0.3" />
</linearGradient>""",
        """<radialGradient id="highlightGrad" cx="50%" cy="50%" r="50%">
  <stop offset="0%" stop-color="white" stop-opacity="0.4" />
  <stop offset="100%" stop-color="white" stop-opacity="0" />
</radialGradient>""",
    )


def year_hourglass(progress: ProgressData, canvas: CanvasSpec, palette: Palette, rng: random.Random) -> LayoutResult:
    g = hourglass_geometry(progress, canvas)
    if g is None:
        return LayoutResult(background_stop=HOURGLASS_BACKGROUND)

    s = g.scale
    cx, hw, nw = g.cx, g.width / 2, g.neck_width
    bulge = HOURGLASS_CAP_OVERHANG * s
    elements: list[Primitive] = []

    glass = (
        PathBuilder()
        .move_to(cx - hw, g.top_y)
        .line_to(cx + hw, g.top_y)
        .curve_to(cx + hw + bulge, g.top_y + 220 * s, cx + nw * 4, g.neck_y - 100 * s, cx + nw / 2, g.neck_y)
        .curve_to(cx + nw * 4, g.neck_y + 100 * s, cx + hw + bulge, g.bottom_y - 220 * s, cx + hw, g.bottom_y)
        .line_to(cx - hw, g.bottom_y)
        .curve_to(cx - hw - bulge, g.bottom_y - 220 * s, cx - nw * 4, g.neck_y + 100 * s, cx - nw / 2, g.neck_y)
        .curve_to(cx - nw * 4, g.neck_y - 100 * s, cx - hw - bulge, g.top_y + 220 * s, cx - hw, g.top_y)
        .close()
    )
    elements.append(
        glass.build(
            Style(fill="white", fill_opacity=0.01, stroke=GLASS_STROKE, stroke_width=2, stroke_opacity=0.6, filter="bloom"),
            role="glass",
        )
    )

    cap_style = Style(stroke=GLASS_STROKE, stroke_width=4, stroke_linecap="round", filter="bloom")
    for y, role in ((g.top_y, "cap-top"), (g.bottom_y, "cap-bottom")):
        elements.append(Line(cx - hw - bulge, y, cx + hw + bulge, y, style=cap_style, role=role))

    if g.fill_height_bottom > 5:
        fill_y = g.bottom_y - g.fill_height_bottom
        w = g.width_at(fill_y) - 15 * s
        base = g.bottom_y - 5 * s
        sand = (
            PathBuilder()
            .move_to(cx - w / 2, base)
            .line_to(cx + w / 2, base)
            .curve_to(cx + w / 2, g.bottom_y - 30 * s, cx + w / 3, fill_y, cx, fill_y - g.mound_height)
            .curve_to(cx - w / 3, fill_y, cx - w / 2, g.bottom_y - 30 * s, cx - w / 2, base)
            .close()
        )
        elements.append(sand.build(Style(fill="url(#sandGrad)", filter="sand-glow"), role="sand-bottom"))
        elements.append(sand.build(Style(fill="url(#grain)"), role="sand-bottom-texture"))

    if g.fill_height_top > 5:
        base = g.neck_y - 10 * s
        surface = base - g.fill_height_top
        w = g.width_at(surface) - 15 * s
        dip = min(40 * s, g.fill_height_top * 0.5)
        sand = (
            PathBuilder()
            .move_to(cx - nw / 2, base)
            .line_to(cx + nw / 2, base)
            .curve_to(cx + nw, base - 40 * s, cx + w / 2, surface + 40 * s, cx + w / 2, surface)
            .quad_to(cx, surface + dip, cx - w / 2, surface)
            .curve_to(cx - w / 2, surface + 40 * s, cx - nw, base - 40 * s, cx - nw / 2, base)
            .close()
        )
        elements.append(sand.build(Style(fill="url(#sandGrad)", opacity=0.8, filter="sand-glow"), role="sand-top"))
        elements.append(sand.build(Style(fill="url(#grain)"), role="sand-top-texture"))

    for _ in range(SPECK_COUNT):
        size = rng.random() * 1.5 + 0.5
        x = cx + (rng.random() - 0.5) * g.width * 1.5
        y = g.top_y + size + rng.random() * max(0.0, g.height - 2 * size)
        elements.append(
            Circle(x, y, size, style=Style(fill=GLASS_ACCENT, opacity=rng.random() * 0.4), role="speck")
        )

    stream_end = g.bottom_y - g.fill_height_bottom - 15 * s
    for i in range(GRAIN_COUNT):
        t = i / (GRAIN_COUNT - 1)
        y = g.neck_y + t * (stream_end - g.neck_y)
        size = 3 * (0.8 + rng.random() * 0.4)
        if y < stream_end:
            elements.append(
                Circle(
                    cx + math.sin(i * 2.2) * 1.8,
                    y,
                    size,
                    style=Style(fill=GLASS_ACCENT, opacity=1.0 - t * 0.2, filter="bloom"),
                    role="grain",
                )
            )

    return LayoutResult(elements=tuple(elements), defs=_hourglass_defs(), background_stop=HOURGLASS_BACKGROUND)


@dataclass(frozen=True)
class RingGeometry:
    cx: float
    cy: float
    radius: float
    stroke_width: float
    scale: float = 1.0

    @property
    def circumference(self) -> float:
        return 2 * math.pi * self.radius


def ring_geometry(canvas: CanvasSpec) -> RingGeometry | None:
    """Ring at 35% of canvas width, shrunk only when it would leave the content region."""
    if canvas.is_degenerate:
        return None
    nominal = canvas.width * RING_RADIUS_FRACTION
    stroke = canvas.width * RING_STROKE_FRACTION
    limit = min(canvas.content_height, canvas.content_width) / 2
    # radius + stroke/2 must fit within limit; stroke scales with the radius.
    scale = min(1.0, limit / (nominal + stroke / 2))
    return RingGeometry(
        cx=canvas.width / 2,
        cy=canvas.content_top + canvas.content_height / 2,
        radius=nominal * scale,
        stroke_width=stroke * scale,
        scale=scale,
    )


def goal_ring(progress: ProgressData, canvas: CanvasSpec, palette: Palette, rng: random.Random) -> LayoutResult:
    ring = ring_geometry(canvas)
    if ring is None or ring.radius <= 0:
        return LayoutResult()

    cx, cy, k = ring.cx, ring.cy, ring.scale
    circumference = ring.circumference
    offset = circumference * (1 - progress.fraction)
    width = canvas.width

    elements: list[Primitive] = [
        Circle(cx, cy, ring.radius, style=Style(fill="none", stroke=DIM_FILL, stroke_width=ring.stroke_width), role="track"),
        Circle(
            cx,
            cy,
            ring.radius,
            style=Style(
                fill="none",
                stroke=palette.primary,
                stroke_width=ring.stroke_width,
                stroke_dasharray=circumference,
                stroke_dashoffset=offset,
                stroke_linecap="round",
                transform=f"rotate(-90 {fmt(cx)} {fmt(cy)})",
                filter="soft-glow",
            ),
            role="arc",
        ),
        Text(
            cx,
            cy + width / 30 * k,
            str(max(0, progress.remaining)),
            font_size=width / 3 * k,
            font_weight=900,
            style=Style(fill="white", filter="soft-glow"),
            role="numeral",
        ),
        Text(
            cx,
            cy + width / 5 * k,
            "DAYS LEFT",
            font_size=width / 22 * k,
            letter_spacing=12 * k,
            style=Style(fill="white", fill_opacity=0.4),
            role="caption",
        ),
    ]
    return LayoutResult(elements=tuple(elements))
