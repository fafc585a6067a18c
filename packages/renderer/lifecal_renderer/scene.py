"""Scene generator: picks the variant layout and assembles the SVG document."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from lifecal_core.models import ProgressData, Variant

from .layouts import GLASS_STROKE, LayoutResult, goal_ring, life_grid, year_grid, year_hourglass
from .models import CanvasSpec, Palette
from .palettes import get_palette, resolve_variant
from .primitives import Primitive, Rect, Style

Layout = Callable[[ProgressData, CanvasSpec, Palette, random.Random], LayoutResult]

YEAR_LAYOUT_HOURGLASS = "hourglass"
YEAR_LAYOUT_GRID = "grid"

LAYOUTS: dict[tuple[Variant, str | None], Layout] = {
    (Variant.LIFE, None): life_grid,
    (Variant.YEAR, YEAR_LAYOUT_HOURGLASS): year_hourglass,
    (Variant.YEAR, YEAR_LAYOUT_GRID): year_grid,
    (Variant.GOAL, None): goal_ring,
}


def select_layout(variant: Variant, year_layout: str | None = YEAR_LAYOUT_HOURGLASS) -> Layout:
    if variant is Variant.YEAR:
        key = (variant, year_layout or YEAR_LAYOUT_HOURGLASS)
        if key not in LAYOUTS:
            raise ValueError(f"unknown year layout: {year_layout!r}")
        return LAYOUTS[key]
    return LAYOUTS.get((variant, None), LAYOUTS[(Variant.LIFE, None)])


def shared_defs(palette: Palette, background_stop: str | None = None) -> tuple[str, ...]:
    center = background_stop or (palette.background[1] if len(palette.background) > 1 else palette.background[0])
    return (
        """<filter id="glow" x="-50%" y="-50%" width="200%" height="200%">
  <feGaussianBlur stdDeviation="3" result="blur" />
  <feMerge><feMergeNode in="blur" /><feMergeNode in="SourceGraphic" /></feMerge>
</filter>""",
        """<filter id="soft-glow" x="-50%" y="-50%" width="200%" height="200%">
  <feGaussianBlur stdDeviation="10" result="blur" />
  <feMerge><feMergeNode in="blur" /><feMergeNode in="SourceGraphic" /></feMerge>
</filter>""",
        """<filter id="bloom" x="-100%" y="-100%" width="300%" height="300%">
  <feGaussianBlur stdDeviation="8" result="blur" />
  <feColorMatrix in="blur" type="matrix" values="0 0 0 0 0  0 0 0 0 0.6  0 0 0 0 1  0 0 0 1 0" />
  <feMerge><feMergeNode /><feMergeNode in="SourceGraphic" /></feMerge>
</filter>""",
        f"""<filter id="sand-glow" x="-50%" y="-50%" width="200%" height="200%">
  <feGaussianBlur stdDeviation="15" result="blur" />
  <feFlood flood-color="{GLASS_STROKE}" flood-opacity="0.4" result="color" />
  <feComposite in="color" in2="blur" operator="in" />
  <feMerge><feMergeNode /><feMergeNode in="SourceGraphic" /></feMerge>
</filter>""",
        """<pattern id="grain" width="10" height="10" patternUnits="userSpaceOnUse">
  <circle cx="2" cy="2" r="0.5" fill="white" fill-opacity="0.2" />
  <circle cx="7" cy="5" r="0.5" fill="white" fill-opacity="0.1" />
</pattern>""",
        f"""<radialGradient id="meshGradient" cx="50%" cy="40%" r="80%" fx="50%" fy="40%">
  <stop offset="0%" stop-color="{center}" />
  <stop offset="60%" stop-color="{palette.background[0]}" />
</radialGradient>""",
    )


@dataclass(frozen=True)
class Scene:
    width: int
    height: int
    variant: Variant
    defs: tuple[str, ...]
    background: Rect
    elements: tuple[Primitive, ...]

    def foreground(self, role: str | None = None) -> list[Primitive]:
        if role is None:
            return list(self.elements)
        return [e for e in self.elements if e.role == role]

    def count(self, role: str) -> int:
        return sum(1 for e in self.elements if e.role == role)

    def to_svg(self) -> str:
        lines = [
            f'<svg width="{self.width}" height="{self.height}" viewBox="0 0 {self.width} {self.height}" '
            'xmlns="http://www.w3.org/2000/svg">',
            "<defs>",
            *self.defs,
            "</defs>",
            self.background.to_svg(),
            *(e.to_svg() for e in self.elements),
            "</svg>",
        ]
        return "\n".join(lines) + "\n"


def generate(
    variant: str | Variant | None,
    progress: ProgressData,
    canvas: CanvasSpec,
    rng: random.Random | None = None,
    year_layout: str | None = YEAR_LAYOUT_HOURGLASS,
) -> Scene:
    """Build the wallpaper scene for one request.

    Deterministic geometry depends only on the arguments; decorative noise
    (hourglass specks and grain sizes) is drawn from ``rng``, which defaults to
    a freshly seeded generator on every call.
    """
    canvas.validate()
    kind = resolve_variant(variant)
    palette = get_palette(kind)
    layout = select_layout(kind, year_layout)
    result = layout(progress, canvas, palette, rng if rng is not None else random.Random())

    background = Rect(0, 0, canvas.width, canvas.height, style=Style(fill="url(#meshGradient)"), role="background")
    return Scene(
        width=int(canvas.width),
        height=int(canvas.height),
        variant=kind,
        defs=shared_defs(palette, result.background_stop) + result.defs,
        background=background,
        elements=result.elements,
    )


def render_svg(
    variant: str | Variant | None,
    progress: ProgressData,
    canvas: CanvasSpec,
    rng: random.Random | None = None,
    year_layout: str | None = YEAR_LAYOUT_HOURGLASS,
) -> str:
    return generate(variant, progress, canvas, rng=rng, year_layout=year_layout).to_svg()
