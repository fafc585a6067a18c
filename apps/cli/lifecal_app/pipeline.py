"""Request -> progress -> scene -> PNG."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date

from lifecal_core.config import AppConfig
from lifecal_core.logging_setup import get_logger
from lifecal_core.models import ProgressData
from lifecal_core.progress import progress_for
from lifecal_renderer.models import CanvasSpec, RasterizationError
from lifecal_renderer.raster import rasterize
from lifecal_renderer.scene import Scene, generate

from .request import WallpaperRequest

logger = get_logger("pipeline")


@dataclass(frozen=True)
class RenderResult:
    scene: Scene
    progress: ProgressData
    canvas: CanvasSpec
    png: bytes | None = None

    @property
    def svg(self) -> str:
        return self.scene.to_svg()


def canvas_for(request: WallpaperRequest) -> CanvasSpec:
    d = request.device
    return CanvasSpec(width=d.width, height=d.height, top_offset=d.top_offset).validate()


def build_scene(
    request: WallpaperRequest,
    cfg: AppConfig | None = None,
    rng: random.Random | None = None,
    today: date | None = None,
    year_layout: str | None = None,
) -> RenderResult:
    """Render with the deployment's year layout unless the operator passes one explicitly."""
    cfg = cfg or AppConfig()
    canvas = canvas_for(request)
    progress = progress_for(
        request.variant,
        birth_date=request.birth_date,
        goal_date=request.goal_date,
        start_date=request.start_date,
        today=today,
    )
    scene = generate(
        request.variant,
        progress,
        canvas,
        rng=rng,
        year_layout=year_layout or cfg.render.year_layout,
    )
    return RenderResult(scene=scene, progress=progress, canvas=canvas)


def render_wallpaper(
    request: WallpaperRequest,
    cfg: AppConfig | None = None,
    rng: random.Random | None = None,
    today: date | None = None,
    year_layout: str | None = None,
) -> RenderResult:
    result = build_scene(request, cfg=cfg, rng=rng, today=today, year_layout=year_layout)
    try:
        png = rasterize(result.scene)
    except RasterizationError:
        logger.exception(
            "wallpaper render failed",
            extra={"event": "wallpaper_render_failed", "fields": {"variant": request.variant.value}},
        )
        raise

    logger.info(
        "wallpaper rendered",
        extra={
            "event": "wallpaper_rendered",
            "fields": {
                "variant": request.variant.value,
                "device": request.device.id,
                "size": f"{result.canvas.width}x{result.canvas.height}",
                "elements": len(result.scene.elements),
                "bytes": len(png),
            },
        },
    )
    return RenderResult(scene=result.scene, progress=result.progress, canvas=result.canvas, png=png)
