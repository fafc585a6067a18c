"""Built-in per-variant color palettes."""

from __future__ import annotations

from lifecal_core.models import Variant

from .models import Palette

DEFAULT_VARIANT = Variant.LIFE

PALETTES: dict[Variant, Palette] = {
    Variant.LIFE: Palette(
        name="life",
        primary="#FF2D55",
        accent="#AF52DE",
        background=("#000000", "#12041a", "#0a0012"),
    ),
    Variant.YEAR: Palette(
        name="year",
        primary="#007AFF",
        accent="#5856D6",
        background=("#000000", "#040b1a", "#000812"),
    ),
    Variant.GOAL: Palette(
        name="goal",
        primary="#FF9500",
        accent="#FF3B30",
        background=("#000000", "#1a0d04", "#120800"),
    ),
}


def resolve_variant(value: str | Variant | None) -> Variant:
    return Variant.resolve(value)


def get_palette(variant: str | Variant | None) -> Palette:
    return PALETTES.get(resolve_variant(variant), PALETTES[DEFAULT_VARIANT])
