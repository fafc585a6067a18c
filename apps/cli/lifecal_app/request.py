"""Wallpaper request parsing and shortcut URL building."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping
from urllib.parse import parse_qsl, urlencode

from lifecal_core.config import AppConfig
from lifecal_core.devices import DevicePreset, get_device
from lifecal_core.models import Variant
from lifecal_core.progress import parse_date


class InvalidRequestError(ValueError):
    """Query parameters that cannot be turned into a wallpaper request."""


@dataclass(frozen=True)
class WallpaperRequest:
    variant: Variant
    birth_date: str
    goal_date: str
    device: DevicePreset
    start_date: str | None = None


def _dimension(raw: Mapping[str, str], key: str) -> int | None:
    value = raw.get(key)
    if value in (None, ""):
        return None
    try:
        number = int(str(value))
    except ValueError:
        raise InvalidRequestError(f"{key} must be an integer, got {value!r}") from None
    if number <= 0:
        raise InvalidRequestError(f"{key} must be positive, got {number}")
    return number


def _date(raw: Mapping[str, str], key: str, default: str | None) -> str | None:
    value = raw.get(key) or default
    if value is None:
        return None
    try:
        return parse_date(value).isoformat()
    except ValueError as exc:
        raise InvalidRequestError(f"{key}: {exc}") from None


def parse_query(query: str | Mapping[str, str], cfg: AppConfig | None = None) -> WallpaperRequest:
    cfg = cfg or AppConfig()
    raw = dict(parse_qsl(query.lstrip("?"))) if isinstance(query, str) else dict(query)

    device = get_device(raw.get("device") or cfg.render.device)
    width = _dimension(raw, "width")
    height = _dimension(raw, "height")
    if width is not None or height is not None:
        device = device.scaled(width or device.width, height or device.height)

    return WallpaperRequest(
        variant=Variant.resolve(raw.get("type")),
        birth_date=_date(raw, "dob", cfg.defaults.birth_date) or cfg.defaults.birth_date,
        goal_date=_date(raw, "goalDate", cfg.defaults.goal_date) or cfg.defaults.goal_date,
        start_date=_date(raw, "startDate", cfg.defaults.goal_start_date),
        device=device,
    )


def build_query(request: WallpaperRequest) -> str:
    params = [
        ("type", request.variant.value),
        ("device", request.device.id),
        ("width", str(request.device.width)),
        ("height", str(request.device.height)),
        ("dob", request.birth_date),
        ("goalDate", request.goal_date),
    ]
    if request.start_date:
        params.append(("startDate", request.start_date))
    return urlencode(params)


def wallpaper_url(origin: str, request: WallpaperRequest) -> str:
    return f"{origin.rstrip('/')}/days?{build_query(request)}"
