"""CLI entrypoints for rendering wallpapers, shortcut URLs, and settings."""

from __future__ import annotations

import argparse
import json
import random
from dataclasses import asdict
from pathlib import Path

from lifecal_core import get_device, list_devices, load_config, progress_for, save_config
from lifecal_core.config import AppConfig, config_path
from lifecal_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from lifecal_renderer.models import RasterizationError

from .pipeline import build_scene, render_wallpaper
from .request import WallpaperRequest, parse_query, wallpaper_url

VARIANT_CHOICES = ["life", "year", "goal"]
LAYOUT_CHOICES = ["hourglass", "grid"]

logger = get_logger("cli")


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _request_from_args(args: argparse.Namespace, cfg: AppConfig) -> WallpaperRequest:
    params = {
        "type": args.type,
        "dob": args.dob,
        "goalDate": args.goal_date,
        "startDate": args.start_date,
        "device": args.device,
        "width": args.width,
        "height": args.height,
    }
    return parse_query({k: str(v) for k, v in params.items() if v is not None}, cfg)


def _default_out(cfg: AppConfig, request: WallpaperRequest, suffix: str) -> Path:
    base = Path(cfg.render.output_dir).expanduser() if cfg.render.output_dir else Path.cwd()
    return base / f"lifecal-{request.variant.value}.{suffix}"


def _write_render(args: argparse.Namespace, cfg: AppConfig, request: WallpaperRequest) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    layout = getattr(args, "layout", None)
    if args.svg:
        result = build_scene(request, cfg=cfg, rng=rng, year_layout=layout)
        data = result.svg.encode("utf-8")
    else:
        result = render_wallpaper(request, cfg=cfg, rng=rng, year_layout=layout)
        data = result.png or b""

    out = Path(args.out).expanduser() if args.out else _default_out(cfg, request, "svg" if args.svg else "png")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)

    _print_json(
        {
            "success": True,
            "output": str(out.resolve()),
            "format": "svg" if args.svg else "png",
            "bytes": len(data),
            "device": request.device.id,
            "canvas": asdict(result.canvas),
            "progress": result.progress.as_dict(),
        }
    )
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    return _write_render(args, cfg, _request_from_args(args, cfg))


def cmd_render_query(args: argparse.Namespace) -> int:
    cfg = load_config()
    return _write_render(args, cfg, parse_query(args.query, cfg))


def cmd_url(args: argparse.Namespace) -> int:
    cfg = load_config()
    request = _request_from_args(args, cfg)
    _print_json({"url": wallpaper_url(args.origin, request)})
    return 0


def cmd_progress(args: argparse.Namespace) -> int:
    cfg = load_config()
    data = progress_for(
        args.type,
        birth_date=args.dob or cfg.defaults.birth_date,
        goal_date=args.goal_date or cfg.defaults.goal_date,
        start_date=args.start_date or cfg.defaults.goal_start_date,
    )
    _print_json(data.as_dict())
    return 0


def cmd_devices(_args: argparse.Namespace) -> int:
    _print_json([asdict(get_device(device_id)) for device_id in list_devices()])
    return 0


def cmd_config_show(_args: argparse.Namespace) -> int:
    _print_json({"path": str(config_path()), "config": asdict(load_config())})
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    cfg = load_config()
    if args.device:
        cfg.render.device = args.device
    if args.layout:
        cfg.render.year_layout = args.layout
    if args.dob:
        cfg.defaults.birth_date = args.dob
    if args.goal_date:
        cfg.defaults.goal_date = args.goal_date
    if args.start_date:
        cfg.defaults.goal_start_date = args.start_date
    path = save_config(cfg)
    _print_json({"path": str(path), "config": asdict(cfg)})
    return 0


def _add_request_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--type", choices=VARIANT_CHOICES, default=None)
    cmd.add_argument("--dob", default=None, help="Birth date, YYYY-MM-DD")
    cmd.add_argument("--goal-date", default=None, help="Goal date, YYYY-MM-DD")
    cmd.add_argument("--start-date", default=None, help="Goal start date; makes the goal ring advance")
    cmd.add_argument("--device", default=None, choices=list_devices())
    cmd.add_argument("--width", type=int, default=None)
    cmd.add_argument("--height", type=int, default=None)


def _add_output_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--out", default=None, help="Output file path")
    cmd.add_argument("--svg", action="store_true", help="Write the SVG scene instead of a PNG")
    cmd.add_argument("--seed", type=int, default=None, help="Seed for decorative noise")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lifecal", description="Life calendar lock-screen wallpapers")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a wallpaper")
    _add_request_args(render_cmd)
    render_cmd.add_argument(
        "--layout", choices=LAYOUT_CHOICES, default=None, help="Year wallpaper layout, overriding render.year_layout"
    )
    _add_output_args(render_cmd)
    render_cmd.set_defaults(func=cmd_render)

    query_cmd = sub.add_parser("render-query", help="Render a wallpaper from a shortcut query string")
    query_cmd.add_argument("query", help="e.g. 'type=goal&goalDate=2026-12-31'")
    _add_output_args(query_cmd)
    query_cmd.set_defaults(func=cmd_render_query)

    url_cmd = sub.add_parser("url", help="Print the wallpaper URL for a phone shortcut")
    url_cmd.add_argument("--origin", required=True, help="Server origin, e.g. https://example.com")
    _add_request_args(url_cmd)
    url_cmd.set_defaults(func=cmd_url)

    progress_cmd = sub.add_parser("progress", help="Print calendar progress numbers")
    progress_cmd.add_argument("--type", choices=VARIANT_CHOICES, default="life")
    progress_cmd.add_argument("--dob", default=None)
    progress_cmd.add_argument("--goal-date", default=None)
    progress_cmd.add_argument("--start-date", default=None)
    progress_cmd.set_defaults(func=cmd_progress)

    devices_cmd = sub.add_parser("devices", help="List device presets")
    devices_cmd.set_defaults(func=cmd_devices)

    config_cmd = sub.add_parser("config", help="Show or write settings")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print current settings")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write settings file")
    init_cmd.add_argument("--device", choices=list_devices(), default=None)
    init_cmd.add_argument("--layout", choices=LAYOUT_CHOICES, default=None)
    init_cmd.add_argument("--dob", default=None)
    init_cmd.add_argument("--goal-date", default=None)
    init_cmd.add_argument("--start-date", default=None, help="Goal start date; makes the goal ring advance")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.logging.keep_log_files, console=cfg.logging.console)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except RasterizationError as exc:
        _print_json({"success": False, "error": str(exc)})
        return 1
    except ValueError as exc:
        logger.warning(f"invalid input: {exc}", extra={"event": "invalid_input"})
        _print_json({"success": False, "error": str(exc)})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
