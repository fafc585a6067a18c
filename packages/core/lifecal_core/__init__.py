"""Core services for settings, logging, calendar math, and device presets."""

from .config import AppConfig, config_path, load_config, save_config
from .devices import DEFAULT_DEVICE_ID, DevicePreset, get_device, list_devices
from .models import ProgressData, Variant
from .progress import (
    TOTAL_LIFE_WEEKS,
    goal_progress,
    life_progress,
    parse_date,
    progress_for,
    year_progress,
)

__all__ = [
    "AppConfig",
    "DEFAULT_DEVICE_ID",
    "DevicePreset",
    "ProgressData",
    "TOTAL_LIFE_WEEKS",
    "Variant",
    "config_path",
    "get_device",
    "goal_progress",
    "life_progress",
    "list_devices",
    "load_config",
    "parse_date",
    "progress_for",
    "save_config",
    "year_progress",
]
