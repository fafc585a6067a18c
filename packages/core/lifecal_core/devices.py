"""Static device geometry presets."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


DEFAULT_DEVICE_ID = "iphone_6_8"


@dataclass(frozen=True)
class DevicePreset:
    id: str
    name: str
    width: int
    height: int
    # Space reserved for the lock-screen clock.
    top_offset: int

    def scaled(self, width: int, height: int) -> "DevicePreset":
        """Same preset resized, keeping the clock reservation proportional to height."""
        offset = int(round(self.top_offset * height / self.height))
        return DevicePreset(id=self.id, name=self.name, width=width, height=height, top_offset=offset)


DEVICES: Mapping[str, DevicePreset] = MappingProxyType(
    {
        p.id: p
        for p in (
            DevicePreset("iphone_se", "iPhone SE (1st gen)", 640, 1136, 360),
            DevicePreset("iphone_6_8", "iPhone 6 / 7 / 8", 750, 1334, 420),
            DevicePreset("iphone_6_8_plus", "iPhone 6 / 7 / 8 Plus", 1242, 2208, 690),
            DevicePreset("iphone_xr_11", "iPhone XR / 11", 828, 1792, 560),
            DevicePreset("iphone_x_11_pro", "iPhone X / XS / 11 Pro", 1125, 2436, 760),
            DevicePreset("iphone_12_14", "iPhone 12 / 13 / 14", 1170, 2532, 790),
            DevicePreset("iphone_15_16", "iPhone 14 Pro / 15 / 16", 1179, 2556, 800),
            DevicePreset("iphone_pro_max", "iPhone 15 / 16 Pro Max", 1290, 2796, 870),
        )
    }
)


def list_devices() -> list[str]:
    return sorted(DEVICES.keys())


def get_device(device_id: str | None) -> DevicePreset:
    if not device_id:
        return DEVICES[DEFAULT_DEVICE_ID]
    return DEVICES.get(device_id, DEVICES[DEFAULT_DEVICE_ID])
