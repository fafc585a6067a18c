"""Typed progress models shared by the date math and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Variant(str, Enum):
    LIFE = "life"
    YEAR = "year"
    GOAL = "goal"

    @classmethod
    def resolve(cls, value: "str | Variant | None") -> "Variant":
        """Unknown or empty values fall back to LIFE."""
        if isinstance(value, Variant):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.LIFE


@dataclass(frozen=True)
class ProgressData:
    total: int
    elapsed: int
    remaining: int
    variant: Variant = Variant.LIFE
    label: str | None = None

    @property
    def fraction(self) -> float:
        """elapsed/total clamped to [0, 1]; 0 when total is 0."""
        if self.total <= 0:
            return 0.0
        return min(1.0, max(0.0, self.elapsed / self.total))

    @property
    def remaining_fraction(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(1.0, max(0.0, self.remaining / self.total))

    def as_dict(self) -> dict[str, object]:
        return {
            "total": self.total,
            "elapsed": self.elapsed,
            "remaining": self.remaining,
            "label": self.label,
            "variant": self.variant.value,
        }
