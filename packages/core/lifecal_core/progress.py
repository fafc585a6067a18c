"""Calendar math for the three wallpaper variants.

Every function takes an optional clock argument; production callers leave it
unset and get the local date.
"""

from __future__ import annotations

from datetime import date, datetime

from .models import ProgressData, Variant


LIFE_EXPECTANCY_YEARS = 80
WEEKS_PER_YEAR = 52
TOTAL_LIFE_WEEKS = LIFE_EXPECTANCY_YEARS * WEEKS_PER_YEAR


def parse_date(value: str | date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValueError(f"invalid date: {value!r} (expected YYYY-MM-DD)") from None


def _today(today: date | datetime | None) -> date:
    if today is None:
        return date.today()
    return parse_date(today)


def life_progress(birth_date: str | date, today: date | datetime | None = None) -> ProgressData:
    born = parse_date(birth_date)
    weeks_lived = max(0, (_today(today) - born).days // 7)
    return ProgressData(
        total=TOTAL_LIFE_WEEKS,
        elapsed=min(weeks_lived, TOTAL_LIFE_WEEKS),
        remaining=max(0, TOTAL_LIFE_WEEKS - weeks_lived),
        variant=Variant.LIFE,
        label=f"{LIFE_EXPECTANCY_YEARS} Years in Weeks",
    )


def year_progress(now: date | datetime | None = None) -> ProgressData:
    today = _today(now)
    start = date(today.year, 1, 1)
    end = date(today.year, 12, 31)
    total_days = (end - start).days + 1
    current_day = min(max(0, (today - start).days + 1), total_days)
    return ProgressData(
        total=total_days,
        elapsed=current_day,
        remaining=total_days - current_day,
        variant=Variant.YEAR,
        label=str(today.year),
    )


def goal_progress(
    target_date: str | date,
    today: date | datetime | None = None,
    start_date: str | date | None = None,
) -> ProgressData:
    target = parse_date(target_date)
    current = _today(today)
    days_remaining = max(0, (target - current).days)

    if start_date is None:
        # Countdown only: total tracks the remaining days, so the ring stays empty.
        total = days_remaining + 1
        elapsed = 0
    else:
        start = parse_date(start_date)
        total = max(0, (target - start).days)
        elapsed = min(max(0, (current - start).days), total)

    return ProgressData(
        total=total,
        elapsed=elapsed,
        remaining=days_remaining,
        variant=Variant.GOAL,
        label="Days Until Goal",
    )


def progress_for(
    variant: str | Variant | None,
    birth_date: str | date = "2000-01-01",
    goal_date: str | date = "2025-12-31",
    start_date: str | date | None = None,
    today: date | datetime | None = None,
) -> ProgressData:
    kind = Variant.resolve(variant)
    if kind is Variant.YEAR:
        return year_progress(today)
    if kind is Variant.GOAL:
        return goal_progress(goal_date, today=today, start_date=start_date)
    return life_progress(birth_date, today=today)
