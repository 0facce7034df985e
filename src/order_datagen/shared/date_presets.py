"""
Named date range presets for the dashboard date picker.

Each preset ends on "today" and spans a fixed number of calendar days,
counting today.
"""

from datetime import date, timedelta
from enum import Enum

from .exceptions import UnknownPresetError
from .models import DateRange


class DatePreset(str, Enum):
    """Preset labels shown in the date range picker."""

    TODAY = "Today"
    LAST_3_DAYS = "Last 3 Days"
    LAST_7_DAYS = "Last 7 Days"
    LAST_14_DAYS = "Last 14 Days"
    LAST_30_DAYS = "Last 30 Days"


PRESET_SPAN_DAYS: dict[DatePreset, int] = {
    DatePreset.TODAY: 1,
    DatePreset.LAST_3_DAYS: 3,
    DatePreset.LAST_7_DAYS: 7,
    DatePreset.LAST_14_DAYS: 14,
    DatePreset.LAST_30_DAYS: 30,
}

DEFAULT_PRESET = DatePreset.LAST_7_DAYS


def parse_preset(label: str | DatePreset) -> DatePreset:
    """Look up a preset by its label (e.g. ``"Last 7 Days"``) or enum name."""
    if isinstance(label, DatePreset):
        return label
    for preset in DatePreset:
        if label in (preset.value, preset.name):
            return preset
    raise UnknownPresetError(label, [preset.value for preset in DatePreset])


def resolve_preset(label: str | DatePreset, today: date | None = None) -> DateRange:
    """
    Resolve a preset to a concrete date range ending today.

    Args:
        label: Preset label or enum member
        today: Reference day (defaults to the current local date)

    Returns:
        DateRange with the preset name and display label attached

    Raises:
        UnknownPresetError: If the label is not a known preset
    """
    preset = parse_preset(label)
    end = today or date.today()
    start = end - timedelta(days=PRESET_SPAN_DAYS[preset] - 1)
    return DateRange(
        start_date=start,
        end_date=end,
        preset=preset.value,
        label=format_date_range(start, end, preset.value),
    )


def list_presets(today: date | None = None) -> list[DateRange]:
    """Resolve every preset against the same reference day."""
    end = today or date.today()
    return [resolve_preset(preset, end) for preset in DatePreset]


def _format_day(day: date) -> str:
    return f"{day:%b} {day.day}, {day.year}"


def format_date_range(start: date, end: date, preset: str | None = None) -> str:
    """
    Format a date range for display.

    Examples:
        >>> format_date_range(date(2024, 1, 1), date(2024, 1, 1))
        'Jan 1, 2024'
        >>> format_date_range(date(2024, 1, 1), date(2024, 1, 7), "Last 7 Days")
        'Jan 1, 2024 - Jan 7, 2024 (Last 7 Days)'
    """
    if start == end:
        result = _format_day(start)
    else:
        result = f"{_format_day(start)} - {_format_day(end)}"

    if preset:
        result += f" ({preset})"

    return result
