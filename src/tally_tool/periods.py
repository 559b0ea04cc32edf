"""Normalización de instantes al inicio de día, semana o mes (zona horaria)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo

from dateutil import tz

from tally_tool.model import Period

_WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass(frozen=True)
class CalendarConfig:
    """Timezone and week-start convention shared by every computation.

    ``week_start`` is a Python weekday index (Monday=0 .. Sunday=6).
    """

    zone: tzinfo = field(default_factory=tz.tzlocal)
    week_start: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.week_start <= 6:
            raise ValueError(f"week_start must be 0-6, got {self.week_start}")

    @classmethod
    def from_names(
        cls, timezone: str | None = None, week_start: str | int = 0
    ) -> CalendarConfig:
        """Build a config from an IANA zone name and a weekday name or index.

        Args:
            timezone: e.g. ``"Europe/Madrid"``; empty or None uses the system zone.
            week_start: ``"sunday"``, ``"mon"``, ``6``...

        Raises:
            ValueError: If the zone or the weekday is unknown.
        """
        if timezone:
            zone = tz.gettz(timezone)
            if zone is None:
                raise ValueError(f"Unknown timezone: {timezone}")
        else:
            zone = tz.tzlocal()
        return cls(zone=zone, week_start=parse_week_start(week_start))


def parse_week_start(value: str | int) -> int:
    """Parse a weekday name/prefix or index into Monday=0 .. Sunday=6."""
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"Invalid week start: {value}")
    text = value.strip().lower()
    if text.isdigit():
        return parse_week_start(int(text))
    if len(text) >= 3:
        for idx, name in enumerate(_WEEKDAYS):
            if name.startswith(text):
                return idx
    raise ValueError(f"Invalid week start: {value}")


def now_in(config: CalendarConfig) -> datetime:
    """Current instant expressed in the calendar's timezone."""
    return datetime.now(tz=config.zone)


def to_local(instant: datetime, config: CalendarConfig) -> datetime:
    """Express ``instant`` in the calendar timezone.

    Naive datetimes are taken as wall time in that zone.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=config.zone)
    return instant.astimezone(config.zone)


def start_of_day(day: date, config: CalendarConfig) -> datetime:
    """First existing instant of ``day`` in the calendar timezone.

    Zones that skip midnight on a DST change start the day at the first
    wall time after the gap.
    """
    midnight = datetime(day.year, day.month, day.day, tzinfo=config.zone)
    return tz.resolve_imaginary(midnight)


def period_start_date(day: date, period: Period, config: CalendarConfig) -> date:
    """Local date on which the period containing ``day`` begins."""
    if period is Period.WEEK:
        return day - timedelta(days=(day.weekday() - config.week_start) % 7)
    if period is Period.MONTH:
        return day.replace(day=1)
    return day


def normalize(instant: datetime, period: Period, config: CalendarConfig) -> datetime:
    """Map an instant to the start of the day, week or month containing it.

    Args:
        instant: Any datetime (naive = wall time in ``config.zone``).
        period: Granularity.
        config: Calendar configuration.

    Returns:
        Timezone-aware start of period in ``config.zone``.
    """
    local_day = to_local(instant, config).date()
    return start_of_day(period_start_date(local_day, period, config), config)


def period_label(period_start: datetime, period: Period) -> str:
    """Display label: ``Jan 15, 2024``, ``Week of Jan 15, 2024`` or ``January 2024``."""
    if period is Period.MONTH:
        return f"{period_start:%B} {period_start.year}"
    day_label = f"{period_start:%b} {period_start.day}, {period_start.year}"
    if period is Period.WEEK:
        return f"Week of {day_label}"
    return day_label
