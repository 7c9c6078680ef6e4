"""
Immutable value types for spot price planning.

All instants are timezone-aware; time slots are expressed in the planner's
local time zone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from enum import Enum, IntEnum
from typing import Callable, Mapping, Optional, Tuple

from spot_planner.config import WEEKDAY_NAMES
from spot_planner.cost import total_cost
from spot_planner.zoned_time import resolve_time_zone


class Weekday(IntEnum):
    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @classmethod
    def parse(cls, value):
        """Parse "Mon", "monday", "THU" or 3 into a Weekday."""
        if isinstance(value, Weekday):
            return value
        if isinstance(value, int):
            return cls(value)
        name = str(value).strip().lower()
        for day, (short, full) in enumerate(WEEKDAY_NAMES):
            if name in (short, full):
                return cls(day)
        raise ValueError(f"Unknown weekday: {value!r}")


class PlanningStrategy(Enum):
    LOWEST_COST = "lowest"
    HIGHEST_COST = "highest"


class SelectionMode(Enum):
    CONSECUTIVE = "consecutive"
    FRAGMENTED = "fragmented"


class SlotEnd(Enum):
    END_OF_DAY = "24:00"


def _require_aware(value, name):
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware, got {value!r}")


@dataclass(frozen=True)
class SpotPrice:
    """A quoted energy price for the interval [start, end)."""

    start: datetime
    end: datetime
    market_price: float
    market_price_tax: float
    sourcing_markup_price: float
    energy_tax_price: float = 0.0
    id: Optional[str] = None
    source: Optional[str] = None

    def __post_init__(self):
        _require_aware(self.start, "start")
        _require_aware(self.end, "end")
        if self.start >= self.end:
            raise ValueError(f"Spot price must start before it ends: {self.start} >= {self.end}")

    @property
    def total_price(self) -> float:
        return (self.market_price
                + self.market_price_tax
                + self.sourcing_markup_price
                + self.energy_tax_price)

    @property
    def duration_seconds(self) -> int:
        return int((self.end - self.start).total_seconds())


@dataclass(frozen=True)
class LoadProfileSection:
    """Constant power draw for a fixed duration."""

    duration_seconds: int
    power_draw_watt: float

    def __post_init__(self):
        if self.duration_seconds <= 0:
            raise ValueError(f"Section duration must be positive, got {self.duration_seconds}")
        if self.power_draw_watt < 0:
            raise ValueError(f"Power draw must be non-negative, got {self.power_draw_watt}")

    @property
    def duration(self) -> timedelta:
        return timedelta(seconds=self.duration_seconds)

    @property
    def total_power_draw_watt_seconds(self) -> float:
        return self.duration_seconds * self.power_draw_watt


@dataclass(frozen=True)
class LoadProfile:
    """Sections run back to back, in order, once the load starts."""

    sections: Tuple[LoadProfileSection, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def total_duration_seconds(self) -> int:
        return sum(section.duration_seconds for section in self.sections)

    @property
    def total_power_draw_watt_seconds(self) -> float:
        return sum(section.total_power_draw_watt_seconds for section in self.sections)


@dataclass(frozen=True)
class TimeSlot:
    """
    A plannable window of local clock time within one day.

    An end of midnight means "through the end of the day" and is stored as
    ``SlotEnd.END_OF_DAY``. Any other end at or before the start (22:00 -
    02:00, 23:00 - 00:30) gives a window no spot price fits in.
    """

    start: time
    end: time | SlotEnd

    def __post_init__(self):
        if not isinstance(self.start, time):
            raise ValueError(f"Time slot start must be a time of day, got {self.start!r}")
        if isinstance(self.end, time) and self.end == time(0, 0):
            object.__setattr__(self, "end", SlotEnd.END_OF_DAY)

    @classmethod
    def parse(cls, start, end):
        return cls(_parse_time(start), _parse_time(end))

    @property
    def ends_at_end_of_day(self) -> bool:
        return self.end is SlotEnd.END_OF_DAY


def _parse_time(value):
    """Parse HH:MM or HH:MM:SS (24:00 meaning end of day)."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        # YAML 1.1 reads unquoted 14:00 as a sexagesimal integer
        raise ValueError(f"Time of day must be a string like \"14:00:00\", got {value!r}")
    text = str(value).strip()
    if text in ("24:00", "24:00:00"):
        return SlotEnd.END_OF_DAY
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time of day: {value!r}")
    return time(int(parts[0]), int(parts[1]), int(parts[2]) if len(parts) > 2 else 0)


@dataclass(frozen=True)
class PlannerConfig:
    plannable_local_time_slots: Mapping[Weekday, Tuple[TimeSlot, ...]]
    local_time_zone: str
    load_profile: LoadProfile = field(default_factory=LoadProfile)

    def __post_init__(self):
        slots = {Weekday.parse(day): tuple(day_slots)
                 for day, day_slots in self.plannable_local_time_slots.items()}
        object.__setattr__(self, "plannable_local_time_slots", slots)

    def time_zone(self):
        """Resolve ``local_time_zone``; raises ConfigurationError if unknown."""
        return resolve_time_zone(self.local_time_zone)

    def time_slots_for(self, weekday) -> Tuple[TimeSlot, ...]:
        return self.plannable_local_time_slots.get(Weekday(weekday), ())


@dataclass(frozen=True)
class PlanningRequest:
    spot_prices: Tuple[SpotPrice, ...]
    load_profile: LoadProfile
    strategy: PlanningStrategy = PlanningStrategy.LOWEST_COST
    after: Optional[datetime] = None
    before: Optional[datetime] = None
    mode: SelectionMode = SelectionMode.CONSECUTIVE

    def __post_init__(self):
        object.__setattr__(self, "spot_prices", tuple(self.spot_prices))
        for name in ("after", "before"):
            bound = getattr(self, name)
            if bound is not None:
                _require_aware(bound, name)


@dataclass(frozen=True)
class PlanningResponse:
    spot_prices: Tuple[SpotPrice, ...]
    load_profile: LoadProfile

    def __post_init__(self):
        object.__setattr__(self, "spot_prices", tuple(self.spot_prices))

    def total_cost(self, price_fn: Optional[Callable[[SpotPrice], float]] = None) -> float:
        return total_cost(self.spot_prices, self.load_profile, price_fn)

    @property
    def total_duration_seconds(self) -> int:
        return sum(spot_price.duration_seconds for spot_price in self.spot_prices)

    @property
    def covers_load(self) -> bool:
        return self.total_duration_seconds >= self.load_profile.total_duration_seconds


@dataclass(frozen=True)
class SpotPricesState:
    """Stored forecast of upcoming spot prices."""

    future_spot_prices: Tuple[SpotPrice, ...]
    last_from: datetime

    def __post_init__(self):
        object.__setattr__(self, "future_spot_prices", tuple(self.future_spot_prices))
