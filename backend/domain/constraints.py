"""Domain-level validation rules for booking requests."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import time
from typing import Union

from backend.domain.errors import (
    InvalidNumberOfPeopleError,
    InvalidTimeFormatError,
    InvalidTimeIntervalError,
)
from backend.domain.models import TimeWindow


TIME_OF_DAY_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])$")

TimeInput = Union[str, time]


@dataclass(frozen=True)
class BookingRules:
    slot_granularity_minutes: int = 15
    min_duration_minutes: int = 30
    max_duration_minutes: int = 300
    min_people: int = 2
    # Documented upper bound for party size; never enforced by allocation.
    advisory_max_people: int = 20


def validate_booking_rules(rules: BookingRules) -> None:
    if rules.slot_granularity_minutes <= 0 or 60 % rules.slot_granularity_minutes != 0:
        raise ValueError("slot_granularity_minutes must be a positive divisor of 60")
    if rules.min_duration_minutes <= 0:
        raise ValueError("min_duration_minutes must be > 0")
    if rules.min_duration_minutes % rules.slot_granularity_minutes != 0:
        raise ValueError("min_duration_minutes must be a multiple of slot_granularity_minutes")
    if rules.max_duration_minutes < rules.min_duration_minutes:
        raise ValueError("max_duration_minutes must be >= min_duration_minutes")
    if rules.max_duration_minutes % rules.slot_granularity_minutes != 0:
        raise ValueError("max_duration_minutes must be a multiple of slot_granularity_minutes")
    if rules.min_people < 1:
        raise ValueError("min_people must be >= 1")
    if rules.advisory_max_people < rules.min_people:
        raise ValueError("advisory_max_people must be >= min_people")


def _describe_duration(minutes: int) -> str:
    if minutes % 60 == 0:
        hours = minutes // 60
        return f"{hours} hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} minutes"


def parse_time_of_day(value: TimeInput, label: str) -> time:
    """Parse a strict HH:mm string; `time` instances are truncated to the minute."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    match = TIME_OF_DAY_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidTimeFormatError(
            f"Invalid {label} time format. Please use HH:mm format (e.g., 14:30)."
        )
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def validate_interval(
    start: TimeInput,
    end: TimeInput,
    rules: BookingRules = BookingRules(),
) -> TimeWindow:
    """Validate a requested booking interval and return it as a window.

    Checks run in a fixed order: format, ordering, grid alignment, then the
    duration bounds, so the first violated rule decides the message.
    """
    start_time = parse_time_of_day(start, "start")
    end_time = parse_time_of_day(end, "end")

    if start_time >= end_time:
        raise InvalidTimeIntervalError("End time must be after start time.")

    granularity = rules.slot_granularity_minutes
    if start_time.minute % granularity != 0 or end_time.minute % granularity != 0:
        raise InvalidTimeIntervalError(
            f"Booking times must be in {granularity}-minute intervals."
        )

    window = TimeWindow(start=start_time, end=end_time)
    if window.duration_minutes < rules.min_duration_minutes:
        raise InvalidTimeIntervalError(
            f"Booking duration must be at least {rules.min_duration_minutes} minutes."
        )
    if window.duration_minutes > rules.max_duration_minutes:
        raise InvalidTimeIntervalError(
            f"Booking duration cannot exceed {_describe_duration(rules.max_duration_minutes)}."
        )
    return window


def validate_number_of_people(number_of_people: int, rules: BookingRules = BookingRules()) -> None:
    if number_of_people < rules.min_people:
        raise InvalidNumberOfPeopleError(
            f"Number of people should be greater than {rules.min_people - 1}."
        )
