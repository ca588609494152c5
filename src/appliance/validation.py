"""Validation of profiles, timestamps and day numbers."""

from typing import Any

from .config import CalendarConfig
from .errors import InvalidDay, InvalidProfileShape, TimestampOutOfRange
from .models import Event, Profile


def validate_profile(profile: Any) -> Profile:
    """Return ``profile`` as a Profile, converting a raw mapping if needed.

    Raises InvalidProfileShape or InvalidState for bad input.
    """
    if isinstance(profile, Profile):
        return profile
    if profile is None:
        raise InvalidProfileShape("profile must be a valid object")
    return Profile.from_dict(profile)


def validate_timestamp(timestamp: int, upper: int) -> None:
    """Check that a timestamp lies in [0, upper]."""
    if timestamp < 0 or timestamp > upper:
        raise TimestampOutOfRange("events out of range")


def validate_events_in_range(events: tuple[Event, ...], upper: int) -> None:
    for event in events:
        validate_timestamp(event.timestamp, upper)


def validate_day(day: Any, config: CalendarConfig) -> int:
    """Check a day number is an integer within the configured calendar."""
    # bool is an int subclass but never a day number
    if isinstance(day, bool) or not isinstance(day, int):
        raise InvalidDay("must be an integer")
    if day < config.first_day or day > config.last_day:
        raise InvalidDay("day out of range")
    return day
