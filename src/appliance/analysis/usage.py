"""Appliance usage: minutes powered within a single period."""

import logging
from dataclasses import dataclass
from typing import Any

from ..config import CalendarConfig
from ..models import Profile, State
from ..validation import validate_events_in_range, validate_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OnSince:
    """The appliance has been powered since ``timestamp``."""

    timestamp: int


def initial_state_usage(state: State, period_length: int) -> int:
    """Usage for a period with no recorded state changes."""
    if state is State.OFF:
        return 0
    return period_length


def accumulate_usage(profile: Profile, period_length: int) -> int:
    """Total powered minutes in [0, period_length) for an already validated profile.

    Algorithm:
    1. If the appliance starts powered, open an interval at 0.
    2. Off closes the open interval and adds its length; a second Off is ignored.
    3. On opens an interval unless one is already open (duplicate On ignored).
    4. An interval still open at the end runs to the end of the period.
    """
    events = profile.sorted_events()
    if not events:
        return initial_state_usage(profile.initial, period_length)

    total = 0
    cursor: OnSince | None = OnSince(0) if profile.initial.powered else None

    for event in events:
        if not event.state.powered:
            if cursor is not None:
                total += event.timestamp - cursor.timestamp
            cursor = None
        elif cursor is None:
            cursor = OnSince(event.timestamp)

    if cursor is not None:
        total += period_length - cursor.timestamp

    return total


def usage(profile: Profile | dict[str, Any], config: CalendarConfig | None = None) -> int:
    """Calculate the minutes an appliance was powered over one day.

    Timestamps are day-local and must lie in [0, period_length].

    Raises:
        InvalidProfileShape, InvalidState: profile is malformed
        TimestampOutOfRange: an event falls outside the day
    """
    config = config or CalendarConfig()
    profile = validate_profile(profile)
    validate_events_in_range(profile.events, config.period_length)
    total = accumulate_usage(profile, config.period_length)
    logger.debug("usage: %d event(s), %d minute(s) powered", len(profile.events), total)
    return total
