"""Per-day usage from a month profile.

Month profiles use epoch timestamps: minutes since midnight on day 1. To get
one day's usage, the events relevant to that day are located, re-based to
day-local minutes and paired with the state the appliance was in when the
day began. The resulting day profile goes through the single-day usage
calculation.
"""

import logging
from bisect import bisect_left
from typing import Any

from ..config import CalendarConfig
from ..errors import PositionOutOfRange
from ..models import DayPositions, DayUsage, DayWindow, Event, Profile, State
from ..validation import validate_day, validate_events_in_range, validate_profile
from .usage import initial_state_usage, usage

logger = logging.getLogger(__name__)


def day_window(day: int, period_length: int) -> DayWindow:
    """Epoch window [start, end) covered by ``day`` (day 1 starts at 0)."""
    return DayWindow(day=day, start=(day - 1) * period_length, end=day * period_length)


def find_day_positions(events: tuple[Event, ...], start: int, end: int) -> DayPositions:
    """Locate the events relevant to the window [start, end).

    ``events`` must be sorted by timestamp. The range is inclusive at both
    ends: ``start`` is the first event at or after the window start (0 if
    there is none) and ``end`` is the first event at or after the window end
    (the last index if there is none), so it can point into the next day.
    """
    timestamps = [e.timestamp for e in events]
    count = len(timestamps)

    start_position = bisect_left(timestamps, start)
    if start_position == count:
        start_position = 0

    end_position = bisect_left(timestamps, end)
    if end_position == count:
        end_position = count - 1

    return DayPositions(start=start_position, end=end_position)


def day_initial_state(
    initial: State, day: int, start_position: int, events: tuple[Event, ...]
) -> State:
    """State of the appliance when ``day`` began.

    This is the state of the last change before the day, or the month's
    initial state if nothing changed before it.
    """
    if day == 1:
        return initial
    if not events or start_position == 0:
        return initial
    return events[start_position - 1].state


def normalise_events_for_day(
    events: tuple[Event, ...], positions: DayPositions, window: DayWindow
) -> tuple[Event, ...]:
    """Re-base the events in ``positions`` to day-local timestamps.

    Events outside the window are dropped; those at or after its end belong
    to a later day.
    """
    if not events or positions.start > positions.end:
        return ()
    if positions.start < 0 or positions.end >= len(events):
        raise PositionOutOfRange("startPosition or endPosition out of bounds")

    normalised = []
    for event in events[positions.start : positions.end + 1]:
        if not window.contains(event.timestamp):
            continue
        normalised.append(Event(state=event.state, timestamp=event.timestamp - window.start))
    return tuple(normalised)


def _usage_for_valid_day(profile: Profile, day: int, config: CalendarConfig) -> int:
    period_length = config.period_length
    events = profile.sorted_events()

    if not events:
        return initial_state_usage(profile.initial, period_length)

    window = day_window(day, period_length)

    # The whole day precedes the first recorded change
    if window.end <= events[0].timestamp:
        logger.debug("day %d: before first event, using initial state", day)
        return initial_state_usage(profile.initial, period_length)

    # The whole day follows the last recorded change
    last = events[-1]
    if window.start >= last.timestamp:
        logger.debug("day %d: after last event (%s)", day, last.state.value)
        return initial_state_usage(last.state, period_length)

    positions = find_day_positions(events, window.start, window.end)
    state = day_initial_state(profile.initial, day, positions.start, events)
    day_events = normalise_events_for_day(events, positions, window)
    logger.debug(
        "day %d: events %d..%d, starts %s, %d event(s) in day",
        day,
        positions.start,
        positions.end,
        state.value,
        len(day_events),
    )

    return usage(Profile(initial=state, events=day_events), config)


def usage_for_day(
    profile: Profile | dict[str, Any], day: Any, config: CalendarConfig | None = None
) -> int:
    """Calculate the minutes an appliance was powered on ``day`` of a month profile.

    Raises:
        InvalidDay: day is not an integer or outside the calendar
        InvalidProfileShape, InvalidState: profile is malformed
        TimestampOutOfRange: an event falls outside the epoch
    """
    config = config or CalendarConfig()
    validate_day(day, config)
    profile = validate_profile(profile)
    validate_events_in_range(profile.events, config.epoch_length)
    return _usage_for_valid_day(profile, day, config)


def usage_for_days(
    profile: Profile | dict[str, Any],
    first_day: int | None = None,
    last_day: int | None = None,
    config: CalendarConfig | None = None,
) -> list[DayUsage]:
    """Usage for each day from ``first_day`` to ``last_day`` inclusive.

    Defaults to every day in the calendar.
    """
    config = config or CalendarConfig()
    first_day = config.first_day if first_day is None else first_day
    last_day = config.last_day if last_day is None else last_day
    validate_day(first_day, config)
    validate_day(last_day, config)

    profile = validate_profile(profile)
    validate_events_in_range(profile.events, config.epoch_length)

    return [
        DayUsage(day=day, minutes=_usage_for_valid_day(profile, day, config))
        for day in range(first_day, last_day + 1)
    ]
