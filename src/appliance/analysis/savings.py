"""Energy saved by the device's automatic shutoffs.

Only time the appliance spends off because the device switched it off counts.
A manual Off never starts a savings window, and a manual Off after an
auto-off does not end one: the device was the original trigger, so the
window stays open until the appliance is next switched on.
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..config import CalendarConfig
from ..models import Profile, State
from ..validation import validate_events_in_range, validate_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingAutoOffSince:
    """The device switched the appliance off at ``timestamp`` and it has stayed off."""

    timestamp: int


def savings(profile: Profile | dict[str, Any], config: CalendarConfig | None = None) -> int:
    """Calculate the minutes saved by auto-off over one day.

    Raises:
        InvalidProfileShape, InvalidState: profile is malformed
        TimestampOutOfRange: an event falls outside the day
    """
    config = config or CalendarConfig()
    profile = validate_profile(profile)
    period_length = config.period_length
    validate_events_in_range(profile.events, period_length)

    events = profile.sorted_events()
    if not events:
        return period_length if profile.initial is State.AUTO_OFF else 0

    total = 0
    pending: PendingAutoOffSince | None = (
        PendingAutoOffSince(0) if profile.initial is State.AUTO_OFF else None
    )

    for event in events:
        if event.state is State.ON:
            if pending is not None:
                total += event.timestamp - pending.timestamp
            pending = None
        elif event.state is State.AUTO_OFF:
            # The first auto-off of a run opens the window
            if pending is None:
                pending = PendingAutoOffSince(event.timestamp)
        # A manual Off leaves any pending window as it is

    if pending is not None:
        total += period_length - pending.timestamp

    logger.debug("savings: %d event(s), %d minute(s) saved", len(events), total)
    return total
