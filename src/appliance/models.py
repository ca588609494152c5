"""Data models for appliance state profiles."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import InvalidProfileShape, InvalidState


class State(Enum):
    """An appliance power state as recorded in a profile."""

    ON = "on"
    OFF = "off"
    AUTO_OFF = "auto-off"  # switched off by the energy-saving device

    @classmethod
    def parse(cls, value: Any, message: str = "invalid state") -> "State":
        """Map a wire value ('on', 'off', 'auto-off') or a State to a State."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidState(message) from None

    @property
    def powered(self) -> bool:
        """Whether the state counts as 'on' for plain usage.

        Usage does not distinguish the device's auto-off from power, only
        savings does.
        """
        return self is not State.OFF


@dataclass(frozen=True)
class Event:
    """A single state change."""

    state: State
    timestamp: int  # minutes since the start of the period or epoch

    @classmethod
    def from_dict(cls, data: Any) -> "Event":
        if not isinstance(data, dict):
            raise InvalidProfileShape("each event must be an object")
        if "state" not in data or "timestamp" not in data:
            raise InvalidProfileShape("each event must have a state and a timestamp")
        timestamp = data["timestamp"]
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise InvalidProfileShape("event timestamp must be an integer")
        return cls(state=State.parse(data["state"]), timestamp=timestamp)

    def to_dict(self) -> dict:
        return {"state": self.state.value, "timestamp": self.timestamp}


@dataclass(frozen=True)
class Profile:
    """An initial state plus the state changes that follow it."""

    initial: State
    events: tuple[Event, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of events but always store an immutable tuple
        object.__setattr__(self, "events", tuple(self.events))

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        """Build a profile from the raw ``{"initial": ..., "events": [...]}`` shape."""
        if not isinstance(data, dict):
            raise InvalidProfileShape("profile must be a valid object")
        if "initial" not in data:
            raise InvalidProfileShape("profile must have an initial state")
        initial = State.parse(data["initial"], message="invalid initial state")
        if "events" not in data:
            raise InvalidProfileShape("profile must have an events array")
        events = data["events"]
        if not isinstance(events, (list, tuple)):
            raise InvalidProfileShape("profile.events must be an array")
        return cls(initial=initial, events=tuple(Event.from_dict(e) for e in events))

    def sorted_events(self) -> tuple[Event, ...]:
        """Events ordered by timestamp. The profile itself is left untouched."""
        return tuple(sorted(self.events, key=lambda e: e.timestamp))

    def to_dict(self) -> dict:
        return {
            "initial": self.initial.value,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class DayWindow:
    """The closed-open epoch window [start, end) covered by one day."""

    day: int
    start: int
    end: int

    def contains(self, timestamp: int) -> bool:
        return self.start <= timestamp < self.end


@dataclass(frozen=True)
class DayPositions:
    """Inclusive index range of the events relevant to a day.

    ``end`` may point at the first event of the following day; it is kept
    so the caller can look ahead, and dropped during normalisation.
    """

    start: int
    end: int


@dataclass
class DayUsage:
    """Usage for one day of a month profile."""

    day: int
    minutes: int

    @property
    def hours(self) -> float:
        return round(self.minutes / 60, 2)
