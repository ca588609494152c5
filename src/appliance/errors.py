"""Errors raised while validating profiles and day numbers."""


class ProfileError(ValueError):
    """Base exception for invalid profile input."""

    kind = "profile_error"


class InvalidProfileShape(ProfileError):
    """The profile is missing, or has a malformed, initial state or events list."""

    kind = "invalid_profile_shape"


class InvalidState(ProfileError):
    """A state outside on / off / auto-off."""

    kind = "invalid_state"


class TimestampOutOfRange(ProfileError):
    """An event timestamp outside the day or epoch it should fall in."""

    kind = "timestamp_out_of_range"


class InvalidDay(ProfileError):
    """A day number that is not an integer or lies outside the calendar."""

    kind = "invalid_day"


class PositionOutOfRange(ProfileError):
    """An event index range that does not fit the event sequence."""

    kind = "position_out_of_range"
