import pytest

from appliance.analysis.usage import initial_state_usage, usage
from appliance.config import CalendarConfig
from appliance.errors import InvalidProfileShape, InvalidState, TimestampOutOfRange
from appliance.models import Event, Profile, State


def test_usage_initial_on():
    """Test a simple profile that starts on."""
    profile = {
        "initial": "on",
        "events": [
            {"timestamp": 126, "state": "off"},
            {"timestamp": 833, "state": "on"},
        ],
    }
    assert usage(profile) == 126 + (1440 - 833)


def test_usage_initial_off():
    """Test a simple profile that starts off."""
    profile = {
        "initial": "off",
        "events": [
            {"timestamp": 30, "state": "on"},
            {"timestamp": 80, "state": "off"},
            {"timestamp": 150, "state": "on"},
            {"timestamp": 656, "state": "off"},
        ],
    }
    assert usage(profile) == (80 - 30) + (656 - 150)


def test_usage_no_events():
    """An appliance with no state changes is on all day or off all day."""
    assert usage({"initial": "on", "events": []}) == 1440
    assert usage({"initial": "off", "events": []}) == 0


def test_usage_duplicate_on_events():
    """A second On while already on does not restart the interval."""
    profile = {
        "initial": "off",
        "events": [
            {"timestamp": 30, "state": "on"},
            {"timestamp": 80, "state": "on"},
            {"timestamp": 150, "state": "off"},
            {"timestamp": 656, "state": "on"},
        ],
    }
    assert usage(profile) == (150 - 30) + (1440 - 656)


def test_usage_duplicate_off_events():
    """A second Off while already off adds nothing."""
    profile = {
        "initial": "on",
        "events": [
            {"timestamp": 30, "state": "on"},
            {"timestamp": 80, "state": "off"},
            {"timestamp": 150, "state": "off"},
            {"timestamp": 656, "state": "on"},
        ],
    }
    assert usage(profile) == 80 + (1440 - 656)


def test_usage_duplicates_do_not_change_result():
    """Inserting a repeat next to an existing event leaves the total alone."""
    base = [
        Event(State.ON, 100),
        Event(State.OFF, 400),
        Event(State.ON, 900),
        Event(State.OFF, 1200),
    ]
    expected = usage(Profile(State.OFF, base))

    for i, event in enumerate(base):
        repeated = base[: i + 1] + [Event(event.state, event.timestamp + 1)] + base[i + 1 :]
        assert usage(Profile(State.OFF, repeated)) == expected


def test_usage_unsorted_events():
    """Events are sorted before scanning, without touching the caller's profile."""
    events = (Event(State.ON, 833), Event(State.OFF, 126))
    profile = Profile(State.ON, events)

    assert usage(profile) == 126 + (1440 - 833)
    assert profile.events == events


def test_usage_event_at_period_end():
    """A timestamp equal to the period length is accepted and adds nothing."""
    profile = {"initial": "off", "events": [{"timestamp": 1440, "state": "on"}]}
    assert usage(profile) == 0


def test_usage_auto_off_counts_as_on():
    assert usage({"initial": "auto-off", "events": []}) == 1440
    profile = {
        "initial": "off",
        "events": [
            {"timestamp": 100, "state": "auto-off"},
            {"timestamp": 300, "state": "off"},
        ],
    }
    assert usage(profile) == 200


def test_usage_initial_auto_off_with_events():
    """Starting auto-off counts as powered from the start of the period."""
    profile = {"initial": "auto-off", "events": [{"timestamp": 300, "state": "off"}]}
    assert usage(profile) == 300


def test_usage_timestamps_out_of_range():
    profile = {
        "initial": "on",
        "events": [
            {"timestamp": -30, "state": "on"},
            {"timestamp": 80, "state": "off"},
            {"timestamp": 150, "state": "off"},
            {"timestamp": 1500, "state": "on"},
        ],
    }
    with pytest.raises(TimestampOutOfRange, match="events out of range"):
        usage(profile)


def test_usage_invalid_initial_state():
    profile = {"initial": "error", "events": [{"timestamp": 20, "state": "on"}]}
    with pytest.raises(InvalidState, match="invalid initial state"):
        usage(profile)


def test_usage_invalid_event_state():
    profile = {"initial": "on", "events": [{"timestamp": 20, "state": "standby"}]}
    with pytest.raises(InvalidState, match="invalid state"):
        usage(profile)


@pytest.mark.parametrize(
    "profile, message",
    [
        (None, "profile must be a valid object"),
        ("on", "profile must be a valid object"),
        ({"events": []}, "profile must have an initial state"),
        ({"initial": "on"}, "profile must have an events array"),
        ({"initial": "on", "events": "none"}, "profile.events must be an array"),
    ],
)
def test_usage_invalid_profile_shape(profile, message):
    with pytest.raises(InvalidProfileShape, match=message):
        usage(profile)


def test_usage_custom_period_length():
    """Period length is configurable."""
    config = CalendarConfig(period_length=60)
    profile = {"initial": "on", "events": [{"timestamp": 20, "state": "off"}, {"timestamp": 50, "state": "on"}]}
    assert usage(profile, config) == 20 + 10

    with pytest.raises(TimestampOutOfRange):
        usage({"initial": "on", "events": [{"timestamp": 61, "state": "off"}]}, config)


def test_initial_state_usage():
    assert initial_state_usage(State.OFF, 1440) == 0
    assert initial_state_usage(State.ON, 1440) == 1440
    assert initial_state_usage(State.AUTO_OFF, 1440) == 1440
