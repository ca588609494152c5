import json

import pytest

from appliance.errors import InvalidProfileShape, InvalidState
from appliance.models import Event, State
from appliance.profiles import load_profile


def test_load_json_profile(tmp_path):
    path = tmp_path / "day.json"
    path.write_text(json.dumps({"initial": "on", "events": [{"state": "off", "timestamp": 126}]}))
    profile = load_profile(path)
    assert profile.initial is State.ON
    assert profile.events == (Event(State.OFF, 126),)


def test_load_yaml_profile_keeps_on_off_as_states(tmp_path):
    """Unquoted on/off are states, not YAML booleans."""
    path = tmp_path / "day.yaml"
    path.write_text(
        "initial: off\n"
        "events:\n"
        "  - {state: on, timestamp: 30}\n"
        "  - {state: auto-off, timestamp: 80}\n"
    )
    profile = load_profile(path)
    assert profile.initial is State.OFF
    assert profile.events == (Event(State.ON, 30), Event(State.AUTO_OFF, 80))


def test_load_yaml_profile_bad_timestamp(tmp_path):
    path = tmp_path / "day.yml"
    path.write_text("initial: on\nevents:\n  - {state: off, timestamp: soon}\n")
    with pytest.raises(InvalidProfileShape):
        load_profile(path)


def test_load_profile_invalid_state(tmp_path):
    path = tmp_path / "day.json"
    path.write_text(json.dumps({"initial": "standby", "events": []}))
    with pytest.raises(InvalidState, match="invalid initial state"):
        load_profile(path)


def test_load_profile_unparseable(tmp_path):
    path = tmp_path / "day.json"
    path.write_text("{not json")
    with pytest.raises(InvalidProfileShape, match="could not parse"):
        load_profile(path)


def test_load_profile_unsupported_format(tmp_path):
    path = tmp_path / "day.csv"
    path.write_text("on,0\n")
    with pytest.raises(InvalidProfileShape, match="unsupported profile format"):
        load_profile(path)


@pytest.mark.parametrize("name", ["day.json", "day.yaml"])
def test_load_profile_not_utf8(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"initial: \xff\xfe\n")
    with pytest.raises(InvalidProfileShape, match="could not parse"):
        load_profile(path)
