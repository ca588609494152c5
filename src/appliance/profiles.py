"""Loading profiles from JSON or YAML files."""

import json
from pathlib import Path

import yaml

from .errors import InvalidProfileShape
from .models import Profile


def load_profile(path: Path) -> Profile:
    """Load a profile from a .json, .yaml or .yml file.

    The file holds the raw profile shape:

        initial: on
        events:
          - {state: off, timestamp: 126}
          - {state: on, timestamp: 833}
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise InvalidProfileShape(f"could not parse {path.name}: {e}") from e
        elif path.suffix.lower() in (".yaml", ".yml"):
            try:
                # BaseLoader keeps 'on'/'off' as strings rather than YAML 1.1 booleans
                data = yaml.load(f, Loader=yaml.BaseLoader)
            except (yaml.YAMLError, UnicodeDecodeError) as e:
                raise InvalidProfileShape(f"could not parse {path.name}: {e}") from e
            data = _coerce_yaml_timestamps(data)
        else:
            raise InvalidProfileShape(f"unsupported profile format: {path.suffix or path.name}")

    return Profile.from_dict(data)


def _coerce_yaml_timestamps(data):
    """BaseLoader reads every scalar as a string; turn integer timestamps back into ints."""
    if not isinstance(data, dict) or not isinstance(data.get("events"), list):
        return data
    events = []
    for event in data["events"]:
        if isinstance(event, dict) and isinstance(event.get("timestamp"), str):
            try:
                event = {**event, "timestamp": int(event["timestamp"])}
            except ValueError:
                pass  # left as a string; rejected by Profile.from_dict
        events.append(event)
    return {**data, "events": events}
