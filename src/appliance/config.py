"""Calendar configuration: period length and the valid day range.

Values come from the defaults below, optionally overridden by a YAML file
and then by environment variables (a .env file is honoured).
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path

import yaml
from dotenv import load_dotenv

MINUTES_PER_DAY = 1440
FIRST_DAY = 1
LAST_DAY = 365

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "calendar.yaml"

ENV_VARS = {
    "period_length": "APPLIANCE_PERIOD_LENGTH",
    "first_day": "APPLIANCE_FIRST_DAY",
    "last_day": "APPLIANCE_LAST_DAY",
}


@dataclass(frozen=True)
class CalendarConfig:
    """Length of one period (day) in minutes and the days a month profile may cover."""

    period_length: int = MINUTES_PER_DAY
    first_day: int = FIRST_DAY
    last_day: int = LAST_DAY

    def __post_init__(self):
        if self.period_length <= 0:
            raise ValueError(f"period_length must be positive, got {self.period_length}")
        if not 1 <= self.first_day <= self.last_day:
            raise ValueError(
                f"first_day/last_day must satisfy 1 <= first_day <= last_day, "
                f"got {self.first_day}/{self.last_day}"
            )

    @property
    def epoch_length(self) -> int:
        """Minutes from the start of day 1 to the end of the last day."""
        return self.last_day * self.period_length


def _parse_int(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_config(config_path: Path | None = None) -> CalendarConfig:
    """Load calendar configuration.

    A missing config file is not an error; the defaults are used instead.
    """
    load_dotenv()

    values: dict[str, int] = {}
    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name} must contain a mapping")
        calendar = data.get("calendar") or {}
        if not isinstance(calendar, dict):
            raise ValueError("calendar must be a mapping")
        for key in ENV_VARS:
            if key in calendar:
                values[key] = _parse_int(key, calendar[key])

    for key, env_var in ENV_VARS.items():
        raw = os.environ.get(env_var)
        if raw:
            values[key] = _parse_int(env_var, raw)

    return replace(CalendarConfig(), **values)
