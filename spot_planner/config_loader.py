"""Load the planner configuration from a YAML file."""

import logging

import yaml

from spot_planner.exceptions import ConfigurationError
from spot_planner.models import LoadProfile, LoadProfileSection, PlannerConfig, TimeSlot, Weekday

_LOGGER = logging.getLogger(__name__)


def parse_load_profile(data):
    """Build a LoadProfile from ``{"sections": [{"durationSeconds": .., "powerDrawWatt": ..}]}``."""
    sections = (data or {}).get("sections") or []
    return LoadProfile(tuple(
        LoadProfileSection(
            duration_seconds=int(section["durationSeconds"]),
            power_draw_watt=float(section["powerDrawWatt"]),
        )
        for section in sections
    ))


def parse_planner_config(data):
    """
    Build a PlannerConfig from the deserialized YAML document.

    Raises
    ------
    ConfigurationError
        If a field is missing or invalid, or the time zone is unknown.
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Planner configuration must be a mapping")

    try:
        time_slots = {
            Weekday.parse(day): tuple(TimeSlot.parse(slot["from"], slot["till"])
                                      for slot in (slots or []))
            for day, slots in (data.get("plannableLocalTimeSlots") or {}).items()
        }
        config = PlannerConfig(
            plannable_local_time_slots=time_slots,
            local_time_zone=data["localTimeZone"],
            load_profile=parse_load_profile(data.get("loadProfile")),
        )
    except KeyError as e:
        raise ConfigurationError(f"Missing planner configuration field {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid planner configuration: {e}") from e

    # fail on an unknown zone at load time rather than on the first plan
    config.time_zone()
    return config


def load_planner_config(path):
    """Read and parse the planner configuration at ``path``."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read planner configuration {path}: {e}") from e

    try:
        config = parse_planner_config(data)
    except ConfigurationError as e:
        raise ConfigurationError(f"{path}: {e}") from e

    _LOGGER.info("Loaded planner config from %s", path)
    return config
