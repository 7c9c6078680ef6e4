"""Exception hierarchy for the spot price planner."""


class SpotPlannerError(Exception):
    """Base exception for all planner errors."""


class ConfigurationError(SpotPlannerError):
    """Planner configuration is invalid (unknown time zone, malformed file)."""


class MissingStateError(SpotPlannerError):
    """No stored spot price forecast is available to plan against."""
