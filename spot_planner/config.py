SECONDS_PER_HOUR = 3600
PRICE_UNIT_SCALE = 1000   # prices are per kWh, power draw is in W

CONFIG_PATH = "/configs/config.yaml"     # planner configuration (YAML)
STATE_FILE_PATH = "/state/state.yaml"    # stored spot price forecast (YAML)

PLANNING_STRATEGY = "lowest"  # "lowest" or "highest"
LOG_LEVEL = "INFO"

WEEKDAY_NAMES = (
    # short name, full name
    ("mon", "monday"),
    ("tue", "tuesday"),
    ("wed", "wednesday"),
    ("thu", "thursday"),
    ("fri", "friday"),
    ("sat", "saturday"),
    ("sun", "sunday"),
)
