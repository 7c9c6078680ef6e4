from datetime import time

import pytest

from spot_planner.models import (
    LoadProfile,
    LoadProfileSection,
    PlannerConfig,
    TimeSlot,
    Weekday,
)


@pytest.fixture
def five_hour_profile():
    return LoadProfile((LoadProfileSection(duration_seconds=18000, power_draw_watt=2000.0),))


@pytest.fixture
def two_section_profile():
    return LoadProfile((
        LoadProfileSection(duration_seconds=7200, power_draw_watt=2000.0),
        LoadProfileSection(duration_seconds=1800, power_draw_watt=8000.0),
    ))


@pytest.fixture
def all_saturday_config(five_hour_profile):
    return PlannerConfig(
        plannable_local_time_slots={Weekday.SAT: (TimeSlot(time(0, 0), time(0, 0)),)},
        local_time_zone="Europe/Amsterdam",
        load_profile=five_hour_profile,
    )
