from datetime import time
from functools import partial

import pytest

from helpers import flat_spot_prices, utc
from spot_planner.config_loader import load_planner_config
from spot_planner.exceptions import ConfigurationError, MissingStateError
from spot_planner.models import (
    LoadProfile,
    LoadProfileSection,
    PlannerConfig,
    PlanningStrategy,
    SelectionMode,
    SpotPricesState,
    TimeSlot,
    Weekday,
)
from spot_planner.service import PlannerService
from spot_planner.state import read_state

PRICES = [0.3, 0.2, 0.1, 0.1, 0.4, 0.5]

CONFIG_YAML = """
plannableLocalTimeSlots:
  Sat:
    - from: "00:00:00"
      till: "00:00:00"
localTimeZone: Europe/Amsterdam
loadProfile:
  sections:
    - durationSeconds: 7200
      powerDrawWatt: 1000.0
"""


@pytest.fixture
def planner_config():
    return PlannerConfig(
        plannable_local_time_slots={Weekday.SAT: (TimeSlot(time(0, 0), time(0, 0)),)},
        local_time_zone="Europe/Amsterdam",
        load_profile=LoadProfile((LoadProfileSection(duration_seconds=7200, power_draw_watt=1000.0),)),
    )


@pytest.fixture
def state():
    # Saturday 2022-04-16, 08:00 - 14:00 UTC
    return SpotPricesState(flat_spot_prices(utc(2022, 4, 16, 8), PRICES), utc(2022, 4, 16, 8))


def test_run_hands_best_plan_to_plan_client(planner_config, state):
    plans = []
    service = PlannerService(lambda: planner_config, lambda: state, plans.append)

    response = service.run()

    assert plans == [response]
    assert [sp.start for sp in response.spot_prices] == [utc(2022, 4, 16, 10), utc(2022, 4, 16, 11)]
    assert response.total_cost() == pytest.approx(0.2)


def test_run_with_highest_cost_and_bounds(planner_config, state):
    service = PlannerService(lambda: planner_config, lambda: state, lambda response: None)

    response = service.run(strategy=PlanningStrategy.HIGHEST_COST, before=utc(2022, 4, 16, 12))

    assert [sp.start for sp in response.spot_prices] == [utc(2022, 4, 16, 8), utc(2022, 4, 16, 9)]


def test_run_fragmented(planner_config, state):
    service = PlannerService(lambda: planner_config, lambda: state, lambda response: None)

    response = service.run(strategy=PlanningStrategy.HIGHEST_COST, mode=SelectionMode.FRAGMENTED)

    assert [sp.start for sp in response.spot_prices] == [utc(2022, 4, 16, 12), utc(2022, 4, 16, 13)]


def test_run_without_state(planner_config):
    plans = []
    service = PlannerService(lambda: planner_config, lambda: None, plans.append)

    with pytest.raises(MissingStateError):
        service.run()
    assert plans == []


def test_config_is_loaded_on_every_run(planner_config, state):
    loads = []

    def config_loader():
        loads.append(planner_config)
        return planner_config

    service = PlannerService(config_loader, lambda: state, lambda response: None)
    service.run()
    service.run()

    assert len(loads) == 2


def test_run_from_files(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(CONFIG_YAML, encoding="utf-8")
    state_file = tmp_path / "state.yaml"
    state_file.write_text(
        "futureSpotPrices:\n"
        + "".join(
            f"  - from: 2022-04-16T{8 + i:02d}:00:00Z\n"
            f"    till: 2022-04-16T{9 + i:02d}:00:00Z\n"
            f"    marketPrice: {price}\n"
            f"    marketPriceTax: 0.0\n"
            f"    sourcingMarkupPrice: 0.0\n"
            f"    energyTaxPrice: 0.0\n"
            for i, price in enumerate(PRICES)
        )
        + "lastFrom: 2022-04-16T08:00:00Z\n",
        encoding="utf-8",
    )
    plans = []
    service = PlannerService(partial(load_planner_config, config_file),
                             partial(read_state, state_file), plans.append)

    response = service.run()

    assert [sp.start for sp in response.spot_prices] == [utc(2022, 4, 16, 10), utc(2022, 4, 16, 11)]
    assert plans == [response]


def test_run_with_invalid_config(tmp_path, state):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("localTimeZone: Not/AZone\n", encoding="utf-8")
    plans = []

    with pytest.raises(ConfigurationError):
        PlannerService(partial(load_planner_config, config_file), lambda: state, plans.append).run()
    assert plans == []


def test_missing_state_file(planner_config, tmp_path):
    service = PlannerService(lambda: planner_config, partial(read_state, tmp_path / "missing.yaml"),
                             lambda response: None)

    with pytest.raises(MissingStateError):
        service.run()
