import logging
import os
from functools import partial

import pandas as pd

from spot_planner import config
from spot_planner.config_loader import load_planner_config
from spot_planner.models import PlanningStrategy
from spot_planner.results_analysis import plan_frame
from spot_planner.service import PlannerService
from spot_planner.state import read_state


def main():
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", config.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = os.environ.get("CONFIG_PATH", config.CONFIG_PATH)
    state_file_path = os.environ.get("STATE_FILE_PATH", config.STATE_FILE_PATH)
    strategy = PlanningStrategy(os.environ.get("PLANNING_STRATEGY", config.PLANNING_STRATEGY))

    planner_config = load_planner_config(config_path)

    def print_plan(response):
        pd.set_option('display.max_columns', None)
        print(plan_frame(response, planner_config.local_time_zone))
        print("Total cost:", response.total_cost())

    service = PlannerService(lambda: planner_config, partial(read_state, state_file_path), print_plan)
    service.run(strategy=strategy)


if __name__ == "__main__":
    main()
