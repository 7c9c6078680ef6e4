import logging

from spot_planner.exceptions import MissingStateError
from spot_planner.models import PlanningStrategy, SelectionMode
from spot_planner.planner import SpotPricePlanner

_LOGGER = logging.getLogger(__name__)


class PlannerService:
    """
    Plans the configured load in the stored spot price forecast and hands the
    result to ``plan_client``.

    Parameters
    ----------
    config_loader : callable
        Called without arguments on every run; returns the PlannerConfig,
        e.g. ``functools.partial(load_planner_config, path)``.
    state_reader : callable
        Called without arguments on every run; returns the SpotPricesState,
        or None when there is no stored forecast.
    plan_client : callable
        Called with the PlanningResponse; responsible for acting on the plan.
    """

    def __init__(self, config_loader, state_reader, plan_client):
        self.config_loader = config_loader
        self.state_reader = state_reader
        self.plan_client = plan_client

    def run(self, strategy=PlanningStrategy.LOWEST_COST, after=None, before=None,
            mode=SelectionMode.CONSECUTIVE):
        state = self.state_reader()
        if state is None:
            raise MissingStateError("No spot prices state present; fetch spot prices first")

        planner = SpotPricePlanner(self.config_loader())
        response = planner.plan(state.future_spot_prices, strategy=strategy,
                                after=after, before=before, mode=mode)

        if response.spot_prices:
            _LOGGER.info(
                "Planned %s spot prices from %s till %s, total cost %.4f",
                len(response.spot_prices),
                response.spot_prices[0].start,
                response.spot_prices[-1].end,
                response.total_cost(),
            )
        else:
            _LOGGER.info("Nothing to plan")

        self.plan_client(response)
        return response
