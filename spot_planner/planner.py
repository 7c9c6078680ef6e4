import logging

from spot_planner.cost import total_cost
from spot_planner.models import (
    PlanningRequest,
    PlanningResponse,
    PlanningStrategy,
    SelectionMode,
)
from spot_planner.plannable import plannable_spot_prices

_LOGGER = logging.getLogger(__name__)


def _is_better(cost, best_cost, strategy):
    if strategy is PlanningStrategy.LOWEST_COST:
        return cost < best_cost
    if strategy is PlanningStrategy.HIGHEST_COST:
        return cost > best_cost
    raise ValueError("Unknown strategy")


def _consecutive_block(spot_prices, start, required_seconds):
    """
    Consecutive spot prices from ``start`` lasting at least ``required_seconds``,
    or None if the remaining spot prices run out first.
    """
    block = [spot_prices[start]]
    selected_seconds = spot_prices[start].duration_seconds

    for spot_price in spot_prices[start + 1:]:
        if selected_seconds >= required_seconds:
            break
        block.append(spot_price)
        selected_seconds += spot_price.duration_seconds

    if selected_seconds < required_seconds:
        return None
    return block


def best_consecutive_block(spot_prices, load_profile, strategy):
    """
    Find the block of consecutive spot prices with the lowest (or highest)
    total cost for the load profile.

    Every start position is tried in time order; a later block only replaces
    the current best when strictly better, so ties go to the earliest block.

    Parameters
    ----------
    spot_prices : sequence of SpotPrice
        Time ordered.
    load_profile : LoadProfile
    strategy : PlanningStrategy

    Returns
    -------
    list of SpotPrice
        The best block, or an empty list if no start position leaves enough
        spot prices to cover the load profile.
    """
    required_seconds = load_profile.total_duration_seconds
    best_block = []
    best_cost = None

    for start in range(len(spot_prices)):
        block = _consecutive_block(spot_prices, start, required_seconds)
        if block is None:
            # later starts have even fewer spot prices left
            break

        cost = total_cost(block, load_profile)
        if best_cost is None or _is_better(cost, best_cost, strategy):
            best_block, best_cost = block, cost

    return best_block


def best_fragmented_selection(spot_prices, load_profile, strategy):
    """
    Pick the cheapest (or most expensive) spot prices, adjacent or not, until
    their combined duration covers the load profile.

    Returns
    -------
    list of SpotPrice
        Selected spot prices ordered by time, or an empty list if all spot
        prices together are too short for the load profile.

    Notes
    -----
    A selection that cannot cover the whole load is dropped rather than
    returned partially, so both selection modes either cover the load or
    plan nothing. Check ``PlanningResponse.covers_load`` to tell the cases
    apart.
    """
    required_seconds = load_profile.total_duration_seconds
    by_price = sorted(spot_prices,
                      key=lambda sp: sp.total_price,
                      reverse=strategy is PlanningStrategy.HIGHEST_COST)

    selected = []
    selected_seconds = 0
    for spot_price in by_price:
        if selected_seconds >= required_seconds and selected:
            break
        selected.append(spot_price)
        selected_seconds += spot_price.duration_seconds

    if selected_seconds < required_seconds:
        return []
    return sorted(selected, key=lambda sp: sp.start)


class SpotPricePlanner:
    """
    Plans a load in the best plannable spot prices.

    The planner only holds its configuration and can be shared between
    threads.
    """

    def __init__(self, config):
        self.config = config

    def plannable_spot_prices(self, spot_prices, after=None, before=None):
        return plannable_spot_prices(spot_prices, self.config, after, before)

    def best_spot_prices(self, request):
        """
        Select the spot prices to run ``request.load_profile`` in.

        Parameters
        ----------
        request : PlanningRequest

        Returns
        -------
        PlanningResponse
            The selected spot prices in time order (empty when nothing is
            plannable or the plannable spot prices cannot cover the load)
            and the requested load profile.

        Raises
        ------
        ConfigurationError
            If the configured time zone cannot be resolved.
        """
        plannable = self.plannable_spot_prices(request.spot_prices, request.after, request.before)
        if not plannable:
            _LOGGER.info("No plannable spot prices")
            return PlanningResponse(spot_prices=plannable, load_profile=request.load_profile)

        if request.mode is SelectionMode.CONSECUTIVE:
            selected = best_consecutive_block(plannable, request.load_profile, request.strategy)
        elif request.mode is SelectionMode.FRAGMENTED:
            selected = best_fragmented_selection(plannable, request.load_profile, request.strategy)
        else:
            raise ValueError("Unknown mode")

        if not selected:
            _LOGGER.info("Plannable spot prices cannot cover a load profile of %ss",
                         request.load_profile.total_duration_seconds)

        return PlanningResponse(spot_prices=selected, load_profile=request.load_profile)

    def plan(self, spot_prices, strategy=PlanningStrategy.LOWEST_COST, after=None,
             before=None, mode=SelectionMode.CONSECUTIVE, load_profile=None):
        """Plan the configured load profile (or ``load_profile``) in ``spot_prices``."""
        request = PlanningRequest(
            spot_prices=spot_prices,
            load_profile=load_profile if load_profile is not None else self.config.load_profile,
            strategy=strategy,
            after=after,
            before=before,
            mode=mode,
        )
        return self.best_spot_prices(request)
