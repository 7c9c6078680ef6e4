import numpy as np
import pandas as pd

from spot_planner.config import PRICE_UNIT_SCALE, SECONDS_PER_HOUR
from spot_planner.cost import power_draw_per_second, price_per_second

PLAN_COLUMNS = ["end", "total_price", "duration_seconds", "used_seconds", "energy_kwh", "cost"]


def plan_frame(response, time_zone=None):
    """
    Tabulate a planning response, one row per selected spot price.

    Parameters
    ----------
    response : PlanningResponse
    time_zone : str or tzinfo or None
        Show start/end in this zone instead of UTC.

    Returns
    -------
    pd.DataFrame
        Indexed by spot price start, with columns:
        - end
        - total_price (per kWh)
        - duration_seconds
        - used_seconds: seconds of the load profile run in this spot price
        - energy_kwh: energy drawn during those seconds
        - cost: share of the response's total cost
    """
    spot_prices = response.spot_prices
    if not spot_prices:
        return pd.DataFrame(columns=PLAN_COLUMNS, index=pd.DatetimeIndex([], tz="UTC", name="start"))

    required_seconds = response.load_profile.total_duration_seconds
    prices = price_per_second(spot_prices, required_seconds)
    draws = power_draw_per_second(response.load_profile)
    seconds = min(len(prices), len(draws))

    # index of the spot price each second of the load runs in
    owner = np.repeat(np.arange(len(spot_prices)), _used_seconds(spot_prices, required_seconds))[:seconds]
    per_second = pd.DataFrame({
        "owner": owner,
        "used_seconds": 1,
        "energy_kwh": draws[:seconds] / (SECONDS_PER_HOUR * PRICE_UNIT_SCALE),
        "cost": prices[:seconds] * draws[:seconds],
    })
    usage = per_second.groupby("owner").sum().reindex(range(len(spot_prices)), fill_value=0)

    df = pd.DataFrame({
        "end": pd.to_datetime([sp.end for sp in spot_prices], utc=True),
        "total_price": [sp.total_price for sp in spot_prices],
        "duration_seconds": [sp.duration_seconds for sp in spot_prices],
        "used_seconds": usage["used_seconds"].to_numpy(),
        "energy_kwh": usage["energy_kwh"].to_numpy(dtype=float),
        "cost": usage["cost"].to_numpy(dtype=float),
    }, index=pd.DatetimeIndex(pd.to_datetime([sp.start for sp in spot_prices], utc=True), name="start"))

    if time_zone is not None:
        df.index = df.index.tz_convert(time_zone)
        df["end"] = df["end"].dt.tz_convert(time_zone)
    return df


def _used_seconds(spot_prices, required_seconds):
    used = []
    remaining = required_seconds
    for spot_price in spot_prices:
        seconds = max(min(spot_price.duration_seconds, remaining), 0)
        used.append(seconds)
        remaining -= seconds
    return used


def cost_saved(best, reference):
    """Cost saved by running the load as planned in ``best`` instead of ``reference``."""
    return reference.total_cost() - best.total_cost()
