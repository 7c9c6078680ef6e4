import numpy as np

from spot_planner.config import PRICE_UNIT_SCALE, SECONDS_PER_HOUR


def _total_price(spot_price):
    return spot_price.total_price


def price_per_second(spot_prices, required_seconds, price_fn=None):
    """
    Expand spot prices into one price per second, consuming them in the order given.

    Each spot price contributes ``min(duration, seconds still needed)`` seconds,
    so trailing spot prices beyond ``required_seconds`` are ignored.
    """
    if price_fn is None:
        price_fn = _total_price

    prices = []
    counts = []
    remaining = required_seconds
    for spot_price in spot_prices:
        if remaining <= 0:
            break
        seconds = min(spot_price.duration_seconds, remaining)
        prices.append(price_fn(spot_price) / (SECONDS_PER_HOUR * PRICE_UNIT_SCALE))
        counts.append(seconds)
        remaining -= seconds

    return np.repeat(np.asarray(prices, dtype=float), np.asarray(counts, dtype=int))


def power_draw_per_second(load_profile):
    """Expand a load profile into one power draw (W) per second, in section order."""
    draws = [section.power_draw_watt for section in load_profile.sections]
    durations = [section.duration_seconds for section in load_profile.sections]
    return np.repeat(np.asarray(draws, dtype=float), np.asarray(durations, dtype=int))


def total_cost(spot_prices, load_profile, price_fn=None):
    """
    Total cost of running a load profile against consecutive spot prices.

    Parameters
    ----------
    spot_prices : sequence of SpotPrice
        Consumed in the order given; together they must last at least as long
        as the load profile.
    load_profile : LoadProfile
    price_fn : callable or None
        Price (per kWh) to charge for a spot price. Defaults to its total price.

    Returns
    -------
    float
        Cost in the currency of the prices; 0 if either input is empty.
    """
    if not spot_prices or not load_profile.sections:
        return 0.0

    required_seconds = load_profile.total_duration_seconds

    prices = price_per_second(spot_prices, required_seconds, price_fn)
    assert len(prices) == required_seconds, (
        f"spot prices cover {len(prices)}s of a {required_seconds}s load profile"
    )

    draws = power_draw_per_second(load_profile)
    assert len(draws) == required_seconds

    return float(np.dot(prices, draws))
