"""Read the stored spot price forecast."""

import logging

import pandas as pd
import yaml

from spot_planner.models import SpotPrice, SpotPricesState

_LOGGER = logging.getLogger(__name__)


def _to_utc(value):
    """Parse a timestamp; naive values are taken to be UTC."""
    ts = pd.Timestamp(value)
    ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    return ts.to_pydatetime()


def parse_spot_price(data):
    return SpotPrice(
        id=data.get("id"),
        source=data.get("source"),
        start=_to_utc(data["from"]),
        end=_to_utc(data["till"]),
        market_price=float(data["marketPrice"]),
        market_price_tax=float(data["marketPriceTax"]),
        sourcing_markup_price=float(data["sourcingMarkupPrice"]),
        energy_tax_price=float(data.get("energyTaxPrice", 0.0)),
    )


def parse_spot_prices_state(data):
    return SpotPricesState(
        future_spot_prices=tuple(parse_spot_price(sp) for sp in data.get("futureSpotPrices") or []),
        last_from=_to_utc(data["lastFrom"]),
    )


def read_state(path):
    """
    Read the spot prices state file at ``path``.

    Returns
    -------
    SpotPricesState or None
        None if the file does not exist or does not hold a valid state.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        _LOGGER.info("No state file at %s", path)
        return None
    except (OSError, yaml.YAMLError) as e:
        _LOGGER.warning("Cannot read state file %s: %s", path, e)
        return None

    try:
        state = parse_spot_prices_state(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        _LOGGER.warning("Invalid state file %s: %s", path, e)
        return None

    _LOGGER.info("Read state file at %s", path)
    return state
