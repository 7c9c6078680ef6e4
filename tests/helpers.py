from datetime import datetime, timedelta, timezone

from spot_planner.models import SpotPrice

SOURCING_MARKUP_PRICE = 0.017
ENERGY_TAX_PRICE = 0.081


def utc(year, month, day, hour, minute=0, second=0):
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def make_spot_price(start, market_price, market_price_tax=0.0, hours=1,
                    sourcing_markup_price=SOURCING_MARKUP_PRICE,
                    energy_tax_price=ENERGY_TAX_PRICE):
    return SpotPrice(
        start=start,
        end=start + timedelta(hours=hours),
        market_price=market_price,
        market_price_tax=market_price_tax,
        sourcing_markup_price=sourcing_markup_price,
        energy_tax_price=energy_tax_price,
    )


def flat_spot_prices(start, prices, hours=1):
    """Spot prices whose total price is exactly the given value."""
    return [
        make_spot_price(start + timedelta(hours=i * hours), price, hours=hours,
                        sourcing_markup_price=0.0, energy_tax_price=0.0)
        for i, price in enumerate(prices)
    ]


# market price and market price tax, hourly from 2022-04-16 05:00 UTC (a Saturday)
SATURDAY_PRICES = [
    (0.189, 0.03968579999999999),
    (0.191, 0.0401352),
    (0.19, 0.039816),
    (0.173, 0.0362502),
    (0.147, 0.030781800000000005),
    (0.122, 0.0256179),
    (0.069, 0.0145446),
    (0.025, 0.0052605),
    (0.027, 0.0056364),
    (0.04, 0.0084672),
    (0.066, 0.013826400000000004),
    (0.108, 0.0226191),
    (0.171, 0.0359499),
    (0.195, 0.0409668),
    (0.206, 0.0432201),
    (0.194, 0.0408387),
    (0.176, 0.0369264),
    (0.167, 0.0350448),
]


def saturday_spot_prices():
    start = utc(2022, 4, 16, 5)
    return [
        make_spot_price(start + timedelta(hours=i), market_price, market_price_tax)
        for i, (market_price, market_price_tax) in enumerate(SATURDAY_PRICES)
    ]
