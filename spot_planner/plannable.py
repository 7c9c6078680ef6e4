import logging

from spot_planner.zoned_time import combine, start_of_next_day, to_zoned

_LOGGER = logging.getLogger(__name__)


def _slot_bounds(time_slot, local_date, zone):
    """Instants at which ``time_slot`` starts and ends on ``local_date``."""
    slot_from = combine(local_date, time_slot.start, zone, earliest=True)
    if time_slot.ends_at_end_of_day:
        # a slot ending at midnight runs into the next calendar day
        slot_till = start_of_next_day(local_date, zone)
    else:
        slot_till = combine(local_date, time_slot.end, zone, earliest=False)
    return slot_from, slot_till


def fits_time_slots(spot_price, config, zone):
    """
    True if the spot price lies entirely within one of the plannable time
    slots of the local weekday on which it starts.
    """
    local_from = to_zoned(spot_price.start, zone)
    local_till = to_zoned(spot_price.end, zone)

    for time_slot in config.time_slots_for(local_from.weekday()):
        slot_from, slot_till = _slot_bounds(time_slot, local_from.date(), zone)
        if (local_from >= slot_from
                and local_from < slot_till
                and local_till > slot_from
                and local_till <= slot_till):
            return True
    return False


def plannable_spot_prices(spot_prices, config, after=None, before=None):
    """
    Select the spot prices the load may be planned in.

    Parameters
    ----------
    spot_prices : sequence of SpotPrice
    config : PlannerConfig
        Supplies the local time zone and plannable time slots per weekday.
    after : datetime or None
        Spot prices starting before this instant are dropped.
    before : datetime or None
        Spot prices ending after this instant are dropped.

    Returns
    -------
    list of SpotPrice
        Accepted spot prices, in their original order.

    Raises
    ------
    ConfigurationError
        If the configured time zone cannot be resolved.
    """
    zone = config.time_zone()

    _LOGGER.info("Determining plannable spot prices after %s and before %s", after, before)
    _LOGGER.debug("spot_prices: %s", spot_prices)

    plannable = []
    for spot_price in spot_prices:
        if after is not None and spot_price.start < after:
            continue
        if before is not None and spot_price.end > before:
            continue
        if fits_time_slots(spot_price, config, zone):
            plannable.append(spot_price)

    _LOGGER.debug("plannable_spot_prices: %s", plannable)
    return plannable
