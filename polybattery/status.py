# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import math
from collections import namedtuple
from .power import BatteryReading, BatteryState

CLOCK_ICON = "\uf017"

DerivedStatus = namedtuple("DerivedStatus", ["percent", "time_remaining"])


def percent(current: float, full: float) -> float:
    """
    Charge level in percent, capped at 100 since some batteries report a current charge slightly
    above their full capacity. A battery with no capacity yields NaN.
    """
    try:
        value = current / (full * 0.01)
    except ZeroDivisionError:
        return math.nan

    return min(value, 100.0) if not math.isnan(value) else value


def duration_hours(reading: BatteryReading) -> float:
    """
    How long, in hours, until the battery gets either full or empty
    """
    if reading.charge_rate == 0:
        return 0.0

    match reading.state:
        case BatteryState.CHARGING:
            return (reading.full - reading.current) / reading.charge_rate
        case BatteryState.DISCHARGING:
            return reading.current / reading.charge_rate
        case _:
            return 0.0


def time_remaining(duration: float) -> str:
    """
    Formats a duration in hours as `<clock> 1h 25m`.

    Some drivers report a negative rate, which leads to negative durations. Those are rendered in
    minutes only, as `<clock> -85m `.
    """
    if duration == 0 or not math.isfinite(duration):
        return ""

    total_minutes = int(duration * 60)
    if duration < 0:
        return f"{CLOCK_ICON} {total_minutes}m "

    hours, minutes = divmod(total_minutes, 60)
    return f"{CLOCK_ICON} {hours}h {minutes}m"


def derive(reading: BatteryReading) -> DerivedStatus:
    """Computes the status that gets presented out of a battery reading"""
    return DerivedStatus(
        percent=percent(reading.current, reading.full),
        time_remaining=time_remaining(duration_hours(reading)),
    )
