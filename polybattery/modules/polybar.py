# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import sys
import math
import logging
from collections import namedtuple
from typing import TextIO
from ..power import BatteryState

logger = logging.getLogger(__name__)

# Battery glyphs, from the emptiest to the fullest one
ICONS = [chr(codepoint) for codepoint in range(0xE242, 0xE24C)]

COLOR_DEFAULT = "DFDFDF"

# Upper bound (inclusive) of each 5% band and its color, going from red to green
COLOR_BANDS = [
    (5.0, "FF0000"),
    (10.0, "FF1A00"),
    (15.0, "FF3500"),
    (20.0, "FF5000"),
    (25.0, "FF6B00"),
    (30.0, "FF8600"),
    (35.0, "FFA100"),
    (40.0, "FFBB00"),
    (45.0, "FFD600"),
    (50.0, "FFF100"),
    (55.0, "F1FF00"),
    (60.0, "D6FF00"),
    (65.0, "BBFF00"),
    (70.0, "A1FF00"),
    (75.0, "86FF00"),
    (80.0, "6BFF00"),
    (85.0, "50FF00"),
    (90.0, "35FF00"),
    (95.0, "1AFF00"),
    (100.0, "00FF00"),
]

ANIMATED_STATES = [BatteryState.UNKNOWN, BatteryState.CHARGING]

Frame = namedtuple("Frame", ["text", "delay"])


def color_for(percent: float) -> str:
    """
    Picks the color of the band the percentage falls in. Out of range values (NaN or above 100)
    have no color.
    """
    color = ""
    for upper_bound, band_color in COLOR_BANDS:
        if percent <= upper_bound:
            color = band_color
            break

    logger.debug("Selected color: %s", color)
    return color


def icon_index(percent: float) -> int:
    """
    Index of the battery glyph for a given charge level, one glyph per 10%
    """
    return max(0, min(int(percent / 10), len(ICONS) - 1))


def format_line(percent: float, icon: str, suffix: str = "") -> str:
    """
    Formats a single bar line using Polybar format tags.
    See: https://github.com/polybar/polybar/wiki/Formatting#format-tags
    """
    line = f"%{{F#{color_for(percent)}}} {icon} %{{F#{COLOR_DEFAULT}}}{percent:.2f}%"
    if suffix:
        line += f" {suffix}"
    return line


class BarSegment:
    """
    The frames to be displayed on the bar for a given battery status.

    Most states render as a single frame, but while charging (or when the state is unknown) it
    cycles through every battery glyph to make an animation. Each frame carries the delay to wait
    after displaying it, and the sequence can be iterated again to restart the animation.
    """

    def __init__(
        self,
        percent: float,
        state: BatteryState,
        time_remaining: str = "",
        frame_delay: float = 0.1,
    ):
        self.percent = percent
        self.state = state
        self.time_remaining = time_remaining
        self.frame_delay = frame_delay

    def __iter__(self):
        match self.state:
            case BatteryState.EMPTY:
                yield Frame(format_line(self.percent, ICONS[0]), 0)
            case BatteryState.FULL:
                yield Frame(format_line(self.percent, ICONS[-1]), 0)
            case BatteryState.UNKNOWN | BatteryState.CHARGING:
                if math.isnan(self.percent):
                    return
                for icon in ICONS:
                    yield Frame(format_line(self.percent, icon), self.frame_delay)
            case BatteryState.DISCHARGING:
                # The percentage is sometimes not yet available right after unplugging
                if math.isnan(self.percent):
                    return
                level = icon_index(self.percent)
                logger.debug("Polybar discharge icon: %d", level)
                yield Frame(
                    format_line(self.percent, ICONS[level], self.time_remaining), 0
                )


class Polybar:
    """
    Writes battery segments to a Polybar `custom/script` module that tails our output, as in:

    ```ini
    [module/battery]
    type = custom/script
    exec = polybattery -polybar
    tail = true
    ```
    """

    def __init__(self, stream: TextIO = None, frame_delay: float = 0.1):
        self.stream = stream or sys.stdout
        self.frame_delay = frame_delay

    def segment(self, percent: float, state: BatteryState, time_remaining: str = "") -> BarSegment:
        """
        Builds the segment for the given battery status
        """
        logger.debug("Polybar segment: percent=%s, state=%s", percent, state.value)
        return BarSegment(percent, state, time_remaining, self.frame_delay)

    def write(self, frame: Frame):
        """
        Outputs a single frame, flushing it right away so the bar picks it up
        """
        self.stream.write(frame.text + "\n")
        self.stream.flush()
