# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

from collections import namedtuple

DEFAULT_POWER_SUPPLY_DIR = "/sys/class/power_supply"

_ConfigBase = namedtuple(
    "_ConfigBase",
    [
        "debug",
        "simple",
        "polybar",
        "once",
        "threshold",
        "notify_once",
        "wait",
        "power_supply_dir",
    ],
    defaults=[False, False, False, False, 10, False, 100, DEFAULT_POWER_SUPPLY_DIR],
)


class Config(_ConfigBase):
    """
    Immutable set of options, fixed at startup and handed over to every component that needs them.
    """

    __slots__ = ()

    @classmethod
    def from_args(cls, args) -> "Config":
        """
        Builds the config out of the namespace returned by `ArgumentParser.parse_args()`
        """
        return cls(
            debug=args.debug,
            simple=args.simple,
            polybar=args.polybar,
            once=args.once,
            threshold=args.thr,
            notify_once=args.notify_once,
            wait=args.wait,
            power_supply_dir=args.power_supply_dir,
        )

    @property
    def frame_delay(self) -> float:
        """Time, in seconds, between each frame of the bar animation"""
        return self.wait / 1000
