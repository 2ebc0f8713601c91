# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import sys
import logging
from asyncio import sleep
from datetime import datetime
from typing import TextIO
from .config import Config
from .errors import PolybatteryFatalError
from .modules.notifications import Notifier
from .modules.polybar import Polybar
from .policy import LowBatteryPolicy
from .power import BatteryReader, BatteryReadError, BatteryReading, BatteryState
from .status import derive

logger = logging.getLogger(__name__)


class BatteryPoller:
    """
    The main loop. Waits for a battery to show up, then keeps reading every battery available,
    warning when they are low and printing their status in the configured formats.
    """

    POLL_INTERVAL = 1
    BATTERY_RETRY_INTERVAL = 1

    def __init__(
        self,
        config: Config,
        notifier: Notifier,
        reader: BatteryReader = None,
        stream: TextIO = None,
    ):
        self.config = config
        self.notifier = notifier
        self.reader = reader or BatteryReader(config.power_supply_dir)
        self.stream = stream or sys.stdout
        self.policy = LowBatteryPolicy(config.threshold, config.notify_once)
        self.polybar = Polybar(self.stream, config.frame_delay)

    async def run(self) -> int:
        """
        Polls the batteries until stopped, or just once when configured to, then returns the exit
        code for the application.

        Raises PolybatteryFatalError when the battery information can't be read at all.
        """
        while True:
            if not await self.wait_for_battery():
                return 0

            await self.poll()

            if self.config.once:
                return 0

            logger.debug("Sleep sec: %d", self.POLL_INTERVAL)
            await sleep(self.POLL_INTERVAL)

    async def wait_for_battery(self) -> bool:
        """
        Blocks until a battery is found. When running once, it gives up on the first attempt
        instead, and returns False.
        """
        while not self.reader.has_battery():
            logger.debug("Could not find battery!")
            if self.config.polybar:
                await self.render(0.0, BatteryState.DISCHARGING)
            if self.config.once:
                return False
            await sleep(self.BATTERY_RETRY_INTERVAL)

        return True

    async def poll(self):
        """
        A single pass over all batteries in the system
        """
        try:
            batteries = self.reader.read_all()
        except BatteryReadError as err:
            logger.debug("err: %s", err)
            raise PolybatteryFatalError("Could not get battery info!") from err

        for battery in batteries:
            await self.process(battery)

    async def process(self, battery: BatteryReading):
        """
        Derives the status of a battery, then notifies and outputs it
        """
        logger.debug("%s state: %s", battery.name, battery.state.value)
        status = derive(battery)

        await self.policy.notify(self.notifier, status.percent, battery.state)

        logger.debug("Charge percent: %.2f", status.percent)
        logger.debug("Time: %s", datetime.now())

        if self.config.simple:
            self.stream.write(f"{status.percent:.2f}\n")
            self.stream.flush()
        if self.config.polybar:
            await self.render(status.percent, battery.state, status.time_remaining)

    async def render(self, percent: float, state: BatteryState, time_remaining: str = ""):
        """
        Outputs the bar segment, waiting between each frame of the animation
        """
        for frame in self.polybar.segment(percent, state, time_remaining):
            self.polybar.write(frame)
            if frame.delay:
                await sleep(frame.delay)
