# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import sys
import signal
import asyncio
import logging
from .config import Config
from .errors import PolybatteryFatalError
from .modules.notifications import DesktopNotifier, Notifier
from .poller import BatteryPoller

logger = logging.getLogger(__name__)


class App:
    """
    Orchestrate the application functionality into a single unit.

    Instantiate then hit `start()` to have it running.
    """
    def __init__(self, config: Config, notifier: Notifier = None):
        self.config = config
        self.notifier = notifier or DesktopNotifier()
        self.poller = None

    def setup_logging(self):
        """
        Setup the global application logging. Diagnostics go to stdout along with the bar output,
        so only warnings are shown unless debugging.
        """
        log_level = "DEBUG" if self.config.debug else "WARNING"
        log_format = "[%(levelname)s] [%(filename)s:%(funcName)s():L%(lineno)d] %(message)s"
        logging.basicConfig(level = log_level, format = log_format, stream = sys.stdout)

    async def run(self) -> int:
        """
        Initializes the notifier then polls the batteries until done, whichever way it ends
        """
        await self.notifier.init()
        logger.debug("flagthr=%d", self.config.threshold)

        self.poller = BatteryPoller(self.config, self.notifier)
        try:
            return await self.poller.run()
        finally:
            await self.notifier.close()

    def start(self) -> int:
        """
        Runs the application on a new event loop and returns its exit code

        It will stop gracefully when receiving a SIGINT or SIGTERM
        """
        self.setup_logging()

        loop = asyncio.new_event_loop()
        task = loop.create_task(self.run())
        for sig in [signal.SIGINT, signal.SIGTERM]:
            loop.add_signal_handler(sig, task.cancel)

        try:
            return loop.run_until_complete(task)
        except asyncio.CancelledError:
            return 0
        except PolybatteryFatalError as err:
            print(err, flush=True)
            return 1
        finally:
            loop.close()
