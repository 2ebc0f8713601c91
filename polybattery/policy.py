# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import logging
from .power import BatteryState
from .modules.notifications import Notifier, Urgency

logger = logging.getLogger(__name__)


class LowBatteryPolicy:
    """
    Decides whether the user should be warned about a low battery.

    By default, the warning is repeated on every poll while the battery is below the threshold and
    not charging. With `notify_once`, it is sent a single time per discharge cycle and it is only
    re-armed once the battery gets full again.
    """

    SUMMARY = "Battery low!"

    def __init__(self, threshold: int = 10, notify_once: bool = False):
        self.threshold = threshold
        self.notify_once = notify_once
        self.already_notified = False

    def evaluate(self, percent: float, state: BatteryState) -> bool:
        """
        Returns whether a notification should be fired for this poll, updating the notified flag
        """
        should_notify = False
        if percent < self.threshold and state != BatteryState.CHARGING:
            if not self.notify_once or not self.already_notified:
                should_notify = True
                self.already_notified = True

        if state == BatteryState.FULL and self.notify_once:
            self.already_notified = False

        return should_notify

    async def notify(self, notifier: Notifier, percent: float, state: BatteryState) -> bool:
        """
        Evaluates the policy and sends the low battery notification when needed. Returns whether
        a notification has been sent.
        """
        if not self.evaluate(percent, state):
            return False

        logger.debug("Battery below %d%%, sending notification", self.threshold)
        body = f"Charge percent: {percent:.2f}\nState: {state.value}"
        await notifier.send(self.SUMMARY, body, Urgency.CRITICAL)
        return True
