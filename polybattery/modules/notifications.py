# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import logging
from abc import ABC, abstractmethod
from enum import Enum
from ..utils.dbus_client import SessionDBusClient, DBusClientError, Variant

logger = logging.getLogger(__name__)


class Urgency(Enum):
    """
    Level of urgency, as defined by
    https://specifications.freedesktop.org/notification-spec/notification-spec-latest.html#urgency-levels
    """

    LOW = 0
    NORMAL = 1
    CRITICAL = 2

    @classmethod
    def from_level(cls, level: int) -> "Urgency":
        """
        Maps the command-line friendly levels, where 1 is the most urgent one, to an Urgency
        """
        levels = {1: cls.CRITICAL, 2: cls.NORMAL, 3: cls.LOW}
        if level not in levels:
            raise ValueError(f"Invalid urgency level: {level}")
        return levels[level]


class Category(Enum):
    """
    Notifications optional type indicator, as described by
    https://specifications.freedesktop.org/notification-spec/notification-spec-latest.html#categories
    """

    DEVICE = "device"


class HintABC:  # pylint: disable=too-few-public-methods
    """
    Hints are a way to provide extra data to a notification server that the server may be able to
    make use of.

    Usage:
    hints = [Hint.Category(Category.DEVICE), Hint.Urgency(Urgency.LOW)]
    """

    name: str
    value_type: type
    signature: str

    def __init__(self, value: any):
        self.value = value

    def to_value(self):
        """
        Transform the hint object into a value to be transmitted to the notification server
        """
        raw = self.value_type(self.value)
        if hasattr(raw, "value"):
            raw = raw.value  # Unwrap Enums
        return [self.name, Variant(self.signature, raw)]


# pylint: disable=too-few-public-methods
class Hint:
    """
    Namespace for the hints we send along with notifications
    """

    class Category(HintABC):
        """
        The type of notification this is.
        """

        name = "category"
        value_type = Category
        signature = "s"

    class DesktopEntry(HintABC):
        """
        This specifies the name of the desktop filename representing the calling program. It can
        be used by the daemon to retrieve the correct icon for the application, for logging
        purposes, etc.
        """

        name = "desktop-entry"
        value_type = str
        signature = "s"

    class Urgency(HintABC):
        """
        The urgency level.

        Usage: Hints.Urgency(Urgency.LOW)
        """

        name = "urgency"
        value_type = Urgency
        signature = "y"


class Notify:
    """
    Send desktop notifications according to the Freedesktop spec.
    See: https://specifications.freedesktop.org/notification-spec/notification-spec-latest.html
    """

    def __init__(self, dbus_client: SessionDBusClient = None):
        self.dbus_client = dbus_client or SessionDBusClient()

    async def notify(
        self,
        summary: str,
        body: str = "",
        urgency: Urgency = None,
        category: Category = None,
        app_name: str = "",
    ) -> int:
        """
        Parse arguments and convert them to hints if applicable, then send the desktop notification
        using DBus. This is mostly a syntax suggar on top of `send()`
        """
        hints = []
        if urgency:
            hints.append(Hint.Urgency(urgency))
        if category:
            hints.append(Hint.Category(category))
        if app_name:
            hints.append(Hint.DesktopEntry(app_name))

        return await self.send(summary, body, app_name, hints)

    # Make this object callable by invoking notify
    __call__ = notify

    async def send(
        self,
        summary: str,
        body: str = "",
        app_name: str = __name__,
        hints: list[HintABC] = None,
    ) -> int:
        """
        Send the notification to the Desktop Notifications Daemon via DBus. It never replaces a
        previous notification, has no icon nor actions, and expires as the server sees fit.
        """
        hints = dict([hint.to_value() for hint in hints or []])

        return await self.dbus_client.call_method(
            destination="org.freedesktop.Notifications",
            interface="org.freedesktop.Notifications",
            path="/org/freedesktop/Notifications",
            member="Notify",
            signature="susssasa{sv}i",
            body=[app_name, 0, "", summary, body, [], hints, -1],
        )


class Notifier(ABC):
    """
    The smallest interface the poll loop needs in order to warn the user. Implementations must not
    raise on delivery failures, but report them by returning False instead.
    """

    async def init(self) -> bool:
        """
        Prepares the notifier for sending notifications
        """
        return True

    @abstractmethod
    async def send(self, summary: str, body: str, urgency: Urgency | int = Urgency.CRITICAL) -> bool:
        """
        Sends a notification, returning whether it has been delivered
        """

    async def close(self):
        """
        Releases whatever `init()` has acquired
        """


class DesktopNotifier(Notifier):
    """
    Notifier backed by the desktop notifications daemon. Failures are logged and never stop the
    application, as it still has to keep the bar updated.
    """

    APP_NAME = "polybattery"

    def __init__(self, notify: Notify = None):
        self.notify = notify or Notify()

    async def init(self) -> bool:
        try:
            await self.notify.dbus_client.connect()
        except DBusClientError as err:
            logger.warning("Notification init failed: %s", err)
            return False
        return True

    async def send(self, summary: str, body: str, urgency: Urgency | int = Urgency.CRITICAL) -> bool:
        if not isinstance(urgency, Urgency):
            urgency = Urgency.from_level(urgency)

        try:
            await self.notify(
                summary,
                body,
                urgency=urgency,
                category=Category.DEVICE,
                app_name=self.APP_NAME,
            )
        except DBusClientError as err:
            logger.warning("Notification show failed: %s", err)
            return False
        return True

    async def close(self):
        await self.notify.dbus_client.disconnect()
