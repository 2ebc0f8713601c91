# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import logging
from collections import namedtuple
from enum import Enum
from pathlib import Path
from .config import DEFAULT_POWER_SUPPLY_DIR
from .errors import PolybatteryError

logger = logging.getLogger(__name__)


class BatteryReadError(PolybatteryError):
    """
    Raised when the battery information can't be read from sysfs
    """


class BatteryState(Enum):
    """The current state of the battery"""

    UNKNOWN = "Unknown"
    EMPTY = "Empty"
    FULL = "Full"
    CHARGING = "Charging"
    DISCHARGING = "Discharging"

    @classmethod
    def from_sysfs(cls, status: str) -> "BatteryState":
        """
        Maps the power_supply `status` attribute to a state. Anything we don't know about, such as
        "Not charging", is reported as unknown.
        """
        for state in cls:
            if state.value.lower() == status.strip().lower():
                return state
        return cls.UNKNOWN


# Energy values are in mWh and the charge rate is in mW
BatteryReading = namedtuple("BatteryReading", ["name", "state", "current", "full", "charge_rate"])


class BatteryReader:
    """
    Reads the battery information exposed by the kernel under /sys/class/power_supply.

    Drivers either report energy (µWh, µW) or charge (µAh, µA), the latter being converted to
    energy using the battery voltage.

    See: https://www.kernel.org/doc/Documentation/ABI/testing/sysfs-class-power
    """

    def __init__(self, power_supply_dir: str = DEFAULT_POWER_SUPPLY_DIR):
        self.power_supply_dir = Path(power_supply_dir)

    def has_battery(self) -> bool:
        """
        Checks whether the system has a battery
        """
        return (self.power_supply_dir / "BAT0").exists()

    def read_all(self) -> list[BatteryReading]:
        """
        Reads every battery available on the system.

        A battery that fails to be read is logged and skipped, but if none could be read at all,
        then a BatteryReadError is raised.
        """
        try:
            supplies = sorted(self.power_supply_dir.iterdir())
        except OSError as err:
            raise BatteryReadError(
                f"Unable to list power supplies at {self.power_supply_dir}"
            ) from err

        batteries = []
        errors = []
        for supply in supplies:
            try:
                if not self._is_battery(supply):
                    continue
                batteries.append(self.read(supply))
            except (OSError, ValueError, BatteryReadError) as err:
                errors.append(f"{supply.name}: {err}")

        if errors and not batteries:
            raise BatteryReadError("; ".join(errors))

        for error in errors:
            logger.warning("Skipping battery %s", error)

        return batteries

    def read(self, supply: Path) -> BatteryReading:
        """
        Reads a single battery from its power_supply directory
        """
        voltage = self._voltage(supply)

        return BatteryReading(
            name=supply.name,
            state=BatteryState.from_sysfs(self._read_text(supply, "status") or ""),
            current=self._energy(supply, "energy_now", "charge_now", voltage),
            full=self._energy(supply, "energy_full", "charge_full", voltage),
            charge_rate=self._energy(supply, "power_now", "current_now", voltage),
        )

    def _is_battery(self, supply: Path) -> bool:
        if self._read_text(supply, "type") != "Battery":
            return False
        # Peripherals such as wireless mice also report as batteries
        return self._read_text(supply, "scope") != "Device"

    def _voltage(self, supply: Path) -> float:
        """Battery voltage in V"""
        for attribute in ["voltage_now", "voltage_min_design", "voltage_max_design"]:
            value = self._read_number(supply, attribute)
            if value is not None:
                return value / 1000000
        return 0.0

    def _energy(self, supply: Path, energy_attr: str, charge_attr: str, voltage: float) -> float:
        """
        Value in mWh (or mW), reading the energy attribute or converting the charge one.
        """
        value = self._read_number(supply, energy_attr)
        if value is not None:
            return value / 1000

        value = self._read_number(supply, charge_attr)
        if value is None:
            raise BatteryReadError(f"Neither {energy_attr} nor {charge_attr} are available")
        if not voltage:
            raise BatteryReadError(f"Unable to convert {charge_attr} without a voltage")

        return value / 1000 * voltage

    def _read_number(self, supply: Path, attribute: str) -> float | None:
        value = self._read_text(supply, attribute)
        if value is None:
            return None
        return float(value)

    def _read_text(self, supply: Path, attribute: str) -> str | None:
        path = supply / attribute
        if not path.is_file():
            return None
        return path.read_text("utf-8").strip()
