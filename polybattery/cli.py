# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import sys
from argparse import ArgumentParser
from . import __version__
from .app import App
from .config import Config, DEFAULT_POWER_SUPPLY_DIR


def build_parser() -> ArgumentParser:
    """
    Flags can be given with either one or two dashes (`-thr 15` or `--thr 15`), so that existing
    Polybar module configs keep working.
    """
    parser = ArgumentParser(prog="polybattery", description=main.__doc__)
    parser.add_argument(
        "-debug", "--debug", action="store_true", help="enable debug output to stdout"
    )
    parser.add_argument(
        "-simple", "--simple", action="store_true",
        help="print battery level to stdout every check",
    )
    parser.add_argument(
        "-polybar", "--polybar", action="store_true",
        help="print battery level in polybar format",
    )
    parser.add_argument(
        "-once", "--once", action="store_true", help="check state and print once"
    )
    parser.add_argument(
        "-thr", "--thr", type=int, default=10,
        help="battery level threshold for notifications (default: %(default)s)",
    )
    parser.add_argument(
        "-notify-once", "--notify-once", dest="notify_once", action="store_true",
        help="notify only once when the battery is low",
    )
    parser.add_argument(
        "-wait", "--wait", type=int, default=100,
        help="time (ms) between polybar animation frames (default: %(default)s)",
    )
    parser.add_argument(
        "-power-supply-dir", "--power-supply-dir", dest="power_supply_dir",
        default=DEFAULT_POWER_SUPPLY_DIR, help="sysfs power supply class directory",
    )
    parser.add_argument(
        "-version", "--version", action="version", version=f"Version: {__version__}"
    )
    return parser


def main():
    """
    polybattery keeps an eye on your battery.

    It warns you with a desktop notification when the battery is running low and can print the
    battery status either as a plain percentage or as an animated Polybar module.
    """

    args = build_parser().parse_args()
    sys.exit(App(Config.from_args(args)).start())
