# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

import io
import math
import unittest
from polybattery.modules.polybar import (
    COLOR_BANDS,
    COLOR_DEFAULT,
    ICONS,
    BarSegment,
    Frame,
    Polybar,
    color_for,
    format_line,
    icon_index,
)
from polybattery.power import BatteryState


class TestColorFor(unittest.TestCase):
    def test_edges(self):
        self.assertEqual(color_for(0.0), "FF0000")
        self.assertEqual(color_for(5.0), "FF0000")
        self.assertEqual(color_for(100.0), "00FF00")

    def test_upper_edge_is_inclusive(self):
        self.assertEqual(color_for(10.0), "FF1A00")
        self.assertEqual(color_for(10.01), "FF3500")
        self.assertEqual(color_for(50.0), "FFF100")
        self.assertEqual(color_for(50.5), "F1FF00")

    def test_goes_from_red_to_green(self):
        band_colors = [color for _, color in COLOR_BANDS]
        self.assertEqual(len(band_colors), 20)

        previous = None
        for tenth in range(0, 1001):
            color = color_for(tenth / 10)
            index = band_colors.index(color)
            if previous is not None:
                self.assertGreaterEqual(index, previous)
            previous = index

    def test_out_of_range(self):
        self.assertEqual(color_for(math.nan), "")
        self.assertEqual(color_for(100.5), "")


class TestIconIndex(unittest.TestCase):
    def test_levels(self):
        self.assertEqual(icon_index(0.0), 0)
        self.assertEqual(icon_index(9.99), 0)
        self.assertEqual(icon_index(10.0), 1)
        self.assertEqual(icon_index(55.0), 5)
        self.assertEqual(icon_index(99.9), 9)

    def test_clamped(self):
        self.assertEqual(icon_index(100.0), 9)
        self.assertEqual(icon_index(-5.0), 0)

    def test_glyphs(self):
        self.assertEqual(len(ICONS), 10)
        self.assertEqual(ICONS[0], "\ue242")
        self.assertEqual(ICONS[9], "\ue24b")


class TestFormatLine(unittest.TestCase):
    def test_markup(self):
        self.assertEqual(
            format_line(42.0, ICONS[4]),
            f"%{{F#FFD600}} {ICONS[4]} %{{F#{COLOR_DEFAULT}}}42.00%",
        )

    def test_suffix(self):
        self.assertEqual(
            format_line(100.0, ICONS[9], "x 1h 2m"),
            f"%{{F#00FF00}} {ICONS[9]} %{{F#DFDFDF}}100.00% x 1h 2m",
        )


class TestBarSegment(unittest.TestCase):
    def test_full_shows_fullest_icon(self):
        frames = list(BarSegment(30.0, BatteryState.FULL))
        self.assertEqual(frames, [Frame(format_line(30.0, ICONS[9]), 0)])

    def test_empty_shows_emptiest_icon(self):
        frames = list(BarSegment(80.0, BatteryState.EMPTY))
        self.assertEqual(frames, [Frame(format_line(80.0, ICONS[0]), 0)])

    def test_discharging_shows_level_and_time_remaining(self):
        frames = list(BarSegment(64.5, BatteryState.DISCHARGING, "x 2h 5m"))
        self.assertEqual(frames, [Frame(format_line(64.5, ICONS[6], "x 2h 5m"), 0)])

    def test_discharging_without_time_remaining(self):
        frames = list(BarSegment(0.0, BatteryState.DISCHARGING))
        self.assertEqual(
            frames, [Frame(f"%{{F#FF0000}} {ICONS[0]} %{{F#DFDFDF}}0.00%", 0)]
        )

    def test_charging_animates_every_icon(self):
        frames = list(BarSegment(45.0, BatteryState.CHARGING, "x 1h 0m", frame_delay=0.25))
        self.assertEqual(len(frames), 10)
        self.assertEqual([frame.text for frame in frames], [format_line(45.0, icon) for icon in ICONS])
        self.assertTrue(all(frame.delay == 0.25 for frame in frames))

    def test_unknown_animates(self):
        self.assertEqual(len(list(BarSegment(45.0, BatteryState.UNKNOWN))), 10)

    def test_nan_is_skipped(self):
        for state in [BatteryState.CHARGING, BatteryState.UNKNOWN, BatteryState.DISCHARGING]:
            self.assertEqual(list(BarSegment(math.nan, state)), [])

    def test_restartable(self):
        segment = BarSegment(45.0, BatteryState.CHARGING)
        self.assertEqual(list(segment), list(segment))


class TestPolybar(unittest.TestCase):
    def test_segment_uses_frame_delay(self):
        polybar = Polybar(io.StringIO(), frame_delay=0.5)
        frames = list(polybar.segment(20.0, BatteryState.CHARGING))
        self.assertEqual(frames[0].delay, 0.5)

    def test_write(self):
        stream = io.StringIO()
        polybar = Polybar(stream)
        polybar.write(Frame("line", 0))
        self.assertEqual(stream.getvalue(), "line\n")


if __name__ == "__main__":
    unittest.main()
