#!/usr/bin/env python
#
#    This file is part of Pi by Monte Carlo (PIMC).
#
#    PIMC is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Lesser General Public License as
#    published by the Free Software Foundation, either version 3 of
#    the License, or (at your option) any later version.
#
#    PIMC is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#    GNU Lesser General Public License for more details.
#
#    You should have received a copy of the GNU Lesser General Public
#    License along with PIMC. If not, see <http://www.gnu.org/licenses/>.
#
import io
import math
import unittest

from pimc import display
from pimc._types import Tally


class TestDisplay(unittest.TestCase):
    def __init__(self, *args, **kwargs):
        super(TestDisplay, self).__init__(*args, **kwargs)

    def test_spinner_cycles(self):
        spinner = display.Spinner()
        frames = [next(spinner) for _ in range(len(display.Spinner.FRAMES) + 1)]
        self.assertEqual(frames[0], frames[-1])
        self.assertEqual(len(set(frames)), len(display.Spinner.FRAMES))

    def test_bar(self):
        self.assertEqual(display.progressBar(0.0, 4), "[░░░░] 0.0%")
        self.assertEqual(display.progressBar(50.0, 4), "[██░░] 50.0%")
        self.assertEqual(display.progressBar(100.0, 4), "[████] 100.0%")

    def test_bar_clamped(self):
        self.assertEqual(display.progressBar(150.0, 2), "[██] 100.0%")
        self.assertEqual(display.progressBar(-3.0, 2), "[░░] 0.0%")

    def test_bar_width(self):
        bar = display.progressBar(42.0)
        self.assertEqual(bar.count("█") + bar.count("░"), display.BAR_WIDTH)

    def test_render(self):
        progress = display.ProgressDisplay([100, 0], stream=io.StringIO())
        frame = progress.render([Tally(10, 25), Tally()])
        self.assertIn("[Lane 0]: [", frame)
        self.assertIn("25.0%", frame)
        # An empty lane has nothing left to do
        self.assertIn("[Lane 1]: [" + "█" * display.BAR_WIDTH + "] 100.0%",
                      frame)

    def test_refresh_throttled(self):
        stream = io.StringIO()
        progress = display.ProgressDisplay([10], stream=stream, interval=60)
        self.assertTrue(progress.refresh([Tally()]))
        self.assertFalse(progress.refresh([Tally(1, 5)]))
        self.assertTrue(progress.refresh([Tally(1, 5)], force=True))

    def test_cursor(self):
        stream = io.StringIO()
        progress = display.ProgressDisplay([10], stream=stream)
        progress.start()
        progress.finish([Tally(7, 10)])
        output = stream.getvalue()
        self.assertTrue(output.startswith(display.HIDE_CURSOR))
        self.assertTrue(output.endswith(display.SHOW_CURSOR))
        self.assertIn("100.0%", output)

    def test_report(self):
        report = display.formatReport(3.0, 1000, 2.0)
        self.assertIn("Pi estimate:       3.0000000000", report)
        self.assertIn("{0:.10f}".format(math.pi), report)
        self.assertIn("{0:.10f}".format(math.pi - 3.0), report)
        self.assertIn("Samples used:      1000", report)
        self.assertIn("5.00e+02", report)

    def test_report_no_time(self):
        self.assertIn("inf", display.formatReport(3.0, 10, 0.0))


if __name__ == "__main__":
    t = unittest.TestLoader().loadTestsFromTestCase(TestDisplay)
    unittest.TextTestRunner(verbosity=2).run(t)
