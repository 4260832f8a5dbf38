import unittest
from datetime import datetime, timedelta, timezone

from config import config
from simulation_clock import SimulationClock

START = datetime(2024, 1, 1, tzinfo=timezone.utc)

class TestSimulationClock(unittest.TestCase):

    def test_naive_date_taken_as_utc(self):
        clock = SimulationClock(datetime(2000, 1, 1, 12))
        self.assertEqual(clock.date.tzinfo, timezone.utc)
        self.assertAlmostEqual(clock.days_since_j2000, 0.0)
        self.assertAlmostEqual(clock.julian_date, 2451545.0)

    def test_advance_one_sim_day(self):
        clock = SimulationClock(START)
        later = clock.advance(int(config.Time.FRAMES_PER_SIM_DAY))
        self.assertAlmostEqual((later.date - START) / timedelta(days=1), 1.0, places=6)
        self.assertEqual(clock.date, START) # Clocks are immutable

    def test_advance_respects_time_scale(self):
        clock = SimulationClock(START, time_scale=-10.0)
        later = clock.advance(60)
        self.assertAlmostEqual((later.date - START) / timedelta(days=1), -10.0, places=6)

    def test_paused_clock_does_not_advance(self):
        clock = SimulationClock(START).pause()
        self.assertTrue(clock.paused)
        self.assertEqual(clock.advance(100).date, START)

    def test_play_flips_negative_scale(self):
        clock = SimulationClock(START, time_scale=-4.0, paused=True).play()
        self.assertEqual(clock.time_scale, 4.0)
        self.assertFalse(clock.paused)

    def test_play_from_zero_scale(self):
        self.assertEqual(SimulationClock(START, time_scale=0.0).play().time_scale, 1.0)

    def test_reverse_flips_positive_scale(self):
        clock = SimulationClock(START, time_scale=2.5, paused=True).reverse()
        self.assertEqual(clock.time_scale, -2.5)
        self.assertFalse(clock.paused)
        self.assertEqual(SimulationClock(START, time_scale=-3.0).reverse().time_scale, -3.0)
        self.assertEqual(SimulationClock(START, time_scale=0.0).reverse().time_scale, -1.0)

    def test_live(self):
        now = datetime(2030, 5, 6, 7, 8, tzinfo=timezone.utc)
        clock = SimulationClock(START, time_scale=-50.0, paused=True).live(now)
        self.assertEqual(clock, SimulationClock(now, 1.0, False))

    def test_speed_setting_zero_pauses(self):
        clock = SimulationClock(START).with_speed_setting(0)
        self.assertTrue(clock.paused)
        self.assertEqual(clock.time_scale, 0.0)

    def test_speed_setting_exponential(self):
        clock = SimulationClock(START, paused=True)
        self.assertAlmostEqual(clock.with_speed_setting(20).time_scale, 1.0)
        self.assertAlmostEqual(clock.with_speed_setting(40).time_scale, 2.0)
        self.assertAlmostEqual(clock.with_speed_setting(100).time_scale, 16.0)
        self.assertAlmostEqual(clock.with_speed_setting(10).time_scale, 2 ** -0.5)
        self.assertFalse(clock.with_speed_setting(5).paused)

    def test_describe(self):
        self.assertIn("2024-01-01 00:00:00 UTC", SimulationClock(START).describe())
        self.assertIn("PAUSED", SimulationClock(START, paused=True).describe())

if __name__ == '__main__':
    unittest.main()
