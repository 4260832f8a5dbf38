import unittest
import copy
from unittest import mock

from config import config, ConfigurationError

def earth_record():
    return copy.deepcopy(config.SolarSystem.PLANET_DATA['Earth'])

class TestConfigValidation(unittest.TestCase):

    def test_default_configuration_is_valid(self):
        config.validate()

    def test_catalog_contents(self):
        self.assertEqual(list(config.SolarSystem.PLANET_DATA),
                         ["Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune"])
        self.assertEqual(config.SolarSystem.KEPLER_ITERATIONS, 10)
        self.assertEqual(config.World.ORBIT_SCALE, 10.0)

    def _assert_invalid_planet(self, **overrides):
        record = earth_record()
        record.update(overrides)
        with mock.patch.object(config.SolarSystem, 'PLANET_DATA', {'Earth': record}):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_inverted_belt(self):
        belt = dict(config.SolarSystem.BELT_DATA, inner_radius_au=3.5)
        with mock.patch.object(config.SolarSystem, 'BELT_DATA', belt):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_belt_named_like_a_planet(self):
        belt = dict(config.SolarSystem.BELT_DATA, name="Mars")
        with mock.patch.object(config.SolarSystem, 'BELT_DATA', belt):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_parabolic_orbit(self):
        self._assert_invalid_planet(eccentricity=1.0)

    def test_rejects_negative_eccentricity(self):
        self._assert_invalid_planet(eccentricity=-0.01)

    def test_rejects_non_positive_axis_and_period(self):
        self._assert_invalid_planet(semi_major_axis_au=0.0)
        self._assert_invalid_planet(period_years=-1.0)

    def test_rejects_bad_inclination(self):
        self._assert_invalid_planet(inclination_deg=181.0)

    def test_rejects_non_finite_element(self):
        self._assert_invalid_planet(mean_anomaly_at_epoch_deg=float('nan'))

    def test_rejects_bad_color(self):
        self._assert_invalid_planet(color=(300, 0, 0))

    def test_rejects_missing_field(self):
        record = earth_record()
        del record['period_years']
        with mock.patch.object(config.SolarSystem, 'PLANET_DATA', {'Earth': record}):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_duplicate_moon_name(self):
        record = earth_record()
        record['moons'] = record['moons'] + [dict(record['moons'][0])]
        with mock.patch.object(config.SolarSystem, 'PLANET_DATA', {'Earth': record}):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_comet_named_like_planet(self):
        with mock.patch.object(config.SolarSystem, 'COMET_DATA', {'Earth': earth_record()}):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_high_eccentricity_only_warns(self):
        record = earth_record()
        record['eccentricity'] = 0.99
        with mock.patch.object(config.SolarSystem, 'PLANET_DATA', {'Earth': record}):
            with self.assertLogs(level='WARNING') as captured:
                config.validate()
        self.assertTrue(any("Earth" in line for line in captured.output))

    def test_rejects_bad_speed_slider_default(self):
        with mock.patch.object(config.Time, 'SPEED_SLIDER_DEFAULT', 500):
            with self.assertRaises(ConfigurationError):
                config.validate()

    def test_rejects_zero_kepler_iterations(self):
        with mock.patch.object(config.SolarSystem, 'KEPLER_ITERATIONS', 0):
            with self.assertRaises(ConfigurationError):
                config.validate()

if __name__ == '__main__':
    unittest.main()
