import unittest
import math
from datetime import datetime, timedelta, timezone
import numpy as np

from config import config
from physics_utils import J2000, PhysicsError
from solarsystem import (
    OrbitalElements, solve_kepler_equation, true_anomaly, calculate_position,
    calculate_position_from_days, sample_orbit_path, sample_orbit_ellipse,
    moon_angle, moon_visual_distances, moon_local_offset, moon_orbit_circle,
    load_catalog, load_sun, load_belt, validate_elements,
)

def rot_z(deg):
    c, s = math.cos(math.radians(deg)), math.sin(math.radians(deg))
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])

def rot_x(deg):
    c, s = math.cos(math.radians(deg)), math.sin(math.radians(deg))
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])

EARTH = OrbitalElements(a=1.000, e=0.0167, i=0.0, O=0.0, w=102.9, M=358.6, period=1.0)
MERCURY = OrbitalElements(a=0.387, e=0.2056, i=7.0, O=48.33, w=29.12, M=174.79, period=0.2408)
TILTED = OrbitalElements(a=2.0, e=0.3, i=10.0, O=40.0, w=60.0, M=0.0, period=2.83)

class TestKeplerSolver(unittest.TestCase):

    def test_circular_orbit_returns_mean_anomaly(self):
        for M in (0.0, 0.7, 2.5, 5.9):
            self.assertAlmostEqual(solve_kepler_equation(M, 0.0), M, places=12)

    def test_high_eccentricity_residual(self):
        e = 0.9
        for M in (0.5, 1.0, 2.0, 3.0, 4.0, 5.0):
            E = solve_kepler_equation(M, e)
            self.assertLess(abs(E - e * math.sin(E) - M), 1e-9, f"M={M}")

    def test_true_anomaly_at_periapsis_and_apoapsis(self):
        self.assertAlmostEqual(true_anomaly(0.0, 0.5), 0.0)
        self.assertAlmostEqual(abs(true_anomaly(math.pi - 1e-12, 0.5)), math.pi, places=5)

class TestCalculatePosition(unittest.TestCase):

    def test_deterministic(self):
        instant = datetime(2024, 3, 1, 6, 30, tzinfo=timezone.utc)
        np.testing.assert_array_equal(calculate_position(MERCURY, instant), calculate_position(MERCURY, instant))

    def test_epoch_anchor_at_periapsis(self):
        # M0 = 0 places the body at periapsis at J2000.
        expected = rot_z(TILTED.O) @ rot_x(TILTED.i) @ rot_z(TILTED.w) @ np.array([TILTED.perihelion, 0.0, 0.0])
        np.testing.assert_allclose(calculate_position(TILTED, J2000), expected, atol=1e-12)

    def test_circular_epoch_anchor(self):
        # With e = 0 and M0 = 0 the J2000 position is Rz(O) Rx(i) Rz(w) [a, 0, 0].
        circle = OrbitalElements(a=TILTED.a, e=0.0, i=TILTED.i, O=TILTED.O, w=TILTED.w, M=0.0, period=TILTED.period)
        expected = rot_z(circle.O) @ rot_x(circle.i) @ rot_z(circle.w) @ np.array([circle.a, 0.0, 0.0])
        np.testing.assert_allclose(calculate_position(circle, J2000), expected, atol=1e-12)

    def test_quarter_period_on_circular_orbit(self):
        circle = OrbitalElements(a=3.0, e=0.0, i=0.0, O=0.0, w=0.0, M=0.0, period=5.0)
        position = calculate_position_from_days(circle, circle.period_days / 4)
        np.testing.assert_allclose(position, [0.0, 3.0, 0.0], atol=1e-9)

    def test_circular_orbit_radius_equals_a(self):
        circle = OrbitalElements(a=5.2, e=0.0, i=1.3, O=100.5, w=273.8, M=20.0, period=11.86)
        for days in (-5000.0, 0.0, 123.4, 9999.9):
            self.assertAlmostEqual(np.linalg.norm(calculate_position_from_days(circle, days)), 5.2, places=9)

    def test_periodicity(self):
        for elements in (TILTED, MERCURY):
            start = calculate_position(elements, J2000)
            later = calculate_position(elements, J2000 + timedelta(days=elements.period_days))
            np.testing.assert_allclose(later, start, atol=1e-6)

    def test_earth_returns_after_one_year(self):
        instant = datetime(2023, 6, 21, tzinfo=timezone.utc)
        start = calculate_position(EARTH, instant)
        later = calculate_position(EARTH, instant + timedelta(days=365.25))
        self.assertLess(np.linalg.norm(later - start), 1e-6)

    def test_earth_returns_after_one_year_from_j2000(self):
        later = calculate_position(EARTH, J2000 + timedelta(days=365.25))
        self.assertLess(np.linalg.norm(later - calculate_position(EARTH, J2000)), 1e-6)

    def test_earth_stays_in_ecliptic(self):
        position = calculate_position(EARTH, datetime(2010, 9, 1, tzinfo=timezone.utc))
        self.assertAlmostEqual(position[2], 0.0, places=12)
        self.assertTrue(0.98 < np.linalg.norm(position) < 1.02)

    def test_mercury_radius_bounds(self):
        for k in range(50):
            r = np.linalg.norm(calculate_position_from_days(MERCURY, -3000.0 + k * 137.3))
            self.assertGreaterEqual(r, MERCURY.perihelion - 1e-12)
            self.assertLessEqual(r, MERCURY.aphelion + 1e-12)

    def test_naive_and_aware_instants_agree(self):
        naive = datetime(2015, 7, 14, 11, 49)
        aware = naive.replace(tzinfo=timezone.utc)
        np.testing.assert_array_equal(calculate_position(MERCURY, naive), calculate_position(MERCURY, aware))

    def test_precondition_violations(self):
        bad = [
            OrbitalElements(a=1.0, e=1.0, i=0.0, O=0.0, w=0.0, M=0.0, period=1.0),
            OrbitalElements(a=1.0, e=-0.1, i=0.0, O=0.0, w=0.0, M=0.0, period=1.0),
            OrbitalElements(a=0.0, e=0.1, i=0.0, O=0.0, w=0.0, M=0.0, period=1.0),
            OrbitalElements(a=1.0, e=0.1, i=0.0, O=0.0, w=0.0, M=0.0, period=0.0),
            OrbitalElements(a=1.0, e=0.1, i=float('nan'), O=0.0, w=0.0, M=0.0, period=1.0),
        ]
        for elements in bad:
            with self.assertRaises(PhysicsError):
                validate_elements(elements)
            with self.assertRaises(PhysicsError):
                calculate_position(elements, J2000)

    def test_non_finite_days_rejected(self):
        with self.assertRaises(PhysicsError):
            calculate_position_from_days(EARTH, float('inf'))

class TestOrbitSamplers(unittest.TestCase):

    def test_orbit_path_shape_and_closure(self):
        path = sample_orbit_path(MERCURY, datetime(2020, 1, 1, tzinfo=timezone.utc), steps=100)
        self.assertEqual(path.shape, (101, 3))
        np.testing.assert_allclose(path[0], path[-1], atol=1e-6)

    def test_orbit_path_starts_at_current_position(self):
        start = datetime(2021, 5, 5, tzinfo=timezone.utc)
        path = sample_orbit_path(EARTH, start, steps=10)
        np.testing.assert_allclose(path[0], calculate_position(EARTH, start), atol=1e-12)

    def test_orbit_path_rejects_zero_steps(self):
        with self.assertRaises(PhysicsError):
            sample_orbit_path(EARTH, J2000, steps=0)

    def test_ellipse_within_perihelion_and_aphelion(self):
        halley = OrbitalElements(a=17.8, e=0.967, i=162.26, O=58.42, w=111.33, M=38.38, period=75.32)
        ellipse = sample_orbit_ellipse(halley, steps=360)
        self.assertEqual(ellipse.shape, (361, 3))
        radii = np.linalg.norm(ellipse, axis=1)
        self.assertTrue(np.all(radii >= halley.perihelion - 1e-9))
        self.assertTrue(np.all(radii <= halley.aphelion + 1e-9))
        np.testing.assert_allclose(ellipse[0], ellipse[-1], atol=1e-9)

    def test_ellipse_starts_at_periapsis(self):
        ellipse = sample_orbit_ellipse(TILTED, steps=8)
        np.testing.assert_allclose(ellipse[0], calculate_position(TILTED, J2000), atol=1e-12)

class TestMoonModel(unittest.TestCase):

    def test_moon_angle_returns_after_one_period(self):
        period_years = 0.0748
        days = 812.3
        later = days + period_years * config.Time.DAYS_PER_YEAR
        self.assertAlmostEqual(moon_angle(later, period_years) - moon_angle(days, period_years), 2 * math.pi, places=9)

    def test_moon_angle_rejects_non_positive_period(self):
        with self.assertRaises(PhysicsError):
            moon_angle(10.0, 0.0)

    def test_single_moon_distance(self):
        np.testing.assert_allclose(moon_visual_distances(0.3, [0.00257]), [0.75])

    def test_single_moon_floor(self):
        np.testing.assert_allclose(moon_visual_distances(0.05, [0.01]), [0.5])

    def test_equal_distances_use_single_moon_rule(self):
        np.testing.assert_allclose(moon_visual_distances(1.0, [0.01, 0.01]), [2.5, 2.5])

    def test_clearance_pushes_moon_outward(self):
        # Phobos would sit at 0.36, inside 0.2 + 0.2.
        np.testing.assert_allclose(moon_visual_distances(0.2, [0.001, 0.002]), [0.5, 0.7])

    def test_band_mapping(self):
        distances = moon_visual_distances(3.36, [0.015, 0.025, 0.04, 0.07])
        np.testing.assert_allclose(distances[0], 6.048)
        np.testing.assert_allclose(distances[1], 6.048 + (0.01 / 0.055) * 5.712)
        np.testing.assert_allclose(distances[3], 11.76)
        self.assertEqual(distances, sorted(distances))

    def test_tiny_distance_spread_still_spans_band(self):
        np.testing.assert_allclose(moon_visual_distances(1.0, [0.01, 0.01 + 1e-13]), [1.8, 3.5])

    def test_no_moons(self):
        self.assertEqual(moon_visual_distances(1.0, []), [])

    def test_local_offset(self):
        np.testing.assert_allclose(moon_local_offset(0.0, 2.0), [2.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(moon_local_offset(math.pi / 2, 2.0), [0.0, 0.0, 2.0], atol=1e-12)

    def test_orbit_circle(self):
        circle = moon_orbit_circle(1.5)
        self.assertEqual(circle.shape, (config.Moons.ORBIT_SEGMENTS + 1, 3))
        np.testing.assert_allclose(np.linalg.norm(circle, axis=1), 1.5)
        np.testing.assert_allclose(circle[:, 1], 0.0)

class TestCatalog(unittest.TestCase):

    def test_planets_then_comets(self):
        catalog = load_catalog()
        kinds = [body.kind for body in catalog]
        self.assertEqual(kinds.count("planet"), len(config.SolarSystem.PLANET_DATA))
        self.assertEqual(kinds.count("comet"), len(config.SolarSystem.COMET_DATA))
        self.assertEqual(kinds, sorted(kinds, key=lambda k: k != "planet"))

    def test_catalog_records(self):
        bodies = {body.name: body for body in load_catalog()}
        self.assertTrue(bodies["Saturn"].has_rings)
        self.assertEqual([m.name for m in bodies["Jupiter"].moons], ["Io", "Europa", "Ganymede", "Callisto"])
        self.assertEqual(bodies["Earth"].elements.period, 1.0)
        self.assertTrue(bodies["1P/Halley"].is_comet)

    def test_custom_tables(self):
        planet = {'size': 1.0, 'color': (1, 2, 3), 'semi_major_axis_au': 2.0, 'eccentricity': 0.1,
                  'inclination_deg': 0.0, 'longitude_of_ascending_node_deg': 0.0,
                  'argument_of_perihelion_deg': 0.0, 'mean_anomaly_at_epoch_deg': 0.0, 'period_years': 2.83}
        catalog = load_catalog({'Test': planet}, {})
        self.assertEqual(len(catalog), 1)
        self.assertEqual(catalog[0].display.body_type, "Celestial Body")
        self.assertEqual(catalog[0].display.description, "No description.")

    def test_invalid_record_rejected(self):
        planet = {'size': 1.0, 'color': (1, 2, 3), 'semi_major_axis_au': 2.0, 'eccentricity': 1.2,
                  'inclination_deg': 0.0, 'longitude_of_ascending_node_deg': 0.0,
                  'argument_of_perihelion_deg': 0.0, 'mean_anomaly_at_epoch_deg': 0.0, 'period_years': 2.83}
        with self.assertRaises(PhysicsError):
            load_catalog({'Bad': planet}, {})

    def test_sun(self):
        sun = load_sun()
        self.assertEqual(sun.body_type, "Star")
        self.assertIsNone(sun.size)

    def test_belt(self):
        display, inner, outer = load_belt()
        self.assertEqual(display.body_type, "Belt")
        self.assertEqual(display.distance_text, "2.2 - 3.2 AU")
        self.assertIsNone(display.size)
        self.assertEqual((inner, outer), (2.2, 3.2))

if __name__ == '__main__':
    unittest.main()
