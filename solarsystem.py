# solarsystem.py
import math
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple, List, Dict, Optional, Sequence

import numpy as np

from config import config # Import the global config instance
from physics_utils import PhysicsError, normalize_angle_deg, days_since_j2000

@dataclass(frozen=True)
class OrbitalElements:
    """Classical Keplerian elements of a heliocentric orbit, referred to J2000.

    Physics-only record; display data lives in `DisplayMetadata`.
    """
    a: float  # Semi-major axis in AU
    e: float  # Eccentricity, 0 <= e < 1
    i: float  # Inclination in degrees
    O: float  # Longitude of ascending node in degrees (Ω)
    w: float  # Argument of periapsis in degrees (ω)
    M: float  # Mean anomaly at J2000 in degrees (M0)
    period: float  # Orbital period in Julian years, used directly for mean motion

    @property
    def period_days(self) -> float:
        return self.period * config.Time.DAYS_PER_YEAR

    @property
    def mean_motion_deg_per_day(self) -> float:
        return 360.0 / self.period_days

    @property
    def semi_minor_axis(self) -> float:
        return self.a * math.sqrt(1.0 - self.e ** 2)

    @property
    def perihelion(self) -> float:
        return self.a * (1.0 - self.e)

    @property
    def aphelion(self) -> float:
        return self.a * (1.0 + self.e)

@dataclass(frozen=True)
class DisplayMetadata:
    """Render/UI-only attributes of a body."""
    size: Optional[float]  # Relative to Earth; None when the catalog has no size
    color: Tuple[int, int, int]
    texture: Optional[str] = None
    description: str = "No description."
    body_type: str = "Celestial Body"
    distance_text: Optional[str] = None  # Fixed distance text shown instead of the semi-major axis

@dataclass(frozen=True)
class MoonData:
    name: str
    distance_au: float  # Real distance from the parent, only used to order moons visually
    period_years: float
    display: DisplayMetadata

@dataclass(frozen=True)
class CelestialBody:
    name: str
    elements: OrbitalElements
    display: DisplayMetadata
    moons: Tuple[MoonData, ...] = field(default_factory=tuple)
    has_rings: bool = False
    kind: str = "planet"  # "planet" or "comet"

    @property
    def is_comet(self) -> bool:
        return self.kind == "comet"


def validate_elements(elements: OrbitalElements):
    """
    Checks the evaluator preconditions: finite elements, a > 0, 0 <= e < 1, period > 0.

    Raises:
        PhysicsError: If any precondition is violated.
    """
    values = (elements.a, elements.e, elements.i, elements.O, elements.w, elements.M, elements.period)
    if not all(math.isfinite(v) for v in values):
        raise PhysicsError(f"Orbital elements must be finite: {elements}")
    if not (0 <= elements.e < 1):
        raise PhysicsError(f"Eccentricity e={elements.e} is out of bounds [0, 1) for Kepler's equation solver.")
    if elements.a <= 0:
        raise PhysicsError(f"Semi-major axis a={elements.a} must be positive.")
    if elements.period <= 0:
        raise PhysicsError(f"Orbital period {elements.period} must be positive.")

def solve_kepler_equation(M_rad: float, e: float, iterations: Optional[int] = None) -> float:
    """
    Solves Kepler's Equation M = E - e * sin(E) for eccentric anomaly E using Newton-Raphson.

    Starts at E0 = M and runs a fixed number of iterations with no convergence
    check, so every call costs the same. Ten iterations leave a residual far
    below 1e-9 rad for the catalog's eccentricities (e < 0.97).

    Args:
        M_rad: Mean anomaly in radians.
        e: Eccentricity (0 <= e < 1).
        iterations: Newton-Raphson steps, defaults to `config.SolarSystem.KEPLER_ITERATIONS`.

    Returns:
        Eccentric anomaly E in radians.
    """
    if iterations is None:
        iterations = config.SolarSystem.KEPLER_ITERATIONS

    E_rad = M_rad
    for _ in range(iterations):
        E_rad = E_rad - (E_rad - e * math.sin(E_rad) - M_rad) / (1 - e * math.cos(E_rad))

    if config.Debug.KEPLER_SOLVER:
        residual = E_rad - e * math.sin(E_rad) - M_rad
        logging.debug(f"Kepler solver: M={M_rad:.12f}, e={e}, E={E_rad:.12f}, residual={residual:.3e}")
    return E_rad

def true_anomaly(E_rad: float, e: float) -> float:
    """True anomaly from eccentric anomaly: tan(v/2) = sqrt((1+e)/(1-e)) * tan(E/2)."""
    return 2 * math.atan(math.sqrt((1 + e) / (1 - e)) * math.tan(E_rad / 2))

def orbital_plane_to_ecliptic(x_orb, y_orb, i_deg: float, O_deg: float, w_deg: float) -> np.ndarray:
    """
    Rotates orbital-plane coordinates (x toward periapsis) into the ecliptic frame
    using argument of periapsis w, inclination i and node longitude O.

    `x_orb` and `y_orb` may be scalars or equal-length arrays; the result has a
    trailing axis of length 3.
    """
    i_rad = math.radians(i_deg)
    O_rad = math.radians(O_deg)
    w_rad = math.radians(w_deg)

    cos_w, sin_w = math.cos(w_rad), math.sin(w_rad)
    cos_O, sin_O = math.cos(O_rad), math.sin(O_rad)
    cos_i, sin_i = math.cos(i_rad), math.sin(i_rad)

    x = x_orb * (cos_w * cos_O - sin_w * sin_O * cos_i) - y_orb * (sin_w * cos_O + cos_w * sin_O * cos_i)
    y = x_orb * (cos_w * sin_O + sin_w * cos_O * cos_i) - y_orb * (sin_w * sin_O - cos_w * cos_O * cos_i)
    z = x_orb * (sin_w * sin_i) + y_orb * (cos_w * sin_i)
    return np.stack([x, y, z], axis=-1).astype(np.float64)

def mean_anomaly_at(elements: OrbitalElements, days: float) -> float:
    """Mean anomaly in degrees, normalized to [0, 360), `days` after J2000."""
    return normalize_angle_deg(elements.M + elements.mean_motion_deg_per_day * days)

def calculate_position_from_days(elements: OrbitalElements, days: float) -> np.ndarray:
    """
    Heliocentric ecliptic position (AU) of a body `days` after J2000.

    See `calculate_position` for the algorithm.

    Raises:
        PhysicsError: If the elements violate the solver preconditions or `days` is not finite.
    """
    validate_elements(elements)
    if not math.isfinite(days):
        raise PhysicsError(f"Time offset from J2000 must be finite, got {days} days.")

    e = elements.e
    M_rad = math.radians(mean_anomaly_at(elements, days))

    E_rad = solve_kepler_equation(M_rad, e)
    v_rad = true_anomaly(E_rad, e)
    r = elements.a * (1 - e * math.cos(E_rad))

    # Heliocentric coordinates in orbital plane
    x_orb = r * math.cos(v_rad)
    y_orb = r * math.sin(v_rad)

    return orbital_plane_to_ecliptic(x_orb, y_orb, elements.i, elements.O, elements.w)

def calculate_position(elements: OrbitalElements, instant: datetime) -> np.ndarray:
    """
    Calculates the position of a body from its Keplerian orbital elements.

    Steps:
    1. Days since J2000 (may be negative or fractional).
    2. Mean motion n = 360 / (period * 365.25) degrees per day, using the
       catalog period rather than one derived from `a`.
    3. M = M0 + n * days, wrapped into [0, 360).
    4. Kepler's equation solved for E with a fixed-iteration Newton-Raphson.
    5. True anomaly v and radius r = a * (1 - e * cos(E)).
    6. Orbital-plane coordinates rotated into the ecliptic frame.

    The result is in the ecliptic frame (AU); the display axis permutation is
    applied by the caller with `physics_utils.to_display_frame`.

    Args:
        elements: Orbital elements of the body.
        instant: Time to evaluate at. Naive datetimes are taken as UTC.

    Returns:
        np.ndarray: `(x, y, z)` in AU.

    Raises:
        PhysicsError: If the elements violate the solver preconditions.
    """
    return calculate_position_from_days(elements, days_since_j2000(instant))

def sample_orbit_path(elements: OrbitalElements, start: datetime, steps: int = 100) -> np.ndarray:
    """
    Samples the evaluator at `steps + 1` evenly spaced instants covering exactly
    one period from `start`. The first and last points coincide, closing the path.

    Returns:
        np.ndarray: `(steps + 1, 3)` ecliptic positions in AU.
    """
    if steps < 1:
        raise PhysicsError(f"Orbit path needs at least one step, got {steps}.")
    start_days = days_since_j2000(start)
    period_days = elements.period_days
    return np.array([
        calculate_position_from_days(elements, start_days + k / steps * period_days)
        for k in range(steps + 1)
    ])

def sample_orbit_ellipse(elements: OrbitalElements, steps: int = 360) -> np.ndarray:
    """
    Closed-form orbit ellipse parametrized by eccentric anomaly, evenly spaced
    in E rather than in time. Gives even geometric resolution for
    high-eccentricity orbits where time sampling bunches up at aphelion.

    Returns:
        np.ndarray: `(steps + 1, 3)` ecliptic positions in AU.
    """
    validate_elements(elements)
    if steps < 1:
        raise PhysicsError(f"Orbit ellipse needs at least one step, got {steps}.")
    E = np.linspace(0.0, 2 * np.pi, steps + 1)

    # 2D position in orbital plane, focus at origin
    x_orb = elements.a * (np.cos(E) - elements.e)
    y_orb = elements.semi_minor_axis * np.sin(E)
    return orbital_plane_to_ecliptic(x_orb, y_orb, elements.i, elements.O, elements.w)

# --- Simplified moon model ---
# Moons do not go through the Kepler solver: they move at a uniform rate on a
# circle whose radius is normalized for legibility, not physical distance.

def moon_angle(days_since_epoch: float, period_years: float) -> float:
    """Angle in radians of a moon on its circular orbit, `days_since_epoch` days after J2000."""
    if period_years <= 0:
        raise PhysicsError(f"Moon period must be positive, got {period_years}.")
    return (days_since_epoch / (period_years * config.Time.DAYS_PER_YEAR)) * math.pi * 2

def moon_visual_distances(parent_display_size: float, distances: Sequence[float]) -> List[float]:
    """
    Visual orbit radius for each moon of a parent with display radius `parent_display_size`.

    Real distances are mapped linearly into the band
    [VISUAL_MIN_FACTOR, VISUAL_MAX_FACTOR] x parent size. A single moon, or moons
    that all share one distance, get SINGLE_MOON_FACTOR x parent size with a
    floor of SINGLE_MOON_MIN_DISTANCE. Any radius inside the clearance margin
    around the parent is pushed out to parent size + CLEARANCE_DISTANCE.
    """
    if not distances:
        return []
    min_real = min(distances)
    max_real = max(distances)
    range_real = max_real - min_real

    moons_cfg = config.Moons
    visual = []
    for distance in distances:
        if len(distances) == 1 or range_real == 0:
            visual_dist = parent_display_size * moons_cfg.SINGLE_MOON_FACTOR
            if visual_dist < moons_cfg.SINGLE_MOON_MIN_DISTANCE:
                visual_dist = moons_cfg.SINGLE_MOON_MIN_DISTANCE
        else:
            norm = (distance - min_real) / range_real
            min_vis = parent_display_size * moons_cfg.VISUAL_MIN_FACTOR
            max_vis = parent_display_size * moons_cfg.VISUAL_MAX_FACTOR
            visual_dist = min_vis + norm * (max_vis - min_vis)

        if visual_dist < parent_display_size + moons_cfg.CLEARANCE_MARGIN:
            visual_dist = parent_display_size + moons_cfg.CLEARANCE_DISTANCE
        visual.append(visual_dist)
    return visual

def moon_local_offset(angle_rad: float, visual_distance: float) -> np.ndarray:
    """Offset of a moon from its parent in the display frame (orbit in the local XZ plane)."""
    return np.array([math.cos(angle_rad) * visual_distance, 0.0, math.sin(angle_rad) * visual_distance])

def moon_orbit_circle(visual_distance: float, segments: Optional[int] = None) -> np.ndarray:
    """Closed circle of `segments + 1` local display-frame points for drawing a moon orbit."""
    if segments is None:
        segments = config.Moons.ORBIT_SEGMENTS
    angles = np.linspace(0.0, 2 * np.pi, segments + 1)
    return np.stack([np.cos(angles) * visual_distance,
                     np.zeros_like(angles),
                     np.sin(angles) * visual_distance], axis=-1)

# --- Catalog ---

def _elements_from_record(record: Dict) -> OrbitalElements:
    return OrbitalElements(
        a=record['semi_major_axis_au'],
        e=record['eccentricity'],
        i=record['inclination_deg'],
        O=record['longitude_of_ascending_node_deg'],
        w=record['argument_of_perihelion_deg'],
        M=record['mean_anomaly_at_epoch_deg'],
        period=record['period_years'],
    )

def _display_from_record(record: Dict, default_type: str = "Celestial Body") -> DisplayMetadata:
    return DisplayMetadata(
        size=record.get('size'),
        color=tuple(record['color']),
        texture=record.get('texture'),
        description=record.get('description', "No description."),
        body_type=record.get('body_type', default_type),
        distance_text=record.get('distance_text'),
    )

def load_sun(sun_data: Optional[Dict] = None) -> DisplayMetadata:
    """Display metadata of the Sun, which sits at the origin and has no orbit."""
    return _display_from_record(sun_data if sun_data is not None else config.SolarSystem.SUN_DATA, "Star")

def load_belt(belt_data: Optional[Dict] = None) -> Tuple[DisplayMetadata, float, float]:
    """Display metadata and inner/outer radii (AU) of the asteroid belt, which has no orbit."""
    record = belt_data if belt_data is not None else config.SolarSystem.BELT_DATA
    return _display_from_record(record, "Belt"), record['inner_radius_au'], record['outer_radius_au']

def load_catalog(planet_data: Optional[Dict[str, Dict]] = None,
                 comet_data: Optional[Dict[str, Dict]] = None) -> List[CelestialBody]:
    """
    Builds `CelestialBody` records from the catalog tables, planets first then comets,
    in table order. Defaults to `config.SolarSystem.PLANET_DATA` and `COMET_DATA`.

    Raises:
        PhysicsError: If a record's orbital elements violate the solver preconditions.
    """
    if planet_data is None:
        planet_data = config.SolarSystem.PLANET_DATA
    if comet_data is None:
        comet_data = config.SolarSystem.COMET_DATA

    bodies: List[CelestialBody] = []
    for kind, table in (("planet", planet_data), ("comet", comet_data)):
        for name, record in table.items():
            elements = _elements_from_record(record)
            validate_elements(elements)
            moons = tuple(
                MoonData(
                    name=moon['name'],
                    distance_au=moon['distance_au'],
                    period_years=moon['period_years'],
                    display=_display_from_record(moon, "Moon"),
                )
                for moon in record.get('moons', [])
            )
            bodies.append(CelestialBody(
                name=name,
                elements=elements,
                display=_display_from_record(record),
                moons=moons,
                has_rings=record.get('has_rings', False),
                kind=kind,
            ))
    logging.debug(f"Loaded catalog with {len(bodies)} bodies.")
    return bodies
