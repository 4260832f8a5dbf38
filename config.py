# config.py
import math
import logging

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(module)s - %(message)s')

# Fundamental constants (used across different config sections)
AU_KM = 149597870.7  # Astronomical Unit in kilometers
EARTH_RADIUS_KM = 6371.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25  # Julian year

# Display scale constants (also fundamental for conversions)
ORBIT_SCALE = 10.0  # Display units per AU
PLANET_SCALE = 1.0  # Multiplier on catalog body sizes

class ConfigurationError(Exception):
    """Custom exception for orrery configuration errors.

    Raised by `SimulationConfig.validate()` and other configuration-dependent
    components when settings are invalid, inconsistent, or missing, which
    would prevent the orrery from running correctly. This includes malformed
    records in the body catalog (e.g. a hyperbolic eccentricity or a
    non-positive orbital period).

    Attributes:
        message (str): A human-readable explanation of the configuration error.
                       This is the first argument passed to the exception constructor.
    """
    pass

class SimulationConfig:
    """Centralized, hierarchical configuration for the Solar System orrery.

    This class consolidates all parameters into nested static classes
    (e.g., `SimulationConfig.World`, `SimulationConfig.SolarSystem`,
    `SimulationConfig.Visualization`) for organized access. An instance of this
    class, named `config`, is created at the end of this module, making it
    globally available via `from config import config`.

    The body catalog (planets, their moons, comets and the Sun) is a static data
    table stored in `SimulationConfig.SolarSystem`. It is validated here once at
    import time and turned into `CelestialBody` records by
    `solarsystem.load_catalog()`.

    Example Usage:
        >>> from config import config
        >>> print(f"Orbit scale: {config.World.ORBIT_SCALE}")
        >>> print(f"Kepler iterations: {config.SolarSystem.KEPLER_ITERATIONS}")
    """

    # --- World Configuration ---
    class World:
        """Configuration for the display world.

        The display world is a right-handed, Y-up frame. Heliocentric ecliptic
        positions (AU) are mapped into it by `physics_utils.to_display_frame`.

        Attributes:
            ORBIT_SCALE (float): Display units per astronomical unit.
            PLANET_SCALE (float): Multiplier applied to catalog body sizes.
            SUN_SIZE (float): Display radius of the Sun.
        """
        ORBIT_SCALE = ORBIT_SCALE
        PLANET_SCALE = PLANET_SCALE
        SUN_SIZE = 2.0

    # --- Time Configuration ---
    class Time:
        """Configuration related to simulated time progression.

        Attributes:
            J2000_ISO (str): ISO-8601 timestamp of the J2000 reference epoch (UTC).
            REFERENCE_EPOCH_JD (float): Julian Date of the J2000 epoch.
            DAYS_PER_YEAR (float): Length of the Julian year used for periods.
            FRAMES_PER_SIM_DAY (float): At a time scale of 1.0, one simulated day
                                        elapses every this many frames.
            DEFAULT_TIME_SCALE (float): Time scale a fresh clock starts with.
            SPEED_SLIDER_MIN (int): Lowest speed slider setting (0 pauses).
            SPEED_SLIDER_MAX (int): Highest speed slider setting.
            SPEED_SLIDER_DEFAULT (int): Slider setting that maps to a time scale of 1.0.
            SPEED_SLIDER_DIVISOR (float): Slider units per doubling of the time scale.
        """
        J2000_ISO = "2000-01-01T12:00:00+00:00"
        REFERENCE_EPOCH_JD = 2451545.0
        DAYS_PER_YEAR = DAYS_PER_YEAR
        FRAMES_PER_SIM_DAY = 60.0
        DEFAULT_TIME_SCALE = 1.0
        SPEED_SLIDER_MIN = 0
        SPEED_SLIDER_MAX = 100
        SPEED_SLIDER_DEFAULT = 20
        SPEED_SLIDER_DIVISOR = 20.0

    # --- Solar System Data ---
    class SolarSystem:
        """Configuration for celestial bodies and orbital mechanics.

        Attributes:
            KEPLER_ITERATIONS (int): Fixed number of Newton-Raphson iterations used to
                                     solve Kepler's equation. No convergence check is made.
            HIGH_ECCENTRICITY_WARNING (float): Catalog eccentricities at or above this value
                                               are logged at validation time, since the fixed
                                               iteration count is not guaranteed as e -> 1.
            SUN_DATA (Dict): Display data for the Sun (it has no orbit).
            BELT_DATA (Dict): Display data for the asteroid belt, a static annulus
                              between 'inner_radius_au' and 'outer_radius_au'
                              listed in navigation between planets and comets.
            PLANET_DATA (Dict[str, Dict]): Planets keyed by name, in display order. Each
                                           record holds display metadata, the six J2000
                                           orbital elements, the period in years, an
                                           optional 'moons' list and a 'has_rings' flag.
            COMET_DATA (Dict[str, Dict]): Comets keyed by name, same element layout.
        """
        KEPLER_ITERATIONS = 10
        HIGH_ECCENTRICITY_WARNING = 0.97

        SUN_DATA = {
            'name': 'Sun',
            'size': None,
            'color': (255, 255, 100),
            'texture': 'sun.jpg',
            'body_type': 'Star',
            'distance_text': '0 AU',
            'description': 'The Sun.',
        }

        BELT_DATA = {
            'name': 'Asteroid Belt',
            'size': None,
            'color': (170, 170, 170),
            'texture': 'asteroid_field.png',
            'body_type': 'Belt',
            'distance_text': '2.2 - 3.2 AU',
            'description': 'Region between Mars and Jupiter containing many rocky bodies.',
            'inner_radius_au': 2.2,
            'outer_radius_au': 3.2,
        }

        PLANET_DATA = {
            'Mercury': {
                'size': 0.38, 'color': (165, 165, 165), 'texture': 'mercury.jpg', 'body_type': 'Planet',
                'description': "The smallest planet in the Solar System and the closest to the Sun.",
                'semi_major_axis_au': 0.387, 'eccentricity': 0.2056, 'inclination_deg': 7.00,
                'longitude_of_ascending_node_deg': 48.33, 'argument_of_perihelion_deg': 29.12,
                'mean_anomaly_at_epoch_deg': 174.79, 'period_years': 0.2408,
            },
            'Venus': {
                'size': 0.95, 'color': (227, 187, 118), 'texture': 'venus.jpg', 'body_type': 'Planet',
                'description': "Second planet from the Sun. It has the hottest surface of any planet.",
                'semi_major_axis_au': 0.723, 'eccentricity': 0.0067, 'inclination_deg': 3.39,
                'longitude_of_ascending_node_deg': 76.68, 'argument_of_perihelion_deg': 54.88,
                'mean_anomaly_at_epoch_deg': 50.11, 'period_years': 0.6152,
            },
            'Earth': {
                'size': 1.0, 'color': (34, 51, 255), 'texture': 'earth.jpg', 'body_type': 'Planet',
                'description': "Our home planet. The only known planet to support life.",
                'semi_major_axis_au': 1.000, 'eccentricity': 0.0167, 'inclination_deg': 0.00,
                'longitude_of_ascending_node_deg': 0.00, 'argument_of_perihelion_deg': 102.9,
                'mean_anomaly_at_epoch_deg': 358.6, 'period_years': 1.0000,
                'moons': [
                    {'name': 'Moon', 'size': 0.27, 'distance_au': 0.00257, 'period_years': 0.0748,
                     'color': (136, 136, 136), 'texture': 'moon.png'},
                ],
            },
            'Mars': {
                'size': 0.53, 'color': (221, 68, 34), 'texture': 'mars.jpg', 'body_type': 'Planet',
                'description': "The Red Planet. Dusty, cold, desert world with a very thin atmosphere.",
                'semi_major_axis_au': 1.524, 'eccentricity': 0.0934, 'inclination_deg': 1.85,
                'longitude_of_ascending_node_deg': 49.57, 'argument_of_perihelion_deg': 286.5,
                'mean_anomaly_at_epoch_deg': 19.41, 'period_years': 1.8808,
                'moons': [
                    {'name': 'Phobos', 'size': 0.1, 'distance_au': 0.001, 'period_years': 0.0009,
                     'color': (85, 85, 85), 'texture': 'phobos.png'},
                    {'name': 'Deimos', 'size': 0.08, 'distance_au': 0.002, 'period_years': 0.0035,
                     'color': (102, 102, 102), 'texture': 'phobos.png'},
                ],
            },
            'Jupiter': {
                'size': 11.2, 'color': (217, 160, 102), 'texture': 'jupiter.jpg', 'body_type': 'Planet',
                'description': "The largest planet in the Solar System. A gas giant with a Great Red Spot.",
                'semi_major_axis_au': 5.204, 'eccentricity': 0.0489, 'inclination_deg': 1.30,
                'longitude_of_ascending_node_deg': 100.5, 'argument_of_perihelion_deg': 273.8,
                'mean_anomaly_at_epoch_deg': 20.02, 'period_years': 11.862,
                'moons': [
                    {'name': 'Io', 'size': 0.28, 'distance_au': 0.015, 'period_years': 0.0048,
                     'color': (255, 255, 0), 'texture': 'io.png'},
                    {'name': 'Europa', 'size': 0.24, 'distance_au': 0.025, 'period_years': 0.0097,
                     'color': (204, 204, 204), 'texture': 'europa.png'},
                    {'name': 'Ganymede', 'size': 0.41, 'distance_au': 0.04, 'period_years': 0.019,
                     'color': (221, 221, 221), 'texture': 'ganymede.png'},
                    {'name': 'Callisto', 'size': 0.37, 'distance_au': 0.07, 'period_years': 0.045,
                     'color': (68, 68, 68), 'texture': 'callisto.png'},
                ],
            },
            'Saturn': {
                'size': 9.45, 'color': (252, 221, 141), 'texture': 'saturn.jpg', 'body_type': 'Planet',
                'description': "Adorned with a dazzling, complex system of icy rings.",
                'semi_major_axis_au': 9.582, 'eccentricity': 0.0565, 'inclination_deg': 2.48,
                'longitude_of_ascending_node_deg': 113.7, 'argument_of_perihelion_deg': 339.3,
                'mean_anomaly_at_epoch_deg': 317.0, 'period_years': 29.457,
                'has_rings': True,
                'moons': [
                    {'name': 'Titan', 'size': 0.4, 'distance_au': 0.05, 'period_years': 0.043,
                     'color': (221, 170, 0), 'texture': 'titan.png'},
                ],
            },
            'Uranus': {
                'size': 4.0, 'color': (79, 208, 231), 'texture': 'uranus.jpg', 'body_type': 'Planet',
                'description': "An ice giant. It rotates at a nearly 90-degree angle from the plane of its orbit.",
                'semi_major_axis_au': 19.20, 'eccentricity': 0.0463, 'inclination_deg': 0.77,
                'longitude_of_ascending_node_deg': 74.00, 'argument_of_perihelion_deg': 96.99,
                'mean_anomaly_at_epoch_deg': 142.5, 'period_years': 84.011,
            },
            'Neptune': {
                'size': 3.88, 'color': (51, 68, 255), 'texture': 'neptune.jpg', 'body_type': 'Planet',
                'description': "The eighth and most distant major planet orbiting our Sun. Dark, cold, and windy.",
                'semi_major_axis_au': 30.05, 'eccentricity': 0.0094, 'inclination_deg': 1.76,
                'longitude_of_ascending_node_deg': 131.7, 'argument_of_perihelion_deg': 273.1,
                'mean_anomaly_at_epoch_deg': 256.2, 'period_years': 164.79,
                'moons': [
                    {'name': 'Triton', 'size': 0.21, 'distance_au': 0.02, 'period_years': 0.016,
                     'color': (255, 170, 170), 'texture': 'triton.png'},
                ],
            },
        }

        COMET_DATA = {
            '1P/Halley': {
                'size': 0.5, 'color': (173, 216, 230), 'texture': 'comet_halley.png', 'body_type': 'Periodic Comet',
                'description': ("Halley's Comet orbits the Sun every 75-76 years. It is the only known "
                                "short-period comet that is regularly visible to the naked eye from Earth."),
                'semi_major_axis_au': 17.834, 'eccentricity': 0.967, 'inclination_deg': 162.26,
                'longitude_of_ascending_node_deg': 58.42, 'argument_of_perihelion_deg': 111.33,
                'mean_anomaly_at_epoch_deg': 38.38, 'period_years': 75.32,
            },
            '67P/C-Gerasimenko': {
                'size': 0.4, 'color': (170, 170, 170), 'texture': 'comet_67p.png', 'body_type': 'Jupiter-family Comet',
                'description': ("Visited by the Rosetta spacecraft in 2014, this comet has a distinct "
                                "bi-lobed 'rubber duck' shape."),
                'semi_major_axis_au': 3.46, 'eccentricity': 0.641, 'inclination_deg': 7.04,
                'longitude_of_ascending_node_deg': 50.14, 'argument_of_perihelion_deg': 12.78,
                'mean_anomaly_at_epoch_deg': 20.0, 'period_years': 6.44,
            },
            'C/2020 F3 (NEOWISE)': {
                'size': 0.6, 'color': (255, 215, 0), 'texture': 'comet_neowise.png', 'body_type': 'Long-period Comet',
                'description': "A bright comet discovered in 2020. Parameters simplified for visualization.",
                'semi_major_axis_au': 50.0, 'eccentricity': 0.95, 'inclination_deg': 128.9,
                'longitude_of_ascending_node_deg': 61.0, 'argument_of_perihelion_deg': 37.2,
                'mean_anomaly_at_epoch_deg': 0.1, 'period_years': 350.0,
            },
            '2P/Encke': {
                'size': 0.3, 'color': (136, 255, 136), 'texture': 'comet_encke.png', 'body_type': 'Periodic Comet',
                'description': "Has the shortest period of any known comet, taking just 3.3 years to orbit the Sun.",
                'semi_major_axis_au': 2.21, 'eccentricity': 0.848, 'inclination_deg': 11.78,
                'longitude_of_ascending_node_deg': 334.56, 'argument_of_perihelion_deg': 186.5,
                'mean_anomaly_at_epoch_deg': 0.0, 'period_years': 3.30,
            },
        }

    # --- Body Display Configuration ---
    class Bodies:
        """Display sizing and per-frame spin of planets and comets.

        Attributes:
            SIZE_FACTOR (float): Catalog size (Earth = 1) to display radius factor.
            PLANET_MIN_DISPLAY_SIZE (float): Smallest display radius for a planet.
            COMET_DISPLAY_SIZE (float): Display radius of every comet nucleus.
            PLANET_SPIN_RATE (float): Radians per frame of spin about the local Y axis,
                                      divided by the orbital period in years.
            COMET_SPIN_PER_FRAME (Tuple[float, float, float]): Radians per frame about X, Y, Z.
            COMET_LABEL_OFFSET (float): Height of a comet's label above the comet.
            PLANET_LABEL_OFFSET (float): Height of a planet's label above its surface.
            RING_INNER_FACTOR (float): Inner ring radius as a multiple of the planet radius.
            RING_OUTER_FACTOR (float): Outer ring radius as a multiple of the planet radius.
            RING_COLOR (Tuple[int, int, int]): RGB color of planetary rings.
        """
        SIZE_FACTOR = 0.3
        PLANET_MIN_DISPLAY_SIZE = 0.2
        COMET_DISPLAY_SIZE = 0.15
        PLANET_SPIN_RATE = 0.005
        COMET_SPIN_PER_FRAME = (0.01, 0.02, 0.0)
        COMET_LABEL_OFFSET = 0.5
        PLANET_LABEL_OFFSET = 0.5
        RING_INNER_FACTOR = 1.4
        RING_OUTER_FACTOR = 2.2
        RING_COLOR = (170, 136, 102)

    # --- Moon Display Configuration ---
    class Moons:
        """Configuration for the simplified circular moon model.

        Moons are placed on circles of a visually normalized radius around their
        parent, not at their physical distance.

        Attributes:
            MIN_DISPLAY_SIZE (float): Smallest display radius for a moon.
            VISUAL_MIN_FACTOR (float): Innermost moon orbit as a multiple of the parent radius.
            VISUAL_MAX_FACTOR (float): Outermost moon orbit as a multiple of the parent radius.
            SINGLE_MOON_FACTOR (float): Orbit radius factor when a parent has one moon, or
                                        when all of its moons share the same distance.
            SINGLE_MOON_MIN_DISTANCE (float): Floor for the single-moon orbit radius.
            CLEARANCE_MARGIN (float): An orbit closer than parent radius + this margin
                                      is pushed out.
            CLEARANCE_DISTANCE (float): Extra distance over the parent radius used when pushed out.
            SPIN_PER_FRAME (float): Radians per frame of moon spin about its local Y axis.
            ORBIT_SEGMENTS (int): Segments in the drawn moon orbit circle.
        """
        MIN_DISPLAY_SIZE = 0.05
        VISUAL_MIN_FACTOR = 1.8
        VISUAL_MAX_FACTOR = 3.5
        SINGLE_MOON_FACTOR = 2.5
        SINGLE_MOON_MIN_DISTANCE = 0.5
        CLEARANCE_MARGIN = 0.2
        CLEARANCE_DISTANCE = 0.3
        SPIN_PER_FRAME = 0.01
        ORBIT_SEGMENTS = 64

    # --- Camera Configuration ---
    class Camera:
        """Configuration for camera focus on a selected body.

        Attributes:
            FOCUS_DISTANCE_FACTOR (float): Camera distance as a multiple of the target size.
            FOCUS_MIN_SIZE (float): Target sizes below this are raised to it for the
                                    distance computation.
            FOCUS_HEIGHT_RATIO (float): Camera height offset as a fraction of the distance.
            SUN_FOCUS_DISTANCE (float): Fixed camera distance used for the Sun.
            FOLLOW_LERP (float): Fraction of the remaining distance the 2D view moves
                                 toward its target each frame.
        """
        FOCUS_DISTANCE_FACTOR = 4.0
        FOCUS_MIN_SIZE = 0.1
        FOCUS_HEIGHT_RATIO = 0.5
        SUN_FOCUS_DISTANCE = 25.0
        FOLLOW_LERP = 0.1

    # --- Visualization Configuration ---
    class Visualization:
        """Configuration for the pygame visualization.

        Attributes:
            SCREEN_WIDTH_PX (int): Width of the display window in pixels.
            SCREEN_HEIGHT_PX (int): Height of the display window in pixels.
            FPS (int): Target frames per second for rendering.
            PIXELS_PER_UNIT (float): Screen pixels per display unit at zoom 1.0.
            MIN_ZOOM (float): Lower zoom clamp.
            MAX_ZOOM (float): Upper zoom clamp.
            PLANET_ORBIT_SAMPLES (int): Evaluator samples across one period of a planet orbit.
            COMET_ORBIT_SAMPLES (int): Eccentric anomaly steps of a comet orbit ellipse.
            PICK_RADIUS_PX (int): Max click distance from a body's screen disc to select it.
            STAR_COUNT (int): Number of background stars.
            SHOW_LABELS (bool): Toggle for body name labels.
        """
        SCREEN_WIDTH_PX = 1400
        SCREEN_HEIGHT_PX = 900
        FPS = 60
        PIXELS_PER_UNIT = 1.4
        MIN_ZOOM = 0.05
        MAX_ZOOM = 400.0
        PLANET_ORBIT_SAMPLES = 100
        COMET_ORBIT_SAMPLES = 360
        PICK_RADIUS_PX = 12
        STAR_COUNT = 300
        SHOW_LABELS = True

    # --- Monitoring Configuration ---
    class Monitoring:
        """Configuration for system resource monitoring.

        Attributes:
            MEMORY_USAGE_WARN_MB (int): Memory usage threshold in Megabytes. If exceeded,
                                        a warning is logged.
            MEMORY_CHECK_INTERVAL_FRAMES (int): Frequency (in frames) at which
                                                memory usage is checked.
        """
        MEMORY_USAGE_WARN_MB = 1024
        MEMORY_CHECK_INTERVAL_FRAMES = 600

    # --- Debug Configuration ---
    class Debug:
        """Configuration for debugging features and logging verbosity.

        Attributes:
            KEPLER_SOLVER (bool): Toggle for verbose logging from Kepler's equation solver.
            CONFIG_VALIDATION (bool): If True, logs a summary of the validated catalog.
            UI_DEBUG (bool): Toggle for debugging UI elements (e.g., clicks, selection).
            LOG_POSITION_INTERVAL_FRAMES (int): Frequency (frames) for logging positions
                                                of selected bodies. 0 disables it.
            LOG_POSITION_BODY_NAMES (List[str]): Names of bodies whose positions to log.
        """
        KEPLER_SOLVER = False
        CONFIG_VALIDATION = True
        UI_DEBUG = False
        LOG_POSITION_INTERVAL_FRAMES = 0
        LOG_POSITION_BODY_NAMES = ["Earth", "1P/Halley"]

    def __init__(self):
        """Initializes the `SimulationConfig` instance and validates it.

        Raises:
            ConfigurationError: If `self.validate()` detects any issues with the
                                configuration values or the body catalog.
        """
        self.validate()

    def _validate_orbit(self, name, data):
        """Checks the orbital element fields of one catalog record."""
        required = ['semi_major_axis_au', 'eccentricity', 'inclination_deg',
                    'longitude_of_ascending_node_deg', 'argument_of_perihelion_deg',
                    'mean_anomaly_at_epoch_deg', 'period_years']
        missing = [key for key in required if key not in data]
        if missing:
            raise ConfigurationError(f"Celestial body '{name}' is missing orbital fields: {missing}")
        for key in required:
            if not math.isfinite(data[key]):
                raise ConfigurationError(f"Orbital field '{key}' of '{name}' must be finite, got {data[key]}.")

        if data['semi_major_axis_au'] <= 0:
            raise ConfigurationError(f"Semi-major axis of '{name}' must be positive.")
        eccentricity = data['eccentricity']
        if not (0.0 <= eccentricity < 1.0):
            raise ConfigurationError(f"Eccentricity of '{name}' ({eccentricity}) must be >= 0 and < 1.")
        if eccentricity >= self.SolarSystem.HIGH_ECCENTRICITY_WARNING:
            logging.warning(
                f"Eccentricity of '{name}' ({eccentricity}) is at or above "
                f"{self.SolarSystem.HIGH_ECCENTRICITY_WARNING}; "
                f"{self.SolarSystem.KEPLER_ITERATIONS} fixed Kepler iterations may not converge."
            )
        if not (0.0 <= data['inclination_deg'] <= 180.0):
            raise ConfigurationError(f"Inclination of '{name}' ({data['inclination_deg']}) must be between 0 and 180 degrees inclusive.")
        if data['period_years'] <= 0:
            raise ConfigurationError(f"Orbital period of '{name}' must be positive.")

    def validate(self):
        """Performs validation of all orrery configuration settings.

        Checks global scales, time settings, solver settings, display and
        visualization limits, and every record of the body catalog: orbital
        elements (a > 0, 0 <= e < 1, 0 <= i <= 180, period > 0), display sizes,
        RGB colors, and moon sub-records (unique names, positive distance and
        period). High eccentricities only produce a warning.

        Raises:
            ConfigurationError: If any configuration setting is found to be invalid.
        """
        # Global scale checks
        if self.World.ORBIT_SCALE <= 0:
            raise ConfigurationError("World.ORBIT_SCALE must be positive.")
        if self.World.PLANET_SCALE <= 0:
            raise ConfigurationError("World.PLANET_SCALE must be positive.")
        if self.World.SUN_SIZE <= 0:
            raise ConfigurationError("World.SUN_SIZE must be positive.")

        # Time validation
        if self.Time.DAYS_PER_YEAR <= 0 or self.Time.FRAMES_PER_SIM_DAY <= 0:
            raise ConfigurationError("Time.DAYS_PER_YEAR and Time.FRAMES_PER_SIM_DAY must be positive.")
        if not (self.Time.SPEED_SLIDER_MIN <= self.Time.SPEED_SLIDER_DEFAULT <= self.Time.SPEED_SLIDER_MAX):
            raise ConfigurationError(
                f"Time.SPEED_SLIDER_DEFAULT ({self.Time.SPEED_SLIDER_DEFAULT}) must lie between "
                f"SPEED_SLIDER_MIN ({self.Time.SPEED_SLIDER_MIN}) and SPEED_SLIDER_MAX ({self.Time.SPEED_SLIDER_MAX})."
            )
        if self.Time.SPEED_SLIDER_DIVISOR <= 0:
            raise ConfigurationError("Time.SPEED_SLIDER_DIVISOR must be positive.")

        # Solver validation
        if not isinstance(self.SolarSystem.KEPLER_ITERATIONS, int) or self.SolarSystem.KEPLER_ITERATIONS <= 0:
            raise ConfigurationError("SolarSystem.KEPLER_ITERATIONS must be a positive integer.")
        if not (0.0 < self.SolarSystem.HIGH_ECCENTRICITY_WARNING <= 1.0):
            raise ConfigurationError("SolarSystem.HIGH_ECCENTRICITY_WARNING must be in (0, 1].")

        # Display validation
        if self.Bodies.SIZE_FACTOR <= 0 or self.Bodies.PLANET_MIN_DISPLAY_SIZE <= 0:
            raise ConfigurationError("Bodies.SIZE_FACTOR and Bodies.PLANET_MIN_DISPLAY_SIZE must be positive.")
        if not (0 < self.Bodies.RING_INNER_FACTOR < self.Bodies.RING_OUTER_FACTOR):
            raise ConfigurationError("Ring factors must satisfy 0 < RING_INNER_FACTOR < RING_OUTER_FACTOR.")
        if not (0 < self.Moons.VISUAL_MIN_FACTOR < self.Moons.VISUAL_MAX_FACTOR):
            raise ConfigurationError("Moon visual band must satisfy 0 < VISUAL_MIN_FACTOR < VISUAL_MAX_FACTOR.")
        if self.Moons.ORBIT_SEGMENTS < 3:
            raise ConfigurationError("Moons.ORBIT_SEGMENTS must be at least 3.")
        if self.Camera.FOCUS_DISTANCE_FACTOR <= 0 or self.Camera.SUN_FOCUS_DISTANCE <= 0:
            raise ConfigurationError("Camera focus distances must be positive.")
        if not (0.0 < self.Camera.FOLLOW_LERP <= 1.0):
            raise ConfigurationError("Camera.FOLLOW_LERP must be in (0, 1].")

        # Visualization
        if self.Visualization.SCREEN_WIDTH_PX <= 0 or self.Visualization.SCREEN_HEIGHT_PX <= 0:
            raise ConfigurationError("Visualization screen dimensions (SCREEN_WIDTH_PX, SCREEN_HEIGHT_PX) must be positive.")
        if self.Visualization.FPS <= 0:
            raise ConfigurationError("Visualization.FPS must be positive.")
        if not (0 < self.Visualization.MIN_ZOOM < self.Visualization.MAX_ZOOM):
            raise ConfigurationError("Visualization zoom limits must satisfy 0 < MIN_ZOOM < MAX_ZOOM.")
        if self.Visualization.PLANET_ORBIT_SAMPLES < 2 or self.Visualization.COMET_ORBIT_SAMPLES < 2:
            raise ConfigurationError("Orbit sample counts must be at least 2.")

        # Solar System Data Validation
        belt = self.SolarSystem.BELT_DATA
        if not (0 < belt['inner_radius_au'] < belt['outer_radius_au']):
            raise ConfigurationError("Belt radii must satisfy 0 < inner_radius_au < outer_radius_au.")
        if belt['name'] == self.SolarSystem.SUN_DATA['name']:
            raise ConfigurationError(f"Belt name '{belt['name']}' clashes with the Sun.")
        seen_names = {self.SolarSystem.SUN_DATA['name'], belt['name']}
        catalog = list(self.SolarSystem.PLANET_DATA.items()) + list(self.SolarSystem.COMET_DATA.items())
        for name, data in catalog:
            if name in seen_names:
                raise ConfigurationError(f"Duplicate celestial body name '{name}' in catalog.")
            seen_names.add(name)

            self._validate_orbit(name, data)
            if data.get('size', -1.0) <= 0:
                raise ConfigurationError(f"Display size of '{name}' must be positive.")
            color = data.get('color')
            if not (isinstance(color, tuple) and len(color) == 3 and all(0 <= c <= 255 for c in color)):
                raise ConfigurationError(f"Color of '{name}' must be an RGB tuple, got {color}.")

            for moon in data.get('moons', []):
                moon_name = moon.get('name')
                if not moon_name or moon_name in seen_names:
                    raise ConfigurationError(f"Moon of '{name}' has a missing or duplicate name: {moon_name!r}.")
                seen_names.add(moon_name)
                if moon.get('distance_au', -1.0) <= 0:
                    raise ConfigurationError(f"Distance of moon '{moon_name}' must be positive.")
                if moon.get('period_years', -1.0) <= 0:
                    raise ConfigurationError(f"Period of moon '{moon_name}' must be positive.")
                if moon.get('size', -1.0) <= 0:
                    raise ConfigurationError(f"Display size of moon '{moon_name}' must be positive.")

        if self.Debug.CONFIG_VALIDATION:
            logging.info(
                f"Configuration validated successfully: {len(self.SolarSystem.PLANET_DATA)} planets, "
                f"{len(self.SolarSystem.COMET_DATA)} comets, {len(seen_names) - 1 - len(catalog)} moons."
            )


# --- Instantiate the configuration ---
# This makes the config object available for import and runs validation.
# e.g., from config import config
try:
    config = SimulationConfig()
except ConfigurationError as e:
    logging.error(f"FATAL CONFIGURATION ERROR: {e}", exc_info=True)
    raise
