# scene.py
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Optional, Iterator

import numpy as np

from config import config, ConfigurationError
from physics_utils import PhysicsError, to_display_frame
from simulation_clock import SimulationClock
from solarsystem import (
    CelestialBody, DisplayMetadata, MoonData, load_catalog, load_sun, load_belt,
    calculate_position, sample_orbit_path, sample_orbit_ellipse,
    moon_angle, moon_visual_distances, moon_local_offset, moon_orbit_circle,
)

@dataclass
class MoonState:
    """Per-frame render state of a moon, composed from its parent's position.

    Attributes:
        moon (MoonData): Catalog record.
        parent_name (str): Name of the planet the moon circles.
        display_size (float): Display radius.
        visual_distance (float): Radius of the drawn circular orbit around the parent.
        local_offset (np.ndarray): Offset from the parent in the display frame.
        position (np.ndarray): World position, parent position + local offset.
        spin (np.ndarray): Accumulated rotation about the local X, Y, Z axes (radians).
        orbit_path (np.ndarray): Local `(segments + 1, 3)` circle around the parent.
    """
    moon: MoonData
    parent_name: str
    display_size: float
    visual_distance: float
    local_offset: np.ndarray = field(default_factory=lambda: np.zeros(3))
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    spin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orbit_path: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))

    @property
    def name(self) -> str:
        return self.moon.name

    @property
    def display(self) -> DisplayMetadata:
        return self.moon.display

@dataclass
class BodyState:
    """Per-frame render state of the Sun, a planet or a comet.

    `body` is None for the Sun, which sits at the origin and has no orbit.
    """
    name: str
    display: DisplayMetadata
    display_size: float
    body: Optional[CelestialBody] = None
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    spin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    label_position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orbit_path: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    moons: List[MoonState] = field(default_factory=list)

    @property
    def is_sun(self) -> bool:
        return self.body is None

    @property
    def is_comet(self) -> bool:
        return self.body is not None and self.body.is_comet

    @property
    def has_rings(self) -> bool:
        return self.body is not None and self.body.has_rings


@dataclass
class BeltState:
    """The asteroid belt: a fixed annulus around the Sun in the ecliptic plane.

    Radii are in display units. The belt never moves, so `position` stays at
    the origin and is only used as the camera target.
    """
    name: str
    display: DisplayMetadata
    inner_radius: float
    outer_radius: float
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def contains(self, radius: float) -> bool:
        return self.inner_radius <= radius <= self.outer_radius


def planet_display_size(size: float) -> float:
    return max(config.Bodies.PLANET_MIN_DISPLAY_SIZE, size * config.Bodies.SIZE_FACTOR * config.World.PLANET_SCALE)

def moon_display_size(size: float) -> float:
    return max(config.Moons.MIN_DISPLAY_SIZE, size * config.Bodies.SIZE_FACTOR * config.World.PLANET_SCALE)


class SolarSystemScene:
    """Drives the animated Solar System from the orbital evaluator.

    The scene owns the current `SimulationClock`. Each frame it evaluates every
    planet and comet at the clock's date, maps the ecliptic result into the
    display frame, composes moon positions as parent position + local circular
    offset, and accumulates body spin. Nothing here is rendered; `Visualization`
    draws whatever state the scene holds.

    Attributes:
        clock (SimulationClock): Current simulated time.
        sun (BodyState): State of the Sun, fixed at the origin.
        bodies (List[BodyState]): Planets then comets, in catalog order.
        belt (BeltState): The static asteroid belt.
        frame_count (int): Frames advanced since construction.

    Raises:
        ConfigurationError: If the catalog is empty or has duplicate names.
        PhysicsError: If a catalog record violates the evaluator preconditions.
    """
    def __init__(self, clock: Optional[SimulationClock] = None, catalog: Optional[List[CelestialBody]] = None):
        try:
            self.clock = clock if clock is not None else SimulationClock.now()
            catalog = catalog if catalog is not None else load_catalog()
            if not catalog:
                raise ConfigurationError("Scene needs at least one celestial body.")

            self.frame_count = 0
            self.orbit_scale = config.World.ORBIT_SCALE
            self.sun = BodyState(name=config.SolarSystem.SUN_DATA['name'], display=load_sun(),
                                 display_size=config.World.SUN_SIZE)
            belt_display, belt_inner, belt_outer = load_belt()
            self.belt = BeltState(name=config.SolarSystem.BELT_DATA['name'], display=belt_display,
                                  inner_radius=belt_inner * self.orbit_scale,
                                  outer_radius=belt_outer * self.orbit_scale)
            self.bodies: List[BodyState] = [self._create_body_state(body) for body in catalog]
            self._references: Dict[str, object] = {}
            for state in self.iter_states():
                if state.name in self._references:
                    raise ConfigurationError(f"Duplicate body name '{state.name}' in scene.")
                self._references[state.name] = state

            self.update(self.clock)
            logging.info(f"SolarSystemScene initialized with {len(self.bodies)} bodies and "
                         f"{sum(len(b.moons) for b in self.bodies)} moons at {self.clock.describe()}.")
        except (ConfigurationError, PhysicsError) as e_init:
            logging.critical(f"SolarSystemScene initialization failed: {e_init}", exc_info=True)
            raise

    def _create_body_state(self, body: CelestialBody) -> BodyState:
        """Builds render state for one catalog body, including its orbit line and moons."""
        if body.is_comet:
            # Comet nuclei share one small size; the orbit is a geometric ellipse.
            display_size = config.Bodies.COMET_DISPLAY_SIZE
            orbit_ecliptic = sample_orbit_ellipse(body.elements, config.Visualization.COMET_ORBIT_SAMPLES)
        else:
            display_size = planet_display_size(body.display.size)
            orbit_ecliptic = sample_orbit_path(body.elements, self.clock.date, config.Visualization.PLANET_ORBIT_SAMPLES)

        state = BodyState(
            name=body.name,
            display=body.display,
            display_size=display_size,
            body=body,
            orbit_path=to_display_frame(orbit_ecliptic, self.orbit_scale),
        )

        visual_distances = moon_visual_distances(display_size, [m.distance_au for m in body.moons])
        for moon, visual_distance in zip(body.moons, visual_distances):
            state.moons.append(MoonState(
                moon=moon,
                parent_name=body.name,
                display_size=moon_display_size(moon.display.size),
                visual_distance=visual_distance,
                orbit_path=moon_orbit_circle(visual_distance),
            ))
        return state

    def iter_states(self) -> Iterator[object]:
        """Yields the Sun, then each body followed by its moons, then the belt."""
        yield self.sun
        for state in self.bodies:
            yield state
            yield from state.moons
        yield self.belt

    def selectable_states(self) -> List[object]:
        return list(self.iter_states())

    def navigation_states(self) -> List[object]:
        """Navigation list entries: planets, then the belt, then comets."""
        planets = [state for state in self.bodies if not state.is_comet]
        comets = [state for state in self.bodies if state.is_comet]
        return planets + [self.belt] + comets

    def find(self, name: str):
        """Returns the `BodyState`, `MoonState` or `BeltState` called `name`, or None."""
        return self._references.get(name)

    def update(self, clock: SimulationClock, spin: bool = True):
        """
        Places every body at `clock.date` and spins it by one frame's worth.

        Planet and comet positions come from the Kepler evaluator; moon positions
        are the parent position plus the circular-orbit offset.
        """
        self.clock = clock
        days = clock.days_since_j2000
        bodies_cfg = config.Bodies

        for state in self.bodies:
            elements = state.body.elements
            state.position = to_display_frame(calculate_position(elements, clock.date), self.orbit_scale)

            if state.is_comet:
                if spin:
                    state.spin = state.spin + np.array(bodies_cfg.COMET_SPIN_PER_FRAME)
                state.label_position = state.position + np.array([0.0, bodies_cfg.COMET_LABEL_OFFSET, 0.0])
            else:
                if spin:
                    state.spin = state.spin + np.array([0.0, bodies_cfg.PLANET_SPIN_RATE / elements.period, 0.0])
                state.label_position = state.position + np.array(
                    [0.0, state.display_size + bodies_cfg.PLANET_LABEL_OFFSET, 0.0])

            for moon_state in state.moons:
                angle = moon_angle(days, moon_state.moon.period_years)
                moon_state.local_offset = moon_local_offset(angle, moon_state.visual_distance)
                moon_state.position = state.position + moon_state.local_offset
                if spin:
                    moon_state.spin = moon_state.spin + np.array([0.0, config.Moons.SPIN_PER_FRAME, 0.0])

        if config.Debug.LOG_POSITION_INTERVAL_FRAMES and self.frame_count % config.Debug.LOG_POSITION_INTERVAL_FRAMES == 0:
            for name in config.Debug.LOG_POSITION_BODY_NAMES:
                state = self.find(name)
                if state is not None:
                    logging.info(f"{clock.date:%Y-%m-%d %H:%M} {name}: display position {np.round(state.position, 3)}")

    def advance(self, frames: int = 1) -> SimulationClock:
        """Advances the clock by `frames` and updates all bodies. Returns the new clock."""
        self.frame_count += frames
        self.update(self.clock.advance(frames))
        return self.clock

    def set_clock(self, clock: SimulationClock):
        """Replaces the clock (e.g. after a UI time control) without spinning bodies."""
        self.update(clock, spin=False)

    def camera_focus(self, name: str) -> Tuple[np.ndarray, np.ndarray]:
        """
        Camera target and position for viewing the body called `name`.

        The camera sits at target + (d, d * FOCUS_HEIGHT_RATIO, d), where
        d = max(size, FOCUS_MIN_SIZE) * FOCUS_DISTANCE_FACTOR using the catalog
        size, or SUN_FOCUS_DISTANCE for the Sun.

        Raises:
            KeyError: If no body or moon has that name.
        """
        state = self.find(name)
        if state is None:
            raise KeyError(f"Unknown body '{name}'.")
        camera_cfg = config.Camera

        if isinstance(state, BodyState) and state.is_sun:
            distance = camera_cfg.SUN_FOCUS_DISTANCE
        else:
            size = state.display.size or 1.0
            distance = max(size, camera_cfg.FOCUS_MIN_SIZE) * camera_cfg.FOCUS_DISTANCE_FACTOR

        target = np.array(state.position, dtype=np.float64)
        offset = np.array([distance, distance * camera_cfg.FOCUS_HEIGHT_RATIO, distance])
        return target, target + offset
