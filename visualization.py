# visualization.py
import pygame
import numpy as np
from typing import Dict, List, Optional, Tuple
import math
import logging
from config import config, ConfigurationError
from scene import SolarSystemScene, BodyState, MoonState, BeltState
from visual_effects import VisualEffects, StarField
from advanced_ui import ModernUI

class Visualization:
    """Renders a `SolarSystemScene` from above using Pygame.

    The view is a top-down projection of the display frame: display X runs to the
    right and display Z runs down the screen, so the ecliptic +Y axis points up.
    The class also owns the interactive controls:

    - Time: SPACE pauses, RIGHT plays forward, LEFT plays in reverse, L jumps
      to the live wall-clock time, `[` and `]` move the speed slider.
    - Camera: `+`/`-` and the mouse wheel zoom, F re-focuses the selected body,
      and the camera follows the focused body with linear interpolation.
    - Selection: left click picks the nearest body within `PICK_RADIUS_PX`
      (or the asteroid belt annulus), or an entry in the navigation or
      satellites lists. Selecting always focuses the camera too.

    If the display cannot be created, `visualization_enabled` is set to `False`
    and rendering calls are skipped, so a headless run can continue.

    Attributes:
        screen (pygame.Surface | None): Main display surface.
        visualization_enabled (bool): `False` after a critical display failure.
        clock (pygame.time.Clock | None): Frame limiter.
        camera_offset (np.ndarray): Display-frame `[x, z]` at the screen centre.
        camera_target (np.ndarray): Point the camera is easing towards.
        zoom_level (float): Multiplier on `PIXELS_PER_UNIT`.
        selected_name (str | None): Body shown in the detail panel.
        focused_name (str | None): Body the camera follows.
        speed_setting (int): Current speed slider value.

    Raises:
        ConfigurationError: If screen dimensions are missing or invalid.
    """
    def __init__(self):
        try:
            pygame.init()
            self.visualization_enabled = True

            try:
                screen_w = config.Visualization.SCREEN_WIDTH_PX
                screen_h = config.Visualization.SCREEN_HEIGHT_PX
                if not (isinstance(screen_w, int) and screen_w > 0 and
                        isinstance(screen_h, int) and screen_h > 0):
                    raise ConfigurationError("SCREEN_WIDTH_PX and SCREEN_HEIGHT_PX must be positive integers.")
                self.screen = pygame.display.set_mode((screen_w, screen_h))
            except AttributeError as e_attr:
                logging.critical(f"Configuration error for screen dimensions (missing attribute): {e_attr}. Visualization disabled.", exc_info=True)
                self.screen = None
                self.visualization_enabled = False
                raise ConfigurationError(f"Missing screen dimension config: {e_attr}")
            except (pygame.error, ConfigurationError) as e_disp:
                logging.critical(f"Error setting display mode: {e_disp}. Visualization disabled.", exc_info=True)
                self.screen = None
                self.visualization_enabled = False
                if isinstance(e_disp, ConfigurationError): raise

            self.camera_offset = np.zeros(2, dtype=np.float64)
            self.camera_target = np.zeros(2, dtype=np.float64)
            self.zoom_level: float = 1.0
            self.selected_name: Optional[str] = None
            self.focused_name: Optional[str] = None
            self.speed_setting: int = config.Time.SPEED_SLIDER_DEFAULT
            self.pixels_per_unit: float = config.Visualization.PIXELS_PER_UNIT
            self.colors: Dict[str, Tuple[int, int, int]] = {
                'background': (0, 0, 8),
                'orbit': (70, 70, 90),
                'comet_orbit': (60, 90, 110),
                'moon_orbit': (60, 60, 70),
                'ui_text': (220, 220, 220),
            }

            if self.screen and self.visualization_enabled:
                pygame.display.set_caption("Solar System Orrery")
                self.clock = pygame.time.Clock()

                try:
                    self.small_font = pygame.font.Font(None, 16)
                except pygame.error as e_font:
                    logging.error(f"Pygame error initializing fonts: {e_font}. Labels disabled.", exc_info=True)
                    self.small_font = None

                self.visual_effects = VisualEffects()
                self.starfield = StarField(screen_w, screen_h, config.Visualization.STAR_COUNT)
                self.modern_ui = ModernUI(screen_w, screen_h)
            else:
                self.visualization_enabled = False
                self.clock = self.small_font = None
                self.visual_effects = self.starfield = self.modern_ui = None

        except ConfigurationError as e_config_outer:
            logging.critical(f"Visualization initialization failed due to ConfigurationError: {e_config_outer}", exc_info=True)
            self.visualization_enabled = False
            raise
        except pygame.error as e_pygame_outer:
            logging.critical(f"A general Pygame error occurred during Visualization init: {e_pygame_outer}", exc_info=True)
            self.visualization_enabled = False

    def world_to_screen(self, display_pos: np.ndarray) -> Tuple[int, int]:
        """Projects a display-frame `[x, y, z]` point onto the screen, dropping the height."""
        scale = self.pixels_per_unit * self.zoom_level
        screen_x = config.Visualization.SCREEN_WIDTH_PX / 2 + (display_pos[0] - self.camera_offset[0]) * scale
        screen_y = config.Visualization.SCREEN_HEIGHT_PX / 2 + (display_pos[2] - self.camera_offset[1]) * scale
        return (int(screen_x), int(screen_y))

    def screen_to_world(self, screen_pos: Tuple[int, int]) -> np.ndarray:
        """Display-frame `[x, z]` under a screen pixel."""
        scale = self.pixels_per_unit * self.zoom_level
        return np.array([
            (screen_pos[0] - config.Visualization.SCREEN_WIDTH_PX / 2) / scale + self.camera_offset[0],
            (screen_pos[1] - config.Visualization.SCREEN_HEIGHT_PX / 2) / scale + self.camera_offset[1],
        ])

    def path_to_screen(self, display_points: np.ndarray) -> List[Tuple[int, int]]:
        """Vectorised `world_to_screen` for an `(N, 3)` array of points."""
        scale = self.pixels_per_unit * self.zoom_level
        xs = config.Visualization.SCREEN_WIDTH_PX / 2 + (display_points[:, 0] - self.camera_offset[0]) * scale
        ys = config.Visualization.SCREEN_HEIGHT_PX / 2 + (display_points[:, 2] - self.camera_offset[1]) * scale
        return list(zip(xs.astype(int).tolist(), ys.astype(int).tolist()))

    def screen_radius(self, display_size: float) -> int:
        return max(1, int(display_size * self.pixels_per_unit * self.zoom_level))

    def pick(self, scene: SolarSystemScene, screen_pos: Tuple[int, int]) -> Optional[str]:
        """
        Name of the body drawn nearest to `screen_pos`, or None if nothing lies
        within `PICK_RADIUS_PX` of the body's drawn edge. A click that misses
        every body but lands inside the asteroid belt annulus picks the belt.
        """
        best_name, best_distance = None, float('inf')
        for state in scene.selectable_states():
            if isinstance(state, BeltState):
                continue
            sx, sy = self.world_to_screen(state.position)
            distance = math.hypot(sx - screen_pos[0], sy - screen_pos[1]) - self.screen_radius(state.display_size)
            if distance < best_distance:
                best_name, best_distance = state.name, distance
        if best_distance <= config.Visualization.PICK_RADIUS_PX:
            return best_name
        if scene.belt.contains(np.linalg.norm(self.screen_to_world(screen_pos))):
            return scene.belt.name
        return None

    def focus_on(self, scene: SolarSystemScene, name: str):
        """Centres the camera on `name` and zooms so the focus distance fills the view."""
        target, camera_position = scene.camera_focus(name)
        distance = np.linalg.norm((camera_position - target)[[0, 2]])
        self.focused_name = name
        self.camera_target = target[[0, 2]].copy()
        self.camera_offset = self.camera_target.copy()
        if distance > 0:
            view_height = config.Visualization.SCREEN_HEIGHT_PX
            self.zoom_level = float(np.clip(view_height / (3.0 * distance * self.pixels_per_unit),
                                            config.Visualization.MIN_ZOOM, config.Visualization.MAX_ZOOM))
        logging.info(f"Camera focused on {name} (distance {distance:.2f}).")

    def select(self, scene: SolarSystemScene, name: str):
        """Shows `name` in the detail panel and moves the camera onto it."""
        self.selected_name = name
        logging.info(f"Selected {name}")
        self.focus_on(scene, name)

    def _follow_focus(self, scene: SolarSystemScene):
        if self.focused_name is None:
            return
        state = scene.find(self.focused_name)
        if state is None:
            self.focused_name = None
            return
        self.camera_target = np.array([state.position[0], state.position[2]])
        self.camera_offset += (self.camera_target - self.camera_offset) * config.Camera.FOLLOW_LERP

    def render(self, scene: SolarSystemScene, fps: float = 0.0):
        """Draws one frame: stars, orbits, bodies, labels and the UI panels."""
        if not self.visualization_enabled or self.screen is None:
            return

        try:
            self.screen.fill(self.colors['background'])
            self._follow_focus(scene)

            if self.starfield:
                self.starfield.draw(self.screen, self.camera_offset * self.pixels_per_unit * self.zoom_level)

            self._draw_belt(scene.belt)
            self._draw_orbits(scene)
            self._draw_sun(scene.sun)
            for state in scene.bodies:
                self._draw_body(state)

            if self.modern_ui:
                self.modern_ui.update_data(scene=scene, clock=scene.clock, selected_name=self.selected_name,
                                           speed_setting=self.speed_setting, fps=fps)
                self.modern_ui.draw_ui(self.screen)

            pygame.display.flip()
            if self.clock:
                self.clock.tick(config.Visualization.FPS if config.Visualization.FPS > 0 else 60)

        except pygame.error as e_pygame_render:
            logging.error(f"Pygame error during main render loop: {e_pygame_render}. Attempting to continue.", exc_info=True)

    def _draw_orbits(self, scene: SolarSystemScene):
        try:
            for state in scene.bodies:
                if len(state.orbit_path) > 1:
                    color = self.colors['comet_orbit'] if state.is_comet else self.colors['orbit']
                    pygame.draw.lines(self.screen, color, False, self.path_to_screen(state.orbit_path), 1)
                for moon_state in state.moons:
                    if self.screen_radius(moon_state.visual_distance) > 4:
                        points = self.path_to_screen(moon_state.orbit_path + state.position)
                        pygame.draw.lines(self.screen, self.colors['moon_orbit'], False, points, 1)
        except pygame.error as e_orbit_draw:
            logging.error(f"Error drawing orbit paths: {e_orbit_draw}", exc_info=True)

    def _draw_belt(self, belt: BeltState):
        centre = self.world_to_screen(belt.position)
        inner = self.screen_radius(belt.inner_radius)
        outer = self.screen_radius(belt.outer_radius)
        selected = belt.name == self.selected_name
        color = belt.display.color if selected else tuple(c // 4 for c in belt.display.color)
        pygame.draw.circle(self.screen, color, centre, outer, max(1, outer - inner))

    def _draw_sun(self, sun: BodyState):
        screen_pos = self.world_to_screen(sun.position)
        radius = self.screen_radius(sun.display_size)
        if self.visual_effects:
            self.visual_effects.draw_sun_glow(self.screen, screen_pos, radius, sun.display.color,
                                              pulse_phase=pygame.time.get_ticks() // 16)
        pygame.draw.circle(self.screen, sun.display.color, screen_pos, radius)
        self._draw_label(sun.name, screen_pos, radius, sun.name == self.selected_name)

    def _draw_body(self, state: BodyState):
        """Draws a planet or comet, its rings, its spin marker and its moons."""
        screen_pos = self.world_to_screen(state.position)
        radius = self.screen_radius(state.display_size)

        if state.has_rings and self.visual_effects:
            self.visual_effects.draw_planet_rings(self.screen, screen_pos, radius)
        pygame.draw.circle(self.screen, state.display.color, screen_pos, radius)

        # Spin marker: a meridian line rotated by the accumulated Y spin.
        if radius >= 4:
            angle = state.spin[1]
            end = (int(screen_pos[0] + math.cos(angle) * radius), int(screen_pos[1] - math.sin(angle) * radius))
            pygame.draw.line(self.screen, (0, 0, 0), screen_pos, end, 1)

        if state.is_comet:
            self._draw_comet_tail(state, screen_pos, radius)

        for moon_state in state.moons:
            self._draw_moon(moon_state)

        selected = state.name == self.selected_name
        if selected and self.visual_effects:
            self.visual_effects.draw_selection_marker(self.screen, screen_pos, radius)
        self._draw_label(state.name, screen_pos, radius, selected)

    def _draw_comet_tail(self, state: BodyState, screen_pos, radius):
        direction = np.array([state.position[0], state.position[2]])
        norm = np.linalg.norm(direction)
        if norm < 1e-9:
            return
        tail = direction / norm * (radius * 6 + 8)
        end = (int(screen_pos[0] + tail[0]), int(screen_pos[1] + tail[1]))
        pygame.draw.line(self.screen, (150, 200, 255), screen_pos, end, 1)

    def _draw_moon(self, moon_state: MoonState):
        screen_pos = self.world_to_screen(moon_state.position)
        radius = self.screen_radius(moon_state.display_size)
        pygame.draw.circle(self.screen, moon_state.display.color, screen_pos, radius)
        if moon_state.name == self.selected_name:
            if self.visual_effects:
                self.visual_effects.draw_selection_marker(self.screen, screen_pos, radius)
            self._draw_label(moon_state.name, screen_pos, radius, True)

    def _draw_label(self, name: str, screen_pos, radius: int, selected: bool):
        if not (config.Visualization.SHOW_LABELS and self.small_font):
            return
        try:
            color = (255, 255, 255) if selected else self.colors['ui_text']
            text_surface = self.small_font.render(name, True, color)
            text_rect = text_surface.get_rect(center=(screen_pos[0], screen_pos[1] - radius - 10))
            self.screen.blit(text_surface, text_rect)
        except pygame.error as e_font_render:
            logging.error(f"Pygame font error rendering label for {name}: {e_font_render}", exc_info=True)

    def apply_key(self, scene: SolarSystemScene, key: int):
        """Applies a time or camera control key to the scene and camera."""
        time_cfg = config.Time
        clock = scene.clock
        if key == pygame.K_SPACE:
            if not clock.paused:
                clock = clock.pause()
            else:
                clock = clock.reverse() if clock.time_scale < 0 else clock.play()
        elif key == pygame.K_RIGHT:
            clock = clock.play()
        elif key == pygame.K_LEFT:
            clock = clock.reverse()
        elif key == pygame.K_l:
            clock = clock.live()
            self.speed_setting = time_cfg.SPEED_SLIDER_DEFAULT
        elif key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET):
            step = 1 if key == pygame.K_RIGHTBRACKET else -1
            self.speed_setting = int(np.clip(self.speed_setting + step, time_cfg.SPEED_SLIDER_MIN, time_cfg.SPEED_SLIDER_MAX))
            clock = clock.with_speed_setting(self.speed_setting)
        elif key == pygame.K_f:
            if self.selected_name:
                self.focus_on(scene, self.selected_name)
            return
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.zoom_by(1.2)
            return
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.zoom_by(1 / 1.2)
            return
        else:
            return

        if clock is not scene.clock:
            scene.set_clock(clock)
            logging.info(f"Time control: {clock.describe()}")

    def zoom_by(self, factor: float):
        min_zoom = getattr(config.Visualization, 'MIN_ZOOM', 0.05)
        max_zoom = getattr(config.Visualization, 'MAX_ZOOM', 400.0)
        self.zoom_level = float(np.clip(self.zoom_level * factor, min_zoom, max_zoom))

    def handle_events(self, scene: SolarSystemScene) -> bool:
        """Processes the Pygame event queue.

        Returns:
            bool: `False` when the window was closed or ESC pressed, `True` otherwise.
        """
        if not self.visualization_enabled:
            try:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        logging.info("QUIT event received (visualization was disabled). Signaling shutdown.")
                        return False
            except pygame.error:
                pass # No display; nothing to poll
            return True

        try:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logging.info("QUIT event received via Pygame window. Signaling shutdown.")
                    return False

                if self.modern_ui:
                    ui_event_response = self.modern_ui.handle_event(event)
                    if 'selected_name' in ui_event_response:
                        self.select(scene, ui_event_response['selected_name'])
                    if ui_event_response.get('event_consumed', False):
                        continue

                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return False
                    self.apply_key(scene, event.key)

                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1:
                        picked = self.pick(scene, event.pos)
                        if picked is not None:
                            self.select(scene, picked)
                    elif event.button == 4:
                        self.zoom_by(1.1)
                    elif event.button == 5:
                        self.zoom_by(1 / 1.1)

            return True

        except pygame.error as e_pygame_event:
            logging.error(f"Pygame error during event handling: {e_pygame_event}. Attempting to continue.", exc_info=True)
            return True

    def close(self):
        if pygame.get_init():
            pygame.quit()
