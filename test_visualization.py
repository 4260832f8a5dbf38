import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import unittest
from unittest import mock
from datetime import datetime, timezone

import pygame

from config import config
from simulation_clock import SimulationClock
from scene import SolarSystemScene
from visualization import Visualization
from advanced_ui import format_distance, format_radius, compare_circle_diameter, compare_label

START = datetime(2024, 3, 20, tzinfo=timezone.utc)

class TestDetailFormatting(unittest.TestCase):

    def setUp(self):
        self.scene = SolarSystemScene(SimulationClock(START))

    def test_distance_text(self):
        self.assertEqual(format_distance(self.scene.find("Sun")), "0 AU")
        self.assertEqual(format_distance(self.scene.find("Jupiter")), "5.204 AU")
        self.assertEqual(format_distance(self.scene.find("Moon")), "N/A")
        self.assertEqual(format_distance(self.scene.find("Asteroid Belt")), "2.2 - 3.2 AU")

    def test_radius(self):
        self.assertEqual(format_radius(1.0), "6371 km")
        self.assertEqual(format_radius(0.27), "1720 km")
        self.assertEqual(format_radius(None), "N/A")

    def test_compare_circle(self):
        self.assertEqual(compare_circle_diameter(1.0), 100)
        self.assertEqual(compare_circle_diameter(0.05), 10)
        self.assertEqual(compare_circle_diameter(11.2), 200)
        self.assertEqual(compare_label("Mars", 0.532), "MARS (0.53x Earth)")

class TestVisualizationControls(unittest.TestCase):

    def setUp(self):
        self.scene = SolarSystemScene(SimulationClock(START))
        self.vis = Visualization()

    def tearDown(self):
        self.vis.close()

    def test_time_keys(self):
        self.vis.apply_key(self.scene, pygame.K_SPACE)
        self.assertTrue(self.scene.clock.paused)
        self.vis.apply_key(self.scene, pygame.K_LEFT)
        self.assertFalse(self.scene.clock.paused)
        self.assertLess(self.scene.clock.time_scale, 0)
        self.vis.apply_key(self.scene, pygame.K_RIGHT)
        self.assertGreater(self.scene.clock.time_scale, 0)

    def test_speed_slider_keys(self):
        self.vis.apply_key(self.scene, pygame.K_RIGHTBRACKET)
        self.assertEqual(self.vis.speed_setting, config.Time.SPEED_SLIDER_DEFAULT + 1)
        self.assertAlmostEqual(self.scene.clock.time_scale, 2 ** (1 / config.Time.SPEED_SLIDER_DIVISOR))
        self.vis.apply_key(self.scene, pygame.K_l)
        self.assertEqual(self.vis.speed_setting, config.Time.SPEED_SLIDER_DEFAULT)
        self.assertEqual(self.scene.clock.time_scale, 1.0)

    def test_zoom_is_clamped(self):
        for _ in range(200):
            self.vis.apply_key(self.scene, pygame.K_MINUS)
        self.assertAlmostEqual(self.vis.zoom_level, config.Visualization.MIN_ZOOM)

    def test_focus_centres_camera(self):
        self.vis.selected_name = "Jupiter"
        self.vis.apply_key(self.scene, pygame.K_f)
        jupiter = self.scene.find("Jupiter")
        self.assertEqual(self.vis.focused_name, "Jupiter")
        self.assertEqual(self.vis.world_to_screen(jupiter.position),
                         (config.Visualization.SCREEN_WIDTH_PX // 2, config.Visualization.SCREEN_HEIGHT_PX // 2))

    def test_pick(self):
        centre = (config.Visualization.SCREEN_WIDTH_PX // 2, config.Visualization.SCREEN_HEIGHT_PX // 2)
        self.assertEqual(self.vis.pick(self.scene, centre), "Sun")
        self.assertIsNone(self.vis.pick(self.scene, (1, 1)))

    def _click(self, pos):
        pygame.event.clear()
        pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos))
        self.assertTrue(self.vis.handle_events(self.scene))

    def test_click_selects_and_focuses(self):
        self._click((config.Visualization.SCREEN_WIDTH_PX // 2, config.Visualization.SCREEN_HEIGHT_PX // 2))
        self.assertEqual(self.vis.selected_name, "Sun")
        self.assertEqual(self.vis.focused_name, self.vis.selected_name)

    def test_navigation_entry_selects_and_focuses(self):
        self.vis.render(self.scene)
        entry = self.vis.modern_ui.clickable_elements["nav_item_Earth"]
        self._click(entry['rect'].center)
        self.assertEqual(self.vis.selected_name, "Earth")
        self.assertEqual(self.vis.focused_name, "Earth")
        earth = self.scene.find("Earth")
        self.assertEqual(self.vis.world_to_screen(earth.position),
                         (config.Visualization.SCREEN_WIDTH_PX // 2, config.Visualization.SCREEN_HEIGHT_PX // 2))

    def test_satellite_entry_selects_and_focuses(self):
        self.vis.select(self.scene, "Jupiter")
        self.vis.render(self.scene)
        entry = self.vis.modern_ui.clickable_elements["satellite_Io"]
        self._click(entry['rect'].center)
        self.assertEqual(self.vis.selected_name, "Io")
        self.assertEqual(self.vis.focused_name, "Io")

    def test_belt_in_navigation(self):
        self.vis.render(self.scene)
        self.assertIn("nav_item_Asteroid Belt", self.vis.modern_ui.clickable_elements)

    def test_pick_belt(self):
        centre_x = config.Visualization.SCREEN_WIDTH_PX // 2
        centre_y = config.Visualization.SCREEN_HEIGHT_PX // 2
        inside = int(2.7 * config.World.ORBIT_SCALE * config.Visualization.PIXELS_PER_UNIT)
        with mock.patch.object(self.scene, 'bodies', []):
            self.assertEqual(self.vis.pick(self.scene, (centre_x + inside, centre_y)), "Asteroid Belt")
            self.assertIsNone(self.vis.pick(self.scene, (centre_x + 2 * inside, centre_y)))

    def test_panel_registers_only_visible_entries(self):
        ui = self.vis.modern_ui
        ui.clickable_elements.clear()
        lines = [{'text': f"Body {k}", 'id': f"b{k}", 'font': 'small'} for k in range(10)]
        panel = pygame.Rect(20, 20, 200, 60)
        height = ui.draw_panel(pygame.Surface((300, 120)), panel, "List", lines,
                               scroll_offset_y=30, clickable_prefix='row')
        self.assertEqual(height, 10 + ui.title_line_height + 10 * ui.small_line_height + 5)
        self.assertIn("row_b1", ui.clickable_elements)
        self.assertNotIn("row_b6", ui.clickable_elements)
        content = pygame.Rect(panel.left + 5, panel.top + 5, panel.width - 10, panel.height - 10)
        for entry in ui.clickable_elements.values():
            self.assertTrue(content.contains(entry['rect']))

    def test_render_smoke(self):
        self.vis.selected_name = "Saturn"
        self.vis.render(self.scene, fps=60.0)
        self.scene.advance()
        self.vis.render(self.scene, fps=60.0)

if __name__ == '__main__':
    unittest.main()
