import pygame
import numpy as np
import math
import random
from config import config

class VisualEffects:
    def __init__(self):
        self.glow_cache = {}  # (radius, color) -> glow surface

    def _glow_surface(self, radius, color):
        key = (int(radius), tuple(color))
        cached = self.glow_cache.get(key)
        if cached is not None:
            return cached

        size = int(radius * 2)
        glow_surf = pygame.Surface((size, size), pygame.SRCALPHA)
        for i in range(4): # Glow layers, outermost first
            layer_radius = radius * (1.0 - i * 0.2)
            layer_alpha = int(40 + 35 * i)
            if layer_radius > 1:
                pygame.draw.circle(glow_surf, (*color, min(255, layer_alpha)),
                                   (int(radius), int(radius)), int(layer_radius))
        if len(self.glow_cache) > 64:
            self.glow_cache.clear()
        self.glow_cache[key] = glow_surf
        return glow_surf

    def draw_sun_glow(self, surface, pos, radius, color=None, pulse_phase=0):
        """Draw the Sun's corona as stacked additive circles with a slow pulse."""
        if radius <= 1:
            return
        if color is None:
            color = config.SolarSystem.SUN_DATA['color']

        pulse = (math.sin(pulse_phase * 0.02) + 1) / 2
        glow_radius = radius * (2.2 + 0.2 * pulse)
        glow_surf = self._glow_surface(glow_radius, color)
        surface.blit(glow_surf,
                     (int(pos[0] - glow_radius), int(pos[1] - glow_radius)),
                     special_flags=pygame.BLEND_RGBA_ADD)

    def draw_planet_rings(self, surface, pos, planet_radius_px):
        """Draw a ring band around a planet seen from above."""
        bodies_cfg = config.Bodies
        outer = int(planet_radius_px * bodies_cfg.RING_OUTER_FACTOR)
        inner = int(planet_radius_px * bodies_cfg.RING_INNER_FACTOR)
        if outer <= inner or outer < 2:
            return

        ring_surf = pygame.Surface((outer * 2, outer * 2), pygame.SRCALPHA)
        pygame.draw.circle(ring_surf, (*bodies_cfg.RING_COLOR, 150), (outer, outer), outer, max(1, outer - inner))
        surface.blit(ring_surf, (int(pos[0] - outer), int(pos[1] - outer)))

    def draw_selection_marker(self, surface, pos, radius, color=(50, 180, 255)):
        """Rotating bracket arcs around the selected body."""
        time_ms = pygame.time.get_ticks()
        marker_radius = max(8, int(radius) + 6)
        rect = pygame.Rect(0, 0, marker_radius * 2, marker_radius * 2)
        rect.center = (int(pos[0]), int(pos[1]))
        start = time_ms * 0.002
        for quarter in range(4):
            arc_start = start + quarter * math.pi / 2
            pygame.draw.arc(surface, color, rect, arc_start, arc_start + math.pi / 4, 2)


class StarField:
    def __init__(self, width, height, star_count=200):
        self.width = width
        self.height = height

        self.star_layers = [
            {'stars': [], 'speed_factor': 0.02, 'base_brightness': 0.4, 'size': 1, 'count': int(star_count * 0.5)},  # Farthest
            {'stars': [], 'speed_factor': 0.06, 'base_brightness': 0.7, 'size': 1, 'count': int(star_count * 0.3)}, # Mid
            {'stars': [], 'speed_factor': 0.12, 'base_brightness': 1.0, 'size': 2, 'count': int(star_count * 0.2)},  # Near
        ]

        for layer in self.star_layers:
            for _ in range(layer['count']):
                star = {
                    'pos': np.array([random.uniform(0, width), random.uniform(0, height)]),
                    'brightness_mod': random.uniform(0.5, 1.0),
                    'twinkle_phase': random.uniform(0, 2 * math.pi),
                    'twinkle_speed': random.uniform(0.002, 0.008),
                    'blue_tint': random.uniform(0.8, 1.0) if random.random() < 0.1 else 1.0,
                }
                layer['stars'].append(star)

    def draw(self, surface, camera_offset_px=np.array([0.0, 0.0])):
        """Draws all layers; nearer layers shift more with the camera for parallax."""
        time_ms = pygame.time.get_ticks()

        for layer in self.star_layers:
            parallax_shift = camera_offset_px * layer['speed_factor']

            for star in layer['stars']:
                screen_pos_x = (star['pos'][0] - parallax_shift[0]) % self.width
                screen_pos_y = (star['pos'][1] - parallax_shift[1]) % self.height
                screen_pos_int = (int(screen_pos_x), int(screen_pos_y))

                twinkle_val = (math.sin(time_ms * star['twinkle_speed'] + star['twinkle_phase']) + 1) / 2
                current_brightness = layer['base_brightness'] * star['brightness_mod'] * (0.6 + 0.4 * twinkle_val)

                star_rgb_val = int(255 * current_brightness)
                if star_rgb_val < 20: continue # Skip very dim stars
                star_color = (
                    min(255, star_rgb_val),
                    min(255, star_rgb_val),
                    min(255, int(star_rgb_val * star['blue_tint'] * 1.05))
                )

                if layer['size'] <= 1:
                    surface.set_at(screen_pos_int, star_color)
                else:
                    pygame.draw.circle(surface, star_color, screen_pos_int, layer['size'] // 2 + 1)
