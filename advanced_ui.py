import pygame
import numpy as np
import logging
from config import config, EARTH_RADIUS_KM

def format_distance(state):
    """Fixed distance text if the catalog has one, else the semi-major axis in AU, else 'N/A'."""
    if state.display.distance_text:
        return state.display.distance_text
    body = getattr(state, 'body', None)
    if body is not None:
        return f"{body.elements.a} AU"
    return "N/A"

def format_radius(size):
    if size is None:
        return "N/A"
    return f"{round(size * EARTH_RADIUS_KM)} km"

def compare_circle_diameter(size):
    """Size-comparison circle diameter in pixels, 100 px per Earth radius clamped to [10, 200]."""
    if size is None:
        return 200
    return int(np.clip(100 * size, 10, 200))

def compare_label(name, size):
    if size is None:
        return name.upper()
    return f"{name.upper()} ({size:.2f}x Earth)"


class ModernUI:
    def __init__(self, screen_width, screen_height):
        self.screen_width = screen_width
        self.screen_height = screen_height

        try:
            self.ui_font = pygame.font.Font(None, 18)
            self.title_font = pygame.font.Font(None, 22)
            self.small_font = pygame.font.Font(None, 15)
        except pygame.error: # Font module not initialised or default font missing
            self.ui_font = pygame.font.SysFont("arial", 16)
            self.title_font = pygame.font.SysFont("arial", 20)
            self.small_font = pygame.font.SysFont("arial", 13)

        self.ui_colors = {
            'panel_bg': (10, 30, 50, 190),
            'panel_border': (30, 120, 220, 200),
            'text_primary': (210, 230, 255),
            'text_secondary': (150, 170, 200),
            'accent_blue': (50, 180, 255),
            'accent_green': (50, 220, 120),
            'accent_yellow': (255, 220, 80),
            'accent_red': (255, 120, 120),
        }
        self.line_height = 18
        self.small_line_height = 15
        self.title_line_height = 24

        self.clickable_elements = {}
        self.nav_scroll_offset = 0
        self.nav_panel_height = 260
        self.nav_item_height = self.small_line_height + 4

        self.scene = None
        self.clock = None
        self.selected_name = None
        self.fps = 0.0
        self.speed_setting = config.Time.SPEED_SLIDER_DEFAULT

    def _panel_surface(self, size):
        panel_surf = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.rect(panel_surf, self.ui_colors['panel_bg'], panel_surf.get_rect(), border_radius=3)
        pygame.draw.rect(panel_surf, self.ui_colors['panel_border'], panel_surf.get_rect(), 2, border_radius=3)
        return panel_surf

    def _line_style(self, line_item):
        """(text, color, font, height) for one panel entry."""
        if not isinstance(line_item, dict):
            return str(line_item), self.ui_colors['text_secondary'], self.ui_font, self.line_height
        font_choice = line_item.get('font')
        if font_choice == 'title':
            font, height = self.title_font, self.title_line_height
        elif font_choice == 'small':
            font, height = self.small_font, self.small_line_height
        else:
            font, height = self.ui_font, self.line_height
        return line_item.get('text', ''), line_item.get('color', self.ui_colors['text_secondary']), font, height

    def draw_panel(self, surface, rect, title="", content_lines=None, scroll_offset_y=0, clickable_prefix=None):
        """
        Draws a translucent panel with a title and lines of text.

        `content_lines` items are plain strings or dicts with 'text', optional
        'color', 'font' ('title' or 'small') and 'id'. When `clickable_prefix` is
        set, visible dict items carrying an 'id' become clickable body selections.

        Returns:
            int: Unscrolled height of the panel content, for scroll limits.
        """
        panel_surf = self._panel_surface((rect.width, rect.height))
        content_rect = pygame.Rect(5, 5, rect.width - 10, rect.height - 10)
        panel_surf.set_clip(content_rect)

        top = 10
        if title:
            panel_surf.blit(self.title_font.render(title, True, self.ui_colors['text_primary']), (10, top))
            top += self.title_line_height

        y = top - scroll_offset_y
        for line_item in content_lines or []:
            text, color, font, height = self._line_style(line_item)
            if text.strip():
                text_surf = font.render(text, True, color)
                line_rect = text_surf.get_rect(topleft=(15, y))
                panel_surf.blit(text_surf, line_rect)
                visible = line_rect.clip(content_rect)
                if clickable_prefix and visible.height > 0 and isinstance(line_item, dict) and 'id' in line_item:
                    self.clickable_elements[f"{clickable_prefix}_{line_item['id']}"] = {
                        'rect': visible.move(rect.topleft),
                        'action': 'select_body',
                        'id': line_item['id'],
                    }
            y += height

        panel_surf.set_clip(None)
        surface.blit(panel_surf, rect)
        return y + scroll_offset_y + 5

    def update_data(self, scene=None, clock=None, selected_name=None, speed_setting=None, fps=0):
        self.scene = scene
        self.clock = clock
        self.selected_name = selected_name
        if speed_setting is not None:
            self.speed_setting = speed_setting
        self.fps = fps

    def _nav_panel_rect(self):
        return pygame.Rect(10, self.screen_height - self.nav_panel_height - 10, 200, self.nav_panel_height)

    def _nav_content_height(self):
        if self.scene is None:
            return 0
        return 10 + self.title_line_height + len(self.scene.navigation_states()) * self.small_line_height + 5

    def handle_event(self, event):
        """
        Handles clicks on panel entries and wheel scrolling over the navigation list.

        Returns:
            dict: {'selected_name': str, 'event_consumed': True} on a selection,
            {'event_consumed': True} for consumed scrolls, else {}.
        """
        if event.type == pygame.MOUSEBUTTONDOWN:
            mouse_pos = getattr(event, 'pos', None) or pygame.mouse.get_pos()
            if event.button == 1:
                for element_key, data in self.clickable_elements.items():
                    if data['rect'].collidepoint(mouse_pos) and data['action'] == 'select_body':
                        if config.Debug.UI_DEBUG:
                            logging.debug(f"UI click on {element_key}")
                        return {'selected_name': data['id'], 'event_consumed': True}

            if self._nav_panel_rect().collidepoint(mouse_pos):
                scroll_increment = self.nav_item_height * 2
                if event.button == 4:
                    self.nav_scroll_offset = max(0, self.nav_scroll_offset - scroll_increment)
                    return {'event_consumed': True}
                elif event.button == 5:
                    visible_height = self.nav_panel_height - 10
                    max_scroll = max(0, self._nav_content_height() - visible_height)
                    self.nav_scroll_offset = min(max_scroll, self.nav_scroll_offset + scroll_increment)
                    return {'event_consumed': True}
        return {}

    def _detail_lines(self, state):
        display = state.display
        lines = [
            {'text': state.name, 'font': 'title', 'color': self.ui_colors['text_primary']},
            f"Type: {display.body_type}",
            f"Distance: {format_distance(state)}",
            f"Radius: {format_radius(display.size)}",
        ]
        lines.extend({'text': chunk, 'font': 'small'} for chunk in self._wrap(display.description, 38))

        moons = getattr(state, 'moons', None)
        if moons:
            lines.append({'text': "Satellites:", 'color': self.ui_colors['accent_yellow']})
            for moon_state in moons:
                lines.append({'text': f"  {moon_state.name}", 'id': moon_state.name,
                              'color': self.ui_colors['accent_blue']})
        return lines

    @staticmethod
    def _wrap(text, width):
        words, lines, current = text.split(), [], ""
        for word in words:
            if current and len(current) + len(word) + 1 > width:
                lines.append(current)
                current = word
            else:
                current = f"{current} {word}".strip()
        if current:
            lines.append(current)
        return lines

    def draw_compare_card(self, surface, rect, state):
        """Draws Earth beside the selected body at 100 px per Earth radius."""
        card = self._panel_surface((rect.width, rect.height))

        size = state.display.size
        diameter = compare_circle_diameter(size)
        earth_diameter = compare_circle_diameter(1.0)
        baseline = rect.height - 30
        pygame.draw.circle(card, (74, 144, 226), (20 + earth_diameter // 2, baseline - earth_diameter // 2), earth_diameter // 2)
        pygame.draw.circle(card, state.display.color,
                           (rect.width - 20 - diameter // 2, baseline - diameter // 2), diameter // 2)

        label_surf = self.small_font.render(compare_label(state.name, size), True, self.ui_colors['text_primary'])
        card.blit(label_surf, label_surf.get_rect(midbottom=(rect.width // 2, rect.height - 8)))
        earth_surf = self.small_font.render("EARTH", True, self.ui_colors['text_secondary'])
        card.blit(earth_surf, (12, 8))
        surface.blit(card, rect)

    def draw_ui(self, surface):
        self.clickable_elements.clear()

        # 1. Status panel
        status_rect = pygame.Rect(self.screen_width - 260, 10, 250, 130)
        status_content = []
        if self.clock is not None:
            clock = self.clock
            status_content.extend([
                f"Date: {clock.date:%Y-%m-%d}",
                f"Time: {clock.date:%H:%M:%S} UTC",
                f"Speed: x{clock.time_scale:.3g} (slider {self.speed_setting})",
                {'text': "PAUSED" if clock.paused else ("REVERSE" if clock.time_scale < 0 else "PLAYING"),
                 'color': self.ui_colors['accent_red'] if clock.paused else self.ui_colors['accent_green']},
                f"FPS: {self.fps:.1f}",
            ])
        self.draw_panel(surface, status_rect, "Simulation Time", status_content)

        # 2. Navigation list
        nav_items = []
        if self.scene is not None:
            for state in self.scene.navigation_states():
                color = self.ui_colors['text_primary'] if state.name == self.selected_name else self.ui_colors['text_secondary']
                nav_items.append({'text': state.name, 'color': color, 'id': state.name, 'font': 'small'})
        self.draw_panel(surface, self._nav_panel_rect(), "Navigation", nav_items,
                        scroll_offset_y=self.nav_scroll_offset,
                        clickable_prefix='nav_item')

        # 3. Detail panel and comparison card
        if self.scene is not None and self.selected_name:
            state = self.scene.find(self.selected_name)
            if state is not None:
                detail_rect = pygame.Rect(self.screen_width - 260, 150, 250, 300)
                self.draw_panel(surface, detail_rect, "Details", self._detail_lines(state),
                                clickable_prefix='satellite')
                compare_rect = pygame.Rect(self.screen_width - 260, detail_rect.bottom + 10, 250, 250)
                self.draw_compare_card(surface, compare_rect, state)

        # 4. Key help
        help_surf = self.small_font.render(
            "SPACE pause  RIGHT play  LEFT reverse  L live  [ ] speed  +/- zoom  F focus",
            True, self.ui_colors['text_secondary'])
        surface.blit(help_surf, (10, 10))
