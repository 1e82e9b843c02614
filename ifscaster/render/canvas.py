"""Pygame canvas renderer for triangles, control markers and text."""
from __future__ import annotations

from typing import Optional, Protocol, Tuple

import pygame

Vec2 = Tuple[float, float]
Color = Tuple[int, int, int]


class Renderer(Protocol):
    """Drawing surface the editor core draws through."""

    def draw_triangle(self, a: Vec2, b: Vec2, c: Vec2) -> None: ...

    def draw_filled_circle(self, center: Vec2, diameter: float, color: Optional[Color] = None) -> None: ...

    def draw_line(self, a: Vec2, b: Vec2, color: Optional[Color] = None) -> None: ...

    def draw_text(self, s: str, x: float, y: float, color: Optional[Color] = None) -> None: ...


class PygameRenderer:
    def __init__(self, width: int, height: int, font_size: int = 16) -> None:
        pygame.init()
        self.width = width
        self.height = height
        self.surface_flags = pygame.RESIZABLE
        # draw at logical resolution; the display may be larger in fullscreen
        self.surface = pygame.Surface((width, height))
        self.fullscreen = False
        self.display = pygame.display.set_mode((width, height), self.surface_flags)
        self.lb_off = (0, 0)  # letterbox offset when centering
        self.lb_scale = 1.0   # letterbox scale factor
        pygame.display.set_caption("ifscaster")
        self.font = pygame.font.SysFont("consolas", font_size)
        self.bg = (10, 10, 20)
        self.fg = (220, 230, 240)
        self.dim = (120, 130, 150)
        self.triangle_color = (80, 180, 240)
        self.line_color = (230, 230, 240)
        self.warn_color = (240, 120, 120)

    # ------------------------------------------------------------------ #
    # Renderer protocol

    def draw_triangle(self, a: Vec2, b: Vec2, c: Vec2) -> None:
        pygame.draw.polygon(self.surface, self.triangle_color, (a, b, c), 1)

    def draw_filled_circle(self, center: Vec2, diameter: float, color: Optional[Color] = None) -> None:
        radius = max(1, int(round(abs(diameter) / 2.0)))
        pygame.draw.circle(self.surface, color or self.fg, (int(center[0]), int(center[1])), radius)

    def draw_line(self, a: Vec2, b: Vec2, color: Optional[Color] = None) -> None:
        pygame.draw.line(self.surface, color or self.line_color, a, b, 2)

    def draw_text(self, s: str, x: float, y: float, color: Optional[Color] = None) -> None:
        surf = self.font.render(s, True, color or self.fg)
        self.surface.blit(surf, (int(x), int(y)))

    # ------------------------------------------------------------------ #

    def line_height(self) -> int:
        return self.font.get_linesize()

    def clear(self) -> None:
        self.surface.fill(self.bg)

    def _to_surface(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        """Convert display-space mouse coords to surface-space, accounting for letterbox and scale."""
        return (
            int((pos[0] - self.lb_off[0]) / max(1e-6, self.lb_scale)),
            int((pos[1] - self.lb_off[1]) / max(1e-6, self.lb_scale)),
        )

    def handle_resize(self, w: int, h: int) -> None:
        if not self.fullscreen:
            self.display = pygame.display.set_mode((w, h), self.surface_flags)

    def toggle_fullscreen(self) -> None:
        flags = self.display.get_flags()
        if flags & pygame.FULLSCREEN:
            self.display = pygame.display.set_mode((self.width, self.height), self.surface_flags)
            self.fullscreen = False
        else:
            self.display = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            self.fullscreen = True

    def present(self) -> None:
        """Blit the logical surface to the display, letterboxed with aspect preserved."""
        dw, dh = self.display.get_size()
        sw, sh = self.surface.get_size()
        scale = min(dw / sw, dh / sh)
        new_w = int(sw * scale)
        new_h = int(sh * scale)
        ox = max(0, (dw - new_w) // 2)
        oy = max(0, (dh - new_h) // 2)

        # keep letterbox info for mouse unprojection
        self.lb_off = (ox, oy)
        self.lb_scale = scale

        self.display.fill((0, 0, 0))
        if scale != 1.0:
            panel = pygame.transform.smoothscale(self.surface, (new_w, new_h))
        else:
            panel = self.surface
        self.display.blit(panel, (ox, oy))
        pygame.display.flip()

    def teardown(self) -> None:
        pygame.quit()
