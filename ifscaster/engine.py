from __future__ import annotations

"""
Engine entry point: owns pygame setup and the high-level loop.

SceneManager runs the per-frame loop; the engine just builds the renderer
and guarantees pygame is torn down however the loop exits.
"""

import logging

import pygame

from ifscaster import config
from ifscaster.render.canvas import PygameRenderer
from ifscaster.scenes.manager import SceneManager

log = logging.getLogger(__name__)


class Engine:
    def __init__(self, cfg: config.AppConfig) -> None:
        pygame.init()
        self.cfg = cfg
        self.renderer = PygameRenderer(cfg.view_width, cfg.view_height, cfg.font_size)
        self.manager = SceneManager(cfg, self.renderer)

    def run(self) -> None:
        log.info("Starting ifscaster at %dx%d", self.cfg.view_width, self.cfg.view_height)
        try:
            self.manager.run()
        finally:
            self.renderer.teardown()
            log.info("Shut down.")
