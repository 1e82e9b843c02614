# manager.py
from __future__ import annotations

import logging
from typing import List, Optional

import pygame

from ifscaster import config
from ifscaster.render.canvas import PygameRenderer

from .base import Scene
from .editor_scene import EditorScene

log = logging.getLogger(__name__)


class SceneManager:
    def __init__(self, cfg: config.AppConfig, renderer: PygameRenderer) -> None:
        self.cfg = cfg
        self.renderer = renderer
        self.scene_stack: List[Scene] = []
        self.set_scene(EditorScene.from_config(cfg, renderer))

    def push_scene(self, scene: Scene) -> None:
        self.scene_stack.append(scene)

    def pop_scene(self) -> None:
        if not self.scene_stack:
            return
        self.scene_stack.pop()

    def set_scene(self, scene: Optional[Scene]) -> None:
        if scene is None:
            self.scene_stack.clear()
        else:
            self.scene_stack = [scene]

    # ------------------------------------------------------------------ #

    def run(self) -> None:
        """Drive the top scene until the stack is empty."""
        while self.scene_stack:
            self._run_live_scene(self.scene_stack[-1])

    def _run_live_scene(self, scene: Scene) -> None:
        renderer = self.renderer
        clock = pygame.time.Clock()
        log.info("Entering %s", type(scene).__name__)

        # Drive events/update/render until the scene stack changes or the
        # app is quit. Input always lands before the frame's update.
        while self.scene_stack and self.scene_stack[-1] is scene:
            dt = clock.tick(self.cfg.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.set_scene(None)
                    return

                # Window resize is purely a view concern.
                if event.type == pygame.VIDEORESIZE:
                    renderer.handle_resize(event.w, event.h)
                    continue

                # Global fullscreen toggle
                if event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    renderer.toggle_fullscreen()
                    continue

                scene.handle_event(event, self)

            scene.update(dt, self)
            if not self.scene_stack or self.scene_stack[-1] is not scene:
                return
            scene.render(renderer, self)
            renderer.present()
