"""Editing state machine for the IFS canvas."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ifscaster.config import AppConfig
from ifscaster.content.keybindings import default_keymap, build_keymap, load_default_bindings
from ifscaster.errors import EmptySetError
from ifscaster.patterns.ifs import expected_triangle_count, generate
from ifscaster.state.transforms import (
    Transformation,
    TransformationSet,
    Triangle,
    default_fixed_points,
)

log = logging.getLogger(__name__)


@dataclass
class FractalEditor:
    """
    Owns everything the editor mutates: the transformation set, recursion
    depth, the cached triangle list and the dirty flag.

    Input handlers only mutate and mark dirty; frame() is the single place
    the cache is rebuilt, once per frame at most.
    - pointer press: add a transformation at the pointer
    - pointer move: select the nearest fixed point in range (no regeneration)
    - keys: see content/keybindings.yaml
    """

    cfg: AppConfig = field(default_factory=AppConfig)
    keymap: Dict[str, str] = field(default_factory=dict)

    transformations: TransformationSet = field(init=False)
    depth: int = field(init=False)
    cache: List[Triangle] = field(init=False, default_factory=list)
    dirty: bool = field(init=False, default=True)
    show_help: bool = field(init=False, default=True)
    quit_requested: bool = field(init=False, default=False)
    status_msg: str = field(init=False, default="")
    last_generate_ms: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        if not self.keymap:
            self.keymap = default_keymap()
        self.transformations = TransformationSet(
            default_scale=self.cfg.default_scale,
            scale_rate=self.cfg.scale_rate,
            rotation_step=self.cfg.rotation_step,
        )
        self.reset()

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "FractalEditor":
        keymap = build_keymap(load_default_bindings(), cfg.keybindings)
        return cls(cfg=cfg, keymap=keymap)

    # ------------------------------------------------------------------ #
    # Setup

    def reset(self) -> None:
        """Back to the three default transformations and default depth."""
        self.transformations.clear()
        for p in default_fixed_points(self.cfg.view_width, self.cfg.view_height):
            self.transformations.add(p)
        self.depth = self.cfg.default_depth
        self._refresh_status()
        self.dirty = True

    def active(self) -> Transformation:
        return self.transformations.active()

    # ------------------------------------------------------------------ #
    # Input handlers

    def on_pointer_press(self, x: float, y: float) -> None:
        self.transformations.add((x, y))
        log.debug("Added transformation #%d at (%.1f, %.1f)", len(self.transformations) - 1, x, y)
        self._refresh_status()
        self.dirty = True

    def on_pointer_move(self, x: float, y: float) -> None:
        # selection only changes which marker is highlighted; no regeneration
        self.transformations.set_active_by_proximity((x, y), self.cfg.select_radius)

    def on_key_press(self, key: str) -> Optional[str]:
        """Dispatch a key name; returns the command it triggered, if any."""
        cmd = self.keymap.get(key.lower())
        if cmd is None:
            return None
        self.execute(cmd)
        return cmd

    def execute(self, cmd: str) -> None:
        if cmd == "delete_active":
            self._delete_active()
        elif cmd == "scale_up":
            self.active().increase_scale()
            self._refresh_status(announce=False)
            self.dirty = True
        elif cmd == "scale_down":
            self.active().decrease_scale()
            self._refresh_status(announce=False)
            self.dirty = True
        elif cmd == "rotate_up":
            self.active().increase_rotation()
            self._refresh_status(announce=False)
            self.dirty = True
        elif cmd == "rotate_down":
            self.active().decrease_rotation()
            self._refresh_status(announce=False)
            self.dirty = True
        elif cmd == "depth_up":
            self.depth += 1
            self._refresh_status()
            self.dirty = True
        elif cmd == "depth_down":
            if self.depth >= 1:
                self.depth -= 1
            self._refresh_status(announce=False)
            # regenerates even at the floor; harmless and idempotent
            self.dirty = True
        elif cmd == "reset":
            self.reset()
        elif cmd == "toggle_help":
            self.show_help = not self.show_help
        elif cmd == "quit":
            self.quit_requested = True
        else:
            raise ValueError(f"unknown editor command: {cmd!r}")

    def _delete_active(self) -> None:
        try:
            removed = self.transformations.remove_active()
        except EmptySetError:
            log.warning("Refused to delete the last remaining transformation.")
            self.status_msg = "Cannot delete the last transformation."
            return
        log.debug("Removed transformation at (%.1f, %.1f)", *removed.fixed_point)
        self._refresh_status(announce=False)
        self.dirty = True

    def _refresh_status(self, announce: bool = True) -> None:
        """
        Rebuild the status line for the current state.

        Any earlier message is dropped. The budget warning is shown whenever
        the count is over the limit; it is logged only when announce is set
        (the count just grew, or the editor was reset).
        """
        self.status_msg = ""
        count = self.expected_triangles()
        if count > self.cfg.triangle_warning:
            if announce:
                log.warning(
                    "Depth %d with %d transformations will generate %d triangles; expect slow frames.",
                    self.depth,
                    len(self.transformations),
                    count,
                )
            self.status_msg = f"Warning: {count} triangles at depth {self.depth}."

    # ------------------------------------------------------------------ #
    # Per-frame regeneration

    def expected_triangles(self) -> int:
        return expected_triangle_count(len(self.transformations), self.depth)

    def frame(self) -> bool:
        """
        Consume the dirty flag: rebuild the cache if it was set.

        The flag is cleared whether or not a rebuild happened. Returns True
        when the cache was rebuilt.
        """
        rebuilt = False
        if self.dirty:
            start = time.perf_counter()
            self.cache = generate(
                self.transformations,
                self.transformations.base_polygon(),
                self.depth,
            )
            self.last_generate_ms = (time.perf_counter() - start) * 1000.0
            log.debug(
                "Regenerated %d triangles (depth %d, %d maps) in %.1f ms",
                len(self.cache),
                self.depth,
                len(self.transformations),
                self.last_generate_ms,
            )
            rebuilt = True
        self.dirty = False
        return rebuilt
