from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Tuple

from ifscaster.config import AppConfig
from ifscaster.editor import FractalEditor
from ifscaster.render.canvas import Renderer

from .base import Scene
from .editor_input import EditorInput

if TYPE_CHECKING:
    from ifscaster.render.canvas import PygameRenderer
    from .manager import SceneManager

Color = Tuple[int, int, int]

WHITE = (230, 230, 240)
DIM = (150, 160, 180)
RED = (240, 120, 120)

HELP_LINES = [
    "Click: add fixed point | hover: select",
    "Q/A: scale +/-   W/S: rotate +/-",
    "E/D: depth +/-   Del: delete selected",
    "R: reset   H: hide help   Esc: quit   F11: fullscreen",
]


def overlay_lines(editor: FractalEditor) -> List[Tuple[str, Color]]:
    """Status text for the top-left corner, one (text, color) per row."""
    t = editor.active()
    lines: List[Tuple[str, Color]] = [
        (
            f"Depth: {editor.depth}   Maps: {len(editor.transformations)}   "
            f"Triangles: {len(editor.cache)}",
            WHITE,
        ),
        (
            f"Selected #{editor.transformations.active_index}: "
            f"scale {t.scale_factor:.3f}  rotation {math.degrees(t.rotate_factor):.0f} deg",
            WHITE,
        ),
    ]
    if editor.show_help:
        lines.extend((ln, DIM) for ln in HELP_LINES)
    if editor.status_msg:
        lines.append((editor.status_msg, RED))
    return lines


def draw_editor(editor: FractalEditor, renderer: Renderer, line_height: int = 18) -> None:
    """Draw the cached fractal, then control markers, then text on top."""
    for a, b, c in editor.cache:
        renderer.draw_triangle(a, b, c)

    active_idx = editor.transformations.active_index
    for idx, t in enumerate(editor.transformations):
        t.render(renderer, active=(idx == active_idx))

    y = 8
    for text, color in overlay_lines(editor):
        renderer.draw_text(text, 8, y, color)
        y += line_height


class EditorScene(Scene):
    """
    The IFS canvas:
    - Left click: add a fixed point (new transformation)
    - Mouse move: highlight the fixed point under the pointer
    - Keys: edit the highlighted transformation or the recursion depth
    """

    def __init__(self, editor: FractalEditor, input_map: EditorInput | None = None) -> None:
        self.editor = editor
        self.input = input_map or EditorInput()

    @classmethod
    def from_config(cls, cfg: AppConfig, renderer: "PygameRenderer | None" = None) -> "EditorScene":
        to_surface = renderer._to_surface if renderer is not None else None
        return cls(FractalEditor.from_config(cfg), EditorInput(to_surface))

    def handle_event(self, event, manager: "SceneManager") -> None:
        self.input.dispatch(event, self.editor)

    def update(self, dt_ms: int, manager: "SceneManager") -> None:
        if self.editor.quit_requested:
            manager.pop_scene()
            return
        self.editor.frame()

    def render(self, renderer, manager: "SceneManager") -> None:
        renderer.clear()
        draw_editor(self.editor, renderer, renderer.line_height())
