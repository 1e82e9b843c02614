from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import pygame

from ifscaster.editor import FractalEditor

# Non-printing keys, by the names used in keybindings.yaml.
SPECIAL_KEY_NAMES: Dict[int, str] = {
    pygame.K_DELETE: "delete",
    pygame.K_BACKSPACE: "backspace",
    pygame.K_ESCAPE: "escape",
    pygame.K_RETURN: "return",
    pygame.K_KP_ENTER: "return",
    pygame.K_SPACE: "space",
    pygame.K_TAB: "tab",
}


def key_name(event: pygame.event.Event) -> Optional[str]:
    """Name a KEYDOWN event the way key bindings spell it."""
    key = getattr(event, "key", None)
    if key in SPECIAL_KEY_NAMES:
        return SPECIAL_KEY_NAMES[key]
    uni = getattr(event, "unicode", "") or ""
    if len(uni) == 1 and uni.isprintable():
        return uni.lower()
    if key is None:
        return None
    try:
        name = pygame.key.name(key)
    except pygame.error:
        return None
    return name.lower() or None


@dataclass
class EditorEvent:
    """Discrete input the editor understands."""
    kind: str                                   # "press" | "move" | "key"
    pos: Optional[Tuple[float, float]] = None
    key: Optional[str] = None


class EditorInput:
    """
    Maps raw pygame events to EditorEvents and hands them to the editor.

    It knows nothing about what keys do; the editor's keymap decides.
    to_surface converts display coordinates (letterboxed, maybe fullscreen)
    back to canvas coordinates.
    """

    def __init__(self, to_surface: Optional[Callable[[Tuple[int, int]], Tuple[int, int]]] = None) -> None:
        self.to_surface = to_surface

    def _pos(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        if self.to_surface is not None:
            pos = self.to_surface(pos)
        return float(pos[0]), float(pos[1])

    def translate(self, event: pygame.event.Event) -> Optional[EditorEvent]:
        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 1) == 1:
            return EditorEvent("press", pos=self._pos(event.pos))
        if event.type == pygame.MOUSEMOTION:
            return EditorEvent("move", pos=self._pos(event.pos))
        if event.type == pygame.KEYDOWN:
            name = key_name(event)
            if name is not None:
                return EditorEvent("key", key=name)
        return None

    def dispatch(self, event: pygame.event.Event, editor: FractalEditor) -> Optional[EditorEvent]:
        ev = self.translate(event)
        if ev is None:
            return None
        if ev.kind == "press":
            editor.on_pointer_press(*ev.pos)
        elif ev.kind == "move":
            editor.on_pointer_move(*ev.pos)
        elif ev.kind == "key":
            editor.on_key_press(ev.key)
        return ev
