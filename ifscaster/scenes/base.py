from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .manager import SceneManager


class Scene:
    """
    Base for all scenes.

    The SceneManager drives each scene through the live-loop hooks once per
    frame: every pending event goes to handle_event, then update, then
    render. A scene leaves by popping itself (or clearing the stack) on the
    manager.
    """

    def handle_event(self, event, manager: "SceneManager") -> None:
        """Process a single pygame event."""
        return None

    def update(self, dt_ms: int, manager: "SceneManager") -> None:
        """Advance scene state by dt_ms."""
        return None

    def render(self, renderer, manager: "SceneManager") -> None:
        """Draw the scene."""
        return None
