"""Shared fixtures: headless pygame and a renderer that records draw calls."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from ifscaster.config import AppConfig
from ifscaster.editor import FractalEditor


class RecordingRenderer:
    """Collects every draw call as (name, args) tuples."""

    def __init__(self):
        self.calls = []

    def draw_triangle(self, a, b, c):
        self.calls.append(("triangle", (a, b, c)))

    def draw_filled_circle(self, center, diameter, color=None):
        self.calls.append(("circle", (center, diameter, color)))

    def draw_line(self, a, b, color=None):
        self.calls.append(("line", (a, b, color)))

    def draw_text(self, s, x, y, color=None):
        self.calls.append(("text", (s, x, y, color)))

    def named(self, name):
        return [args for kind, args in self.calls if kind == name]


@pytest.fixture
def recorder():
    return RecordingRenderer()


@pytest.fixture
def cfg():
    return AppConfig(default_depth=1)


@pytest.fixture
def editor(cfg):
    ed = FractalEditor(cfg=cfg)
    ed.frame()
    return ed
