"""
Headless smoke tests for the pygame renderer.
"""

import os
from dataclasses import replace

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from press.controller import PressController  # noqa: E402
from press.render import PressRenderer, crack_lines, cylinder_width  # noqa: E402
from press.state import CrushState  # noqa: E402


@pytest.fixture(scope="module")
def renderer():
    pygame.font.init()
    yield PressRenderer(900, 600)
    pygame.font.quit()


def test_buttons_hit_testing(renderer):
    for name, rect in renderer.button_rects.items():
        assert renderer.button_at(rect.center) == name
    assert renderer.button_at((0, 0)) is None


def test_cylinder_width_grows_with_area():
    assert cylinder_width(100) > cylinder_width(5)


def test_crack_lines_stable_between_frames():
    rect = pygame.Rect(0, 0, 80, 40)
    assert crack_lines(rect) == crack_lines(rect)


@pytest.mark.parametrize("crushed", [False, True])
def test_draw_frame(renderer, crushed):
    controller = PressController()
    controller.set_inputs(input_area=50, output_area=20)
    if crushed:
        controller.state.crush = CrushState.CRUSHED
    frame = controller.update(1 / 60)
    screen = pygame.Surface((900, 600))
    renderer.draw(screen, controller.state, frame, controller.readouts())


class _RecordingFont:
    def __init__(self, font):
        self.font = font
        self.texts = []

    def render(self, text, antialias, color):
        self.texts.append(text)
        return self.font.render(text, antialias, color)


def test_crush_message_comes_from_readouts(renderer):
    controller = PressController()
    controller.state.crush = CrushState.CRUSHED
    frame = controller.update(1 / 60)
    readouts = replace(controller.readouts(), crushed_message="SQUASHED")
    font = _RecordingFont(renderer.big_font)
    renderer.big_font = font
    try:
        renderer.draw(pygame.Surface((900, 600)), controller.state, frame, readouts)
    finally:
        renderer.big_font = font.font
    assert font.texts == ["SQUASHED"]
