import os

# Run without a window or an audio device.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from breakout import World
from breakout_assets import SPRITE_NAMES, Assets, Sounds, Sprites, init_mixer, placeholder_sprite


class RecordingSound:
    """Stands in for ``pygame.mixer.Sound`` and counts plays."""

    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1


@pytest.fixture(scope="session", autouse=True)
def pygame_font():
    pygame.font.init()
    yield
    pygame.font.quit()


@pytest.fixture
def mixer():
    if not init_mixer():
        pytest.skip("no audio driver available")
    yield
    pygame.mixer.quit()


@pytest.fixture
def bump():
    return RecordingSound()


@pytest.fixture
def assets(bump):
    sprites = Sprites(**{name: placeholder_sprite(name) for name in SPRITE_NAMES})
    return Assets(sprites, Sounds(bump=bump))


@pytest.fixture
def world(assets):
    world = World()
    world.start(assets)
    return world
