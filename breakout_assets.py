"""Sprite and sound loading for the Breakout game.

Every asset the game uses is declared up front: the sprite names map to
``<image_dir>/<name>.png`` and the sound names to ``<sound_dir>/<name>.mp3``.
Loading resolves them into typed handles (``Sprites`` and ``Sounds``) and a
``LoadLatch`` reports readiness once every declared asset has completed.

Missing files do not stop the game: a warning is logged and a placeholder is
drawn (or, for sounds, a short beep is synthesised) in its place.
"""

from __future__ import annotations

import io
import logging
import math
import os
import wave
from array import array
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import pygame

from breakout_settings import (
    BALL_COLOR,
    BALL_FRAMES,
    BALL_SIZE,
    BG,
    BLOCK_COLOR,
    BLOCK_H,
    BLOCK_W,
    HEIGHT,
    PLATFORM_COLOR,
    PLATFORM_H,
    PLATFORM_W,
    WHITE,
    WIDTH,
    Settings,
)

logger = logging.getLogger(__name__)

SPRITE_NAMES = ("background", "ball", "platform", "block")
SOUND_NAMES = ("bump",)


class AssetError(Exception):
    """Raised when an asset file exists but cannot be decoded."""


@dataclass(frozen=True)
class Sprites:
    background: pygame.Surface
    ball: pygame.Surface
    platform: pygame.Surface
    block: pygame.Surface


@dataclass(frozen=True)
class Sounds:
    # ``None`` when no audio device is available.
    bump: Optional[pygame.mixer.Sound]


@dataclass(frozen=True)
class Assets:
    sprites: Sprites
    sounds: Sounds


class LoadLatch:
    """One-shot counter that calls ``on_ready`` once ``required`` loads finish.

    The latch is not reusable: after it has fired, further completions are
    counted but never fire the callback again.
    """

    def __init__(self, required: int, on_ready: Callable[[], None]) -> None:
        self.required = required
        self.loaded = 0
        self._on_ready = on_ready
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def count_down(self) -> None:
        self.loaded += 1
        if self.loaded >= self.required and not self._fired:
            self._fired = True
            self._on_ready()


# ---------------------------------------------------------------------------
# Placeholders used when an asset file is missing
# ---------------------------------------------------------------------------
def placeholder_sprite(name: str) -> pygame.Surface:
    """Draw a stand-in sprite with the same size as the real artwork."""

    if name == "background":
        surface = pygame.Surface((WIDTH, HEIGHT))
        surface.fill(BG)
        return surface

    if name == "ball":
        # A horizontal strip with one cell per animation frame.  The highlight
        # moves around the ball so the animation stays visible.
        surface = pygame.Surface((BALL_SIZE * BALL_FRAMES, BALL_SIZE), pygame.SRCALPHA)
        radius = BALL_SIZE // 2
        for frame in range(BALL_FRAMES):
            center = (frame * BALL_SIZE + radius, radius)
            pygame.draw.circle(surface, BALL_COLOR, center, radius)
            angle = frame * math.pi / 2
            spot = (
                int(center[0] + math.cos(angle) * radius / 2),
                int(center[1] + math.sin(angle) * radius / 2),
            )
            pygame.draw.circle(surface, BG, spot, radius // 4)
        return surface

    if name == "platform":
        surface = pygame.Surface((PLATFORM_W, PLATFORM_H), pygame.SRCALPHA)
        pygame.draw.rect(surface, PLATFORM_COLOR, surface.get_rect(), border_radius=6)
        pygame.draw.rect(surface, WHITE, surface.get_rect(), 2, border_radius=6)
        return surface

    if name == "block":
        surface = pygame.Surface((BLOCK_W, BLOCK_H), pygame.SRCALPHA)
        pygame.draw.rect(surface, BLOCK_COLOR, surface.get_rect(), border_radius=4)
        return surface

    raise ValueError(f"unknown sprite {name!r}")


def make_beep(freq: int = 440, duration_ms: int = 60, volume: float = 0.4) -> Optional[pygame.mixer.Sound]:
    """Synthesise a short sine beep as an in-memory WAV file."""

    mixer_format = pygame.mixer.get_init()
    if mixer_format is None:
        return None
    sample_rate = mixer_format[0]
    n_samples = int(sample_rate * duration_ms / 1000)
    max_amp = int(32767 * volume)
    buf = array("h", (
        int(max_amp * math.sin(2 * math.pi * freq * i / sample_rate))
        for i in range(n_samples)
    ))
    bio = io.BytesIO()
    with wave.open(bio, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(buf.tobytes())
    bio.seek(0)
    return pygame.mixer.Sound(file=bio)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------
def load_sprite(image_dir: str, name: str) -> pygame.Surface:
    path = os.path.join(image_dir, f"{name}.png")
    if not os.path.exists(path):
        logger.warning("Sprite %s not found, drawing a placeholder", path)
        return placeholder_sprite(name)

    try:
        image = pygame.image.load(path)
    except pygame.error as exc:
        raise AssetError(f"cannot load sprite {path}: {exc}") from exc

    # ``convert_alpha`` needs a display mode; tests load without one.
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    logger.debug("Loaded sprite %s", path)
    return image


def load_sound(sound_dir: str, name: str) -> Optional[pygame.mixer.Sound]:
    if pygame.mixer.get_init() is None:
        return None

    path = os.path.join(sound_dir, f"{name}.mp3")
    if not os.path.exists(path):
        logger.warning("Sound %s not found, using a synthesised beep", path)
        return make_beep()

    try:
        sound = pygame.mixer.Sound(path)
    except pygame.error as exc:
        raise AssetError(f"cannot load sound {path}: {exc}") from exc
    logger.debug("Loaded sound %s", path)
    return sound


def init_mixer() -> bool:
    """Start the mixer if an audio device is available."""

    if pygame.mixer.get_init() is not None:
        return True
    try:
        pygame.mixer.init()
    except pygame.error as exc:
        logger.warning("Audio unavailable, continuing without sound: %s", exc)
        return False
    return True


def preload(settings: Settings, on_ready: Callable[[Assets], None]) -> Assets:
    """Load every declared sprite and sound, then hand them to ``on_ready``.

    ``on_ready`` is called exactly once, after the last asset has loaded.
    """

    sprites: Dict[str, pygame.Surface] = {}
    sounds: Dict[str, Optional[pygame.mixer.Sound]] = {}
    assets: Dict[str, Assets] = {}

    def ready() -> None:
        assets["all"] = Assets(Sprites(**sprites), Sounds(**sounds))
        on_ready(assets["all"])

    latch = LoadLatch(len(SPRITE_NAMES) + len(SOUND_NAMES), ready)

    for name in SPRITE_NAMES:
        sprites[name] = load_sprite(settings.image_dir, name)
        latch.count_down()

    for name in SOUND_NAMES:
        sounds[name] = load_sound(settings.sound_dir, name)
        latch.count_down()

    return assets["all"]
