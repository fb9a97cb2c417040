"""Tuning constants and runtime options for the Breakout game.

Geometry is expressed in pixels of the fixed 1280x720 logical resolution.
Nothing is scaled to the window: every sprite is drawn at the coordinates
computed from these constants.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# World
# ---------------------------------------------------------------------------
WIDTH, HEIGHT = 1280, 720
FPS = 60
CAPTION = "Breakout"

# ---------------------------------------------------------------------------
# Blocks: a fixed grid laid out with a constant cell pitch from the margins.
# ---------------------------------------------------------------------------
BLOCK_ROWS, BLOCK_COLS = 6, 10
BLOCK_W, BLOCK_H = 111, 39
BLOCK_PITCH_X, BLOCK_PITCH_Y = 113, 42
BLOCK_OFFX, BLOCK_OFFY = 70, 90

# ---------------------------------------------------------------------------
# Ball
# ---------------------------------------------------------------------------
BALL_SIZE = 40
BALL_SPEED = 10
BALL_FRAMES = 4
BALL_FRAME_MS = 100  # one animation frame every 100ms of game time
BALL_START_X = WIDTH // 2 - BALL_SIZE // 2
BALL_START_Y = HEIGHT - 85

# ---------------------------------------------------------------------------
# Platform (paddle)
# ---------------------------------------------------------------------------
PLATFORM_W, PLATFORM_H = 251, 41
PLATFORM_SPEED = 15
PLATFORM_START_X = WIDTH // 2 - 125
PLATFORM_START_Y = HEIGHT - 45

# ---------------------------------------------------------------------------
# HUD and palette
# ---------------------------------------------------------------------------
FONT_SIZE = 28
SCORE_POS = (70, 46)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
BG = (15, 15, 24)
BALL_COLOR = (235, 235, 235)
PLATFORM_COLOR = (70, 140, 200)
BLOCK_COLOR = (200, 70, 70)

WIN_MESSAGE = "You win"
LOSE_MESSAGE = "Game over"

# Asset directories live beside the module so the game can be launched from
# any working directory.
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
IMAGE_DIR = os.path.join(BASE_DIR, "img")
SOUND_DIR = os.path.join(BASE_DIR, "sounds")


@dataclass
class Settings:
    """Options that may change between runs.

    Attributes
    ----------
    fps: int
        Frame-rate cap handed to ``pygame.time.Clock.tick``.
    image_dir, sound_dir: str
        Directories searched for ``<name>.png`` sprites and ``<name>.mp3``
        sounds.
    seed: int | None
        Seeds the random launch angle. ``None`` uses system entropy.
    mute: bool
        Skip sound playback entirely.
    """

    fps: int = FPS
    image_dir: str = IMAGE_DIR
    sound_dir: str = SOUND_DIR
    seed: Optional[int] = None
    mute: bool = False
    caption: str = CAPTION

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Settings":
        """Build settings from parsed command line arguments."""

        return cls(
            fps=args.fps,
            image_dir=args.images,
            sound_dir=args.sounds,
            seed=args.seed,
            mute=args.mute,
        )
