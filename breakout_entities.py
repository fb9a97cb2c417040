"""Ball, platform and block objects for the Breakout game.

The objects only know about their own geometry and velocity.  The world
decides what a collision means (sound, score, end of game); these classes
report what happened and adjust their own state.

All collision tests use the *projected* position, i.e. the position after
the current velocity has been applied, so a hit is detected one tick before
the sprites would visibly overlap.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import pygame

from breakout_settings import (
    BALL_FRAME_MS,
    BALL_FRAMES,
    BALL_SIZE,
    BALL_SPEED,
    BALL_START_X,
    BALL_START_Y,
    BLOCK_H,
    BLOCK_W,
    PLATFORM_H,
    PLATFORM_SPEED,
    PLATFORM_START_X,
    PLATFORM_START_Y,
    PLATFORM_W,
)

logger = logging.getLogger(__name__)


class WallHit(Enum):
    """Outcome of checking the ball against the world edges."""

    NONE = "none"
    WALL = "wall"
    FLOOR = "floor"


@dataclass
class Block:
    """A single destructible block. Deactivated, never removed."""

    x: int
    y: int
    width: int = BLOCK_W
    height: int = BLOCK_H
    active: bool = True

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, self.height)


@dataclass
class Ball:
    """The ball, its velocity and the sprite animation frame."""

    x: float = BALL_START_X
    y: float = BALL_START_Y
    width: int = BALL_SIZE
    height: int = BALL_SIZE
    speed: int = BALL_SPEED
    dx: float = 0
    dy: float = 0
    frame: int = 0
    animating: bool = field(default=False)
    frame_clock: float = field(default=0.0)

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), self.width, self.height)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def launch(self, rng: Optional[random.Random] = None) -> None:
        """Send the ball upwards with a random horizontal component."""

        rng = rng or random
        self.dy = -self.speed
        self.dx = rng.randint(-self.speed, self.speed)
        self.animating = True
        logger.debug("Ball launched with velocity (%s, %s)", self.dx, self.dy)

    def advance_frame(self) -> None:
        self.frame += 1
        if self.frame >= BALL_FRAMES:
            self.frame = 0

    def animate(self, elapsed_ms: float) -> None:
        """Advance the sprite frame for every full interval of game time.

        The animation only runs once the ball has been launched and is
        independent of how many ticks happen per interval.
        """

        if not self.animating:
            return
        self.frame_clock += elapsed_ms
        while self.frame_clock >= BALL_FRAME_MS:
            self.frame_clock -= BALL_FRAME_MS
            self.advance_frame()

    def move(self) -> None:
        if self.dy:
            self.y += self.dy
        if self.dx:
            self.x += self.dx

    def projected(self) -> Tuple[float, float]:
        """Return the position the ball will occupy after this tick."""

        return self.x + self.dx, self.y + self.dy

    def intersects(self, other: "Block | Platform") -> bool:
        """Axis-aligned overlap test between the projected ball and ``other``."""

        x, y = self.projected()
        return (
            x + self.width > other.x
            and x < other.x + other.width
            and y + self.height > other.y
            and y < other.y + other.height
        )

    def bounce_off_block(self, block: Block) -> None:
        # Only the vertical direction flips; the inverted velocity separates
        # the ball from the block on the next tick.
        self.dy = -self.dy
        block.active = False

    def bounce_off_platform(self, platform: "Platform") -> None:
        """Carry the paddle motion and steer by the contact point."""

        if platform.dx:
            self.x += platform.dx
        if self.dy > 0:
            self.dy = -self.speed
            self.dx = self.speed * platform.contact_offset(self.center_x)

    def resolve_world_bounds(self, width: int, height: int) -> WallHit:
        """Push the ball back inside the world, one edge per tick.

        Edges are checked left, right, top, bottom and only the first
        violated edge is handled.  Crossing the bottom edge is not
        corrected: it is reported as ``WallHit.FLOOR``.
        """

        x, y = self.projected()

        if x < 0:
            self.x = 0
            self.dx = self.speed
            return WallHit.WALL
        elif x + self.width > width:
            self.x = width - self.width
            self.dx = -self.speed
            return WallHit.WALL
        elif y < 0:
            self.y = 0
            self.dy = self.speed
            return WallHit.WALL
        elif y + self.height > height:
            return WallHit.FLOOR
        return WallHit.NONE


@dataclass
class Platform:
    """The player's paddle.

    ``ball`` holds the ball until it is fired; while it is held the ball
    rides along with every paddle movement.
    """

    x: float = PLATFORM_START_X
    y: float = PLATFORM_START_Y
    width: int = PLATFORM_W
    height: int = PLATFORM_H
    speed: int = PLATFORM_SPEED
    dx: float = 0
    ball: Optional[Ball] = None

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), self.width, self.height)

    def fire(self, rng: Optional[random.Random] = None) -> None:
        if self.ball:
            self.ball.launch(rng)
            self.ball = None

    def start_moving(self, direction: int) -> None:
        """Start sliding towards ``pygame.K_LEFT`` or ``pygame.K_RIGHT``."""

        if direction == pygame.K_LEFT:
            self.dx = -self.speed
        elif direction == pygame.K_RIGHT:
            self.dx = self.speed

    def stop_moving(self) -> None:
        self.dx = 0

    def move(self) -> None:
        if self.dx != 0:
            self.x += self.dx
            if self.ball:
                self.ball.x += self.dx

    def resolve_world_bounds(self, width: int) -> None:
        # The paddle just stops; it is not snapped to the wall.
        x = self.x + self.dx
        if x < 0 or x + self.width > width:
            self.dx = 0

    def contact_offset(self, ball_center_x: float) -> float:
        """Return where ``ball_center_x`` touches the paddle, from -1 to 1.

        The left edge maps to -1, the centre to 0 and the right edge to 1.
        Contacts past either edge are clamped.
        """

        offset = 2 * (ball_center_x - self.x) / self.width - 1
        return max(-1.0, min(1.0, offset))
