"""Breakout clone implemented with pygame.

A paddle deflects a ball to destroy a grid of blocks.  The game follows a
traditional structure: load the assets, build the block layout, and then run
the main loop that routes keyboard input to the paddle, updates the physics
and redraws the whole scene every frame.

All game state lives in a single ``World`` object that is created at startup
and handed to the loop and the input handler.  Restarting after a win or a
loss simply builds a fresh ``World``.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from enum import Enum
from typing import List, Optional, Sequence

import pygame

from breakout_assets import Assets, AssetError, init_mixer, preload
from breakout_entities import Ball, Block, Platform, WallHit
from breakout_settings import (
    BLACK,
    BLOCK_COLS,
    BLOCK_OFFX,
    BLOCK_OFFY,
    BLOCK_PITCH_X,
    BLOCK_PITCH_Y,
    BLOCK_ROWS,
    FONT_SIZE,
    FPS,
    HEIGHT,
    IMAGE_DIR,
    LOSE_MESSAGE,
    SCORE_POS,
    SOUND_DIR,
    WHITE,
    WIDTH,
    WIN_MESSAGE,
    Settings,
)

logger = logging.getLogger(__name__)


class GameState(Enum):
    LOADING = "loading"
    PLAYING = "playing"
    ENDED = "ended"


class World:
    """Owns the ball, the platform, the blocks and the score.

    Parameters
    ----------
    settings: Settings | None
        Runtime options; defaults are used when omitted.
    rng: random.Random | None
        Source of the launch angle.  Seeded from ``settings.seed`` when not
        given, so a seeded game always launches the same way.
    """

    def __init__(self, settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> None:
        self.settings = settings or Settings()
        self.rng = rng or random.Random(self.settings.seed)
        self.width, self.height = WIDTH, HEIGHT

        self.ball = Ball()
        self.platform = Platform(ball=self.ball)
        self.blocks: List[Block] = []
        self.score = 0

        self.state = GameState.LOADING
        self.message: Optional[str] = None
        self.assets: Optional[Assets] = None
        self.screen: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None

    # -- setup ---------------------------------------------------------------
    def initialize(self, screen: pygame.Surface) -> None:
        """Bind the drawing surface and the score font."""

        self.screen = screen
        self.font = pygame.font.Font(None, FONT_SIZE)

    def start(self, assets: Assets) -> None:
        """Called once every asset has loaded: lay out the blocks and play."""

        self.assets = assets
        self.build_blocks()
        self.state = GameState.PLAYING
        logger.info("Game started with %d blocks", len(self.blocks))

    def build_blocks(self) -> None:
        self.blocks = [
            Block(x=BLOCK_PITCH_X * col + BLOCK_OFFX, y=BLOCK_PITCH_Y * row + BLOCK_OFFY)
            for row in range(BLOCK_ROWS)
            for col in range(BLOCK_COLS)
        ]

    # -- input ---------------------------------------------------------------
    def handle_event(self, event: pygame.event.Event) -> bool:
        """Route one pygame event; return ``False`` when the player quits."""

        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_SPACE:
                self.platform.fire(self.rng)
            elif event.key in (pygame.K_LEFT, pygame.K_RIGHT):
                self.platform.start_moving(event.key)
        elif event.type == pygame.KEYUP:
            # Releasing any key stops the paddle.
            self.platform.stop_moving()
        return True

    # -- physics -------------------------------------------------------------
    def update(self, elapsed_ms: float = 0) -> None:
        """Advance the game by one tick.

        Collisions are resolved against the projected positions first, then
        both actors commit their movement.
        """

        if self.state is not GameState.PLAYING:
            return

        self.collide_blocks()
        self.collide_platform()
        self.collide_world_bounds()
        self.platform.resolve_world_bounds(self.width)
        self.platform.move()
        self.ball.move()
        self.ball.animate(elapsed_ms)

    def collide_blocks(self) -> None:
        # Every block hit this tick counts, not just the first one.
        for block in self.blocks:
            if block.active and self.ball.intersects(block):
                self.ball.bounce_off_block(block)
                self.add_score()
                self.play_bump()

    def collide_platform(self) -> None:
        if self.ball.intersects(self.platform):
            self.ball.bounce_off_platform(self.platform)
            self.play_bump()

    def collide_world_bounds(self) -> None:
        hit = self.ball.resolve_world_bounds(self.width, self.height)
        if hit is WallHit.WALL:
            self.play_bump()
        elif hit is WallHit.FLOOR:
            self.end(LOSE_MESSAGE)

    def add_score(self) -> None:
        self.score += 1
        logger.debug("Block destroyed, score %d", self.score)
        if self.score >= len(self.blocks):
            self.end(WIN_MESSAGE)

    def play_bump(self) -> None:
        if self.settings.mute or self.assets is None:
            return
        bump = self.assets.sounds.bump
        if bump is not None:
            bump.play()

    def end(self, message: str) -> None:
        """Stop the game with ``message``; only the first call has an effect."""

        if self.state is not GameState.PLAYING:
            return
        self.state = GameState.ENDED
        self.message = message
        logger.info("%s (score %d)", message, self.score)

    # -- rendering -----------------------------------------------------------
    def render(self, surface: Optional[pygame.Surface] = None) -> None:
        """Redraw the whole frame from scratch."""

        if surface is None:
            surface = self.screen
        if surface is None or self.assets is None:
            return
        sprites = self.assets.sprites
        ball = self.ball

        surface.fill(BLACK)
        surface.blit(sprites.background, (0, 0))
        # The ball sprite is a strip of animation frames side by side.
        frame_area = pygame.Rect(ball.frame * ball.width, 0, ball.width, ball.height)
        surface.blit(sprites.ball, ball.rect, frame_area)
        surface.blit(sprites.platform, self.platform.rect)
        for block in self.blocks:
            if block.active:
                surface.blit(sprites.block, block.rect)

        if self.font is None:
            self.font = pygame.font.Font(None, FONT_SIZE)
        hud = self.font.render(f"Score: {self.score}", True, WHITE)
        surface.blit(hud, SCORE_POS)

    # -- main loop -----------------------------------------------------------
    def run(self, clock: pygame.time.Clock) -> Optional[GameState]:
        """Play until the game ends; return ``None`` if the player quits."""

        while self.state is GameState.PLAYING:
            # ``tick`` caps the frame rate and returns the elapsed milliseconds,
            # which drive the ball animation.
            elapsed_ms = clock.tick(self.settings.fps)
            for event in pygame.event.get():
                if not self.handle_event(event):
                    return None

            self.update(elapsed_ms)
            self.render()
            pygame.display.flip()

        return self.state


def end_screen(screen: pygame.Surface, clock: pygame.time.Clock, message: str, fps: int = FPS) -> bool:
    """Block on ``message`` until the player restarts (True) or quits (False)."""

    # Keep the final frame underneath a dimmed overlay.
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 160))
    screen.blit(overlay, (0, 0))

    title_font = pygame.font.Font(None, 72)
    hint_font = pygame.font.Font(None, FONT_SIZE)
    title = title_font.render(message, True, WHITE)
    hint = hint_font.render("Press SPACE or ENTER to play again, ESC to quit", True, WHITE)
    screen.blit(title, title.get_rect(center=(WIDTH // 2, HEIGHT // 2 - 30)))
    screen.blit(hint, hint.get_rect(center=(WIDTH // 2, HEIGHT // 2 + 30)))
    pygame.display.flip()

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    return True
        clock.tick(fps)


def setup_audio(settings: Settings) -> bool:
    """Start the mixer, or shut it down when muted; return whether audio is on."""

    if settings.mute:
        # ``pygame.init`` may already have started it.
        pygame.mixer.quit()
        return False
    return init_mixer()


def play(settings: Settings) -> int:
    """Open the window and play games until the player quits."""

    pygame.display.set_caption(settings.caption)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    setup_audio(settings)

    while True:
        world = World(settings)
        world.initialize(screen)
        preload(settings, world.start)

        result = world.run(clock)
        if result is None:
            break
        if not end_screen(screen, clock, world.message or "", settings.fps):
            break

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Breakout. Clear every block without dropping the ball.")
    parser.add_argument("--fps", type=int, default=FPS, help=f"Frame-rate cap. Default: {FPS}")
    parser.add_argument("--images", default=IMAGE_DIR, help="Directory holding the <name>.png sprites.")
    parser.add_argument("--sounds", default=SOUND_DIR, help="Directory holding the <name>.mp3 sounds.")
    parser.add_argument("--seed", type=int, help="Seed for the launch angle.")
    parser.add_argument("--mute", action="store_true", help="Disable sound effects.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity. Default: WARNING")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = Settings.from_args(args)

    pygame.init()
    try:
        return play(settings)
    except KeyboardInterrupt:
        return 130
    except AssetError as exc:
        logger.error("%s", exc)
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())
