import random

import pygame
import pytest

from breakout_entities import Ball, Block, Platform, WallHit
from breakout_settings import BALL_SIZE, BALL_SPEED, HEIGHT, PLATFORM_SPEED, WIDTH


# ---------------------------------------------------------------------------
# Ball
# ---------------------------------------------------------------------------
def test_launch_sends_ball_up_with_bounded_horizontal_speed():
    ball = Ball()
    ball.launch(random.Random(3))

    assert ball.dy == -BALL_SPEED
    assert -BALL_SPEED <= ball.dx <= BALL_SPEED
    assert isinstance(ball.dx, int)
    assert ball.animating


def test_move_adds_velocity():
    ball = Ball(x=100, y=200, dx=3, dy=-4)
    ball.move()
    assert (ball.x, ball.y) == (103, 196)


def test_move_without_velocity_keeps_position():
    ball = Ball(x=100, y=200)
    ball.move()
    assert (ball.x, ball.y) == (100, 200)


def test_intersects_uses_projected_position():
    block = Block(x=100, y=100, width=50, height=20)
    # Currently touching edge to edge: no overlap yet.
    ball = Ball(x=100, y=60, dx=0, dy=0)
    assert not ball.intersects(block)

    # The next step would overlap, so the hit is reported now.
    ball.dy = 5
    assert ball.intersects(block)


def test_bounce_off_block_flips_vertical_only():
    block = Block(x=0, y=0)
    ball = Ball(dx=4, dy=7)
    ball.bounce_off_block(block)

    assert ball.dy == -7
    assert ball.dx == 4
    assert not block.active


def test_bounce_off_platform_steers_by_contact_point():
    platform = Platform(x=100, y=600, width=200)
    # Ball centred over the left edge of the paddle, moving down.
    ball = Ball(x=100 - BALL_SIZE / 2, y=560, dx=5, dy=BALL_SPEED)
    ball.bounce_off_platform(platform)

    assert ball.dy == -BALL_SPEED
    assert ball.dx == pytest.approx(-BALL_SPEED)


def test_bounce_off_platform_centre_goes_straight_up():
    platform = Platform(x=100, y=600, width=200)
    ball = Ball(x=200 - BALL_SIZE / 2, y=560, dx=7, dy=BALL_SPEED)
    ball.bounce_off_platform(platform)

    assert ball.dx == pytest.approx(0)
    assert ball.dy == -BALL_SPEED


def test_bounce_off_platform_while_rising_only_carries_paddle_motion():
    platform = Platform(x=100, y=600, width=200, dx=15)
    ball = Ball(x=150, y=560, dx=2, dy=-BALL_SPEED)
    ball.bounce_off_platform(platform)

    assert ball.x == 165
    assert (ball.dx, ball.dy) == (2, -BALL_SPEED)


def test_animation_waits_for_launch():
    ball = Ball()
    ball.animate(1000)
    assert ball.frame == 0


def test_animation_advances_per_interval_and_wraps():
    ball = Ball()
    ball.launch(random.Random(0))

    ball.animate(250)
    assert ball.frame == 2
    ball.animate(50)
    assert ball.frame == 3
    ball.animate(100)
    assert ball.frame == 0


@pytest.mark.parametrize(
    "x, y, dx, dy, expected",
    [
        (5, 300, -10, 0, (0, 300, BALL_SPEED, 0)),
        (WIDTH - BALL_SIZE - 5, 300, 10, 0, (WIDTH - BALL_SIZE, 300, -BALL_SPEED, 0)),
        (500, 5, 3, -10, (500, 0, 3, BALL_SPEED)),
    ],
    ids=["left", "right", "top"],
)
def test_walls_push_ball_back(x, y, dx, dy, expected):
    ball = Ball(x=x, y=y, dx=dx, dy=dy)
    assert ball.resolve_world_bounds(WIDTH, HEIGHT) is WallHit.WALL
    assert (ball.x, ball.y, ball.dx, ball.dy) == expected


def test_only_one_wall_is_handled_per_tick():
    ball = Ball(x=5, y=5, dx=-10, dy=-10)
    assert ball.resolve_world_bounds(WIDTH, HEIGHT) is WallHit.WALL

    assert (ball.x, ball.dx) == (0, BALL_SPEED)
    # The top edge waits for the next tick.
    assert (ball.y, ball.dy) == (5, -10)
    ball.move()
    assert ball.resolve_world_bounds(WIDTH, HEIGHT) is WallHit.WALL
    assert (ball.y, ball.dy) == (0, BALL_SPEED)


@pytest.mark.parametrize("x", [0, 300, 640, WIDTH - BALL_SIZE])
def test_floor_is_reported_regardless_of_horizontal_position(x):
    ball = Ball(x=x, y=HEIGHT - BALL_SIZE, dx=0, dy=1)
    assert ball.resolve_world_bounds(WIDTH, HEIGHT) is WallHit.FLOOR
    assert ball.y == HEIGHT - BALL_SIZE


@pytest.mark.parametrize("dx", [-10, -7, -1, 0, 1, 7, 10])
@pytest.mark.parametrize("x", [0, 3, 9, 600, WIDTH - BALL_SIZE - 9, WIDTH - BALL_SIZE])
def test_projected_x_stays_inside_after_correction(x, dx):
    ball = Ball(x=x, y=300, dx=dx, dy=0)
    ball.resolve_world_bounds(WIDTH, HEIGHT)

    projected_x, _ = ball.projected()
    assert 0 <= projected_x <= WIDTH - BALL_SIZE


def test_inside_ball_is_left_alone():
    ball = Ball(x=600, y=300, dx=4, dy=-4)
    assert ball.resolve_world_bounds(WIDTH, HEIGHT) is WallHit.NONE
    assert (ball.x, ball.y, ball.dx, ball.dy) == (600, 300, 4, -4)


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------
def test_fire_launches_held_ball_once():
    ball = Ball()
    platform = Platform(ball=ball)
    rng = random.Random(11)

    platform.fire(rng)
    assert platform.ball is None
    assert ball.dy == -BALL_SPEED
    velocity = (ball.dx, ball.dy)

    platform.fire(rng)
    assert (ball.dx, ball.dy) == velocity


def test_start_and_stop_moving():
    platform = Platform()
    platform.start_moving(pygame.K_LEFT)
    assert platform.dx == -PLATFORM_SPEED
    platform.start_moving(pygame.K_RIGHT)
    assert platform.dx == PLATFORM_SPEED
    platform.stop_moving()
    assert platform.dx == 0


def test_unknown_direction_is_ignored():
    platform = Platform(dx=PLATFORM_SPEED)
    platform.start_moving(pygame.K_UP)
    assert platform.dx == PLATFORM_SPEED


def test_move_carries_held_ball():
    ball = Ball(x=100)
    platform = Platform(x=50, dx=-PLATFORM_SPEED, ball=ball)
    platform.move()

    assert platform.x == 50 - PLATFORM_SPEED
    assert ball.x == 100 - PLATFORM_SPEED


def test_move_leaves_launched_ball_alone():
    ball = Ball(x=100)
    platform = Platform(x=50, dx=PLATFORM_SPEED)
    platform.move()

    assert ball.x == 100


@pytest.mark.parametrize("x, dx", [(5, -PLATFORM_SPEED), (WIDTH - 251 - 5, PLATFORM_SPEED)])
def test_platform_stops_at_the_walls_without_snapping(x, dx):
    platform = Platform(x=x, width=251, dx=dx)
    platform.resolve_world_bounds(WIDTH)

    assert platform.dx == 0
    assert platform.x == x


def test_contact_offset_edges_and_centre():
    platform = Platform(x=100, width=200)
    assert platform.contact_offset(100) == -1
    assert platform.contact_offset(200) == 0
    assert platform.contact_offset(300) == 1


def test_contact_offset_is_monotonic_and_clamped():
    platform = Platform(x=100, width=200)
    offsets = [platform.contact_offset(x) for x in range(40, 361)]

    assert offsets == sorted(offsets)
    assert min(offsets) == -1
    assert max(offsets) == 1


def test_rects_follow_position_and_size():
    assert Block(x=70, y=90).rect == pygame.Rect(70, 90, 111, 39)
    assert Ball(x=10.8, y=20.2).rect == pygame.Rect(10, 20, BALL_SIZE, BALL_SIZE)
    assert Platform(x=300.5, y=675, width=251, height=41).rect == pygame.Rect(300, 675, 251, 41)
