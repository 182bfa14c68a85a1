"""Game constants, geometry helpers, spawning and screen drawing."""

from __future__ import annotations

import math
import random
from collections.abc import Iterator
from enum import Enum, auto

import pygame

from mildgame.entities import Bullet, Enemy

ACCELERATION = 0.5
MAX_SPEED = 8.0
FRICTION = 0.2
ENEMY_SPAWN_INTERVAL = 2.0
PLAYER_WIDTH = 50.0
PLAYER_HEIGHT = 50.0

SAFE_DISTANCE = 100.0
SPAWN_MARGIN = 100.0
MAX_EXTRA_ENEMIES = 5

RED = (230, 41, 55)
WHITE = (255, 255, 255)


class GameState(Enum):
    """Whether a round is running or has ended."""

    PLAYING = auto()
    GAME_OVER = auto()


def rotate_point(point: tuple[float, float], angle: float) -> tuple[float, float]:
    """Rotate ``point`` about the origin by ``angle`` radians."""
    x, y = point
    sin = math.sin(angle)
    cos = math.cos(angle)
    return (x * cos - y * sin, x * sin + y * cos)


def lerp_angle(a: float, b: float, t: float) -> float:
    """Move angle ``a`` a fraction ``t`` of the way towards ``b``."""
    delta = math.fmod(b - a + math.pi, math.tau) - math.pi
    return a + delta * t


def background_tiles(
    tex_width: float,
    tex_height: float,
    world_offset_x: float,
    world_offset_y: float,
    screen_width: float,
    screen_height: float,
) -> Iterator[tuple[float, float]]:
    """Yield the screen positions of tiles that cover the screen, row by row."""
    if tex_width <= 0 or tex_height <= 0:
        raise ValueError("texture dimensions must be positive")
    offset_x = -(world_offset_x % tex_width)
    offset_y = -(world_offset_y % tex_height)
    tiles_x = math.ceil(screen_width / tex_width) + 1
    tiles_y = math.ceil(screen_height / tex_height) + 1
    for row in range(tiles_y):
        for column in range(tiles_x):
            yield (offset_x + column * tex_width, offset_y + row * tex_height)


def draw_background(
    surface: pygame.Surface,
    texture: pygame.Surface,
    world_offset_x: float,
    world_offset_y: float,
) -> None:
    """Tile ``texture`` over ``surface``, scrolled by the world offset."""
    tex_width, tex_height = texture.get_size()
    screen_width, screen_height = surface.get_size()
    surface.blits(
        [
            (texture, position)
            for position in background_tiles(
                tex_width,
                tex_height,
                world_offset_x,
                world_offset_y,
                screen_width,
                screen_height,
            )
        ],
        doreturn=False,
    )


def _draw_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    x: float,
    baseline: float,
    color: tuple[int, int, int],
) -> None:
    image = font.render(text, True, color)
    surface.blit(image, (x, baseline - font.get_ascent()))


def game_over_screen(
    surface: pygame.Surface,
    big_font: pygame.font.Font,
    small_font: pygame.font.Font,
) -> None:
    """Draw the game-over banner and the restart hint."""
    width, height = surface.get_size()
    _draw_text(surface, big_font, "GAME OVER", width / 2 - 120.0, height / 2, RED)
    _draw_text(
        surface,
        small_font,
        "Press any key or click to restart",
        width / 2 - 200.0,
        height / 2 + 50.0,
        WHITE,
    )


def _random_spawn_point(
    rng: random.Random,
    player_world_x: float,
    player_world_y: float,
    screen_width: float,
    screen_height: float,
) -> tuple[float, float]:
    half_w = screen_width / 2
    half_h = screen_height / 2
    while True:
        while True:
            x = rng.uniform(player_world_x - half_w - SPAWN_MARGIN, player_world_x + half_w + SPAWN_MARGIN)
            y = rng.uniform(player_world_y - half_h - SPAWN_MARGIN, player_world_y + half_h + SPAWN_MARGIN)
            in_view_x = player_world_x - half_w <= x <= player_world_x + half_w
            in_view_y = player_world_y - half_h <= y <= player_world_y + half_h
            if not (in_view_x and in_view_y):
                break
        if math.hypot(x - player_world_x, y - player_world_y) >= SAFE_DISTANCE:
            return x, y


def spawn_enemies(
    elapsed_time: float,
    player_x: float,
    player_y: float,
    world_offset_x: float,
    world_offset_y: float,
    enemies: list[Enemy],
    enemy_texture: pygame.Surface | None,
    screen_width: float,
    screen_height: float,
    rng: random.Random,
) -> list[Enemy]:
    """Add a wave of enemies just outside the view and return the new ones.

    One enemy is spawned, plus one more for every ten seconds elapsed,
    up to five extra.
    """
    extra = min(math.floor(elapsed_time / 10.0), MAX_EXTRA_ENEMIES)
    count = 1 + max(extra, 0)
    player_world_x = player_x + world_offset_x
    player_world_y = player_y + world_offset_y
    spawned = []
    for _ in range(count):
        x, y = _random_spawn_point(rng, player_world_x, player_world_y, screen_width, screen_height)
        spawned.append(Enemy(x=x, y=y, width=40.0, height=40.0, speed=100.0, texture=enemy_texture))
    enemies.extend(spawned)
    return spawned


def launch_bullet(
    mouse_world_x: float,
    mouse_world_y: float,
    player_x: float,
    player_y: float,
    world_offset_x: float,
    world_offset_y: float,
    bullets: list[Bullet],
) -> Bullet | None:
    """Fire a bullet from the player towards the mouse and return it.

    When the mouse sits exactly on the player there is no direction to
    fire in, and no bullet is made.
    """
    start_x = player_x + world_offset_x
    start_y = player_y + world_offset_y
    dir_x = mouse_world_x - start_x
    dir_y = mouse_world_y - start_y
    length = math.hypot(dir_x, dir_y)
    if length == 0:
        return None
    bullet = Bullet(
        x=start_x,
        y=start_y,
        direction_x=dir_x / length,
        direction_y=dir_y / length,
        radius=5.0,
        speed=500.0,
        color=WHITE,
    )
    bullets.append(bullet)
    return bullet