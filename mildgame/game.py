"""The game loop: player movement, shooting, enemy waves and rendering."""

from __future__ import annotations

import argparse
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

import pygame

from mildgame.entities import Bullet, Enemy
from mildgame.utils import (
    ACCELERATION,
    ENEMY_SPAWN_INTERVAL,
    FRICTION,
    MAX_SPEED,
    PLAYER_HEIGHT,
    PLAYER_WIDTH,
    GameState,
    draw_background,
    game_over_screen,
    launch_bullet,
    lerp_angle,
    rotate_point,
    spawn_enemies,
)

LIGHTGRAY = (200, 200, 200)
RED = (230, 41, 55)
PURPLE = (112, 31, 126)
ORANGE = (255, 161, 0)
BLACK = (0, 0, 0)
BLUE = (0, 121, 241)

ARROW_SMOOTHING = 0.1
ARROW_SIZE = 15.0
NO_TARGET_RADIUS = 10.0
DIRECTION_MARKER_SIZE = 20.0

Rect = tuple[float, float, float, float]


@dataclass(frozen=True)
class FrameInput:
    """What the player did during one frame."""

    mouse_x: float = 0.0
    mouse_y: float = 0.0
    fire: bool = False
    restart: bool = False
    toggle_dev: bool = False
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _contains(rect: Rect, x: float, y: float) -> bool:
    left, top, width, height = rect
    return left <= x < left + width and top <= y < top + height


def _overlaps(a: Rect, b: Rect) -> bool:
    return (
        a[0] <= b[0] + b[2]
        and a[0] + a[2] >= b[0]
        and a[1] <= b[1] + b[3]
        and a[1] + a[3] >= b[1]
    )


def resolve_collisions(bullets: list[Bullet], enemies: list[Enemy]) -> int:
    """Remove every bullet that hit an enemy, and the enemy it hit.

    Each bullet destroys at most one enemy and each enemy absorbs at most
    one bullet. Both lists are changed in place; the number of kills is
    returned.
    """
    hit_bullets: set[int] = set()
    hit_enemies: set[int] = set()
    for bullet_index, bullet in enumerate(bullets):
        for enemy_index, enemy in enumerate(enemies):
            if enemy_index in hit_enemies:
                continue
            if _contains(enemy.rect(0.0, 0.0), bullet.x, bullet.y):
                hit_bullets.add(bullet_index)
                hit_enemies.add(enemy_index)
                break
    bullets[:] = [b for i, b in enumerate(bullets) if i not in hit_bullets]
    enemies[:] = [e for i, e in enumerate(enemies) if i not in hit_enemies]
    return len(hit_bullets)


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


def _triangle(angle: float, size: float, cx: float, cy: float) -> list[tuple[float, float]]:
    corners = [(0.0, -size / 2), (size, 0.0), (0.0, size / 2)]
    points = []
    for corner in corners:
        rx, ry = rotate_point(corner, angle)
        points.append((rx + cx, ry + cy))
    return points


class Game:
    """State of one running game, advanced frame by frame."""

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        enemy_texture: pygame.Surface | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.enemy_texture = enemy_texture
        self.rng = rng if rng is not None else random.Random()
        self.dev_mode = False
        self.reset()

    def reset(self) -> None:
        """Start a fresh round; developer mode is left as it was."""
        self.state = GameState.PLAYING
        self.elapsed_time = 0.0
        self.world_offset_x = 0.0
        self.world_offset_y = 0.0
        self.vel_x = 0.0
        self.vel_y = 0.0
        self.enemies: list[Enemy] = []
        self.bullets: list[Bullet] = []
        self.arrow_angle = 0.0
        self.kills = 0
        self.spawn_timer = 0.0

    @property
    def player_position(self) -> tuple[float, float]:
        """The player's position on screen: always the centre."""
        return self.screen_width / 2, self.screen_height / 2

    @property
    def player_world_position(self) -> tuple[float, float]:
        """The player's position in world coordinates."""
        px, py = self.player_position
        return px + self.world_offset_x, py + self.world_offset_y

    def player_rect(self) -> Rect:
        """The player's box in screen coordinates."""
        px, py = self.player_position
        return (px - PLAYER_WIDTH / 2, py - PLAYER_HEIGHT / 2, PLAYER_WIDTH, PLAYER_HEIGHT)

    def _steer(self, frame_input: FrameInput) -> None:
        if self.dev_mode:
            if frame_input.up:
                self.vel_y -= ACCELERATION
            if frame_input.down:
                self.vel_y += ACCELERATION
            if frame_input.left:
                self.vel_x -= ACCELERATION
            if frame_input.right:
                self.vel_x += ACCELERATION
            return
        px, py = self.player_position
        dir_x = frame_input.mouse_x - px
        dir_y = frame_input.mouse_y - py
        dist = math.hypot(dir_x, dir_y)
        if dist > 1.0:
            self.vel_x += dir_x / dist * ACCELERATION
            self.vel_y += dir_y / dist * ACCELERATION
        else:
            self.vel_x = _clamp(
                self.vel_x - math.copysign(1.0, self.vel_x) * FRICTION, -MAX_SPEED, MAX_SPEED
            )
            if abs(self.vel_x) < FRICTION:
                self.vel_x = 0.0
            self.vel_y = _clamp(
                self.vel_y - math.copysign(1.0, self.vel_y) * FRICTION, -MAX_SPEED, MAX_SPEED
            )
            if abs(self.vel_y) < FRICTION:
                self.vel_y = 0.0

    def _in_view(self, bullet: Bullet) -> bool:
        return (
            self.world_offset_x <= bullet.x <= self.world_offset_x + self.screen_width
            and self.world_offset_y <= bullet.y <= self.world_offset_y + self.screen_height
        )

    def update(self, dt: float, frame_input: FrameInput) -> None:
        """Advance the game by ``dt`` seconds under the given input."""
        if self.state is GameState.GAME_OVER:
            if frame_input.restart:
                self.reset()
            return

        if frame_input.toggle_dev:
            self.dev_mode = not self.dev_mode
            self.vel_x = 0.0
            self.vel_y = 0.0

        self.spawn_timer += dt
        self.elapsed_time += dt

        px, py = self.player_position
        mouse_world_x = frame_input.mouse_x + self.world_offset_x
        mouse_world_y = frame_input.mouse_y + self.world_offset_y

        self._steer(frame_input)
        self.vel_x = _clamp(self.vel_x, -MAX_SPEED, MAX_SPEED)
        self.vel_y = _clamp(self.vel_y, -MAX_SPEED, MAX_SPEED)
        self.world_offset_x += self.vel_x
        self.world_offset_y += self.vel_y

        if self.spawn_timer >= ENEMY_SPAWN_INTERVAL:
            self.spawn_timer = 0.0
            spawn_enemies(
                self.elapsed_time,
                px,
                py,
                self.world_offset_x,
                self.world_offset_y,
                self.enemies,
                self.enemy_texture,
                self.screen_width,
                self.screen_height,
                self.rng,
            )

        if frame_input.fire:
            launch_bullet(
                mouse_world_x,
                mouse_world_y,
                px,
                py,
                self.world_offset_x,
                self.world_offset_y,
                self.bullets,
            )

        for bullet in self.bullets:
            bullet.update(dt)
        self.bullets[:] = [b for b in self.bullets if self._in_view(b)]

        self.kills += resolve_collisions(self.bullets, self.enemies)

        if not self.dev_mode:
            player = self.player_rect()
            if any(
                _overlaps(player, enemy.rect(self.world_offset_x, self.world_offset_y))
                for enemy in self.enemies
            ):
                self.state = GameState.GAME_OVER

        target_x, target_y = self.player_world_position
        for enemy in self.enemies:
            enemy.update(target_x, target_y, dt)

        closest = self.nearest_enemy()
        if closest is not None:
            target_angle = math.atan2(closest.y - target_y, closest.x - target_x)
            self.arrow_angle = lerp_angle(self.arrow_angle, target_angle, ARROW_SMOOTHING)

    def nearest_enemy(self) -> Enemy | None:
        """The enemy closest to the player, or None when there are none."""
        wx, wy = self.player_world_position
        return min(
            self.enemies,
            key=lambda enemy: math.hypot(enemy.x - wx, enemy.y - wy),
            default=None,
        )

    def draw(
        self,
        surface: pygame.Surface,
        background_texture: pygame.Surface | None,
        fonts: tuple[pygame.font.Font, pygame.font.Font],
    ) -> None:
        """Render the frame; ``fonts`` is ``(big_font, small_font)``."""
        big_font, small_font = fonts
        surface.fill(LIGHTGRAY)
        if background_texture is not None:
            draw_background(surface, background_texture, self.world_offset_x, self.world_offset_y)

        if self.state is GameState.GAME_OVER:
            game_over_screen(surface, big_font, small_font)
            return

        for enemy in self.enemies:
            enemy.draw(surface, self.world_offset_x, self.world_offset_y)
        for bullet in self.bullets:
            bullet.draw(surface, self.world_offset_x, self.world_offset_y)

        left, top, width, height = self.player_rect()
        pygame.draw.rect(surface, RED, pygame.Rect(left, top, width, height))

        _draw_text(
            surface,
            small_font,
            "Move toward mouse pointer, Shoot with Left Mouse Button",
            20.0,
            40.0,
            PURPLE,
        )
        _draw_text(surface, small_font, f"Enemies killed: {self.kills}", 20.0, 70.0, PURPLE)
        if self.dev_mode:
            _draw_text(surface, small_font, "DEV MODE ENABLED", 20.0, 100.0, ORANGE)

        px, py = self.player_position
        marker_y = py - PLAYER_HEIGHT / 2 - 20.0
        if self.enemies:
            pygame.draw.polygon(surface, BLACK, _triangle(self.arrow_angle, ARROW_SIZE, px, marker_y))
        else:
            pygame.draw.circle(surface, BLACK, (px, marker_y), NO_TARGET_RADIUS)

        move_angle = math.atan2(self.vel_y, self.vel_x)
        pygame.draw.polygon(
            surface,
            BLUE,
            _triangle(move_angle, DIRECTION_MARKER_SIZE, 40.0, self.screen_height - 40.0),
        )


def _collect_input() -> tuple[FrameInput, bool]:
    fire = restart = toggle_dev = quit_requested = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            quit_requested = True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKQUOTE:
                toggle_dev = True
            if event.key in (pygame.K_SPACE, pygame.K_RETURN, pygame.K_ESCAPE):
                restart = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            fire = True
            restart = True
    keys = pygame.key.get_pressed()
    mouse_x, mouse_y = pygame.mouse.get_pos()
    frame_input = FrameInput(
        mouse_x=float(mouse_x),
        mouse_y=float(mouse_y),
        fire=fire,
        restart=restart,
        toggle_dev=toggle_dev,
        up=bool(keys[pygame.K_w]),
        down=bool(keys[pygame.K_s]),
        left=bool(keys[pygame.K_a]),
        right=bool(keys[pygame.K_d]),
    )
    return frame_input, quit_requested


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="mildgame", description="A mildly annoying arcade game.")
    parser.add_argument("--background", help="image tiled behind the world")
    parser.add_argument("--enemy-texture", help="image used to draw enemies")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
        pygame.display.set_caption("Game")
        background = pygame.image.load(args.background).convert() if args.background else None
        enemy_texture = (
            pygame.image.load(args.enemy_texture).convert_alpha() if args.enemy_texture else None
        )
        fonts = (pygame.font.Font(None, 48), pygame.font.Font(None, 24))
        game = Game(args.width, args.height, enemy_texture, random.Random())
        clock = pygame.time.Clock()
        while True:
            dt = clock.tick(60) / 1000.0
            frame_input, quit_requested = _collect_input()
            if quit_requested:
                return 0
            game.screen_width, game.screen_height = screen.get_size()
            game.update(dt, frame_input)
            game.draw(screen, background, fonts)
            pygame.display.flip()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())