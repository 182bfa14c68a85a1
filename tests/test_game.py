import math
import random

import pygame
import pytest

from mildgame.entities import Bullet, Enemy
from mildgame.game import FrameInput, Game, resolve_collisions
from mildgame.utils import ACCELERATION, ENEMY_SPAWN_INTERVAL, MAX_SPEED, GameState, lerp_angle

CENTER = FrameInput(mouse_x=400.0, mouse_y=300.0)


@pytest.fixture
def game():
    return Game(800, 600, None, random.Random(7))


def test_fresh_game_state(game):
    assert game.state is GameState.PLAYING
    assert game.kills == 0
    assert game.enemies == [] and game.bullets == []
    assert game.player_position == (400.0, 300.0)


def test_resolve_collisions_removes_hit_pair():
    bullets = [Bullet(x=10.0, y=10.0, direction_x=0.0, direction_y=0.0),
               Bullet(x=500.0, y=500.0, direction_x=0.0, direction_y=0.0)]
    enemies = [Enemy(x=0.0, y=0.0)]
    kills = resolve_collisions(bullets, enemies)
    assert kills == 1
    assert enemies == []
    assert [(b.x, b.y) for b in bullets] == [(500.0, 500.0)]


def test_resolve_collisions_one_bullet_one_enemy():
    bullets = [Bullet(x=10.0, y=10.0, direction_x=0.0, direction_y=0.0)]
    enemies = [Enemy(x=0.0, y=0.0), Enemy(x=5.0, y=5.0)]
    assert resolve_collisions(bullets, enemies) == 1
    assert len(enemies) == 1
    assert bullets == []


def test_resolve_collisions_two_bullets_one_enemy():
    bullets = [Bullet(x=10.0, y=10.0, direction_x=0.0, direction_y=0.0),
               Bullet(x=12.0, y=12.0, direction_x=0.0, direction_y=0.0)]
    enemies = [Enemy(x=0.0, y=0.0)]
    assert resolve_collisions(bullets, enemies) == 1
    assert len(bullets) == 1


def test_resolve_collisions_right_edge_is_outside():
    bullets = [Bullet(x=40.0, y=10.0, direction_x=0.0, direction_y=0.0)]
    enemies = [Enemy(x=0.0, y=0.0, width=40.0, height=40.0)]
    assert resolve_collisions(bullets, enemies) == 0
    assert len(bullets) == 1 and len(enemies) == 1


def test_nearest_enemy(game):
    assert game.nearest_enemy() is None
    far = Enemy(x=900.0, y=300.0)
    near = Enemy(x=500.0, y=300.0)
    game.enemies.extend([far, near])
    assert game.nearest_enemy() is near


def test_moving_towards_mouse_accelerates(game):
    game.update(0.01, FrameInput(mouse_x=700.0, mouse_y=300.0))
    assert game.vel_x == pytest.approx(ACCELERATION)
    assert game.vel_y == pytest.approx(0.0)
    assert game.world_offset_x == pytest.approx(ACCELERATION)


def test_speed_is_clamped(game):
    for _ in range(100):
        game.update(0.001, FrameInput(mouse_x=700.0, mouse_y=300.0))
    assert game.vel_x == pytest.approx(MAX_SPEED)


def test_dev_mode_toggle_and_keys(game):
    game.vel_x = 3.0
    game.update(0.001, FrameInput(mouse_x=400.0, mouse_y=300.0, toggle_dev=True))
    assert game.dev_mode
    game.update(0.001, FrameInput(up=True, left=True))
    assert game.vel_x == pytest.approx(-ACCELERATION)
    assert game.vel_y == pytest.approx(-ACCELERATION)


def test_spawn_after_interval(game):
    game.update(ENEMY_SPAWN_INTERVAL, CENTER)
    assert len(game.enemies) == 1
    assert game.spawn_timer == 0.0


def test_fire_launches_bullet(game):
    game.update(0.01, FrameInput(mouse_x=700.0, mouse_y=300.0, fire=True))
    assert len(game.bullets) == 1
    bullet = game.bullets[0]
    assert bullet.direction_x == pytest.approx(1.0)
    assert bullet.direction_y == pytest.approx(0.0)


def test_bullets_leaving_view_are_dropped(game):
    game.bullets.append(Bullet(x=-1000.0, y=300.0, direction_x=0.0, direction_y=0.0))
    game.update(0.01, CENTER)
    assert game.bullets == []


def test_kill_is_counted(game):
    game.enemies.append(Enemy(x=600.0, y=300.0))
    game.bullets.append(Bullet(x=610.0, y=310.0, direction_x=0.0, direction_y=0.0))
    game.update(0.01, CENTER)
    assert game.kills == 1
    assert game.enemies == [] and game.bullets == []


def test_touching_enemy_ends_game(game):
    game.enemies.append(Enemy(x=380.0, y=280.0))
    game.update(0.01, CENTER)
    assert game.state is GameState.GAME_OVER


def test_dev_mode_is_invulnerable(game):
    game.dev_mode = True
    game.enemies.append(Enemy(x=380.0, y=280.0))
    game.update(0.01, FrameInput())
    assert game.state is GameState.PLAYING


def test_restart_after_game_over(game):
    game.state = GameState.GAME_OVER
    game.kills = 5
    game.enemies.append(Enemy(x=0.0, y=0.0))
    game.update(0.01, FrameInput())
    assert game.state is GameState.GAME_OVER
    game.update(0.01, FrameInput(restart=True))
    assert game.state is GameState.PLAYING
    assert game.kills == 0 and game.enemies == []


def test_arrow_turns_towards_enemy(game):
    game.enemies.append(Enemy(x=400.0, y=2000.0))
    game.update(0.0, CENTER)
    wx, wy = game.player_world_position
    enemy = game.enemies[0]
    target = math.atan2(enemy.y - wy, enemy.x - wx)
    assert game.arrow_angle == pytest.approx(lerp_angle(0.0, target, 0.1))
    assert 0.0 < game.arrow_angle < target


def test_draw_player_in_center(game):
    pygame.font.init()
    fonts = (pygame.font.Font(None, 48), pygame.font.Font(None, 24))
    surface = pygame.Surface((800, 600))
    game.draw(surface, None, fonts)
    assert tuple(surface.get_at((400, 300)))[:3] == (230, 41, 55)
    assert tuple(surface.get_at((790, 10)))[:3] == (200, 200, 200)