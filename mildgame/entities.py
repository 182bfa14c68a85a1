"""Moving objects of the game world: bullets and enemies."""

from __future__ import annotations

import math
from dataclasses import dataclass

import pygame

WHITE = (255, 255, 255)
_ENEMY_FALLBACK_COLOR = (90, 30, 120)


@dataclass
class Bullet:
    """A projectile travelling in a fixed direction through world space."""

    x: float
    y: float
    direction_x: float
    direction_y: float
    radius: float = 5.0
    speed: float = 500.0
    color: tuple[int, int, int] = WHITE

    def update(self, dt: float) -> None:
        """Advance the bullet along its direction for ``dt`` seconds."""
        self.x += self.direction_x * self.speed * dt
        self.y += self.direction_y * self.speed * dt

    def draw(self, surface: pygame.Surface, offset_x: float, offset_y: float) -> None:
        """Draw the bullet relative to the given world offset."""
        pygame.draw.circle(
            surface,
            self.color,
            (self.x - offset_x, self.y - offset_y),
            self.radius,
        )


@dataclass
class Enemy:
    """An enemy that walks straight towards a target."""

    x: float
    y: float
    width: float = 40.0
    height: float = 40.0
    speed: float = 100.0
    texture: pygame.Surface | None = None

    def update(self, target_x: float, target_y: float, dt: float) -> None:
        """Step towards the target unless already within one unit of it."""
        dx = target_x - self.x
        dy = target_y - self.y
        dist = math.hypot(dx, dy)
        if dist > 1.0:
            self.x += dx / dist * self.speed * dt
            self.y += dy / dist * self.speed * dt

    def rect(self, offset_x: float, offset_y: float) -> tuple[float, float, float, float]:
        """Return ``(left, top, width, height)`` shifted by the given offset."""
        return (self.x - offset_x, self.y - offset_y, self.width, self.height)

    def draw(self, surface: pygame.Surface, offset_x: float, offset_y: float) -> None:
        """Draw the enemy's texture scaled to its size, or a plain box without one."""
        left, top, width, height = self.rect(offset_x, offset_y)
        size = (max(1, round(width)), max(1, round(height)))
        if self.texture is None:
            pygame.draw.rect(surface, _ENEMY_FALLBACK_COLOR, pygame.Rect((left, top), size))
            return
        image = pygame.transform.scale(self.texture, size)
        surface.blit(image, (left, top))