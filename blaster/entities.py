"""
Game entity dataclasses
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .utils import (
    Color,
    aim_angle,
    clamp,
    normalize,
    random_color,
    random_edge_position,
    random_radius,
)

WHITE: Color = (255, 255, 255)

# w/s/a/d in y-down screen coordinates
KEY_DIRECTIONS = {
    "w": (0.0, -1.0),
    "s": (0.0, 1.0),
    "a": (-1.0, 0.0),
    "d": (1.0, 0.0),
}


@dataclass
class Viewport:
    """Size of the drawing surface"""
    width: float
    height: float


@dataclass
class Circle:
    """Drawable circle shared by every entity"""
    x: float
    y: float
    radius: float
    color: Color = WHITE

    def draw(self, surface):
        surface.fill_circle(self.x, self.y, self.radius, self.color)


@dataclass
class Player(Circle):
    """Player-controlled circle, moved by held keys"""
    radius: float = 10.0
    bound: float = 50.0  # margin kept from every viewport edge

    def update(self, delta: float, key: Optional[str], viewport: Viewport):
        dx, dy = KEY_DIRECTIONS.get(key, (0.0, 0.0))
        self.x = clamp(self.x + dx * delta, self.bound, viewport.width - self.bound)
        self.y = clamp(self.y + dy * delta, self.bound, viewport.height - self.bound)

    @classmethod
    def centered(cls, viewport: Viewport, radius: float = 10.0, color: Color = WHITE) -> "Player":
        return cls(x=viewport.width / 2, y=viewport.height / 2, radius=radius, color=color)


@dataclass
class Shot(Circle):
    """Projectile travelling along a fixed angle"""
    angle: float = 0.0

    def update(self, delta: float):
        self.x += math.sin(self.angle) * delta
        self.y += math.cos(self.angle) * delta

    def outside(self, viewport: Viewport) -> bool:
        edge_x = self.x + self.radius
        edge_y = self.y + self.radius
        return (
            edge_x <= 0 or edge_x >= viewport.width
            or edge_y <= 0 or edge_y >= viewport.height
        )

    @classmethod
    def fire(cls, player: Player, target_x: float, target_y: float) -> "Shot":
        """Shot from the player toward a target; the aim is fixed from here on"""
        return cls(
            x=player.x,
            y=player.y,
            radius=player.radius / 2,
            color=player.color,
            angle=aim_angle(player.x, player.y, target_x, target_y),
        )


@dataclass
class Particle(Circle):
    """Fading debris thrown off when a shot hits an enemy"""
    angle: float = 0.0
    alpha: float = 1.0
    radius_decay: float = 0.001
    alpha_decay: float = 0.01

    def update(self, delta: float):
        self.x += math.sin(self.angle) * delta
        self.y += math.cos(self.angle) * delta
        self.radius -= self.radius_decay
        self.alpha -= self.alpha_decay

    @property
    def expired(self) -> bool:
        return self.alpha <= 0 or self.radius <= 0

    def draw(self, surface):
        r, g, b = self.color[:3]
        base = self.color[3] if len(self.color) > 3 else 255
        a = int(round(clamp(self.alpha, 0.0, 1.0) * base))
        surface.fill_circle(self.x, self.y, max(self.radius, 0.0), (r, g, b, a))

    @classmethod
    def burst_from(cls, shot: Shot, rng: np.random.Generator, viewport: Viewport,
                   max_radius: float = 3.0) -> "Particle":
        # aim at a random point on screen so a burst scatters
        target_x = rng.random() * viewport.width
        target_y = rng.random() * viewport.height
        return cls(
            x=shot.x,
            y=shot.y,
            radius=float(rng.random() * max_radius),
            color=shot.color,
            angle=aim_angle(shot.x, shot.y, target_x, target_y),
        )


@dataclass
class ShrinkTween:
    """Eased radius animation (power1.out) over real time in ms"""
    start: float
    target: float
    duration: float = 500.0
    elapsed: float = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration

    def value(self) -> float:
        if self.duration <= 0:
            return self.target
        t = self.elapsed / self.duration
        eased = 1.0 - (1.0 - t) ** 2
        return self.start + (self.target - self.start) * eased

    def advance(self, delta: float) -> float:
        self.elapsed = min(self.duration, self.elapsed + delta)
        return self.value()


@dataclass
class Enemy(Circle):
    """Enemy circle that chases the player"""
    tween: Optional[ShrinkTween] = None

    @property
    def target_radius(self) -> float:
        return self.tween.target if self.tween is not None else self.radius

    def shrink_to(self, target: float, duration: float = 500.0):
        self.tween = ShrinkTween(start=self.radius, target=target, duration=duration)

    def update(self, delta: float, player: Circle, speed: float = 1.0):
        # direction is recomputed every tick so the enemy follows the player
        nx, ny = normalize(player.x - self.x, player.y - self.y)
        self.x += nx * speed
        self.y += ny * speed

        if self.tween is not None:
            self.radius = self.tween.advance(delta)
            if self.tween.done:
                self.tween = None

    @classmethod
    def spawn(
        cls,
        rng: np.random.Generator,
        viewport: Viewport,
        radius_min: float = 5.0,
        radius_max: float = 30.0,
        band: float = 100.0,
    ) -> "Enemy":
        radius = random_radius(rng, radius_min, radius_max)
        color = random_color(rng)
        x, y = random_edge_position(rng, radius, viewport.width, viewport.height, band)
        return cls(x=x, y=y, radius=radius, color=color)
