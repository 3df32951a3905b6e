"""
GameSession - one round of the blaster arcade game
--------------------------------------------------
- Player circle moved by held W/A/S/D keys, clamped inside the viewport
- Shots fired on a fixed interval while the fire input is held
- Enemies spawn just off-screen every second and chase the player
- Shot hits shrink an enemy (eased) or destroy it for a point
- Particle bursts on every hit
- Touching an enemy ends the round and persists the high score

The session never touches a window: rendering goes through a Surface and
time comes in as per-frame deltas in milliseconds, so it runs the same under
the arcade window, the gymnasium environment and tests.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .entities import Enemy, Particle, Player, Shot, Viewport, WHITE
from .scores import HighScoreStore
from .surface import Surface
from .timers import IntervalTimer
from .utils import circles_collide, make_rng


class GameState(Enum):
    READY = "ready"
    RUNNING = "running"
    OVER = "over"


class GameSession:
    """Mutable game state plus the per-frame driver"""

    def __init__(
        self,
        width: float,
        height: float,
        rng: Optional[np.random.Generator] = None,
        store: Optional[HighScoreStore] = None,
        player_radius: float = 10.0,
        player_bound: float = 50.0,
        player_speed: float = 1.0,
        shot_speed: float = 1 / 1.5,
        particle_speed: float = 0.5,
        enemy_speed: float = 1.0,
        enemy_spawn_interval: float = 1000.0,
        shot_interval: float = 100.0,
        enemy_radius_min: float = 5.0,
        enemy_radius_max: float = 30.0,
        spawn_band: float = 100.0,
        max_enemies: Optional[int] = None,
        hit_shrink: float = 10.0,
        min_enemy_radius: float = 5.0,
        shrink_duration: float = 500.0,
        particles_per_radius: int = 2,
        particle_max_radius: float = 3.0,
        fade_alpha: int = 26,
        verbose: int = 0,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be positive, got {width}x{height}")
        assert enemy_radius_min <= enemy_radius_max, "enemy_radius_min > enemy_radius_max"

        # Everything needed to build an identical fresh session on restart
        self._config: Dict[str, Any] = dict(
            player_radius=player_radius,
            player_bound=player_bound,
            player_speed=player_speed,
            shot_speed=shot_speed,
            particle_speed=particle_speed,
            enemy_speed=enemy_speed,
            enemy_spawn_interval=enemy_spawn_interval,
            shot_interval=shot_interval,
            enemy_radius_min=enemy_radius_min,
            enemy_radius_max=enemy_radius_max,
            spawn_band=spawn_band,
            max_enemies=max_enemies,
            hit_shrink=hit_shrink,
            min_enemy_radius=min_enemy_radius,
            shrink_duration=shrink_duration,
            particles_per_radius=particles_per_radius,
            particle_max_radius=particle_max_radius,
            fade_alpha=fade_alpha,
            verbose=verbose,
        )

        self.viewport = Viewport(width, height)
        self.rng = rng if rng is not None else make_rng()
        self.store = store if store is not None else HighScoreStore(verbose=verbose)
        self.verbose = verbose

        # Gameplay config
        self.player_speed = player_speed
        self.shot_speed = shot_speed
        self.particle_speed = particle_speed
        self.enemy_speed = enemy_speed
        self.enemy_radius_min = enemy_radius_min
        self.enemy_radius_max = enemy_radius_max
        self.spawn_band = spawn_band
        self.max_enemies = max_enemies
        self.hit_shrink = hit_shrink
        self.min_enemy_radius = min_enemy_radius
        self.shrink_duration = shrink_duration
        self.particles_per_radius = particles_per_radius
        self.particle_max_radius = particle_max_radius
        self.fade_alpha = fade_alpha

        # Timers
        self.enemy_timer = IntervalTimer(enemy_spawn_interval, name="enemy-spawn")
        self.shot_timer = IntervalTimer(shot_interval, name="shot")

        # World state
        self.player = Player.centered(self.viewport, radius=player_radius, color=WHITE)
        self.player.bound = player_bound
        self.shots: List[Shot] = []
        self.particles: List[Particle] = []
        self.enemies: List[Enemy] = []

        # Input state
        self.keys_pressed: List[str] = []
        self.aim: Tuple[float, float] = (0.0, 0.0)

        self.score = 0
        self.high_score = self.store.load()
        self.state = GameState.READY
        self.frame_count = 0
        self.elapsed = 0.0

    # ----------------------------
    # Lifecycle
    # ----------------------------

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    @property
    def over(self) -> bool:
        return self.state is GameState.OVER

    def start(self):
        if self.state is not GameState.READY:
            return
        self.state = GameState.RUNNING
        self.enemy_timer.start()
        if self.verbose > 0:
            print(f"[GameSession] Started {self.viewport.width:.0f}x{self.viewport.height:.0f}, "
                  f"best score {self.high_score}")

    def game_over(self) -> int:
        """
        Terminal transition: stop both timers, persist max(stored, score).

        Calling it again is a no-op that returns the same best score.
        """
        if self.state is GameState.OVER:
            return self.high_score

        self.state = GameState.OVER
        self.stop_timers()
        self.high_score = self.store.record(self.score)

        if self.verbose > 0:
            print(f"[GameSession] Game over: score={self.score} best={self.high_score} "
                  f"frames={self.frame_count}")
        return self.high_score

    def restart(self) -> "GameSession":
        """Tear this session down and return a fresh one with the same settings"""
        self.stop_timers()
        if self.state is GameState.RUNNING:
            self.state = GameState.OVER
        return GameSession(
            self.viewport.width,
            self.viewport.height,
            rng=self.rng,
            store=self.store,
            **self._config,
        )

    def stop_timers(self):
        """Cancel both timers; safe to call repeatedly"""
        self.enemy_timer.cancel()
        self.shot_timer.cancel()

    # ----------------------------
    # Input
    # ----------------------------

    def press_key(self, key: str):
        key = key.lower()
        if key not in self.keys_pressed:
            self.keys_pressed.append(key)

    def release_key(self, key: str):
        key = key.lower()
        self.keys_pressed = [k for k in self.keys_pressed if k != key]

    def press_fire(self, x: float, y: float):
        self.aim = (x, y)
        # a second press re-arms instead of stacking another timer
        self.shot_timer.cancel()
        if not self.over:
            self.shot_timer.start()

    def move_pointer(self, x: float, y: float):
        self.aim = (x, y)

    def release_fire(self):
        self.shot_timer.cancel()

    def resize(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be positive, got {width}x{height}")
        self.viewport.width = width
        self.viewport.height = height
        self.player.update(0.0, None, self.viewport)

    # ----------------------------
    # Frame driver
    # ----------------------------

    def frame(self, delta: float, surface: Surface) -> bool:
        """Fade, simulate and draw one display refresh; False once the round is over"""
        if not self.running:
            return False

        surface.fill_rect(0, 0, self.viewport.width, self.viewport.height,
                          (0, 0, 0, self.fade_alpha))
        self.step(delta)
        self.draw(surface)
        return self.running

    def step(self, delta: float) -> bool:
        if delta < 0:
            raise ValueError(f"delta must be >= 0, got {delta}")
        if not self.running:
            return False

        self.elapsed += delta
        self.frame_count += 1

        self._run_timers(delta)
        self._update_shots(delta)
        self._update_particles(delta)
        self._update_player(delta)
        self._update_enemies(delta)
        return self.running

    def draw(self, surface: Surface):
        self.player.draw(surface)
        for shot in self.shots:
            shot.draw(surface)
        for particle in self.particles:
            particle.draw(surface)
        for enemy in self.enemies:
            enemy.draw(surface)

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _run_timers(self, delta: float):
        for _ in range(self.enemy_timer.tick(delta)):
            self.spawn_enemy()
        for _ in range(self.shot_timer.tick(delta)):
            self.spawn_shot()

    def spawn_enemy(self) -> Optional[Enemy]:
        if self.max_enemies is not None and len(self.enemies) >= self.max_enemies:
            return None
        enemy = Enemy.spawn(
            self.rng,
            self.viewport,
            radius_min=self.enemy_radius_min,
            radius_max=self.enemy_radius_max,
            band=self.spawn_band,
        )
        self.enemies.append(enemy)
        return enemy

    def spawn_shot(self) -> Shot:
        shot = Shot.fire(self.player, *self.aim)
        self.shots.append(shot)
        return shot

    def _update_shots(self, delta: float):
        remaining = []
        for shot in self.shots:
            if shot.outside(self.viewport):
                continue
            shot.update(delta * self.shot_speed)
            remaining.append(shot)
        self.shots = remaining

    def _update_particles(self, delta: float):
        remaining = []
        for particle in self.particles:
            particle.update(delta * self.particle_speed)
            if not particle.expired:
                remaining.append(particle)
        self.particles = remaining

    def _update_player(self, delta: float):
        for key in self.keys_pressed:
            self.player.update(delta * self.player_speed, key, self.viewport)

    def _update_enemies(self, delta: float):
        survivors: List[Enemy] = []
        for index, enemy in enumerate(self.enemies):
            enemy.update(delta, self.player, self.enemy_speed)

            if circles_collide(self.player, enemy):
                self.enemies = survivors + self.enemies[index:]
                self.game_over()
                return

            if self._resolve_hits(enemy):
                survivors.append(enemy)

        self.enemies = survivors

    def _resolve_hits(self, enemy: Enemy) -> bool:
        """Apply every shot touching this enemy; returns whether it survives"""
        remaining = []
        alive = True
        for shot in self.shots:
            if not alive or not circles_collide(enemy, shot):
                remaining.append(shot)
                continue

            self._burst(shot, enemy.radius)

            if enemy.radius - self.hit_shrink > self.min_enemy_radius:
                enemy.shrink_to(enemy.radius - self.hit_shrink, self.shrink_duration)
            else:
                alive = False
                self.score += 1

        self.shots = remaining
        return alive

    def _burst(self, shot: Shot, radius: float):
        count = math.ceil(self.particles_per_radius * radius)
        for _ in range(count):
            self.particles.append(
                Particle.burst_from(shot, self.rng, self.viewport, self.particle_max_radius)
            )

    # ----------------------------
    # Info
    # ----------------------------

    def info(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "score": self.score,
            "high_score": self.high_score,
            "num_enemies": len(self.enemies),
            "num_shots": len(self.shots),
            "num_particles": len(self.particles),
            "frame": self.frame_count,
        }
