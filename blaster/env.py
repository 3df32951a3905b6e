"""
BlasterEnv - gymnasium wrapper around a headless GameSession
------------------------------------------------------------
- Fixed timestep (ms per step) instead of display refresh
- Discrete MultiDiscrete action space: [move(5), fire(2), aim(8)]
- Vector observation: player position + top-K nearest enemies
- Reward: points scored this step, minus a penalty on game over

Useful for scripted play, soak tests and agents.

Quick test:
    python -m blaster.env
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .configs.game_config import GAME_CONFIG
from .scores import HighScoreStore, MemoryHighScoreStore
from .session import GameSession
from .surface import NullSurface
from .utils import clamp

# move index -> held key
MOVE_KEYS = [None, "w", "s", "a", "d"]


class BlasterEnv(gym.Env):
    """Blaster game as a gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        dt: float = 1000 / 60,
        max_steps: int = 3600,
        k_enemies: int = 5,
        death_penalty: float = 5.0,
        store: Optional[HighScoreStore] = None,
        session_config: Optional[dict] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unknown render mode: {render_mode}")
        self.render_mode = render_mode

        # Arena
        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps

        self.k_enemies = k_enemies
        self.death_penalty = death_penalty
        self.store = store if store is not None else MemoryHighScoreStore()

        config = dict(GAME_CONFIG if session_config is None else session_config)
        config["verbose"] = 0
        self.session_config = config

        # move: 0 stay, 1 up, 2 down, 3 left, 4 right
        # fire: 0/1
        # aim: 0..7 (8 directions)
        self.action_space = spaces.MultiDiscrete([5, 2, 8])

        # Player: pos(2)
        # Each enemy: rel pos(2) radius(1)
        obs_dim = 2 + self.k_enemies * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._surface = NullSurface()
        self.session: GameSession = None  # type: ignore
        self._step_count = 0
        self._firing = False

        # Precompute aim directions (8-way)
        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        if self.session is not None:
            self.session.stop_timers()

        self.session = GameSession(
            self.width, self.height,
            rng=self.np_random,
            store=self.store,
            **self.session_config,
        )
        self.session.start()
        self._step_count = 0
        self._firing = False

        if self._window is not None:
            self._window.session = self.session

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire, aim = int(action[0]), int(action[1]), int(action[2])

        self._apply_move(move)
        self._apply_fire(fire, aim)

        before = self.session.score
        self.session.frame(self.dt, self._surface)
        reward = float(self.session.score - before)

        terminated = self.session.over
        if terminated:
            reward -= self.death_penalty

        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Action mapping
    # ----------------------------

    def _apply_move(self, move: int):
        for key in MOVE_KEYS[1:]:
            self.session.release_key(key)
        key = MOVE_KEYS[move % len(MOVE_KEYS)]
        if key is not None:
            self.session.press_key(key)

    def _apply_fire(self, fire: int, aim: int):
        player = self.session.player
        dx, dy = self._aim_dirs[aim % 8]
        target = (player.x + dx * 100.0, player.y + dy * 100.0)

        if fire and not self._firing:
            self.session.press_fire(*target)
        elif fire:
            self.session.move_pointer(*target)
        elif self._firing:
            self.session.release_fire()
        self._firing = bool(fire)

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        player = self.session.player
        obs_parts: List[float] = [
            player.x / self.width * 2 - 1,
            player.y / self.height * 2 - 1,
        ]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            self.session.enemies,
            key=lambda e: (e.x - player.x) ** 2 + (e.y - player.y) ** 2
        )
        radius_max = max(1e-6, self.session.enemy_radius_max)
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - player.x) / self.width, -1, 1),
                    clamp((e.y - player.y) / self.height, -1, 1),
                    clamp(e.radius / radius_max, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        info = self.session.info()
        info["step"] = self._step_count
        return info

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # imported here so headless use never needs a display
            from .window import GameWindow
            self._window = GameWindow(self.width, self.height, "Blaster - env",
                                      store=self.store, session=self.session)
        self._window.present()
        return None

    def close(self):
        if self.session is not None:
            self.session.stop_timers()
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = False, seed: Optional[int] = 42) -> Dict[str, Any]:
    """Run one random-policy episode and return its summary"""
    env = BlasterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0
    steps = 0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        steps += 1

    env.close()
    return {"return": total, "length": steps, "score": info["score"], "terminated": terminated}


if __name__ == "__main__":
    summary = run_random_episode(render=True)
    print(f"Random episode return: {summary['return']} "
          f"(score {summary['score']}, {summary['length']} steps)")
