"""
Game configuration for the blaster session, window and environment
"""

# Core gameplay parameters (times in ms, distances in px)
GAME_CONFIG = {
    "player_radius": 10.0,
    "player_bound": 50.0,
    "player_speed": 1.0,           # px per ms of held key
    "shot_speed": 1 / 1.5,         # px per ms
    "particle_speed": 0.5,         # px per ms
    "enemy_speed": 1.0,            # px per frame, toward the player
    "enemy_spawn_interval": 1000.0,
    "shot_interval": 100.0,
    "enemy_radius_min": 5.0,
    "enemy_radius_max": 30.0,
    "spawn_band": 100.0,
    "max_enemies": None,           # None = unlimited
    "hit_shrink": 10.0,            # radius lost per hit
    "min_enemy_radius": 5.0,       # at or below this after a hit, the enemy dies
    "shrink_duration": 500.0,
    "particles_per_radius": 2,
    "particle_max_radius": 3.0,
    "fade_alpha": 26,              # 0.1 opacity black overlay per frame
    "verbose": 1,
}

# Arcade window parameters
WINDOW_CONFIG = {
    "width": 1024,
    "height": 768,
    "title": "Blaster",
    "max_frame_delta": 100.0,      # ms; longer stalls are clamped
    "background": (0, 0, 0),
}

# Gymnasium environment parameters
ENV_CONFIG = {
    "width": 800,
    "height": 600,
    "dt": 1000 / 60,               # ms per step (60 FPS)
    "max_steps": 3600,             # 60 seconds
    "k_enemies": 5,
    "death_penalty": 5.0,
}
