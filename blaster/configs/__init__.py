from .game_config import GAME_CONFIG, WINDOW_CONFIG, ENV_CONFIG

__all__ = ["GAME_CONFIG", "WINDOW_CONFIG", "ENV_CONFIG"]
