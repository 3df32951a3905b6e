"""
Command line entry point: play in a window, or run headless random episodes
"""

import argparse
from typing import Optional

import numpy as np

from .configs.game_config import ENV_CONFIG, GAME_CONFIG, WINDOW_CONFIG
from .scores import HighScoreStore, default_high_score_path


def play(
    width: int = WINDOW_CONFIG["width"],
    height: int = WINDOW_CONFIG["height"],
    high_score_file: Optional[str] = None,
    seed: Optional[int] = None,
    verbose: int = GAME_CONFIG["verbose"],
):
    """Open the game window and run until it is closed"""
    import arcade
    from .window import GameWindow

    store = HighScoreStore(high_score_file, verbose=verbose)
    session_config = dict(GAME_CONFIG, verbose=verbose)

    GameWindow(width, height, store=store, session_config=session_config, seed=seed)
    arcade.run()


def run_headless(n_episodes: int = 5, seed: Optional[int] = None, high_score_file: Optional[str] = None):
    """
    Play random-policy episodes through BlasterEnv and print a summary.

    Scores only reach the high-score file when one is given explicitly.
    """
    from .env import BlasterEnv
    from .scores import MemoryHighScoreStore

    store = HighScoreStore(high_score_file) if high_score_file else MemoryHighScoreStore()
    env = BlasterEnv(render_mode=None, store=store, **ENV_CONFIG)

    episode_scores = []
    episode_lengths = []

    for episode in range(n_episodes):
        episode_seed = seed + episode if seed is not None else None
        obs, info = env.reset(seed=episode_seed)
        env.action_space.seed(episode_seed)

        terminated = False
        truncated = False
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            steps += 1

        episode_scores.append(info["score"])
        episode_lengths.append(steps)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Score = {info['score']}, Length = {steps}, "
              f"{'game over' if terminated else 'time limit'}")

    env.close()

    print("\n" + "=" * 50)
    print(f"Random Policy Results ({n_episodes} episodes):")
    print(f"Mean Score: {np.mean(episode_scores):.2f} ± {np.std(episode_scores):.2f}")
    print(f"Mean Episode Length: {np.mean(episode_lengths):.1f}")
    print(f"Best Score: {store.load()}")
    print("=" * 50)

    return {
        "mean_score": float(np.mean(episode_scores)),
        "mean_length": float(np.mean(episode_lengths)),
        "episode_scores": episode_scores,
        "episode_lengths": episode_lengths,
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Blaster arcade game")
    parser.add_argument("--width", type=int, default=WINDOW_CONFIG["width"],
                        help=f"Window width (default: {WINDOW_CONFIG['width']})")
    parser.add_argument("--height", type=int, default=WINDOW_CONFIG["height"],
                        help=f"Window height (default: {WINDOW_CONFIG['height']})")
    parser.add_argument("--high-score-file", type=str, default=None,
                        help=f"High score file (default: {default_high_score_path()})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--headless", action="store_true",
                        help="Run random-policy episodes without a window")
    parser.add_argument("--episodes", type=int, default=5,
                        help="Episodes to run with --headless (default: 5)")
    parser.add_argument("--quiet", action="store_true", help="Suppress status output")

    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")

    if args.headless:
        run_headless(args.episodes, seed=args.seed, high_score_file=args.high_score_file)
    else:
        play(args.width, args.height, args.high_score_file, args.seed,
             verbose=0 if args.quiet else GAME_CONFIG["verbose"])


if __name__ == "__main__":
    main()
