"""
Command-line entry point for Neon Swarm
Opens the arcade window, or plays headless episodes with a random agent.
"""

import argparse
from typing import Any, Dict, List, Optional

from .config import GAME_CONFIG, GameConfig
from .persistence import DEFAULT_HIGH_SCORE_PATH, HighScoreStore


def parse_overrides(pairs: List[str]) -> Dict[str, Any]:
    """Turn ["enemy_rows=5", "time_scaled=true"] into typed config overrides"""
    overrides = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected key=value, got {pair!r}")
        key, raw = pair.split("=", 1)
        key = key.strip()
        raw = raw.strip()
        if raw.lower() in ("true", "false"):
            value: Any = raw.lower() == "true"
        else:
            try:
                value = int(raw)
            except ValueError:
                value = float(raw)
        overrides[key] = value
    return overrides


def build_config(args: argparse.Namespace) -> GameConfig:
    data = parse_overrides(args.set or [])
    if args.time_scaled:
        data["time_scaled"] = True
    return GameConfig.from_dict(data)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Neon Swarm arcade shooter")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run random-agent episodes without a window",
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=1,
        help="Number of headless episodes (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the simulation",
    )
    parser.add_argument(
        "--time-scaled",
        action="store_true",
        help="Scale motion by measured frame time instead of one step per tick",
    )
    parser.add_argument(
        "--high-score-file",
        type=str,
        default=DEFAULT_HIGH_SCORE_PATH,
        help=f"Where the high score is kept (default: {DEFAULT_HIGH_SCORE_PATH})",
    )
    parser.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help=f"Override a config option, e.g. --set enemy_rows=5 (options: {', '.join(GAME_CONFIG)})",
    )
    parser.add_argument(
        "--verbose",
        type=int,
        default=1,
        help="Verbosity level (default: 1)",
    )

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    store = HighScoreStore(args.high_score_file)

    if args.headless:
        from .swarm_env import SwarmEnv

        env = SwarmEnv(config=config, store=store, verbose=args.verbose)
        for episode in range(args.episodes):
            seed = None if args.seed is None else args.seed + episode
            obs, info = env.reset(seed=seed)
            env.action_space.seed(seed)
            done = False
            while not done:
                obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
                done = terminated or truncated
            print(f"Episode {episode + 1}/{args.episodes}: score={info['score']} "
                  f"wave={info['level']} steps={info['step']} high score={info['high_score']}")
        env.close()
        return

    from .window import run_window
    run_window(config, store=store, seed=args.seed, verbose=args.verbose)


if __name__ == "__main__":
    main()
