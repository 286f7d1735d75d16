#!/usr/bin/env python3
"""Compare a MENACE learner against a random player in the same seat."""

import argparse
import json

from copsrobbers.core import Algorithm, GameSettings, Role
from copsrobbers.evaluation import compare_to_baseline


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--graph", default="Hexagon")
    parser.add_argument("--role", choices=["cop", "robber"], default="cop")
    parser.add_argument("--episodes", type=int, default=10_000)
    parser.add_argument("--warmup", type=int, default=0)
    parser.add_argument("--number-of-cops", type=int, default=1)
    parser.add_argument("--number-of-steps", type=int, default=3)
    parser.add_argument("--seed", type=int)
    args = parser.parse_args()

    role = Role.parse(args.role)
    settings = GameSettings(
        graph=args.graph,
        number_of_cops=args.number_of_cops,
        number_of_steps=args.number_of_steps,
        cop=Algorithm.MENACE if role is Role.COP else Algorithm.RANDOM,
        robber=Algorithm.MENACE if role is Role.ROBBER else Algorithm.RANDOM,
        seed=args.seed,
    )
    comparison = compare_to_baseline(
        settings,
        episodes=args.episodes,
        role=role,
        warmup_episodes=args.warmup,
    )

    output = {
        "settings": settings.as_dict(),
        "role": role.value,
        "games": comparison.learner.games_played,
        "learner_winrate": comparison.learner.winrate(role),
        "baseline_winrate": comparison.baseline.winrate(role),
        "improvement": comparison.improvement,
        "learner_average_length": comparison.learner.average_length,
        "baseline_average_length": comparison.baseline.average_length,
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
