#!/usr/bin/env python3
"""Train MENACE strategies by batched self-play and report the learning curve."""

import argparse
import json
from pathlib import Path

import yaml

try:
    from tqdm.auto import trange
except ImportError:
    trange = range

from copsrobbers.core import GameSettings
from copsrobbers.orchestration import SelfPlayTrainer, SelfPlayTrainerConfig


def build_config(args: argparse.Namespace) -> SelfPlayTrainerConfig:
    cfg = {}
    if args.config:
        cfg_path = Path(args.config)
        if cfg_path.exists():
            cfg = yaml.safe_load(cfg_path.read_text()) or {}

    settings_cfg = dict(cfg.get("settings", {}))
    for key in ("graph", "number_of_cops", "number_of_steps", "cop", "robber", "seed"):
        value = getattr(args, key)
        if value is not None:
            settings_cfg[key] = value

    games = args.games if args.games is not None else cfg.get("games_per_iteration", 1000)
    validation_interval = (
        args.validation_interval if args.validation_interval is not None else cfg.get("validation_interval", 0)
    )
    return SelfPlayTrainerConfig(
        settings=GameSettings.from_dict(settings_cfg),
        games_per_iteration=int(games),
        validation_interval=int(validation_interval),
    )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/train.yaml")
    parser.add_argument("--iterations", type=int, default=10)
    parser.add_argument("--games", type=int)
    parser.add_argument("--validation-interval", type=int)
    parser.add_argument("--graph")
    parser.add_argument("--number-of-cops", type=int)
    parser.add_argument("--number-of-steps", type=int)
    parser.add_argument("--cop", choices=["random", "menace"])
    parser.add_argument("--robber", choices=["random", "menace"])
    parser.add_argument("--seed", type=int)
    args = parser.parse_args()

    trainer = SelfPlayTrainer(build_config(args))
    iterator = trange(args.iterations, desc="Iterations") if trange is not range else range(args.iterations)
    for _ in iterator:
        result = trainer.iteration()
        print(json.dumps(result, indent=2))
    print(json.dumps({"learning_curve": trainer.learning_curve()}, indent=2))


if __name__ == "__main__":
    main()
