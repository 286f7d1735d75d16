#!/usr/bin/env python3
"""Watch a game play out in the console, optionally fast-forwarding batches first."""

import argparse
import threading
import time
from typing import List

from copsrobbers.core import GameSettings, GameSnapshot, Graph, Turn
from copsrobbers.orchestration import GameRunner, GameRunnerConfig


def format_snapshot(snapshot: GameSnapshot, graph: Graph) -> str:
    cop_wins, robber_wins = snapshot.score
    lines: List[str] = [
        f"{cop_wins} - {robber_wins}  turn: {snapshot.turn.value}  steps left: {snapshot.steps_left}"
    ]
    for vertex, neighbours in enumerate(graph.adjacency):
        cops = 0 if snapshot.cop_positions is None else snapshot.cop_positions.count(vertex)
        mark = "C" * cops
        if snapshot.robber_position == vertex:
            mark += "R"
        lines.append(f"{vertex:>3} {mark or '.':<4} -> {' '.join(str(n) for n in neighbours)}")
    if snapshot.turn is Turn.OVER:
        caught = snapshot.cop_positions is not None and snapshot.robber_position in snapshot.cop_positions
        lines.append("Cops win!" if caught else "Robber escapes!")
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--graph", default="Path2")
    parser.add_argument("--number-of-cops", type=int, default=1)
    parser.add_argument("--number-of-steps", type=int, default=1)
    parser.add_argument("--cop", choices=["random", "menace"], default="random")
    parser.add_argument("--robber", choices=["random", "menace"], default="random")
    parser.add_argument("--batch", type=int, default=0, help="games to fast-forward before watching")
    parser.add_argument("--ticks", type=int, default=20, help="visible half-turns to show")
    parser.add_argument("--interval", type=float, default=1.0)
    parser.add_argument("--seed", type=int)
    args = parser.parse_args()

    settings = GameSettings(
        graph=args.graph,
        number_of_cops=args.number_of_cops,
        number_of_steps=args.number_of_steps,
        cop=args.cop,
        robber=args.robber,
        seed=args.seed,
    )
    refreshed = threading.Semaphore(0)
    runner = GameRunner(
        settings,
        GameRunnerConfig(step_interval=args.interval),
        on_refresh=refreshed.release,
    )
    try:
        if args.batch > 0:
            runner.request_batch(args.batch)
            while runner.is_batch_pending():
                time.sleep(0.1)
            print(f"Fast-forwarded {args.batch} games.")
        for _ in range(args.ticks):
            while not refreshed.acquire(timeout=args.interval + 1.0):
                # Raises once the worker has died.
                runner.pending_games()
            print(format_snapshot(runner.snapshot(), settings.graph))
            print()
    finally:
        runner.shutdown()


if __name__ == "__main__":
    main()
