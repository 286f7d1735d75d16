"""
Background worker that plays a Game for a display layer.

The worker alternates between two kinds of work. When a batch of games has
been requested it plays them back to back while holding the game lock;
otherwise it performs a single half-turn per tick and sleeps so a viewer can
follow along. Callers only ever take the locks briefly, to request more games
or to read a snapshot.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Hashable, Optional

import numpy as np

from copsrobbers.core import Game, GameSettings, GameSnapshot, Graph, Role
from copsrobbers.selfplay import run_games

logger = logging.getLogger(__name__)


@dataclass
class GameRunnerConfig:
    # Pause between ticks of the worker loop, in seconds.
    step_interval: float = 1.0
    thread_name: str = "copsrobbers-game-runner"


class GameRunner:
    def __init__(
        self,
        settings: GameSettings,
        config: Optional[GameRunnerConfig] = None,
        *,
        on_refresh: Optional[Callable[[], None]] = None,
        game: Optional[Game] = None,
    ) -> None:
        self.settings = settings
        self.config = config or GameRunnerConfig()
        self._on_refresh = on_refresh

        # None in the game slot tells the worker to stop.
        self._game: Optional[Game] = game or Game(settings)
        self._game_lock = threading.Lock()
        self._pending_games = 0
        self._batch_lock = threading.Lock()

        self._wake = threading.Event()
        self._error: Optional[BaseException] = None
        self._closed = False
        self._thread: Optional[threading.Thread] = threading.Thread(
            target=self._run,
            name=self.config.thread_name,
            daemon=True,
        )
        self._thread.start()
        logger.debug("started game worker for %s", settings.as_dict())

    @property
    def graph(self) -> Graph:
        return self.settings.graph

    # ------------------------------------------------------------------
    # Caller side
    # ------------------------------------------------------------------
    def request_batch(self, games: int) -> None:
        """Ask the worker to play ``games`` more complete games without pausing.

        Requests accumulate while a batch is running.
        """
        if games <= 0:
            raise ValueError(f"batch size must be positive, got {games}")
        self._ensure_open()
        with self._batch_lock:
            self._pending_games += int(games)
        self._wake.set()

    def pending_games(self) -> int:
        self._raise_worker_error()
        with self._batch_lock:
            return self._pending_games

    def is_batch_pending(self) -> bool:
        return self.pending_games() > 0

    def snapshot(self) -> GameSnapshot:
        self._ensure_open()
        with self._game_lock:
            if self._game is None:
                raise RuntimeError("GameRunner has been shut down.")
            return self._game.snapshot()

    def bag_counts(self, role: Role, key: Hashable) -> Optional[np.ndarray]:
        """Counts learned for ``key`` by the given side, or None if unvisited."""
        role = Role.parse(role)
        self._ensure_open()
        with self._game_lock:
            if self._game is None:
                raise RuntimeError("GameRunner has been shut down.")
            strategy = self._game.cop if role is Role.COP else self._game.robber
            return strategy.bag_counts(key)

    def shutdown(self) -> None:
        """Stop the worker and wait for it to exit.

        Re-raises a failure of the worker thread.
        """
        if self._thread is None:
            return
        with self._game_lock:
            self._game = None
        self._closed = True
        self._wake.set()
        self._thread.join()
        self._thread = None
        logger.debug("game worker stopped")
        if self._error is not None:
            raise RuntimeError("game worker failed") from self._error

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> "GameRunner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("GameRunner has been shut down.")
        self._raise_worker_error()

    def _raise_worker_error(self) -> None:
        # A dead worker never drains pending batches.
        if self._error is not None:
            raise RuntimeError("game worker failed") from self._error

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------
    def _run(self) -> None:
        try:
            while True:
                self._wake.clear()
                if not self._tick():
                    return
                self._notify_refresh()
                self._wake.wait(self.config.step_interval)
        except Exception as exc:
            logger.exception("game worker crashed")
            self._error = exc

    def _tick(self) -> bool:
        """Run one iteration of the worker loop; False once the game is gone."""
        completed_batch = False
        while True:
            with self._batch_lock:
                games = self._pending_games

            if games > 0:
                with self._game_lock:
                    if self._game is None:
                        return False
                    result = run_games(self._game, games)
                with self._batch_lock:
                    self._pending_games -= games
                logger.info(
                    "finished batch of %d games (cop %d, robber %d)",
                    result.games_played,
                    result.cop_wins,
                    result.robber_wins,
                )
                completed_batch = True
            elif completed_batch:
                return True
            else:
                with self._game_lock:
                    if self._game is None:
                        return False
                    self._game.advance()
                return True

    def _notify_refresh(self) -> None:
        if self._on_refresh is not None:
            self._on_refresh()
