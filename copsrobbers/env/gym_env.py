from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from copsrobbers.core import Game, GameSettings, Role, Turn
from copsrobbers.features import (
    AUX_VECTOR_SIZE,
    POSITION_CHANNELS,
    build_aux_vector,
    build_position_tensor,
)
from copsrobbers.strategies import (
    MenaceCop,
    MenaceRobber,
    cop_start_choices,
    cop_step_choices,
    robber_start_choices,
    robber_step_choices,
)


class PursuitEnv(gym.Env):
    """One side of the pursuit game as a gymnasium environment.

    Actions are choice indices in the same mixed-radix encoding the MENACE
    learners use; the opponent is played by the strategy named in the
    settings. A learner seat is used for the agent so its moves are recorded
    in ``agent_tables``.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        *,
        role: Role = Role.COP,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or GameSettings()
        self.role = Role.parse(role)
        self.render_mode = render_mode

        graph = self.settings.graph
        n = graph.number_of_vertices
        k = self.settings.number_of_cops
        if self.role is Role.COP:
            max_actions = max(cop_start_choices(graph, k), (graph.max_degree() + 1) ** k)
            self._agent_turn = Turn.COP
        else:
            max_actions = max(n, graph.max_degree() + 1)
            self._agent_turn = Turn.ROBBER

        self.observation_space = spaces.Dict(
            {
                "positions": spaces.Box(
                    low=0.0, high=float(k), shape=(POSITION_CHANNELS, n), dtype=np.float32
                ),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(max_actions)

        self._game: Optional[Game] = None
        self._pending_action: Optional[int] = None
        self.agent_tables = None

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        game = self._game
        # An abandoned game would leave half a move log behind; start afresh.
        between_games = game is not None and (
            game.turn is Turn.OVER or (game.turn is Turn.COP and game.cop_positions is None)
        )
        if seed is not None or not between_games:
            game = self._new_game()
        if game.turn is Turn.OVER:
            game.advance()
        while game.turn is not self._agent_turn:
            game.advance()
        observation = self._build_observation()
        info = self._build_info()
        return observation, info

    def step(self, action_index: int):
        game = self._game
        if game is None or game.turn is Turn.OVER:
            raise RuntimeError("Episode has finished; call reset() first.")
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if not self.legal_action_mask()[action_index]:
            raise ValueError(f"Illegal action {action_index} in the current state.")

        self._pending_action = int(action_index)
        try:
            game.advance()
        finally:
            self._pending_action = None
        while game.turn not in (self._agent_turn, Turn.OVER):
            game.advance()

        terminated = game.turn is Turn.OVER
        reward = self._compute_reward() if terminated else 0.0
        return self._build_observation(), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        game = self._game
        if game is None or game.turn is not self._agent_turn:
            return mask
        mask[: self._legal_count(game)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._render_ascii()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _new_game(self) -> Game:
        graph = self.settings.graph
        seed = int(self.np_random.integers(2**32))
        if self.role is Role.COP:
            agent = MenaceCop(graph, self.settings.number_of_cops, sampler=self._injected_choice)
            game = Game(self.settings, cop=agent, rng=np.random.default_rng(seed))
        else:
            agent = MenaceRobber(graph, sampler=self._injected_choice)
            game = Game(self.settings, robber=agent, rng=np.random.default_rng(seed))
        self.agent_tables = agent
        self._game = game
        return game

    def _injected_choice(self, counts: np.ndarray) -> int:
        if self._pending_action is None:
            raise RuntimeError("agent seat asked to move outside of step()")
        return self._pending_action

    def _legal_count(self, game: Game) -> int:
        graph = game.graph
        if self.role is Role.COP:
            if game.cop_positions is None:
                return cop_start_choices(graph, game.number_of_cops)
            return cop_step_choices(graph, game.cop_positions)
        if game.robber_position is None:
            return robber_start_choices(graph)
        return robber_step_choices(graph, game.robber_position)

    def _compute_reward(self) -> float:
        game = self._game
        cop_won = game.robber_position in game.cop_positions
        agent_won = cop_won if self.role is Role.COP else not cop_won
        return 1.0 if agent_won else -1.0

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {
            "positions": build_position_tensor(self._game),
            "aux": build_aux_vector(self._game),
        }

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "score": self._game.score.as_tuple(),
        }

    def _render_ascii(self) -> str:
        game = self._game
        rows = []
        for vertex, neighbours in enumerate(game.graph.adjacency):
            cops = 0 if game.cop_positions is None else game.cop_positions.count(vertex)
            mark = "C" * cops + ("R" if game.robber_position == vertex else "")
            rows.append(f"{vertex:>3} {mark or '.':<4} -> {' '.join(str(n) for n in neighbours)}")
        return "\n".join(rows)
