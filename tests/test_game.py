import numpy as np
import pytest

from copsrobbers.core import HEXAGON, PATH2, PATH5, TEMPLATE_GRAPHS, Algorithm, Game, GameSettings, Turn
from copsrobbers.strategies import MenaceCop, MenaceRobber


def scripted_sampler(choices):
    it = iter(choices)
    return lambda counts: next(it)


def play_one(game: Game) -> int:
    """Advance until the game ends; return how many advances it took."""
    advances = 0
    while game.turn is not Turn.OVER:
        game.advance()
        advances += 1
        assert advances <= 2 + 2 * game.number_of_steps
    return advances


def test_new_game_waits_for_cop_placement():
    game = Game(GameSettings(graph=HEXAGON, number_of_steps=4, seed=0))
    assert game.turn is Turn.COP
    assert game.cop_positions is None
    assert game.robber_position is None
    assert game.steps_left == 4
    assert game.score.as_tuple() == (0, 0)


@pytest.mark.parametrize("graph", TEMPLATE_GRAPHS, ids=lambda g: g.name)
@pytest.mark.parametrize("number_of_steps", [0, 1, 3])
@pytest.mark.parametrize("number_of_cops", [1, 2])
def test_every_game_finishes_with_exactly_one_winner(graph, number_of_steps, number_of_cops):
    settings = GameSettings(
        graph=graph,
        number_of_cops=number_of_cops,
        number_of_steps=number_of_steps,
        cop=Algorithm.MENACE,
        robber=Algorithm.RANDOM,
        seed=11,
    )
    game = Game(settings)
    for _ in range(50):
        before = game.score.copy()
        play_one(game)
        gained = (game.score.cop_wins - before.cop_wins, game.score.robber_wins - before.robber_wins)
        assert gained in ((1, 0), (0, 1))
        game.advance()


def test_reset_clears_positions_and_restores_steps():
    game = Game(GameSettings(graph=PATH5, number_of_steps=3, seed=5))
    play_one(game)
    assert game.turn is Turn.OVER
    assert game.cop_positions is not None

    assert game.advance() is Turn.COP
    assert game.cop_positions is None
    assert game.robber_position is None
    assert game.steps_left == 3


def test_path2_single_step_scenario():
    caught_on_placement = 0
    for seed in range(400):
        game = Game(GameSettings(graph=PATH2, number_of_steps=1, seed=seed))
        game.advance()
        game.advance()
        assert game.cop_positions is not None
        assert game.robber_position is not None
        if game.turn is Turn.OVER:
            caught_on_placement += 1
            assert game.score.as_tuple() == (1, 0)
            assert game.robber_position in game.cop_positions
            continue
        assert game.turn is Turn.COP
        assert game.steps_left == 1
        game.advance()
        if game.turn is not Turn.OVER:
            game.advance()
        assert game.turn is Turn.OVER
        assert game.steps_left in (0, 1)
        assert game.score.total == 1
    assert 140 < caught_on_placement < 260


def test_zero_steps_means_robber_wins_after_placement_unless_caught():
    cop = MenaceCop(PATH2, 1, sampler=scripted_sampler([0]))
    robber = MenaceRobber(PATH2, sampler=scripted_sampler([1]))
    game = Game(GameSettings(graph=PATH2, number_of_steps=0), cop=cop, robber=robber)

    game.advance()
    assert game.advance() is Turn.OVER
    assert game.score.as_tuple() == (0, 1)
    assert game.steps_left == 0


def test_cop_capture_on_step_reinforces_cop_and_penalizes_robber():
    cop = MenaceCop(PATH2, 1, sampler=scripted_sampler([0, 0]))
    robber = MenaceRobber(PATH2, sampler=scripted_sampler([1]))
    game = Game(GameSettings(graph=PATH2, number_of_steps=1), cop=cop, robber=robber)

    assert game.advance() is Turn.ROBBER
    assert game.advance() is Turn.COP
    assert game.advance() is Turn.OVER

    assert game.cop_positions == (1,)
    assert game.score.as_tuple() == (1, 0)
    assert cop.bag_counts(None).tolist() == [53, 50]
    assert cop.bag_counts(((0,), 1)).tolist() == [53, 50]
    assert robber.bag_counts(((0,), None)).tolist() == [50, 49]
    assert cop.move_log == [] and robber.move_log == []


def test_robber_survival_penalizes_cop_and_reinforces_robber():
    # Cop starts on 0 then stays; robber starts on 1 then stays.
    cop = MenaceCop(PATH2, 1, sampler=scripted_sampler([0, 1]))
    robber = MenaceRobber(PATH2, sampler=scripted_sampler([1, 1]))
    game = Game(GameSettings(graph=PATH2, number_of_steps=1), cop=cop, robber=robber)

    turns = [game.advance() for _ in range(4)]

    assert turns == [Turn.ROBBER, Turn.COP, Turn.ROBBER, Turn.OVER]
    assert game.score.as_tuple() == (0, 1)
    assert cop.bag_counts(None).tolist() == [49, 50]
    assert cop.bag_counts(((0,), 1)).tolist() == [50, 49]
    assert robber.bag_counts(((0,), None)).tolist() == [50, 53]
    assert robber.bag_counts(((0,), 1)).tolist() == [50, 53]


def test_snapshot_tracks_previous_positions():
    game = Game(GameSettings(graph=HEXAGON, number_of_steps=5, seed=2))
    game.advance()
    game.advance()
    placed = game.snapshot()
    assert placed.previous_cop_positions == placed.cop_positions
    assert placed.previous_robber_position is None
    assert placed.games_played == (1 if placed.turn is Turn.OVER else 0)


def test_robber_turn_without_cops_is_a_contract_violation():
    game = Game(GameSettings(graph=HEXAGON, seed=0))
    game.turn = Turn.ROBBER
    with pytest.raises(RuntimeError):
        game.advance()


def test_from_parts_builds_configured_strategies():
    game = Game.from_parts(HEXAGON, 2, 3, Algorithm.MENACE, Algorithm.RANDOM, seed=4)
    assert isinstance(game.cop, MenaceCop)
    assert game.number_of_cops == 2
    assert len(game.cop.start()) == 2


@pytest.mark.parametrize("kwargs", [{"number_of_cops": 0}, {"number_of_steps": 256}, {"number_of_steps": -1}])
def test_settings_reject_out_of_range_values(kwargs):
    with pytest.raises(ValueError):
        GameSettings(graph=PATH2, **kwargs)


def test_settings_from_dict_accepts_template_names_and_mappings():
    settings = GameSettings.from_dict({"graph": "hexagon", "cop": "Menace", "number_of_steps": 2})
    assert settings.graph is HEXAGON
    assert settings.cop is Algorithm.MENACE
    custom = GameSettings.from_dict({"graph": {"name": "Edge", "number_of_vertices": 2, "edges": [[0, 1]]}})
    assert custom.graph.adjacency == PATH2.adjacency
    assert np.isclose(custom.graph.vertices[0][0], 0.5)


def test_settings_as_dict_round_trips_custom_graphs():
    triangle = {"name": "Triangle", "number_of_vertices": 3, "edges": [[0, 1], [1, 2], [2, 0]]}
    settings = GameSettings.from_dict({"graph": triangle, "number_of_steps": 2, "seed": 3})
    restored = GameSettings.from_dict(settings.as_dict())
    assert restored.graph == settings.graph
    assert restored.as_dict() == settings.as_dict()

    template = GameSettings(graph=HEXAGON, cop=Algorithm.MENACE)
    assert template.as_dict()["graph"] == "Hexagon"
    assert GameSettings.from_dict(template.as_dict()).graph is HEXAGON
