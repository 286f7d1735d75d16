from copsrobbers.core import HEXAGON, PATH5, Algorithm, Game, GameSettings, Turn
from copsrobbers.orchestration import SelfPlayTrainer, SelfPlayTrainerConfig
from copsrobbers.selfplay import SelfPlayManager, run_games


def test_run_games_counts_finished_games_and_resets():
    game = Game(GameSettings(graph=PATH5, number_of_steps=2, seed=9))
    result = run_games(game, 25)
    assert result.games_played == 25
    assert result.cop_wins + result.robber_wins == 25
    assert game.score.total == 25
    assert game.turn is Turn.COP
    assert game.cop_positions is None
    # A game takes between two and six half-turns with two steps.
    assert 2 * 25 <= result.total_moves <= 6 * 25


def test_run_games_finishes_a_game_already_in_progress():
    game = Game(GameSettings(graph=PATH5, number_of_steps=2, seed=9))
    game.advance()
    result = run_games(game, 1)
    assert result.games_played == 1
    assert game.score.total == 1


def test_self_play_manager_reports_winrates():
    manager = SelfPlayManager(GameSettings(graph=HEXAGON, cop=Algorithm.MENACE, seed=1))
    stats = manager.generate(100)
    assert stats["games_played"] == 100
    assert abs(stats["cop_winrate"] + stats["robber_winrate"] - 1.0) < 1e-9
    assert manager.cop.learns


def test_trainer_iterations_build_learning_curve():
    config = SelfPlayTrainerConfig(
        settings=GameSettings(graph=HEXAGON, number_of_steps=1, cop=Algorithm.MENACE, robber=Algorithm.MENACE, seed=5),
        games_per_iteration=200,
        validation_interval=1,
    )
    trainer = SelfPlayTrainer(config)
    first = trainer.iteration()
    second = trainer.iteration()

    assert first["iteration"] == 1 and second["iteration"] == 2
    assert first["cop_states"] > 0 and first["robber_states"] > 0
    assert second["validated_tables"] == second["cop_states"] + second["robber_states"]
    assert second["total_score"][0] + second["total_score"][1] == 400
    assert len(trainer.learning_curve()) == 2


def test_trainer_state_counts_match_learning_tables():
    config = SelfPlayTrainerConfig(
        settings=GameSettings(graph=HEXAGON, number_of_steps=2, cop=Algorithm.MENACE, robber=Algorithm.RANDOM, seed=8),
        games_per_iteration=100,
    )
    trainer = SelfPlayTrainer(config)
    stats = trainer.iteration()
    assert stats["cop_states"] == len(trainer.game.cop.learning_tables())
    assert stats["robber_states"] == 0
