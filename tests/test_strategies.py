import numpy as np

from copsrobbers.core import HEXAGON, PATH2, Algorithm
from copsrobbers.strategies import (
    MenaceCop,
    MenaceRobber,
    RandomCop,
    RandomRobber,
    cop_step_choices,
    decode_cop_start,
    decode_cop_step,
    decode_robber_step,
    make_cop,
    make_robber,
)


def scripted_sampler(choices):
    it = iter(choices)
    return lambda counts: next(it)


def test_random_cop_start_and_step_stay_on_graph():
    cop = RandomCop(HEXAGON, 2, np.random.default_rng(0))
    positions = cop.start()
    assert len(positions) == 2
    assert all(0 <= p < 6 for p in positions)

    single = RandomCop(HEXAGON, 1, np.random.default_rng(2))
    seen = {single.step((0,), 3)[0] for _ in range(200)}
    assert seen == {0, 1, 5}


def test_random_robber_moves_to_neighbour_or_stays():
    robber = RandomRobber(HEXAGON, np.random.default_rng(1))
    seen = {robber.step((0,), 3) for _ in range(200)}
    assert seen == {2, 3, 4}
    assert 0 <= robber.start((0,)) < 6


def test_random_strategies_do_not_learn():
    cop = make_cop(Algorithm.RANDOM, PATH2, 1)
    robber = make_robber("random", PATH2)
    assert not cop.learns and not robber.learns
    cop.end((0,), 0)
    robber.end((0,), 0)
    assert cop.bag_counts(None) is None


def test_mixed_radix_decoding():
    assert decode_cop_start(HEXAGON, 2, 13) == (1, 2)
    # Vertex 0 and 3 each have two neighbours, so each digit is base 3.
    assert decode_cop_step(HEXAGON, (0, 3), 5) == (0, 4)
    assert decode_cop_step(HEXAGON, (0, 3), 0) == (5, 2)
    assert decode_robber_step(HEXAGON, 2, 2) == 2
    assert decode_robber_step(HEXAGON, 2, 0) == 1
    assert cop_step_choices(HEXAGON, (0, 3)) == 9


def test_menace_cop_creates_bags_lazily_with_choice_counts():
    cop = MenaceCop(HEXAGON, 2, sampler=scripted_sampler([7, 4]))
    assert cop.bag_counts(None) is None

    positions = cop.start()
    assert positions == (1, 1)
    assert len(cop.bag_counts(None)) == 36

    cop.step(positions, 4)
    assert len(cop.bag_counts(((1, 1), 4))) == 9
    assert cop.move_log == [(None, 7), (((1, 1), 4), 4)]


def test_menace_cop_orders_positions_as_distinct_states():
    cop = MenaceCop(HEXAGON, 2, sampler=lambda counts: 0)
    cop.step((1, 2), 4)
    cop.step((2, 1), 4)
    assert set(cop.visited_states()) == {((1, 2), 4), ((2, 1), 4)}


def test_menace_cop_reinforces_every_logged_choice_on_win():
    cop = MenaceCop(PATH2, 1, sampler=lambda counts: 0)
    assert cop.start() == (0,)
    assert cop.step((0,), 1) == (1,)

    cop.end((1,), 1)

    assert cop.bag_counts(None).tolist() == [53, 50]
    assert cop.bag_counts(((0,), 1)).tolist() == [53, 50]
    assert cop.move_log == []


def test_menace_cop_penalizes_every_logged_choice_on_loss():
    cop = MenaceCop(PATH2, 1, sampler=lambda counts: 0)
    cop.start()
    cop.step((0,), 1)

    cop.end((1,), 0)

    assert cop.bag_counts(None).tolist() == [49, 50]
    assert cop.bag_counts(((0,), 1)).tolist() == [49, 50]


def test_menace_robber_start_and_step_keys():
    robber = MenaceRobber(PATH2, sampler=scripted_sampler([1, 1]))
    assert robber.start((0,)) == 1
    assert robber.step((0,), 1) == 1

    robber.end((0,), 1)

    assert robber.bag_counts(((0,), None)).tolist() == [50, 53]
    assert robber.bag_counts(((0,), 1)).tolist() == [50, 53]


def test_bag_counts_returns_a_copy():
    cop = MenaceCop(PATH2, 1, sampler=lambda counts: 0)
    cop.start()
    counts = cop.bag_counts(None)
    counts[:] = 0
    assert cop.bag_counts(None).tolist() == [50, 50]


def test_factories_dispatch_on_algorithm_names():
    assert isinstance(make_cop("menace", HEXAGON, 1), MenaceCop)
    assert isinstance(make_robber(Algorithm.MENACE, HEXAGON), MenaceRobber)
    assert isinstance(make_cop("RANDOM", HEXAGON, 1), RandomCop)
