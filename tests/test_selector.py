import random
from collections import Counter

from blockfall.game import PieceSelector, TetrominoType
from blockfall.game.selector import INITIAL_WEIGHT


def test_queue_prefilled_to_lookahead():
    sel = PieceSelector(10, lookahead=3, rng=random.Random(1))
    assert len(sel.queue) == 3
    # three draws already bumped three counters
    assert sum(sel.weights) == INITIAL_WEIGHT * 7 + 3


def test_pop_next_returns_front_and_keeps_depth():
    sel = PieceSelector(10, lookahead=3, rng=random.Random(2))
    front = sel.queue[0]
    second = sel.queue[1]
    popped = sel.pop_next()
    assert popped is front
    assert sel.queue[0] is second
    assert len(sel.queue) == 3


def test_queued_pieces_have_own_spawn_position():
    sel = PieceSelector(12, lookahead=4, rng=random.Random(3))
    for piece in sel.queue:
        assert piece.y == 0
        assert piece.x == (12 - piece.layout.shape[1]) // 2
    assert sel.queue[0].layout is not sel.queue[1].layout


def test_select_index_increments_chosen_weight():
    sel = PieceSelector(10, lookahead=1, rng=random.Random(4))
    before = list(sel.weights)
    idx = sel.select_index()
    assert sel.weights[idx] == before[idx] + 1
    assert sum(sel.weights) == sum(before) + 1


def test_weights_never_decrease():
    sel = PieceSelector(10, lookahead=1, rng=random.Random(5))
    previous = list(sel.weights)
    for _ in range(500):
        sel.pop_next()
        assert all(now >= old for now, old in zip(sel.weights, previous))
        previous = list(sel.weights)


def test_long_run_frequencies_near_uniform():
    sel = PieceSelector(10, lookahead=3, rng=random.Random(1234))
    draws = 10_000
    counts = Counter(sel.pop_next().kind for _ in range(draws))
    expected = draws / len(TetrominoType)
    assert set(counts) == set(TetrominoType)
    for kind in TetrominoType:
        assert abs(counts[kind] - expected) < 0.1 * expected


def test_same_seed_same_sequence():
    a = PieceSelector(10, rng=random.Random(99))
    b = PieceSelector(10, rng=random.Random(99))
    assert [a.pop_next().kind for _ in range(50)] == [b.pop_next().kind for _ in range(50)]
