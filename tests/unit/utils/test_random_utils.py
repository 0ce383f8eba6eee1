import numpy as np

from montyhall.utils.random import MAX_UINT32, make_rng, spawn_seeds


def test_spawn_seeds_deterministic():
    seeds1 = spawn_seeds(5, seed=123)
    seeds2 = spawn_seeds(5, seed=123)
    assert np.array_equal(seeds1, seeds2)
    assert seeds1.dtype == np.uint32


def test_spawn_seeds_range_and_length():
    seeds = spawn_seeds(1000, seed=1)
    assert len(seeds) == 1000
    assert seeds.min() >= 0
    assert seeds.max() < MAX_UINT32


def test_spawn_seeds_differ_between_master_seeds():
    assert not np.array_equal(spawn_seeds(8, seed=1), spawn_seeds(8, seed=2))


def test_make_rng_respects_seed():
    rng1 = make_rng(5)
    rng2 = make_rng(5)
    assert rng1.random() == rng2.random()


def test_make_rng_does_not_touch_global_state():
    np.random.seed(0)
    expected = np.random.random()
    np.random.seed(0)
    make_rng(99).random()
    assert np.random.random() == expected
