import math

import pytest

from params import ConfigurationError, Params


def test_derived_sizes():
    params = Params(scale=3)

    assert params.color_size == 9
    assert params.size == 27
    assert params.color_count == 729
    assert params.size**2 == params.color_count


def test_max_walk_steps():
    assert Params(scale=2, cycle_cap=1).max_walk_steps == 7
    assert Params(scale=2, cycle_cap=10).max_walk_steps == 79


def test_default_filename():
    assert Params().filename == "img-12-35-0.01-0.2-10-0.png"


def test_filename_uses_shortest_float_form():
    params = Params(scale=2, num_seeds=3, initial_turn_rate=1.0, alpha=0.5, cycle_cap=2, seed=7)

    assert params.filename == "img-2-3-1-0.5-2-7.png"


def test_defaults_are_valid():
    assert Params().validate() == Params()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"scale": 1, "num_seeds": 1},
        {"scale": 17},
        {"scale": 2.0, "num_seeds": 1},
        {"scale": 2, "num_seeds": 0},
        {"scale": 2, "num_seeds": 64},
        {"scale": 2, "num_seeds": -1},
        {"scale": 2, "num_seeds": 1, "cycle_cap": 0},
        {"scale": 2, "num_seeds": 1, "seed": -1},
        {"scale": 2, "num_seeds": 1, "seed": 2**64},
        {"scale": 2, "num_seeds": 1, "alpha": math.nan},
        {"scale": 2, "num_seeds": 1, "initial_turn_rate": math.inf},
        {"scale": 2, "num_seeds": 1, "initial_turn_rate": "0.01"},
        {"scale": 2, "num_seeds": 1, "alpha": -0.1},
        {"scale": 2, "num_seeds": 1, "alpha": -200.0},
        {"scale": 2, "num_seeds": 1, "initial_turn_rate": 1e308},
        {"scale": 2, "num_seeds": 1, "initial_turn_rate": -1e308},
    ],
)
def test_invalid_params_are_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        Params(**kwargs).validate()


def test_highest_seed_count_is_valid():
    Params(scale=2, num_seeds=63).validate()


def test_zero_alpha_and_negative_turn_rate_are_valid():
    Params(scale=2, num_seeds=1, alpha=0.0, initial_turn_rate=-0.5).validate()
