import numpy as np
import pytest

from apprenticeship_irl import (
    LinearRewardFunction,
    WeightSolution,
    reward_function,
)


def test_reward_is_dot_product(phi):
    reward = LinearRewardFunction(phi, [0.6, -0.8])
    assert reward("a") == pytest.approx(0.6)
    assert reward("b") == pytest.approx(-0.8)
    assert reward("c") == pytest.approx(0.0)


def test_action_and_successor_are_ignored(phi):
    reward = LinearRewardFunction(phi, [0.6, -0.8])
    assert reward("a", 3, "b") == reward("a")


def test_weights_are_copied(phi):
    weights = np.array([1.0, 0.0])
    reward = LinearRewardFunction(phi, weights)

    weights[0] = -1.0
    reward.weights[1] = 5.0
    assert reward("a") == pytest.approx(1.0)
    assert reward("b") == pytest.approx(0.0)


def test_built_from_solution(phi):
    reward = reward_function(phi, WeightSolution(np.array([0.0, 1.0]), 0.5))
    assert reward("b") == pytest.approx(1.0)
    assert reward.phi is phi


def test_properties_are_documented():
    assert "feature mapping" in LinearRewardFunction.phi.__doc__
    assert "weight vector" in LinearRewardFunction.weights.__doc__
