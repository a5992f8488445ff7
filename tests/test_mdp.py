import numpy as np
import pytest

from apprenticeship_irl import InvalidInput, LinearRewardFunction
from apprenticeship_irl.mdp import (
    GreedyPolicy,
    RandomPolicy,
    TabularDomain,
    ValueIterationPlanner,
    value_iteration,
)
from apprenticeship_irl.utils import rollout


def test_deterministic_domain(corridor):
    assert corridor.num_states == 5
    assert corridor.num_actions == 2
    assert corridor.actions(2) == [0, 1]
    assert corridor.step(0, 0) == 0
    assert corridor.step(2, 1) == 3
    assert corridor.step(4, 1) == 4


def test_stochastic_domain_is_seedable():
    transition_tensor = np.full((3, 1, 3), 1 / 3)
    first = TabularDomain(transition_tensor, random_state=7)
    second = TabularDomain(transition_tensor, random_state=7)
    assert [first.step(0, 0) for _ in range(20)] == \
        [second.step(0, 0) for _ in range(20)]


@pytest.mark.parametrize("transition_tensor", [
    np.zeros((2, 2)),
    np.zeros((2, 1, 3)),
    np.full((2, 1, 2), 0.3),
    np.array([[[1.5, -0.5]], [[0.0, 1.0]]]),
])
def test_domain_rejects_bad_transition_tensor(transition_tensor):
    with pytest.raises(InvalidInput):
        TabularDomain(transition_tensor)


def test_rollout_length_is_horizon(corridor):
    policy = GreedyPolicy(corridor, [[0, 1]] * 5)
    trajectory = rollout(corridor, 0, policy, max_length=7)

    assert len(trajectory) == 7
    assert trajectory.states == [0, 1, 2, 3, 4, 4, 4]
    assert trajectory.actions == [1] * 6
    assert trajectory[-1] == (4, None, None)


def test_rollout_stops_at_terminal_state(corridor):
    policy = GreedyPolicy(corridor, [[0, 1]] * 5)
    trajectory = rollout(
        corridor,
        0,
        policy,
        terminal_function=lambda s: s == 2,
        max_length=10
    )
    assert trajectory.states == [0, 1, 2]


def test_rollout_records_rewards(corridor, one_hot):
    policy = GreedyPolicy(corridor, [[0, 1]] * 5)
    reward = LinearRewardFunction(one_hot, [0, 1, 2, 3, 4])
    trajectory = rollout(
        corridor,
        1,
        policy,
        reward_function=reward,
        max_length=3
    )
    assert trajectory.rewards == [1.0, 2.0]


def test_zero_horizon_rollout_is_empty(corridor):
    policy = GreedyPolicy(corridor, [[0, 1]] * 5)
    assert rollout(corridor, 0, policy, max_length=0) == []


def test_random_policy_is_reproducible(corridor):
    first = RandomPolicy(corridor, random_state=np.random.RandomState(3))
    second = RandomPolicy(corridor, random_state=3)
    assert first.evaluate(0, None, 20).states == \
        second.evaluate(0, None, 20).states


def test_random_policy_uses_available_actions(corridor, rng):
    policy = RandomPolicy(corridor, random_state=rng)
    actions = {policy.action_for(2) for _ in range(50)}
    assert actions == {0, 1}


def test_value_iteration_values(corridor):
    reward_tensor = np.zeros((5, 2, 5))
    reward_tensor[4, :, :] = 1
    values, q_values = value_iteration(
        corridor.transition_tensor,
        reward_tensor,
        0.5,
        tol=1e-10
    )

    np.testing.assert_allclose(values[4], 2.0, atol=1e-8)
    np.testing.assert_allclose(values[3], 1.0, atol=1e-8)
    assert q_values.shape == (5, 2)


def test_value_iteration_terminal_states_have_no_value(corridor):
    reward_tensor = np.ones((5, 2, 5))
    values, _ = value_iteration(
        corridor.transition_tensor,
        reward_tensor,
        0.9,
        terminal_states=[0]
    )
    assert values[0] == 0


def test_planner_heads_for_reward(corridor, one_hot):
    reward = LinearRewardFunction(one_hot, [0, 0, 0, 0, 1])
    policy = ValueIterationPlanner().plan(corridor, reward, None, 0.9, 0)

    assert [policy.action_for(s) for s in range(4)] == [1, 1, 1, 1]
    assert policy.evaluate(0, reward, 6).states == [0, 1, 2, 3, 4, 4]


def test_planner_respects_terminal_function(corridor, one_hot):
    reward = LinearRewardFunction(one_hot, [1, 0, 0, 0, 0.5])
    policy = ValueIterationPlanner().plan(
        corridor,
        reward,
        lambda s: s == 0,
        0.9,
        2
    )

    # State 0 ends the episode, so parking in state 4 is worth more
    assert policy.action_for(3) == 1
    assert policy.terminal_function(0)
