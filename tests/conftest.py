import numpy as np
import pytest

from apprenticeship_irl.mdp import Policy, TabularDomain
from apprenticeship_irl.utils import FeatureMapping


# Feature vectors of the named states used by the scripted tests
FEATURES = {
    "a": [1.0, 0.0],
    "b": [0.0, 1.0],
    "c": [0.0, 0.0],
}


class ScriptedPolicy(Policy):
    """Replays a fixed sequence of states, whatever the reward"""

    def __init__(self, states):
        super().__init__(None)
        self.states = list(states)

    def action_for(self, state):
        return None

    def evaluate(self, initial_state, reward_function, horizon):
        return [initial_state] + self.states[1:horizon]


class ScriptedPlanner:
    """Planning oracle returning pre-determined policies in order"""

    def __init__(self, *policies):
        self.policies = list(policies)
        self.calls = []

    def plan(self, domain, reward_function, terminal_function, discount,
             initial_state):
        self.calls.append((reward_function, discount, initial_state))
        index = min(len(self.calls), len(self.policies)) - 1
        return self.policies[index]


@pytest.fixture
def phi():
    return FeatureMapping(lambda s: FEATURES[s], 2)


@pytest.fixture
def corridor():
    """Five state corridor, action 0 moves left and action 1 moves right"""
    return TabularDomain.deterministic(
        [[max(s - 1, 0), min(s + 1, 4)] for s in range(5)]
    )


@pytest.fixture
def one_hot():
    return FeatureMapping.one_hot(5)


@pytest.fixture
def rng():
    return np.random.RandomState(1234)
