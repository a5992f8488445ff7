# -*- coding: utf-8 -*-
"""A corridor example for max-margin apprenticeship learning

Copyright 2018 Aaron Snoswell
"""

import numpy as np

from apprenticeship_irl import apprenticeship_learning
from apprenticeship_irl.mdp import TabularDomain, ValueIterationPlanner
from apprenticeship_irl.utils import FeatureMapping


# Syntax sugar helpers for actions
ACTION_LEFT = 0
ACTION_RIGHT = 1


def corridor(size):
    """Deterministic corridor where walking off either end leaves you put"""
    return TabularDomain.deterministic([
        [max(s - 1, 0), min(s + 1, size - 1)] for s in range(size)
    ])


def main():

    """
    The expert walks from one end of a corridor to the other and then waits
    there. We recover a reward over one-hot state features and check the
    learned policy does the same.
    """

    size = 6
    domain = corridor(size)
    phi = FeatureMapping.one_hot(size)

    expert_trajectories = [
        list(range(size)) + [size - 1] * 2,
        list(range(size)) + [size - 1] * 4,
    ]

    result = apprenticeship_learning(
        domain,
        ValueIterationPlanner(),
        phi,
        expert_trajectories,
        0.9,
        1e-4,
        20,
        random_state=1,
        verbose=True
    )

    print("Status: {} after {} iteration(s)".format(
        result.status,
        result.iterations
    ))
    print("Reward weights: {}".format(np.round(result.solution.weights, 3)))
    print("Learned trajectory: {}".format(
        result.policy.evaluate(0, None, size + 2).states
    ))


if __name__ == "__main__":

    main()
