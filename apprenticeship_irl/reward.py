# -*- coding: utf-8 -*-
"""Linear reward functions R(s) = w · phi(s)

Copyright 2018 Aaron Snoswell
"""

import numpy as np


class LinearRewardFunction:
    """A reward function that is linear in the features of a state

    Holds a reference to the feature mapping and a read-only copy of the
    weight vector. Calling it with (s, a, s') gives w · phi(s); the action and
    successor state are accepted so it can be handed to planners that expect
    R(s, a, s'), but they don't affect the reward.
    """

    __slots__ = ("_phi", "_weights")

    def __init__(self, phi, weights):
        """Constructor

        Args:
            phi (function): Function taking a state and returning a feature
                vector as a numpy array
            weights (numpy array): Reward weight vector, the same length as
                the feature vectors
        """
        weights = np.array(weights, dtype=float)
        weights.setflags(write=False)
        self._phi = phi
        self._weights = weights

    @property
    def phi(self):
        """(function): The feature mapping phi(s)"""
        return self._phi

    @property
    def weights(self):
        """(numpy array): A copy of the reward weight vector w"""
        return self._weights.copy()

    def __call__(self, state, action=None, next_state=None):
        return float(np.dot(np.asarray(self._phi(state), dtype=float),
                            self._weights))

    def __repr__(self):
        return "LinearRewardFunction(weights={})".format(
            self._weights.tolist()
        )


def reward_function(phi, solution):
    """Build the reward function for a solution of the max-margin QP

    Args:
        phi (function): Feature mapping
        solution (WeightSolution): Solution returned by solve_feature_weights

    Returns:
        (LinearRewardFunction): R(s) = w · phi(s)
    """
    return LinearRewardFunction(phi, solution.weights)
