# -*- coding: utf-8 -*-
"""
Finite MDP described by a transition tensor T[s, a, s']

Copyright 2018 Aaron Snoswell
"""

import numpy as np

from ..errors import InvalidInput


def as_random_state(random_state):
    """Turn None, a seed or a RandomState into a numpy RandomState

    Args:
        random_state (any): None for a freshly seeded generator, an int seed,
            or an existing numpy.random.RandomState which is returned as-is

    Returns:
        (numpy.random.RandomState): A random number generator
    """
    if isinstance(random_state, np.random.RandomState):
        return random_state
    return np.random.RandomState(random_state)


class TabularDomain:
    """A finite MDP with integer states and actions

    States are 0 ... n-1 and actions are 0 ... k-1. Transitions are sampled
    from T[s, a, :] using the domain's own random number generator, so rows
    that put all their mass on one state give deterministic steps.
    """

    def __init__(self, transition_tensor, *, random_state=None):
        """Constructor

        Args:
            transition_tensor (numpy array): Transition tensor T[s, a, s']
                indicating the probability of arriving in state s' from state
                s, if you take action a.

            random_state (any): Seed or numpy RandomState used to sample
                transitions
        """
        transition_tensor = np.array(transition_tensor, dtype=float)

        if transition_tensor.ndim != 3 \
                or transition_tensor.shape[0] != transition_tensor.shape[2]:
            raise InvalidInput(
                "Transition tensor must have shape (n, k, n), was {}".format(
                    transition_tensor.shape
                )
            )

        if np.any(transition_tensor < 0) \
                or not np.allclose(transition_tensor.sum(axis=2), 1):
            raise InvalidInput(
                "Each row T[s, a, :] of the transition tensor must be a "
                "probability distribution"
            )

        transition_tensor.setflags(write=False)
        self._transition_tensor = transition_tensor
        self._random_state = as_random_state(random_state)

    @classmethod
    def deterministic(cls, next_states, **kwargs):
        """Build a deterministic domain from a table of successor states

        Args:
            next_states (list): next_states[s][a] is the state reached by
                taking action a in state s

        Returns:
            (TabularDomain): The corresponding domain
        """
        next_states = np.array(next_states, dtype=int)
        n, k = next_states.shape
        transition_tensor = np.zeros(shape=(n, k, n))
        for s in range(n):
            for a in range(k):
                transition_tensor[s, a, next_states[s, a]] = 1
        return cls(transition_tensor, **kwargs)

    @property
    def transition_tensor(self):
        return self._transition_tensor

    @property
    def num_states(self):
        return self._transition_tensor.shape[0]

    @property
    def num_actions(self):
        return self._transition_tensor.shape[1]

    @property
    def states(self):
        return list(range(self.num_states))

    def actions(self, state):
        """The actions available in the given state"""
        return list(range(self.num_actions))

    def step(self, state, action):
        """Sample a successor state

        Args:
            state (int): Current state
            action (int): Action to take

        Returns:
            (int): The next state
        """
        assert 0 <= state < self.num_states, \
            "Invalid state: {}".format(state)
        assert 0 <= action < self.num_actions, \
            "Invalid action: {}".format(action)

        p = self._transition_tensor[state, action, :]
        return int(self._random_state.choice(self.num_states, p=p))
