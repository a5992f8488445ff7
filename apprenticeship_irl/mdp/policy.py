# -*- coding: utf-8 -*-
"""
Policies that can be rolled out in a domain

Copyright 2018 Aaron Snoswell
"""

import numpy as np

from .tabular import as_random_state
from ..utils.rollout import rollout


class Policy:
    """A decision rule mapping states to actions

    Sub-classes implement action_for(). Planners return instances of this
    class, and the apprenticeship learning loop only ever calls evaluate().
    """

    def __init__(self, domain, *, terminal_function=None):
        """Constructor

        Args:
            domain (any): Domain with a step(s, a) -> s' method
            terminal_function (function): Function t(s) -> bool, or None if
                no states are terminal
        """
        self.domain = domain
        self.terminal_function = terminal_function

    def action_for(self, state):
        raise NotImplementedError

    def evaluate(self, initial_state, reward_function, horizon):
        """Roll this policy out from a state

        Args:
            initial_state (any): State to start from
            reward_function (function): R(s, a, s') used to annotate the
                trajectory with rewards, or None
            horizon (int): Maximum number of states in the trajectory

        Returns:
            (Trajectory): The resulting trajectory
        """
        return rollout(
            self.domain,
            initial_state,
            self,
            reward_function=reward_function,
            terminal_function=self.terminal_function,
            max_length=horizon
        )


class RandomPolicy(Policy):
    """Picks uniformly from the actions available in each state"""

    def __init__(self, domain, *, random_state=None, terminal_function=None):
        super().__init__(domain, terminal_function=terminal_function)
        self._random_state = as_random_state(random_state)

    def action_for(self, state):
        actions = self.domain.actions(state)
        return actions[self._random_state.randint(len(actions))]


class GreedyPolicy(Policy):
    """Acts greedily with respect to a table of Q-values Q[s, a]

    Ties are broken in favour of the lowest action index.
    """

    def __init__(self, domain, q_values, *, terminal_function=None):
        super().__init__(domain, terminal_function=terminal_function)
        q_values = np.array(q_values, dtype=float)
        q_values.setflags(write=False)
        self._q_values = q_values

    @property
    def q_values(self):
        return self._q_values

    @property
    def values(self):
        return self._q_values.max(axis=1)

    def action_for(self, state):
        return int(np.argmax(self._q_values[state]))
