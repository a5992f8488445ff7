# -*- coding: utf-8 -*-
"""
Simple value iteration implementation

Copyright 2018 Aaron Snoswell
"""

import math
import numpy as np

from .policy import GreedyPolicy


def value_iteration(
        transition_tensor,
        reward_tensor,
        discount,
        *,
        terminal_states=(),
        tol=1e-6,
        max_iterations=1000
):
    """Find the optimal value function of a finite MDP

    Args:
        transition_tensor (numpy array) Transition matrix T[s, a, s']
            indicating the probability of arriving in state s' from state s,
            if you take action a.
        reward_tensor (numpy array): Rewards R[s, a, s'], the same shape as
            the transition tensor
        discount (float): Discount factor to use when computing the value
            function

        terminal_states (list): States that end an episode. Their value is
            fixed at 0.
        tol (float): Stopping tolerance - when no state values change by more
            than this, the value refinement will cease
        max_iterations (int): Maximum iterations, or None to run until
            convergence

    Return:
        (numpy array): Vector of optimal state values V[s]
        (numpy array): Matrix of optimal action values Q[s, a]
    """

    max_iterations = max_iterations if max_iterations is not None else math.inf

    n = transition_tensor.shape[0]
    values = np.zeros(n)
    terminal_states = np.array(list(terminal_states), dtype=int)

    # The expected immediate reward doesn't change between sweeps
    expected_reward = np.sum(transition_tensor * reward_tensor, axis=2)

    # Loop until convergence or max iterations reached
    i = 0
    while True:
        i += 1

        # Apply bellman optimality equation to every state at once
        q_values = expected_reward + discount * transition_tensor @ values
        q_values[terminal_states, :] = 0
        new_values = q_values.max(axis=1)

        delta = np.max(np.abs(new_values - values))
        values = new_values

        # Check termination conditions
        if delta < tol or i >= max_iterations:
            break

    return values, q_values


class ValueIterationPlanner:
    """Planning oracle for TabularDomain instances

    Computes the optimal Q-values for a reward function by value iteration,
    and returns the greedy policy.
    """

    def __init__(self, *, tol=1e-6, max_iterations=1000, verbose=False):
        """Constructor

        Args:
            tol (float): Value iteration stopping tolerance
            max_iterations (int): Maximum value iteration sweeps
            verbose (bool): Show progress information
        """
        self.tol = tol
        self.max_iterations = max_iterations
        self.verbose = verbose

    def plan(
            self,
            domain,
            reward_function,
            terminal_function,
            discount,
            initial_state
    ):
        """Compute an optimal policy for a reward function

        Args:
            domain (TabularDomain): Domain to plan in
            reward_function (function): R(s, a, s') -> float
            terminal_function (function): t(s) -> bool, or None
            discount (float): Discount factor
            initial_state (int): State the policy will be started from. Value
                iteration plans for every state, so this is unused.

        Returns:
            (GreedyPolicy): The greedy policy for the optimal Q-values
        """

        transition_tensor = domain.transition_tensor

        # Tabulate rewards, skipping impossible transitions
        reward_tensor = np.zeros(transition_tensor.shape)
        for s, a, s_prime in zip(*np.nonzero(transition_tensor)):
            reward_tensor[s, a, s_prime] = reward_function(
                int(s),
                int(a),
                int(s_prime)
            )

        terminal_states = []
        if terminal_function is not None:
            terminal_states = [s for s in domain.states if terminal_function(s)]

        if self.verbose:
            print("Planning by value iteration...")

        values, q_values = value_iteration(
            transition_tensor,
            reward_tensor,
            discount,
            terminal_states=terminal_states,
            tol=self.tol,
            max_iterations=self.max_iterations
        )

        if self.verbose:
            print("Done, V =")
            print(values)

        return GreedyPolicy(
            domain,
            q_values,
            terminal_function=terminal_function
        )
