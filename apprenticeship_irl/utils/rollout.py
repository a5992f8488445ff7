# -*- coding: utf-8 -*-
"""Roll out a policy to generate trajectories

Copyright 2018 Aaron Snoswell
"""

import math


class Trajectory(list):
    """A list of (s, a, r) tuples

    The final tuple holds the last state visited, with a None action and
    reward.
    """

    @property
    def states(self):
        return [s for s, a, r in self]

    @property
    def actions(self):
        return [a for s, a, r in self[:-1]]

    @property
    def rewards(self):
        return [r for s, a, r in self[:-1]]


def rollout(
        domain,
        start_state,
        policy,
        *,
        reward_function=None,
        terminal_function=None,
        max_length=math.inf
):
    """Roll out a policy to generate (s, a, r) trajectories

    Args:
        domain (any): Domain with a step(s, a) -> s' method
        start_state (any): Starting state for the rollout
        policy (Policy): Policy with an action_for(s) -> a method

        reward_function (function): R(s, a, s') used to fill in the rewards,
            or None to leave them as None
        terminal_function (function): t(s) -> bool, or None if no state is
            terminal
        max_length: Maximum trajectory length, counted in states

    Returns:
        (Trajectory): A single trajectory, as list of (s, a, r) tuples
    """

    trajectory = Trajectory()
    if max_length < 1:
        return trajectory

    state = start_state
    while True:

        # Check exit conditions
        if len(trajectory) + 1 >= max_length \
                or (terminal_function is not None and terminal_function(state)):

            # Append the final state
            trajectory.append((state, None, None))

            break

        # Query the policy for an action, and take it
        action = policy.action_for(state)
        next_state = domain.step(state, action)

        reward = None
        if reward_function is not None:
            reward = reward_function(state, action, next_state)

        # Store the (s, a, r) tuple
        trajectory.append((state, action, reward))
        state = next_state

    return trajectory
