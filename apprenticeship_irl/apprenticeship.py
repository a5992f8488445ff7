# -*- coding: utf-8 -*-
"""Apprenticeship learning via IRL by Abbeel and Ng, 2004 (max-margin method)

Copyright 2018 Aaron Snoswell
"""

import numbers
import numpy as np
from collections import namedtuple

from .errors import InvalidInput, InconsistentInitialState
from .feature_expectations import (
    FeatureExpectationHistory,
    expert_feature_expectation,
    feature_expectation,
    trajectory_states
)
from .max_margin import solve_feature_weights
from .reward import reward_function
from .mdp.policy import RandomPolicy


# Termination status enum
STATUS_CONVERGED = "converged"
STATUS_EXHAUSTED = "exhausted"


class LearningResult(namedtuple(
        "LearningResult",
        ["policy", "status", "solution", "history", "iterations"]
)):
    """Outcome of apprenticeship learning

    Attributes:
        policy (Policy): The learned policy
        status (str): STATUS_CONVERGED if the margin fell to epsilon or below,
            STATUS_EXHAUSTED if the iteration budget ran out first
        solution (WeightSolution): The last solution of the max-margin QP, or
            None if no iterations were run
        history (FeatureExpectationHistory): Feature expectations of the
            initial policy and of every planned policy
        iterations (int): Number of completed iterations, each of which
            planned one new policy
    """

    __slots__ = ()

    @property
    def converged(self):
        return self.status == STATUS_CONVERGED


def _states_equal(a, b):
    return bool(np.all(a == b))


def initial_state(trajectories, *, state_equal=None):
    """Find the start state shared by all the expert trajectories

    Trajectories with no states are ignored.

    Args:
        trajectories (list): Expert trajectories

        state_equal (function): Equivalence test eq(s1, s2) -> bool for
            states. Defaults to ==.

    Returns:
        (any): The common initial state
    """

    state_equal = state_equal if state_equal is not None else _states_equal

    start_states = [
        states[0] for states in map(trajectory_states, trajectories) if states
    ]
    if len(start_states) == 0:
        raise InvalidInput("No expert trajectory has an initial state")

    state = start_states[0]
    for other in start_states[1:]:
        if not state_equal(state, other):
            raise InconsistentInitialState(
                "Expert trajectories start from different states: {!r} and "
                "{!r}".format(state, other)
            )

    return state


def _check_parameters(gamma, epsilon, max_iterations):
    if not 0 < gamma <= 1:
        raise InvalidInput(
            "Discount factor must be in the range (0, 1], was {}".format(gamma)
        )
    if not epsilon > 0:
        raise InvalidInput("epsilon must be positive, was {}".format(epsilon))
    if not isinstance(max_iterations, numbers.Integral) \
            or isinstance(max_iterations, bool) or max_iterations < 1:
        raise InvalidInput(
            "max_iterations must be a positive integer, was {!r}".format(
                max_iterations
            )
        )


def apprenticeship_learning(
        domain,
        planner,
        phi,
        trajectories,
        gamma,
        epsilon,
        max_iterations,
        *,
        terminal_function=None,
        state_equal=None,
        initial_policy=None,
        random_state=None,
        solver_options=None,
        verbose=False
):
    """Apprenticeship learning via IRL by Abbeel and Ng, 2004

    Implements the max-margin algorithm of section 3 of 'Apprenticeship
    Learning via Inverse Reinforcement Learning'. Reward weights are
    found by solving a QP against the feature expectations of every policy
    generated so far, a new optimal policy is planned for the resulting
    reward R(s) = w · phi(s), and this repeats until the margin t falls to
    epsilon or below.

    Non-expert policies are rolled out for a horizon equal to the longest
    expert trajectory, counted in states: a horizon of H gives H states and
    H-1 actions.

    Args:
        domain (any): The domain to plan in. Must provide step(s, a) -> s'
            and actions(s) (the latter only if no initial_policy is given).
        planner (any): Planning oracle with a method plan(domain,
            reward_function, terminal_function, discount, initial_state)
            returning a Policy
        phi (function): A function that takes a state and returns a vector of
            features
        trajectories (list): A list of expert demonstration trajectories, each
            of which is a list of states or a Trajectory. All must start from
            the same state.
        gamma (float): Expert discount factor, in (0, 1]
        epsilon (float): Convergence criteria - when the margin t gets to
            this value or below, the algorithm will terminate
        max_iterations (int): Maximum number of policies to plan

        terminal_function (function): t(s) -> bool, or None if no state is
            terminal
        state_equal (function): Equivalence test eq(s1, s2) -> bool used to
            check the expert start states. Defaults to ==.
        initial_policy (Policy): Policy used to seed the algorithm. If not
            given, a RandomPolicy over the domain actions is used.
        random_state (any): Seed or numpy RandomState for the default random
            initial policy
        solver_options (dict): Keyword arguments for solve_feature_weights
        verbose (bool): Show progress information

    Returns:
        (LearningResult): The learned policy, together with how the
            algorithm terminated
    """

    _check_parameters(gamma, epsilon, max_iterations)
    solver_options = dict(solver_options or {})

    trajectories = list(trajectories)
    if len(trajectories) == 0:
        raise InvalidInput("At least one expert trajectory is required")

    start_state = initial_state(trajectories, state_equal=state_equal)

    # Non-expert policies are rolled out as long as the longest demonstration
    horizon = max(len(trajectory_states(t)) for t in trajectories)

    # Compute the emperical feature expectations for the expert's trajectories
    mu_e = expert_feature_expectation(trajectories, phi, gamma)
    k = len(mu_e)

    if verbose:
        print("Apprenticeship learning (max-margin)")
        print(
            "num_trajectories={:d}, num_features={:d}, horizon={:d}, "
            "gamma={:.3f}, epsilon={:.3g}, max_iterations={:d}".format(
                len(trajectories),
                k,
                horizon,
                gamma,
                epsilon,
                max_iterations
            )
        )

    # (1) Pick some initial policy pi^(0) and compute mu^(0)
    policy = initial_policy
    if policy is None:
        policy = RandomPolicy(
            domain,
            random_state=random_state,
            terminal_function=terminal_function
        )

    history = FeatureExpectationHistory()
    history.append(feature_expectation(
        policy.evaluate(start_state, None, horizon),
        phi,
        gamma,
        dimension=k
    ))

    solution = None
    for i in range(max_iterations):

        # (2) Compute t^(i) = max_w min_j w · (mu_e - mu^(j))
        solution = solve_feature_weights(
            mu_e,
            history,
            verbose=verbose,
            **solver_options
        )

        if verbose:
            print("Iteration {:d}: t={:.6g}, w={}".format(
                i,
                solution.score,
                solution.weights
            ))

        # (3) Terminate if t^(i) <= epsilon
        if solution.score <= epsilon:
            if verbose:
                print("Converged after {:d} iteration(s)".format(i))
            return LearningResult(
                policy,
                STATUS_CONVERGED,
                solution,
                history,
                i
            )

        # (4) Compute the optimal policy pi^(i) for R = w^(i) · phi
        reward = reward_function(phi, solution)
        policy = planner.plan(
            domain,
            reward,
            terminal_function,
            gamma,
            start_state
        )

        # (5) Compute mu^(i) = mu(pi^(i))
        history.append(feature_expectation(
            policy.evaluate(start_state, reward, horizon),
            phi,
            gamma,
            dimension=k
        ))

    if verbose:
        print("Stopped after {:d} iteration(s) without converging".format(
            max_iterations
        ))

    return LearningResult(
        policy,
        STATUS_EXHAUSTED,
        solution,
        history,
        max_iterations
    )
