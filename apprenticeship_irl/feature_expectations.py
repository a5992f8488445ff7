# -*- coding: utf-8 -*-
"""Discounted feature expectations of trajectories

Copyright 2018 Aaron Snoswell
"""

import numpy as np
from concurrent.futures import ThreadPoolExecutor

from .errors import InvalidInput


class FeatureExpectation:
    """An immutable vector of discounted feature sums

    The values are copied on the way in and on the way out, so a
    FeatureExpectation can be shared between components freely.
    """

    __slots__ = ("_values",)

    def __init__(self, values):
        """Constructor

        Args:
            values (numpy array): A 1D vector of length F
        """
        values = np.array(values, dtype=float)
        if values.ndim != 1:
            raise InvalidInput(
                "Feature expectations must be a 1D vector, got shape {}".format(
                    values.shape
                )
            )
        values.setflags(write=False)
        self._values = values

    @property
    def values(self):
        """(numpy array): A copy of the feature expectation vector"""
        return self._values.copy()

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(self._values.tolist())

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._values.copy()
        return self._values.astype(dtype)

    def __eq__(self, other):
        if not isinstance(other, FeatureExpectation):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __hash__(self):
        return hash(tuple(self._values.tolist()))

    def __repr__(self):
        return "FeatureExpectation({})".format(self._values.tolist())


class FeatureExpectationHistory:
    """Append-only sequence of the feature expectations of evaluated policies

    Each entry becomes one linear constraint of the max-margin QP, so entries
    can only ever be appended. All entries must share the same length.
    """

    def __init__(self, entries=()):
        self._entries = []
        for entry in entries:
            self.append(entry)

    @property
    def dimension(self):
        """(int): Length F of the entries, or None if the history is empty"""
        if not self._entries:
            return None
        return len(self._entries[0])

    def append(self, expectation):
        """Add the feature expectation of a newly evaluated policy

        Args:
            expectation (FeatureExpectation): Feature expectation to add. Any
                other vector-like is converted to a FeatureExpectation.
        """
        if not isinstance(expectation, FeatureExpectation):
            expectation = FeatureExpectation(expectation)

        if self._entries and len(expectation) != self.dimension:
            raise InvalidInput(
                "Feature expectation has length {}, history entries have "
                "length {}".format(len(expectation), self.dimension)
            )

        self._entries.append(expectation)

    def as_matrix(self):
        """Stack the history into a fresh (k, F) numpy array"""
        if not self._entries:
            return np.zeros(shape=(0, 0))
        return np.vstack([np.asarray(e) for e in self._entries])

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    def __getitem__(self, index):
        return self._entries[index]

    def __repr__(self):
        return "FeatureExpectationHistory({} entries)".format(len(self))


def trajectory_states(trajectory):
    """Get the sequence of states visited by a trajectory

    Args:
        trajectory (list): Either a list of states, or a Trajectory of
            (s, a, r) tuples as returned by utils.rollout

    Returns:
        (list): The states visited, in order
    """
    states = getattr(trajectory, "states", None)
    if states is not None:
        return list(states)
    return list(trajectory)


def _check_discount(gamma):
    if not 0 < gamma <= 1:
        raise InvalidInput(
            "Discount factor must be in the range (0, 1], was {}".format(gamma)
        )


def _feature_dimension(phi, dimension, states):
    """Work out the length F of the feature vectors returned by phi"""
    if dimension is not None:
        return int(dimension)

    dimension = getattr(phi, "dimension", None)
    if dimension is not None:
        return int(dimension)

    if states:
        return len(np.atleast_1d(np.asarray(phi(states[0]), dtype=float)))

    raise InvalidInput(
        "Can't infer the feature dimension from an empty trajectory - pass "
        "dimension, or use a FeatureMapping"
    )


def _features(phi, state, dimension):
    """Evaluate phi(state), checking the result has length dimension"""
    values = np.asarray(phi(state), dtype=float)
    if values.shape != (dimension, ):
        raise InvalidInput(
            "Feature mapping returned shape {} for state {!r}, expected "
            "({},)".format(values.shape, state, dimension)
        )
    return values


def _discounted_sum(states, phi, gamma, dimension):
    total = np.zeros(dimension)
    for t, state in enumerate(states):
        total += gamma ** t * _features(phi, state, dimension)
    return total


def feature_expectation(trajectory, phi, gamma, *, dimension=None):
    """Compute the discounted feature expectation of a single trajectory

    u = sum_t gamma^t * phi(s_t)

    Args:
        trajectory (list): A list of states, or a Trajectory of (s, a, r)
            tuples
        phi (function): Function taking a state and returning a feature vector
            as a numpy array
        gamma (float): Discount factor in the range (0, 1]

        dimension (int): Length F of the feature vectors. Only needed if the
            trajectory is empty and phi has no 'dimension' attribute.

    Returns:
        (FeatureExpectation): The discounted feature expectation. An empty
            trajectory gives the zero vector.
    """
    _check_discount(gamma)
    states = trajectory_states(trajectory)
    dimension = _feature_dimension(phi, dimension, states)
    return FeatureExpectation(_discounted_sum(states, phi, gamma, dimension))


def expert_feature_expectation(
        trajectories,
        phi,
        gamma,
        *,
        dimension=None,
        n_jobs=1
):
    """Compute the empirical feature expectation of a batch of trajectories

    Each trajectory is discounted from its own first step, and the result is
    the mean over all trajectories.

    Args:
        trajectories (list): A list of expert demonstration trajectories, each
            of which is a list of states or a Trajectory
        phi (function): Function taking a state and returning a feature vector
            as a numpy array
        gamma (float): Discount factor in the range (0, 1]

        dimension (int): Length F of the feature vectors, if it can't be
            inferred from phi or the trajectories
        n_jobs (int): Number of worker threads used to compute the
            per-trajectory sums

    Returns:
        (FeatureExpectation): The averaged discounted feature expectation
    """
    _check_discount(gamma)

    state_sequences = [trajectory_states(t) for t in trajectories]
    if len(state_sequences) == 0:
        raise InvalidInput("At least one expert trajectory is required")

    first_states = next((s for s in state_sequences if s), [])
    dimension = _feature_dimension(phi, dimension, first_states)

    def partial_sum(states):
        return _discounted_sum(states, phi, gamma, dimension)

    if n_jobs > 1 and len(state_sequences) > 1:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            partial_sums = list(executor.map(partial_sum, state_sequences))
    else:
        partial_sums = [partial_sum(states) for states in state_sequences]

    # Merge only once every trajectory has been processed
    return FeatureExpectation(np.mean(np.vstack(partial_sums), axis=0))
