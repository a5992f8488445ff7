# -*- coding: utf-8 -*-
"""Feature mappings, and various basis function implementations

Copyright 2018 Aaron Snoswell
"""

import math
import numpy as np

from functools import partial

from ..errors import InvalidInput


class FeatureMapping:
    """A feature mapping phi(s) with a fixed output length

    Every call checks the feature vector has length 'dimension', so a
    mis-behaving mapping is caught before it reaches the optimiser.
    """

    def __init__(self, function, dimension):
        """Constructor

        Args:
            function (function): Function taking a state and returning a
                feature vector
            dimension (int): Length F of the feature vectors
        """
        assert dimension > 0, "Invalid feature dimension: {}".format(dimension)
        self._function = function
        self.dimension = int(dimension)

    @classmethod
    def from_basis(cls, basis_functions):
        """Build a feature mapping from a list of scalar basis functions

        Args:
            basis_functions (list): Functions f_i(s) -> float

        Returns:
            (FeatureMapping): phi(s) = [f_0(s), f_1(s), ...]
        """
        basis_functions = list(basis_functions)
        return cls(
            lambda s: [f(s) for f in basis_functions],
            len(basis_functions)
        )

    @classmethod
    def one_hot(cls, num_states):
        """Indicator features for integer states 0 ... num_states-1"""
        return cls(lambda s: np.identity(num_states)[s], num_states)

    def __call__(self, state):
        values = np.asarray(self._function(state), dtype=float)
        if values.shape != (self.dimension, ):
            raise InvalidInput(
                "Feature mapping returned shape {}, expected ({},)".format(
                    values.shape,
                    self.dimension
                )
            )
        return values


def gaussian(mu, sigma):
    """N-D gaussian implementation

    Args:
        mu (numpy array): Mean of the gaussian in N-D space
        sigma (numpy array): N x N Covariance matrix

    Returns:
        (float): A function f(x) that returns the value of the gaussian
            evaluated at x
    """

    mu = np.atleast_1d(np.asarray(mu, dtype=float))
    sigma = np.atleast_2d(np.asarray(sigma, dtype=float))

    # Measure size of space
    k = len(mu)

    # Pre-compute inverse
    sigma_inv = np.linalg.inv(sigma)

    # Pre-compute normalizer
    normalizer = 1.0 / math.sqrt(np.linalg.det(sigma) * (2 * math.pi) ** k)

    # Internal gaussian implementation
    def _gaussian(mu, sigma_inv, normalizer, x):
        d = np.atleast_1d(np.asarray(x, dtype=float)) - mu
        return math.exp(-0.5 * (d @ sigma_inv @ d)) * normalizer

    return partial(_gaussian, mu, sigma_inv, normalizer)


def indicator(position, size):
    """N-D indicator function implementation

    Args:
        position (numpy array): Center of this indicator function in N-D space
        size (numpy array): Size of this indicator function's box in N-D space

    Returns:
        (function): A function f(x) that returns 1 if x is within an
            axis-aligned N-D box located at pos, and size units in every
            dimension, or returns 0 otherwise.
    """

    position = np.asarray(position, dtype=float)
    size = np.asarray(size, dtype=float)

    # Internal indicator function implementation
    def _indicator(position, size, x):
        return float(np.all(abs(position - np.asarray(x)) < size / 2))

    return partial(_indicator, position, size)
