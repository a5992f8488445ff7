# -*- coding: utf-8 -*-
"""Exceptions raised by the apprenticeship learning methods

Copyright 2018 Aaron Snoswell
"""


class ApprenticeshipLearningError(Exception):
    """Base class for all errors raised by this package"""


class InvalidInput(ApprenticeshipLearningError, ValueError):
    """Raised when arguments are rejected before any optimisation work

    E.g. an empty set of expert trajectories, a discount factor outside
    (0, 1], or a feature mapping returning vectors of inconsistent length.
    """


class InconsistentInitialState(ApprenticeshipLearningError):
    """Raised when the expert trajectories do not share one start state"""


class OptimizationFailure(ApprenticeshipLearningError):
    """Raised when the max-margin QP can't be solved to a certified optimum

    Attributes:
        status (str): Status string reported by the cvxopt solver
        result (dict): Raw result object from the cvxopt solver, or None if
            the solver raised before producing one
    """

    def __init__(self, message, *, status=None, result=None):
        super().__init__(message)
        self.status = status
        self.result = result
