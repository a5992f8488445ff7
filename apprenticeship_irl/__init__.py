# -*- coding: utf-8 -*-
"""__init__.py for the apprenticeship_irl module

Copyright 2018 Aaron Snoswell
"""

import apprenticeship_irl.utils
import apprenticeship_irl.mdp

from .errors import (
    ApprenticeshipLearningError,
    InvalidInput,
    InconsistentInitialState,
    OptimizationFailure
)
from .feature_expectations import (
    FeatureExpectation,
    FeatureExpectationHistory,
    feature_expectation,
    expert_feature_expectation
)
from .max_margin import WeightSolution, solve_feature_weights
from .reward import LinearRewardFunction, reward_function
from .apprenticeship import (
    STATUS_CONVERGED,
    STATUS_EXHAUSTED,
    LearningResult,
    initial_state,
    apprenticeship_learning
)


__all__ = [
    "utils",
    "mdp",

    "ApprenticeshipLearningError",
    "InvalidInput",
    "InconsistentInitialState",
    "OptimizationFailure",

    "FeatureExpectation",
    "FeatureExpectationHistory",
    "feature_expectation",
    "expert_feature_expectation",

    "WeightSolution",
    "solve_feature_weights",

    "LinearRewardFunction",
    "reward_function",

    "STATUS_CONVERGED",
    "STATUS_EXHAUSTED",
    "LearningResult",
    "initial_state",
    "apprenticeship_learning"
]


# OpenBLAS warning message
openblas_warn_msg = """It looks like you might be using Numpy with OpenBLAS \
on Windows. If your OpenBLAS version is 0.2.0, there is a bug that causes \
np.linalg.inv() to deadlock for matrices larger than 24x24. As a workaround, \
try executing `set OPENBLAS_NUM_THREADS=1` at the command line before \
exexuting any IRL method. Please see \
https://github.com/numpy/numpy/issues/11041#issuecomment-386521546 for more \
information"""


def _check_openblas(config=None, os_name=None, environ=None):
    """Warn if Numpy is using OpenBLAS on Windows

    Args:
        config (dict): Numpy build configuration, as returned by
            np.show_config(mode="dicts"). Queried if not given.
        os_name (str): Operating system name, defaults to os.name
        environ (dict): Environment variables, defaults to os.environ

    Returns:
        (bool): True if a warning was issued
    """
    import os
    import warnings
    import numpy as np

    config = config if config is not None else np.show_config(mode="dicts")
    os_name = os_name if os_name is not None else os.name
    environ = environ if environ is not None else os.environ

    blas = config.get("Build Dependencies", {}).get("blas", {})
    uses_openblas = "openblas" in str(blas.get("name", "")).lower()

    # Check if OPENBLAS_NUM_THREADS=1 already
    if uses_openblas and os_name == "nt" \
            and environ.get("OPENBLAS_NUM_THREADS") != "1":
        warnings.warn(openblas_warn_msg, RuntimeWarning)
        return True

    return False


_check_openblas()
