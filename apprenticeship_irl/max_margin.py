# -*- coding: utf-8 -*-
"""Max-margin weight step of apprenticeship learning by Abbeel and Ng, 2004

Copyright 2018 Aaron Snoswell
"""

import numpy as np
from collections import namedtuple
from pprint import pprint
from cvxopt import matrix, solvers

from .errors import InvalidInput, OptimizationFailure


#: A solution of the max-margin QP. 'weights' is the reward weight vector w
#: (with ||w||_2 <= 1) and 'score' is the margin t achieved against every
#: policy in the history.
WeightSolution = namedtuple("WeightSolution", ["weights", "score"])


def _as_vectors(expert, history):
    """Convert the QP inputs to numpy arrays, checking their shapes"""
    mu_e = np.array(expert, dtype=float)
    if mu_e.ndim != 1 or len(mu_e) == 0:
        raise InvalidInput(
            "Expert feature expectation must be a non-empty 1D vector"
        )

    history = [np.array(mu, dtype=float) for mu in history]
    if len(history) == 0:
        raise InvalidInput(
            "The feature expectation history must have at least one entry"
        )

    for j, mu in enumerate(history):
        if mu.shape != mu_e.shape:
            raise InvalidInput(
                "History entry {} has shape {}, expert feature expectation "
                "has shape {}".format(j, mu.shape, mu_e.shape)
            )

    mu_i = np.vstack(history)
    if not (np.all(np.isfinite(mu_e)) and np.all(np.isfinite(mu_i))):
        raise InvalidInput("Feature expectations must be finite")

    return mu_e, mu_i


def _certified(res, certify_tol):
    """Check a cvxopt result is a usable optimum

    cvxopt reports 'unknown' when it stalls before reaching the requested
    tolerances; such a point is still accepted if its residuals and duality
    gap are within certify_tol.
    """
    if res.get("x") is None:
        return False

    if res["status"] == "optimal":
        return True

    if res["status"] != "unknown":
        return False

    def within(key):
        value = res.get(key)
        return value is not None and abs(value) <= certify_tol

    return within("primal infeasibility") \
        and within("dual infeasibility") \
        and (within("gap") or within("relative gap"))


def _tolerance_schedule(abstol, reltol, feastol, certify_tol, factor=10.0):
    """Tolerances to try, tightest first, widening up to certify_tol

    cvxopt's second-order cone scaling can break down (e.g. a math domain
    error in misc.jnrm2) once iterates sit on the cone boundary to within
    about 1e-12. Each widened attempt is a different problem setting, and no
    attempt is looser than certify_tol.
    """
    schedule = []
    tolerances = (abstol, reltol, feastol)
    while True:
        schedule.append(tolerances)
        if max(tolerances) >= certify_tol * (1 - 1e-6):
            return schedule
        tolerances = tuple(min(tol * factor, certify_tol) for tol in tolerances)


def solve_feature_weights(
        expert,
        history,
        *,
        abstol=1e-12,
        reltol=1e-12,
        feastol=1e-12,
        certify_tol=1e-8,
        max_iterations=200,
        verbose=False
):
    """Find the reward weights that best separate the expert from the history

    Solves step (2) of the algorithm in section 3 of 'Apprenticeship Learning
    via Inverse Reinforcement Learning' by Abbeel and Ng, 2004

        max_{t, w}  t
        s.t.        w · mu_e >= w · mu_j + t    for each mu_j in history
                    ||w||_2 <= 1

    Over x = (w_0, ..., w_{F-1}, t) this is

        min -t
        s.t. (mu_j - mu_e, 1) · x <= 0
             ||(x_0, ..., x_{F-1})||_2 <= 1

    which is passed to cvxopt's cone LP solver with one linear block and one
    second-order cone. The norm constraint is the only non-linear one, and
    excludes t.

    If the solver breaks down numerically, or stalls short of the requested
    tolerances, the tolerances are widened ten-fold and the problem is solved
    again, up to certify_tol. A solution is only returned once it is
    certified at the tolerances in use.

    Args:
        expert (FeatureExpectation): The expert's feature expectation mu_e
        history (list): The feature expectations mu_j of all policies
            evaluated so far. Must contain at least one entry. Not modified.

        abstol (float): Absolute duality gap tolerance for the solver
        reltol (float): Relative duality gap tolerance for the solver
        feastol (float): Feasibility tolerance for the solver
        certify_tol (float): Loosest tolerance a solution may be certified
            at. A stalled ('unknown') solution is also accepted when its
            residuals and gap are below this value.
        max_iterations (int): Maximum number of interior point iterations
        verbose (bool): Show progress information

    Returns:
        (WeightSolution): The weights w and the margin t
    """

    mu_e, mu_i = _as_vectors(expert, history)

    # Measure size of feature space and number of constraints
    k = len(mu_e)
    m = mu_i.shape[0]

    if verbose:
        print("Max-margin weight step")
        print("num_features={:d}, num_policies={:d}".format(k, m))

    # The objective is to maximise t, or minimise -t
    c = np.zeros(k + 1)
    c[k] = -1

    # One linear constraint per historical policy
    # (mu_j - mu_e) · w + t <= 0
    G_l = np.hstack((mu_i - mu_e, np.ones(shape=(m, 1))))
    h_l = np.zeros(m)

    # Second order cone constraint ||w||_2 <= 1
    # NB: cvxopt expects h_q - G_q x = (1, w), so G_q has -I in the w block
    # and the t column is left empty
    G_q = np.zeros(shape=(k + 1, k + 1))
    G_q[1:, 0:k] = -1 * np.identity(k)
    h_q = np.zeros(k + 1)
    h_q[0] = 1

    # NB: conelp expects the linear block first, then the cone
    G = np.vstack((G_l, G_q))
    h = np.hstack((h_l, h_q))
    dims = {'l': m, 'q': [k + 1], 's': []}

    res = None
    error = None
    for abstol_i, reltol_i, feastol_i in _tolerance_schedule(
            abstol, reltol, feastol, certify_tol):

        options = dict(
            show_progress=verbose,
            abstol=abstol_i,
            reltol=reltol_i,
            feastol=feastol_i,
            maxiters=max_iterations
        )

        if verbose:
            print("Solving with abstol={:.0e}, reltol={:.0e}, "
                  "feastol={:.0e}...".format(abstol_i, reltol_i, feastol_i))

        try:
            res = solvers.conelp(
                matrix(c),
                matrix(G),
                matrix(h),
                dims,
                options=options
            )
        except (ArithmeticError, ValueError) as e:
            res = None
            error = e
            if verbose:
                print("Solver broke down: {}".format(e))
            continue

        if verbose:
            pprint({key: value for key, value in res.items()
                    if key not in ("x", "s", "y", "z")})

        if _certified(res, certify_tol):
            x = np.array(res["x"]).flatten()
            return WeightSolution(weights=x[0:k], score=float(x[k]))

        # Infeasibility certificates don't go away with looser tolerances
        if res["status"] != "unknown":
            break

    if res is None:
        raise OptimizationFailure(
            "Max-margin QP solver raised an error: {}".format(error)
        ) from error

    raise OptimizationFailure(
        "Max-margin QP was not solved to a certified optimum (status "
        "'{}')".format(res["status"]),
        status=res["status"],
        result=res
    )
