# -*- coding: utf-8 -*-
"""__init__.py for the apprenticeship_irl.mdp module

This submodule contains a reference planning oracle for finite MDPs, and the
policies it produces

Copyright 2018 Aaron Snoswell
"""

from .tabular import TabularDomain, as_random_state
from .policy import Policy, RandomPolicy, GreedyPolicy
from .value_iteration import value_iteration, ValueIterationPlanner

__all__ = [
    "TabularDomain", "as_random_state",
    "Policy", "RandomPolicy", "GreedyPolicy",
    "value_iteration", "ValueIterationPlanner"
]
