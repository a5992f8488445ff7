# -*- coding: utf-8 -*-
"""__init__.py for the apprenticeship_irl.utils module

This submodule contains feature mapping helpers and trajectory rollouts.

Copyright 2018 Aaron Snoswell
"""

from .basis import FeatureMapping, gaussian, indicator
from .rollout import Trajectory, rollout

# We want direct access to everything in utils, so add the individual objects
#  to the __all__ list here
__all__ = [
    "FeatureMapping", "gaussian", "indicator",
    "Trajectory", "rollout"
]
