# gpcv/misc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Parameters, priors and miscellaneous utilities for gpcv.

plotutils and toydata are not imported here: the first needs matplotlib,
the second depends on the models.
"""

from . import priors
from . import param
