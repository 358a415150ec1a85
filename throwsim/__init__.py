"""Projector Throw Simulator: projector-to-wall geometry and keystone correction."""

__version__ = "0.1.0"
__author__ = "Nagarjunan"

from . import geometry
from . import projection
from . import scenes
from . import viz
from . import utils
