"""
Sensor-plane corner generation.

The projected image is modeled on a virtual sensor one unit of distance in
front of the lens along the forward axis. With throw ratio TR:

    sensor_width  = 1 / TR
    sensor_height = sensor_width * 9 / 16

Lens shift moves the image center within that plane:

    shift_x = sensor_width  * H / 100
    shift_y = sensor_height * V / 100
"""

from typing import Tuple

import numpy as np

from .params import LensShift, PROJECTED_ASPECT


def sensor_size(throw_ratio: float) -> Tuple[float, float]:
    """Sensor (width, height) at unit distance for a 16:9 image."""
    width = 1.0 / throw_ratio
    return width, width / PROJECTED_ASPECT


def sensor_corners(throw_ratio: float, lens_shift: LensShift) -> np.ndarray:
    """
    Local (u, v) sensor corners in TL, TR, BR, BL order.

    u runs along the projector's right axis, v along its up axis.

    Args:
        throw_ratio: Throw ratio. Must be > 0; this is not checked here.
        lens_shift: Lens shift in percent.

    Returns:
        np.ndarray: (4, 2) array of [u, v] corners.

    Example:
        >>> sensor_corners(1.0, LensShift())
        array([[-0.5    ,  0.28125],
               [ 0.5    ,  0.28125],
               [ 0.5    , -0.28125],
               [-0.5    , -0.28125]])
    """
    width, height = sensor_size(throw_ratio)
    shift_x = width * (lens_shift.horizontal / 100.0)
    shift_y = height * (lens_shift.vertical / 100.0)

    half_w = width / 2.0
    half_h = height / 2.0

    return np.array([
        [shift_x - half_w, shift_y + half_h],  # TL
        [shift_x + half_w, shift_y + half_h],  # TR
        [shift_x + half_w, shift_y - half_h],  # BR
        [shift_x - half_w, shift_y - half_h],  # BL
    ], dtype=np.float64)
