"""
Projection Solver Module.

Computes the footprint of a projector's image on the wall plane z = 0 and,
optionally, the keystone-corrected 16:9 rectangle inside it.

Pipeline:
=========

    aim --> orientation (forward, right, up) + display yaw/pitch
        --> sensor corners at unit distance (throw ratio, lens shift)
        --> ray casting onto z = 0                 (may invalidate)
        --> inscribed 16:9 rectangle search        (auto keystone only)
        --> raw / corrected area and efficiency

Efficiency:
-----------
    efficiency = corrected_area / raw_area * 100

It is 0 when auto keystone is off (no corrected image exists) and when the
raw area is 0.

The solver is a pure function: it never raises for geometric conditions and
keeps no state between calls. Failures are reported through
ProjectionResult.is_valid and ProjectionResult.invalid_reason.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..geometry import Point2D, shoelace_area, vertex_centroid
from ..utils.logger import LoggerMixin, get_logger
from .keystone import find_inscribed_rectangle
from .orientation import resolve_orientation
from .params import ProjectorSpec, ScreenSpec, SimulationState
from .raycast import InvalidReason, cast_to_wall
from .sensor import sensor_corners


logger = get_logger("throwsim.solver")

Quad = Tuple[Point2D, Point2D, Point2D, Point2D]

ZERO_QUAD: Quad = (
    Point2D(0.0, 0.0),
    Point2D(0.0, 0.0),
    Point2D(0.0, 0.0),
    Point2D(0.0, 0.0),
)


@dataclass(frozen=True)
class ProjectionResult:
    """
    Result of a projection computation.

    Attributes:
        corners: Raw wall footprint in TL, TR, BR, BL order (zeros if invalid).
        corrected_corners: Keystone-corrected rectangle, None when auto
            keystone is off or the result is invalid.
        yaw: Display yaw in degrees.
        pitch: Display pitch in degrees.
        coverage: 100 when valid, 0 otherwise.
        efficiency: Corrected area as a percentage of the raw area.
        is_valid: Whether all four corner rays reached the wall.
        invalid_reason: Why the result is invalid, None when valid.
    """

    corners: Quad
    yaw: float
    pitch: float
    coverage: float
    efficiency: float
    is_valid: bool
    corrected_corners: Optional[Quad] = None
    invalid_reason: Optional[InvalidReason] = None

    @property
    def raw_area(self) -> float:
        """Area of the raw footprint (mm^2)."""
        return shoelace_area(self.corners) if self.is_valid else 0.0

    @property
    def corrected_area(self) -> float:
        """Area of the corrected rectangle (mm^2), 0 if absent."""
        if self.corrected_corners is None:
            return 0.0
        width, height = self.corrected_size
        return width * height

    @property
    def corrected_size(self) -> Tuple[float, float]:
        """(width, height) of the corrected rectangle in mm."""
        if self.corrected_corners is None:
            return (0.0, 0.0)
        tl, tr, _, bl = self.corrected_corners
        return (tr.x - tl.x, tl.y - bl.y)

    @property
    def center(self) -> Point2D:
        """Vertex centroid of the raw footprint."""
        return vertex_centroid(self.corners)

    @property
    def has_usable_correction(self) -> bool:
        """True if a corrected rectangle exists and has non-zero area."""
        return self.is_valid and self.corrected_area > 0.0


def _invalid(yaw: float, pitch: float, reason: InvalidReason) -> ProjectionResult:
    return ProjectionResult(
        corners=ZERO_QUAD,
        yaw=yaw,
        pitch=pitch,
        coverage=0.0,
        efficiency=0.0,
        is_valid=False,
        invalid_reason=reason,
    )


def compute_efficiency(raw: Quad, corrected: Optional[Quad]) -> float:
    """
    Percentage of the raw footprint kept by the corrected rectangle.

    Args:
        raw: Raw footprint corners.
        corrected: Corrected rectangle corners, or None.

    Returns:
        Efficiency in percent; 0 if there is no correction or no raw area.
    """
    raw_area = shoelace_area(raw)
    if corrected is None or raw_area <= 0:
        return 0.0

    tl, tr, _, bl = corrected
    rect_area = (tr.x - tl.x) * (tl.y - bl.y)
    return rect_area / raw_area * 100.0


def calculate_projection(projector: ProjectorSpec, screen: ScreenSpec) -> ProjectionResult:
    """
    Compute the wall footprint of a projector.

    Args:
        projector: Projector optics, placement and aim.
        screen: Screen (its center is the look-at target).

    Returns:
        ProjectionResult. Check is_valid before using the corners.

    Example:
        >>> proj = ProjectorSpec(throw_ratio=1.2, position=Vector3(2500, 1500, 3000))
        >>> screen = ScreenSpec(width=2214, position=Vector3(2500, 1500, 0))
        >>> result = calculate_projection(proj, screen)
        >>> result.is_valid, round(result.corners[1].x - result.corners[0].x, 3)
        (True, 2500.0)
    """
    orientation, yaw, pitch = resolve_orientation(
        projector.position, projector.aim, screen.position
    )

    throw_ratio = projector.throw_ratio
    if not math.isfinite(throw_ratio) or throw_ratio <= 0:
        logger.debug(f"Invalid projection: throw ratio {throw_ratio}")
        return _invalid(yaw, pitch, InvalidReason.BAD_THROW_RATIO)

    local = sensor_corners(throw_ratio, projector.lens_shift)
    hits = cast_to_wall(projector.position, orientation, local)

    if not hits.ok:
        logger.debug(
            f"Invalid projection: {hits.failure.value} at corner {hits.failed_index}"
        )
        return _invalid(yaw, pitch, hits.failure)

    corners = hits.corners
    corrected = find_inscribed_rectangle(corners) if projector.auto_keystone else None

    return ProjectionResult(
        corners=corners,
        corrected_corners=corrected,
        yaw=yaw,
        pitch=pitch,
        coverage=100.0,
        efficiency=compute_efficiency(corners, corrected),
        is_valid=True,
    )


class ProjectionSolver(LoggerMixin):
    """
    Stateless facade over calculate_projection().

    Example:
        >>> solver = ProjectionSolver()
        >>> result = solver.solve(DEFAULT_STATE)
        >>> result.is_valid
        True
    """

    def compute(self, projector: ProjectorSpec, screen: ScreenSpec) -> ProjectionResult:
        """Compute the projection for a projector/screen pair."""
        result = calculate_projection(projector, screen)

        if result.is_valid:
            self.logger.debug(
                f"Footprint area {result.raw_area:.0f} mm^2, "
                f"efficiency {result.efficiency:.1f}%"
            )
        else:
            self.logger.debug(f"No footprint: {result.invalid_reason.value}")

        return result

    def solve(self, state: SimulationState) -> ProjectionResult:
        """Compute the projection for a full simulation state."""
        return self.compute(state.projector, state.screen)

    __call__ = solve
