"""Local plane frame construction.

Builds a right-handed orthonormal frame whose z axis is the plane normal and
whose origin is an anchor point projected onto the plane. The in-plane x axis
follows world X when the normal is far enough from X; otherwise the in-plane
y axis follows world Y. This keeps the projected reference axis away from
zero length.
"""

import numpy as np
from numpy.typing import ArrayLike

from planarize.config import FrameConfig
from planarize.core.geometry import UNIT_X, UNIT_Y, normalize, project_direction
from planarize.domain import LocalFrame, Plane

DEFAULT_AXIS_THRESHOLD = 0.8


def build_local_frame(
    plane: Plane,
    anchor: ArrayLike,
    axis_threshold: float = DEFAULT_AXIS_THRESHOLD,
) -> LocalFrame:
    """Build the local frame of ``plane`` anchored at ``anchor``.

    Args:
        plane: Plane with unit normal
        anchor: Point whose projection onto the plane becomes the origin
        axis_threshold: Use world X for the in-plane axis while
            ``|normal . X|`` is below this value, world Y otherwise

    Returns:
        LocalFrame with columns (x, y, normal) and the projected anchor as
        translation

    Examples:
        >>> frame = build_local_frame(Plane(normal=(0, 0, 1), offset=-2.0), (5, 5, 0))
        >>> frame.translation.tolist()
        [5.0, 5.0, 2.0]
    """
    origin = plane.project(np.asarray(anchor, dtype=float).reshape(3))
    z_axis = plane.normal

    if abs(float(np.dot(z_axis, UNIT_X))) < axis_threshold:
        x_axis = normalize(project_direction(UNIT_X, z_axis))
        y_axis = normalize(np.cross(z_axis, x_axis))
    else:
        y_axis = normalize(project_direction(UNIT_Y, z_axis))
        x_axis = normalize(np.cross(y_axis, z_axis))

    return LocalFrame(
        rotation=np.column_stack([x_axis, y_axis, z_axis]),
        translation=origin,
    )


class LocalFrameBuilder:
    """Builds local plane frames with a configured axis selection threshold."""

    def __init__(self, config: FrameConfig | None = None) -> None:
        self.config = config or FrameConfig()

    def build(self, plane: Plane, anchor: ArrayLike) -> LocalFrame:
        """Build the local frame of ``plane`` anchored at ``anchor``."""
        return build_local_frame(plane, anchor, axis_threshold=self.config.axis_threshold)
