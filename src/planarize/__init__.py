"""Planarize - Flatten planar mesh patches into 2D polygons with holes.

Planarize fits a plane to a scanned or segmented triangle mesh patch, builds a
local coordinate frame on that plane, and extracts the patch's boundary loops
(outer boundary and holes) as 2D polygons in that frame, ready for path
planning.

Example:
    $ planarize patch.obj

This will create patch-boundaries.json with the fitted plane, the local frame
and the projected boundaries.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
