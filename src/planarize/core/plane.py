"""Robust plane estimation under a normal-direction prior.

The estimator runs RANSAC over triples of input points. Only candidate planes
whose normal lies within the angle tolerance of the expected normal (in
either orientation) are scored, so the prior steers the search instead of
filtering its result. The best candidate is optionally refined with a
total-least-squares fit over its inliers, then checked against two gates:

1. Data quality: at least ``min_inlier_fraction`` of all points must be
   inliers.
2. Orientation: after flipping the plane to face the expected normal, the
   normals must agree to within the angle tolerance (compared as cosines).
"""

import math
from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import ArrayLike

from planarize.config import PlaneFitConfig
from planarize.domain import Plane
from planarize.exceptions import DegenerateInput, DegeneratePointCloud, FitRejected

logger = structlog.get_logger(__name__)

# Singular value ratio below which a point set is treated as collinear
_DEGENERACY_RATIO = 1e-9

# Spread below which all points are treated as coincident
_MIN_SPREAD = 1e-12


@dataclass
class PlaneFit:
    """Outcome of a successful plane estimation.

    Attributes:
        plane: Fitted plane, oriented towards the expected normal
        inliers: Boolean mask over the input points
        iterations: Number of RANSAC samples drawn
        flipped: True if the fitted normal was negated to match the prior
    """

    plane: Plane
    inliers: np.ndarray
    iterations: int
    flipped: bool = False

    @property
    def inlier_count(self) -> int:
        """Number of points within the distance threshold."""
        return int(np.count_nonzero(self.inliers))

    @property
    def inlier_fraction(self) -> float:
        """Fraction of input points within the distance threshold."""
        if len(self.inliers) == 0:
            return 0.0
        return self.inlier_count / len(self.inliers)


def _required_iterations(inlier_ratio: float, confidence: float) -> float:
    """Samples needed to draw one all-inlier triple with the given confidence."""
    p_good = inlier_ratio**3
    if p_good >= 1.0:
        return 1.0
    if p_good <= 0.0:
        return math.inf
    return math.ceil(math.log(1.0 - confidence) / math.log(1.0 - p_good))


def _check_point_set(points: np.ndarray) -> None:
    """Reject point sets that cannot define a plane.

    Raises:
        DegenerateInput: If any coordinate is not finite
        DegeneratePointCloud: If there are fewer than 3 points, or the points
            are coincident or collinear
    """
    if len(points) < 3:
        raise DegeneratePointCloud(f"need at least 3 points, got {len(points)}")
    if not np.all(np.isfinite(points)):
        raise DegenerateInput("Point coordinates must be finite")

    spread = np.linalg.svd(points - points.mean(axis=0), compute_uv=False)
    if spread[0] < _MIN_SPREAD:
        raise DegeneratePointCloud("all points are coincident")
    if spread[1] <= _DEGENERACY_RATIO * spread[0]:
        raise DegeneratePointCloud("all points are collinear")


class PlaneEstimator:
    """Fits a plane to a noisy point set using an expected normal as prior.

    The estimator holds only configuration and creates a fresh random
    generator per call, so one instance can serve concurrent callers.

    Example:
        estimator = PlaneEstimator(PlaneFitConfig(random_seed=0))
        plane = estimator.fit(points, expected_normal=(0.0, 0.0, 1.0))
    """

    def __init__(self, config: PlaneFitConfig | None = None) -> None:
        self.config = config or PlaneFitConfig()

    def fit(
        self,
        points: ArrayLike,
        expected_normal: ArrayLike,
        distance_threshold: float | None = None,
        angle_tolerance: float | None = None,
    ) -> Plane:
        """Fit a plane and return it oriented towards ``expected_normal``.

        Args:
            points: (N, 3) point coordinates
            expected_normal: Prior normal direction (need not be unit length)
            distance_threshold: Inlier distance, overrides the config value
            angle_tolerance: Allowed normal deviation in radians, overrides
                the config value

        Returns:
            The fitted plane

        Raises:
            FitRejected: If no acceptable plane was found, too few points are
                inliers, or the normal deviates too far from the prior
            DegenerateInput: If the points cannot define a plane
        """
        return self.estimate(points, expected_normal, distance_threshold, angle_tolerance).plane

    def estimate(
        self,
        points: ArrayLike,
        expected_normal: ArrayLike,
        distance_threshold: float | None = None,
        angle_tolerance: float | None = None,
    ) -> PlaneFit:
        """Fit a plane and return it together with its inlier mask.

        Same contract as :meth:`fit`.
        """
        threshold = self.config.distance_threshold if distance_threshold is None else distance_threshold
        tolerance = self.config.angle_tolerance if angle_tolerance is None else angle_tolerance
        if threshold <= 0.0:
            raise ValueError(f"distance_threshold must be positive, got {threshold}")
        cos_tolerance = self.config.cos_angle_tolerance if angle_tolerance is None else math.cos(tolerance)

        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        prior = np.asarray(expected_normal, dtype=float).reshape(3)
        prior_length = float(np.linalg.norm(prior))
        if not np.isfinite(prior_length) or prior_length < _MIN_SPREAD:
            raise DegenerateInput("Expected normal must be a finite non-zero vector")
        prior = prior / prior_length

        _check_point_set(pts)

        best_plane, best_mask, iterations = self._ransac(pts, prior, threshold, cos_tolerance)
        if best_plane is None or best_mask is None:
            logger.warning(
                "No plane candidate within angle tolerance",
                iterations=iterations,
                angle_tolerance=tolerance,
            )
            raise FitRejected(
                f"no candidate plane within {tolerance:.3f} rad of the expected normal"
            )

        if self.config.refine:
            best_plane, best_mask = self._refine(pts, best_plane, best_mask, threshold)

        fit = PlaneFit(plane=best_plane, inliers=best_mask, iterations=iterations)
        fraction = fit.inlier_fraction
        logger.debug(
            "Plane candidate selected",
            inliers=fit.inlier_count,
            points=len(pts),
            inlier_fraction=round(fraction, 4),
            iterations=iterations,
        )

        if fraction < self.config.min_inlier_fraction:
            logger.warning(
                "Too few points included in plane fit",
                inlier_fraction=round(fraction, 4),
                required=self.config.min_inlier_fraction,
            )
            raise FitRejected(
                f"only {fraction:.1%} of points lie within {threshold:g} of the plane "
                f"(need {self.config.min_inlier_fraction:.0%})",
                inlier_fraction=fraction,
            )

        plane = fit.plane
        if float(np.dot(plane.normal, prior)) < 0.0:
            logger.info("Flipping plane normal towards expected normal")
            plane = plane.flipped()
            fit.flipped = True

        alignment = float(np.dot(plane.normal, prior))
        if alignment < cos_tolerance:
            logger.warning(
                "Plane normal out of tolerance",
                cosine=round(alignment, 6),
                required_cosine=round(cos_tolerance, 6),
            )
            raise FitRejected(
                f"fitted normal deviates from the expected normal (cosine {alignment:.4f} "
                f"< {cos_tolerance:.4f})",
                inlier_fraction=fraction,
            )

        fit.plane = plane
        return fit

    def _ransac(
        self,
        pts: np.ndarray,
        prior: np.ndarray,
        threshold: float,
        cos_tolerance: float,
    ) -> tuple[Plane | None, np.ndarray | None, int]:
        """Search for the candidate plane with the most inliers.

        Returns:
            Tuple of (best plane or None, its inlier mask or None, samples drawn)
        """
        rng = np.random.default_rng(self.config.random_seed)
        n_points = len(pts)

        best_plane: Plane | None = None
        best_mask: np.ndarray | None = None
        best_count = 0
        required: float = self.config.max_iterations
        iterations = 0

        while iterations < required:
            iterations += 1
            i, j, k = rng.choice(n_points, size=3, replace=False)
            edge_a = pts[j] - pts[i]
            edge_b = pts[k] - pts[i]
            normal = np.cross(edge_a, edge_b)
            length = float(np.linalg.norm(normal))
            # Collinear sample
            if length <= _DEGENERACY_RATIO * float(np.linalg.norm(edge_a) * np.linalg.norm(edge_b)):
                continue
            normal /= length

            # Sign-agnostic: orientation is fixed after the search
            if abs(float(np.dot(normal, prior))) < cos_tolerance:
                continue

            offset = -float(np.dot(normal, pts[i]))
            mask = np.abs(pts @ normal + offset) <= threshold
            count = int(np.count_nonzero(mask))
            if count > best_count:
                best_count = count
                best_plane = Plane(normal=normal, offset=offset)
                best_mask = mask
                required = min(
                    self.config.max_iterations,
                    _required_iterations(count / n_points, self.config.confidence),
                )

        return best_plane, best_mask, iterations

    @staticmethod
    def _refine(
        pts: np.ndarray,
        plane: Plane,
        mask: np.ndarray,
        threshold: float,
    ) -> tuple[Plane, np.ndarray]:
        """Least-squares refit over the inliers; kept only if it loses no inliers."""
        inlier_pts = pts[mask]
        center = inlier_pts.mean(axis=0)
        _, _, vt = np.linalg.svd(inlier_pts - center, full_matrices=False)
        normal = vt[2]
        refined = Plane(normal=normal, offset=-float(np.dot(normal, center)))

        refined_mask = np.abs(refined.signed_distance(pts)) <= threshold
        if np.count_nonzero(refined_mask) >= np.count_nonzero(mask):
            return refined, refined_mask
        return plane, mask
