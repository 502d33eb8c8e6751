"""
Property Checks for Segment-to-Box Distance Strategies.

This module verifies that a distance strategy obeys the geometric
properties any correct segment-to-box distance must have, independently of
the surface model:

1. Non-negativity (distances are never negative nor NaN)
2. Intersection (intersecting inputs give exactly 0)
3. Endpoint symmetry (reversing the segment changes nothing)
4. Monotonic separation (raising the bottom of the box never brings it closer)
5. Degenerate segments (a zero-length segment behaves as a point)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence
import numpy as np

from common.logging_config import get_logger
from common.types import Box, GeoPoint, Segment
from geospatial.distance_calculations import point_box_distance
from segment_box.below_of_box import SegmentBelowOfBoxDistance
from segment_box.disjoint import DisjointOutcome, classify_segment_box

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the check.
    passed : bool
        Whether the check passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


class SegmentBoxPropertyChecker:
    """Checker for the geometric properties of a segment-to-box distance.

    Parameters
    ----------
    distance : SegmentBelowOfBoxDistance
        The strategy under test.
    tolerance_m : float
        Absolute tolerance for comparing distances, in meters.
    strict_mode : bool
        If True, raise ``RuntimeError`` on the first failed check.
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(
        self,
        distance: SegmentBelowOfBoxDistance,
        tolerance_m: float = 1e-6,
        strict_mode: bool = False,
        log_violations: bool = True
    ):
        self.distance = distance
        self.tolerance_m = tolerance_m
        self.strict_mode = strict_mode
        self.log_violations = log_violations

    def check_all(self, segment: Segment, box: Box) -> List[ValidationResult]:
        """Run every applicable check on one segment/box pair.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        return [
            self.check_non_negativity(segment, box),
            self.check_intersection(segment, box),
            self.check_endpoint_symmetry(segment, box),
            self.check_monotonic_separation(segment, box),
            self.check_degenerate_segment(segment.p0, box),
        ]

    def check_non_negativity(self, segment: Segment, box: Box) -> ValidationResult:
        """Check that the distance is finite and non-negative."""
        d = self.distance.apply_geometries(segment, box)
        passed = bool(np.isfinite(d) and d >= 0)
        return self._record(ValidationResult(
            test_name="non_negativity",
            passed=passed,
            message=f"Distance {d:.6f} m",
            details={'distance_m': d}
        ))

    def check_intersection(self, segment: Segment, box: Box) -> ValidationResult:
        """Check that an intersecting pair has distance exactly 0."""
        outcome = classify_segment_box(
            segment, box, self.distance.strategies.azimuth_strategy
        ).outcome
        d = self.distance.apply_geometries(segment, box)
        intersecting = outcome is DisjointOutcome.INTERSECTING
        passed = (d == 0.0) if intersecting else True
        return self._record(ValidationResult(
            test_name="intersection",
            passed=passed,
            message=f"Outcome {outcome.name}, distance {d:.6f} m",
            details={'outcome': outcome.name, 'distance_m': d}
        ))

    def check_endpoint_symmetry(self, segment: Segment, box: Box) -> ValidationResult:
        """Check that reversing the segment leaves the distance unchanged."""
        forward = self.distance.apply_geometries(segment, box)
        backward = self.distance.apply_geometries(segment.reversed(), box)
        difference = abs(forward - backward)
        return self._record(ValidationResult(
            test_name="endpoint_symmetry",
            passed=difference <= self.tolerance_m,
            message=f"Forward/backward difference {difference:.3e} m",
            details={'forward_m': forward, 'backward_m': backward}
        ))

    def check_monotonic_separation(
        self,
        segment: Segment,
        box: Box,
        fractions: Sequence[float] = (0.0, 0.25, 0.5, 0.75, 1.0)
    ) -> ValidationResult:
        """Check that raising the box bottom never decreases the distance.

        The bottom latitude is moved towards the top by the given fractions
        of the box height, keeping the box valid.
        """
        height = box.lat_max - box.lat_min
        distances = []
        for fraction in fractions:
            bottom_lat = min(box.lat_min + fraction * height, box.lat_max)
            bottom_left = GeoPoint(box.lon_min, bottom_lat)
            distances.append(
                self.distance.apply_geometries(segment, Box(bottom_left, box.top_right))
            )

        decreases = [
            (a, b) for a, b in zip(distances, distances[1:])
            if b < a - self.tolerance_m
        ]
        return self._record(ValidationResult(
            test_name="monotonic_separation",
            passed=not decreases,
            message=f"Monotonic separation check: {len(decreases)} decreases",
            details={'fractions': list(fractions), 'distances_m': distances}
        ))

    def check_degenerate_segment(self, point: GeoPoint, box: Box) -> ValidationResult:
        """Check that a zero-length segment reduces to point-to-box distance."""
        strategies = self.distance.strategies
        d = self.distance.apply_geometries(Segment(point, point), box)
        expected = point_box_distance(
            point, box, strategies.point_point, strategies.point_segment
        )
        difference = abs(d - expected)
        return self._record(ValidationResult(
            test_name="degenerate_segment",
            passed=difference <= self.tolerance_m,
            message=f"Degenerate segment difference {difference:.3e} m",
            details={'distance_m': d, 'point_box_m': expected}
        ))

    def _record(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                logger.warning(f"PROPERTY CHECK | {result.test_name} | FAIL | {result.message}")
            if self.strict_mode:
                raise RuntimeError(f"Property check failed: {result.test_name}: {result.message}")
        else:
            logger.debug(f"PROPERTY CHECK | {result.test_name} | PASS | {result.message}")
        return result
