"""Batch execution of oracle cases with golden expectations.

A suite (oval_oracle_suite.v1, see src.utils.validators) lists bounding boxes,
optional clips and optional expectations. Running it yields one CaseResult per
case; check_case() compares a result with its expectations and returns
human-readable failures (empty list = pass).

freeze_expectations() turns results into the `expected` blocks of a suite so
that current outputs can be recorded as golden values.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from src.utils import hashing, validators
from src.utils.logging_config import pop_context, push_context

from .footprint import is_8_connected
from .geometry import ClipRect, Pixel
from .oracle import compute_oval_boundary_pixels

logger = logging.getLogger(__name__)


@dataclass
class CaseResult:
    name: str
    pixels: Set[Pixel]
    extent: Optional[ClipRect]
    connected: bool
    sha256: str

    @property
    def pixel_count(self) -> int:
        return len(self.pixels)


def clip_from_config(rect: Optional[validators.RectV1]) -> Optional[ClipRect]:
    if rect is None:
        return None
    return ClipRect(rect.x, rect.y, rect.x_span, rect.y_span)


def run_case(case: validators.OvalCaseV1) -> CaseResult:
    """Run the oracle for one case."""
    pixels = compute_oval_boundary_pixels(
        clip_from_config(case.clip), case.x, case.y, case.x_span, case.y_span
    )
    return CaseResult(
        name=case.name,
        pixels=pixels,
        extent=ClipRect.bounding(pixels),
        connected=is_8_connected(pixels),
        sha256=hashing.hash_pixel_set(pixels),
    )


def check_case(result: CaseResult, expected: Optional[validators.ExpectedV1]) -> List[str]:
    """Failures of `result` against `expected`; None expectations always pass."""
    if expected is None:
        return []

    failures = []
    if expected.pixel_count is not None and result.pixel_count != expected.pixel_count:
        failures.append(
            f"pixel_count: got {result.pixel_count}, expected {expected.pixel_count}"
        )
    if expected.extent is not None:
        want = clip_from_config(expected.extent)
        if result.extent != want:
            failures.append(f"extent: got {result.extent}, expected {want}")
    if expected.connected is not None and result.connected != expected.connected:
        failures.append(f"connected: got {result.connected}, expected {expected.connected}")
    if expected.sha256 is not None and result.sha256 != expected.sha256:
        failures.append(f"sha256: got {result.sha256}, expected {expected.sha256}")
    return failures


def run_suite(suite: validators.OracleSuiteV1) -> Dict[str, List[str]]:
    """Run every case; returns failures by case name (passing cases map to [])."""
    failures_by_case = {}
    for case in suite.cases:
        push_context(case=case.name)
        try:
            result = run_case(case)
            failures = check_case(result, case.expected)
            if failures:
                for failure in failures:
                    logger.error("FAIL %s", failure)
            else:
                logger.info("PASS %d pixels, extent=%s", result.pixel_count, result.extent)
            failures_by_case[case.name] = failures
        finally:
            pop_context(keys=["case"])
    return failures_by_case


def freeze_expectations(
    suite: validators.OracleSuiteV1,
    results: Optional[List[CaseResult]] = None
) -> Dict[str, Any]:
    """Copy of the suite with every case's expectations set to current outputs."""
    if results is None:
        results = [run_case(case) for case in suite.cases]
    by_name = {r.name: r for r in results}

    frozen = validators.suite_to_dict(suite)
    for case_dict in frozen['cases']:
        result = by_name[case_dict['name']]
        expected = {
            'pixel_count': result.pixel_count,
            'connected': result.connected,
            'sha256': result.sha256,
        }
        if result.extent is not None:
            expected['extent'] = {
                'x': result.extent.x,
                'y': result.extent.y,
                'x_span': result.extent.x_span,
                'y_span': result.extent.y_span,
            }
        case_dict['expected'] = expected
    return frozen
