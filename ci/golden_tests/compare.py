#!/usr/bin/env python3
"""Golden test comparison script for CI.

Runs the oval coverage oracle on every case of a suite and validates the
results against the suite's `expected` blocks:
    - pixel_count: exact size of the pixel set
    - extent: bounding box of the pixel set
    - connected: single 8-connected component
    - sha256: hashing.hash_pixel_set() digest (bit-for-bit regression)

CLI:
    python ci/golden_tests/compare.py --suite configs/oracle_suite.v1.yaml
    python ci/golden_tests/compare.py --suite configs/oracle_suite.v1.yaml \
        --freeze outputs/ci/oracle_suite.frozen.yaml

Freezing writes a copy of the suite whose expectations are the current
outputs; review the grids (scripts/compute_oval_coverage.py) before replacing
the committed suite with it.

Exit codes:
    0: All cases passed (or suite frozen)
    1: One or more cases failed
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from src.coverage_oracle import suite as oracle_suite
from src.utils import fs, hashing, logging_config, validators

logger = logging_config.get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Compare oracle outputs against golden expectations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--suite',
        type=str,
        default='configs/oracle_suite.v1.yaml',
        help='Suite YAML, default: configs/oracle_suite.v1.yaml'
    )
    parser.add_argument(
        '--freeze',
        type=str,
        default=None,
        help='Write a frozen copy of the suite to this path instead of comparing'
    )
    parser.add_argument(
        '--report',
        type=str,
        default=None,
        help='Optional YAML report path (failures per case)'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    suite = validators.load_oracle_suite(args.suite)

    logging_config.setup_logging(**suite.logging.setup_kwargs(), context={"app": "golden"})
    suite_sha256 = hashing.sha256_file(args.suite)
    logger.info("Suite %s (sha256 %s)", args.suite, suite_sha256[:12])

    if args.freeze:
        frozen = oracle_suite.freeze_expectations(suite)
        fs.atomic_yaml_dump(frozen, args.freeze)
        logger.info("Froze %d cases → %s", len(frozen['cases']), args.freeze)
        return 0

    failures_by_case = oracle_suite.run_suite(suite)
    failed = sorted(name for name, failures in failures_by_case.items() if failures)

    if args.report:
        fs.atomic_yaml_dump(
            {
                'suite': str(args.suite),
                'suite_sha256': suite_sha256,
                'passed': len(failures_by_case) - len(failed),
                'failed': len(failed),
                'failures': {name: failures_by_case[name] for name in failed},
            },
            args.report
        )

    if failed:
        logger.error("%d/%d cases failed: %s", len(failed), len(failures_by_case), ", ".join(failed))
        return 1
    logger.info("All %d cases passed", len(failures_by_case))
    return 0


if __name__ == "__main__":
    sys.exit(main())
