"""Run the reference scheduling scenarios and print a JSON report."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from klb.logging_config import configure_logging
from klb.vectors import run_reference_vectors

LOGGER = logging.getLogger("klb.run_vectors")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check the scheduler against its reference scenarios.")
    parser.add_argument("--log-level", default="WARNING", help="Log level for scheduler output.")
    parser.add_argument("--only-failures", action="store_true", help="Only report failing scenarios.")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    outcomes = run_reference_vectors()
    reported = [outcome for outcome in outcomes if not (args.only_failures and outcome.passed)]
    passed = all(outcome.passed for outcome in outcomes)
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "passed": passed,
        "results": [asdict(outcome) for outcome in reported],
    }
    print(json.dumps(payload, indent=2))
    if not passed:
        LOGGER.error("%d reference scenario(s) failed", sum(1 for outcome in outcomes if not outcome.passed))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
