"""Re-evaluate every saved calculation and report results that no longer match.

Run this after changing the statutory cap table for a year that already has
saved calculations. With ``--fix`` the stored results are recomputed.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from transitie.core.config import get_settings  # noqa: E402  (import after sys.path manipulation)
from transitie.core.log import get_logger, set_level, shutdown_logging  # noqa: E402
from transitie.db.session import session_scope  # noqa: E402
from transitie.domain import CompensationEngine, StatutoryCapTable  # noqa: E402
from transitie.services import CalculationStore  # noqa: E402

LOGGER = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--fix", action="store_true", help="Recompute and store drifted results")
    parser.add_argument("--verbose", action="store_true", help="Log every evaluation")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if args.verbose:
        set_level("DEBUG")
    engine = CompensationEngine(StatutoryCapTable(get_settings().cap_table))
    with session_scope() as session:
        store = CalculationStore(session, engine)
        drifted = store.find_drift()
        unevaluable = 0
        for drift in drifted:
            if not drift.evaluable:
                unevaluable += 1
                LOGGER.warning(
                    "Calculation %s: stored %s, cannot be recomputed (%s)",
                    drift.calculation_id,
                    drift.stored.capped_amount,
                    drift.error,
                )
                continue
            LOGGER.warning(
                "Calculation %s: stored %s, recomputed %s",
                drift.calculation_id,
                drift.stored.capped_amount,
                drift.recomputed.capped_amount,
            )
            if args.fix:
                saved = store.get(drift.calculation_id)
                store.update(saved.id, saved.period, saved.inputs)
    if not drifted:
        LOGGER.info("All saved calculations match a fresh evaluation")
    if unevaluable or (drifted and not args.fix):
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    finally:
        shutdown_logging()
