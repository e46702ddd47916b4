"""CLI adapter aligning stored savings balances with the savings ledger."""

import argparse

from money_manager.domain.errors import LedgerError
from money_manager.infrastructure.container import build_backfill_savings
from money_manager.infrastructure.logging.logger import get_app_logger


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Set savings_balance to the savings ledger sum.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the adjustments without writing them.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the savings backfill job."""
    args = _parse_args(argv)
    logger = get_app_logger()
    use_case = build_backfill_savings()

    try:
        result = use_case.run(dry_run=args.dry_run)
    except LedgerError as exc:
        logger.error(f"Savings backfill failed: {exc.message}")
        print(f"error[{exc.kind}]: {exc.message}")
        return 1

    for adjustment in result.adjustments:
        print(
            f"user={adjustment.user_id} "
            f"{adjustment.old_savings_balance} -> "
            f"{adjustment.new_savings_balance}"
        )
    verb = "Would adjust" if result.dry_run else "Adjusted"
    print(
        f"{verb} {len(result.adjustments)} of {result.checked_count} "
        "savings balances."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
