"""CLI adapter reporting accounts whose balances disagree with their rows."""

import argparse

from money_manager.domain.errors import LedgerError
from money_manager.infrastructure.container import build_ledger_invariants
from money_manager.infrastructure.logging.logger import get_app_logger


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check ledger balances against journal and savings rows.",
    )
    parser.add_argument(
        "user_ids",
        nargs="*",
        type=int,
        help="Accounts to check (default: every account).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the ledger invariant check.

    Returns:
        int: 0 when every account is consistent, 1 otherwise.
    """
    args = _parse_args(argv)
    logger = get_app_logger()
    use_case = build_ledger_invariants()

    try:
        report = use_case.execute(args.user_ids or None)
    except LedgerError as exc:
        logger.error(f"Ledger check failed: {exc.message}")
        print(f"error[{exc.kind}]: {exc.message}")
        return 1

    for violation in report.violations:
        print(
            f"user={violation.user_id} check={violation.check} "
            f"expected={violation.expected} actual={violation.actual}"
        )
    print(
        f"Checked {report.checked_accounts} accounts, "
        f"{len(report.violations)} violations."
    )
    return 0 if report.ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
