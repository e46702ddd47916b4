"""CLI adapter crediting the monthly allowance for selected users."""

import argparse

from money_manager.domain.errors import LedgerError
from money_manager.infrastructure.container import build_auto_allowance
from money_manager.infrastructure.logging.logger import get_app_logger


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Add this month's allowance for the given users.",
    )
    parser.add_argument("user_ids", nargs="+", type=int)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Process the allowance for every requested user.

    A failure for one user does not stop the others.

    Returns:
        int: 0 when every user was credited, 1 if any failed.
    """
    args = _parse_args(argv)
    logger = get_app_logger()
    use_case = build_auto_allowance()

    status = 0
    for user_id in args.user_ids:
        try:
            transaction = use_case.execute(user_id)
        except LedgerError as exc:
            logger.error(f"Allowance failed for user {user_id}: {exc.message}")
            print(f"error[{exc.kind}]: user {user_id}: {exc.message}")
            status = 1
            continue
        print(
            f"user={user_id} credited {transaction.amount} "
            f"(transaction {transaction.id})"
        )
    return status


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
