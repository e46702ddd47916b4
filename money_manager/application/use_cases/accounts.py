"""Use cases provisioning and configuring ledger accounts."""

from money_manager.application.ports.ledger_store import LedgerStorePort
from money_manager.domain.errors import ConflictError, NotFoundError
from money_manager.domain.models import Account
from money_manager.domain.services.validation import validate_amount
from money_manager.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)


class OpenAccountUseCase:
    """Create the account row of a newly provisioned user."""

    def __init__(self, ledger_store: LedgerStorePort, logger=None) -> None:
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()

    def execute(self, user_id: int) -> Account:
        """Open an account with zero balances.

        Raises:
            ConflictError: If the user already has an account.
        """
        with self._ledger_store.unit_of_work() as session:
            if session.fetch_account(user_id) is not None:
                raise ConflictError("Account already exists")
            account = session.insert_account(user_id)
        self._logger.info(f"Opened account for user {user_id}")
        return account


class GetAccountUseCase:
    """Read a user's balances and allowance configuration."""

    def __init__(self, ledger_store: LedgerStorePort) -> None:
        self._ledger_store = ledger_store

    def execute(self, user_id: int) -> Account:
        """Return the account row.

        Raises:
            NotFoundError: If the user has no account.
        """
        with self._ledger_store.unit_of_work() as session:
            account = session.fetch_account(user_id)
        if account is None:
            raise NotFoundError("Account not found")
        return account


class UpdateAllowanceUseCase:
    """Configure the recurring monthly allowance amount."""

    def __init__(
        self,
        ledger_store: LedgerStorePort,
        logger=None,
        audit_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_store: Port opening transactional scopes on the store.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving committed mutations.
        """
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()

    def execute(self, user_id: int, allowance_income) -> Account:
        """Set the allowance; zero disables the monthly credit.

        Raises:
            ValidationError: If the amount is negative or malformed.
            NotFoundError: If the user has no account.
        """
        amount = validate_amount(
            allowance_income,
            field="allowance_income",
            allow_zero=True,
        )
        with self._ledger_store.unit_of_work() as session:
            account = session.update_allowance(user_id, amount)
        if account is None:
            raise NotFoundError("Account not found")
        self._audit_logger.info(
            f"op=update_allowance user={user_id} allowance_income={amount}"
        )
        return account


__all__ = [
    "OpenAccountUseCase",
    "GetAccountUseCase",
    "UpdateAllowanceUseCase",
]
