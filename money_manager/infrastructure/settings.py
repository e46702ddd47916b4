"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from money_manager.infrastructure.logging.logger import get_app_logger

ISOLATION_LEVELS = (
    "SERIALIZABLE",
    "REPEATABLE READ",
    "READ COMMITTED",
)


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger database engine.

    Attributes:
        isolation_level: Transaction isolation applied to server databases.
        pool_size: Number of pooled connections kept open.
        max_overflow: Connections allowed beyond the pool size.
    """

    isolation_level: str = "SERIALIZABLE"
    pool_size: int = 5
    max_overflow: int = 5

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        isolation_level = (
            os.getenv("LEDGER_ISOLATION_LEVEL", cls.isolation_level)
            .strip()
            .upper()
        )
        if isolation_level not in ISOLATION_LEVELS:
            logger.warning(
                f"Unsupported LEDGER_ISOLATION_LEVEL '{isolation_level}', "
                f"using {cls.isolation_level}"
            )
            isolation_level = cls.isolation_level
        return cls(
            isolation_level=isolation_level,
            pool_size=cls._read_int(
                "LEDGER_POOL_SIZE", cls.pool_size, logger
            ),
            max_overflow=cls._read_int(
                "LEDGER_MAX_OVERFLOW", cls.max_overflow, logger
            ),
        )

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        """Read a non-negative integer variable, falling back on errors.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid integer for {name}: {raw!r}")
            return default
        if value < 0:
            logger.warning(f"Negative value for {name}: {value}")
            return default
        return value


__all__ = ["LedgerSettings", "ISOLATION_LEVELS"]
