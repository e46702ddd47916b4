"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_store import LedgerSessionPort, LedgerStorePort

__all__ = [
    "DatabaseEnginePort",
    "LedgerSessionPort",
    "LedgerStorePort",
]
