"""Infrastructure adapters: database engines, ledger store, logging."""
