"""Student money manager: balances, journal and savings ledger core."""
