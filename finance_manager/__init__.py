"""Terminal interface for the personal finance ledger."""
