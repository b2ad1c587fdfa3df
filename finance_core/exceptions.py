"""Domain-specific exceptions for the finance ledger core."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class PersistenceError(IOError):
    """Raised when the ledger file cannot be opened for reading or writing."""


class MalformedRecordError(ValueError):
    """Raised when a single stored line fails field validation."""

    def __init__(self, reason: str, line: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line
