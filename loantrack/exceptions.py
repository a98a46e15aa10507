"""Custom exception hierarchy for loantrack."""


class LoanTrackError(Exception):
    """Base exception for all loantrack errors."""


class LoanNotFoundError(LoanTrackError):
    """Raised when a referenced loan does not exist."""


class LoanValidationError(LoanTrackError):
    """Raised when loan input fails boundary validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid loan data")


class ConfigurationError(LoanTrackError):
    """Raised when configuration is invalid or missing."""


class StorageError(LoanTrackError):
    """Raised when the loans file cannot be read or written."""


class SinkError(LoanTrackError):
    """Raised when a sink operation fails."""
