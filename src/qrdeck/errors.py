"""Exception hierarchy for qrdeck."""


class QrDeckError(Exception):
    """Base class for every error raised by qrdeck."""


class ValidationError(QrDeckError):
    """Raised when a submitted URL or title is empty."""


class NotFoundError(QrDeckError):
    """Raised when an operation references an id that is not in the collection."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"No saved URL with id '{record_id}'.")
        self.record_id = record_id


class RenderError(QrDeckError):
    """Raised when a QR code cannot be generated for a URL."""


class PersistenceError(QrDeckError):
    """Raised when saved state cannot be written to storage."""


class ShareError(QrDeckError):
    """Raised when copying or sharing a URL fails."""
