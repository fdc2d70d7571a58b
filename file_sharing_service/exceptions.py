"""Errors raised by the storage and metadata layers.

Each error carries the HTTP status and the client-facing message it maps to.
The handler registered in ``main`` renders them as ``{"error": message}``;
internal causes stay in the server log.
"""

from typing import Optional

class FileServiceError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, detail: str = "", message: Optional[str] = None) -> None:
        self.detail = detail
        if message is not None:
            self.message = message
        super().__init__(detail or self.message)


class MissingFile(FileServiceError):
    """Raised when an upload request carries no file part."""

    status_code = 400
    message = "No file uploaded"


class NotFound(FileServiceError):
    status_code = 404
    message = "File not found"


class RecordNotFound(NotFound):
    """No metadata row exists for the identifier."""


class BlobNotFound(NotFound):
    """A stored name does not map to a file under the storage root."""


class PersistenceFailure(FileServiceError):
    """Raised when the database or the storage directory fails a read or write."""

    message = "Database error"


class DuplicateKey(PersistenceFailure):
    """Raised when an insert collides with an existing primary or unique key."""
