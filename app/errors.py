"""Application error types and their HTTP mapping."""


class KittenTrackError(Exception):
    """Base class for errors surfaced at the request boundary."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class DataIntegrityError(KittenTrackError):
    """Stored data that cannot be interpreted (bad date, orphaned row)."""

    status_code = 500
    public_message = "Stored data is inconsistent"


class StorageError(KittenTrackError):
    """The storage engine could not be opened or migrated."""

    status_code = 500
    public_message = "Database error"
