from __future__ import annotations


class FileAdapterError(Exception):
    """Base error for the file procedures server."""


class InvalidRequestError(FileAdapterError):
    """Raised when a required argument is missing or malformed."""


class NotFoundError(FileAdapterError):
    """Raised when a path or pattern resolves to nothing."""


class ResolutionError(FileAdapterError):
    """Raised when a path pattern cannot be resolved by the backing store."""


class AccessDeniedError(ResolutionError):
    """Raised when an operation tries to access data outside the allowed root."""


class StorageIOError(FileAdapterError):
    """Raised when reading file data or metadata fails."""


class WriteError(FileAdapterError):
    """Raised when saving a file fails."""


class DeleteError(FileAdapterError):
    """Raised when the backing store fails to remove a file."""


class StreamConsumedError(FileAdapterError):
    """Raised when a large object's content stream is opened a second time."""


class ExternalServiceError(FileAdapterError):
    """Raised when an external service (archive download) fails."""
