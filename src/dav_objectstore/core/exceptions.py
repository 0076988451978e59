"""Exception hierarchy for dav-objectstore."""


class DavObjectStoreError(Exception):
    """Base exception for all dav-objectstore errors."""

    pass


class ValidationError(DavObjectStoreError):
    """Raised when validation fails."""

    pass


class ConnectionError(DavObjectStoreError):
    """Raised when the storage server is unreachable or rejects the credentials."""

    pass


class TransportError(DavObjectStoreError):
    """Raised when a storage transport call fails."""

    pass


class NotFoundError(TransportError):
    """Raised when a path does not exist on the storage server."""

    pass


class WriteError(DavObjectStoreError):
    """Raised when directory creation or a stream write fails."""

    pass


class DeleteError(DavObjectStoreError):
    """Raised when removing an object or its emptied parent directory fails."""

    pass


class UnsupportedOperationError(DavObjectStoreError):
    """Raised for operations the storage backend cannot provide."""

    pass
