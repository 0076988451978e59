"""S3-style object storage on top of WebDAV servers.

This package maps a bucket/prefix/key object-store interface onto the
directory tree of a WebDAV server, for hosts such as backup tools that only
speak the object-store dialect. Keys become file paths below an optional
buckets directory; common prefixes are rebuilt from the directory tree.

Key Features:
    - put/get/exists/delete of objects as WebDAV files
    - Common-prefix listing, including experimental non-"/" delimiters
    - Automatic cleanup of directories emptied by deletes
    - CLI interface

Recommended Usage:

    >>> from dav_objectstore import WebDAVObjectStore
    >>> store = WebDAVObjectStore()
    >>> store.init({"root": "https://dav.example.com", "user": "velero",
    ...             "webDAVPassword": "secret", "bucketsDir": "backups"})
    >>> store.list_common_prefixes("velero", "backups", "/")

Advanced Usage:
    Path mapping and the prefix discovery strategies are importable on their own:

    >>> from dav_objectstore.path import to_storage_path, split_dir_and_name
    >>> from dav_objectstore.objectstorage import prefix_discovery_for
"""

__version__ = "0.1.0"

from .core.exceptions import (
    ConnectionError,
    DavObjectStoreError,
    DeleteError,
    NotFoundError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
    WriteError,
)
from .objectstorage import (
    DirectoryTreePrefixDiscovery,
    FlattenedKeyPrefixDiscovery,
    PrefixDiscovery,
    WebDAVObjectStore,
    prefix_discovery_for,
)
from .path import split_dir_and_name, to_storage_path
from .schemas import LogLevel, WebDAVStoreConfig
from .transport import DirEntry, Transport, WebDAVTransport

__all__ = [
    # Store
    "WebDAVObjectStore",
    "WebDAVStoreConfig",
    "LogLevel",
    # Listing strategies
    "PrefixDiscovery",
    "DirectoryTreePrefixDiscovery",
    "FlattenedKeyPrefixDiscovery",
    "prefix_discovery_for",
    # Path mapping
    "split_dir_and_name",
    "to_storage_path",
    # Transport
    "DirEntry",
    "Transport",
    "WebDAVTransport",
    # Errors
    "DavObjectStoreError",
    "ValidationError",
    "ConnectionError",
    "TransportError",
    "NotFoundError",
    "WriteError",
    "DeleteError",
    "UnsupportedOperationError",
]
