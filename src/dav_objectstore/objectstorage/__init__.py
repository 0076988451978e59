"""Object storage operations over WebDAV."""

from .listing import (
    DirectoryTreePrefixDiscovery,
    FlattenedKeyPrefixDiscovery,
    PrefixDiscovery,
    group_common_prefixes,
    list_direct_objects,
    prefix_discovery_for,
)
from .store import WebDAVObjectStore

__all__ = [
    "DirectoryTreePrefixDiscovery",
    "FlattenedKeyPrefixDiscovery",
    "PrefixDiscovery",
    "WebDAVObjectStore",
    "group_common_prefixes",
    "list_direct_objects",
    "prefix_discovery_for",
]
