"""Object and common-prefix listing over hierarchical transports."""

from .objects import list_direct_objects
from .prefix_discovery import (
    DirectoryTreePrefixDiscovery,
    FlattenedKeyPrefixDiscovery,
    PrefixDiscovery,
    group_common_prefixes,
    prefix_discovery_for,
)

__all__ = [
    "DirectoryTreePrefixDiscovery",
    "FlattenedKeyPrefixDiscovery",
    "PrefixDiscovery",
    "group_common_prefixes",
    "list_direct_objects",
    "prefix_discovery_for",
]
