"""Common-prefix discovery strategies.

A common prefix is the object-store view of a subfolder. WebDAV has no such
listing, so prefixes are rebuilt from the directory tree. How depends on the
logical delimiter:

* With the native "/" delimiter, keys fold into directories one-to-one and
  ``DirectoryTreePrefixDiscovery`` walks only the tree under the requested
  prefix. A directory counts as a prefix only if some object sits somewhere
  beneath it; directories holding nothing but empty directories are skipped.
* With any other delimiter the directory tree says nothing about key grouping,
  so ``FlattenedKeyPrefixDiscovery`` walks every file of the bucket and groups
  the resulting keys on their last delimiter. This is experimental and costs
  one directory listing per directory in the tree on every call.

Both walks use an explicit stack, so tree depth is not bounded by the
interpreter recursion limit.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Protocol

from dav_objectstore.core import get_logger
from dav_objectstore.core.exceptions import NotFoundError
from dav_objectstore.path import (
    NATIVE_SEPARATOR,
    bucket_prefix,
    cut_prefix,
    normalize_prefix,
    split_dir_and_name,
)
from dav_objectstore.transport import DirEntry, Transport

logger = get_logger(__name__)


class PrefixDiscovery(Protocol):
    """Protocol for computing the common prefixes below a bucket prefix."""

    delimiter: str

    def discover(
        self, transport: Transport, buckets_dir: str, bucket: str, prefix: str
    ) -> list[str]:
        """Return the common prefixes below ``prefix`` in ``bucket``."""
        ...


def _read_listing_root(transport: Transport, root: str) -> Optional[list[DirEntry]]:
    try:
        return transport.read_dir(root)
    except NotFoundError:
        # Directories only appear on first write, so a missing root is an empty bucket
        logger.debug("Listing root does not exist", root=root)
        return None


@dataclass
class _DirectoryFrame:
    path: str
    common_prefix: str
    entries: Iterator[DirEntry]
    prefixes: list[str] = field(default_factory=list)
    has_objects: bool = False


class DirectoryTreePrefixDiscovery:
    """Discovers prefixes when the delimiter is the native path separator."""

    delimiter = NATIVE_SEPARATOR

    def discover(
        self, transport: Transport, buckets_dir: str, bucket: str, prefix: str
    ) -> list[str]:
        """List every directory below the prefix that has an object beneath it.

        For example, with bucket "backups" holding the keys ``my-app/cars/a``,
        ``my-app/trains/b`` and ``some-other-app/bridges/c``, the prefix
        "my-app" yields ``["my-app/cars/", "my-app/trains/"]``.

        Nested prefixes come before the directory containing them, and
        siblings keep the transport's listing order.
        """
        key_prefix = bucket_prefix(buckets_dir, bucket, self.delimiter)
        root = (
            f"{buckets_dir}{bucket}{NATIVE_SEPARATOR}"
            f"{normalize_prefix(prefix, self.delimiter)}"
        )

        entries = _read_listing_root(transport, root)
        if entries is None:
            return []
        return self._collect(transport, root, entries, key_prefix)

    def _collect(
        self,
        transport: Transport,
        root: str,
        entries: Iterable[DirEntry],
        key_prefix: str,
    ) -> list[str]:
        stack = [_DirectoryFrame(root, "", iter(entries))]
        while True:
            frame = stack[-1]
            entry = next(frame.entries, None)

            if entry is None:
                stack.pop()
                if not stack:
                    return frame.prefixes
                parent = stack[-1]
                parent.prefixes.extend(frame.prefixes)
                if frame.has_objects:
                    parent.has_objects = True
                    parent.prefixes.append(frame.common_prefix)
                continue

            if not entry.is_dir:
                frame.has_objects = True
                continue

            child_path = f"{frame.path}{entry.name}{NATIVE_SEPARATOR}"
            common_prefix = cut_prefix(child_path, key_prefix)
            if common_prefix is None:
                continue
            stack.append(
                _DirectoryFrame(
                    child_path, common_prefix, iter(transport.read_dir(child_path))
                )
            )


class FlattenedKeyPrefixDiscovery:
    """Discovers prefixes for a delimiter other than the path separator."""

    def __init__(self, delimiter: str):
        self.delimiter = delimiter

    def discover(
        self, transport: Transport, buckets_dir: str, bucket: str, prefix: str
    ) -> list[str]:
        """Group every key of the bucket on its last delimiter.

        The requested prefix does not narrow the walk: every key of the
        bucket contributes its candidate prefix.
        """
        key_prefix = bucket_prefix(buckets_dir, bucket, self.delimiter)
        walk_dir, _ = split_dir_and_name(key_prefix)
        root = f"{walk_dir}{NATIVE_SEPARATOR}" if walk_dir else ""

        logger.debug(
            "Walking full tree for non-native delimiter",
            root=root,
            delimiter=self.delimiter,
            prefix=prefix,
        )
        entries = _read_listing_root(transport, root)
        if entries is None:
            return []

        files = self._walk_files(transport, root, entries)
        return group_common_prefixes(files, key_prefix, self.delimiter)

    @staticmethod
    def _walk_files(
        transport: Transport, root: str, entries: Iterable[DirEntry]
    ) -> list[str]:
        files = []
        stack = [(root, iter(entries))]
        while stack:
            parent, children = stack[-1]
            entry = next(children, None)
            if entry is None:
                stack.pop()
                continue

            path = f"{parent}{entry.name}"
            if entry.is_dir:
                child_dir = f"{path}{NATIVE_SEPARATOR}"
                stack.append((child_dir, iter(transport.read_dir(child_dir))))
            else:
                files.append(path)
        return files


def group_common_prefixes(
    paths: Iterable[str], key_prefix: str, delimiter: str
) -> list[str]:
    """Group storage paths into the distinct prefixes before their last delimiter.

    Paths outside ``key_prefix`` and keys without a delimiter contribute
    nothing. First-seen order is kept.

    Example:
        group_common_prefixes(
            ["b/bk-app-x", "b/bk-app-y", "b/bk-db-z", "b/bk-top"], "b/bk-", "-"
        )
        -> ["app", "db"]
    """
    seen: set[str] = set()
    prefixes = []
    for path in paths:
        key = cut_prefix(path, key_prefix)
        if key is None:
            continue
        head, found, _ = key.rpartition(delimiter)
        if not found or head in seen:
            continue
        seen.add(head)
        prefixes.append(head)
    return prefixes


def prefix_discovery_for(delimiter: str) -> PrefixDiscovery:
    """Select the discovery strategy for a delimiter."""
    if delimiter == NATIVE_SEPARATOR:
        return DirectoryTreePrefixDiscovery()
    return FlattenedKeyPrefixDiscovery(delimiter)
