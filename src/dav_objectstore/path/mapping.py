"""Translation between bucket/key addresses and WebDAV storage paths.

An object ``key`` in ``bucket`` lives at ``<buckets_dir><bucket><delimiter><key>``.
Keys are opaque: they are concatenated as given and may contain the delimiter,
the native separator, or both.

Directory membership on the server is always decided by the native ``/``
separator, even when a different logical delimiter is configured. Everything
that creates, lists or removes directories goes through ``split_dir_and_name``.
"""

from typing import Optional

NATIVE_SEPARATOR = "/"


def to_storage_path(buckets_dir: str, bucket: str, key: str, delimiter: str) -> str:
    """Map a bucket/key address to its storage path.

    Example:
        to_storage_path("backups/", "velero", "my-app/cars/a", "/")
        -> "backups/velero/my-app/cars/a"
    """
    return f"{buckets_dir}{bucket}{delimiter}{key}"


def bucket_prefix(buckets_dir: str, bucket: str, delimiter: str) -> str:
    """Storage path prefix that is cut off listed paths to recover keys."""
    return f"{buckets_dir}{bucket}{delimiter}"


def split_dir_and_name(path: str) -> tuple[str, str]:
    """Split a storage path on its last native separator.

    Returns:
        Tuple of (directory, name); directory is "" when the path has no separator
    """
    directory, separator, name = path.rpartition(NATIVE_SEPARATOR)
    if not separator:
        return "", path
    return directory, name


def normalize_prefix(prefix: str, delimiter: str) -> str:
    """Make a non-empty prefix end with the delimiter."""
    if prefix and not prefix.endswith(delimiter):
        return f"{prefix}{delimiter}"
    return prefix


def cut_prefix(path: str, prefix: str) -> Optional[str]:
    """Strip ``prefix`` from the front of ``path``, or None if it is absent."""
    if not path.startswith(prefix):
        return None
    return path[len(prefix) :]
