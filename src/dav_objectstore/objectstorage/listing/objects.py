"""Listing of the objects stored directly in one directory."""

from dav_objectstore.core import get_logger
from dav_objectstore.core.exceptions import NotFoundError
from dav_objectstore.path import cut_prefix
from dav_objectstore.transport import Transport

logger = get_logger(__name__)


def list_direct_objects(transport: Transport, directory: str, key_prefix: str) -> list[str]:
    """List object keys directly inside a directory, ignoring subdirectories.

    Args:
        transport: Connected transport
        directory: Storage path of the directory, ending with the delimiter
        key_prefix: Storage path prefix cut off each file path to form its key

    Returns:
        Keys in listing order; empty if the directory does not exist
    """
    try:
        entries = transport.read_dir(directory)
    except NotFoundError:
        logger.debug("Object listing root does not exist", directory=directory)
        return []

    keys = []
    for entry in entries:
        if entry.is_dir:
            continue
        key = cut_prefix(f"{directory}{entry.name}", key_prefix)
        if key is None:
            continue
        keys.append(key)

    logger.debug("Objects listed", directory=directory, object_count=len(keys))
    return keys
