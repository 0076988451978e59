"""Capability interface of a hierarchical storage transport."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Callable, Protocol

if TYPE_CHECKING:
    from dav_objectstore.schemas import WebDAVStoreConfig


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing.

    Attributes:
        name: Entry name without any directory component
        is_dir: True for collections (directories)
    """

    name: str
    is_dir: bool


class Transport(Protocol):
    """Protocol for one connection to a hierarchical file store.

    Paths are relative to the server root and use "/" as separator.
    Implementations raise ``ConnectionError`` from ``connect`` and
    ``NotFoundError`` for absent paths; any other failure is a
    ``TransportError``.
    """

    def connect(self) -> None:
        """Open the connection and check the server is reachable."""
        ...

    def read_dir(self, path: str) -> list[DirEntry]:
        """List the immediate children of a directory."""
        ...

    def mkdir_all(self, path: str) -> None:
        """Create a directory and any missing parents."""
        ...

    def write_stream(self, path: str, stream: BinaryIO) -> None:
        """Write a stream to a file, replacing any existing content."""
        ...

    def read_stream(self, path: str) -> BinaryIO:
        """Open a readable stream on a file; the caller closes it."""
        ...

    def remove(self, path: str) -> None:
        """Remove a file or directory."""
        ...

    def close(self) -> None:
        """Release the connection."""
        ...

    def __enter__(self) -> "Transport": ...

    def __exit__(self, *exc_info: object) -> None: ...


TransportFactory = Callable[["WebDAVStoreConfig"], Transport]
