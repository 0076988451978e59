"""WebDAV transport built on the webdav4 client.

One ``WebDAVTransport`` is one connection: it owns an ``httpx.Client`` carrying
the credentials and timeout, and closes it on ``close()`` or when used as a
context manager. webdav4 and httpx exceptions are translated into the
dav-objectstore error hierarchy so callers never see library types:

    ResourceNotFound, HTTP 404   -> NotFoundError
    failure during connect()     -> ConnectionError
    any other client error       -> TransportError
"""

import tempfile
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

import httpx
from webdav4.client import (
    Client,
    ClientError,
    ResourceAlreadyExists,
    ResourceNotFound,
)

from dav_objectstore.core import get_logger, settings
from dav_objectstore.core.exceptions import (
    ConnectionError,
    NotFoundError,
    TransportError,
)
from dav_objectstore.path import NATIVE_SEPARATOR, split_dir_and_name
from dav_objectstore.schemas import WebDAVStoreConfig

from .base import DirEntry

logger = get_logger(__name__)

# Downloads larger than this spill from memory to a temporary file
SPOOL_MAX_SIZE = 16 * 1024 * 1024


def _status_code(error: Exception) -> Optional[int]:
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None)


class WebDAVTransport:
    """A single connection to a WebDAV server."""

    def __init__(
        self,
        root: str,
        user: str = "",
        password: str = "",
        timeout: Optional[float] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the transport; no request is made until ``connect``.

        Args:
            root: WebDAV server base URL
            user: Username for basic auth, empty for anonymous access
            password: Password for basic auth
            timeout: Request timeout in seconds, defaults to settings.webdav_timeout
            http_transport: httpx transport to send requests through, defaults
                to the network
        """
        self.root = root
        self.user = user
        self._password = password
        self.timeout = settings.webdav_timeout if timeout is None else timeout
        self._http_transport = http_transport
        self._http: Optional[httpx.Client] = None
        self._client: Optional[Client] = None

    @classmethod
    def from_config(cls, config: WebDAVStoreConfig) -> "WebDAVTransport":
        """Create a transport from the store configuration."""
        return cls(config.root, config.user, config.password)

    @property
    def http(self) -> httpx.Client:
        """Get or create the HTTP client bound to the server root."""
        if self._http is None:
            auth = (self.user, self._password) if self.user else None
            self._http = httpx.Client(
                base_url=self.root,
                auth=auth,
                timeout=self.timeout,
                transport=self._http_transport,
            )
        return self._http

    @property
    def client(self) -> Client:
        """Get or create the webdav4 client on top of ``http``."""
        if self._client is None:
            self._client = Client(self.root, http_client=self.http)
            logger.debug("WebDAV client created", root=self.root, user=self.user)
        return self._client

    @contextmanager
    def _translate_errors(self, action: str, path: str) -> Iterator[None]:
        try:
            yield
        except ResourceNotFound as e:
            raise NotFoundError(f"Path not found: '{path}'") from e
        except (ClientError, httpx.HTTPError) as e:
            if _status_code(e) == 404:
                raise NotFoundError(f"Path not found: '{path}'") from e
            error_msg = f"Failed to {action} '{path}': {e}"
            logger.error(error_msg, root=self.root, error=str(e))
            raise TransportError(error_msg) from e

    def connect(self) -> None:
        """Probe the server root with an OPTIONS request.

        Raises:
            ConnectionError: If the server is unreachable, rejects the
                credentials or answers with an error status
        """
        try:
            self.http.options("").raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            error_msg = f"Failed to connect to WebDAV server '{self.root}': {e}"
            logger.error(error_msg, error=str(e))
            raise ConnectionError(error_msg) from e
        logger.debug("WebDAV connection established", root=self.root)

    def read_dir(self, path: str) -> list[DirEntry]:
        """List the immediate children of a directory."""
        with self._translate_errors("read directory", path):
            items = self.client.ls(path, detail=True)

        own_path = path.strip(NATIVE_SEPARATOR)
        entries = []
        for item in items:
            full_name = item["name"].strip(NATIVE_SEPARATOR)
            if full_name == own_path:
                continue
            _, name = split_dir_and_name(full_name)
            entries.append(DirEntry(name=name, is_dir=item.get("type") == "directory"))
        return entries

    def mkdir_all(self, path: str) -> None:
        """Create a directory and any missing parents, top down.

        MKCOL answers 405 for a collection that already exists, which webdav4
        raises as ``ResourceAlreadyExists``.
        """
        parts = [part for part in path.split(NATIVE_SEPARATOR) if part]
        with self._translate_errors("create directory", path):
            for depth in range(1, len(parts) + 1):
                directory = NATIVE_SEPARATOR.join(parts[:depth])
                try:
                    self.client.mkdir(directory)
                except ResourceAlreadyExists:
                    continue

    def write_stream(self, path: str, stream: BinaryIO) -> None:
        """Upload a stream, replacing any existing file."""
        with self._translate_errors("write", path):
            self.client.upload_fileobj(stream, path, overwrite=True)

    def read_stream(self, path: str) -> BinaryIO:
        """Download a file into a rewound spooled temporary file."""
        buffer = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE)
        try:
            with self._translate_errors("read", path):
                self.client.download_fileobj(path, buffer)
        except TransportError:
            buffer.close()
            raise
        buffer.seek(0)
        return buffer  # type: ignore[return-value]

    def remove(self, path: str) -> None:
        """Remove a file or directory."""
        with self._translate_errors("remove", path):
            self.client.remove(path)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._http is not None:
            self._http.close()
            self._http = None
            self._client = None

    def __enter__(self) -> "WebDAVTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
