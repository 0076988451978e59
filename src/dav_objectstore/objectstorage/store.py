"""Object store operations on top of a WebDAV server.

``WebDAVObjectStore`` presents buckets of flat, delimiter-separated keys the way
an S3-style plugin host expects them, storing each object as a file at
``<bucketsDir><bucket><delimiter><key>``. Directories are created on first write
and the directory of a deleted object is removed once it is empty.

Every operation opens its own transport connection and closes it before
returning, so one initialized store can serve concurrent callers.

Usage:
    store = WebDAVObjectStore()
    store.init({"root": "https://dav.example.com", "user": "velero",
                "webDAVPassword": "secret", "bucketsDir": "backups"})
    store.put_object("velero", "backups/nightly/manifest.json", stream)
    store.list_common_prefixes("velero", "backups", "/")
"""

from datetime import timedelta
from typing import BinaryIO, Mapping, Optional

from dav_objectstore.core import apply_log_level, get_logger, get_tracer
from dav_objectstore.core.exceptions import (
    ConnectionError,
    DeleteError,
    NotFoundError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
    WriteError,
)
from dav_objectstore.objectstorage.listing import (
    PrefixDiscovery,
    list_direct_objects,
    prefix_discovery_for,
)
from dav_objectstore.path import (
    bucket_prefix,
    normalize_prefix,
    split_dir_and_name,
    to_storage_path,
)
from dav_objectstore.schemas import WebDAVStoreConfig
from dav_objectstore.transport import Transport, TransportFactory, WebDAVTransport

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class WebDAVObjectStore:
    """Bucket/key object store backed by a WebDAV directory tree."""

    def __init__(self, transport_factory: Optional[TransportFactory] = None):
        """Create an uninitialized store.

        Args:
            transport_factory: Builds one transport connection from the
                configuration; defaults to ``WebDAVTransport.from_config``
        """
        self.transport_factory = transport_factory or WebDAVTransport.from_config
        self._config: Optional[WebDAVStoreConfig] = None
        self._prefix_discovery: Optional[PrefixDiscovery] = None

    @property
    def config(self) -> WebDAVStoreConfig:
        """Configuration set by ``init``."""
        if self._config is None:
            raise ValidationError("WebDAV object store is not initialized")
        return self._config

    def init(self, config: Mapping[str, str]) -> None:
        """Configure the store from the plugin configuration map.

        Incomplete settings are only logged. A missing root or username
        surfaces as a ``ConnectionError`` on the first operation.

        Args:
            config: String map with the keys root, user, webDAVPassword,
                bucketsDir, bucket, delimiter and logLevel
        """
        store_config = WebDAVStoreConfig.from_config_map(config)
        apply_log_level(store_config.log_level)

        self._config = store_config
        self._prefix_discovery = prefix_discovery_for(store_config.delimiter)
        self._report_config(store_config)

    @staticmethod
    def _report_config(config: WebDAVStoreConfig) -> None:
        if not config.root:
            logger.error("WebDAV root is empty - please provide a valid URL")
        if not config.user:
            logger.error("WebDAV username is empty")
        if not config.password:
            logger.warning("WebDAV password is empty")
        if config.root and config.user and config.password:
            logger.info(
                "Server root, username and password for WebDAV are all set",
                root=config.root,
                user=config.user,
            )
        if not config.uses_native_delimiter:
            logger.warning(
                "Using a delimiter other than '/' with WebDAV is experimental, "
                "please test your setup carefully",
                delimiter=config.delimiter,
            )
        logger.info(
            "Using bucket", bucket=config.bucket, buckets_dir=config.buckets_dir
        )

    def _storage_path(self, bucket: str, key: str) -> str:
        config = self.config
        return to_storage_path(config.buckets_dir, bucket, key, config.delimiter)

    def _connect(self) -> Transport:
        transport = self.transport_factory(self.config)
        try:
            transport.connect()
        except ConnectionError as e:
            logger.error(
                "Error connecting to WebDAV server",
                root=self.config.root,
                error=str(e),
            )
            transport.close()
            raise
        return transport

    def put_object(self, bucket: str, key: str, body: BinaryIO) -> None:
        """Write an object, creating its directory when missing.

        Raises:
            ConnectionError: If the server cannot be reached
            WriteError: If creating the directory or writing the file fails
        """
        path = self._storage_path(bucket, key)
        directory, _ = split_dir_and_name(path)

        with tracer.start_as_current_span("dav_objectstore.put_object"):
            with self._connect() as transport:
                try:
                    if directory:
                        transport.mkdir_all(directory)
                    transport.write_stream(path, body)
                except TransportError as e:
                    error_msg = (
                        f"Failed to write object '{key}' to bucket '{bucket}': {e}"
                    )
                    logger.error(error_msg, path=path, error=str(e))
                    raise WriteError(error_msg) from e

        logger.info("Object written", bucket=bucket, key=key, path=path)

    def object_exists(self, bucket: str, key: str) -> bool:
        """Check whether a file exists at the object's path.

        A missing parent directory means the object does not exist.
        """
        path = self._storage_path(bucket, key)
        directory, name = split_dir_and_name(path)

        with tracer.start_as_current_span("dav_objectstore.object_exists"):
            with self._connect() as transport:
                try:
                    entries = transport.read_dir(directory)
                except NotFoundError:
                    return False
                except TransportError as e:
                    logger.error(
                        "Error reading directory via WebDAV",
                        directory=directory,
                        error=str(e),
                    )
                    raise

        return any(not entry.is_dir and entry.name == name for entry in entries)

    def get_object(self, bucket: str, key: str) -> BinaryIO:
        """Open an object for reading; the caller must close the stream.

        Raises:
            ConnectionError: If the server cannot be reached
            NotFoundError: If the object does not exist
        """
        path = self._storage_path(bucket, key)

        with tracer.start_as_current_span("dav_objectstore.get_object"):
            with self._connect() as transport:
                stream = transport.read_stream(path)

        logger.info("Object opened", bucket=bucket, key=key, path=path)
        return stream

    def list_common_prefixes(self, bucket: str, prefix: str, delimiter: str) -> list[str]:
        """List the common prefixes below ``prefix`` with the bucket name removed.

        For bucket "backups" with the objects ``my-app/cars/a``,
        ``my-app/trains/b`` and ``some-other-app/bridges/c``, the prefix
        "my-app" gives ``["my-app/cars/", "my-app/trains/"]``.

        A delimiter differing from the configured one is logged and then used.
        A bucket or prefix that was never written to yields an empty list.
        """
        config = self.config
        discovery = self._prefix_discovery
        if delimiter != config.delimiter:
            logger.warning(
                "Got unexpected delimiter, WebDAV backups may not work correctly",
                delimiter=delimiter,
                expected_delimiter=config.delimiter,
            )
            discovery = prefix_discovery_for(delimiter)
        assert discovery is not None

        with tracer.start_as_current_span("dav_objectstore.list_common_prefixes"):
            with self._connect() as transport:
                try:
                    prefixes = discovery.discover(
                        transport, config.buckets_dir, bucket, prefix
                    )
                except TransportError as e:
                    logger.error(
                        "Error reading directories via WebDAV",
                        bucket=bucket,
                        prefix=prefix,
                        error=str(e),
                    )
                    raise

        logger.info(
            "Common prefixes listed",
            bucket=bucket,
            prefix=prefix,
            prefix_count=len(prefixes),
        )
        return prefixes

    def list_objects(self, bucket: str, prefix: str) -> list[str]:
        """List the keys of objects stored directly under a prefix."""
        config = self.config
        key_prefix = bucket_prefix(config.buckets_dir, bucket, config.delimiter)
        directory = f"{key_prefix}{normalize_prefix(prefix, config.delimiter)}"

        with tracer.start_as_current_span("dav_objectstore.list_objects"):
            with self._connect() as transport:
                try:
                    keys = list_direct_objects(transport, directory, key_prefix)
                except TransportError as e:
                    logger.error(
                        "Error reading directory via WebDAV",
                        directory=directory,
                        error=str(e),
                    )
                    raise

        logger.info(
            "Objects listed", bucket=bucket, prefix=prefix, object_count=len(keys)
        )
        return keys

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object and its directory if that leaves it empty.

        Only the immediate parent directory is removed; emptied ancestors
        further up stay in place.

        Raises:
            ConnectionError: If the server cannot be reached
            DeleteError: If removing the object, listing its directory or
                removing the emptied directory fails
        """
        path = self._storage_path(bucket, key)
        directory, _ = split_dir_and_name(path)

        with tracer.start_as_current_span("dav_objectstore.delete_object"):
            with self._connect() as transport:
                try:
                    transport.remove(path)
                    if directory and not transport.read_dir(directory):
                        transport.remove(directory)
                        logger.info("Empty directory removed", directory=directory)
                except TransportError as e:
                    error_msg = (
                        f"Failed to delete object '{key}' from bucket '{bucket}': {e}"
                    )
                    logger.error(error_msg, path=path, error=str(e))
                    raise DeleteError(error_msg) from e

        logger.info("Object deleted", bucket=bucket, key=key, path=path)

    def create_signed_url(self, bucket: str, key: str, ttl: timedelta) -> str:
        """Signed URLs need server support that WebDAV does not have.

        Raises:
            UnsupportedOperationError: Always
        """
        raise UnsupportedOperationError(
            "create_signed_url is not supported by the WebDAV object store"
        )
