"""Storage transports the object store runs on."""

from .base import DirEntry, Transport, TransportFactory
from .webdav import WebDAVTransport

__all__ = ["DirEntry", "Transport", "TransportFactory", "WebDAVTransport"]
