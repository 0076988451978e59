"""Test configuration and fixtures for dav-objectstore."""

import io

import pytest

from dav_objectstore.core.exceptions import (
    ConnectionError,
    NotFoundError,
    TransportError,
)
from dav_objectstore.objectstorage import WebDAVObjectStore
from dav_objectstore.transport import DirEntry


def _parent(path):
    return path.rpartition("/")[0]


class InMemoryFileTree:
    """Directory tree held in memory, shared by every connection of a test."""

    def __init__(self):
        self.files = {}
        self.dirs = {""}
        self.reachable = True
        self.failures = set()  # (operation, path) pairs that raise TransportError
        self.read_dir_calls = []
        self.connections = 0
        self.closed = 0

    @staticmethod
    def normalize(path):
        return path.strip("/")

    def make_dirs(self, path):
        parts = self.normalize(path).split("/")
        for depth in range(1, len(parts) + 1):
            directory = "/".join(parts[:depth])
            if directory:
                self.dirs.add(directory)

    def add_file(self, path, data=b"data"):
        path = self.normalize(path)
        self.make_dirs(_parent(path))
        self.files[path] = data


class InMemoryTransport:
    """Transport over an InMemoryFileTree with WebDAV-like failure modes."""

    def __init__(self, tree):
        self.tree = tree

    def _check(self, operation, path):
        path = self.tree.normalize(path)
        if (operation, path) in self.tree.failures:
            raise TransportError(f"injected {operation} failure for '{path}'")
        return path

    def connect(self):
        if not self.tree.reachable:
            raise ConnectionError("server unreachable")
        self.tree.connections += 1

    def read_dir(self, path):
        self.tree.read_dir_calls.append(path)
        path = self._check("read_dir", path)
        if path not in self.tree.dirs:
            raise NotFoundError(f"Path not found: '{path}'")

        children = {}
        for directory in self.tree.dirs:
            if directory and _parent(directory) == path:
                children[directory.rpartition("/")[2]] = True
        for file_path in self.tree.files:
            if _parent(file_path) == path:
                children[file_path.rpartition("/")[2]] = False
        return [DirEntry(name, is_dir) for name, is_dir in sorted(children.items())]

    def mkdir_all(self, path):
        self.tree.make_dirs(self._check("mkdir_all", path))

    def write_stream(self, path, stream):
        path = self._check("write_stream", path)
        if _parent(path) not in self.tree.dirs:
            raise NotFoundError(f"Path not found: '{_parent(path)}'")
        self.tree.files[path] = stream.read()

    def read_stream(self, path):
        path = self._check("read_stream", path)
        if path not in self.tree.files:
            raise NotFoundError(f"Path not found: '{path}'")
        return io.BytesIO(self.tree.files[path])

    def remove(self, path):
        path = self._check("remove", path)
        if path in self.tree.files:
            del self.tree.files[path]
        elif path and path in self.tree.dirs:
            nested = f"{path}/"
            self.tree.dirs = {
                d for d in self.tree.dirs if d != path and not d.startswith(nested)
            }
            self.tree.files = {
                f: data for f, data in self.tree.files.items() if not f.startswith(nested)
            }
        else:
            raise NotFoundError(f"Path not found: '{path}'")

    def close(self):
        self.tree.closed += 1

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


@pytest.fixture
def file_tree():
    """Create an empty in-memory directory tree."""
    return InMemoryFileTree()


@pytest.fixture
def transport(file_tree):
    """Create a transport connected to the in-memory tree."""
    return InMemoryTransport(file_tree)


@pytest.fixture
def transport_factory(file_tree):
    """Factory handing out fresh in-memory connections, like WebDAVTransport.from_config."""
    return lambda config: InMemoryTransport(file_tree)


@pytest.fixture
def make_store(transport_factory):
    """Build initialized stores over the in-memory tree."""

    def _make(**config):
        store = WebDAVObjectStore(transport_factory=transport_factory)
        store.init(
            {
                "root": "https://dav.example.com/remote.php/dav",
                "user": "velero",
                "webDAVPassword": "secret",
                **config,
            }
        )
        return store

    return _make


@pytest.fixture
def store(make_store):
    """Create a store with bucketsDir 'backups/' and the native delimiter."""
    return make_store(bucketsDir="backups/")


@pytest.fixture
def backup_tree(file_tree):
    """Populate bucket 'backups' with the my-app / some-other-app layout."""
    file_tree.add_file("backups/backups/my-app/cars/a", b"car")
    file_tree.add_file("backups/backups/my-app/trains/b", b"train")
    file_tree.add_file("backups/backups/some-other-app/bridges/c", b"bridge")
    return file_tree
