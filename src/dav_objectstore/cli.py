"""Command-line interface for dav-objectstore.

This module exposes the object store operations against a WebDAV server.

Commands:
    - put: Upload a local file as an object
    - get: Download an object to a file or stdout
    - exists: Check whether an object exists
    - delete: Delete an object (and its emptied directory)
    - list-objects: List objects directly under a prefix
    - list-prefixes: List common prefixes below a prefix

Connection options may also be given through the WEBDAV_ROOT, WEBDAV_USER and
WEBDAV_PASSWORD environment variables.
"""

import shutil
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .core.exceptions import DavObjectStoreError
from .objectstorage import WebDAVObjectStore

app = typer.Typer(
    name="dav-objectstore",
    help="S3-style bucket/key object storage on WebDAV servers.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"dav-objectstore {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    dav-objectstore: object storage operations on a WebDAV server.
    """
    pass


BucketArgument = Annotated[str, typer.Argument(help="Bucket name")]
KeyArgument = Annotated[str, typer.Argument(help="Object key within the bucket")]
RootOption = Annotated[
    str, typer.Option("--root", envvar="WEBDAV_ROOT", help="WebDAV server base URL")
]
UserOption = Annotated[
    str, typer.Option("--user", envvar="WEBDAV_USER", help="WebDAV username")
]
PasswordOption = Annotated[
    str,
    typer.Option(
        "--password",
        envvar="WEBDAV_PASSWORD",
        help="WebDAV password",
        show_default=False,
    ),
]
BucketsDirOption = Annotated[
    str,
    typer.Option("--buckets-dir", help="Directory prepended to every bucket"),
]
DelimiterOption = Annotated[
    str, typer.Option("--delimiter", help="Logical key delimiter (experimental)")
]
LogLevelOption = Annotated[
    str, typer.Option("--log-level", help="Verbosity: WARN, INFO or DEBUG")
]
PrefixOption = Annotated[str, typer.Option("--prefix", help="Key prefix to list")]


def _create_store(
    root: str,
    user: str,
    password: str,
    buckets_dir: str,
    delimiter: str,
    log_level: str,
) -> WebDAVObjectStore:
    """Create and initialize a store from CLI options."""
    store = WebDAVObjectStore()
    store.init(
        {
            "root": root,
            "user": user,
            "webDAVPassword": password,
            "bucketsDir": buckets_dir,
            "delimiter": delimiter,
            "logLevel": log_level,
        }
    )
    return store


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


@app.command("put")
def put_cmd(
    bucket: BucketArgument,
    key: KeyArgument,
    file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Local file to upload"),
    ],
    root: RootOption = "",
    user: UserOption = "",
    password: PasswordOption = "",
    buckets_dir: BucketsDirOption = "",
    delimiter: DelimiterOption = "/",
    log_level: LogLevelOption = "WARN",
) -> None:
    """
    Upload a local file as an object.

    Example:
        dav-objectstore put velero backups/nightly/manifest.json ./manifest.json \
            --root https://dav.example.com --user velero
    """
    try:
        store = _create_store(root, user, password, buckets_dir, delimiter, log_level)
        with file.open("rb") as body:
            store.put_object(bucket, key, body)
    except DavObjectStoreError as e:
        raise _fail(e)

    typer.echo(f"Uploaded {file} to {bucket}/{key}")


@app.command("get")
def get_cmd(
    bucket: BucketArgument,
    key: KeyArgument,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
    root: RootOption = "",
    user: UserOption = "",
    password: PasswordOption = "",
    buckets_dir: BucketsDirOption = "",
    delimiter: DelimiterOption = "/",
    log_level: LogLevelOption = "WARN",
) -> None:
    """
    Download an object to a file or stdout.
    """
    try:
        store = _create_store(root, user, password, buckets_dir, delimiter, log_level)
        stream = store.get_object(bucket, key)
    except DavObjectStoreError as e:
        raise _fail(e)

    with stream:
        if output is None:
            typer.echo(stream.read(), nl=False)
        else:
            with output.open("wb") as target:
                shutil.copyfileobj(stream, target)
            typer.echo(f"Downloaded {bucket}/{key} to {output}")


@app.command("exists")
def exists_cmd(
    bucket: BucketArgument,
    key: KeyArgument,
    root: RootOption = "",
    user: UserOption = "",
    password: PasswordOption = "",
    buckets_dir: BucketsDirOption = "",
    delimiter: DelimiterOption = "/",
    log_level: LogLevelOption = "WARN",
) -> None:
    """
    Check whether an object exists; exits with status 1 when it does not.
    """
    try:
        store = _create_store(root, user, password, buckets_dir, delimiter, log_level)
        found = store.object_exists(bucket, key)
    except DavObjectStoreError as e:
        raise _fail(e)

    if not found:
        typer.echo(f"✗ {bucket}/{key} does not exist", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ {bucket}/{key} exists")


@app.command("delete")
def delete_cmd(
    bucket: BucketArgument,
    key: KeyArgument,
    root: RootOption = "",
    user: UserOption = "",
    password: PasswordOption = "",
    buckets_dir: BucketsDirOption = "",
    delimiter: DelimiterOption = "/",
    log_level: LogLevelOption = "WARN",
) -> None:
    """
    Delete an object, removing its directory if that leaves it empty.
    """
    try:
        store = _create_store(root, user, password, buckets_dir, delimiter, log_level)
        store.delete_object(bucket, key)
    except DavObjectStoreError as e:
        raise _fail(e)

    typer.echo(f"Deleted {bucket}/{key}")


@app.command("list-objects")
def list_objects_cmd(
    bucket: BucketArgument,
    prefix: PrefixOption = "",
    root: RootOption = "",
    user: UserOption = "",
    password: PasswordOption = "",
    buckets_dir: BucketsDirOption = "",
    delimiter: DelimiterOption = "/",
    log_level: LogLevelOption = "WARN",
) -> None:
    """
    List objects stored directly under a prefix.
    """
    try:
        store = _create_store(root, user, password, buckets_dir, delimiter, log_level)
        keys = store.list_objects(bucket, prefix)
    except DavObjectStoreError as e:
        raise _fail(e)

    if keys:
        typer.echo(f"Found {len(keys)} objects:")
        for key in keys:
            typer.echo(f"  {key}")
    else:
        typer.echo("No objects found.")


@app.command("list-prefixes")
def list_prefixes_cmd(
    bucket: BucketArgument,
    prefix: PrefixOption = "",
    root: RootOption = "",
    user: UserOption = "",
    password: PasswordOption = "",
    buckets_dir: BucketsDirOption = "",
    delimiter: DelimiterOption = "/",
    log_level: LogLevelOption = "WARN",
) -> None:
    """
    List common prefixes (virtual subfolders) below a prefix.

    Example:
        dav-objectstore list-prefixes velero --prefix backups \
            --root https://dav.example.com --user velero --buckets-dir velero-data
    """
    try:
        store = _create_store(root, user, password, buckets_dir, delimiter, log_level)
        prefixes = store.list_common_prefixes(bucket, prefix, delimiter)
    except DavObjectStoreError as e:
        raise _fail(e)

    if prefixes:
        typer.echo(f"Found {len(prefixes)} prefixes:")
        for common_prefix in prefixes:
            typer.echo(f"  {common_prefix}")
    else:
        typer.echo("No prefixes found.")


if __name__ == "__main__":
    app()
