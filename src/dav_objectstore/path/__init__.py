from .mapping import (
    NATIVE_SEPARATOR,
    bucket_prefix,
    cut_prefix,
    normalize_prefix,
    split_dir_and_name,
    to_storage_path,
)

__all__ = [
    "NATIVE_SEPARATOR",
    "bucket_prefix",
    "cut_prefix",
    "normalize_prefix",
    "split_dir_and_name",
    "to_storage_path",
]
