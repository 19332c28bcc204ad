"""Song manifest processing."""

from .pathnames import (
    PathName,
    build_path_name_manifest,
    deduplicate,
    derive_path_name,
    derive_path_names,
    merge_path_names,
)

__all__ = [
    "PathName",
    "derive_path_name",
    "derive_path_names",
    "deduplicate",
    "merge_path_names",
    "build_path_name_manifest",
]
