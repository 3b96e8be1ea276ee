"""Packaging module for bundle archives and staging directories.

Public API:
    create_archive(spec, mappings, target_root) -> Path
    stage(spec, mappings, staging_dir) -> Path
    directory_mappings(root) -> list[Mapping]
"""

from bundler.packaging.archive import create_archive
from bundler.packaging.digest import digest_file, sha256_hex
from bundler.packaging.mappings import directory_mappings
from bundler.packaging.stager import stage

__all__ = [
    "create_archive",
    "stage",
    "directory_mappings",
    "digest_file",
    "sha256_hex",
]
