"""Archive assembler: builds content-addressed bundle archives.

Steps:
  1. Render bundle.conf into a scratch directory under the target root.
  2. Zip bundle.conf plus every mapping (placed under <package_name>/)
     into <target_root>/<package_name>.zip, with every entry wrapped in a
     single top-level <package_name>/ directory.
  3. SHA-256 the archive and move it to <package_name>-<hex>.zip.

The zip is byte-for-byte reproducible: entries are sorted, timestamps
and permissions are fixed. Identical inputs therefore always give the
same file name. The un-hashed archive is never the published name and
is removed if any step fails.
"""

import logging
import shutil
import stat
import zipfile
from collections.abc import Iterable
from pathlib import Path

from bundler.descriptor.renderer import BUNDLE_CONF_NAME, render_bundle_conf
from bundler.model.types import BundleSpec, Mapping
from bundler.packaging.digest import sha256_hex
from bundler.packaging.fileio import move_file, scratch_dir, write_text
from bundler.packaging.mappings import relocate, validate_mappings

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = ".zip"

# Earliest timestamp a zip entry can carry
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

_FILE_ATTR = (stat.S_IFREG | 0o644) << 16
_DIR_ATTR = ((stat.S_IFDIR | 0o755) << 16) | 0x10  # 0x10 = MS-DOS directory flag

_COPY_CHUNK_SIZE = 1024 * 1024


def hashed_archive_name(archive_name: str, hex_digest: str) -> str:
    """Insert ``-<hex_digest>`` before the file extension.

    >>> hashed_archive_name("my-app.zip", "ab12")
    'my-app-ab12.zip'
    """
    ext_index = archive_name.rfind(".")
    if ext_index <= 0:
        return f"{archive_name}-{hex_digest}"
    return f"{archive_name[:ext_index]}-{hex_digest}{archive_name[ext_index:]}"


def write_config(directory: Path, contents: str) -> Path:
    """Write bundle.conf into ``directory``."""
    config_file = write_text(directory / BUNDLE_CONF_NAME, contents)
    logger.debug("Wrote %s (%d chars)", config_file, len(contents))
    return config_file


def _dir_info(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name.rstrip("/") + "/", date_time=ZIP_EPOCH)
    info.create_system = 3
    info.external_attr = _DIR_ATTR
    info.compress_type = zipfile.ZIP_STORED
    return info


def _file_info(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=ZIP_EPOCH)
    info.create_system = 3
    info.external_attr = _FILE_ATTR
    info.compress_type = zipfile.ZIP_DEFLATED
    return info


def write_zip(archive: Path, entries: Iterable[Mapping], top: str) -> int:
    """Write a deterministic zip of ``entries`` wrapped in ``top/``.

    Returns the number of file entries written.
    """
    ordered = sorted(entries, key=lambda m: m.destination)
    archive.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(_dir_info(top), b"")
        for entry in ordered:
            info = _file_info(f"{top}/{entry.destination}")
            size = entry.source.stat().st_size
            with entry.source.open("rb") as src, zf.open(
                info, "w", force_zip64=size >= zipfile.ZIP64_LIMIT
            ) as dest:
                shutil.copyfileobj(src, dest, _COPY_CHUNK_SIZE)

    return len(ordered)


def create_archive(
    spec: BundleSpec,
    mappings: Iterable[Mapping],
    target_root: Path,
) -> Path:
    """Build the bundle archive for ``spec`` and return its digest-named path.

    Args:
        spec: Resolved bundle settings; package_name names the archive.
        mappings: Component files, destinations relative to the component dir.
        target_root: Directory that receives the archive.

    Raises:
        MappingError: If a mapping destination is unsafe or clashes with another.
        OSError: On any read, write or move failure. Nothing is published.
    """
    package_name = spec.package_name
    component_mappings = relocate(validate_mappings(mappings), package_name)

    target_root.mkdir(parents=True, exist_ok=True)
    archive = target_root / f"{package_name}{ARCHIVE_EXTENSION}"

    try:
        with scratch_dir(target_root) as scratch:
            config_file = write_config(scratch, render_bundle_conf(spec))
            entries = [Mapping(config_file, BUNDLE_CONF_NAME), *component_mappings]
            count = write_zip(archive, entries, top=package_name)
        logger.info("Assembled %s with %d entries", archive.name, count)

        hex_digest = sha256_hex(archive)
        hashed = move_file(
            archive, archive.with_name(hashed_archive_name(archive.name, hex_digest))
        )
    except Exception:
        archive.unlink(missing_ok=True)
        raise

    logger.info("Bundle archive ready: %s", hashed)
    return hashed
