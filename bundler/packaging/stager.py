"""Stager: lays a bundle out as a plain directory tree.

Produces the same logical contents as the archive, unzipped:

    <staging_dir>/bundle.conf
    <staging_dir>/<package_name>/<destination>...

Existing files are overwritten. A failed run is not rolled back; the
next run repairs the tree by overwriting.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from bundler.descriptor.renderer import render_bundle_conf
from bundler.model.types import BundleSpec, Mapping
from bundler.packaging.archive import write_config
from bundler.packaging.fileio import copy_file
from bundler.packaging.mappings import validate_mappings

logger = logging.getLogger(__name__)


def stage(
    spec: BundleSpec,
    mappings: Iterable[Mapping],
    staging_dir: Path,
) -> Path:
    """Stage ``spec`` and its files into ``staging_dir``.

    Returns the component directory (``staging_dir / package_name``).

    Raises:
        MappingError: If a mapping destination is unsafe or clashes with another.
        OSError: On the first copy or write failure.
    """
    validated = validate_mappings(mappings)

    write_config(staging_dir, render_bundle_conf(spec))

    component_dir = staging_dir / spec.package_name
    for mapping in validated:
        copy_file(mapping.source, component_dir / mapping.destination)

    logger.info(
        "Staged %d files for %s into %s",
        len(validated), spec.package_name, staging_dir,
    )
    return component_dir
