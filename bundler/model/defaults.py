"""Default resolution for optional bundle settings.

Only name, CPU count, memory and disk space must be given; everything
else falls back to the values below.
"""

import math
from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath
from typing import Optional

from bundler.model.types import BundleConfigError, Bytes, BundleSpec, Endpoint

DEFAULT_FILE_SYSTEM_TYPE = "universal"


def check_package_name(value: str) -> str:
    """Return value if it can be used as a single directory name.

    The package name becomes the top-level folder of both the archive and
    the staging tree, so separators and dot segments are refused.
    """
    if not value or value in (".", "..") or any(c in value for c in "/\\\0"):
        raise BundleConfigError(
            f"Package name {value!r} must be a single path segment"
        )
    return value


def default_endpoints() -> dict[str, Endpoint]:
    return {"web": Endpoint("http", 0, frozenset({"http://:9000"}))}


def default_start_command(
    package_name: str,
    executable_name: str,
    memory: Bytes,
) -> tuple[str, ...]:
    """Launch script in the component's bin folder plus heap flags.

    Heap flags use the kilobyte-aligned memory value.
    """
    heap = memory.round1k().underlying
    return (
        str(PurePosixPath(package_name) / "bin" / executable_name),
        f"-J-Xms{heap}",
        f"-J-Xmx{heap}",
    )


def resolve_spec(
    name: str,
    nr_of_cpus: float,
    memory: Bytes,
    disk_space: Bytes,
    package_name: Optional[str] = None,
    system: Optional[str] = None,
    roles: Optional[Iterable[str]] = None,
    start_command: Optional[Iterable[str]] = None,
    endpoints: Optional[Mapping[str, Endpoint]] = None,
    description: str = "",
    file_system_type: Optional[str] = None,
    executable_name: Optional[str] = None,
) -> BundleSpec:
    """Build an immutable BundleSpec, filling in defaults for missing settings."""
    package_name = check_package_name(package_name or name)
    if not math.isfinite(nr_of_cpus):
        raise BundleConfigError(f"nr_of_cpus must be finite, got {nr_of_cpus!r}")

    if start_command is None:
        start_command = default_start_command(
            package_name, executable_name or package_name, memory
        )

    return BundleSpec(
        name=name,
        system=system or package_name,
        nr_of_cpus=float(nr_of_cpus),
        memory=memory,
        disk_space=disk_space,
        package_name=package_name,
        roles=frozenset(roles or ()),
        start_command=tuple(start_command),
        endpoints=dict(endpoints) if endpoints is not None else default_endpoints(),
        description=description,
        file_system_type=file_system_type or DEFAULT_FILE_SYSTEM_TYPE,
    )
