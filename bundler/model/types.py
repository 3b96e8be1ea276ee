"""Shared types for bundle specifications.

BundleSpec is the single resolved input of the packaging pipeline.
It is built once per invocation (see bundler.model.defaults) and is
never mutated afterwards.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType


class BundleError(Exception):
    """Base class for all bundler failures that are not plain I/O errors."""


class BundleConfigError(BundleError):
    """Raised when a bundle descriptor or a size value cannot be used."""


class MappingError(BundleError):
    """Raised when a file mapping would land outside the component directory."""


@dataclass(frozen=True)
class Bytes:
    """A byte count.

    Memory and disk settings are expressed in Bytes. round1k() gives the
    kilobyte-aligned value used for JVM-style -Xms/-Xmx flags.
    """

    underlying: int

    def round1k(self) -> "Bytes":
        return Bytes((max(self.underlying - 1, 0) >> 10 << 10) + 1024)


@dataclass(frozen=True)
class Endpoint:
    """A named network service exposed by a component."""

    protocol: str
    bind_port: int
    services: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Mapping:
    """A file belonging to the component and where it goes inside it.

    destination is a POSIX-style path relative to the component directory.
    """

    source: Path
    destination: str


@dataclass(frozen=True)
class BundleSpec:
    """Fully resolved bundle settings.

    endpoints keeps insertion order; roles and endpoint services are
    unordered and rendered sorted.
    """

    name: str
    system: str
    nr_of_cpus: float
    memory: Bytes
    disk_space: Bytes
    package_name: str
    roles: frozenset[str] = field(default_factory=frozenset)
    start_command: tuple[str, ...] = ()
    endpoints: "MappingProxyType[str, Endpoint]" = field(
        default_factory=lambda: MappingProxyType({})
    )
    description: str = ""
    file_system_type: str = "universal"

    def __post_init__(self) -> None:
        # Collections are copied into read-only containers so a spec can be
        # shared and hashed.
        object.__setattr__(self, "roles", frozenset(self.roles))
        object.__setattr__(self, "start_command", tuple(self.start_command))
        object.__setattr__(self, "endpoints", MappingProxyType(dict(self.endpoints)))

    def __hash__(self) -> int:
        return hash(
            (
                self.name,
                self.system,
                self.nr_of_cpus,
                self.memory,
                self.disk_space,
                self.package_name,
                self.roles,
                self.start_command,
                frozenset(self.endpoints.items()),
                self.description,
                self.file_system_type,
            )
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "system": self.system,
            "nr_of_cpus": self.nr_of_cpus,
            "memory": self.memory.underlying,
            "disk_space": self.disk_space.underlying,
            "package_name": self.package_name,
            "roles": sorted(self.roles),
            "start_command": list(self.start_command),
            "endpoints": {
                label: {
                    "protocol": ep.protocol,
                    "bind_port": ep.bind_port,
                    "services": sorted(ep.services),
                }
                for label, ep in self.endpoints.items()
            },
            "description": self.description,
            "file_system_type": self.file_system_type,
        }
