"""Bundle specification types, byte units and descriptor loading.

Public API:
    load_spec(path) -> BundleSpec
    resolve_spec(name, nr_of_cpus, memory, disk_space, ...) -> BundleSpec
    parse_bytes(value) -> Bytes
"""

from bundler.model.bytesize import (
    gibibytes,
    gigabytes,
    kibibytes,
    kilobytes,
    mebibytes,
    megabytes,
    parse_bytes,
    tebibytes,
    terabytes,
)
from bundler.model.defaults import check_package_name, resolve_spec
from bundler.model.loader import load_spec, parse_descriptor
from bundler.model.types import (
    BundleConfigError,
    BundleError,
    BundleSpec,
    Bytes,
    Endpoint,
    Mapping,
    MappingError,
)

__all__ = [
    "load_spec",
    "parse_descriptor",
    "resolve_spec",
    "check_package_name",
    "parse_bytes",
    "kilobytes",
    "megabytes",
    "gigabytes",
    "terabytes",
    "kibibytes",
    "mebibytes",
    "gibibytes",
    "tebibytes",
    "BundleConfigError",
    "BundleError",
    "BundleSpec",
    "Bytes",
    "Endpoint",
    "Mapping",
    "MappingError",
]
