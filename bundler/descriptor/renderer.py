"""Renders a BundleSpec into the bundle.conf document."""

from bundler.descriptor.builder import ConfigObject
from bundler.model.types import BundleSpec, Endpoint

BUNDLE_CONF_VERSION = "1.0.0"

# File name of the rendered descriptor inside archives and staging dirs
BUNDLE_CONF_NAME = "bundle.conf"


def build_endpoints(endpoints: dict[str, Endpoint]) -> ConfigObject:
    obj = ConfigObject()
    for label, endpoint in endpoints.items():
        obj.set(
            label,
            ConfigObject()
            .set("protocol", endpoint.protocol)
            .set("bind-port", endpoint.bind_port)
            .set("services", sorted(endpoint.services)),
            quoted_key=True,
        )
    return obj


def build_bundle_conf(spec: BundleSpec) -> ConfigObject:
    """Build the structured bundle configuration for a spec.

    Top-level key order is fixed: version, name, system, nrOfCpus,
    memory, diskSpace, roles, components.
    """
    component = (
        ConfigObject()
        .set("description", spec.description)
        .set("file-system-type", spec.file_system_type)
        .set("start-command", list(spec.start_command))
        .set("endpoints", build_endpoints(spec.endpoints))
    )

    return (
        ConfigObject()
        .set("version", BUNDLE_CONF_VERSION)
        .set("name", spec.name)
        .set("system", spec.system)
        .set("nrOfCpus", float(spec.nr_of_cpus))
        .set("memory", spec.memory.underlying)
        .set("diskSpace", spec.disk_space.underlying)
        .set("roles", sorted(spec.roles))
        .set(
            "components",
            ConfigObject().set(spec.package_name, component, quoted_key=True),
        )
    )


def render_bundle_conf(spec: BundleSpec) -> str:
    """Return the canonical bundle.conf text for a spec."""
    return build_bundle_conf(spec).render()
