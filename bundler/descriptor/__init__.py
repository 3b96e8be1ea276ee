"""Descriptor module: renders bundle.conf from a BundleSpec.

Public API:
    render_bundle_conf(spec) -> str
"""

from bundler.descriptor.builder import ConfigObject
from bundler.descriptor.renderer import (
    BUNDLE_CONF_NAME,
    BUNDLE_CONF_VERSION,
    build_bundle_conf,
    render_bundle_conf,
)

__all__ = [
    "render_bundle_conf",
    "build_bundle_conf",
    "ConfigObject",
    "BUNDLE_CONF_NAME",
    "BUNDLE_CONF_VERSION",
]
