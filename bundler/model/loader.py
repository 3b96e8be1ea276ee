"""Bundle descriptor loading.

Reads a ``bundle.yaml`` file, validates it and resolves it into a
BundleSpec. Example:

    name: my-app
    nr-of-cpus: 0.5
    memory: 64m
    disk-space: 10MB
    roles: [web-server]
    endpoints:
      web:
        protocol: http
        bind-port: 9000
        services: ["http://:9000"]

Keys may be written with dashes or underscores.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from bundler.model.bytesize import parse_bytes
from bundler.model.defaults import check_package_name, resolve_spec
from bundler.model.types import BundleConfigError, BundleSpec, Bytes, Endpoint

logger = logging.getLogger(__name__)


def _normalise_keys(data: Any) -> Any:
    if isinstance(data, dict):
        return {
            (k.replace("-", "_") if isinstance(k, str) else k): v
            for k, v in data.items()
        }
    return data


class EndpointModel(BaseModel):
    """One entry of the ``endpoints`` mapping."""

    model_config = {"extra": "forbid"}

    protocol: str
    bind_port: int = Field(..., ge=0)
    services: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalise_keys(cls, data: Any) -> Any:
        return _normalise_keys(data)


class BundleDescriptor(BaseModel):
    """Validated contents of a bundle descriptor file."""

    model_config = {"extra": "forbid"}

    name: str = Field(..., min_length=1)
    nr_of_cpus: float = Field(..., ge=0, allow_inf_nan=False)
    memory: Bytes
    disk_space: Bytes
    package_name: Optional[str] = None
    system: Optional[str] = None
    roles: list[str] = Field(default_factory=list)
    description: str = ""
    file_system_type: Optional[str] = None
    executable_name: Optional[str] = None
    start_command: Optional[list[str]] = None
    endpoints: Optional[dict[str, EndpointModel]] = None

    @model_validator(mode="before")
    @classmethod
    def normalise_keys(cls, data: Any) -> Any:
        return _normalise_keys(data)

    @field_validator("memory", "disk_space", mode="before")
    @classmethod
    def parse_size(cls, v: Any) -> Bytes:
        if isinstance(v, Bytes):
            return v
        if not isinstance(v, (int, str)):
            raise ValueError(f"expected an integer or size string, got {v!r}")
        try:
            return parse_bytes(v)
        except BundleConfigError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("name", "package_name")
    @classmethod
    def single_segment(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            return check_package_name(v)
        except BundleConfigError as exc:
            raise ValueError(str(exc)) from exc

    def to_spec(self) -> BundleSpec:
        endpoints = None
        if self.endpoints is not None:
            endpoints = {
                label: Endpoint(ep.protocol, ep.bind_port, frozenset(ep.services))
                for label, ep in self.endpoints.items()
            }

        return resolve_spec(
            name=self.name,
            nr_of_cpus=self.nr_of_cpus,
            memory=self.memory,
            disk_space=self.disk_space,
            package_name=self.package_name,
            system=self.system,
            roles=self.roles,
            start_command=self.start_command,
            endpoints=endpoints,
            description=self.description,
            file_system_type=self.file_system_type,
            executable_name=self.executable_name,
        )


def parse_descriptor(data: Any, source: str = "<descriptor>") -> BundleSpec:
    """Validate an already-parsed descriptor document and resolve it.

    Raises:
        BundleConfigError: If the document is not a mapping or fails validation.
    """
    if not isinstance(data, dict):
        raise BundleConfigError(f"{source}: descriptor must be a mapping")

    try:
        descriptor = BundleDescriptor.model_validate(data)
    except ValidationError as exc:
        raise BundleConfigError(f"{source}: invalid bundle descriptor\n{exc}") from exc

    return descriptor.to_spec()


def load_spec(path: Path) -> BundleSpec:
    """Load ``path`` (YAML) into a resolved BundleSpec.

    Raises:
        BundleConfigError: If the file is missing, unparseable or invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise BundleConfigError(f"{path}: descriptor file not found") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise BundleConfigError(f"{path}: malformed YAML: {exc}") from exc

    spec = parse_descriptor(data, source=str(path))
    logger.debug("Loaded bundle descriptor %s: %s", path, spec.to_dict())
    return spec
