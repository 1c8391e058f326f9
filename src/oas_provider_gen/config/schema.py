"""Binding configuration file (tfpgen.yaml).

Records, per generated resource or data source, which OpenAPI path and
method implement each CRUD action.
"""

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from oas_provider_gen.errors import ConfigError
from oas_provider_gen.probe.base import ActionBinding, Binding, Pseudonym
from oas_provider_gen.probe.naming import valid_hcl_identifier

DEFAULT_CONFIG_FILE = "tfpgen.yaml"
DEFAULT_REGISTRY = "registry.terraform.io"


class TfType(str, Enum):
    RESOURCE = "resource"
    DATA_SOURCE = "data_source"


class BindingInfo(BaseModel):
    """Path/method per CRUD action. `read` is the show action."""

    create: ActionBinding | None = None
    read: ActionBinding | None = None
    update: ActionBinding | None = None
    delete: ActionBinding | None = None
    index: ActionBinding | None = None

    def by_pseudonym(self) -> dict[Pseudonym, ActionBinding]:
        pairs = {
            Pseudonym.CREATE: self.create,
            Pseudonym.SHOW: self.read,
            Pseudonym.UPDATE: self.update,
            Pseudonym.DELETE: self.delete,
            Pseudonym.INDEX: self.index,
        }
        return {p: b for p, b in pairs.items() if b is not None}


class TerraformResource(BaseModel):
    """A terraform resource or data source backed by one REST resource."""

    tf_type_name_suffix: str
    tf_type: TfType
    media_type: str | None = None
    binding: BindingInfo = BindingInfo()
    paths: list[str] = []  # informational, as found by the probe


class ApiConfig(BaseModel):
    default_endpoint: str = ""


class ProviderConfig(BaseModel):
    # namespace/name, e.g. "hashicorp/ad"
    name: str = ""
    registry: str = DEFAULT_REGISTRY
    repository: str = ""
    package_name: str = "provider"

    def _parts(self) -> list[str]:
        parts = self.name.split("/")
        if len(parts) != 2 or not all(parts):
            raise ConfigError(f"invalid provider name {self.name!r}, expected namespace/name")
        return parts

    @property
    def namespace(self) -> str:
        return self._parts()[0]

    @property
    def short_name(self) -> str:
        return self._parts()[1]


class Config(BaseModel):
    """Top level configuration schema."""

    specfile: str
    provider: ProviderConfig = ProviderConfig()
    api: ApiConfig = ApiConfig()
    output: dict[str, TerraformResource] = {}

    def write(self, path: Path | str) -> None:
        data = self.model_dump(mode="json", exclude_none=True)
        Path(path).write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")

    def as_bindings(self) -> list[Binding]:
        """Explicit bindings for every configured output.

        A resource needs all four CRUD bindings; a data source needs exactly
        one of read or index. Every type name suffix must be an HCL identifier.
        """
        result = []
        for key, resource in self.output.items():
            if not valid_hcl_identifier(resource.tf_type_name_suffix):
                raise ConfigError(
                    f"resource {key}, tf_type_name_suffix {resource.tf_type_name_suffix!r} is not a valid HCL identifier"
                )
            actions = resource.binding.by_pseudonym()

            if resource.tf_type == TfType.RESOURCE:
                for pseudonym in (Pseudonym.CREATE, Pseudonym.SHOW, Pseudonym.UPDATE, Pseudonym.DELETE):
                    bound = actions.get(pseudonym)
                    if bound is None or not bound.path:
                        raise ConfigError(f"resource {key}, action {pseudonym.value} is missing a binding")
                actions.pop(Pseudonym.INDEX, None)
            else:
                has_read = Pseudonym.SHOW in actions
                has_index = Pseudonym.INDEX in actions
                if has_read == has_index:
                    raise ConfigError(
                        f"resource {key} is a data source but needs either a read or index binding (not both)"
                    )
                actions = {p: b for p, b in actions.items() if p in (Pseudonym.SHOW, Pseudonym.INDEX)}

            result.append(Binding(resource_name=key, actions=actions))
        return result


def read_config(path: Path | str) -> Config:
    """Load and validate a configuration file. Raises ConfigError."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"{path} not found. Run init to create one")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid {path}: {e}") from e

    try:
        return Config.model_validate(data or {})
    except ValidationError as e:
        raise ConfigError(f"invalid {path}: {e}") from e
