"""Generation hand-off: configured resources as Terraform schema models.

Each configured resource becomes one YAML document describing its
Terraform attributes and the concrete {path, method} behind every CRUD
action. A template renderer consumes these documents.
"""

import logging

import yaml
from pydantic import BaseModel

from oas_provider_gen.config.schema import Config, TerraformResource
from oas_provider_gen.errors import ConfigError
from oas_provider_gen.parser.base import OpenApiDocument
from oas_provider_gen.probe.attributes import composite_attributes
from oas_provider_gen.probe.base import ActionBinding, Attribute, Resource
from oas_provider_gen.probe.diagnostics import Diagnostics
from oas_provider_gen.probe.grouping import bind_resources
from oas_provider_gen.probe.media_type import require_media_type
from oas_provider_gen.probe.naming import to_hcl_name, to_title_name

logger = logging.getLogger(__name__)

TERRAFORM_TYPES = {
    "integer": "number",
    "number": "number",
    "string": "string",
    "boolean": "bool",
    "object": "map",
    "array": "list",
}

FRAMEWORK_SCHEMA_TYPES = {
    "string": "types.StringType",
    "number": "types.NumberType",
    "bool": "types.BoolType",
    "map": "types.MapType",
    "list": "types.ListType",
}

FRAMEWORK_DATA_TYPES = {
    "string": "types.String",
    "number": "types.Number",
    "bool": "types.Bool",
    "map": "types.Map",
    "list": "types.List",
}


def to_terraform_type(spec_type: str) -> str:
    try:
        return TERRAFORM_TYPES[spec_type]
    except KeyError:
        raise ValueError(f"invalid spec type \"{spec_type}\"") from None


class TemplateAttribute(BaseModel):
    """One Terraform schema attribute."""

    tf_name: str  # snake_case
    data_name: str  # TitleCase struct field
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    framework_schema_type: str
    framework_data_type: str
    element_type: str | None = None  # framework schema type of list elements
    list_nested: bool = False
    nesting_level: int = 0
    attributes: list["TemplateAttribute"] = []


class GeneratedResource(BaseModel):
    config_key: str
    tf_type: str
    terraform_type_name: str
    media_type: str
    bindings: dict[str, ActionBinding]
    attributes: list[TemplateAttribute]


def template_attribute(attribute: Attribute, nesting_level: int = 0) -> TemplateAttribute:
    """Map a composite attribute onto Terraform framework types."""
    required = attribute.required and not attribute.read_only
    computed = attribute.read_only
    element_type = None
    list_nested = False

    if attribute.type == "object" and attribute.children:
        schema_type, data_type = "types.ObjectType", "types.Object"
    elif attribute.type == "array" and attribute.elem_type == "object":
        schema_type, data_type = "types.ListType", "types.List"
        list_nested = True
    else:
        tf_type = to_terraform_type(attribute.type)
        schema_type, data_type = FRAMEWORK_SCHEMA_TYPES[tf_type], FRAMEWORK_DATA_TYPES[tf_type]
        if attribute.type == "array" and attribute.elem_type:
            element_type = FRAMEWORK_SCHEMA_TYPES[to_terraform_type(attribute.elem_type)]

    return TemplateAttribute(
        tf_name=to_hcl_name(attribute.name),
        data_name=to_title_name(attribute.name),
        description=attribute.description,
        required=required,
        optional=not required and not computed,
        computed=computed,
        framework_schema_type=schema_type,
        framework_data_type=data_type,
        element_type=element_type,
        list_nested=list_nested,
        nesting_level=nesting_level,
        attributes=[template_attribute(child, nesting_level + 1) for child in attribute.children],
    )


def template_attributes(attributes: list[Attribute]) -> list[TemplateAttribute]:
    return [template_attribute(a) for a in attributes]


class ResourceGenerator:
    """Generates one hand-off YAML document per configured resource."""

    def __init__(self, document: OpenApiDocument, config: Config):
        self.document = document
        self.config = config

    def generate(self, diagnostics: Diagnostics | None = None) -> dict[str, str]:
        """Returns a dict of {filename: yaml_content}.

        Raises ConfigError (also for attribute types Terraform cannot
        represent), BindingNotFoundError or MediaTypeUnresolvedError;
        nothing is generated when any configured resource fails.
        """
        if diagnostics is None:
            diagnostics = Diagnostics()

        resources = bind_resources(self.document, self.config.as_bindings())

        files = {}
        for key, entry in self.config.output.items():
            resource = resources.get(key)
            if resource is None:
                raise ConfigError(f"could not find configured entity key \"{key}\" in {self.config.specfile}")

            generated = self._generate_resource(key, entry, resource, diagnostics)
            filename = f"{entry.tf_type.value}_{entry.tf_type_name_suffix}.yaml"
            files[filename] = yaml.safe_dump(generated.model_dump(mode="json"), sort_keys=False)
            logger.debug("Generated %s for %s", filename, key)

        return files

    def _generate_resource(
        self,
        key: str,
        entry: TerraformResource,
        resource: Resource,
        diagnostics: Diagnostics,
    ) -> GeneratedResource:
        media_type = entry.media_type or require_media_type(resource, diagnostics)
        attributes = composite_attributes(resource, media_type, diagnostics)
        try:
            template = template_attributes(attributes)
        except ValueError as e:
            raise ConfigError(f"cannot generate {key}: {e}") from e

        return GeneratedResource(
            config_key=key,
            tf_type=entry.tf_type.value,
            terraform_type_name=self._terraform_type_name(entry),
            media_type=media_type,
            bindings={
                pseudonym.value: ActionBinding(path=action.path, method=action.method)
                for pseudonym, action in resource.actions.items()
            },
            attributes=template,
        )

    def _terraform_type_name(self, entry: TerraformResource) -> str:
        # Resource names are conventionally prefixed with the provider name
        if self.config.provider.name:
            return f"{self.config.provider.short_name}_{entry.tf_type_name_suffix}"
        return entry.tf_type_name_suffix
