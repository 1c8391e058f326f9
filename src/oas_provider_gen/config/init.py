"""Build an initial binding configuration from probed resources."""

import logging
from pathlib import Path

from oas_provider_gen.parser.openapi import load_openapi
from oas_provider_gen.probe.base import Action, ActionBinding, Pseudonym, Resource
from oas_provider_gen.probe.diagnostics import Diagnostics
from oas_provider_gen.probe.grouping import probe_resources
from oas_provider_gen.probe.media_type import determine_media_type
from oas_provider_gen.probe.naming import to_hcl_name

from .schema import BindingInfo, Config, ProviderConfig, TerraformResource, TfType

logger = logging.getLogger(__name__)


def _action_binding(action: Action | None) -> ActionBinding | None:
    if action is None:
        return None
    return ActionBinding(path=action.path, method=action.method)


def new_terraform_resource(resource: Resource, diagnostics: Diagnostics | None = None) -> TerraformResource | None:
    """Translate a probed resource into a configuration entry.

    Returns None for resources that are neither CRUD-capable nor readable,
    and for resources whose media type cannot be determined.
    """
    media_type = determine_media_type(resource, diagnostics)
    if media_type is None:
        return None

    if resource.is_crud():
        tf_type = TfType.RESOURCE
        binding = BindingInfo(
            create=_action_binding(resource.get_action(Pseudonym.CREATE)),
            read=_action_binding(resource.get_action(Pseudonym.SHOW)),
            update=_action_binding(resource.get_action(Pseudonym.UPDATE)),
            delete=_action_binding(resource.get_action(Pseudonym.DELETE)),
            index=_action_binding(resource.get_action(Pseudonym.INDEX)),
        )
    elif resource.can_read_identity():
        tf_type = TfType.DATA_SOURCE
        binding = BindingInfo(read=_action_binding(resource.get_action(Pseudonym.SHOW)))
    elif resource.can_read_collection():
        tf_type = TfType.DATA_SOURCE
        binding = BindingInfo(index=_action_binding(resource.get_action(Pseudonym.INDEX)))
    else:
        logger.debug("Skipping %s: not CRUD-capable and not readable", resource.name)
        return None

    return TerraformResource(
        tf_type_name_suffix=to_hcl_name(resource.name),
        tf_type=tf_type,
        media_type=media_type,
        binding=binding,
        paths=list(resource.paths),
    )


def init_config(
    spec_path: Path | str,
    provider_name: str | None = None,
    diagnostics: Diagnostics | None = None,
) -> Config:
    """Probe an OpenAPI document and build its default configuration."""
    if diagnostics is None:
        diagnostics = Diagnostics()

    document = load_openapi(spec_path)
    resources = probe_resources(document, diagnostics)

    config = Config(specfile=str(spec_path), provider=ProviderConfig(name=provider_name or ""))
    for name, resource in resources.items():
        entry = new_terraform_resource(resource, diagnostics)
        if entry is not None:
            config.output[name] = entry

    logger.debug("Configured %d of %d resources", len(config.output), len(resources))
    return config
