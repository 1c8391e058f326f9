"""Group OpenAPI paths into conceptual REST resources.

Two entry points:
- probe_resources: heuristic grouping, pairing related paths by name and
  classifying their operations into CRUD pseudonyms.
- bind_resources: explicit grouping from user-curated bindings.
"""

import logging

from oas_provider_gen.errors import BindingNotFoundError
from oas_provider_gen.parser.base import OpenApiDocument

from .actions import probe_action
from .base import PROBE_ORDER, Action, Binding, Resource
from .diagnostics import Diagnostics
from .naming import derive_key, find_prefix

logger = logging.getLogger(__name__)


def probe_resources(
    document: OpenApiDocument,
    diagnostics: Diagnostics | None = None,
) -> dict[str, Resource]:
    """Pair related paths together that can potentially represent a CRUD resource.

    Paths are visited in sorted order so the first path to claim a
    pseudonym is the same on every run.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    paths = sorted(document.paths)
    prefix = find_prefix(paths)
    logger.debug("Probing %d paths (shared prefix %r)", len(paths), prefix)

    result: dict[str, Resource] = {}
    for path in paths:
        path_item = document.paths[path]
        key = derive_key(path, prefix)

        resource = result.get(key)
        if resource is None:
            resource = Resource(name=key)
            result[key] = resource

        # Each path can supply several actions; together they form the RESTful set.
        matched_any = False
        for pseudonym in PROBE_ORDER:
            matched, action = probe_action(resource, pseudonym, path, path_item, diagnostics)
            if matched:
                resource.set_action(action)
                matched_any = True

        if matched_any:
            resource.add_path(path)

    return result


def bind_resources(document: OpenApiDocument, bindings: list[Binding]) -> dict[str, Resource]:
    """Build resources directly from explicit bindings.

    Raises BindingNotFoundError on the first binding whose path or method is
    not in the document; no resources are returned in that case.
    """
    result: dict[str, Resource] = {}

    for binding in bindings:
        resource = Resource(name=binding.resource_name)
        for pseudonym, action_binding in binding.actions.items():
            path_item = document.get_path(action_binding.path)
            if path_item is None:
                raise BindingNotFoundError(
                    binding.resource_name, pseudonym.value, action_binding.path,
                    action_binding.method, "path not found",
                )

            method = action_binding.method.upper()
            operation = path_item.get_operation(method)
            if operation is None:
                raise BindingNotFoundError(
                    binding.resource_name, pseudonym.value, action_binding.path,
                    action_binding.method, "operation not found",
                )

            resource.set_action(
                Action(pseudonym=pseudonym, method=method, path=action_binding.path, operation=operation)
            )
            resource.add_path(action_binding.path)

        result[binding.resource_name] = resource

    return result
