"""Resolve the content media type that represents a resource."""

import logging

from oas_provider_gen.errors import MediaTypeUnresolvedError

from .base import PSEUDONYM_CONFIG, Action, Pseudonym, Resource
from .diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)

WELL_KNOWN_MEDIA_TYPES = ("application/json",)

# Actions consulted, in priority order, when resolving a resource's media type
RESOLVE_ORDER = (Pseudonym.SHOW, Pseudonym.UPDATE, Pseudonym.CREATE, Pseudonym.INDEX)


def probe_media_type(action: Action) -> str | None:
    """Media type of the first successful response that declares content.

    A well-known type wins if that response offers one; otherwise the
    response's first declared content type is used.
    """
    for code in PSEUDONYM_CONFIG[action.pseudonym].success_codes:
        response = action.operation.response(code)
        if response is None or not response.content:
            continue

        for media_type in response.content:
            if media_type in WELL_KNOWN_MEDIA_TYPES:
                return media_type
        return next(iter(response.content))

    return None


def determine_media_type(resource: Resource, diagnostics: Diagnostics | None = None) -> str | None:
    """Shared media type used by a resource's actions, or None.

    The first action (show, update, create, index) that yields a type wins.
    Later actions that disagree only produce a warning.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    resolved: str | None = None
    resolved_by: Pseudonym | None = None

    for pseudonym in RESOLVE_ORDER:
        action = resource.get_action(pseudonym)
        if action is None:
            continue

        media_type = probe_media_type(action)
        if media_type is None:
            logger.debug("%s %s declares no response content", resource.name, pseudonym.value)
            continue

        if resolved is None:
            resolved, resolved_by = media_type, pseudonym
        elif media_type != resolved:
            diagnostics.warn(
                DiagnosticKind.MEDIA_TYPE_DISAGREEMENT,
                f"{resource.name} {pseudonym.value} operation response content media type "
                f"{media_type} does not agree with {resolved_by.value}, which is {resolved}",
                resource=resource.name,
                logger=logger,
            )

    if resolved is None:
        diagnostics.warn(
            DiagnosticKind.MEDIA_TYPE_UNRESOLVED,
            f"media type for \"{resource.name}\" could not be determined",
            resource=resource.name,
            logger=logger,
        )
    return resolved


def require_media_type(resource: Resource, diagnostics: Diagnostics | None = None) -> str:
    """Like determine_media_type, but a resource without one is an error."""
    media_type = determine_media_type(resource, diagnostics)
    if media_type is None:
        raise MediaTypeUnresolvedError(resource.name)
    return media_type
