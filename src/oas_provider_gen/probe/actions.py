"""Classify path + method pairs into REST pseudonyms."""

import logging

from oas_provider_gen.parser.base import PathItem

from .base import PSEUDONYM_CONFIG, Action, Pseudonym, Resource
from .diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)


def is_singleton_path(path: str) -> bool:
    """True if the last path segment is a parameter, e.g. /boards/{board}.

    The parameter's name is irrelevant; only the segment's shape counts.
    """
    segments = [s for s in path.split("/") if s]
    if not segments:
        return False
    last = segments[-1]
    return last.startswith("{") and last.endswith("}")


def probe_action(
    resource: Resource,
    pseudonym: Pseudonym,
    path: str,
    path_item: PathItem,
    diagnostics: Diagnostics | None = None,
) -> tuple[bool, Action | None]:
    """Determine whether this path supplies `pseudonym` for `resource`.

    Returns (matched, action). A pseudonym already bound to a different path
    on the same resource is a conflict: the existing action is kept.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    config = PSEUDONYM_CONFIG[pseudonym]
    if is_singleton_path(path) != config.singleton:
        return False, None

    for method in config.methods:
        operation = path_item.get_operation(method)
        if operation is None:
            continue

        existing = resource.get_action(pseudonym)
        if existing is not None and existing.path != path:
            message = (
                f"{resource.name} already has a {pseudonym.value} operation defined at "
                f"{existing.path}, ignoring {method} {path}"
            )
            diagnostics.warn(DiagnosticKind.PROBE_CONFLICT, message, resource=resource.name, logger=logger)
            return False, None

        logger.debug("Found %s for %s at %s %s", pseudonym.value, resource.name, method, path)
        return True, Action(pseudonym=pseudonym, method=method, path=path, operation=operation)

    return False, None
