"""Errors surfaced by oas-provider-gen.

Recoverable problems (probe conflicts, media type disagreements, attribute
type mismatches) are not exceptions; they are collected as diagnostics.
"""

from pathlib import Path


class OasProviderGenError(Exception):
    """Base class for all fatal errors."""


class SpecLoadError(OasProviderGenError):
    """The OpenAPI document could not be read, parsed, or validated."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"invalid openapi3 spec {self.path}: {reason}")


class BindingNotFoundError(OasProviderGenError):
    """An explicit binding references a path or method absent from the document."""

    def __init__(self, resource: str, pseudonym: str, path: str, method: str, reason: str):
        self.resource = resource
        self.pseudonym = pseudonym
        self.path = path
        self.method = method
        self.reason = reason
        super().__init__(
            f"cannot bind {resource} {pseudonym} to {method} {path}: {reason}"
        )


class MediaTypeUnresolvedError(OasProviderGenError):
    """No content media type could be determined for a resource."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"media type for \"{resource}\" could not be determined")


class ConfigError(OasProviderGenError):
    """The binding configuration is missing, unparsable, or inconsistent."""
