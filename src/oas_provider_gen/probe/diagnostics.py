"""Structured, non-fatal diagnostics collected while probing.

Every warning is logged through the caller's logger and kept in a list so
callers (the CLI, tests) can decide how to present it.
"""

import logging
from enum import Enum

from pydantic import BaseModel


class DiagnosticKind(str, Enum):
    PROBE_CONFLICT = "probe_conflict"
    MEDIA_TYPE_UNRESOLVED = "media_type_unresolved"
    MEDIA_TYPE_DISAGREEMENT = "media_type_disagreement"
    TYPE_MISMATCH = "type_mismatch"


class Diagnostic(BaseModel):
    kind: DiagnosticKind
    resource: str | None = None
    message: str

    def __str__(self) -> str:
        return f"warning: {self.message}"


class Diagnostics:
    """Collector for warnings produced during one probing run."""

    def __init__(self):
        self.items: list[Diagnostic] = []

    def warn(
        self,
        kind: DiagnosticKind,
        message: str,
        resource: str | None = None,
        logger: logging.Logger | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, resource=resource, message=message)
        self.items.append(diagnostic)
        (logger or logging.getLogger(__name__)).warning(message)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
