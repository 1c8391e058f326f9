"""Resource model produced by probing an OpenAPI document.

A Resource is a conceptual REST entity: a set of paths plus the CRUD
actions (create, show, index, update, delete) found on them. Attributes are
the merged view of a resource's request and response schemas.
"""

from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from oas_provider_gen.parser.base import Operation


class Pseudonym(str, Enum):
    """REST action role, independent of the HTTP method that implements it."""

    CREATE = "create"
    SHOW = "show"
    INDEX = "index"
    UPDATE = "update"
    DELETE = "delete"


class PseudonymConfig(NamedTuple):
    methods: tuple[str, ...]  # acceptable HTTP methods, highest priority first
    success_codes: tuple[int, ...]
    singleton: bool  # True: path must end in a parameter; False: must not


# Method priority and success status codes for each pseudonym. Delete falls
# back to POST/PUT/PATCH for APIs that do not use DELETE on singletons.
PSEUDONYM_CONFIG: dict[Pseudonym, PseudonymConfig] = {
    Pseudonym.SHOW: PseudonymConfig(("GET",), (200, 203), True),
    Pseudonym.DELETE: PseudonymConfig(("DELETE", "POST", "PUT", "PATCH"), (200, 204), True),
    Pseudonym.UPDATE: PseudonymConfig(("PUT", "PATCH", "POST"), (200,), True),
    Pseudonym.INDEX: PseudonymConfig(("GET",), (200, 203), False),
    Pseudonym.CREATE: PseudonymConfig(("POST",), (201, 200), False),
}

# Order in which a path is probed for each pseudonym
PROBE_ORDER = (Pseudonym.SHOW, Pseudonym.DELETE, Pseudonym.UPDATE, Pseudonym.INDEX, Pseudonym.CREATE)


class Action(BaseModel):
    """Binding between a pseudonym, an HTTP method and a path."""

    model_config = ConfigDict(frozen=True)

    pseudonym: Pseudonym
    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /boards/{id}
    operation: Operation


class Resource(BaseModel):
    """A conceptual resource and the CRUD actions that manage it."""

    name: str
    paths: list[str] = []  # insertion-ordered, no duplicates
    actions: dict[Pseudonym, Action] = {}

    def get_action(self, pseudonym: Pseudonym) -> Action | None:
        return self.actions.get(pseudonym)

    def set_action(self, action: Action) -> None:
        self.actions[action.pseudonym] = action

    def add_path(self, path: str) -> None:
        if path not in self.paths:
            self.paths.append(path)

    def is_crud(self) -> bool:
        """Show, create, update and delete are all available."""
        return all(
            p in self.actions
            for p in (Pseudonym.SHOW, Pseudonym.CREATE, Pseudonym.UPDATE, Pseudonym.DELETE)
        )

    def can_update(self) -> bool:
        return Pseudonym.UPDATE in self.actions

    def can_read_identity(self) -> bool:
        return Pseudonym.SHOW in self.actions

    def can_read_collection(self) -> bool:
        return Pseudonym.INDEX in self.actions

    def is_read_resource(self) -> bool:
        """Only show, or only index, is available."""
        return set(self.actions) in ({Pseudonym.SHOW}, {Pseudonym.INDEX})


class Attribute(BaseModel):
    """Composite view of one property across a resource's schemas."""

    name: str
    type: str  # string / number / integer / boolean / object / array
    elem_type: str | None = None  # only set when type is array
    format: str | None = None
    description: str = ""
    required: bool = False
    read_only: bool = False
    location: str = "body"  # path / body
    children: list["Attribute"] = []

    def __str__(self) -> str:
        return f"{self.name} ({self.type})"

    def child(self, name: str) -> "Attribute | None":
        for attribute in self.children:
            if attribute.name == name:
                return attribute
        return None


class ActionBinding(BaseModel):
    path: str
    method: str


class Binding(BaseModel):
    """User-declared {path, method} per pseudonym for one resource."""

    resource_name: str
    actions: dict[Pseudonym, ActionBinding] = {}
