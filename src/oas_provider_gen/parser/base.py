"""Typed models for the parts of an OpenAPI 3 document the probe consumes.

The loader converts a raw YAML/JSON mapping into these models. `$ref`
indirection is expected to be resolved before the document reaches here.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HTTP_METHODS = ("get", "put", "post", "delete", "patch", "head", "options", "trace")


class Schema(BaseModel):
    """A (resolved) OpenAPI schema object."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str | None = None  # string / number / integer / boolean / object / array
    format: str | None = None
    description: str = ""
    properties: dict[str, "Schema"] = {}
    items: "Schema | None" = None
    required: list[str] = []

    @field_validator("type", mode="before")
    @classmethod
    def _collapse_type_list(cls, value):
        # OpenAPI 3.1 allows ["string", "null"]
        if isinstance(value, list):
            non_null = [t for t in value if t != "null"]
            return non_null[0] if non_null else None
        return value

    @field_validator("properties", mode="before")
    @classmethod
    def _stringify_property_names(cls, value):
        if isinstance(value, dict):
            return {str(name): prop for name, prop in value.items()}
        return value

    @field_validator("required", mode="before")
    @classmethod
    def _stringify_required_names(cls, value):
        if isinstance(value, list):
            return [str(name) for name in value]
        return value


class Parameter(BaseModel):
    """An operation parameter. Only path parameters matter to the probe."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    location: str = Field(alias="in")  # path / query / header / cookie
    required: bool = False
    description: str = ""
    schema_: Schema | None = Field(default=None, alias="schema")


class MediaTypeObject(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_: Schema | None = Field(default=None, alias="schema")


class RequestBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: str = ""
    required: bool = False
    content: dict[str, MediaTypeObject] = {}


class Response(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: str = ""
    content: dict[str, MediaTypeObject] = {}


class Operation(BaseModel):
    """A single HTTP operation on a path."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    operation_id: str | None = Field(default=None, alias="operationId")
    summary: str = ""
    parameters: list[Parameter] = []
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response] = {}  # {status_code: Response}

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status_codes(cls, value):
        # YAML parses bare 200 as an int
        if isinstance(value, dict):
            return {str(code): resp for code, resp in value.items()}
        return value

    def path_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if p.location == "path"]

    def response(self, status_code: int) -> Response | None:
        return self.responses.get(str(status_code))


class PathItem(BaseModel):
    """All operations available on one path template."""

    model_config = ConfigDict(extra="allow")

    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    patch: Operation | None = None
    head: Operation | None = None
    options: Operation | None = None
    trace: Operation | None = None
    parameters: list[Parameter] = []

    @model_validator(mode="after")
    def _inherit_path_parameters(self):
        # Path-level parameters apply to every operation unless the
        # operation redefines the same name and location.
        if not self.parameters:
            return self
        for operation in self.operations().values():
            defined = {(p.name, p.location) for p in operation.parameters}
            inherited = [p for p in self.parameters if (p.name, p.location) not in defined]
            operation.parameters = inherited + operation.parameters
        return self

    def get_operation(self, method: str) -> Operation | None:
        method = method.lower()
        if method not in HTTP_METHODS:
            return None
        return getattr(self, method)

    def operations(self) -> dict[str, Operation]:
        """Return {METHOD: Operation} for every defined operation."""
        return {
            m.upper(): getattr(self, m)
            for m in HTTP_METHODS
            if getattr(self, m) is not None
        }


class OpenApiDocument(BaseModel):
    """A parsed OpenAPI 3.x document."""

    model_config = ConfigDict(extra="allow")

    openapi: str
    info: dict = {}
    paths: dict[str, PathItem] = {}

    @field_validator("paths", mode="before")
    @classmethod
    def _drop_extensions(cls, value):
        # Specification extensions (x-...) may sit beside path templates
        if isinstance(value, dict):
            return {k: v for k, v in value.items() if str(k).startswith("/")}
        return value

    def get_path(self, path: str) -> PathItem | None:
        return self.paths.get(path)
