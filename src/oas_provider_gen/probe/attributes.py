"""Composite attributes: one merged attribute tree per resource.

Path parameters, the show response body, and the create/update request
bodies each contribute attributes. Merging happens in three phases, always
in the order show -> create -> update, because only the writable phases
(create and update) may clear an attribute's read-only flag.
"""

import logging

from oas_provider_gen.parser.base import Operation, Parameter, Schema

from .base import PSEUDONYM_CONFIG, Attribute, Pseudonym, Resource
from .diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = ("string", "number", "integer", "boolean")


def schema_type(schema: Schema) -> str:
    """Declared type of a schema, inferred from its shape when undeclared."""
    if schema.type:
        return schema.type
    if schema.properties:
        return "object"
    if schema.items is not None:
        return "array"
    return "string"


def is_primitive(schema: Schema) -> bool:
    return schema_type(schema) in PRIMITIVE_TYPES


def set_read_only_all(attribute: Attribute, value: bool) -> None:
    """Set read_only on an attribute and every attribute nested beneath it."""
    attribute.read_only = value
    for child in attribute.children:
        set_read_only_all(child, value)


def _nested_schema(attribute: Attribute, schema: Schema) -> Schema | None:
    """The schema holding an attribute's child properties, if it has any."""
    if attribute.type == "object":
        return schema
    if attribute.type == "array" and attribute.elem_type == "object":
        return schema.items
    return None


def _format_for_log(fmt: str | None) -> str:
    return f" ({fmt})" if fmt else ""


class AttributeComposer:
    """Builds the composite attribute tree for a single resource."""

    def __init__(self, resource: Resource, media_type: str | None, diagnostics: Diagnostics | None = None):
        self.resource = resource
        self.media_type = media_type
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self._attributes: dict[str, Attribute] = {}

    def compose(self) -> list[Attribute]:
        """Run the show, create and update phases and return attributes in first-seen order."""
        self._attributes = {}

        # Show gives the full state of a resource, so it defines the
        # canonical attribute set. Everything it reports starts read-only.
        show = self.resource.get_action(Pseudonym.SHOW)
        if show is not None:
            logger.debug("Extracting parameter attributes from show action")
            self._extract_parameter_attributes(show.operation)
            logger.debug("Extracting response body attributes from show action")
            self._extract_response_attributes(Pseudonym.SHOW, show.operation)

        for pseudonym in (Pseudonym.CREATE, Pseudonym.UPDATE):
            action = self.resource.get_action(pseudonym)
            if action is None:
                continue
            logger.debug("Extracting parameter attributes from %s action", pseudonym.value)
            self._extract_parameter_attributes(action.operation)
            logger.debug("Extracting request body attributes from %s action", pseudonym.value)
            self._extract_request_attributes(pseudonym, action.operation)

        return list(self._attributes.values())

    def _extract_parameter_attributes(self, operation: Operation) -> None:
        # Query, header and cookie parameters do not describe resource state
        for parameter in operation.path_parameters():
            self._update(
                parameter.name,
                self._parameter_schema(parameter),
                read_only=False,
                required=True,
                location="path",
            )

    def _extract_request_attributes(self, pseudonym: Pseudonym, operation: Operation) -> None:
        if self.media_type is None:
            return
        body = operation.request_body
        media = body.content.get(self.media_type) if body is not None else None
        if media is None or media.schema_ is None:
            logger.debug("Action %s has no request body of type %s", pseudonym.value, self.media_type)
            return

        schema = media.schema_
        for name, prop in schema.properties.items():
            self._update(name, prop, read_only=False, required=name in schema.required)

    def _extract_response_attributes(self, pseudonym: Pseudonym, operation: Operation) -> None:
        if self.media_type is None:
            return
        for code in PSEUDONYM_CONFIG[pseudonym].success_codes:
            response = operation.response(code)
            media = response.content.get(self.media_type) if response is not None else None
            if media is None or media.schema_ is None:
                logger.debug(
                    "Action %s, code %d has no response body of type %s",
                    pseudonym.value, code, self.media_type,
                )
                continue

            for name, prop in media.schema_.properties.items():
                self._update(name, prop, read_only=True, required=False)
            break

    def _update(
        self,
        name: str,
        schema: Schema,
        read_only: bool,
        required: bool,
        location: str = "body",
    ) -> None:
        """Create the named attribute, or merge this occurrence into it."""
        existing = self._attributes.get(name)
        if existing is None:
            logger.debug("Found param %s (%s) for %s", name, schema_type(schema), self.resource.name)
            self._attributes[name] = self._build(name, schema, read_only, required, location)
            return

        if not read_only:
            # Read-only occurrences never carry required, so the first
            # writable one decides it.
            adopt_required = existing.read_only
            if adopt_required:
                logger.debug("Param %s (%s) for %s is not read-only", name, existing.type, self.resource.name)
                set_read_only_all(existing, False)
            self._merge_writable(existing, schema, required, adopt_required)

        declared = schema_type(schema)
        if declared != existing.type:
            self.diagnostics.warn(
                DiagnosticKind.TYPE_MISMATCH,
                f"{self.resource.name}: expected property {name} type {declared}"
                f"{_format_for_log(schema.format)} to be {existing.type}{_format_for_log(existing.format)}",
                resource=self.resource.name,
                logger=logger,
            )

    def _merge_writable(
        self,
        attribute: Attribute,
        schema: Schema,
        required: bool,
        adopt_required: bool,
    ) -> None:
        """Merge a writable occurrence's nested properties into an attribute.

        Children only the writable schema declares are added. Existing
        children take their required flag from it when `adopt_required`.
        """
        if adopt_required:
            attribute.required = required

        nested = _nested_schema(attribute, schema)
        if nested is None:
            return
        for name, prop in nested.properties.items():
            child_required = name in nested.required
            child = attribute.child(name)
            if child is None:
                logger.debug("Found sub-param %s of %s for %s", name, attribute.name, self.resource.name)
                attribute.children.append(self._build(name, prop, False, child_required))
            else:
                self._merge_writable(child, prop, child_required, adopt_required)

    def _build(
        self,
        name: str,
        schema: Schema,
        read_only: bool,
        required: bool,
        location: str = "body",
    ) -> Attribute:
        declared = schema_type(schema)
        elem_type = None
        children: list[Attribute] = []

        if declared == "object" and schema.properties:
            logger.debug("Extracting sub-parameters for object %s", name)
            children = self._build_children(schema, read_only)
        elif declared == "array":
            items = schema.items
            if items is None:
                elem_type = "string"
            elif is_primitive(items):
                elem_type = schema_type(items)
            elif schema_type(items) == "object":
                elem_type = "object"
                logger.debug("Extracting sub-parameters for object array %s", name)
                children = self._build_children(items, read_only)
            else:
                elem_type = schema_type(items)

        return Attribute(
            name=name,
            type=declared,
            elem_type=elem_type,
            format=schema.format,
            description=schema.description,
            required=required,
            read_only=read_only,
            location=location,
            children=children,
        )

    def _build_children(self, schema: Schema, read_only: bool) -> list[Attribute]:
        children = []
        for name, prop in schema.properties.items():
            required = not read_only and name in schema.required
            children.append(self._build(name, prop, read_only, required))
        logger.debug("...Found %d", len(children))
        return children

    @staticmethod
    def _parameter_schema(parameter: Parameter) -> Schema:
        schema = parameter.schema_ or Schema(type="string")
        if not schema.description and parameter.description:
            schema = schema.model_copy(update={"description": parameter.description})
        return schema


def composite_attributes(
    resource: Resource,
    media_type: str | None,
    diagnostics: Diagnostics | None = None,
) -> list[Attribute]:
    """Merge a resource's parameter, request and response attributes."""
    return AttributeComposer(resource, media_type, diagnostics).compose()
