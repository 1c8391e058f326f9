"""OpenAPI 3 document loader.

Reads YAML or JSON OpenAPI 3.x documents into OpenApiDocument models.
"""

import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from oas_provider_gen.errors import SpecLoadError

from .base import OpenApiDocument
from .detect import detect_format

logger = logging.getLogger(__name__)


class OpenApiLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 booleans: only true/false.

    yes/no/on/off stay strings, so a property named `on` keeps its name.
    """


OpenApiLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
OpenApiLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def load_openapi(file_path: Path | str) -> OpenApiDocument:
    """Load an OpenAPI 3 file. Raises SpecLoadError on any failure."""
    file_path = Path(file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecLoadError(file_path, str(e)) from e

    # YAML is a superset of JSON, so one parser covers both
    try:
        data = yaml.load(text, Loader=OpenApiLoader)
    except yaml.YAMLError as e:
        raise SpecLoadError(file_path, f"not valid YAML or JSON: {e}") from e

    document = parse_openapi(data, source=file_path)
    logger.debug("Loaded %s with %d paths", file_path, len(document.paths))
    return document


def parse_openapi(data: object, source: Path | str = "<memory>") -> OpenApiDocument:
    """Validate an already-parsed mapping as an OpenAPI 3 document."""
    fmt = detect_format(data)
    if fmt == "swagger2":
        raise SpecLoadError(source, "Swagger 2.0 documents are not supported, convert to OpenAPI 3 first")
    if fmt != "openapi3":
        raise SpecLoadError(source, "missing or unsupported 'openapi' version field")

    try:
        return OpenApiDocument.model_validate(data)
    except ValidationError as e:
        raise SpecLoadError(source, str(e)) from e
