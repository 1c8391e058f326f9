"""Infer RESTful resources and composite attribute schemas from OpenAPI 3 documents."""

__version__ = "0.1.0"
