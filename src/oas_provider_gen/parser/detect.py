"""Detect which API description format a loaded document uses."""


def detect_format(data: object) -> str:
    """Detect the format of a parsed API description.

    Returns: 'openapi3', 'swagger2', or 'unknown'.
    """
    if not isinstance(data, dict):
        return "unknown"

    version = str(data.get("openapi", ""))
    if version.startswith("3."):
        return "openapi3"
    if "swagger" in data:
        return "swagger2"
    return "unknown"
