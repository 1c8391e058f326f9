"""Human-readable summary of probed resources."""

from oas_provider_gen.probe.base import Resource

HEADER = f"{'Config Name':<32} {'Paths':<64} {'Limit':<16} {'Collection Data Source?':<16}"


def resource_extent(resource: Resource) -> str:
    """'resource', 'data_source', or '' for resources that cannot be generated."""
    if resource.is_crud():
        return "resource"
    if resource.can_read_identity() or resource.can_read_collection():
        return "data_source"
    return ""


def render_examine_table(resources: dict[str, Resource]) -> str:
    lines = [HEADER, "-" * len(HEADER)]
    for name, resource in resources.items():
        collection_only = resource.can_read_collection() and not resource.can_read_identity()
        lines.append(
            f"{name:<32} {', '.join(resource.paths):<64} "
            f"{resource_extent(resource):<16} {str(collection_only):<16}".rstrip()
        )
    return "\n".join(lines)
