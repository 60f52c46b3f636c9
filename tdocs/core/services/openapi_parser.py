"""Render OpenAPI/Swagger specs as Markdown documentation.

The rendered Markdown is what gets chunked and searched when a Swagger UI
page is resolved to its underlying spec.
"""

import json
from collections.abc import Mapping
from typing import Any

from ..domain.openapi import (
    OpenApiInfo,
    OpenApiOperation,
    OpenApiParameter,
    OpenApiSchema,
    OpenApiServer,
    OpenApiSpec,
    OpenApiTag,
    ref_name,
)
from .patterns import CONTEXT_SEPARATOR

SUMMARY_METHODS = ("get", "post", "put", "delete", "patch")


def is_valid_openapi_spec(spec: Any) -> bool:
    """Check whether a parsed document looks like an OpenAPI or Swagger spec.

    Args:
        spec: Parsed JSON/YAML value.

    Returns:
        True for OpenAPI 3.x, Swagger 2.x, or any mapping with ``paths``,
        ``info``, ``components`` or ``definitions``.
    """
    if not isinstance(spec, Mapping):
        return False

    openapi = spec.get("openapi")
    if isinstance(openapi, str) and openapi.startswith("3."):
        return True

    swagger = spec.get("swagger")
    if isinstance(swagger, str) and swagger.startswith("2."):
        return True

    return any(spec.get(key) for key in ("paths", "info", "components", "definitions"))


def _is_openapi_document(spec: Any) -> bool:
    return isinstance(spec, Mapping) and any(
        spec.get(key) for key in ("openapi", "swagger", "paths", "info")
    )


def openapi_to_markdown(spec: Any) -> str:
    """Convert an OpenAPI spec into Markdown.

    Args:
        spec: Parsed spec mapping.

    Returns:
        Markdown with API info, servers, tag categories, endpoints grouped by
        tag and data models, separated by horizontal rules. Empty string when
        the input is not a spec.
    """
    if not _is_openapi_document(spec):
        return ""

    api = OpenApiSpec.from_dict(spec)
    sections = [_format_info(api)]

    if api.servers:
        sections.append(_format_servers(api.servers))
    if api.tags:
        sections.append(_format_tags(api.tags))
    if api.has_paths:
        sections.append(_format_paths(api))
    if api.has_schemas:
        sections.append(_format_schemas(api.schemas))

    return CONTEXT_SEPARATOR.join(section for section in sections if section)


def _format_info(api: OpenApiSpec) -> str:
    info: OpenApiInfo | None = api.info
    if info is None:
        return ""

    lines = [f"# {info.title or 'API Documentation'}"]
    if info.version:
        lines.append(f"**Version:** {info.version}")
    if api.spec_version:
        lines.append(f"**OpenAPI:** {api.spec_version}")
    if info.description:
        lines.append(f"\n{info.description}")

    if info.contact:
        contact_parts = []
        if info.contact.name:
            contact_parts.append(info.contact.name)
        if info.contact.email:
            contact_parts.append(f"<{info.contact.email}>")
        if info.contact.url:
            contact_parts.append(f"[{info.contact.url}]({info.contact.url})")
        if contact_parts:
            lines.append(f"**Contact:** {' - '.join(contact_parts)}")

    if info.license and (info.license.name or info.license.url):
        name = info.license.name or info.license.url
        license_text = f"[{name}]({info.license.url})" if info.license.url else name
        lines.append(f"**License:** {license_text}")

    return "\n".join(lines)


def _format_servers(servers: tuple[OpenApiServer, ...]) -> str:
    lines = ["## Servers"]
    for server in servers:
        description = f" - {server.description}" if server.description else ""
        lines.append(f"- `{server.url}`{description}")
    return "\n".join(lines)


def _format_tags(tags: tuple[OpenApiTag, ...]) -> str:
    lines = ["## Categories"]
    for tag in tags:
        if tag.description:
            lines.append(f"- **{tag.name}**: {tag.description}")
        else:
            lines.append(f"- **{tag.name}**")
    return "\n".join(lines)


def _format_paths(api: OpenApiSpec) -> str:
    lines = ["## Endpoints"]
    by_tag: dict[str, list[str]] = {}
    untagged: list[str] = []

    for path, path_item in api.paths.items():
        for method, operation in path_item.operations.items():
            formatted = _format_operation(method.upper(), path, operation, path_item.parameters)
            if operation.tags:
                for tag in operation.tags:
                    by_tag.setdefault(tag, []).append(formatted)
            else:
                untagged.append(formatted)

    for tag, endpoints in by_tag.items():
        lines.append(f"\n### {tag}\n")
        lines.extend(endpoints)

    if untagged:
        if by_tag:
            lines.append("\n### Other\n")
        lines.extend(untagged)

    return "\n".join(lines)


def _format_parameter(parameter: OpenApiParameter) -> str:
    param_type = f" `{parameter.display_type}`" if parameter.display_type else ""
    required = " *(required)*" if parameter.required else ""
    description = f" - {parameter.description}" if parameter.description else ""
    return f"- `{parameter.name}` ({parameter.location}){param_type}{required}{description}"


def _format_operation(
    method: str,
    path: str,
    operation: OpenApiOperation,
    path_parameters: tuple[OpenApiParameter, ...] = (),
) -> str:
    deprecated = " ~~DEPRECATED~~" if operation.deprecated else ""
    lines = [f"\n#### `{method} {path}`{deprecated}"]

    if operation.summary:
        lines.append(f"**{operation.summary}**")
    if operation.description:
        lines.append(operation.description)
    if operation.operation_id:
        lines.append(f"*Operation ID:* `{operation.operation_id}`")

    parameters = path_parameters + operation.parameters
    if parameters:
        lines.append("\n**Parameters:**")
        lines.extend(_format_parameter(parameter) for parameter in parameters)

    body = operation.request_body
    if body is not None:
        lines.append("\n**Request Body:**")
        if body.description:
            lines.append(body.description)
        for content_type, media in body.content.items():
            lines.append(f"- Content-Type: `{content_type}`")
            if media.schema is not None:
                inline = _format_schema_inline(media.schema, indent=1)
                if inline:
                    lines.append(inline)

    if operation.responses:
        lines.append("\n**Responses:**")
        for code, response in operation.responses.items():
            description = f" - {response.description}" if response.description else ""
            lines.append(f"- `{code}`{description}")

    return "\n".join(lines)


def _format_schema_inline(schema: OpenApiSchema, indent: int) -> str:
    prefix = "  " * indent

    if schema.ref:
        return f"{prefix}Schema: `{ref_name(schema.ref)}`"

    if schema.type == "object" and schema.properties:
        return "\n".join(
            f"{prefix}- `{name}`" + (f" ({prop.type})" if prop.type else "")
            for name, prop in schema.properties.items()
        )

    if schema.type == "array" and schema.items is not None:
        item_type = schema.items.type or ref_name(schema.items.ref) or "any"
        return f"{prefix}Array of `{item_type}`"

    if schema.type:
        return f"{prefix}Type: `{schema.type}`"

    return ""


def _format_enum_value(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def _format_schemas(schemas: dict[str, OpenApiSchema]) -> str:
    lines = ["## Data Models"]

    for name, schema in schemas.items():
        lines.append(f"\n### {name}")
        if schema.description:
            lines.append(schema.description)
        if schema.type:
            lines.append(f"**Type:** `{schema.type}`")

        if schema.properties:
            lines.append("\n**Properties:**")
            required = set(schema.required)
            for prop_name, prop in schema.properties.items():
                prop_type = f" `{prop.type}`" if prop.type else ""
                is_required = " *(required)*" if prop_name in required else ""
                description = f" - {prop.description}" if prop.description else ""
                lines.append(f"- `{prop_name}`{prop_type}{is_required}{description}")

        if schema.enum is not None:
            values = ", ".join(f"`{_format_enum_value(value)}`" for value in schema.enum)
            lines.append(f"**Possible values:** {values}")

    return "\n".join(lines)


def extract_endpoints_summary(spec: Any) -> str:
    """Produce a compact endpoint listing for a spec.

    Args:
        spec: Parsed spec mapping.

    Returns:
        The API title followed by one ``- **METHOD** `path` - summary`` line
        per GET/POST/PUT/DELETE/PATCH operation.
    """
    if not _is_openapi_document(spec):
        return ""

    api = OpenApiSpec.from_dict(spec)
    lines = []
    if api.info and api.info.title:
        lines.append(f"# {api.info.title}")

    if not api.has_paths:
        return "\n".join(lines)

    lines.append("\n## Available Endpoints\n")
    for path, path_item in api.paths.items():
        for method in SUMMARY_METHODS:
            operation = path_item.operations.get(method)
            if operation is None:
                continue
            summary = operation.summary or (operation.description or "")[:100]
            lines.append(f"- **{method.upper()}** `{path}` - {summary}")

    return "\n".join(lines)
