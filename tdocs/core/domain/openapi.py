"""Typed, read-only projection of an OpenAPI 3.x / Swagger 2.x document.

Specs arrive as untyped JSON/YAML. Every record here is built with
``from_dict`` which tolerates absent or wrongly-typed fields, so the
renderer never has to guard raw dictionary access.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Rendering order for operations inside a path item.
HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")


def _as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list | tuple) else []


def _as_str(value: Any) -> str | None:
    """Scalar to string; YAML specs often carry numeric versions like 1.0."""
    if value is None or isinstance(value, Mapping | list | tuple | bool):
        return None
    return str(value)


def ref_name(ref: str | None) -> str | None:
    """Last segment of a JSON reference such as ``#/components/schemas/Pet``."""
    if not ref:
        return None
    return ref.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class OpenApiSchema:
    """A (possibly nested) schema object."""

    type: str | None = None
    format: str | None = None
    description: str | None = None
    properties: dict[str, "OpenApiSchema"] = field(default_factory=dict)
    items: "OpenApiSchema | None" = None
    required: tuple[str, ...] = ()
    enum: tuple[Any, ...] | None = None
    ref: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiSchema":
        data = _as_dict(data)
        items = data.get("items")
        enum = data.get("enum")
        return cls(
            type=_as_str(data.get("type")),
            format=_as_str(data.get("format")),
            description=_as_str(data.get("description")),
            properties={
                str(name): cls.from_dict(prop)
                for name, prop in _as_dict(data.get("properties")).items()
            },
            items=cls.from_dict(items) if isinstance(items, Mapping) else None,
            required=tuple(str(name) for name in _as_list(data.get("required"))),
            enum=tuple(enum) if isinstance(enum, list) else None,
            ref=_as_str(data.get("$ref")),
        )


@dataclass(frozen=True)
class OpenApiParameter:
    """A path, query, header or cookie parameter."""

    name: str
    location: str
    description: str | None = None
    required: bool = False
    schema: OpenApiSchema | None = None
    type: str | None = None

    @property
    def display_type(self) -> str | None:
        """Schema type (OpenAPI 3) or inline type (Swagger 2)."""
        if self.schema and self.schema.type:
            return self.schema.type
        return self.type

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiParameter":
        data = _as_dict(data)
        schema = data.get("schema")
        return cls(
            name=_as_str(data.get("name")) or ref_name(_as_str(data.get("$ref"))) or "",
            location=_as_str(data.get("in")) or "",
            description=_as_str(data.get("description")),
            required=data.get("required") is True,
            schema=OpenApiSchema.from_dict(schema) if isinstance(schema, Mapping) else None,
            type=_as_str(data.get("type")),
        )


@dataclass(frozen=True)
class OpenApiMediaType:
    """Schema attached to one content type of a body."""

    schema: OpenApiSchema | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiMediaType":
        schema = _as_dict(data).get("schema")
        return cls(schema=OpenApiSchema.from_dict(schema) if isinstance(schema, Mapping) else None)


def _content_map(data: Any) -> dict[str, OpenApiMediaType]:
    return {
        str(media): OpenApiMediaType.from_dict(value) for media, value in _as_dict(data).items()
    }


@dataclass(frozen=True)
class OpenApiRequestBody:
    """Request body of an operation."""

    description: str | None = None
    required: bool = False
    content: dict[str, OpenApiMediaType] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiRequestBody":
        data = _as_dict(data)
        return cls(
            description=_as_str(data.get("description")),
            required=data.get("required") is True,
            content=_content_map(data.get("content")),
        )


@dataclass(frozen=True)
class OpenApiResponse:
    """A single response code entry."""

    description: str | None = None
    content: dict[str, OpenApiMediaType] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiResponse":
        data = _as_dict(data)
        return cls(
            description=_as_str(data.get("description")),
            content=_content_map(data.get("content")),
        )


@dataclass(frozen=True)
class OpenApiOperation:
    """One HTTP method on one path."""

    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    tags: tuple[str, ...] = ()
    parameters: tuple[OpenApiParameter, ...] = ()
    request_body: OpenApiRequestBody | None = None
    responses: dict[str, OpenApiResponse] = field(default_factory=dict)
    deprecated: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiOperation":
        data = _as_dict(data)
        body = data.get("requestBody")
        return cls(
            summary=_as_str(data.get("summary")),
            description=_as_str(data.get("description")),
            operation_id=_as_str(data.get("operationId")),
            tags=tuple(str(tag) for tag in _as_list(data.get("tags"))),
            parameters=tuple(OpenApiParameter.from_dict(p) for p in _as_list(data.get("parameters"))),
            request_body=OpenApiRequestBody.from_dict(body) if isinstance(body, Mapping) else None,
            responses={
                str(code): OpenApiResponse.from_dict(resp)
                for code, resp in _as_dict(data.get("responses")).items()
            },
            deprecated=data.get("deprecated") is True,
        )


@dataclass(frozen=True)
class OpenApiPathItem:
    """All operations available on one path."""

    summary: str | None = None
    description: str | None = None
    parameters: tuple[OpenApiParameter, ...] = ()
    operations: dict[str, OpenApiOperation] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiPathItem":
        data = _as_dict(data)
        return cls(
            summary=_as_str(data.get("summary")),
            description=_as_str(data.get("description")),
            parameters=tuple(OpenApiParameter.from_dict(p) for p in _as_list(data.get("parameters"))),
            operations={
                method: OpenApiOperation.from_dict(data[method])
                for method in HTTP_METHODS
                if isinstance(data.get(method), Mapping)
            },
        )


@dataclass(frozen=True)
class OpenApiContact:
    name: str | None = None
    email: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class OpenApiLicense:
    name: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class OpenApiInfo:
    """The ``info`` block of a spec."""

    title: str | None = None
    description: str | None = None
    version: str | None = None
    contact: OpenApiContact | None = None
    license: OpenApiLicense | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "OpenApiInfo":
        data = _as_dict(data)
        contact = data.get("contact")
        license_ = data.get("license")
        return cls(
            title=_as_str(data.get("title")),
            description=_as_str(data.get("description")),
            version=_as_str(data.get("version")),
            contact=(
                OpenApiContact(
                    name=_as_str(contact.get("name")),
                    email=_as_str(contact.get("email")),
                    url=_as_str(contact.get("url")),
                )
                if isinstance(contact, Mapping)
                else None
            ),
            license=(
                OpenApiLicense(
                    name=_as_str(license_.get("name")),
                    url=_as_str(license_.get("url")),
                )
                if isinstance(license_, Mapping)
                else None
            ),
        )


@dataclass(frozen=True)
class OpenApiServer:
    url: str
    description: str | None = None


@dataclass(frozen=True)
class OpenApiTag:
    name: str
    description: str | None = None


@dataclass(frozen=True)
class OpenApiSpec:
    """Simplified OpenAPI/Swagger document.

    Attributes:
        openapi: OpenAPI version string (3.x specs).
        swagger: Swagger version string (2.x specs).
        info: API metadata, None when the spec has no info block.
        servers: Declared servers.
        tags: Declared tags with descriptions.
        paths: Path templates mapped to their operations, in spec order.
        schemas: ``components.schemas`` (3.x) or ``definitions`` (2.x).
    """

    openapi: str | None = None
    swagger: str | None = None
    info: OpenApiInfo | None = None
    servers: tuple[OpenApiServer, ...] = ()
    tags: tuple[OpenApiTag, ...] = ()
    paths: dict[str, OpenApiPathItem] = field(default_factory=dict)
    schemas: dict[str, OpenApiSchema] = field(default_factory=dict)
    has_paths: bool = False
    has_schemas: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OpenApiSpec":
        info = data.get("info")
        raw_paths = data.get("paths")
        raw_schemas = _as_dict(data.get("components")).get("schemas")
        if raw_schemas is None:
            raw_schemas = data.get("definitions")
        return cls(
            openapi=_as_str(data.get("openapi")),
            swagger=_as_str(data.get("swagger")),
            info=OpenApiInfo.from_dict(info) if isinstance(info, Mapping) else None,
            servers=tuple(
                OpenApiServer(url=_as_str(s.get("url")) or "", description=_as_str(s.get("description")))
                for s in _as_list(data.get("servers"))
                if isinstance(s, Mapping)
            ),
            tags=tuple(
                OpenApiTag(name=_as_str(t.get("name")) or "", description=_as_str(t.get("description")))
                for t in _as_list(data.get("tags"))
                if isinstance(t, Mapping)
            ),
            paths={
                str(path): OpenApiPathItem.from_dict(item)
                for path, item in _as_dict(raw_paths).items()
            },
            schemas={
                str(name): OpenApiSchema.from_dict(schema)
                for name, schema in _as_dict(raw_schemas).items()
            },
            has_paths=isinstance(raw_paths, Mapping),
            has_schemas=isinstance(raw_schemas, Mapping),
        )

    @property
    def spec_version(self) -> str:
        return self.openapi or self.swagger or ""
