"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from tdocs.core.ports import HeadlessRendererPort, HttpTransportPort


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (in-process API)")


@pytest.fixture
def petstore_spec():
    """A small OpenAPI 3 spec exercising tags, parameters, bodies and schemas."""
    return {
        "openapi": "3.0.1",
        "info": {
            "title": "Petstore",
            "version": "1.2.0",
            "description": "Manage pets in the store.",
            "contact": {"name": "API Team", "email": "api@example.com"},
            "license": {"name": "MIT"},
        },
        "servers": [{"url": "https://api.example.com/v1", "description": "Production"}],
        "tags": [{"name": "pets", "description": "Pet operations"}],
        "paths": {
            "/pets": {
                "get": {
                    "tags": ["pets"],
                    "summary": "List pets",
                    "operationId": "listPets",
                    "parameters": [
                        {
                            "name": "limit",
                            "in": "query",
                            "required": False,
                            "schema": {"type": "integer"},
                            "description": "Page size",
                        }
                    ],
                    "responses": {"200": {"description": "A list of pets"}},
                },
                "post": {
                    "tags": ["pets"],
                    "summary": "Create a pet",
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        }
                    },
                    "responses": {"201": {"description": "Created"}},
                },
            },
            "/health": {"get": {"summary": "Health check", "responses": {}}},
        },
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "name": {"type": "string", "description": "Pet name"},
                        "age": {"type": "integer"},
                    },
                },
                "Status": {"type": "string", "enum": ["available", "sold"]},
            }
        },
    }


@pytest.fixture
def mock_http():
    """HTTP transport fake; configure ``get``/``head`` per test."""
    return MagicMock(spec=HttpTransportPort)


@pytest.fixture
def mock_renderer():
    """Headless renderer fake that reports itself available."""
    renderer = MagicMock(spec=HeadlessRendererPort)
    renderer.is_available.return_value = True
    return renderer
