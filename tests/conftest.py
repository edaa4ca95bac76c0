"""Shared fixtures for import engine tests"""

import pytest

from specweaver.config import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Reload settings for every test so environment overrides apply"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_openapi_3_spec():
    """Sample OpenAPI 3.0 specification"""
    return {
        "openapi": "3.0.0",
        "info": {"title": "Pet Store API", "version": "1.0.0"},
        "servers": [{"url": "https://api.petstore.com/v1"}],
        "paths": {
            "/pets": {
                "parameters": [{"name": "trace", "in": "header"}],
                "get": {
                    "summary": "List all pets",
                    "operationId": "listPets",
                    "tags": ["pets"],
                    "parameters": [
                        {
                            "name": "limit",
                            "in": "query",
                            "description": "Maximum number of items to return",
                            "schema": {"type": "integer", "example": 20},
                        }
                    ],
                    "responses": {
                        "200": {
                            "description": "A list of pets",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "array",
                                        "items": {"$ref": "#/components/schemas/Pet"},
                                    }
                                }
                            },
                        },
                        "default": {"description": "Unexpected error"},
                    },
                },
                "post": {
                    "summary": "Create a pet",
                    "tags": ["pets", "admin"],
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        }
                    },
                    "responses": {"201": {"description": "Pet created"}},
                },
                "x-internal": True,
            },
            "/health": {
                "get": {"responses": {"200": {"description": "OK"}}},
            },
            "/users/{id}": {
                "get": {
                    "operationId": "getUser",
                    "tags": ["users"],
                    "parameters": [
                        {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}
                    ],
                    "responses": {"200": {"description": "A user"}},
                },
            },
        },
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "id": {"type": "integer"},
                        "name": {"type": "string", "example": "Rex"},
                        "status": {"type": "string", "enum": ["available", "sold"]},
                        "parent": {"$ref": "#/components/schemas/Pet"},
                    },
                }
            }
        },
    }


@pytest.fixture
def sample_swagger_2_spec():
    """Sample Swagger 2.0 specification"""
    return {
        "swagger": "2.0",
        "info": {"title": "User API", "version": "2.0.0"},
        "host": "api.example.com",
        "basePath": "/v2",
        "schemes": ["https"],
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "paths": {
            "/users": {
                "post": {
                    "summary": "Create user",
                    "tags": ["users"],
                    "parameters": [
                        {"name": "body", "in": "body", "schema": {"$ref": "#/definitions/User"}},
                        {"name": "dryRun", "in": "query", "type": "boolean"},
                    ],
                    "responses": {
                        200: {"description": "Created", "schema": {"$ref": "#/definitions/User"}}
                    },
                }
            }
        },
        "definitions": {
            "User": {
                "type": "object",
                "properties": {"email": {"type": "string"}, "age": {"type": "integer"}},
            }
        },
    }
