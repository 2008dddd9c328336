"""Shared fixtures for apigov tests."""

import pytest


def _responses():
    return {
        "200": {
            "description": "Successful response",
            "content": {"application/json": {"schema": {"type": "array"}}},
        },
        "400": {"description": "Bad request"},
        "429": {"description": "Too many requests"},
        "500": {"description": "Internal server error"},
    }


@pytest.fixture
def compliant_spec():
    """A document that passes every governance rule."""
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Orders API",
            "description": "Order management for the storefront",
            "version": "1.2.0",
        },
        "servers": [{"url": "https://api.example.com"}],
        "security": [{"bearerAuth": []}],
        "components": {
            "securitySchemes": {
                "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
            },
        },
        "paths": {
            "/api/orders": {
                "get": {
                    "operationId": "list_orders",
                    "security": [{"bearerAuth": []}],
                    "responses": _responses(),
                },
            },
            "/api/orders/{id}/items": {
                "parameters": [{"name": "id", "in": "path", "required": True}],
                "get": {
                    "operationId": "list_order_items",
                    "security": [{"bearerAuth": []}],
                    "responses": _responses(),
                },
            },
        },
    }


@pytest.fixture
def make_operation():
    """Build a compliant operation, overriding selected fields."""
    def _make(**overrides):
        operation = {
            "operationId": "get_item",
            "security": [{"bearerAuth": []}],
            "responses": _responses(),
        }
        operation.update(overrides)
        return operation
    return _make
