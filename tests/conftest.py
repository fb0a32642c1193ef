"""Pytest configuration and fixtures for schemaknobs tests."""

import pytest

from schemaknobs import Schema, SchemaFactory


@pytest.fixture
def address_schema():
    """Nested address object used by several tests."""
    return Schema.object({
        "street": Schema.string().min_length(1),
        "city": Schema.string().min_length(1),
        "zip_code": Schema.string().pattern(r"^\d{5}(-\d{4})?$"),
        "country": Schema.string().enum(["US", "CA", "MX"]).optional(),
    })


@pytest.fixture
def user_schema(address_schema):
    """Strict user profile schema."""
    return Schema.object({
        "id": Schema.union(Schema.string().min_length(1), Schema.number().positive()),
        "username": Schema.string().min_length(3).max_length(20).pattern(r"^[a-zA-Z0-9_]+$"),
        "email": Schema.string().email(),
        "age": Schema.number().integer().min(13).max(120).optional(),
        "address": address_schema.optional(),
        "tags": Schema.array(Schema.string()).unique().optional(),
        "role": Schema.literal("user"),
    }).strict()


@pytest.fixture
def valid_user():
    """Input that satisfies user_schema."""
    return {
        "id": "user123",
        "username": "john_doe",
        "email": "john@example.com",
        "age": 30,
        "address": {
            "street": "123 Main St",
            "city": "Anytown",
            "zip_code": "12345-6789",
        },
        "tags": ["developer", "python"],
        "role": "user",
    }


@pytest.fixture
def factory():
    """Fresh factory so registrations do not leak between tests."""
    return SchemaFactory()
