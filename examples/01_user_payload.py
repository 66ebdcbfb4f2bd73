"""
User Payload Example
====================

Compiling a small API document demonstrating:
- Declared data structures collected in a Registry
- Deriving one type from another (inheritance)
- Includes, mutually exclusive property groups and nullable members
- Example bodies and JSON Schemas for the same payload
"""

import json

from elementdsl import (
    DRAFT_04,
    Registry,
    compile_example,
    compile_schema,
    from_builtins,
)


def string_member(key, value=None, type_attributes=()):
    member = {
        "element": "member",
        "content": {
            "key": {"element": "string", "content": key},
            "value": {"element": "string", **({"content": value} if value else {})},
        },
    }
    if type_attributes:
        member["attributes"] = {"typeAttributes": list(type_attributes)}
    return member


# ============================================================================
# Declared data structures
# ============================================================================

TIMESTAMPS = {
    "element": "object",
    "meta": {"id": "Timestamps"},
    "content": [string_member("created", "2024-01-01T00:00:00Z")],
}

PERSON = {
    "element": "object",
    "meta": {"id": "Person", "description": "Someone with a name"},
    "content": [
        string_member("name", "Alice", type_attributes=["required"]),
        {"element": "ref", "content": {"href": "Timestamps"}},
    ],
}

# User (Person): derives from Person and adds its own members
USER = {
    "element": "Person",
    "meta": {"id": "User"},
    "content": [
        string_member("nickname", type_attributes=["nullable"]),
        {
            "element": "select",
            "content": [
                {"element": "option", "content": [string_member("email", "a@b.c")]},
                {"element": "option", "content": [string_member("phone")]},
            ],
        },
    ],
}


def main():
    """Compile a response body that references the User type."""
    registry = Registry.from_elements(
        from_builtins(d) for d in (TIMESTAMPS, PERSON, USER)
    )
    print(f"Declared types: {', '.join(registry)}")
    print()

    root = from_builtins({"element": "User"})

    body = compile_example(root, registry)
    print("Example body:")
    print(json.dumps(body, indent=2))
    print()

    schema = compile_schema(root, registry)
    schema["$schema"] = DRAFT_04
    print("JSON Schema:")
    print(json.dumps(schema, indent=2))


if __name__ == "__main__":
    main()
