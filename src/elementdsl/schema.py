"""JSON Schema (draft-04) generation from element trees."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from elementdsl.nodes import (
    ArrayElement,
    BooleanElement,
    EnumElement,
    MemberElement,
    NamedElement,
    NumberElement,
    ObjectElement,
    OptionElement,
    SelectElement,
    StringElement,
)

if TYPE_CHECKING:
    from elementdsl.nodes import Element
    from elementdsl.registry import Registry

DRAFT_04 = "http://json-schema.org/draft-04/schema#"

REQUIRED = "required"
NULLABLE = "nullable"


def compile_schema(root: Element, registry: Registry) -> dict[str, Any]:
    """Build a JSON Schema document describing ``root``.

    The result does not carry ``$schema``; callers add it for the top-level
    document only.

    Args:
        root: Element describing the payload
        registry: Declared types used to resolve named references and includes

    Returns:
        Schema dict. References to undeclared types produce ``{}``.

    """
    schema: dict[str, Any]
    match root:
        case BooleanElement() | NumberElement() | StringElement():
            schema = {"type": root.tag}
            default = root.attributes.get("default")
            if default is not None:
                schema["default"] = default
        case EnumElement(content=variants):
            schema = {"enum": [getattr(v, "content", None) for v in variants]}
        case ArrayElement(content=items):
            schema = _compile_array(items, registry)
        case ObjectElement() | OptionElement():
            schema = _compile_object(root, registry)
        case NamedElement():
            merged = registry.resolve(root)
            schema = compile_schema(merged, registry) if merged is not None else {}
        case _:
            schema = {}

    if root.description is not None:
        schema["description"] = root.description
    if NULLABLE in root.type_attributes:
        make_nullable(schema)
    return schema


def _compile_array(items: tuple[Element, ...], registry: Registry) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array"}
    item_schemas = [compile_schema(item, registry) for item in items]
    if not item_schemas:
        return schema

    first = item_schemas[0]
    if all(s == first for s in item_schemas[1:]):
        schema["items"] = first
    else:
        schema["items"] = {"anyOf": item_schemas}
    return schema


def _compile_object(
    root: ObjectElement | OptionElement,
    registry: Registry,
) -> dict[str, Any]:
    """Compile object or option content to an object schema.

    Each ``select`` merges the properties of all its options and adds
    ``{"not": {"required": keys}}`` to ``allOf``. A select whose options
    contribute no keys adds nothing, since draft-04 requires at least one
    name in ``required``.
    """
    properties: dict[str, Any] = {}
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    required: list[str] = []

    for entry in registry.expand(root.content):
        if isinstance(entry, SelectElement):
            exclusive: list[str] = []
            for option in entry.content:
                option_schema = compile_schema(option, registry)
                for key, prop in option_schema.get("properties", {}).items():
                    if key not in exclusive:
                        exclusive.append(key)
                    properties[key] = prop
            if exclusive:
                schema.setdefault("allOf", []).append({"not": {"required": exclusive}})
            continue
        if not isinstance(entry, MemberElement):
            continue

        key = entry.key
        value = entry.value
        prop = compile_schema(value, registry) if value is not None else {}
        if entry.description is not None:
            prop["description"] = entry.description
        attrs = entry.type_attributes
        if REQUIRED in attrs and key not in required:
            required.append(key)
        if NULLABLE in attrs:
            make_nullable(prop)
        properties[key] = prop

    if required:
        schema["required"] = required
    return schema


def make_nullable(schema: dict[str, Any]) -> dict[str, Any]:
    """Allow ``null`` in addition to what ``schema`` already accepts.

    ``type: t`` becomes ``type: [t, "null"]``. A type list that already admits
    null is left alone. Untyped enums get ``None`` added to their values.
    """
    if "type" in schema:
        current = schema["type"]
        if isinstance(current, list):
            if "null" not in current:
                current.append("null")
        else:
            schema["type"] = [current, "null"]
    elif "enum" in schema and None not in schema["enum"]:
        schema["enum"].append(None)
    return schema
