"""Conversion between element trees and API Elements builtins.

The builtins form is the JSON-compatible dict structure emitted by API
description parsers::

    {"element": "object", "meta": {...}, "attributes": {...}, "content": [...]}
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from elementdsl.nodes import (
    PRIMITIVE_TAGS,
    Element,
    MemberContent,
    MemberElement,
    NamedElement,
    RefContent,
    RefElement,
    StringElement,
)

_TAG_KEY = "element"
_META_KEY = "meta"
_ATTRIBUTES_KEY = "attributes"
_CONTENT_KEY = "content"

# Attribute values the parser emits as lists but that behave like sets
_SET_ATTRIBUTES = frozenset({"typeAttributes"})


def to_builtins(element: Element) -> dict[str, Any]:
    """Convert an element tree to JSON-compatible Python builtins.

    Args:
        element: Root of the tree to encode

    Returns:
        Dict in API Elements shape. Empty ``meta``/``attributes`` and absent
        content are omitted.

    """
    result: dict[str, Any] = {_TAG_KEY: element.element}
    if element.meta:
        result[_META_KEY] = _encode_value(element.meta)
    if element.attributes:
        result[_ATTRIBUTES_KEY] = _encode_value(element.attributes)

    content = getattr(element, "content", None)
    if isinstance(content, MemberContent):
        member: dict[str, Any] = {"key": to_builtins(content.key)}
        if content.value is not None:
            member["value"] = to_builtins(content.value)
        result[_CONTENT_KEY] = member
    elif isinstance(content, RefContent):
        result[_CONTENT_KEY] = {"href": content.href}
    elif content is not None:
        result[_CONTENT_KEY] = _encode_value(content)
    return result


def _encode_value(value: Any) -> Any:
    """Encode nested content, meta or attribute values."""
    if isinstance(value, Element):
        return to_builtins(value)
    if isinstance(value, (tuple, list)):
        return [_encode_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(_encode_value(item) for item in value)
    if isinstance(value, Mapping):
        return {k: _encode_value(v) for k, v in value.items()}
    return value


def from_builtins(data: Mapping[str, Any]) -> Element:
    """Decode an API Elements dict to an element tree.

    Args:
        data: Dict with an ``element`` field

    Returns:
        The decoded element. Tags that are not built-in kinds decode to
        :class:`NamedElement`.

    Raises:
        KeyError: If the ``element`` field is missing
        ValueError: If content does not have the shape its tag requires

    """
    if not isinstance(data, Mapping):
        msg = f"Expected an element object, got {type(data).__name__}"
        raise ValueError(msg)
    if _TAG_KEY not in data:
        msg = f"Missing required '{_TAG_KEY}' field"
        raise KeyError(msg)

    tag = data[_TAG_KEY]
    meta = dict(data.get(_META_KEY) or {})
    attributes = _decode_attributes(data.get(_ATTRIBUTES_KEY) or {})
    raw = data.get(_CONTENT_KEY)

    if tag == MemberElement.tag:
        return MemberElement(
            content=_decode_member(raw),
            meta=meta,
            attributes=attributes,
        )

    if tag == RefElement.tag:
        if not isinstance(raw, Mapping) or "href" not in raw:
            msg = "Missing required 'href' in ref content"
            raise ValueError(msg)
        return RefElement(
            content=RefContent(href=raw["href"]),
            meta=meta,
            attributes=attributes,
        )

    element_cls = Element.kinds.get(tag)
    if element_cls is None or element_cls is NamedElement:
        return NamedElement(
            type_name=tag,
            content=_decode_content(raw),
            meta=meta,
            attributes=attributes,
        )

    if tag in PRIMITIVE_TAGS:
        if isinstance(raw, (list, Mapping)):
            msg = f"Element '{tag}' expects a literal content, got {type(raw).__name__}"
            raise ValueError(msg)
        return element_cls(content=raw, meta=meta, attributes=attributes)

    if raw is not None and not isinstance(raw, list):
        msg = f"Element '{tag}' expects a list content, got {type(raw).__name__}"
        raise ValueError(msg)
    return element_cls(
        content=tuple(from_builtins(item) for item in raw or ()),
        meta=meta,
        attributes=attributes,
    )


def _decode_member(raw: Any) -> MemberContent:
    if not isinstance(raw, Mapping) or "key" not in raw:
        msg = "Missing required 'key' in member content"
        raise ValueError(msg)
    key = from_builtins(raw["key"])
    if not isinstance(key, StringElement):
        msg = f"Member key must be a string element, got '{key.element}'"
        raise ValueError(msg)
    value = raw.get("value")
    return MemberContent(
        key=key,
        value=from_builtins(value) if value is not None else None,
    )


def _decode_content(raw: Any) -> Any:
    """Decode content of a named-type reference, whose shape is not fixed."""
    if isinstance(raw, list):
        return tuple(from_builtins(item) for item in raw)
    return raw


def _decode_attributes(raw: Mapping[str, Any]) -> dict[str, Any]:
    attributes = dict(raw)
    for name in _SET_ATTRIBUTES & attributes.keys():
        value = attributes[name]
        # Refract 1.0 wraps the list in an array element of strings
        if isinstance(value, Mapping) and value.get(_TAG_KEY) == "array":
            value = [item.get(_CONTENT_KEY) for item in value.get(_CONTENT_KEY) or ()]
        if isinstance(value, Sequence) and not isinstance(value, str):
            attributes[name] = tuple(value)
    return attributes
