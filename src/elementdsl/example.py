"""Example value generation from element trees."""

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
    SelectElement,
    StringElement,
)

if TYPE_CHECKING:
    from elementdsl.nodes import Content, Element
    from elementdsl.registry import Registry

DEFAULT_BOOLEAN = True
DEFAULT_NUMBER = 1
DEFAULT_STRING = "Hello, world!"


def compile_example(root: Element, registry: Registry) -> Any:
    """Build a representative value for ``root``.

    Literal content is used where present, otherwise a fixed placeholder per
    primitive kind. Enums and selects contribute their first variant only.

    Args:
        root: Element describing the value
        registry: Declared types used to resolve named references

    Returns:
        The example value, or None when ``root`` has no example (for instance
        a reference to an undeclared type)

    """
    match root:
        case BooleanElement(content=content):
            return DEFAULT_BOOLEAN if content is None else content
        case NumberElement(content=content):
            return DEFAULT_NUMBER if content is None else content
        case StringElement(content=content):
            return DEFAULT_STRING if content is None else content
        case EnumElement(content=variants):
            return compile_example(variants[0], registry) if variants else None
        case ArrayElement(content=items):
            return [compile_example(item, registry) for item in items]
        case ObjectElement(content=content):
            return _compile_object(content, registry)
        case NamedElement():
            merged = registry.resolve(root)
            return compile_example(merged, registry) if merged is not None else None
        case _:
            return None


def _compile_object(content: Content, registry: Registry) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for entry in registry.expand(content):
        if isinstance(entry, SelectElement):
            if entry.content:
                obj.update(_compile_object(entry.content[0].content, registry))
            continue
        if isinstance(entry, MemberElement):
            value = entry.value
            obj[entry.key] = (
                compile_example(value, registry) if value is not None else None
            )
    return obj
