"""Element tree model with automatic tag registration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeAlias, dataclass_transform

PRIMITIVE_TAGS = frozenset({"boolean", "string", "number"})


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Element:
    """Base for element tree nodes.

    Every element carries optional ``meta`` and ``attributes`` mappings and a
    kind-dependent ``content`` payload. Subclasses register themselves under
    their wire tag; tags that are not registered name a type declared
    elsewhere in the document (see :class:`NamedElement`).
    """

    tag: ClassVar[str]
    kinds: ClassVar[dict[str, type[Element]]] = {}

    meta: dict[str, Any] = field(default_factory=dict, kw_only=True)
    attributes: dict[str, Any] = field(default_factory=dict, kw_only=True)

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register element subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = (
            tag if tag is not None else cls.__name__.lower().removesuffix("element")
        )

        if (existing := Element.kinds.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Element.kinds[cls.tag] = cls

    @property
    def element(self) -> str:
        """Wire tag of this element."""
        return self.tag

    @property
    def id(self) -> str | None:
        """Identifier from ``meta``, set on named type declarations."""
        return self.meta.get("id")

    @property
    def description(self) -> str | None:
        return self.meta.get("description")

    @property
    def type_attributes(self) -> frozenset[str]:
        """Type attributes such as ``required`` or ``nullable``."""
        return frozenset(self.attributes.get("typeAttributes") or ())


@dataclass(frozen=True)
class MemberContent:
    """Key/value pair of an object member."""

    key: StringElement
    value: Element | None = None


@dataclass(frozen=True)
class RefContent:
    """Target of a ``ref`` element."""

    href: str


class BooleanElement(Element):
    """Boolean value, optionally carrying a literal."""

    content: bool | None = None


class StringElement(Element):
    """String value, optionally carrying a literal."""

    content: str | None = None


class NumberElement(Element):
    """Number value, optionally carrying a literal."""

    content: int | float | None = None


class EnumElement(Element):
    """Enumeration of candidate values; the first one is canonical."""

    content: tuple[Element, ...] = ()


class ArrayElement(Element):
    """Ordered list of item elements."""

    content: tuple[Element, ...] = ()


class ObjectElement(Element):
    """Object built from ``member``, ``ref`` and ``select`` entries."""

    content: tuple[Element, ...] = ()


class OptionElement(Element):
    """One property group of a ``select``."""

    content: tuple[Element, ...] = ()


class SelectElement(Element):
    """Mutually exclusive property groups."""

    content: tuple[OptionElement, ...] = ()


class MemberElement(Element):
    """Object property: ``content`` holds the key and the value element."""

    content: MemberContent

    @property
    def key(self) -> str:
        return self.content.key.content or ""

    @property
    def value(self) -> Element | None:
        return self.content.value


class RefElement(Element):
    """Inclusion of a named type's members into the enclosing object."""

    content: RefContent

    @property
    def href(self) -> str:
        return self.content.href


class NamedElement(Element, tag="named"):
    """Reference to a type declared in the document.

    The wire tag is the referenced type's identifier, so it is stored per
    instance in ``type_name`` rather than on the class. ``content`` is what
    the referencing element adds on top of the declared type.
    """

    type_name: str
    content: Any = None

    @property
    def element(self) -> str:
        return self.type_name


Content: TypeAlias = tuple[Element, ...]
