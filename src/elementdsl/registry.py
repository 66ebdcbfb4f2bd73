"""Named type registry shared by the example and schema compilers."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from elementdsl.codecs import from_builtins
from elementdsl.inherit import combine
from elementdsl.nodes import Element, NamedElement, RefElement

if TYPE_CHECKING:
    from collections.abc import Iterable

    from elementdsl.nodes import Content

logger = logging.getLogger(__name__)

_DATA_STRUCTURE = "dataStructure"


@dataclass(frozen=True)
class Registry(Mapping[str, Element]):
    """Read-only mapping from type identifier to its declaration.

    Built once per document and never mutated afterwards, so any number of
    compilations may share one instance.
    """

    types: Mapping[str, Element] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", MappingProxyType(dict(self.types)))

    def __getitem__(self, key: str) -> Element:
        return self.types[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    @classmethod
    def from_elements(cls, elements: Iterable[Element]) -> Registry:
        """Index declarations by their ``meta.id``.

        Elements without an id are skipped; a later declaration replaces an
        earlier one with the same id.
        """
        return cls({e.id: e for e in elements if e.id is not None})

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Registry:
        """Build the registry from an API Elements parse result.

        Every ``dataStructure`` item found in the document's categories
        contributes its first content element.

        Args:
            document: The ``api`` dict produced by the parser

        Returns:
            Registry of all declared data structures

        """
        declarations = []
        for category in document.get("content") or ():
            for item in category.get("content") or ():
                if item.get("element") == _DATA_STRUCTURE and item.get("content"):
                    declarations.append(from_builtins(item["content"][0]))

        registry = cls.from_elements(declarations)
        logger.debug("Known data structures: %s", ", ".join(registry))
        return registry

    def resolve(self, element: NamedElement) -> Element | None:
        """Return the declared type of ``element`` extended by ``element``.

        Returns:
            The merged element, or None if the type is not declared

        """
        declared = self.types.get(element.type_name)
        if declared is None:
            logger.debug("Unresolved type reference '%s'", element.type_name)
            return None
        return combine(declared, element)

    def expand(self, content: Content) -> Iterator[Element]:
        """Iterate object content with ``ref`` entries spliced in place.

        Each ref is replaced by the referenced type's content and scanning
        resumes at the first spliced entry, so nested refs expand too.
        Unresolved refs contribute nothing. Cyclic includes never terminate.
        """
        pending = list(content) if isinstance(content, tuple) else []
        i = 0
        while i < len(pending):
            entry = pending[i]
            if isinstance(entry, RefElement):
                target = self.types.get(entry.href)
                included = getattr(target, "content", None)
                if target is None:
                    logger.debug("Unresolved include '%s'", entry.href)
                pending[i : i + 1] = included if isinstance(included, tuple) else ()
                continue
            i += 1
            yield entry
