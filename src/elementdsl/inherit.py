"""Element inheritance: derive one type definition from another."""

from __future__ import annotations

import copy
from dataclasses import replace
from typing import Any, TypeVar

from elementdsl.nodes import Element, MemberElement

E = TypeVar("E", bound=Element)


def combine(base: E, override: Element) -> E:
    """Merge ``override`` on top of ``base``.

    The result has the kind of ``base`` and shares no mutable structure with
    either input.

    - ``meta`` and ``attributes`` are merged key by key, ``override`` winning.
    - Sequence content is appended (base first). Any other content present on
      ``override`` replaces the base content; absent content keeps the base's.
    - When the merged content is a member list, the last member for each key
      is kept.

    Args:
        base: The declared type being extended
        override: The element that extends it

    Returns:
        A new element of the same class as ``base``

    """
    meta = {**copy.deepcopy(base.meta), **copy.deepcopy(override.meta)}
    attributes = {
        **copy.deepcopy(base.attributes),
        **copy.deepcopy(override.attributes),
    }

    content = copy.deepcopy(getattr(base, "content", None))
    extra = getattr(override, "content", None)
    if extra is not None:
        extra = copy.deepcopy(extra)
        if isinstance(content, tuple) and isinstance(extra, tuple):
            content = unique_members(content + extra)
        elif isinstance(extra, tuple):
            content = unique_members(extra)
        else:
            content = extra

    return replace(base, meta=meta, attributes=attributes, content=content)


def unique_members(content: tuple[Any, ...]) -> tuple[Any, ...]:
    """Drop members whose key reappears later in ``content``.

    Only applies when the first entry is a member; other entries are kept
    as they are.
    """
    if not content or not isinstance(content[0], MemberElement):
        return content

    seen: set[str] = set()
    kept: list[Any] = []
    for item in reversed(content):
        if isinstance(item, MemberElement):
            if item.key in seen:
                continue
            seen.add(item.key)
        kept.append(item)
    kept.reverse()
    return tuple(kept)
