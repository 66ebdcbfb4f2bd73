"""API Elements JSON text for element trees."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from elementdsl.codecs import from_builtins, to_builtins

if TYPE_CHECKING:
    from elementdsl.nodes import Element


def to_json(element: Element, *, indent: int | None = 2) -> str:
    """Dump an element tree as API Elements JSON.

    Empty ``meta``/``attributes`` and absent content are left out, so the
    text matches what a parser would emit for the same tree. Pass
    ``indent=None`` for single-line output.
    """
    return json.dumps(to_builtins(element), indent=indent)


def from_json(s: str) -> Element:
    """Load an element tree from API Elements JSON text.

    Args:
        s: Text holding one element object, e.g. a ``dataStructure`` body

    Returns:
        The decoded tree; unknown tags become named type references

    Raises:
        ValueError: If the text is not a single element object, or a
            member, ref or container has malformed content
        KeyError: If an element object lacks its ``element`` tag

    """
    data = json.loads(s)
    if not isinstance(data, dict):
        msg = f"Expected an API Elements object, got {type(data).__name__}"
        raise ValueError(msg)
    return from_builtins(data)
