"""Attach example bodies and JSON Schemas to request/response payloads."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from elementdsl.codecs import from_builtins
from elementdsl.config import Settings
from elementdsl.example import compile_example
from elementdsl.formats.json import to_json
from elementdsl.registry import Registry
from elementdsl.schema import compile_schema

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from elementdsl.nodes import Element

logger = logging.getLogger(__name__)

_PAYLOAD_KINDS = ("requests", "responses")

# Raised by json.dumps on cycles or non-JSON literals, and by cyclic registries
_RENDER_ERRORS = (TypeError, ValueError, RecursionError)


@dataclass(frozen=True)
class RenderedPayload:
    """Formatted example body and schema for one payload."""

    body: str | None = None
    schema: str | None = None


def render_payload(
    root: Element,
    registry: Registry,
    settings: Settings | None = None,
) -> RenderedPayload:
    """Compile one payload data structure to formatted JSON text.

    Each target is rendered independently: a failure in one is logged and
    leaves that field as None without affecting the other.

    Args:
        root: Data structure describing the payload
        registry: Declared types of the document
        settings: Rendering options (defaults apply when omitted)

    Returns:
        The rendered body and schema

    """
    settings = settings or Settings()
    body = None
    schema = None

    if settings.schemas:
        try:
            document = compile_schema(root, registry)
            document["$schema"] = settings.schema_dialect
            schema = json.dumps(document, indent=settings.indent)
        except _RENDER_ERRORS as e:
            _log_failure("schema", root, e, settings)

    if settings.examples:
        try:
            value = compile_example(root, registry)
            if value is not None:
                body = json.dumps(value, indent=settings.indent)
        except _RENDER_ERRORS as e:
            _log_failure("example", root, e, settings)

    return RenderedPayload(body=body, schema=schema)


def _log_failure(
    target: str,
    root: Element,
    error: Exception,
    settings: Settings,
) -> None:
    logger.warning("Could not render %s for '%s': %s", target, root.element, error)
    if settings.verbose:
        try:
            logger.debug("Offending element:\n%s", to_json(root))
        except _RENDER_ERRORS:
            logger.debug("Offending element could not be serialized")


def decorate_payloads(
    api: dict[str, Any],
    settings: Settings | None = None,
) -> Registry:
    """Render every request and response data structure of a parsed API.

    Walks ``resourceGroups`` → ``resources`` → ``actions`` → ``examples`` and
    sets ``body`` and ``schema`` on each payload that carries a
    ``dataStructure``. A schema already present on a payload is kept.
    The ``api`` dict is updated in place.

    Args:
        api: Parse result with legacy AST payloads and API Elements content
        settings: Rendering options (defaults apply when omitted)

    Returns:
        The registry built from the document's data structures

    """
    settings = settings or Settings()
    started = time.perf_counter()
    registry = Registry.from_document(api)

    for payload in _iter_payloads(api):
        for item in payload.get("content") or ():
            if item.get("element") != "dataStructure" or not item.get("content"):
                continue
            try:
                root = from_builtins(item["content"][0])
            except (KeyError, ValueError) as e:
                logger.warning("Could not decode payload data structure: %s", e)
                continue
            rendered = render_payload(
                root,
                registry,
                replace(
                    settings,
                    schemas=settings.schemas and not payload.get("schema"),
                ),
            )
            if rendered.schema is not None:
                payload["schema"] = rendered.schema
            if rendered.body is not None:
                payload["body"] = rendered.body

    if settings.benchmark:
        logger.info("decorate payloads: %.3fs", time.perf_counter() - started)
    return registry


def _iter_payloads(api: Mapping[str, Any]) -> Iterator[dict[str, Any]]:
    for group in api.get("resourceGroups") or ():
        for resource in group.get("resources") or ():
            for action in resource.get("actions") or ():
                for example in action.get("examples") or ():
                    for kind in _PAYLOAD_KINDS:
                        yield from example.get(kind) or ()
