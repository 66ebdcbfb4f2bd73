"""Tests for elementdsl.payloads module."""

import json
import logging
from decimal import Decimal

import pytest

from elementdsl.config import Settings
from elementdsl.nodes import (
    MemberContent,
    MemberElement,
    NamedElement,
    NumberElement,
    ObjectElement,
    StringElement,
)
from elementdsl.payloads import decorate_payloads, render_payload
from elementdsl.registry import Registry
from elementdsl.schema import DRAFT_04

EMPTY = Registry()


def member(key: str, value: object = None) -> MemberElement:
    return MemberElement(
        content=MemberContent(key=StringElement(content=key), value=value),
    )


def user_api(*payloads: dict) -> dict:
    """Parse result with one declared type and the given response payloads."""
    return {
        "content": [
            {
                "element": "category",
                "content": [
                    {
                        "element": "dataStructure",
                        "content": [
                            {
                                "element": "object",
                                "meta": {"id": "User"},
                                "content": [
                                    {
                                        "element": "member",
                                        "content": {
                                            "key": {"element": "string", "content": "id"},
                                            "value": {"element": "number", "content": 7},
                                        },
                                    },
                                ],
                            },
                        ],
                    },
                ],
            },
        ],
        "resourceGroups": [
            {
                "resources": [
                    {
                        "actions": [
                            {"examples": [{"requests": [], "responses": list(payloads)}]},
                        ],
                    },
                ],
            },
        ],
    }


class TestRenderPayload:
    """Test rendering a single payload."""

    def test_body_and_schema(self) -> None:
        """Test both targets are rendered as indented JSON."""
        root = ObjectElement(content=(member("id", NumberElement(content=3)),))
        rendered = render_payload(root, EMPTY)
        assert json.loads(rendered.body) == {"id": 3}
        schema = json.loads(rendered.schema)
        assert schema["$schema"] == DRAFT_04
        assert schema["properties"] == {"id": {"type": "number"}}
        assert rendered.body.startswith("{\n  ")

    def test_indent_setting(self) -> None:
        """Test the configured indentation is used."""
        root = ObjectElement(content=(member("id", NumberElement()),))
        rendered = render_payload(root, EMPTY, Settings(indent=4))
        assert rendered.body == '{\n    "id": 1\n}'

    def test_examples_disabled(self) -> None:
        """Test no body is produced when examples are turned off."""
        rendered = render_payload(StringElement(), EMPTY, Settings(examples=False))
        assert rendered.body is None
        assert rendered.schema is not None

    def test_schemas_disabled(self) -> None:
        """Test no schema is produced when schemas are turned off."""
        rendered = render_payload(StringElement(), EMPTY, Settings(schemas=False))
        assert rendered.schema is None
        assert rendered.body == '"Hello, world!"'

    def test_unresolved_root_has_no_body(self) -> None:
        """Test an absent example leaves the body empty."""
        rendered = render_payload(NamedElement(type_name="Missing"), EMPTY)
        assert rendered.body is None
        assert json.loads(rendered.schema) == {"$schema": DRAFT_04}

    def test_cyclic_registry_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a self-referencing type is skipped with a warning."""
        registry = Registry.from_elements(
            [
                ObjectElement(
                    meta={"id": "Node"},
                    content=(member("child", NamedElement(type_name="Node")),),
                ),
            ],
        )
        with caplog.at_level(logging.WARNING, logger="elementdsl.payloads"):
            rendered = render_payload(NamedElement(type_name="Node"), registry)
        assert rendered.body is None
        assert rendered.schema is None
        assert "Could not render schema for 'Node'" in caplog.text
        assert "Could not render example for 'Node'" in caplog.text

    def test_unserializable_literal_logged(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a failure in one target leaves the other intact."""
        root = NumberElement(content=Decimal("1.5"))
        with caplog.at_level(logging.DEBUG, logger="elementdsl.payloads"):
            rendered = render_payload(root, EMPTY, Settings(verbose=True))
        assert rendered.body is None
        assert json.loads(rendered.schema)["type"] == "number"
        assert "Offending element" in caplog.text


class TestDecoratePayloads:
    """Test decorating a parsed API in place."""

    @staticmethod
    def payload() -> dict:
        return {
            "content": [
                {
                    "element": "dataStructure",
                    "content": [{"element": "User"}],
                },
            ],
        }

    def test_body_and_schema_attached(self) -> None:
        """Test payloads with a data structure get body and schema."""
        payload = self.payload()
        registry = decorate_payloads(user_api(payload))
        assert list(registry) == ["User"]
        assert json.loads(payload["body"]) == {"id": 7}
        assert json.loads(payload["schema"])["properties"] == {
            "id": {"type": "number"},
        }

    def test_existing_schema_kept(self) -> None:
        """Test a schema supplied by the parser is not replaced."""
        payload = {**self.payload(), "schema": "{}"}
        decorate_payloads(user_api(payload))
        assert payload["schema"] == "{}"
        assert json.loads(payload["body"]) == {"id": 7}

    def test_examples_disabled(self) -> None:
        """Test parser-supplied bodies survive when examples are off."""
        payload = {**self.payload(), "body": "original"}
        decorate_payloads(user_api(payload), Settings(examples=False))
        assert payload["body"] == "original"
        assert "schema" in payload

    def test_payload_without_data_structure(self) -> None:
        """Test payloads without a data structure are left alone."""
        payload = {"content": [{"element": "asset", "content": "{}"}]}
        decorate_payloads(user_api(payload))
        assert payload == {"content": [{"element": "asset", "content": "{}"}]}

    def test_malformed_payload_skipped(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test an undecodable data structure does not stop later payloads."""
        broken = {
            "content": [
                {
                    "element": "dataStructure",
                    "content": [{"element": "member", "content": {}}],
                },
            ],
        }
        payload = self.payload()
        with caplog.at_level(logging.WARNING, logger="elementdsl.payloads"):
            decorate_payloads(user_api(broken, payload))
        assert "body" not in broken
        assert "schema" not in broken
        assert json.loads(payload["body"]) == {"id": 7}
        assert "schema" in payload
        assert "Could not decode payload data structure" in caplog.text

    def test_benchmark_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test timing is reported when benchmarking is enabled."""
        with caplog.at_level(logging.INFO, logger="elementdsl.payloads"):
            decorate_payloads(user_api(self.payload()), Settings(benchmark=True))
        assert "decorate payloads" in caplog.text
