"""elementdsl - Example and JSON Schema compilers for API element trees."""

from elementdsl.codecs import (
    from_builtins,
    to_builtins,
)
from elementdsl.config import (
    Settings,
    load_config,
)
from elementdsl.example import compile_example
from elementdsl.formats.json import (
    from_json,
    to_json,
)
from elementdsl.inherit import combine
from elementdsl.nodes import (
    ArrayElement,
    BooleanElement,
    Element,
    EnumElement,
    MemberContent,
    MemberElement,
    NamedElement,
    NumberElement,
    ObjectElement,
    OptionElement,
    RefContent,
    RefElement,
    SelectElement,
    StringElement,
)
from elementdsl.payloads import (
    RenderedPayload,
    decorate_payloads,
    render_payload,
)
from elementdsl.registry import Registry
from elementdsl.schema import (
    DRAFT_04,
    compile_schema,
)

__all__ = [
    # Element tree
    "ArrayElement",
    "BooleanElement",
    # Schema
    "DRAFT_04",
    "Element",
    "EnumElement",
    "MemberContent",
    "MemberElement",
    "NamedElement",
    "NumberElement",
    "ObjectElement",
    "OptionElement",
    "RefContent",
    "RefElement",
    # Registry
    "Registry",
    # Payload rendering
    "RenderedPayload",
    "SelectElement",
    # Configuration
    "Settings",
    "StringElement",
    # Inheritance
    "combine",
    # Examples
    "compile_example",
    "compile_schema",
    "decorate_payloads",
    # Serialization
    "from_builtins",
    "from_json",
    "load_config",
    "render_payload",
    "to_builtins",
    "to_json",
]
