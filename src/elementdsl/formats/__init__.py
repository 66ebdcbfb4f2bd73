"""Text formats for element trees, layered on codecs.to_builtins/from_builtins."""

from elementdsl.formats.json import from_json, to_json

__all__ = ["from_json", "to_json"]
