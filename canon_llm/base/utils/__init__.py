"""Small shared helpers for codecs (JSON repair, wire body assembly)."""

from .json_repair import attempt_json_repair, clean_json_markers, parse_partial_json
from .wire_body import drop_none, ensure_parsed_body, maybe_put

__all__ = [
    "attempt_json_repair",
    "clean_json_markers",
    "parse_partial_json",
    "drop_none",
    "ensure_parsed_body",
    "maybe_put",
]
