"""Top-level entry points: parse JSON text and write node trees back out."""

from __future__ import annotations

from typing import Any, Optional

from parstastic.nodes import JsonValue
from parstastic.process import JsonParseError
from parstastic.structure_parsers import FullStringJsonParser


def stringify(particle: Any) -> str:
    """Render any node, value or whitespace with default options."""
    return particle.stringify()


def parse(json: str) -> Optional[JsonValue]:
    """Parse the whole of ``json``; None if it is not valid."""
    try:
        return FullStringJsonParser().parse_string_fully(json)
    except JsonParseError:
        return None


def parse_unsafe(json: str) -> JsonValue:
    """Parse the whole of ``json``; raise JsonParseError if it is not valid."""
    try:
        return FullStringJsonParser().parse_string_fully(json)
    except JsonParseError as error:
        raise JsonParseError("An error occurred during parsing of JSON.", error.process) from error