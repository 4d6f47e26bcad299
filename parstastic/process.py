"""The cursor that walks over a JSON text, and the error raised when parsing fails."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional


@dataclass
class ParsingProcess:
    """A position in a JSON text, plus whether trailing commas are accepted."""

    json: str
    index: int = 0
    allow_trailing_commas: bool = False

    @classmethod
    def for_json(cls, json: str) -> "ParsingProcess":
        """Start at the beginning of ``json`` with strict comma rules."""
        return cls(json, 0, False)

    @classmethod
    def for_json_with_trailing_commas(cls, json: str) -> "ParsingProcess":
        """Start at the beginning of ``json``, accepting trailing commas."""
        return cls(json, 0, True)

    def advance(self) -> None:
        """Move one character forward."""
        self.index += 1

    def current_char(self) -> Optional[str]:
        """The character at the cursor, or None past the end."""
        return self.json[self.index] if self.in_bounds() else None

    def is_at_char(self, character: str) -> bool:
        """Tell whether the cursor stands on ``character``."""
        return self.is_char_valid(lambda current: current == character)

    def is_char_valid(self, predicate: Callable[[str], bool]) -> bool:
        """Apply ``predicate`` to the current character; False past the end."""
        current = self.current_char()
        return current is not None and predicate(current)

    def in_bounds(self) -> bool:
        """Tell whether the cursor is on a character of the text."""
        return self.index < len(self.json)

    def starts_with(self, string: str) -> bool:
        """Tell whether the text from the cursor on begins with ``string``."""
        return self.json.startswith(string, self.index)

    def is_finished(self) -> bool:
        """Tell whether the cursor is exactly at the end of the text."""
        return self.index == len(self.json)

    def snapshot(self) -> "ParsingProcess":
        """An independent copy of the current state."""
        return replace(self)


class JsonParseError(Exception):
    """Parsing failed; carries the state of the process where it happened."""

    def __init__(self, message: str, process: ParsingProcess) -> None:
        super().__init__(message)
        self.message = message
        self.process = process