"""Whitespace characters and runs of whitespace between JSON tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from parstastic.stringify_options import StringifyOptions


class WhitespaceCharacter(Enum):
    """One of the four characters JSON treats as insignificant whitespace."""

    SPACE = " "
    HORIZONTAL_TAB = "\t"
    LINE_FEED = "\n"
    CARRIAGE_RETURN = "\r"

    @classmethod
    def from_character(cls, character: str) -> Optional["WhitespaceCharacter"]:
        """Return the member for ``character``, or None if it is not whitespace."""
        try:
            return cls(character)
        except ValueError:
            return None

    @classmethod
    def is_whitespace_character(cls, character: str) -> bool:
        """Tell whether ``character`` is JSON whitespace."""
        return cls.from_character(character) is not None

    @property
    def character(self) -> str:
        """The character this member stands for."""
        return self.value


@dataclass(frozen=True)
class Whitespace:
    """A run of whitespace characters, kept exactly as written."""

    characters: tuple[WhitespaceCharacter, ...] = ()

    def __init__(self, characters: Iterable[WhitespaceCharacter] = ()) -> None:
        object.__setattr__(self, "characters", tuple(characters))

    @classmethod
    def from_string(cls, value: str) -> Optional["Whitespace"]:
        """Build whitespace from ``value``; None if any character is not whitespace."""
        characters = []
        for c in value:
            member = WhitespaceCharacter.from_character(c)
            if member is None:
                return None
            characters.append(member)
        return cls(characters)

    @property
    def value(self) -> tuple[WhitespaceCharacter, ...]:
        """The characters of this run."""
        return self.characters

    def stringify(self, options: Optional["StringifyOptions"] = None) -> str:
        """Render the run; whitespace looks the same under every option set."""
        return "".join(c.character for c in self.characters)