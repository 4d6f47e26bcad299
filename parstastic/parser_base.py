"""The common driver shared by every parser of a JSON particle."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from parstastic.process import JsonParseError, ParsingProcess
from parstastic.steps import Step


class ParticleParser(ABC):
    """Parses one particle by running its step, then building the result.

    A parser collects state while its step runs, so each instance is meant
    to parse a single particle.
    """

    @abstractmethod
    def can_parse(self, process: ParsingProcess) -> bool:
        """Tell whether this parser may start at the current position."""

    def can_parse_string(self, json: str) -> bool:
        """Tell whether this parser may start at the beginning of ``json``."""
        return self.can_parse(ParsingProcess.for_json(json))

    def parse(self, process: ParsingProcess) -> Any:
        """Run the parser's step over ``process`` and return the built particle.

        Raises JsonParseError when the step fails or nothing can be built.
        """
        self.get_step().execute(self, process)
        value = self.create()
        if value is None:
            raise JsonParseError("An error occurred during instantiation.", process.snapshot())
        return value

    def parse_string(self, json: str) -> Any:
        """Parse from the beginning of ``json`` with strict comma rules."""
        return self.parse(ParsingProcess.for_json(json))

    def parse_string_with_trailing_commas(self, json: str) -> Any:
        """Parse from the beginning of ``json``, accepting trailing commas."""
        return self.parse(ParsingProcess.for_json_with_trailing_commas(json))

    @abstractmethod
    def get_step(self) -> Step:
        """The step that reads this particle."""

    @abstractmethod
    def create(self) -> Optional[Any]:
        """Build the particle from the collected state, or None if incomplete."""