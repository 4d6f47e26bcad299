"""Composable steps that drive a parser over a parsing process."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple

from parstastic.process import JsonParseError, ParsingProcess

Condition = Callable[[Any, ParsingProcess], bool]
Branch = Tuple[Condition, "Step"]


class Step(ABC):
    """One unit of parsing work; raises JsonParseError when it fails."""

    @abstractmethod
    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Run the step for ``parser`` at the current position of ``process``."""


class BlockStep(Step):
    """Runs its steps in order, stopping at the first failure."""

    def __init__(self, steps: Iterable[Step]) -> None:
        self.steps = tuple(steps)

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Run every step in turn."""
        for step in self.steps:
            step.execute(parser, process)


class ExportStep(Step):
    """Hands a value to the parser; fails when the exporter returns False."""

    def __init__(self, exporter: Callable[[Any, Any], bool], value: Any = None) -> None:
        self.exporter = exporter
        self.value = value

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Call the exporter with the parser and the stored value."""
        if not self.exporter(parser, self.value):
            raise JsonParseError("Exporting failed", process.snapshot())


class ForLoopStep(Step):
    """Runs one step a fixed number of times."""

    def __init__(self, step: Step, iterations: int) -> None:
        self.step = step
        self.iterations = iterations

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Repeat the step ``iterations`` times."""
        for _ in range(self.iterations):
            self.step.execute(parser, process)


class WhileLoopStep(Step):
    """Runs one step as long as a condition holds."""

    def __init__(self, step: Step, condition: Condition) -> None:
        self.step = step
        self.condition = condition

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Repeat the step while the condition is true."""
        while self.condition(parser, process):
            self.step.execute(parser, process)


class OrStep(Step):
    """Runs the step of the first branch whose condition holds, else a fallback."""

    def __init__(self, branches: Sequence[Branch], otherwise: Step) -> None:
        self.branches = tuple(branches)
        self.otherwise = otherwise

    @classmethod
    def else_error(cls, branches: Sequence[Branch]) -> "OrStep":
        """Fail when no branch applies."""
        return cls(branches, ExportStep(lambda parser, value: False))

    @classmethod
    def else_success(cls, branches: Sequence[Branch]) -> "OrStep":
        """Do nothing when no branch applies."""
        return cls(branches, ExportStep(lambda parser, value: True))

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Pick the first matching branch and run its step."""
        for condition, step in self.branches:
            if condition(parser, process):
                step.execute(parser, process)
                return
        self.otherwise.execute(parser, process)


class ParseCharacterStep(Step):
    """Consumes the current character if the consumer accepts it."""

    def __init__(self, consumer: Callable[[Any, str], bool]) -> None:
        self.consumer = consumer

    @classmethod
    def expecting(cls, character: str) -> "ParseCharacterStep":
        """Consume exactly ``character``."""
        return cls(lambda parser, current: current == character)

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Offer the current character to the consumer and advance on success."""
        if not process.in_bounds():
            raise JsonParseError(
                "The parsing process has run past the end of the JSON.", process.snapshot()
            )
        if not self.consumer(parser, process.current_char()):
            raise JsonParseError(
                "The required character to parse was not found.", process.snapshot()
            )
        process.advance()


class ValidateCharacterStep(Step):
    """Checks the current character without consuming it."""

    def __init__(self, validator: Callable[[str], bool]) -> None:
        self.validator = validator

    @classmethod
    def expecting(cls, character: str) -> "ValidateCharacterStep":
        """Require exactly ``character``."""
        return cls(lambda current: current == character)

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Fail unless the current character passes the validator."""
        if not process.is_char_valid(self.validator):
            raise JsonParseError(
                "The character to validate was not found or invalid.", process.snapshot()
            )


class ParseStep(Step):
    """Runs a nested parser and passes its result on."""

    def __init__(
        self,
        parser_factory: Callable[[Any], Any],
        on_value: Optional[Callable[[Any, Any, ParsingProcess], None]] = None,
    ) -> None:
        self.parser_factory = parser_factory
        self.on_value = on_value

    def execute(self, parser: Any, process: ParsingProcess) -> None:
        """Create the nested parser, parse with it and hand over the value."""
        nested = self.parser_factory(parser)
        if not nested.can_parse(process):
            raise JsonParseError(
                "The given parser cannot parse the parsing process.", process.snapshot()
            )
        try:
            value = nested.parse(process)
        except JsonParseError as error:
            raise JsonParseError(
                "An error occurred during usage of the parser.", process.snapshot()
            ) from error
        if self.on_value is not None:
            self.on_value(value, parser, process)