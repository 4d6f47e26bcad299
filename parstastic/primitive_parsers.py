"""Parsers for whitespace and for the scalar JSON nodes."""

from __future__ import annotations

import string
from typing import List, Optional, Union

from parstastic.nodes import (
    BOOLEAN_NODES,
    DECIMAL_DELIMITER,
    EXPONENT_SYMBOL,
    EXPONENT_SYMBOL_CAPITALIZED,
    FALSE,
    NEGATIVE_NUMBER_PREFIX,
    NULL_NODE,
    NULL_STRING_VALUE,
    STRING_DELIMITER,
    TRUE,
    BooleanNode,
    ExponentSign,
    NullNode,
    NumberExponent,
    NumberNode,
    StringNode,
)
from parstastic.parser_base import ParticleParser
from parstastic.process import ParsingProcess
from parstastic.steps import (
    BlockStep,
    ExportStep,
    ForLoopStep,
    OrStep,
    ParseCharacterStep,
    Step,
    ValidateCharacterStep,
    WhileLoopStep,
)
from parstastic.whitespace import Whitespace, WhitespaceCharacter

_U64_LIMIT = 2**64
_I64_MIN = -(2**63)

_ESCAPE_TARGETS = '"\\/bfnrt'
_ESCAPE_PREFIX = "\\"
_UNICODE_ESCAPE = "u"
_UNICODE_DIGITS = 4


class WhitespaceParser(ParticleParser):
    """Reads a run of whitespace, possibly empty, appended to a given start."""

    def __init__(self, whitespace: Optional[Whitespace] = None) -> None:
        self.characters: List[WhitespaceCharacter] = (
            list(whitespace.characters) if whitespace is not None else []
        )

    def can_parse(self, process: ParsingProcess) -> bool:
        """Whitespace may always be read, even when there is none."""
        return True

    def _take(self, character: str) -> bool:
        member = WhitespaceCharacter.from_character(character)
        if member is None:
            return False
        self.characters.append(member)
        return True

    def get_step(self) -> Step:
        """Consume characters while they are whitespace."""
        return WhileLoopStep(
            ParseCharacterStep(lambda parser, c: parser._take(c)),
            lambda parser, process: process.is_char_valid(WhitespaceCharacter.is_whitespace_character),
        )

    def create(self) -> Whitespace:
        """The collected run."""
        return Whitespace(self.characters)


class StringNodeParser(ParticleParser):
    """Reads a quoted string, keeping escape sequences as written."""

    def __init__(self) -> None:
        self.characters: List[str] = []

    def can_parse(self, process: ParsingProcess) -> bool:
        """A string starts at a quotation mark."""
        return process.is_at_char(STRING_DELIMITER)

    def _add(self, character: str) -> bool:
        self.characters.append(character)
        return True

    def _add_step(self) -> ParseCharacterStep:
        return ParseCharacterStep(lambda parser, c: parser._add(c))

    def _unicode_step(self) -> Step:
        return BlockStep(
            [
                ValidateCharacterStep.expecting(_UNICODE_ESCAPE),
                self._add_step(),
                ForLoopStep(
                    BlockStep(
                        [
                            ValidateCharacterStep(lambda c: c in string.hexdigits),
                            self._add_step(),
                        ]
                    ),
                    _UNICODE_DIGITS,
                ),
            ]
        )

    def _escape_target_step(self) -> Step:
        branches = [
            (lambda parser, process, target=target: process.is_at_char(target), self._add_step())
            for target in _ESCAPE_TARGETS
        ]
        return OrStep(branches, self._unicode_step())

    def _character_step(self) -> Step:
        return OrStep(
            [
                (
                    lambda parser, process: process.is_at_char(_ESCAPE_PREFIX),
                    BlockStep([self._add_step(), self._escape_target_step()]),
                )
            ],
            self._add_step(),
        )

    def get_step(self) -> Step:
        """Opening quote, characters up to the closing quote, closing quote."""
        return BlockStep(
            [
                ParseCharacterStep.expecting(STRING_DELIMITER),
                WhileLoopStep(
                    self._character_step(),
                    lambda parser, process: not process.is_at_char(STRING_DELIMITER),
                ),
                ParseCharacterStep.expecting(STRING_DELIMITER),
            ]
        )

    def create(self) -> StringNode:
        """The string between the quotes."""
        return StringNode("".join(self.characters))


def _is_digit_zero(c: str) -> bool:
    return c == "0"


def _is_digit_one_to_nine(c: str) -> bool:
    return "1" <= c <= "9"


def _is_digit(c: str) -> bool:
    return _is_digit_zero(c) or _is_digit_one_to_nine(c)


class NumberNodeParser(ParticleParser):
    """Reads a number: sign, integer part, fraction and exponent."""

    def __init__(self) -> None:
        self.base: List[str] = []
        self.is_exponent_capitalized: Optional[bool] = None
        self.exponent_sign: Optional[ExponentSign] = None
        self.exponent: List[str] = []

    def can_parse(self, process: ParsingProcess) -> bool:
        """A number starts at a minus sign or a digit."""
        return process.is_char_valid(lambda c: c == NEGATIVE_NUMBER_PREFIX or _is_digit(c))

    def _push(self, character: str, to_exponent: bool) -> bool:
        (self.exponent if to_exponent else self.base).append(character)
        return True

    def _base_add_step(self) -> ParseCharacterStep:
        return ParseCharacterStep(lambda parser, c: parser._push(c, False))

    def _sign_step(self) -> Step:
        return OrStep.else_success(
            [(lambda parser, process: process.is_at_char(NEGATIVE_NUMBER_PREFIX), self._base_add_step())]
        )

    def _integer_step(self) -> Step:
        return OrStep.else_error(
            [
                (
                    lambda parser, process: process.is_char_valid(_is_digit_zero),
                    self._base_add_step(),
                ),
                (
                    lambda parser, process: process.is_char_valid(_is_digit_one_to_nine),
                    BlockStep(
                        [
                            self._base_add_step(),
                            WhileLoopStep(
                                self._base_add_step(),
                                lambda parser, process: process.is_char_valid(_is_digit),
                            ),
                        ]
                    ),
                ),
            ]
        )

    def _digits_step(self, to_exponent: bool) -> Step:
        """At least one digit, then as many as follow."""
        return BlockStep(
            [
                ValidateCharacterStep(_is_digit),
                ParseCharacterStep(lambda parser, c: parser._push(c, to_exponent)),
                WhileLoopStep(
                    ParseCharacterStep(lambda parser, c: parser._push(c, to_exponent)),
                    lambda parser, process: process.is_char_valid(_is_digit),
                ),
            ]
        )

    def _fraction_step(self) -> Step:
        return OrStep.else_success(
            [
                (
                    lambda parser, process: process.is_at_char(DECIMAL_DELIMITER),
                    BlockStep([self._base_add_step(), self._digits_step(False)]),
                )
            ]
        )

    def _set_exponent_symbol(self, character: str) -> bool:
        self.is_exponent_capitalized = character.isupper()
        return True

    def _set_exponent_sign(self, sign: ExponentSign) -> bool:
        self.exponent_sign = sign
        return True

    def _exponent_sign_step(self) -> Step:
        # The sign is recorded here but not consumed.
        branches = [
            (
                lambda parser, process, sign=sign: process.starts_with(sign.symbol),
                ExportStep(lambda parser, value: parser._set_exponent_sign(value), sign),
            )
            for sign in (ExponentSign.PLUS, ExponentSign.MINUS)
        ]
        return OrStep(
            branches,
            ExportStep(lambda parser, value: parser._set_exponent_sign(value), ExponentSign.BLANK),
        )

    def _exponent_step(self) -> Step:
        return OrStep.else_success(
            [
                (
                    lambda parser, process: process.is_char_valid(
                        lambda c: c in (EXPONENT_SYMBOL, EXPONENT_SYMBOL_CAPITALIZED)
                    ),
                    BlockStep(
                        [
                            ParseCharacterStep(lambda parser, c: parser._set_exponent_symbol(c)),
                            self._exponent_sign_step(),
                            self._digits_step(True),
                        ]
                    ),
                )
            ]
        )

    def get_step(self) -> Step:
        """Sign, integer part, optional fraction, optional exponent."""
        return BlockStep(
            [
                self._sign_step(),
                self._integer_step(),
                self._fraction_step(),
                self._exponent_step(),
            ]
        )

    def _parse_base(self) -> Optional[Union[int, float]]:
        text = "".join(self.base)
        if DECIMAL_DELIMITER not in text:
            try:
                number = int(text)
            except ValueError:
                number = None
            if number is not None and _I64_MIN <= number < _U64_LIMIT:
                return number
        try:
            return float(text)
        except ValueError:
            return None

    def _parse_exponent(self) -> Optional[NumberExponent]:
        text = "".join(self.exponent)
        if not text:
            return None
        value = int(text)
        if value >= _U64_LIMIT:
            return None
        if self.is_exponent_capitalized is None or self.exponent_sign is None:
            return None
        return NumberExponent(self.is_exponent_capitalized, self.exponent_sign, value)

    def create(self) -> Optional[NumberNode]:
        """The number; an exponent that cannot be read is left out."""
        base = self._parse_base()
        if base is None:
            return None
        return NumberNode(base, self._parse_exponent())


class BooleanNodeParser(ParticleParser):
    """Reads the literal true or false."""

    def __init__(self) -> None:
        self.value: Optional[bool] = None

    def can_parse(self, process: ParsingProcess) -> bool:
        """The text at the cursor begins with one of the literals."""
        return any(process.starts_with(node.stringify()) for node in BOOLEAN_NODES)

    def _export(self, value: bool) -> bool:
        self.value = value
        return True

    def _branch(self, node: BooleanNode):
        text = node.stringify()
        return (
            lambda parser, process: process.starts_with(text),
            BlockStep(
                [
                    ForLoopStep(ParseCharacterStep(lambda parser, c: True), len(text)),
                    ExportStep(lambda parser, value: parser._export(value), node.value),
                ]
            ),
        )

    def get_step(self) -> Step:
        """Consume whichever literal stands at the cursor."""
        return OrStep.else_error([self._branch(node) for node in BOOLEAN_NODES])

    def create(self) -> Optional[BooleanNode]:
        """The literal read, or None if none was."""
        if self.value is None:
            return None
        return TRUE if self.value else FALSE


class NullNodeParser(ParticleParser):
    """Reads the literal null."""

    def can_parse(self, process: ParsingProcess) -> bool:
        """The text at the cursor begins with null."""
        return process.starts_with(NULL_STRING_VALUE)

    def get_step(self) -> Step:
        """Consume the letters of null one by one."""
        return BlockStep(ParseCharacterStep.expecting(c) for c in NULL_STRING_VALUE)

    def create(self) -> NullNode:
        """The null node."""
        return NULL_NODE