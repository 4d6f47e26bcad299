"""The JSON node tree: values, containers and scalar nodes that remember their layout."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Union

from parstastic.stringify_options import Container, StringifyOptions
from parstastic.whitespace import Whitespace

STRING_DELIMITER = '"'

NULL_STRING_VALUE = "null"

NEGATIVE_NUMBER_PREFIX = "-"
DECIMAL_DELIMITER = "."
EXPONENT_SYMBOL = "e"
EXPONENT_SYMBOL_CAPITALIZED = "E"

ARRAY_DELIMITER_START = "["
ARRAY_DELIMITER_END = "]"
ARRAY_DELIMITER_ELEMENTS = ","

OBJECT_DELIMITER_START = "{"
OBJECT_DELIMITER_END = "}"
OBJECT_DELIMITER_ELEMENTS = ","
KEY_VALUE_DELIMITER = ":"


def _options(options: Optional[StringifyOptions]) -> StringifyOptions:
    return StringifyOptions.default() if options is None else options


def _format_float(value: float) -> str:
    """Plain decimal notation with the shortest digits that round-trip."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class StringNode:
    """A string, kept with its escape sequences exactly as written."""

    value: str

    def stringify(self, options: Optional[StringifyOptions] = None) -> str:
        """Render the string between quotation marks."""
        return f"{STRING_DELIMITER}{self.value}{STRING_DELIMITER}"


@dataclass(frozen=True)
class BooleanNode:
    """The literal true or false."""

    value: bool

    def stringify(self, options: Optional[StringifyOptions] = None) -> str:
        """Render the literal."""
        return json.dumps(bool(self.value))


TRUE = BooleanNode(True)
FALSE = BooleanNode(False)
BOOLEAN_NODES = (TRUE, FALSE)


@dataclass(frozen=True)
class NullNode:
    """The literal null; it carries no value."""

    value: None = None

    def stringify(self, options: Optional[StringifyOptions] = None) -> str:
        """Render the literal."""
        return json.dumps(self.value)


NULL_NODE = NullNode()


class ExponentSign(Enum):
    """The sign written after the exponent symbol, if any."""

    BLANK = ""
    PLUS = "+"
    MINUS = "-"

    @property
    def symbol(self) -> str:
        """The sign as written."""
        return self.value

    @property
    def factor(self) -> int:
        """-1 for a minus sign, otherwise 1."""
        return -1 if self is ExponentSign.MINUS else 1


@dataclass(frozen=True)
class NumberExponent:
    """The exponent part of a number: symbol case, sign and digits."""

    is_capitalized: bool
    sign: ExponentSign
    value: int


_I32_SPAN = 2**32
_I32_HALF = 2**31
_EXPONENT_CAP = 2**64 - 2**31


def _exponent_as_i32(value: int) -> int:
    capped = min(value, _EXPONENT_CAP)
    return (capped + _I32_HALF) % _I32_SPAN - _I32_HALF


@dataclass(frozen=True)
class NumberNode:
    """A number: an integer or float base and an optional exponent."""

    base: Union[int, float]
    exponent: Optional[NumberExponent] = None

    @property
    def value(self) -> float:
        """The numeric value as a float."""
        base = float(self.base)
        if self.exponent is None:
            return base
        power = self.exponent.sign.factor * _exponent_as_i32(self.exponent.value)
        try:
            scale = 10.0**power
        except OverflowError:
            scale = math.inf
        return base * scale

    def stringify(self, options: Optional[StringifyOptions] = None) -> str:
        """Render the base, then the exponent as written."""
        if isinstance(self.base, float):
            text = _format_float(self.base)
        else:
            text = str(int(self.base))
        if self.exponent is not None:
            symbol = EXPONENT_SYMBOL_CAPITALIZED if self.exponent.is_capitalized else EXPONENT_SYMBOL
            text += f"{symbol}{self.exponent.sign.symbol}{self.exponent.value}"
        return text


@dataclass(frozen=True)
class ContainerNode:
    """Delimited content: either the whitespace of an empty container or its elements."""

    content: Union[Whitespace, tuple]
    delimiter_start: str
    delimiter_end: str
    delimiter_elements: str
    container: Container

    def __post_init__(self) -> None:
        if not isinstance(self.content, Whitespace):
            object.__setattr__(self, "content", tuple(self.content))

    @property
    def value(self) -> Union[Whitespace, tuple]:
        """The whitespace of an empty container, or the tuple of elements."""
        return self.content

    @property
    def elements(self) -> tuple:
        """The elements, empty when the container only holds whitespace."""
        return () if isinstance(self.content, Whitespace) else self.content

    def stringify(self, options: Optional[StringifyOptions] = None) -> str:
        """Render the delimiters around the whitespace or the elements."""
        options = _options(options)
        inner = options.for_container_node(self.container)
        parts = [self.delimiter_start]
        if isinstance(self.content, Whitespace):
            parts.append(inner.container_node_whitespace(self.content).stringify(inner))
        else:
            last = len(self.content) - 1
            for position, element in enumerate(self.content):
                if position == last:
                    parts.append(element.stringify(options.for_container_node_last_element(self.container)))
                else:
                    parts.append(element.stringify(inner))
                    parts.append(self.delimiter_elements)
        parts.append(self.delimiter_end)
        return "".join(parts)


class ArrayNode(ContainerNode):
    """A JSON array."""

    def __init__(self, content: Union[Whitespace, Iterable["JsonValue"]] = Whitespace()) -> None:
        super().__init__(
            content,
            ARRAY_DELIMITER_START,
            ARRAY_DELIMITER_END,
            ARRAY_DELIMITER_ELEMENTS,
            Container.ARRAY_NODE,
        )


@dataclass(frozen=True)
class ObjectNodeProperty:
    """One key and value of an object, with the whitespace around the key."""

    leading_whitespace: Whitespace
    key: StringNode
    trailing_whitespace: Whitespace
    value: "JsonValue"

    def stringify(self, options: Optional[StringifyOptions] = None) -> str:
        """Render key, colon and value."""
        options = _options(options)
        leading = options.object_node_property_leading_whitespace(self.leading_whitespace)
        trailing = options.object_node_property_trailing_whitespace(self.trailing_whitespace)
        return (
            leading.stringify(options)
            + self.key.stringify(options)
            + trailing.stringify(options)
            + KEY_VALUE_DELIMITER
            + self.value.stringify(options)
        )


class ObjectNode(ContainerNode):
    """A JSON object."""

    def __init__(self, content: Union[Whitespace, Iterable[ObjectNodeProperty]] = Whitespace()) -> None:
        super().__init__(
            content,
            OBJECT_DELIMITER_START,
            OBJECT_DELIMITER_END,
            OBJECT_DELIMITER_ELEMENTS,
            Container.OBJECT_NODE,
        )


JsonNode = Union[StringNode, NumberNode, ObjectNode, ArrayNode, BooleanNode, NullNode]


@dataclass(frozen=True)
class JsonValue:
    """A node with the whitespace written before and after it."""

    leading_whitespace: Whitespace
    node: JsonNode
    trailing_whitespace: Whitespace

    def stringify(self, options: Optional[StringifyOptions] = None) -> str:
        """Render the whitespace and the node."""
        options = _options(options)
        leading = options.json_value_leading_whitespace(self.leading_whitespace)
        trailing = options.json_value_trailing_whitespace(self.trailing_whitespace)
        return leading.stringify(options) + self.node.stringify(options) + trailing.stringify(options)