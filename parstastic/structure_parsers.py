"""Parsers for JSON values, arrays, objects and whole documents."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from parstastic.nodes import (
    ARRAY_DELIMITER_ELEMENTS,
    ARRAY_DELIMITER_END,
    ARRAY_DELIMITER_START,
    KEY_VALUE_DELIMITER,
    OBJECT_DELIMITER_ELEMENTS,
    OBJECT_DELIMITER_END,
    OBJECT_DELIMITER_START,
    ArrayNode,
    ContainerNode,
    JsonNode,
    JsonValue,
    ObjectNode,
    ObjectNodeProperty,
    StringNode,
)
from parstastic.parser_base import ParticleParser
from parstastic.primitive_parsers import (
    BooleanNodeParser,
    NullNodeParser,
    NumberNodeParser,
    StringNodeParser,
    WhitespaceParser,
)
from parstastic.process import JsonParseError, ParsingProcess
from parstastic.steps import (
    BlockStep,
    ExportStep,
    OrStep,
    ParseCharacterStep,
    ParseStep,
    Step,
    WhileLoopStep,
)
from parstastic.stringify_options import Container
from parstastic.whitespace import Whitespace

ElementParserFactory = Callable[[Whitespace], ParticleParser]


class JsonValueParser(ParticleParser):
    """Reads a node together with the whitespace before and after it."""

    def __init__(self, leading_whitespace: Optional[Whitespace] = None) -> None:
        self.leading_whitespace: Optional[Whitespace] = leading_whitespace
        self.node: Optional[JsonNode] = None
        self.trailing_whitespace: Optional[Whitespace] = None

    def can_parse(self, process: ParsingProcess) -> bool:
        """A value may start anywhere whitespace may."""
        return WhitespaceParser().can_parse(process)

    def _set_leading(self, whitespace: Whitespace, parser: "JsonValueParser", process: ParsingProcess) -> None:
        parser.leading_whitespace = whitespace

    def _set_node(self, node: JsonNode, parser: "JsonValueParser", process: ParsingProcess) -> None:
        parser.node = node

    def _set_trailing(self, whitespace: Whitespace, parser: "JsonValueParser", process: ParsingProcess) -> None:
        parser.trailing_whitespace = whitespace

    def _node_branch(self, parser_class: Callable[[], ParticleParser]):
        return (
            lambda parser, process: parser_class().can_parse(process),
            ParseStep(lambda parser: parser_class(), self._set_node),
        )

    def get_step(self) -> Step:
        """Leading whitespace, the first node kind that fits, trailing whitespace."""
        node_parsers = (
            StringNodeParser,
            NumberNodeParser,
            ObjectNodeParser,
            ArrayNodeParser,
            BooleanNodeParser,
            NullNodeParser,
        )
        return BlockStep(
            [
                ParseStep(lambda parser: WhitespaceParser(parser.leading_whitespace), self._set_leading),
                OrStep.else_error([self._node_branch(cls) for cls in node_parsers]),
                ParseStep(lambda parser: WhitespaceParser(), self._set_trailing),
            ]
        )

    def create(self) -> Optional[JsonValue]:
        """The value, or None if any part is missing."""
        if self.leading_whitespace is None or self.node is None or self.trailing_whitespace is None:
            return None
        return JsonValue(self.leading_whitespace, self.node, self.trailing_whitespace)


class ContainerNodeParser(ParticleParser):
    """Reads delimited content: whitespace only, or elements split by a delimiter."""

    def __init__(
        self,
        delimiter_start: str,
        delimiter_end: str,
        delimiter_elements: str,
        container: Container,
        element_parser_factory: ElementParserFactory,
    ) -> None:
        self.whitespace: Optional[Whitespace] = None
        self.elements: List[Any] = []
        self.delimiter_start = delimiter_start
        self.delimiter_end = delimiter_end
        self.delimiter_elements = delimiter_elements
        self.container = container
        self.element_parser_factory = element_parser_factory

    def can_parse(self, process: ParsingProcess) -> bool:
        """A container starts at its opening delimiter."""
        return process.is_at_char(self.delimiter_start)

    def _append(self, element: Any, parser: "ContainerNodeParser", process: ParsingProcess) -> None:
        parser.elements.append(element)

    def _set_whitespace(self, whitespace: Whitespace) -> bool:
        self.whitespace = whitespace
        return True

    def _after_next_delimiter(
        self, whitespace: Whitespace, parser: "ContainerNodeParser", process: ParsingProcess
    ) -> None:
        OrStep(
            [
                (
                    lambda p, proc: proc.is_at_char(p.delimiter_end) and proc.allow_trailing_commas,
                    ExportStep(lambda p, value: True),
                )
            ],
            ParseStep(lambda p: p.element_parser_factory(whitespace), self._append),
        ).execute(parser, process)

    def _elements_step(self, whitespace: Whitespace) -> Step:
        return BlockStep(
            [
                ParseStep(lambda p: p.element_parser_factory(whitespace), self._append),
                WhileLoopStep(
                    BlockStep(
                        [
                            ParseCharacterStep(lambda p, c: True),
                            ParseStep(lambda p: WhitespaceParser(), self._after_next_delimiter),
                        ]
                    ),
                    lambda p, proc: proc.is_at_char(p.delimiter_elements),
                ),
            ]
        )

    def _after_opening(
        self, whitespace: Whitespace, parser: "ContainerNodeParser", process: ParsingProcess
    ) -> None:
        OrStep(
            [
                (
                    lambda p, proc: not proc.is_at_char(p.delimiter_end),
                    self._elements_step(whitespace),
                )
            ],
            ExportStep(lambda p, value: p._set_whitespace(value), whitespace),
        ).execute(parser, process)

    def get_step(self) -> Step:
        """Opening delimiter, content, closing delimiter."""
        return BlockStep(
            [
                ParseCharacterStep.expecting(self.delimiter_start),
                ParseStep(lambda p: WhitespaceParser(), self._after_opening),
                ParseCharacterStep.expecting(self.delimiter_end),
            ]
        )

    def create(self) -> ContainerNode:
        """The container holding either its whitespace or its elements."""
        content = self.whitespace if self.whitespace is not None else self.elements
        return ContainerNode(
            content,
            self.delimiter_start,
            self.delimiter_end,
            self.delimiter_elements,
            self.container,
        )


class ArrayNodeParser(ParticleParser):
    """Reads a JSON array."""

    def __init__(self) -> None:
        self.container_node: Optional[ContainerNode] = None

    def _container_parser(self) -> ContainerNodeParser:
        return ContainerNodeParser(
            ARRAY_DELIMITER_START,
            ARRAY_DELIMITER_END,
            ARRAY_DELIMITER_ELEMENTS,
            Container.ARRAY_NODE,
            JsonValueParser,
        )

    def can_parse(self, process: ParsingProcess) -> bool:
        """An array starts at an opening bracket."""
        return self._container_parser().can_parse(process)

    def _set_container(self, node: ContainerNode, parser: "ArrayNodeParser", process: ParsingProcess) -> None:
        parser.container_node = node

    def get_step(self) -> Step:
        """Read the bracketed content."""
        return ParseStep(lambda parser: parser._container_parser(), self._set_container)

    def create(self) -> Optional[ArrayNode]:
        """The array, or None if nothing was read."""
        if self.container_node is None:
            return None
        return ArrayNode(self.container_node.content)


class ObjectNodePropertyParser(ParticleParser):
    """Reads one key, colon and value of an object."""

    def __init__(self, leading_whitespace: Optional[Whitespace] = None) -> None:
        self.leading_whitespace: Optional[Whitespace] = leading_whitespace
        self.key: Optional[StringNode] = None
        self.trailing_whitespace: Optional[Whitespace] = None
        self.value: Optional[JsonValue] = None

    def can_parse(self, process: ParsingProcess) -> bool:
        """A property may start anywhere whitespace may."""
        return WhitespaceParser().can_parse(process)

    @staticmethod
    def _set(attribute: str):
        def on_value(value: Any, parser: "ObjectNodePropertyParser", process: ParsingProcess) -> None:
            setattr(parser, attribute, value)

        return on_value

    def get_step(self) -> Step:
        """Whitespace, key, whitespace, colon, value."""
        return BlockStep(
            [
                ParseStep(lambda p: WhitespaceParser(p.leading_whitespace), self._set("leading_whitespace")),
                ParseStep(lambda p: StringNodeParser(), self._set("key")),
                ParseStep(lambda p: WhitespaceParser(), self._set("trailing_whitespace")),
                ParseCharacterStep.expecting(KEY_VALUE_DELIMITER),
                ParseStep(lambda p: JsonValueParser(), self._set("value")),
            ]
        )

    def create(self) -> Optional[ObjectNodeProperty]:
        """The property, or None if any part is missing."""
        if (
            self.leading_whitespace is None
            or self.key is None
            or self.trailing_whitespace is None
            or self.value is None
        ):
            return None
        return ObjectNodeProperty(self.leading_whitespace, self.key, self.trailing_whitespace, self.value)


class ObjectNodeParser(ParticleParser):
    """Reads a JSON object."""

    def __init__(self) -> None:
        self.container_node: Optional[ContainerNode] = None

    def _container_parser(self) -> ContainerNodeParser:
        return ContainerNodeParser(
            OBJECT_DELIMITER_START,
            OBJECT_DELIMITER_END,
            OBJECT_DELIMITER_ELEMENTS,
            Container.OBJECT_NODE,
            ObjectNodePropertyParser,
        )

    def can_parse(self, process: ParsingProcess) -> bool:
        """An object starts at an opening brace."""
        return self._container_parser().can_parse(process)

    def _set_container(self, node: ContainerNode, parser: "ObjectNodeParser", process: ParsingProcess) -> None:
        parser.container_node = node

    def get_step(self) -> Step:
        """Read the braced content."""
        return ParseStep(lambda parser: parser._container_parser(), self._set_container)

    def create(self) -> Optional[ObjectNode]:
        """The object, or None if nothing was read."""
        if self.container_node is None:
            return None
        return ObjectNode(self.container_node.content)


class FullStringJsonParser(ParticleParser):
    """Reads one value that must span the whole text."""

    def __init__(self) -> None:
        self.json_value: Optional[JsonValue] = None

    def can_parse(self, process: ParsingProcess) -> bool:
        """Anything a value parser accepts."""
        return JsonValueParser().can_parse(process)

    def _set_value(self, value: JsonValue, parser: "FullStringJsonParser", process: ParsingProcess) -> None:
        parser.json_value = value

    def get_step(self) -> Step:
        """Read a single value."""
        return ParseStep(lambda parser: JsonValueParser(), self._set_value)

    def create(self) -> Optional[JsonValue]:
        """The value read, or None."""
        return self.json_value

    def parse_fully(self, process: ParsingProcess) -> JsonValue:
        """Parse a value and require that the whole text was consumed."""
        value = self.parse(process)
        if not process.is_finished():
            raise JsonParseError("The JSON String is not fully parsed.", process.snapshot())
        return value

    def parse_string_fully(self, json: str) -> JsonValue:
        """Parse all of ``json`` with strict comma rules."""
        return self.parse_fully(ParsingProcess.for_json(json))

    def parse_string_fully_with_trailing_commas(self, json: str) -> JsonValue:
        """Parse all of ``json``, accepting trailing commas."""
        return self.parse_fully(ParsingProcess.for_json_with_trailing_commas(json))