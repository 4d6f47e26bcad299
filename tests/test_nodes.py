import math

import pytest

from parstastic.nodes import (
    BOOLEAN_NODES,
    FALSE,
    NULL_NODE,
    TRUE,
    ArrayNode,
    ContainerNode,
    ExponentSign,
    JsonValue,
    NumberExponent,
    NumberNode,
    ObjectNode,
    ObjectNodeProperty,
    StringNode,
)
from parstastic.stringify_options import DEFAULT_INDENTATION, Container, StringifyOptions
from parstastic.whitespace import Whitespace


def ws(text=""):
    return Whitespace.from_string(text)


def value(node, leading="", trailing=""):
    return JsonValue(ws(leading), node, ws(trailing))


def strip_whitespace(text):
    return "".join(c for c in text if c not in " \t\n\r")


def test_string_node_wraps_value_in_quotes():
    assert StringNode("abc").stringify() == '"' + "abc" + '"'


def test_string_node_keeps_escapes_as_written():
    raw = r"a\nb\u00e9"
    assert StringNode(raw).stringify()[1:-1] == raw


def test_boolean_nodes():
    assert TRUE.stringify() == "true"
    assert FALSE.stringify() == "false"
    assert BOOLEAN_NODES == (TRUE, FALSE)
    assert TRUE.value is True


def test_null_node():
    assert NULL_NODE.stringify() == "null"
    assert NULL_NODE.value is None


@pytest.mark.parametrize(
    "sign, symbol, factor",
    [
        (ExponentSign.BLANK, "", 1),
        (ExponentSign.PLUS, "+", 1),
        (ExponentSign.MINUS, "-", -1),
    ],
)
def test_exponent_sign(sign, symbol, factor):
    assert sign.symbol == symbol
    assert sign.factor == factor


@pytest.mark.parametrize("base", [42, -7, 0, 18446744073709551615])
def test_integer_base_renders_digits(base):
    assert NumberNode(base).stringify() == str(base)


def test_capitalized_exponent_rendering():
    node = NumberNode(1, NumberExponent(True, ExponentSign.PLUS, 5))
    assert node.stringify() == "1E+5"


def test_lowercase_blank_exponent_rendering():
    text = NumberNode(2, NumberExponent(False, ExponentSign.BLANK, 10)).stringify()
    assert "e" in text
    assert "E" not in text
    assert "+" not in text
    assert text.endswith("10")


def test_float_base_without_fraction_drops_point():
    assert NumberNode(1.0).stringify() == "1"


def test_float_base_keeps_fraction():
    assert NumberNode(0.25).stringify() == str(0.25)


def test_large_float_is_written_without_exponent():
    text = NumberNode(1e20).stringify()
    assert text[0] == "1"
    assert set(text[1:]) == {"0"}
    assert "e" not in text


def test_negative_zero_keeps_sign():
    assert NumberNode(-0.0).stringify().startswith("-")


def test_value_without_exponent():
    assert NumberNode(42).value == 42.0
    assert NumberNode(2.5).value == 2.5


def test_blank_and_plus_exponent_agree():
    blank = NumberNode(3, NumberExponent(False, ExponentSign.BLANK, 2))
    plus = NumberNode(3, NumberExponent(True, ExponentSign.PLUS, 2))
    assert blank.value == plus.value
    assert blank.value > 3


def test_minus_exponent_divides():
    node = NumberNode(7, NumberExponent(False, ExponentSign.MINUS, 2))
    assert node.value * 100 == pytest.approx(7)


def test_huge_exponent_wraps_like_a_32_bit_integer():
    wrapped = NumberNode(5, NumberExponent(False, ExponentSign.PLUS, 2**32 + 2))
    plain = NumberNode(5, NumberExponent(False, ExponentSign.PLUS, 2))
    assert wrapped.value == plain.value


def test_overflowing_exponent_is_infinite():
    node = NumberNode(1, NumberExponent(False, ExponentSign.PLUS, 400))
    assert node.value == math.inf


def test_default_keeps_array_whitespace():
    array = ArrayNode([value(NumberNode(1), " ", "\n"), value(NumberNode(2), "\t", " ")])
    assert array.stringify() == "[" + " " + "1" + "\n" + "," + "\t" + "2" + " " + "]"


def test_minimal_equals_default_without_whitespace():
    array = ArrayNode(
        [
            value(NumberNode(1), " ", "\n"),
            value(StringNode("x"), "\t", " "),
            value(ArrayNode(ws("  ")), " ", " "),
        ]
    )
    minimal = array.stringify(StringifyOptions.minimal())
    assert minimal == strip_whitespace(array.stringify())
    assert minimal == strip_whitespace(minimal)


def test_empty_array_whitespace():
    array = ArrayNode(ws("  "))
    assert array.stringify() == "[" + "  " + "]"
    assert array.stringify(StringifyOptions.minimal()) == "[]"
    assert array.elements == ()


def test_pretty_object():
    obj = ObjectNode([ObjectNodeProperty(ws(), StringNode("a"), ws(), value(NumberNode(1)))])
    assert obj.stringify(StringifyOptions.pretty()) == '{\n    "a": 1\n}'


def test_pretty_nested_array_indents_by_depth():
    nested = ArrayNode([value(ArrayNode([value(NumberNode(1))]))])
    text = nested.stringify(StringifyOptions.pretty())
    lines = text.split("\n")
    indents = [len(line) - len(line.lstrip(" ")) for line in lines]
    assert all(indent % len(DEFAULT_INDENTATION) == 0 for indent in indents)
    assert max(indents) == 2 * len(DEFAULT_INDENTATION)
    assert lines[0] == "["
    assert lines[-1] == "]"
    assert strip_whitespace(text) == nested.stringify(StringifyOptions.minimal())


def test_default_keeps_object_property_whitespace():
    prop = ObjectNodeProperty(ws(" "), StringNode("k"), ws("\t"), value(NULL_NODE, " ", "\n"))
    obj = ObjectNode([prop])
    assert obj.stringify() == "{" + " " + '"k"' + "\t" + ":" + " " + "null" + "\n" + "}"
    assert obj.stringify(StringifyOptions.minimal()) == strip_whitespace(obj.stringify())


def test_top_level_json_value_whitespace():
    top = value(TRUE, "\n ", " \r")
    assert top.stringify() == "\n " + "true" + " \r"
    assert top.stringify(StringifyOptions.minimal()) == "true"
    assert top.stringify(StringifyOptions.pretty()) == "true"


def test_container_node_with_custom_delimiters():
    empty = ContainerNode(Whitespace(), "<", ">", ";", Container.ARRAY_NODE)
    assert empty.stringify() == "<>"
    full = ContainerNode([value(NumberNode(1)), value(NumberNode(2))], "<", ">", ";", Container.ARRAY_NODE)
    assert full.stringify() == "<" + "1" + ";" + "2" + ">"


def test_container_elements_are_stored_as_tuple():
    elements = [value(NumberNode(1)), value(NumberNode(2))]
    array = ArrayNode(elements)
    assert array.value == tuple(elements)
    assert array == ArrayNode(tuple(elements))
    assert array.elements == tuple(elements)