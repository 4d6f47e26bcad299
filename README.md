# parstastic

A JSON parser that keeps the layout of a document. The whitespace before and
after every value, around every object key and inside every empty container is
recorded in the parsed tree. Strings keep their escape sequences exactly as
written. Stringifying the tree with the default options gives back the original
whitespace. The same tree can also be written out in a pretty style or a
minimal style.

## Installation

```
pip install parstastic
```

## Parsing and stringifying

```python
from parstastic.api import parse, parse_unsafe, stringify

value = parse('{ "name" : "demo",  "items": [1, 2.5, -3e2, true, null] }')
if value is None:
    raise SystemExit("not valid JSON")

# The default options keep the original whitespace.
print(stringify(value))
```

`parse` returns `None` if the text is not valid JSON or is not consumed
completely. `parse_unsafe` raises `parstastic.process.JsonParseError` in that
case instead. The error carries a `message` and the `process` state, a
`ParsingProcess` whose `index` shows where parsing stopped.

## Output styles

`parstastic.stringify_options.StringifyOptions` decides which whitespace is
written. Every node, `JsonValue` and `Whitespace` has a `stringify(options)`
method. Leaving out `options` means the default options.

```python
from parstastic.api import parse_unsafe
from parstastic.stringify_options import StringifyOptions

value = parse_unsafe('{"a": [1, 2], "b": {}}')

print(value.stringify(StringifyOptions.default()))  # whitespace as written
print(value.stringify(StringifyOptions.minimal()))  # {"a":[1,2],"b":{}}
print(value.stringify(StringifyOptions.pretty()))   # line breaks, four-space indentation
```

## Trailing commas

`FullStringJsonParser` accepts trailing commas in arrays and objects if you use
its `parse_string_fully_with_trailing_commas` method:

```python
from parstastic.process import JsonParseError
from parstastic.structure_parsers import FullStringJsonParser

try:
    value = FullStringJsonParser().parse_string_fully_with_trailing_commas("[1, 2, 3,]")
except JsonParseError as error:
    print("failed:", error)
```

Each parser object collects state while it parses, so create a new one for
every document.

## The tree

A parsed document is made of `JsonValue` objects from `parstastic.nodes`. Each
one holds `leading_whitespace`, a `node` and `trailing_whitespace`. The node is
one of the following:

- `StringNode`
- `NumberNode`
- `ObjectNode`, whose elements are `ObjectNodeProperty` objects
- `ArrayNode`
- `BooleanNode`
- `NullNode`

`ArrayNode` and `ObjectNode` hold either the `Whitespace` of an empty container
or a tuple of elements. You can reach the elements through `elements`.

A `NumberNode` stores its base as an `int` or a `float`. It also stores an
optional `NumberExponent`, which records whether the exponent letter was upper
case, its sign and its digits. `NumberNode.value` gives the numeric value as a
float. The base is written back from its stored value, so its text can change:
`1.0` is written as `1`, `0.50` as `0.5` and `-0` as `0`.

## What it does not do

- There is no command-line tool. The package is used as a library.
- The tree is not converted into plain Python dicts and lists, and string
  escapes are not decoded.
- Exponents written with an explicit sign, such as `1e+2` or `1e-2`, are not
  accepted. Write the exponent without a sign, as in `1e2` or `1E2`.

## Running the tests

```
pip install -e ".[test]"
pytest
```