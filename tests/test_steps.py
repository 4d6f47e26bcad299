import pytest

from parstastic.process import JsonParseError, ParsingProcess
from parstastic.steps import (
    BlockStep,
    ExportStep,
    ForLoopStep,
    OrStep,
    ParseCharacterStep,
    ParseStep,
    ValidateCharacterStep,
    WhileLoopStep,
)


class _Collector:
    def __init__(self):
        self.chars = []
        self.values = []


def _collect(parser, c):
    parser.chars.append(c)
    return True


class _DigitsParser:
    """A minimal nested parser reading a run of digits."""

    def can_parse(self, process):
        return process.is_char_valid(str.isdigit) or process.is_at_char("!")

    def parse(self, process):
        if process.is_at_char("!"):
            raise JsonParseError("bang", process.snapshot())
        digits = []
        while process.is_char_valid(str.isdigit):
            digits.append(process.current_char())
            process.advance()
        return "".join(digits)


def test_parse_character_step_consumes_and_advances():
    parser = _Collector()
    process = ParsingProcess.for_json("ab")
    ParseCharacterStep(_collect).execute(parser, process)
    assert parser.chars == ["a"]
    assert process.index == 1


def test_parse_character_step_rejected_does_not_advance():
    process = ParsingProcess.for_json("ab")
    with pytest.raises(JsonParseError) as info:
        ParseCharacterStep.expecting("b").execute(_Collector(), process)
    assert process.index == 0
    assert info.value.process.index == 0


def test_parse_character_step_past_end_fails():
    process = ParsingProcess.for_json("")
    with pytest.raises(JsonParseError):
        ParseCharacterStep(_collect).execute(_Collector(), process)


def test_validate_character_step_does_not_consume():
    process = ParsingProcess.for_json("u")
    ValidateCharacterStep.expecting("u").execute(None, process)
    assert process.index == 0
    with pytest.raises(JsonParseError):
        ValidateCharacterStep(str.isdigit).execute(None, process)


def test_validate_character_step_fails_at_end():
    with pytest.raises(JsonParseError):
        ValidateCharacterStep(lambda c: True).execute(None, ParsingProcess.for_json(""))


def test_block_step_runs_in_order_and_stops_on_failure():
    parser = _Collector()
    process = ParsingProcess.for_json("axc")
    block = BlockStep(
        [
            ParseCharacterStep(_collect),
            ParseCharacterStep.expecting("b"),
            ParseCharacterStep(_collect),
        ]
    )
    with pytest.raises(JsonParseError):
        block.execute(parser, process)
    assert parser.chars == ["a"]
    assert process.index == 1


def test_export_step_passes_value():
    parser = _Collector()

    def exporter(p, value):
        p.values.append(value)
        return True

    ExportStep(exporter, 42).execute(parser, ParsingProcess.for_json(""))
    assert parser.values == [42]


def test_export_step_failure_raises():
    with pytest.raises(JsonParseError, match="Exporting failed"):
        ExportStep(lambda p, v: False).execute(None, ParsingProcess.for_json(""))


def test_for_loop_step_repeats_exactly():
    parser = _Collector()
    process = ParsingProcess.for_json("abcd")
    ForLoopStep(ParseCharacterStep(_collect), 3).execute(parser, process)
    assert "".join(parser.chars) == "abc"
    assert process.index == 3


def test_for_loop_step_fails_when_text_runs_out():
    process = ParsingProcess.for_json("ab")
    with pytest.raises(JsonParseError):
        ForLoopStep(ParseCharacterStep(_collect), 3).execute(_Collector(), process)
    assert process.index == 2


def test_while_loop_step_stops_when_condition_fails():
    parser = _Collector()
    process = ParsingProcess.for_json("123x")
    WhileLoopStep(
        ParseCharacterStep(_collect), lambda p, proc: proc.is_char_valid(str.isdigit)
    ).execute(parser, process)
    assert "".join(parser.chars) == "123"
    assert process.is_at_char("x")


def test_or_step_takes_first_matching_branch():
    parser = _Collector()
    process = ParsingProcess.for_json("b")
    step = OrStep.else_error(
        [
            (lambda p, proc: proc.is_at_char("a"), ExportStep(lambda p, v: p.values.append("a") or True)),
            (lambda p, proc: True, ExportStep(lambda p, v: p.values.append("first") or True)),
            (lambda p, proc: True, ExportStep(lambda p, v: p.values.append("second") or True)),
        ]
    )
    step.execute(parser, process)
    assert parser.values == ["first"]


def test_or_step_else_error_and_else_success():
    branches = [(lambda p, proc: False, ExportStep(lambda p, v: True))]
    process = ParsingProcess.for_json("z")
    with pytest.raises(JsonParseError):
        OrStep.else_error(branches).execute(None, process)
    OrStep.else_success(branches).execute(None, process)
    assert process.index == 0


def test_or_step_custom_fallback_runs():
    parser = _Collector()
    process = ParsingProcess.for_json("q")
    OrStep([], ParseCharacterStep(_collect)).execute(parser, process)
    assert parser.chars == ["q"]


def test_parse_step_hands_value_to_parent():
    parser = _Collector()
    process = ParsingProcess.for_json("123,")
    step = ParseStep(lambda p: _DigitsParser(), lambda v, p, proc: p.values.append(v))
    step.execute(parser, process)
    assert parser.values == ["123"]
    assert process.is_at_char(",")


def test_parse_step_fails_when_nested_cannot_parse():
    process = ParsingProcess.for_json("x")
    step = ParseStep(lambda p: _DigitsParser(), lambda v, p, proc: None)
    with pytest.raises(JsonParseError):
        step.execute(_Collector(), process)
    assert process.index == 0


def test_parse_step_wraps_nested_error():
    process = ParsingProcess.for_json("!")
    step = ParseStep(lambda p: _DigitsParser(), lambda v, p, proc: None)
    with pytest.raises(JsonParseError) as info:
        step.execute(_Collector(), process)
    assert isinstance(info.value.__cause__, JsonParseError)
    assert info.value.__cause__.message == "bang"
    assert info.value.message != "bang"


def test_parse_step_propagates_error_from_callback():
    process = ParsingProcess.for_json("9")

    def reject(value, parser, proc):
        raise JsonParseError("rejected", proc.snapshot())

    with pytest.raises(JsonParseError, match="rejected"):
        ParseStep(lambda p: _DigitsParser(), reject).execute(_Collector(), process)