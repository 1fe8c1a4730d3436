"""
Parser tests: command trees, PLOT expansion and syntax errors
"""

import pytest

from core.commands import (Forward, Back, Right, Left, PenUp, PenDown, Home,
                           ClearScreen, SetPos, SetHeading, PenColor, PenSize,
                           HueStep, Rainbow, Zoom, PlotStep, Repeat, Block)
from core.parser import LogoParser
from utils.errors import ParseError


def test_empty_program(parse):
    assert parse("") == []
    assert parse("; only a comment") == []


def test_simple_commands(parse):
    program = parse("FD 10 BK 5 RT 90 LT 45 PU PD HOME CS")
    assert program == [Forward(10), Back(5), Right(90), Left(45),
                       PenUp(), PenDown(), Home(), ClearScreen()]


def test_keywords_are_case_insensitive(parse):
    assert parse("fd 10 rainbow on zoom out") == [Forward(10), Rainbow(True), Zoom('OUT')]


def test_multi_argument_commands(parse):
    program = parse("SETPOS -10 20.5 SETHEADING 180 PENCOLOR 255 0 0 "
                    "PENSIZE 3 HUESTEP 7 RAINBOW OFF ZOOM IN")
    assert program == [SetPos(-10, 20.5), SetHeading(180), PenColor(255, 0, 0),
                       PenSize(3), HueStep(7), Rainbow(False), Zoom('IN')]


def test_number_forms(parse):
    assert parse("FD .5 FD -3 FD 2. FD 1e2") == [Forward(0.5), Forward(-3),
                                                 Forward(2.0), Forward(100.0)]


@pytest.mark.parametrize("literal", ["nan", "inf", "1_000", "0x10", "ten"])
def test_non_decimal_numbers_rejected(parse, literal):
    with pytest.raises(ParseError):
        parse(f"FD {literal}")


def test_repeat_and_blocks(parse):
    program = parse("REPEAT 3 [ FD 10 [ RT 90 ] ]")
    assert program == [Repeat(3, [Forward(10), Block([Right(90)])])]


def test_nested_repeat(parse):
    program = parse("REPEAT 2 [ REPEAT 4 [ FD 1 ] RT 10 ]")
    assert program == [Repeat(2, [Repeat(4, [Forward(1)]), Right(10)])]


def test_line_numbers_follow_keywords(parse):
    program = parse("FD 10\n\nREPEAT 2 [\n  RT 90\n]")
    assert program[0].line_number == 1
    assert program[1].line_number == 3
    assert program[1].body[0].line_number == 4


def test_missing_number_names_the_command(parse):
    with pytest.raises(ParseError) as info:
        parse("FD")
    assert "FD" in info.value.message


def test_error_reports_offending_token(parse):
    with pytest.raises(ParseError) as info:
        parse("FD 10\nRT abc")
    assert info.value.line_number == 2
    assert info.value.message == "Expected number after RT"
    assert (info.value.char_start, info.value.char_end) == (3, 6)


@pytest.mark.parametrize("source, message", [
    ("SETPOS 1", "SETPOS x y"),
    ("PENCOLOR 1 2", "PENCOLOR r g b (0-255)"),
    ("RAINBOW MAYBE", "RAINBOW ON|OFF"),
    ("ZOOM", "ZOOM IN|OUT"),
    ("REPEAT 2.5 [ FD 1 ]", "Expected whole number after REPEAT"),
    ("REPEAT x [ FD 1 ]", "Expected whole number after REPEAT"),
    ("REPEAT 4 FD 1", "Expected [ after REPEAT"),
    ("REPEAT 4 [ FD 1", "Missing closing ]"),
    ("[ FD 1", "Missing closing ]"),
    ("FD 1 ]", "Unexpected ]"),
    ("JUMP 10", "Unknown token: JUMP"),
    ("FD RT 90", "Malformed command near FD"),
    ("SETPOS 1 PU", "Malformed command near SETPOS"),
    ("RAINBOW PD", "Malformed command near RAINBOW"),
])
def test_syntax_errors(parse, source, message):
    with pytest.raises(ParseError) as info:
        parse(source)
    assert info.value.message == message


def test_repeat_zero_and_negative_parse(parse):
    assert parse("REPEAT 0 [ FD 1 ]") == [Repeat(0, [Forward(1)])]
    assert parse("REPEAT -2 [ FD 1 ]") == [Repeat(-2, [Forward(1)])]


def test_plot_default_range(parse, config):
    steps = parse("PLOT x")
    assert len(steps) == config.plot_steps + 1
    assert steps[0] == PlotStep('x', config.plot_from, True)
    assert steps[-1].x == config.plot_to
    assert not any(s.is_first for s in steps[1:])


def test_plot_range_options(parse):
    steps = parse("PLOT x^2 FROM 0 TO 1 STEPS 4")
    assert [s.x for s in steps] == [0, 0.25, 0.5, 0.75, 1.0]
    assert all(s.expression == 'x^2' for s in steps)


def test_plot_at_points(parse):
    steps = parse("PLOT sin(x) AT [1, 2.5, -3]")
    assert [s.x for s in steps] == [1, 2.5, -3]
    assert [s.is_first for s in steps] == [True, False, False]


def test_plot_expression_with_commas_is_rejoined(parse):
    steps = parse("PLOT max(x,0) AT [ -1, 1 ]")
    assert steps[0].expression == 'max(x,0)'
    assert len(steps) == 2


def test_plot_dots_and_color(parse):
    steps = parse("PLOT x AT [1] SMOOTH DOTS COLOR 10 20 30")
    assert steps == [PlotStep('x', 1, True, True, (10, 20, 30))]


def test_plot_expands_in_place(parse):
    program = parse("FD 1 PLOT x AT [1, 2] RT 90")
    assert [c.op for c in program] == ['FD', 'PLOT', 'PLOT', 'RT']


@pytest.mark.parametrize("source, message", [
    ("PLOT", "PLOT needs an expression"),
    ("PLOT FROM 1", "PLOT needs an expression"),
    ("PLOT x STEPS 0", "PLOT STEPS must be a whole number from 1 to 10000"),
    ("PLOT x STEPS 2.5", "PLOT STEPS must be a whole number from 1 to 10000"),
    ("PLOT x AT 1", "PLOT AT [x1, x2, ...]"),
    ("PLOT x AT [ ]", "PLOT AT needs at least one value"),
    ("PLOT x AT [1, ]", "PLOT AT [x1, x2, ...]"),
    ("PLOT x AT [1, 2", "Missing closing ] in PLOT AT"),
    ("PLOT sin(x FROM -1 TO 1\nFD 100 RT 90", "PLOT expression has unbalanced parentheses"),
    ("PLOT max(x, 1 AT [1]", "PLOT expression has unbalanced parentheses"),
    ("PLOT x) AT [1]", "PLOT expression has unbalanced parentheses"),
])
def test_plot_errors(parse, source, message):
    with pytest.raises(ParseError) as info:
        parse(source)
    assert info.value.message == message


def test_plot_parabola_steps(parse):
    steps = parse("PLOT x^2 FROM -2 TO 2 STEPS 4")
    assert [s.x for s in steps] == [-2, -1, 0, 1, 2]
    assert [s.is_first for s in steps] == [True, False, False, False, False]


def test_plot_expression_stops_at_next_command(parse):
    program = parse("PLOT min(x, 2) AT [1]\nFD 100 RT 90")
    assert program[0].expression == 'min(x,2)'
    assert program[1:] == [Forward(100), Right(90)]


def test_nesting_limit(parse):
    depth = LogoParser.MAX_NESTING
    program = parse("[ " * depth + "FD 1" + " ]" * depth)
    assert len(program) == 1

    with pytest.raises(ParseError) as info:
        parse("[ " * 3000 + "FD 1" + " ]" * 3000)
    assert info.value.message == f"Blocks nested deeper than {depth} levels"

    with pytest.raises(ParseError):
        parse("REPEAT 2 [ " * (depth + 1) + "FD 1" + " ]" * (depth + 1))
