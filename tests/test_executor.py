"""
Executor tests against a recording scene
"""

import pytest

from config.turtle_config import TurtleConfig
from core.commands import (Forward, Back, Right, Left, PenUp, PenDown, Home,
                           ClearScreen, SetPos, SetHeading, PenColor, PenSize,
                           HueStep, Rainbow, Zoom, PlotStep, Repeat, Block)
from core.executor import Executor
from core.turtle_state import TurtleState, Color
from utils.errors import DispatchError


@pytest.fixture
def turtle():
    return TurtleState(TurtleConfig(name="Test"))


@pytest.fixture
def executor(turtle, scene):
    return Executor(turtle, scene)


def run(executor, *commands):
    for command in commands:
        executor.execute(command)


def test_forward_draws_one_segment(executor, scene):
    executor.execute(Forward(50))
    assert len(scene.segments) == 1
    start, end, _ = scene.segments[0]
    assert (start.x, start.y) == (0, 0)
    assert end.y == pytest.approx(50)
    assert scene.poses[-1] == pytest.approx((0, 50, 0))


def test_back_moves_backwards(executor, turtle):
    executor.execute(Back(20))
    assert turtle.position.y == pytest.approx(-20)


def test_pen_up_moves_without_drawing(executor, scene, turtle):
    run(executor, PenUp(), Forward(30), PenDown(), Forward(10))
    assert len(scene.segments) == 1
    assert scene.segments[0][0].y == pytest.approx(30)
    assert turtle.position.y == pytest.approx(40)


def test_square_closes(executor, scene, turtle):
    for _ in range(4):
        run(executor, Forward(100), Right(90))
    assert len(scene.segments) == 4
    assert turtle.position.x == pytest.approx(0, abs=1e-9)
    assert turtle.position.y == pytest.approx(0, abs=1e-9)
    assert turtle.heading == 0


def test_left_turns_counter_clockwise(executor, turtle):
    executor.execute(Left(90))
    assert turtle.heading == 270


def test_home_and_setpos(executor, turtle, scene):
    run(executor, SetPos(10, -5), SetHeading(45))
    assert (turtle.position.x, turtle.position.y, turtle.heading) == (10, -5, 45)
    assert scene.segments == []
    executor.execute(Home())
    assert (turtle.position.x, turtle.position.y, turtle.heading) == (0, 0, 0)


def test_clear_screen_keeps_pose(executor, scene, turtle):
    run(executor, Forward(10), ClearScreen())
    assert scene.segments == []
    assert scene.clears == 1
    assert turtle.position.y == pytest.approx(10)


def test_pen_size_updates_scene(executor, scene, turtle):
    executor.execute(PenSize(40))
    assert turtle.pen_size == 12
    assert scene.widths == [12]


def test_zoom(executor, scene):
    run(executor, Zoom('IN'), Zoom('OUT'), Zoom('IN'))
    assert scene.zooms == ['IN', 'OUT', 'IN']


def test_red_pen_then_rainbow_gives_hue_five(executor, scene, turtle):
    run(executor, PenColor(255, 0, 0), Rainbow(True), Forward(10))
    assert turtle.hue == 5
    assert scene.segments[0][2] == Color.from_hue(5)


def test_hue_step_command(executor, turtle):
    run(executor, Rainbow(True), HueStep(30), Forward(1), Forward(1))
    assert turtle.hue == 60


def test_color_observer_called_for_color_changes(turtle, scene):
    calls = []
    executor = Executor(turtle, scene, color_observer=lambda: calls.append(1))
    run(executor, PenColor(1, 2, 3), Rainbow(True), Forward(5), PenSize(3))
    assert len(calls) == 2


@pytest.mark.parametrize("command", [Repeat(2, [Forward(1)]), Block([Forward(1)]), object()])
def test_non_atomic_commands_raise(executor, command):
    with pytest.raises(DispatchError):
        executor.execute(command)


def test_unknown_zoom_direction_raises(executor):
    with pytest.raises(DispatchError):
        executor.execute(Zoom('SIDEWAYS'))


def test_plot_connects_points(executor, scene, turtle):
    turtle.pen_down = False
    run(executor, PlotStep('x^2', 0, True), PlotStep('x^2', 1, False),
        PlotStep('x^2', 2, False))
    assert turtle.pen_down
    assert len(scene.segments) == 2
    assert (scene.segments[1][0].x, scene.segments[1][0].y) == (1, 1)
    assert (scene.segments[1][1].x, scene.segments[1][1].y) == (2, 4)
    assert (turtle.position.x, turtle.position.y) == (2, 4)


def test_plot_heading_follows_the_curve(executor, turtle):
    run(executor, PlotStep('x', 0, True), PlotStep('x', 1, False))
    assert turtle.heading == pytest.approx(45)
    run(executor, PlotStep('0', 0, True), PlotStep('0', -1, False))
    assert turtle.heading == pytest.approx(270)


def test_plot_skips_undefined_points(executor, scene, turtle):
    run(executor, PlotStep('sqrt(x)', -1, True), PlotStep('sqrt(x)', 4, False))
    assert len(scene.segments) == 1
    start, end, _ = scene.segments[0]
    assert (start.x, start.y) == (0, 0)
    assert (end.x, end.y) == (4, 2)


def test_plot_everywhere_undefined_draws_nothing(executor, scene, turtle):
    run(executor, PlotStep('sqrt(x)', -1, True), PlotStep('sqrt(x)', -2, False))
    assert scene.segments == []
    assert (turtle.position.x, turtle.position.y) == (0, 0)


def test_plot_dots(turtle, scene):
    executor = Executor(turtle, scene, dot_size=4.0)
    run(executor, PlotStep('x', 1, True, True, (255, 0, 0)),
        PlotStep('x', 2, False, True, (255, 0, 0)))
    assert len(scene.dots) == 2
    point, color, size = scene.dots[0]
    assert (point.x, point.y) == (1, 1)
    assert color.to_rgb255() == (255, 0, 0)
    assert size == 4.0


def test_reset(executor, scene, turtle):
    run(executor, Forward(10), Right(30))
    executor.reset()
    assert scene.segments == []
    assert scene.poses[-1] == (0, 0, 0)
    assert turtle.heading == 0
