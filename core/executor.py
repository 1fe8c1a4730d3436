"""
Executes atomic turtle commands against the turtle state and a scene.
"""
import logging
import math
from typing import Callable, Optional
from core.commands import (Command, Forward, Back, Right, Left, PenUp, PenDown,
                           Home, ClearScreen, SetPos, SetHeading, PenColor,
                           PenSize, HueStep, Rainbow, Zoom, PlotStep)
from core.scene import Scene
from core.turtle_state import TurtleState, Position, Color
from utils.errors import DispatchError
from utils.expressions import ExpressionEvaluator

logger = logging.getLogger(__name__)


class Executor:
    """Runs one atomic command at a time."""

    def __init__(self, turtle_state: TurtleState, scene: Scene,
                 expression_evaluator: Optional[ExpressionEvaluator] = None,
                 color_observer: Optional[Callable[[], None]] = None,
                 dot_size: float = 3.0):
        self.turtle_state = turtle_state
        self.scene = scene
        self.expression_evaluator = expression_evaluator or ExpressionEvaluator()
        # Called after PENCOLOR / RAINBOW so a UI color picker can refresh
        self.color_observer = color_observer
        self.dot_size = dot_size

    def execute(self, cmd: Command):
        """Apply a single command. Raises DispatchError for anything non-atomic."""
        logger.debug("execute %r", cmd)

        if isinstance(cmd, Forward):
            self.move(cmd.distance)
        elif isinstance(cmd, Back):
            self.move(-cmd.distance)
        elif isinstance(cmd, Right):
            self.turn(cmd.angle)
        elif isinstance(cmd, Left):
            self.turn(-cmd.angle)
        elif isinstance(cmd, PenUp):
            self.turtle_state.pen_down = False
        elif isinstance(cmd, PenDown):
            self.turtle_state.pen_down = True
        elif isinstance(cmd, Home):
            self.home()
        elif isinstance(cmd, ClearScreen):
            self.clear_screen()
        elif isinstance(cmd, SetPos):
            self.set_position(cmd.x, cmd.y)
        elif isinstance(cmd, SetHeading):
            self.set_heading(cmd.angle)
        elif isinstance(cmd, PenColor):
            self.set_pen_color(cmd.r, cmd.g, cmd.b)
        elif isinstance(cmd, PenSize):
            self.set_pen_size(cmd.size)
        elif isinstance(cmd, HueStep):
            self.set_hue_step(cmd.step)
        elif isinstance(cmd, Rainbow):
            self.set_rainbow(cmd.on)
        elif isinstance(cmd, Zoom):
            self.zoom(cmd.direction)
        elif isinstance(cmd, PlotStep):
            self.plot_step(cmd)
        else:
            op = getattr(cmd, 'op', type(cmd).__name__)
            raise DispatchError(f"Unhandled op {op}", getattr(cmd, 'line_number', 0))

    def turn(self, angle: float):
        self.turtle_state.turn(angle)
        self.update_visualization()

    def move(self, distance: float):
        result = self.turtle_state.move(distance)

        if result.should_draw:
            color = self.turtle_state.get_current_color()
            self.scene.draw_segment(result.start, result.end, color)

        self.update_visualization()

    def set_position(self, x: float, y: float):
        self.turtle_state.set_position(x, y)
        self.update_visualization()

    def set_heading(self, angle: float):
        self.turtle_state.set_heading(angle)
        self.update_visualization()

    def set_pen_color(self, r: float, g: float, b: float):
        self.turtle_state.set_pen_color(r, g, b)
        self._notify_color()

    def set_pen_size(self, size: float):
        self.turtle_state.set_pen_size(size)
        self.scene.set_line_width(self.turtle_state.pen_size)

    def set_hue_step(self, step: float):
        self.turtle_state.set_hue_step(step)

    def set_rainbow(self, on: bool):
        self.turtle_state.set_rainbow(on)
        self._notify_color()

    def zoom(self, direction: str):
        if direction == 'IN':
            self.scene.zoom_in()
        elif direction == 'OUT':
            self.scene.zoom_out()
        else:
            raise DispatchError(f"Unknown zoom direction {direction}")

    def home(self):
        self.turtle_state.set_position(0, 0)
        self.turtle_state.set_heading(0)
        self.update_visualization()

    def clear_screen(self):
        self.scene.clear_screen()

    def plot_step(self, cmd: PlotStep):
        """
        Plot one sample. Undefined points are skipped and leave the turtle
        where it is, so the next good point connects from there.
        """
        y = self.expression_evaluator.evaluate(cmd.expression, cmd.x)
        if y is None:
            logger.debug("PLOT %s undefined at x=%s", cmd.expression, cmd.x)
            return

        target = Position(cmd.x, y)
        state = self.turtle_state

        if cmd.is_first:
            state.pen_down = True
            state.set_position(target.x, target.y)
        else:
            dx = target.x - state.position.x
            dy = target.y - state.position.y
            if dx or dy:
                heading = math.degrees(math.atan2(dx, dy)) % 360
                state.set_heading(0.0 if heading >= 360 else heading)
            color = state.get_current_color()
            self.scene.draw_segment(state.position.copy(), target, color)
            state.set_position(target.x, target.y)

        if cmd.show_dots:
            self.scene.draw_dot(target, Color.from_rgb255(*cmd.dot_color), self.dot_size)

        self.update_visualization()

    def reset(self):
        """Reset the turtle, wipe the drawing and sync the marker."""
        self.turtle_state.reset()
        self.clear_screen()
        self.update_visualization()

    def update_visualization(self):
        pos = self.turtle_state.position
        self.scene.update_turtle_visualization(pos.x, pos.y, self.turtle_state.heading)

    def _notify_color(self):
        if self.color_observer is not None:
            self.color_observer()
