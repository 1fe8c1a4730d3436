"""
Main Logo processor interface.
This is the primary entry point for the turtle interpreter.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
from config.turtle_config import TurtleConfig
from core.commands import Command
from core.geometry import GeometrySegment, GeometryDot, TurtlePose
from core.interpreter import LogoInterpreter, CompileResult, StepResult
from core.scene import Scene
from utils.errors import LogoErrorRecord


class LogoProcessor:
    """
    Main interface for Logo processing.
    Provides a simple API for the editor, the viewport and scripts.
    """

    def __init__(self, config: Optional[TurtleConfig] = None,
                 scene: Optional[Scene] = None,
                 color_observer: Optional[Callable[[], None]] = None):
        self.interpreter = LogoInterpreter(config, scene, color_observer)

    @property
    def config(self) -> TurtleConfig:
        return self.interpreter.config

    # Compilation and stepping

    def compile(self, source: str) -> CompileResult:
        """
        Compile Logo source into a fresh command stream.

        Args:
            source: Program text

        Returns:
            CompileResult with success flag and error message
        """
        return self.interpreter.compile(source)

    def is_compiled(self) -> bool:
        return self.interpreter.is_compiled

    def step(self) -> StepResult:
        """Execute exactly one command. Raises DispatchError on a bad command."""
        return self.interpreter.step()

    def run(self, max_steps: Optional[int] = None) -> int:
        """Execute commands until the program ends or max_steps is reached."""
        return self.interpreter.run(max_steps)

    def run_program(self, source: str) -> CompileResult:
        """Compile and run a whole program in one go."""
        result = self.compile(source)
        if result.success:
            self.run()
        return result

    def format_command(self, command: Optional[Command]) -> str:
        return self.interpreter.format_command(command)

    def validate_syntax(self, source: str) -> bool:
        """
        Validate syntax without compiling or running.
        Useful for real-time editor feedback.
        """
        return self.interpreter.validate_syntax_only(source)

    # Direct controls used by the UI

    def set_pen_size(self, size: float):
        self.interpreter.executor.set_pen_size(size)

    def set_pen_color(self, r: float, g: float, b: float):
        self.interpreter.executor.set_pen_color(r, g, b)

    def get_pen_color_hex(self) -> str:
        return self.interpreter.turtle_state.pen_color_hex()

    def is_rainbow_on(self) -> bool:
        return self.interpreter.turtle_state.rainbow

    # Error handling methods for editor integration

    def get_all_errors(self) -> List[LogoErrorRecord]:
        return self.interpreter.get_all_errors()

    def get_errors_for_line(self, line_number: int) -> List[LogoErrorRecord]:
        return self.interpreter.get_errors_for_line(line_number)

    def has_errors(self) -> bool:
        return self.interpreter.error_collector.has_errors()

    # Geometry methods for visualization

    def get_all_geometry(self) -> List[GeometrySegment]:
        return self.interpreter.geometry_manager.get_all_segments()

    def get_all_dots(self) -> List[GeometryDot]:
        return self.interpreter.geometry_manager.get_all_dots()

    def get_geometry_for_line(self, line_number: int) -> List[GeometrySegment]:
        return self.interpreter.geometry_manager.get_segments_for_line(line_number)

    def get_turtle_pose(self) -> TurtlePose:
        return self.interpreter.geometry_manager.turtle

    def get_zoom_level(self) -> float:
        return self.interpreter.geometry_manager.zoom_level

    def get_bounding_box(self) -> Tuple[List[float], List[float]]:
        """
        Get the bounding box of everything drawn.

        Returns:
            Tuple of (min_point, max_point) as [x, y] lists
        """
        min_point, max_point = self.interpreter.geometry_manager.get_bounding_box()
        return min_point.to_list(), max_point.to_list()

    # Statistics and information methods

    def get_position(self) -> Tuple[float, float]:
        pos = self.interpreter.turtle_state.position
        return pos.x, pos.y

    def get_heading(self) -> float:
        return self.interpreter.turtle_state.heading

    def get_statistics(self) -> Dict[str, Any]:
        return self.interpreter.get_statistics()

    def reset(self):
        """Reset turtle, drawing and stream."""
        self.interpreter.reset()
