"""
Defines the abstract base class for a drawing scene.

The executor never talks to a renderer directly; it only calls the methods
below. The OpenGL viewport and the headless geometry recorder both
implement them.
"""
from abc import ABC, abstractmethod
from core.turtle_state import Position, Color


class Scene(ABC):
    """Everything the executor needs from whatever draws the picture."""

    @abstractmethod
    def draw_segment(self, start: Position, end: Position, color: Color):
        """Draw a line from start to end; color channels are in [0, 1]."""

    @abstractmethod
    def update_turtle_visualization(self, x: float, y: float, heading: float):
        """Move the turtle marker; heading in degrees, 0 = up, clockwise."""

    @abstractmethod
    def clear_screen(self):
        """Drop every segment and dot drawn so far."""

    @abstractmethod
    def set_line_width(self, width: float):
        pass

    @abstractmethod
    def zoom_in(self):
        pass

    @abstractmethod
    def zoom_out(self):
        pass

    def draw_dot(self, point: Position, color: Color, size: float):
        """Mark a single plotted point. Scenes without dots may ignore it."""
