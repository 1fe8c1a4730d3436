"""
Turtle state management for the Logo interpreter.
Tracks position, heading, pen and rainbow state.
"""
import colorsys
import math
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple
from config.turtle_config import TurtleConfig


@dataclass
class Position:
    """Represents a position on the drawing plane."""
    x: float = 0.0
    y: float = 0.0

    def copy(self) -> 'Position':
        """Create a copy of this position."""
        return Position(self.x, self.y)

    def distance_to(self, other: 'Position') -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def to_list(self) -> list:
        return [self.x, self.y]


@dataclass
class Color:
    """RGB color with channels in [0, 1]."""
    r: float
    g: float
    b: float

    @classmethod
    def from_rgb255(cls, r: float, g: float, b: float) -> 'Color':
        return cls(*(max(0.0, min(255.0, float(c))) / 255.0 for c in (r, g, b)))

    @classmethod
    def from_hue(cls, hue: float) -> 'Color':
        """Fully saturated color at 50% lightness for a hue in degrees."""
        return cls(*colorsys.hls_to_rgb((hue % 360) / 360.0, 0.5, 1.0))

    def to_rgb255(self) -> Tuple[int, int, int]:
        return tuple(int(round(c * 255)) for c in (self.r, self.g, self.b))

    def to_hex(self) -> str:
        return '#%02x%02x%02x' % self.to_rgb255()

    def hue(self) -> float:
        """HSL hue in degrees."""
        h, _, _ = colorsys.rgb_to_hls(self.r, self.g, self.b)
        return h * 360.0


@dataclass
class MoveResult:
    """Outcome of TurtleState.move()."""
    start: Position
    end: Position
    should_draw: bool


class TurtleState:
    """Manages the complete state of the turtle."""

    MIN_PEN_SIZE = 1
    MAX_PEN_SIZE = 12
    MIN_HUE_STEP = 1
    MAX_HUE_STEP = 60
    DEFAULT_HUE_STEP = 5

    def __init__(self, config: Optional[TurtleConfig] = None):
        config = config or TurtleConfig(name="Default")

        # Pose; heading 0 = up, clockwise positive
        self.position = Position()
        self.heading: float = 0.0
        self.pen_down = True

        # Pen settings survive reset()
        self.pen_size = self._clamp(config.pen_size, self.MIN_PEN_SIZE, self.MAX_PEN_SIZE)
        self.pen_color = Color.from_rgb255(*config.pen_color)

        # Rainbow mode
        self.rainbow = False
        self.hue: float = 0.0
        self.hue_step = self._clamp(config.hue_step, self.MIN_HUE_STEP, self.MAX_HUE_STEP)

    def reset(self):
        """Back to the origin facing up; pen size and color are kept."""
        self.position = Position()
        self.heading = 0.0
        self.pen_down = True
        self.rainbow = False
        self.hue = 0.0
        self.hue_step = self.DEFAULT_HUE_STEP

    def turn(self, angle: float):
        """Rotate clockwise by angle degrees, keeping heading in [0, 360)."""
        # Reduce both terms first so huge angles cannot sum to inf
        self.heading = math.fmod(math.fmod(self.heading, 360.0) + math.fmod(angle, 360.0), 360.0)
        if self.heading < 0:
            self.heading += 360.0
        # fmod of a tiny negative value can round up to exactly 360
        if self.heading >= 360.0:
            self.heading = 0.0

    def move(self, distance: float) -> MoveResult:
        """
        Move along the current heading. The new position is always
        committed here; should_draw only tells the caller whether to draw.
        """
        rad = math.radians(self.heading)
        start = self.position.copy()
        end = Position(start.x + math.sin(rad) * distance,
                       start.y + math.cos(rad) * distance)
        self.position = end.copy()
        return MoveResult(start, end, self.pen_down)

    def set_position(self, x: float, y: float):
        self.position = Position(float(x), float(y))

    def set_heading(self, angle: float):
        # Stored as given, unlike turn()
        self.heading = float(angle)

    def set_pen_color(self, r: float, g: float, b: float):
        """Set the pen color (0-255 channels) and seed the rainbow hue from it."""
        self.pen_color = Color.from_rgb255(r, g, b)
        self.hue = float(round(self.pen_color.hue()))

    def set_pen_size(self, size: float):
        self.pen_size = self._clamp(size, self.MIN_PEN_SIZE, self.MAX_PEN_SIZE)

    def set_hue_step(self, step: float):
        self.hue_step = self._clamp(step, self.MIN_HUE_STEP, self.MAX_HUE_STEP)

    def set_rainbow(self, on: bool):
        self.rainbow = bool(on)

    def get_current_color(self) -> Color:
        """
        Color for the next segment. In rainbow mode every call advances the
        hue by hue_step first, so call it once per drawn segment.
        """
        if self.rainbow:
            self.hue = (self.hue + self.hue_step) % 360
            return Color.from_hue(self.hue)
        return Color(self.pen_color.r, self.pen_color.g, self.pen_color.b)

    def pen_color_hex(self) -> str:
        return self.pen_color.to_hex()

    def get_state_summary(self) -> Dict[str, Any]:
        """Get a summary of the current turtle state for display."""
        return {
            'position': self.position.to_list(),
            'heading': self.heading,
            'pen_down': self.pen_down,
            'pen_size': self.pen_size,
            'pen_color': self.pen_color.to_rgb255(),
            'rainbow': self.rainbow,
            'hue': self.hue,
            'hue_step': self.hue_step,
        }

    @staticmethod
    def _clamp(value: float, low: int, high: int) -> int:
        return int(max(low, min(high, round(value))))
