"""
Defines the turtle commands.

These are simple data classes, one per command tag. The parser builds a tree
of them, the command stream flattens REPEAT and BLOCK away, and the executor
runs whatever is left. Keeping the set closed gives a clean separation between
the language front end and the renderer.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class Command:
    """Base class for all commands."""
    op = ""
    # Source line of the command keyword; not a dataclass field, so it never
    # takes part in equality.
    line_number = 0


@dataclass
class Forward(Command):
    """FD n"""
    op = "FD"
    distance: float


@dataclass
class Back(Command):
    """BK n"""
    op = "BK"
    distance: float


@dataclass
class Right(Command):
    """RT n"""
    op = "RT"
    angle: float


@dataclass
class Left(Command):
    """LT n"""
    op = "LT"
    angle: float


@dataclass
class PenUp(Command):
    op = "PU"


@dataclass
class PenDown(Command):
    op = "PD"


@dataclass
class Home(Command):
    op = "HOME"


@dataclass
class ClearScreen(Command):
    op = "CS"


@dataclass
class SetPos(Command):
    op = "SETPOS"
    x: float
    y: float


@dataclass
class SetHeading(Command):
    op = "SETHEADING"
    angle: float


@dataclass
class PenColor(Command):
    """PENCOLOR r g b, channels 0-255."""
    op = "PENCOLOR"
    r: float
    g: float
    b: float


@dataclass
class PenSize(Command):
    op = "PENSIZE"
    size: float


@dataclass
class HueStep(Command):
    op = "HUESTEP"
    step: float


@dataclass
class Rainbow(Command):
    op = "RAINBOW"
    on: bool


@dataclass
class Zoom(Command):
    """ZOOM IN|OUT"""
    op = "ZOOM"
    direction: str


@dataclass
class PlotStep(Command):
    """
    One sample point of an expanded PLOT. is_first depends on where the point
    sits in its PLOT, so it is left out of equality.
    """
    op = "PLOT"
    expression: str
    x: float
    is_first: bool = field(compare=False)
    show_dots: bool = False
    dot_color: Tuple[int, int, int] = (255, 255, 255)


@dataclass
class Repeat(Command):
    """REPEAT count [ body ]; never reaches the executor."""
    op = "REPEAT"
    count: int
    body: List[Command] = field(default_factory=list)


@dataclass
class Block(Command):
    """Anonymous [ body ]; never reaches the executor."""
    op = "BLOCK"
    body: List[Command] = field(default_factory=list)


ATOMIC_COMMANDS = (
    Forward, Back, Right, Left, PenUp, PenDown, Home, ClearScreen,
    SetPos, SetHeading, PenColor, PenSize, HueStep, Rainbow, Zoom, PlotStep,
)


def is_atomic(command: Command) -> bool:
    """True for commands the executor can run directly."""
    return isinstance(command, ATOMIC_COMMANDS)


def format_number(value: float) -> str:
    """Render a number the way a user would type it: 120, not 120.0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)
