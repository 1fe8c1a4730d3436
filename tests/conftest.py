"""
Test configuration for the turtle Logo interpreter tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.turtle_config import TurtleConfig
from core.interpreter import LogoInterpreter
from core.lexer import LogoLexer
from core.parser import LogoParser
from core.scene import Scene
from logo_processor import LogoProcessor


class RecordingScene(Scene):
    """Scene that just remembers every call it receives."""

    def __init__(self):
        self.segments = []
        self.dots = []
        self.poses = []
        self.widths = []
        self.zooms = []
        self.clears = 0

    def draw_segment(self, start, end, color):
        self.segments.append((start.copy(), end.copy(), color))

    def draw_dot(self, point, color, size):
        self.dots.append((point.copy(), color, size))

    def update_turtle_visualization(self, x, y, heading):
        self.poses.append((x, y, heading))

    def clear_screen(self):
        self.segments.clear()
        self.dots.clear()
        self.clears += 1

    def set_line_width(self, width):
        self.widths.append(width)

    def zoom_in(self):
        self.zooms.append('IN')

    def zoom_out(self):
        self.zooms.append('OUT')


@pytest.fixture
def config():
    return TurtleConfig(name="Test")


@pytest.fixture
def parse(config):
    """Parse source text straight into a command tree."""
    lexer = LogoLexer()

    def _parse(source):
        return LogoParser(config).parse(lexer.tokenize(source))
    return _parse


@pytest.fixture
def scene():
    return RecordingScene()


@pytest.fixture
def interpreter(config):
    return LogoInterpreter(config)


@pytest.fixture
def processor(config):
    return LogoProcessor(config)
