"""
Geometry management for the Logo interpreter.
Records everything the turtle draws, with line mapping, so that a viewport
can render it and tests can inspect it without a window.
"""
from dataclasses import dataclass
from typing import List, Dict, Tuple, Any
from core.scene import Scene
from core.turtle_state import Position, Color


@dataclass
class GeometrySegment:
    """Represents a single drawn line."""
    segment_id: int
    line_number: int
    start_point: Position
    end_point: Position
    color: Color
    width: float

    @property
    def length(self) -> float:
        return self.start_point.distance_to(self.end_point)


@dataclass
class GeometryDot:
    """Represents a single plotted point."""
    line_number: int
    point: Position
    color: Color
    size: float


@dataclass
class TurtlePose:
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0


class GeometryManager(Scene):
    """Headless scene that keeps the drawing and maintains line-to-geometry mapping."""

    MIN_ZOOM = 0.1
    MAX_ZOOM = 10.0
    ZOOM_FACTOR = 1.25

    def __init__(self, line_width: float = 6):
        self.segments: List[GeometrySegment] = []
        self.dots: List[GeometryDot] = []
        self.line_to_segments: Dict[int, List[int]] = {}  # line_number -> segment_ids
        self.segment_counter = 0
        self.total_length = 0.0

        self.turtle = TurtlePose()
        self.line_width = line_width
        self.zoom_level = 1.0
        self.clear_count = 0

        # Source line of the command being executed, set by the interpreter
        self.source_line = 0

    # Scene interface

    def draw_segment(self, start: Position, end: Position, color: Color):
        segment = GeometrySegment(
            segment_id=self.segment_counter,
            line_number=self.source_line,
            start_point=start.copy(),
            end_point=end.copy(),
            color=color,
            width=self.line_width,
        )
        self.total_length += segment.length
        self.segments.append(segment)
        self._add_line_mapping(self.source_line, self.segment_counter)
        self.segment_counter += 1

    def draw_dot(self, point: Position, color: Color, size: float):
        self.dots.append(GeometryDot(self.source_line, point.copy(), color, size))

    def update_turtle_visualization(self, x: float, y: float, heading: float):
        self.turtle = TurtlePose(x, y, heading)

    def clear_screen(self):
        self.segments.clear()
        self.dots.clear()
        self.line_to_segments.clear()
        self.total_length = 0.0
        self.clear_count += 1

    def set_line_width(self, width: float):
        self.line_width = width

    def zoom_in(self):
        self.zoom_level = min(self.MAX_ZOOM, self.zoom_level * self.ZOOM_FACTOR)

    def zoom_out(self):
        self.zoom_level = max(self.MIN_ZOOM, self.zoom_level / self.ZOOM_FACTOR)

    # Queries

    def get_segments_for_line(self, line_number: int) -> List[GeometrySegment]:
        """Get all segments drawn by a specific source line."""
        segment_ids = set(self.line_to_segments.get(line_number, []))
        return [seg for seg in self.segments if seg.segment_id in segment_ids]

    def get_all_segments(self) -> List[GeometrySegment]:
        return self.segments.copy()

    def get_all_dots(self) -> List[GeometryDot]:
        return self.dots.copy()

    def get_bounding_box(self) -> Tuple[Position, Position]:
        """Get the overall bounding box of everything drawn."""
        points = [p for seg in self.segments for p in (seg.start_point, seg.end_point)]
        points.extend(dot.point for dot in self.dots)
        if not points:
            return Position(0, 0), Position(0, 0)

        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return Position(min(xs), min(ys)), Position(max(xs), max(ys))

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'total_segments': len(self.segments),
            'total_dots': len(self.dots),
            'total_length': self.total_length,
            'line_width': self.line_width,
            'zoom_level': self.zoom_level,
            'lines_with_geometry': len(self.line_to_segments),
        }

    def clear(self):
        """Forget everything, including pose, width and zoom."""
        self.clear_screen()
        self.segment_counter = 0
        self.clear_count = 0
        self.turtle = TurtlePose()
        self.zoom_level = 1.0
        self.source_line = 0

    def _add_line_mapping(self, line_number: int, segment_id: int):
        if line_number not in self.line_to_segments:
            self.line_to_segments[line_number] = []
        self.line_to_segments[line_number].append(segment_id)
