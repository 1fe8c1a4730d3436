"""
OpenGL viewport for rendering the turtle drawing from the geometry recorder.
"""
import math
from PySide6.QtOpenGLWidgets import QOpenGLWidget
from PySide6.QtCore import Qt, QPoint
from OpenGL.GL import *


class Viewport(QOpenGLWidget):
    """Top-down 2D view of the turtle plane."""

    GRID_EXTENT = 200
    GRID_SPACING = 10
    BASE_HALF_HEIGHT = 220.0
    TURTLE_SIZE = 3.0

    def __init__(self, parent=None):
        super().__init__(parent)

        self.segments = []
        self.dots = []
        self.turtle = None
        self.highlighted_lines = set()

        # Camera; zoom_level comes from the ZOOM command, view_zoom from the wheel
        self.zoom_level = 1.0
        self.view_zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.last_pos = QPoint()

        self.show_grid = True

    def set_geometry(self, segments, dots, turtle, zoom_level):
        """Update with new geometry from the processor."""
        self.segments = segments or []
        self.dots = dots or []
        self.turtle = turtle
        self.zoom_level = zoom_level
        self.update()

    def highlight_lines(self, line_numbers):
        """Highlight segments drawn by specific program lines."""
        self.highlighted_lines = set(line_numbers) if line_numbers else set()
        self.update()

    def initializeGL(self):
        glClearColor(0.0, 0.0, 0.0, 1.0)
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_LINE_SMOOTH)
        glEnable(GL_POINT_SMOOTH)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

    def resizeGL(self, w, h):
        glViewport(0, 0, w, h)

    def paintGL(self):
        glClear(GL_COLOR_BUFFER_BIT)
        self._apply_camera()

        if self.show_grid:
            self.draw_grid()
        self.draw_drawing()
        self.draw_turtle()

    def _apply_camera(self):
        w = max(1, self.width())
        h = max(1, self.height())
        half_h = self.BASE_HALF_HEIGHT / (self.zoom_level * self.view_zoom)
        half_w = half_h * w / h

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(self.pan_x - half_w, self.pan_x + half_w,
                self.pan_y - half_h, self.pan_y + half_h, -1.0, 1.0)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def draw_grid(self):
        extent = self.GRID_EXTENT
        glLineWidth(1.0)
        glColor3f(0.04, 0.09, 0.14)

        glBegin(GL_LINES)
        for i in range(-extent, extent + 1, self.GRID_SPACING):
            glVertex2f(i, -extent)
            glVertex2f(i, extent)
            glVertex2f(-extent, i)
            glVertex2f(extent, i)
        glEnd()

        # Main axes: X red, Y blue
        glLineWidth(3.0)
        glBegin(GL_LINES)
        glColor3f(1.0, 0.27, 0.27)
        glVertex2f(-extent, 0)
        glVertex2f(extent, 0)
        glColor3f(0.27, 0.27, 1.0)
        glVertex2f(0, -extent)
        glVertex2f(0, extent)
        glEnd()

    def draw_drawing(self):
        for segment in self.segments:
            glLineWidth(float(segment.width))
            if segment.line_number in self.highlighted_lines:
                glColor3f(1.0, 1.0, 0.0)
            else:
                glColor3f(segment.color.r, segment.color.g, segment.color.b)
            glBegin(GL_LINES)
            glVertex2f(segment.start_point.x, segment.start_point.y)
            glVertex2f(segment.end_point.x, segment.end_point.y)
            glEnd()

        for dot in self.dots:
            glPointSize(float(dot.size))
            glColor3f(dot.color.r, dot.color.g, dot.color.b)
            glBegin(GL_POINTS)
            glVertex2f(dot.point.x, dot.point.y)
            glEnd()

    def draw_turtle(self):
        """Triangle pointing along the heading; heading 0 = up, clockwise."""
        if self.turtle is None:
            return

        size = self.TURTLE_SIZE
        rad = math.radians(self.turtle.heading)
        corners = [(0, size), (-size * 0.6, -size * 0.8), (size * 0.6, -size * 0.8)]

        glColor3f(0.2, 1.0, 0.85)
        glBegin(GL_TRIANGLES)
        for cx, cy in corners:
            x = cx * math.cos(rad) + cy * math.sin(rad)
            y = -cx * math.sin(rad) + cy * math.cos(rad)
            glVertex2f(self.turtle.x + x, self.turtle.y + y)
        glEnd()

    def mousePressEvent(self, event):
        self.last_pos = event.pos()

    def mouseMoveEvent(self, event):
        """Drag with the left button to pan."""
        if event.buttons() & Qt.LeftButton:
            dx = event.pos().x() - self.last_pos.x()
            dy = event.pos().y() - self.last_pos.y()
            scale = 2 * self.BASE_HALF_HEIGHT / (self.zoom_level * self.view_zoom) / max(1, self.height())
            self.pan_x -= dx * scale
            self.pan_y += dy * scale
            self.update()
        self.last_pos = event.pos()

    def wheelEvent(self, event):
        delta = event.angleDelta().y() / 120.0
        self.view_zoom = max(0.1, min(10.0, self.view_zoom * (1.1 ** delta)))
        self.update()

    def toggle_grid(self):
        self.show_grid = not self.show_grid
        self.update()
        return self.show_grid

    def reset_view(self):
        self.view_zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.update()
