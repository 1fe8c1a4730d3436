"""
The main window for the Turtle Logo IDE.
"""
from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                               QPushButton, QFileDialog, QTextEdit, QSplitter,
                               QLabel, QComboBox, QSlider, QSpinBox, QColorDialog)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QColor, QFont
from .editor import Editor
from .viewport import Viewport
from logo_processor import LogoProcessor
from config.turtle_config import ConfigManager
from core.samples import SAMPLES, DEFAULT_PROGRAM
from core.simulation_controller import SimulationController


class MainWindow(QMainWindow):
    def __init__(self, config=None):
        super().__init__()
        self.setWindowTitle("Turtle Logo IDE")
        self.setGeometry(100, 100, 1400, 900)

        self.config = config or ConfigManager.default()
        self.processor = LogoProcessor(self.config, color_observer=self.update_color_picker)
        self.controller = SimulationController(self.processor)

        # Playback timer, one batch of commands per frame
        self.frame_timer = QTimer()
        self.frame_timer.setInterval(self.config.frame_interval_ms)
        self.frame_timer.timeout.connect(self.on_frame)

        # Real-time syntax checking
        self.syntax_timer = QTimer()
        self.syntax_timer.setSingleShot(True)
        self.syntax_timer.timeout.connect(self.check_syntax)

        self.setup_ui()
        self.connect_signals()

        self.editor.setPlainText(DEFAULT_PROGRAM)
        self.controller.compile(self.editor.toPlainText())
        self.refresh()

    def setup_ui(self):
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # Top toolbar
        toolbar_layout = QHBoxLayout()

        self.load_button = QPushButton("Load")
        self.save_button = QPushButton("Save")
        self.run_button = QPushButton("Run")
        self.step_button = QPushButton("Step")
        self.reset_button = QPushButton("Reset")
        self.grid_button = QPushButton("Grid")

        self.sample_selector = QComboBox()
        self.sample_selector.addItem("Examples...")
        self.sample_selector.addItems(list(SAMPLES))

        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(0, self.config.max_speed)
        self.speed_slider.setValue(self.config.default_speed)
        self.speed_slider.setMaximumWidth(160)

        self.pen_size_box = QSpinBox()
        self.pen_size_box.setRange(1, 12)
        self.pen_size_box.setValue(self.processor.interpreter.turtle_state.pen_size)

        self.pen_color_button = QPushButton()
        self.pen_color_button.setFixedWidth(40)

        for widget in (self.load_button, self.save_button, self.run_button,
                       self.step_button, self.reset_button, self.grid_button,
                       self.sample_selector):
            toolbar_layout.addWidget(widget)
        toolbar_layout.addStretch()
        toolbar_layout.addWidget(QLabel("Speed:"))
        toolbar_layout.addWidget(self.speed_slider)
        toolbar_layout.addWidget(QLabel("Pen:"))
        toolbar_layout.addWidget(self.pen_size_box)
        toolbar_layout.addWidget(self.pen_color_button)

        main_layout.addLayout(toolbar_layout)

        # Status row
        status_layout = QHBoxLayout()
        self.light = QLabel("●")
        self.status_label = QLabel("Ready.")
        self.pos_label = QLabel("0,0")
        self.heading_label = QLabel("0°")
        status_layout.addWidget(self.light)
        status_layout.addWidget(self.status_label)
        status_layout.addStretch()
        status_layout.addWidget(QLabel("Pos:"))
        status_layout.addWidget(self.pos_label)
        status_layout.addWidget(QLabel("Heading:"))
        status_layout.addWidget(self.heading_label)
        main_layout.addLayout(status_layout)

        main_splitter = QSplitter(Qt.Vertical)
        main_layout.addWidget(main_splitter)

        workspace_splitter = QSplitter(Qt.Horizontal)
        self.editor = Editor()
        self.viewport = Viewport()
        workspace_splitter.addWidget(self.editor)
        workspace_splitter.addWidget(self.viewport)

        bottom_splitter = QSplitter(Qt.Horizontal)
        self.error_console = QTextEdit()
        self.error_console.setReadOnly(True)
        self.error_console.setMaximumHeight(140)
        self.stats_label = QLabel("Statistics:")
        self.stats_label.setFont(QFont("Courier", 9))
        bottom_splitter.addWidget(self.error_console)
        bottom_splitter.addWidget(self.stats_label)

        main_splitter.addWidget(workspace_splitter)
        main_splitter.addWidget(bottom_splitter)

        workspace_splitter.setSizes([500, 900])
        main_splitter.setSizes([750, 150])

        self.update_color_picker()

    def connect_signals(self):
        self.load_button.clicked.connect(self.load_program_file)
        self.save_button.clicked.connect(self.save_program_file)
        self.run_button.clicked.connect(self.handle_run)
        self.step_button.clicked.connect(self.handle_step)
        self.reset_button.clicked.connect(self.handle_reset)
        self.grid_button.clicked.connect(self.viewport.toggle_grid)
        self.sample_selector.activated.connect(self.load_sample)
        self.speed_slider.valueChanged.connect(self.controller.set_speed)
        self.pen_size_box.valueChanged.connect(self.on_pen_size_changed)
        self.pen_color_button.clicked.connect(self.choose_pen_color)
        self.editor.textChanged.connect(self.on_text_changed)

    # Playback

    def handle_run(self):
        self.controller.toggle_play(self.editor.toPlainText())
        if self.controller.playing:
            self.frame_timer.start()
        else:
            self.frame_timer.stop()
        self.refresh()

    def handle_step(self):
        self.frame_timer.stop()
        self.controller.stop()
        self.controller.step(self.editor.toPlainText())
        self.refresh()

    def handle_reset(self):
        self.frame_timer.stop()
        self.controller.reset()
        self.editor.set_active_line(0)
        self.refresh()

    def on_frame(self):
        self.controller.tick()
        if not self.controller.playing:
            self.frame_timer.stop()
        self.refresh()

    # Controls

    def on_pen_size_changed(self, size):
        self.processor.set_pen_size(size)
        self.refresh()

    def choose_pen_color(self):
        color = QColorDialog.getColor(QColor(self.processor.get_pen_color_hex()), self)
        if color.isValid():
            self.processor.set_pen_color(color.red(), color.green(), color.blue())

    def update_color_picker(self):
        """Observer hook, called after PENCOLOR and RAINBOW."""
        if not hasattr(self, 'pen_color_button'):
            return
        if self.processor.is_rainbow_on():
            self.pen_color_button.setText("RGB")
            self.pen_color_button.setStyleSheet("")
        else:
            self.pen_color_button.setText("")
            self.pen_color_button.setStyleSheet(
                f"background-color: {self.processor.get_pen_color_hex()}")

    # Files and samples

    def load_sample(self, index):
        name = self.sample_selector.itemText(index)
        if name in SAMPLES:
            self.handle_reset()
            self.editor.setPlainText(SAMPLES[name])
            self.controller.compile(SAMPLES[name])
            self.refresh()

    def load_program_file(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open Logo Program", "",
            "Logo Files (*.logo *.lgo *.txt);;All Files (*)"
        )
        if not file_path:
            return

        content, error = self.controller.load_program_file(file_path)
        if error:
            self.error_console.setText(error)
            return
        self.handle_reset()
        self.editor.setPlainText(content)
        self.controller.compile(content)
        self.refresh()

    def save_program_file(self):
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Logo Program", "",
            "Logo Files (*.logo);;All Files (*)"
        )
        if file_path:
            with open(file_path, 'w') as f:
                f.write(self.editor.toPlainText())
            self.status_label.setText(f"Saved: {file_path}")

    # Display

    def refresh(self):
        """Push controller and processor state into the widgets."""
        self.run_button.setText("Pause" if self.controller.playing else "Run")
        self.status_label.setText(self.controller.status)
        self.light.setStyleSheet(
            "color: #ff6b6b" if self.controller.status_is_error else "color: #51cf66")

        x, y = self.processor.get_position()
        self.pos_label.setText(f"{x:.0f},{y:.0f}")
        self.heading_label.setText(f"{self.processor.get_heading():.0f}°")

        last = self.processor.interpreter.last_command
        self.editor.set_active_line(last.line_number if last else 0)

        self.viewport.set_geometry(
            self.processor.get_all_geometry(),
            self.processor.get_all_dots(),
            self.processor.get_turtle_pose(),
            self.processor.get_zoom_level(),
        )
        self.update_error_display()
        self.update_statistics()

    def update_error_display(self):
        errors = self.processor.get_all_errors()
        if not errors:
            self.error_console.setText("No errors.")
            self.editor.clear_error_highlights()
            return

        self.error_console.setText("\n".join(
            f"Line {e.line_number}: [{e.severity.value.upper()}] {e.message}" for e in errors))
        self.editor.highlight_error_lines([e.line_number for e in errors])

    def update_statistics(self):
        stats = self.processor.get_statistics()
        self.stats_label.setText(
            f"Commands: {stats['processing']['steps_taken']}"
            f" / {stats['processing']['total_commands']}\n"
            f"Segments: {stats['geometry']['total_segments']}"
            f"  Dots: {stats['geometry']['total_dots']}\n"
            f"Ink length: {stats['geometry']['total_length']:.1f}\n"
            f"Pen size: {stats['turtle']['pen_size']}"
            f"  Rainbow: {'on' if stats['turtle']['rainbow'] else 'off'}"
        )

    def on_text_changed(self):
        """Editing invalidates the compiled program; recheck syntax shortly."""
        self.syntax_timer.stop()
        self.syntax_timer.start(500)

    def check_syntax(self):
        source = self.editor.toPlainText()
        if self.processor.validate_syntax(source):
            self.editor.clear_error_highlights()
        else:
            self.update_error_display()
