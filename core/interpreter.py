"""
Main Logo interpreter that coordinates all components.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from config.turtle_config import TurtleConfig
from core.commands import (Command, Repeat, Block, PlotStep, SetPos, PenColor,
                           Rainbow, Zoom, format_number)
from core.executor import Executor
from core.geometry import GeometryManager
from core.lexer import LogoLexer, Token
from core.parser import LogoParser
from core.scene import Scene
from core.stream import CommandStream, count_atomic
from core.turtle_state import TurtleState
from utils.errors import (ErrorCollector, ErrorType, ErrorSeverity, ParseError,
                          DispatchError)
from utils.expressions import ExpressionEvaluator

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    success: bool
    error: Optional[str] = None
    line_number: int = 0


@dataclass
class StepResult:
    """What one call to step() did."""
    command: Optional[Command]
    done: bool
    text: str = ""


class LogoInterpreter:
    """Main Logo interpreter: compiles source text and steps through it."""

    DEFAULT_DOT_COLOR = (255, 255, 255)

    def __init__(self, config: Optional[TurtleConfig] = None,
                 scene: Optional[Scene] = None,
                 color_observer: Optional[Callable[[], None]] = None):
        self.config = config or TurtleConfig(name="Default")

        # Core components
        self.error_collector = ErrorCollector()
        self.turtle_state = TurtleState(self.config)
        self.geometry_manager = GeometryManager(self.turtle_state.pen_size)
        self.scene = scene or self.geometry_manager
        self.expression_evaluator = ExpressionEvaluator()

        # Processing components
        self.lexer = LogoLexer()
        self.parser = LogoParser(self.config)
        self.executor = Executor(
            self.turtle_state,
            self.scene,
            self.expression_evaluator,
            color_observer,
            self.config.dot_size,
        )

        # State tracking
        self.current_source = ""
        self.tokens: List[Token] = []
        self.program: List[Command] = []
        self.stream: Optional[CommandStream] = None
        self.last_command: Optional[Command] = None
        self.steps_executed = 0

    def compile(self, source: str) -> CompileResult:
        """
        Tokenize and parse source text and prepare a fresh command stream.
        On failure no stream is left active.
        """
        self.current_source = source
        self.error_collector.clear()
        self.stream = None
        self.program = []
        self.last_command = None
        self.steps_executed = 0

        self.tokens = self.lexer.tokenize(source)
        try:
            program = self.parser.parse(self.tokens)
        except ParseError as e:
            self.error_collector.add_exception(e, ErrorType.SYNTAX)
            logger.info("Compile failed at line %d: %s", e.line_number, e.message)
            return CompileResult(False, e.message, e.line_number)

        self.program = program
        self.stream = CommandStream(program)
        logger.info("Compiled %d tokens into %d top-level commands",
                    len(self.tokens), len(program))
        return CompileResult(True)

    @property
    def is_compiled(self) -> bool:
        return self.stream is not None

    def step(self) -> StepResult:
        """
        Pull and execute exactly one atomic command. Reports done when the
        stream is exhausted (or was never compiled) and then drops it.
        A DispatchError stops the run; earlier steps are not undone.
        """
        if self.stream is None:
            return StepResult(None, True)

        command = self.stream.next_command()
        if command is None:
            self.stream = None
            return StepResult(None, True)

        self.geometry_manager.source_line = command.line_number
        try:
            self.executor.execute(command)
        except DispatchError as e:
            self.stream = None
            self.error_collector.add_exception(e, ErrorType.RUNTIME, ErrorSeverity.FATAL)
            logger.error("Execution stopped: %s", e.message)
            raise

        self.last_command = command
        self.steps_executed += 1
        return StepResult(command, False, self.format_command(command))

    def run(self, max_steps: Optional[int] = None) -> int:
        """Drive the stream in a tight loop. Returns the number of commands run."""
        executed = 0
        while max_steps is None or executed < max_steps:
            if self.step().done:
                break
            executed += 1
        return executed

    def reset(self):
        """Drop the active stream and put turtle and drawing back to the start."""
        self.stream = None
        self.last_command = None
        self.error_collector.clear()
        self.steps_executed = 0
        self.executor.reset()

    def validate_syntax_only(self, source: str) -> bool:
        """
        Parse without touching the active stream or turtle.
        Useful for real-time editor feedback.
        """
        self.error_collector.clear()
        try:
            LogoParser(self.config).parse(self.lexer.tokenize(source))
        except ParseError as e:
            self.error_collector.add_exception(e, ErrorType.SYNTAX)
            return False
        return True

    def count_commands(self) -> int:
        """Flattened length of the compiled program."""
        return count_atomic(self.program)

    def format_command(self, command: Optional[Command]) -> str:
        """Human-readable command text in the same layout the parser accepts."""
        if command is None:
            return ''

        if isinstance(command, Repeat):
            return f"REPEAT {command.count} {self._format_body(command.body)}"
        if isinstance(command, Block):
            return self._format_body(command.body)
        if isinstance(command, SetPos):
            return f"SETPOS {format_number(command.x)} {format_number(command.y)}"
        if isinstance(command, PenColor):
            channels = ' '.join(format_number(c) for c in (command.r, command.g, command.b))
            return f"PENCOLOR {channels}"
        if isinstance(command, Rainbow):
            return f"RAINBOW {'ON' if command.on else 'OFF'}"
        if isinstance(command, Zoom):
            return f"ZOOM {command.direction}"
        if isinstance(command, PlotStep):
            text = f"PLOT {command.expression} AT [ {format_number(command.x)} ]"
            if command.show_dots:
                text += " DOTS"
            if tuple(command.dot_color) != self.DEFAULT_DOT_COLOR:
                text += " COLOR " + ' '.join(format_number(c) for c in command.dot_color)
            return text

        # Single-number commands share one layout; no-argument ones are bare
        for field_name in ('distance', 'angle', 'size', 'step'):
            if hasattr(command, field_name):
                return f"{command.op} {format_number(getattr(command, field_name))}"
        return command.op

    def _format_body(self, body: List[Command]) -> str:
        inner = ' '.join(self.format_command(c) for c in body)
        return f"[ {inner} ]" if inner else "[ ]"

    # Public interface methods for editor integration

    def get_all_errors(self):
        return self.error_collector.get_all_errors()

    def get_errors_for_line(self, line_number: int):
        return self.error_collector.get_errors_for_line(line_number)

    def get_statistics(self) -> Dict[str, Any]:
        """Get processing, drawing and turtle statistics."""
        return {
            'processing': {
                'total_lines': len(self.current_source.split('\n')),
                'total_tokens': len(self.tokens),
                'total_commands': self.count_commands(),
                'steps_taken': self.steps_executed,
                'errors': len(self.error_collector.errors),
            },
            'geometry': self.geometry_manager.get_statistics(),
            'turtle': self.turtle_state.get_state_summary(),
        }
