"""
Logo parser for building command trees from token streams.
"""
import logging
import math
import re
from typing import List, Optional, Tuple
from config.turtle_config import TurtleConfig
from core.commands import (Command, Forward, Back, Right, Left, PenUp, PenDown,
                           Home, ClearScreen, SetPos, SetHeading, PenColor,
                           PenSize, HueStep, Rainbow, Zoom, PlotStep, Repeat,
                           Block)
from core.lexer import Token
from utils.errors import ParseError

logger = logging.getLogger(__name__)


class LogoParser:
    """Recursive-descent parser turning tokens into a command block."""

    KEYWORDS = {
        'FD', 'BK', 'RT', 'LT', 'PU', 'PD', 'HOME', 'CS',
        'SETPOS', 'SETHEADING', 'PENCOLOR', 'PENSIZE',
        'RAINBOW', 'HUESTEP', 'REPEAT', 'ZOOM', 'PLOT',
    }

    PLOT_OPTIONS = {'FROM', 'TO', 'STEPS', 'AT', 'SMOOTH', 'DOTS', 'COLOR'}

    # Keeps _parse_block inside the interpreter recursion limit
    MAX_NESTING = 100

    NUMBER_PATTERN = re.compile(r'-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')

    # Commands with a single numeric argument
    SINGLE_NUMBER = {
        'FD': Forward,
        'BK': Back,
        'RT': Right,
        'LT': Left,
        'PENSIZE': PenSize,
        'SETHEADING': SetHeading,
        'HUESTEP': HueStep,
    }

    NO_ARGUMENT = {
        'PU': PenUp,
        'PD': PenDown,
        'HOME': Home,
        'CS': ClearScreen,
    }

    def __init__(self, config: Optional[TurtleConfig] = None):
        self.config = config or TurtleConfig(name="Default")
        self.tokens: List[Token] = []
        self.pos = 0
        self.depth = 0

    def parse(self, tokens: List[Token]) -> List[Command]:
        """Parse a whole program. Raises ParseError on the first problem."""
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        return self._parse_block()

    def _parse_block(self, opener: Optional[Token] = None) -> List[Command]:
        if opener is not None:
            self.depth += 1
            if self.depth > self.MAX_NESTING:
                raise self._error(f"Blocks nested deeper than {self.MAX_NESTING} levels", opener)

        block = []
        while self.pos < len(self.tokens):
            token = self._next()
            word = token.upper()

            if word == ']':
                if opener is None:
                    raise self._error("Unexpected ]", token)
                self.depth -= 1
                return block

            if word == '[':
                body = self._parse_block(token)
                block.append(self._at(Block(body), token))
                continue

            if word == 'REPEAT':
                block.append(self._parse_repeat(token))
                continue

            # PLOT expands in place into one PLOT_STEP per sample point
            if word == 'PLOT':
                block.extend(self._parse_plot(token))
                continue

            block.append(self._parse_command(token, word))

        if opener is not None:
            raise self._error("Missing closing ]", opener)
        return block

    def _parse_repeat(self, token: Token) -> Repeat:
        count_token = self._next_or_none()
        count = self._to_number(count_token)
        if count is None or not float(count).is_integer():
            raise self._error("Expected whole number after REPEAT", count_token or token)

        bracket = self._next_or_none()
        if bracket is None or bracket.value != '[':
            raise self._error("Expected [ after REPEAT", bracket or token)

        body = self._parse_block(bracket)
        return self._at(Repeat(int(count), body), token)

    def _parse_command(self, token: Token, word: str) -> Command:
        if word in self.SINGLE_NUMBER:
            value = self._read_number(f"Expected number after {word}", token)
            return self._at(self.SINGLE_NUMBER[word](value), token)

        if word in self.NO_ARGUMENT:
            return self._at(self.NO_ARGUMENT[word](), token)

        if word == 'SETPOS':
            x = self._read_number("SETPOS x y", token)
            y = self._read_number("SETPOS x y", token)
            return self._at(SetPos(x, y), token)

        if word == 'PENCOLOR':
            r, g, b = self._read_rgb("PENCOLOR r g b (0-255)", token)
            return self._at(PenColor(r, g, b), token)

        if word == 'RAINBOW':
            mode = self._read_choice(('ON', 'OFF'), "RAINBOW ON|OFF", token)
            return self._at(Rainbow(mode == 'ON'), token)

        if word == 'ZOOM':
            mode = self._read_choice(('IN', 'OUT'), "ZOOM IN|OUT", token)
            return self._at(Zoom(mode), token)

        raise self._error(f"Unknown token: {token.value}", token)

    def _parse_plot(self, token: Token) -> List[Command]:
        """
        PLOT <expr> [FROM a] [TO b] [STEPS n] [AT [x1, x2, ...]]
             [SMOOTH] [DOTS] [COLOR r g b]
        """
        expression = self._read_expression(token)

        start = self.config.plot_from
        end = self.config.plot_to
        steps = self.config.plot_steps
        points = None
        show_dots = False
        dot_color = (255, 255, 255)

        while self.pos < len(self.tokens) and self._peek().upper() in self.PLOT_OPTIONS:
            option_token = self._next()
            option = option_token.upper()
            if option == 'FROM':
                start = self._read_number("PLOT ... FROM a", option_token)
            elif option == 'TO':
                end = self._read_number("PLOT ... TO b", option_token)
            elif option == 'STEPS':
                steps = self._read_steps(option_token)
            elif option == 'AT':
                points = self._read_array(option_token)
            elif option == 'SMOOTH':
                pass  # segments are always joined point to point
            elif option == 'DOTS':
                show_dots = True
            elif option == 'COLOR':
                dot_color = tuple(int(round(c)) for c in
                                  self._read_rgb("PLOT ... COLOR r g b (0-255)", option_token))

        if points is None:
            span = end - start
            points = [start + span * i / steps for i in range(steps + 1)]
        elif not points:
            raise self._error("PLOT AT needs at least one value", token)

        logger.debug("PLOT %s expanded to %d points", expression, len(points))
        return [self._at(PlotStep(expression, x, i == 0, show_dots, dot_color), token)
                for i, x in enumerate(points)]

    def _read_expression(self, token: Token) -> str:
        """
        Read the expression token, rejoining pieces split at commas.
        Only a ',' or the piece right after one continues the expression.
        """
        first = self._next_or_none()
        if first is None or first.value in ('[', ']') or first.upper() in self.PLOT_OPTIONS:
            raise self._error("PLOT needs an expression", first or token)

        parts = [first.value]
        depth = first.value.count('(') - first.value.count(')')
        while depth > 0 and self.pos < len(self.tokens):
            piece = self._peek().value
            if piece in ('[', ']') or (piece != ',' and parts[-1] != ','):
                break
            self.pos += 1
            parts.append(piece)
            depth += piece.count('(') - piece.count(')')

        if depth != 0:
            raise self._error("PLOT expression has unbalanced parentheses", first)
        return ''.join(parts)

    def _read_steps(self, token: Token) -> int:
        steps_token = self._next_or_none()
        steps = self._to_number(steps_token)
        limit = self.config.max_plot_steps
        if steps is None or not steps.is_integer() or not 1 <= steps <= limit:
            raise self._error(f"PLOT STEPS must be a whole number from 1 to {limit}",
                              steps_token or token)
        return int(steps)

    def _read_array(self, token: Token) -> List[float]:
        opener = self._next_or_none()
        if opener is None or opener.value != '[':
            raise self._error("PLOT AT [x1, x2, ...]", opener or token)

        values = []
        expect_value = True
        while True:
            item = self._next_or_none()
            if item is None:
                raise self._error("Missing closing ] in PLOT AT", token)
            if item.value == ']':
                if expect_value and values:
                    raise self._error("PLOT AT [x1, x2, ...]", item)
                return values
            if item.value == ',':
                if expect_value:
                    raise self._error("PLOT AT [x1, x2, ...]", item)
                expect_value = True
                continue

            number = self._to_number(item)
            if number is None:
                raise self._error(f"Expected number in PLOT AT, got {item.value}", item)
            values.append(number)
            expect_value = False

    def _read_rgb(self, shape: str, token: Token) -> Tuple[float, float, float]:
        return (self._read_number(shape, token),
                self._read_number(shape, token),
                self._read_number(shape, token))

    def _read_number(self, shape: str, token: Token) -> float:
        arg = self._next_or_none()
        value = self._to_number(arg)
        if value is None:
            self._check_not_keyword(arg, token)
            raise self._error(shape, arg or token)
        return value

    def _read_choice(self, choices: Tuple[str, ...], shape: str, token: Token) -> str:
        arg = self._next_or_none()
        value = arg.upper() if arg else ''
        if value not in choices:
            self._check_not_keyword(arg, token)
            raise self._error(shape, arg or token)
        return value

    def _check_not_keyword(self, arg: Optional[Token], token: Token):
        """A command keyword where an argument belongs cuts the command short."""
        if arg is not None and arg.upper() in self.KEYWORDS:
            raise self._error(f"Malformed command near {token.upper()}", arg)

    @classmethod
    def _to_number(cls, token: Optional[Token]) -> Optional[float]:
        """Parse a decimal literal like 12, -3.5 or .25."""
        if token is None or not cls.NUMBER_PATTERN.fullmatch(token.value):
            return None
        value = float(token.value)
        if not math.isfinite(value):
            return None
        return value

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _next(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _next_or_none(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self._next()
        return None

    @staticmethod
    def _at(command: Command, token: Token) -> Command:
        command.line_number = token.line_number
        return command

    @staticmethod
    def _error(message: str, token: Token) -> ParseError:
        return ParseError(message, token.line_number, token.char_start, token.char_end)
