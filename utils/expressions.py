"""
Mathematical expression evaluator for PLOT.
Small recursive-descent parser over a fixed grammar; nothing is ever handed
to eval(), so expressions cannot reach the host.
"""
import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union
from utils.errors import ExpressionError


@dataclass
class Number:
    value: float


@dataclass
class Variable:
    pass


@dataclass
class UnaryOp:
    op: str
    operand: 'Node'


@dataclass
class BinaryOp:
    op: str
    left: 'Node'
    right: 'Node'


@dataclass
class Call:
    name: str
    args: List['Node']


Node = Union[Number, Variable, UnaryOp, BinaryOp, Call]


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


class ExpressionEvaluator:
    """Evaluates plot expressions such as ``sin(x)*3 + x^2`` at a given x."""

    TOKEN_PATTERN = re.compile(
        r'\s*(?:(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'
        r'|(?P<name>[A-Za-z_][A-Za-z_0-9]*)'
        r'|(?P<op>[-+*/^(),]))'
    )

    # name -> (callable, min args, max args)
    FUNCTIONS = {
        'sin': (math.sin, 1, 1),
        'cos': (math.cos, 1, 1),
        'tan': (math.tan, 1, 1),
        'asin': (math.asin, 1, 1),
        'acos': (math.acos, 1, 1),
        'atan': (math.atan, 1, 1),
        'log': (math.log10, 1, 1),
        'ln': (math.log, 1, 1),
        'sqrt': (math.sqrt, 1, 1),
        'abs': (abs, 1, 1),
        'exp': (math.exp, 1, 1),
        'floor': (math.floor, 1, 1),
        'ceil': (math.ceil, 1, 1),
        'round': (_round_half_up, 1, 1),
        'min': (min, 2, None),
        'max': (max, 2, None),
    }

    MAX_DEPTH = 100

    CONSTANTS = {
        'pi': math.pi,
        'e': math.e,
    }

    def __init__(self):
        self._cache: Dict[str, Union[Node, ExpressionError]] = {}
        self._tokens: List[Tuple[str, str]] = []
        self._pos = 0
        self._depth = 0

    def evaluate(self, expression: str, x: float) -> Optional[float]:
        """
        Evaluate an expression at x.

        Args:
            expression: Expression text like "sqrt(x) + 2^x"
            x: Value bound to the variable x

        Returns:
            A finite float, or None when the expression is undefined at x
            (bad syntax, domain error, division by zero, overflow, NaN).
        """
        tree = self._cached_parse(expression)
        if isinstance(tree, ExpressionError):
            return None

        try:
            result = float(self._eval(tree, float(x)))
        except (ValueError, ZeroDivisionError, OverflowError, TypeError, RecursionError):
            # RecursionError: very long operator chains build very deep trees
            return None

        if not math.isfinite(result):
            return None
        return result

    def is_valid(self, expression: str) -> bool:
        """Check whether an expression parses."""
        return not isinstance(self._cached_parse(expression), ExpressionError)

    def parse(self, expression: str) -> Node:
        """Parse an expression into a tree. Raises ExpressionError."""
        self._tokens = self._tokenize(expression)
        self._pos = 0
        self._depth = 0
        if not self._tokens:
            raise ExpressionError("Empty expression")

        tree = self._parse_sum()
        if self._pos < len(self._tokens):
            raise ExpressionError(f"Unexpected '{self._tokens[self._pos][1]}' in expression")
        return tree

    def _cached_parse(self, expression: str) -> Union[Node, ExpressionError]:
        if expression not in self._cache:
            try:
                self._cache[expression] = self.parse(expression)
            except ExpressionError as e:
                self._cache[expression] = e
        return self._cache[expression]

    def _tokenize(self, expression: str) -> List[Tuple[str, str]]:
        tokens = []
        pos = 0
        text = expression.rstrip()
        while pos < len(text):
            match = self.TOKEN_PATTERN.match(text, pos)
            if not match:
                raise ExpressionError(f"Unexpected character '{text[pos]}' in expression")
            kind = match.lastgroup
            tokens.append((kind, match.group(kind)))
            pos = match.end()
        return tokens

    # Grammar:
    #   sum     := product (('+' | '-') product)*
    #   product := unary (('*' | '/') unary)*
    #   unary   := ('+' | '-') unary | power
    #   power   := atom ('^' unary)?
    #   atom    := number | name | name '(' args ')' | '(' sum ')'

    def _peek(self) -> Optional[Tuple[str, str]]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _accept(self, value: str) -> bool:
        token = self._peek()
        if token and token[0] == 'op' and token[1] == value:
            self._pos += 1
            return True
        return False

    def _expect(self, value: str):
        if not self._accept(value):
            token = self._peek()
            found = token[1] if token else 'end of expression'
            raise ExpressionError(f"Expected '{value}' but found '{found}'")

    def _parse_sum(self) -> Node:
        node = self._parse_product()
        while True:
            if self._accept('+'):
                node = BinaryOp('+', node, self._parse_product())
            elif self._accept('-'):
                node = BinaryOp('-', node, self._parse_product())
            else:
                return node

    def _parse_product(self) -> Node:
        node = self._parse_unary()
        while True:
            if self._accept('*'):
                node = BinaryOp('*', node, self._parse_unary())
            elif self._accept('/'):
                node = BinaryOp('/', node, self._parse_unary())
            else:
                return node

    def _parse_unary(self) -> Node:
        # Every nested parenthesis, argument, sign and exponent passes through here
        self._depth += 1
        if self._depth > self.MAX_DEPTH:
            raise ExpressionError("Expression is nested too deeply")
        try:
            if self._accept('-'):
                return UnaryOp('-', self._parse_unary())
            if self._accept('+'):
                return self._parse_unary()
            return self._parse_power()
        finally:
            self._depth -= 1

    def _parse_power(self) -> Node:
        base = self._parse_atom()
        if self._accept('^'):
            # Right-associative: 2^3^2 == 2^(3^2)
            return BinaryOp('^', base, self._parse_unary())
        return base

    def _parse_atom(self) -> Node:
        token = self._peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression")
        kind, value = token

        if kind == 'number':
            self._pos += 1
            return Number(float(value))

        if kind == 'name':
            self._pos += 1
            name = value.lower()
            if name == 'x':
                return Variable()
            if name in self.CONSTANTS:
                return Number(self.CONSTANTS[name])
            if name in self.FUNCTIONS:
                return self._parse_call(name)
            raise ExpressionError(f"Unknown name '{value}' in expression")

        if self._accept('('):
            node = self._parse_sum()
            self._expect(')')
            return node

        raise ExpressionError(f"Unexpected '{value}' in expression")

    def _parse_call(self, name: str) -> Call:
        self._expect('(')
        args = [self._parse_sum()]
        while self._accept(','):
            args.append(self._parse_sum())
        self._expect(')')

        _, min_args, max_args = self.FUNCTIONS[name]
        if len(args) < min_args or (max_args is not None and len(args) > max_args):
            raise ExpressionError(f"Wrong number of arguments for {name}")
        return Call(name, args)

    def _eval(self, node: Node, x: float) -> float:
        if isinstance(node, Number):
            return node.value
        if isinstance(node, Variable):
            return x
        if isinstance(node, UnaryOp):
            return -self._eval(node.operand, x)
        if isinstance(node, BinaryOp):
            left = self._eval(node.left, x)
            right = self._eval(node.right, x)
            if node.op == '+':
                return left + right
            if node.op == '-':
                return left - right
            if node.op == '*':
                return left * right
            if node.op == '/':
                return left / right
            return math.pow(left, right)
        if isinstance(node, Call):
            func = self.FUNCTIONS[node.name][0]
            return func(*[self._eval(arg, x) for arg in node.args])
        raise ExpressionError(f"Unknown expression node {node!r}")
