"""
Plot expression evaluator tests
"""

import math
import pytest

from utils.errors import ExpressionError
from utils.expressions import ExpressionEvaluator, BinaryOp, UnaryOp, Number, Variable


@pytest.fixture
def evaluator():
    return ExpressionEvaluator()


@pytest.mark.parametrize("expression, x, expected", [
    ("x", 3, 3),
    ("x^2", -2, 4),
    ("2*x + 1", 4, 9),
    ("1 + 2 * 3", 0, 7),
    ("(1 + 2) * 3", 0, 9),
    ("10 / 4", 0, 2.5),
    ("2^3^2", 0, 512),
    ("-x^2", 3, -9),
    ("--x", 2, 2),
    ("sqrt(x)", 16, 4),
    ("abs(x)", -5, 5),
    ("log(x)", 1000, 3),
    ("ln(e)", 0, 1),
    ("floor(x) + ceil(x)", 1.5, 3),
    ("round(x)", 2.5, 3),
    ("round(x)", -2.5, -2),
    ("min(x, 1, 2)", 5, 1),
    ("max(x, 1)", -5, 1),
    ("SIN(PI/2)", 0, 1),
    ("X * 2", 4, 8),
])
def test_evaluate(evaluator, expression, x, expected):
    assert evaluator.evaluate(expression, x) == pytest.approx(expected)


@pytest.mark.parametrize("expression, x", [
    ("sqrt(x)", -1),
    ("1/x", 0),
    ("ln(x)", 0),
    ("asin(x)", 2),
    ("exp(x)", 10000),
    ("x^0.5", -4),
])
def test_undefined_points(evaluator, expression, x):
    assert evaluator.evaluate(expression, x) is None


@pytest.mark.parametrize("expression", [
    "", "x +", "2 x", "foo(x)", "y", "sin x", "(x", "sin(x, 1)", "x $ 2",
    "__import__('os')", "max(x)", "min(1)",
])
def test_malformed_expressions(evaluator, expression):
    assert not evaluator.is_valid(expression)
    assert evaluator.evaluate(expression, 1) is None
    with pytest.raises(ExpressionError):
        evaluator.parse(expression)


def test_parse_tree_shape(evaluator):
    tree = evaluator.parse("-x^2")
    assert tree == UnaryOp('-', BinaryOp('^', Variable(), Number(2.0)))


def test_constants(evaluator):
    assert evaluator.evaluate("pi", 0) == pytest.approx(math.pi)
    assert evaluator.evaluate("e", 0) == pytest.approx(math.e)


def test_results_are_finite_floats(evaluator):
    value = evaluator.evaluate("floor(x)", 2.7)
    assert isinstance(value, float)
    assert value == 2.0


def test_min_max_need_two_arguments(evaluator):
    assert evaluator.evaluate("max(x, 0)", -3) == 0
    assert evaluator.evaluate("min(x, 0, -1)", 5) == -1


@pytest.mark.parametrize("expression", [
    "(" * 3000 + "x" + ")" * 3000,
    "-" * 3000 + "x",
    "2^" * 3000 + "x",
    "sqrt(" * 3000 + "x" + ")" * 3000,
])
def test_deep_nesting_is_rejected(evaluator, expression):
    assert evaluator.evaluate(expression, 1.0) is None
    with pytest.raises(ExpressionError):
        evaluator.parse(expression)


def test_long_operator_chain_never_raises(evaluator):
    expression = "+".join(["x"] * 5000)
    assert evaluator.evaluate(expression, 1.0) in (5000.0, None)


def test_moderate_nesting_still_works(evaluator):
    assert evaluator.evaluate("(" * 50 + "x" + ")" * 50, 2.0) == 2.0
