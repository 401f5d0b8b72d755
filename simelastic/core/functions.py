"""Scalar, vector and symmetric tensor functions of space and time.

Functions are evaluated at a point X (sequence of up to three coordinates)
and a time t. Expression functions are written in terms of x, y, z and t and
may use the numpy math functions listed in EXPRESSION_FUNCTIONS and the
constants in EXPRESSION_CONSTANTS.

Example usage:
    >>> f = parse_real_func("linear", 2.0)
    >>> f([0.0, 0.0], t=3.0)
    6.0
    >>> g = parse_vec_func("0 | -9.81*rho", "expression")  # doctest: +SKIP
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from simelastic.config.defaults import EXPRESSION_COMPONENT_SEPARATOR
from simelastic.config.enums import VecFuncType
from simelastic.core.errors import InputError

logger = logging.getLogger(__name__)

EXPRESSION_VARIABLES = ("x", "y", "z", "t")

EXPRESSION_FUNCTIONS = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
    "atan2": np.arctan2,
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    "exp": np.exp,
    "log": np.log,
    "log10": np.log10,
    "sqrt": np.sqrt,
    "abs": np.abs,
    "min": np.minimum,
    "max": np.maximum,
}

EXPRESSION_CONSTANTS = {
    "pi": np.pi,
    "e": np.e,
}

# Operators allowed in expressions, mapped to the numpy ufuncs evaluating them
_BINARY_OPS = {
    ast.Add: np.add,
    ast.Sub: np.subtract,
    ast.Mult: np.multiply,
    ast.Div: np.divide,
    ast.Mod: np.mod,
    ast.Pow: np.power,
}

_UNARY_OPS = {
    ast.UAdd: np.positive,
    ast.USub: np.negative,
    ast.Not: np.logical_not,
}

_COMPARE_OPS = {
    ast.Lt: np.less,
    ast.LtE: np.less_equal,
    ast.Gt: np.greater,
    ast.GtE: np.greater_equal,
    ast.Eq: np.equal,
    ast.NotEq: np.not_equal,
}


def _coordinates(X: Sequence[float]) -> tuple[float, float, float]:
    coords = [float(c) for c in X][:3]
    coords += [0.0] * (3 - len(coords))
    return coords[0], coords[1], coords[2]


def _check_node(node: ast.AST, expression: str) -> None:
    """Reject any syntax the expression evaluator does not handle.

    Raises:
        InputError: On unsupported syntax, names or constants
    """
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise InputError(f"Non-numeric constant in expression '{expression}'")
        try:
            float(node.value)
        except OverflowError as e:
            raise InputError(f"Constant out of range in expression '{expression}'") from e
        return

    if isinstance(node, ast.Name):
        if node.id not in EXPRESSION_VARIABLES and node.id not in EXPRESSION_CONSTANTS:
            raise InputError(f"Unknown name '{node.id}' in expression '{expression}'")
        return

    if isinstance(node, ast.BinOp):
        if type(node.op) not in _BINARY_OPS:
            raise InputError(f"Unsupported operator in expression '{expression}'")
        if isinstance(node.op, ast.Pow) and any(
            isinstance(n, ast.BinOp) and isinstance(n.op, ast.Pow) for n in ast.walk(node.right)
        ):
            raise InputError(f"Nested exponents are not supported: '{expression}'")
        children = [node.left, node.right]
    elif isinstance(node, ast.UnaryOp):
        if type(node.op) not in _UNARY_OPS:
            raise InputError(f"Unsupported operator in expression '{expression}'")
        children = [node.operand]
    elif isinstance(node, ast.Compare):
        if any(type(op) not in _COMPARE_OPS for op in node.ops):
            raise InputError(f"Unsupported comparison in expression '{expression}'")
        children = [node.left, *node.comparators]
    elif isinstance(node, ast.BoolOp):
        children = node.values
    elif isinstance(node, ast.IfExp):
        children = [node.test, node.body, node.orelse]
    elif isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in EXPRESSION_FUNCTIONS:
            raise InputError(f"Unknown function in expression '{expression}'")
        if node.keywords:
            raise InputError(f"Keyword arguments are not allowed: '{expression}'")
        children = node.args
    else:
        raise InputError(f"Unsupported syntax '{type(node).__name__}' in expression '{expression}'")

    for child in children:
        _check_node(child, expression)


def _evaluate(node: ast.AST, scope: dict[str, float]):
    """Evaluate an expression tree accepted by _check_node."""
    if isinstance(node, ast.Constant):
        return float(node.value)
    if isinstance(node, ast.Name):
        return scope[node.id]
    if isinstance(node, ast.BinOp):
        return _BINARY_OPS[type(node.op)](_evaluate(node.left, scope), _evaluate(node.right, scope))
    if isinstance(node, ast.UnaryOp):
        return _UNARY_OPS[type(node.op)](_evaluate(node.operand, scope))
    if isinstance(node, ast.Compare):
        left = _evaluate(node.left, scope)
        for op, comparator in zip(node.ops, node.comparators):
            right = _evaluate(comparator, scope)
            if not _COMPARE_OPS[type(op)](left, right):
                return 0.0
            left = right
        return 1.0
    if isinstance(node, ast.BoolOp):
        values = (bool(_evaluate(v, scope)) for v in node.values)
        if isinstance(node.op, ast.And):
            return float(all(values))
        return float(any(values))
    if isinstance(node, ast.IfExp):
        if _evaluate(node.test, scope):
            return _evaluate(node.body, scope)
        return _evaluate(node.orelse, scope)
    if isinstance(node, ast.Call):
        return EXPRESSION_FUNCTIONS[node.func.id](*(_evaluate(a, scope) for a in node.args))
    raise TypeError(f"Cannot evaluate {type(node).__name__}")


# =============================================================================
# Scalar functions
# =============================================================================


@dataclass
class RealFunc:
    """Scalar function f(X, t). The base class is the constant function."""

    value: float = 0.0

    def __call__(self, X: Sequence[float], t: float = 0.0) -> float:
        return self.value

    @property
    def is_constant(self) -> bool:
        return True


@dataclass
class LinearTimeFunc(RealFunc):
    """value * t"""

    def __call__(self, X: Sequence[float], t: float = 0.0) -> float:
        return self.value * t

    @property
    def is_constant(self) -> bool:
        return False


@dataclass
class RampTimeFunc(RealFunc):
    """Linear ramp from 0 at t=0 to value at t=t_ramp, constant afterwards."""

    t_ramp: float = 1.0

    def __post_init__(self):
        if self.t_ramp <= 0:
            raise ValueError(f"Ramp time must be positive: t_ramp={self.t_ramp}")

    def __call__(self, X: Sequence[float], t: float = 0.0) -> float:
        return self.value * min(t / self.t_ramp, 1.0)

    @property
    def is_constant(self) -> bool:
        return False


@dataclass
class SineTimeFunc(RealFunc):
    """value * sin(omega * t)"""

    omega: float = 1.0

    def __call__(self, X: Sequence[float], t: float = 0.0) -> float:
        return self.value * float(np.sin(self.omega * t))

    @property
    def is_constant(self) -> bool:
        return False


@dataclass
class StepTimeFunc(RealFunc):
    """value for t >= t_step, zero before."""

    t_step: float = 0.0

    def __call__(self, X: Sequence[float], t: float = 0.0) -> float:
        return self.value if t >= self.t_step else 0.0

    @property
    def is_constant(self) -> bool:
        return False


@dataclass
class ExpressionFunc(RealFunc):
    """scale * <expression in x, y, z, t>.

    The expression is parsed and checked once, at construction, and then
    evaluated by walking its syntax tree with numpy ufuncs. Overflow
    evaluates to inf.
    """

    expression: str = "0"
    scale: float = 1.0
    _tree: object = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        source = self.expression.strip().replace("^", "**")
        try:
            tree = ast.parse(source, mode="eval")
        except SyntaxError as e:
            raise InputError(f"Invalid expression '{self.expression}': {e.msg}") from e

        _check_node(tree.body, self.expression)
        self._tree = tree.body

    def __call__(self, X: Sequence[float], t: float = 0.0) -> float:
        x, y, z = _coordinates(X)
        scope = dict(EXPRESSION_CONSTANTS, x=x, y=y, z=z, t=t)
        with np.errstate(over="ignore"):
            return self.scale * float(_evaluate(self._tree, scope))

    @property
    def is_constant(self) -> bool:
        return False


def parse_real_func(spec: str, scale: float = 1.0) -> RealFunc:
    """Create a scalar function from its textual specification.

    Recognised forms (keywords are case-insensitive):
        linear [slope]   -> scale * slope * t    (slope defaults to 1)
        ramp T           -> scale * min(t/T, 1)
        sin omega        -> scale * sin(omega*t)
        step t0          -> scale for t >= t0
        <expression>     -> scale * expression(x, y, z, t)

    Args:
        spec: Function specification
        scale: Amplitude applied to the function

    Raises:
        InputError: If the specification cannot be parsed

    """
    tokens = spec.split()
    if not tokens:
        raise InputError("Empty function specification")

    name = tokens[0].lower()
    args = tokens[1:]

    def arg(i: int, default: float | None = None) -> float:
        if i < len(args):
            try:
                return float(args[i])
            except ValueError as e:
                raise InputError(f"Invalid argument '{args[i]}' in function '{spec}'") from e
        if default is None:
            raise InputError(f"Missing argument in function '{spec}'")
        return default

    if name == "linear":
        return LinearTimeFunc(scale * arg(0, 1.0))
    if name == "ramp":
        try:
            return RampTimeFunc(scale, t_ramp=arg(0))
        except ValueError as e:
            raise InputError(str(e)) from e
    if name in ("sin", "sinus"):
        return SineTimeFunc(scale, omega=arg(0))
    if name == "step":
        return StepTimeFunc(scale, t_step=arg(0))

    return ExpressionFunc(expression=spec, scale=scale)


# =============================================================================
# Vector functions
# =============================================================================


class VecFunc:
    """Vector function v(X, t)."""

    ncmp: int = 0

    def __call__(self, X: Sequence[float], t: float = 0.0) -> np.ndarray:
        raise NotImplementedError


class ConstantVecFunc(VecFunc):
    def __init__(self, values: Sequence[float]):
        self.values = np.asarray(values, dtype=float)
        self.ncmp = len(self.values)

    def __call__(self, X: Sequence[float], t: float = 0.0) -> np.ndarray:
        return self.values.copy()


class ExpressionVecFunc(VecFunc):
    def __init__(self, components: Sequence[str]):
        self.components = [ExpressionFunc(expression=c) for c in components]
        self.ncmp = len(self.components)

    def __call__(self, X: Sequence[float], t: float = 0.0) -> np.ndarray:
        return np.array([f(X, t) for f in self.components])


def _split_components(text: str) -> list[str]:
    comps = [c.strip() for c in text.strip().split(EXPRESSION_COMPONENT_SEPARATOR)]
    if not comps or any(not c for c in comps):
        raise InputError(f"Empty component in function '{text.strip()}'")
    return comps


def parse_vec_func(text: str, func_type: str | VecFuncType | None = None) -> VecFunc:
    """Create a vector function from a function body.

    Args:
        text: Function body
        func_type: 'constant' or 'expression' (default)

    Raises:
        InputError: If the type is unknown or the body cannot be parsed

    """
    if func_type is None or func_type == "":
        func_type = VecFuncType.EXPRESSION
    try:
        func_type = VecFuncType(func_type.lower() if isinstance(func_type, str) else func_type)
    except ValueError as e:
        raise InputError(f"Unknown vector function type '{func_type}'") from e

    if func_type is VecFuncType.CONSTANT:
        try:
            values = [float(v) for v in text.split()]
        except ValueError as e:
            raise InputError(f"Invalid constant vector '{text.strip()}'") from e
        if not values:
            raise InputError("Empty constant vector")
        return ConstantVecFunc(values)

    return ExpressionVecFunc(_split_components(text))


# =============================================================================
# Symmetric tensor functions
# =============================================================================


class STensorFunc:
    """Symmetric tensor function from Voigt-ordered expression components.

    2D: s11 | s22 | s12
    3D: s11 | s22 | s33 | s12 | s23 | s13
    """

    _VOIGT = {
        3: (2, [(0, 0), (1, 1), (0, 1)]),
        6: (3, [(0, 0), (1, 1), (2, 2), (0, 1), (1, 2), (0, 2)]),
    }

    def __init__(self, components: Sequence[str]):
        if len(components) not in self._VOIGT:
            raise InputError(
                f"Symmetric tensor needs 3 (2D) or 6 (3D) components, got {len(components)}"
            )
        self.components = [ExpressionFunc(expression=c) for c in components]
        self.nsd, self._index = self._VOIGT[len(components)]

    def __call__(self, X: Sequence[float], t: float = 0.0) -> np.ndarray:
        sigma = np.zeros((self.nsd, self.nsd))
        for f, (i, j) in zip(self.components, self._index):
            sigma[i, j] = sigma[j, i] = f(X, t)
        return sigma


def parse_stensor_func(text: str) -> STensorFunc:
    return STensorFunc(_split_components(text))
