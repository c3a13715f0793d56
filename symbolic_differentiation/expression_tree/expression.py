import numbers
import numpy as np
import sympy as sp
from typing import Optional, Mapping, Any, Union, List

from .core.node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .parser import Parser
from .utils.tree_utils import calculate_tree_depth, get_variable_names
from .utils.sympy_utils import latex_representation
from ..errors import EvalError
from ..logging_system import LogLevel, log_debug, log_warning


class Expression:
  """Owns the root of an immutable expression tree.

  An Expression is built from a number (constant), a string (variable name),
  a Node, by combining expressions with + - * / ^ (``**`` works too), through
  sin/cos/ln/exp, or with Expression.parse. An Expression with no root is
  empty: it prints as '' and cannot be evaluated.
  """

  __slots__ = ('_root', '_string_cache')

  def __init__(self, root: Union[Node, float, str, None] = None):
    if root is not None and not isinstance(root, Node):
      root = _to_node(root)
    self._root: Optional[Node] = root
    self._string_cache: Optional[str] = None

  @classmethod
  def parse(cls, text: str, **parser_options) -> 'Expression':
    """Parse infix text; raises ParseError on malformed input"""
    return cls(Parser(**parser_options).parse(text))

  @property
  def root(self) -> Optional[Node]:
    return self._root

  def is_valid(self) -> bool:
    return self._root is not None

  def evaluate(self, bindings: Optional[Mapping[str, Any]] = None):
    """Evaluate under `bindings` (name -> number or array).

    Returns a float for scalar bindings and an ndarray when any binding used
    is an array. Raises EvalError for unbound variables, division by (near)
    zero, a non-positive ln argument, or an empty expression.
    """
    if self._root is None:
      raise EvalError("Cannot evaluate an empty node")
    if bindings is None:
      bindings = {}
    try:
      # IEEE results (nan, inf) are kept; domain errors are raised explicitly
      with np.errstate(all='ignore'):
        result = self._root.evaluate(bindings)
    except EvalError as e:
      log_debug(f"evaluation of {self.to_string()} failed: {e}", LogLevel.DETAILED)
      raise
    except RecursionError:
      raise EvalError("expression nested too deeply to evaluate") from None

    if not np.all(np.isfinite(result)):
      log_warning(f"evaluation of {self.to_string()} produced a non-finite result")
    if np.ndim(result) == 0:
      return float(result)
    return np.asarray(result, dtype=np.float64)

  def substitute(self, name: str, value: float) -> 'Expression':
    """Replace every variable `name` with the constant `value`"""
    if self._root is None:
      return Expression()
    return Expression(self._root.substitute(name, value))

  def differentiate(self, name: str, order: int = 1) -> 'Expression':
    """Unsimplified derivative with respect to `name`, applied `order` times"""
    if order < 1:
      raise ValueError(f"Derivative order must be at least 1, got {order}")
    node = self._root
    for _ in range(order):
      if node is None:
        break
      node = node.differentiate(name)
    return Expression(node)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = '' if self._root is None else self._root.to_string()
    return self._string_cache

  def copy(self) -> 'Expression':
    # Trees are immutable, so the root can be shared
    return Expression(self._root)

  def size(self) -> int:
    return 0 if self._root is None else self._root.size()

  def depth(self) -> int:
    return 0 if self._root is None else calculate_tree_depth(self._root)

  def variables(self) -> List[str]:
    """Sorted names of the variables in the tree"""
    return [] if self._root is None else get_variable_names(self._root)

  def to_sympy(self) -> sp.Expr:
    if self._root is None:
      raise ValueError("Cannot convert an empty expression to SymPy")
    return self._root.to_sympy()

  def to_latex(self) -> str:
    return latex_representation(self)

  # ------------------------------------------------------------------ operators

  def _combine(self, operator: str, other, reflected: bool = False) -> 'Expression':
    try:
      other_node = _to_node(other)
    except TypeError:
      return NotImplemented
    if self._root is None:
      raise ValueError("Cannot combine an empty expression")
    if reflected:
      return Expression(BinaryOpNode(operator, other_node, self._root))
    return Expression(BinaryOpNode(operator, self._root, other_node))

  def __add__(self, other):
    return self._combine('+', other)

  def __radd__(self, other):
    return self._combine('+', other, reflected=True)

  def __sub__(self, other):
    return self._combine('-', other)

  def __rsub__(self, other):
    return self._combine('-', other, reflected=True)

  def __mul__(self, other):
    return self._combine('*', other)

  def __rmul__(self, other):
    return self._combine('*', other, reflected=True)

  def __truediv__(self, other):
    return self._combine('/', other)

  def __rtruediv__(self, other):
    return self._combine('/', other, reflected=True)

  def __pow__(self, other):
    return self._combine('^', other)

  def __rpow__(self, other):
    return self._combine('^', other, reflected=True)

  # a ^ b builds a power, matching the printed and parsed notation
  __xor__ = __pow__
  __rxor__ = __rpow__

  def __neg__(self):
    return self._combine('-', 0.0, reflected=True)

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"

  def __hash__(self) -> int:
    return hash(self._root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return NotImplemented
    return self._root == other._root


def _to_node(value) -> Node:
  if isinstance(value, Expression):
    if value.root is None:
      raise ValueError("Cannot combine an empty expression")
    return value.root
  if isinstance(value, Node):
    return value
  if isinstance(value, str):
    return VariableNode(value)
  if isinstance(value, numbers.Real) and not isinstance(value, bool):
    return ConstantNode(value)
  raise TypeError(f"Cannot build an expression from {type(value).__name__}")


def _apply(func_name: str, arg) -> Expression:
  return Expression(UnaryOpNode(func_name, _to_node(arg)))


def sin(arg) -> Expression:
  return _apply('sin', arg)


def cos(arg) -> Expression:
  return _apply('cos', arg)


def ln(arg) -> Expression:
  return _apply('ln', arg)


def exp(arg) -> Expression:
  return _apply('exp', arg)


# Function forms of the Expression contract

def parse(text: str, **parser_options) -> Expression:
  return Expression.parse(text, **parser_options)


def evaluate(expression: Expression, bindings: Optional[Mapping[str, Any]] = None):
  return expression.evaluate(bindings)


def substitute(expression: Expression, name: str, value: float) -> Expression:
  return expression.substitute(name, value)


def differentiate(expression: Expression, name: str, order: int = 1) -> Expression:
  return expression.differentiate(name, order)


def to_string(expression: Expression) -> str:
  return expression.to_string()
