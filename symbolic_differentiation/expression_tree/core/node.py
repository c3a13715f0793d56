import numbers
import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Mapping, Any
from .operators import (
  NodeKind, BINARY_OP_MAP, UNARY_OP_MAP,
  evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op,
  check_divisor, check_log_argument
)


class Node(ABC):
  """Immutable expression tree node.

  Every concrete node carries exactly the fields its kind needs: leaves have
  no children, functions have one operand, binary operators have a left and a
  right child. Fields are exposed through read-only properties, so a built
  tree can be shared freely between expressions.
  """

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  @property
  @abstractmethod
  def kind(self) -> NodeKind:
    pass

  def children(self) -> Tuple['Node', ...]:
    return ()

  @abstractmethod
  def evaluate(self, bindings: Mapping[str, Any]):
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def substitute(self, name: str, value: float) -> 'Node':
    """Return a tree with every variable `name` replaced by a constant.

    Subtrees that do not mention `name` are returned as-is.
    """

  @abstractmethod
  def differentiate(self, name: str) -> 'Node':
    """Return the unsimplified derivative tree with respect to `name`"""

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self.children())
    return self._size_cache

  @abstractmethod
  def _payload(self):
    pass

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = hash((self.kind, self._payload(), self.children()))
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    if self is other:
      return True
    return (self.kind == other.kind and self._payload() == other._payload()
            and self.children() == other.children())

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()!r})"


class ConstantNode(Node):
  __slots__ = ('_value',)

  def __init__(self, value: float):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
      raise TypeError(f"Constant value must be a real number, got {value!r}")
    value = float(value)
    # inf and nan have no literal form the parser reads back
    if not np.isfinite(value):
      raise ValueError(f"Constant value must be finite, got {value!r}")
    super().__init__()
    self._value = value

  @property
  def value(self) -> float:
    return self._value

  @property
  def kind(self) -> NodeKind:
    return NodeKind.CONSTANT

  def evaluate(self, bindings):
    return evaluate_constant(self._value)

  def to_string(self) -> str:
    text = np.format_float_positional(np.float64(self._value), trim='-')
    # Negative literals stay parenthesized so the text parses back to the same value
    if text.startswith('-'):
      return f"({text})"
    return text

  def substitute(self, name, value):
    return self

  def differentiate(self, name):
    return ConstantNode(0.0)

  def to_sympy(self):
    if self._value.is_integer():
      return sp.Integer(int(self._value))
    return sp.Float(self._value)

  def _payload(self):
    return self._value


class VariableNode(Node):
  __slots__ = ('_name',)

  def __init__(self, name: str):
    if not isinstance(name, str) or not name:
      raise ValueError(f"Variable name must be a non-empty string, got {name!r}")
    super().__init__()
    self._name = name

  @property
  def name(self) -> str:
    return self._name

  @property
  def kind(self) -> NodeKind:
    return NodeKind.VARIABLE

  def evaluate(self, bindings):
    return evaluate_variable(bindings, self._name)

  def to_string(self) -> str:
    return self._name

  def substitute(self, name, value):
    if self._name == name:
      return ConstantNode(value)
    return self

  def differentiate(self, name):
    return ConstantNode(1.0 if self._name == name else 0.0)

  def to_sympy(self):
    return sp.Symbol(self._name)

  def _payload(self):
    return self._name


class BinaryOpNode(Node):
  __slots__ = ('_operator', '_left', '_right')

  def __init__(self, operator: str, left: Node, right: Node):
    if operator not in BINARY_OP_MAP:
      raise ValueError(f"Unknown binary operator: {operator!r}")
    if not isinstance(left, Node) or not isinstance(right, Node):
      raise TypeError("Binary operands must be Node instances")
    super().__init__()
    self._operator = operator
    self._left = left
    self._right = right

  @property
  def operator(self) -> str:
    return self._operator

  @property
  def left(self) -> Node:
    return self._left

  @property
  def right(self) -> Node:
    return self._right

  @property
  def kind(self) -> NodeKind:
    return BINARY_OP_MAP[self._operator]

  def children(self):
    return (self._left, self._right)

  def evaluate(self, bindings):
    if self._operator == '/':
      # Divisor first, so a zero divisor fails before the dividend is touched
      right_val = self._right.evaluate(bindings)
      check_divisor(right_val)
      left_val = self._left.evaluate(bindings)
    else:
      left_val = self._left.evaluate(bindings)
      right_val = self._right.evaluate(bindings)
    return evaluate_binary_op(left_val, right_val, self._operator)

  def to_string(self) -> str:
    if self._operator == '^':
      return f"({self._left.to_string()}^{self._right.to_string()})"
    return f"({self._left.to_string()} {self._operator} {self._right.to_string()})"

  def substitute(self, name, value):
    left = self._left.substitute(name, value)
    right = self._right.substitute(name, value)
    if left is self._left and right is self._right:
      return self
    return BinaryOpNode(self._operator, left, right)

  def differentiate(self, name):
    u, v = self._left, self._right

    if self._operator in ('+', '-'):
      return BinaryOpNode(self._operator, u.differentiate(name), v.differentiate(name))

    elif self._operator == '*':
      # (uv)' = u'v + uv'
      return BinaryOpNode('+',
                          BinaryOpNode('*', u.differentiate(name), v),
                          BinaryOpNode('*', u, v.differentiate(name)))

    elif self._operator == '/':
      # (u/v)' = (u'v - uv') / v^2
      numerator = BinaryOpNode('-',
                               BinaryOpNode('*', u.differentiate(name), v),
                               BinaryOpNode('*', u, v.differentiate(name)))
      return BinaryOpNode('/', numerator, BinaryOpNode('^', v, ConstantNode(2.0)))

    elif isinstance(v, ConstantNode):
      # (u^c)' = c * u^(c-1) * u'
      c = v.value
      front = BinaryOpNode('*', ConstantNode(c), BinaryOpNode('^', u, ConstantNode(c - 1.0)))
      return BinaryOpNode('*', front, u.differentiate(name))

    else:
      # (u^v)' = u^v * (v' ln(u) + v u' / u)
      log_term = BinaryOpNode('*', v.differentiate(name), UnaryOpNode('ln', u))
      ratio_term = BinaryOpNode('/', BinaryOpNode('*', v, u.differentiate(name)), u)
      return BinaryOpNode('*', self, BinaryOpNode('+', log_term, ratio_term))

  def to_sympy(self):
    left = self._left.to_sympy()
    right = self._right.to_sympy()
    if self._operator == '+':
      return sp.Add(left, right)
    elif self._operator == '-':
      return sp.Add(left, sp.Mul(-1, right))
    elif self._operator == '*':
      return sp.Mul(left, right)
    elif self._operator == '/':
      return sp.Mul(left, sp.Pow(right, -1))
    return sp.Pow(left, right)

  def _payload(self):
    return self._operator


class UnaryOpNode(Node):
  __slots__ = ('_operator', '_operand')

  def __init__(self, operator: str, operand: Node):
    if operator not in UNARY_OP_MAP:
      raise ValueError(f"Unknown function: {operator!r}")
    if not isinstance(operand, Node):
      raise TypeError("Function operand must be a Node instance")
    super().__init__()
    self._operator = operator
    self._operand = operand

  @property
  def operator(self) -> str:
    return self._operator

  @property
  def operand(self) -> Node:
    return self._operand

  @property
  def kind(self) -> NodeKind:
    return UNARY_OP_MAP[self._operator]

  def children(self):
    return (self._operand,)

  def evaluate(self, bindings):
    operand_val = self._operand.evaluate(bindings)
    if self._operator == 'ln':
      check_log_argument(operand_val)
    return evaluate_unary_op(operand_val, self._operator)

  def to_string(self) -> str:
    return f"{self._operator}({self._operand.to_string()})"

  def substitute(self, name, value):
    operand = self._operand.substitute(name, value)
    if operand is self._operand:
      return self
    return UnaryOpNode(self._operator, operand)

  def differentiate(self, name):
    u = self._operand
    du = u.differentiate(name)
    if self._operator == 'sin':
      return BinaryOpNode('*', UnaryOpNode('cos', u), du)
    elif self._operator == 'cos':
      minus_sin = BinaryOpNode('*', ConstantNode(-1.0), UnaryOpNode('sin', u))
      return BinaryOpNode('*', minus_sin, du)
    elif self._operator == 'ln':
      return BinaryOpNode('/', du, u)
    return BinaryOpNode('*', UnaryOpNode('exp', u), du)

  def to_sympy(self):
    operand_sympy = self._operand.to_sympy()
    if self._operator == 'sin':
      return sp.sin(operand_sympy)
    elif self._operator == 'cos':
      return sp.cos(operand_sympy)
    elif self._operator == 'ln':
      return sp.log(operand_sympy)
    return sp.exp(operand_sympy)

  def _payload(self):
    return self._operator
