import numpy as np
from enum import IntEnum

from ...errors import EvalError

# Divisors with a smaller magnitude are treated as zero
DIVISION_EPSILON = 1e-15

# Whole-string identifiers the parser reads as constants
NAMED_CONSTANTS = {'pi': float(np.pi), 'e': float(np.e)}


class NodeKind(IntEnum):
  # Leaves
  CONSTANT = 0
  VARIABLE = 1
  # Binary ops
  ADD = 2
  SUB = 3
  MUL = 4
  DIV = 5
  POW = 6
  # Unary ops
  SIN = 7
  COS = 8
  LN = 9
  EXP = 10


# Mapping dictionaries
BINARY_OP_MAP = {'+': NodeKind.ADD, '-': NodeKind.SUB, '*': NodeKind.MUL, '/': NodeKind.DIV, '^': NodeKind.POW}
UNARY_OP_MAP = {'sin': NodeKind.SIN, 'cos': NodeKind.COS, 'ln': NodeKind.LN, 'exp': NodeKind.EXP}

LEAF_KINDS = frozenset({NodeKind.CONSTANT, NodeKind.VARIABLE})
BINARY_KINDS = frozenset(BINARY_OP_MAP.values())
UNARY_KINDS = frozenset(UNARY_OP_MAP.values())


def evaluate_variable(bindings, name):
  try:
    value = bindings[name]
  except KeyError:
    raise EvalError(f"Missing value for variable: {name}") from None
  try:
    return np.asarray(value, dtype=np.float64)
  except (TypeError, ValueError):
    raise EvalError(f"Value for variable {name} is not numeric: {value!r}") from None


def evaluate_constant(value):
  return np.float64(value)


def check_divisor(right_val):
  if np.any(np.abs(right_val) < DIVISION_EPSILON):
    raise EvalError("Division by zero")


def check_log_argument(operand_val):
  if np.any(operand_val <= 0):
    raise EvalError("ln domain error: argument <= 0")


def evaluate_binary_op(left_val, right_val, operator):
  """Apply a binary operator; '/' expects check_divisor to have passed"""
  if operator == '+':
    return np.add(left_val, right_val)
  elif operator == '-':
    return np.subtract(left_val, right_val)
  elif operator == '*':
    return np.multiply(left_val, right_val)
  elif operator == '/':
    return np.divide(left_val, right_val)
  elif operator == '^':
    return np.power(left_val, right_val)
  raise ValueError(f"Unknown binary operator: {operator!r}")


def evaluate_unary_op(operand_val, operator):
  """Apply a unary function; 'ln' expects check_log_argument to have passed"""
  if operator == 'sin':
    return np.sin(operand_val)
  elif operator == 'cos':
    return np.cos(operand_val)
  elif operator == 'ln':
    return np.log(operand_val)
  elif operator == 'exp':
    return np.exp(operand_val)
  raise ValueError(f"Unknown unary operator: {operator!r}")
