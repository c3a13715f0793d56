"""Exceptions raised by the expression core."""


class ExpressionError(Exception):
  """Base class for every error the expression core raises"""


class ParseError(ExpressionError):
  """Malformed expression text"""


class EvalError(ExpressionError):
  """Numeric evaluation failed (unbound variable, domain error, empty tree)"""
