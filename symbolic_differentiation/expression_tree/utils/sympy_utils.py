import sympy as sp
from typing import Union


def to_sympy_expression(expression) -> sp.Expr:
  """SymPy form of an Expression or Node (SymPy applies its own canonical ordering)"""
  return expression.to_sympy()


def latex_representation(expression) -> str:
  """Get LaTeX representation of the expression"""
  return sp.latex(to_sympy_expression(expression))


def sympy_derivative(expression, name: str) -> sp.Expr:
  """Reference derivative computed by SymPy, for cross-checking our trees"""
  return sp.diff(to_sympy_expression(expression), sp.Symbol(name))


def are_equivalent(first: Union[sp.Expr, object], second: Union[sp.Expr, object]) -> bool:
  """
  Symbolic equality check.

  Accepts SymPy expressions or anything with ``to_sympy``. Returns True when
  SymPy can reduce the difference to zero.
  """
  lhs = first if isinstance(first, sp.Basic) else to_sympy_expression(first)
  rhs = second if isinstance(second, sp.Basic) else to_sympy_expression(second)
  return sp.simplify(lhs - rhs) == 0
