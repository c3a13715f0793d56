# Python

"""Symbolic Differentiation Package

Parse infix expressions, evaluate them under variable bindings, substitute
constants for variables and differentiate symbolically.
"""

from .expression_tree import (
  Expression, Parser, Node, ConstantNode, VariableNode,
  BinaryOpNode, UnaryOpNode, NodeKind,
  sin, cos, ln, exp,
  parse, evaluate, substitute, differentiate, to_string
)
from .errors import ExpressionError, ParseError, EvalError
from .logging_system import LogLevel, configure_logging, set_log_level, get_logger

__version__ = "0.1.0"
__all__ = [
  "Expression", "Parser", "Node", "ConstantNode", "VariableNode",
  "BinaryOpNode", "UnaryOpNode", "NodeKind",
  "sin", "cos", "ln", "exp",
  "parse", "evaluate", "substitute", "differentiate", "to_string",
  "ExpressionError", "ParseError", "EvalError",
  "LogLevel", "configure_logging", "set_log_level", "get_logger"
]
