"""Expression Tree Module

Immutable expression trees with parsing, evaluation, substitution,
symbolic differentiation and printing.
"""

from .expression import (
    Expression, sin, cos, ln, exp,
    parse, evaluate, substitute, differentiate, to_string
)
from .parser import Parser
from .core.node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .core.operators import NodeKind, BINARY_OP_MAP, UNARY_OP_MAP, NAMED_CONSTANTS, DIVISION_EPSILON
from .utils import latex_representation, sympy_derivative, are_equivalent, validate_tree_structure

__all__ = [
    "Expression", "sin", "cos", "ln", "exp",
    "parse", "evaluate", "substitute", "differentiate", "to_string",
    "Parser",
    "Node", "ConstantNode", "VariableNode", "BinaryOpNode", "UnaryOpNode",
    "NodeKind", "BINARY_OP_MAP", "UNARY_OP_MAP", "NAMED_CONSTANTS", "DIVISION_EPSILON",
    "latex_representation", "sympy_derivative", "are_equivalent", "validate_tree_structure"
]
