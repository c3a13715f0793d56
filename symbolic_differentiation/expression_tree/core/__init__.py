"""Core expression tree components."""

from .node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .operators import (
    NodeKind, BINARY_OP_MAP, UNARY_OP_MAP, NAMED_CONSTANTS, DIVISION_EPSILON,
    evaluate_variable, evaluate_constant, evaluate_binary_op, evaluate_unary_op
)

__all__ = [
    'Node', 'ConstantNode', 'VariableNode', 'BinaryOpNode', 'UnaryOpNode',
    'NodeKind', 'BINARY_OP_MAP', 'UNARY_OP_MAP', 'NAMED_CONSTANTS', 'DIVISION_EPSILON',
    'evaluate_variable', 'evaluate_constant', 'evaluate_binary_op', 'evaluate_unary_op'
]
