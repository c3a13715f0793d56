"""Utilities for expression trees."""

from .sympy_utils import to_sympy_expression, latex_representation, sympy_derivative, are_equivalent
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type, count_kinds,
    validate_tree_structure, get_variables, get_variable_names
)

__all__ = [
    'to_sympy_expression', 'latex_representation', 'sympy_derivative', 'are_equivalent',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type', 'count_kinds',
    'validate_tree_structure', 'get_variables', 'get_variable_names'
]
