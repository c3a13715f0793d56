"""
Tree Utility Functions

Traversal and inspection helpers shared by the Expression wrapper and the
tests. Nodes expose their children uniformly through ``Node.children()``.
"""

from typing import List, Dict, cast
from collections import Counter

from ..core.node import Node, BinaryOpNode, UnaryOpNode, VariableNode
from ..core.operators import NodeKind, LEAF_KINDS, UNARY_KINDS, BINARY_KINDS


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = [node]
    all_nodes = []
    index = 0

    while index < len(nodes_to_visit):
        current_node = nodes_to_visit[index]
        index += 1
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Pre-order, iterative so deep trees do not hit the recursion limit"""
    stack = [node]
    nodes = []

    while stack:
        current_node = stack.pop()
        nodes.append(current_node)
        stack.extend(reversed(current_node.children()))

    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    max_depth = 0
    stack = [(node, 1)]
    while stack:
        current_node, depth = stack.pop()
        max_depth = max(max_depth, depth)
        for child in current_node.children():
            stack.append((child, depth + 1))
    return max_depth


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    """Get all nodes of a given class in depth-first order."""
    return [n for n in _depth_first_traversal(node) if isinstance(n, node_type)]


def count_kinds(node: Node) -> Dict[NodeKind, int]:
    """Number of nodes of each kind present in the tree."""
    return dict(Counter(n.kind for n in _depth_first_traversal(node)))


def validate_tree_structure(node: Node) -> bool:
    """
    Check that every node's children agree with its kind.

    Construction already rejects inconsistent nodes, so this returns False
    only for foreign objects placed in a tree.
    """
    stack = [node]
    while stack:
        current_node = stack.pop()
        if not isinstance(current_node, Node):
            return False
        stack.extend(current_node.children())
        kind = current_node.kind
        n_children = len(current_node.children())
        if kind in LEAF_KINDS and n_children != 0:
            return False
        if kind in UNARY_KINDS and (n_children != 1 or not isinstance(current_node, UnaryOpNode)):
            return False
        if kind in BINARY_KINDS and (n_children != 2 or not isinstance(current_node, BinaryOpNode)):
            return False
    return True


def get_variables(node: Node) -> List[VariableNode]:
    """Get all variable nodes in the tree."""
    return cast(List[VariableNode], find_nodes_by_type(node, VariableNode))


def get_variable_names(node: Node) -> List[str]:
    """Sorted, de-duplicated variable names."""
    return sorted({var.name for var in get_variables(node)})
