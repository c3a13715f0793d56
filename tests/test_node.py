"""Node model: construction invariants, immutability, equality and printing."""

import pytest

from symbolic_differentiation import (
    Expression, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode, NodeKind
)
from symbolic_differentiation.expression_tree.utils import (
    validate_tree_structure, calculate_tree_depth, count_kinds, get_variable_names,
    get_all_nodes, find_nodes_by_type, get_variables
)


def test_kinds_cover_all_eleven_variants():
    x = VariableNode("x")
    nodes = [
        ConstantNode(1.0), x,
        BinaryOpNode('+', x, x), BinaryOpNode('-', x, x), BinaryOpNode('*', x, x),
        BinaryOpNode('/', x, x), BinaryOpNode('^', x, x),
        UnaryOpNode('sin', x), UnaryOpNode('cos', x), UnaryOpNode('ln', x), UnaryOpNode('exp', x),
    ]
    assert {node.kind for node in nodes} == set(NodeKind)
    assert len(NodeKind) == 11


def test_children_match_kind():
    x = VariableNode("x")
    assert ConstantNode(2).children() == ()
    assert x.children() == ()
    assert UnaryOpNode('sin', x).children() == (x,)
    assert BinaryOpNode('^', x, ConstantNode(2)).children() == (x, ConstantNode(2))


@pytest.mark.parametrize("build, error", [
    (lambda: ConstantNode("3"), TypeError),
    (lambda: ConstantNode(True), TypeError),
    (lambda: ConstantNode(None), TypeError),
    (lambda: VariableNode(""), ValueError),
    (lambda: VariableNode(3), ValueError),
    (lambda: BinaryOpNode('%', VariableNode("x"), VariableNode("y")), ValueError),
    (lambda: BinaryOpNode('+', VariableNode("x"), 3), TypeError),
    (lambda: UnaryOpNode('tan', VariableNode("x")), ValueError),
    (lambda: UnaryOpNode('sin', "x"), TypeError),
])
def test_inconsistent_nodes_are_rejected(build, error):
    with pytest.raises(error):
        build()


def test_nodes_are_immutable():
    x = VariableNode("x")
    c = ConstantNode(2.0)
    add = BinaryOpNode('+', x, c)
    sin_x = UnaryOpNode('sin', x)

    with pytest.raises(AttributeError):
        c.value = 3.0
    with pytest.raises(AttributeError):
        x.name = "y"
    with pytest.raises(AttributeError):
        add.left = c
    with pytest.raises(AttributeError):
        sin_x.operand = c
    with pytest.raises(AttributeError):
        add.extra = 1


def test_constant_value_is_float():
    assert isinstance(ConstantNode(3).value, float)
    assert ConstantNode(3).value == 3.0


def test_structural_equality_and_hash():
    first = Expression.parse("x + sin(2*y)")
    second = Expression.parse("(x + sin(2 * y))")
    assert first == second
    assert hash(first) == hash(second)
    assert len({first.root, second.root}) == 1
    assert first != Expression.parse("x + sin(2*z)")
    assert ConstantNode(1) != VariableNode("x")


@pytest.mark.parametrize("node, text", [
    (ConstantNode(2.0), "2"),
    (ConstantNode(0.5), "0.5"),
    (ConstantNode(-1.0), "(-1)"),
    (ConstantNode(3.141592653589793), "3.141592653589793"),
    (VariableNode("theta"), "theta"),
    (BinaryOpNode('+', VariableNode("x"), ConstantNode(1)), "(x + 1)"),
    (BinaryOpNode('^', VariableNode("x"), ConstantNode(2)), "(x^2)"),
    (UnaryOpNode('ln', BinaryOpNode('/', VariableNode("a"), VariableNode("b"))), "ln((a / b))"),
])
def test_printer_fully_parenthesizes(node, text):
    assert node.to_string() == text


def test_printer_on_operator_built_tree():
    a, x, b = Expression(5.0), Expression("x"), Expression(3.0)
    text = ((a + x) * b).to_string()
    assert text == "((5 + x) * 3)"


def test_empty_expression_prints_empty_string():
    empty = Expression()
    assert empty.to_string() == ""
    assert str(empty) == ""
    assert not empty.is_valid()
    assert empty.size() == 0


def test_tree_utils():
    expr = Expression.parse("x*y + sin(x)")
    root = expr.root
    assert validate_tree_structure(root)
    assert calculate_tree_depth(root) == 3
    assert expr.depth() == 3
    assert expr.size() == 6
    assert len(get_all_nodes(root)) == 6
    assert get_variable_names(root) == ["x", "y"]
    assert expr.variables() == ["x", "y"]
    kinds = count_kinds(root)
    assert kinds[NodeKind.VARIABLE] == 3
    assert kinds[NodeKind.ADD] == 1


def test_copy_shares_immutable_root():
    expr = Expression.parse("x^2")
    duplicate = expr.copy()
    assert duplicate.root is expr.root
    assert duplicate == expr


def test_variable_collection():
    root = Expression.parse("x*y + x").root
    assert [v.name for v in get_variables(root)] == ["x", "y", "x"]
    assert len(find_nodes_by_type(root, BinaryOpNode)) == 2
    assert find_nodes_by_type(root, UnaryOpNode) == []


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_constants_are_rejected(value):
    with pytest.raises(ValueError, match="finite"):
        ConstantNode(value)
    with pytest.raises(ValueError):
        Expression.parse("x + 1").substitute("x", value)
