"""
Expression Parser

Converts infix text into a node tree by scanning the string directly instead
of tokenizing it first. Each pass looks for a split point at parenthesis
depth 0; the order of the passes (additive, multiplicative, power) is what
gives the operators their precedence.
"""

import math
import re
from typing import List, Optional

from .core.node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .core.operators import NAMED_CONSTANTS, UNARY_OP_MAP
from ..errors import ParseError
from ..logging_system import log_debug

NUMBER_PATTERN = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
IDENTIFIER_PATTERN = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

DEFAULT_MAX_DEPTH = 500

# A '+' or '-' right after one of these is a sign, not a binary operator
_SIGN_CONTEXT = frozenset('+-*/^(')


class Parser:
    """
    Recursive-descent parser driven by string scanning.

    Args:
        left_associative: fold '+ - * /' chains from the left so that 'a-b-c'
            means '(a-b)-c'. When False chains fold from the right, as if
            split at the first operator. '^' always folds from the right
            ('a^b^c' means 'a^(b^c)').
        strict: reject unbalanced parentheses and non-identifier names, treat
            '+'/'-' after another operator (or an exponent 'e') as a sign, and
            only rewrite a leading '-' once no binary '+'/'-' is found.
            Turning both options off reproduces the historical behaviour.
        max_depth: maximum nesting of parentheses, function calls and leading
            minus signs before the input is rejected; None disables the guard.
            Operator chains of any length are folded without nesting.
    """

    def __init__(self, left_associative: bool = True, strict: bool = True,
                 max_depth: Optional[int] = DEFAULT_MAX_DEPTH):
        self.left_associative = left_associative
        self.strict = strict
        self.max_depth = max_depth

    def parse(self, text: str) -> Node:
        if not isinstance(text, str):
            raise TypeError(f"Expression text must be a string, got {type(text).__name__}")
        if self.strict:
            self._check_balanced(text)
        try:
            return self._parse(text, 0)
        except RecursionError:
            raise ParseError("expression nested too deeply") from None

    # ------------------------------------------------------------------ passes

    def _parse(self, text: str, depth: int) -> Node:
        if self.max_depth is not None and depth > self.max_depth:
            raise ParseError("expression nested too deeply")

        s = text.strip()
        if not s:
            raise ParseError("empty expression")

        if _is_wrapped_in_parens(s):
            return self._parse(s[1:-1], depth + 1)

        if s in NAMED_CONSTANTS:
            return ConstantNode(NAMED_CONSTANTS[s])

        if not self.strict and s[0] == '-':
            return self._parse_negation(s, depth)

        indices = self._find_splits(s, '+-')
        if indices:
            return self._split_chain(s, indices, depth, self.left_associative)

        if self.strict and s[0] == '-':
            return self._parse_negation(s, depth)

        indices = self._find_splits(s, '*/')
        if indices:
            return self._split_chain(s, indices, depth, self.left_associative)

        indices = self._find_splits(s, '^')
        if indices:
            return self._split_chain(s, indices, depth, left_fold=False)

        for func_name in UNARY_OP_MAP:
            if s.startswith(func_name + '('):
                inside = self._function_argument(s, func_name)
                log_debug(f"function {func_name} in {s!r}")
                return UnaryOpNode(func_name, self._parse(inside, depth + 1))

        if NUMBER_PATTERN.fullmatch(s):
            value = float(s)
            if not math.isfinite(value):
                raise ParseError(f"Numeric literal out of range: {s!r}")
            return ConstantNode(value)

        if self.strict and not IDENTIFIER_PATTERN.fullmatch(s):
            raise ParseError(f"Invalid token: {s!r}")
        return VariableNode(s)

    def _parse_negation(self, s: str, depth: int) -> Node:
        if len(s) == 1:
            raise ParseError("Invalid expression: just '-'.")
        log_debug(f"leading minus in {s!r}")
        return BinaryOpNode('-', ConstantNode(0.0), self._parse(s[1:], depth + 1))

    def _split_chain(self, s: str, indices: List[int], depth: int, left_fold: bool) -> Node:
        """
        Parse a run of same-precedence operators and fold it into one tree.

        Operands are parsed at the current depth, so long flat chains such as
        'x+x+...+x' do not count towards max_depth; only parentheses, function
        calls and leading minus signs nest.
        """
        bounds = [-1] + indices + [len(s)]
        parts = []
        for start, end in zip(bounds, bounds[1:]):
            part = s[start + 1:end]
            if self.strict and not part.strip():
                operator = s[end] if start < 0 else s[start]
                raise ParseError(f"Missing operand for {operator!r} in {s!r}")
            parts.append(part)
        for i in indices:
            log_debug(f"split {s!r} at {s[i]!r} (index {i})")

        operands = [self._parse(part, depth) for part in parts]
        operators = [s[i] for i in indices]
        if left_fold:
            node = operands[0]
            for operator, operand in zip(operators, operands[1:]):
                node = BinaryOpNode(operator, node, operand)
        else:
            node = operands[-1]
            for operator, operand in zip(reversed(operators), reversed(operands[:-1])):
                node = BinaryOpNode(operator, operand, node)
        return node

    # ------------------------------------------------------------------ scanning

    def _find_splits(self, s: str, operators: str) -> List[int]:
        """Indices of every operator in `operators` at depth 0"""
        paren_count = 0
        indices = []
        for i, c in enumerate(s):
            if c == '(':
                paren_count += 1
            elif c == ')':
                paren_count -= 1

            if paren_count == 0 and c in operators and self._is_split_point(s, i):
                # Without strict scanning, an operator with nothing before it
                # belongs to the next operand ('a--b' is 'a-(0-b)')
                if not self.strict and indices and not s[indices[-1] + 1:i].strip():
                    continue
                indices.append(i)
        return indices

    def _is_split_point(self, s: str, i: int) -> bool:
        if s[i] not in '+-':
            return True
        if i == 0:
            return False
        if not self.strict:
            return True
        prev = s[:i].rstrip()
        if not prev or prev[-1] in _SIGN_CONTEXT:
            return False
        return not _is_exponent_sign(s, i)

    @staticmethod
    def _check_balanced(text: str):
        paren_count = 0
        for c in text:
            if c == '(':
                paren_count += 1
            elif c == ')':
                paren_count -= 1
                if paren_count < 0:
                    raise ParseError(f"Unmatched parentheses in expression: {text!r}")
        if paren_count != 0:
            raise ParseError(f"Unmatched parentheses in expression: {text!r}")

    def _function_argument(self, s: str, func_name: str) -> str:
        start = s.find(func_name + '(')
        if start == -1:
            raise ParseError(f"parse error with function {func_name}")
        start += len(func_name) + 1

        paren_count = 1
        i = start
        while i < len(s):
            if s[i] == '(':
                paren_count += 1
            elif s[i] == ')':
                paren_count -= 1
            if paren_count == 0:
                break
            i += 1

        if paren_count != 0:
            raise ParseError(f"Unmatched parentheses in function call: {s}")
        if s[i + 1:].strip():
            raise ParseError(f"Unexpected text after {func_name}(...): {s[i + 1:]!r}")
        return s[start:i]


def _is_wrapped_in_parens(s: str) -> bool:
    """True if one balanced pair of parentheses spans the whole string"""
    if len(s) < 2 or s[0] != '(' or s[-1] != ')':
        return False

    depth = 0
    for c in s[:-1]:
        if c == '(':
            depth += 1
        elif c == ')':
            depth -= 1
        if depth == 0:
            return False
    return True


def _is_exponent_sign(s: str, i: int) -> bool:
    """True for the sign in a literal such as '1e-5' or '2.5E+3'"""
    if i < 2 or s[i - 1] not in 'eE':
        return False
    j = i - 2
    saw_digit = False
    while j >= 0 and (s[j].isdigit() or s[j] == '.'):
        saw_digit = saw_digit or s[j].isdigit()
        j -= 1
    if not saw_digit:
        return False
    return j < 0 or not (s[j].isalnum() or s[j] == '_')


def parse(text: str, **options) -> Node:
    """Parse `text` into a node tree; keyword options are passed to Parser"""
    return Parser(**options).parse(text)
