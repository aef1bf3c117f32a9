"""Bonus formula evaluation.

Formulas are tiny arithmetic expressions over two kinds of reference:
``tier`` and ``<skill>.ranks``. References are substituted first, then the
remaining text must be plain arithmetic. Anything that cannot be resolved
evaluates to 0 so attack computation is never blocked by bad content.
"""

from __future__ import annotations

import ast
import logging
import math
import operator
import re

from .models import BonusEffect, FormulaContext

logger = logging.getLogger(__name__)

_RANKS_REF = re.compile(r"\b(\w+)\.ranks\b")
_TIER_REF = re.compile(r"\btier\b")
_ARITHMETIC = re.compile(r"^[\d+\-*/(). ]+$")

MAX_FORMULA_LENGTH = 200

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}
_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def substitute_references(formula: str, context: FormulaContext) -> str:
    """Replace skill rank and tier references with their numbers."""

    def _rank(match: re.Match[str]) -> str:
        return str(context.skill_ranks.get(match.group(1).lower(), 0))

    expr = _RANKS_REF.sub(_rank, formula)
    return _TIER_REF.sub(str(context.tier), expr)


def _eval_node(node: ast.AST) -> float:
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        return _BINARY_OPS[type(node.op)](_eval_node(node.left), _eval_node(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval_node(node.operand))
    raise ValueError(f"unsupported expression node: {type(node).__name__}")


def evaluate_formula(formula: str, context: FormulaContext) -> int:
    """Evaluate a formula string. Never raises; failures give 0."""
    if len(formula) > MAX_FORMULA_LENGTH:
        logger.warning("Bonus formula too long (%d chars), ignored", len(formula))
        return 0

    expr = substitute_references(formula, context)
    if not _ARITHMETIC.match(expr):
        logger.warning("Unresolvable bonus formula: %r -> %r", formula, expr)
        return 0

    try:
        return math.floor(_eval_node(ast.parse(expr.strip(), mode="eval").body))
    except (
        SyntaxError,
        ValueError,
        ZeroDivisionError,
        OverflowError,
        RecursionError,
        MemoryError,
    ) as e:
        logger.warning("Failed to evaluate bonus formula %r: %s", formula, e)
        return 0


def evaluate_bonus(effect: BonusEffect, context: FormulaContext) -> int:
    """Numeric value of a bonus effect in the given context."""
    if effect.formula:
        return evaluate_formula(effect.formula, context)
    return effect.value if effect.value is not None else 0
