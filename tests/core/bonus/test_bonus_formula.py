"""Bonus formula evaluation"""

from __future__ import annotations

import logging

import pytest

from shardsheet.core.bonus import formula as formula_module
from shardsheet.core.bonus import (
    BonusEffect,
    BonusType,
    FormulaContext,
    evaluate_bonus,
    evaluate_formula,
    substitute_references,
)


def _make_effect(value: int | None = None, formula: str | None = None) -> BonusEffect:
    return BonusEffect(
        type=BonusType.DERIVED,
        target="damage_per_action",
        value=value,
        formula=formula,
    )


def _make_context(tier: int = 1, **ranks: int) -> FormulaContext:
    return FormulaContext(tier=tier, skill_ranks=dict(ranks))


# ── Literal values ────────────────────────────────────────────


class TestLiteralBonus:
    def test_value_returned_unchanged(self) -> None:
        assert evaluate_bonus(_make_effect(value=3), _make_context()) == 3

    def test_negative_value(self) -> None:
        assert evaluate_bonus(_make_effect(value=-2), _make_context()) == -2

    def test_no_value_no_formula_is_zero(self) -> None:
        assert evaluate_bonus(_make_effect(), _make_context()) == 0


# ── Formulas ──────────────────────────────────────────────────


class TestFormulaBonus:
    def test_one_plus_tier(self) -> None:
        effect = _make_effect(formula="1 + tier")
        assert evaluate_bonus(effect, _make_context(tier=1)) == 2
        assert evaluate_bonus(effect, _make_context(tier=3)) == 4

    def test_skill_ranks(self) -> None:
        effect = _make_effect(formula="perception.ranks")
        assert evaluate_bonus(effect, _make_context(perception=3)) == 3

    def test_missing_skill_is_zero(self) -> None:
        effect = _make_effect(formula="perception.ranks")
        assert evaluate_bonus(effect, _make_context()) == 0

    def test_skill_lookup_is_case_insensitive(self) -> None:
        assert evaluate_formula("Athletics.ranks", _make_context(athletics=2)) == 2

    def test_division_floors(self) -> None:
        assert evaluate_formula("athletics.ranks / 2", _make_context(athletics=3)) == 1

    def test_parentheses_and_precedence(self) -> None:
        assert evaluate_formula("(1 + tier) * 2", _make_context(tier=2)) == 6
        assert evaluate_formula("1 + tier * 2", _make_context(tier=2)) == 5

    def test_formula_wins_over_value(self) -> None:
        effect = _make_effect(value=10, formula="tier")
        assert evaluate_bonus(effect, _make_context(tier=2)) == 2

    def test_substitution(self) -> None:
        expr = substitute_references("lore.ranks + tier", _make_context(tier=2, lore=4))
        assert expr == "4 + 2"


# ── Degradation ───────────────────────────────────────────────


class TestFormulaDegradation:
    @pytest.mark.parametrize(
        "formula",
        [
            "unknown_name + 1",
            "__import__('os')",
            "2 ** 3",
            "1 +",
            "1 / 0",
            "   ",
        ],
    )
    def test_unresolvable_is_zero(self, formula: str) -> None:
        assert evaluate_formula(formula, _make_context(tier=2)) == 0

    def test_warning_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="shardsheet.core.bonus.formula"):
            evaluate_formula("focus.max + 1", _make_context())
        assert any("formula" in r.message for r in caplog.records)

    def test_overlong_formula_is_zero(self, caplog: pytest.LogCaptureFixture) -> None:
        formula = "+".join(["1"] * 5000)
        with caplog.at_level(logging.WARNING, logger="shardsheet.core.bonus.formula"):
            assert evaluate_bonus(_make_effect(formula=formula), _make_context()) == 0
        assert any("too long" in r.getMessage() for r in caplog.records)

    def test_deep_expression_is_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(formula_module, "MAX_FORMULA_LENGTH", 100_000)
        assert evaluate_formula("+".join(["1"] * 5000), _make_context()) == 0
        assert evaluate_formula("(" * 300 + "1" + ")" * 300, _make_context()) == 0

    def test_long_but_allowed_formula(self) -> None:
        assert evaluate_formula("+".join(["1"] * 50), _make_context()) == 50
