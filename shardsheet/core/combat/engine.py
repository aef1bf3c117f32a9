"""Attack resolution engine.

Derives the attacks and stances a character can use right now from the
character snapshot and the talent catalog. Nothing is cached: every call
rebuilds its result, so repeated calls on an unchanged character are equal.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..bonus.formula import evaluate_bonus
from ..bonus.models import DAMAGE_PER_ACTION, RANGED_DAMAGE, BonusEffect, FormulaContext
from ..character.models import Character
from ..character.skills import Skill, skill_for_weapon_keyword
from ..enums import DamageType, DefenseType
from ..item.models import ItemDefinition, WeaponProperties
from ..talent.catalog import TalentCatalog
from ..talent.models import (
    ActionCost,
    AttackDefinition,
    RangeClass,
    TalentRecord,
    WeaponType,
    is_stance,
)
from .models import Attack, AttackModifier, AttackSource, ModifierType, Stance
from .narrative import parse_narrative_attack
from .traits import TraitGrantResolver

logger = logging.getLogger(__name__)

# A basic Strike costs one action; per-action bonuses scale with it
STRIKE_COST = ActionCost.of(1)
STANCE_ACTIVATION_COST = ActionCost.of(1)

_RANGE_LABELS: dict[RangeClass, str] = {
    RangeClass.MELEE: "Melee",
    RangeClass.RANGED: "Ranged",
    RangeClass.SPECIAL: "Special",
}


def format_damage(base: str, modifier: int) -> str:
    if modifier > 0:
        return f"{base}+{modifier}"
    if modifier < 0:
        return f"{base}{modifier}"
    return base


def select_scaled_damage(definition: AttackDefinition, tier: int) -> str:
    """Damage of the highest scaling entry at or below `tier`, else base damage."""
    eligible = [entry for entry in definition.damage_scaling if entry.tier <= tier]
    if eligible:
        return max(eligible, key=lambda entry: entry.tier).damage
    return definition.base_damage or "0"


class AttackResolutionEngine:
    def __init__(self, character: Character, catalog: TalentCatalog) -> None:
        self.character = character
        self.catalog = catalog
        self._traits = TraitGrantResolver(character.has_expertise)

    def _unlocked_talents(self) -> list[TalentRecord]:
        return self.catalog.resolve_many(self.character.unlocked_talents)

    # ── Public ────────────────────────────────────────────────

    def get_available_attacks(self) -> list[Attack]:
        talents = self._unlocked_talents()
        context = self.character.formula_context()
        attacks = self._weapon_attacks(talents, context)
        attacks.extend(self._talent_attacks(talents))
        return attacks

    def get_available_stances(self) -> list[Stance]:
        context = self.character.formula_context()
        return [
            self._build_stance(talent, context)
            for talent in self._unlocked_talents()
            if is_stance(talent)
        ]

    # ── Weapon attacks ────────────────────────────────────────

    def _weapon_attacks(
        self, talents: list[TalentRecord], context: FormulaContext
    ) -> list[Attack]:
        attacks: list[Attack] = []
        for item_id, item in self.character.inventory.get_all_equipped_items():
            if item.weapon is None:
                continue
            attacks.append(self._build_weapon_attack(item_id, item, item.weapon, talents, context))
        return attacks

    def _build_weapon_attack(
        self,
        item_id: str,
        item: ItemDefinition,
        props: WeaponProperties,
        talents: list[TalentRecord],
        context: FormulaContext,
    ) -> Attack:
        skill = skill_for_weapon_keyword(props.skill)

        traits = list(props.traits)
        check = self.character.inventory.can_use_expert_traits(
            item_id, self.character.has_expertise
        )
        if check.can_use:
            traits.extend(f"Expert: {t}" for t in props.expert_traits)
            traits.extend(
                f"Expert: {t}" for t in self._traits.traits_for(item_id, item, talents)
            )

        modifiers = self._damage_modifiers(props, talents, context)
        total = sum(int(m.value or 0) for m in modifiers)

        return Attack(
            id=f"weapon_{item_id}",
            name=item.name,
            source=AttackSource.WEAPON,
            attack_bonus=self.character.skill_total(skill),
            damage=format_damage(props.damage, total),
            damage_type=props.damage_type,
            range=props.range,
            target_defense=DefenseType.PHYSICAL,
            action_cost=STRIKE_COST,
            description=f"Strike with {item.name}. {item.description}".strip(),
            traits=tuple(traits),
            weapon_id=item_id,
            custom_modifiers=tuple(modifiers),
        )

    def _damage_modifiers(
        self,
        props: WeaponProperties,
        talents: list[TalentRecord],
        context: FormulaContext,
    ) -> list[AttackModifier]:
        modifiers: list[AttackModifier] = []
        for talent in talents:
            for bonus in talent.bonuses:
                value = self._weapon_damage_bonus(bonus, props, context)
                if value:
                    modifiers.append(
                        AttackModifier(
                            source=f"talent:{talent.id}",
                            type=ModifierType.DAMAGE,
                            description=f"{talent.name}: {value:+d} damage",
                            value=value,
                            condition=bonus.condition,
                        )
                    )
        return modifiers

    @staticmethod
    def _weapon_damage_bonus(
        bonus: BonusEffect, props: WeaponProperties, context: FormulaContext
    ) -> int:
        if bonus.target == DAMAGE_PER_ACTION:
            return evaluate_bonus(bonus, context) * STRIKE_COST.actions
        if bonus.target == RANGED_DAMAGE and props.is_ranged:
            return evaluate_bonus(bonus, context)
        return 0

    # ── Talent attacks ────────────────────────────────────────

    def _talent_attacks(self, talents: list[TalentRecord]) -> list[Attack]:
        attacks: list[Attack] = []
        for talent in talents:
            if not talent.action_cost.is_activatable:
                continue
            if talent.attack_definition is not None:
                attacks.append(self._structured_attack(talent, talent.attack_definition))
                continue
            attack = self._narrative_attack(talent)
            if attack is not None:
                attacks.append(attack)
        return attacks

    def _weapon_type_bonus(self, weapon_type: Optional[WeaponType]) -> int:
        if weapon_type == WeaponType.LIGHT:
            return self.character.skill_total(Skill.LIGHT_WEAPONRY)
        if weapon_type == WeaponType.HEAVY:
            return self.character.skill_total(Skill.HEAVY_WEAPONRY)
        if weapon_type == WeaponType.UNARMED:
            return self.character.skill_total(Skill.ATHLETICS)
        return max(
            self.character.skill_total(Skill.LIGHT_WEAPONRY),
            self.character.skill_total(Skill.HEAVY_WEAPONRY),
        )

    def _structured_attack(self, talent: TalentRecord, definition: AttackDefinition) -> Attack:
        advantages = tuple(
            AttackModifier(
                source=f"talent:{talent.id}",
                type=ModifierType.ADVANTAGE,
                description=f"Advantage: {adv.condition}",
                value=adv.value,
                condition=adv.condition,
            )
            for adv in definition.conditional_advantages
        )
        return Attack(
            id=f"talent_{talent.id}",
            name=talent.name,
            source=AttackSource.TALENT,
            attack_bonus=self._weapon_type_bonus(definition.weapon_type),
            damage=select_scaled_damage(definition, self.character.tier),
            damage_type=definition.damage_type or DamageType.IMPACT,
            range=_RANGE_LABELS[definition.range],
            target_defense=definition.target_defense,
            action_cost=talent.action_cost,
            description=talent.description,
            traits=definition.special_mechanics,
            talent_id=talent.id,
            resource_cost=definition.resource_cost,
            custom_modifiers=advantages,
        )

    def _narrative_attack(self, talent: TalentRecord) -> Optional[Attack]:
        parsed = parse_narrative_attack(talent, self.character.tier, self.character.skill_total)
        if parsed is None:
            return None
        return Attack(
            id=f"talent_{talent.id}",
            name=talent.name,
            source=AttackSource.TALENT,
            attack_bonus=parsed.attack_bonus,
            damage=parsed.damage,
            damage_type=parsed.damage_type,
            range=parsed.range,
            target_defense=parsed.target_defense,
            action_cost=talent.action_cost,
            description=talent.description,
            talent_id=talent.id,
            resource_cost=parsed.resource_cost,
        )

    # ── Stances ───────────────────────────────────────────────

    @staticmethod
    def _build_stance(talent: TalentRecord, context: FormulaContext) -> Stance:
        bonuses = []
        for bonus in talent.bonuses:
            value = evaluate_bonus(bonus, context)
            bonuses.append(
                AttackModifier(
                    source=f"stance:{talent.id}",
                    type=ModifierType.OTHER,
                    description=f"{bonus.type.value}: {bonus.target} {value:+d}",
                    value=value,
                    condition=bonus.condition,
                )
            )
        return Stance(
            id=talent.id,
            name=talent.name,
            description=talent.description,
            talent_id=talent.id,
            activation_cost=STANCE_ACTIVATION_COST,
            effects=talent.other_effects,
            bonuses=tuple(bonuses),
            grants_advantage=talent.grants_advantage,
        )
