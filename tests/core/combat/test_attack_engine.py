"""Attack resolution engine: weapon attacks, talent attacks, stances"""

from __future__ import annotations

import logging

import pytest

from shardsheet.core.bonus import BonusEffect, BonusType
from shardsheet.core.character import Attributes, Character, Skill
from shardsheet.core.combat import (
    AttackResolutionEngine,
    AttackSource,
    ModifierType,
    format_damage,
    select_scaled_damage,
)
from shardsheet.core.enums import DamageType, DefenseType
from shardsheet.core.item import ItemRegistry
from shardsheet.core.talent import (
    ActionCost,
    AttackDefinition,
    DamageScaling,
    RangeClass,
    TalentCatalog,
    TalentPath,
    TalentRecord,
    TalentTree,
    WeaponType,
)


def _make_character(registry: ItemRegistry, **kwargs) -> Character:
    return Character(name="Kaladin", registry=registry, **kwargs)


def _equip(character: Character, item_id: str) -> None:
    assert character.inventory.add_item(item_id)
    assert character.inventory.equip_item(item_id)


def _make_catalog(*talents: TalentRecord) -> TalentCatalog:
    return TalentCatalog.from_paths([TalentPath("Test", (TalentTree("Tree", talents),))])


def _make_attack_talent(
    definition: AttackDefinition,
    talent_id: str = "structured",
    action_cost: ActionCost | None = None,
) -> TalentRecord:
    return TalentRecord(
        id=talent_id,
        name=talent_id.replace("_", " ").title(),
        description="A structured attack.",
        action_cost=action_cost or ActionCost.of(2),
        attack_definition=definition,
    )


def _weapon_attacks(engine: AttackResolutionEngine):
    return [a for a in engine.get_available_attacks() if a.source == AttackSource.WEAPON]


# ── Invariants ────────────────────────────────────────────────


class TestEngineInvariants:
    def test_empty_character_has_no_attacks(
        self, registry: ItemRegistry, catalog: TalentCatalog
    ) -> None:
        engine = AttackResolutionEngine(_make_character(registry), catalog)
        assert engine.get_available_attacks() == []
        assert engine.get_available_stances() == []

    def test_idempotent(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(
            registry,
            level=9,
            skill_ranks={Skill.LIGHT_WEAPONRY: 2},
            unlocked_talents={"killing_edge", "fatal_thrust", "mighty", "tagging_shot"},
        )
        character.add_expertise("Knives")
        _equip(character, "knife")
        engine = AttackResolutionEngine(character, catalog)
        assert engine.get_available_attacks() == engine.get_available_attacks()

    def test_reflects_character_changes(
        self, registry: ItemRegistry, catalog: TalentCatalog
    ) -> None:
        character = _make_character(registry)
        engine = AttackResolutionEngine(character, catalog)
        assert engine.get_available_attacks() == []
        _equip(character, "rapier")
        assert len(engine.get_available_attacks()) == 1

    def test_unknown_talent_ids_ignored(
        self, registry: ItemRegistry, catalog: TalentCatalog
    ) -> None:
        character = _make_character(registry, unlocked_talents={"not_a_talent"})
        assert AttackResolutionEngine(character, catalog).get_available_attacks() == []


# ── Weapon attacks ────────────────────────────────────────────


class TestWeaponAttacks:
    def test_light_weapon_scenario(self, registry: ItemRegistry) -> None:
        character = _make_character(
            registry,
            attributes=Attributes(speed=1),
            skill_ranks={Skill.LIGHT_WEAPONRY: 2},
        )
        _equip(character, "rapier")
        [attack] = AttackResolutionEngine(character, _make_catalog()).get_available_attacks()

        assert attack.id == "weapon_rapier"
        assert attack.name == "Rapier"
        assert attack.source == AttackSource.WEAPON
        assert attack.weapon_id == "rapier"
        assert attack.attack_bonus == 3
        assert attack.damage == "1d6"
        assert attack.damage_type == DamageType.KEEN
        assert attack.range == "Melee"
        assert attack.target_defense == DefenseType.PHYSICAL
        assert attack.action_cost == ActionCost.of(1)
        assert attack.description.startswith("Strike with Rapier.")
        assert attack.custom_modifiers == ()

    def test_heavy_weapon_uses_strength(self, registry: ItemRegistry) -> None:
        character = _make_character(
            registry,
            attributes=Attributes(strength=3, speed=1),
            skill_ranks={Skill.HEAVY_WEAPONRY: 1},
        )
        _equip(character, "hammer")
        [attack] = AttackResolutionEngine(character, _make_catalog()).get_available_attacks()
        assert attack.attack_bonus == 4

    def test_armor_produces_no_attack(self, registry: ItemRegistry) -> None:
        character = _make_character(registry)
        _equip(character, "leather-armor")
        assert AttackResolutionEngine(character, _make_catalog()).get_available_attacks() == []

    def test_expert_traits_need_expertise(self, registry: ItemRegistry) -> None:
        character = _make_character(registry)
        _equip(character, "rapier")
        engine = AttackResolutionEngine(character, _make_catalog())

        [attack] = engine.get_available_attacks()
        assert attack.traits == ("Quickdraw",)

        character.add_expertise("Light Weaponry")
        [attack] = engine.get_available_attacks()
        assert attack.traits == ("Quickdraw", "Expert: Defensive")


class TestKillingEdge:
    def test_with_knives_expertise(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(registry, unlocked_talents={"killing_edge"})
        character.add_expertise("Knives")
        _equip(character, "knife")
        [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert "Expert: Deadly" in attack.traits
        assert "Expert: Quickdraw" in attack.traits
        assert attack.traits == (
            "Discreet",
            "Expert: Offhand",
            "Expert: Thrown[20/60]",
            "Expert: Deadly",
            "Expert: Quickdraw",
        )

    def test_without_expertise(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(registry, unlocked_talents={"killing_edge"})
        _equip(character, "knife")
        [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert "Expert: Deadly" not in attack.traits
        assert "Expert: Quickdraw" not in attack.traits
        assert attack.traits == ("Discreet",)

    def test_grant_does_not_touch_other_weapons(
        self, registry: ItemRegistry, catalog: TalentCatalog
    ) -> None:
        character = _make_character(registry, unlocked_talents={"killing_edge"})
        character.add_expertise("Light Weaponry")
        _equip(character, "rapier")
        [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert "Expert: Deadly" not in attack.traits


class TestDamageBonuses:
    def test_mighty_adds_one_plus_tier(
        self, registry: ItemRegistry, catalog: TalentCatalog
    ) -> None:
        character = _make_character(registry, level=9, unlocked_talents={"mighty"})
        _equip(character, "hammer")
        [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert attack.damage == "1d10+3"
        [modifier] = attack.custom_modifiers
        assert modifier.source == "talent:mighty"
        assert modifier.type == ModifierType.DAMAGE
        assert modifier.value == 3

    def test_steady_aim_only_for_ranged(
        self, registry: ItemRegistry, catalog: TalentCatalog
    ) -> None:
        character = _make_character(
            registry,
            skill_ranks={Skill.PERCEPTION: 2},
            unlocked_talents={"steady_aim"},
        )
        _equip(character, "shortbow")
        engine = AttackResolutionEngine(character, catalog)
        [bow] = _weapon_attacks(engine)
        assert bow.damage == "1d6+2"

        _equip(character, "rapier")
        [rapier] = _weapon_attacks(engine)
        assert rapier.damage == "1d6"

    def test_bonuses_stack(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(
            registry,
            level=1,
            skill_ranks={Skill.PERCEPTION: 1},
            unlocked_talents={"steady_aim", "mighty"},
        )
        _equip(character, "sling")
        [attack] = _weapon_attacks(AttackResolutionEngine(character, catalog))
        assert attack.damage == "1d4+3"
        assert len(attack.custom_modifiers) == 2

    def test_zero_bonus_not_recorded(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(registry, unlocked_talents={"steady_aim"})
        _equip(character, "shortbow")
        [attack] = _weapon_attacks(AttackResolutionEngine(character, catalog))
        assert attack.damage == "1d6"
        assert attack.custom_modifiers == ()

    def test_format_damage(self) -> None:
        assert format_damage("1d6", 0) == "1d6"
        assert format_damage("1d6", 2) == "1d6+2"
        assert format_damage("1d6", -1) == "1d6-1"


# ── Talent attacks ────────────────────────────────────────────


class TestStructuredTalentAttacks:
    def test_tier_scaling_at_level_nine(self, registry: ItemRegistry) -> None:
        definition = AttackDefinition(
            target_defense=DefenseType.PHYSICAL,
            range=RangeClass.MELEE,
            weapon_type=WeaponType.HEAVY,
            base_damage="1d4",
            damage_scaling=(
                DamageScaling(1, "2d6"),
                DamageScaling(2, "3d6"),
                DamageScaling(3, "4d6"),
            ),
        )
        character = _make_character(registry, level=9)
        [attack] = AttackResolutionEngine(
            character, _make_catalog(_make_attack_talent(definition))
        ).get_available_attacks()
        assert attack.damage == "3d6"

    def test_base_damage_below_first_entry(self) -> None:
        definition = AttackDefinition(
            target_defense=DefenseType.PHYSICAL,
            range=RangeClass.MELEE,
            base_damage="4d4",
            damage_scaling=(DamageScaling(3, "6d4"),),
        )
        assert select_scaled_damage(definition, 2) == "4d4"
        assert select_scaled_damage(definition, 3) == "6d4"

    def test_no_damage_at_all(self) -> None:
        definition = AttackDefinition(target_defense=DefenseType.PHYSICAL, range=RangeClass.MELEE)
        assert select_scaled_damage(definition, 4) == "0"

    def test_unordered_scaling_table(self) -> None:
        definition = AttackDefinition(
            target_defense=DefenseType.PHYSICAL,
            range=RangeClass.MELEE,
            damage_scaling=(DamageScaling(2, "3d6"), DamageScaling(1, "2d6")),
        )
        assert select_scaled_damage(definition, 5) == "3d6"

    @pytest.mark.parametrize(
        "weapon_type, expected",
        [
            (WeaponType.LIGHT, 3),
            (WeaponType.HEAVY, 5),
            (WeaponType.UNARMED, 4),
            (WeaponType.ANY, 5),
            (None, 5),
        ],
    )
    def test_weapon_type_skill(
        self, registry: ItemRegistry, weapon_type: WeaponType | None, expected: int
    ) -> None:
        character = _make_character(
            registry,
            attributes=Attributes(strength=2, speed=1),
            skill_ranks={
                Skill.LIGHT_WEAPONRY: 2,
                Skill.HEAVY_WEAPONRY: 3,
                Skill.ATHLETICS: 2,
            },
        )
        definition = AttackDefinition(
            target_defense=DefenseType.PHYSICAL,
            range=RangeClass.MELEE,
            weapon_type=weapon_type,
        )
        [attack] = AttackResolutionEngine(
            character, _make_catalog(_make_attack_talent(definition))
        ).get_available_attacks()
        assert attack.attack_bonus == expected

    def test_fatal_thrust(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(
            registry,
            level=11,
            attributes=Attributes(speed=2),
            skill_ranks={Skill.LIGHT_WEAPONRY: 3},
            unlocked_talents={"fatal_thrust"},
        )
        [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert attack.id == "talent_fatal_thrust"
        assert attack.source == AttackSource.TALENT
        assert attack.talent_id == "fatal_thrust"
        assert attack.attack_bonus == 5
        assert attack.damage == "6d4"
        assert attack.damage_type == DamageType.KEEN
        assert attack.range == "Melee"
        assert attack.target_defense == DefenseType.COGNITIVE
        assert attack.action_cost == ActionCost.of(2)
        assert len(attack.traits) == 2
        [advantage] = attack.custom_modifiers
        assert advantage.type == ModifierType.ADVANTAGE
        assert advantage.value == 2

    def test_damage_type_defaults_to_impact(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(registry, unlocked_talents={"startling_blow"})
        [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert attack.damage_type == DamageType.IMPACT
        assert attack.damage == "0"
        assert attack.target_defense == DefenseType.COGNITIVE

    @pytest.mark.parametrize("cost", [ActionCost.passive(), ActionCost.special()])
    def test_passive_and_special_skipped(self, registry: ItemRegistry, cost: ActionCost) -> None:
        definition = AttackDefinition(target_defense=DefenseType.PHYSICAL, range=RangeClass.MELEE)
        talent = _make_attack_talent(definition, action_cost=cost)
        engine = AttackResolutionEngine(_make_character(registry), _make_catalog(talent))
        assert engine.get_available_attacks() == []

    def test_reaction_attack_kept(self, registry: ItemRegistry) -> None:
        definition = AttackDefinition(target_defense=DefenseType.PHYSICAL, range=RangeClass.MELEE)
        talent = _make_attack_talent(definition, action_cost=ActionCost.reaction())
        [attack] = AttackResolutionEngine(
            _make_character(registry), _make_catalog(talent)
        ).get_available_attacks()
        assert attack.action_cost == ActionCost.reaction()


class TestNarrativeTalentAttacks:
    def test_devastating_blow(
        self, registry: ItemRegistry, catalog: TalentCatalog, caplog: pytest.LogCaptureFixture
    ) -> None:
        character = _make_character(
            registry,
            level=11,
            attributes=Attributes(strength=2),
            skill_ranks={Skill.HEAVY_WEAPONRY: 2},
            unlocked_talents={"devastating_blow"},
        )
        with caplog.at_level(logging.WARNING):
            [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert attack.damage == "3d8"
        assert attack.attack_bonus == 4
        assert attack.range == "Melee"
        assert attack.target_defense == DefenseType.PHYSICAL
        assert any("devastating_blow" in r.getMessage() for r in caplog.records)

    def test_stone_spear(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(
            registry,
            attributes=Attributes(willpower=2),
            skill_ranks={Skill.COHESION: 1},
            unlocked_talents={"cohesion_stone_spear"},
        )
        [attack] = AttackResolutionEngine(character, catalog).get_available_attacks()
        assert attack.attack_bonus == 3
        assert attack.range == "Ranged"
        assert attack.resource_cost is not None
        assert attack.resource_cost.amount == 1

    def test_non_attack_talent_skipped(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(registry, unlocked_talents={"singer_change_form"})
        assert AttackResolutionEngine(character, catalog).get_available_attacks() == []


# ── Stances ───────────────────────────────────────────────────


class TestStances:
    def test_stances_listed(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(
            registry,
            unlocked_talents={"vigilant_stance", "flamestance", "stonestance", "mighty"},
        )
        stances = AttackResolutionEngine(character, catalog).get_available_stances()
        assert {s.id for s in stances} == {"vigilant_stance", "flamestance", "stonestance"}
        assert all(s.activation_cost == ActionCost.of(1) for s in stances)

    def test_stance_fields(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(registry, unlocked_talents={"stonestance"})
        [stance] = AttackResolutionEngine(character, catalog).get_available_stances()
        assert stance.talent_id == "stonestance"
        assert stance.effects[0] == "Learn Stonestance (enter as 1 action)"
        [bonus] = stance.bonuses
        assert bonus.source == "stance:stonestance"
        assert bonus.value == 1
        assert bonus.description == "deflect: all +1"

    def test_stance_advantages(self, registry: ItemRegistry, catalog: TalentCatalog) -> None:
        character = _make_character(registry, unlocked_talents={"flamestance"})
        [stance] = AttackResolutionEngine(character, catalog).get_available_stances()
        assert stance.grants_advantage == ("intimidation_in_flamestance",)

    def test_explicit_flag(self, registry: ItemRegistry) -> None:
        talent = TalentRecord(
            id="bloodstorm",
            name="Bloodstorm",
            description="",
            action_cost=ActionCost.of(1),
            stance=True,
            bonuses=(BonusEffect(BonusType.DEFENSE, "physical", formula="tier"),),
        )
        character = _make_character(registry, level=6, unlocked_talents={"bloodstorm"})
        [stance] = AttackResolutionEngine(character, _make_catalog(talent)).get_available_stances()
        assert stance.bonuses[0].value == 2
