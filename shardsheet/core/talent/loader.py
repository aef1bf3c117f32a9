"""Talent data file -> TalentRecord conversion.

The data file mirrors the authored tree shape: paths holding trees of
nodes, an optional list of path-level nodes, plus ancestry trees. Keys are
snake_case; optional structured fields may be omitted.
"""

from __future__ import annotations

from typing import Any

from ..bonus.models import BonusEffect, BonusType
from ..enums import DamageType, DefenseType, ResourceType
from .models import (
    ActionCost,
    AttackDefinition,
    ConditionalAdvantage,
    DamageScaling,
    ExpertiseGrantKind,
    ExpertiseGrantSpec,
    Prerequisite,
    PrerequisiteOperator,
    PrerequisiteType,
    RangeClass,
    ResourceCost,
    TalentPath,
    TalentRecord,
    TalentTree,
    TraitGrant,
    TraitTarget,
    WeaponType,
)


def _prerequisite(raw: dict[str, Any]) -> Prerequisite:
    value = raw.get("value")
    return Prerequisite(
        type=PrerequisiteType(raw["type"]),
        target=raw["target"],
        value=int(value) if value is not None else None,
        operator=PrerequisiteOperator(raw.get("operator", "AND").upper()),
    )


def _bonus(raw: dict[str, Any]) -> BonusEffect:
    value = raw.get("value")
    return BonusEffect(
        type=BonusType(raw["type"]),
        target=raw["target"],
        value=int(value) if value is not None else None,
        formula=raw.get("formula"),
        scaling=bool(raw.get("scaling", False)),
        condition=raw.get("condition"),
    )


def _expertise_grant(raw: dict[str, Any]) -> ExpertiseGrantSpec:
    count = raw.get("choice_count")
    return ExpertiseGrantSpec(
        kind=ExpertiseGrantKind(raw["type"]),
        expertises=tuple(raw.get("expertises", [])),
        options=tuple(raw.get("options", [])),
        choice_count=int(count) if count is not None else None,
        category=raw.get("category"),
    )


def _trait_target(raw: Any) -> TraitTarget:
    # "all" | ["knife", "sling"] | {"category": "light"}
    if raw == "all":
        return TraitTarget(all_items=True)
    if isinstance(raw, list):
        return TraitTarget(item_ids=tuple(raw))
    if isinstance(raw, dict) and "category" in raw:
        return TraitTarget(category=str(raw["category"]))
    raise ValueError(f"invalid trait grant target: {raw!r}")


def _trait_grant(raw: dict[str, Any]) -> TraitGrant:
    return TraitGrant(
        target=_trait_target(raw["target_items"]),
        traits=tuple(raw["traits"]),
        expert=bool(raw.get("expert", False)),
    )


def _attack_definition(raw: dict[str, Any]) -> AttackDefinition:
    weapon_type = raw.get("weapon_type")
    damage_type = raw.get("damage_type")
    resource = raw.get("resource_cost")
    return AttackDefinition(
        target_defense=DefenseType(raw["target_defense"]),
        range=RangeClass(raw["range"]),
        weapon_type=WeaponType(weapon_type) if weapon_type else None,
        base_damage=raw.get("base_damage"),
        damage_type=DamageType(damage_type) if damage_type else None,
        damage_scaling=tuple(
            DamageScaling(tier=int(s["tier"]), damage=s["damage"])
            for s in raw.get("damage_scaling", [])
        ),
        conditional_advantages=tuple(
            ConditionalAdvantage(condition=a["condition"], value=int(a["value"]))
            for a in raw.get("conditional_advantages", [])
        ),
        resource_cost=(
            ResourceCost(type=ResourceType(resource["type"]), amount=int(resource["amount"]))
            if resource
            else None
        ),
        special_mechanics=tuple(raw.get("special_mechanics", [])),
    )


def talent_from_dict(raw: dict[str, Any]) -> TalentRecord:
    """Build a TalentRecord. Raises KeyError/ValueError/TypeError on bad data."""
    attack = raw.get("attack_definition")
    stance = raw.get("stance")
    return TalentRecord(
        id=raw["id"],
        name=raw["name"],
        description=raw.get("description", ""),
        action_cost=ActionCost.parse(raw["action_cost"]),
        tier=int(raw.get("tier", 0)),
        prerequisites=tuple(_prerequisite(p) for p in raw.get("prerequisites", [])),
        bonuses=tuple(_bonus(b) for b in raw.get("bonuses", [])),
        other_effects=tuple(raw.get("other_effects", [])),
        special_activation=raw.get("special_activation"),
        grants_advantage=tuple(raw.get("grants_advantage", [])),
        grants_disadvantage=tuple(raw.get("grants_disadvantage", [])),
        stance=bool(stance) if stance is not None else None,
        expertise_grants=tuple(_expertise_grant(g) for g in raw.get("expertise_grants", [])),
        trait_grants=tuple(_trait_grant(g) for g in raw.get("trait_grants", [])),
        attack_definition=_attack_definition(attack) if attack else None,
    )


def tree_from_dict(raw: dict[str, Any], on_error=None) -> TalentTree:
    """Nodes that fail to parse are passed to `on_error` and skipped."""
    nodes = []
    for node in raw.get("nodes", []):
        try:
            nodes.append(talent_from_dict(node))
        except (KeyError, ValueError, TypeError) as e:
            if on_error is None:
                raise
            on_error(node, e)
    return TalentTree(path_name=raw["path_name"], nodes=tuple(nodes))


def path_from_dict(raw: dict[str, Any], on_error=None) -> TalentPath:
    loose = []
    for node in raw.get("talent_nodes", []):
        try:
            loose.append(talent_from_dict(node))
        except (KeyError, ValueError, TypeError) as e:
            if on_error is None:
                raise
            on_error(node, e)
    return TalentPath(
        name=raw["name"],
        trees=tuple(tree_from_dict(t, on_error) for t in raw.get("trees", [])),
        talent_nodes=tuple(loose),
    )
