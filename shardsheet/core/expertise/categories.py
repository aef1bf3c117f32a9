"""Expertise category expansion table"""

from __future__ import annotations

WEAPON_EXPERTISES: tuple[str, ...] = (
    "Light Weaponry",
    "Heavy Weaponry",
    "Special Weapons",
)

CRAFTING_EXPERTISES: tuple[str, ...] = (
    "Armor Crafting",
    "Weapon Crafting",
    "Equipment Crafting",
    "Fabrial Crafting",
)

CULTURAL_EXPERTISES: tuple[str, ...] = (
    "Alethi",
    "Azish",
    "Herdazian",
    "Iriali",
    "Kharbranthian",
    "Listener",
    "Natan",
    "Reshi",
    "Shin",
    "Thaylen",
    "Unkalaki",
    "Veden",
    "Wayfarer",
)

_CATEGORIES: dict[str, tuple[str, ...]] = {
    "weapon": WEAPON_EXPERTISES,
    "armor": ("Armor Proficiency",),
    "utility": CRAFTING_EXPERTISES,
    "crafting": CRAFTING_EXPERTISES,
    "cultural": CULTURAL_EXPERTISES,
}


def expertises_for_category(category: str) -> list[str]:
    """Candidates for a category keyword. Unknown keywords give []."""
    return list(_CATEGORIES.get(category.strip().lower(), ()))
