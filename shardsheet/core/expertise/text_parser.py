"""Legacy narrative effect parsing.

Older talent records describe expertise grants only in prose, e.g.
"Gain Light Weaponry or Heavy Weaponry expertise". Each string is tried
against the patterns below in order; the first one that yields a grant wins
and strings that match nothing are skipped.
"""

from __future__ import annotations

import re

from .categories import expertises_for_category
from .models import ExpertiseGrant

# "... in A, B, or C (choose one)"
_CHOOSE_ONE_SUFFIX = re.compile(r"(?:gain.*?in\s+)?([^.()]+?)\s*\(choose\s+one\)", re.I)
# "choose one: A, B" / "choose two: A, B, C"
_CHOOSE_LIST = re.compile(r"choose\s+(one|two):\s*(.+)", re.I)
# "Gain A or B expertise"
_EITHER_OR = re.compile(r"gain\s+(.+?)\s+or\s+(.+?)\s+expertise", re.I)
# "gain a weapon expertise"
_CATEGORY = re.compile(r"gain\s+an?\s+(\w+)\s+expertise", re.I)
# "Gain Sleight of Hand expertise"
_SPECIFIC = re.compile(r"gain\s+([A-Z][a-zA-Z\s]+?)\s+expertise", re.I)

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_SLASH_WITH_SUFFIX = re.compile(r"^(.+?)/(.+?)\s+(\S+)$")
_LIST_SEPARATOR = re.compile(r",|\s+and\s+|\s+or\s+", re.I)
_LEADING_ARTICLE = re.compile(r"^(a|an|the)\s", re.I)
_INDEFINITE_ARTICLE = re.compile(r"^(a|an)\s", re.I)


def _capitalize_words(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def split_option_list(text: str) -> list[str]:
    """Split "A, B, or C" / "A/B/C Suffix" into title-cased names."""
    cleaned = _PARENTHETICAL.sub("", text).strip()

    if _SLASH_WITH_SUFFIX.match(cleaned):
        prefix_part = cleaned.split()[0]
        suffix = cleaned.split()[-1]
        return [
            _capitalize_words(f"{prefix.strip()} {suffix}")
            for prefix in prefix_part.split("/")
        ]

    parts = (p.strip() for p in _LIST_SEPARATOR.split(cleaned))
    return [
        _capitalize_words(p)
        for p in parts
        if p and not _LEADING_ARTICLE.match(p)
    ]


def _parse_one(effect: str) -> ExpertiseGrant | None:
    match = _CHOOSE_ONE_SUFFIX.search(effect)
    if match:
        options = split_option_list(match.group(1))
        if options:
            return ExpertiseGrant.choice(options, 1)

    match = _CHOOSE_LIST.search(effect)
    if match:
        count = 1 if match.group(1).lower() == "one" else 2
        options = split_option_list(match.group(2))
        if options:
            return ExpertiseGrant.choice(options, count)

    match = _EITHER_OR.search(effect)
    if match:
        return ExpertiseGrant.choice([match.group(1).strip(), match.group(2).strip()], 1)

    match = _CATEGORY.search(effect)
    if match:
        options = expertises_for_category(match.group(1))
        if options:
            return ExpertiseGrant.choice(options, 1)

    match = _SPECIFIC.search(effect)
    if match:
        name = match.group(1).strip()
        if not _INDEFINITE_ARTICLE.match(name):
            return ExpertiseGrant.single(name)

    return None


def parse_expertise_grants(effects: list[str] | tuple[str, ...]) -> list[ExpertiseGrant]:
    """One grant at most per effect string, in input order."""
    grants: list[ExpertiseGrant] = []
    for effect in effects:
        grant = _parse_one(effect)
        if grant is not None:
            grants.append(grant)
    return grants


def grants_expertise(effects: list[str] | tuple[str, ...]) -> bool:
    return len(parse_expertise_grants(effects)) > 0


def all_expertise_options(grants: list[ExpertiseGrant]) -> list[str]:
    """Every expertise named by the grants, deduplicated, first seen first."""
    seen: dict[str, None] = {}
    for grant in grants:
        for name in grant.expertises:
            seen.setdefault(name, None)
    return list(seen)
