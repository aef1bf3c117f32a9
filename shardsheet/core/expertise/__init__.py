"""Expertise grants: structured declarations and legacy text"""

from .categories import expertises_for_category
from .models import ExpertiseGrant, GrantType
from .resolver import (
    ExpertiseGrantResolver,
    ExpertiseGrantSource,
    NarrativeGrantSource,
    StructuredGrantSource,
)
from .text_parser import (
    all_expertise_options,
    grants_expertise,
    parse_expertise_grants,
    split_option_list,
)

__all__ = [
    "ExpertiseGrant",
    "GrantType",
    "ExpertiseGrantResolver",
    "ExpertiseGrantSource",
    "StructuredGrantSource",
    "NarrativeGrantSource",
    "expertises_for_category",
    "parse_expertise_grants",
    "grants_expertise",
    "all_expertise_options",
    "split_option_list",
]
