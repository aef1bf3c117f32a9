"""Expertise grant resolution.

A talent can declare expertise grants two ways: structured
`expertise_grants` on the record, or prose in `other_effects`. Both are
sources behind one interface; the resolver asks each in order and uses the
first that supports the talent, so structured data always wins.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..talent.models import ExpertiseGrantKind, ExpertiseGrantSpec, TalentRecord
from .categories import expertises_for_category
from .models import ExpertiseGrant
from .text_parser import parse_expertise_grants

logger = logging.getLogger(__name__)


class ExpertiseGrantSource(ABC):
    """One way of reading expertise grants off a talent."""

    @abstractmethod
    def supports(self, talent: TalentRecord) -> bool:
        ...

    @abstractmethod
    def grants_for(self, talent: TalentRecord) -> list[ExpertiseGrant]:
        ...


class StructuredGrantSource(ExpertiseGrantSource):
    def supports(self, talent: TalentRecord) -> bool:
        return len(talent.expertise_grants) > 0

    def grants_for(self, talent: TalentRecord) -> list[ExpertiseGrant]:
        grants: list[ExpertiseGrant] = []
        for spec in talent.expertise_grants:
            grant = self._normalize(spec)
            if grant is None:
                logger.debug("Dropped empty expertise grant on %s: %s", talent.id, spec)
                continue
            grants.append(grant)
        return grants

    @staticmethod
    def _normalize(spec: ExpertiseGrantSpec) -> ExpertiseGrant | None:
        if spec.kind == ExpertiseGrantKind.FIXED:
            return ExpertiseGrant.single(*spec.expertises) if spec.expertises else None
        if spec.kind == ExpertiseGrantKind.CHOICE:
            if not spec.options:
                return None
            return ExpertiseGrant.choice(spec.options, spec.choice_count or 1)
        # CATEGORY
        options = expertises_for_category(spec.category or "")
        return ExpertiseGrant.choice(options, 1) if options else None


class NarrativeGrantSource(ExpertiseGrantSource):
    def supports(self, talent: TalentRecord) -> bool:
        return len(talent.other_effects) > 0

    def grants_for(self, talent: TalentRecord) -> list[ExpertiseGrant]:
        return parse_expertise_grants(talent.other_effects)


class ExpertiseGrantResolver:
    """Normalizes a talent's expertise grants into single/choice grants."""

    def __init__(self, sources: list[ExpertiseGrantSource] | None = None) -> None:
        self._sources = sources or [StructuredGrantSource(), NarrativeGrantSource()]

    def resolve(self, talent: TalentRecord) -> list[ExpertiseGrant]:
        for source in self._sources:
            if source.supports(talent):
                return source.grants_for(talent)
        return []
