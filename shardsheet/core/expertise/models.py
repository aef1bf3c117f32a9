"""Normalized expertise grant"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GrantType(str, Enum):
    SINGLE = "single"  # every listed expertise is granted
    CHOICE = "choice"  # pick choice_count of the listed expertises


@dataclass(frozen=True)
class ExpertiseGrant:
    type: GrantType
    expertises: tuple[str, ...]
    choice_count: Optional[int] = None  # CHOICE only

    @classmethod
    def single(cls, *expertises: str) -> ExpertiseGrant:
        return cls(GrantType.SINGLE, tuple(expertises))

    @classmethod
    def choice(cls, expertises: list[str] | tuple[str, ...], count: int = 1) -> ExpertiseGrant:
        return cls(GrantType.CHOICE, tuple(expertises), count)
