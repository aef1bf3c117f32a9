"""Talent catalog: flat id -> record index over every path and ancestry tree."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from .loader import path_from_dict, tree_from_dict
from .models import TalentPath, TalentRecord, TalentTree

logger = logging.getLogger(__name__)

# Ancestry trees folded into the catalog alongside the heroic paths
ANCESTRY_TREES: tuple[str, ...] = ("singer",)


class TalentCatalog:
    """
    Read-only talent index, built once at start-up.
    Records live in an arena list; `_index` maps id -> arena slot.
    Id collisions are not validated: the last record registered wins.
    """

    def __init__(self) -> None:
        self._records: list[TalentRecord] = []
        self._index: dict[str, int] = {}

    @classmethod
    def from_paths(
        cls,
        paths: Iterable[TalentPath],
        ancestry_trees: Iterable[TalentTree] = (),
    ) -> TalentCatalog:
        catalog = cls()
        for path in paths:
            catalog.add_path(path)
        for tree in ancestry_trees:
            catalog.add_tree(tree)
        return catalog

    def add_path(self, path: TalentPath) -> None:
        for tree in path.trees:
            self.add_tree(tree)
        for record in path.talent_nodes:
            self.add(record)

    def add_tree(self, tree: TalentTree) -> None:
        for record in tree.nodes:
            self.add(record)

    def add(self, record: TalentRecord) -> None:
        slot = self._index.get(record.id)
        if slot is not None:
            logger.debug("Talent id collision, replacing: %s", record.id)
            self._records[slot] = record
            return
        self._index[record.id] = len(self._records)
        self._records.append(record)

    def load_from_json(self, path: str | Path) -> int:
        """Load talents.json. Returns the catalog size afterwards.

        Top-level keys: "paths" (list of paths) and "ancestries"
        (name -> tree). Only ancestries listed in ANCESTRY_TREES are used.
        Malformed nodes are skipped with a warning.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw: dict[str, Any] = json.load(f)

        def _skip(node: dict, error: Exception) -> None:
            logger.warning("Failed to load talent: %s (%s)", node.get("id", "?"), error)

        for raw_path in raw.get("paths", []):
            self.add_path(path_from_dict(raw_path, on_error=_skip))

        ancestries: dict[str, Any] = raw.get("ancestries", {})
        for name in ANCESTRY_TREES:
            if name in ancestries:
                self.add_tree(tree_from_dict(ancestries[name], on_error=_skip))

        logger.info("Loaded %d talents from %s", self.count(), path)
        return self.count()

    def lookup(self, talent_id: str) -> Optional[TalentRecord]:
        """O(1) lookup. None when unknown."""
        slot = self._index.get(talent_id)
        return self._records[slot] if slot is not None else None

    def resolve_many(self, talent_ids: Iterable[str]) -> list[TalentRecord]:
        """Records for the given ids in catalog order. Unknown ids are dropped."""
        wanted = set(talent_ids)
        return [r for r in self._records if r.id in wanted]

    def all(self) -> list[TalentRecord]:
        return list(self._records)

    def count(self) -> int:
        return len(self._records)

    def __contains__(self, talent_id: object) -> bool:
        return talent_id in self._index
