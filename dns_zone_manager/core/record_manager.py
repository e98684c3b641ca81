"""
Record Manager - Core logic for DNS record reconciliation

This module computes the minimal set of additions and deletions between the
records a caller wants added and the records it wants removed, so that
re-submitting an unchanged record is a no-op.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .record import Record, as_record_list

logger = logging.getLogger(__name__)


@dataclass
class ChangeSet:
    """Net additions and deletions for one change."""

    additions: List[Record] = field(default_factory=list)
    deletions: List[Record] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.additions and not self.deletions

    def extend(self, other: "ChangeSet") -> "ChangeSet":
        """Concatenate another change set onto this one, in order."""
        self.additions.extend(other.additions)
        self.deletions.extend(other.deletions)
        return self


class RecordManager:
    """Computes record changes."""

    def diff(self, to_add, to_remove) -> ChangeSet:
        """
        Compute the net change between records to add and records to remove.

        Args:
            to_add: A Record or iterable of Records to add
            to_remove: A Record or iterable of Records to remove

        Returns:
            ChangeSet with order-preserving additions and deletions. Records
            appearing in both inputs cancel out of both.
        """
        to_add = as_record_list(to_add)
        to_remove = as_record_list(to_remove)

        add_set = set(to_add)
        remove_set = set(to_remove)

        additions = [r for r in to_add if r not in remove_set]
        deletions = [r for r in to_remove if r not in add_set]

        unchanged = len(to_add) - len(additions)
        logger.debug(
            f"Diff complete: {len(additions)} additions, {len(deletions)} "
            f"deletions, {unchanged} unchanged"
        )
        if not additions and not deletions:
            logger.info("No changes required - records are up to date")

        return ChangeSet(additions, deletions)

    def replace_set(self, current: List[Record], desired: List[Record]) -> ChangeSet:
        """Change that turns the ``current`` records into ``desired``."""
        return self.diff(desired, current)
