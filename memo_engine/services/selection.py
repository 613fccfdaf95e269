"""
Multi-select state for the memo list.

Selecting a memo enters selection mode; deleting the selection removes the
selected memos in one batch and leaves selection mode.
"""
import logging
from typing import List

from memo_engine.interfaces.repositories.memo import MemoRepository

logger = logging.getLogger(__name__)


class MemoSelection:
    """Ordered set of selected memo ids."""

    def __init__(self):
        self._ids: List[str] = []

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    @property
    def active(self) -> bool:
        return bool(self._ids)

    def toggle(self, memo_id: str) -> bool:
        """Select memo_id if unselected, otherwise unselect it.

        Returns:
            True if memo_id is selected after the call
        """
        if memo_id in self._ids:
            self._ids.remove(memo_id)
            return False
        self._ids.append(memo_id)
        return True

    def clear(self) -> None:
        self._ids = []

    def __contains__(self, memo_id: object) -> bool:
        return memo_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    async def delete_selected(self, repository: MemoRepository) -> int:
        """Delete the selected memos and clear the selection.

        The selection is kept if the delete fails so the caller can retry.
        """
        if not self._ids:
            return 0
        removed = await repository.delete_batch(set(self._ids))
        logger.info(f"Deleted {removed} of {len(self._ids)} selected memo(s)")
        self.clear()
        return removed


__all__ = ["MemoSelection"]
