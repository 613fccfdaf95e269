from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from memo_engine.domains.memos import ImageAttachment, MemoDraft, MemoPatch, MemoRecord


class MemoRepository(ABC):
    """Interface for the memo collection store."""

    @property
    @abstractmethod
    def snapshot(self) -> List[MemoRecord]:
        """Collection as of the last successful load or mutation."""
        pass

    @abstractmethod
    async def load_all(self) -> List[MemoRecord]:
        """Load the full persisted collection."""
        pass

    @abstractmethod
    async def get(self, memo_id: str) -> MemoRecord:
        """Load a single memo by id."""
        pass

    @abstractmethod
    async def create(self, draft: MemoDraft) -> MemoRecord:
        """Append a new memo built from draft."""
        pass

    @abstractmethod
    async def update(self, memo_id: str, patch: MemoPatch) -> MemoRecord:
        """Apply patch to an existing memo."""
        pass

    @abstractmethod
    async def toggle_like(self, memo_id: str) -> MemoRecord:
        """Flip the pin flag of a memo."""
        pass

    @abstractmethod
    async def delete(self, memo_id: str) -> bool:
        """Delete one memo. Unknown ids are a no-op."""
        pass

    @abstractmethod
    async def delete_batch(self, memo_ids: Iterable[str]) -> int:
        """Delete every memo whose id is in memo_ids."""
        pass

    @abstractmethod
    async def add_images(
        self, memo_id: str, images: List[ImageAttachment]
    ) -> MemoRecord:
        """Append image attachments to a memo."""
        pass

    @abstractmethod
    async def remove_image(self, memo_id: str, image_id: str) -> MemoRecord:
        """Remove one image attachment from a memo."""
        pass

    @abstractmethod
    async def retag_image(
        self, memo_id: str, image_id: str, tag: Optional[str]
    ) -> MemoRecord:
        """Replace the caption of one image attachment."""
        pass
