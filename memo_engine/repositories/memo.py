"""
Memo repository.

The whole memo collection lives under one storage key. Every mutation loads
the full collection, applies the change in memory and writes the full
collection back. Mutations are serialized by an asyncio lock so two
read-modify-write cycles never interleave within a process.
"""
import asyncio
import json
import logging
from typing import Callable, Iterable, List, Optional, Tuple

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from memo_engine.domains.errors import (
    NotFoundError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)
from memo_engine.domains.memos import (
    ImageAttachment,
    MemoDraft,
    MemoPatch,
    MemoRecord,
    generate_id,
    now_ms,
)
from memo_engine.interfaces.providers.data_storage import KeyValueStorageProvider
from memo_engine.interfaces.repositories.memo import MemoRepository as MemoRepositoryInterface

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "memos"

_collection_adapter = TypeAdapter(List[MemoRecord])


def decode_collection(raw: Optional[bytes]) -> List[MemoRecord]:
    """Parse stored bytes into memo records.

    Args:
        raw: Stored value, or None if the key was never written

    Returns:
        The memo collection, empty if nothing was stored

    Raises:
        StorageReadError: If the bytes are not a well-formed collection
    """
    if raw is None:
        return []
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StorageReadError(f"Stored memos are not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise StorageReadError(
            f"Stored memos must be a JSON array, got {type(data).__name__}"
        )
    try:
        memos = _collection_adapter.validate_python(data, strict=True)
    except PydanticValidationError as e:
        raise StorageReadError(f"Stored memos have an unexpected shape: {e}") from e

    seen = set()
    for memo in memos:
        if memo.id in seen:
            raise StorageReadError(f"Duplicate memo id in storage: {memo.id}")
        seen.add(memo.id)
    return memos


def encode_collection(memos: List[MemoRecord]) -> bytes:
    """Serialize memo records to the persisted JSON array."""
    return json.dumps(
        [memo.to_storage() for memo in memos], ensure_ascii=False
    ).encode("utf-8")


class MemoRepository(MemoRepositoryInterface):
    """Key/value backed implementation of the memo repository."""

    def __init__(
        self,
        storage: KeyValueStorageProvider,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = generate_id,
    ):
        """Initialize the repository.

        Args:
            storage: Key/value store holding the serialized collection
            storage_key: Key the collection is stored under
            clock: Returns the current time in epoch milliseconds
            id_factory: Returns a new unique memo id
        """
        self.storage = storage
        self.storage_key = storage_key
        self.clock = clock
        self.id_factory = id_factory
        self._lock = asyncio.Lock()
        self._snapshot: List[MemoRecord] = []

    @property
    def snapshot(self) -> List[MemoRecord]:
        return [memo.model_copy(deep=True) for memo in self._snapshot]

    # Storage cycle

    def _read(self) -> List[MemoRecord]:
        try:
            raw = self.storage.get(self.storage_key)
        except Exception as e:
            logger.error(f"Error reading '{self.storage_key}': {e}")
            self._snapshot = []
            raise StorageReadError(f"Could not read stored memos: {e}") from e
        try:
            memos = decode_collection(raw)
        except StorageReadError as e:
            logger.error(f"Error parsing '{self.storage_key}': {e}")
            self._snapshot = []
            raise
        self._snapshot = memos
        return [memo.model_copy(deep=True) for memo in memos]

    def _write(self, memos: List[MemoRecord]) -> None:
        payload = encode_collection(memos)
        try:
            ok = self.storage.set(self.storage_key, payload)
        except Exception as e:
            logger.error(f"Error writing '{self.storage_key}': {e}")
            raise StorageWriteError(f"Could not write memos: {e}") from e
        if not ok:
            logger.error(f"Storage rejected write of '{self.storage_key}'")
            raise StorageWriteError("Storage rejected the write")
        self._snapshot = list(memos)

    async def _mutate_one(
        self, memo_id: str, apply: Callable[[MemoRecord], MemoRecord]
    ) -> MemoRecord:
        """Run one load/locate/apply/persist cycle for a single memo."""
        async with self._lock:
            memos = self._read()
            index, memo = self._locate(memos, memo_id)
            updated = apply(memo)
            memos[index] = updated
            self._write(memos)
            return updated.model_copy(deep=True)

    @staticmethod
    def _locate(memos: List[MemoRecord], memo_id: str) -> Tuple[int, MemoRecord]:
        for i, memo in enumerate(memos):
            if memo.id == memo_id:
                return i, memo
        raise NotFoundError(f"Memo not found: {memo_id}")

    # Reads

    async def load_all(self) -> List[MemoRecord]:
        """Return the persisted collection, empty if nothing was ever stored.

        Raises:
            StorageReadError: If the stored value cannot be parsed
        """
        async with self._lock:
            return self._read()

    async def get(self, memo_id: str) -> MemoRecord:
        memos = await self.load_all()
        return self._locate(memos, memo_id)[1]

    # Mutations

    async def create(self, draft: MemoDraft) -> MemoRecord:
        """Append a new memo built from draft.

        Raises:
            ValidationError: If the draft has no text and no images
        """
        if draft.is_empty():
            raise ValidationError("A memo needs a title, content, category or image")

        async with self._lock:
            memos = self._read()
            existing = {memo.id for memo in memos}
            memo_id = self.id_factory()
            while memo_id in existing:
                memo_id = self.id_factory()

            memo = MemoRecord(
                id=memo_id,
                title=draft.title,
                content=draft.content,
                category=draft.category,
                images=[image.model_copy() for image in draft.images],
                timestamp=self.clock(),
                is_liked=False,
            )
            memos.append(memo)
            self._write(memos)
            logger.info(f"Created memo {memo.id} ({len(memos)} total)")
            return memo.model_copy(deep=True)

    async def update(self, memo_id: str, patch: MemoPatch) -> MemoRecord:
        """Apply the explicitly set fields of patch. The timestamp is kept.

        Raises:
            NotFoundError: If memo_id does not exist
            ValidationError: If the result would be an empty memo
        """
        changes = patch.changes()
        if "images" in changes:
            changes["images"] = [image.model_copy() for image in changes["images"]]

        def apply(memo: MemoRecord) -> MemoRecord:
            updated = memo.model_copy(update=changes, deep=True)
            if updated.is_empty():
                raise ValidationError("A memo needs a title, content, category or image")
            return updated

        updated = await self._mutate_one(memo_id, apply)
        logger.info(f"Updated memo {memo_id}: {sorted(changes)}")
        return updated

    async def toggle_like(self, memo_id: str) -> MemoRecord:
        return await self._mutate_one(
            memo_id, lambda memo: memo.model_copy(update={"is_liked": not memo.is_liked})
        )

    async def delete(self, memo_id: str) -> bool:
        """Delete one memo. Returns False when the id did not exist."""
        return await self.delete_batch([memo_id]) == 1

    async def delete_batch(self, memo_ids: Iterable[str]) -> int:
        """Delete every memo whose id is in memo_ids.

        Unknown ids are ignored, so repeating a call is a no-op.

        Returns:
            Number of memos removed

        Raises:
            ValidationError: If memo_ids is a bare string
        """
        if isinstance(memo_ids, str):
            raise ValidationError("memo_ids must be a collection of ids, not a single string")
        targets = set(memo_ids)
        if not targets:
            return 0

        async with self._lock:
            memos = self._read()
            remaining = [memo for memo in memos if memo.id not in targets]
            removed = len(memos) - len(remaining)
            if removed == 0:
                logger.warning(f"No memos matched delete request for {len(targets)} id(s)")
                return 0
            self._write(remaining)
            logger.info(f"Deleted {removed} memo(s), {len(remaining)} remaining")
            return removed

    # Image attachments

    async def add_images(
        self, memo_id: str, images: List[ImageAttachment]
    ) -> MemoRecord:
        """Append images in order.

        Raises:
            NotFoundError: If memo_id does not exist
            ValidationError: If an image id is already used by the memo
        """
        def apply(memo: MemoRecord) -> MemoRecord:
            known = {image.id for image in memo.images}
            for image in images:
                if image.id in known:
                    raise ValidationError(f"Duplicate image id: {image.id}")
                known.add(image.id)
            return memo.model_copy(
                update={"images": memo.images + [image.model_copy() for image in images]}
            )

        return await self._mutate_one(memo_id, apply)

    async def remove_image(self, memo_id: str, image_id: str) -> MemoRecord:
        """Remove one image.

        Raises:
            NotFoundError: If the memo or the image does not exist
        """
        def apply(memo: MemoRecord) -> MemoRecord:
            if memo.find_image(image_id) is None:
                raise NotFoundError(f"Image {image_id} not found on memo {memo_id}")
            return memo.model_copy(
                update={"images": [image for image in memo.images if image.id != image_id]}
            )

        return await self._mutate_one(memo_id, apply)

    async def retag_image(
        self, memo_id: str, image_id: str, tag: Optional[str]
    ) -> MemoRecord:
        def apply(memo: MemoRecord) -> MemoRecord:
            if memo.find_image(image_id) is None:
                raise NotFoundError(f"Image {image_id} not found on memo {memo_id}")
            images = [
                image.model_copy(update={"tag": tag or ""}) if image.id == image_id else image
                for image in memo.images
            ]
            return memo.model_copy(update={"images": images})

        return await self._mutate_one(memo_id, apply)


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "MemoRepository",
    "decode_collection",
    "encode_collection",
]
