"""
Simplified client interface for the memo engine.

This module provides one object that UI code talks to: it owns the
repository, keeps the latest snapshot and derives list and calendar views
from it.
"""

import importlib.util
import json
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from memo_engine.domains.calendar import CalendarMonth
from memo_engine.domains.errors import ValidationError
from memo_engine.domains.memos import ImageAttachment, MemoDraft, MemoPatch, MemoRecord
from memo_engine.factories.engine_factory import MemoEngineFactory
from memo_engine.interfaces.client.client import MemoEngine as MemoEngineInterface
from memo_engine.services.images import PickedImage
from memo_engine.services.search import ALL_CATEGORIES

logger = logging.getLogger(__name__)


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Read a JSON config file, or a Python file defining `config`."""
    if config_path.endswith(".json"):
        with open(config_path, "r") as f:
            return json.load(f)
    spec = importlib.util.spec_from_file_location("config", config_path)
    config_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(config_module)
    return config_module.config


class MemoEngine(MemoEngineInterface):
    """Facade over the memo repository and its derived views."""

    def __init__(self, config_path: str = None, config: Dict[str, Any] = None):
        """Initialize the engine from config file or dictionary.

        Args:
            config_path: Path to configuration file (JSON or Python)
            config: Configuration dictionary
        """
        if config is None and not config_path:
            raise ValueError("Either config or config_path must be provided")

        if config_path:
            config = load_config_file(config_path)

        components = MemoEngineFactory.create_from_config(config)
        self.repository = components.repository
        self.search_service = components.search_service
        self.calendar_service = components.calendar_service
        self.image_service = components.image_service
        self.highlights = components.highlights
        self.selection = components.selection

    @property
    def snapshot(self) -> List[MemoRecord]:
        return self.repository.snapshot

    async def refresh(self) -> List[MemoRecord]:
        """Reload the snapshot from storage.

        On StorageReadError the snapshot is left empty and the error is
        re-raised for the caller to report.
        """
        return await self.repository.load_all()

    async def get_memo(self, memo_id: str) -> MemoRecord:
        return await self.repository.get(memo_id)

    async def create_memo(self, draft: Union[MemoDraft, Dict[str, Any]]) -> MemoRecord:
        return await self.repository.create(self._coerce(MemoDraft, draft))

    async def update_memo(
        self, memo_id: str, patch: Union[MemoPatch, Dict[str, Any]]
    ) -> MemoRecord:
        return await self.repository.update(memo_id, self._coerce(MemoPatch, patch))

    async def toggle_like(self, memo_id: str) -> MemoRecord:
        return await self.repository.toggle_like(memo_id)

    async def delete_memo(self, memo_id: str) -> bool:
        return await self.repository.delete(memo_id)

    async def delete_memos(self, memo_ids: Iterable[str]) -> int:
        return await self.repository.delete_batch(memo_ids)

    async def delete_selected(self) -> int:
        return await self.selection.delete_selected(self.repository)

    async def attach_images(
        self, memo_id: str, picked: Iterable[PickedImage]
    ) -> MemoRecord:
        """Wrap picker results and append them to a memo."""
        images = self.image_service.wrap(picked)
        return await self.repository.add_images(memo_id, images)

    async def add_images(self, memo_id: str, images: List[ImageAttachment]) -> MemoRecord:
        return await self.repository.add_images(memo_id, images)

    async def remove_image(self, memo_id: str, image_id: str) -> MemoRecord:
        return await self.repository.remove_image(memo_id, image_id)

    async def retag_image(self, memo_id: str, image_id: str, tag: str) -> MemoRecord:
        return await self.repository.retag_image(memo_id, image_id, tag)

    def list_memos(self, query: str = "", category: str = ALL_CATEGORIES) -> List[MemoRecord]:
        return self.search_service.search(self.snapshot, query=query, category=category)

    def categories(self) -> List[str]:
        return self.search_service.categories(self.snapshot)

    def calendar(self, year: Optional[int] = None, month: Optional[int] = None) -> CalendarMonth:
        """Month grid for the current snapshot, defaulting to this month."""
        today = date.today()
        year = today.year if year is None else year
        month = today.month - 1 if month is None else month
        return self.calendar_service.build_month(
            year, month, self.snapshot, highlighted_days=self.highlights.days
        )

    def memos_on_date(self, target: Union[str, date]) -> List[MemoRecord]:
        """Memos of one day, pinned first and newest first."""
        return self.calendar_service.memos_on_date(self.list_memos(), target)

    @staticmethod
    def _coerce(model, value):
        if isinstance(value, model):
            return value
        try:
            return model.model_validate(value)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e
