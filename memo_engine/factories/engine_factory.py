"""
Factory for creating and wiring components of the memo engine.

This module handles the creation and dependency injection for the storage
adapter, the repository and the view services.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from memo_engine.adapters.file_adapter import FileStorageAdapter
from memo_engine.adapters.memory_adapter import InMemoryStorageAdapter
from memo_engine.adapters.mongodb_adapter import MongoDBAdapter
from memo_engine.interfaces.providers.data_storage import KeyValueStorageProvider
from memo_engine.repositories.memo import DEFAULT_STORAGE_KEY, MemoRepository
from memo_engine.services.calendar import CalendarService
from memo_engine.services.highlight import DayHighlightSet
from memo_engine.services.images import ImageService
from memo_engine.services.search import SearchService
from memo_engine.services.selection import MemoSelection

# Setup logger for this module
logger = logging.getLogger(__name__)


@dataclass
class EngineComponents:
    """Wired components of one engine instance."""

    repository: MemoRepository
    search_service: SearchService = field(default_factory=SearchService)
    calendar_service: CalendarService = field(default_factory=CalendarService)
    image_service: ImageService = field(default_factory=ImageService)
    highlights: DayHighlightSet = field(default_factory=DayHighlightSet)
    selection: MemoSelection = field(default_factory=MemoSelection)


class MemoEngineFactory:
    """Factory for creating and wiring components of the memo engine."""

    @staticmethod
    def create_storage(storage_config: Dict[str, Any]) -> KeyValueStorageProvider:
        """Instantiate the storage adapter named by storage_config["type"]."""
        storage_type = storage_config.get("type", "memory")

        if storage_type == "memory":
            logger.info("Using in-memory storage")
            return InMemoryStorageAdapter()

        if storage_type == "file":
            if "path" not in storage_config:
                raise ValueError("File storage path is required.")
            logger.info(f"Using file storage at {storage_config['path']}")
            return FileStorageAdapter(base_path=storage_config["path"])

        if storage_type == "mongo":
            if "connection_string" not in storage_config:
                raise ValueError("MongoDB connection string is required.")
            if "database" not in storage_config:
                raise ValueError("MongoDB database name is required.")
            logger.info(f"Using MongoDB storage in database {storage_config['database']}")
            return MongoDBAdapter(
                connection_string=storage_config["connection_string"],
                database_name=storage_config["database"],
                collection_name=storage_config.get("collection", "kv_store"),
            )

        raise ValueError(f"Unknown storage type: {storage_type}")

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> EngineComponents:
        """Create the engine components from configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Wired EngineComponents
        """
        storage_config = config.get("storage", {})
        storage = MemoEngineFactory.create_storage(storage_config)

        repository = MemoRepository(
            storage=storage,
            storage_key=storage_config.get("key", DEFAULT_STORAGE_KEY),
        )

        calendar_config = config.get("calendar", {})
        highlights = DayHighlightSet(calendar_config.get("highlighted_days"))

        return EngineComponents(repository=repository, highlights=highlights)
