"""
MongoDB adapter for the memo engine.

This adapter implements the KeyValueStorageProvider interface for MongoDB,
storing each key as one document of a single collection.
"""
from typing import Optional

from pymongo import MongoClient

from memo_engine.interfaces.providers.data_storage import KeyValueStorageProvider


class MongoDBAdapter(KeyValueStorageProvider):
    """MongoDB implementation of KeyValueStorageProvider."""

    def __init__(
        self,
        connection_string: str,
        database_name: str,
        collection_name: str = "kv_store",
    ):
        self.client = MongoClient(connection_string)
        self.db = self.client[database_name]
        self.collection_name = collection_name

    @property
    def collection(self):
        return self.db[self.collection_name]

    def get(self, key: str) -> Optional[bytes]:
        document = self.collection.find_one({"_id": key})
        if document is None:
            return None
        return bytes(document["value"])

    def set(self, key: str, value: bytes) -> bool:
        # a single-document replace is atomic in MongoDB
        result = self.collection.replace_one(
            {"_id": key}, {"_id": key, "value": bytes(value)}, upsert=True
        )
        return result.acknowledged

    def delete(self, key: str) -> bool:
        result = self.collection.delete_one({"_id": key})
        return result.deleted_count == 1
