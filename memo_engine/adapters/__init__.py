"""
Adapters for external storage systems.

These adapters implement the KeyValueStorageProvider interface defined in
memo_engine.interfaces and provide concrete key/value persistence.
"""
