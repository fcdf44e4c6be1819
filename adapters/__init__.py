from adapters.storage_adapter import LocalObjectStorage, StorageError, get_storage

__all__ = ["LocalObjectStorage", "StorageError", "get_storage"]
