from ariadne_storage.storage.ariadne import AriadneStorage
from ariadne_storage.storage.base import Metadata, StorageAdapter, WriteOptions

__all__ = ["AriadneStorage", "Metadata", "StorageAdapter", "WriteOptions"]
