"""Storage adapter that exposes an Ariadne CMS through a path-oriented API."""

from ariadne_storage.storage import AriadneStorage, Metadata, StorageAdapter, WriteOptions

__all__ = ["AriadneStorage", "Metadata", "StorageAdapter", "WriteOptions"]
