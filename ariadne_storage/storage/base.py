"""Abstract base classes and helpers for storage adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, BinaryIO, Dict, List, Literal, Optional, Union

Visibility = Literal["public", "private"]
Contents = Union[bytes, BinaryIO]


@dataclass(frozen=True)
class Metadata:
    """Normalized description of a stored file or directory."""

    path: str
    basename: str
    type: Literal["file", "dir"]
    mimetype: str
    size: int
    timestamp: int
    visibility: str = "public"
    contents: Optional[Contents] = None

    def to_dict(self) -> Dict[str, Any]:
        record = {item.name: getattr(self, item.name) for item in fields(self)}
        if record["contents"] is None:
            del record["contents"]
        return record


@dataclass(frozen=True)
class WriteOptions:
    """Per-call options for write-style operations."""

    mimetype: Optional[str] = None


MetadataResult = Union[Metadata, Literal[False]]


class StorageAdapter(ABC):
    """Path-oriented storage contract.

    Failures are reported as ``False`` (or an empty list for listings) rather
    than raised, so callers can use every operation without a try block.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:  # pragma: no cover - interface contract
        """Return True if something is stored at ``path``."""

    @abstractmethod
    def read(self, path: str) -> MetadataResult:
        """Return metadata with the raw ``contents`` of a file."""

    @abstractmethod
    def read_stream(self, path: str) -> MetadataResult:
        """Return metadata whose ``contents`` is a readable binary stream."""

    @abstractmethod
    def write(
        self, path: str, contents: bytes, options: Optional[WriteOptions] = None
    ) -> MetadataResult:
        """Store ``contents`` at ``path``, creating parent directories."""

    @abstractmethod
    def write_stream(
        self, path: str, stream: BinaryIO, options: Optional[WriteOptions] = None
    ) -> MetadataResult:
        """Store the rest of ``stream`` at ``path``."""

    def update(
        self, path: str, contents: bytes, options: Optional[WriteOptions] = None
    ) -> MetadataResult:
        return self.write(path, contents, options)

    def update_stream(
        self, path: str, stream: BinaryIO, options: Optional[WriteOptions] = None
    ) -> MetadataResult:
        return self.write_stream(path, stream, options)

    @abstractmethod
    def copy(self, path: str, new_path: str) -> bool:
        """Copy a file or directory to ``new_path``."""

    @abstractmethod
    def rename(self, path: str, new_path: str) -> bool:
        """Move a file or directory to ``new_path``."""

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete the object at ``path``."""

    @abstractmethod
    def delete_dir(self, path: str) -> bool:
        """Delete the directory at ``path``."""

    @abstractmethod
    def create_dir(self, path: str, options: Optional[WriteOptions] = None) -> MetadataResult:
        """Create a directory and any missing parents (idempotent)."""

    @abstractmethod
    def list_contents(self, path: str = "", recursive: bool = False) -> List[Metadata]:
        """List the entries below ``path``."""

    @abstractmethod
    def get_metadata(self, path: str) -> MetadataResult:
        """Return metadata for ``path``."""

    def get_mimetype(self, path: str) -> MetadataResult:
        return self.get_metadata(path)

    def get_size(self, path: str) -> MetadataResult:
        return self.get_metadata(path)

    def get_timestamp(self, path: str) -> MetadataResult:
        return self.get_metadata(path)

    def get_visibility(self, path: str) -> MetadataResult:
        return self.get_metadata(path)

    @abstractmethod
    def set_visibility(self, path: str, visibility: Visibility) -> MetadataResult:
        """Change the visibility of ``path``."""
