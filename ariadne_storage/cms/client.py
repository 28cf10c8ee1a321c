"""Interface the adapter expects from an Ariadne CMS connection."""

from __future__ import annotations

import posixpath
from typing import Any, Mapping, Optional, Protocol, Sequence

from ariadne_storage.cms.nodes import Node

ACTION_NEW = "system.new.phtml"
ACTION_COPY = "system.copyto.phtml"
ACTION_RENAME = "system.rename.phtml"
ACTION_DELETE = "system.delete.phtml"


class CmsError(Exception):
    """Raised by a CMS client when an object call fails."""


class CmsNotFoundError(CmsError):
    pass


class CmsConflictError(CmsError):
    pass


class CmsClient(Protocol):
    """Object calls the storage adapter needs from Ariadne.

    All paths are absolute CMS paths as produced by :func:`make_path`.
    """

    def resolve(self, path: str) -> Optional[Node]:  # pragma: no cover - interface contract
        """Return the node at ``path`` or ``None``."""

    def exists(self, path: str) -> bool:  # pragma: no cover - interface contract
        """Return True if a node lives at ``path``."""

    def call(
        self, path: str, action: str, params: Optional[Mapping[str, Any]] = None
    ) -> None:  # pragma: no cover - interface contract
        """Run a named action template on the node at ``path``."""

    def list(self, path: str) -> Sequence[Node]:  # pragma: no cover - interface contract
        """Return the direct children of the node at ``path``."""

    def save_content(self, path: str, data: bytes) -> None:  # pragma: no cover
        """Replace the content of the file node at ``path``."""

    def get_content(self, path: str) -> bytes:  # pragma: no cover - interface contract
        """Return the raw content of the file node at ``path``."""

    def get_permissions(self, path: str) -> Mapping[str, Any]:  # pragma: no cover
        """Return the grants on the node at ``path``."""


def make_path(path: str) -> str:
    """Normalize a CMS path to Ariadne's ``/a/b/`` form."""
    normalized = posixpath.normpath("/" + path.strip("/"))
    if normalized == "/":
        return normalized
    return normalized + "/"
