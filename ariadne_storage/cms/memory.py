"""Dictionary-backed stand-in for an Ariadne store.

Useful for tests and for experimenting with the storage adapter without a
running CMS. Records use the same shape Ariadne returns, so every node still
goes through :func:`node_from_record`.
"""

from __future__ import annotations

import copy
import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional

from ariadne_storage.cms.client import (
    ACTION_COPY,
    ACTION_DELETE,
    ACTION_NEW,
    ACTION_RENAME,
    CmsConflictError,
    CmsError,
    CmsNotFoundError,
    make_path,
)
from ariadne_storage.cms.nodes import Node, NodeType, node_from_record

logger = logging.getLogger(__name__)

_NEW_RESERVED = {"arNewType", "arNewFilename"}


def _parent_of(path: str) -> str:
    return make_path(path.rstrip("/").rsplit("/", 1)[0])


class InMemoryCms:
    """Keep raw node records and file contents in plain dictionaries."""

    def __init__(self, default_locale: str = "en", clock: Callable[[], float] = time.time):
        self._clock = clock
        self._default_locale = default_locale
        self._records: Dict[str, Dict[str, Any]] = {}
        self._contents: Dict[str, bytes] = {}
        self._records["/"] = self._record("/", NodeType.DIRECTORY.value, default_locale, {})

    def _record(
        self, path: str, type_tag: str, locale: str, fields: Mapping[str, Any]
    ) -> Dict[str, Any]:
        return {
            "path": path,
            "type": type_tag,
            "size": 0,
            "data": {
                "mtime": int(self._clock()),
                "nls": {"default": locale, "list": {locale: locale}},
                locale: dict(fields),
            },
        }

    def _require(self, path: str) -> Dict[str, Any]:
        record = self._records.get(path)
        if record is None:
            raise CmsNotFoundError(f"No object at {path}")
        return record

    def _subtree(self, path: str) -> List[str]:
        return sorted(key for key in self._records if key.startswith(path))

    def resolve(self, path: str) -> Optional[Node]:
        record = self._records.get(make_path(path))
        if record is None:
            return None
        return node_from_record(record)

    def exists(self, path: str) -> bool:
        return make_path(path) in self._records

    def list(self, path: str) -> List[Node]:
        path = make_path(path)
        self._require(path)
        return [
            node_from_record(self._records[key])
            for key in self._subtree(path)
            if key != path and _parent_of(key) == path
        ]

    def call(self, path: str, action: str, params: Optional[Mapping[str, Any]] = None) -> None:
        path = make_path(path)
        self._require(path)
        params = params or {}
        logger.debug("cms call %s on %s params=%s", action, path, params)
        if action == ACTION_NEW:
            self._new(path, params)
        elif action == ACTION_COPY:
            self._copy(path, make_path(params["target"]))
        elif action == ACTION_RENAME:
            self._rename(path, make_path(params["target"]))
        elif action == ACTION_DELETE:
            self._delete(path)
        else:
            raise CmsError(f"Unknown action {action}")

    def _new(self, parent: str, params: Mapping[str, Any]) -> None:
        if self._records[parent]["type"] != NodeType.DIRECTORY.value:
            raise CmsConflictError(f"{parent} cannot hold children")
        filename = params.get("arNewFilename")
        if not filename or "/" in filename:
            raise CmsError(f"Invalid filename {filename!r}")
        path = make_path(parent + filename)
        if path in self._records:
            raise CmsConflictError(f"{path} already exists")

        locales = {
            key: value
            for key, value in params.items()
            if key not in _NEW_RESERVED and isinstance(value, Mapping)
        }
        default_locale = self._records[parent]["data"]["nls"]["default"]
        record = self._record(
            path, params.get("arNewType", NodeType.FILE.value), default_locale, {}
        )
        record["data"]["nls"]["list"] = {key: key for key in locales} or {
            default_locale: default_locale
        }
        for key, fields in locales.items():
            record["data"][key] = dict(fields)
        self._records[path] = record

    def _check_target(self, source: str, target: str) -> None:
        if target in self._records:
            raise CmsConflictError(f"{target} already exists")
        if target.startswith(source):
            raise CmsConflictError(f"Cannot move {source} into itself")
        parent = _parent_of(target)
        if self._records.get(parent, {}).get("type") != NodeType.DIRECTORY.value:
            raise CmsNotFoundError(f"No directory at {parent}")

    def _copy(self, source: str, target: str) -> None:
        self._check_target(source, target)
        for key in self._subtree(source):
            new_key = target + key[len(source):]
            record = copy.deepcopy(self._records[key])
            record["path"] = new_key
            self._records[new_key] = record
            if key in self._contents:
                self._contents[new_key] = self._contents[key]

    def _rename(self, source: str, target: str) -> None:
        if source == "/":
            raise CmsConflictError("Cannot rename the root object")
        self._check_target(source, target)
        for key in self._subtree(source):
            new_key = target + key[len(source):]
            record = self._records.pop(key)
            record["path"] = new_key
            self._records[new_key] = record
            if key in self._contents:
                self._contents[new_key] = self._contents.pop(key)

    def _delete(self, path: str) -> None:
        if path == "/":
            raise CmsConflictError("Cannot delete the root object")
        if len(self._subtree(path)) > 1:
            raise CmsConflictError(f"{path} still has children")
        del self._records[path]
        self._contents.pop(path, None)

    def save_content(self, path: str, data: bytes) -> None:
        path = make_path(path)
        record = self._require(path)
        if record["type"] == NodeType.DIRECTORY.value:
            raise CmsConflictError(f"{path} is a directory")
        self._contents[path] = bytes(data)
        record["size"] = len(data)
        record["data"]["mtime"] = int(self._clock())

    def get_content(self, path: str) -> bytes:
        path = make_path(path)
        record = self._require(path)
        if record["type"] == NodeType.DIRECTORY.value:
            raise CmsConflictError(f"{path} is a directory")
        return self._contents.get(path, b"")

    def get_permissions(self, path: str) -> Dict[str, Any]:
        self._require(make_path(path))
        return {"grants": {}}
