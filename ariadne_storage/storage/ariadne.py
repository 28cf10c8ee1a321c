"""Ariadne-backed storage adapter.

Maps path-oriented storage calls onto Ariadne object calls: ``pdir`` nodes are
directories, ``pfile`` nodes are files and any other node type is reported as a
file whose mimetype is its type tag.
"""

from __future__ import annotations

import functools
import io
import logging
import posixpath
from typing import BinaryIO, Callable, Iterator, List, Optional, TypeVar

from ariadne_storage import hooks as events
from ariadne_storage.cms.client import (
    ACTION_COPY,
    ACTION_DELETE,
    ACTION_NEW,
    ACTION_RENAME,
    CmsClient,
    CmsConflictError,
    CmsError,
    CmsNotFoundError,
    make_path,
)
from ariadne_storage.cms.nodes import DirectoryNode, FileNode, Node, NodeType
from ariadne_storage.config import Settings, get_settings
from ariadne_storage.hooks import HookBus
from ariadne_storage.storage.base import (
    Contents,
    Metadata,
    MetadataResult,
    StorageAdapter,
    Visibility,
    WriteOptions,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _OutsideRootError(CmsNotFoundError):
    """A relative path that normalizes to somewhere above the adapter root."""


def _fallback_on_cms_error(default: Callable[[], T]):
    """Turn a ``CmsError`` raised by the wrapped operation into ``default()``."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(self: "AriadneStorage", *args, **kwargs) -> T:
            path = args[0] if args else kwargs.get("path", "")
            try:
                return func(self, *args, **kwargs)
            except _OutsideRootError as exc:
                logger.debug("Ariadne %s treats %r as absent: %s", func.__name__, path, exc)
                return default()
            except CmsError as exc:
                logger.warning("Ariadne %s failed for %r: %s", func.__name__, path, exc)
                self._hooks.emit(
                    events.CMS_ERROR, operation=func.__name__, path=path, error=str(exc)
                )
                return default()

        return wrapper

    return decorator


class AriadneStorage(StorageAdapter):
    """Storage adapter rooted at one Ariadne directory."""

    def __init__(
        self,
        client: CmsClient,
        settings: Optional[Settings] = None,
        root_path: Optional[str] = None,
        hook_bus: Optional[HookBus] = None,
    ) -> None:
        self._client = client
        self._settings = settings or get_settings()
        self._root_path = make_path(root_path or self._settings.root_path)
        self._hooks = hook_bus or events.hooks

    @property
    def root_path(self) -> str:
        return self._root_path

    def _full_path(self, path: str) -> str:
        full = make_path(self._root_path + path)
        if not full.startswith(self._root_path):
            raise _OutsideRootError(f"{path} resolves outside {self._root_path}")
        return full

    def _relative(self, node: Node) -> str:
        return node.path[len(self._root_path):].rstrip("/")

    def _get_node(self, path: str) -> Optional[Node]:
        return self._client.resolve(self._full_path(path))

    def _normalize(self, node: Node, contents: Optional[Contents] = None) -> Metadata:
        if isinstance(node, DirectoryNode):
            kind, mimetype = "dir", "directory"
        elif isinstance(node, FileNode):
            kind = "file"
            mimetype = node.default_fields.mimetype or self._settings.default_mimetype
        else:
            kind, mimetype = "file", node.type_tag

        return Metadata(
            path=self._relative(node),
            basename=node.basename,
            type=kind,
            mimetype=mimetype,
            size=node.size,
            timestamp=node.mtime,
            # TODO: derive from get_permissions() once grants map onto public/private
            visibility=self._settings.default_visibility,
            contents=contents,
        )

    @_fallback_on_cms_error(bool)
    def exists(self, path: str) -> bool:
        return self._client.exists(self._full_path(path))

    @_fallback_on_cms_error(bool)
    def read(self, path: str) -> MetadataResult:
        node = self._get_node(path)
        if node is None:
            return False
        return self._normalize(node, contents=self._client.get_content(node.path))

    @_fallback_on_cms_error(bool)
    def read_stream(self, path: str) -> MetadataResult:
        node = self._get_node(path)
        if node is None:
            return False
        return self._normalize(node, contents=io.BytesIO(self._client.get_content(node.path)))

    @_fallback_on_cms_error(bool)
    def write(
        self, path: str, contents: bytes, options: Optional[WriteOptions] = None
    ) -> MetadataResult:
        full_path = self._full_path(path)
        if not self._client.exists(full_path):
            self._new_file(path, options)
        self._client.save_content(full_path, contents)

        node = self._client.resolve(full_path)
        if node is None:
            raise CmsNotFoundError(f"{full_path} vanished after saving")
        self._hooks.emit(events.WRITE, path=path, size=len(contents))
        return self._normalize(node, contents=self._client.get_content(full_path))

    def write_stream(
        self, path: str, stream: BinaryIO, options: Optional[WriteOptions] = None
    ) -> MetadataResult:
        return self.write(path, stream.read(), options)

    def _new_file(self, path: str, options: Optional[WriteOptions]) -> None:
        relative = path.strip("/")
        filename = posixpath.basename(relative)
        if not filename:
            raise CmsError(f"{path!r} does not name a file")

        dirname = posixpath.dirname(relative)
        if not self._client.exists(self._full_path(dirname)):
            self._make_dirs(dirname)
        parent = self._get_node(dirname)
        if not isinstance(parent, DirectoryNode):
            raise CmsConflictError(f"{dirname!r} is not a directory")

        fields = {"name": filename}
        if options is not None and options.mimetype:
            fields["mimetype"] = options.mimetype
        logger.debug("Creating file %s in %s", filename, parent.path)
        self._client.call(
            parent.path,
            ACTION_NEW,
            {
                "arNewType": NodeType.FILE.value,
                "arNewFilename": filename,
                parent.default_locale: fields,
            },
        )

    def _make_dirs(self, path: str) -> None:
        current = ""
        for segment in (part for part in path.split("/") if part):
            parent_path = current
            current = f"{current}{segment}/"
            if self._client.exists(self._full_path(current)):
                continue

            parent = self._get_node(parent_path)
            if not isinstance(parent, DirectoryNode):
                raise CmsConflictError(f"{parent_path!r} is not a directory")
            logger.info("Creating directory %s under %s", segment, parent.path)
            self._client.call(
                parent.path,
                ACTION_NEW,
                {
                    "arNewType": NodeType.DIRECTORY.value,
                    "arNewFilename": segment,
                    parent.default_locale: {"name": segment},
                },
            )
            self._hooks.emit(events.CREATE_DIR, path=current.rstrip("/"))

    @_fallback_on_cms_error(bool)
    def create_dir(self, path: str, options: Optional[WriteOptions] = None) -> MetadataResult:
        self._make_dirs(path)
        node = self._get_node(path)
        if not isinstance(node, DirectoryNode):
            raise CmsConflictError(f"{path!r} exists and is not a directory")
        return self._normalize(node)

    @_fallback_on_cms_error(bool)
    def copy(self, path: str, new_path: str) -> bool:
        node = self._get_node(path)
        if node is None:
            return False
        self._client.call(node.path, ACTION_COPY, {"target": self._full_path(new_path)})
        self._hooks.emit(events.COPY, path=path, new_path=new_path)
        return True

    @_fallback_on_cms_error(bool)
    def rename(self, path: str, new_path: str) -> bool:
        node = self._get_node(path)
        if node is None:
            return False
        self._client.call(node.path, ACTION_RENAME, {"target": self._full_path(new_path)})
        self._hooks.emit(events.RENAME, path=path, new_path=new_path)
        return True

    @_fallback_on_cms_error(bool)
    def delete(self, path: str) -> bool:
        node = self._get_node(path)
        if node is None:
            return False
        self._client.call(node.path, ACTION_DELETE)
        self._hooks.emit(events.DELETE, path=path)
        return True

    @_fallback_on_cms_error(bool)
    def delete_dir(self, path: str) -> bool:
        node = self._get_node(path)
        if not isinstance(node, DirectoryNode):
            return False
        # Children are left to the CMS; a store that refuses non-empty deletes yields False
        self._client.call(node.path, ACTION_DELETE)
        self._hooks.emit(events.DELETE, path=path)
        return True

    @_fallback_on_cms_error(list)
    def list_contents(self, path: str = "", recursive: bool = False) -> List[Metadata]:
        node = self._get_node(path)
        if not isinstance(node, DirectoryNode):
            return []
        return list(self._walk(node, recursive, depth=1))

    def _walk(self, directory: DirectoryNode, recursive: bool, depth: int) -> Iterator[Metadata]:
        for child in self._client.list(directory.path):
            yield self._normalize(child)
            if not (recursive and isinstance(child, DirectoryNode)):
                continue
            if depth >= self._settings.list_max_depth:
                logger.warning(
                    "Not descending into %s: depth limit %d reached",
                    child.path,
                    self._settings.list_max_depth,
                )
                continue
            yield from self._walk(child, recursive, depth + 1)

    @_fallback_on_cms_error(bool)
    def get_metadata(self, path: str) -> MetadataResult:
        node = self._get_node(path)
        if node is None:
            return False
        return self._normalize(node)

    def set_visibility(self, path: str, visibility: Visibility) -> MetadataResult:
        logger.debug("Ignoring visibility change to %s for %r", visibility, path)
        return False
