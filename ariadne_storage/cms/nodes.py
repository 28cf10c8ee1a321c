"""Typed views over Ariadne CMS nodes.

Ariadne objects carry a runtime type tag and a free-form ``data`` bag whose
layout depends on that tag and on the node's default language. The rest of the
package never looks at raw records: they are turned into one of the frozen
variants below at the collaborator boundary, with the default locale and the
per-locale fields spelled out explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum as PyEnum
from typing import Any, Dict, Mapping


class NodeType(str, PyEnum):
    DIRECTORY = "pdir"
    FILE = "pfile"


@dataclass(frozen=True)
class LocaleFields:
    name: str | None = None
    mimetype: str | None = None


@dataclass(frozen=True)
class Node:
    path: str
    type_tag: str
    size: int = 0
    mtime: int = 0
    default_locale: str = "en"
    locales: Mapping[str, LocaleFields] = field(default_factory=dict)

    @property
    def basename(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def default_fields(self) -> LocaleFields:
        return self.locales.get(self.default_locale, LocaleFields())


@dataclass(frozen=True)
class DirectoryNode(Node):
    type_tag: str = NodeType.DIRECTORY.value


@dataclass(frozen=True)
class FileNode(Node):
    type_tag: str = NodeType.FILE.value


@dataclass(frozen=True)
class OtherNode(Node):
    """Any typed content record that is neither a directory nor a file."""


def _locale_fields(raw: Mapping[str, Any] | None) -> LocaleFields:
    if not raw:
        return LocaleFields()
    return LocaleFields(name=raw.get("name"), mimetype=raw.get("mimetype"))


def node_from_record(record: Mapping[str, Any]) -> Node:
    """Build a typed node from a raw CMS record.

    The record mirrors what Ariadne returns for ``system.get.phtml``::

        {
            "path": "/files/docs/",
            "type": "pdir",
            "size": 0,
            "data": {
                "mtime": 1700000000,
                "nls": {"default": "nl", "list": {"nl": "Nederlands"}},
                "nl": {"name": "docs"},
            },
        }

    Locale sub-records are the keys of ``data`` listed in ``nls.list``; the
    default locale is always included when present in ``data``.
    """
    data: Mapping[str, Any] = record.get("data") or {}
    nls: Mapping[str, Any] = data.get("nls") or {}
    default_locale = nls.get("default") or "en"

    locale_keys = set(nls.get("list") or ())
    locale_keys.add(default_locale)
    locales: Dict[str, LocaleFields] = {
        key: _locale_fields(data.get(key)) for key in locale_keys if key in data
    }

    type_tag = record["type"]
    common = dict(
        path=record["path"],
        size=int(record.get("size") or 0),
        mtime=int(data.get("mtime") or 0),
        default_locale=default_locale,
        locales=locales,
    )
    if type_tag == NodeType.DIRECTORY.value:
        return DirectoryNode(**common)
    if type_tag == NodeType.FILE.value:
        return FileNode(**common)
    return OtherNode(type_tag=type_tag, **common)
