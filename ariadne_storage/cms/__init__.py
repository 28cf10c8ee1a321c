from ariadne_storage.cms.client import (
    CmsClient,
    CmsConflictError,
    CmsError,
    CmsNotFoundError,
    make_path,
)
from ariadne_storage.cms.memory import InMemoryCms
from ariadne_storage.cms.nodes import (
    DirectoryNode,
    FileNode,
    LocaleFields,
    Node,
    NodeType,
    OtherNode,
    node_from_record,
)

__all__ = [
    "CmsClient",
    "CmsConflictError",
    "CmsError",
    "CmsNotFoundError",
    "DirectoryNode",
    "FileNode",
    "InMemoryCms",
    "LocaleFields",
    "Node",
    "NodeType",
    "OtherNode",
    "make_path",
    "node_from_record",
]
