import pytest
from ariadne_storage.cms import CmsConflictError, CmsError, CmsNotFoundError, InMemoryCms
from ariadne_storage.cms.client import ACTION_DELETE, ACTION_NEW, ACTION_RENAME
from ariadne_storage.cms.nodes import DirectoryNode, FileNode


class Clock:
    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _new(cms, parent, type_tag, name, locale="en"):
    cms.call(parent, ACTION_NEW, {"arNewType": type_tag, "arNewFilename": name, locale: {"name": name}})


def test_new_creates_typed_children_with_parent_locale():
    cms = InMemoryCms(default_locale="nl")
    _new(cms, "/", "pdir", "docs", locale="nl")
    _new(cms, "/docs/", "pfile", "a.txt", locale="nl")

    docs = cms.resolve("/docs")
    children = cms.list("/docs/")

    assert isinstance(docs, DirectoryNode)
    assert docs.default_locale == "nl"
    assert [child.path for child in children] == ["/docs/a.txt/"]
    assert isinstance(children[0], FileNode)
    assert children[0].default_fields.name == "a.txt"


def test_new_rejects_duplicates_and_file_parents():
    cms = InMemoryCms()
    _new(cms, "/", "pfile", "a.txt")

    with pytest.raises(CmsConflictError):
        _new(cms, "/", "pfile", "a.txt")
    with pytest.raises(CmsConflictError):
        _new(cms, "/a.txt/", "pfile", "b.txt")


def test_call_on_missing_object_or_unknown_action_fails():
    cms = InMemoryCms()

    with pytest.raises(CmsNotFoundError):
        cms.call("/missing/", ACTION_DELETE)
    with pytest.raises(CmsError):
        cms.call("/", "system.publish.phtml")


def test_root_cannot_be_deleted_or_renamed():
    cms = InMemoryCms()

    with pytest.raises(CmsConflictError):
        cms.call("/", ACTION_DELETE)
    with pytest.raises(CmsConflictError):
        cms.call("/", ACTION_RENAME, {"target": "/elsewhere/"})


def test_rename_moves_subtree_and_contents():
    cms = InMemoryCms()
    _new(cms, "/", "pdir", "old")
    _new(cms, "/old/", "pfile", "a.txt")
    cms.save_content("/old/a.txt/", b"abc")

    cms.call("/old/", ACTION_RENAME, {"target": "/new/"})

    assert not cms.exists("/old/")
    assert cms.get_content("/new/a.txt/") == b"abc"


def test_save_content_updates_size_and_mtime():
    clock = Clock(100)
    cms = InMemoryCms(clock=clock)
    _new(cms, "/", "pfile", "a.txt")

    clock.now = 250
    cms.save_content("/a.txt/", b"12345")
    node = cms.resolve("/a.txt/")

    assert node.size == 5
    assert node.mtime == 250
    assert cms.get_permissions("/a.txt/") == {"grants": {}}


def test_content_operations_reject_directories():
    cms = InMemoryCms()

    with pytest.raises(CmsConflictError):
        cms.save_content("/", b"x")
    with pytest.raises(CmsConflictError):
        cms.get_content("/")
