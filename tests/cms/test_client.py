import pytest
from ariadne_storage.cms.client import make_path


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", "/"),
        ("/", "/"),
        ("a/b", "/a/b/"),
        ("/a//b/../c", "/a/c/"),
        ("/files/./x/", "/files/x/"),
        ("/..", "/"),
    ],
)
def test_make_path_normalizes_to_ariadne_form(raw, expected):
    assert make_path(raw) == expected
