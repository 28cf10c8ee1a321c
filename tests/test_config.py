import pytest
from ariadne_storage.config import Settings, get_settings, load_settings

ENV_KEYS = (
    "ARIADNE_ROOT_PATH",
    "ARIADNE_DEFAULT_MIMETYPE",
    "ARIADNE_DEFAULT_VISIBILITY",
    "ARIADNE_LIST_MAX_DEPTH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_load_settings_defaults():
    assert load_settings() == Settings()


def test_load_settings_normalizes_root_path(monkeypatch):
    monkeypatch.setenv("ARIADNE_ROOT_PATH", "sites/demo//files")
    monkeypatch.setenv("ARIADNE_DEFAULT_VISIBILITY", "Private")
    monkeypatch.setenv("ARIADNE_LIST_MAX_DEPTH", "4")

    settings = load_settings()

    assert settings.root_path == "/sites/demo/files/"
    assert settings.default_visibility == "private"
    assert settings.list_max_depth == 4


@pytest.mark.parametrize(
    "key, value",
    [
        ("ARIADNE_DEFAULT_VISIBILITY", "hidden"),
        ("ARIADNE_LIST_MAX_DEPTH", "zero"),
        ("ARIADNE_LIST_MAX_DEPTH", "0"),
        ("ARIADNE_DEFAULT_MIMETYPE", "  "),
    ],
)
def test_load_settings_rejects_invalid_values(monkeypatch, key, value):
    monkeypatch.setenv(key, value)

    with pytest.raises(ValueError, match=key):
        load_settings()


def test_get_settings_is_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("ARIADNE_ROOT_PATH", "/other/")

    assert get_settings() is first
