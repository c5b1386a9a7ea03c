import json

import pytest

from libs.core.exceptions import (
    LastPasswordRemoval,
    PasswordConflict,
    PasswordNotFound,
    StorageUnavailable,
)
from libs.tracker.password_store import PasswordStore


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"passwords": ["alpha", "beta"]}))
    return path


def test_is_authorized(config_path):
    store = PasswordStore(config_path)
    assert store.is_authorized("alpha")
    assert not store.is_authorized("gamma")
    assert not store.is_authorized("")
    assert not store.is_authorized(None)


def test_add_and_remove_persist(config_path):
    store = PasswordStore(config_path)
    assert store.add("gamma") == ["alpha", "beta", "gamma"]
    assert store.remove("alpha") == ["beta", "gamma"]
    assert json.loads(config_path.read_text()) == {"passwords": ["beta", "gamma"]}


def test_add_duplicate(config_path):
    with pytest.raises(PasswordConflict):
        PasswordStore(config_path).add("alpha")


def test_remove_unknown(config_path):
    with pytest.raises(PasswordNotFound):
        PasswordStore(config_path).remove("gamma")


def test_cannot_remove_last(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"passwords": ["only"]}))
    with pytest.raises(LastPasswordRemoval):
        PasswordStore(path).remove("only")
    assert PasswordStore(path).list() == ["only"]


def test_missing_config_is_unavailable(tmp_path):
    with pytest.raises(StorageUnavailable):
        PasswordStore(tmp_path / "config.json").list()


def test_missing_config_bootstraps_initial_password(tmp_path):
    path = tmp_path / "config.json"
    store = PasswordStore(path, initial_password="letmein")
    assert store.is_authorized("letmein")
    assert json.loads(path.read_text()) == {"passwords": ["letmein"]}


def test_corrupt_config_is_unavailable(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("passwords: nope")
    with pytest.raises(StorageUnavailable):
        PasswordStore(path).is_authorized("x")
