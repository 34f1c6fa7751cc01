import json

from ieltsmock.core.token_store import FileTokenStore, InMemoryTokenStore


def test_in_memory_store_round_trip():
    store = InMemoryTokenStore()
    assert store.get_token() is None

    store.store("t1", {"username": "amy", "role": "ADMIN"})
    assert store.get_token() == "t1"
    assert store.get_user() == {"username": "amy", "role": "ADMIN"}

    store.clear()
    assert store.get_token() is None
    assert store.get_user() is None


def test_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "session.json"

    FileTokenStore(path).store("t1", {"username": "amy"})

    reopened = FileTokenStore(path)
    assert reopened.get_token() == "t1"
    assert reopened.get_user() == {"username": "amy"}
    assert json.loads(path.read_text()) == {"token": "t1", "user": {"username": "amy"}}


def test_file_store_clear_removes_file(tmp_path):
    path = tmp_path / "session.json"
    store = FileTokenStore(path)
    store.store("t1")

    store.clear()

    assert not path.exists()
    assert store.get_token() is None
    store.clear()


def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{broken")

    store = FileTokenStore(path)

    assert store.get_token() is None
    assert store.get_user() is None
