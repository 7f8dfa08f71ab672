from attendance_tracker.storage.collection import JsonCollection
from attendance_tracker.storage.file_store import FileKeyValueStore
from attendance_tracker.storage.store import MemoryKeyValueStore


def test_missing_key_loads_empty():
    assert JsonCollection(MemoryKeyValueStore(), "app_employees").load() == []


def test_corrupted_json_loads_empty_and_next_save_recovers():
    store = MemoryKeyValueStore({"app_employees": "{not json"})
    coll = JsonCollection(store, "app_employees")

    assert coll.load() == []

    coll.save([{"id": "e1"}])
    assert coll.load() == [{"id": "e1"}]


def test_non_list_document_loads_empty():
    store = MemoryKeyValueStore({"app_users": '{"id": "x"}'})
    assert JsonCollection(store, "app_users").load() == []


def test_file_store_round_trip_and_keys(tmp_path):
    store = FileKeyValueStore(tmp_path / "store")
    store.set("app_attendance", "[]")
    store.set("active_user_id", "admin-001")

    assert store.get("active_user_id") == "admin-001"
    assert store.keys() == ["active_user_id", "app_attendance"]

    store.remove("active_user_id")
    assert store.get("active_user_id") is None


def test_file_store_corrupted_file_is_empty_collection(tmp_path):
    root = tmp_path / "store"
    root.mkdir()
    (root / "app_employees.json").write_text("[{broken", encoding="utf-8")

    coll = JsonCollection(FileKeyValueStore(root), "app_employees")
    assert coll.load() == []
