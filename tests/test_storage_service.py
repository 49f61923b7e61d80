import json
from unittest.mock import patch

import pytest

from models.memo_models import Folder, Memo
from models.session_models import Snapshot
from services.errors import LocalStorageError
from services.snapshot_service import LocalSnapshotService
from services.storage_service import StorageService


def _snapshot():
    return Snapshot(
        folders=[
            Folder(id="1", name="Work", visibility="private", created_at="2024-01-01T00:00:00+00:00"),
            Folder(id="2", name="家", visibility="public", created_at="2024-01-02T00:00:00+00:00"),
        ],
        memos=[
            Memo(id="20", folder_id="2", title="買い物", content="牛乳\n卵", created_at="a", updated_at="b"),
            Memo(id="10", folder_id="1", title="Plan", content="", created_at="c", updated_at="d"),
        ],
        passwords=[("1", "MTIzNA==")],
        last_updated="2024-01-03T00:00:00+00:00",
        version=3,
        device_id="device",
    )


def test_load_returns_none_when_absent(tmp_path):
    assert LocalSnapshotService(StorageService(str(tmp_path))).load_data() is None


def test_save_then_load_round_trip(tmp_path):
    service = LocalSnapshotService(StorageService(str(tmp_path)))
    snapshot = _snapshot()
    service.save_data(snapshot)
    assert service.load_data() == snapshot


def test_saved_document_uses_camel_case_keys(tmp_path):
    LocalSnapshotService(StorageService(str(tmp_path))).save_data(_snapshot())
    data = json.loads((tmp_path / "memo_data.json").read_text(encoding="utf-8"))
    assert set(data) >= {"folders", "memos", "passwords", "lastUpdated"}
    assert data["memos"][0]["folderId"] == "2"
    assert data["passwords"] == [["1", "MTIzNA=="]]


def test_parse_failure_propagates(tmp_path):
    (tmp_path / "memo_data.json").write_text("{broken", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        LocalSnapshotService(StorageService(str(tmp_path))).load_data()


def test_write_failure_raises_local_storage_error(tmp_path):
    storage = StorageService(str(tmp_path))
    with patch("builtins.open", side_effect=PermissionError("read-only")):
        with pytest.raises(LocalStorageError):
            storage.save_json(StorageService.DATA_KEY, {"folders": []})
