import json

from docx import Document

from models.memo_models import Folder, Memo
from models.session_models import Snapshot
from services.export_service import ExportService
from services.snapshot_service import LocalSnapshotService
from services.storage_service import StorageService


def _snapshot():
    return Snapshot(
        folders=[Folder(id="1", name="Work", visibility="private", created_at="t0")],
        memos=[Memo(id="2", folder_id="1", title="メモ", content="一行目\n二行目", created_at="t1", updated_at="t2")],
        passwords=[("1", "MTIzNA==")],
        last_updated="t3",
    )


def test_export_all_matches_local_save_byte_for_byte(tmp_path):
    snapshot = _snapshot()
    storage = StorageService(str(tmp_path / "data"))
    LocalSnapshotService(storage).save_data(snapshot)

    export_path = tmp_path / "backup.json"
    ExportService().export_all_json(snapshot, str(export_path))

    assert export_path.read_bytes() == (tmp_path / "data" / "memo_data.json").read_bytes()
    exported = json.loads(export_path.read_text(encoding="utf-8"))
    assert [f["id"] for f in exported["folders"]] == ["1"]
    assert [m["id"] for m in exported["memos"]] == ["2"]


def test_export_single_memo(tmp_path):
    memo = _snapshot().memos[0]
    path = tmp_path / "memo.json"
    ExportService().export_memo_json(memo, str(path))
    assert json.loads(path.read_text(encoding="utf-8")) == memo.to_dict()


def test_export_memo_as_word(tmp_path):
    memo = _snapshot().memos[0]
    path = tmp_path / "memo.docx"
    ExportService().export_memo_docx(memo, str(path))

    texts = [p.text for p in Document(str(path)).paragraphs]
    assert "メモ" in texts
    assert texts[-2:] == ["一行目", "二行目"]
