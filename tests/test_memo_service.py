import pytest

from models.memo_models import DEFAULT_MEMO_TITLE
from models.session_models import SessionState
from services.access_service import FolderAccessService
from services.errors import FolderLockedError, ValidationError
from services.memo_service import MemoService


class PersistRecorder:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def _service():
    state = SessionState()
    recorder = PersistRecorder()
    service = MemoService(state, FolderAccessService(state), persist=recorder, device_id="dev")
    return service, recorder


def _write_memo(service, title, content=""):
    service.create_memo()
    service.update_current_memo(title, content)
    return service.save_memo()


def test_create_folder_appends_with_unique_ids():
    service, recorder = _service()
    a = service.create_folder("A")
    b = service.create_folder("  B  ")
    c = service.create_folder("C")

    assert [f.name for f in service.folders] == ["A", "B", "C"]
    assert len({a.id, b.id, c.id}) == 3
    assert recorder.calls == 3


@pytest.mark.parametrize("name", ["", "   "])
def test_create_folder_rejects_blank_name(name):
    service, recorder = _service()
    with pytest.raises(ValidationError):
        service.create_folder(name)
    assert service.folders == []
    assert recorder.calls == 0


@pytest.mark.parametrize("password", [None, "", "123"])
def test_private_folder_requires_four_character_password(password):
    service, recorder = _service()
    with pytest.raises(ValidationError):
        service.create_folder("Work", "private", password)
    assert service.folders == []
    assert service.state.credentials == {}
    assert recorder.calls == 0


def test_private_folder_scenario():
    service, _ = _service()
    folder = service.create_folder("Work", "private", "1234")
    assert folder.is_private

    # 別セッションで読み込み直した状態を再現する
    fresh_state = SessionState()
    fresh = MemoService(fresh_state, FolderAccessService(fresh_state))
    fresh.apply_snapshot(service.build_snapshot())

    assert fresh.access_service.needs_password(folder.id)
    with pytest.raises(FolderLockedError):
        fresh.select_folder(folder.id)

    assert fresh.access_service.verify_password(folder.id, "0000") is False
    with pytest.raises(FolderLockedError):
        fresh.select_folder(folder.id)

    assert fresh.access_service.verify_password(folder.id, "1234") is True
    assert fresh.select_folder(folder.id).name == "Work"


def test_creator_session_can_open_private_folder_without_prompt():
    service, _ = _service()
    folder = service.create_folder("Work", "private", "1234")
    assert service.select_folder(folder.id) is folder


def test_delete_folder_cascades_only_its_memos():
    service, _ = _service()
    work = service.create_folder("Work", "private", "1234")
    home = service.create_folder("Home")

    service.select_folder(work.id)
    _write_memo(service, "w1")
    _write_memo(service, "w2")
    service.select_folder(home.id)
    kept = _write_memo(service, "h1")

    service.select_folder(work.id)
    deleted = service.delete_folder(work.id)

    assert deleted == 2
    assert [f.id for f in service.folders] == [home.id]
    assert service.memos == [kept]
    assert work.id not in service.state.credentials
    assert service.state.current_folder_id is None


def test_delete_empty_folder_only_removes_folder():
    service, recorder = _service()
    empty = service.create_folder("Empty")
    other = service.create_folder("Other")
    service.select_folder(other.id)
    memo = _write_memo(service, "keep")
    calls_before = recorder.calls

    assert service.delete_folder(empty.id) == 0
    assert service.memos == [memo]
    assert service.state.current_folder_id == other.id
    assert recorder.calls == calls_before + 1


def test_delete_unknown_folder_is_reported():
    service, recorder = _service()
    assert service.delete_folder("missing") == -1
    assert recorder.calls == 0


def test_memo_with_blank_title_gets_default_title():
    service, _ = _service()
    folder = service.create_folder("Work", "private", "1234")
    service.select_folder(folder.id)
    memo = _write_memo(service, "   ", "body")
    assert memo.title == DEFAULT_MEMO_TITLE
    assert memo.folder_id == folder.id


def test_create_memo_requires_selected_folder():
    service, _ = _service()
    with pytest.raises(ValidationError):
        service.create_memo()


def test_new_memos_are_inserted_at_front_and_edits_replace_in_place():
    service, _ = _service()
    folder = service.create_folder("F")
    service.select_folder(folder.id)
    first = _write_memo(service, "first")
    second = _write_memo(service, "second")
    assert [m.title for m in service.memos] == ["second", "first"]

    service.edit_memo(first.id)
    service.update_current_memo("first (edited)", "more")
    service.save_memo()

    assert [m.id for m in service.memos] == [second.id, first.id]
    assert service.memos[1].title == "first (edited)"
    assert service.memos[1].content == "more"


def test_draft_is_not_committed_until_saved():
    service, _ = _service()
    folder = service.create_folder("F")
    service.select_folder(folder.id)
    memo = _write_memo(service, "saved")

    service.edit_memo(memo.id)
    service.update_current_memo("draft title", "draft body")

    assert service.memos[0].title == "saved"


def test_delete_open_memo_closes_editor():
    service, recorder = _service()
    folder = service.create_folder("F")
    service.select_folder(folder.id)
    memo = _write_memo(service, "gone")
    service.edit_memo(memo.id)
    calls_before = recorder.calls

    assert service.delete_memo(memo.id) is True
    assert service.current_memo is None
    assert service.memos == []
    assert recorder.calls == calls_before + 1
    assert service.delete_memo(memo.id) is False


def test_autosave_commits_open_memo_only():
    service, recorder = _service()
    assert service.autosave() is False

    folder = service.create_folder("F")
    service.select_folder(folder.id)
    service.create_memo()
    service.update_current_memo("auto", "typed")
    calls_before = recorder.calls

    assert service.autosave() is True
    assert service.memos[0].title == "auto"
    assert recorder.calls == calls_before + 1

    # 同じ下書きを再度保存しても重複しない
    service.autosave()
    assert len(service.memos) == 1


def test_reselecting_same_folder_discards_draft_and_stops_autosave():
    service, recorder = _service()
    folder = service.create_folder("F")
    service.select_folder(folder.id)
    service.create_memo()
    calls_before = recorder.calls

    service.select_folder(folder.id)

    assert service.current_memo is None
    assert service.autosave() is False
    assert service.memos == []
    assert recorder.calls == calls_before


def test_search_filters_current_folder_case_insensitively():
    service, _ = _service()
    a = service.create_folder("A")
    b = service.create_folder("B")
    service.select_folder(a.id)
    _write_memo(service, "Groceries", "milk")
    _write_memo(service, "Ideas", "Buy MILK later")
    _write_memo(service, "Other", "nothing")
    service.select_folder(b.id)
    _write_memo(service, "milk", "")

    service.select_folder(a.id)
    assert [m.title for m in service.memos_in_current_folder("milk")] == ["Ideas", "Groceries"]
    assert len(service.memos_in_current_folder()) == 3


def test_snapshot_round_trip_through_apply():
    service, _ = _service()
    folder = service.create_folder("Work", "private", "1234")
    service.select_folder(folder.id)
    _write_memo(service, "note")

    snapshot = service.build_snapshot()
    assert snapshot.device_id == "dev"
    assert snapshot.passwords == list(service.state.credentials.items())

    state = SessionState()
    other = MemoService(state, FolderAccessService(state))
    other.apply_snapshot(snapshot)
    assert other.folders == service.folders
    assert other.memos == service.memos
    assert state.unlocked_folder_ids == set()


def test_mark_synced_keeps_highest_version():
    service, _ = _service()
    service.mark_synced(4)
    service.mark_synced(2)
    assert service.build_snapshot().version == 4
