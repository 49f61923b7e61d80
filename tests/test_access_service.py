from models.memo_models import Folder
from models.session_models import SessionState
from services.access_service import FolderAccessService
from utils.encoding import encode_secret


def _state_with_private_folder():
    state = SessionState(folders=[
        Folder(id="1", name="Work", visibility="private", created_at=""),
        Folder(id="2", name="Home", visibility="public", created_at=""),
    ])
    state.credentials["1"] = encode_secret("1234")
    return state


def test_public_folder_never_needs_password():
    access = FolderAccessService(_state_with_private_folder())
    assert access.needs_password("2") is False


def test_loaded_private_folder_starts_locked():
    access = FolderAccessService(_state_with_private_folder())
    assert access.has_credential("1")
    assert access.needs_password("1") is True


def test_correct_password_unlocks_for_session():
    state = _state_with_private_folder()
    access = FolderAccessService(state)
    assert access.verify_password("1", "1234") is True
    assert access.is_unlocked("1")
    assert access.needs_password("1") is False
    assert "1234" not in dict(access.credential_pairs()).values()


def test_wrong_password_changes_nothing():
    state = _state_with_private_folder()
    access = FolderAccessService(state)
    before = dict(state.credentials)

    assert access.verify_password("1", "0000") is False

    assert state.credentials == before
    assert state.unlocked_folder_ids == set()
    assert access.needs_password("1") is True


def test_register_unlocks_creator_session():
    state = SessionState(folders=[Folder(id="9", name="Diary", visibility="private", created_at="")])
    access = FolderAccessService(state)
    access.register("9", "secret")
    assert state.credentials["9"] == encode_secret("secret")
    assert access.needs_password("9") is False


def test_loading_credentials_resets_unlocked_set():
    state = _state_with_private_folder()
    access = FolderAccessService(state)
    access.verify_password("1", "1234")

    access.load_credentials([("1", encode_secret("1234"))])

    assert access.needs_password("1") is True


def test_remove_drops_credential_and_unlock():
    state = _state_with_private_folder()
    access = FolderAccessService(state)
    access.verify_password("1", "1234")
    access.remove("1")
    assert not access.has_credential("1")
    assert not access.is_unlocked("1")
