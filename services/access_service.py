# services/access_service.py
from typing import Iterable, List, Tuple

from models.session_models import SessionState
from utils.encoding import encode_secret

MIN_PASSWORD_LENGTH = 4


class FolderAccessService:
    """非公開フォルダのパスワード管理と、セッション単位の解錠状態を扱うサービスクラス。

    認証情報（フォルダID → エンコード済みパスワード）はスナップショットと共に
    永続化されるが、解錠済みフォルダの集合はセッション内でのみ保持される。
    プロンプトを出すかどうかの判断には解錠済み集合だけを使う。
    """

    def __init__(self, state: SessionState) -> None:
        """FolderAccessServiceのコンストラクタ。

        Args:
            state (SessionState): 認証情報と解錠状態を保持するセッション状態。
        """
        self.state = state

    def register(self, folder_id: str, password: str) -> None:
        """フォルダのパスワードを登録し、作成したセッションでは解錠済みとする。"""
        self.state.credentials[folder_id] = encode_secret(password)
        self.state.unlocked_folder_ids.add(folder_id)

    def has_credential(self, folder_id: str) -> bool:
        return folder_id in self.state.credentials

    def is_unlocked(self, folder_id: str) -> bool:
        return folder_id in self.state.unlocked_folder_ids

    def needs_password(self, folder_id: str) -> bool:
        """フォルダ選択時にパスワード入力を求める必要があるかどうか。

        非公開フォルダのうち、このセッションでまだ解錠されていないものが対象。
        """
        folder = next((f for f in self.state.folders if f.id == folder_id), None)
        if folder is None or not folder.is_private:
            return False
        return not self.is_unlocked(folder_id)

    def verify_password(self, folder_id: str, password: str) -> bool:
        """入力されたパスワードを保存済みの値と照合する。

        一致した場合のみフォルダを解錠済みにする。不一致の場合、状態は一切変更しない。

        Args:
            folder_id (str): 対象フォルダのID。
            password (str): 入力されたパスワード。

        Returns:
            bool: 一致した場合はTrue。
        """
        stored = self.state.credentials.get(folder_id)
        if stored is None:
            return False
        if encode_secret(password) != stored:
            return False
        self.state.unlocked_folder_ids.add(folder_id)
        return True

    def remove(self, folder_id: str) -> None:
        """フォルダ削除時に認証情報と解錠状態を取り除く。"""
        self.state.credentials.pop(folder_id, None)
        self.state.unlocked_folder_ids.discard(folder_id)

    def load_credentials(self, pairs: Iterable[Tuple[str, str]]) -> None:
        """永続化されていた認証情報で置き換える。解錠状態は持ち越さない。"""
        self.state.credentials = {folder_id: encoded for folder_id, encoded in pairs}
        self.state.unlocked_folder_ids = set()

    def credential_pairs(self) -> List[Tuple[str, str]]:
        return list(self.state.credentials.items())
