# services/memo_service.py
import time
import datetime
from typing import Callable, List, Optional

from models.memo_models import Folder, Memo, DEFAULT_MEMO_TITLE, VISIBILITY_PRIVATE, VISIBILITY_PUBLIC
from models.session_models import SessionState, Snapshot
from services.access_service import FolderAccessService, MIN_PASSWORD_LENGTH
from services.errors import FolderLockedError, ValidationError


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


class MemoService:
    """フォルダとメモのCRUD操作を管理するサービスクラス。

    状態はすべてSessionStateが保持し、このクラスのメソッドを通してのみ変更される。
    変更を伴う操作の最後には、注入されたpersistコールバックが呼ばれる。
    """

    def __init__(
        self,
        state: SessionState,
        access_service: FolderAccessService,
        persist: Optional[Callable[[], None]] = None,
        device_id: str = "",
    ) -> None:
        """MemoServiceのコンストラクタ。

        Args:
            state (SessionState): 操作対象のセッション状態。
            access_service (FolderAccessService): フォルダのパスワード管理。
            persist (Optional[Callable[[], None]]): 変更後に呼び出される永続化処理。
            device_id (str): スナップショットに記録する端末ID。
        """
        self.state = state
        self.access_service = access_service
        self.persist = persist
        self.device_id = device_id

    # --- 参照 ---

    @property
    def folders(self) -> List[Folder]:
        return self.state.folders

    @property
    def memos(self) -> List[Memo]:
        return self.state.memos

    @property
    def current_folder(self) -> Optional[Folder]:
        return self.find_folder(self.state.current_folder_id) if self.state.current_folder_id else None

    @property
    def current_memo(self) -> Optional[Memo]:
        return self.state.current_memo

    def find_folder(self, folder_id: str) -> Optional[Folder]:
        return next((f for f in self.state.folders if f.id == folder_id), None)

    def find_memo(self, memo_id: str) -> Optional[Memo]:
        return next((m for m in self.state.memos if m.id == memo_id), None)

    def count_memos_in_folder(self, folder_id: str) -> int:
        return sum(1 for m in self.state.memos if m.folder_id == folder_id)

    def memos_in_current_folder(self, query: str = "") -> List[Memo]:
        """選択中フォルダのメモを表示順に返す。

        Args:
            query (str): タイトルまたは本文に含まれる文字列（大文字小文字を区別しない）。
                         空の場合は絞り込まない。

        Returns:
            List[Memo]: 該当するメモのリスト。
        """
        folder_id = self.state.current_folder_id
        if not folder_id:
            return []
        needle = query.strip().lower()
        result = []
        for memo in self.state.memos:
            if memo.folder_id != folder_id:
                continue
            if needle and needle not in memo.title.lower() and needle not in memo.content.lower():
                continue
            result.append(memo)
        return result

    # --- フォルダ操作 ---

    def create_folder(self, name: str, visibility: str = VISIBILITY_PUBLIC, password: Optional[str] = None) -> Folder:
        """フォルダを作成し、一覧の末尾に追加する。

        Args:
            name (str): フォルダ名。前後の空白は取り除かれる。
            visibility (str): "public" または "private"。
            password (Optional[str]): 非公開フォルダのパスワード（4文字以上）。

        Returns:
            Folder: 作成されたフォルダ。

        Raises:
            ValidationError: 名前が空、または非公開フォルダのパスワードが短い場合。
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("フォルダ名を入力してください")
        if visibility not in (VISIBILITY_PUBLIC, VISIBILITY_PRIVATE):
            raise ValidationError(f"不明な公開設定です: {visibility}")
        if visibility == VISIBILITY_PRIVATE and len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"パスワードは{MIN_PASSWORD_LENGTH}文字以上で入力してください")

        folder = Folder(
            id=self._new_id({f.id for f in self.state.folders}),
            name=name,
            visibility=visibility,
            created_at=_now(),
        )
        self.state.folders.append(folder)
        if folder.is_private:
            self.access_service.register(folder.id, password)
        self._persist()
        return folder

    def delete_folder(self, folder_id: str) -> int:
        """フォルダと、そのフォルダに属するメモ・パスワードをすべて削除する。

        Args:
            folder_id (str): 削除するフォルダのID。

        Returns:
            int: 一緒に削除されたメモの件数。フォルダが存在しない場合は-1。
        """
        if self.find_folder(folder_id) is None:
            return -1

        self.state.folders = [f for f in self.state.folders if f.id != folder_id]
        before = len(self.state.memos)
        self.state.memos = [m for m in self.state.memos if m.folder_id != folder_id]
        deleted_count = before - len(self.state.memos)
        self.access_service.remove(folder_id)

        if self.state.current_folder_id == folder_id:
            self.state.current_folder_id = None
            self.state.current_memo = None

        print(f"フォルダを削除し、メモ{deleted_count}件を同時に削除しました")
        self._persist()
        return deleted_count

    def select_folder(self, folder_id: str) -> Folder:
        """フォルダを選択状態にする。

        選択後はメモ一覧の表示に戻るため、編集中の下書きは同じフォルダを
        選び直した場合でも破棄する。

        Raises:
            KeyError: フォルダが存在しない場合。
            FolderLockedError: このセッションで解錠されていない非公開フォルダの場合。
        """
        folder = self.find_folder(folder_id)
        if folder is None:
            raise KeyError(folder_id)
        if self.access_service.needs_password(folder_id):
            raise FolderLockedError(f"フォルダ「{folder.name}」はロックされています")
        self.state.current_memo = None
        self.state.current_folder_id = folder_id
        return folder

    # --- メモ操作 ---

    def create_memo(self) -> Memo:
        """選択中フォルダに新しいメモの下書きを作り、編集中にする。

        下書きはsave_memoが呼ばれるまで一覧に追加されない。

        Raises:
            ValidationError: フォルダが選択されていない場合。
        """
        folder = self.current_folder
        if folder is None:
            raise ValidationError("先にフォルダを選択してください")
        now = _now()
        self.state.current_memo = Memo(
            id=self._new_id({m.id for m in self.state.memos}),
            folder_id=folder.id,
            title="",
            content="",
            created_at=now,
            updated_at=now,
        )
        return self.state.current_memo

    def edit_memo(self, memo_id: str) -> Memo:
        """既存メモの複製を編集用の下書きにする。"""
        memo = self.find_memo(memo_id)
        if memo is None:
            raise KeyError(memo_id)
        self.state.current_memo = memo.copy()
        return self.state.current_memo

    def update_current_memo(self, title: str, content: str) -> None:
        """編集中の下書きに入力内容を反映する。一覧と永続化には影響しない。"""
        if self.state.current_memo is None:
            return
        self.state.current_memo.title = title
        self.state.current_memo.content = content

    def save_memo(self) -> Optional[Memo]:
        """編集中の下書きを一覧に確定して永続化する。

        新規であれば先頭に挿入し、既存であれば同じ位置で置き換える。
        タイトルが空白のみの場合は既定のタイトルを付ける。

        Returns:
            Optional[Memo]: 確定されたメモ。編集中のメモが無い場合はNone。
        """
        draft = self.state.current_memo
        if draft is None:
            return None

        draft.title = draft.title.strip() or DEFAULT_MEMO_TITLE
        draft.updated_at = _now()
        committed = draft.copy()

        for i, memo in enumerate(self.state.memos):
            if memo.id == committed.id:
                self.state.memos[i] = committed
                break
        else:
            self.state.memos.insert(0, committed)

        self._persist()
        return committed

    def close_memo(self) -> None:
        self.state.current_memo = None

    def delete_memo(self, memo_id: str) -> bool:
        """指定されたIDのメモを削除する。

        編集中のメモであればエディタも閉じる。

        Returns:
            bool: 削除した場合はTrue、該当IDのメモが無かった場合はFalse。
        """
        initial_len = len(self.state.memos)
        self.state.memos = [m for m in self.state.memos if m.id != memo_id]
        if self.state.current_memo is not None and self.state.current_memo.id == memo_id:
            self.state.current_memo = None
        if len(self.state.memos) < initial_len:
            self._persist()
            return True
        return False

    def autosave(self) -> bool:
        """定期保存。編集中のメモがあれば確定して永続化する。

        Returns:
            bool: 保存を行った場合はTrue。
        """
        if self.state.current_memo is None:
            return False
        self.save_memo()
        return True

    # --- スナップショット ---

    def build_snapshot(self) -> Snapshot:
        """現在の状態から永続化用のスナップショットを作る。"""
        return Snapshot(
            folders=list(self.state.folders),
            memos=list(self.state.memos),
            passwords=self.access_service.credential_pairs(),
            last_updated=_now(),
            version=self.state.version,
            device_id=self.device_id,
        )

    def apply_snapshot(self, snapshot: Snapshot) -> None:
        """読み込んだスナップショットで状態を置き換える。選択状態と解錠状態はリセットされる。"""
        self.state.folders = list(snapshot.folders)
        self.state.memos = list(snapshot.memos)
        self.state.version = snapshot.version
        self.state.current_folder_id = None
        self.state.current_memo = None
        self.access_service.load_credentials(snapshot.passwords)

    def mark_synced(self, version: int) -> None:
        """リモートへ送信できた版番号を記録する。"""
        self.state.version = max(self.state.version, version)

    def _persist(self) -> None:
        if self.persist is not None:
            self.persist()

    @staticmethod
    def _new_id(existing: set) -> str:
        """時刻（ミリ秒）ベースのIDを採番する。既存IDと衝突する場合は値を進める。"""
        value = int(time.time() * 1000)
        while str(value) in existing:
            value += 1
        return str(value)
