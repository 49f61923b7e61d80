# services/sync_service.py
import threading
from typing import List, Optional

from models.session_models import Snapshot
from services.errors import RemotePersistenceError
from services.snapshot_service import RemoteSnapshotService


class RemoteSaveQueue:
    """リモート保存を常に1件だけ実行するための直列化キュー。

    送信中に新しい保存要求が来た場合は待機中のスナップショットを最新のもので
    置き換え、現在の送信が終わった後にまとめて1回だけ送信する。
    """

    def __init__(self, remote_service: RemoteSnapshotService) -> None:
        """RemoteSaveQueueのコンストラクタ。

        Args:
            remote_service (RemoteSnapshotService): 実際の送信を行うアダプタ。
        """
        self.remote_service = remote_service
        self._lock = threading.Lock()
        self._pending: Optional[Snapshot] = None
        self._in_flight = False
        self.last_push_succeeded = False

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    def submit(self, snapshot: Snapshot) -> bool:
        """保存要求を登録する。

        Args:
            snapshot (Snapshot): 送信したいスナップショット。

        Returns:
            bool: 呼び出し側がdrainを開始すべき場合はTrue。
                  既に送信中であれば要求は合流され、Falseを返す。
        """
        with self._lock:
            self._pending = snapshot
            if self._in_flight:
                print("同期中のため、次回の送信にまとめます")
                return False
            self._in_flight = True
            return True

    def drain(self) -> List[RemotePersistenceError]:
        """待機中のスナップショットが無くなるまで送信を繰り返す。

        送信ごとの失敗は収集して返し、後続の送信は継続する。
        最後の送信が成功したかどうかはlast_push_succeededに残る。

        Returns:
            List[RemotePersistenceError]: 発生したエラーのリスト。
        """
        errors: List[RemotePersistenceError] = []
        while True:
            with self._lock:
                snapshot = self._pending
                self._pending = None
                if snapshot is None:
                    self._in_flight = False
                    return errors
            try:
                self.remote_service.save_data(snapshot)
                self.last_push_succeeded = True
            except RemotePersistenceError as e:
                self.last_push_succeeded = False
                errors.append(e)
            except Exception:
                self.last_push_succeeded = False
                with self._lock:
                    self._in_flight = False
                raise
