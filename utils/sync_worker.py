# utils/sync_worker.py
"""リモートリポジトリとの読み書きをバックグラウンドで実行するためのスレッド機能を提供します。"""

import json
from PyQt6.QtCore import QThread, pyqtSignal, QObject
from typing import Optional

from models.session_models import Snapshot
from services.base_service import BaseService
from services.sync_service import RemoteSaveQueue


class SyncWorkerThread(QThread):
    """RemoteSaveQueueに溜まった保存要求を送信するワーカースレッド。

    UIのフリーズを防ぐため、ネットワークリクエストをバックグラウンドで実行します。

    Signals:
        sync_succeeded (pyqtSignal):
            最後の送信が成功した際に、その版番号（int）を送信します。
        error_occurred (pyqtSignal):
            送信中にエラーが発生した際に、エラーメッセージ（str）を送信します。
    """
    sync_succeeded = pyqtSignal(int)
    error_occurred = pyqtSignal(str)

    def __init__(self, save_queue: RemoteSaveQueue, parent: Optional[QObject] = None) -> None:
        """SyncWorkerThreadのコンストラクタ。

        Args:
            save_queue (RemoteSaveQueue): 送信対象のキュー。
            parent (Optional[QObject]): 親オブジェクト。デフォルトはNone。
        """
        super().__init__(parent)
        self.save_queue = save_queue

    def run(self) -> None:
        """スレッドのメイン処理。キューが空になるまで送信し、結果をシグナルで通知する。"""
        try:
            errors = self.save_queue.drain()
        except Exception as e:
            self.error_occurred.emit(f"予期せぬエラーが発生しました: {e}")
            return

        for error in errors:
            self.error_occurred.emit(f"エラー：リモートへの保存に失敗しました。\n{error}")
        version = self.save_queue.remote_service.last_pushed_version
        if self.save_queue.last_push_succeeded and version is not None:
            self.sync_succeeded.emit(version)


class LoadWorkerThread(QThread):
    """起動時のスナップショット読み込みをバックグラウンドで行うワーカースレッド。

    Signals:
        data_loaded (pyqtSignal):
            読み込んだスナップショット（保存が無い場合はNone）を送信します。
        error_occurred (pyqtSignal):
            保存内容が読めなかった際に、エラーメッセージ（str）を送信します。
    """
    data_loaded = pyqtSignal(object)
    error_occurred = pyqtSignal(str)

    def __init__(self, snapshot_service: BaseService[Snapshot], parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.snapshot_service = snapshot_service

    def run(self) -> None:
        try:
            snapshot = self.snapshot_service.load_data()
        except (OSError, json.JSONDecodeError) as e:
            self.error_occurred.emit(str(e))
            return
        self.data_loaded.emit(snapshot)
