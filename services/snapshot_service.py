# services/snapshot_service.py
"""
スナップショットの永続化アダプタ。

- LocalSnapshotService: ローカルストレージの固定キーへ丸ごと書き込む。
- RemoteSnapshotService: リモートリポジトリの data.json を丸ごと上書きする。
  リモートモード以外では読み込みをローカルに委ね、保存は何もしない。
"""
import json
from datetime import datetime
from typing import Optional

import requests

from models.config_models import AppConfig
from models.session_models import Snapshot
from services.api_service import APIService
from services.base_service import BaseService
from services.errors import LocalStorageError, RemotePersistenceError
from services.storage_service import StorageService, dump_json
from utils.encoding import encode_content


def serialize_snapshot(snapshot: Snapshot) -> str:
    """スナップショットを保存・エクスポート共通のJSONテキストにする。"""
    return dump_json(snapshot.to_dict())


class LocalSnapshotService(BaseService[Snapshot]):
    """ローカルストレージにスナップショットを保存するアダプタ。"""

    def __init__(self, storage_service: StorageService) -> None:
        self.storage_service = storage_service

    def load_data(self) -> Optional[Snapshot]:
        """保存済みのスナップショットを読み込む。

        Returns:
            Optional[Snapshot]: スナップショット。保存されていない場合はNone。

        Raises:
            json.JSONDecodeError: 保存内容が壊れている場合。
        """
        data = self.storage_service.load_json(StorageService.DATA_KEY)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise json.JSONDecodeError("スナップショットの形式が不正です", str(data)[:40], 0)
        return Snapshot.from_dict(data)

    def save_data(self, data: Snapshot) -> None:
        """スナップショットを無条件に書き込む。

        Raises:
            LocalStorageError: 書き込みに失敗した場合。
        """
        self.storage_service.save_text(StorageService.DATA_KEY, serialize_snapshot(data))


class RemoteSnapshotService(BaseService[Snapshot]):
    """リモートリポジトリにスナップショットを保存するアダプタ。

    保存は「shaを取得してからPUT」の後勝ち方式であり、取得とPUTの間に
    別の書き込みが割り込んだ場合はリモート側が競合として拒否する。
    """

    def __init__(self, config: AppConfig, api_service: APIService, local_service: LocalSnapshotService) -> None:
        """RemoteSnapshotServiceのコンストラクタ。

        Args:
            config (AppConfig): 接続設定。
            api_service (APIService): リモートAPIクライアント。
            local_service (LocalSnapshotService): フォールバック先のローカルアダプタ。
        """
        self.config = config
        self.api_service = api_service
        self.local_service = local_service
        self.last_pushed_version: Optional[int] = None
        self.last_synced_at: Optional[datetime] = None

    def load_data(self) -> Optional[Snapshot]:
        """リモートからスナップショットを読み込む。

        リモートモードでない場合、または取得に失敗した場合はローカルから読み込む。
        """
        if not self.config.is_remote:
            return self.local_service.load_data()

        try:
            data = self.api_service.fetch_raw_data()
            if not isinstance(data, dict):
                raise ValueError("リモートのデータ形式が不正です")
            snapshot = Snapshot.from_dict(data)
            print(f"リモートからデータを読み込みました: フォルダ{len(snapshot.folders)}件, メモ{len(snapshot.memos)}件")
            return snapshot
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError) as e:
            print(f"リモートからの読み込みに失敗しました。ローカルデータを使用します: {e}")
            return self.local_service.load_data()

    def save_data(self, data: Snapshot) -> None:
        """スナップショットをリモートに保存する。

        リモートモードでない場合やトークンが未設定の場合は何もしない。
        成功時は版番号を進めたスナップショットをローカルにも書き込む。
        失敗時はスナップショットをローカルに書き込んだうえで例外を送出し直す。

        Raises:
            RemotePersistenceError: リモートが保存を拒否した、または接続できなかった場合。
        """
        if not self.config.is_remote:
            print("リモート保存モードではないため、同期をスキップします")
            return
        if not self.config.access_token:
            print("アクセストークンが未設定のため、同期をスキップします")
            return

        sha = self.api_service.fetch_file_sha()

        version = data.version + 1
        payload = Snapshot(
            folders=data.folders,
            memos=data.memos,
            passwords=data.passwords,
            last_updated=data.last_updated,
            version=version,
            device_id=data.device_id,
        )
        content = encode_content(serialize_snapshot(payload))
        message = self._commit_message(version, data.device_id)

        try:
            result = self.api_service.put_file(content, message, sha)
        except RemotePersistenceError as e:
            print(f"リモートへの保存に失敗しました: {e}")
            try:
                self.local_service.save_data(data)
            except LocalStorageError as local_error:
                print(f"フォールバックのローカル保存にも失敗しました: {local_error}")
            raise

        new_sha = (result.get("content") or {}).get("sha") or ""
        print(f"リモートへの保存に成功しました: v{version} sha={new_sha[:8]}")
        self.last_pushed_version = version
        self.last_synced_at = datetime.now()

        # ローカルの複製にも送信済みの版番号を反映する
        try:
            self.local_service.save_data(payload)
        except LocalStorageError as e:
            print(f"同期後のローカル保存に失敗しました: {e}")

    @staticmethod
    def _commit_message(version: int, device_id: str) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return f"メモデータ同期 v{version} - {timestamp} - 端末:{(device_id or 'unknown')[:8]}"
