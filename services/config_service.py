# services/config_service.py
import json
import uuid
from typing import Any, Dict

from models.config_models import AppConfig, STORAGE_LOCAL, STORAGE_REMOTE
from services.storage_service import StorageService
from utils.encoding import decode_secret, encode_secret


class ConfigService:
    """接続設定の読み込みと保存を管理するサービスクラス。

    アクセストークンは可逆な難読化を施した状態で永続化されます。
    """

    def __init__(self, storage_service: StorageService) -> None:
        """ConfigServiceのコンストラクタ。

        Args:
            storage_service (StorageService): 設定レコードを保持するストレージ。
        """
        self.storage_service = storage_service

    def load_config(self) -> AppConfig:
        """保存済みの設定を読み込む。

        レコードが無い場合や、JSONが壊れている場合は configured=False の既定値を返す。
        トークンの復元に失敗した場合はトークンを空として扱い、処理を継続する。

        Returns:
            AppConfig: 読み込まれた設定。
        """
        try:
            record = self.storage_service.load_json(StorageService.CONFIG_KEY)
        except (OSError, json.JSONDecodeError) as e:
            print(f"設定の読み込みに失敗しました: {e}")
            return AppConfig()

        if not isinstance(record, dict):
            return AppConfig()

        token = ""
        encoded_token = record.get("accessToken") or ""
        if encoded_token:
            try:
                token = decode_secret(encoded_token)
            except ValueError as e:
                print(f"アクセストークンを復元できませんでした: {e}")
                token = ""

        storage_mode = record.get("storageMode", STORAGE_LOCAL)
        if storage_mode not in (STORAGE_LOCAL, STORAGE_REMOTE):
            storage_mode = STORAGE_LOCAL

        return AppConfig(
            account=record.get("account", ""),
            repository_name=record.get("repositoryName", ""),
            access_token=token,
            storage_mode=storage_mode,
            configured=True,
            device_id=record.get("deviceId") or "",
        )

    def save_config(self, config: AppConfig) -> None:
        """設定を保存する。トークンは難読化して書き込む。

        device_idが未設定であれば、ここで新しく採番する。

        Args:
            config (AppConfig): 保存する設定。

        Raises:
            LocalStorageError: 書き込みに失敗した場合。
        """
        if not config.device_id:
            config.device_id = uuid.uuid4().hex
        record: Dict[str, Any] = {
            "account": config.account,
            "repositoryName": config.repository_name,
            "accessToken": encode_secret(config.access_token),
            "storageMode": config.storage_mode,
            "configured": True,
            "deviceId": config.device_id,
        }
        self.storage_service.save_json(StorageService.CONFIG_KEY, record)
