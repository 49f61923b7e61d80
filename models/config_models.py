# models/config_models.py
from dataclasses import dataclass

STORAGE_LOCAL = "local"
STORAGE_REMOTE = "remote"


@dataclass
class AppConfig:
    """接続設定を表現するデータモデル。

    起動時に一度だけ読み込まれ、セッション中は変更されない。

    Attributes:
        account (str): リモートリポジトリの所有者アカウント名。
        repository_name (str): リポジトリ名。
        access_token (str): 平文のアクセストークン（永続化時は難読化される）。
        storage_mode (str): "local" または "remote"。
        configured (bool): 設定レコードが存在したかどうか。
        device_id (str): このインストールを識別するランダムなID。
    """
    account: str = ""
    repository_name: str = ""
    access_token: str = ""
    storage_mode: str = STORAGE_LOCAL
    configured: bool = False
    device_id: str = ""

    @property
    def is_remote(self) -> bool:
        return self.storage_mode == STORAGE_REMOTE
