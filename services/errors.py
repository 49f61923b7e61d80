# services/errors.py
from typing import Optional


class MemoAppError(Exception):
    """アプリケーション固有の例外の基底クラス。"""


class ValidationError(MemoAppError):
    """入力値の検証に失敗した場合に送出される。状態は変更されていない。"""


class LocalStorageError(MemoAppError):
    """ローカルストレージへの書き込みに失敗した場合に送出される。"""


class RemotePersistenceError(MemoAppError):
    """リモートリポジトリへの保存に失敗した場合に送出される。

    Attributes:
        status_code (Optional[int]): HTTPステータスコード。通信自体が失敗した場合はNone。
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FolderLockedError(MemoAppError):
    """このセッションで解錠されていない非公開フォルダを開こうとした場合に送出される。"""
