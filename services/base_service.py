# services/base_service.py
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional

# データモデルを表すジェネリック型を定義
T = TypeVar('T')


class BaseService(Generic[T], ABC):
    """
    永続化アダプタの基底となる抽象クラス（ABC）。

    データロードとセーブの共通インターフェースを定義します。
    アダプタはスナップショットの直列化・復元だけを担い、正となる状態は保持しません。
    """

    @abstractmethod
    def load_data(self) -> Optional[T]:
        """
        データを読み込むための抽象メソッド。

        Returns:
            Optional[T]: 読み込まれたデータモデルオブジェクト。データが無い場合はNone。
        """
        pass

    @abstractmethod
    def save_data(self, data: T) -> None:
        """
        データを永続化するための抽象メソッド。

        Args:
            data (T): 保存するデータモデルオブジェクト。
        """
        pass
