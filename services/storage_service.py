# services/storage_service.py
import json
import os
from typing import Dict, Any, Optional, Union, List

from services.errors import LocalStorageError

JsonData = Union[Dict[str, Any], List[Any]]


def dump_json(data: JsonData) -> str:
    """保存・エクスポートで共通に使うJSONシリアライズ。

    ローカル保存とエクスポートが同じ瞬間に同じバイト列を出力するよう、
    整形ルールはここに一本化している。
    """
    return json.dumps(data, ensure_ascii=False, indent=4)


class StorageService:
    """ローカルファイルシステム上のキー・バリューストア。

    キーごとに `<key>.json` というファイルを1つ持ち、JSON文書を丸ごと読み書きします。
    """

    CONFIG_KEY = "memo_config"
    DATA_KEY = "memo_data"

    def __init__(self, base_path: str = "data") -> None:
        """StorageServiceのコンストラクタ。

        Args:
            base_path (str): データを保存する基準ディレクトリのパス。
                             存在しない場合は自動的に作成されます。
        """
        self.base_path = base_path
        os.makedirs(self.base_path, exist_ok=True)

    def get_path(self, key: str) -> str:
        """キーに対応するファイルの完全なパスを取得する。

        Args:
            key (str): ストレージのキー。

        Returns:
            str: 完全なファイルパス。
        """
        return os.path.join(self.base_path, f"{key}.json")

    def save_text(self, key: str, text: str) -> None:
        """シリアライズ済みのテキストを無条件に書き込む。

        Args:
            key (str): ストレージのキー。
            text (str): 書き込むテキスト。

        Raises:
            LocalStorageError: 書き込みに失敗した場合。
        """
        file_path = self.get_path(key)
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            print(f"ファイル保存中にエラーが発生しました: {file_path}, {e}")
            raise LocalStorageError(f"ローカル保存に失敗しました: {e}") from e

    def save_json(self, key: str, data: JsonData) -> None:
        """データをJSONとしてローカルに保存する。

        Args:
            key (str): ストレージのキー。
            data (Union[Dict, List]): 保存するデータ。

        Raises:
            LocalStorageError: 書き込みに失敗した場合。
        """
        self.save_text(key, dump_json(data))

    def load_json(self, key: str) -> Optional[JsonData]:
        """ローカルのJSONファイルからデータを読み込む。

        Args:
            key (str): ストレージのキー。

        Returns:
            Optional[Union[Dict, List]]: 読み込まれたデータ。キーが存在しない場合はNone。

        Raises:
            json.JSONDecodeError: 内容がJSONとして不正な場合。
        """
        file_path = self.get_path(key)
        if not os.path.exists(file_path):
            return None
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
