# services/api_service.py
import requests
from typing import Any, Dict, Optional

from models.config_models import AppConfig
from services.errors import RemotePersistenceError
from utils.api_utils import APIUtils, REQUEST_TIMEOUT


class APIService:
    """リモートリポジトリ上のデータファイルとの通信を管理するサービスクラス。

    読み込みは認証不要の生ファイル取得、書き込みは現在の版トークン（sha）を
    添えた認証付きPUTで行います。
    """

    DATA_FILE_PATH = "data.json"

    def __init__(self, config: AppConfig) -> None:
        """APIServiceのコンストラクタ。

        Args:
            config (AppConfig): 接続先アカウント・リポジトリ・トークンを含む設定。
        """
        self.config = config

    @property
    def contents_url(self) -> str:
        return APIUtils.contents_url(self.config.account, self.config.repository_name, self.DATA_FILE_PATH)

    @property
    def raw_url(self) -> str:
        return APIUtils.raw_url(self.config.account, self.config.repository_name, self.DATA_FILE_PATH)

    def fetch_raw_data(self) -> Dict[str, Any]:
        """データファイルの中身を認証なしで取得する。

        Returns:
            Dict[str, Any]: パース済みのJSON。

        Raises:
            requests.exceptions.RequestException: 通信エラーや2xx以外のステータスの場合。
            ValueError: 本文がJSONとして不正な場合。
        """
        response = requests.get(self.raw_url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()

    def fetch_file_sha(self) -> Optional[str]:
        """データファイルの現在の版トークン（sha）を取得する。

        ファイルがまだ存在しない場合や取得・解析に失敗した場合はNoneを返し、
        呼び出し側は新規作成として扱う。

        Returns:
            Optional[str]: 版トークン。
        """
        try:
            response = requests.get(
                self.contents_url,
                headers=APIUtils.auth_headers(self.config.access_token),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            print(f"ファイル情報の取得に失敗しました。新規ファイルとして扱います: {e}")
            return None

        if response.ok:
            try:
                metadata = response.json()
            except ValueError as e:
                print(f"ファイル情報の応答を解析できませんでした。新規ファイルとして扱います: {e}")
                return None
            sha = metadata.get("sha") if isinstance(metadata, dict) else None
            print(f"ファイルのshaを取得しました: {(sha or '')[:8]}")
            return sha
        print(f"ファイル情報を取得できませんでした (HTTP {response.status_code})。新規ファイルとして扱います。")
        return None

    def put_file(self, content: str, message: str, sha: Optional[str] = None) -> Dict[str, Any]:
        """データファイルを上書き（または新規作成）する。

        Args:
            content (str): Base64エンコード済みのファイル内容。
            message (str): コミットメッセージ。
            sha (Optional[str]): 現在の版トークン。新規作成時はNone。

        Returns:
            Dict[str, Any]: APIからのJSONレスポンス。

        Raises:
            RemotePersistenceError: 通信エラーや2xx以外のステータスの場合。
        """
        body: Dict[str, Any] = {"message": message, "content": content}
        if sha:
            body["sha"] = sha

        headers = APIUtils.auth_headers(self.config.access_token)
        headers["Content-Type"] = "application/json"
        try:
            response = requests.put(self.contents_url, headers=headers, json=body, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise RemotePersistenceError(f"リモートへの接続に失敗しました: {e}") from e

        if not response.ok:
            raise RemotePersistenceError(APIUtils.extract_error_message(response), response.status_code)
        # 書き込み自体は成功しているため、応答本文が読めなくても失敗扱いにしない
        try:
            result = response.json()
        except ValueError as e:
            print(f"保存結果の応答を解析できませんでした: {e}")
            return {}
        return result if isinstance(result, dict) else {}
