# utils/api_utils.py
import requests
from typing import Dict, Optional

GITHUB_API_BASE = "https://api.github.com"
GITHUB_RAW_BASE = "https://raw.githubusercontent.com"
REQUEST_TIMEOUT = 15


class APIUtils:
    """API連携に関する共通処理を提供するユーティリティクラス。"""

    @staticmethod
    def contents_url(account: str, repository: str, path: str) -> str:
        """コンテンツAPI（メタデータ取得・PUT）のURLを組み立てる。"""
        return f"{GITHUB_API_BASE}/repos/{account}/{repository}/contents/{path}"

    @staticmethod
    def raw_url(account: str, repository: str, path: str, branch: str = "main") -> str:
        """認証不要の生ファイル取得用URLを組み立てる。"""
        return f"{GITHUB_RAW_BASE}/{account}/{repository}/{branch}/{path}"

    @staticmethod
    def auth_headers(token: str) -> Dict[str, str]:
        """認証付きリクエスト用のヘッダーを返す。

        Args:
            token (str): 平文のアクセストークン。

        Returns:
            Dict[str, str]: Authorization と Accept を含むヘッダー。
        """
        return {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json",
        }

    @staticmethod
    def extract_error_message(response: requests.Response) -> str:
        """エラーレスポンスのJSONから message を取り出す。

        JSONとして解釈できない場合や message が無い場合は、
        ステータスコードと理由句から代替メッセージを組み立てる。

        Args:
            response (requests.Response): 2xx以外のレスポンス。

        Returns:
            str: ユーザーに提示できるエラーメッセージ。
        """
        fallback = f"HTTP {response.status_code} {response.reason or ''}".strip()
        try:
            body = response.json()
        except ValueError:
            return fallback
        message: Optional[str] = body.get("message") if isinstance(body, dict) else None
        return message or fallback
