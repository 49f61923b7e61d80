# utils/encoding.py
"""
パスワード・トークンの難読化と、リモート保存用のコンテンツエンコードを提供します。

ここでの難読化は可逆なBase64変換であり、暗号化ではありません。
"""
import base64
import binascii


def encode_secret(value: str) -> str:
    """文字列を可逆な形式（Base64）に変換する。

    Args:
        value (str): 平文のパスワードまたはトークン。

    Returns:
        str: エンコード済みの文字列。空文字列はそのまま返す。
    """
    if not value:
        return ""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def decode_secret(encoded: str) -> str:
    """encode_secretで変換された文字列を平文に戻す。

    Args:
        encoded (str): エンコード済みの文字列。

    Returns:
        str: 平文の文字列。

    Raises:
        ValueError: Base64またはUTF-8として解釈できない場合。
    """
    if not encoded:
        return ""
    try:
        return base64.b64decode(encoded.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError) as e:
        raise ValueError(f"デコードに失敗しました: {e}") from e


def encode_content(text: str) -> str:
    """JSONテキストをリモートAPIのcontentフィールド用にBase64化する。

    マルチバイト文字を含む場合もUTF-8のバイト列としてエンコードするため、
    リモートでの往復で文字化けしない。

    Args:
        text (str): シリアライズ済みJSONテキスト。

    Returns:
        str: Base64文字列（ASCII）。
    """
    return base64.b64encode(text.encode("utf-8")).decode("ascii")
