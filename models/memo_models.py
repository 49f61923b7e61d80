# models/memo_models.py
from dataclasses import dataclass, asdict
from typing import Any, Dict

VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"

DEFAULT_MEMO_TITLE = "無題のメモ"


@dataclass
class Folder:
    """メモをまとめるフォルダを表現するデータモデル。

    Attributes:
        id (str): フォルダの一意なID（時刻ベース）。
        name (str): フォルダ名。
        visibility (str): "public" または "private"。
        created_at (str): 作成日時（ISO 8601形式）。
    """
    id: str
    name: str
    visibility: str
    created_at: str

    @property
    def is_private(self) -> bool:
        return self.visibility == VISIBILITY_PRIVATE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "visibility": self.visibility,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Folder":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            visibility=data.get("visibility", VISIBILITY_PUBLIC),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class Memo:
    """ユーザーが作成する単一のメモを表現するデータモデル。

    Attributes:
        id (str): メモの一意なID。
        folder_id (str): 所属するフォルダのID。
        title (str): メモのタイトル。
        content (str): メモの本文。
        created_at (str): メモの作成日時（ISO 8601形式）。
        updated_at (str): メモの最終更新日時（ISO 8601形式）。
    """
    id: str
    folder_id: str
    title: str
    content: str
    created_at: str
    updated_at: str

    def copy(self) -> "Memo":
        return Memo(**asdict(self))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "folderId": self.folder_id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Memo":
        created_at = data.get("createdAt", "")
        return cls(
            id=str(data["id"]),
            folder_id=str(data.get("folderId", "")),
            title=data.get("title", ""),
            content=data.get("content", ""),
            created_at=created_at,
            updated_at=data.get("updatedAt", created_at),
        )
