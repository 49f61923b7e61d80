# models/session_models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from models.memo_models import Folder, Memo


@dataclass
class Snapshot:
    """永続化の単位となるアプリケーションデータ全体のスナップショット。

    Attributes:
        folders (List[Folder]): 全フォルダ（表示順）。
        memos (List[Memo]): 全メモ（表示順）。
        passwords (List[Tuple[str, str]]): (フォルダID, エンコード済みパスワード) の組。
        last_updated (str): スナップショット作成日時（ISO 8601形式）。
        version (int): リモートへ送信に成功するたびに増える版番号。
        device_id (str): スナップショットを書き出した端末のID。
    """
    folders: List[Folder] = field(default_factory=list)
    memos: List[Memo] = field(default_factory=list)
    passwords: List[Tuple[str, str]] = field(default_factory=list)
    last_updated: str = ""
    version: int = 0
    device_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "folders": [f.to_dict() for f in self.folders],
            "memos": [m.to_dict() for m in self.memos],
            "passwords": [[folder_id, encoded] for folder_id, encoded in self.passwords],
            "lastUpdated": self.last_updated,
            "version": self.version,
            "deviceId": self.device_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        return cls(
            folders=[Folder.from_dict(item) for item in data.get("folders") or []],
            memos=[Memo.from_dict(item) for item in data.get("memos") or []],
            passwords=[(str(pair[0]), str(pair[1])) for pair in data.get("passwords") or []],
            last_updated=data.get("lastUpdated") or data.get("lastModified") or "",
            version=int(data.get("version") or 0),
            device_id=data.get("deviceId", ""),
        )


@dataclass
class SessionState:
    """実行中セッションの状態全体を保持するオブジェクト。

    フォルダ・メモ・認証情報の唯一の所有者であり、MemoServiceを通してのみ変更される。
    unlocked_folder_idsはこのセッションで解錠済みのフォルダを表し、永続化されない。
    """
    folders: List[Folder] = field(default_factory=list)
    memos: List[Memo] = field(default_factory=list)
    credentials: Dict[str, str] = field(default_factory=dict)
    unlocked_folder_ids: Set[str] = field(default_factory=set)
    current_folder_id: Optional[str] = None
    current_memo: Optional[Memo] = None
    version: int = 0
