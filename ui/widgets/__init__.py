from .memo_editor import MemoEditor

__all__ = [
    "MemoEditor",
]
