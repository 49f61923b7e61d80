# ui/dialogs/confirm_delete_dialog.py
from __future__ import annotations
from typing import Optional

from PyQt6.QtWidgets import QMessageBox, QWidget


class ConfirmDeleteDialog(QMessageBox):
    """削除前に一度だけ確認を取るダイアログ。取り消し（Undo）はできない。"""

    def __init__(self, parent: Optional[QWidget], item_name: str, memo_count: Optional[int] = None) -> None:
        """
        ConfirmDeleteDialogのコンストラクタ。

        Args:
            parent (Optional[QWidget]): 親ウィジェット。
            item_name (str): 削除対象の名前。
            memo_count (Optional[int]): フォルダ削除の場合、同時に削除されるメモの件数。
        """
        super().__init__(parent)
        self.setWindowTitle("削除の確認")
        self.setIcon(QMessageBox.Icon.Warning)
        text = f"「{item_name}」を削除しますか？"
        if memo_count:
            text += f"\nこのフォルダ内のメモ{memo_count}件も削除されます。"
        text += "\nこの操作は元に戻せません。"
        self.setText(text)
        self.delete_button = self.addButton("削除", QMessageBox.ButtonRole.DestructiveRole)
        self.addButton("キャンセル", QMessageBox.ButtonRole.RejectRole)

    def confirmed(self) -> bool:
        """ダイアログを表示し、削除が選ばれたかどうかを返す。"""
        self.exec()
        return self.clickedButton() is self.delete_button
