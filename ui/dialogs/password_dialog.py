# ui/dialogs/password_dialog.py
from __future__ import annotations
from typing import Callable, Optional

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QLineEdit, QDialogButtonBox, QWidget
)
from PyQt6.QtCore import Qt


class PasswordDialog(QDialog):
    """
    非公開フォルダを開く前にパスワードを求めるモーダルダイアログ。

    照合に失敗した場合は入力欄をクリアしてエラーを表示し、ダイアログを開いたままにする。
    """
    def __init__(self, parent: Optional[QWidget], folder_name: str, verify: Callable[[str], bool]) -> None:
        """
        PasswordDialogのコンストラクタ。

        Args:
            parent (Optional[QWidget]): 親ウィジェット。
            folder_name (str): 表示するフォルダ名。
            verify (Callable[[str], bool]): 入力されたパスワードを照合する関数。
        """
        super().__init__(parent)
        self.setWindowTitle("パスワード入力")
        self.setModal(True)
        self.setWindowModality(Qt.WindowModality.WindowModal)
        self._verify = verify

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f"フォルダ「{folder_name}」のパスワードを入力してください"))

        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        layout.addWidget(self.password_edit)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #d32f2f;")
        layout.addWidget(self.error_label)

        button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        button_box.accepted.connect(self._submit)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def _submit(self) -> None:
        if self._verify(self.password_edit.text()):
            self.accept()
            return
        self.password_edit.clear()
        self.error_label.setText("パスワードが違います")
        self.password_edit.setFocus()
