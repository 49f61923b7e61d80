# ui/dialogs/new_folder_dialog.py
"""
新規フォルダ作成用のダイアログウィンドウを提供します。

フォルダ名・公開設定・パスワードを入力させ、検証はMemoServiceに任せます。
検証エラーの場合はダイアログを閉じずにメッセージを表示します。
"""
from __future__ import annotations
from typing import Callable, Optional

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLabel, QLineEdit,
    QRadioButton, QButtonGroup, QHBoxLayout, QDialogButtonBox, QWidget
)
from PyQt6.QtCore import Qt

from models.memo_models import Folder, VISIBILITY_PRIVATE, VISIBILITY_PUBLIC
from services.errors import ValidationError


class NewFolderDialog(QDialog):
    """
    フォルダ名と公開設定を入力するモーダルダイアログ。

    「非公開」を選んだ場合のみパスワード欄が有効になります。
    """
    def __init__(
        self,
        parent: Optional[QWidget],
        create_folder: Callable[[str, str, Optional[str]], Folder],
    ) -> None:
        """
        NewFolderDialogのコンストラクタ。

        Args:
            parent (Optional[QWidget]): 親ウィジェット。通常はMainWindow。
            create_folder (Callable): 名前・公開設定・パスワードを受け取りフォルダを作成する関数。
        """
        super().__init__(parent)
        self.setWindowTitle("新規フォルダ")
        self.setModal(True)
        self.setWindowModality(Qt.WindowModality.WindowModal)

        self._create_folder = create_folder
        self.created_folder: Optional[Folder] = None

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("フォルダ名")
        form.addRow("名前", self.name_edit)

        visibility_layout = QHBoxLayout()
        self.public_radio = QRadioButton("公開")
        self.private_radio = QRadioButton("非公開")
        self.public_radio.setChecked(True)
        self.visibility_group = QButtonGroup(self)
        self.visibility_group.addButton(self.public_radio)
        self.visibility_group.addButton(self.private_radio)
        visibility_layout.addWidget(self.public_radio)
        visibility_layout.addWidget(self.private_radio)
        form.addRow("公開設定", visibility_layout)

        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.password_edit.setPlaceholderText("4文字以上")
        self.password_edit.setEnabled(False)
        form.addRow("パスワード", self.password_edit)

        layout.addLayout(form)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #d32f2f;")
        layout.addWidget(self.error_label)

        button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        button_box.accepted.connect(self._submit)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

        self.private_radio.toggled.connect(self.password_edit.setEnabled)

    def _visibility(self) -> str:
        return VISIBILITY_PRIVATE if self.private_radio.isChecked() else VISIBILITY_PUBLIC

    def _submit(self) -> None:
        """入力内容でフォルダを作成する。検証エラーの場合はダイアログに留まる。"""
        visibility = self._visibility()
        password = self.password_edit.text() if visibility == VISIBILITY_PRIVATE else None
        try:
            self.created_folder = self._create_folder(self.name_edit.text(), visibility, password)
        except ValidationError as e:
            self.error_label.setText(str(e))
            return
        self.accept()
