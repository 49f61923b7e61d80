# ui/dialogs/settings_dialog.py
"""
初回起動時の接続設定ダイアログを提供します。

設定は保存後、次回起動時から有効になります。
"""
from __future__ import annotations
from typing import Optional

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLabel, QLineEdit,
    QComboBox, QDialogButtonBox, QWidget
)

from models.config_models import AppConfig, STORAGE_LOCAL, STORAGE_REMOTE


class SettingsDialog(QDialog):
    """保存先と、リモート保存時のアカウント・リポジトリ・トークンを入力するダイアログ。"""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("初期設定")
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("メモの保存先を設定してください。"))

        form = QFormLayout()
        self.mode_combo = QComboBox()
        self.mode_combo.addItem("ローカルのみ", STORAGE_LOCAL)
        self.mode_combo.addItem("リモートリポジトリ", STORAGE_REMOTE)
        form.addRow("保存先", self.mode_combo)

        self.account_edit = QLineEdit()
        form.addRow("アカウント", self.account_edit)
        self.repository_edit = QLineEdit()
        form.addRow("リポジトリ", self.repository_edit)
        self.token_edit = QLineEdit()
        self.token_edit.setEchoMode(QLineEdit.EchoMode.Password)
        form.addRow("アクセストークン", self.token_edit)
        layout.addLayout(form)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #d32f2f;")
        layout.addWidget(self.error_label)

        button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        button_box.accepted.connect(self._submit)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

        self.mode_combo.currentIndexChanged.connect(self._refresh_fields)
        self._refresh_fields()

    def _is_remote(self) -> bool:
        return self.mode_combo.currentData() == STORAGE_REMOTE

    def _refresh_fields(self, *_args) -> None:
        remote = self._is_remote()
        for edit in (self.account_edit, self.repository_edit, self.token_edit):
            edit.setEnabled(remote)

    def _submit(self) -> None:
        if self._is_remote() and not (self.account_edit.text().strip() and self.repository_edit.text().strip()):
            self.error_label.setText("アカウントとリポジトリを入力してください")
            return
        self.accept()

    def config(self) -> AppConfig:
        """入力内容から設定オブジェクトを作る。"""
        return AppConfig(
            account=self.account_edit.text().strip(),
            repository_name=self.repository_edit.text().strip(),
            access_token=self.token_edit.text().strip(),
            storage_mode=self.mode_combo.currentData(),
            configured=True,
        )
