from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QTextEdit, QLineEdit

from models.memo_models import Memo, DEFAULT_MEMO_TITLE


class MemoEditor(QWidget):
    """
    メモのタイトルと本文を編集するエディタペイン。

    入力のたびにedited、ツールバーのボタン操作で各シグナルを送信します。
    保存などの処理は持たず、MainWindowがシグナルを受けてMemoServiceを呼び出します。
    """
    edited = pyqtSignal(str, str)
    save_requested = pyqtSignal()
    close_requested = pyqtSignal()
    delete_requested = pyqtSignal()
    export_requested = pyqtSignal()
    export_word_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        """
        MemoEditorのコンストラクタ。

        Args:
            parent (Optional[QWidget]): 親となるウィジェット。
        """
        super().__init__(parent)

        # --- 属性の型定義 ---
        self.title_edit: QLineEdit
        self.content_edit: QTextEdit
        self._loading: bool = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        # ツールバーの作成
        toolbar_layout = QHBoxLayout()
        toolbar_layout.setSpacing(8)
        back_button = QPushButton("← 一覧へ")
        save_button = QPushButton("保存")
        export_button = QPushButton("JSON出力")
        word_button = QPushButton("Word出力")
        delete_button = QPushButton("削除")
        for btn in [back_button, save_button, export_button, word_button, delete_button]:
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            toolbar_layout.addWidget(btn)
        toolbar_layout.insertStretch(1)

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText(DEFAULT_MEMO_TITLE)
        title_font = self.title_edit.font()
        title_font.setPointSize(16)
        title_font.setBold(True)
        self.title_edit.setFont(title_font)

        # テキスト編集エリアの作成
        self.content_edit = QTextEdit()
        self.content_edit.setAcceptRichText(False)
        font = QFont(self.content_edit.font())
        font.setPointSize(14)
        self.content_edit.setFont(font)

        layout.addLayout(toolbar_layout)
        layout.addWidget(self.title_edit)
        layout.addWidget(self.content_edit)

        # 接続
        back_button.clicked.connect(lambda: self.close_requested.emit())
        save_button.clicked.connect(lambda: self.save_requested.emit())
        export_button.clicked.connect(lambda: self.export_requested.emit())
        word_button.clicked.connect(lambda: self.export_word_requested.emit())
        delete_button.clicked.connect(lambda: self.delete_requested.emit())
        self.title_edit.textChanged.connect(self._emit_edited)
        self.content_edit.textChanged.connect(self._emit_edited)

    def load_memo(self, memo: Memo) -> None:
        """メモの内容をエディタに表示する。表示中はeditedを送信しない。"""
        self._loading = True
        try:
            self.title_edit.setText(memo.title)
            self.content_edit.setPlainText(memo.content)
        finally:
            self._loading = False
        self.content_edit.setFocus()

    def _emit_edited(self, *_args) -> None:
        if self._loading:
            return
        self.edited.emit(self.title_edit.text(), self.content_edit.toPlainText())
