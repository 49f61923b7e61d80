# ui/main_window.py
import json
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QSplitter, QToolBar, QLineEdit, QListWidget, QListWidgetItem,
    QMessageBox, QStackedWidget, QListView, QSizePolicy
)
from PyQt6.QtGui import QAction
from PyQt6.QtCore import Qt, QTimer, QSize

from models.config_models import AppConfig
from models.memo_models import Folder, Memo
from models.session_models import SessionState
from services.access_service import FolderAccessService
from services.api_service import APIService
from services.errors import FolderLockedError, LocalStorageError, ValidationError
from services.memo_service import MemoService
from services.snapshot_service import LocalSnapshotService, RemoteSnapshotService
from services.storage_service import StorageService
from services.sync_service import RemoteSaveQueue
from ui.dialogs import NewFolderDialog, PasswordDialog, ConfirmDeleteDialog
from ui.handlers.export_handler import ExportHandler
from ui.widgets import MemoEditor
from utils.sync_worker import LoadWorkerThread, SyncWorkerThread


class MainWindow(QMainWindow):
    AUTOSAVE_INTERVAL_MS = 30 * 1000
    LIST_PAGE = 0
    EDITOR_PAGE = 1

    def __init__(self, config: AppConfig, storage_service: StorageService):
        super().__init__()
        self.setWindowTitle("フォルダメモ")
        self.setGeometry(80, 80, 1200, 760)
        self.config = config

        # --- サービスの組み立て ---
        self.state = SessionState()
        self.access_service = FolderAccessService(self.state)
        self.memo_service = MemoService(
            self.state, self.access_service, persist=self.persist_data, device_id=config.device_id
        )
        self.local_snapshot_service = LocalSnapshotService(storage_service)
        self.remote_snapshot_service = RemoteSnapshotService(
            config, APIService(config), self.local_snapshot_service
        )
        self.save_queue = RemoteSaveQueue(self.remote_snapshot_service)
        self.sync_thread: Optional[SyncWorkerThread] = None
        self.load_thread: Optional[LoadWorkerThread] = None
        self.export_handler = ExportHandler(self)

        self.setup_toolbar()
        self.setup_layout()
        self.connect_signals()

        self.load_data()

        # 編集中のメモを定期的に保存する
        self.autosave_timer = QTimer(self)
        self.autosave_timer.setInterval(self.AUTOSAVE_INTERVAL_MS)
        self.autosave_timer.timeout.connect(self.autosave)
        self.autosave_timer.start()

    def createPopupMenu(self):
        return None

    # --- UI構築 ---

    def setup_toolbar(self):
        toolbar = QToolBar("メインツールバー")
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)
        toolbar.setStyleSheet("""
            QToolBar { spacing: 4px; }
            QToolButton {
                background-color: #f0f0f0;
                border: 1px solid #c0c0c0;
                padding: 5px 10px;
                border-radius: 4px;
            }
        """)

        mode_text = "リモート同期" if self.config.is_remote else "ローカル保存"
        toolbar.addWidget(QLabel(f"保存先: {mode_text}  "))
        toolbar.addSeparator()

        self.sync_action = QAction("今すぐ同期", self)
        self.sync_action.setEnabled(self.config.is_remote)
        toolbar.addAction(self.sync_action)

        self.export_all_action = QAction("すべてエクスポート", self)
        toolbar.addAction(self.export_all_action)

        spacer = QWidget()
        spacer.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        toolbar.addWidget(spacer)

        self.last_sync_label = QLabel("未同期" if self.config.is_remote else "")
        toolbar.addWidget(self.last_sync_label)

    def setup_layout(self):
        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.setHandleWidth(1)

        # ─── フォルダ一覧 ───
        folder_panel = QWidget()
        folder_layout = QVBoxLayout(folder_panel)
        folder_layout.setContentsMargins(8, 8, 8, 8)
        title = QLabel("フォルダ")
        title.setStyleSheet("font-size:16px; font-weight:bold;")
        folder_layout.addWidget(title)

        self.folder_list = QListWidget()
        folder_layout.addWidget(self.folder_list)

        self.new_folder_button = QPushButton("+ 新規フォルダ")
        self.delete_folder_button = QPushButton("フォルダ削除")
        self.delete_folder_button.setEnabled(False)
        folder_layout.addWidget(self.new_folder_button)
        folder_layout.addWidget(self.delete_folder_button)

        # ─── メモ一覧 ───
        list_page = QWidget()
        list_layout = QVBoxLayout(list_page)
        list_layout.setContentsMargins(8, 8, 8, 8)

        header_layout = QHBoxLayout()
        self.current_folder_label = QLabel("フォルダを選択してください")
        self.current_folder_label.setStyleSheet("font-size:16px; font-weight:bold;")
        header_layout.addWidget(self.current_folder_label)
        header_layout.addStretch()
        self.new_memo_button = QPushButton("+ 新規メモ")
        self.new_memo_button.setEnabled(False)
        header_layout.addWidget(self.new_memo_button)
        list_layout.addLayout(header_layout)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("検索…")
        list_layout.addWidget(self.search_edit)

        self.memo_list = QListWidget()
        self.memo_list.setViewMode(QListView.ViewMode.IconMode)
        self.memo_list.setResizeMode(QListView.ResizeMode.Adjust)
        self.memo_list.setMovement(QListView.Movement.Static)
        self.memo_list.setGridSize(QSize(200, 110))
        self.memo_list.setWordWrap(True)
        list_layout.addWidget(self.memo_list)

        # ─── エディタ ───
        self.memo_editor = MemoEditor()

        self.content_stack = QStackedWidget()
        self.content_stack.addWidget(list_page)
        self.content_stack.addWidget(self.memo_editor)

        splitter.addWidget(folder_panel)
        splitter.addWidget(self.content_stack)
        splitter.setSizes([260, 940])
        self.setCentralWidget(splitter)

    def connect_signals(self):
        self.sync_action.triggered.connect(self.sync_now)
        self.export_all_action.triggered.connect(self.export_handler.export_all)
        self.folder_list.itemClicked.connect(self.on_folder_clicked)
        self.new_folder_button.clicked.connect(self.open_new_folder_dialog)
        self.delete_folder_button.clicked.connect(self.confirm_delete_folder)
        self.new_memo_button.clicked.connect(self.create_memo)
        self.search_edit.textChanged.connect(lambda _text: self.render_memos())
        self.memo_list.itemClicked.connect(self.on_memo_clicked)
        self.memo_editor.edited.connect(self.memo_service.update_current_memo)
        self.memo_editor.save_requested.connect(self.save_memo)
        self.memo_editor.close_requested.connect(self.close_memo)
        self.memo_editor.delete_requested.connect(self.confirm_delete_memo)
        self.memo_editor.export_requested.connect(self.export_handler.export_current_memo)
        self.memo_editor.export_word_requested.connect(self.export_handler.export_current_memo_as_word)

    # --- 描画 ---

    def render_folders(self):
        current_id = self.state.current_folder_id
        self.folder_list.clear()
        for folder in self.memo_service.folders:
            count = self.memo_service.count_memos_in_folder(folder.id)
            prefix = "🔒 " if folder.is_private else "📁 "
            item = QListWidgetItem(f"{prefix}{folder.name} ({count})")
            item.setData(Qt.ItemDataRole.UserRole, folder.id)
            self.folder_list.addItem(item)
            if folder.id == current_id:
                item.setSelected(True)
                self.folder_list.setCurrentItem(item)

        folder = self.memo_service.current_folder
        self.current_folder_label.setText(folder.name if folder else "フォルダを選択してください")
        self.new_memo_button.setEnabled(folder is not None)
        self.delete_folder_button.setEnabled(folder is not None)

    def render_memos(self):
        self.memo_list.clear()
        for memo in self.memo_service.memos_in_current_folder(self.search_edit.text()):
            preview = memo.content.strip().replace("\n", " ")[:40]
            item = QListWidgetItem(f"{memo.title}\n{preview}")
            item.setData(Qt.ItemDataRole.UserRole, memo.id)
            item.setToolTip(memo.updated_at)
            self.memo_list.addItem(item)

    def show_memo_list(self):
        # 一覧に戻ったら下書きは自動保存の対象外
        self.memo_service.close_memo()
        self.content_stack.setCurrentIndex(self.LIST_PAGE)
        self.render_memos()

    def show_editor(self, memo: Memo):
        self.memo_editor.load_memo(memo)
        self.content_stack.setCurrentIndex(self.EDITOR_PAGE)

    # --- 読み込み・保存 ---

    def load_data(self):
        """保存データの読み込みを開始する。

        リモートモードでは通信が発生するため、読み込みはワーカースレッドで行い、
        完了までフォルダ操作を無効にしておく。
        """
        if not self.config.is_remote:
            try:
                snapshot = self.local_snapshot_service.load_data()
            except (OSError, json.JSONDecodeError) as e:
                self.on_load_failed(str(e))
                return
            self.on_data_loaded(snapshot)
            return

        self.set_loading(True)
        self.load_thread = LoadWorkerThread(self.remote_snapshot_service, self)
        self.load_thread.data_loaded.connect(self.on_data_loaded)
        self.load_thread.error_occurred.connect(self.on_load_failed)
        self.load_thread.start()

    def set_loading(self, loading: bool):
        self.folder_list.setEnabled(not loading)
        self.new_folder_button.setEnabled(not loading)
        self.sync_action.setEnabled(self.config.is_remote and not loading)
        if loading:
            self.current_folder_label.setText("読み込み中…")

    def on_data_loaded(self, snapshot):
        if snapshot is not None:
            self.memo_service.apply_snapshot(snapshot)
        self.set_loading(False)
        self.render_folders()
        self.show_memo_list()

    def on_load_failed(self, message: str):
        print(f"データの読み込みに失敗しました: {message}")
        QMessageBox.warning(self, "読み込みエラー", f"保存データを読み込めませんでした。空の状態で開始します。\n{message}")
        self.on_data_loaded(None)

    def persist_data(self):
        """ローカルへ同期的に保存し、リモートモードであれば送信を要求する。"""
        snapshot = self.memo_service.build_snapshot()
        try:
            self.local_snapshot_service.save_data(snapshot)
        except LocalStorageError as e:
            QMessageBox.critical(self, "保存エラー", f"データの保存に失敗しました。\n{e}")
            return

        if self.config.is_remote:
            self._request_remote_save(snapshot)

    def _request_remote_save(self, snapshot):
        if not self.save_queue.submit(snapshot):
            return
        self.sync_thread = SyncWorkerThread(self.save_queue, self)
        self.sync_thread.sync_succeeded.connect(self.on_sync_succeeded)
        self.sync_thread.error_occurred.connect(self.on_sync_failed)
        self.sync_thread.start()

    def sync_now(self):
        if not self.config.is_remote:
            QMessageBox.warning(self, "同期", "リモート保存モードではないため、同期できません。")
            return
        if self.save_queue.in_flight:
            self.statusBar().showMessage("同期中です。しばらくお待ちください…", 3000)
            return
        self.statusBar().showMessage("同期を開始します…", 3000)
        self.persist_data()

    def on_sync_succeeded(self, version: int):
        self.memo_service.mark_synced(version)
        synced_at = self.remote_snapshot_service.last_synced_at
        if synced_at:
            self.last_sync_label.setText(f"最終同期: {synced_at.strftime('%H:%M:%S')}")
        self.statusBar().showMessage("データを同期しました", 3000)

    def on_sync_failed(self, message: str):
        QMessageBox.warning(self, "同期エラー", message)

    def autosave(self):
        if self.memo_service.autosave():
            self.render_folders()
            self.statusBar().showMessage("自動保存しました", 2000)

    # --- フォルダ操作 ---

    def open_new_folder_dialog(self):
        dialog = NewFolderDialog(self, self.memo_service.create_folder)
        if dialog.exec() and dialog.created_folder:
            self.render_folders()

    def on_folder_clicked(self, item: QListWidgetItem):
        folder_id = item.data(Qt.ItemDataRole.UserRole)
        folder = self.memo_service.find_folder(folder_id)
        if folder is None:
            return
        if self.access_service.needs_password(folder_id) and not self.prompt_password(folder):
            self.render_folders()
            return

        try:
            self.memo_service.select_folder(folder_id)
        except FolderLockedError as e:
            QMessageBox.warning(self, "フォルダ", str(e))
            return
        self.render_folders()
        self.show_memo_list()

    def prompt_password(self, folder: Folder) -> bool:
        if not self.access_service.has_credential(folder.id):
            QMessageBox.warning(self, "フォルダ", "このフォルダのパスワード情報が見つかりません。")
            return False
        dialog = PasswordDialog(
            self, folder.name, lambda password: self.access_service.verify_password(folder.id, password)
        )
        return bool(dialog.exec())

    def confirm_delete_folder(self):
        folder = self.memo_service.current_folder
        if folder is None:
            return
        count = self.memo_service.count_memos_in_folder(folder.id)
        if not ConfirmDeleteDialog(self, folder.name, count).confirmed():
            return
        self.memo_service.delete_folder(folder.id)
        self.render_folders()
        self.show_memo_list()
        self.statusBar().showMessage(f"「{folder.name}」を削除しました", 3000)

    # --- メモ操作 ---

    def create_memo(self):
        try:
            memo = self.memo_service.create_memo()
        except ValidationError as e:
            QMessageBox.warning(self, "メモ", str(e))
            return
        self.show_editor(memo)

    def on_memo_clicked(self, item: QListWidgetItem):
        memo_id = item.data(Qt.ItemDataRole.UserRole)
        try:
            memo = self.memo_service.edit_memo(memo_id)
        except KeyError:
            return
        self.show_editor(memo)

    def save_memo(self):
        memo = self.memo_service.save_memo()
        if memo is None:
            return
        self.memo_editor.load_memo(memo)
        self.render_folders()
        self.statusBar().showMessage("保存しました", 2000)

    def close_memo(self):
        self.show_memo_list()

    def confirm_delete_memo(self):
        memo = self.memo_service.current_memo
        if memo is None:
            return
        if not ConfirmDeleteDialog(self, memo.title or "無題").confirmed():
            return
        # 未保存の下書きは一覧に無いため、削除されずにエディタが閉じるだけ
        self.memo_service.delete_memo(memo.id)
        self.render_folders()
        self.show_memo_list()

    def closeEvent(self, event):
        self.autosave_timer.stop()
        self.memo_service.autosave()
        for thread in (self.load_thread, self.sync_thread):
            if thread is not None and thread.isRunning():
                thread.wait(5000)
        super().closeEvent(event)
