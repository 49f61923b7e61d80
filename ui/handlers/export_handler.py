from __future__ import annotations
import os
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from PyQt6.QtWidgets import QFileDialog, QMessageBox

from services.export_service import ExportService

if TYPE_CHECKING:
    from ..main_window import MainWindow


class ExportHandler:
    """
    メモ単体、またはデータ全体を外部ファイル（JSON, Word）にエクスポートする機能を提供します。
    """
    def __init__(self, main_window: MainWindow) -> None:
        """
        ExportHandlerのコンストラクタ。

        Args:
            main_window (MainWindow): 親となるメインウィンドウインスタンス。
        """
        self.main: MainWindow = main_window
        self.export_service = ExportService()

    def _ask_path(self, caption: str, default_name: str, file_filter: str, suffix: str) -> Optional[str]:
        """保存先をファイルダイアログで選ばせる。キャンセル時はNone。"""
        initial_path = os.path.join(os.path.expanduser("~"), default_name)
        file_path, _ = QFileDialog.getSaveFileName(self.main, caption, initial_path, file_filter)
        if not file_path:
            return None
        if not file_path.lower().endswith(suffix):
            file_path += suffix
        return file_path

    def export_current_memo(self) -> None:
        """編集中のメモをJSONとして保存する。"""
        memo = self.main.memo_service.current_memo
        if memo is None:
            return

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        file_path = self._ask_path("メモをエクスポート", f"memo_{timestamp}.json", "JSON (*.json)", ".json")
        if not file_path:
            return

        try:
            self.export_service.export_memo_json(memo, file_path)
            QMessageBox.information(self.main, "エクスポート完了", f"メモを保存しました。\n{file_path}")
        except OSError as exc:
            QMessageBox.critical(self.main, "エクスポートエラー", f"メモの保存に失敗しました。\n{exc}")

    def export_current_memo_as_word(self) -> None:
        """編集中のメモをWord (.docx) 形式で保存する。"""
        memo = self.main.memo_service.current_memo
        if memo is None:
            return

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        file_path = self._ask_path("Word形式で保存", f"memo_{timestamp}.docx", "Word Documents (*.docx)", ".docx")
        if not file_path:
            return

        try:
            self.export_service.export_memo_docx(memo, file_path)
            QMessageBox.information(self.main, "保存完了", f"メモをWord形式で保存しました。\n{file_path}")
        except Exception as exc:
            QMessageBox.critical(self.main, "保存エラー", f"Wordファイルの保存に失敗しました。\n{exc}")

    def export_all(self) -> bool:
        """
        フォルダ・メモ・パスワードを含むデータ全体をJSONファイルとして保存する。

        Returns:
            bool: 保存が成功した場合はTrue、キャンセルまたは失敗した場合はFalse。
        """
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        file_path = self._ask_path("すべてエクスポート", f"memo_backup_{timestamp}.json",
                                   "JSON (*.json);;All Files (*)", ".json")
        if not file_path:
            return False

        try:
            self.export_service.export_all_json(self.main.memo_service.build_snapshot(), file_path)
            QMessageBox.information(self.main, "エクスポート完了", f"すべてのデータを保存しました。\n{file_path}")
            return True
        except OSError as exc:
            QMessageBox.critical(self.main, "エクスポートエラー", f"データの保存に失敗しました。\n{exc}")
            return False
