"""
アプリケーションのエントリーポイント。

このスクリプトは、保存済みの接続設定を読み込み、PyQt6アプリケーションを初期化して
メインウィンドウを表示します。設定がまだ無い場合は初期設定ダイアログだけを表示し、
設定を保存した後は再起動を求めます（未設定のままメモ画面は開きません）。
"""
import sys
import os
from PyQt6.QtWidgets import QApplication, QMessageBox

# このファイル(main.py)があるディレクトリをモジュール検索パスに追加し、
# ui・servicesなどのプロジェクト内モジュールを正しく見つけられるようにします。
current_dir: str = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from services.config_service import ConfigService
from services.errors import LocalStorageError
from services.storage_service import StorageService
from ui.dialogs import SettingsDialog
from ui.main_window import MainWindow


def run_first_time_setup(config_service: ConfigService) -> int:
    """初期設定ダイアログを表示し、入力された設定を保存する。"""
    dialog = SettingsDialog()
    if not dialog.exec():
        return 0
    try:
        config_service.save_config(dialog.config())
    except LocalStorageError as e:
        QMessageBox.critical(None, "保存エラー", f"設定の保存に失敗しました。\n{e}")
        return 1
    QMessageBox.information(None, "設定完了", "設定を保存しました。アプリケーションを再起動してください。")
    return 0


def main() -> int:
    app: QApplication = QApplication(sys.argv)

    storage_service = StorageService()
    config_service = ConfigService(storage_service)
    config = config_service.load_config()

    if not config.configured:
        return run_first_time_setup(config_service)

    window: MainWindow = MainWindow(config, storage_service)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
