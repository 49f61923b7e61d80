from .new_folder_dialog import NewFolderDialog
from .password_dialog import PasswordDialog
from .confirm_delete_dialog import ConfirmDeleteDialog
from .settings_dialog import SettingsDialog

__all__ = [
    "NewFolderDialog",
    "PasswordDialog",
    "ConfirmDeleteDialog",
    "SettingsDialog",
]
