from .main_dialog import MainDialog, MAIN_DIALOG_ID

__all__ = ['MainDialog', 'MAIN_DIALOG_ID']
