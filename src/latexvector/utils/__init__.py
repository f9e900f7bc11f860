from latexvector.utils.file_manager import FileManager
from latexvector.utils.signals import Signal

__all__ = [
    'FileManager',
    'Signal',
]
