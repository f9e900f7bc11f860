from latexvector.models.snapshot import ClipboardSnapshot, ExtractionResult

__all__ = [
    'ClipboardSnapshot',
    'ExtractionResult',
]
