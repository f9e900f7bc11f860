import logging
from pathlib import Path
from typing import Optional

import ulid

logger = logging.getLogger(__name__)


class FileManager:

    def __init__(self, base_dir: Optional[Path] = None):
        if base_dir is None:
            base_dir = Path.home() / ".latexvector" / "exports"
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def save_pdf(self, payload: bytes, file_name: Optional[str] = None) -> Optional[Path]:
        try:
            file_name = file_name or f"{ulid.new()}.pdf"
            file_path = self.base_dir / file_name

            counter = 1
            original_stem = file_path.stem
            original_suffix = file_path.suffix
            while file_path.exists():
                file_path = self.base_dir / \
                    f"{original_stem}_{counter}{original_suffix}"
                counter += 1

            file_path.write_bytes(payload)
            logger.info(f"Saved export to {self.get_file_uri(file_path)}")
            return file_path
        except OSError as e:
            logger.error(f"Failed to save export: {e}")
            return None

    def get_file_uri(self, file_path: Path) -> str:
        return file_path.resolve().as_uri()
