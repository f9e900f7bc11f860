from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional, Tuple

import ulid

from latexvector.extractor import extract


@dataclass(frozen=True)
class ClipboardSnapshot:
    """Immutable view of the clipboard text at one observation."""
    text: str
    sequence: int
    snapshot_id: str = field(default_factory=lambda: str(ulid.new()))
    captured_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def capture(cls, text: str, sequence: int) -> "ClipboardSnapshot":
        return cls(text=text, sequence=sequence)


@dataclass(frozen=True)
class ExtractionResult:
    """Ordered formulas derived from one piece of source text."""
    formulas: Tuple[str, ...] = ()
    source_text: str = ""

    @classmethod
    def from_text(cls, text: str) -> "ExtractionResult":
        return cls(formulas=tuple(extract(text)), source_text=text)

    @property
    def first(self) -> Optional[str]:
        return self.formulas[0] if self.formulas else None

    def __len__(self) -> int:
        return len(self.formulas)

    def __iter__(self) -> Iterator[str]:
        return iter(self.formulas)

    def __getitem__(self, index: int) -> str:
        return self.formulas[index]
